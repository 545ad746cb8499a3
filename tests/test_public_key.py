import pytest

from pgpkit.public_key import PublicKeyAlgorithm


@pytest.mark.parametrize(
    "value, member",
    [
        (1, PublicKeyAlgorithm.RSA),
        (17, PublicKeyAlgorithm.DSA),
        (18, PublicKeyAlgorithm.ECDH),
        (19, PublicKeyAlgorithm.ECDSA),
        (22, PublicKeyAlgorithm.EDDSA),
        (110, PublicKeyAlgorithm.PRIVATE110),
    ],
)
def test_from_wire_value(value, member):
    assert PublicKeyAlgorithm(value) is member


@pytest.mark.parametrize("value", [0, 4, 15, 23, 99, 111])
def test_unassigned_values_rejected(value):
    with pytest.raises(ValueError):
        PublicKeyAlgorithm(value)


@pytest.mark.parametrize("value", list(range(100, 111)))
def test_private_range_is_contiguous(value):
    member = PublicKeyAlgorithm(value)
    assert member.name == f"PRIVATE{value}"
    assert int(member) == value