import pytest

from pgpkit.aead import AeadAlgorithm


@pytest.mark.parametrize(
    "value, member",
    [(0, AeadAlgorithm.NONE), (1, AeadAlgorithm.EAX), (2, AeadAlgorithm.OCB)],
)
def test_from_wire_value(value, member):
    assert AeadAlgorithm(value) is member
    assert int(member) == value


def test_unknown_value_rejected():
    with pytest.raises(ValueError):
        AeadAlgorithm(3)