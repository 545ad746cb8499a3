import pytest

from pgpkit.aes_kw import unwrap, wrap
from pgpkit.errors import ErrorKind, PgpError

VECTORS = [
    (
        "000102030405060708090A0B0C0D0E0F",
        "00112233445566778899AABBCCDDEEFF",
        "1FA68B0A8112B447AEF34BD8FB5A7B829D3E862371D2CFE5",
    ),
    (
        "000102030405060708090A0B0C0D0E0F1011121314151617",
        "00112233445566778899AABBCCDDEEFF",
        "96778B25AE6CA435F92B5B97C050AED2468AB8A17AD84E5D",
    ),
    (
        "000102030405060708090A0B0C0D0E0F101112131415161718191A1B1C1D1E1F",
        "00112233445566778899AABBCCDDEEFF",
        "64E8C3F9CE0F5BA263E9777905818A2A93C8191E7D6E8AE7",
    ),
    (
        "000102030405060708090A0B0C0D0E0F1011121314151617",
        "00112233445566778899AABBCCDDEEFF0001020304050607",
        "031D33264E15D33268F24EC260743EDCE1C6C7DDEE725A936BA814915C6762D2",
    ),
    (
        "000102030405060708090A0B0C0D0E0F101112131415161718191A1B1C1D1E1F",
        "00112233445566778899AABBCCDDEEFF0001020304050607",
        "A8F9BC1612C68B3FF6E6F4FBE30E71E4769C8B80A32CB8958CD5D17D6B254DA1",
    ),
    (
        "000102030405060708090A0B0C0D0E0F101112131415161718191A1B1C1D1E1F",
        "00112233445566778899AABBCCDDEEFF000102030405060708090A0B0C0D0E0F",
        "28C9F404C4B810F4CBCCB35CFB87F8263F5786E2D80ED326CBC7F0E71A99F43BFB988B9B7A02DD21",
    ),
]


@pytest.mark.parametrize("kek, plain, wrapped", VECTORS)
def test_wrap(kek, plain, wrapped):
    assert wrap(bytes.fromhex(kek), bytes.fromhex(plain)).hex() == wrapped.lower()


@pytest.mark.parametrize("kek, plain, wrapped", VECTORS)
def test_unwrap(kek, plain, wrapped):
    assert unwrap(bytes.fromhex(kek), bytes.fromhex(wrapped)).hex() == plain.lower()


def test_wrap_rejects_unaligned_data():
    with pytest.raises(PgpError) as info:
        wrap(bytes(16), bytes(15))
    assert info.value.kind is ErrorKind.MESSAGE


def test_unwrap_rejects_unaligned_data():
    with pytest.raises(PgpError) as info:
        unwrap(bytes(16), bytes(25))
    assert info.value.kind is ErrorKind.MESSAGE


@pytest.mark.parametrize("size", [0, 8, 20, 40])
def test_invalid_key_size(size):
    with pytest.raises(PgpError, match="invalid aes key size"):
        wrap(bytes(size), bytes(16))
    with pytest.raises(PgpError, match="invalid aes key size"):
        unwrap(bytes(size), bytes(24))


def test_unwrap_detects_tampering():
    kek, _, wrapped = VECTORS[0]
    damaged = bytearray(bytes.fromhex(wrapped))
    damaged[10] ^= 0x01
    with pytest.raises(PgpError, match="failed integrity check"):
        unwrap(bytes.fromhex(kek), bytes(damaged))


def test_unwrap_with_wrong_key_fails():
    kek, plain, _ = VECTORS[0]
    wrapped = wrap(bytes.fromhex(kek), bytes.fromhex(plain))
    with pytest.raises(PgpError, match="failed integrity check"):
        unwrap(bytes(16), wrapped)


def test_roundtrip_longer_data():
    key = bytes(range(32))
    data = bytes(range(64))
    wrapped = wrap(key, data)
    assert len(wrapped) == len(data) + 8
    assert unwrap(key, wrapped) == data