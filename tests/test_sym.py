import random

import pytest

from pgpkit.errors import ErrorKind, PgpError
from pgpkit.sym import SymmetricKeyAlgorithm as Alg

CIPHERS = [
    "AES128",
    "AES192",
    "AES256",
    "TRIPLE_DES",
    "BLOWFISH",
    "TWOFISH",
    "CAST5",
    "IDEA",
    "CAMELLIA128",
    "CAMELLIA192",
    "CAMELLIA256",
]

LENGTHS = [1, 2, 7, 8, 15, 16, 17, 33, 255, 1023]


def _rng(seed=0x383E):
    return random.Random(seed).randbytes


@pytest.mark.parametrize(
    "alg, block, key",
    [
        (Alg.PLAINTEXT, 0, 0),
        (Alg.IDEA, 8, 16),
        (Alg.TRIPLE_DES, 8, 24),
        (Alg.CAST5, 8, 16),
        (Alg.BLOWFISH, 8, 16),
        (Alg.AES128, 16, 16),
        (Alg.AES192, 16, 24),
        (Alg.AES256, 16, 32),
        (Alg.TWOFISH, 16, 32),
        (Alg.CAMELLIA128, 16, 16),
        (Alg.CAMELLIA192, 16, 24),
        (Alg.CAMELLIA256, 16, 32),
        (Alg.PRIVATE10, 0, 0),
    ],
)
def test_sizes(alg, block, key):
    assert alg.block_size() == block
    assert alg.key_size() == key


@pytest.mark.parametrize("name", CIPHERS)
def test_protected_roundtrip(name):
    rng = _rng()
    for length in LENGTHS:
        data = rng(length)
        key = rng(Alg[name].key_size())
        ciphertext = Alg[name].encrypt_protected_with_rng(rng, key, data)
        assert ciphertext != data
        assert len(ciphertext) == Alg[name].block_size() + 2 + length + 22
        assert Alg[name].decrypt_protected(key, ciphertext) == data


@pytest.mark.parametrize("name", CIPHERS)
def test_protected_roundtrip_system_random(name):
    key = Alg[name].new_session_key()
    data = b"hello world, this is some data"
    assert Alg[name].decrypt_protected(key, Alg[name].encrypt_protected(key, data)) == data


@pytest.mark.parametrize("name", CIPHERS)
def test_regular_roundtrip(name):
    rng = _rng(7)
    key = rng(Alg[name].key_size())
    iv = rng(Alg[name].block_size())
    data = rng(3 * Alg[name].block_size() + 5)
    ciphertext = Alg[name].encrypt_with_iv_regular(key, iv, data)
    assert len(ciphertext) == len(data)
    assert Alg[name].decrypt_with_iv_regular(key, iv, ciphertext) == data


@pytest.mark.parametrize("alg", [Alg.AES128, Alg.CAST5, Alg.TWOFISH])
def test_openpgp_cfb_without_resync_is_continuous_cfb(alg):
    rng = _rng(11)
    key = rng(alg.key_size())
    iv = bytes(alg.block_size())
    data = rng(50)
    assert alg.encrypt_with_iv(key, iv, data, False) == alg.encrypt_with_iv_regular(
        key, iv, data
    )


def test_quick_check_in_decrypted_prefix():
    alg = Alg.AES256
    key = bytes(range(32))
    ciphertext = alg.encrypt_protected_with_rng(_rng(3), key, b"payload")
    prefix, data = alg.decrypt_with_iv(key, bytes(16), ciphertext, False)
    assert len(prefix) == 18
    assert prefix[14:16] == prefix[16:18]
    assert data[:7] == b"payload"
    assert data[7:9] == b"\xd3\x14"


def test_decrypt_without_enough_ciphertext():
    with pytest.raises(PgpError) as info:
        Alg.AES128.decrypt(b"", b"")
    assert info.value.kind is ErrorKind.MESSAGE


def test_unprotected_encrypt_resync_is_unimplemented():
    with pytest.raises(PgpError) as info:
        Alg.AES128.encrypt(bytes(16), b"some data")
    assert info.value.kind is ErrorKind.UNIMPLEMENTED


def test_unprotected_decrypt_resync_is_unimplemented():
    key = bytes(16)
    ciphertext = Alg.AES128.encrypt_protected(key, b"some data")
    with pytest.raises(PgpError) as info:
        Alg.AES128.decrypt(key, ciphertext)
    assert info.value.kind is ErrorKind.UNIMPLEMENTED


def test_tampered_ciphertext_fails_mdc():
    key = bytes(range(16))
    ciphertext = bytearray(Alg.AES128.encrypt_protected_with_rng(_rng(), key, b"abc" * 20))
    ciphertext[-1] ^= 0x01
    with pytest.raises(PgpError) as info:
        Alg.AES128.decrypt_protected(key, bytes(ciphertext))
    assert info.value.kind is ErrorKind.MDC


def test_wrong_key_is_rejected():
    key = bytes(range(16))
    ciphertext = Alg.AES128.encrypt_protected_with_rng(_rng(), key, b"secret data")
    with pytest.raises(PgpError) as info:
        Alg.AES128.decrypt_protected(bytes(16), ciphertext)
    assert info.value.kind in (ErrorKind.MESSAGE, ErrorKind.MDC)


def test_invalid_key_length():
    with pytest.raises(PgpError) as info:
        Alg.AES128.encrypt_with_iv_regular(bytes(5), bytes(16), b"data")
    assert info.value.kind is ErrorKind.CFB_INVALID_KEY_IV_LENGTH


def test_invalid_iv_length():
    with pytest.raises(PgpError) as info:
        Alg.AES256.decrypt_with_iv_regular(bytes(32), bytes(8), b"data")
    assert info.value.kind is ErrorKind.CFB_INVALID_KEY_IV_LENGTH


def test_private10_errors():
    with pytest.raises(PgpError) as regular:
        Alg.PRIVATE10.encrypt_with_iv_regular(b"", b"", b"data")
    assert regular.value.kind is ErrorKind.UNIMPLEMENTED
    with pytest.raises(PgpError) as openpgp:
        Alg.PRIVATE10.encrypt_with_iv(b"", b"", b"data", False)
    assert openpgp.value.kind is ErrorKind.MESSAGE


def test_plaintext_passes_data_through():
    prefix, data = Alg.PLAINTEXT.decrypt_with_iv(b"", b"", b"abcdef", False)
    assert prefix == b"ab"
    assert data == b"cdef"
    assert Alg.PLAINTEXT.encrypt_with_iv_regular(b"", b"", b"xyz") == b"xyz"


def test_new_session_key_uses_rng():
    key = Alg.AES192.new_session_key(lambda size: bytes([7]) * size)
    assert key == bytes([7]) * 24


def test_aes128_known_answer():
    # CFB of a zero block with a zero IV is the encryption of the zero block
    out = Alg.AES128.encrypt_with_iv_regular(bytes(16), bytes(16), bytes(16))
    assert out.hex() == "66e94bd4ef8a2c3b884cfa59ca342b2e"


def test_twofish_known_answers():
    out128 = Alg.TWOFISH.encrypt_with_iv_regular(bytes(16), bytes(16), bytes(16))
    assert out128.hex() == "9f589f5cf6122c32b6bfec2f2ae8c35a"
    out256 = Alg.TWOFISH.encrypt_with_iv_regular(bytes(32), bytes(16), bytes(16))
    assert out256.hex() == "57ff739d4dc92c1bd7fc01700cc8216f"


def test_idea_known_answer():
    key = bytes.fromhex("00010002000300040005000600070008")
    block = bytes.fromhex("0000000100020003")
    out = Alg.IDEA.encrypt_with_iv_regular(key, block, bytes(8))
    assert out.hex() == "11fbed2b01986de5"


def test_camellia_known_answer():
    key = bytes.fromhex("0123456789abcdeffedcba9876543210")
    out = Alg.CAMELLIA128.encrypt_with_iv_regular(key, key, bytes(16))
    assert out.hex() == "67673138549669730857065648eabe43"