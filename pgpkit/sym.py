"""Symmetric ciphers in the OpenPGP CFB mode and in plain CFB mode."""

from __future__ import annotations

import os
import struct
from collections.abc import Callable, Collection
from enum import IntEnum

from Crypto.Cipher import AES, CAST, DES, Blowfish
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from pgpkit.checksum import calculate_sha1
from pgpkit.errors import ErrorKind, PgpError, ensure, ensure_eq, unimplemented

__all__ = ["SymmetricKeyAlgorithm"]

Rng = Callable[[int], bytes]
BlockEncryptor = Callable[[bytes], bytes]

# MDC is 1 byte packet tag, 1 byte length prefix and 20 bytes SHA1 hash.
_MDC_LEN = 22
_MDC_TAG = 0xD3
_MDC_BODY_LEN = 0x14
_PRIVATE10_MESSAGE = "Private10 should not be used, and only exist for compatability"


class SymmetricKeyAlgorithm(IntEnum):
    """Symmetric key algorithms as numbered on the wire; AES128 is the usual default."""

    PLAINTEXT = 0
    IDEA = 1
    TRIPLE_DES = 2
    CAST5 = 3
    BLOWFISH = 4
    # 5 and 6 are reserved
    AES128 = 7
    AES192 = 8
    AES256 = 9
    TWOFISH = 10
    CAMELLIA128 = 11
    CAMELLIA192 = 12
    CAMELLIA256 = 13
    PRIVATE10 = 110

    def block_size(self) -> int:
        """Size of a single cipher block in octets."""
        return _BLOCK_SIZES[self]

    def key_size(self) -> int:
        """Size of a session key for this algorithm in octets."""
        return _KEY_SIZES[self]

    # -- decryption -------------------------------------------------------

    def decrypt(self, key: bytes, ciphertext: bytes) -> bytes:
        """Decrypt in OpenPGP CFB mode with an all-zero IV and resynchronisation."""
        iv = bytes(self.block_size())
        return self.decrypt_with_iv(key, iv, ciphertext, True)[1]

    def decrypt_protected(self, key: bytes, ciphertext: bytes) -> bytes:
        """Decrypt in OpenPGP CFB mode without resynchronisation and check the MDC."""
        iv = bytes(self.block_size())
        prefix, plaintext = self.decrypt_with_iv(key, iv, ciphertext, False)
        ensure(len(plaintext) >= _MDC_LEN, "invalid ciphertext")

        data, mdc = plaintext[:-_MDC_LEN], plaintext[-_MDC_LEN:]
        expected = calculate_sha1(prefix + data + mdc[:2])
        if mdc[0] != _MDC_TAG or mdc[1] != _MDC_BODY_LEN or mdc[2:] != expected:
            raise PgpError(ErrorKind.MDC)
        return data

    def decrypt_with_iv(
        self, key: bytes, iv: bytes, ciphertext: bytes, resync: bool
    ) -> tuple[bytes, bytes]:
        """Decrypt in OpenPGP CFB mode; return the decrypted prefix and data.

        The prefix is ``block_size + 2`` octets whose last two octets repeat
        the two before them, a quick check for the right key.
        """
        bs = self.block_size()
        ciphertext = bytes(ciphertext)
        ensure(bs + 2 < len(ciphertext), "invalid ciphertext")

        if self is SymmetricKeyAlgorithm.PLAINTEXT:
            return ciphertext[: bs + 2], ciphertext[bs + 2 :]
        if self is SymmetricKeyAlgorithm.PRIVATE10:
            unimplemented(_PRIVATE10_MESSAGE)

        encrypt_block = self._block_encryptor(key, iv)
        plaintext = _cfb(encrypt_block, bytes(iv), ciphertext, decrypting=True)
        prefix, data = plaintext[: bs + 2], plaintext[bs + 2 :]

        ensure_eq(prefix[bs - 2], prefix[bs], "cfb decrypt, quick check part 1")
        ensure_eq(prefix[bs - 1], prefix[bs + 1], "cfb decrypt, quick check part 2")
        if resync:
            unimplemented("CFB resync is not here")
        return prefix, data

    def decrypt_with_iv_regular(self, key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
        """Decrypt in regular CFB mode (not the OpenPGP variant)."""
        if self is SymmetricKeyAlgorithm.PLAINTEXT:
            return bytes(ciphertext)
        if self is SymmetricKeyAlgorithm.PRIVATE10:
            unimplemented(_PRIVATE10_MESSAGE)
        encrypt_block = self._block_encryptor(key, iv)
        return _cfb(encrypt_block, bytes(iv), bytes(ciphertext), decrypting=True)

    # -- encryption -------------------------------------------------------

    def encrypt(self, key: bytes, plaintext: bytes) -> bytes:
        """Like :meth:`encrypt_with_rng`, with the operating system's random source."""
        return self.encrypt_with_rng(os.urandom, key, plaintext)

    def encrypt_with_rng(self, rng: Rng, key: bytes, plaintext: bytes) -> bytes:
        """Encrypt in OpenPGP CFB mode with an all-zero IV and resynchronisation."""
        prefix = self._random_prefix(rng)
        iv = bytes(self.block_size())
        return self.encrypt_with_iv(key, iv, prefix + bytes(plaintext), True)

    def encrypt_protected(self, key: bytes, plaintext: bytes) -> bytes:
        """Like :meth:`encrypt_protected_with_rng`, with the operating system's random source."""
        return self.encrypt_protected_with_rng(os.urandom, key, plaintext)

    def encrypt_protected_with_rng(self, rng: Rng, key: bytes, plaintext: bytes) -> bytes:
        """Encrypt in OpenPGP CFB mode without resynchronisation, appending an MDC."""
        prefix = self._random_prefix(rng)
        body = prefix + bytes(plaintext) + bytes([_MDC_TAG, _MDC_BODY_LEN])
        body += calculate_sha1(body)
        iv = bytes(self.block_size())
        return self.encrypt_with_iv(key, iv, body, False)

    def encrypt_with_iv(self, key: bytes, iv: bytes, data: bytes, resync: bool) -> bytes:
        """Encrypt ``data``, which starts with the ``block_size + 2`` octet prefix."""
        bs = self.block_size()
        data = bytes(data)
        ensure(len(data) >= bs + 2, "data shorter than the prefix")

        if self is SymmetricKeyAlgorithm.PLAINTEXT:
            return data
        if self is SymmetricKeyAlgorithm.PRIVATE10:
            raise PgpError(ErrorKind.MESSAGE, _PRIVATE10_MESSAGE)

        encrypt_block = self._block_encryptor(key, iv)
        if resync:
            unimplemented("CFB resync is not here")
        return _cfb(encrypt_block, bytes(iv), data, decrypting=False)

    def encrypt_with_iv_regular(self, key: bytes, iv: bytes, plaintext: bytes) -> bytes:
        """Encrypt in regular CFB mode (not the OpenPGP variant)."""
        if self is SymmetricKeyAlgorithm.PLAINTEXT:
            return bytes(plaintext)
        if self is SymmetricKeyAlgorithm.PRIVATE10:
            unimplemented(_PRIVATE10_MESSAGE)
        encrypt_block = self._block_encryptor(key, iv)
        return _cfb(encrypt_block, bytes(iv), bytes(plaintext), decrypting=False)

    def new_session_key(self, rng: Rng | None = None) -> bytes:
        """Generate a random session key of :meth:`key_size` octets."""
        return bytes((rng or os.urandom)(self.key_size()))

    # -- helpers ----------------------------------------------------------

    def _random_prefix(self, rng: Rng) -> bytes:
        bs = self.block_size()
        if self is SymmetricKeyAlgorithm.PRIVATE10:
            unimplemented(_PRIVATE10_MESSAGE)
        ensure(bs >= 2, f"{self.name} has no block size to encrypt with")
        random_part = bytes(rng(bs))
        # repeat the last two octets as a quick check
        return random_part + random_part[-2:]

    def _block_encryptor(self, key: bytes, iv: bytes) -> BlockEncryptor:
        key = bytes(key)
        if len(key) not in _KEY_LENGTHS[self] or len(iv) != self.block_size():
            raise PgpError(ErrorKind.CFB_INVALID_KEY_IV_LENGTH)
        return _BLOCK_FACTORIES[self](key)


def _cfb(encrypt_block: BlockEncryptor, iv: bytes, data: bytes, decrypting: bool) -> bytes:
    """Full-block CFB over ``data``; a trailing partial block uses part of the keystream."""
    bs = len(iv)
    register = iv
    out = bytearray()
    for start in range(0, len(data), bs):
        chunk = data[start : start + bs]
        keystream = encrypt_block(register)
        size = len(chunk)
        produced = (
            int.from_bytes(chunk, "big") ^ int.from_bytes(keystream[:size], "big")
        ).to_bytes(size, "big")
        out += produced
        register = chunk if decrypting else produced
    return bytes(out)


# -- block ciphers ----------------------------------------------------------


def _triple_des(key: bytes) -> BlockEncryptor:
    first, second, third = (DES.new(key[i : i + 8], DES.MODE_ECB) for i in (0, 8, 16))
    return lambda block: third.encrypt(second.decrypt(first.encrypt(block)))


def _camellia(key: bytes) -> BlockEncryptor:
    return Cipher(algorithms.Camellia(key), modes.ECB()).encryptor().update


_MASK16 = 0xFFFF
_MASK32 = 0xFFFFFFFF
_MASK128 = (1 << 128) - 1


def _idea_mul(a: int, b: int) -> int:
    # multiplication modulo 2**16 + 1, where 0 stands for 2**16
    a = a or 0x10000
    b = b or 0x10000
    return (a * b % 0x10001) & _MASK16


class _Idea:
    """IDEA block cipher, encryption direction only."""

    def __init__(self, key: bytes) -> None:
        value = int.from_bytes(key, "big")
        subkeys: list[int] = []
        while len(subkeys) < 52:
            subkeys.extend((value >> shift) & _MASK16 for shift in range(112, -1, -16))
            value = ((value << 25) | (value >> 103)) & _MASK128
        self._subkeys = subkeys[:52]

    def encrypt_block(self, block: bytes) -> bytes:
        x1, x2, x3, x4 = struct.unpack(">4H", block)
        z = self._subkeys
        for base in range(0, 48, 6):
            z1, z2, z3, z4, z5, z6 = z[base : base + 6]
            x1 = _idea_mul(x1, z1)
            x2 = (x2 + z2) & _MASK16
            x3 = (x3 + z3) & _MASK16
            x4 = _idea_mul(x4, z4)
            t0 = _idea_mul(x1 ^ x3, z5)
            t1 = _idea_mul((t0 + (x2 ^ x4)) & _MASK16, z6)
            t2 = (t0 + t1) & _MASK16
            x1 ^= t1
            x4 ^= t2
            x2, x3 = x3 ^ t1, x2 ^ t2
        return struct.pack(
            ">4H",
            _idea_mul(x1, z[48]),
            (x3 + z[49]) & _MASK16,
            (x2 + z[50]) & _MASK16,
            _idea_mul(x4, z[51]),
        )


def _q_permutation(t0, t1, t2, t3) -> list[int]:
    def ror4(value: int) -> int:
        return ((value >> 1) | (value << 3)) & 0xF

    table = []
    for x in range(256):
        a, b = x >> 4, x & 0xF
        a, b = a ^ b, a ^ ror4(b) ^ ((8 * a) & 0xF)
        a, b = t0[a], t1[b]
        a, b = a ^ b, a ^ ror4(b) ^ ((8 * a) & 0xF)
        a, b = t2[a], t3[b]
        table.append((b << 4) | a)
    return table


_Q0 = _q_permutation(
    [0x8, 0x1, 0x7, 0xD, 0x6, 0xF, 0x3, 0x2, 0x0, 0xB, 0x5, 0x9, 0xE, 0xC, 0xA, 0x4],
    [0xE, 0xC, 0xB, 0x8, 0x1, 0x2, 0x3, 0x5, 0xF, 0x4, 0xA, 0x6, 0x7, 0x0, 0x9, 0xD],
    [0xB, 0xA, 0x5, 0xE, 0x6, 0xD, 0x9, 0x0, 0xC, 0x8, 0xF, 0x3, 0x2, 0x4, 0x7, 0x1],
    [0xD, 0x7, 0xF, 0x4, 0x1, 0x2, 0x6, 0xE, 0x9, 0xB, 0x3, 0x0, 0x8, 0x5, 0xC, 0xA],
)
_Q1 = _q_permutation(
    [0x2, 0x8, 0xB, 0xD, 0xF, 0x7, 0x6, 0xE, 0x3, 0x1, 0x9, 0x4, 0x0, 0xA, 0xC, 0x5],
    [0x1, 0xE, 0x2, 0xB, 0x4, 0xC, 0x3, 0x7, 0x6, 0xD, 0xA, 0x5, 0xF, 0x9, 0x0, 0x8],
    [0x4, 0xC, 0x7, 0x5, 0x1, 0x6, 0x9, 0xA, 0x0, 0xE, 0xD, 0x8, 0x2, 0xB, 0x3, 0xF],
    [0xB, 0x9, 0x5, 0x1, 0xC, 0x3, 0xD, 0xE, 0x6, 0x4, 0x7, 0xF, 0x2, 0x0, 0x8, 0xA],
)

# permutations per byte position, for key words 3, 2, 1, 0 and the final step
_Q_ORDER = (
    (_Q1, _Q1, _Q0, _Q0, _Q1),
    (_Q0, _Q1, _Q1, _Q0, _Q0),
    (_Q0, _Q0, _Q0, _Q1, _Q1),
    (_Q1, _Q0, _Q1, _Q1, _Q0),
)

_MDS = (
    (0x01, 0xEF, 0x5B, 0x5B),
    (0x5B, 0xEF, 0xEF, 0x01),
    (0xEF, 0x5B, 0x01, 0xEF),
    (0xEF, 0x01, 0xEF, 0x5B),
)
_RS = (
    (0x01, 0xA4, 0x55, 0x87, 0x5A, 0x58, 0xDB, 0x9E),
    (0xA4, 0x56, 0x82, 0xF3, 0x1E, 0xC6, 0x68, 0xE5),
    (0x02, 0xA1, 0xFC, 0xC1, 0x47, 0xAE, 0x3D, 0x19),
    (0xA4, 0x55, 0x87, 0x5A, 0x58, 0xDB, 0x9E, 0x03),
)
_RHO = 0x01010101


def _gf_mul(a: int, b: int, poly: int) -> int:
    result = 0
    while b:
        if b & 1:
            result ^= a
        a <<= 1
        if a & 0x100:
            a ^= poly
        b >>= 1
    return result


_MDS_COLUMNS = [
    [
        sum(_gf_mul(row[column], y, 0x169) << (8 * i) for i, row in enumerate(_MDS))
        for y in range(256)
    ]
    for column in range(4)
]


def _rol(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK32


def _ror(value: int, shift: int) -> int:
    return ((value >> shift) | (value << (32 - shift))) & _MASK32


def _sbox_byte(position: int, x: int, key_words: list[int]) -> int:
    perms = _Q_ORDER[position]
    shift = 8 * position
    for stage in range(4 - len(key_words), 4):
        x = perms[stage][x] ^ ((key_words[3 - stage] >> shift) & 0xFF)
    return perms[4][x]


def _twofish_h(x: int, key_words: list[int]) -> int:
    result = 0
    for position, column in enumerate(_MDS_COLUMNS):
        result ^= column[_sbox_byte(position, (x >> (8 * position)) & 0xFF, key_words)]
    return result


class _Twofish:
    """Twofish block cipher, encryption direction only."""

    def __init__(self, key: bytes) -> None:
        k = len(key) // 8
        words = list(struct.unpack(f"<{2 * k}I", key))
        even, odd = words[0::2], words[1::2]
        sbox_words = [self._rs_word(key[8 * i : 8 * i + 8]) for i in range(k)][::-1]

        subkeys: list[int] = []
        for i in range(20):
            a = _twofish_h(2 * i * _RHO, even)
            b = _rol(_twofish_h((2 * i + 1) * _RHO, odd), 8)
            subkeys.append((a + b) & _MASK32)
            subkeys.append(_rol((a + 2 * b) & _MASK32, 9))
        self._subkeys = subkeys
        self._tables = [
            [column[_sbox_byte(position, x, sbox_words)] for x in range(256)]
            for position, column in enumerate(_MDS_COLUMNS)
        ]

    @staticmethod
    def _rs_word(chunk: bytes) -> int:
        word = 0
        for i, row in enumerate(_RS):
            value = 0
            for coefficient, octet in zip(row, chunk):
                value ^= _gf_mul(coefficient, octet, 0x14D)
            word |= value << (8 * i)
        return word

    def _g(self, x: int) -> int:
        t0, t1, t2, t3 = self._tables
        return t0[x & 0xFF] ^ t1[(x >> 8) & 0xFF] ^ t2[(x >> 16) & 0xFF] ^ t3[x >> 24]

    def encrypt_block(self, block: bytes) -> bytes:
        k = self._subkeys
        r0, r1, r2, r3 = (word ^ sub for word, sub in zip(struct.unpack("<4I", block), k))
        for rnd in range(16):
            t0 = self._g(r0)
            t1 = self._g(_rol(r1, 8))
            f0 = (t0 + t1 + k[2 * rnd + 8]) & _MASK32
            f1 = (t0 + 2 * t1 + k[2 * rnd + 9]) & _MASK32
            r0, r1, r2, r3 = _ror(r2 ^ f0, 1), _rol(r3, 1) ^ f1, r0, r1
        return struct.pack("<4I", r2 ^ k[4], r3 ^ k[5], r0 ^ k[6], r1 ^ k[7])


_Alg = SymmetricKeyAlgorithm

_BLOCK_SIZES = {
    _Alg.PLAINTEXT: 0,
    _Alg.IDEA: 8,
    _Alg.TRIPLE_DES: 8,
    _Alg.CAST5: 8,
    _Alg.BLOWFISH: 8,
    _Alg.AES128: 16,
    _Alg.AES192: 16,
    _Alg.AES256: 16,
    _Alg.TWOFISH: 16,
    _Alg.CAMELLIA128: 16,
    _Alg.CAMELLIA192: 16,
    _Alg.CAMELLIA256: 16,
    _Alg.PRIVATE10: 0,
}

_KEY_SIZES = {
    _Alg.PLAINTEXT: 0,
    _Alg.IDEA: 16,
    _Alg.TRIPLE_DES: 24,
    _Alg.CAST5: 16,
    _Alg.BLOWFISH: 16,
    _Alg.AES128: 16,
    _Alg.AES192: 24,
    _Alg.AES256: 32,
    _Alg.TWOFISH: 32,
    _Alg.CAMELLIA128: 16,
    _Alg.CAMELLIA192: 24,
    _Alg.CAMELLIA256: 32,
    _Alg.PRIVATE10: 0,
}

_KEY_LENGTHS: dict[SymmetricKeyAlgorithm, Collection[int]] = {
    _Alg.IDEA: (16,),
    _Alg.TRIPLE_DES: (24,),
    _Alg.CAST5: range(5, 17),
    _Alg.BLOWFISH: range(4, 57),
    _Alg.AES128: (16,),
    _Alg.AES192: (24,),
    _Alg.AES256: (32,),
    _Alg.TWOFISH: (16, 24, 32),
    _Alg.CAMELLIA128: (16,),
    _Alg.CAMELLIA192: (24,),
    _Alg.CAMELLIA256: (32,),
}

_BLOCK_FACTORIES: dict[SymmetricKeyAlgorithm, Callable[[bytes], BlockEncryptor]] = {
    _Alg.IDEA: lambda key: _Idea(key).encrypt_block,
    _Alg.TRIPLE_DES: _triple_des,
    _Alg.CAST5: lambda key: CAST.new(key, CAST.MODE_ECB).encrypt,
    _Alg.BLOWFISH: lambda key: Blowfish.new(key, Blowfish.MODE_ECB).encrypt,
    _Alg.AES128: lambda key: AES.new(key, AES.MODE_ECB).encrypt,
    _Alg.AES192: lambda key: AES.new(key, AES.MODE_ECB).encrypt,
    _Alg.AES256: lambda key: AES.new(key, AES.MODE_ECB).encrypt,
    _Alg.TWOFISH: lambda key: _Twofish(key).encrypt_block,
    _Alg.CAMELLIA128: _camellia,
    _Alg.CAMELLIA192: _camellia,
    _Alg.CAMELLIA256: _camellia,
}