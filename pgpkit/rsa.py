"""RSA encryption and signatures with PKCS#1 v1.5 padding."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from Crypto.PublicKey import RSA as _RSA
from Crypto.Util.asn1 import DerNull, DerObjectId, DerOctetString, DerSequence

from pgpkit.errors import ErrorKind, PgpError, ensure_eq, unsupported
from pgpkit.hash import HashAlgorithm

__all__ = ["RsaPrivateKey", "generate_key", "encrypt", "decrypt", "sign", "verify"]

MAX_KEY_SIZE = 16384
_MIN_PUBLIC_EXPONENT = 2
_MAX_PUBLIC_EXPONENT = (1 << 33) - 1

_DIGEST_OIDS = {
    HashAlgorithm.MD5: "1.2.840.113549.2.5",
    HashAlgorithm.SHA1: "1.3.14.3.2.26",
    HashAlgorithm.RIPEMD160: "1.3.36.3.2.1",
    HashAlgorithm.SHA2_224: "2.16.840.1.101.3.4.2.4",
    HashAlgorithm.SHA2_256: "2.16.840.1.101.3.4.2.1",
    HashAlgorithm.SHA2_384: "2.16.840.1.101.3.4.2.2",
    HashAlgorithm.SHA2_512: "2.16.840.1.101.3.4.2.3",
    HashAlgorithm.SHA3_256: "2.16.840.1.101.3.4.2.8",
    HashAlgorithm.SHA3_512: "2.16.840.1.101.3.4.2.10",
}


@dataclass(frozen=True)
class RsaPrivateKey:
    """RSA private key; ``u`` is the inverse of ``p`` modulo ``q``."""

    n: int
    e: int
    d: int
    p: int
    q: int
    u: int


def _rsa_error(detail: str) -> PgpError:
    return PgpError(ErrorKind.RSA, detail)


def _size(n: int) -> int:
    return (n.bit_length() + 7) // 8


def _check_public(n: int, e: int) -> None:
    if n.bit_length() > MAX_KEY_SIZE:
        raise _rsa_error("modulus too large")
    if e < _MIN_PUBLIC_EXPONENT:
        raise _rsa_error("public exponent too small")
    if e > _MAX_PUBLIC_EXPONENT:
        raise _rsa_error("public exponent too large")


def _private_op(key: RsaPrivateKey, value: int) -> int:
    # CRT: m = m2 + q * ((m1 - m2) * q^-1 mod p)
    m1 = pow(value, key.d % (key.p - 1), key.p)
    m2 = pow(value, key.d % (key.q - 1), key.q)
    q_inv = pow(key.q, -1, key.p)
    return m2 + key.q * (((m1 - m2) * q_inv) % key.p)


def _default_rng(size: int) -> bytes:
    return os.urandom(size)


def _nonzero_padding(rng: Callable[[int], bytes], size: int) -> bytes:
    padding = bytearray()
    while len(padding) < size:
        padding.extend(b for b in rng(size - len(padding)) if b != 0)
    return bytes(padding[:size])


def generate_key(bit_size: int) -> RsaPrivateKey:
    """Generate a new RSA key of ``bit_size`` bits."""
    try:
        key = _RSA.generate(bit_size)
    except ValueError as err:
        raise _rsa_error(str(err)) from err
    return RsaPrivateKey(
        n=int(key.n), e=int(key.e), d=int(key.d), p=int(key.p), q=int(key.q), u=int(key.u)
    )


def encrypt(
    n: bytes,
    e: bytes,
    plaintext: bytes,
    rng: Callable[[int], bytes] | None = None,
) -> list[bytes]:
    """Encrypt ``plaintext`` to the public key ``(n, e)``; returns one value."""
    modulus = int.from_bytes(n, "big")
    exponent = int.from_bytes(e, "big")
    _check_public(modulus, exponent)

    k = _size(modulus)
    if len(plaintext) > k - 11:
        raise _rsa_error("message too long")
    padding = _nonzero_padding(rng or _default_rng, k - len(plaintext) - 3)
    encoded = b"\x00\x02" + padding + b"\x00" + bytes(plaintext)

    cipher = pow(int.from_bytes(encoded, "big"), exponent, modulus)
    return [cipher.to_bytes(k, "big")]


def decrypt(private_key: RsaPrivateKey, mpis: Sequence[bytes]) -> bytes:
    """Decrypt the single value in ``mpis`` and strip its PKCS#1 v1.5 padding."""
    ensure_eq(len(mpis), 1, "invalid input")

    k = _size(private_key.n)
    ciphertext = bytes(mpis[0])
    if len(ciphertext) > k:
        raise _rsa_error("decryption error")
    value = int.from_bytes(ciphertext, "big")
    if value >= private_key.n:
        raise _rsa_error("decryption error")

    encoded = _private_op(private_key, value).to_bytes(k, "big")
    separator = encoded.find(b"\x00", 2)
    if encoded[:2] != b"\x00\x02" or separator < 10:
        raise _rsa_error("decryption error")
    return encoded[separator + 1 :]


def _digest_info(hash_algorithm: HashAlgorithm, hashed: bytes) -> bytes:
    if hash_algorithm is HashAlgorithm.NONE:
        raise PgpError(ErrorKind.MESSAGE, "none")
    if hash_algorithm is HashAlgorithm.PRIVATE10:
        unsupported("Private10 should not be used")
    algorithm = DerSequence(
        [DerObjectId(_DIGEST_OIDS[hash_algorithm]).encode(), DerNull().encode()]
    )
    return DerSequence([algorithm.encode(), DerOctetString(bytes(hashed)).encode()]).encode()


def _emsa_encode(info: bytes, k: int) -> bytes:
    if k < len(info) + 11:
        raise _rsa_error("message too long")
    return b"\x00\x01" + b"\xff" * (k - len(info) - 3) + b"\x00" + info


def sign(private_key: RsaPrivateKey, hash_algorithm: HashAlgorithm, digest: bytes) -> list[bytes]:
    """Sign the prehashed ``digest``; returns one value."""
    info = _digest_info(HashAlgorithm(hash_algorithm), digest)
    k = _size(private_key.n)
    encoded = _emsa_encode(info, k)
    signature = _private_op(private_key, int.from_bytes(encoded, "big"))
    return [signature.to_bytes(k, "big")]


def verify(
    n: bytes,
    e: bytes,
    hash_algorithm: HashAlgorithm,
    hashed: bytes,
    signature: bytes,
) -> None:
    """Check ``signature`` over the prehashed ``hashed``; raise on mismatch."""
    modulus = int.from_bytes(n, "big")
    exponent = int.from_bytes(e, "big")
    _check_public(modulus, exponent)

    k = _size(modulus)
    # short signatures are allowed and are padded with leading zeros
    signature = bytes(signature).rjust(k, b"\x00")

    info = _digest_info(HashAlgorithm(hash_algorithm), hashed)

    if len(signature) != k:
        raise _rsa_error("verification error")
    value = int.from_bytes(signature, "big")
    if value >= modulus:
        raise _rsa_error("verification error")
    try:
        expected = _emsa_encode(info, k)
    except PgpError as err:
        raise _rsa_error("verification error") from err
    if pow(value, exponent, modulus).to_bytes(k, "big") != expected:
        raise _rsa_error("verification error")