"""AES key wrapping as defined in RFC 3394."""

from __future__ import annotations

from Crypto.Cipher import AES

from pgpkit.errors import ErrorKind, PgpError, ensure, ensure_eq

__all__ = ["wrap", "unwrap"]

_IV = bytes([0xA6] * 8)
_KEY_SIZES = (16, 24, 32)


def _cipher(key: bytes):
    if len(key) not in _KEY_SIZES:
        raise PgpError(ErrorKind.MESSAGE, f"invalid aes key size: {len(key) * 8}")
    return AES.new(bytes(key), AES.MODE_ECB)


def _xor_counter(block: bytes, counter: int) -> bytes:
    return (int.from_bytes(block, "big") ^ counter).to_bytes(8, "big")


def _blocks(data: bytes) -> list[bytes]:
    return [bytes(data[start : start + 8]) for start in range(0, len(data), 8)]


def wrap(key: bytes, data: bytes) -> bytes:
    """Wrap ``data`` (a multiple of 8 octets) with the AES key ``key``."""
    ensure_eq(len(data) % 8, 0, "data must be a multiple of 64bit")
    cipher = _cipher(key)

    registers = _blocks(data)
    count = len(registers)
    a = _IV

    for step in range(6):
        for i, block in enumerate(registers):
            counter = count * step + i + 1
            b = cipher.encrypt(a + block)
            a = _xor_counter(b[:8], counter)
            registers[i] = b[8:]

    return a + b"".join(registers)


def unwrap(key: bytes, data: bytes) -> bytes:
    """Unwrap ``data`` with the AES key ``key``, checking its integrity."""
    ensure_eq(len(data) % 8, 0, "data must be a multiple of 64bit")
    cipher = _cipher(key)
    ensure(len(data) >= 8, "wrapped data too short")

    a, *registers = _blocks(data)
    count = len(registers)

    for step in reversed(range(6)):
        for i in reversed(range(count)):
            counter = count * step + i + 1
            b = cipher.decrypt(_xor_counter(a, counter) + registers[i])
            a = b[:8]
            registers[i] = b[8:]

    if a != _IV:
        raise PgpError(ErrorKind.MESSAGE, "failed integrity check")
    return b"".join(registers)