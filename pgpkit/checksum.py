"""Checksums used around session keys and encrypted data."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import BinaryIO

from pgpkit.errors import ensure_eq

__all__ = [
    "SimpleChecksum",
    "calculate_sha1",
    "calculate_simple",
    "simple",
    "simple_to_writer",
]


@dataclass
class SimpleChecksum:
    """Running sum of octets modulo 65536."""

    value: int = 0

    def update(self, data: bytes) -> None:
        """Add the octets of ``data`` to the sum."""
        self.value = (self.value + sum(data)) & 0xFFFF

    def write(self, data: bytes) -> int:
        """File-like alias of :meth:`update`; returns the number of octets taken."""
        self.update(data)
        return len(data)

    def finalize(self) -> bytes:
        """The checksum as two big-endian octets."""
        return self.value.to_bytes(2, "big")

    def to_writer(self, writer: BinaryIO) -> None:
        """Write the two checksum octets to ``writer``."""
        writer.write(self.finalize())


def simple(actual: bytes, data: bytes) -> None:
    """Check that the first two octets of ``actual`` are the checksum of ``data``."""
    expected = calculate_simple(data).to_bytes(2, "big")
    ensure_eq(bytes(actual[:2]), expected, "invalid simple checksum")


def simple_to_writer(data: bytes, writer: BinaryIO) -> None:
    """Write the two-octet checksum of ``data`` to ``writer``."""
    checksum = SimpleChecksum()
    checksum.update(data)
    checksum.to_writer(writer)


def calculate_simple(data: bytes) -> int:
    """Sum of all octets of ``data`` modulo 65536."""
    checksum = SimpleChecksum()
    checksum.update(data)
    return checksum.value


def calculate_sha1(data: bytes) -> bytes:
    """SHA-1 digest of ``data`` (20 octets)."""
    return hashlib.sha1(data).digest()[:20]