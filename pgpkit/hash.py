"""Hash algorithms and incremental hashers."""

from __future__ import annotations

from enum import IntEnum
from types import ModuleType

from Crypto.Hash import (
    MD5,
    RIPEMD160,
    SHA1,
    SHA3_256,
    SHA3_512,
    SHA224,
    SHA256,
    SHA384,
    SHA512,
)

from pgpkit.errors import unimplemented, unsupported

__all__ = ["HashAlgorithm", "Hasher"]


class Hasher:
    """Incremental hash computation."""

    def __init__(self, factory: ModuleType) -> None:
        self._state = factory.new()

    def update(self, data: bytes) -> None:
        """Feed ``data`` into the hash."""
        self._state.update(bytes(data))

    def write(self, data: bytes) -> int:
        """File-like alias of :meth:`update`; returns the number of octets taken."""
        self.update(data)
        return len(data)

    def finish(self) -> bytes:
        """Return the digest of everything fed so far."""
        return self._state.digest()


class HashAlgorithm(IntEnum):
    """Hash algorithms as numbered on the wire; SHA2_256 is the usual default."""

    NONE = 0
    MD5 = 1
    SHA1 = 2
    RIPEMD160 = 3
    SHA2_256 = 8
    SHA2_384 = 9
    SHA2_512 = 10
    SHA2_224 = 11
    SHA3_256 = 12
    SHA3_512 = 14
    # only for compatibility with GnuPG, never to be used
    PRIVATE10 = 110

    def _factory(self) -> ModuleType | None:
        return _FACTORIES.get(self)

    def new_hasher(self) -> Hasher:
        """Create an incremental hasher for this algorithm."""
        factory = self._factory()
        if factory is None:
            unimplemented(f"hasher {self.name}")
        return Hasher(factory)

    def digest(self, data: bytes) -> bytes:
        """Digest of ``data`` with this algorithm."""
        if self is HashAlgorithm.PRIVATE10:
            unsupported("Private10 should not be used")
        factory = self._factory()
        if factory is None:
            unimplemented(f"hasher: {self.name}")
        return factory.new(bytes(data)).digest()

    def digest_size(self) -> int:
        """Length of the digest in octets, 0 where the algorithm has no hasher."""
        factory = self._factory()
        return 0 if factory is None else factory.digest_size


_FACTORIES: dict[HashAlgorithm, ModuleType] = {
    HashAlgorithm.MD5: MD5,
    HashAlgorithm.SHA1: SHA1,
    HashAlgorithm.RIPEMD160: RIPEMD160,
    HashAlgorithm.SHA2_256: SHA256,
    HashAlgorithm.SHA2_384: SHA384,
    HashAlgorithm.SHA2_512: SHA512,
    HashAlgorithm.SHA2_224: SHA224,
    HashAlgorithm.SHA3_256: SHA3_256,
    HashAlgorithm.SHA3_512: SHA3_512,
}