"""AEAD algorithm identifiers."""

from enum import IntEnum

__all__ = ["AeadAlgorithm"]


class AeadAlgorithm(IntEnum):
    """Available AEAD algorithms; ``NONE`` is the default."""

    NONE = 0
    EAX = 1
    OCB = 2