"""Public key algorithm identifiers."""

from enum import IntEnum

__all__ = ["PublicKeyAlgorithm"]


class PublicKeyAlgorithm(IntEnum):
    """Public key algorithms as numbered on the wire."""

    RSA = 1
    RSA_ENCRYPT = 2
    RSA_SIGN = 3
    ELGAMAL_SIGN = 16
    DSA = 17
    ECDH = 18
    ECDSA = 19
    ELGAMAL = 20
    DIFFIE_HELLMAN = 21
    EDDSA = 22
    PRIVATE100 = 100
    PRIVATE101 = 101
    PRIVATE102 = 102
    PRIVATE103 = 103
    PRIVATE104 = 104
    PRIVATE105 = 105
    PRIVATE106 = 106
    PRIVATE107 = 107
    PRIVATE108 = 108
    PRIVATE109 = 109
    PRIVATE110 = 110