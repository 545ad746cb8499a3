"""Named elliptic curves and their object identifiers."""

from __future__ import annotations

from enum import Enum

from pgpkit.public_key import PublicKeyAlgorithm

__all__ = ["EccCurve", "ecc_curve_from_oid", "encode_oid_component"]


class EccCurve(Enum):
    """Elliptic curves known to OpenPGP."""

    CURVE25519 = ("Curve25519", "1.3.6.1.4.1.3029.1.5.1", 255, "cv25519", PublicKeyAlgorithm.ECDH)
    ED25519 = ("Ed25519", "1.3.6.1.4.1.11591.15.1", 255, "ed25519", PublicKeyAlgorithm.EDDSA)
    P256 = ("NIST P-256", "1.2.840.10045.3.1.7", 256, "nistp256", None)
    P384 = ("NIST P-384", "1.3.132.0.34", 384, "nistp384", None)
    P521 = ("NIST P-521", "1.3.132.0.35", 521, "nistp521", None)
    BRAINPOOL_P256R1 = ("brainpoolP256r1", "1.3.36.3.3.2.8.1.1.7", 256, None, None)
    BRAINPOOL_P384R1 = ("brainpoolP384r1", "1.3.36.3.3.2.8.1.1.11", 384, None, None)
    BRAINPOOL_P512R1 = ("brainpoolP512r1", "1.3.36.3.3.2.8.1.1.13", 512, None, None)
    SECP256K1 = ("secp256k1", "1.3.132.0.10", 256, None, None)

    def __init__(
        self,
        display_name: str,
        oid_text: str,
        bits: int,
        alias_name: str | None,
        algorithm: PublicKeyAlgorithm | None,
    ) -> None:
        self._display_name = display_name
        self._oid_text = oid_text
        self._bits = bits
        self._alias_name = alias_name
        self._algorithm = algorithm

    def curve_name(self) -> str:
        """Standard name of the curve."""
        return self._display_name

    def oid_str(self) -> str:
        """Dotted object identifier of the curve."""
        return self._oid_text

    def nbits(self) -> int:
        """Nominal bit length of the curve."""
        return self._bits

    def alias(self) -> str | None:
        """Alternative name of the curve, if it has one."""
        return self._alias_name

    def pubkey_algo(self) -> PublicKeyAlgorithm | None:
        """Required public key algorithm, or None for ECDSA/ECDH curves."""
        return self._algorithm

    def oid(self) -> bytes:
        """DER encoding of the object identifier, without tag and length."""
        parts = [int(part) for part in self._oid_text.split(".")]
        components = [parts[0] * 40 + parts[1], *parts[2:]]
        return b"".join(encode_oid_component(value) for value in components)

    def __str__(self) -> str:
        return self._display_name


def ecc_curve_from_oid(oid: bytes) -> EccCurve | None:
    """Return the curve whose encoded OID is ``oid``, or None."""
    oid = bytes(oid)
    return next((curve for curve in EccCurve if curve.oid() == oid), None)


def encode_oid_component(val: int) -> bytes:
    """Encode one OID component in base 128, high bit set on all but the last octet."""
    encoded = [val & 0x7F]
    val >>= 7
    while val > 0:
        encoded.append(0x80 | (val & 0x7F))
        val >>= 7
    return bytes(reversed(encoded))