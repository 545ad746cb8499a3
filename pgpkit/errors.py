"""Error type shared by the whole package."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, NoReturn

__all__ = [
    "ErrorKind",
    "PgpError",
    "ensure",
    "ensure_eq",
    "unimplemented",
    "unsupported",
]


class ErrorKind(IntEnum):
    """Category of a failure; the value is its stable numeric code."""

    PARSING = 0
    INVALID_INPUT = 1
    INCOMPLETE = 2
    INVALID_ARMOR_WRAPPERS = 3
    INVALID_CHECKSUM = 4
    BASE64_DECODE = 5
    REQUESTED_SIZE_TOO_LARGE = 6
    NO_MATCHING_PACKET = 7
    TOO_MANY_PACKETS = 8
    RSA = 9
    IO = 10
    MISSING_PACKETS = 11
    INVALID_KEY_LENGTH = 12
    BLOCK_MODE = 13
    MISSING_KEY = 14
    CFB_INVALID_KEY_IV_LENGTH = 15
    UNIMPLEMENTED = 16
    UNSUPPORTED = 17
    MESSAGE = 18
    PACKET = 19
    PACKET_INCOMPLETE = 20
    UNPAD = 21
    PAD = 22
    UTF8 = 23
    PARSE_INT = 24
    INVALID_PACKET_CONTENT = 25
    SIGNATURE = 26
    MDC = 27
    TRY_FROM_INT = 28
    ELLIPTIC_CURVE = 29


_TEMPLATES = {
    ErrorKind.PARSING: "failed to parse {detail}",
    ErrorKind.INVALID_INPUT: "invalid input",
    ErrorKind.INCOMPLETE: "incomplete input: {detail}",
    ErrorKind.INVALID_ARMOR_WRAPPERS: "invalid armor wrappers",
    ErrorKind.INVALID_CHECKSUM: "invalid crc24 checksum",
    ErrorKind.BASE64_DECODE: "failed to decode base64 {detail}",
    ErrorKind.REQUESTED_SIZE_TOO_LARGE: "requested data size is larger than the packet body",
    ErrorKind.NO_MATCHING_PACKET: "no matching packet found",
    ErrorKind.TOO_MANY_PACKETS: "more than one matching packet was found",
    ErrorKind.RSA: "rsa error: {detail}",
    ErrorKind.IO: "io error: {detail}",
    ErrorKind.MISSING_PACKETS: "missing packets",
    ErrorKind.INVALID_KEY_LENGTH: "invalid key length",
    ErrorKind.BLOCK_MODE: "block mode error",
    ErrorKind.MISSING_KEY: "missing key",
    ErrorKind.CFB_INVALID_KEY_IV_LENGTH: "cfb: invalid key iv length",
    ErrorKind.UNIMPLEMENTED: "Not yet implemented: {detail}",
    ErrorKind.UNSUPPORTED: "Unsupported: {detail}",
    ErrorKind.MESSAGE: "{detail}",
    ErrorKind.PACKET: "Invalid Packet {detail}",
    ErrorKind.PACKET_INCOMPLETE: "Incomplete Packet",
    ErrorKind.UNPAD: "Unpadding failed",
    ErrorKind.PAD: "Padding failed",
    ErrorKind.UTF8: "Utf8 {detail}",
    ErrorKind.PARSE_INT: "ParseInt {detail}",
    ErrorKind.INVALID_PACKET_CONTENT: "Invalid Packet Content {detail}",
    ErrorKind.SIGNATURE: "Signature {detail}",
    ErrorKind.MDC: "Modification Detection Code error",
    ErrorKind.TRY_FROM_INT: "Invalid size conversion {detail}",
    ErrorKind.ELLIPTIC_CURVE: "elliptic error: {detail}",
}


class PgpError(Exception):
    """An error raised by any operation of the package."""

    def __init__(self, kind: ErrorKind, detail: Any = None) -> None:
        self.kind = ErrorKind(kind)
        self.detail = detail
        super().__init__(_TEMPLATES[self.kind].format(detail=detail))

    def code(self) -> int:
        """Numeric code identifying the error kind."""
        return int(self.kind)


def ensure(condition: object, message: str) -> None:
    """Raise a message error unless ``condition`` holds."""
    if not condition:
        raise PgpError(ErrorKind.MESSAGE, message)


def ensure_eq(left: Any, right: Any, message: str | None = None) -> None:
    """Raise a message error unless ``left == right``."""
    if left == right:
        return
    text = f"assertion failed: `(left == right)`\n  left: `{left!r}`,\n right: `{right!r}`"
    if message is not None:
        text = f"{text}: {message}"
    raise PgpError(ErrorKind.MESSAGE, text)


def unimplemented(message: str) -> NoReturn:
    """Raise an error for a feature that is not implemented."""
    raise PgpError(ErrorKind.UNIMPLEMENTED, message)


def unsupported(message: str) -> NoReturn:
    """Raise an error for a feature that is not supported."""
    raise PgpError(ErrorKind.UNSUPPORTED, message)