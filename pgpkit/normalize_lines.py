"""Line ending normalisation for byte streams."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum

__all__ = ["LineBreak", "iter_normalized", "normalize"]

_LF = 0x0A
_CR = 0x0D


class LineBreak(Enum):
    """Line ending style."""

    LF = b"\n"
    CR = b"\r"
    CRLF = b"\r\n"


def _as_bytes(data: bytes | str | Iterable[int]) -> Iterable[int]:
    if isinstance(data, str):
        return data.encode("utf-8")
    return data


def iter_normalized(
    data: bytes | str | Iterable[int], line_break: LineBreak
) -> Iterator[int]:
    """Yield the bytes of ``data`` with line endings rewritten to ``line_break``."""
    source = iter(_as_bytes(data))
    peek = next(source, None)
    prev_was_cr = False

    while True:
        if peek == _LF:
            if line_break is LineBreak.LF:
                if prev_was_cr:
                    # the newline was already emitted for the preceding CR
                    peek = next(source, None)
                if peek is None:
                    return
                value, peek = peek, next(source, None)
                yield value
            elif line_break is LineBreak.CR:
                peek = next(source, None)
                if prev_was_cr:
                    prev_was_cr = False
                    continue
                yield _CR
            else:
                if prev_was_cr:
                    prev_was_cr = False
                    peek = next(source, None)
                    yield _LF
                else:
                    prev_was_cr = True
                    yield _CR
        elif peek == _CR:
            if line_break is LineBreak.LF:
                prev_was_cr = True
                peek = next(source, None)
                yield _LF
            elif line_break is LineBreak.CR:
                prev_was_cr = True
                peek = next(source, None)
                yield _CR
            else:
                if prev_was_cr:
                    prev_was_cr = False
                    yield _LF
                else:
                    prev_was_cr = True
                    peek = next(source, None)
                    yield _CR
        else:
            if line_break is LineBreak.CRLF and prev_was_cr:
                prev_was_cr = False
                yield _LF
                continue
            prev_was_cr = False
            if peek is None:
                return
            value, peek = peek, next(source, None)
            yield value


def normalize(data: bytes | str | Iterable[int], line_break: LineBreak) -> bytes:
    """Return ``data`` as bytes with line endings rewritten to ``line_break``."""
    return bytes(iter_normalized(data, line_break))