"""A reader that hides line breaks of the stream it wraps."""

from __future__ import annotations

import io
import re
from typing import BinaryIO

__all__ = ["LineReader"]

_LINE_BREAK = re.compile(rb"[\r\n]")


class LineReader(io.RawIOBase):
    """Reads bytes from a seekable stream, skipping every CR and LF.

    Positions of skipped line breaks are remembered, so relative seeks
    move over the visible bytes only.
    """

    def __init__(self, inner: BinaryIO) -> None:
        super().__init__()
        self._inner = inner
        self._lines: list[int] = []
        self._last_stored_pos = 0

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    @property
    def lines(self) -> list[int]:
        """Positions in the inner stream where line breaks were found."""
        return list(self._lines)

    def into_inner(self) -> BinaryIO:
        """Return the wrapped stream."""
        return self._inner

    def readinto(self, buffer) -> int:
        """Fill ``buffer`` with bytes that are not line breaks; 0 at end of input."""
        view = memoryview(buffer).cast("B")
        size = len(view)
        if size == 0:
            return 0

        while True:
            chunk = self._inner.read(size)
            if not chunk:
                return 0
            start = self._inner.tell() - len(chunk)
            for match in _LINE_BREAK.finditer(chunk):
                position = start + match.start()
                # only record breaks not seen before, as the stream may be re-read
                if position > self._last_stored_pos:
                    self._lines.append(position)
                    self._last_stored_pos = position
            kept = bytes(chunk).translate(None, b"\r\n")
            if kept:
                view[: len(kept)] = kept
                return len(kept)

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` visible bytes; all remaining ones if ``size`` is negative."""
        if size is None or size < 0:
            return self.readall()
        buffer = bytearray(size)
        count = self.readinto(buffer)
        return bytes(buffer[:count])

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move ``offset`` visible bytes from the current position.

        Only relative seeking (``io.SEEK_CUR``) is supported.
        """
        if whence != io.SEEK_CUR:
            raise io.UnsupportedOperation("only relative seeking is supported")

        current = self._inner.tell()
        target = current + offset
        if target < 0:
            raise ValueError("new position is negative")

        if offset < 0:
            for position in reversed(self._lines):
                if position < target:
                    break
                if position < current:
                    target -= 1
        else:
            for position in self._lines:
                if position > target:
                    break
                if position > current:
                    target += 1

        return self._inner.seek(target)