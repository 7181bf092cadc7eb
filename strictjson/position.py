"""Byte iteration that keeps track of line, column and offset."""

from __future__ import annotations

from typing import Iterable, Iterator

__all__ = ["LineColIterator"]

_NEWLINE = 0x0A


class LineColIterator:
    """Iterate over bytes while counting lines and columns.

    ``line`` is one-based. ``col`` is the number of bytes read on the
    current line, so it is 0 right after a newline has been read.
    Exceptions raised by the wrapped iterable pass through unchanged.
    """

    def __init__(self, iterable: Iterable[int]) -> None:
        self._iter: Iterator[int] = iter(iterable)
        self.line = 1
        self.col = 0
        self._start_of_line = 0

    def __iter__(self) -> "LineColIterator":
        return self

    def __next__(self) -> int:
        byte = next(self._iter)
        if byte == _NEWLINE:
            self._start_of_line += self.col + 1
            self.line += 1
            self.col = 0
        else:
            self.col += 1
        return byte

    def byte_offset(self) -> int:
        """Number of bytes read so far."""
        return self._start_of_line + self.col