"""Reading a sequence of JSON values from one document."""

from __future__ import annotations

from typing import Any, Iterator, Union

from .deserializer import Deserializer
from .errors import ErrorCode, syntax_error

__all__ = ["StreamDeserializer", "iter_values"]

# Bytes that may directly follow a value that has no closing delimiter of
# its own, such as a number or ``true``.
_VALUE_BOUNDARIES = frozenset(b' \n\t\r"[]{},:')
_SELF_DELINEATED = frozenset(b'["{')


class StreamDeserializer:
    """Iterate over the JSON values that follow one another in a document.

    Values must either close themselves (arrays, objects, strings) or be
    followed by whitespace or the start of such a value. A malformed value
    raises :class:`~strictjson.errors.JsonError`; after a parse failure
    the iterator is exhausted.
    """

    def __init__(self, data: Union[str, bytes, bytearray, memoryview]) -> None:
        self._de = Deserializer(data)
        self._offset = self._de.scanner.byte_offset()
        self._failed = False

    def __iter__(self) -> "StreamDeserializer":
        return self

    def __next__(self) -> Any:
        if self._failed:
            raise StopIteration
        scanner = self._de.scanner

        peek = scanner.parse_whitespace()
        if peek is None:
            self._offset = scanner.byte_offset()
            raise StopIteration

        self_delineated = peek in _SELF_DELINEATED
        self._offset = scanner.byte_offset()
        try:
            value = self._de.parse_value()
        except Exception:
            self._failed = True
            raise

        self._offset = scanner.byte_offset()
        if not self_delineated:
            self._check_end_of_value()
        return value

    def byte_offset(self) -> int:
        """Number of bytes consumed by values read successfully so far.

        After an end-of-input error, the data from this offset onward can
        be joined with more input and read again.
        """
        return self._offset

    def _check_end_of_value(self) -> None:
        scanner = self._de.scanner
        byte = scanner.peek()
        if byte is None or byte in _VALUE_BOUNDARIES:
            return
        line, column = scanner.peek_position()
        raise syntax_error(ErrorCode.TRAILING_CHARACTERS, line, column)


def iter_values(data: Union[str, bytes, bytearray, memoryview]) -> Iterator[Any]:
    """Return an iterator over the JSON values in ``data``."""
    return StreamDeserializer(data)