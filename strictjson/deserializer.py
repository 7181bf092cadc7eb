"""Reading JSON documents into Python values."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from .errors import ErrorCode, JsonError, custom, invalid_type, io_error
from .scanner import Number, Scanner
from .skip import ignore_value

__all__ = ["Deserializer", "from_str", "from_bytes", "from_reader"]

_RECURSION_LIMIT = 128

_DIGITS = frozenset(b"0123456789")
_QUOTE = 0x22
_COMMA = 0x2C
_COLON = 0x3A
_MINUS = 0x2D
_OPEN_LIST = 0x5B
_CLOSE_LIST = 0x5D
_OPEN_OBJECT = 0x7B
_CLOSE_OBJECT = 0x7D
_N = ord("n")
_T = ord("t")
_F = ord("f")


def _debug_str(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def _describe_number(value: Number) -> str:
    if isinstance(value, float):
        return f"floating point `{value!r}`"
    return f"integer `{value}`"


class Deserializer:
    """Reads JSON values from an in-memory document.

    Objects become ``dict``, arrays ``list``, strings ``str``, numbers
    ``int`` or ``float``, booleans ``bool`` and ``null`` becomes ``None``.
    Nesting deeper than 127 arrays or objects is rejected unless
    :meth:`disable_recursion_limit` has been called.
    """

    def __init__(self, data: Union[str, bytes, bytearray, memoryview]) -> None:
        self._scanner = Scanner(data)
        self._remaining_depth = _RECURSION_LIMIT
        self._limit_recursion = True

    @property
    def scanner(self) -> Scanner:
        """The scanner that reads the underlying document."""
        return self._scanner

    def end(self) -> None:
        """Check that only whitespace remains in the input."""
        if self._scanner.parse_whitespace() is not None:
            raise self._scanner.peek_error(ErrorCode.TRAILING_CHARACTERS)

    def disable_recursion_limit(self) -> None:
        """Allow arbitrarily deep nesting, bounded only by Python's own stack."""
        self._limit_recursion = False

    # -- helpers ----------------------------------------------------------

    def _locate(self, err: JsonError) -> JsonError:
        return err.fix_position(self._scanner.error)

    def _peek_value(self) -> int:
        peek = self._scanner.parse_whitespace()
        if peek is None:
            raise self._scanner.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)
        return peek

    @contextmanager
    def _nested(self) -> Iterator[None]:
        if self._limit_recursion:
            self._remaining_depth -= 1
            if self._remaining_depth == 0:
                raise self._scanner.peek_error(ErrorCode.RECURSION_LIMIT_EXCEEDED)
        try:
            yield
        finally:
            if self._limit_recursion:
                self._remaining_depth += 1

    def _peek_invalid_type(self, expected: str) -> JsonError:
        scanner = self._scanner
        peek = scanner.peek()
        if peek == _N:
            scanner.eat_char()
            scanner.parse_ident(b"ull")
            err = invalid_type(None, expected)
        elif peek == _T:
            scanner.eat_char()
            scanner.parse_ident(b"rue")
            err = invalid_type("boolean `true`", expected)
        elif peek == _F:
            scanner.eat_char()
            scanner.parse_ident(b"alse")
            err = invalid_type("boolean `false`", expected)
        elif peek == _MINUS:
            scanner.eat_char()
            err = invalid_type(_describe_number(scanner.parse_integer(False)), expected)
        elif peek is not None and peek in _DIGITS:
            err = invalid_type(_describe_number(scanner.parse_integer(True)), expected)
        elif peek == _QUOTE:
            scanner.eat_char()
            err = invalid_type("string " + _debug_str(scanner.parse_string()), expected)
        elif peek == _OPEN_LIST:
            err = invalid_type("sequence", expected)
        elif peek == _OPEN_OBJECT:
            err = invalid_type("map", expected)
        else:
            return scanner.peek_error(ErrorCode.EXPECTED_SOME_VALUE)
        return self._locate(err)

    def _elements(self, element: Callable[[], Any]) -> Iterator[Any]:
        scanner = self._scanner
        first = True
        while True:
            peek = scanner.parse_whitespace()
            if peek == _CLOSE_LIST:
                return
            if peek is None:
                raise scanner.peek_error(ErrorCode.EOF_WHILE_PARSING_LIST)
            if peek == _COMMA and not first:
                scanner.eat_char()
                peek = scanner.parse_whitespace()
            elif first:
                first = False
            else:
                raise scanner.peek_error(ErrorCode.EXPECTED_LIST_COMMA_OR_END)

            if peek == _CLOSE_LIST:
                raise scanner.peek_error(ErrorCode.TRAILING_COMMA)
            if peek is None:
                raise scanner.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)
            yield element()

    def _entries(self) -> Iterator[tuple]:
        scanner = self._scanner
        first = True
        while True:
            peek = scanner.parse_whitespace()
            if peek == _CLOSE_OBJECT:
                return
            if peek is None:
                raise scanner.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
            if peek == _COMMA and not first:
                scanner.eat_char()
                peek = scanner.parse_whitespace()
            elif first:
                first = False
            else:
                raise scanner.peek_error(ErrorCode.EXPECTED_OBJECT_COMMA_OR_END)

            if peek == _CLOSE_OBJECT:
                raise scanner.peek_error(ErrorCode.TRAILING_COMMA)
            if peek is None:
                raise scanner.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)
            if peek != _QUOTE:
                raise scanner.peek_error(ErrorCode.KEY_MUST_BE_A_STRING)
            scanner.eat_char()
            key = scanner.parse_string()
            self._parse_object_colon()
            yield key, self.parse_value()

    def _parse_object_colon(self) -> None:
        scanner = self._scanner
        peek = scanner.parse_whitespace()
        if peek == _COLON:
            scanner.eat_char()
        elif peek is None:
            raise scanner.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
        else:
            raise scanner.peek_error(ErrorCode.EXPECTED_COLON)

    def _end_seq(self) -> None:
        scanner = self._scanner
        peek = scanner.parse_whitespace()
        if peek == _CLOSE_LIST:
            scanner.eat_char()
        elif peek == _COMMA:
            scanner.eat_char()
            if scanner.parse_whitespace() == _CLOSE_LIST:
                raise scanner.peek_error(ErrorCode.TRAILING_COMMA)
            raise scanner.peek_error(ErrorCode.TRAILING_CHARACTERS)
        elif peek is None:
            raise scanner.peek_error(ErrorCode.EOF_WHILE_PARSING_LIST)
        else:
            raise scanner.peek_error(ErrorCode.TRAILING_CHARACTERS)

    def _end_map(self) -> None:
        scanner = self._scanner
        peek = scanner.parse_whitespace()
        if peek == _CLOSE_OBJECT:
            scanner.eat_char()
        elif peek == _COMMA:
            raise scanner.peek_error(ErrorCode.TRAILING_COMMA)
        elif peek is None:
            raise scanner.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
        else:
            raise scanner.peek_error(ErrorCode.TRAILING_CHARACTERS)

    def _list(self, element: Callable[[], Any]) -> List[Any]:
        with self._nested():
            self._scanner.eat_char()
            items = list(self._elements(element))
        self._end_seq()
        return items

    def _object(self) -> Dict[str, Any]:
        with self._nested():
            self._scanner.eat_char()
            result = dict(self._entries())
        self._end_map()
        return result

    def _number(self, expected: str) -> Number:
        scanner = self._scanner
        peek = self._peek_value()
        try:
            if peek == _MINUS:
                scanner.eat_char()
                return scanner.parse_integer(False)
            if peek in _DIGITS:
                return scanner.parse_integer(True)
            raise self._peek_invalid_type(expected)
        except JsonError as err:
            raise self._locate(err) from None

    def _byte(self) -> int:
        value = self._number("u8")
        if isinstance(value, float):
            raise self._locate(invalid_type(_describe_number(value), "u8"))
        if not 0 <= value <= 255:
            raise self._locate(custom(f"invalid value: integer `{value}`, expected u8"))
        return value

    # -- values -----------------------------------------------------------

    def parse_value(self) -> Any:
        """Read any JSON value."""
        scanner = self._scanner
        peek = self._peek_value()
        try:
            if peek == _N:
                scanner.eat_char()
                scanner.parse_ident(b"ull")
                return None
            if peek == _T:
                scanner.eat_char()
                scanner.parse_ident(b"rue")
                return True
            if peek == _F:
                scanner.eat_char()
                scanner.parse_ident(b"alse")
                return False
            if peek == _MINUS:
                scanner.eat_char()
                return scanner.parse_integer(False)
            if peek in _DIGITS:
                return scanner.parse_integer(True)
            if peek == _QUOTE:
                scanner.eat_char()
                return scanner.parse_string()
            if peek == _OPEN_LIST:
                return self._list(self.parse_value)
            if peek == _OPEN_OBJECT:
                return self._object()
            raise scanner.peek_error(ErrorCode.EXPECTED_SOME_VALUE)
        except JsonError as err:
            raise self._locate(err) from None

    def parse_bool(self) -> bool:
        """Read ``true`` or ``false``."""
        scanner = self._scanner
        peek = self._peek_value()
        if peek == _T:
            scanner.eat_char()
            scanner.parse_ident(b"rue")
            return True
        if peek == _F:
            scanner.eat_char()
            scanner.parse_ident(b"alse")
            return False
        raise self._peek_invalid_type("a boolean")

    def parse_number(self) -> Number:
        """Read a number."""
        return self._number("a number")

    def parse_str(self) -> str:
        """Read a string."""
        scanner = self._scanner
        if self._peek_value() == _QUOTE:
            scanner.eat_char()
            return scanner.parse_string()
        raise self._peek_invalid_type("a string")

    def parse_bytes(self) -> bytes:
        """Read a string as raw bytes, or an array of integers 0-255."""
        scanner = self._scanner
        peek = self._peek_value()
        if peek == _QUOTE:
            scanner.eat_char()
            return scanner._parse_raw_string()
        if peek == _OPEN_LIST:
            return bytes(self._list(self._byte))
        raise self._peek_invalid_type("byte array")

    def parse_option(self) -> Optional[Any]:
        """Read ``null`` as ``None`` and anything else as a value."""
        scanner = self._scanner
        if scanner.parse_whitespace() == _N:
            scanner.eat_char()
            scanner.parse_ident(b"ull")
            return None
        return self.parse_value()

    def parse_unit(self) -> None:
        """Read ``null``."""
        scanner = self._scanner
        if self._peek_value() == _N:
            scanner.eat_char()
            scanner.parse_ident(b"ull")
            return None
        raise self._peek_invalid_type("unit")

    def parse_seq(self) -> List[Any]:
        """Read an array."""
        if self._peek_value() == _OPEN_LIST:
            return self._list(self.parse_value)
        raise self._peek_invalid_type("a sequence")

    def parse_map(self) -> Dict[str, Any]:
        """Read an object."""
        if self._peek_value() == _OPEN_OBJECT:
            return self._object()
        raise self._peek_invalid_type("a map")

    def skip_value(self) -> None:
        """Consume one value, checking its syntax, without building it."""
        ignore_value(self._scanner)


def from_bytes(data: Union[bytes, bytearray, memoryview]) -> Any:
    """Read exactly one JSON value from bytes."""
    deserializer = Deserializer(data)
    value = deserializer.parse_value()
    deserializer.end()
    return value


def from_str(text: str) -> Any:
    """Read exactly one JSON value from text."""
    deserializer = Deserializer(text)
    value = deserializer.parse_value()
    deserializer.end()
    return value


def from_reader(reader: Any) -> Any:
    """Read exactly one JSON value from a file-like object.

    Failures of the reader are raised as I/O :class:`JsonError`.
    """
    try:
        data = reader.read()
    except OSError as exc:
        raise io_error(exc) from exc
    return from_bytes(data) if not isinstance(data, str) else from_str(data)