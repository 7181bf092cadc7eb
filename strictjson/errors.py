"""Errors raised while reading JSON, with their position in the input."""

from __future__ import annotations

import errno
from enum import Enum
from typing import Callable, Optional

__all__ = [
    "Category",
    "ErrorCode",
    "JsonError",
    "syntax_error",
    "io_error",
    "custom",
    "invalid_type",
]


class Category(Enum):
    """Broad cause of a :class:`JsonError`."""

    IO = "io"
    SYNTAX = "syntax"
    DATA = "data"
    EOF = "eof"


class ErrorCode(Enum):
    """The specific reason a JSON document could not be read."""

    MESSAGE = "<message>"
    IO = "<io>"
    EOF_WHILE_PARSING_LIST = "EOF while parsing a list"
    EOF_WHILE_PARSING_OBJECT = "EOF while parsing an object"
    EOF_WHILE_PARSING_STRING = "EOF while parsing a string"
    EOF_WHILE_PARSING_VALUE = "EOF while parsing a value"
    EXPECTED_COLON = "expected `:`"
    EXPECTED_LIST_COMMA_OR_END = "expected `,` or `]`"
    EXPECTED_OBJECT_COMMA_OR_END = "expected `,` or `}`"
    EXPECTED_SOME_IDENT = "expected ident"
    EXPECTED_SOME_VALUE = "expected value"
    INVALID_ESCAPE = "invalid escape"
    INVALID_NUMBER = "invalid number"
    NUMBER_OUT_OF_RANGE = "number out of range"
    INVALID_UNICODE_CODE_POINT = "invalid unicode code point"
    CONTROL_CHARACTER_WHILE_PARSING_STRING = (
        "control character (\\u0000-\\u001F) found while parsing a string"
    )
    KEY_MUST_BE_A_STRING = "key must be a string"
    LONE_LEADING_SURROGATE_IN_HEX_ESCAPE = "lone leading surrogate in hex escape"
    TRAILING_COMMA = "trailing comma"
    TRAILING_CHARACTERS = "trailing characters"
    UNEXPECTED_END_OF_HEX_ESCAPE = "unexpected end of hex escape"
    RECURSION_LIMIT_EXCEEDED = "recursion limit exceeded"

    @property
    def category(self) -> Category:
        if self is ErrorCode.MESSAGE:
            return Category.DATA
        if self is ErrorCode.IO:
            return Category.IO
        if self in _EOF_CODES:
            return Category.EOF
        return Category.SYNTAX


_EOF_CODES = frozenset(
    {
        ErrorCode.EOF_WHILE_PARSING_LIST,
        ErrorCode.EOF_WHILE_PARSING_OBJECT,
        ErrorCode.EOF_WHILE_PARSING_STRING,
        ErrorCode.EOF_WHILE_PARSING_VALUE,
    }
)


class JsonError(Exception):
    """An error met while reading JSON.

    ``line`` and ``column`` are one-based; a line of 0 means the position
    is unknown.
    """

    def __init__(
        self,
        code: ErrorCode,
        line: int = 0,
        column: int = 0,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.code = code
        self.line = line
        self.column = column
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause
        super().__init__(str(self))

    @property
    def description(self) -> str:
        """The reason for the error, without its position."""
        if self.code is ErrorCode.MESSAGE:
            return self.message or ""
        if self.code is ErrorCode.IO:
            return str(self.cause)
        return self.code.value

    def __str__(self) -> str:
        if self.line == 0:
            return self.description
        return f"{self.description} at line {self.line} column {self.column}"

    def __repr__(self) -> str:
        return (
            f"JsonError({self.description!r}, "
            f"line={self.line}, column={self.column})"
        )

    def classify(self) -> Category:
        """Return the broad category of this error."""
        return self.code.category

    def is_io(self) -> bool:
        return self.classify() is Category.IO

    def is_syntax(self) -> bool:
        return self.classify() is Category.SYNTAX

    def is_data(self) -> bool:
        return self.classify() is Category.DATA

    def is_eof(self) -> bool:
        return self.classify() is Category.EOF

    def fix_position(self, make: Callable[[ErrorCode], "JsonError"]) -> "JsonError":
        """Fill in an unknown position using ``make``.

        ``make`` receives this error's code and returns an error located
        where the reader currently is. Errors that already know their
        position are returned unchanged.
        """
        if self.line != 0:
            return self
        located = make(self.code)
        return JsonError(
            self.code, located.line, located.column, self.message, self.cause
        )

    def to_io_error(self) -> BaseException:
        """Convert into a standard I/O exception.

        I/O errors give back their original exception, end-of-input errors
        become :class:`EOFError` and everything else an ``EINVAL``
        :class:`OSError`.
        """
        if self.code is ErrorCode.IO and self.cause is not None:
            return self.cause
        if self.is_eof():
            converted: BaseException = EOFError(str(self))
        else:
            converted = OSError(errno.EINVAL, str(self))
        converted.__cause__ = self
        return converted


def syntax_error(code: ErrorCode, line: int, column: int) -> JsonError:
    """Create an error for malformed input at a known position."""
    return JsonError(code, line, column)


def io_error(error: BaseException) -> JsonError:
    """Wrap an exception raised by the underlying reader."""
    return JsonError(ErrorCode.IO, 0, 0, cause=error)


def custom(msg: object) -> JsonError:
    """Create a data error from a free-form message.

    A trailing ``" at line N column M"`` is taken as the position.
    """
    text = str(msg)
    text, line, column = _split_line_col(text)
    return JsonError(ErrorCode.MESSAGE, line, column, message=text)


def invalid_type(unexpected: Optional[str], expected: object) -> JsonError:
    """Create an error for a value of the wrong kind.

    ``unexpected`` describes what was found; ``None`` stands for ``null``.
    """
    found = "null" if unexpected is None else unexpected
    return custom(f"invalid type: {found}, expected {expected}")


_LINE_MARK = " at line "
_COLUMN_MARK = " column "


def _leading_digits(text: str) -> str:
    end = 0
    while end < len(text) and "0" <= text[end] <= "9":
        end += 1
    return text[:end]


def _split_line_col(msg: str) -> tuple[str, int, int]:
    start = msg.rfind(_LINE_MARK)
    if start < 0:
        return msg, 0, 0
    rest = msg[start + len(_LINE_MARK):]
    line_digits = _leading_digits(rest)
    rest = rest[len(line_digits):]
    if not rest.startswith(_COLUMN_MARK):
        return msg, 0, 0
    rest = rest[len(_COLUMN_MARK):]
    column_digits = _leading_digits(rest)
    if len(column_digits) < len(rest) or not line_digits or not column_digits:
        return msg, 0, 0
    return msg[:start], int(line_digits), int(column_digits)