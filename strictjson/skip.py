"""Skipping over JSON values without building them."""

from __future__ import annotations

from typing import List, Optional

from .errors import ErrorCode
from .scanner import Scanner

__all__ = ["ignore_value", "ignore_integer"]

_DIGITS = frozenset(b"0123456789")
_NONZERO_DIGITS = frozenset(b"123456789")
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
_EXPONENT_MARKS = frozenset(b"eE")
_SIMPLE_ESCAPES = frozenset(b'"\\/bfnrt')

_QUOTE = 0x22
_BACKSLASH = 0x5C
_COMMA = 0x2C
_COLON = 0x3A
_MINUS = 0x2D
_PLUS = 0x2B
_DOT = 0x2E
_ZERO = 0x30
_OPEN_LIST = 0x5B
_CLOSE_LIST = 0x5D
_OPEN_OBJECT = 0x7B
_CLOSE_OBJECT = 0x7D
_U = 0x75

_CLOSERS = {_OPEN_LIST: _CLOSE_LIST, _OPEN_OBJECT: _CLOSE_OBJECT}


def _peek_or_null(scanner: Scanner) -> int:
    byte = scanner.peek()
    return 0 if byte is None else byte


def _next_or_null(scanner: Scanner) -> int:
    byte = scanner.next_char()
    return 0 if byte is None else byte


def _eof_code(frame: int) -> ErrorCode:
    if frame == _OPEN_LIST:
        return ErrorCode.EOF_WHILE_PARSING_LIST
    return ErrorCode.EOF_WHILE_PARSING_OBJECT


def _comma_code(frame: int) -> ErrorCode:
    if frame == _OPEN_LIST:
        return ErrorCode.EXPECTED_LIST_COMMA_OR_END
    return ErrorCode.EXPECTED_OBJECT_COMMA_OR_END


def ignore_value(scanner: Scanner) -> None:
    """Consume one complete JSON value, checking its syntax.

    Nesting is tracked on an explicit stack, so arbitrarily deep
    documents are skipped without recursion.
    """
    stack: List[int] = []
    enclosing: Optional[int] = None

    while True:
        peek = scanner.parse_whitespace()
        if peek is None:
            raise scanner.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)

        opened: Optional[int] = None
        if peek == ord("n"):
            scanner.eat_char()
            scanner.parse_ident(b"ull")
        elif peek == ord("t"):
            scanner.eat_char()
            scanner.parse_ident(b"rue")
        elif peek == ord("f"):
            scanner.eat_char()
            scanner.parse_ident(b"alse")
        elif peek == _MINUS:
            scanner.eat_char()
            ignore_integer(scanner)
        elif peek in _DIGITS:
            ignore_integer(scanner)
        elif peek == _QUOTE:
            scanner.eat_char()
            _ignore_str(scanner)
        elif peek in _CLOSERS:
            if enclosing is not None:
                stack.append(enclosing)
                enclosing = None
            scanner.eat_char()
            opened = peek
        else:
            raise scanner.peek_error(ErrorCode.EXPECTED_SOME_VALUE)

        if opened is not None:
            accept_comma = False
            frame = opened
        elif enclosing is not None:
            accept_comma = True
            frame = enclosing
            enclosing = None
        elif stack:
            accept_comma = True
            frame = stack.pop()
        else:
            return

        while True:
            byte = scanner.parse_whitespace()
            if byte == _COMMA and accept_comma:
                scanner.eat_char()
                break
            if byte is None:
                raise scanner.peek_error(_eof_code(frame))
            if byte != _CLOSERS[frame]:
                if accept_comma:
                    raise scanner.peek_error(_comma_code(frame))
                break
            scanner.eat_char()
            if not stack:
                return
            frame = stack.pop()
            accept_comma = True

        if frame == _OPEN_OBJECT:
            _ignore_key_and_colon(scanner)

        enclosing = frame


def _ignore_key_and_colon(scanner: Scanner) -> None:
    byte = scanner.parse_whitespace()
    if byte is None:
        raise scanner.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
    if byte != _QUOTE:
        raise scanner.peek_error(ErrorCode.KEY_MUST_BE_A_STRING)
    scanner.eat_char()
    _ignore_str(scanner)

    byte = scanner.parse_whitespace()
    if byte is None:
        raise scanner.peek_error(ErrorCode.EOF_WHILE_PARSING_OBJECT)
    if byte != _COLON:
        raise scanner.peek_error(ErrorCode.EXPECTED_COLON)
    scanner.eat_char()


def ignore_integer(scanner: Scanner) -> None:
    """Consume a number whose sign, if any, has already been consumed."""
    first = _next_or_null(scanner)
    if first == _ZERO:
        if _peek_or_null(scanner) in _DIGITS:
            raise scanner.peek_error(ErrorCode.INVALID_NUMBER)
    elif first in _NONZERO_DIGITS:
        while _peek_or_null(scanner) in _DIGITS:
            scanner.eat_char()
    else:
        raise scanner.error(ErrorCode.INVALID_NUMBER)

    byte = _peek_or_null(scanner)
    if byte == _DOT:
        _ignore_decimal(scanner)
    elif byte in _EXPONENT_MARKS:
        _ignore_exponent(scanner)


def _ignore_decimal(scanner: Scanner) -> None:
    scanner.eat_char()
    at_least_one_digit = False
    while _peek_or_null(scanner) in _DIGITS:
        scanner.eat_char()
        at_least_one_digit = True
    if not at_least_one_digit:
        raise scanner.peek_error(ErrorCode.INVALID_NUMBER)
    if _peek_or_null(scanner) in _EXPONENT_MARKS:
        _ignore_exponent(scanner)


def _ignore_exponent(scanner: Scanner) -> None:
    scanner.eat_char()
    if _peek_or_null(scanner) in (_PLUS, _MINUS):
        scanner.eat_char()
    if _next_or_null(scanner) not in _DIGITS:
        raise scanner.error(ErrorCode.INVALID_NUMBER)
    while _peek_or_null(scanner) in _DIGITS:
        scanner.eat_char()


def _ignore_str(scanner: Scanner) -> None:
    """Consume the rest of a string; code points are not validated."""
    while True:
        byte = scanner.next_char()
        if byte is None:
            raise scanner.error(ErrorCode.EOF_WHILE_PARSING_STRING)
        if byte == _QUOTE:
            return
        if byte == _BACKSLASH:
            _ignore_escape(scanner)
        elif byte < 0x20:
            raise scanner.error(ErrorCode.CONTROL_CHARACTER_WHILE_PARSING_STRING)


def _ignore_escape(scanner: Scanner) -> None:
    byte = scanner.next_char()
    if byte is None:
        raise scanner.error(ErrorCode.EOF_WHILE_PARSING_STRING)
    if byte in _SIMPLE_ESCAPES:
        return
    if byte != _U:
        raise scanner.error(ErrorCode.INVALID_ESCAPE)
    hex_digits = []
    for _ in range(4):
        digit = scanner.next_char()
        if digit is None:
            raise scanner.error(ErrorCode.EOF_WHILE_PARSING_STRING)
        hex_digits.append(digit)
    if not all(digit in _HEX_DIGITS for digit in hex_digits):
        raise scanner.error(ErrorCode.INVALID_ESCAPE)