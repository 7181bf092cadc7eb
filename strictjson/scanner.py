"""Byte-level reading of JSON tokens: whitespace, literals, numbers and strings."""

from __future__ import annotations

from typing import NamedTuple, Optional, Union

from .errors import ErrorCode, JsonError, syntax_error

__all__ = ["Position", "Scanner", "f64_from_parts", "parse_number"]

Number = Union[int, float]

_U64_MAX = 2**64 - 1
_I64_MIN_MAGNITUDE = 2**63
_I32_MAX = 2**31 - 1
_I32_MIN = -(2**31)

_WHITESPACE = frozenset(b" \n\t\r")
_DIGITS = frozenset(b"0123456789")
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
_EXPONENT_MARKS = frozenset(b"eE")

_QUOTE = 0x22
_BACKSLASH = 0x5C
_NEWLINE = 0x0A
_MINUS = 0x2D
_PLUS = 0x2B
_DOT = 0x2E
_U = 0x75

_SIMPLE_ESCAPES = {
    ord('"'): 0x22,
    ord("\\"): 0x5C,
    ord("/"): 0x2F,
    ord("b"): 0x08,
    ord("f"): 0x0C,
    ord("n"): 0x0A,
    ord("r"): 0x0D,
    ord("t"): 0x09,
}

_POW10 = tuple(float(f"1e{i}") for i in range(309))


def _overflows(acc: int, digit: int, limit: int) -> bool:
    """True when ``acc * 10 + digit`` would exceed ``limit``."""
    return acc >= limit // 10 and (acc > limit // 10 or digit > limit % 10)


class Position(NamedTuple):
    """One-based line and column of a place in the input."""

    line: int
    column: int


def f64_from_parts(positive: bool, significand: int, exponent: int) -> float:
    """Build ``significand * 10**exponent`` as a float with the given sign.

    Raises a :class:`JsonError` with code ``NUMBER_OUT_OF_RANGE`` and no
    position when the result is too large to represent.
    """
    value = float(significand)
    while True:
        magnitude = abs(exponent)
        if magnitude < len(_POW10):
            power = _POW10[magnitude]
            if exponent >= 0:
                value *= power
                if value == float("inf"):
                    raise JsonError(ErrorCode.NUMBER_OUT_OF_RANGE)
            else:
                value /= power
            break
        if value == 0.0:
            break
        if exponent >= 0:
            raise JsonError(ErrorCode.NUMBER_OUT_OF_RANGE)
        value /= 1e308
        exponent += 308
    return value if positive else -value


class Scanner:
    """Reads JSON tokens from an in-memory document.

    Text is encoded as UTF-8; all offsets, lines and columns count bytes.
    """

    def __init__(self, data: Union[str, bytes, bytearray, memoryview]) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8", "surrogatepass")
        self._data = bytes(data)
        self._index = 0

    # -- low-level access -------------------------------------------------

    def peek(self) -> Optional[int]:
        """Return the next byte without consuming it, or ``None`` at the end."""
        if self._index < len(self._data):
            return self._data[self._index]
        return None

    def _peek_or_null(self) -> int:
        byte = self.peek()
        return 0 if byte is None else byte

    def next_char(self) -> Optional[int]:
        """Consume and return the next byte, or ``None`` at the end."""
        byte = self.peek()
        if byte is not None:
            self._index += 1
        return byte

    def eat_char(self) -> None:
        """Consume the byte that was just peeked."""
        if self._index < len(self._data):
            self._index += 1

    def _position_of(self, index: int) -> Position:
        start_of_line = self._data.rfind(b"\n", 0, index) + 1
        line = 1 + self._data.count(b"\n", 0, index)
        return Position(line, index - start_of_line)

    def position(self) -> Position:
        """Position of the last consumed byte."""
        return self._position_of(self._index)

    def peek_position(self) -> Position:
        """Position of the byte that :meth:`peek` would return."""
        return self._position_of(min(self._index + 1, len(self._data)))

    def byte_offset(self) -> int:
        """Number of bytes consumed so far."""
        return self._index

    def error(self, code: ErrorCode) -> JsonError:
        """Error caused by a byte returned from :meth:`next_char`."""
        line, column = self.position()
        return syntax_error(code, line, column)

    def peek_error(self, code: ErrorCode) -> JsonError:
        """Error caused by a byte returned from :meth:`peek`."""
        line, column = self.peek_position()
        return syntax_error(code, line, column)

    # -- tokens -----------------------------------------------------------

    def parse_whitespace(self) -> Optional[int]:
        """Skip whitespace and return the next byte without consuming it."""
        while True:
            byte = self.peek()
            if byte is None or byte not in _WHITESPACE:
                return byte
            self._index += 1

    def parse_ident(self, ident: bytes) -> None:
        """Consume exactly the bytes of ``ident``."""
        for expected in ident:
            byte = self.next_char()
            if byte is None:
                raise self.error(ErrorCode.EOF_WHILE_PARSING_VALUE)
            if byte != expected:
                raise self.error(ErrorCode.EXPECTED_SOME_IDENT)

    # -- numbers ----------------------------------------------------------

    def parse_integer(self, positive: bool) -> Number:
        """Parse a number whose sign has already been consumed.

        Integers that fit in 64 bits come back as ``int``; everything else
        as ``float``.
        """
        first = self.next_char()
        if first is None:
            raise self.error(ErrorCode.EOF_WHILE_PARSING_VALUE)
        if first == ord("0"):
            if self._peek_or_null() in _DIGITS:
                raise self.peek_error(ErrorCode.INVALID_NUMBER)
            return self._parse_number_tail(positive, 0)
        if first not in _DIGITS:
            raise self.error(ErrorCode.INVALID_NUMBER)

        significand = first - ord("0")
        while True:
            byte = self._peek_or_null()
            if byte not in _DIGITS:
                return self._parse_number_tail(positive, significand)
            digit = byte - ord("0")
            if _overflows(significand, digit, _U64_MAX):
                return self._parse_long_integer(positive, significand)
            self._index += 1
            significand = significand * 10 + digit

    def _parse_number_tail(self, positive: bool, significand: int) -> Number:
        byte = self._peek_or_null()
        if byte == _DOT:
            return self._parse_decimal(positive, significand, 0)
        if byte in _EXPONENT_MARKS:
            return self._parse_exponent(positive, significand, 0)
        if positive:
            return significand
        if significand <= _I64_MIN_MAGNITUDE:
            return -significand
        return -float(significand)

    def _parse_decimal(self, positive: bool, significand: int, exponent: int) -> float:
        self.eat_char()
        while (byte := self._peek_or_null()) in _DIGITS:
            digit = byte - ord("0")
            if _overflows(significand, digit, _U64_MAX):
                return self._parse_decimal_overflow(positive, significand, exponent)
            self._index += 1
            significand = significand * 10 + digit
            exponent -= 1

        if exponent == 0:
            if self.peek() is None:
                raise self.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)
            raise self.peek_error(ErrorCode.INVALID_NUMBER)

        if self._peek_or_null() in _EXPONENT_MARKS:
            return self._parse_exponent(positive, significand, exponent)
        return self._from_parts(positive, significand, exponent)

    def _parse_exponent(self, positive: bool, significand: int, starting_exp: int) -> float:
        self.eat_char()

        positive_exp = True
        sign = self._peek_or_null()
        if sign == _PLUS:
            self.eat_char()
        elif sign == _MINUS:
            self.eat_char()
            positive_exp = False

        first = self.next_char()
        if first is None:
            raise self.error(ErrorCode.EOF_WHILE_PARSING_VALUE)
        if first not in _DIGITS:
            raise self.error(ErrorCode.INVALID_NUMBER)

        exp = first - ord("0")
        while (byte := self._peek_or_null()) in _DIGITS:
            self._index += 1
            digit = byte - ord("0")
            if _overflows(exp, digit, _I32_MAX):
                return self._parse_exponent_overflow(
                    positive, significand == 0, positive_exp
                )
            exp = exp * 10 + digit

        final_exp = starting_exp + exp if positive_exp else starting_exp - exp
        final_exp = max(_I32_MIN, min(_I32_MAX, final_exp))
        return self._from_parts(positive, significand, final_exp)

    def _parse_long_integer(self, positive: bool, significand: int) -> float:
        exponent = 0
        while True:
            byte = self._peek_or_null()
            if byte in _DIGITS:
                self._index += 1
                exponent += 1
            elif byte == _DOT:
                return self._parse_decimal(positive, significand, exponent)
            elif byte in _EXPONENT_MARKS:
                return self._parse_exponent(positive, significand, exponent)
            else:
                return self._from_parts(positive, significand, exponent)

    def _parse_decimal_overflow(
        self, positive: bool, significand: int, exponent: int
    ) -> float:
        # Further digits cannot change the significand; drop them.
        while self._peek_or_null() in _DIGITS:
            self._index += 1
        if self._peek_or_null() in _EXPONENT_MARKS:
            return self._parse_exponent(positive, significand, exponent)
        return self._from_parts(positive, significand, exponent)

    def _parse_exponent_overflow(
        self, positive: bool, zero_significand: bool, positive_exp: bool
    ) -> float:
        if not zero_significand and positive_exp:
            raise self.error(ErrorCode.NUMBER_OUT_OF_RANGE)
        while self._peek_or_null() in _DIGITS:
            self._index += 1
        return 0.0 if positive else -0.0

    def _from_parts(self, positive: bool, significand: int, exponent: int) -> float:
        try:
            return f64_from_parts(positive, significand, exponent)
        except JsonError as err:
            raise err.fix_position(self.error) from None

    def parse_any_signed_number(self) -> Number:
        """Parse a whole input that must consist of one number and nothing else."""
        first = self.peek()
        if first is None:
            raise self.peek_error(ErrorCode.EOF_WHILE_PARSING_VALUE)

        value: Number = 0
        failure: Optional[JsonError] = None
        try:
            if first == _MINUS:
                self.eat_char()
                value = self.parse_integer(False)
            elif first in _DIGITS:
                value = self.parse_integer(True)
            else:
                failure = self.peek_error(ErrorCode.INVALID_NUMBER)
        except JsonError as err:
            failure = err

        if self.peek() is not None:
            raise self.peek_error(ErrorCode.INVALID_NUMBER)
        if failure is not None:
            raise failure.fix_position(self.error)
        return value

    # -- strings ----------------------------------------------------------

    def parse_string(self) -> str:
        """Parse the rest of a string whose opening quote was consumed."""
        raw = self._parse_raw_string()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            raise self.error(ErrorCode.INVALID_UNICODE_CODE_POINT) from None

    def _parse_raw_string(self) -> bytes:
        out = bytearray()
        while True:
            byte = self.next_char()
            if byte is None:
                raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
            if byte == _QUOTE:
                return bytes(out)
            if byte == _BACKSLASH:
                self._parse_escape(out)
            elif byte < 0x20:
                raise self.error(ErrorCode.CONTROL_CHARACTER_WHILE_PARSING_STRING)
            else:
                out.append(byte)

    def _parse_escape(self, out: bytearray) -> None:
        byte = self.next_char()
        if byte is None:
            raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
        simple = _SIMPLE_ESCAPES.get(byte)
        if simple is not None:
            out.append(simple)
            return
        if byte != _U:
            raise self.error(ErrorCode.INVALID_ESCAPE)

        code = self._decode_hex_escape()
        if 0xDC00 <= code <= 0xDFFF:
            raise self.error(ErrorCode.LONE_LEADING_SURROGATE_IN_HEX_ESCAPE)
        if 0xD800 <= code <= 0xDBFF:
            for expected in (_BACKSLASH, _U):
                following = self.next_char()
                if following is None:
                    raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
                if following != expected:
                    raise self.error(ErrorCode.UNEXPECTED_END_OF_HEX_ESCAPE)
            trailing = self._decode_hex_escape()
            if not 0xDC00 <= trailing <= 0xDFFF:
                raise self.error(ErrorCode.LONE_LEADING_SURROGATE_IN_HEX_ESCAPE)
            code = (((code - 0xD800) << 10) | (trailing - 0xDC00)) + 0x10000
        out.extend(chr(code).encode("utf-8"))

    def _decode_hex_escape(self) -> int:
        if self._index + 4 > len(self._data):
            self._index = len(self._data)
            raise self.error(ErrorCode.EOF_WHILE_PARSING_STRING)
        code = 0
        for _ in range(4):
            byte = self._data[self._index]
            self._index += 1
            if byte not in _HEX_DIGITS:
                raise self.error(ErrorCode.INVALID_ESCAPE)
            code = (code << 4) + int(chr(byte), 16)
        return code


def parse_number(text: Union[str, bytes]) -> Number:
    """Parse text that holds exactly one JSON number."""
    return Scanner(text).parse_any_signed_number()