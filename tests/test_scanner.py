import json
import math

import pytest

from strictjson.errors import ErrorCode, JsonError
from strictjson.scanner import Position, Scanner, f64_from_parts, parse_number


@pytest.mark.parametrize(
    "text, expected",
    [("0", 0), ("123", 123), ("-42", -42), ("7", 7)],
)
def test_parse_number_integers(text, expected):
    result = parse_number(text)
    assert result == expected
    assert isinstance(result, int)


def test_u64_max_stays_integer():
    result = parse_number("18446744073709551615")
    assert result == 18446744073709551615
    assert isinstance(result, int)


def test_above_u64_becomes_float():
    result = parse_number("18446744073709551616")
    assert isinstance(result, float)
    assert result == 18446744073709551616.0


def test_i64_min_stays_integer_and_below_becomes_float():
    assert parse_number("-9223372036854775808") == -9223372036854775808
    below = parse_number("-9223372036854775809")
    assert isinstance(below, float)
    assert below == -9223372036854775809.0


def test_negative_zero():
    assert parse_number("-0") == 0
    result = parse_number("-0.0")
    assert isinstance(result, float)
    assert math.copysign(1.0, result) == -1.0


@pytest.mark.parametrize(
    "text, expected",
    [("1.5", 1.5), ("-0.25", -0.25), ("1e3", 1e3), ("2.5E-3", 2.5e-3), ("4E+2", 4e2)],
)
def test_parse_number_floats(text, expected):
    result = parse_number(text)
    assert isinstance(result, float)
    assert result == expected


@pytest.mark.parametrize(
    "text, code",
    [
        ("01", ErrorCode.INVALID_NUMBER),
        ("1.", ErrorCode.EOF_WHILE_PARSING_VALUE),
        ("1.x", ErrorCode.INVALID_NUMBER),
        ("1.e5", ErrorCode.INVALID_NUMBER),
        ("1e", ErrorCode.EOF_WHILE_PARSING_VALUE),
        ("1e+", ErrorCode.EOF_WHILE_PARSING_VALUE),
        ("1ex", ErrorCode.INVALID_NUMBER),
        ("-", ErrorCode.EOF_WHILE_PARSING_VALUE),
        ("+1", ErrorCode.INVALID_NUMBER),
        ("", ErrorCode.EOF_WHILE_PARSING_VALUE),
        ("1 ", ErrorCode.INVALID_NUMBER),
        ("12x", ErrorCode.INVALID_NUMBER),
    ],
)
def test_parse_number_errors(text, code):
    with pytest.raises(JsonError) as info:
        parse_number(text)
    assert info.value.code is code


def test_trailing_character_error_points_at_it():
    text = "12x"
    with pytest.raises(JsonError) as info:
        parse_number(text)
    assert info.value.line == 1
    assert info.value.column == len(text)


@pytest.mark.parametrize("text", ["0e99999999999", "1e-99999999999", "1e-400"])
def test_tiny_numbers_flush_to_zero(text):
    assert parse_number(text) == 0.0


def test_negative_underflow_keeps_sign():
    result = parse_number("-1e-400")
    assert result == 0.0
    assert math.copysign(1.0, result) == -1.0


def test_f64_from_parts_values():
    assert f64_from_parts(True, 15, -1) == 1.5
    assert f64_from_parts(False, 15, -1) == -1.5
    assert f64_from_parts(True, 1, -400) == 0.0
    assert math.copysign(1.0, f64_from_parts(False, 0, 5)) == -1.0


def test_f64_from_parts_out_of_range_has_no_position():
    with pytest.raises(JsonError) as info:
        f64_from_parts(True, 1, 309)
    assert info.value.code is ErrorCode.NUMBER_OUT_OF_RANGE
    assert info.value.line == 0


def test_parse_integer_stops_before_delimiter():
    scanner = Scanner("123,")
    assert scanner.parse_integer(True) == 123
    assert scanner.peek() == ord(",")


def test_peek_next_and_eat():
    scanner = Scanner(b"ab")
    assert scanner.peek() == ord("a")
    assert scanner.next_char() == ord("a")
    scanner.eat_char()
    assert scanner.peek() is None
    assert scanner.next_char() is None
    assert scanner.byte_offset() == 2


def test_parse_whitespace_skips_to_first_token():
    scanner = Scanner(" \t\r\n true")
    assert scanner.parse_whitespace() == ord("t")
    assert scanner.byte_offset() == len(" \t\r\n ")
    assert Scanner("  \n").parse_whitespace() is None


def test_positions_across_newline():
    scanner = Scanner("a\nb")
    assert scanner.position() == Position(1, 0)
    scanner.next_char()
    scanner.next_char()
    assert scanner.position() == Position(2, 0)
    assert scanner.peek_position() == Position(2, 1)


def test_error_and_peek_error_use_positions():
    scanner = Scanner("xy")
    scanner.next_char()
    err = scanner.error(ErrorCode.EXPECTED_SOME_VALUE)
    peek_err = scanner.peek_error(ErrorCode.EXPECTED_SOME_VALUE)
    assert (err.line, err.column) == tuple(scanner.position())
    assert (peek_err.line, peek_err.column) == tuple(scanner.peek_position())
    assert err.is_syntax()


def test_parse_ident():
    scanner = Scanner("null")
    scanner.eat_char()
    scanner.parse_ident(b"ull")
    assert scanner.peek() is None


def test_parse_ident_errors():
    with pytest.raises(JsonError) as info:
        Scanner("nul").parse_ident(b"null")
    assert info.value.code is ErrorCode.EOF_WHILE_PARSING_VALUE
    with pytest.raises(JsonError) as info:
        Scanner("nope").parse_ident(b"null")
    assert info.value.code is ErrorCode.EXPECTED_SOME_IDENT


def _string_scanner(body):
    scanner = Scanner(body)
    assert scanner.next_char() == ord('"')
    return scanner


@pytest.mark.parametrize(
    "sample",
    ["", "hello", "a\nb\t\"q\"\\", "caf\u00e9", "\U0001f600 smile", "/\b\f\r"],
)
def test_string_round_trip(sample):
    encoded = json.dumps(sample)
    scanner = _string_scanner(encoded)
    assert scanner.parse_string() == sample
    assert scanner.byte_offset() == len(encoded.encode("utf-8"))


def test_string_unescaped_non_ascii():
    sample = "\u00e9\u4e2d"
    scanner = _string_scanner('"' + sample + '"')
    assert scanner.parse_string() == sample


def test_string_surrogate_pair_escape():
    scanner = _string_scanner('"\\ud83d\\ude00"')
    assert scanner.parse_string() == "\U0001f600"


@pytest.mark.parametrize(
    "body, code",
    [
        ('"abc', ErrorCode.EOF_WHILE_PARSING_STRING),
        ('"a\x01"', ErrorCode.CONTROL_CHARACTER_WHILE_PARSING_STRING),
        ('"\\x"', ErrorCode.INVALID_ESCAPE),
        ('"\\u12g4"', ErrorCode.INVALID_ESCAPE),
        ('"\\u12', ErrorCode.EOF_WHILE_PARSING_STRING),
        ('"\\udc00"', ErrorCode.LONE_LEADING_SURROGATE_IN_HEX_ESCAPE),
        ('"\\ud800\\u0041"', ErrorCode.LONE_LEADING_SURROGATE_IN_HEX_ESCAPE),
        ('"\\ud800x"', ErrorCode.UNEXPECTED_END_OF_HEX_ESCAPE),
        ('"\\ud800', ErrorCode.EOF_WHILE_PARSING_STRING),
    ],
)
def test_string_errors(body, code):
    scanner = _string_scanner(body)
    with pytest.raises(JsonError) as info:
        scanner.parse_string()
    assert info.value.code is code


def test_lone_surrogate_message_matches_documented_example():
    scanner = _string_scanner('"invalid unicode surrogate: \\uD801"')
    with pytest.raises(JsonError) as info:
        scanner.parse_string()
    assert str(info.value) == "unexpected end of hex escape at line 1 column 35"


def test_invalid_utf8_bytes_in_string():
    scanner = _string_scanner(b'"\xff\xfe"')
    with pytest.raises(JsonError) as info:
        scanner.parse_string()
    assert info.value.code is ErrorCode.INVALID_UNICODE_CODE_POINT