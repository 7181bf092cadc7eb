import errno

import pytest

from strictjson.errors import (
    Category,
    ErrorCode,
    JsonError,
    custom,
    invalid_type,
    io_error,
    syntax_error,
)


def test_syntax_error_display_includes_position():
    err = syntax_error(ErrorCode.KEY_MUST_BE_A_STRING, 1, 2)
    assert str(err) == "key must be a string at line 1 column 2"
    assert (err.line, err.column) == (1, 2)


def test_repr_carries_message_and_position():
    err = syntax_error(ErrorCode.KEY_MUST_BE_A_STRING, 1, 2)
    assert "key must be a string" in repr(err)
    assert "line=1" in repr(err) and "column=2" in repr(err)


def test_unknown_position_display_is_bare_message():
    err = JsonError(ErrorCode.TRAILING_COMMA)
    assert str(err) == "trailing comma"


@pytest.mark.parametrize(
    "code",
    [
        ErrorCode.EOF_WHILE_PARSING_LIST,
        ErrorCode.EOF_WHILE_PARSING_OBJECT,
        ErrorCode.EOF_WHILE_PARSING_STRING,
        ErrorCode.EOF_WHILE_PARSING_VALUE,
    ],
)
def test_eof_codes_classify_as_eof(code):
    err = syntax_error(code, 1, 1)
    assert err.classify() is Category.EOF
    assert err.is_eof()
    assert not err.is_syntax()


@pytest.mark.parametrize(
    "code",
    [
        ErrorCode.EXPECTED_COLON,
        ErrorCode.INVALID_NUMBER,
        ErrorCode.NUMBER_OUT_OF_RANGE,
        ErrorCode.TRAILING_CHARACTERS,
        ErrorCode.RECURSION_LIMIT_EXCEEDED,
        ErrorCode.CONTROL_CHARACTER_WHILE_PARSING_STRING,
    ],
)
def test_syntax_codes_classify_as_syntax(code):
    err = syntax_error(code, 3, 4)
    assert err.classify() is Category.SYNTAX
    assert err.is_syntax()
    assert not err.is_data()


def test_custom_is_data_error():
    err = custom("something went wrong")
    assert err.is_data()
    assert str(err) == "something went wrong"
    assert (err.line, err.column) == (0, 0)


def test_custom_parses_position_suffix():
    err = custom("bad field at line 3 column 7")
    assert err.message == "bad field"
    assert (err.line, err.column) == (3, 7)
    assert str(err) == "bad field at line 3 column 7"


@pytest.mark.parametrize(
    "text",
    [
        "bad at line 3 column 7 extra",
        "bad at line x column 7",
        "bad at line 3 col 7",
        "bad at line  column 7",
        "bad at line 3 column ",
    ],
)
def test_custom_keeps_malformed_suffix(text):
    err = custom(text)
    assert err.message == text
    assert err.line == 0


def test_invalid_type_null():
    err = invalid_type(None, "a string")
    assert err.message == "invalid type: null, expected a string"
    assert err.is_data()


def test_invalid_type_other():
    err = invalid_type("boolean `true`", "a string")
    assert err.message.startswith("invalid type: boolean `true`, expected")


def test_io_error_wraps_cause():
    cause = OSError(errno.EIO, "disk gone")
    err = io_error(cause)
    assert err.is_io()
    assert err.cause is cause
    assert err.__cause__ is cause
    assert str(err) == str(cause)
    assert err.to_io_error() is cause


def test_to_io_error_for_eof():
    err = syntax_error(ErrorCode.EOF_WHILE_PARSING_VALUE, 1, 1)
    converted = err.to_io_error()
    assert isinstance(converted, EOFError)
    assert converted.__cause__ is err


def test_to_io_error_for_syntax_and_data():
    for err in (syntax_error(ErrorCode.INVALID_NUMBER, 1, 1), custom("oops")):
        converted = err.to_io_error()
        assert isinstance(converted, OSError)
        assert converted.errno == errno.EINVAL
        assert converted.__cause__ is err


def test_fix_position_fills_unknown_position():
    err = custom("oops")
    fixed = err.fix_position(lambda code: syntax_error(code, 5, 9))
    assert (fixed.line, fixed.column) == (5, 9)
    assert fixed.message == "oops"
    assert fixed.code is ErrorCode.MESSAGE


def test_fix_position_keeps_known_position():
    err = syntax_error(ErrorCode.EXPECTED_COLON, 2, 3)
    fixed = err.fix_position(lambda code: syntax_error(code, 5, 9))
    assert fixed is err


def test_fix_position_receives_code():
    seen = []
    err = JsonError(ErrorCode.TRAILING_COMMA)

    def make(code):
        seen.append(code)
        return syntax_error(code, 1, 1)

    fixed = err.fix_position(make)
    assert seen == [ErrorCode.TRAILING_COMMA]
    assert fixed.code is ErrorCode.TRAILING_COMMA
    assert (fixed.line, fixed.column) == (1, 1)
    assert str(fixed) == "trailing comma at line 1 column 1"


def test_json_error_is_raisable():
    err = syntax_error(ErrorCode.EXPECTED_SOME_VALUE, 1, 1)
    assert err.code is ErrorCode.EXPECTED_SOME_VALUE
    assert str(err) == "expected value at line 1 column 1"
    with pytest.raises(JsonError) as info:
        raise err
    assert info.value is err