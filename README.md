# strictjson

A strict JSON reader. It accepts the JSON grammar and nothing beyond it. Trailing commas,
leading zeros and non-string keys are all rejected. When input is rejected, the error
gives the line and column where the problem was found.

## Installing

```
pip install strictjson
```

## Reading a document

```python
from strictjson.deserializer import from_str, from_bytes, from_reader

from_str('{"a": [1, 2.5, null, true]}')
# {'a': [1, 2.5, None, True]}

with open("data.json", "rb") as fh:
    value = from_reader(fh)
```

Values map to Python types as follows:

| JSON    | Python  |
|---------|---------|
| object  | `dict`  |
| array   | `list`  |
| string  | `str`   |
| number  | `int` or `float` |
| boolean | `bool`  |
| null    | `None`  |

Integers that fit in 64 bits become `int`. Every other number becomes a `float`. A number
too large for a float raises "number out of range".

The whole input must be a single value, optionally surrounded by whitespace. Anything
left over raises "trailing characters".

`from_reader` calls the object's `read()` method, which may return text or bytes. An
`OSError` raised by the reader is re-raised as an I/O `JsonError`.

To parse text that holds exactly one number, use `strictjson.scanner.parse_number`:

```python
from strictjson.scanner import parse_number

parse_number("-12")    # -12
parse_number("1.5e3")  # 1500.0
```

## Errors

Every failure raises `strictjson.errors.JsonError`.

- `line` and `column` are one-based positions in bytes. A line of 0 means the position is unknown.
- `code` is an `ErrorCode`.
- `classify()` returns a `Category`: `IO`, `SYNTAX`, `DATA` or `EOF`.
- `is_io()`, `is_syntax()`, `is_data()` and `is_eof()` test for each category.

```python
from strictjson.deserializer import from_str
from strictjson.errors import JsonError

try:
    from_str("{0}")
except JsonError as err:
    print(err)              # key must be a string at line 1 column 2
    print(err.is_syntax())  # True
```

An EOF error means the input ended too early. A caller reading streamed input can wait
for more data and try again.

`to_io_error()` converts an error into a standard exception:

- An I/O error gives back the exception that caused it.
- An EOF error becomes an `EOFError`.
- Any other error becomes an `OSError` with `EINVAL`.

## Nesting limit

A `Deserializer` rejects arrays and objects nested more than 127 levels deep, with
"recursion limit exceeded". You can lift the limit for trusted input. Deep nesting is then
bounded only by Python's own recursion limit.

```python
from strictjson.deserializer import Deserializer

de = Deserializer(text)
de.disable_recursion_limit()
value = de.parse_value()
de.end()
```

## Typed reads

A `Deserializer` can read a value of one specific kind:

- `parse_bool`
- `parse_number`
- `parse_str`
- `parse_bytes`: accepts a string, returned as its raw bytes after escapes are processed, or an array of integers from 0 to 255.
- `parse_option`: reads `null` as `None`, and any other value normally.
- `parse_unit`: reads `null`.
- `parse_seq`
- `parse_map`

If the input holds a value of a different kind, these methods raise an "invalid type"
data error. `skip_value` checks the syntax of one value and discards it. It does not
recurse, so it can skip input of any depth.

## Streams of values

`strictjson.stream.iter_values` reads values that follow one another in one document:

```python
from strictjson.stream import iter_values

list(iter_values('{"k": 3}1"cool""stuff" 3{}  [0, 1, 2]'))
# [{'k': 3}, 1, 'cool', 'stuff', 3, {}, [0, 1, 2]]
```

Arrays, objects and strings end themselves. Any other value must be followed by
whitespace, by the start of another value, or by the end of the input. If a value cannot
be parsed, the error is raised and the iterator is then exhausted.

`StreamDeserializer.byte_offset()` gives the number of bytes consumed by the values read
so far. If the input ends partway through a value, join the bytes from that offset with
new data and read them again.

## Position tracking

`strictjson.position.LineColIterator` wraps any iterable of bytes. As it iterates, it
keeps the current `line`, the current `col` and `byte_offset()` up to date.

## What it does not do

strictjson only reads JSON. It does not write or pretty-print JSON. It does not map
documents onto your own classes. Values come back as plain Python types only.