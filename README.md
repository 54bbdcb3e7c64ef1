# htmlkit

htmlkit is a small HTML tokenizer that forgives mistakes. It turns a string of
HTML into a flat stream of tokens. Every token records its position in the
input as an inclusive byte span. The span counts bytes in the UTF-8 encoding of
the input.

Malformed markup never raises an error. A bad tag such as `< tag>` or `<3a>`
stays in the output as plain text. After a `<script>` or `<style>` open tag,
everything is raw text until a close tag that starts with the same name.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Usage

```python
from htmlkit.tokenizer import tokenize

stream = tokenize('before<a href="x">link</a>')
for item in stream:
    print(item)
```

This prints:

```
Text(before) (span=(0, 5))
OpenTag(name=a, attrs=attr(name=href, value="x"), self_closing=false) (span=(6, 17))
Text(link) (span=(18, 21))
CloseTag(name=a) (span=(22, 25))
```

You can also use the `Tokenizer` class directly. Calling `tokenize()` a second
time returns the same stream.

```python
from htmlkit.tokenizer import Tokenizer

stream = Tokenizer('<img src="a.png" />').tokenize()
tag = stream[0].value
assert tag.name == "img" and tag.self_closing
```

## Tokens and spans (`htmlkit.tokens`)

Each item in the stream is a `WithSpan`. It holds the token in `value` and its
position in `span`. A `Span` has `start` and `end`, and both are inclusive byte
offsets. `Span.as_range()` returns `range(start, end)`. Spans follow one another
with no gap, so together they cover the whole input.

| Token      | Fields                                                              |
|------------|---------------------------------------------------------------------|
| `OpenTag`  | `name`, `attrs` (a tuple of `TagAttr`), `self_closing`              |
| `CloseTag` | `name` of a closing tag such as `</div>`                            |
| `Text`     | `text`: raw character data between tags                             |
| `Comment`  | `text`: the body of `<!-- ... -->`                                  |
| `DocType`  | a `<!DOCTYPE ...>` declaration; the keyword matches in any case     |

A `TagAttr` has a `name` and a `value`. The value is `None` when the attribute
has no value. Attribute values must be in double quotes.

A `TokenStream` supports `len()`, indexing, slicing and iteration. It compares
equal to another stream, or to a list of `WithSpan` items, when the items are
the same. `str()` on a stream prints one token per line. You can add a token to
a stream with `append(value, span)`.

## Cursor (`htmlkit.cursor`)

`Cursor` moves forward through a string one character at a time and reports its
position as a UTF-8 byte offset (`pos`). It provides `peek()`, `advance()`,
`remaining()`, `starts_with()`, `starts_with_ignore_case()` (ASCII letters only)
and `read(start, end)`. `read` returns the text between two byte offsets, and
raises `ValueError` if an offset is out of range or falls inside a character.

## What it does not do

htmlkit only tokenizes. It does not build a document tree or check that tags
nest correctly. It does not decode character entities and has no selector or
query interface. It accepts only double-quoted attribute values.