"""A state-machine tokenizer that splits HTML source into spanned tokens."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from functools import partial
from typing import Callable

from htmlkit.cursor import Cursor
from htmlkit.tokens import (
    CloseTag,
    Comment,
    DocType,
    OpenTag,
    Span,
    TagAttr,
    Text,
    Token,
    TokenStream,
)

_TAG_NAME_RE = re.compile(r"[a-z][a-z0-9.-]*(-[a-z0-9.-]+)?")
_TAG_ATTR_RE = re.compile(r"[a-zA-Z_:][a-zA-Z0-9:._-]*")

_RAW_TEXT_TAG_NAMES = frozenset({"script", "style"})

# Characters with the Unicode White_Space property.
_WHITESPACE = frozenset(
    " \t\n\x0b\x0c\r\x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def _is_whitespace(ch: str) -> bool:
    return ch in _WHITESPACE


class _State(Enum):
    AFTER_COMMENT = auto()
    AFTER_END_TAG_NAME = auto()
    AFTER_TAG_ATTR = auto()
    AFTER_TAG_VALUE = auto()
    BEFORE_TAG_ATTR = auto()
    BEFORE_TAG_VALUE = auto()
    COMMENT = auto()
    DOC_TYPE = auto()
    DOC_TYPE_OR_COMMENT = auto()
    END_TAG_OPEN = auto()
    SELF_CLOSING_TAG_SLASH = auto()
    TAG_ATTR = auto()
    TAG_NAME = auto()
    TAG_OPEN = auto()
    TAG_VALUE = auto()
    TEXT = auto()


class _GrowingSpan:
    """Records a first position, then keeps moving its end forward."""

    __slots__ = ("start", "end")

    def __init__(self) -> None:
        self.start: int | None = None
        self.end: int | None = None

    def set(self, value: int) -> None:
        if self.start is None:
            self.start = value
        else:
            self.end = value


@dataclass
class _AttrDraft:
    name: str
    value: str | None = None


class _AttrValueError(Exception):
    """Raised when an attribute value cannot be attached to the pending tag."""


class Tokenizer:
    """Splits HTML source into a :class:`TokenStream`.

    Malformed markup is never an error: whatever does not form a valid tag,
    comment or doctype is kept as text. Spans are inclusive UTF-8 byte
    offsets into the source, and consecutive tokens are contiguous.
    """

    def __init__(self, src: str) -> None:
        self._input = Cursor(src)
        self._state = _State.TEXT
        self._is_end_tag = False
        self._tag_name_span = _GrowingSpan()
        self._tag_attr_name_span = _GrowingSpan()
        self._tag_value_span = _GrowingSpan()
        self._comment_span = _GrowingSpan()
        self._text_pos = 0
        self._tokens = TokenStream()
        self._pending_name: str | None = None
        self._pending_attrs: list[_AttrDraft] = []
        self._tag_start_pos = 0
        self._raw_text_tag_name: str | None = None
        self._done = False
        self._handlers: dict[_State, Callable[[str], None]] = {
            _State.AFTER_COMMENT: self._after_comment,
            _State.AFTER_END_TAG_NAME: self._after_end_tag_name,
            _State.AFTER_TAG_ATTR: partial(self._inside_tag, accepts_value=True),
            _State.AFTER_TAG_VALUE: self._inside_tag,
            _State.BEFORE_TAG_ATTR: self._inside_tag,
            _State.BEFORE_TAG_VALUE: self._before_tag_value,
            _State.COMMENT: self._comment,
            _State.DOC_TYPE: self._doc_type,
            _State.DOC_TYPE_OR_COMMENT: self._doc_type_or_comment,
            _State.END_TAG_OPEN: self._end_tag_open,
            _State.SELF_CLOSING_TAG_SLASH: self._self_closing_tag_slash,
            _State.TAG_ATTR: self._tag_attr,
            _State.TAG_NAME: self._tag_name,
            _State.TAG_OPEN: self._tag_open,
            _State.TAG_VALUE: self._tag_value,
            _State.TEXT: self._text,
        }

    def tokenize(self) -> TokenStream:
        """Consume the whole input and return the tokens found in it."""
        if self._done:
            return self._tokens
        while (ch := self._input.peek()) is not None:
            self._handlers[self._state](ch)

        remaining = self._input.read(self._text_pos)
        if remaining:
            self._push(Text(remaining), self._next_start_pos(), self._input.pos - 1)
        self._done = True
        return self._tokens

    # -- state handlers -------------------------------------------------

    def _after_comment(self, ch: str) -> None:
        if ch == "<":
            self._prepare_for_tag_open()
        elif ch == ">":
            self._state = _State.TEXT
        self._input.advance()

    def _after_end_tag_name(self, ch: str) -> None:
        if ch == "<":
            self._prepare_for_tag_open()
        elif ch == ">":
            self._finalize_close_tag(self._read_span(self._tag_name_span))
        elif not _is_whitespace(ch):
            self._state = _State.TEXT
        self._input.advance()

    def _inside_tag(self, ch: str, accepts_value: bool = False) -> None:
        """Handle the space between a tag's name, attributes and values."""
        if ch == "<":
            self._prepare_for_tag_open()
        elif ch == ">":
            self._finalize_open_tag(False)
        elif accepts_value and ch == "=":
            self._state = _State.BEFORE_TAG_VALUE
        elif ch == "/":
            self._state = _State.SELF_CLOSING_TAG_SLASH
        elif not _is_whitespace(ch):
            self._tag_attr_name_span.set(self._input.pos)
            self._state = _State.TAG_ATTR
        self._input.advance()

    def _before_tag_value(self, ch: str) -> None:
        if ch == "<":
            self._prepare_for_tag_open()
        elif ch != '"' and not _is_whitespace(ch):
            self._tag_value_span.set(self._input.pos)
            self._state = _State.TAG_VALUE
        self._input.advance()

    def _comment(self, ch: str) -> None:
        if ch == "-":
            if not self._input.starts_with("-->"):
                self._state = _State.TEXT
            else:
                self._comment_span.set(self._input.pos)
                comment = self._read_span(self._comment_span)
                self._comment_span = _GrowingSpan()
                self._emit(Comment(comment), self._input.pos + 2)
                self._state = _State.AFTER_COMMENT
        self._input.advance()

    def _doc_type(self, ch: str) -> None:
        if ch == "<":
            self._prepare_for_tag_open()
        elif ch == ">":
            self._emit(DocType(), self._input.pos)
            self._state = _State.TEXT
        self._input.advance()

    def _doc_type_or_comment(self, ch: str) -> None:
        if ch == "<":
            self._prepare_for_tag_open()
            return
        if self._input.starts_with("-"):
            opener, next_state = "--", _State.COMMENT
        elif self._input.starts_with_ignore_case("DOCTYPE"):
            opener, next_state = "DOCTYPE", _State.DOC_TYPE
        else:
            opener, next_state = "", _State.TEXT
        if not self._input.starts_with_ignore_case(opener) or not opener:
            self._state = _State.TEXT
            self._input.advance()
            return
        for _ in opener:
            self._input.advance()
        self._state = next_state
        if next_state is _State.COMMENT:
            self._comment_span.set(self._input.pos)

    def _end_tag_open(self, ch: str) -> None:
        if ch == "<":
            self._prepare_for_tag_open()
        else:
            self._state = _State.TAG_NAME
            self._tag_name_span.set(self._input.pos)
        self._input.advance()

    def _self_closing_tag_slash(self, ch: str) -> None:
        if ch == "<":
            self._prepare_for_tag_open()
        elif ch == ">":
            self._finalize_open_tag(True)
        elif not _is_whitespace(ch):
            self._state = _State.TEXT
        self._input.advance()

    def _tag_attr(self, ch: str) -> None:
        if ch == "<":
            self._prepare_for_tag_open()
        elif ch == ">" or ch == "=" or _is_whitespace(ch):
            self._tag_attr_name_span.set(self._input.pos)
            attr_name = self._read_span(self._tag_attr_name_span)

            if not _TAG_ATTR_RE.fullmatch(attr_name):
                self._state = _State.TEXT
                self._input.advance()
                return

            self._pending_attrs.append(_AttrDraft(attr_name))
            self._tag_attr_name_span = _GrowingSpan()
            if ch == ">":
                self._finalize_open_tag(False)
            elif ch == "=":
                self._state = _State.BEFORE_TAG_VALUE
            else:
                self._state = _State.AFTER_TAG_ATTR
        else:
            self._tag_attr_name_span.set(self._input.pos)
        self._input.advance()

    def _tag_name(self, ch: str) -> None:
        if ch == "<":
            self._prepare_for_tag_open()
        elif ch == ">" or ch == "/" or _is_whitespace(ch):
            self._tag_name_span.set(self._input.pos)
            tag_name = self._read_span(self._tag_name_span)
            if not _TAG_NAME_RE.fullmatch(tag_name):
                # The terminating character is re-read as text.
                self._state = _State.TEXT
                return

            self._set_pending_name(tag_name)
            if ch == ">":
                if self._is_end_tag:
                    self._finalize_close_tag(tag_name)
                else:
                    self._finalize_open_tag(False)
            elif self._is_end_tag:
                self._state = _State.AFTER_END_TAG_NAME
            elif ch == "/":
                self._state = _State.SELF_CLOSING_TAG_SLASH
            else:
                self._state = _State.BEFORE_TAG_ATTR
        self._input.advance()

    def _tag_open(self, ch: str) -> None:
        raw = self._raw_text_tag_name
        if ch != "/" and raw is not None:
            self._state = _State.TEXT
        elif ch == "<":
            self._prepare_for_tag_open()
        elif ch == "!":
            self._state = _State.DOC_TYPE_OR_COMMENT
        elif ch == "/":
            if raw is not None and not self._input.remaining()[1:].startswith(raw):
                self._state = _State.TEXT
            else:
                self._state = _State.END_TAG_OPEN
                self._is_end_tag = True
                self._tag_name_span.set(self._input.pos + 1)
        else:
            self._state = _State.TAG_NAME
            self._is_end_tag = False
            self._tag_name_span.set(self._input.pos)
        self._input.advance()

    def _tag_value(self, ch: str) -> None:
        if ch == "<":
            self._prepare_for_tag_open()
        elif ch == '"':
            self._tag_value_span.set(self._input.pos)
            value = self._read_span(self._tag_value_span)
            self._tag_value_span = _GrowingSpan()
            try:
                self._set_attr_value(value)
            except _AttrValueError:
                self._state = _State.TEXT
                self._input.advance()
            else:
                self._state = _State.AFTER_TAG_VALUE
        else:
            self._tag_value_span.set(self._input.pos)
        self._input.advance()

    def _text(self, ch: str) -> None:
        if ch == "<":
            self._prepare_for_tag_open()
        self._input.advance()

    # -- pending tag ----------------------------------------------------

    def _set_pending_name(self, name: str) -> None:
        if self._pending_name is not None:
            raise RuntimeError("tag name is already set")
        self._pending_name = name

    def _set_attr_value(self, value: str) -> None:
        if not self._pending_attrs:
            raise _AttrValueError("tag attribute is not yet set")
        attr = self._pending_attrs[-1]
        if attr.value is not None:
            raise _AttrValueError(
                f"the value for the tag attribute `{attr.name}` is already set"
            )
        attr.value = value

    def _build_open_tag(self, self_closing: bool) -> OpenTag:
        if self._pending_name is None:
            raise RuntimeError("tag name is not set")
        tag = OpenTag(
            self._pending_name,
            tuple(TagAttr(a.name, a.value) for a in self._pending_attrs),
            self_closing,
        )
        self._pending_name = None
        self._pending_attrs = []
        return tag

    # -- token emission -------------------------------------------------

    def _emit(self, token: Token, end: int) -> None:
        """Flush pending text, then push ``token`` ending at byte ``end``."""
        self._finalize_text_if_exist(self._tag_start_pos)
        self._text_pos = end + 1
        self._push(token, self._next_start_pos(), end)

    def _finalize_open_tag(self, self_closing: bool) -> None:
        tag = self._build_open_tag(self_closing)
        self._emit(tag, self._input.pos)
        if tag.name in _RAW_TEXT_TAG_NAMES:
            self._raw_text_tag_name = tag.name
        self._tag_name_span = _GrowingSpan()
        self._state = _State.TEXT

    def _finalize_close_tag(self, tag_name: str) -> None:
        self._emit(CloseTag(tag_name), self._input.pos)
        self._tag_name_span = _GrowingSpan()
        self._raw_text_tag_name = None
        self._state = _State.TEXT

    def _finalize_text_if_exist(self, end_pos: int) -> None:
        text = self._input.read(self._text_pos, end_pos)
        if text:
            self._push(Text(text), self._next_start_pos(), end_pos - 1)

    def _push(self, token: Token, start: int, end: int) -> None:
        self._tokens.append(token, Span(start, end))

    def _next_start_pos(self) -> int:
        if len(self._tokens):
            return self._tokens[-1].span.end + 1
        return 0

    def _prepare_for_tag_open(self) -> None:
        self._tag_start_pos = self._input.pos
        self._state = _State.TAG_OPEN
        self._tag_name_span = _GrowingSpan()
        self._pending_name = None
        self._pending_attrs = []

    def _read_span(self, span: _GrowingSpan) -> str:
        if span.start is None or span.end is None:
            raise RuntimeError("span is incomplete")
        return self._input.read(span.start, span.end)


def tokenize(src: str) -> TokenStream:
    """Tokenize ``src`` and return the resulting token stream."""
    return Tokenizer(src).tokenize()