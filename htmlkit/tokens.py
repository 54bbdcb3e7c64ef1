"""Token types produced by the HTML tokenizer, with their source spans."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Iterator, TypeVar, Union, overload

T = TypeVar("T")


@dataclass(frozen=True)
class Span:
    """Inclusive byte positions of a token within the input text."""

    start: int
    end: int

    def as_range(self) -> range:
        """Return the span as a half-open range from start to end."""
        return range(self.start, self.end)


@dataclass(frozen=True)
class WithSpan(Generic[T]):
    """A value annotated with its position in the input."""

    value: T
    span: Span

    def __str__(self) -> str:
        return f"{self.value} (span=({self.span.start}, {self.span.end}))"


@dataclass(frozen=True)
class TagAttr:
    """A tag attribute with an optional value."""

    name: str
    value: str | None = None

    def __str__(self) -> str:
        if self.value is not None:
            return f'attr(name={self.name}, value="{self.value}")'
        return f"attr(name={self.name})"


@dataclass(frozen=True)
class OpenTag:
    """An opening tag with its name, attributes and self-closing flag."""

    name: str
    attrs: tuple[TagAttr, ...] = field(default_factory=tuple)
    self_closing: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.attrs, tuple):
            object.__setattr__(self, "attrs", tuple(self.attrs))

    def __str__(self) -> str:
        attrs = ", ".join(str(attr) for attr in self.attrs)
        return (
            f"OpenTag(name={self.name}, attrs={attrs}, "
            f"self_closing={str(self.self_closing).lower()})"
        )


@dataclass(frozen=True)
class _Content:
    """A run of source text carried by a token."""

    text: str

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.text})"


class Comment(_Content):
    """The body of a comment section."""


class Text(_Content):
    """Raw text content between tags."""


@dataclass(frozen=True)
class CloseTag:
    """A closing tag such as ``</div>``."""

    name: str

    def __str__(self) -> str:
        return f"CloseTag(name={self.name})"


@dataclass(frozen=True)
class DocType:
    """A document type declaration."""

    def __str__(self) -> str:
        return "DocType"


Token = Union[OpenTag, Comment, Text, CloseTag, DocType]


class TokenStream:
    """An ordered sequence of tokens, each paired with its span."""

    def __init__(self, items: list[WithSpan[Token]] | None = None) -> None:
        self._items: list[WithSpan[Token]] = list(items) if items else []

    def append(self, value: Token, span: Span | tuple[int, int]) -> None:
        """Add a token at the end of the stream."""
        if not isinstance(span, Span):
            start, end = span
            span = Span(start, end)
        self._items.append(WithSpan(value, span))

    def __len__(self) -> int:
        return len(self._items)

    @overload
    def __getitem__(self, index: int) -> WithSpan[Token]: ...

    @overload
    def __getitem__(self, index: slice) -> list[WithSpan[Token]]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __iter__(self) -> Iterator[WithSpan[Token]]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TokenStream):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TokenStream({self._items!r})"

    def __str__(self) -> str:
        body = ",\n".join(f"    <{item}>" for item in self._items)
        return f"[\n{body}\n]"