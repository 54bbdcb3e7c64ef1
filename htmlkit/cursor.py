"""A forward-only cursor over source text that tracks UTF-8 byte offsets."""

from __future__ import annotations


def _ascii_lower(ch: str) -> str:
    if "A" <= ch <= "Z":
        return chr(ord(ch) + 32)
    return ch


class Cursor:
    """Walks a string one character at a time, reporting byte positions.

    Positions are offsets into the UTF-8 encoding of the source, so a
    character outside ASCII moves the position by more than one.
    """

    def __init__(self, src: str) -> None:
        self._src = src
        self._data = src.encode("utf-8")
        self._index = 0
        self._pos = 0

    @property
    def source(self) -> str:
        """The text the cursor walks over."""
        return self._src

    @property
    def pos(self) -> int:
        """The current byte offset into the source."""
        return self._pos

    def __len__(self) -> int:
        return len(self._data)

    def advance(self) -> bool:
        """Move past the current character; return False at the end of input."""
        if self._index >= len(self._src):
            return False
        ch = self._src[self._index]
        self._index += 1
        self._pos += len(ch.encode("utf-8"))
        return True

    def peek(self) -> str | None:
        """Return the current character without consuming it, or None at the end."""
        if self._index >= len(self._src):
            return None
        return self._src[self._index]

    def remaining(self) -> str:
        """Return the text from the current position to the end."""
        return self._src[self._index :]

    def starts_with(self, prefix: str) -> bool:
        """Return True if the remaining text begins with ``prefix``."""
        return self._src.startswith(prefix, self._index)

    def starts_with_ignore_case(self, prefix: str) -> bool:
        """Like :meth:`starts_with`, ignoring ASCII letter case."""
        candidate = self._src[self._index : self._index + len(prefix)]
        if len(candidate) < len(prefix):
            return False
        return all(
            _ascii_lower(a) == _ascii_lower(b) for a, b in zip(prefix, candidate)
        )

    def read(self, start: int | None = None, end: int | None = None) -> str:
        """Return the source text between byte offsets ``start`` and ``end``.

        ``start`` defaults to the beginning and ``end`` to the end of the
        source. Offsets that fall inside a multi-byte character, or that
        lie outside the source, raise ``ValueError``.
        """
        size = len(self._data)
        lo = 0 if start is None else start
        hi = size if end is None else end
        if lo < 0 or hi > size or lo > hi:
            raise ValueError(f"byte range {lo}..{hi} is out of bounds for length {size}")
        try:
            return self._data[lo:hi].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(
                f"byte range {lo}..{hi} does not lie on character boundaries"
            ) from exc