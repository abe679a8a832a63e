"""
Tokenizer for the news index.
Splits a raw field value into a TokenStream on a delimiter pattern.
No normalization happens here; that is the job of the per-field analyzers.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

# One or more whitespace characters
DEFAULT_DELIMITER = r"\s+"


class TokenizationError(ValueError):
    """Raised when a value cannot be tokenized (None or empty)."""


@dataclass(frozen=True, order=True)
class Token:
    """A single normalized string fragment. Compares by its text."""

    text: str

    def __str__(self) -> str:
        return self.text


class TokenStream:
    """
    Ordered, finite, rewindable sequence of tokens.

    Reading is cursor based (has_next / next / reset) so analyzers can walk
    the stream step by step; iteration and indexing ignore the cursor.
    """

    def __init__(self, tokens: Iterable[Token] | None = None) -> None:
        self._tokens: list[Token] = list(tokens or [])
        self._pos = 0
        self._current: int | None = None

    def has_next(self) -> bool:
        return self._pos < len(self._tokens)

    def next(self) -> Token | None:
        """Return the token under the cursor and advance, or None at the end."""
        if not self.has_next():
            self._current = None
            return None
        self._current = self._pos
        self._pos += 1
        return self._tokens[self._current]

    def get_current(self) -> Token | None:
        if self._current is None:
            return None
        return self._tokens[self._current]

    def remove(self) -> None:
        """Remove the token last returned by next()."""
        if self._current is None:
            return
        del self._tokens[self._current]
        self._pos = self._current
        self._current = None

    def reset(self) -> None:
        self._pos = 0
        self._current = None

    def append(self, other: "TokenStream | None") -> None:
        """Append all tokens of another stream; the cursor is left where it is."""
        if other is not None:
            self._tokens.extend(other._tokens)

    def size(self) -> int:
        return len(self._tokens)

    def texts(self) -> list[str]:
        return [t.text for t in self._tokens]

    def __len__(self) -> int:
        return len(self._tokens)

    def __getitem__(self, i: int) -> Token:
        return self._tokens[i]

    def __iter__(self) -> Iterator[Token]:
        return iter(list(self._tokens))

    def __repr__(self) -> str:
        return f"TokenStream({self.texts()!r})"


class Tokenizer:
    """
    Splits text on every maximal match of the delimiter pattern.
    The default delimiter is a run of whitespace, so "hello world" gives two
    tokens while the same text with "~" as delimiter gives one.
    """

    def __init__(self, delimiter: str = DEFAULT_DELIMITER) -> None:
        self.delimiter = delimiter
        self._pattern = re.compile(delimiter)

    def tokenize(self, text: str | None) -> TokenStream:
        """Break text into tokens. Raises TokenizationError on None or empty text."""
        if not text:
            raise TokenizationError("String is None or empty")
        parts: list[str] = []
        prev = 0
        for m in self._pattern.finditer(text):
            # a zero-width match at the start does not open an empty segment
            if m.end() == 0:
                continue
            parts.append(text[prev : m.start()])
            prev = m.end()
        parts.append(text[prev:])
        # trailing empty segments are not tokens
        while parts and not parts[-1]:
            parts.pop()
        return TokenStream(Token(part) for part in parts)


def tokenize(text: str | None, delimiter: str = DEFAULT_DELIMITER) -> TokenStream:
    """Tokenize text with a one-off tokenizer for the given delimiter."""
    return Tokenizer(delimiter).tokenize(text)
