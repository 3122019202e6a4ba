"""
Alphabet
=========

Bijection between an ordered set of distinct characters and the dense
integer indices ``0..size-1`` that the rest of the machine works in.
"""

from __future__ import annotations

from typing import Iterator

from enigma.core.errors import (
    IndexOutOfRangeError,
    InvalidAlphabetError,
    UnknownCharacterError,
)

UPPERCASE: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class Alphabet:
    """An immutable, ordered collection of distinct characters.

    Usage::

        alpha = Alphabet("ABCD")
        alpha.to_index("C")   # 2
        alpha.to_char(0)      # 'A'

    Args:
        chars: The characters in index order. Defaults to ``A-Z``.

    Raises:
        InvalidAlphabetError: If *chars* is empty or repeats a character.
    """

    __slots__ = ("_chars", "_index")

    def __init__(self, chars: str = UPPERCASE) -> None:
        if not chars:
            raise InvalidAlphabetError("Alphabet must contain at least one character")

        index: dict[str, int] = {}
        for position, ch in enumerate(chars):
            if ch in index:
                raise InvalidAlphabetError(
                    f"Character {ch!r} appears more than once in alphabet"
                )
            index[ch] = position

        self._chars = chars
        self._index = index

    @property
    def chars(self) -> str:
        return self._chars

    def size(self) -> int:
        """Number of characters in the alphabet."""
        return len(self._chars)

    def contains(self, ch: str) -> bool:
        return ch in self._index

    def to_index(self, ch: str) -> int:
        """Return the index of *ch*.

        Raises:
            UnknownCharacterError: If *ch* is not in the alphabet.
        """
        try:
            return self._index[ch]
        except KeyError:
            raise UnknownCharacterError(
                f"Character {ch!r} is not in alphabet {self._chars!r}"
            ) from None

    def to_char(self, index: int) -> str:
        """Return the character at *index*.

        Raises:
            IndexOutOfRangeError: If *index* is outside ``0..size-1``.
        """
        if not 0 <= index < len(self._chars):
            raise IndexOutOfRangeError(
                f"Index {index} out of range 0-{len(self._chars) - 1}"
            )
        return self._chars[index]

    # ------------------------------------------------------------------ #
    #  Container protocol
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return len(self._chars)

    def __contains__(self, ch: object) -> bool:
        return ch in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._chars)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._chars == other._chars

    def __hash__(self) -> int:
        return hash(self._chars)

    def __repr__(self) -> str:
        return f"Alphabet({self._chars!r})"
