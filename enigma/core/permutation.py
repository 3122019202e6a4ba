"""
Permutation
============

Substitution over alphabet indices, described in cycle notation.

A cycle-notation string such as ``"(AELTPHQXRU) (BKNW) (CMOY) (S)"``
lists disjoint cycles; each group ``(c0 c1 ... ck-1)`` maps
``c0 -> c1 -> ... -> ck-1 -> c0``. Characters that appear in no cycle map
to themselves. Whitespace is insignificant.

The cycles are walked once at construction to fill a forward table and
its inverse, so every later lookup is a single list index.

References:
    - Knuth, D. E. (1997). The Art of Computer Programming, Vol. 1,
      Section 1.3.3: Applications to Permutations. Addison-Wesley.
"""

from __future__ import annotations

from enigma.core.alphabet import Alphabet
from enigma.core.errors import MalformedCycleSpecError


def _parse_cycles(cycles: str, alphabet: Alphabet) -> list[list[int]]:
    """Split a cycle-notation string into lists of alphabet indices.

    Raises:
        MalformedCycleSpecError: On unbalanced or nested parentheses, an
            empty group, a character outside any group or outside the
            alphabet, or a character used twice.
    """
    groups: list[list[int]] = []
    seen: set[str] = set()
    current: list[int] | None = None

    for ch in cycles:
        if ch.isspace():
            continue
        if ch == "(":
            if current is not None:
                raise MalformedCycleSpecError(f"Nested '(' in cycles {cycles!r}")
            current = []
        elif ch == ")":
            if current is None:
                raise MalformedCycleSpecError(f"Unmatched ')' in cycles {cycles!r}")
            if not current:
                raise MalformedCycleSpecError(f"Empty cycle in {cycles!r}")
            groups.append(current)
            current = None
        else:
            if current is None:
                raise MalformedCycleSpecError(
                    f"Character {ch!r} outside parentheses in {cycles!r}"
                )
            if ch not in alphabet:
                raise MalformedCycleSpecError(
                    f"Character {ch!r} in cycles is not in alphabet {alphabet.chars!r}"
                )
            if ch in seen:
                raise MalformedCycleSpecError(
                    f"Character {ch!r} appears in more than one position of {cycles!r}"
                )
            seen.add(ch)
            current.append(alphabet.to_index(ch))

    if current is not None:
        raise MalformedCycleSpecError(f"Unclosed '(' in cycles {cycles!r}")
    return groups


class Permutation:
    """A bijection over the indices of an :class:`Alphabet`.

    Usage::

        perm = Permutation("(ABC) (DE)", Alphabet("ABCDEF"))
        perm.permute(0)         # 1
        perm.invert_char("A")   # 'C'
        perm.derangement()      # False -- F maps to itself

    Args:
        cycles:   Cycle-notation string. An empty string is the identity.
        alphabet: Alphabet the cycles are written in.

    Raises:
        MalformedCycleSpecError: If *cycles* cannot be parsed.
    """

    __slots__ = ("_alphabet", "_cycles", "_forward", "_backward")

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        size = alphabet.size()
        forward = list(range(size))
        backward = list(range(size))

        for group in _parse_cycles(cycles, alphabet):
            for position, source in enumerate(group):
                target = group[(position + 1) % len(group)]
                forward[source] = target
                backward[target] = source

        self._alphabet = alphabet
        self._cycles = cycles
        self._forward = forward
        self._backward = backward

    @classmethod
    def identity(cls, alphabet: Alphabet) -> Permutation:
        """The permutation that maps every character to itself."""
        return cls("", alphabet)

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def cycles(self) -> str:
        """The cycle-notation string this permutation was built from."""
        return self._cycles

    def size(self) -> int:
        return self._alphabet.size()

    # ------------------------------------------------------------------ #
    #  Mapping
    # ------------------------------------------------------------------ #

    def wrap(self, p: int) -> int:
        """Return *p* modulo the alphabet size, always in ``[0, size)``."""
        return p % len(self._forward)

    def permute(self, p: int) -> int:
        """Apply the permutation to index *p* (reduced modulo size first)."""
        return self._forward[self.wrap(p)]

    def invert(self, c: int) -> int:
        """Apply the inverse permutation to index *c* (reduced modulo size)."""
        return self._backward[self.wrap(c)]

    def permute_char(self, ch: str) -> str:
        alphabet = self._alphabet
        return alphabet.to_char(self._forward[alphabet.to_index(ch)])

    def invert_char(self, ch: str) -> str:
        alphabet = self._alphabet
        return alphabet.to_char(self._backward[alphabet.to_index(ch)])

    def derangement(self) -> bool:
        """True iff no index maps to itself."""
        return all(target != source for source, target in enumerate(self._forward))

    def __repr__(self) -> str:
        return f"Permutation({self._cycles!r}, {self._alphabet!r})"
