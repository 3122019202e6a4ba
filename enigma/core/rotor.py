"""
Rotor
======

A substitution unit with a fixed wiring and a rotational setting.

One concrete :class:`Rotor` covers every variant; its
:class:`~enigma.core.models.RotorKind` decides which capabilities apply:

    ==========  =======  =======  ========
    kind        rotates  notches  reflects
    ==========  =======  =======  ========
    REFLECTOR   no       no       yes
    FIXED       no       no       no
    MOVING      yes      yes      no
    ==========  =======  =======  ========

A signal entering a rotor is shifted by the rotor's offset
(``setting - ring``), passed through the wiring, and shifted back.

References:
    - Rejewski, M. (1981). How Polish Mathematicians Deciphered the
      Enigma. Annals of the History of Computing, 3(3), 213-234.
"""

from __future__ import annotations

from typing import Union

from enigma.core.alphabet import Alphabet
from enigma.core.errors import (
    IndexOutOfRangeError,
    UnsupportedRotorOperationError,
)
from enigma.core.models import RotorKind, RotorSpec
from enigma.core.permutation import Permutation

Position = Union[int, str]


class Rotor:
    """A rotor of a given kind wrapping a wiring :class:`Permutation`.

    Usage::

        alpha = Alphabet()
        rotor = Rotor("I", RotorKind.MOVING,
                      Permutation("(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)", alpha),
                      notches="Q")
        rotor.set("Q")
        rotor.at_notch()    # True
        rotor.advance()     # setting is now R

    Args:
        name:        Catalog name of the rotor.
        kind:        Capability set.
        permutation: Wiring at setting 0.
        notches:     Notch characters; kept only for moving rotors.

    Raises:
        UnknownCharacterError: If a notch of a moving rotor is not in the
            wiring's alphabet.
    """

    __slots__ = ("_name", "_kind", "_permutation", "_notches", "_setting", "_ring")

    def __init__(
        self,
        name: str,
        kind: RotorKind,
        permutation: Permutation,
        notches: str = "",
    ) -> None:
        kind = RotorKind(kind)
        if kind is RotorKind.MOVING:
            for ch in notches:
                permutation.alphabet.to_index(ch)
            notch_set = frozenset(notches)
        else:
            notch_set = frozenset()

        self._name = name
        self._kind = kind
        self._permutation = permutation
        self._notches = notch_set
        self._setting = 0
        self._ring = 0

    @classmethod
    def from_spec(cls, spec: RotorSpec, alphabet: Alphabet) -> Rotor:
        """Build a rotor from a catalog entry."""
        return cls(
            spec.name,
            spec.kind,
            Permutation(spec.wiring, alphabet),
            spec.notches,
        )

    def copy(self) -> Rotor:
        """Return a rotor with the same wiring and notches at setting 0.

        The wiring permutation is immutable and therefore shared.
        """
        clone = Rotor.__new__(Rotor)
        clone._name = self._name
        clone._kind = self._kind
        clone._permutation = self._permutation
        clone._notches = self._notches
        clone._setting = 0
        clone._ring = 0
        return clone

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> RotorKind:
        return self._kind

    @property
    def permutation(self) -> Permutation:
        return self._permutation

    @property
    def alphabet(self) -> Alphabet:
        return self._permutation.alphabet

    @property
    def notches(self) -> frozenset[str]:
        return self._notches

    @property
    def setting(self) -> int:
        """Current rotational setting as an alphabet index."""
        return self._setting

    @property
    def ring(self) -> int:
        """Ring setting as an alphabet index (0 = default)."""
        return self._ring

    def size(self) -> int:
        return self._permutation.size()

    # ------------------------------------------------------------------ #
    #  Capabilities
    # ------------------------------------------------------------------ #

    def rotates(self) -> bool:
        return self._kind is RotorKind.MOVING

    def reflecting(self) -> bool:
        return self._kind is RotorKind.REFLECTOR

    def at_notch(self) -> bool:
        """True iff the character under the current setting is a notch."""
        if self._kind is not RotorKind.MOVING or not self._notches:
            return False
        return self.alphabet.to_char(self._setting) in self._notches

    def advance(self) -> None:
        """Step a moving rotor by one position; other kinds stay put."""
        if self._kind is RotorKind.MOVING:
            self._setting = self._permutation.wrap(self._setting + 1)

    # ------------------------------------------------------------------ #
    #  Settings
    # ------------------------------------------------------------------ #

    def set(self, position: Position) -> None:
        """Set the rotational setting from a character or an index.

        Raises:
            UnknownCharacterError: If a character is not in the alphabet.
            IndexOutOfRangeError: If an index is outside ``0..size-1``.
            UnsupportedRotorOperationError: If a reflector is set to
                anything but 0.
        """
        index = self._position_index(position)
        if index and self._kind is RotorKind.REFLECTOR:
            raise UnsupportedRotorOperationError(
                f"Reflector {self._name!r} has a single position"
            )
        self._setting = index

    def set_ring(self, ring: Position) -> None:
        """Set the ring setting from a character or an index.

        Raises the same errors as :meth:`set`.
        """
        index = self._position_index(ring)
        if index and self._kind is RotorKind.REFLECTOR:
            raise UnsupportedRotorOperationError(
                f"Reflector {self._name!r} has no adjustable ring"
            )
        self._ring = index

    def _position_index(self, position: Position) -> int:
        if isinstance(position, str):
            return self.alphabet.to_index(position)
        if not 0 <= position < self.size():
            raise IndexOutOfRangeError(
                f"Setting {position} out of range 0-{self.size() - 1} "
                f"for rotor {self._name!r}"
            )
        return position

    # ------------------------------------------------------------------ #
    #  Signal path
    # ------------------------------------------------------------------ #

    def convert_forward(self, p: int) -> int:
        """Pass index *p* through the wiring, entering from the keyboard side."""
        perm = self._permutation
        offset = self._setting - self._ring
        return perm.wrap(perm.permute(p + offset) - offset)

    def convert_backward(self, e: int) -> int:
        """Pass index *e* back through the wiring on the return path.

        Raises:
            UnsupportedRotorOperationError: For reflectors, which carry the
                signal only once.
        """
        if self._kind is RotorKind.REFLECTOR:
            raise UnsupportedRotorOperationError(
                f"Reflector {self._name!r} has no backward pass"
            )
        perm = self._permutation
        offset = self._setting - self._ring
        return perm.wrap(perm.invert(e + offset) - offset)

    def __repr__(self) -> str:
        return (
            f"<Rotor {self._name!r} kind={self._kind.value} "
            f"setting={self._setting} ring={self._ring}>"
        )
