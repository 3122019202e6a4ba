"""
Enigma Machine
===============

The complete rotor machine: an ordered stack of rotor slots with the
reflector in slot 0, a rightmost rotor driven by every keystroke, and an
optional plugboard.

Each keystroke first advances the rotors selected by
:func:`~enigma.core.stepping.advancing_slots` (decided on the pre-step
notch positions), then threads the signal through::

    plugboard -> slots n-1 .. 0 (forward) -> slots 1 .. n-1 (backward) -> plugboard^-1

The reflector in slot 0 is passed once, on the forward sweep.

References:
    - Kahn, D. (1991). Seizing the Enigma. Houghton Mifflin.
    - Rejewski, M. (1981). How Polish Mathematicians Deciphered the
      Enigma. Annals of the History of Computing, 3(3), 213-234.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from shared.logger import EnigmaLogger

from enigma.core.alphabet import Alphabet
from enigma.core.errors import (
    DuplicateRotorNameError,
    IndexOutOfRangeError,
    InvalidTopologyError,
    MisplacedReflectorError,
    MissingReflectorError,
    SettingLengthMismatchError,
    SlotCountMismatchError,
    UnknownRotorNameError,
)
from enigma.core.permutation import Permutation
from enigma.core.rotor import Rotor
from enigma.core.stepping import advancing_slots

logger = EnigmaLogger("enigma.machine")


class Machine:
    """An Enigma machine with a fixed number of slots and pawls.

    Usage::

        machine = Machine(Alphabet(), 4, 3, catalog)
        machine.insert_rotors(["B", "I", "II", "III"])
        machine.set_rotors("AAA")
        machine.convert_message("AAAAA")   # 'BDZGO'

    Args:
        alphabet:   Alphabet shared by every rotor and the plugboard.
        num_rotors: Number of slots, reflector included. Must exceed 1.
        pawls:      Number of rightmost slots driven by a pawl,
                    ``0 <= pawls < num_rotors``.
        all_rotors: The rotor catalog. Names must be unique.

    Raises:
        InvalidTopologyError: On a bad slot or pawl count, an empty
            catalog, or a catalog rotor over a different alphabet.
        DuplicateRotorNameError: If two catalog rotors share a name.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Optional[Iterable[Rotor]],
    ) -> None:
        if num_rotors <= 1:
            raise InvalidTopologyError(f"Need more than one rotor slot, got {num_rotors}")
        if not 0 <= pawls < num_rotors:
            raise InvalidTopologyError(
                f"Pawl count {pawls} outside 0-{num_rotors - 1}"
            )
        if all_rotors is None:
            raise InvalidTopologyError("No rotor catalog given")

        catalog: dict[str, Rotor] = {}
        for rotor in all_rotors:
            if rotor.name in catalog:
                raise DuplicateRotorNameError(f"Duplicate rotor name {rotor.name!r}")
            if rotor.alphabet != alphabet:
                raise InvalidTopologyError(
                    f"Rotor {rotor.name!r} uses {rotor.alphabet!r}, machine uses {alphabet!r}"
                )
            catalog[rotor.name] = rotor
        if not catalog:
            raise InvalidTopologyError("Rotor catalog is empty")

        self._alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls
        self._catalog = catalog
        self._rotors: list[Rotor] = []
        self._plugboard: Optional[Permutation] = None

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._pawls

    @property
    def catalog(self) -> dict[str, Rotor]:
        """Copy of the name-keyed rotor catalog."""
        return dict(self._catalog)

    @property
    def rotors(self) -> tuple[Rotor, ...]:
        """Inserted rotors in slot order (empty before insertion)."""
        return tuple(self._rotors)

    @property
    def plugboard(self) -> Optional[Permutation]:
        return self._plugboard

    def positions(self) -> str:
        """Visible setting characters of slots ``1..num_rotors-1``."""
        to_char = self._alphabet.to_char
        return "".join(to_char(rotor.setting) for rotor in self._rotors[1:])

    # ------------------------------------------------------------------ #
    #  Configuration
    # ------------------------------------------------------------------ #

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with fresh copies of the named catalog rotors.

        ``names[0]`` must name a reflector. Every inserted rotor starts at
        setting 0 and ring 0. Nothing changes if any check fails.

        Raises:
            SlotCountMismatchError: ``len(names) != num_rotors``.
            UnknownRotorNameError: A name is not in the catalog.
            DuplicateRotorNameError: A name is given twice.
            MissingReflectorError: Slot 0 is not a reflector.
            MisplacedReflectorError: A reflector is named for another slot.
        """
        if len(names) != self._num_rotors:
            raise SlotCountMismatchError(
                f"Expected {self._num_rotors} rotor names, got {len(names)}"
            )

        seen: set[str] = set()
        for name in names:
            if name not in self._catalog:
                raise UnknownRotorNameError(f"No rotor named {name!r} in catalog")
            if name in seen:
                raise DuplicateRotorNameError(f"Rotor {name!r} inserted twice")
            seen.add(name)

        if not self._catalog[names[0]].reflecting():
            raise MissingReflectorError(f"Rotor {names[0]!r} in slot 0 is not a reflector")
        for slot, name in enumerate(names[1:], start=1):
            if self._catalog[name].reflecting():
                raise MisplacedReflectorError(
                    f"Reflector {name!r} cannot sit in slot {slot}"
                )

        self._rotors = [self._catalog[name].copy() for name in names]
        logger.debug("Inserted rotors %s", list(names))

    def set_rotors(self, setting: str) -> None:
        """Set slots ``1..num_rotors-1`` from *setting*, leftmost first.

        Raises:
            SlotCountMismatchError: No rotors have been inserted.
            SettingLengthMismatchError: ``len(setting) != num_rotors - 1``.
            UnknownCharacterError: A character is not in the alphabet.
        """
        for rotor, index in zip(self._rotors[1:], self._slot_indices(setting, "setting")):
            rotor.set(index)

    def set_rings(self, rings: str) -> None:
        """Set the ring settings of slots ``1..num_rotors-1``, leftmost first.

        Raises the same errors as :meth:`set_rotors`, plus
        :class:`~enigma.core.errors.UnsupportedRotorOperationError` if a
        non-zero ring is asked of a rotor that cannot take one.
        """
        for rotor, index in zip(self._rotors[1:], self._slot_indices(rings, "ring setting")):
            rotor.set_ring(index)

    def set_plugboard(self, plugboard: Optional[Permutation]) -> None:
        """Install *plugboard*; ``None`` removes it (identity).

        Raises:
            InvalidTopologyError: If *plugboard* uses another alphabet.
        """
        if plugboard is not None and plugboard.alphabet != self._alphabet:
            raise InvalidTopologyError(
                f"Plugboard uses {plugboard.alphabet!r}, machine uses {self._alphabet!r}"
            )
        self._plugboard = plugboard

    def _slot_indices(self, chars: str, label: str) -> list[int]:
        self._require_rotors()
        if len(chars) != self._num_rotors - 1:
            raise SettingLengthMismatchError(
                f"{label.capitalize()} {chars!r} must have {self._num_rotors - 1} "
                f"characters, got {len(chars)}"
            )
        return [self._alphabet.to_index(ch) for ch in chars]

    def _require_rotors(self) -> None:
        if len(self._rotors) != self._num_rotors:
            raise SlotCountMismatchError("No rotors have been inserted")

    # ------------------------------------------------------------------ #
    #  Conversion
    # ------------------------------------------------------------------ #

    def convert(self, c: int) -> int:
        """Advance the rotors, then return the conversion of index *c*.

        Raises:
            IndexOutOfRangeError: If *c* is outside ``0..size-1``.
            SlotCountMismatchError: No rotors have been inserted.
        """
        self._require_rotors()
        if not 0 <= c < self._alphabet.size():
            raise IndexOutOfRangeError(
                f"Index {c} out of range 0-{self._alphabet.size() - 1}"
            )
        return self._convert(c)

    def convert_char(self, ch: str) -> str:
        self._require_rotors()
        return self._alphabet.to_char(self._convert(self._alphabet.to_index(ch)))

    def convert_message(self, msg: str) -> str:
        """Convert *msg* character by character, ignoring whitespace.

        The whole message is checked against the alphabet before any rotor
        moves.

        Raises:
            UnknownCharacterError: If a non-whitespace character is not in
                the alphabet.
            SlotCountMismatchError: No rotors have been inserted.
        """
        self._require_rotors()
        alphabet = self._alphabet
        indices = [alphabet.to_index(ch) for ch in msg if not ch.isspace()]
        return "".join(alphabet.to_char(self._convert(c)) for c in indices)

    def _step(self) -> None:
        slots = advancing_slots(self._rotors, self._pawls)
        for slot in slots:
            self._rotors[slot].advance()
        if logger.underlying.isEnabledFor(logging.DEBUG):
            logger.debug("Advanced slots %s -> %s", sorted(slots), self.positions())

    def _convert(self, c: int) -> int:
        self._step()

        plugboard = self._plugboard
        signal = plugboard.permute(c) if plugboard is not None else c
        for rotor in reversed(self._rotors):
            signal = rotor.convert_forward(signal)
        for rotor in self._rotors[1:]:
            signal = rotor.convert_backward(signal)
        return plugboard.invert(signal) if plugboard is not None else signal

    def __repr__(self) -> str:
        names = [rotor.name for rotor in self._rotors]
        return (
            f"<Machine slots={self._num_rotors} pawls={self._pawls} "
            f"rotors={names} positions={self.positions()!r}>"
        )
