"""
Enigma Error Kinds
===================

Exception classes raised by the Enigma rotor machine core. Every failure
is surfaced to the caller immediately; nothing in the core retries or
recovers. Each exception carries an :class:`ErrorKind` so callers can
dispatch on the kind without importing every subclass.

All classes derive from :class:`EnigmaError`, which is itself a
:class:`ValueError` -- every failure is caused by an invalid argument or
configuration value.
"""

from __future__ import annotations

import enum
from typing import ClassVar


class ErrorKind(str, enum.Enum):
    """Classification of Enigma core failures."""

    INVALID_TOPOLOGY = "invalid_topology"
    DUPLICATE_ROTOR_NAME = "duplicate_rotor_name"
    UNKNOWN_ROTOR_NAME = "unknown_rotor_name"
    SLOT_COUNT_MISMATCH = "slot_count_mismatch"
    MISSING_REFLECTOR = "missing_reflector"
    MISPLACED_REFLECTOR = "misplaced_reflector"
    SETTING_LENGTH_MISMATCH = "setting_length_mismatch"
    UNKNOWN_CHARACTER = "unknown_character"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    MALFORMED_CYCLE_SPEC = "malformed_cycle_spec"
    INVALID_ALPHABET = "invalid_alphabet"
    UNSUPPORTED_ROTOR_OPERATION = "unsupported_rotor_operation"


class EnigmaError(ValueError):
    """Base class for all Enigma core errors.

    Attributes:
        kind: The :class:`ErrorKind` of this failure.
    """

    kind: ClassVar[ErrorKind]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, {str(self)!r})"


class InvalidTopologyError(EnigmaError):
    """Slot count, pawl count or rotor catalog is unusable."""

    kind = ErrorKind.INVALID_TOPOLOGY


class DuplicateRotorNameError(EnigmaError):
    """Two catalog entries (or two inserted rotors) share a name."""

    kind = ErrorKind.DUPLICATE_ROTOR_NAME


class UnknownRotorNameError(EnigmaError):
    kind = ErrorKind.UNKNOWN_ROTOR_NAME


class SlotCountMismatchError(EnigmaError):
    kind = ErrorKind.SLOT_COUNT_MISMATCH


class MissingReflectorError(EnigmaError):
    kind = ErrorKind.MISSING_REFLECTOR


class MisplacedReflectorError(EnigmaError):
    kind = ErrorKind.MISPLACED_REFLECTOR


class SettingLengthMismatchError(EnigmaError):
    kind = ErrorKind.SETTING_LENGTH_MISMATCH


class UnknownCharacterError(EnigmaError):
    kind = ErrorKind.UNKNOWN_CHARACTER


class IndexOutOfRangeError(EnigmaError):
    kind = ErrorKind.INDEX_OUT_OF_RANGE


class MalformedCycleSpecError(EnigmaError):
    """Unbalanced parentheses, foreign or repeated character in cycles."""

    kind = ErrorKind.MALFORMED_CYCLE_SPEC


class InvalidAlphabetError(EnigmaError):
    kind = ErrorKind.INVALID_ALPHABET


class UnsupportedRotorOperationError(EnigmaError):
    """The operation is not available for this rotor kind."""

    kind = ErrorKind.UNSUPPORTED_ROTOR_OPERATION
