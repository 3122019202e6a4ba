"""
Enigma Core Data Models
========================

Pydantic models for the values the rotor machine core consumes from its
configuration collaborators: rotor catalog entries, the machine topology,
and a per-message machine configuration.

The models check shape and types only. Semantic validation (unknown
names, wrong lengths, malformed cycles) happens where the values are put
to use, so that every failure surfaces as an
:class:`~enigma.core.errors.EnigmaError` of the appropriate kind.

References:
    - Hamer, D. H., Sullivan, G., & Weierud, F. (1998). Enigma Variations:
      An Extended Family of Machines. Cryptologia, 22(3), 211-229.
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class RotorKind(str, enum.Enum):
    """Capability set of a rotor.

    Attributes:
        REFLECTOR: Does not rotate; turns the signal back exactly once.
        FIXED:     Does not rotate; sits in the signal path.
        MOVING:    Rotates and carries notches.
    """

    REFLECTOR = "reflector"
    FIXED = "fixed"
    MOVING = "moving"


# ===================================================================== #
#  Catalog and Topology
# ===================================================================== #


class RotorSpec(BaseModel):
    """One entry of the rotor catalog.

    Attributes:
        name: Unique rotor name (e.g. "I", "Beta", "B").
        kind: Rotor capability set.
        wiring: Wiring in cycle notation at setting 0.
        notches: Characters at which this rotor lets its left neighbour's
            pawl engage. Only meaningful for moving rotors.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Unique rotor name")
    kind: RotorKind
    wiring: str = Field(default="", description="Cycle-notation wiring")
    notches: str = Field(default="", description="Notch characters")


class MachineTopology(BaseModel):
    """Slot and pawl counts of a machine.

    Attributes:
        num_rotors: Number of rotor slots, reflector included.
        pawls: Number of rightmost slots driven by a pawl.
    """

    model_config = ConfigDict(frozen=True)

    num_rotors: int
    pawls: int


# ===================================================================== #
#  Per-message Configuration
# ===================================================================== #


class MachineSettings(BaseModel):
    """Everything needed to put a machine into a known starting state.

    Attributes:
        rotors: Rotor names in slot order; ``rotors[0]`` names the reflector.
        positions: One setting character per non-reflector slot, leftmost
            first.
        plugboard: Plugboard cycles; empty means no plugboard.
        rings: Optional ring-setting characters, one per non-reflector
            slot. ``None`` leaves every ring at 0.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    rotors: list[str] = Field(default_factory=list)
    positions: str = ""
    plugboard: str = ""
    rings: Optional[str] = None
