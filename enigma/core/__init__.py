"""
Enigma Core Module
===================

Contains the rotor machine engine, its building blocks, and the data
models it consumes.
"""

from enigma.core.alphabet import Alphabet
from enigma.core.engine import EnigmaEngine
from enigma.core.errors import EnigmaError, ErrorKind
from enigma.core.machine import Machine
from enigma.core.models import MachineSettings, MachineTopology, RotorKind, RotorSpec
from enigma.core.permutation import Permutation
from enigma.core.rotor import Rotor
from enigma.core.stepping import advancing_slots

__all__ = [
    "Alphabet",
    "EnigmaEngine",
    "EnigmaError",
    "ErrorKind",
    "Machine",
    "MachineSettings",
    "MachineTopology",
    "Permutation",
    "Rotor",
    "RotorKind",
    "RotorSpec",
    "advancing_slots",
]
