"""Shared fixtures: the historical Enigma I / M4 rotor set."""

from __future__ import annotations

import pytest

from enigma.core.alphabet import UPPERCASE, Alphabet
from enigma.core.machine import Machine
from enigma.core.models import RotorKind, RotorSpec
from enigma.core.rotor import Rotor


def wiring_to_cycles(wiring: str, alphabet: str = UPPERCASE) -> str:
    """Rewrite a substitution string (image of each alphabet letter) as cycles."""
    seen: set[str] = set()
    groups = []
    for start in alphabet:
        if start in seen:
            continue
        cycle = []
        ch = start
        while ch not in seen:
            seen.add(ch)
            cycle.append(ch)
            ch = wiring[alphabet.index(ch)]
        groups.append("(" + "".join(cycle) + ")")
    return " ".join(groups)


# name, kind, wiring, notches
HISTORICAL = [
    ("I", RotorKind.MOVING, "EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
    ("II", RotorKind.MOVING, "AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
    ("III", RotorKind.MOVING, "BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
    ("IV", RotorKind.MOVING, "ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
    ("V", RotorKind.MOVING, "VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
    ("Beta", RotorKind.FIXED, "LEYJVCNIXWPBQMDRTAKZGFUHOS", ""),
    ("B", RotorKind.REFLECTOR, "YRUHQSLDPXNGOKMIEBFZCWVJAT", ""),
    ("B-thin", RotorKind.REFLECTOR, "ENKQAUYWJICOPBLMDXZVFTHRGS", ""),
]


@pytest.fixture
def alphabet() -> Alphabet:
    return Alphabet()


@pytest.fixture
def specs() -> list[RotorSpec]:
    return [
        RotorSpec(name=name, kind=kind, wiring=wiring_to_cycles(wiring), notches=notches)
        for name, kind, wiring, notches in HISTORICAL
    ]


@pytest.fixture
def catalog(specs, alphabet) -> dict[str, Rotor]:
    return {spec.name: Rotor.from_spec(spec, alphabet) for spec in specs}


@pytest.fixture
def three_rotor(alphabet, catalog) -> Machine:
    """Enigma I: reflector B, rotors I-II-III, three pawls."""
    machine = Machine(alphabet, 4, 3, catalog.values())
    machine.insert_rotors(["B", "I", "II", "III"])
    return machine


@pytest.fixture
def naval(alphabet, catalog) -> Machine:
    """M4: thin reflector, fixed Beta wheel, three moving rotors."""
    return Machine(alphabet, 5, 3, catalog.values())
