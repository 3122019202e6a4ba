"""
Rotor Stepping
===============

Decides which slots advance on a keystroke. The decision is a pure
function of the rotors' pre-step state, so it can be tested apart from
the signal path.

Only the rightmost ``pawls`` slots carry a pawl. For a slot ``i`` with a
pawl holding a rotating rotor:

1. The rightmost slot always advances.
2. Slot ``i`` advances when its right neighbour (slot ``i+1``) is at its
   notch -- the pawl of slot ``i`` drops into that notch and pushes
   both rotors.
3. Slot ``i`` also advances when it is itself at its notch and slot
   ``i-1`` has a pawl and a rotating rotor: that pawl engages slot
   ``i``'s notch and drags slot ``i`` along with slot ``i-1``. This is
   the double step. It is applied once and never propagates further.

References:
    - Hamer, D. H. (1997). Enigma: Actions Involved in the "Double
      Stepping" of the Middle Rotor. Cryptologia, 21(1), 47-50.
"""

from __future__ import annotations

from typing import Sequence

from enigma.core.rotor import Rotor


def advancing_slots(rotors: Sequence[Rotor], pawls: int) -> frozenset[int]:
    """Return the slot indices that advance on the next keystroke.

    Args:
        rotors: Inserted rotors in slot order; slot 0 is the reflector.
        pawls:  Number of rightmost slots driven by a pawl.

    Returns:
        Frozen set of slot indices whose rotors advance together.
    """
    num_rotors = len(rotors)
    first_pawl = max(num_rotors - pawls, 1)
    last = num_rotors - 1

    def driven(slot: int) -> bool:
        return slot >= first_pawl and rotors[slot].rotates()

    advancing: set[int] = set()
    for slot in range(first_pawl, num_rotors):
        if not driven(slot):
            continue
        if slot == last or rotors[slot + 1].at_notch():
            advancing.add(slot)
        elif rotors[slot].at_notch() and driven(slot - 1):
            advancing.add(slot)

    return frozenset(advancing)
