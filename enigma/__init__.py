"""
EnigmaCore Enigma -- Rotor Cipher Machine Simulator
====================================================

Simulates an Enigma-style rotor cipher machine: a stack of stepping
substitution rotors, a reflector and a plugboard, producing a
letter-by-letter substitution whose mapping changes after every
keystroke.

Modules:
    - enigma.core.alphabet: Character/index bijection
    - enigma.core.permutation: Cycle-notation permutations
    - enigma.core.rotor: Reflector, fixed and moving rotors
    - enigma.core.stepping: Keystroke stepping and the double step
    - enigma.core.machine: The assembled machine
    - enigma.core.engine: Facade building machines from settings
    - enigma.core.models: Pydantic data models

References:
    - Rejewski, M. (1981). How Polish Mathematicians Deciphered the Enigma.
    - Kahn, D. (1991). Seizing the Enigma.
"""

__version__ = "1.0.0"
__tool_name__ = "enigma"
