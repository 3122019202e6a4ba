import pytest

from enigma.core.alphabet import Alphabet
from enigma.core.errors import (
    IndexOutOfRangeError,
    UnknownCharacterError,
    UnsupportedRotorOperationError,
)
from enigma.core.models import RotorKind, RotorSpec
from enigma.core.permutation import Permutation
from enigma.core.rotor import Rotor


def test_capabilities_by_kind(catalog):
    assert catalog["I"].rotates() and not catalog["I"].reflecting()
    assert not catalog["Beta"].rotates() and not catalog["Beta"].reflecting()
    assert catalog["B"].reflecting() and not catalog["B"].rotates()


def test_convert_at_setting_zero_is_plain_wiring(catalog, alphabet):
    rotor = catalog["I"]
    assert rotor.convert_forward(alphabet.to_index("A")) == alphabet.to_index("E")
    assert rotor.convert_backward(alphabet.to_index("E")) == alphabet.to_index("A")


def test_convert_forward_applies_setting_offset(catalog, alphabet):
    rotor = catalog["I"].copy()
    rotor.set("B")
    # A enters as B, B -> K, K shifted back by one is J
    assert rotor.convert_forward(alphabet.to_index("A")) == alphabet.to_index("J")


def test_forward_and_backward_are_inverse_at_every_setting(catalog):
    rotor = catalog["III"].copy()
    for setting in range(26):
        rotor.set(setting)
        for p in range(26):
            assert rotor.convert_backward(rotor.convert_forward(p)) == p


def test_advance_wraps_around(catalog):
    rotor = catalog["II"].copy()
    rotor.set("Z")
    rotor.advance()
    assert rotor.setting == 0


def test_non_moving_rotors_do_not_advance(catalog):
    fixed = catalog["Beta"].copy()
    fixed.set(3)
    fixed.advance()
    assert fixed.setting == 3


def test_at_notch(catalog):
    rotor = catalog["I"].copy()
    assert not rotor.at_notch()
    rotor.set("Q")
    assert rotor.at_notch()


def test_multiple_notches(alphabet):
    rotor = Rotor("VI", RotorKind.MOVING, Permutation("(AJQDVLEOZWIYTS)", alphabet), "ZM")
    rotor.set("M")
    assert rotor.at_notch()
    rotor.set("Z")
    assert rotor.at_notch()
    rotor.set("N")
    assert not rotor.at_notch()


def test_rotor_without_notches_never_at_notch(alphabet):
    rotor = Rotor("X", RotorKind.MOVING, Permutation("(AB)", alphabet))
    for setting in range(26):
        rotor.set(setting)
        assert not rotor.at_notch()


def test_notches_ignored_for_fixed_rotors(alphabet):
    rotor = Rotor("F", RotorKind.FIXED, Permutation("(AB)", alphabet), "A")
    assert rotor.notches == frozenset()
    assert not rotor.at_notch()


def test_unknown_notch_character_fails(alphabet):
    with pytest.raises(UnknownCharacterError):
        Rotor("X", RotorKind.MOVING, Permutation("(AB)", alphabet), "a")


def test_set_validates_input(catalog):
    rotor = catalog["I"].copy()
    with pytest.raises(UnknownCharacterError):
        rotor.set("!")
    with pytest.raises(IndexOutOfRangeError):
        rotor.set(26)
    with pytest.raises(IndexOutOfRangeError):
        rotor.set(-1)


def test_reflector_has_a_single_position(catalog):
    reflector = catalog["B"].copy()
    reflector.set(0)
    with pytest.raises(UnsupportedRotorOperationError):
        reflector.set("C")
    with pytest.raises(UnsupportedRotorOperationError):
        reflector.set_ring(1)


def test_reflector_has_no_backward_pass(catalog):
    with pytest.raises(UnsupportedRotorOperationError):
        catalog["B"].convert_backward(0)


def test_ring_setting_cancels_equal_setting(catalog):
    shifted = catalog["II"].copy()
    shifted.set("F")
    shifted.set_ring("F")
    plain = catalog["II"].copy()
    for p in range(26):
        assert shifted.convert_forward(p) == plain.convert_forward(p)
        assert shifted.convert_backward(p) == plain.convert_backward(p)


def test_ring_setting_does_not_move_notch(catalog):
    rotor = catalog["I"].copy()
    rotor.set_ring("C")
    rotor.set("Q")
    assert rotor.at_notch()


def test_copy_has_independent_setting(catalog):
    template = catalog["I"]
    first, second = template.copy(), template.copy()
    first.set("K")
    first.set_ring("D")
    assert second.setting == 0 and second.ring == 0
    assert template.setting == 0
    assert first.permutation is template.permutation


def test_from_spec(alphabet):
    spec = RotorSpec(name=" Gamma ", kind="fixed", wiring="(AFNIRLBSQWVXGUZDKMTPCOYJHE)")
    rotor = Rotor.from_spec(spec, alphabet)
    assert rotor.name == "Gamma"
    assert rotor.kind is RotorKind.FIXED
    assert rotor.permutation.permute_char("A") == "F"


def test_from_spec_with_malformed_wiring(alphabet):
    with pytest.raises(ValueError):
        Rotor.from_spec(RotorSpec(name="bad", kind="moving", wiring="(AB"), alphabet)
