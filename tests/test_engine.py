import json

import pytest

from shared.config import EnigmaConfig, GlobalConfig, MachineConfig

from enigma.core.engine import EnigmaEngine
from enigma.core.errors import (
    DuplicateRotorNameError,
    EnigmaError,
    ErrorKind,
    InvalidTopologyError,
    MalformedCycleSpecError,
    SettingLengthMismatchError,
    UnknownCharacterError,
    UnknownRotorNameError,
)
from enigma.core.models import MachineSettings, MachineTopology, RotorKind, RotorSpec

ENIGMA_I = MachineTopology(num_rotors=4, pawls=3)


@pytest.fixture
def quiet() -> EnigmaConfig:
    return EnigmaConfig(global_settings=GlobalConfig(console_output=False))


@pytest.fixture
def engine(specs, quiet) -> EnigmaEngine:
    return EnigmaEngine(specs, topology=ENIGMA_I, config=quiet)


def test_defaults_come_from_config(specs, quiet):
    engine = EnigmaEngine(specs, config=quiet)
    assert engine.topology == MachineTopology(num_rotors=5, pawls=3)
    assert engine.alphabet.size() == 26


def test_catalog_is_built_once(engine):
    assert set(engine.catalog) == {"I", "II", "III", "IV", "V", "Beta", "B", "B-thin"}
    assert engine.catalog["Beta"].kind is RotorKind.FIXED


def test_convert_known_vector(engine):
    settings = MachineSettings(rotors=["B", "I", "II", "III"], positions="AAA")
    assert engine.convert(settings, "AAAAA") == "BDZGO"


def test_convert_with_rings(engine):
    settings = MachineSettings(rotors=["B", "I", "II", "III"], positions="AAA", rings="BBB")
    assert engine.convert(settings, "AAAAA") == "EWTYX"


def test_convert_m4_with_plugboard(specs, quiet):
    engine = EnigmaEngine(specs, config=quiet)
    settings = MachineSettings(
        rotors=["B-thin", "Beta", "III", "IV", "I"],
        positions="AXLE",
        plugboard="(HQ) (EX) (IP) (TR) (BY)",
    )
    assert engine.convert(settings, "FROM HIS SHOULDER HIAWATHA") == "QVPQSOKOILPUBKJZPISFXDW"


def test_convert_round_trip(engine):
    settings = MachineSettings(
        rotors=["B", "IV", "V", "II"], positions="XQD", rings="CAT", plugboard="(AM) (FI)"
    )
    cipher = engine.convert(settings, "ENIGMA REVEALED")
    assert engine.convert(settings, cipher) == "ENIGMAREVEALED"


def test_configure_returns_fresh_machines(engine):
    settings = MachineSettings(rotors=["B", "I", "II", "III"], positions="AAA")
    first = engine.configure(settings)
    second = engine.configure(settings)
    first.convert_message("AAAA")
    assert first.positions() == "AAE"
    assert second.positions() == "AAA"


def test_duplicate_spec_names(specs, quiet):
    extra = RotorSpec(name="I", kind=RotorKind.MOVING, wiring="(AB)", notches="A")
    with pytest.raises(DuplicateRotorNameError):
        EnigmaEngine([*specs, extra], topology=ENIGMA_I, config=quiet)


def test_malformed_spec_wiring(specs, quiet):
    bad = RotorSpec(name="VI", kind=RotorKind.MOVING, wiring="(AB) (BC)")
    with pytest.raises(MalformedCycleSpecError):
        EnigmaEngine([*specs, bad], topology=ENIGMA_I, config=quiet)


def test_bad_topology_fails_at_construction(specs, quiet):
    with pytest.raises(InvalidTopologyError):
        EnigmaEngine(specs, topology=MachineTopology(num_rotors=3, pawls=3), config=quiet)


@pytest.mark.parametrize(
    "settings, error",
    [
        (MachineSettings(rotors=["B", "I", "II", "VII"], positions="AAA"), UnknownRotorNameError),
        (MachineSettings(rotors=["B", "I", "II", "III"], positions="AA"), SettingLengthMismatchError),
        (MachineSettings(rotors=["B", "I", "II", "III"], positions="AA?"), UnknownCharacterError),
        (
            MachineSettings(rotors=["B", "I", "II", "III"], positions="AAA", plugboard="(AB"),
            MalformedCycleSpecError,
        ),
    ],
)
def test_settings_errors(engine, settings, error):
    with pytest.raises(error):
        engine.configure(settings)


def test_message_errors_carry_kind(engine):
    settings = MachineSettings(rotors=["B", "I", "II", "III"], positions="AAA")
    with pytest.raises(EnigmaError) as info:
        engine.convert(settings, "HELLO, WORLD")
    assert info.value.kind is ErrorKind.UNKNOWN_CHARACTER


def test_custom_alphabet_from_config():
    config = EnigmaConfig(
        global_settings=GlobalConfig(console_output=False),
        machine=MachineConfig(alphabet="ABCDEF", num_rotors=3, pawls=2),
    )
    specs = [
        RotorSpec(name="R", kind=RotorKind.REFLECTOR, wiring="(AD) (BE) (CF)"),
        RotorSpec(name="X", kind=RotorKind.MOVING, wiring="(ABC) (DEF)", notches="C"),
        RotorSpec(name="Y", kind=RotorKind.MOVING, wiring="(AF) (BC)", notches="A"),
    ]
    engine = EnigmaEngine(specs, config=config)
    settings = MachineSettings(rotors=["R", "X", "Y"], positions="BA")
    cipher = engine.convert(settings, "FACADE")
    assert engine.convert(settings, cipher) == "FACADE"


def test_rejections_are_logged_as_json(specs, tmp_path):
    log_file = tmp_path / "enigma.jsonl"
    config = EnigmaConfig(
        global_settings=GlobalConfig(
            log_level="DEBUG", log_file=str(log_file), log_json=True, console_output=False
        )
    )
    engine = EnigmaEngine(specs, topology=ENIGMA_I, config=config)
    with pytest.raises(UnknownRotorNameError):
        engine.configure(MachineSettings(rotors=["B", "I", "II", "IX"], positions="AAA"))

    for handler in engine.logger.underlying.handlers:
        handler.flush()
    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    rejected = [r for r in records if r["level"] == "ERROR"]
    assert rejected[-1]["operation"] == "configure"
    assert rejected[-1]["extra"]["kind"] == "unknown_rotor_name"
    engine.close()


def test_second_engine_keeps_first_engines_log(specs, tmp_path):
    log_file = tmp_path / "first.log"
    first = EnigmaEngine(
        specs,
        topology=ENIGMA_I,
        config=EnigmaConfig(
            global_settings=GlobalConfig(log_file=str(log_file), console_output=False)
        ),
    )
    second = EnigmaEngine(
        specs,
        topology=ENIGMA_I,
        config=EnigmaConfig(global_settings=GlobalConfig(console_output=False)),
    )
    assert first.logger.underlying is not second.logger.underlying
    assert first.logger.underlying.handlers

    first.logger.info("after second engine")
    first.close()
    assert "after second engine" in log_file.read_text()
    assert first.logger.underlying.handlers == []
