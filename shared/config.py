"""
EnigmaCore Configuration Management
====================================

Dataclass-based configuration for the EnigmaCore toolkit, persisted as
TOML. Two sections are recognised::

    [global]
    log_level = "DEBUG"
    log_file = "enigma.log"
    log_json = true

    [machine]
    alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    num_rotors = 5
    pawls = 3

Missing keys fall back to the dataclass defaults and unknown keys are
ignored, so older and newer files load alike.

References:
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"


# =========================== Sections ======================================


@dataclass(slots=True)
class GlobalConfig:
    """Logging settings shared by every EnigmaCore component."""

    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False
    console_output: bool = True


@dataclass(slots=True)
class MachineConfig:
    """Defaults used when a machine is built without an explicit
    alphabet or topology.

    The defaults describe a four-rotor naval machine: a thin reflector,
    one fixed Greek wheel and three moving rotors.
    """

    alphabet: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    num_rotors: int = 5
    pawls: int = 3


# =========================== Master Config =================================


@dataclass(slots=True)
class EnigmaConfig:
    """Master configuration aggregating every section.

    Usage:
        >>> config = EnigmaConfig.load()                 # default path
        >>> config = EnigmaConfig.load("machine.toml")   # explicit path
        >>> config.machine.pawls
        3
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    machine: MachineConfig = field(default_factory=MachineConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> EnigmaConfig:
        """Load configuration from a TOML file.

        Args:
            path: TOML file to read. Defaults to ``<project_root>/config.toml``.

        Returns:
            A fully populated :class:`EnigmaConfig`.

        Raises:
            FileNotFoundError: If *path* was given explicitly and does not
                exist. A missing default file yields pure defaults.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            machine=cls._build_section(MachineConfig, raw.get("machine", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def _build_section(section: type, data: dict[str, Any]) -> Any:
        """Instantiate *section* from the keys it declares, ignoring the rest."""
        valid_keys = set(section.__dataclass_fields__)  # type: ignore[attr-defined]
        return section(**{k: v for k, v in data.items() if k in valid_keys})


# ========================= Module-level convenience ========================


def get_config(path: str | Path | None = None) -> EnigmaConfig:
    """Cached wrapper around :meth:`EnigmaConfig.load`.

    Passing *path* always reloads and replaces the cached instance.
    """
    if not hasattr(get_config, "_cached") or path is not None:
        get_config._cached = EnigmaConfig.load(path)  # type: ignore[attr-defined]
    return get_config._cached  # type: ignore[attr-defined]
