"""
Enigma Engine
==============

Facade over the rotor machine core. The engine turns the plain values a
configuration layer produces -- an alphabet, a rotor catalog, a topology
and per-message settings -- into ready-to-use :class:`Machine` instances.

The catalog is built and validated once. Every call to
:meth:`EnigmaEngine.configure` returns a new machine holding its own
rotor copies, so independently configured machines never share rotor
state.

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley.
"""

from __future__ import annotations

import itertools
from typing import Iterable, Optional

from shared.config import EnigmaConfig
from shared.logger import EnigmaLogger

from enigma.core.alphabet import Alphabet
from enigma.core.errors import DuplicateRotorNameError, EnigmaError
from enigma.core.machine import Machine
from enigma.core.models import MachineSettings, MachineTopology, RotorSpec
from enigma.core.permutation import Permutation
from enigma.core.rotor import Rotor

# Suffix of the per-engine logger name.
_ENGINE_IDS = itertools.count(1)


class EnigmaEngine:
    """Builds and drives Enigma machines from catalog and settings values.

    Usage::

        engine = EnigmaEngine(specs, topology=MachineTopology(num_rotors=4, pawls=3))
        settings = MachineSettings(rotors=["B", "I", "II", "III"], positions="AAA")
        engine.convert(settings, "AAAAA")   # 'BDZGO'

    Args:
        specs:    Rotor catalog entries.
        alphabet: Machine alphabet; defaults to ``config.machine.alphabet``.
        topology: Slot and pawl counts; defaults to ``config.machine``.
        config:   EnigmaCore configuration; defaults to built-in defaults.

    Raises:
        EnigmaError: If the catalog or topology is invalid. Validation
            happens here, before any message is converted.
    """

    def __init__(
        self,
        specs: Iterable[RotorSpec],
        *,
        alphabet: Optional[Alphabet] = None,
        topology: Optional[MachineTopology] = None,
        config: Optional[EnigmaConfig] = None,
    ) -> None:
        self.config = config or EnigmaConfig()
        self.logger = EnigmaLogger.from_config(
            f"enigma.engine.{next(_ENGINE_IDS)}", self.config.global_settings
        )

        defaults = self.config.machine
        self.alphabet = alphabet or Alphabet(defaults.alphabet)
        self.topology = topology or MachineTopology(
            num_rotors=defaults.num_rotors, pawls=defaults.pawls
        )

        with self.logger.operation("build_catalog"):
            try:
                self._catalog = self._build_catalog(specs)
                # Dry-run the topology checks so a bad topology fails here.
                self._new_machine()
            except EnigmaError as exc:
                self.logger.error("Rejected rotor catalog: %s", exc, kind=exc.kind.value)
                raise
            self.logger.info(
                "Loaded %d rotors over a %d-character alphabet",
                len(self._catalog),
                self.alphabet.size(),
                slots=self.topology.num_rotors,
                pawls=self.topology.pawls,
            )

    # ------------------------------------------------------------------ #
    #  Catalog
    # ------------------------------------------------------------------ #

    def _build_catalog(self, specs: Iterable[RotorSpec]) -> dict[str, Rotor]:
        catalog: dict[str, Rotor] = {}
        for spec in specs:
            if spec.name in catalog:
                raise DuplicateRotorNameError(f"Duplicate rotor name {spec.name!r}")
            catalog[spec.name] = Rotor.from_spec(spec, self.alphabet)
        return catalog

    @property
    def catalog(self) -> dict[str, Rotor]:
        """Copy of the name-keyed template rotors."""
        return dict(self._catalog)

    def _new_machine(self) -> Machine:
        return Machine(
            self.alphabet,
            self.topology.num_rotors,
            self.topology.pawls,
            self._catalog.values(),
        )

    # ------------------------------------------------------------------ #
    #  Machines
    # ------------------------------------------------------------------ #

    def configure(self, settings: MachineSettings) -> Machine:
        """Return a new machine put into the state described by *settings*.

        Raises:
            EnigmaError: If the settings do not fit the catalog or topology.
        """
        with self.logger.operation("configure"):
            try:
                machine = self._new_machine()
                machine.insert_rotors(settings.rotors)
                machine.set_rotors(settings.positions)
                if settings.rings is not None:
                    machine.set_rings(settings.rings)
                if settings.plugboard:
                    machine.set_plugboard(Permutation(settings.plugboard, self.alphabet))
            except EnigmaError as exc:
                self.logger.error("Rejected settings: %s", exc, kind=exc.kind.value)
                raise
            self.logger.debug(
                "Configured %s at %s", settings.rotors, settings.positions
            )
            return machine

    def convert(self, settings: MachineSettings, message: str) -> str:
        """Convert *message* on a freshly configured machine.

        Encryption and decryption are the same operation: converting the
        output again with the same *settings* restores the input.
        """
        machine = self.configure(settings)
        with self.logger.operation("convert"):
            try:
                result = machine.convert_message(message)
            except EnigmaError as exc:
                self.logger.error("Conversion failed: %s", exc, kind=exc.kind.value)
                raise
            self.logger.info("Converted %d characters", len(result))
            return result

    def close(self) -> None:
        """Release this engine's log handlers."""
        self.logger.close()
