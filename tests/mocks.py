"""Mock implementations for testing."""

from __future__ import annotations

import threading
import time

from application.ports.molecule_toolkit import MoleculeToolkit
from application.ports.monomer_library import MonomerLibrary
from domain.exceptions import MonomerLibraryError
from domain.value_objects.molecule_assembly import MoleculeAssembly
from domain.value_objects.molecule_properties import MoleculeProperties
from domain.value_objects.monomer import Attachment, CapGroup, Monomer, MonomerType
from domain.value_objects.polymer_type import PolymerType


def peptide_monomer(symbol: str, natural_analog: str | None = None, side_chain: str = "C") -> Monomer:
    """Build a plain amino acid with R1/R2 only."""
    return Monomer(
        symbol=symbol,
        polymer_type=PolymerType.PEPTIDE,
        smiles=f"[*:1]N[C@@H]({side_chain})C([*:2])=O",
        natural_analog=natural_analog,
        attachments=(Attachment(label="R1", cap=CapGroup.H), Attachment(label="R2", cap=CapGroup.OH)),
    )


def base_monomer(symbol: str, smiles: str) -> Monomer:
    return Monomer(
        symbol=symbol,
        polymer_type=PolymerType.RNA,
        monomer_type=MonomerType.BRANCH,
        smiles=smiles,
        natural_analog=symbol,
        attachments=(Attachment(label="R1", cap=CapGroup.H),),
    )


class MockMonomerLibrary(MonomerLibrary):
    """Mock implementation of MonomerLibrary for testing."""

    def __init__(
        self,
        monomers: list[Monomer] | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.monomers = monomers or []
        self.error = error
        self.delay = delay
        self.load_calls = 0
        self._lock = threading.Lock()

    def load(self) -> list[Monomer]:
        with self._lock:
            self.load_calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.monomers)


class FailingMonomerLibrary(MockMonomerLibrary):
    """Fails on the first load and succeeds afterwards."""

    def load(self) -> list[Monomer]:
        if self.load_calls == 0:
            self.load_calls += 1
            msg = "library temporarily unreadable"
            raise MonomerLibraryError(msg)
        return super().load()


class MockMoleculeToolkit(MoleculeToolkit):
    """Mock implementation of MoleculeToolkit for testing."""

    def __init__(
        self,
        smiles: str = "CC(=O)O",
        properties: MoleculeProperties | None = None,
    ) -> None:
        self.smiles = smiles
        self.result_properties = properties or MoleculeProperties(
            molecular_weight=60.052,
            molecular_formula="C2H4O2",
            exact_mass=60.021,
        )
        self.assemblies: list[MoleculeAssembly] = []
        self.fragments: list[str] = []

    def canonicalize_fragment(self, smiles: str) -> str | None:
        self.fragments.append(smiles)
        return smiles

    def canonical_smiles(self, assembly: MoleculeAssembly) -> str:
        self.assemblies.append(assembly)
        return self.smiles

    def properties(self, assembly: MoleculeAssembly) -> MoleculeProperties:
        self.assemblies.append(assembly)
        return self.result_properties
