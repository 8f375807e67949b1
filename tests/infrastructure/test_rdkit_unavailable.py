"""Tests for behaviour when RDKit cannot be imported."""

from __future__ import annotations

import sys

import pytest
from returns.result import Failure, Success

from application.dtos.notation_dtos import NotationRequest
from application.use_cases.notation_use_cases import (
    GetCanonicalNotationUseCase,
    GetCanonicalSmilesUseCase,
    GetMoleculePropertiesUseCase,
)
from domain.aggregates.monomer_registry import MonomerRegistry
from domain.exceptions import ChemistryToolkitError, InfrastructureError
from domain.value_objects.molecule_assembly import AssemblyNode, MoleculeAssembly
from infrastructure.chemistry.rdkit_molecule_toolkit import RdkitMoleculeToolkit
from tests.samples import CYCLIC_PEPTIDE, OLIGO_CHEM_CONJUGATE


@pytest.fixture
def without_rdkit(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make every ``rdkit`` import fail as if the package were not installed."""
    for name in ("rdkit", "rdkit.Chem", "rdkit.Chem.Descriptors", "rdkit.Chem.rdMolDescriptors"):
        monkeypatch.setitem(sys.modules, name, None)


@pytest.mark.usefixtures("without_rdkit")
class TestToolkitWithoutRdkit:
    def test_toolkit_raises_infrastructure_error(self) -> None:
        toolkit = RdkitMoleculeToolkit()
        assembly = MoleculeAssembly(nodes=(AssemblyNode(index=0, label="CHEM1:1", smiles="CC"),))

        with pytest.raises(ChemistryToolkitError):
            toolkit.canonical_smiles(assembly)
        with pytest.raises(ChemistryToolkitError):
            toolkit.properties(assembly)
        with pytest.raises(InfrastructureError):
            toolkit.canonicalize_fragment("[*:1]CC")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("use_case_class", [GetCanonicalSmilesUseCase, GetMoleculePropertiesUseCase])
    async def test_structure_use_cases_report_infrastructure(
        self,
        registry: MonomerRegistry,
        use_case_class: type,
    ) -> None:
        """Test that a missing toolkit is reported as an infrastructure failure."""
        use_case = use_case_class(registry, RdkitMoleculeToolkit())

        result = await use_case.execute(NotationRequest(notation=CYCLIC_PEPTIDE))

        assert isinstance(result, Failure)
        assert result.failure().category == "infrastructure"

    @pytest.mark.asyncio
    async def test_canonical_notation_with_inline_smiles(self, registry: MonomerRegistry) -> None:
        use_case = GetCanonicalNotationUseCase(registry, RdkitMoleculeToolkit())

        result = await use_case.execute(NotationRequest(notation=OLIGO_CHEM_CONJUGATE))

        assert isinstance(result, Failure)
        assert result.failure().category == "infrastructure"

    @pytest.mark.asyncio
    async def test_canonical_notation_without_inline_smiles(self, registry: MonomerRegistry) -> None:
        """Test that notations without inline SMILES never need the toolkit."""
        use_case = GetCanonicalNotationUseCase(registry, RdkitMoleculeToolkit())

        result = await use_case.execute(NotationRequest(notation=CYCLIC_PEPTIDE))

        assert isinstance(result, Success)
