"""Tests for MonomerRegistry."""

from __future__ import annotations

import pytest

from domain.aggregates.monomer_registry import MonomerRegistry
from domain.exceptions import MonomerLibraryError
from domain.value_objects.monomer import MonomerType
from domain.value_objects.polymer_type import PolymerType
from tests.mocks import peptide_monomer


class TestMonomerRegistry:
    def test_resolve_by_type_and_symbol(self, registry: MonomerRegistry) -> None:
        """Test that the same symbol resolves per polymer type."""
        alanine = registry.resolve(PolymerType.PEPTIDE, "A")
        adenine = registry.resolve(PolymerType.RNA, "A")

        assert alanine.name == "Alanine"
        assert adenine.monomer_type is MonomerType.BRANCH
        assert registry.resolve(PolymerType.CHEM, "A") is None
        assert registry.polymer_types_of("A") == {PolymerType.PEPTIDE, PolymerType.RNA}

    def test_default_library_contents(self, registry: MonomerRegistry) -> None:
        assert registry.resolve(PolymerType.PEPTIDE, "dK").natural_analog == "K"
        assert registry.resolve(PolymerType.PEPTIDE, "seC").natural_analog == "C"
        assert (PolymerType.CHEM, "MCC") in registry
        assert len(registry) > 30

    def test_duplicate_rejected(self) -> None:
        with pytest.raises(MonomerLibraryError):
            MonomerRegistry([peptide_monomer("A", "A"), peptide_monomer("A", "A")])
