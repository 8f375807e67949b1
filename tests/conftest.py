"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from domain.aggregates.monomer_registry import MonomerRegistry
from domain.services.notation_parser import HelmNotationParser
from infrastructure.monomer_library.yaml_monomer_library import YamlMonomerLibrary
from tests.samples import CYCLIC_PEPTIDE, OLIGO_CHEM_CONJUGATE


@pytest.fixture(scope="session")
def registry() -> MonomerRegistry:
    """Registry built from the bundled default monomer library."""
    return MonomerRegistry(YamlMonomerLibrary().load())


@pytest.fixture
def parser() -> HelmNotationParser:
    return HelmNotationParser()


@pytest.fixture
def cyclic_peptide() -> str:
    return CYCLIC_PEPTIDE


@pytest.fixture
def oligo_chem_conjugate() -> str:
    return OLIGO_CHEM_CONJUGATE
