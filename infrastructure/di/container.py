from __future__ import annotations

from lagom import Container

from application.ports.molecule_toolkit import MoleculeToolkit
from application.ports.monomer_library import MonomerLibrary
from application.use_cases.notation_use_cases import (
    GetCanonicalNotationUseCase,
    GetCanonicalSmilesUseCase,
    GetMoleculePropertiesUseCase,
    GetMonomerCountUseCase,
    GetNaturalAnalogueSequenceUseCase,
    ValidateNotationUseCase,
)
from domain.aggregates.monomer_registry import MonomerRegistry
from domain.services.notation_parser import HelmNotationParser
from infrastructure.chemistry.rdkit_molecule_toolkit import RdkitMoleculeToolkit
from infrastructure.config import settings
from infrastructure.monomer_library.registry_provider import MonomerRegistryProvider
from infrastructure.monomer_library.yaml_monomer_library import YamlMonomerLibrary


def create_container() -> Container:
    container = Container()

    # Register Monomer Library and Registry
    container[MonomerLibrary] = YamlMonomerLibrary(settings.monomer_library_path)
    container[MonomerRegistryProvider] = MonomerRegistryProvider(container[MonomerLibrary])
    # Loaded on first resolution, shared afterwards
    container[MonomerRegistry] = lambda c: c[MonomerRegistryProvider].get()

    # Register Chemistry Toolkit
    container[MoleculeToolkit] = RdkitMoleculeToolkit()

    # Parser holds no state, one instance is shared
    container[HelmNotationParser] = HelmNotationParser()

    # Register Use Cases
    container[ValidateNotationUseCase] = lambda c: ValidateNotationUseCase(
        registry=c[MonomerRegistry],
        parser=c[HelmNotationParser],
    )
    container[GetMonomerCountUseCase] = lambda c: GetMonomerCountUseCase(
        registry=c[MonomerRegistry],
        parser=c[HelmNotationParser],
    )
    container[GetCanonicalNotationUseCase] = lambda c: GetCanonicalNotationUseCase(
        registry=c[MonomerRegistry],
        toolkit=c[MoleculeToolkit],
        parser=c[HelmNotationParser],
    )
    container[GetCanonicalSmilesUseCase] = lambda c: GetCanonicalSmilesUseCase(
        registry=c[MonomerRegistry],
        toolkit=c[MoleculeToolkit],
        parser=c[HelmNotationParser],
    )
    container[GetMoleculePropertiesUseCase] = lambda c: GetMoleculePropertiesUseCase(
        registry=c[MonomerRegistry],
        toolkit=c[MoleculeToolkit],
        parser=c[HelmNotationParser],
    )
    container[GetNaturalAnalogueSequenceUseCase] = lambda c: GetNaturalAnalogueSequenceUseCase(
        registry=c[MonomerRegistry],
        parser=c[HelmNotationParser],
        strict_default=settings.sequence_strict_mode,
    )

    return container
