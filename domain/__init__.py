"""Domain layer exports."""

from domain.aggregates.helm2_notation import HELM2Notation
from domain.aggregates.monomer_registry import MonomerRegistry
from domain.exceptions import (
    CanonicalizationError,
    ChemistryToolkitError,
    DomainError,
    InfrastructureError,
    MonomerLibraryError,
    ParseError,
    UnknownAnalogueError,
    ValidationError,
)
from domain.value_objects import (
    Monomer,
    PolymerNotation,
    PolymerType,
)

__all__ = [
    "CanonicalizationError",
    "ChemistryToolkitError",
    "DomainError",
    "HELM2Notation",
    "InfrastructureError",
    "Monomer",
    "MonomerLibraryError",
    "MonomerRegistry",
    "ParseError",
    "PolymerNotation",
    "PolymerType",
    "UnknownAnalogueError",
    "ValidationError",
]
