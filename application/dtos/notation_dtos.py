from pydantic import BaseModel, Field

from domain.value_objects.polymer_sequence import PolymerSequence
from domain.value_objects.polymer_type import HelmVersion, PolymerType


class NotationRequest(BaseModel):
    """Request DTO carrying one HELM string."""

    notation: str = Field(..., min_length=1, description="HELM 1 or HELM 2 notation text")


class SequenceRequest(NotationRequest):
    """Request DTO for natural-analogue sequence extraction."""

    polymer_type: PolymerType = Field(
        PolymerType.PEPTIDE,
        description="Polymer kind to project (PEPTIDE or RNA)",
    )
    strict: bool | None = Field(
        None,
        description="Fail on monomers without a natural analogue instead of using X/N",
    )


class ValidationReport(BaseModel):
    """Response DTO describing a notation that passed validation."""

    notation: str = Field(..., description="Notation as submitted")
    version: HelmVersion = Field(..., description="HELM version the notation was written in")
    polymers: list[str] = Field(default_factory=list, description="Simple polymers, as HELM")
    connections: list[str] = Field(default_factory=list, description="Covalent connections")
    base_pairs: list[str] = Field(default_factory=list, description="Hydrogen-bond base pairs")
    groupings: list[str] = Field(default_factory=list, description="Polymer groups")
    annotations: list[str] = Field(default_factory=list, description="Free-text annotations")


class MonomerCountResponse(BaseModel):
    notation: str
    monomer_count: int = Field(..., ge=0)


class CanonicalNotationResponse(BaseModel):
    notation: str
    canonical_notation: str = Field(..., description="Canonical HELM 2 string")


class CanonicalSmilesResponse(BaseModel):
    notation: str
    canonical_smiles: str


class MoleculePropertiesResponse(BaseModel):
    """Response DTO with molecular weight, formula, exact mass and extinction coefficient."""

    notation: str
    molecular_weight: float = Field(..., description="Average molecular weight in g/mol")
    molecular_formula: str = Field(..., description="Hill-ordered molecular formula")
    exact_mass: float = Field(..., description="Monoisotopic mass in Da")
    extinction_coefficient: float | None = Field(
        None,
        description="Molar extinction coefficient in M^-1 cm^-1; null when undetermined",
    )


class SequenceResponse(BaseModel):
    notation: str
    polymer_type: PolymerType
    sequences: list[PolymerSequence] = Field(default_factory=list)
