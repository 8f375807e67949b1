from pydantic import BaseModel, ConfigDict, Field


class MoleculeProperties(BaseModel):
    """Bulk properties of an assembled notation."""

    model_config = ConfigDict(frozen=True)

    molecular_weight: float = Field(..., gt=0)
    molecular_formula: str
    exact_mass: float = Field(..., gt=0)
    extinction_coefficient: float | None = Field(
        None,
        ge=0.0,
        description="Molar extinction coefficient in M^-1 cm^-1; None when undetermined",
    )
