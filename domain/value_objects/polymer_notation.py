from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from domain.value_objects.monomer_notation import MonomerElement, MonomerPosition
from domain.value_objects.polymer_id import PolymerId
from domain.value_objects.polymer_type import PolymerType


class PolymerNotation(BaseModel):
    """A single polymer section such as ``PEPTIDE1{A.A.C}``.

    Positions referenced by connections are 1-based indices into
    ``monomer_positions()``, which expands repeats and lists nucleotide
    components (sugar, base, phosphate) individually.
    """

    model_config = ConfigDict(frozen=True)

    polymer_id: PolymerId
    elements: tuple[MonomerElement, ...] = Field(..., min_length=1)
    annotation: str | None = None

    @property
    def polymer_type(self) -> PolymerType:
        return self.polymer_id.polymer_type

    def expanded_elements(self) -> list[MonomerElement]:
        return [item for element in self.elements for item in element.expand()]

    def monomer_positions(self) -> list[MonomerPosition]:
        return [pos for element in self.expanded_elements() for pos in element.positions()]

    @property
    def monomer_count(self) -> int:
        return len(self.monomer_positions())

    def position(self, index: int) -> MonomerPosition | None:
        """Return the monomer at a 1-based position, or None when out of range."""
        positions = self.monomer_positions()
        if 1 <= index <= len(positions):
            return positions[index - 1]
        return None

    def body_to_helm(self, include_annotations: bool = True) -> str:
        return ".".join(
            element.to_helm(self.polymer_type, include_annotations) for element in self.elements
        )

    def to_helm(self, include_annotations: bool = True) -> str:
        text = f"{self.polymer_id}{{{self.body_to_helm(include_annotations)}}}"
        if include_annotations and self.annotation:
            text += f'"{self.annotation}"'
        return text

    def __str__(self) -> str:
        return self.to_helm()
