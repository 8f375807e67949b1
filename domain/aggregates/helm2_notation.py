from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.exceptions import ValidationError
from domain.value_objects.annotation_notation import AnnotationNotation
from domain.value_objects.connection_notation import ConnectionNotation
from domain.value_objects.grouping_notation import GroupingNotation
from domain.value_objects.polymer_notation import PolymerNotation
from domain.value_objects.polymer_type import HelmVersion, PolymerType


class HELM2Notation(BaseModel):
    """The Aggregate Root for a parsed HELM notation.

    Holds polymers, connections, groups and annotations. Instances are frozen:
    validation, canonicalization and property calculation only read them.
    """

    model_config = ConfigDict(frozen=True)

    polymers: tuple[PolymerNotation, ...] = Field(..., min_length=1)
    connections: tuple[ConnectionNotation, ...] = ()
    groupings: tuple[GroupingNotation, ...] = ()
    annotations: tuple[AnnotationNotation, ...] = ()
    version: HelmVersion = HelmVersion.V2

    @model_validator(mode="after")
    def check_unique_ids(self) -> HELM2Notation:
        seen: set[str] = set()
        ids = [str(p.polymer_id) for p in self.polymers] + [g.group_id for g in self.groupings]
        for identifier in ids:
            if identifier in seen:
                msg = f"Duplicate polymer or group id: {identifier}"
                raise ValidationError(msg, rule="duplicate_id", symbol=identifier)
            seen.add(identifier)
        return self

    def polymer(self, polymer_id: str) -> PolymerNotation | None:
        return next((p for p in self.polymers if str(p.polymer_id) == polymer_id), None)

    def grouping(self, group_id: str) -> GroupingNotation | None:
        return next((g for g in self.groupings if g.group_id == group_id), None)

    def polymers_of_type(self, polymer_type: PolymerType) -> list[PolymerNotation]:
        return [p for p in self.polymers if p.polymer_type is polymer_type]

    @property
    def edge_connections(self) -> list[ConnectionNotation]:
        """Covalent connections (everything except hydrogen-bond base pairs)."""
        return [c for c in self.connections if not c.is_base_pair]

    @property
    def base_pair_connections(self) -> list[ConnectionNotation]:
        return [c for c in self.connections if c.is_base_pair]

    @property
    def total_monomer_count(self) -> int:
        return sum(p.monomer_count for p in self.polymers)

    def to_helm(self) -> str:
        """Serialise back to HELM V2 text, annotations included."""
        polymers = "|".join(p.to_helm() for p in self.polymers)
        connections = "|".join(c.to_helm() for c in self.connections)
        groupings = "|".join(g.to_helm() for g in self.groupings)
        annotations = "|".join(a.text for a in self.annotations)
        return f"{polymers}${connections}${groupings}${annotations}${HelmVersion.V2.value}"
