from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from domain.value_objects.monomer_notation import GroupKind


class GroupMember(BaseModel):
    model_config = ConfigDict(frozen=True)

    polymer_id: str
    ratio: float | None = Field(None, gt=0)

    def to_helm(self) -> str:
        return self.polymer_id if self.ratio is None else f"{self.polymer_id}:{self.ratio:g}"


class GroupingNotation(BaseModel):
    """A HELM2 group such as ``G1(PEPTIDE1+PEPTIDE2)``."""

    model_config = ConfigDict(frozen=True)

    group_id: str = Field(..., pattern=r"^G[1-9]\d*$")
    kind: GroupKind
    members: tuple[GroupMember, ...] = Field(..., min_length=1)

    def to_helm(self) -> str:
        return f"{self.group_id}(" + self.kind.value.join(m.to_helm() for m in self.members) + ")"

    def __str__(self) -> str:
        return self.to_helm()
