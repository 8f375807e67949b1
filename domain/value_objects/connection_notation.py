from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

BASE_PAIR = "pair"
UNKNOWN = "?"


class ConnectionEndpoint(BaseModel):
    """One side of a connection: polymer (or group) id, position, attachment."""

    model_config = ConfigDict(frozen=True)

    polymer_id: str = Field(..., min_length=1)
    position: int | None = Field(None, ge=1)
    attachment: str = Field(..., min_length=1)

    @property
    def is_position_known(self) -> bool:
        return self.position is not None

    def position_to_helm(self) -> str:
        return UNKNOWN if self.position is None else str(self.position)


class ConnectionNotation(BaseModel):
    """A link between two polymers, or a polymer and itself.

    ``PEPTIDE1,PEPTIDE1,3:R3-7:R3`` is a disulfide bridge; attachments named
    ``pair`` on both sides describe a hydrogen-bonded base pair.
    """

    model_config = ConfigDict(frozen=True)

    source: ConnectionEndpoint
    target: ConnectionEndpoint
    annotation: str | None = None

    @property
    def is_base_pair(self) -> bool:
        return self.source.attachment == BASE_PAIR and self.target.attachment == BASE_PAIR

    @property
    def is_ambiguous(self) -> bool:
        return any(
            end.position is None or end.attachment == UNKNOWN for end in (self.source, self.target)
        )

    def to_helm(self, include_annotations: bool = True) -> str:
        text = (
            f"{self.source.polymer_id},{self.target.polymer_id},"
            f"{self.source.position_to_helm()}:{self.source.attachment}-"
            f"{self.target.position_to_helm()}:{self.target.attachment}"
        )
        if include_annotations and self.annotation:
            text += f'"{self.annotation}"'
        return text

    def __str__(self) -> str:
        return self.to_helm()
