from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.value_objects.polymer_type import PolymerType

_ATTACHMENT_LABEL = re.compile(r"^R[1-9]\d*$")
_MAPPED_DUMMY = re.compile(r"\[\*:(\d+)\]")


class MonomerType(str, Enum):
    """Role of a monomer within its polymer."""

    BACKBONE = "Backbone"
    BRANCH = "Branch"
    UNDEFINED = "Undefined"


class CapGroup(str, Enum):
    """Leaving group that fills an unused attachment point."""

    H = "H"
    OH = "OH"


class Attachment(BaseModel):
    """A named connection point (``R1``, ``R2``...) and its cap group."""

    model_config = ConfigDict(frozen=True)

    label: str
    cap: CapGroup = CapGroup.H

    @field_validator("label")
    @classmethod
    def validate_label(cls, v: str) -> str:
        """Ensure the label follows the ``R<n>`` convention."""
        if not _ATTACHMENT_LABEL.match(v):
            msg = f"attachment label must look like R1, R2...: {v!r}"
            raise ValueError(msg)
        return v

    @property
    def number(self) -> int:
        return int(self.label[1:])


class Monomer(BaseModel):
    """Chemical definition of a monomer as held by the registry.

    Attachment points are written in ``smiles`` as mapped dummy atoms, so
    ``[*:3]`` marks R3. Every attachment listed must appear in the SMILES.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., min_length=1)
    polymer_type: PolymerType
    monomer_type: MonomerType = MonomerType.BACKBONE
    name: str = ""
    smiles: str = Field(..., min_length=1)
    natural_analog: str | None = None
    attachments: tuple[Attachment, ...] = ()

    @model_validator(mode="after")
    def check_attachments_in_smiles(self) -> Monomer:
        """Every declared attachment must be present as a mapped dummy atom."""
        mapped = {f"R{n}" for n in _MAPPED_DUMMY.findall(self.smiles)}
        declared = {a.label for a in self.attachments}
        if mapped != declared:
            msg = (
                f"monomer {self.symbol!r}: attachments {sorted(declared)} do not match "
                f"SMILES attachment points {sorted(mapped)}"
            )
            raise ValueError(msg)
        return self

    @property
    def attachment_labels(self) -> frozenset[str]:
        return frozenset(a.label for a in self.attachments)

    def attachment(self, label: str) -> Attachment | None:
        return next((a for a in self.attachments if a.label == label), None)
