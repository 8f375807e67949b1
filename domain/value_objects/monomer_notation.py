from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.value_objects.polymer_type import PolymerType

_MAPPED_DUMMY = re.compile(r"\[\*:(\d+)\]")
_ISOTOPE_DUMMY = re.compile(r"\[(\d+)\*\]")
_CX_ATOM_LABELS = re.compile(r"\|\s*\$([^$]*)\$")
_CX_R_LABEL = re.compile(r"^_R(\d+)$")


def smiles_attachment_labels(smiles: str) -> tuple[str, ...]:
    """Return the R-group labels declared by an inline SMILES, sorted by number.

    Three spellings are recognised: ``[*:1]``, ``[1*]`` and ChemAxon extended
    SMILES atom labels (``[*]CC[*] |$_R1;;;_R2$|``).
    """
    numbers = {int(n) for n in _MAPPED_DUMMY.findall(smiles)}
    numbers.update(int(n) for n in _ISOTOPE_DUMMY.findall(smiles))
    for block in _CX_ATOM_LABELS.findall(smiles):
        for label in block.split(";"):
            match = _CX_R_LABEL.match(label.strip())
            if match:
                numbers.add(int(match.group(1)))
    return tuple(f"R{n}" for n in sorted(numbers))


def _format_symbol(symbol: str) -> str:
    return symbol if len(symbol) == 1 else f"[{symbol}]"


class MonomerUnit(BaseModel):
    """A single monomer reference: a registry symbol or an inline SMILES."""

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., min_length=1)
    is_smiles: bool = False
    is_branch: bool = False

    @property
    def attachment_labels(self) -> tuple[str, ...]:
        """R-groups declared inline; empty for registry monomers."""
        return smiles_attachment_labels(self.symbol) if self.is_smiles else ()

    def to_helm(self) -> str:
        if self.is_smiles:
            return f"[{self.symbol}]"
        return _format_symbol(self.symbol)


class GroupKind(str, Enum):
    """Ambiguity operator of a monomer group."""

    MIXTURE = "+"
    OR = ","


class GroupAlternative(BaseModel):
    model_config = ConfigDict(frozen=True)

    unit: MonomerUnit
    ratio: float | None = Field(None, gt=0)

    def to_helm(self) -> str:
        if self.ratio is None:
            return self.unit.to_helm()
        return f"{self.unit.to_helm()}:{self.ratio:g}"


class MonomerGroup(BaseModel):
    """An ambiguous position such as ``(A+G)`` or ``(A,G)``."""

    model_config = ConfigDict(frozen=True)

    kind: GroupKind
    alternatives: tuple[GroupAlternative, ...] = Field(..., min_length=2)

    def to_helm(self) -> str:
        return "(" + self.kind.value.join(alt.to_helm() for alt in self.alternatives) + ")"


MonomerPosition = MonomerUnit | MonomerGroup


class MonomerElement(BaseModel):
    """One ``.``-separated element of a polymer body.

    Exactly one of ``units``, ``group`` or ``children`` is populated. ``units``
    holds a plain monomer or a nucleotide (sugar, base, phosphate in written
    order); ``children`` holds a repeated sub-sequence such as ``(A.G)'3'``.
    """

    model_config = ConfigDict(frozen=True)

    units: tuple[MonomerUnit, ...] = ()
    group: MonomerGroup | None = None
    children: tuple[MonomerElement, ...] = ()
    repeat: int = Field(1, ge=1)
    annotation: str | None = None

    @model_validator(mode="after")
    def check_single_payload(self) -> MonomerElement:
        populated = sum((bool(self.units), self.group is not None, bool(self.children)))
        if populated != 1:
            msg = "a monomer element holds exactly one of units, group or children"
            raise ValueError(msg)
        return self

    def expand(self) -> list[MonomerElement]:
        """Flatten repeats into a list of single-occurrence elements."""
        if self.children:
            once = [item for child in self.children for item in child.expand()]
            return once * self.repeat
        single = self.model_copy(update={"repeat": 1, "annotation": None})
        return [single] * self.repeat

    def positions(self) -> list[MonomerPosition]:
        """Monomer positions of one occurrence, in written order."""
        if self.group is not None:
            return [self.group]
        return list(self.units)

    def to_helm(self, polymer_type: PolymerType, include_annotations: bool = True) -> str:
        if self.children:
            body = "(" + ".".join(
                child.to_helm(polymer_type, include_annotations) for child in self.children
            ) + ")"
        elif self.group is not None:
            body = self.group.to_helm()
        elif polymer_type is PolymerType.BLOB:
            body = self.units[0].symbol
        else:
            body = "".join(
                f"({unit.to_helm()})" if unit.is_branch else unit.to_helm() for unit in self.units
            )
        if self.repeat != 1:
            body += f"'{self.repeat}'"
        if include_annotations and self.annotation:
            body += f'"{self.annotation}"'
        return body


MonomerElement.model_rebuild()
