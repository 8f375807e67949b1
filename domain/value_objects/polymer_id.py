from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

from domain.exceptions import ParseError
from domain.value_objects.polymer_type import PolymerType

_POLYMER_ID_PATTERN = re.compile(r"^(PEPTIDE|RNA|CHEM|BLOB)([1-9]\d*)$")


class PolymerId(BaseModel):
    """Identifier of one polymer inside a notation, e.g. ``PEPTIDE1``.

    The type prefix is a closed tag; code that needs type-specific behaviour
    matches on ``polymer_type`` rather than inspecting classes.
    """

    model_config = ConfigDict(frozen=True)

    polymer_type: PolymerType
    number: int = Field(..., ge=1)

    @classmethod
    def parse(cls, text: str) -> PolymerId:
        """Parse ``PEPTIDE1``-style text.

        Raises:
            ParseError: If the prefix is unknown or the number is missing.

        """
        match = _POLYMER_ID_PATTERN.match(text.strip())
        if match is None:
            msg = f"Invalid polymer id: {text!r}"
            raise ParseError(msg, section="polymers", token=text)
        return cls(polymer_type=PolymerType(match.group(1)), number=int(match.group(2)))

    def __str__(self) -> str:
        return f"{self.polymer_type.value}{self.number}"
