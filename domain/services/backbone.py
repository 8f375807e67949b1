"""Implicit bonds formed by writing monomers next to each other in a polymer."""

from __future__ import annotations

from typing import NamedTuple

from domain.value_objects.monomer_notation import MonomerUnit
from domain.value_objects.polymer_notation import PolymerNotation
from domain.value_objects.polymer_type import PolymerType


class BackboneLink(NamedTuple):
    source_position: int
    source_attachment: str
    target_position: int
    target_attachment: str


def backbone_links(polymer: PolymerNotation) -> list[BackboneLink]:
    """Return the sequence bonds of a polymer, using 1-based positions.

    Peptide residues join R2 to the next residue's R1. In nucleic acids the
    backbone (sugar, phosphate) joins the same way and a base hangs off the
    sugar written before it, sugar R3 to base R1.
    """
    match polymer.polymer_type:
        case PolymerType.PEPTIDE:
            count = polymer.monomer_count
            return [BackboneLink(i, "R2", i + 1, "R1") for i in range(1, count)]
        case PolymerType.RNA:
            return _nucleotide_links(polymer)
        case _:
            return []


def _nucleotide_links(polymer: PolymerNotation) -> list[BackboneLink]:
    links: list[BackboneLink] = []
    position = 0
    previous_backbone: int | None = None
    for element in polymer.expanded_elements():
        for item in element.positions():
            position += 1
            if isinstance(item, MonomerUnit) and item.is_branch:
                if previous_backbone is not None:
                    links.append(BackboneLink(previous_backbone, "R3", position, "R1"))
                continue
            if previous_backbone is not None:
                links.append(BackboneLink(previous_backbone, "R2", position, "R1"))
            previous_backbone = position
    return links
