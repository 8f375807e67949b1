"""Domain service projecting polymers onto natural-analogue sequences."""

from __future__ import annotations

from typing import TYPE_CHECKING

from domain.exceptions import UnknownAnalogueError
from domain.value_objects.monomer_notation import MonomerGroup, MonomerUnit
from domain.value_objects.polymer_sequence import PolymerSequence
from domain.value_objects.polymer_type import PolymerType

if TYPE_CHECKING:
    from domain.aggregates.helm2_notation import HELM2Notation
    from domain.aggregates.monomer_registry import MonomerRegistry
    from domain.value_objects.monomer_notation import MonomerElement
    from domain.value_objects.polymer_notation import PolymerNotation

PEPTIDE_FALLBACK = "X"
NUCLEOTIDE_FALLBACK = "N"


class SequenceExtractor:
    """Map peptide residues and nucleotides to their natural one-letter codes.

    A monomer uses the analogue declared in the registry. Monomers without
    one (inline SMILES, ambiguous groups, library entries lacking an
    analogue) become ``X`` for peptides and ``N`` for nucleotides, or raise
    UnknownAnalogueError when ``strict`` is set.
    """

    def __init__(self, registry: MonomerRegistry) -> None:
        self.registry = registry

    def extract(
        self,
        notation: HELM2Notation,
        polymer_type: PolymerType,
        strict: bool = False,  # noqa: FBT001, FBT002
    ) -> list[PolymerSequence]:
        """Return one sequence per polymer of ``polymer_type``, in polymer order."""
        if polymer_type not in (PolymerType.PEPTIDE, PolymerType.RNA):
            msg = f"Sequences exist only for PEPTIDE and RNA polymers, not {polymer_type.value}"
            raise ValueError(msg)
        return [
            PolymerSequence(
                polymer_id=str(polymer.polymer_id),
                polymer_type=polymer_type,
                sequence=self.polymer_sequence(polymer, strict=strict),
            )
            for polymer in notation.polymers_of_type(polymer_type)
        ]

    def polymer_sequence(self, polymer: PolymerNotation, strict: bool = False) -> str:  # noqa: FBT001, FBT002
        match polymer.polymer_type:
            case PolymerType.PEPTIDE:
                return "".join(
                    self._letter(polymer, item, PEPTIDE_FALLBACK, strict)
                    for item in polymer.monomer_positions()
                )
            case PolymerType.RNA:
                letters = (
                    self._nucleotide_letter(polymer, element, strict)
                    for element in polymer.expanded_elements()
                )
                return "".join(letter for letter in letters if letter)
            case _:
                msg = f"{polymer.polymer_id} has no natural-analogue sequence"
                raise ValueError(msg)

    def _nucleotide_letter(
        self,
        polymer: PolymerNotation,
        element: MonomerElement,
        strict: bool,  # noqa: FBT001
    ) -> str:
        if element.group is not None:
            return self._letter(polymer, element.group, NUCLEOTIDE_FALLBACK, strict)

        base = next((unit for unit in element.units if unit.is_branch), None)
        if base is not None:
            return self._letter(polymer, base, NUCLEOTIDE_FALLBACK, strict)

        # A unit without a base is either a bare linker (skipped) or an abasic sugar.
        if any(self._is_sugar(unit) for unit in element.units):
            return self._letter(polymer, element.units[0], NUCLEOTIDE_FALLBACK, strict, analog=False)
        return ""

    def _is_sugar(self, unit: MonomerUnit) -> bool:
        if unit.is_smiles:
            return "R3" in unit.attachment_labels
        monomer = self.registry.resolve(PolymerType.RNA, unit.symbol)
        return monomer is not None and "R3" in monomer.attachment_labels

    def _letter(
        self,
        polymer: PolymerNotation,
        item: MonomerUnit | MonomerGroup,
        fallback: str,
        strict: bool,  # noqa: FBT001
        analog: bool = True,  # noqa: FBT001, FBT002
    ) -> str:
        if isinstance(item, MonomerGroup):
            symbol = item.to_helm()
        else:
            symbol = item.symbol
            if analog and not item.is_smiles:
                monomer = self.registry.resolve(polymer.polymer_type, item.symbol)
                if monomer is not None and monomer.natural_analog:
                    return monomer.natural_analog

        if strict:
            msg = f"Monomer '{symbol}' in {polymer.polymer_id} has no natural analogue"
            raise UnknownAnalogueError(msg, symbol=symbol)
        return fallback
