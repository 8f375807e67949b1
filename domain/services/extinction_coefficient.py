"""Molar extinction coefficients derived from natural-analogue sequences."""

from __future__ import annotations

from typing import TYPE_CHECKING

from domain.services.sequence_extractor import NUCLEOTIDE_FALLBACK, SequenceExtractor
from domain.value_objects.monomer_notation import MonomerUnit
from domain.value_objects.polymer_type import PolymerType

if TYPE_CHECKING:
    from domain.aggregates.helm2_notation import HELM2Notation
    from domain.aggregates.monomer_registry import MonomerRegistry
    from domain.value_objects.connection_notation import ConnectionEndpoint

# Pace et al. (1995), 280 nm, M^-1 cm^-1
_TRYPTOPHAN = 5500.0
_TYROSINE = 1490.0
_CYSTINE = 125.0

# Nearest-neighbour parameters at 260 nm, mM^-1 cm^-1
_RNA_MONO = {"A": 15.4, "C": 7.2, "G": 11.5, "U": 9.9}
_RNA_DI = {
    "AA": 27.4, "AC": 21.2, "AG": 25.0, "AU": 24.0,
    "CA": 21.0, "CC": 14.2, "CG": 17.8, "CU": 16.2,
    "GA": 25.2, "GC": 17.4, "GG": 21.6, "GU": 21.2,
    "UA": 24.6, "UC": 17.2, "UG": 20.0, "UU": 19.6,
}
_DNA_MONO = {"A": 15.4, "C": 7.4, "G": 11.5, "T": 8.7}
_DNA_DI = {
    "AA": 27.4, "AC": 21.2, "AG": 25.0, "AT": 22.8,
    "CA": 21.2, "CC": 14.6, "CG": 18.0, "CT": 15.2,
    "GA": 25.2, "GC": 17.6, "GG": 21.6, "GT": 20.0,
    "TA": 23.4, "TC": 16.2, "TG": 19.0, "TT": 16.8,
}


def nearest_neighbour_coefficient(sequence: str) -> float | None:
    """Extinction coefficient (M^-1 cm^-1) of a single strand, or None if undefined.

    Sequences containing T use the DNA table (U read as T); others use the
    RNA table. Any letter outside the table makes the result undefined.
    """
    if not sequence:
        return None
    if "T" in sequence:
        mono, di = _DNA_MONO, _DNA_DI
        sequence = sequence.replace("U", "T")
    else:
        mono, di = _RNA_MONO, _RNA_DI
    if any(letter not in mono for letter in sequence):
        return None
    if len(sequence) == 1:
        return mono[sequence] * 1000.0

    pairs = sum(di[sequence[i : i + 2]] for i in range(len(sequence) - 1))
    inner = sum(mono[letter] for letter in sequence[1:-1])
    return (pairs - inner) * 1000.0


def pace_coefficient(sequence: str, cystines: int = 0) -> float:
    """Peptide extinction coefficient at 280 nm by the Pace method."""
    return sequence.count("W") * _TRYPTOPHAN + sequence.count("Y") * _TYROSINE + cystines * _CYSTINE


class ExtinctionCoefficientCalculator:
    """Sum per-polymer extinction coefficients of a notation.

    Peptides use the Pace method with one cystine per disulfide connection.
    Nucleic acid strands use the nearest-neighbour model. The result is None
    when there is nothing to absorb (no peptide or nucleotide polymer) or a
    strand contains a nucleotide without a natural analogue.
    """

    def __init__(self, registry: MonomerRegistry) -> None:
        self.registry = registry
        self.sequences = SequenceExtractor(registry)

    def calculate(self, notation: HELM2Notation) -> float | None:
        peptides = notation.polymers_of_type(PolymerType.PEPTIDE)
        strands = notation.polymers_of_type(PolymerType.RNA)
        if not peptides and not strands:
            return None

        total = 0.0
        for polymer in peptides:
            sequence = self.sequences.polymer_sequence(polymer)
            total += pace_coefficient(sequence, self._cystines(notation, str(polymer.polymer_id)))
        for polymer in strands:
            sequence = self.sequences.polymer_sequence(polymer)
            if NUCLEOTIDE_FALLBACK in sequence:
                return None
            coefficient = nearest_neighbour_coefficient(sequence)
            if coefficient is None:
                return None
            total += coefficient
        return total

    def _cystines(self, notation: HELM2Notation, polymer_id: str) -> int:
        """Count disulfide bridges that start on this polymer."""
        count = 0
        for connection in notation.edge_connections:
            if connection.source.polymer_id != polymer_id:
                continue
            if connection.source.attachment != "R3" or connection.target.attachment != "R3":
                continue
            if self._is_cysteine(notation, connection.source) and self._is_cysteine(
                notation,
                connection.target,
            ):
                count += 1
        return count

    def _is_cysteine(self, notation: HELM2Notation, endpoint: ConnectionEndpoint) -> bool:
        polymer = notation.polymer(endpoint.polymer_id)
        if polymer is None or polymer.polymer_type is not PolymerType.PEPTIDE:
            return False
        if endpoint.position is None:
            return False
        item = polymer.position(endpoint.position)
        if not isinstance(item, MonomerUnit) or item.is_smiles:
            return False
        monomer = self.registry.resolve(PolymerType.PEPTIDE, item.symbol)
        return monomer is not None and monomer.natural_analog == "C"
