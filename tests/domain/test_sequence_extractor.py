"""Tests for SequenceExtractor."""

from __future__ import annotations

import pytest

from domain.aggregates.monomer_registry import MonomerRegistry
from domain.exceptions import UnknownAnalogueError
from domain.services.notation_parser import HelmNotationParser
from domain.services.sequence_extractor import SequenceExtractor
from domain.value_objects.polymer_type import PolymerType
from tests.mocks import peptide_monomer
from tests.samples import CYCLIC_PEPTIDE, OLIGO_CHEM_CONJUGATE

SEQUENCE_WITHOUT_BRIDGE = "PEPTIDE1{A.A.C.G.K.[dK].C.H.A}$$$$"


@pytest.fixture
def extractor(registry: MonomerRegistry) -> SequenceExtractor:
    return SequenceExtractor(registry)


@pytest.fixture
def analogue_free_registry() -> MonomerRegistry:
    """Registry whose dK has no natural analogue."""
    return MonomerRegistry(
        [
            peptide_monomer("A", "A"),
            peptide_monomer("C", "C"),
            peptide_monomer("G", "G"),
            peptide_monomer("K", "K"),
            peptide_monomer("H", "H"),
            peptide_monomer("dK"),
        ],
    )


class TestPeptideSequences:
    def test_registry_analogue_used(
        self,
        parser: HelmNotationParser,
        extractor: SequenceExtractor,
    ) -> None:
        """Test that dK maps to K through its declared analogue."""
        sequences = extractor.extract(parser.parse(CYCLIC_PEPTIDE), PolymerType.PEPTIDE)
        assert len(sequences) == 1
        assert sequences[0].polymer_id == "PEPTIDE1"
        assert sequences[0].sequence == "AACGKKCHA"

    def test_fallback_letter(
        self,
        parser: HelmNotationParser,
        analogue_free_registry: MonomerRegistry,
    ) -> None:
        """Test that a monomer without analogue becomes X."""
        extractor = SequenceExtractor(analogue_free_registry)
        sequences = extractor.extract(parser.parse(SEQUENCE_WITHOUT_BRIDGE), PolymerType.PEPTIDE)
        assert sequences[0].sequence == "AACGKXCHA"

    def test_strict_mode_names_symbol(
        self,
        parser: HelmNotationParser,
        analogue_free_registry: MonomerRegistry,
    ) -> None:
        extractor = SequenceExtractor(analogue_free_registry)
        with pytest.raises(UnknownAnalogueError) as exc_info:
            extractor.extract(parser.parse(SEQUENCE_WITHOUT_BRIDGE), PolymerType.PEPTIDE, strict=True)
        assert exc_info.value.symbol == "dK"

    def test_inline_smiles_and_library_without_analogue(
        self,
        parser: HelmNotationParser,
        extractor: SequenceExtractor,
    ) -> None:
        notation = parser.parse("PEPTIDE1{A.[Aib].[[*:1]NCC([*:2])=O].G}$$$$V2.0")
        assert extractor.extract(notation, PolymerType.PEPTIDE)[0].sequence == "AXXG"

    def test_only_requested_type(
        self,
        parser: HelmNotationParser,
        extractor: SequenceExtractor,
    ) -> None:
        notation = parser.parse("PEPTIDE1{W}|RNA1{R(A)P}|PEPTIDE2{Y.Y}$$$$V2.0")
        sequences = extractor.extract(notation, PolymerType.PEPTIDE)
        assert [(s.polymer_id, s.sequence) for s in sequences] == [("PEPTIDE1", "W"), ("PEPTIDE2", "YY")]

    def test_chem_has_no_sequence(
        self,
        parser: HelmNotationParser,
        extractor: SequenceExtractor,
    ) -> None:
        with pytest.raises(ValueError, match="PEPTIDE and RNA"):
            extractor.extract(parser.parse("CHEM1{MCC}$$$$V2.0"), PolymerType.CHEM)


class TestNucleotideSequences:
    def test_bases_read_from_branches(
        self,
        parser: HelmNotationParser,
        extractor: SequenceExtractor,
    ) -> None:
        """Test that sugars and phosphates add nothing beyond their base."""
        sequences = extractor.extract(parser.parse(OLIGO_CHEM_CONJUGATE), PolymerType.RNA)
        assert [(s.polymer_id, s.sequence) for s in sequences] == [("RNA1", "AA")]

    def test_modified_base_analogue(
        self,
        parser: HelmNotationParser,
        extractor: SequenceExtractor,
    ) -> None:
        notation = parser.parse("RNA1{[dR](T)P.[dR]([5meC])P.[dR](G)}$$$$V2.0")
        assert extractor.extract(notation, PolymerType.RNA)[0].sequence == "TCG"

    def test_abasic_sugar_is_fallback(
        self,
        parser: HelmNotationParser,
        extractor: SequenceExtractor,
    ) -> None:
        notation = parser.parse("RNA1{R(A)P.R.P.R(U)}$$$$V2.0")
        assert extractor.extract(notation, PolymerType.RNA)[0].sequence == "ANU"
