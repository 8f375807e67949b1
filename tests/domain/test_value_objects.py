"""Tests for notation value objects."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from domain.exceptions import ParseError
from domain.value_objects.connection_notation import ConnectionEndpoint, ConnectionNotation
from domain.value_objects.monomer import Attachment, CapGroup, Monomer
from domain.value_objects.monomer_notation import (
    GroupAlternative,
    GroupKind,
    MonomerElement,
    MonomerGroup,
    MonomerUnit,
    smiles_attachment_labels,
)
from domain.value_objects.polymer_id import PolymerId
from domain.value_objects.polymer_notation import PolymerNotation
from domain.value_objects.polymer_type import PolymerType


class TestPolymerId:
    def test_parse(self) -> None:
        """Test parsing a typed polymer id."""
        polymer_id = PolymerId.parse("PEPTIDE12")
        assert polymer_id.polymer_type is PolymerType.PEPTIDE
        assert polymer_id.number == 12
        assert str(polymer_id) == "PEPTIDE12"

    @pytest.mark.parametrize("text", ["PEPTIDE", "PROTEIN1", "RNA0", "rna1"])
    def test_parse_invalid(self, text: str) -> None:
        """Test that malformed ids raise ParseError."""
        with pytest.raises(ParseError):
            PolymerId.parse(text)

    def test_type_order(self) -> None:
        """Test the polymer type ordering used for canonical output."""
        assert (
            PolymerType.PEPTIDE.sort_order
            < PolymerType.RNA.sort_order
            < PolymerType.CHEM.sort_order
            < PolymerType.BLOB.sort_order
        )


class TestMonomer:
    def test_attachments_must_match_smiles(self) -> None:
        """Test that a declared attachment missing from the SMILES is rejected."""
        with pytest.raises(PydanticValidationError):
            Monomer(
                symbol="X1",
                polymer_type=PolymerType.PEPTIDE,
                smiles="[*:1]NCC(=O)O",
                attachments=(Attachment(label="R1"), Attachment(label="R2")),
            )

    def test_attachment_lookup(self) -> None:
        monomer = Monomer(
            symbol="G",
            polymer_type=PolymerType.PEPTIDE,
            smiles="[*:1]NCC([*:2])=O",
            attachments=(Attachment(label="R1"), Attachment(label="R2", cap=CapGroup.OH)),
        )
        assert monomer.attachment_labels == frozenset({"R1", "R2"})
        assert monomer.attachment("R2").cap is CapGroup.OH
        assert monomer.attachment("R3") is None

    def test_invalid_label(self) -> None:
        with pytest.raises(PydanticValidationError):
            Attachment(label="X1")


class TestInlineSmiles:
    @pytest.mark.parametrize(
        ("smiles", "labels"),
        [
            ("[*:1]CC[*:2]", ("R1", "R2")),
            ("[3*]CC[1*]", ("R1", "R3")),
            ("[*]OCCO[*] |$_R1;;;;;_R3$|", ("R1", "R3")),
            ("CCO", ()),
        ],
    )
    def test_attachment_labels(self, smiles: str, labels: tuple[str, ...]) -> None:
        """Test that all R-group spellings are recognised."""
        assert smiles_attachment_labels(smiles) == labels

    def test_unit_to_helm(self) -> None:
        assert MonomerUnit(symbol="A").to_helm() == "A"
        assert MonomerUnit(symbol="dK").to_helm() == "[dK]"
        assert MonomerUnit(symbol="[*:1]CC", is_smiles=True).to_helm() == "[[*:1]CC]"


class TestMonomerElement:
    def test_requires_single_payload(self) -> None:
        """Test that an element cannot be empty."""
        with pytest.raises(PydanticValidationError):
            MonomerElement()

    def test_expand_repeated_children(self) -> None:
        """Test that (A.G)'2' expands into four positions."""
        element = MonomerElement(
            children=(
                MonomerElement(units=(MonomerUnit(symbol="A"),)),
                MonomerElement(units=(MonomerUnit(symbol="G"),)),
            ),
            repeat=2,
        )
        symbols = [e.units[0].symbol for e in element.expand()]
        assert symbols == ["A", "G", "A", "G"]

    def test_group_to_helm(self) -> None:
        group = MonomerGroup(
            kind=GroupKind.MIXTURE,
            alternatives=(
                GroupAlternative(unit=MonomerUnit(symbol="A"), ratio=1.5),
                GroupAlternative(unit=MonomerUnit(symbol="G")),
            ),
        )
        element = MonomerElement(group=group, annotation="note")
        assert element.to_helm(PolymerType.PEPTIDE) == '(A:1.5+G)"note"'
        assert element.to_helm(PolymerType.PEPTIDE, include_annotations=False) == "(A:1.5+G)"


class TestPolymerNotation:
    def test_positions_are_one_based(self) -> None:
        polymer = PolymerNotation(
            polymer_id=PolymerId.parse("PEPTIDE1"),
            elements=(
                MonomerElement(units=(MonomerUnit(symbol="A"),)),
                MonomerElement(units=(MonomerUnit(symbol="G"),), repeat=2),
            ),
        )
        assert polymer.monomer_count == 3
        assert polymer.position(1).symbol == "A"
        assert polymer.position(3).symbol == "G"
        assert polymer.position(0) is None
        assert polymer.position(4) is None
        assert str(polymer) == "PEPTIDE1{A.G'2'}"


class TestConnectionNotation:
    def test_base_pair_and_ambiguity(self) -> None:
        pair = ConnectionNotation(
            source=ConnectionEndpoint(polymer_id="RNA1", position=2, attachment="pair"),
            target=ConnectionEndpoint(polymer_id="RNA2", position=5, attachment="pair"),
        )
        assert pair.is_base_pair is True
        assert pair.is_ambiguous is False

        unknown = ConnectionNotation(
            source=ConnectionEndpoint(polymer_id="PEPTIDE1", position=None, attachment="R3"),
            target=ConnectionEndpoint(polymer_id="CHEM1", position=1, attachment="R1"),
        )
        assert unknown.is_ambiguous is True
        assert str(unknown) == "PEPTIDE1,CHEM1,?:R3-1:R1"
