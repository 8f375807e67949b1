"""Tests for the RDKit molecule toolkit."""

from __future__ import annotations

import re

import pytest

from domain.aggregates.monomer_registry import MonomerRegistry
from domain.exceptions import CanonicalizationError
from domain.services.molecule_assembly_builder import MoleculeAssemblyBuilder
from domain.services.notation_parser import HelmNotationParser
from domain.value_objects.molecule_assembly import AssemblyNode, MoleculeAssembly
from domain.value_objects.monomer import CapGroup
from infrastructure.chemistry.rdkit_molecule_toolkit import RdkitMoleculeToolkit
from tests.samples import CYCLIC_PEPTIDE, CYCLIC_PEPTIDE_V2, OLIGO_CHEM_CONJUGATE, PEPTIDE_CHEM_CONJUGATE

Chem = pytest.importorskip("rdkit.Chem")
Descriptors = pytest.importorskip("rdkit.Chem.Descriptors")


def canonical(smiles: str) -> str:
    return Chem.MolToSmiles(Chem.MolFromSmiles(smiles))


@pytest.fixture
def toolkit() -> RdkitMoleculeToolkit:
    return RdkitMoleculeToolkit()


@pytest.fixture
def assemble(registry: MonomerRegistry, parser: HelmNotationParser):  # type: ignore[no-untyped-def]
    builder = MoleculeAssemblyBuilder(registry)

    def _assemble(text: str) -> MoleculeAssembly:
        return builder.build(parser.parse(text))

    return _assemble


class TestCanonicalizeFragment:
    def test_cx_labels_become_map_numbers(self, toolkit: RdkitMoleculeToolkit) -> None:
        """Test that CX atom labels and map numbers give the same fragment."""
        from_labels = toolkit.canonicalize_fragment("[*]OCCOCCOCCO[*] |$_R1;;;;;;;;;;;_R3$|")
        from_maps = toolkit.canonicalize_fragment("[*:3]OCCOCCOCCO[*:1]")

        assert from_labels == from_maps
        assert "[*:1]" in from_labels
        assert "[*:3]" in from_labels
        assert "|" not in from_labels

    def test_isotope_labels(self, toolkit: RdkitMoleculeToolkit) -> None:
        assert toolkit.canonicalize_fragment("[1*]CC[2*]") == toolkit.canonicalize_fragment(
            "[*:1]CC[*:2]",
        )

    def test_invalid(self, toolkit: RdkitMoleculeToolkit) -> None:
        assert toolkit.canonicalize_fragment("C1CC(") is None


class TestAssembly:
    def test_single_residue_keeps_stereo(self, toolkit: RdkitMoleculeToolkit, assemble) -> None:  # type: ignore[no-untyped-def]
        """Test that capping gives L-alanine."""
        smiles = toolkit.canonical_smiles(assemble("PEPTIDE1{A}$$$$V2.0"))
        assert smiles == canonical("C[C@H](N)C(=O)O")

    def test_dipeptide(self, toolkit: RdkitMoleculeToolkit, assemble) -> None:  # type: ignore[no-untyped-def]
        assembly = assemble("PEPTIDE1{G.G}$$$$V2.0")

        assert toolkit.canonical_smiles(assembly) == canonical("NCC(=O)NCC(=O)O")
        properties = toolkit.properties(assembly)
        assert properties.molecular_formula == "C4H8N2O3"
        assert properties.molecular_weight == pytest.approx(132.12, abs=0.01)
        assert properties.exact_mass == pytest.approx(132.0535, abs=0.001)
        assert properties.extinction_coefficient is None

    def test_cyclic_peptide_formula(self, toolkit: RdkitMoleculeToolkit, assemble) -> None:  # type: ignore[no-untyped-def]
        """Test that the disulfide bridge removes two hydrogens."""
        properties = toolkit.properties(assemble(CYCLIC_PEPTIDE))
        assert properties.molecular_formula == "C35H59N13O10S2"

    def test_consistent_with_canonical_smiles(
        self,
        toolkit: RdkitMoleculeToolkit,
        assemble,  # type: ignore[no-untyped-def]
    ) -> None:
        """Test that properties agree with the molecule written as SMILES."""
        from rdkit.Chem import Descriptors

        assembly = assemble(OLIGO_CHEM_CONJUGATE)
        smiles = toolkit.canonical_smiles(assembly)
        properties = toolkit.properties(assembly)

        assert "." not in smiles
        assert properties.molecular_weight == pytest.approx(
            Descriptors.MolWt(Chem.MolFromSmiles(smiles)),
            rel=1e-6,
        )

    def test_invalid_structure(self, toolkit: RdkitMoleculeToolkit) -> None:
        assembly = MoleculeAssembly(nodes=(AssemblyNode(index=0, label="CHEM1:1", smiles="C1CC("),))
        with pytest.raises(CanonicalizationError):
            toolkit.canonical_smiles(assembly)


_MAPPED_DUMMY = re.compile(r"\[\*:(\d+)\]")
_CAP_SMILES = {CapGroup.H: "[H]", CapGroup.OH: "O"}


def mol_wt(smiles: str) -> float:
    return Descriptors.MolWt(Chem.MolFromSmiles(smiles))


def cap_weight(cap: CapGroup) -> float:
    hydrogen = Chem.GetPeriodicTable().GetAtomicWeight("H")
    if cap is CapGroup.H:
        return hydrogen
    return Chem.GetPeriodicTable().GetAtomicWeight("O") + hydrogen


def weight_from_monomers(assembly: MoleculeAssembly) -> float:
    """Sum of every monomer with all caps in place, minus the two caps each bond removes."""
    total = 0.0
    caps_by_node = []
    for node in assembly.nodes:
        caps = {a.label: a.cap for a in node.attachments}
        caps_by_node.append(caps)
        capped = _MAPPED_DUMMY.sub(lambda m, caps=caps: _CAP_SMILES[caps[f"R{m.group(1)}"]], node.smiles)
        total += mol_wt(capped)
    for bond in assembly.bonds:
        total -= cap_weight(caps_by_node[bond.source_node][bond.source_attachment])
        total -= cap_weight(caps_by_node[bond.target_node][bond.target_attachment])
    return total


class TestMolecularWeight:
    def test_cyclic_peptide_from_free_amino_acids(self, toolkit: RdkitMoleculeToolkit, assemble) -> None:  # type: ignore[no-untyped-def]
        """Test MW against free residues minus eight waters and the disulfide's H2."""
        alanine = mol_wt("CC(N)C(=O)O")
        cysteine = mol_wt("NC(CS)C(=O)O")
        glycine = mol_wt("NCC(=O)O")
        lysine = mol_wt("NCCCCC(N)C(=O)O")
        histidine = mol_wt("NC(Cc1c[nH]cn1)C(=O)O")
        residues = 3 * alanine + 2 * cysteine + glycine + 2 * lysine + histidine
        expected = residues - 8 * mol_wt("O") - 2 * cap_weight(CapGroup.H)

        properties = toolkit.properties(assemble(CYCLIC_PEPTIDE))

        assert properties.molecular_weight == pytest.approx(expected, abs=1e-3)

    @pytest.mark.parametrize(
        "text",
        [
            CYCLIC_PEPTIDE,
            CYCLIC_PEPTIDE_V2,
            PEPTIDE_CHEM_CONJUGATE,
            "RNA1{R(A)P.[mR](U)P.[dR](G)}$$$$V2.0",
            "PEPTIDE1{[ac].A.G.[am]}$$$$V2.0",
        ],
    )
    def test_matches_capped_monomer_sum(
        self,
        toolkit: RdkitMoleculeToolkit,
        assemble,  # type: ignore[no-untyped-def]
        text: str,
    ) -> None:
        assembly = assemble(text)

        properties = toolkit.properties(assembly)

        assert properties.molecular_weight == pytest.approx(weight_from_monomers(assembly), abs=1e-3)
