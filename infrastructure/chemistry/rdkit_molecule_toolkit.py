from __future__ import annotations

import re
from types import ModuleType
from typing import TYPE_CHECKING

import structlog

from application.ports.molecule_toolkit import MoleculeToolkit
from domain.exceptions import CanonicalizationError, ChemistryToolkitError
from domain.value_objects.monomer import CapGroup
from domain.value_objects.molecule_properties import MoleculeProperties

if TYPE_CHECKING:
    from rdkit import Chem

    from domain.value_objects.molecule_assembly import AssemblyNode, MoleculeAssembly

logger = structlog.get_logger()

_R_LABEL = re.compile(r"^_?R(\d+)$")
_LABEL_PROPS = ("atomLabel", "dummyLabel", "_MolFileRLabel")
_CAP_ATOMIC_NUMBERS = {CapGroup.H: 1, CapGroup.OH: 8}


def _chem() -> ModuleType:
    """Import ``rdkit.Chem`` on first use; RDKit is heavy and only needed for structures."""
    try:
        from rdkit import Chem
    except ImportError as e:
        raise _unavailable(e) from e
    return Chem


def _descriptors() -> tuple[ModuleType, ModuleType]:
    try:
        from rdkit.Chem import Descriptors, rdMolDescriptors
    except ImportError as e:
        raise _unavailable(e) from e
    return Descriptors, rdMolDescriptors


def _unavailable(e: ImportError) -> ChemistryToolkitError:
    logger.error("rdkit_unavailable", error=str(e))
    return ChemistryToolkitError(f"RDKit is not available: {e}")


def _r_group_number(atom: Chem.Atom) -> int | None:
    """Read the R-group number of a dummy atom from any of the ways SMILES can carry it."""
    if atom.GetAtomMapNum():
        return atom.GetAtomMapNum()
    props = atom.GetPropsAsDict(includePrivate=True, includeComputed=False)
    if props.get("_MolFileRLabel"):
        return int(props["_MolFileRLabel"])
    for name in ("atomLabel", "dummyLabel"):
        match = _R_LABEL.match(str(props.get(name, "")))
        if match:
            return int(match.group(1))
    if atom.GetIsotope():
        return atom.GetIsotope()
    return None


def _clear_labels(atom: Chem.Atom) -> None:
    atom.SetAtomMapNum(0)
    atom.SetIsotope(0)
    for name in _LABEL_PROPS:
        if atom.HasProp(name):
            atom.ClearProp(name)


class RdkitMoleculeToolkit(MoleculeToolkit):
    """Structure assembly, canonical SMILES and bulk properties using RDKit.

    RDKit is imported inside each method, so parsing and validation never
    load it.
    """

    def canonicalize_fragment(self, smiles: str) -> str | None:
        """Return canonical SMILES with R-groups written as ``[*:n]``, or None if invalid."""
        Chem = _chem()

        mol = Chem.MolFromSmiles(smiles)
        if mol is None:
            return None
        for atom in mol.GetAtoms():
            if atom.GetAtomicNum() != 0:
                continue
            number = _r_group_number(atom)
            _clear_labels(atom)
            if number is not None:
                atom.SetAtomMapNum(number)
        return Chem.MolToSmiles(mol)

    def canonical_smiles(self, assembly: MoleculeAssembly) -> str:
        Chem = _chem()

        return Chem.MolToSmiles(self._assemble(assembly))

    def properties(self, assembly: MoleculeAssembly) -> MoleculeProperties:
        Descriptors, rdMolDescriptors = _descriptors()

        mol = self._assemble(assembly)
        return MoleculeProperties(
            molecular_weight=Descriptors.MolWt(mol),
            molecular_formula=rdMolDescriptors.CalcMolFormula(mol),
            exact_mass=Descriptors.ExactMolWt(mol),
        )

    def _assemble(self, assembly: MoleculeAssembly) -> Chem.Mol:
        """Join every monomer into one molecule.

        Each bond gets its own atom map number on the two dummy atoms it
        consumes; every other dummy atom becomes its cap. molzip then fuses
        the mapped pairs.
        """
        Chem = _chem()

        bond_numbers: dict[tuple[int, str], int] = {}
        for number, bond in enumerate(assembly.bonds, start=1):
            bond_numbers[(bond.source_node, bond.source_attachment)] = number
            bond_numbers[(bond.target_node, bond.target_attachment)] = number

        combined = None
        for node in assembly.nodes:
            fragment = self._fragment(node, bond_numbers)
            combined = fragment if combined is None else Chem.CombineMols(combined, fragment)
        if combined is None:
            msg = "Nothing to assemble"
            raise CanonicalizationError(msg)

        try:
            mol = Chem.molzip(combined)
            Chem.SanitizeMol(mol)
            mol = Chem.RemoveHs(mol)
        except (ValueError, RuntimeError) as e:
            logger.warning("molecule_assembly_failed", nodes=len(assembly.nodes), error=str(e))
            msg = f"Monomers could not be joined into one molecule: {e}"
            raise CanonicalizationError(msg) from e

        logger.debug("molecule_assembled", atoms=mol.GetNumAtoms(), bonds=len(assembly.bonds))
        return mol

    @staticmethod
    def _fragment(node: AssemblyNode, bond_numbers: dict[tuple[int, str], int]) -> Chem.Mol:
        Chem = _chem()

        mol = Chem.MolFromSmiles(node.smiles)
        if mol is None:
            msg = f"Structure of {node.label} is not valid SMILES: {node.smiles!r}"
            raise CanonicalizationError(msg)

        caps = {a.label: a.cap for a in node.attachments}
        mol = Chem.RWMol(mol)
        for atom in mol.GetAtoms():
            if atom.GetAtomicNum() != 0:
                continue
            number = _r_group_number(atom)
            label = f"R{number}" if number is not None else None
            _clear_labels(atom)

            bond_number = bond_numbers.get((node.index, label)) if label else None
            if bond_number is not None:
                atom.SetAtomMapNum(bond_number)
                continue

            atom.SetAtomicNum(_CAP_ATOMIC_NUMBERS[caps.get(label, CapGroup.H)])
            atom.SetFormalCharge(0)
            atom.SetNumExplicitHs(0)
            atom.SetNoImplicit(False)
            atom.SetIsAromatic(False)

        result = mol.GetMol()
        result.UpdatePropertyCache(strict=False)
        return result
