from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from domain.value_objects.molecule_assembly import MoleculeAssembly
    from domain.value_objects.molecule_properties import MoleculeProperties


class MoleculeToolkit(Protocol):
    """Port for cheminformatics work on assembled structures.

    The concrete adapter lives in infrastructure/chemistry/ and is backed by
    RDKit.
    """

    def canonicalize_fragment(self, smiles: str) -> str | None:
        """Return canonical SMILES for an inline fragment, keeping R-group labels.

        Returns None when the SMILES cannot be parsed.
        """
        ...

    def canonical_smiles(self, assembly: MoleculeAssembly) -> str:
        """Join the assembly into one molecule and write canonical SMILES.

        Raises:
            CanonicalizationError: If a monomer structure or bond cannot be built.

        """
        ...

    def properties(self, assembly: MoleculeAssembly) -> MoleculeProperties:
        """Compute molecular weight, formula and exact mass of the assembled molecule.

        The extinction coefficient is left unset; it is derived from sequences
        rather than structure.

        Raises:
            CanonicalizationError: If the assembly cannot be built into a molecule.

        """
        ...
