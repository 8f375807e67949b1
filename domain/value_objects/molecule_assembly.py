from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from domain.value_objects.monomer import Attachment


class AssemblyNode(BaseModel):
    """A monomer instance placed in the assembled molecule."""

    model_config = ConfigDict(frozen=True)

    index: int
    label: str
    smiles: str
    attachments: tuple[Attachment, ...] = ()


class AssemblyBond(BaseModel):
    """A bond formed between two attachment points; both caps are lost."""

    model_config = ConfigDict(frozen=True)

    source_node: int
    source_attachment: str
    target_node: int
    target_attachment: str


class MoleculeAssembly(BaseModel):
    """Chemistry-free description of a whole notation as monomers plus bonds.

    Attachment points not consumed by a bond keep their cap group. A chemistry
    toolkit turns this into a single structure.
    """

    model_config = ConfigDict(frozen=True)

    nodes: tuple[AssemblyNode, ...]
    bonds: tuple[AssemblyBond, ...] = ()

    def used_attachments(self) -> set[tuple[int, str]]:
        used: set[tuple[int, str]] = set()
        for bond in self.bonds:
            used.add((bond.source_node, bond.source_attachment))
            used.add((bond.target_node, bond.target_attachment))
        return used
