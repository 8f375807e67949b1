"""Domain service describing a notation as monomer structures plus bonds."""

from __future__ import annotations

from typing import TYPE_CHECKING

from domain.exceptions import CanonicalizationError
from domain.services.backbone import backbone_links
from domain.value_objects.molecule_assembly import AssemblyBond, AssemblyNode, MoleculeAssembly
from domain.value_objects.monomer import Attachment, CapGroup
from domain.value_objects.monomer_notation import MonomerGroup
from domain.value_objects.polymer_type import PolymerType

if TYPE_CHECKING:
    from domain.aggregates.helm2_notation import HELM2Notation
    from domain.aggregates.monomer_registry import MonomerRegistry
    from domain.value_objects.connection_notation import ConnectionEndpoint
    from domain.value_objects.monomer_notation import MonomerUnit
    from domain.value_objects.polymer_notation import PolymerNotation


class MoleculeAssemblyBuilder:
    """Build the MoleculeAssembly for a validated notation.

    Registry monomers contribute their library SMILES; inline SMILES are used
    as written, with every declared R-group capped by hydrogen when unused.
    Hydrogen-bond base pairs are not covalent and are left out.
    """

    def __init__(self, registry: MonomerRegistry) -> None:
        self.registry = registry

    def build(self, notation: HELM2Notation) -> MoleculeAssembly:
        """Raises CanonicalizationError when the notation is not one defined structure."""
        nodes: list[AssemblyNode] = []
        node_index: dict[tuple[str, int], int] = {}

        for polymer in notation.polymers:
            if polymer.polymer_type is PolymerType.BLOB:
                msg = f"{polymer.polymer_id} is a BLOB and has no chemical structure"
                raise CanonicalizationError(msg)
            polymer_id = str(polymer.polymer_id)
            for position, item in enumerate(polymer.monomer_positions(), start=1):
                if isinstance(item, MonomerGroup):
                    msg = f"{polymer_id}:{position} is ambiguous ({item.to_helm()})"
                    raise CanonicalizationError(msg)
                node_index[(polymer_id, position)] = len(nodes)
                nodes.append(self._node(len(nodes), polymer, position, item))

        bonds: list[AssemblyBond] = []
        for polymer in notation.polymers:
            polymer_id = str(polymer.polymer_id)
            bonds.extend(
                AssemblyBond(
                    source_node=node_index[(polymer_id, link.source_position)],
                    source_attachment=link.source_attachment,
                    target_node=node_index[(polymer_id, link.target_position)],
                    target_attachment=link.target_attachment,
                )
                for link in backbone_links(polymer)
            )

        for connection in notation.edge_connections:
            if connection.is_ambiguous:
                msg = f"Connection {connection} does not name exact positions and attachments"
                raise CanonicalizationError(msg)
            bonds.append(
                AssemblyBond(
                    source_node=self._endpoint_node(node_index, connection.source),
                    source_attachment=connection.source.attachment,
                    target_node=self._endpoint_node(node_index, connection.target),
                    target_attachment=connection.target.attachment,
                ),
            )

        assembly = MoleculeAssembly(nodes=tuple(nodes), bonds=tuple(bonds))
        self._check_bonds(assembly)
        return assembly

    def _node(
        self,
        index: int,
        polymer: PolymerNotation,
        position: int,
        unit: MonomerUnit,
    ) -> AssemblyNode:
        label = f"{polymer.polymer_id}:{position}"
        if unit.is_smiles:
            return AssemblyNode(
                index=index,
                label=label,
                smiles=unit.symbol,
                attachments=tuple(Attachment(label=r, cap=CapGroup.H) for r in unit.attachment_labels),
            )
        monomer = self.registry.resolve(polymer.polymer_type, unit.symbol)
        if monomer is None:
            msg = f"Monomer '{unit.symbol}' at {label} has no structure in the monomer library"
            raise CanonicalizationError(msg)
        return AssemblyNode(
            index=index,
            label=label,
            smiles=monomer.smiles,
            attachments=monomer.attachments,
        )

    @staticmethod
    def _endpoint_node(node_index: dict[tuple[str, int], int], endpoint: ConnectionEndpoint) -> int:
        key = (endpoint.polymer_id, endpoint.position or 0)
        if key not in node_index:
            msg = f"Connection endpoint {endpoint.polymer_id}:{endpoint.position} is not a monomer"
            raise CanonicalizationError(msg)
        return node_index[key]

    @staticmethod
    def _check_bonds(assembly: MoleculeAssembly) -> None:
        seen: set[tuple[int, str]] = set()
        for bond in assembly.bonds:
            for node, attachment in (
                (bond.source_node, bond.source_attachment),
                (bond.target_node, bond.target_attachment),
            ):
                labels = {a.label for a in assembly.nodes[node].attachments}
                if attachment not in labels:
                    msg = f"{assembly.nodes[node].label} has no attachment point {attachment}"
                    raise CanonicalizationError(msg)
                if (node, attachment) in seen:
                    msg = f"{assembly.nodes[node].label} uses attachment point {attachment} twice"
                    raise CanonicalizationError(msg)
                seen.add((node, attachment))
