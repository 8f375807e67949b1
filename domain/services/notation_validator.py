"""Domain service that checks a parsed notation against the monomer registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from domain.exceptions import ValidationError
from domain.services.backbone import backbone_links
from domain.value_objects.connection_notation import BASE_PAIR, UNKNOWN
from domain.value_objects.monomer import MonomerType
from domain.value_objects.monomer_notation import MonomerGroup, MonomerUnit
from domain.value_objects.polymer_type import PolymerType

if TYPE_CHECKING:
    from domain.aggregates.helm2_notation import HELM2Notation
    from domain.aggregates.monomer_registry import MonomerRegistry
    from domain.value_objects.connection_notation import ConnectionEndpoint, ConnectionNotation
    from domain.value_objects.monomer_notation import MonomerPosition
    from domain.value_objects.polymer_notation import PolymerNotation


class NotationValidator:
    """Validate HELM2Notation aggregates.

    Validation only reads the notation and the registry, so calling it any
    number of times on the same input gives the same outcome.
    """

    def __init__(self, registry: MonomerRegistry) -> None:
        self.registry = registry

    def validate(self, notation: HELM2Notation) -> None:
        """Check monomers, polymer types, groups and connections.

        Raises:
            ValidationError: On the first violated rule; ``rule`` names it and
                ``symbol`` carries the offending monomer or id when there is one.

        """
        for polymer in notation.polymers:
            self._validate_polymer(polymer)
        self._validate_groupings(notation)

        occupied: set[tuple[str, int, str]] = set()
        for polymer in notation.polymers:
            polymer_id = str(polymer.polymer_id)
            for link in backbone_links(polymer):
                self._validate_backbone_link(polymer, link.source_position, link.source_attachment)
                self._validate_backbone_link(polymer, link.target_position, link.target_attachment)
                occupied.add((polymer_id, link.source_position, link.source_attachment))
                occupied.add((polymer_id, link.target_position, link.target_attachment))

        for connection in notation.connections:
            self._validate_connection(notation, connection, occupied)

    # ------------------------------------------------------------------
    # Polymers
    # ------------------------------------------------------------------

    def _validate_polymer(self, polymer: PolymerNotation) -> None:
        polymer_type = polymer.polymer_type
        if polymer_type is PolymerType.BLOB:
            return

        positions = polymer.monomer_positions()
        if polymer_type is PolymerType.CHEM and len(positions) != 1:
            msg = f"Chemical polymer {polymer.polymer_id} must contain exactly one monomer"
            raise ValidationError(msg, rule="invalid_chem", symbol=str(polymer.polymer_id))

        for item in positions:
            if isinstance(item, MonomerGroup):
                for alternative in item.alternatives:
                    self._validate_unit(polymer, alternative.unit)
            else:
                self._validate_unit(polymer, item)

    def _validate_unit(self, polymer: PolymerNotation, unit: MonomerUnit) -> None:
        if unit.is_smiles:
            return
        polymer_type = polymer.polymer_type
        monomer = self.registry.resolve(polymer_type, unit.symbol)
        if monomer is None:
            defined_for = self.registry.polymer_types_of(unit.symbol)
            if defined_for:
                kinds = ", ".join(sorted(t.value for t in defined_for))
                msg = (
                    f"Monomer '{unit.symbol}' is a {kinds} monomer and cannot be used "
                    f"in {polymer.polymer_id}"
                )
                raise ValidationError(msg, rule="polymer_type_mismatch", symbol=unit.symbol)
            msg = f"Unknown monomer '{unit.symbol}' in {polymer.polymer_id}"
            raise ValidationError(msg, rule="unknown_monomer", symbol=unit.symbol)

        if polymer_type is PolymerType.RNA:
            is_base = monomer.monomer_type is MonomerType.BRANCH
            if unit.is_branch != is_base:
                role = "a branch (base)" if is_base else "a backbone"
                msg = f"Monomer '{unit.symbol}' is {role} monomer but is written differently in {polymer.polymer_id}"
                raise ValidationError(msg, rule="invalid_nucleotide", symbol=unit.symbol)

    def _validate_groupings(self, notation: HELM2Notation) -> None:
        for grouping in notation.groupings:
            for member in grouping.members:
                if notation.polymer(member.polymer_id) is None:
                    msg = f"Group {grouping.group_id} references unknown polymer {member.polymer_id}"
                    raise ValidationError(msg, rule="invalid_group", symbol=member.polymer_id)

    def _validate_backbone_link(self, polymer: PolymerNotation, position: int, attachment: str) -> None:
        """Neighbouring monomers bond implicitly; both must offer the attachment point used."""
        item = polymer.position(position)
        if item is None or attachment in self._attachment_labels(polymer.polymer_type, item):
            return
        msg = (
            f"Monomer at {polymer.polymer_id}:{position} has no attachment point {attachment} "
            f"for the bond to its neighbour"
        )
        raise ValidationError(msg, rule="invalid_connection", symbol=attachment)

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    def _validate_connection(
        self,
        notation: HELM2Notation,
        connection: ConnectionNotation,
        occupied: set[tuple[str, int, str]],
    ) -> None:
        for endpoint in (connection.source, connection.target):
            polymer = notation.polymer(endpoint.polymer_id)
            if polymer is None:
                if notation.grouping(endpoint.polymer_id) is not None:
                    continue
                msg = f"Connection {connection} references unknown polymer {endpoint.polymer_id}"
                raise ValidationError(msg, rule="invalid_connection", symbol=endpoint.polymer_id)
            if endpoint.position is None or polymer.polymer_type is PolymerType.BLOB:
                continue

            item = polymer.position(endpoint.position)
            if item is None:
                msg = (
                    f"Connection {connection}: position {endpoint.position} is outside "
                    f"{polymer.polymer_id} (length {polymer.monomer_count})"
                )
                raise ValidationError(msg, rule="invalid_connection", symbol=endpoint.polymer_id)

            if endpoint.attachment == BASE_PAIR:
                self._check_base_pair_endpoint(connection, endpoint, polymer, item)
                continue
            if endpoint.attachment == UNKNOWN:
                continue

            labels = self._attachment_labels(polymer.polymer_type, item)
            if endpoint.attachment not in labels:
                msg = (
                    f"Connection {connection}: monomer at {polymer.polymer_id}:{endpoint.position} "
                    f"has no attachment point {endpoint.attachment}"
                )
                raise ValidationError(msg, rule="invalid_connection", symbol=endpoint.attachment)

            key = (endpoint.polymer_id, endpoint.position, endpoint.attachment)
            if key in occupied:
                msg = (
                    f"Connection {connection}: attachment point {endpoint.attachment} at "
                    f"{polymer.polymer_id}:{endpoint.position} is already occupied"
                )
                raise ValidationError(msg, rule="invalid_connection", symbol=endpoint.attachment)
            occupied.add(key)

    @staticmethod
    def _check_base_pair_endpoint(
        connection: ConnectionNotation,
        endpoint: ConnectionEndpoint,
        polymer: PolymerNotation,
        item: MonomerPosition,
    ) -> None:
        is_base = isinstance(item, MonomerUnit) and item.is_branch
        if polymer.polymer_type is not PolymerType.RNA or not is_base:
            msg = (
                f"Connection {connection}: base pairs must join nucleotide bases, "
                f"{polymer.polymer_id}:{endpoint.position} is not a base"
            )
            raise ValidationError(msg, rule="invalid_connection", symbol=endpoint.polymer_id)

    def _attachment_labels(self, polymer_type: PolymerType, item: MonomerPosition) -> set[str]:
        if isinstance(item, MonomerGroup):
            label_sets = [self._unit_labels(polymer_type, alt.unit) for alt in item.alternatives]
            return set.intersection(*label_sets)
        return self._unit_labels(polymer_type, item)

    def _unit_labels(self, polymer_type: PolymerType, unit: MonomerUnit) -> set[str]:
        if unit.is_smiles:
            return set(unit.attachment_labels)
        monomer = self.registry.resolve(polymer_type, unit.symbol)
        return set(monomer.attachment_labels) if monomer else set()
