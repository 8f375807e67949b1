"""Domain service producing a canonical HELM string for a notation."""

from __future__ import annotations

import itertools
import math
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from domain.exceptions import CanonicalizationError
from domain.value_objects.monomer_notation import GroupAlternative, MonomerGroup, MonomerUnit
from domain.value_objects.polymer_type import HelmVersion

if TYPE_CHECKING:
    from domain.aggregates.helm2_notation import HELM2Notation
    from domain.value_objects.connection_notation import ConnectionEndpoint
    from domain.value_objects.monomer_notation import MonomerElement
    from domain.value_objects.polymer_notation import PolymerNotation

FragmentCanonicalizer = Callable[[str], "str | None"]

# Upper bound on orderings tried for polymers whose bodies are identical.
MAX_ORDERINGS = 40320


class NotationCanonicalizer:
    """Serialise notations so that the same molecule always gives the same text.

    Polymers are ordered by type then by their written body and renumbered per
    type. Polymers with identical bodies are told apart by trying their
    orderings and keeping the one with the smallest connection section.
    Repeats are expanded, annotations dropped and inline SMILES normalised by
    the injected fragment canonicalizer.
    """

    def __init__(self, fragment_canonicalizer: FragmentCanonicalizer | None = None) -> None:
        self.fragment_canonicalizer = fragment_canonicalizer

    def canonicalize(self, notation: HELM2Notation) -> str:
        bodies = {str(p.polymer_id): self._canonical_body(p) for p in notation.polymers}

        def sort_key(polymer: PolymerNotation) -> tuple[int, str]:
            return polymer.polymer_type.sort_order, bodies[str(polymer.polymer_id)]

        def candidate(ordering: list[PolymerNotation]) -> tuple[str, str, str]:
            mapping = self._renumber(ordering)
            polymers = "|".join(
                f"{mapping[str(p.polymer_id)]}{{{bodies[str(p.polymer_id)]}}}" for p in ordering
            )
            groups, group_mapping = self._groupings(notation, mapping)
            rank = {new_id: i for i, new_id in enumerate(mapping[str(p.polymer_id)] for p in ordering)}
            connections = self._connections(notation, {**mapping, **group_mapping}, rank)
            return connections, groups, polymers

        ordered = sorted(notation.polymers, key=sort_key)
        tie_groups = [list(group) for _, group in itertools.groupby(ordered, key=sort_key)]

        connections, groups, polymers = min(candidate(o) for o in self._orderings(tie_groups))
        return f"{polymers}${connections}${groups}$${HelmVersion.V2.value}"

    # ------------------------------------------------------------------
    # Polymer bodies
    # ------------------------------------------------------------------

    def _canonical_body(self, polymer: PolymerNotation) -> str:
        elements = [self._normalise_element(e) for e in polymer.expanded_elements()]
        return ".".join(e.to_helm(polymer.polymer_type, include_annotations=False) for e in elements)

    def _normalise_element(self, element: MonomerElement) -> MonomerElement:
        if element.group is not None:
            # Alternatives are unordered: (A+G) and (G+A) are the same position
            alternatives = tuple(
                sorted(
                    (
                        GroupAlternative(unit=self._normalise_unit(alt.unit), ratio=alt.ratio)
                        for alt in element.group.alternatives
                    ),
                    key=lambda alt: alt.to_helm(),
                ),
            )
            return element.model_copy(
                update={"group": MonomerGroup(kind=element.group.kind, alternatives=alternatives)},
            )
        return element.model_copy(
            update={"units": tuple(self._normalise_unit(u) for u in element.units)},
        )

    def _normalise_unit(self, unit: MonomerUnit) -> MonomerUnit:
        if not unit.is_smiles or self.fragment_canonicalizer is None:
            return unit
        canonical = self.fragment_canonicalizer(unit.symbol)
        if canonical is None:
            msg = f"Inline SMILES could not be parsed: {unit.symbol!r}"
            raise CanonicalizationError(msg)
        return unit.model_copy(update={"symbol": canonical})

    # ------------------------------------------------------------------
    # Orderings and renumbering
    # ------------------------------------------------------------------

    @staticmethod
    def _orderings(tie_groups: list[list[PolymerNotation]]) -> Iterator[list[PolymerNotation]]:
        total = math.prod(math.factorial(len(group)) for group in tie_groups)
        if total > MAX_ORDERINGS:
            # Too many ties to search; keep the sorted order.
            yield [p for group in tie_groups for p in group]
            return
        for combination in itertools.product(*(itertools.permutations(g) for g in tie_groups)):
            yield [p for group in combination for p in group]

    @staticmethod
    def _renumber(ordering: list[PolymerNotation]) -> dict[str, str]:
        counters: dict[str, int] = {}
        mapping: dict[str, str] = {}
        for polymer in ordering:
            prefix = polymer.polymer_type.value
            counters[prefix] = counters.get(prefix, 0) + 1
            mapping[str(polymer.polymer_id)] = f"{prefix}{counters[prefix]}"
        return mapping

    @staticmethod
    def _groupings(notation: HELM2Notation, mapping: dict[str, str]) -> tuple[str, dict[str, str]]:
        rendered = []
        for grouping in notation.groupings:
            members = sorted(
                mapping[m.polymer_id] if m.ratio is None else f"{mapping[m.polymer_id]}:{m.ratio:g}"
                for m in grouping.members
            )
            rendered.append((grouping.kind.value.join(members), grouping))
        rendered.sort(key=lambda item: item[0])

        group_mapping = {}
        parts = []
        for number, (members, grouping) in enumerate(rendered, start=1):
            group_mapping[grouping.group_id] = f"G{number}"
            parts.append(f"G{number}({members})")
        return "|".join(parts), group_mapping

    @staticmethod
    def _connections(
        notation: HELM2Notation,
        mapping: dict[str, str],
        rank: dict[str, int],
    ) -> str:
        def endpoint_key(end: ConnectionEndpoint) -> tuple[int, str, int, str]:
            new_id = mapping[end.polymer_id]
            return rank.get(new_id, len(rank)), new_id, end.position or 0, end.attachment

        def render(end: ConnectionEndpoint) -> tuple[str, str]:
            return mapping[end.polymer_id], f"{end.position_to_helm()}:{end.attachment}"

        rendered = []
        for connection in notation.connections:
            source, target = connection.source, connection.target
            if endpoint_key(target) < endpoint_key(source):
                source, target = target, source
            source_id, source_text = render(source)
            target_id, target_text = render(target)
            rendered.append(
                (endpoint_key(source), endpoint_key(target), f"{source_id},{target_id},{source_text}-{target_text}"),
            )
        rendered.sort()
        return "|".join(text for _, _, text in rendered)

