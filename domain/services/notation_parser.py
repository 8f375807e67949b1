"""Domain service that turns HELM text into a HELM2Notation aggregate."""

from __future__ import annotations

import re

from pydantic import ValidationError as PydanticValidationError

from domain.aggregates.helm2_notation import HELM2Notation
from domain.exceptions import ParseError
from domain.value_objects.annotation_notation import AnnotationNotation
from domain.value_objects.connection_notation import (
    BASE_PAIR,
    ConnectionEndpoint,
    ConnectionNotation,
)
from domain.value_objects.grouping_notation import GroupingNotation, GroupMember
from domain.value_objects.monomer_notation import (
    GroupAlternative,
    GroupKind,
    MonomerElement,
    MonomerGroup,
    MonomerUnit,
)
from domain.value_objects.polymer_id import PolymerId
from domain.value_objects.polymer_notation import PolymerNotation
from domain.value_objects.polymer_type import HelmVersion, PolymerType

_OPENERS = {"{": "}", "[": "]", "(": ")"}
_CLOSERS = frozenset(_OPENERS.values())

_ENTITY_ID = r"(?:PEPTIDE|RNA|CHEM|BLOB|G)[1-9]\d*"
_CONNECTION_PATTERN = re.compile(
    rf"^(?P<source>{_ENTITY_ID}),(?P<target>{_ENTITY_ID}),"
    r"(?P<source_pos>[1-9]\d*|\?):(?P<source_att>R[1-9]\d*|pair|\?)-"
    r"(?P<target_pos>[1-9]\d*|\?):(?P<target_att>R[1-9]\d*|pair|\?)"
    r'(?:"(?P<annotation>[^"]*)")?$',
)
_GROUPING_PATTERN = re.compile(r"^(?P<group_id>G[1-9]\d*)\((?P<members>.+)\)$")
_GROUP_MEMBER_PATTERN = re.compile(
    r"^(?P<polymer_id>(?:PEPTIDE|RNA|CHEM|BLOB)[1-9]\d*)(?::(?P<ratio>\d+(?:\.\d+)?))?$",
)
_REPEAT_SUFFIX = re.compile(r"'(?P<count>[^']*)'$")


def _split_top_level(text: str, separator: str, section: str) -> list[str]:
    """Split on ``separator`` outside braces, brackets, parentheses and quotes."""
    parts: list[str] = []
    stack: list[str] = []
    in_quote = False
    start = 0
    for index, char in enumerate(text):
        if char == '"':
            in_quote = not in_quote
        elif in_quote:
            continue
        elif char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _CLOSERS:
            if not stack or stack.pop() != char:
                msg = f"Unbalanced '{char}' in {section} section"
                raise ParseError(msg, section=section, token=text)
        elif char == separator and not stack:
            parts.append(text[start:index])
            start = index + 1
    if stack or in_quote:
        msg = f"Unclosed delimiter in {section} section"
        raise ParseError(msg, section=section, token=text)
    parts.append(text[start:])
    return parts


def _closing_index(text: str, start: int, section: str) -> int:
    """Index of the delimiter that closes the one opened at ``start``."""
    stack: list[str] = []
    in_quote = False
    for index in range(start, len(text)):
        char = text[index]
        if char == '"':
            in_quote = not in_quote
        elif in_quote:
            continue
        elif char in _OPENERS:
            stack.append(_OPENERS[char])
        elif char in _CLOSERS:
            if not stack or stack.pop() != char:
                msg = f"Unbalanced '{char}' in {section} section"
                raise ParseError(msg, section=section, token=text)
            if not stack:
                return index
    msg = f"Unclosed '{text[start]}' in {section} section"
    raise ParseError(msg, section=section, token=text)


def _is_inline_smiles(token: str) -> bool:
    return "*" in token


class HelmNotationParser:
    """Parser for HELM V1 and V2 strings.

    Both grammars are normalised to the same HELM2Notation: V1 hydrogen-bond
    entries become base-pair connections and V1 attributes become annotations.
    The parser only checks grammar; monomer symbols are not looked up here.
    """

    def parse(self, text: str) -> HELM2Notation:
        """Parse a notation string.

        Raises:
            ParseError: If the text does not follow the HELM grammar.
            ValidationError: If polymer or group ids are duplicated.

        """
        text = text.strip() if text else ""
        if not text:
            msg = "Notation is empty"
            raise ParseError(msg, section="notation", token=text)

        sections = _split_top_level(text, "$", "notation")
        if len(sections) == 5:  # noqa: PLR2004
            version = self._parse_version(sections[4])
        elif len(sections) == 4:  # noqa: PLR2004
            version = HelmVersion.V1
        else:
            msg = f"Expected 5 '$'-separated sections, found {len(sections)}"
            raise ParseError(msg, section="notation", token=text)

        polymers = self._parse_polymers(sections[0])
        connections = self._parse_connections(sections[1])
        groupings: list[GroupingNotation] = []
        if version is HelmVersion.V1:
            connections.extend(self._parse_hydrogen_bonds(sections[2]))
        else:
            groupings = self._parse_groupings(sections[2])
        annotations = [
            AnnotationNotation(text=part.strip())
            for part in _split_top_level(sections[3], "|", "annotations")
            if part.strip()
        ]

        return HELM2Notation(
            polymers=tuple(polymers),
            connections=tuple(connections),
            groupings=tuple(groupings),
            annotations=tuple(annotations),
            version=version,
        )

    @staticmethod
    def _parse_version(text: str) -> HelmVersion:
        version = text.strip()
        if not version:
            return HelmVersion.V1
        if version.upper() == HelmVersion.V2.value:
            return HelmVersion.V2
        msg = f"Unknown HELM version marker: {version!r}"
        raise ParseError(msg, section="version", token=version)

    # ------------------------------------------------------------------
    # Polymers
    # ------------------------------------------------------------------

    def _parse_polymers(self, section: str) -> list[PolymerNotation]:
        if not section.strip():
            msg = "Polymer section is empty"
            raise ParseError(msg, section="polymers", token=section)
        return [
            self._parse_polymer(part.strip())
            for part in _split_top_level(section, "|", "polymers")
        ]

    def _parse_polymer(self, text: str) -> PolymerNotation:
        open_index = text.find("{")
        if open_index <= 0:
            msg = f"Polymer must look like ID{{...}}: {text!r}"
            raise ParseError(msg, section="polymers", token=text)
        polymer_id = PolymerId.parse(text[:open_index])
        close_index = _closing_index(text, open_index, "polymers")
        body = text[open_index + 1 : close_index].strip()
        if not body:
            msg = f"Polymer {polymer_id} has an empty body"
            raise ParseError(msg, section="polymers", token=text)

        annotation = self._trailing_annotation(text[close_index + 1 :], "polymers", text)

        if polymer_id.polymer_type is PolymerType.BLOB:
            elements = (MonomerElement(units=(MonomerUnit(symbol=body),)),)
        else:
            elements = tuple(
                self._parse_element(part, polymer_id.polymer_type)
                for part in _split_top_level(body, ".", "polymers")
            )
        try:
            return PolymerNotation(polymer_id=polymer_id, elements=elements, annotation=annotation)
        except PydanticValidationError as e:
            raise ParseError(str(e), section="polymers", token=text) from e

    @staticmethod
    def _trailing_annotation(rest: str, section: str, token: str) -> str | None:
        rest = rest.strip()
        if not rest:
            return None
        if len(rest) >= 2 and rest.startswith('"') and rest.endswith('"'):  # noqa: PLR2004
            return rest[1:-1]
        msg = f"Unexpected text after polymer body: {rest!r}"
        raise ParseError(msg, section=section, token=token)

    def _parse_element(self, text: str, polymer_type: PolymerType) -> MonomerElement:
        text = text.strip()
        if not text:
            msg = "Empty monomer element"
            raise ParseError(msg, section="polymers", token=text)

        annotation = None
        if text.endswith('"'):
            start = text.rfind('"', 0, len(text) - 1)
            if start < 0:
                msg = f"Unterminated annotation in {text!r}"
                raise ParseError(msg, section="polymers", token=text)
            annotation = text[start + 1 : -1]
            text = text[:start].strip()

        repeat = 1
        repeat_match = _REPEAT_SUFFIX.search(text)
        if repeat_match is not None:
            count = repeat_match.group("count")
            if not count.isdigit() or int(count) < 1:
                msg = f"Repeat count must be a positive integer: '{count}'"
                raise ParseError(msg, section="polymers", token=text)
            repeat = int(count)
            text = text[: repeat_match.start()].strip()

        if not text:
            msg = "Monomer element has no monomer"
            raise ParseError(msg, section="polymers", token=text)

        try:
            if text.startswith("(") and _closing_index(text, 0, "polymers") == len(text) - 1:
                return self._parse_parenthesised(text[1:-1], polymer_type, repeat, annotation)
            units = self._parse_units(text, polymer_type)
            return MonomerElement(units=units, repeat=repeat, annotation=annotation)
        except PydanticValidationError as e:
            raise ParseError(str(e), section="polymers", token=text) from e

    def _parse_parenthesised(
        self,
        inner: str,
        polymer_type: PolymerType,
        repeat: int,
        annotation: str | None,
    ) -> MonomerElement:
        parts = _split_top_level(inner, ".", "polymers")
        if len(parts) > 1:
            children = tuple(self._parse_element(part, polymer_type) for part in parts)
            return MonomerElement(children=children, repeat=repeat, annotation=annotation)

        mixture = _split_top_level(inner, "+", "polymers")
        alternatives = _split_top_level(inner, ",", "polymers")
        if len(mixture) > 1 and len(alternatives) > 1:
            msg = f"Group mixes '+' and ',' operators: ({inner})"
            raise ParseError(msg, section="polymers", token=inner)
        if len(mixture) > 1:
            group = self._parse_group(mixture, GroupKind.MIXTURE, polymer_type)
            return MonomerElement(group=group, repeat=repeat, annotation=annotation)
        if len(alternatives) > 1:
            group = self._parse_group(alternatives, GroupKind.OR, polymer_type)
            return MonomerElement(group=group, repeat=repeat, annotation=annotation)

        child = self._parse_element(inner, polymer_type)
        return MonomerElement(children=(child,), repeat=repeat, annotation=annotation)

    def _parse_group(
        self,
        parts: list[str],
        kind: GroupKind,
        polymer_type: PolymerType,
    ) -> MonomerGroup:
        alternatives = []
        for part in parts:
            pieces = _split_top_level(part.strip(), ":", "polymers")
            ratio = None
            if len(pieces) == 2:  # noqa: PLR2004
                try:
                    ratio = float(pieces[1])
                except ValueError as e:
                    msg = f"Invalid ratio in group alternative {part!r}"
                    raise ParseError(msg, section="polymers", token=part) from e
            elif len(pieces) > 2:  # noqa: PLR2004
                msg = f"Invalid group alternative {part!r}"
                raise ParseError(msg, section="polymers", token=part)
            units = self._parse_units(pieces[0].strip(), polymer_type)
            if len(units) != 1:
                msg = f"Group alternatives must be single monomers: {part!r}"
                raise ParseError(msg, section="polymers", token=part)
            alternatives.append(GroupAlternative(unit=units[0], ratio=ratio))
        return MonomerGroup(kind=kind, alternatives=tuple(alternatives))

    def _parse_units(self, text: str, polymer_type: PolymerType) -> tuple[MonomerUnit, ...]:
        if not text:
            msg = "Empty monomer"
            raise ParseError(msg, section="polymers", token=text)

        if polymer_type is PolymerType.CHEM:
            if text.startswith("[") and _closing_index(text, 0, "polymers") == len(text) - 1:
                return (self._make_unit(text[1:-1]),)
            return (self._make_unit(text),)

        units: list[MonomerUnit] = []
        index = 0
        while index < len(text):
            char = text[index]
            if char == "[":
                close = _closing_index(text, index, "polymers")
                units.append(self._make_unit(text[index + 1 : close]))
                index = close + 1
            elif char == "(":
                if polymer_type is not PolymerType.RNA or not units:
                    msg = f"Unexpected branch in {polymer_type.value} monomer {text!r}"
                    raise ParseError(msg, section="polymers", token=text)
                close = _closing_index(text, index, "polymers")
                branch = self._parse_units(text[index + 1 : close], polymer_type)
                if len(branch) != 1 or branch[0].is_branch:
                    msg = f"A branch must hold exactly one monomer: {text!r}"
                    raise ParseError(msg, section="polymers", token=text)
                units.append(branch[0].model_copy(update={"is_branch": True}))
                index = close + 1
            elif char.isalnum() or char in "?_":
                units.append(self._make_unit(char))
                index += 1
            else:
                msg = f"Unexpected character {char!r} in monomer {text!r}"
                raise ParseError(msg, section="polymers", token=text)

        if polymer_type is PolymerType.PEPTIDE and len(units) != 1:
            msg = f"Peptide elements hold one monomer; bracket multi-letter ids: {text!r}"
            raise ParseError(msg, section="polymers", token=text)
        return tuple(units)

    @staticmethod
    def _make_unit(token: str) -> MonomerUnit:
        token = token.strip()
        if not token:
            msg = "Empty monomer id"
            raise ParseError(msg, section="polymers", token=token)
        return MonomerUnit(symbol=token, is_smiles=_is_inline_smiles(token))

    # ------------------------------------------------------------------
    # Connections, hydrogen bonds and groups
    # ------------------------------------------------------------------

    def _parse_connections(self, section: str) -> list[ConnectionNotation]:
        if not section.strip():
            return []
        return [
            self._parse_connection(part.strip(), "connections")
            for part in _split_top_level(section, "|", "connections")
        ]

    def _parse_hydrogen_bonds(self, section: str) -> list[ConnectionNotation]:
        if not section.strip():
            return []
        bonds = []
        for part in _split_top_level(section, "|", "hydrogen bonds"):
            connection = self._parse_connection(part.strip(), "hydrogen bonds")
            if not connection.is_base_pair:
                msg = f"Hydrogen bond entries must use 'pair' on both sides: {part!r}"
                raise ParseError(msg, section="hydrogen bonds", token=part)
            bonds.append(connection)
        return bonds

    @staticmethod
    def _parse_connection(text: str, section: str) -> ConnectionNotation:
        match = _CONNECTION_PATTERN.match(text)
        if match is None:
            msg = f"Malformed connection: {text!r}"
            raise ParseError(msg, section=section, token=text)

        def _position(value: str) -> int | None:
            return None if value == "?" else int(value)

        return ConnectionNotation(
            source=ConnectionEndpoint(
                polymer_id=match.group("source"),
                position=_position(match.group("source_pos")),
                attachment=match.group("source_att"),
            ),
            target=ConnectionEndpoint(
                polymer_id=match.group("target"),
                position=_position(match.group("target_pos")),
                attachment=match.group("target_att"),
            ),
            annotation=match.group("annotation"),
        )

    @staticmethod
    def _parse_groupings(section: str) -> list[GroupingNotation]:
        if not section.strip():
            return []
        groupings = []
        for part in _split_top_level(section, "|", "groups"):
            text = part.strip()
            match = _GROUPING_PATTERN.match(text)
            if match is None:
                msg = f"Malformed group: {text!r}"
                raise ParseError(msg, section="groups", token=text)
            inner = match.group("members")
            kind = GroupKind.MIXTURE if "+" in inner else GroupKind.OR
            if "+" in inner and "," in inner:
                msg = f"Group mixes '+' and ',' operators: {text!r}"
                raise ParseError(msg, section="groups", token=text)
            members = []
            for raw in inner.split(kind.value):
                member = _GROUP_MEMBER_PATTERN.match(raw.strip())
                if member is None:
                    msg = f"Malformed group member {raw!r}"
                    raise ParseError(msg, section="groups", token=text)
                ratio = member.group("ratio")
                members.append(
                    GroupMember(
                        polymer_id=member.group("polymer_id"),
                        ratio=float(ratio) if ratio else None,
                    ),
                )
            groupings.append(
                GroupingNotation(
                    group_id=match.group("group_id"),
                    kind=kind,
                    members=tuple(members),
                ),
            )
        return groupings
