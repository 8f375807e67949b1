from application.dtos.notation_dtos import (
    MoleculePropertiesResponse,
    SequenceResponse,
    ValidationReport,
)
from domain.aggregates.helm2_notation import HELM2Notation
from domain.value_objects.molecule_properties import MoleculeProperties
from domain.value_objects.polymer_sequence import PolymerSequence
from domain.value_objects.polymer_type import PolymerType


class NotationMapper:
    @staticmethod
    def to_validation_report(text: str, notation: HELM2Notation) -> ValidationReport:
        """Map a validated HELM2Notation aggregate to a ValidationReport DTO.

        Args:
            text: The notation as the caller submitted it
            notation: The parsed and validated aggregate

        Returns:
            ValidationReport: The mapped response DTO

        """
        return ValidationReport(
            notation=text,
            version=notation.version,
            polymers=[p.to_helm() for p in notation.polymers],
            connections=[c.to_helm() for c in notation.edge_connections],
            base_pairs=[c.to_helm() for c in notation.base_pair_connections],
            groupings=[g.to_helm() for g in notation.groupings],
            annotations=[a.text for a in notation.annotations],
        )

    @staticmethod
    def to_properties_response(text: str, properties: MoleculeProperties) -> MoleculePropertiesResponse:
        return MoleculePropertiesResponse(
            notation=text,
            molecular_weight=properties.molecular_weight,
            molecular_formula=properties.molecular_formula,
            exact_mass=properties.exact_mass,
            extinction_coefficient=properties.extinction_coefficient,
        )

    @staticmethod
    def to_sequence_response(
        text: str,
        polymer_type: PolymerType,
        sequences: list[PolymerSequence],
    ) -> SequenceResponse:
        return SequenceResponse(notation=text, polymer_type=polymer_type, sequences=sequences)
