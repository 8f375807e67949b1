import structlog
from returns.result import Failure, Result, Success

from application.dtos.errors import AppError
from application.dtos.notation_dtos import (
    CanonicalNotationResponse,
    CanonicalSmilesResponse,
    MonomerCountResponse,
    MoleculePropertiesResponse,
    NotationRequest,
    SequenceRequest,
    SequenceResponse,
    ValidationReport,
)
from application.mappers.notation_mappers import NotationMapper
from application.ports.molecule_toolkit import MoleculeToolkit
from domain.aggregates.helm2_notation import HELM2Notation
from domain.aggregates.monomer_registry import MonomerRegistry
from domain.exceptions import (
    CanonicalizationError,
    InfrastructureError,
    ParseError,
    UnknownAnalogueError,
    ValidationError,
)
from domain.services.extinction_coefficient import ExtinctionCoefficientCalculator
from domain.services.molecule_assembly_builder import MoleculeAssemblyBuilder
from domain.services.notation_canonicalizer import NotationCanonicalizer
from domain.services.notation_parser import HelmNotationParser
from domain.services.notation_validator import NotationValidator
from domain.services.sequence_extractor import SequenceExtractor

logger = structlog.get_logger()


def _read_notation(
    parser: HelmNotationParser,
    validator: NotationValidator,
    text: str,
) -> HELM2Notation:
    """Parse and validate; every operation on a notation goes through this gate."""
    notation = parser.parse(text)
    validator.validate(notation)
    return notation


def _parse_failure(text: str, e: ParseError) -> Failure:
    logger.warning("parse_error", notation=text, section=e.section, token=e.token, error=str(e))
    return Failure(AppError("parse", f"Parse error in '{text}': {e!s}"))


def _validation_failure(text: str, e: ValidationError) -> Failure:
    logger.warning("validation_error", notation=text, rule=e.rule, symbol=e.symbol, error=str(e))
    return Failure(AppError("validation", f"Validation error in '{text}': {e!s}", rule=e.rule))


def _unexpected_failure(event: str, text: str, e: Exception) -> Failure:
    logger.error(
        event,
        notation=text,
        error=str(e),
        error_type=type(e).__name__,
        exc_info=True,
    )
    return Failure(AppError("internal_error", f"Unexpected error: {e!s}"))


class ValidateNotationUseCase:
    """Parse a notation and check it against the monomer registry."""

    def __init__(self, registry: MonomerRegistry, parser: HelmNotationParser | None = None) -> None:
        self.parser = parser or HelmNotationParser()
        self.validator = NotationValidator(registry)

    async def execute(self, request: NotationRequest) -> Result[ValidationReport, AppError]:
        try:
            logger.info("validate_notation_use_case_start", notation=request.notation)
            notation = _read_notation(self.parser, self.validator, request.notation)
            result = NotationMapper.to_validation_report(request.notation, notation)
            logger.info(
                "validate_notation_use_case_success",
                polymers=len(result.polymers),
                connections=len(result.connections),
            )
            return Success(result)
        except ParseError as e:
            return _parse_failure(request.notation, e)
        except ValidationError as e:
            return _validation_failure(request.notation, e)
        except Exception as e:
            return _unexpected_failure("unexpected_error_in_validate_notation_use_case", request.notation, e)


class GetMonomerCountUseCase:
    """Count monomer positions across every polymer of a notation."""

    def __init__(self, registry: MonomerRegistry, parser: HelmNotationParser | None = None) -> None:
        self.parser = parser or HelmNotationParser()
        self.validator = NotationValidator(registry)

    async def execute(self, request: NotationRequest) -> Result[MonomerCountResponse, AppError]:
        try:
            logger.info("get_monomer_count_use_case_start", notation=request.notation)
            notation = _read_notation(self.parser, self.validator, request.notation)
            count = notation.total_monomer_count
            logger.info("get_monomer_count_use_case_success", monomer_count=count)
            return Success(MonomerCountResponse(notation=request.notation, monomer_count=count))
        except ParseError as e:
            return _parse_failure(request.notation, e)
        except ValidationError as e:
            return _validation_failure(request.notation, e)
        except Exception as e:
            return _unexpected_failure("unexpected_error_in_get_monomer_count_use_case", request.notation, e)


class GetCanonicalNotationUseCase:
    """Produce the canonical HELM 2 string of a notation."""

    def __init__(
        self,
        registry: MonomerRegistry,
        toolkit: MoleculeToolkit | None = None,
        parser: HelmNotationParser | None = None,
    ) -> None:
        self.parser = parser or HelmNotationParser()
        self.validator = NotationValidator(registry)
        self.canonicalizer = NotationCanonicalizer(
            toolkit.canonicalize_fragment if toolkit is not None else None,
        )

    async def execute(self, request: NotationRequest) -> Result[CanonicalNotationResponse, AppError]:
        try:
            logger.info("get_canonical_notation_use_case_start", notation=request.notation)
            notation = _read_notation(self.parser, self.validator, request.notation)
            canonical = self.canonicalizer.canonicalize(notation)
            logger.info("get_canonical_notation_use_case_success", canonical_notation=canonical)
            return Success(
                CanonicalNotationResponse(notation=request.notation, canonical_notation=canonical),
            )
        except ParseError as e:
            return _parse_failure(request.notation, e)
        except ValidationError as e:
            return _validation_failure(request.notation, e)
        except CanonicalizationError as e:
            logger.warning("canonicalization_error", notation=request.notation, error=str(e))
            return Failure(AppError("canonicalization", f"Canonicalization error: {e!s}"))
        except InfrastructureError as e:
            logger.error("toolkit_error", notation=request.notation, error=str(e))
            return Failure(AppError("infrastructure", f"Chemistry toolkit error: {e!s}"))
        except Exception as e:
            return _unexpected_failure(
                "unexpected_error_in_get_canonical_notation_use_case",
                request.notation,
                e,
            )


class GetCanonicalSmilesUseCase:
    """Assemble the full molecule and write it as canonical SMILES."""

    def __init__(
        self,
        registry: MonomerRegistry,
        toolkit: MoleculeToolkit,
        parser: HelmNotationParser | None = None,
    ) -> None:
        self.parser = parser or HelmNotationParser()
        self.validator = NotationValidator(registry)
        self.assembler = MoleculeAssemblyBuilder(registry)
        self.toolkit = toolkit

    async def execute(self, request: NotationRequest) -> Result[CanonicalSmilesResponse, AppError]:
        try:
            logger.info("get_canonical_smiles_use_case_start", notation=request.notation)
            notation = _read_notation(self.parser, self.validator, request.notation)
            assembly = self.assembler.build(notation)
            logger.info("molecule_assembled", nodes=len(assembly.nodes), bonds=len(assembly.bonds))
            smiles = self.toolkit.canonical_smiles(assembly)
            logger.info("get_canonical_smiles_use_case_success", canonical_smiles=smiles)
            return Success(CanonicalSmilesResponse(notation=request.notation, canonical_smiles=smiles))
        except ParseError as e:
            return _parse_failure(request.notation, e)
        except ValidationError as e:
            return _validation_failure(request.notation, e)
        except CanonicalizationError as e:
            logger.warning("canonicalization_error", notation=request.notation, error=str(e))
            return Failure(AppError("canonicalization", f"Canonicalization error: {e!s}"))
        except InfrastructureError as e:
            logger.error("toolkit_error", notation=request.notation, error=str(e))
            return Failure(AppError("infrastructure", f"Chemistry toolkit error: {e!s}"))
        except Exception as e:
            return _unexpected_failure(
                "unexpected_error_in_get_canonical_smiles_use_case",
                request.notation,
                e,
            )


class GetMoleculePropertiesUseCase:
    """Compute molecular weight, formula, exact mass and extinction coefficient."""

    def __init__(
        self,
        registry: MonomerRegistry,
        toolkit: MoleculeToolkit,
        parser: HelmNotationParser | None = None,
    ) -> None:
        self.parser = parser or HelmNotationParser()
        self.validator = NotationValidator(registry)
        self.assembler = MoleculeAssemblyBuilder(registry)
        self.extinction = ExtinctionCoefficientCalculator(registry)
        self.toolkit = toolkit

    async def execute(self, request: NotationRequest) -> Result[MoleculePropertiesResponse, AppError]:
        try:
            logger.info("get_molecule_properties_use_case_start", notation=request.notation)
            notation = _read_notation(self.parser, self.validator, request.notation)
            assembly = self.assembler.build(notation)
            properties = self.toolkit.properties(assembly)

            extinction = self.extinction.calculate(notation)
            if extinction is None:
                logger.info("extinction_coefficient_undetermined", notation=request.notation)
            properties = properties.model_copy(update={"extinction_coefficient": extinction})

            logger.info(
                "get_molecule_properties_use_case_success",
                molecular_formula=properties.molecular_formula,
                molecular_weight=properties.molecular_weight,
            )
            return Success(NotationMapper.to_properties_response(request.notation, properties))
        except ParseError as e:
            return _parse_failure(request.notation, e)
        except ValidationError as e:
            return _validation_failure(request.notation, e)
        except CanonicalizationError as e:
            logger.warning("canonicalization_error", notation=request.notation, error=str(e))
            return Failure(AppError("canonicalization", f"Cannot build molecule: {e!s}"))
        except InfrastructureError as e:
            logger.error("toolkit_error", notation=request.notation, error=str(e))
            return Failure(AppError("infrastructure", f"Chemistry toolkit error: {e!s}"))
        except Exception as e:
            return _unexpected_failure(
                "unexpected_error_in_get_molecule_properties_use_case",
                request.notation,
                e,
            )


class GetNaturalAnalogueSequenceUseCase:
    """Project peptide or RNA polymers onto natural one-letter sequences."""

    def __init__(
        self,
        registry: MonomerRegistry,
        parser: HelmNotationParser | None = None,
        strict_default: bool = False,  # noqa: FBT001, FBT002
    ) -> None:
        self.parser = parser or HelmNotationParser()
        self.validator = NotationValidator(registry)
        self.extractor = SequenceExtractor(registry)
        self.strict_default = strict_default

    async def execute(self, request: SequenceRequest) -> Result[SequenceResponse, AppError]:
        strict = self.strict_default if request.strict is None else request.strict
        try:
            logger.info(
                "get_natural_analogue_sequence_use_case_start",
                notation=request.notation,
                polymer_type=request.polymer_type.value,
                strict=strict,
            )
            notation = _read_notation(self.parser, self.validator, request.notation)
            sequences = self.extractor.extract(notation, request.polymer_type, strict=strict)
            logger.info(
                "get_natural_analogue_sequence_use_case_success",
                sequences=[s.sequence for s in sequences],
            )
            return Success(
                NotationMapper.to_sequence_response(request.notation, request.polymer_type, sequences),
            )
        except ParseError as e:
            return _parse_failure(request.notation, e)
        except ValidationError as e:
            return _validation_failure(request.notation, e)
        except UnknownAnalogueError as e:
            logger.warning("unknown_analogue", notation=request.notation, symbol=e.symbol)
            return Failure(AppError("unknown_analogue", f"No natural analogue: {e!s}"))
        except ValueError as e:
            logger.warning("value_error", notation=request.notation, error=str(e))
            return Failure(AppError("invalid_operation", str(e)))
        except Exception as e:
            return _unexpected_failure(
                "unexpected_error_in_get_natural_analogue_sequence_use_case",
                request.notation,
                e,
            )
