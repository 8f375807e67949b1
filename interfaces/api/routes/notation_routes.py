from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, status
from lagom import Container

from application.dtos.notation_dtos import (
    CanonicalNotationResponse,
    CanonicalSmilesResponse,
    MoleculePropertiesResponse,
    MonomerCountResponse,
    NotationRequest,
    SequenceRequest,
    SequenceResponse,
    ValidationReport,
)
from application.use_cases.notation_use_cases import (
    GetCanonicalNotationUseCase,
    GetCanonicalSmilesUseCase,
    GetMoleculePropertiesUseCase,
    GetMonomerCountUseCase,
    GetNaturalAnalogueSequenceUseCase,
    ValidateNotationUseCase,
)
from interfaces.api.middleware import handle_use_case_errors
from interfaces.dependencies import get_container

logger = structlog.get_logger()

router = APIRouter(prefix="/notations", tags=["notations"])


@router.post("/validate", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def validate_notation(
    request: NotationRequest,
    container: Annotated[Container, Depends(get_container)],
) -> ValidationReport:
    """Parse and validate a HELM notation.

    Returns:
        200 OK: Polymers, connections, base pairs, groups and annotations
        422 Unprocessable Entity: Parse or validation error
        503 Service Unavailable: Monomer library could not be loaded

    """
    use_case = container[ValidateNotationUseCase]
    return await use_case.execute(request=request)


@router.post("/monomer-count", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def get_monomer_count(
    request: NotationRequest,
    container: Annotated[Container, Depends(get_container)],
) -> MonomerCountResponse:
    """Count monomers across all polymers of a notation."""
    use_case = container[GetMonomerCountUseCase]
    return await use_case.execute(request=request)


@router.post("/canonical", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def get_canonical_notation(
    request: NotationRequest,
    container: Annotated[Container, Depends(get_container)],
) -> CanonicalNotationResponse:
    """Return the canonical HELM 2 form of a notation."""
    use_case = container[GetCanonicalNotationUseCase]
    return await use_case.execute(request=request)


@router.post("/canonical-smiles", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def get_canonical_smiles(
    request: NotationRequest,
    container: Annotated[Container, Depends(get_container)],
) -> CanonicalSmilesResponse:
    """Return canonical SMILES of the fully assembled molecule.

    Returns:
        200 OK: Canonical SMILES
        422 Unprocessable Entity: Invalid notation, or one that is not a single
            defined structure (BLOB polymers, ambiguous groups or connections)

    """
    use_case = container[GetCanonicalSmilesUseCase]
    return await use_case.execute(request=request)


@router.post("/properties", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def get_molecule_properties(
    request: NotationRequest,
    container: Annotated[Container, Depends(get_container)],
) -> MoleculePropertiesResponse:
    """Return molecular weight, formula, exact mass and extinction coefficient."""
    use_case = container[GetMoleculePropertiesUseCase]
    return await use_case.execute(request=request)


@router.post("/sequences", status_code=status.HTTP_200_OK)
@handle_use_case_errors
async def get_natural_analogue_sequences(
    request: SequenceRequest,
    container: Annotated[Container, Depends(get_container)],
) -> SequenceResponse:
    """Return natural-analogue sequences of the requested polymer type.

    Returns:
        200 OK: One sequence per polymer
        400 Bad Request: Polymer type other than PEPTIDE or RNA
        422 Unprocessable Entity: Invalid notation, or an analogue-less monomer
            in strict mode

    """
    use_case = container[GetNaturalAnalogueSequenceUseCase]
    return await use_case.execute(request=request)
