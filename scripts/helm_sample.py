#!/usr/bin/env python
"""Replay the HELM sample notations through every notation operation.

Each operation runs on its own; a failure is printed with the notation and
the reason and the run carries on with the next operation.

Usage:
    python scripts/helm_sample.py
"""

import asyncio

import structlog
from lagom import Container
from returns.result import Failure, Success

from application.dtos.notation_dtos import NotationRequest, SequenceRequest
from application.use_cases.notation_use_cases import (
    GetCanonicalNotationUseCase,
    GetCanonicalSmilesUseCase,
    GetMoleculePropertiesUseCase,
    GetMonomerCountUseCase,
    GetNaturalAnalogueSequenceUseCase,
    ValidateNotationUseCase,
)
from domain.value_objects.polymer_type import PolymerType
from infrastructure.di.container import create_container
from infrastructure.logging import setup_logging
from infrastructure.monomer_library.registry_provider import MonomerRegistryProvider

setup_logging()
logger = structlog.get_logger()

CYCLIC_PEPTIDE = "PEPTIDE1{A.A.C.G.K.[dK].C.H.A}$PEPTIDE1,PEPTIDE1,3:R3-7:R3$$$"
CYCLIC_PEPTIDE_V2 = "PEPTIDE1{A.A.C.G.[dK].E.C.H.A}$PEPTIDE1,PEPTIDE1,3:R3-7:R3$$$V2.0"
PEPTIDE_CHEM_CONJUGATE = "PEPTIDE1{A.G.G.G.[seC].C.K.K.K.K}|CHEM1{MCC}$PEPTIDE1,CHEM1,9:R3-1:R1$$$"
OLIGO_CHEM_CONJUGATE = (
    "RNA1{R(A)P.[mR](A)P}|CHEM1{[*]OCCOCCOCCO[*] |$_R1;;;;;;;;;;;_R3$|}"
    "$RNA1,CHEM1,6:R2-1:R1$$$"
)
UNKNOWN_MONOMER = "PEPTIDE1{A.A.C.G.[dK].[xyz].E.C.H.A}$$$$"


def _report(label: str, notation: str, result: object) -> object | None:
    match result:
        case Success():
            return result.unwrap()
        case Failure():
            error = result.failure()
            print(f"{label} failed for {notation}\n  [{error.category}] {error.message}")
    return None


async def validate(container: Container, notation: str) -> None:
    report = _report(
        "Validation",
        notation,
        await container[ValidateNotationUseCase].execute(NotationRequest(notation=notation)),
    )
    if report is None:
        return
    print(f"Validation passed: {notation}")
    print(f"simple polymer String: {report.polymers}")
    print(f"connection String: {report.connections}")
    print(f"Base Pair String: {report.base_pairs}")
    print(f"Annotations section: {report.annotations}")


async def monomer_count(container: Container, notation: str) -> None:
    response = _report(
        "Monomer count",
        notation,
        await container[GetMonomerCountUseCase].execute(NotationRequest(notation=notation)),
    )
    if response is not None:
        print(f"Monomer count: {response.monomer_count}")


async def canonical_notation(container: Container, notation: str) -> None:
    response = _report(
        "Canonical notation",
        notation,
        await container[GetCanonicalNotationUseCase].execute(NotationRequest(notation=notation)),
    )
    if response is not None:
        print(f"Canonical notation: {response.canonical_notation}")


async def canonical_smiles(container: Container, notation: str) -> None:
    response = _report(
        "Canonical SMILES",
        notation,
        await container[GetCanonicalSmilesUseCase].execute(NotationRequest(notation=notation)),
    )
    if response is not None:
        print(f"Canonical SMILES: {response.canonical_smiles}")


async def molecule_properties(container: Container, notation: str) -> None:
    response = _report(
        "Molecule information",
        notation,
        await container[GetMoleculePropertiesUseCase].execute(NotationRequest(notation=notation)),
    )
    if response is None:
        return
    print(f"MW = {response.molecular_weight:.4f}")
    print(f"MF = {response.molecular_formula}")
    print(f"Mass = {response.exact_mass:.4f}")
    print(f"Extinction coefficient = {response.extinction_coefficient}")


async def sequences(container: Container, notation: str, polymer_type: PolymerType) -> None:
    response = _report(
        "Sequence",
        notation,
        await container[GetNaturalAnalogueSequenceUseCase].execute(
            SequenceRequest(notation=notation, polymer_type=polymer_type),
        ),
    )
    if response is None:
        return
    for sequence in response.sequences:
        print(f"{sequence.polymer_id} sequence: {sequence.sequence}")


async def run_all(container: Container, notation: str, polymer_type: PolymerType) -> None:
    print("\n" + "=" * 60)
    await validate(container, notation)
    await monomer_count(container, notation)
    await canonical_notation(container, notation)
    await canonical_smiles(container, notation)
    await molecule_properties(container, notation)
    await sequences(container, notation, polymer_type)


async def main() -> None:
    container = create_container()
    container[MonomerRegistryProvider].initialize()

    # Validation never changes its input; running it twice gives the same report
    await validate(container, CYCLIC_PEPTIDE)
    await run_all(container, CYCLIC_PEPTIDE, PolymerType.PEPTIDE)
    await run_all(container, CYCLIC_PEPTIDE_V2, PolymerType.PEPTIDE)
    await run_all(container, PEPTIDE_CHEM_CONJUGATE, PolymerType.PEPTIDE)
    await run_all(container, OLIGO_CHEM_CONJUGATE, PolymerType.RNA)

    print("\n" + "=" * 60)
    await validate(container, UNKNOWN_MONOMER)


if __name__ == "__main__":
    asyncio.run(main())
