"""Domain exceptions for notation and business rule violations."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for domain layer."""


class ParseError(DomainError):
    """Raised when HELM text violates the notation grammar."""

    def __init__(self, message: str, section: str | None = None, token: str | None = None) -> None:
        super().__init__(message)
        self.section = section
        self.token = token


class ValidationError(DomainError):
    """Raised when a parsed notation is semantically invalid."""

    def __init__(self, message: str, rule: str = "invalid_notation", symbol: str | None = None) -> None:
        super().__init__(message)
        self.rule = rule
        self.symbol = symbol


class CanonicalizationError(DomainError):
    """Raised when a notation cannot be turned into a single defined structure."""


class UnknownAnalogueError(DomainError):
    """Raised when a monomer has no natural analogue and strict projection was requested."""

    def __init__(self, message: str, symbol: str) -> None:
        super().__init__(message)
        self.symbol = symbol


class InfrastructureError(DomainError):
    """Raised when infrastructure operations fail (files, toolkits, etc.)."""


class MonomerLibraryError(InfrastructureError):
    """Raised when monomer definitions cannot be loaded."""


class ChemistryToolkitError(InfrastructureError):
    """Raised when the chemistry toolkit cannot be loaded."""
