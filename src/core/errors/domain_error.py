"""Base domain error class for Railway-Oriented Programming.

DomainError is the base class for structured errors that cross layer
boundaries. Errors flow through the system as data (Result types or
ApplicationError.domain_error), not exceptions.

Architecture:
- Does NOT inherit from Exception (not raised, returned in Result)
- Uses dataclass inheritance (NOT Protocol/ABC)
- Carries a machine-readable ErrorCode

Usage:
    from src.core.errors import NotFoundError
    from src.core.enums import ErrorCode

    NotFoundError(
        code=ErrorCode.VISIT_NOT_FOUND,
        message="Visit not found",
        resource_type="Visit",
        resource_id=str(visit_id),
    )
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
