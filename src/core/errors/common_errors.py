"""Common error classes used across all domains and layers.

Error Types:
- ValidationError: Business-rule or input violations (client-correctable)
- NotFoundError: Resource absent, or absent under the requesting studio
- ConflictError: Duplicates and concurrent modification
- AuthorizationError: Studio context missing or actor lacks permission

Usage:
    from src.core.errors import ValidationError
    from src.core.enums import ErrorCode

    ValidationError(
        code=ErrorCode.INVALID_VAT_RATE,
        message="Unsupported VAT rate: 7",
        field="vat_rate",
    )
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Business-rule or input validation failure.

    Attributes:
        field: Field name that failed validation, when one applies.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found under the requesting studio.

    Attributes:
        resource_type: Type of resource (Visit, Appointment, etc.).
        resource_id: ID of the resource that was not found.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate, concurrent modification).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has conflict, if any.
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure (missing studio context, no permission).

    Attributes:
        required_permission: Permission that was required.
    """

    required_permission: str | None = None
