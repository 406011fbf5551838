"""Result types for railway-oriented programming.

Operations that can fail in expected ways (wrong visit status, missing
appointment, unsigned protocol) return a Result instead of raising. Only
programming defects (e.g. a line item whose gross does not match its net)
raise exceptions.

Usage:
    def confirm(visit: Visit) -> Result[None, str]:
        if visit.status != VisitStatus.DRAFT:
            return Failure(error=VisitError.CONFIRM_REQUIRES_DRAFT)
        return Success(value=None)

    match confirm(visit):
        case Success():
            ...
        case Failure(error=error):
            logger.warning("visit_confirm_rejected", error=error)
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
Result: TypeAlias = Success[T] | Failure[E]
