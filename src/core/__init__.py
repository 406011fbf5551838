"""Core shared kernel.

Foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error classes and error codes
- Application settings and the dependency container

The core module has NO dependencies on domain or application code (the
container is the single composition root and imports lazily).
"""

from src.core.enums import ErrorCode
from src.core.errors import (
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from src.core.result import Failure, Result, Success

__all__ = [
    "AuthorizationError",
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "NotFoundError",
    "Result",
    "Success",
    "ValidationError",
]
