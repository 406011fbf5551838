"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention and travel inside
DomainError instances.

Categories:
- Validation errors (INVALID_*, *_REQUIRED)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS, *_CONFLICT)
- Authorization errors (studio scoping)
- Business rule violations (state machine and protocol gate)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_VAT_RATE = "invalid_vat_rate"
    INVALID_ADJUSTMENT = "invalid_adjustment"
    INVALID_DATE_RANGE = "invalid_date_range"
    CONTACT_INFO_REQUIRED = "contact_info_required"

    # Resource errors
    RESOURCE_NOT_FOUND = "resource_not_found"
    APPOINTMENT_NOT_FOUND = "appointment_not_found"
    VISIT_NOT_FOUND = "visit_not_found"
    PROTOCOL_NOT_FOUND = "protocol_not_found"
    CUSTOMER_NOT_FOUND = "customer_not_found"
    VEHICLE_NOT_FOUND = "vehicle_not_found"

    # Conflict errors
    VISIT_ALREADY_EXISTS = "visit_already_exists"
    CUSTOMER_ALREADY_EXISTS = "customer_already_exists"
    RESOURCE_CONFLICT = "resource_conflict"
    CONCURRENT_MODIFICATION = "concurrent_modification"

    # Authorization errors
    STUDIO_CONTEXT_MISSING = "studio_context_missing"
    PERMISSION_DENIED = "permission_denied"

    # Business rule violations
    INVALID_STATUS_TRANSITION = "invalid_status_transition"
    MANDATORY_PROTOCOLS_UNSIGNED = "mandatory_protocols_unsigned"
    PROTOCOL_IMMUTABLE = "protocol_immutable"
    FINANCIAL_INTEGRITY_VIOLATION = "financial_integrity_violation"
