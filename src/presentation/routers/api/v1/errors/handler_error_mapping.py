"""Handler error string → ApplicationError mapping.

Handlers return Result[T, str] with a domain error constant as the error.
This module is the single table turning those constants into typed
ApplicationError values (and the structured core error they stem from) for
RFC 7807 responses:

    - lookup failures → NOT_FOUND (404)
    - duplicate visit or customer contact → CONFLICT (409)
    - everything else → COMMAND_VALIDATION_FAILED (400)

A string absent from the table is treated as a validation failure with the
generic ``validation_failed`` code.
"""

from src.application.errors import ApplicationError, ApplicationErrorCode
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, NotFoundError, ValidationError
from src.domain.errors import (
    AppointmentError,
    ConversionError,
    LineItemError,
    ProtocolError,
    VisitError,
)

# error string → (error code, resource type)
_NOT_FOUND: dict[str, tuple[ErrorCode, str]] = {
    AppointmentError.NOT_FOUND: (ErrorCode.APPOINTMENT_NOT_FOUND, "Appointment"),
    ConversionError.APPOINTMENT_NOT_FOUND: (
        ErrorCode.APPOINTMENT_NOT_FOUND,
        "Appointment",
    ),
    AppointmentError.CUSTOMER_NOT_FOUND: (ErrorCode.CUSTOMER_NOT_FOUND, "Customer"),
    ConversionError.CUSTOMER_NOT_FOUND: (ErrorCode.CUSTOMER_NOT_FOUND, "Customer"),
    AppointmentError.VEHICLE_NOT_FOUND: (ErrorCode.VEHICLE_NOT_FOUND, "Vehicle"),
    ConversionError.VEHICLE_NOT_FOUND: (ErrorCode.VEHICLE_NOT_FOUND, "Vehicle"),
    AppointmentError.SERVICE_NOT_FOUND: (ErrorCode.RESOURCE_NOT_FOUND, "CatalogService"),
    AppointmentError.COLOR_NOT_FOUND: (ErrorCode.RESOURCE_NOT_FOUND, "AppointmentColor"),
    VisitError.NOT_FOUND: (ErrorCode.VISIT_NOT_FOUND, "Visit"),
    ProtocolError.RULE_NOT_FOUND: (ErrorCode.RESOURCE_NOT_FOUND, "ProtocolRule"),
    ProtocolError.PROTOCOL_NOT_FOUND: (ErrorCode.PROTOCOL_NOT_FOUND, "VisitProtocol"),
}

_CONFLICT: dict[str, tuple[ErrorCode, str]] = {
    ConversionError.VISIT_ALREADY_EXISTS: (ErrorCode.VISIT_ALREADY_EXISTS, "Visit"),
    AppointmentError.CUSTOMER_EMAIL_TAKEN: (
        ErrorCode.CUSTOMER_ALREADY_EXISTS,
        "Customer",
    ),
    AppointmentError.CUSTOMER_PHONE_TAKEN: (
        ErrorCode.CUSTOMER_ALREADY_EXISTS,
        "Customer",
    ),
}

# error string → (error code, offending request field)
_VALIDATION: dict[str, tuple[ErrorCode, str | None]] = {
    AppointmentError.NO_SERVICES: (ErrorCode.VALIDATION_FAILED, "services"),
    AppointmentError.INVALID_SCHEDULE: (ErrorCode.INVALID_DATE_RANGE, "schedule"),
    AppointmentError.CONTACT_INFO_REQUIRED: (
        ErrorCode.CONTACT_INFO_REQUIRED,
        "customer",
    ),
    AppointmentError.MANUAL_PRICE_REQUIRED: (
        ErrorCode.INVALID_ADJUSTMENT,
        "services",
    ),
    AppointmentError.VEHICLE_NOT_OWNED: (ErrorCode.VALIDATION_FAILED, "vehicle"),
    AppointmentError.ALREADY_CANCELLED: (ErrorCode.INVALID_STATUS_TRANSITION, None),
    AppointmentError.ALREADY_CONVERTED: (ErrorCode.INVALID_STATUS_TRANSITION, None),
    LineItemError.FINANCIAL_INTEGRITY_VIOLATION: (
        ErrorCode.FINANCIAL_INTEGRITY_VIOLATION,
        "services",
    ),
    LineItemError.INVALID_VAT_RATE: (ErrorCode.INVALID_VAT_RATE, "vat_rate_code"),
    LineItemError.EMPTY_SERVICE_NAME: (ErrorCode.VALIDATION_FAILED, "services"),
    LineItemError.NEGATIVE_BASE_PRICE: (ErrorCode.INVALID_ADJUSTMENT, "services"),
    ConversionError.APPOINTMENT_CANCELLED: (ErrorCode.INVALID_STATUS_TRANSITION, None),
    ConversionError.VEHICLE_REQUIRED: (ErrorCode.VALIDATION_FAILED, "vehicle"),
    ConversionError.NO_SERVICES: (ErrorCode.VALIDATION_FAILED, "services"),
    VisitError.CONFIRM_REQUIRES_DRAFT: (ErrorCode.INVALID_STATUS_TRANSITION, None),
    VisitError.CANCEL_REQUIRES_DRAFT: (ErrorCode.INVALID_STATUS_TRANSITION, None),
    VisitError.READY_REQUIRES_IN_PROGRESS: (ErrorCode.INVALID_STATUS_TRANSITION, None),
    VisitError.COMPLETE_REQUIRES_READY: (ErrorCode.INVALID_STATUS_TRANSITION, None),
    VisitError.REJECT_REQUIRES_ACTIVE: (ErrorCode.INVALID_STATUS_TRANSITION, None),
    VisitError.ALREADY_ARCHIVED: (ErrorCode.INVALID_STATUS_TRANSITION, None),
    VisitError.MANDATORY_PROTOCOLS_UNSIGNED: (
        ErrorCode.MANDATORY_PROTOCOLS_UNSIGNED,
        None,
    ),
    ProtocolError.ALREADY_SIGNED: (ErrorCode.PROTOCOL_IMMUTABLE, None),
    ProtocolError.NOT_PENDING: (ErrorCode.INVALID_STATUS_TRANSITION, None),
    ProtocolError.NOT_READY_FOR_SIGNATURE: (
        ErrorCode.INVALID_STATUS_TRANSITION,
        None,
    ),
    ProtocolError.DOCUMENT_KEY_REQUIRED: (ErrorCode.VALIDATION_FAILED, None),
    ProtocolError.SIGNER_REQUIRED: (ErrorCode.VALIDATION_FAILED, "signed_by"),
    ProtocolError.SIGNATURE_IMAGE_REQUIRED: (
        ErrorCode.VALIDATION_FAILED,
        "signature_image_key",
    ),
    ProtocolError.SERVICE_IDS_REQUIRED: (ErrorCode.VALIDATION_FAILED, "service_ids"),
    ProtocolError.SERVICE_IDS_NOT_ALLOWED: (
        ErrorCode.VALIDATION_FAILED,
        "service_ids",
    ),
    ProtocolError.NEGATIVE_DISPLAY_ORDER: (
        ErrorCode.VALIDATION_FAILED,
        "display_order",
    ),
}


def map_handler_error(error: str) -> ApplicationError:
    """Map a handler error string to an ApplicationError.

    Args:
        error: Error string from handler (a domain error constant).

    Returns:
        ApplicationError with the HTTP-relevant code and the structured
        core error attached.

    Example:
        >>> map_handler_error(VisitError.NOT_FOUND).code
        <ApplicationErrorCode.NOT_FOUND: 'not_found'>
    """
    if error in _NOT_FOUND:
        code, resource_type = _NOT_FOUND[error]
        return ApplicationError(
            code=ApplicationErrorCode.NOT_FOUND,
            message=error,
            domain_error=NotFoundError(
                code=code,
                message=error,
                resource_type=resource_type,
                resource_id="",
            ),
        )

    if error in _CONFLICT:
        code, resource_type = _CONFLICT[error]
        return ApplicationError(
            code=ApplicationErrorCode.CONFLICT,
            message=error,
            domain_error=ConflictError(
                code=code,
                message=error,
                resource_type=resource_type,
            ),
        )

    code, field = _VALIDATION.get(error, (ErrorCode.VALIDATION_FAILED, None))
    return ApplicationError(
        code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
        message=error,
        domain_error=ValidationError(code=code, message=error, field=field),
    )
