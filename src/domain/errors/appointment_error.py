"""Appointment domain errors.

Architecture:
    - Domain layer errors (no infrastructure dependencies)
    - Used in Result types (railway-oriented programming)
    - Never raised as exceptions (return Failure(error) instead)

Usage:
    from src.domain.errors import AppointmentError

    if appointment.status == AppointmentStatus.CANCELLED:
        return Failure(error=AppointmentError.ALREADY_CANCELLED)
"""


class AppointmentError:
    """Appointment error constants.

    Error Categories:
        - Lookup errors: NOT_FOUND, CUSTOMER_NOT_FOUND, VEHICLE_NOT_FOUND, ...
        - Booking validation: NO_SERVICES, INVALID_SCHEDULE, ...
        - State errors: ALREADY_CANCELLED, ALREADY_CONVERTED
    """

    # -------------------------------------------------------------------------
    # Lookup Errors
    # -------------------------------------------------------------------------

    NOT_FOUND = "Appointment not found"
    """No appointment with this ID under the requesting studio."""

    CUSTOMER_NOT_FOUND = "Customer not found"
    """Referenced customer does not exist under the studio."""

    VEHICLE_NOT_FOUND = "Vehicle not found"
    """Referenced vehicle does not exist under the studio."""

    SERVICE_NOT_FOUND = "Service not found"
    """Referenced catalog service does not exist or is inactive."""

    COLOR_NOT_FOUND = "Appointment color not found"
    """Referenced calendar color does not exist under the studio."""

    # -------------------------------------------------------------------------
    # Booking Validation Errors
    # -------------------------------------------------------------------------

    NO_SERVICES = "Appointment must contain at least one service"
    """An appointment without line items cannot be booked."""

    INVALID_SCHEDULE = "Appointment end time must be after start time"
    """Schedule end must be strictly after start."""

    CONTACT_INFO_REQUIRED = "Customer must have a phone number or an email address"
    """New or updated customers need at least one contact channel."""

    MANUAL_PRICE_REQUIRED = (
        "Service requires a manual price (SET_NET or SET_GROSS adjustment)"
    )
    """Catalog services flagged for manual pricing need an absolute override."""

    VEHICLE_NOT_OWNED = "Vehicle does not belong to the customer"
    """Existing vehicle must be linked to the appointment's customer."""

    CUSTOMER_EMAIL_TAKEN = "Customer with this email already exists in this studio"
    """New or updated customer reuses the email of another customer."""

    CUSTOMER_PHONE_TAKEN = "Customer with this phone already exists in this studio"
    """New customer reuses the phone of an existing customer."""

    # -------------------------------------------------------------------------
    # State Errors
    # -------------------------------------------------------------------------

    ALREADY_CANCELLED = "Appointment is already cancelled"
    """Cancel called on a cancelled appointment."""

    ALREADY_CONVERTED = "Cannot cancel appointment that has been converted to a visit"
    """Converted appointments are terminal."""
