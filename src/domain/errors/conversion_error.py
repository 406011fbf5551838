"""Appointment to visit conversion errors.

Each precondition of the conversion produces its own error so the caller
can tell exactly which one failed. Validators stop at the first failure.
"""


class ConversionError:
    """Conversion error constants."""

    APPOINTMENT_NOT_FOUND = "Appointment not found"
    """Appointment absent under the requesting studio."""

    APPOINTMENT_CANCELLED = "Cancelled appointment cannot be converted to a visit"
    """Only live appointments can be converted."""

    VEHICLE_REQUIRED = "Appointment must have a vehicle assigned before conversion"
    """Visits always reference a vehicle."""

    VEHICLE_NOT_FOUND = "Vehicle not found"
    """Appointment's vehicle no longer exists."""

    CUSTOMER_NOT_FOUND = "Customer not found"
    """Appointment's customer no longer exists."""

    VISIT_ALREADY_EXISTS = "A visit already exists for this appointment"
    """Each appointment converts to at most one visit."""

    NO_SERVICES = "Appointment must contain at least one service to be converted"
    """A visit without services is meaningless."""
