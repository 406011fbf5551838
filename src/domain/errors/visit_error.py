"""Visit domain errors.

Usage:
    from src.domain.errors import VisitError

    if self.status != VisitStatus.DRAFT:
        return Failure(error=VisitError.CONFIRM_REQUIRES_DRAFT)
"""


class VisitError:
    """Visit error constants.

    Error Categories:
        - Lookup errors: NOT_FOUND
        - Transition errors: wrong source state for a transition
        - Gate errors: MANDATORY_PROTOCOLS_UNSIGNED
    """

    # -------------------------------------------------------------------------
    # Lookup Errors
    # -------------------------------------------------------------------------

    NOT_FOUND = "Visit not found"
    """No visit with this ID under the requesting studio."""

    # -------------------------------------------------------------------------
    # Transition Errors
    # -------------------------------------------------------------------------

    CONFIRM_REQUIRES_DRAFT = "Only DRAFT visits can be confirmed"
    """Confirm is allowed from DRAFT only."""

    CANCEL_REQUIRES_DRAFT = (
        "Only DRAFT visits can be cancelled; use rejection for confirmed visits"
    )
    """Hard delete is allowed from DRAFT only."""

    READY_REQUIRES_IN_PROGRESS = (
        "Only IN_PROGRESS visits can be marked ready for pickup"
    )
    """Mark ready is allowed from IN_PROGRESS only."""

    COMPLETE_REQUIRES_READY = "Only READY_FOR_PICKUP visits can be completed"
    """Complete is allowed from READY_FOR_PICKUP only."""

    REJECT_REQUIRES_ACTIVE = "Visit is already closed and cannot be rejected"
    """Reject is not allowed from COMPLETED, REJECTED or ARCHIVED."""

    ALREADY_ARCHIVED = "Visit is already archived"
    """Archive is not allowed twice."""

    # -------------------------------------------------------------------------
    # Gate Errors
    # -------------------------------------------------------------------------

    MANDATORY_PROTOCOLS_UNSIGNED = (
        "All mandatory check-in protocols must be signed before confirming the visit"
    )
    """Confirm is gated by signed mandatory CHECK_IN protocols."""
