"""Per-item status of a service line on a visit."""

from enum import Enum


class VisitServiceStatus(str, Enum):
    """Status of one service item on a visit."""

    PENDING = "pending"
    """Additional work found, awaiting customer approval."""

    APPROVED = "approved"
    """Approved for execution."""

    REJECTED = "rejected"
    """Customer declined the service."""

    CONFIRMED = "confirmed"
    """Carried over from the appointment and ready to execute."""
