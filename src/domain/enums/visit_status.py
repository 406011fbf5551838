"""Visit lifecycle states.

State Machine:
    DRAFT → IN_PROGRESS (confirm, gated by CHECK_IN protocols)
    DRAFT → (deleted) (cancel draft)
    IN_PROGRESS → READY_FOR_PICKUP (mark ready)
    READY_FOR_PICKUP → COMPLETED (complete)
    any non-terminal → REJECTED (reject)
    any → ARCHIVED (archive)

Usage:
    from src.domain.enums import VisitStatus

    if visit.status == VisitStatus.DRAFT:
        # Visit may still be hard-deleted
"""

from enum import Enum


class VisitStatus(str, Enum):
    """Visit lifecycle states.

    String Enum:
        Inherits from str for easy serialization and database storage.
    """

    DRAFT = "draft"
    """Created from an appointment, not yet confirmed. Freely cancellable."""

    IN_PROGRESS = "in_progress"
    """Vehicle checked in and work underway."""

    READY_FOR_PICKUP = "ready_for_pickup"
    """Work finished, waiting for the customer."""

    COMPLETED = "completed"
    """Vehicle handed back to the customer (terminal for work)."""

    REJECTED = "rejected"
    """Visit abandoned or refused (terminal for work)."""

    ARCHIVED = "archived"
    """Hidden from operational views (terminal)."""

    def is_terminal(self) -> bool:
        """Check if the visit can no longer be rejected.

        Returns:
            True for COMPLETED, REJECTED and ARCHIVED.
        """
        return self in (
            VisitStatus.COMPLETED,
            VisitStatus.REJECTED,
            VisitStatus.ARCHIVED,
        )
