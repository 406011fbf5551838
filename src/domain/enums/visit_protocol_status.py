"""Visit protocol instance states.

State Machine:
    PENDING → READY_FOR_SIGNATURE → SIGNED

    Monotonic. SIGNED is terminal and the instance becomes immutable.
"""

from enum import Enum


class VisitProtocolStatus(str, Enum):
    """Visit protocol instance states."""

    PENDING = "pending"
    """Generated, document not filled yet."""

    READY_FOR_SIGNATURE = "ready_for_signature"
    """Filled document uploaded, awaiting customer signature."""

    SIGNED = "signed"
    """Signed by the customer (terminal, immutable)."""
