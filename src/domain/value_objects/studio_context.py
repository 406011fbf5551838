"""Explicit tenant and actor for a single operation.

Every command and query carries a StudioContext instead of reading a
request-global "current user". Repositories receive ``studio_id`` from it
and scope every read and write to that studio.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True, slots=True)
class StudioContext:
    """Tenant and acting user of an operation.

    Attributes:
        studio_id: Tenant (studio) the operation is scoped to.
        user_id: Staff member performing the operation.
    """

    studio_id: UUID
    user_id: UUID
