"""Visit queries (CQRS read operations)."""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums import VisitStatus
from src.domain.value_objects import StudioContext


@dataclass(frozen=True, kw_only=True)
class GetVisit:
    """Get one visit with totals, display data and protocol summaries."""

    context: StudioContext
    visit_id: UUID


@dataclass(frozen=True, kw_only=True)
class ListVisits:
    """Page through a studio's visits.

    Attributes:
        context: Studio and acting user.
        page: 1-based page number.
        page_size: Items per page.
        status: Optional status filter.
    """

    context: StudioContext
    page: int = 1
    page_size: int = 20
    status: VisitStatus | None = None
