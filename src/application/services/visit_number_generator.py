"""Visit number generation.

Format: VIS-{year}-{sequence:05d}, e.g. VIS-2025-00042. The sequence
restarts every calendar year and continues from the latest number issued
to the studio that year. A unique (studio_id, visit_number) constraint in
storage rejects duplicates produced by concurrent conversions.
"""

from datetime import UTC, datetime
from uuid import UUID

from src.domain.protocols.visit_repository import VisitRepository

VISIT_NUMBER_PREFIX = "VIS"


def format_visit_number(year: int, sequence: int) -> str:
    """Render a visit number.

    Args:
        year: Calendar year.
        sequence: 1-based sequence within the year.

    Returns:
        Visit number string.
    """
    return f"{VISIT_NUMBER_PREFIX}-{year}-{sequence:05d}"


def next_sequence(latest_number: str | None) -> int:
    """Sequence following the latest number (1 if none or unparsable)."""
    if not latest_number:
        return 1
    _, _, tail = latest_number.rpartition("-")
    return int(tail) + 1 if tail.isdigit() else 1


class VisitNumberGenerator:
    """Issue the next visit number for a studio."""

    def __init__(self, visit_repo: VisitRepository) -> None:
        """Initialize generator with dependencies.

        Args:
            visit_repo: Visit repository (for the latest number).
        """
        self._visit_repo = visit_repo

    async def generate(self, studio_id: UUID) -> str:
        """Generate the next visit number for the current year.

        Args:
            studio_id: Requesting studio.

        Returns:
            New visit number.
        """
        year = datetime.now(UTC).year
        latest = await self._visit_repo.find_latest_visit_number(studio_id, year)
        return format_visit_number(year, next_sequence(latest))
