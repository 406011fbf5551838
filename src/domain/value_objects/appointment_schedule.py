"""Appointment time window value object."""

from dataclasses import dataclass
from datetime import datetime
from typing import Self

from src.core.result import Failure, Result, Success
from src.domain.errors import AppointmentError


@dataclass(frozen=True, kw_only=True)
class AppointmentSchedule:
    """When an appointment takes place.

    Attributes:
        is_all_day: Whole-day booking (times are informational).
        start_datetime: Start of the window (timezone-aware).
        end_datetime: End of the window, strictly after start.
    """

    is_all_day: bool
    start_datetime: datetime
    end_datetime: datetime

    def __post_init__(self) -> None:
        """Validate the window.

        Raises:
            ValueError: If end is not strictly after start.
        """
        if self.end_datetime <= self.start_datetime:
            raise ValueError(AppointmentError.INVALID_SCHEDULE)

    @classmethod
    def create(
        cls, *, is_all_day: bool, start_datetime: datetime, end_datetime: datetime
    ) -> Result[Self, str]:
        """Build a schedule from user input without raising.

        Returns:
            Success(schedule) or Failure(AppointmentError.INVALID_SCHEDULE).
        """
        if end_datetime <= start_datetime:
            return Failure(error=AppointmentError.INVALID_SCHEDULE)
        return Success(
            value=cls(
                is_all_day=is_all_day,
                start_datetime=start_datetime,
                end_datetime=end_datetime,
            )
        )

    def overlaps_with(self, other: "AppointmentSchedule") -> bool:
        """Check if two windows overlap. Touching bounds count as overlap.

        Args:
            other: Schedule to compare against.

        Returns:
            True if the windows share at least one instant.
        """
        return not (
            self.end_datetime < other.start_datetime
            or self.start_datetime > other.end_datetime
        )
