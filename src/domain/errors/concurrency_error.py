"""Concurrency failures raised by repositories.

Unlike the error constants in this package these are exceptions, detected
deep inside the persistence adapter. A stale save abandons the transaction:
it propagates out of the handler, the session rolls back, and the API
renders a 409 concurrent_modification problem. A duplicate visit insert is
rolled back to a savepoint and turned into a handler failure.
"""

from uuid import UUID


class StaleAggregateError(Exception):
    """Aggregate changed in storage since it was loaded."""

    def __init__(self, aggregate_type: str, aggregate_id: UUID, version: int) -> None:
        """Initialize stale aggregate error.

        Args:
            aggregate_type: Aggregate class name.
            aggregate_id: Aggregate identifier.
            version: Version the caller loaded.
        """
        super().__init__(
            f"{aggregate_type} {aggregate_id} was modified concurrently "
            f"(loaded version {version})"
        )
        self.aggregate_type = aggregate_type
        self.aggregate_id = aggregate_id
        self.version = version


class DuplicateVisitError(Exception):
    """Visit insert lost to a concurrent one (same number or appointment)."""

    def __init__(self, visit_number: str, appointment_id: UUID | None) -> None:
        super().__init__(
            f"Visit {visit_number} (appointment {appointment_id}) conflicts "
            "with an existing visit"
        )
        self.visit_number = visit_number
        self.appointment_id = appointment_id
