"""AppointmentRepository - SQLAlchemy implementation of AppointmentRepository protocol.

Adapter for hexagonal architecture.
Maps between domain Appointment aggregates and AppointmentModel rows.

Line items are written when the appointment is inserted; updates only
touch the root row and are guarded by the optimistic ``version``.
"""

from typing import Any, cast
from uuid import UUID

from sqlalchemy import CursorResult, func, select, update

from src.domain.entities.appointment import Appointment
from src.domain.enums import AppointmentStatus
from src.domain.errors import StaleAggregateError
from src.domain.value_objects import AppointmentSchedule
from src.infrastructure.persistence.models.appointment import (
    AppointmentLineItemModel,
    AppointmentModel,
)
from src.infrastructure.persistence.repositories.base import SQLAlchemyRepository
from src.infrastructure.persistence.repositories.mappers import (
    line_item_columns,
    line_item_from_row,
)


class AppointmentRepository(SQLAlchemyRepository):
    """SQLAlchemy implementation of AppointmentRepository protocol.

    This class does NOT inherit from the protocol (Protocol uses structural typing).

    Example:
        >>> async with database.get_session() as session:
        ...     repo = AppointmentRepository(session)
        ...     appointment = await repo.find_by_id(appointment_id, studio_id)
    """

    async def find_by_id(
        self, appointment_id: UUID, studio_id: UUID
    ) -> Appointment | None:
        """Find appointment by ID within a studio.

        Args:
            appointment_id: Appointment's unique identifier.
            studio_id: Requesting studio.

        Returns:
            Domain Appointment if found under the studio, None otherwise.
        """
        stmt = select(AppointmentModel).where(
            AppointmentModel.id == appointment_id,
            AppointmentModel.studio_id == studio_id,
        )
        model = await self._scalar_one_or_none(stmt)
        if model is None:
            return None

        return self._to_domain(model)

    async def list_by_studio(
        self,
        studio_id: UUID,
        *,
        status: AppointmentStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[Appointment]:
        """List appointments, latest schedule start first.

        Args:
            studio_id: Requesting studio.
            status: Optional status filter.
            offset: Rows to skip.
            limit: Maximum rows to return.

        Returns:
            Appointments (empty list if none).
        """
        stmt = select(AppointmentModel).where(AppointmentModel.studio_id == studio_id)
        if status is not None:
            stmt = stmt.where(AppointmentModel.status == status.value)
        stmt = (
            stmt.order_by(
                AppointmentModel.start_datetime.desc(), AppointmentModel.id.desc()
            )
            .offset(offset)
            .limit(limit)
        )
        models = await self._scalars(stmt)

        return [self._to_domain(model) for model in models]

    async def count_by_studio(
        self, studio_id: UUID, *, status: AppointmentStatus | None = None
    ) -> int:
        """Count appointments matching the list filter."""
        stmt = (
            select(func.count())
            .select_from(AppointmentModel)
            .where(AppointmentModel.studio_id == studio_id)
        )
        if status is not None:
            stmt = stmt.where(AppointmentModel.status == status.value)
        result = await self._execute(stmt)
        return int(result.scalar_one())

    async def save(self, appointment: Appointment) -> None:
        """Create or update appointment.

        New appointments are inserted with their line items. Existing ones
        are updated only if the stored version still equals the loaded one;
        the entity's version is then incremented.

        Args:
            appointment: Appointment to persist.

        Raises:
            StaleAggregateError: If the appointment changed since it was loaded.
        """
        stmt = select(AppointmentModel.version).where(
            AppointmentModel.id == appointment.id,
            AppointmentModel.studio_id == appointment.studio_id,
        )
        stored_version = await self._scalar_one_or_none(stmt)

        if stored_version is None:
            await self._add(self._to_model(appointment))
            return

        update_stmt = (
            update(AppointmentModel)
            .where(
                AppointmentModel.id == appointment.id,
                AppointmentModel.studio_id == appointment.studio_id,
                AppointmentModel.version == appointment.version,
            )
            .values(
                customer_id=appointment.customer_id,
                vehicle_id=appointment.vehicle_id,
                title=appointment.title,
                color_id=appointment.color_id,
                note=appointment.note,
                status=appointment.status.value,
                is_all_day=appointment.schedule.is_all_day,
                start_datetime=appointment.schedule.start_datetime,
                end_datetime=appointment.schedule.end_datetime,
                updated_by=appointment.updated_by,
                updated_at=appointment.updated_at,
                version=appointment.version + 1,
            )
        )
        result = cast(CursorResult[Any], await self._execute(update_stmt))
        if result.rowcount == 0:
            raise StaleAggregateError("Appointment", appointment.id, appointment.version)

        appointment.version += 1

    # =========================================================================
    # Entity ↔ Model Mapping (Private Methods)
    # =========================================================================

    def _to_domain(self, model: AppointmentModel) -> Appointment:
        """Convert database model to domain aggregate.

        Raises:
            ValueError: If a persisted row violates a domain invariant.
        """
        return Appointment(
            id=model.id,
            studio_id=model.studio_id,
            customer_id=model.customer_id,
            vehicle_id=model.vehicle_id,
            line_items=[line_item_from_row(row) for row in model.line_items],
            schedule=AppointmentSchedule(
                is_all_day=model.is_all_day,
                start_datetime=model.start_datetime,
                end_datetime=model.end_datetime,
            ),
            created_by=model.created_by,
            updated_by=model.updated_by,
            title=model.title,
            color_id=model.color_id,
            note=model.note,
            status=AppointmentStatus(model.status),
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Appointment) -> AppointmentModel:
        """Convert domain aggregate to a new database model."""
        return AppointmentModel(
            id=entity.id,
            studio_id=entity.studio_id,
            customer_id=entity.customer_id,
            vehicle_id=entity.vehicle_id,
            title=entity.title,
            color_id=entity.color_id,
            note=entity.note,
            status=entity.status.value,
            is_all_day=entity.schedule.is_all_day,
            start_datetime=entity.schedule.start_datetime,
            end_datetime=entity.schedule.end_datetime,
            created_by=entity.created_by,
            updated_by=entity.updated_by,
            version=entity.version,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            line_items=[
                AppointmentLineItemModel(
                    studio_id=entity.studio_id, **line_item_columns(item, position)
                )
                for position, item in enumerate(entity.line_items)
            ],
        )
