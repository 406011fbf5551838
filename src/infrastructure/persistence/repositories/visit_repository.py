"""VisitRepository - SQLAlchemy implementation of VisitRepository protocol.

Adapter for hexagonal architecture.
Maps between domain Visit aggregates and VisitModel rows (with service
items and photos).

Service items and photos are written when the visit is inserted; lifecycle
updates only touch the root row and are guarded by the optimistic
``version``. Deleting a visit cascades to its items, photos, protocols and
documents at the database level.
"""

from typing import Any, cast
from uuid import UUID

from sqlalchemy import CursorResult, delete, exists, func, select, update
from sqlalchemy.exc import IntegrityError

from src.domain.entities.visit import Visit, VisitPhoto, VisitServiceItem
from src.domain.enums import PhotoType, VisitServiceStatus, VisitStatus
from src.domain.errors import DuplicateVisitError, StaleAggregateError
from src.infrastructure.persistence.models.visit import (
    VisitModel,
    VisitPhotoModel,
    VisitServiceItemModel,
)
from src.infrastructure.persistence.repositories.base import SQLAlchemyRepository
from src.infrastructure.persistence.repositories.mappers import (
    line_item_columns,
    line_item_from_row,
)

_UNIQUE_VISIT_INDEXES = ("uq_visits_studio_number", "uq_visits_studio_appointment")


class VisitRepository(SQLAlchemyRepository):
    """SQLAlchemy implementation of VisitRepository protocol.

    This class does NOT inherit from the protocol (Protocol uses structural typing).
    """

    async def find_by_id(self, visit_id: UUID, studio_id: UUID) -> Visit | None:
        """Find visit by ID within a studio.

        Args:
            visit_id: Visit's unique identifier.
            studio_id: Requesting studio.

        Returns:
            Domain Visit if found under the studio, None otherwise.
        """
        stmt = select(VisitModel).where(
            VisitModel.id == visit_id,
            VisitModel.studio_id == studio_id,
        )
        model = await self._scalar_one_or_none(stmt)
        if model is None:
            return None

        return self._to_domain(model)

    async def exists_for_appointment(
        self, appointment_id: UUID, studio_id: UUID
    ) -> bool:
        """Check if any visit references the appointment."""
        stmt = select(
            exists().where(
                VisitModel.appointment_id == appointment_id,
                VisitModel.studio_id == studio_id,
            )
        )
        result = await self._execute(stmt)
        return bool(result.scalar_one())

    async def find_latest_visit_number(self, studio_id: UUID, year: int) -> str | None:
        """Find the highest visit number issued in a year.

        Sequences are zero-padded, so lexical order equals numeric order.

        Args:
            studio_id: Requesting studio.
            year: Calendar year of the "VIS-{year}-" prefix.

        Returns:
            Latest visit number, or None if the year has none.
        """
        stmt = (
            select(VisitModel.visit_number)
            .where(
                VisitModel.studio_id == studio_id,
                VisitModel.visit_number.like(f"VIS-{year}-%"),
            )
            .order_by(VisitModel.visit_number.desc())
            .limit(1)
        )
        return cast(str | None, await self._scalar_one_or_none(stmt))

    async def list_by_studio(
        self,
        studio_id: UUID,
        *,
        status: VisitStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> list[Visit]:
        """List visits, newest first."""
        stmt = select(VisitModel).where(VisitModel.studio_id == studio_id)
        if status is not None:
            stmt = stmt.where(VisitModel.status == status.value)
        stmt = (
            stmt.order_by(VisitModel.created_at.desc(), VisitModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        models = await self._scalars(stmt)

        return [self._to_domain(model) for model in models]

    async def count_by_studio(
        self, studio_id: UUID, *, status: VisitStatus | None = None
    ) -> int:
        """Count visits matching the list filter."""
        stmt = (
            select(func.count())
            .select_from(VisitModel)
            .where(VisitModel.studio_id == studio_id)
        )
        if status is not None:
            stmt = stmt.where(VisitModel.status == status.value)
        result = await self._execute(stmt)
        return int(result.scalar_one())

    async def save(self, visit: Visit) -> None:
        """Create or update visit.

        Args:
            visit: Visit to persist.

        Raises:
            StaleAggregateError: If the visit changed since it was loaded.
            DuplicateVisitError: If the visit number, or a visit for the same
                appointment, already exists in the studio.
        """
        stmt = select(VisitModel.version).where(
            VisitModel.id == visit.id,
            VisitModel.studio_id == visit.studio_id,
        )
        stored_version = await self._scalar_one_or_none(stmt)

        if stored_version is None:
            try:
                await self._add_in_savepoint(self._to_model(visit))
            except IntegrityError as exc:
                if not any(name in str(exc.orig) for name in _UNIQUE_VISIT_INDEXES):
                    raise
                raise DuplicateVisitError(visit.visit_number, visit.appointment_id) from exc
            return

        update_stmt = (
            update(VisitModel)
            .where(
                VisitModel.id == visit.id,
                VisitModel.studio_id == visit.studio_id,
                VisitModel.version == visit.version,
            )
            .values(
                status=visit.status.value,
                completed_date=visit.completed_date,
                mileage_at_arrival=visit.mileage_at_arrival,
                keys_handed_over=visit.keys_handed_over,
                documents_handed_over=visit.documents_handed_over,
                technical_notes=visit.technical_notes,
                damage_map_file_id=visit.damage_map_file_id,
                updated_by=visit.updated_by,
                updated_at=visit.updated_at,
                version=visit.version + 1,
            )
        )
        result = cast(CursorResult[Any], await self._execute(update_stmt))
        if result.rowcount == 0:
            raise StaleAggregateError("Visit", visit.id, visit.version)

        visit.version += 1

    async def delete(self, visit_id: UUID, studio_id: UUID) -> bool:
        """Hard-delete a visit.

        Returns:
            True if a row was deleted.
        """
        stmt = delete(VisitModel).where(
            VisitModel.id == visit_id,
            VisitModel.studio_id == studio_id,
        )
        result = cast(CursorResult[Any], await self._execute(stmt))
        return result.rowcount > 0

    # =========================================================================
    # Entity ↔ Model Mapping (Private Methods)
    # =========================================================================

    def _to_domain(self, model: VisitModel) -> Visit:
        """Convert database model to domain aggregate.

        Raises:
            ValueError: If a persisted row violates a domain invariant.
        """
        return Visit(
            id=model.id,
            studio_id=model.studio_id,
            visit_number=model.visit_number,
            customer_id=model.customer_id,
            vehicle_id=model.vehicle_id,
            brand_snapshot=model.brand_snapshot,
            model_snapshot=model.model_snapshot,
            scheduled_date=model.scheduled_date,
            created_by=model.created_by,
            updated_by=model.updated_by,
            appointment_id=model.appointment_id,
            license_plate_snapshot=model.license_plate_snapshot,
            vin_snapshot=model.vin_snapshot,
            year_of_production_snapshot=model.year_of_production_snapshot,
            color_snapshot=model.color_snapshot,
            status=VisitStatus(model.status),
            completed_date=model.completed_date,
            mileage_at_arrival=model.mileage_at_arrival,
            keys_handed_over=model.keys_handed_over,
            documents_handed_over=model.documents_handed_over,
            technical_notes=model.technical_notes,
            service_items=[
                VisitServiceItem(
                    id=row.id,
                    line_item=line_item_from_row(row),
                    status=VisitServiceStatus(row.status),
                    created_at=row.created_at,
                )
                for row in model.service_items
            ],
            photos=[
                VisitPhoto(
                    id=row.id,
                    photo_type=PhotoType(row.photo_type),
                    file_id=row.file_id,
                    file_name=row.file_name,
                    description=row.description,
                    uploaded_at=row.uploaded_at,
                )
                for row in model.photos
            ],
            damage_map_file_id=model.damage_map_file_id,
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Visit) -> VisitModel:
        """Convert domain aggregate to a new database model."""
        return VisitModel(
            id=entity.id,
            studio_id=entity.studio_id,
            visit_number=entity.visit_number,
            customer_id=entity.customer_id,
            vehicle_id=entity.vehicle_id,
            appointment_id=entity.appointment_id,
            brand_snapshot=entity.brand_snapshot,
            model_snapshot=entity.model_snapshot,
            license_plate_snapshot=entity.license_plate_snapshot,
            vin_snapshot=entity.vin_snapshot,
            year_of_production_snapshot=entity.year_of_production_snapshot,
            color_snapshot=entity.color_snapshot,
            status=entity.status.value,
            scheduled_date=entity.scheduled_date,
            completed_date=entity.completed_date,
            mileage_at_arrival=entity.mileage_at_arrival,
            keys_handed_over=entity.keys_handed_over,
            documents_handed_over=entity.documents_handed_over,
            technical_notes=entity.technical_notes,
            damage_map_file_id=entity.damage_map_file_id,
            created_by=entity.created_by,
            updated_by=entity.updated_by,
            version=entity.version,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            service_items=[
                VisitServiceItemModel(
                    id=item.id,
                    studio_id=entity.studio_id,
                    status=item.status.value,
                    created_at=item.created_at,
                    **line_item_columns(item.line_item, position),
                )
                for position, item in enumerate(entity.service_items)
            ],
            photos=[
                VisitPhotoModel(
                    id=photo.id,
                    studio_id=entity.studio_id,
                    photo_type=photo.photo_type.value,
                    file_id=photo.file_id,
                    file_name=photo.file_name,
                    description=photo.description,
                    uploaded_at=photo.uploaded_at,
                )
                for photo in entity.photos
            ],
        )
