"""Read-only repositories for studio reference data.

Catalog services and calendar colors are maintained outside this service;
booking only looks them up.
"""

from uuid import UUID

from sqlalchemy import select

from src.domain.entities.appointment_color import AppointmentColor
from src.domain.entities.catalog_service import CatalogService
from src.domain.value_objects import Money, VatRate
from src.infrastructure.persistence.models.appointment_color import (
    AppointmentColorModel,
)
from src.infrastructure.persistence.models.catalog_service import CatalogServiceModel
from src.infrastructure.persistence.repositories.base import SQLAlchemyRepository


class CatalogServiceRepository(SQLAlchemyRepository):
    """SQLAlchemy implementation of CatalogServiceRepository protocol."""

    async def find_by_ids(
        self, service_ids: set[UUID], studio_id: UUID
    ) -> list[CatalogService]:
        """Batch lookup of catalog services within a studio.

        Inactive services are returned too; the caller decides.
        """
        if not service_ids:
            return []

        stmt = select(CatalogServiceModel).where(
            CatalogServiceModel.id.in_(service_ids),
            CatalogServiceModel.studio_id == studio_id,
        )
        models = await self._scalars(stmt)

        return [
            CatalogService(
                id=model.id,
                studio_id=model.studio_id,
                name=model.name,
                base_price_net=Money.from_cents(model.base_price_net),
                vat_rate=VatRate(model.vat_rate),
                requires_manual_price=model.requires_manual_price,
                is_active=model.is_active,
            )
            for model in models
        ]


class AppointmentColorRepository(SQLAlchemyRepository):
    """SQLAlchemy implementation of AppointmentColorRepository protocol."""

    async def find_by_id(
        self, color_id: UUID, studio_id: UUID
    ) -> AppointmentColor | None:
        """Find color by ID within a studio."""
        stmt = select(AppointmentColorModel).where(
            AppointmentColorModel.id == color_id,
            AppointmentColorModel.studio_id == studio_id,
        )
        model = await self._scalar_one_or_none(stmt)
        if model is None:
            return None

        return self._to_domain(model)

    async def find_by_ids(
        self, color_ids: set[UUID], studio_id: UUID
    ) -> list[AppointmentColor]:
        """Batch lookup used by list queries."""
        if not color_ids:
            return []

        stmt = select(AppointmentColorModel).where(
            AppointmentColorModel.id.in_(color_ids),
            AppointmentColorModel.studio_id == studio_id,
        )
        models = await self._scalars(stmt)

        return [self._to_domain(model) for model in models]

    def _to_domain(self, model: AppointmentColorModel) -> AppointmentColor:
        return AppointmentColor(
            id=model.id,
            studio_id=model.studio_id,
            name=model.name,
            hex_color=model.hex_color,
        )
