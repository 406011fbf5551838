"""VehicleRepository - SQLAlchemy implementation of VehicleRepository protocol."""

from uuid import UUID

from sqlalchemy import select

from src.domain.entities.vehicle import Vehicle
from src.infrastructure.persistence.models.vehicle import VehicleModel
from src.infrastructure.persistence.repositories.base import SQLAlchemyRepository


class VehicleRepository(SQLAlchemyRepository):
    """SQLAlchemy implementation of VehicleRepository protocol."""

    async def find_by_id(self, vehicle_id: UUID, studio_id: UUID) -> Vehicle | None:
        """Find vehicle by ID within a studio."""
        stmt = select(VehicleModel).where(
            VehicleModel.id == vehicle_id,
            VehicleModel.studio_id == studio_id,
        )
        model = await self._scalar_one_or_none(stmt)
        if model is None:
            return None

        return self._to_domain(model)

    async def find_by_ids(
        self, vehicle_ids: set[UUID], studio_id: UUID
    ) -> list[Vehicle]:
        """Batch lookup (missing ids are skipped, empty input skips the query)."""
        if not vehicle_ids:
            return []

        stmt = select(VehicleModel).where(
            VehicleModel.id.in_(vehicle_ids),
            VehicleModel.studio_id == studio_id,
        )
        models = await self._scalars(stmt)

        return [self._to_domain(model) for model in models]

    async def save(self, vehicle: Vehicle) -> None:
        """Create or update vehicle.

        Ownership (customer_id) is fixed at creation.
        """
        stmt = select(VehicleModel).where(
            VehicleModel.id == vehicle.id,
            VehicleModel.studio_id == vehicle.studio_id,
        )
        existing = await self._scalar_one_or_none(stmt)

        if existing is None:
            await self._add(
                VehicleModel(
                    id=vehicle.id,
                    studio_id=vehicle.studio_id,
                    customer_id=vehicle.customer_id,
                    brand=vehicle.brand,
                    model=vehicle.model,
                    year_of_production=vehicle.year_of_production,
                    license_plate=vehicle.license_plate,
                    vin=vehicle.vin,
                    color=vehicle.color,
                    created_at=vehicle.created_at,
                    updated_at=vehicle.updated_at,
                )
            )
            return

        existing.brand = vehicle.brand
        existing.model = vehicle.model
        existing.year_of_production = vehicle.year_of_production
        existing.license_plate = vehicle.license_plate
        existing.vin = vehicle.vin
        existing.color = vehicle.color
        existing.updated_at = vehicle.updated_at
        await self._flush()

    def _to_domain(self, model: VehicleModel) -> Vehicle:
        return Vehicle(
            id=model.id,
            studio_id=model.studio_id,
            customer_id=model.customer_id,
            brand=model.brand,
            model=model.model,
            year_of_production=model.year_of_production,
            license_plate=model.license_plate,
            vin=model.vin,
            color=model.color,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
