"""Vehicle database model."""

from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, TenantMixin


class VehicleModel(TenantMixin, BaseMutableModel):
    """Customer vehicle.

    Fields:
        id, created_at, updated_at: From BaseMutableModel
        studio_id: Owning studio (from TenantMixin)
        customer_id: FK to customers (owner)
        brand, model: Make and model
        year_of_production, license_plate, vin, color: Optional details
    """

    __tablename__ = "vehicles"

    customer_id: Mapped[UUID] = mapped_column(
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="FK to customers table (owner)",
    )
    brand: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    year_of_production: Mapped[int | None] = mapped_column(Integer, nullable=True)
    license_plate: Mapped[str | None] = mapped_column(String(20), nullable=True)
    vin: Mapped[str | None] = mapped_column(String(17), nullable=True)
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)
