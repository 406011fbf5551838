"""Visit database models.

Architecture:
    - visits: aggregate root with vehicle snapshot columns and ``version``
    - visit_service_items: frozen pricing snapshots with per-item status
    - visit_photos: check-in photo references
    - (studio_id, visit_number) is unique, so a racing number generator
      fails the second insert instead of issuing a duplicate
    - (studio_id, appointment_id) is unique where an appointment is set,
      so two concurrent conversions cannot both insert a draft
"""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.persistence.base import (
    BaseModel,
    BaseMutableModel,
    TenantMixin,
)
from src.infrastructure.persistence.models.pricing import PricedLineMixin


class VisitModel(TenantMixin, BaseMutableModel):
    """Visit aggregate root.

    Fields:
        visit_number: "VIS-{year}-{seq:05d}", unique per studio
        customer_id, vehicle_id: FKs
        appointment_id: Source appointment (nullable, SET NULL on delete)
        *_snapshot: Vehicle attributes frozen at conversion
        status: Lowercase VisitStatus value
        scheduled_date, completed_date: Dates of the stay
        mileage_at_arrival, keys_handed_over, documents_handed_over: Check-in
        technical_notes: Free text (rejection reasons appended)
        damage_map_file_id: Storage key of the damage map
        created_by, updated_by: Acting staff members
        version: Optimistic concurrency counter
    """

    __tablename__ = "visits"
    __table_args__ = (
        UniqueConstraint("studio_id", "visit_number", name="uq_visits_studio_number"),
        Index(
            "uq_visits_studio_appointment",
            "studio_id",
            "appointment_id",
            unique=True,
            postgresql_where=text("appointment_id IS NOT NULL"),
        ),
    )

    visit_number: Mapped[str] = mapped_column(String(20), nullable=False)
    customer_id: Mapped[UUID] = mapped_column(
        ForeignKey("customers.id"), nullable=False, index=True
    )
    vehicle_id: Mapped[UUID] = mapped_column(ForeignKey("vehicles.id"), nullable=False)
    appointment_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("appointments.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    brand_snapshot: Mapped[str] = mapped_column(String(100), nullable=False)
    model_snapshot: Mapped[str] = mapped_column(String(100), nullable=False)
    license_plate_snapshot: Mapped[str | None] = mapped_column(String(20), nullable=True)
    vin_snapshot: Mapped[str | None] = mapped_column(String(17), nullable=True)
    year_of_production_snapshot: Mapped[int | None] = mapped_column(
        Integer, nullable=True
    )
    color_snapshot: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    scheduled_date: Mapped[date] = mapped_column(Date, nullable=False)
    completed_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    mileage_at_arrival: Mapped[int | None] = mapped_column(Integer, nullable=True)
    keys_handed_over: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    documents_handed_over: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    technical_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    damage_map_file_id: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_by: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    updated_by: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    service_items: Mapped[list["VisitServiceItemModel"]] = relationship(
        back_populates="visit",
        cascade="all, delete-orphan",
        order_by="VisitServiceItemModel.position",
        lazy="selectin",
        passive_deletes=True,
    )
    photos: Mapped[list["VisitPhotoModel"]] = relationship(
        back_populates="visit",
        cascade="all, delete-orphan",
        order_by="VisitPhotoModel.uploaded_at",
        lazy="selectin",
        passive_deletes=True,
    )


class VisitServiceItemModel(TenantMixin, PricedLineMixin, BaseModel):
    """Service performed during a visit with its frozen price."""

    __tablename__ = "visit_service_items"

    visit_id: Mapped[UUID] = mapped_column(
        ForeignKey("visits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False)

    visit: Mapped[VisitModel] = relationship(back_populates="service_items")


class VisitPhotoModel(TenantMixin, BaseModel):
    """Photo attached to a visit."""

    __tablename__ = "visit_photos"

    visit_id: Mapped[UUID] = mapped_column(
        ForeignKey("visits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    photo_type: Mapped[str] = mapped_column(String(30), nullable=False)
    file_id: Mapped[str] = mapped_column(String(500), nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    visit: Mapped[VisitModel] = relationship(back_populates="photos")
