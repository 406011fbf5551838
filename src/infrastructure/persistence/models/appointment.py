"""Appointment database models.

Architecture:
    - appointments: aggregate root row with an optimistic ``version``
    - appointment_line_items: ordered pricing snapshots (CASCADE delete)
    - Totals are derived from line items and never stored
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.persistence.base import (
    BaseModel,
    BaseMutableModel,
    TenantMixin,
)
from src.infrastructure.persistence.models.pricing import PricedLineMixin


class AppointmentModel(TenantMixin, BaseMutableModel):
    """Appointment aggregate root.

    Fields:
        customer_id: FK to customers
        vehicle_id: FK to vehicles (nullable until the vehicle is known)
        title, note: Optional free text
        color_id: FK to appointment_colors (nullable)
        status: Lowercase AppointmentStatus value
        is_all_day, start_datetime, end_datetime: Schedule
        created_by, updated_by: Acting staff members
        version: Optimistic concurrency counter

    Indexes:
        - ix_appointments_studio_start: Calendar listing
    """

    __tablename__ = "appointments"
    __table_args__ = (
        Index("ix_appointments_studio_start", "studio_id", "start_datetime"),
    )

    customer_id: Mapped[UUID] = mapped_column(
        ForeignKey("customers.id"), nullable=False, index=True
    )
    vehicle_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("vehicles.id"), nullable=True
    )
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    color_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("appointment_colors.id", ondelete="SET NULL"), nullable=True
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    is_all_day: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    start_datetime: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    end_datetime: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    created_by: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    updated_by: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    line_items: Mapped[list["AppointmentLineItemModel"]] = relationship(
        back_populates="appointment",
        cascade="all, delete-orphan",
        order_by="AppointmentLineItemModel.position",
        lazy="selectin",
        passive_deletes=True,
    )


class AppointmentLineItemModel(TenantMixin, PricedLineMixin, BaseModel):
    """Priced service booked on an appointment (immutable once written)."""

    __tablename__ = "appointment_line_items"

    appointment_id: Mapped[UUID] = mapped_column(
        ForeignKey("appointments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    appointment: Mapped[AppointmentModel] = relationship(back_populates="line_items")
