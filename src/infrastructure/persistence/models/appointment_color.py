"""Appointment calendar color database model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, TenantMixin


class AppointmentColorModel(TenantMixin, BaseMutableModel):
    """Named calendar color of a studio."""

    __tablename__ = "appointment_colors"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    hex_color: Mapped[str] = mapped_column(
        String(7), nullable=False, comment="CSS hex color, e.g. #3B82F6"
    )
