"""Customer database model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, TenantMixin


class CustomerModel(TenantMixin, BaseMutableModel):
    """Studio customer.

    Fields:
        id, created_at, updated_at: From BaseMutableModel
        studio_id: Owning studio (from TenantMixin)
        first_name: Given name
        last_name: Family name
        phone: Phone number (nullable)
        email: Email address (nullable)
    """

    __tablename__ = "customers"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
