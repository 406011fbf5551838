"""Declarative base and mixins for the studio tables.

Every table gets a UUID primary key and ``created_at``. Mutable tables add
``updated_at``; every table is tenant-scoped through ``TenantMixin``.

Usage:
    class CustomerModel(TenantMixin, BaseMutableModel):
        __tablename__ = "customers"
        first_name: Mapped[str]
        # Has: id, studio_id, created_at, updated_at

Hierarchy:
    BaseModel (id, created_at)
        ├── BaseMutableModel (+ updated_at)
        │   ├── AppointmentModel, VisitModel, VisitProtocolModel, ...
        └── VisitServiceItemModel, VisitPhotoModel (written once with the visit)

Domain entities never inherit from these; repositories map between them.
"""

from datetime import datetime
from uuid import UUID as PythonUUID, uuid4

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class BaseModel(DeclarativeBase):
    """Root of all models: ``id`` (set by the domain, uuid4 fallback) and ``created_at``."""

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class TimestampMixin:
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class TenantMixin:
    """Mixin adding the owning studio.

    Every repository query filters on this column; rows of another studio
    are invisible rather than forbidden.
    """

    studio_id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
        comment="Owning studio (tenant)",
    )


class BaseMutableModel(TimestampMixin, BaseModel):
    """BaseModel plus ``updated_at``."""

    __abstract__ = True
