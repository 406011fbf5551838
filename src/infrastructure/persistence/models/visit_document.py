"""Visit document database model."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel, TenantMixin


class VisitDocumentModel(TenantMixin, BaseModel):
    """Stored document reference (append-only, no updated_at)."""

    __tablename__ = "visit_documents"

    visit_id: Mapped[UUID] = mapped_column(
        ForeignKey("visits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    file_key: Mapped[str] = mapped_column(
        String(500), nullable=False, comment="Object storage key"
    )
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    document_type: Mapped[str] = mapped_column(String(50), nullable=False)
    uploaded_by: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
