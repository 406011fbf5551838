"""Visit protocol database model."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, TenantMixin


class VisitProtocolModel(TenantMixin, BaseMutableModel):
    """Protocol instance generated for one visit.

    Fields:
        visit_id: FK to visits (CASCADE delete)
        template_id: Source template
        stage: "check_in" or "check_out"
        version: Generation number (1 for the first batch)
        is_mandatory: Copied from the rule
        status: "pending", "ready_for_signature" or "signed"
        *_key: Object storage keys of the filled/signed PDF and signature
        signed_at, signed_by, notes: Signature metadata

    Indexes:
        - ix_visit_protocols_visit_stage: Gate evaluation lookup
    """

    __tablename__ = "visit_protocols"
    __table_args__ = (
        Index("ix_visit_protocols_visit_stage", "visit_id", "stage"),
    )

    visit_id: Mapped[UUID] = mapped_column(
        ForeignKey("visits.id", ondelete="CASCADE"), nullable=False
    )
    template_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    stage: Mapped[str] = mapped_column(String(20), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_mandatory: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    status: Mapped[str] = mapped_column(String(30), nullable=False)
    filled_document_key: Mapped[str | None] = mapped_column(String(500), nullable=True)
    signed_document_key: Mapped[str | None] = mapped_column(String(500), nullable=True)
    signature_image_key: Mapped[str | None] = mapped_column(String(500), nullable=True)
    signed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    signed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
