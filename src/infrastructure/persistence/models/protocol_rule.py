"""Protocol rule database model.

Service ids are stored as a PostgreSQL UUID array; global rules store an
empty array.
"""

from uuid import UUID

from sqlalchemy import Boolean, Index, Integer, String, Uuid
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, TenantMixin


class ProtocolRuleModel(TenantMixin, BaseMutableModel):
    """Protocol requirement for a visit stage.

    Fields:
        template_id: Protocol template to instantiate
        trigger_type: "global_always" or "service_specific"
        stage: "check_in" or "check_out"
        service_ids: Triggering services
        is_mandatory: Blocks the stage's gated transition when unsigned
        display_order: Sort key (>= 0)

    Indexes:
        - ix_protocol_rules_studio_stage: Resolution lookup
    """

    __tablename__ = "protocol_rules"
    __table_args__ = (
        Index("ix_protocol_rules_studio_stage", "studio_id", "stage"),
    )

    template_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    trigger_type: Mapped[str] = mapped_column(String(20), nullable=False)
    stage: Mapped[str] = mapped_column(String(20), nullable=False)
    service_ids: Mapped[list[UUID]] = mapped_column(
        ARRAY(Uuid), nullable=False, default=list
    )
    is_mandatory: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
