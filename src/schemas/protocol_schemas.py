"""Protocol rule and visit protocol request/response schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.application.dtos import ProtocolRuleResult, VisitProtocolResult
from src.domain.enums import ProtocolStage, ProtocolTriggerType


# =============================================================================
# Request Schemas
# =============================================================================


class ProtocolRuleCreateRequest(BaseModel):
    """Request to define a protocol rule.

    Attributes:
        template_id: Protocol template to instantiate.
        trigger_type: global_always or service_specific.
        stage: check_in or check_out.
        service_ids: Triggering services (service_specific only).
        is_mandatory: Whether the protocol gates the stage.
        display_order: Position among the stage's protocols.
    """

    template_id: UUID
    trigger_type: ProtocolTriggerType
    stage: ProtocolStage
    service_ids: list[UUID] = Field(default_factory=list)
    is_mandatory: bool = True
    display_order: int = Field(0, description="Display position")


class ProtocolRuleUpdateRequest(BaseModel):
    """Partial update: reorder and/or change mandatory flag."""

    display_order: int | None = None
    is_mandatory: bool | None = None


class VisitProtocolGenerateRequest(BaseModel):
    """Stage to generate protocol instances for."""

    stage: ProtocolStage


class ProtocolReadyRequest(BaseModel):
    """Filled document stored for the protocol."""

    filled_document_key: str = Field(..., min_length=1, max_length=500)


class ProtocolSignRequest(BaseModel):
    """Signature captured for the protocol."""

    signed_document_key: str = Field(..., min_length=1, max_length=500)
    signed_by: str = Field(..., min_length=1, max_length=200)
    signature_image_key: str = Field(..., min_length=1, max_length=500)
    notes: str | None = Field(None, max_length=2000)


# =============================================================================
# Response Schemas
# =============================================================================


class ProtocolRuleResponse(BaseModel):
    """Protocol rule."""

    id: UUID
    template_id: UUID
    trigger_type: str = Field(..., examples=["global_always"])
    stage: str = Field(..., examples=["check_in"])
    service_ids: list[UUID]
    is_mandatory: bool
    display_order: int

    @classmethod
    def from_dto(cls, dto: ProtocolRuleResult) -> "ProtocolRuleResponse":
        """Convert application DTO to response schema."""
        return cls(
            id=dto.id,
            template_id=dto.template_id,
            trigger_type=dto.trigger_type,
            stage=dto.stage,
            service_ids=list(dto.service_ids),
            is_mandatory=dto.is_mandatory,
            display_order=dto.display_order,
        )


class ProtocolRuleListResponse(BaseModel):
    """Protocol rules ordered by display order."""

    rules: list[ProtocolRuleResponse]

    @classmethod
    def from_dto(cls, dtos: list[ProtocolRuleResult]) -> "ProtocolRuleListResponse":
        """Convert application DTOs to response schema."""
        return cls(rules=[ProtocolRuleResponse.from_dto(dto) for dto in dtos])


class VisitProtocolResponse(BaseModel):
    """Visit protocol instance."""

    id: UUID
    visit_id: UUID
    template_id: UUID
    stage: str
    version: int
    is_mandatory: bool
    status: str = Field(..., examples=["pending"])
    filled_document_key: str | None = None
    signed_document_key: str | None = None
    signed_at: datetime | None = None
    signed_by: str | None = None
    notes: str | None = None

    @classmethod
    def from_dto(cls, dto: VisitProtocolResult) -> "VisitProtocolResponse":
        """Convert application DTO to response schema."""
        return cls(
            id=dto.id,
            visit_id=dto.visit_id,
            template_id=dto.template_id,
            stage=dto.stage,
            version=dto.version,
            is_mandatory=dto.is_mandatory,
            status=dto.status,
            filled_document_key=dto.filled_document_key,
            signed_document_key=dto.signed_document_key,
            signed_at=dto.signed_at,
            signed_by=dto.signed_by,
            notes=dto.notes,
        )


class VisitProtocolListResponse(BaseModel):
    """Visit protocol instances."""

    protocols: list[VisitProtocolResponse]

    @classmethod
    def from_dto(
        cls, dtos: list[VisitProtocolResult]
    ) -> "VisitProtocolListResponse":
        """Convert application DTOs to response schema."""
        return cls(protocols=[VisitProtocolResponse.from_dto(dto) for dto in dtos])
