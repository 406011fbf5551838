"""VisitProtocolRepository - SQLAlchemy implementation of VisitProtocolRepository protocol."""

from typing import Any, cast
from uuid import UUID

from sqlalchemy import CursorResult, delete, select

from src.domain.entities.visit_protocol import VisitProtocol
from src.domain.enums import ProtocolStage, VisitProtocolStatus
from src.infrastructure.persistence.models.visit_protocol import VisitProtocolModel
from src.infrastructure.persistence.repositories.base import SQLAlchemyRepository


class VisitProtocolRepository(SQLAlchemyRepository):
    """SQLAlchemy implementation of VisitProtocolRepository protocol."""

    async def find_by_id(
        self, protocol_id: UUID, studio_id: UUID
    ) -> VisitProtocol | None:
        """Find protocol instance by ID within a studio."""
        stmt = select(VisitProtocolModel).where(
            VisitProtocolModel.id == protocol_id,
            VisitProtocolModel.studio_id == studio_id,
        )
        model = await self._scalar_one_or_none(stmt)
        if model is None:
            return None

        return self._to_domain(model)

    async def find_by_visit(
        self,
        visit_id: UUID,
        studio_id: UUID,
        *,
        stage: ProtocolStage | None = None,
    ) -> list[VisitProtocol]:
        """List a visit's protocol instances, by version then creation time."""
        stmt = select(VisitProtocolModel).where(
            VisitProtocolModel.visit_id == visit_id,
            VisitProtocolModel.studio_id == studio_id,
        )
        if stage is not None:
            stmt = stmt.where(VisitProtocolModel.stage == stage.value)
        stmt = stmt.order_by(
            VisitProtocolModel.version, VisitProtocolModel.created_at
        )
        models = await self._scalars(stmt)

        return [self._to_domain(model) for model in models]

    async def save(self, protocol: VisitProtocol) -> None:
        """Create or update instance.

        Uses merge semantics - creates if not exists, updates if exists.
        """
        stmt = select(VisitProtocolModel).where(
            VisitProtocolModel.id == protocol.id,
            VisitProtocolModel.studio_id == protocol.studio_id,
        )
        existing = await self._scalar_one_or_none(stmt)

        if existing is None:
            await self._add(self._to_model(protocol))
            return

        self._update_model(existing, protocol)
        await self._flush()

    async def save_all(self, protocols: list[VisitProtocol]) -> None:
        """Create a batch of instances."""
        await self._add(*(self._to_model(protocol) for protocol in protocols))

    async def delete_by_visit(self, visit_id: UUID, studio_id: UUID) -> int:
        """Delete every instance of a visit.

        Returns:
            Number of deleted rows.
        """
        stmt = delete(VisitProtocolModel).where(
            VisitProtocolModel.visit_id == visit_id,
            VisitProtocolModel.studio_id == studio_id,
        )
        result = cast(CursorResult[Any], await self._execute(stmt))
        return result.rowcount

    # =========================================================================
    # Entity ↔ Model Mapping (Private Methods)
    # =========================================================================

    def _to_domain(self, model: VisitProtocolModel) -> VisitProtocol:
        return VisitProtocol(
            id=model.id,
            studio_id=model.studio_id,
            visit_id=model.visit_id,
            template_id=model.template_id,
            stage=ProtocolStage(model.stage),
            version=model.version,
            is_mandatory=model.is_mandatory,
            status=VisitProtocolStatus(model.status),
            filled_document_key=model.filled_document_key,
            signed_document_key=model.signed_document_key,
            signed_at=model.signed_at,
            signed_by=model.signed_by,
            signature_image_key=model.signature_image_key,
            notes=model.notes,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: VisitProtocol) -> VisitProtocolModel:
        return VisitProtocolModel(
            id=entity.id,
            studio_id=entity.studio_id,
            visit_id=entity.visit_id,
            template_id=entity.template_id,
            stage=entity.stage.value,
            version=entity.version,
            is_mandatory=entity.is_mandatory,
            status=entity.status.value,
            filled_document_key=entity.filled_document_key,
            signed_document_key=entity.signed_document_key,
            signed_at=entity.signed_at,
            signed_by=entity.signed_by,
            signature_image_key=entity.signature_image_key,
            notes=entity.notes,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _update_model(self, model: VisitProtocolModel, entity: VisitProtocol) -> None:
        """Copy the signing workflow fields (identity and stage never change)."""
        model.status = entity.status.value
        model.filled_document_key = entity.filled_document_key
        model.signed_document_key = entity.signed_document_key
        model.signed_at = entity.signed_at
        model.signed_by = entity.signed_by
        model.signature_image_key = entity.signature_image_key
        model.notes = entity.notes
        model.updated_at = entity.updated_at
