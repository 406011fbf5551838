"""VisitDocumentRepository - SQLAlchemy implementation of VisitDocumentRepository protocol."""

from typing import Any, cast
from uuid import UUID

from sqlalchemy import CursorResult, delete, select

from src.domain.entities.visit_document import VisitDocument
from src.infrastructure.persistence.models.visit_document import VisitDocumentModel
from src.infrastructure.persistence.repositories.base import SQLAlchemyRepository


class VisitDocumentRepository(SQLAlchemyRepository):
    """SQLAlchemy implementation of VisitDocumentRepository protocol."""

    async def find_by_visit(
        self, visit_id: UUID, studio_id: UUID
    ) -> list[VisitDocument]:
        """List a visit's documents, oldest first."""
        stmt = (
            select(VisitDocumentModel)
            .where(
                VisitDocumentModel.visit_id == visit_id,
                VisitDocumentModel.studio_id == studio_id,
            )
            .order_by(VisitDocumentModel.uploaded_at)
        )
        models = await self._scalars(stmt)

        return [
            VisitDocument(
                id=model.id,
                studio_id=model.studio_id,
                visit_id=model.visit_id,
                file_key=model.file_key,
                file_name=model.file_name,
                document_type=model.document_type,
                uploaded_by=model.uploaded_by,
                uploaded_at=model.uploaded_at,
            )
            for model in models
        ]

    async def delete_by_visit(self, visit_id: UUID, studio_id: UUID) -> int:
        """Delete a visit's document rows.

        Returns:
            Number of deleted rows.
        """
        stmt = delete(VisitDocumentModel).where(
            VisitDocumentModel.visit_id == visit_id,
            VisitDocumentModel.studio_id == studio_id,
        )
        result = cast(CursorResult[Any], await self._execute(stmt))
        return result.rowcount
