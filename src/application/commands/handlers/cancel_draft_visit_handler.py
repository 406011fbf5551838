"""CancelDraftVisit command handler.

Hard-deletes a DRAFT visit together with everything attached to it:
protocol instances (and their stored PDFs and signature images), the
damage map image, and uploaded documents. The originating appointment is
left untouched so it can be converted again.

Blob deletion is best-effort: storage failures are logged and collected,
and never abort the cancellation.
"""

from typing import cast

from src.application.commands.visit_commands import CancelDraftVisit
from src.core.result import Failure, Result, Success
from src.domain.errors import VisitError
from src.domain.events import VisitDraftCancelled
from src.domain.protocols import (
    EventBusProtocol,
    LoggerProtocol,
    ObjectStorageProtocol,
    VisitDocumentRepository,
    VisitProtocolRepository,
    VisitRepository,
)


class CancelDraftVisitHandler:
    """Handler for CancelDraftVisit command.

    Dependencies (injected via constructor):
        - VisitRepository: Visit lookup and deletion
        - VisitProtocolRepository: Protocol instances of the visit
        - VisitDocumentRepository: Documents of the visit
        - ObjectStorageProtocol: Blob deletion
        - EventBusProtocol: Domain events
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        visit_repo: VisitRepository,
        visit_protocol_repo: VisitProtocolRepository,
        document_repo: VisitDocumentRepository,
        storage: ObjectStorageProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            visit_repo: Visit repository.
            visit_protocol_repo: Visit protocol repository.
            document_repo: Visit document repository.
            storage: Object storage for blob deletion.
            event_bus: Event bus for publishing domain events.
            logger: Logger for structured logging.
        """
        self._visit_repo = visit_repo
        self._visit_protocol_repo = visit_protocol_repo
        self._document_repo = document_repo
        self._storage = storage
        self._event_bus = event_bus
        self._logger = logger

    async def handle(self, cmd: CancelDraftVisit) -> Result[None, str]:
        """Handle CancelDraftVisit command.

        Args:
            cmd: CancelDraftVisit command.

        Returns:
            Success(None): Visit and its attachments deleted.
            Failure(error): Visit not found or not a draft (nothing deleted).

        Side Effects:
            - Deletes protocol rows, document rows and the visit row
            - Deletes stored blobs (best-effort)
            - Publishes VisitDraftCancelled
        """
        studio_id = cmd.context.studio_id

        # Step 1: Load visit and check it is a draft
        visit = await self._visit_repo.find_by_id(cmd.visit_id, studio_id)
        if visit is None:
            return cast(Result[None, str], Failure(error=VisitError.NOT_FOUND))

        cancellable = visit.ensure_cancellable()
        if isinstance(cancellable, Failure):
            self._logger.warning(
                "visit_cancel_draft_rejected",
                visit_id=str(visit.id),
                status=visit.status.value,
            )
            return cancellable

        failed_keys: list[str] = []

        # Step 2: Protocol blobs, then protocol rows
        protocols = await self._visit_protocol_repo.find_by_visit(visit.id, studio_id)
        for protocol in protocols:
            for key in protocol.storage_keys():
                await self._delete_blob(key, failed_keys, visit_id=str(visit.id))
        deleted_protocols = await self._visit_protocol_repo.delete_by_visit(
            visit.id, studio_id
        )

        # Step 3: Damage map
        if visit.damage_map_file_id:
            await self._delete_blob(
                visit.damage_map_file_id, failed_keys, visit_id=str(visit.id)
            )

        # Step 4: Documents
        documents = await self._document_repo.find_by_visit(visit.id, studio_id)
        for document in documents:
            await self._delete_blob(document.file_key, failed_keys, visit_id=str(visit.id))
        await self._document_repo.delete_by_visit(visit.id, studio_id)

        # Step 5: Visit row
        await self._visit_repo.delete(visit.id, studio_id)

        # Step 6: Publish event
        await self._event_bus.publish(
            VisitDraftCancelled(
                visit_id=visit.id,
                studio_id=studio_id,
                appointment_id=visit.appointment_id,
                deleted_protocols=deleted_protocols,
                failed_blob_deletions=tuple(failed_keys),
                cancelled_by=cmd.context.user_id,
            )
        )
        self._logger.info(
            "visit_draft_cancelled",
            visit_id=str(visit.id),
            deleted_protocols=deleted_protocols,
            deleted_documents=len(documents),
            failed_blob_deletions=len(failed_keys),
        )

        return Success(value=None)

    async def _delete_blob(self, key: str, failed_keys: list[str], **context: str) -> None:
        try:
            await self._storage.delete(key)
        except Exception as e:
            # Orphaned blobs are tolerated, the cancellation proceeds
            failed_keys.append(key)
            self._logger.error("visit_blob_delete_failed", error=e, key=key, **context)
