"""Visit protocol command handlers.

Handlers:
    - GenerateVisitProtocolsHandler: instantiate resolved rules for a stage
    - MarkProtocolReadyForSignatureHandler: PENDING → READY_FOR_SIGNATURE
    - SignVisitProtocolHandler: READY_FOR_SIGNATURE → SIGNED
"""

import asyncio
from typing import cast
from uuid import UUID

from uuid_extensions import uuid7

from src.application.commands.protocol_commands import (
    GenerateVisitProtocols,
    MarkProtocolReadyForSignature,
    SignVisitProtocol,
)
from src.application.dtos import VisitProtocolResult
from src.application.services.protocol_resolver import ProtocolResolver
from src.core.result import Failure, Result, Success
from src.domain.entities import VisitProtocol
from src.domain.errors import ProtocolError, VisitError
from src.domain.events import VisitProtocolSigned
from src.domain.protocols import (
    EventBusProtocol,
    LoggerProtocol,
    VisitProtocolRepository,
    VisitRepository,
)


class GenerateVisitProtocolsHandler:
    """Handler for GenerateVisitProtocols command.

    Idempotent per (visit, stage, template): existing instances are returned
    unchanged, and a PENDING instance is created only for resolved rules
    whose template has none yet, carrying the rule's mandatory flag.

    Dependencies (injected via constructor):
        - VisitRepository: Visit lookup (services)
        - VisitProtocolRepository: Instance persistence
        - ProtocolResolver: Applicable rules
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        visit_repo: VisitRepository,
        visit_protocol_repo: VisitProtocolRepository,
        protocol_resolver: ProtocolResolver,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            visit_repo: Visit repository.
            visit_protocol_repo: Visit protocol repository.
            protocol_resolver: Protocol rule resolver.
            logger: Logger for structured logging.
        """
        self._visit_repo = visit_repo
        self._visit_protocol_repo = visit_protocol_repo
        self._protocol_resolver = protocol_resolver
        self._logger = logger

    async def handle(
        self, cmd: GenerateVisitProtocols
    ) -> Result[list[VisitProtocolResult], str]:
        """Handle GenerateVisitProtocols command.

        Args:
            cmd: GenerateVisitProtocols command.

        Returns:
            Success(list[VisitProtocolResult]): Instances of the stage.
            Failure(error): Visit not found.
        """
        studio_id = cmd.context.studio_id

        visit = await self._visit_repo.find_by_id(cmd.visit_id, studio_id)
        if visit is None:
            return cast(
                Result[list[VisitProtocolResult], str],
                Failure(error=VisitError.NOT_FOUND),
            )

        existing, rules = await asyncio.gather(
            self._visit_protocol_repo.find_by_visit(
                visit.id, studio_id, stage=cmd.stage
            ),
            self._protocol_resolver.resolve(studio_id, cmd.stage, visit.service_ids()),
        )

        # Rules added after an earlier run still get their instance
        instantiated: set[UUID] = {p.template_id for p in existing}
        created = [
            VisitProtocol(
                id=uuid7(),
                studio_id=studio_id,
                visit_id=visit.id,
                template_id=rule.template_id,
                stage=cmd.stage,
                version=1,
                is_mandatory=rule.is_mandatory,
            )
            for rule in rules
            if rule.template_id not in instantiated
        ]
        if created:
            await self._visit_protocol_repo.save_all(created)

        self._logger.info(
            "visit_protocols_generated",
            visit_id=str(visit.id),
            stage=cmd.stage.value,
            existing=len(existing),
            created=len(created),
        )
        return Success(
            value=[VisitProtocolResult.from_entity(p) for p in [*existing, *created]]
        )


class MarkProtocolReadyForSignatureHandler:
    """Handler for MarkProtocolReadyForSignature command."""

    def __init__(
        self, visit_protocol_repo: VisitProtocolRepository, logger: LoggerProtocol
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            visit_protocol_repo: Visit protocol repository.
            logger: Logger for structured logging.
        """
        self._visit_protocol_repo = visit_protocol_repo
        self._logger = logger

    async def handle(
        self, cmd: MarkProtocolReadyForSignature
    ) -> Result[VisitProtocolResult, str]:
        """Handle MarkProtocolReadyForSignature command.

        Returns:
            Success(VisitProtocolResult) or Failure(ProtocolError.*).
        """
        protocol = await self._visit_protocol_repo.find_by_id(
            cmd.protocol_id, cmd.context.studio_id
        )
        if protocol is None:
            return cast(
                Result[VisitProtocolResult, str],
                Failure(error=ProtocolError.PROTOCOL_NOT_FOUND),
            )

        result = protocol.mark_ready_for_signature(cmd.filled_document_key)
        if isinstance(result, Failure):
            return cast(Result[VisitProtocolResult, str], result)

        await self._visit_protocol_repo.save(protocol)
        self._logger.info(
            "visit_protocol_ready_for_signature", protocol_id=str(protocol.id)
        )
        return Success(value=VisitProtocolResult.from_entity(protocol))


class SignVisitProtocolHandler:
    """Handler for SignVisitProtocol command.

    Dependencies (injected via constructor):
        - VisitProtocolRepository: Instance persistence
        - EventBusProtocol: Domain events
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        visit_protocol_repo: VisitProtocolRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            visit_protocol_repo: Visit protocol repository.
            event_bus: Event bus for publishing domain events.
            logger: Logger for structured logging.
        """
        self._visit_protocol_repo = visit_protocol_repo
        self._event_bus = event_bus
        self._logger = logger

    async def handle(self, cmd: SignVisitProtocol) -> Result[VisitProtocolResult, str]:
        """Handle SignVisitProtocol command.

        Args:
            cmd: SignVisitProtocol command.

        Returns:
            Success(VisitProtocolResult): Protocol signed.
            Failure(error): Not found, wrong status, already signed, or
                missing signature data.
        """
        protocol = await self._visit_protocol_repo.find_by_id(
            cmd.protocol_id, cmd.context.studio_id
        )
        if protocol is None:
            return cast(
                Result[VisitProtocolResult, str],
                Failure(error=ProtocolError.PROTOCOL_NOT_FOUND),
            )

        result = protocol.sign(
            signed_document_key=cmd.signed_document_key,
            signed_by=cmd.signed_by,
            signature_image_key=cmd.signature_image_key,
            notes=cmd.notes,
        )
        if isinstance(result, Failure):
            self._logger.warning(
                "visit_protocol_sign_rejected",
                protocol_id=str(protocol.id),
                status=protocol.status.value,
                reason=result.error,
            )
            return cast(Result[VisitProtocolResult, str], result)

        await self._visit_protocol_repo.save(protocol)
        await self._event_bus.publish(
            VisitProtocolSigned(
                protocol_id=protocol.id,
                visit_id=protocol.visit_id,
                studio_id=protocol.studio_id,
                stage=protocol.stage,
                signed_by=cast(str, protocol.signed_by),
            )
        )
        self._logger.info(
            "visit_protocol_signed",
            protocol_id=str(protocol.id),
            visit_id=str(protocol.visit_id),
        )
        return Success(value=VisitProtocolResult.from_entity(protocol))
