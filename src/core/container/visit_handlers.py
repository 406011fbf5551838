"""Visit handler dependency factories.

Request-scoped handler instances for appointment conversion, the visit
lifecycle and visit reads.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.events import get_event_bus
from src.core.container.infrastructure import (
    get_db_session,
    get_logger,
    get_object_storage,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.cancel_draft_visit_handler import (
        CancelDraftVisitHandler,
    )
    from src.application.commands.handlers.confirm_visit_handler import (
        ConfirmVisitHandler,
    )
    from src.application.commands.handlers.convert_appointment_to_visit_handler import (
        ConvertAppointmentToVisitHandler,
    )
    from src.application.commands.handlers.visit_transition_handlers import (
        ArchiveVisitHandler,
        CompleteVisitHandler,
        MarkVisitReadyForPickupHandler,
        RejectVisitHandler,
    )
    from src.application.queries.handlers.visit_query_handlers import (
        GetVisitHandler,
        ListVisitsHandler,
    )


# ============================================================================
# Conversion and Confirmation (Request-Scoped)
# ============================================================================


async def get_convert_appointment_to_visit_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ConvertAppointmentToVisitHandler":
    """Get ConvertAppointmentToVisit command handler (request-scoped).

    Creates handler with:
    - AppointmentRepository, VisitRepository
    - CustomerRepository, VehicleRepository (snapshot sources)
    - VisitNumberGenerator (backed by the same VisitRepository)
    - Event bus and logger (app-scoped)
    """
    from src.application.commands.handlers.convert_appointment_to_visit_handler import (
        ConvertAppointmentToVisitHandler,
    )
    from src.application.services.visit_number_generator import VisitNumberGenerator
    from src.infrastructure.persistence.repositories import (
        AppointmentRepository,
        CustomerRepository,
        VehicleRepository,
        VisitRepository,
    )

    visit_repo = VisitRepository(session=session)

    return ConvertAppointmentToVisitHandler(
        appointment_repo=AppointmentRepository(session=session),
        visit_repo=visit_repo,
        customer_repo=CustomerRepository(session=session),
        vehicle_repo=VehicleRepository(session=session),
        number_generator=VisitNumberGenerator(visit_repo=visit_repo),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_confirm_visit_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ConfirmVisitHandler":
    """Get ConfirmVisit command handler (request-scoped)."""
    from src.application.commands.handlers.confirm_visit_handler import (
        ConfirmVisitHandler,
    )
    from src.application.services.protocol_resolver import ProtocolResolver
    from src.infrastructure.persistence.repositories import (
        AppointmentRepository,
        ProtocolRuleRepository,
        VisitProtocolRepository,
        VisitRepository,
    )

    return ConfirmVisitHandler(
        visit_repo=VisitRepository(session=session),
        appointment_repo=AppointmentRepository(session=session),
        visit_protocol_repo=VisitProtocolRepository(session=session),
        protocol_resolver=ProtocolResolver(
            rule_repo=ProtocolRuleRepository(session=session)
        ),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_cancel_draft_visit_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "CancelDraftVisitHandler":
    """Get CancelDraftVisit command handler (request-scoped).

    Blob deletion uses the app-scoped object storage; row deletion shares
    the request session.
    """
    from src.application.commands.handlers.cancel_draft_visit_handler import (
        CancelDraftVisitHandler,
    )
    from src.infrastructure.persistence.repositories import (
        VisitDocumentRepository,
        VisitProtocolRepository,
        VisitRepository,
    )

    return CancelDraftVisitHandler(
        visit_repo=VisitRepository(session=session),
        visit_protocol_repo=VisitProtocolRepository(session=session),
        document_repo=VisitDocumentRepository(session=session),
        storage=get_object_storage(),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


# ============================================================================
# Lifecycle Transitions (Request-Scoped)
# ============================================================================


async def get_mark_visit_ready_for_pickup_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "MarkVisitReadyForPickupHandler":
    """Get MarkVisitReadyForPickup command handler (request-scoped)."""
    from src.application.commands.handlers.visit_transition_handlers import (
        MarkVisitReadyForPickupHandler,
    )
    from src.infrastructure.persistence.repositories import VisitRepository

    return MarkVisitReadyForPickupHandler(
        visit_repo=VisitRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_complete_visit_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "CompleteVisitHandler":
    """Get CompleteVisit command handler (request-scoped)."""
    from src.application.commands.handlers.visit_transition_handlers import (
        CompleteVisitHandler,
    )
    from src.infrastructure.persistence.repositories import VisitRepository

    return CompleteVisitHandler(
        visit_repo=VisitRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_reject_visit_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RejectVisitHandler":
    """Get RejectVisit command handler (request-scoped)."""
    from src.application.commands.handlers.visit_transition_handlers import (
        RejectVisitHandler,
    )
    from src.infrastructure.persistence.repositories import VisitRepository

    return RejectVisitHandler(
        visit_repo=VisitRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_archive_visit_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ArchiveVisitHandler":
    """Get ArchiveVisit command handler (request-scoped)."""
    from src.application.commands.handlers.visit_transition_handlers import (
        ArchiveVisitHandler,
    )
    from src.infrastructure.persistence.repositories import VisitRepository

    return ArchiveVisitHandler(
        visit_repo=VisitRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


# ============================================================================
# Visit Query Handler Factories (Request-Scoped)
# ============================================================================


async def get_get_visit_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetVisitHandler":
    """Get GetVisit query handler (request-scoped)."""
    from src.application.queries.handlers.visit_query_handlers import (
        GetVisitHandler,
    )
    from src.infrastructure.persistence.repositories import (
        CustomerRepository,
        VisitProtocolRepository,
        VisitRepository,
    )

    return GetVisitHandler(
        visit_repo=VisitRepository(session=session),
        customer_repo=CustomerRepository(session=session),
        visit_protocol_repo=VisitProtocolRepository(session=session),
    )


async def get_list_visits_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListVisitsHandler":
    """Get ListVisits query handler (request-scoped)."""
    from src.application.queries.handlers.visit_query_handlers import (
        ListVisitsHandler,
    )
    from src.infrastructure.persistence.repositories import (
        CustomerRepository,
        VisitRepository,
    )

    return ListVisitsHandler(
        visit_repo=VisitRepository(session=session),
        customer_repo=CustomerRepository(session=session),
        max_page_size=settings.max_page_size,
    )
