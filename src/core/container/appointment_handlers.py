"""Appointment handler dependency factories.

Request-scoped handler instances for appointment booking and reads.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.events import get_event_bus
from src.core.container.infrastructure import get_db_session, get_logger

if TYPE_CHECKING:
    from src.application.commands.handlers.cancel_appointment_handler import (
        CancelAppointmentHandler,
    )
    from src.application.commands.handlers.create_appointment_handler import (
        CreateAppointmentHandler,
    )
    from src.application.queries.handlers.appointment_query_handlers import (
        GetAppointmentHandler,
        ListAppointmentsHandler,
    )


# ============================================================================
# Appointment Command Handler Factories (Request-Scoped)
# ============================================================================


async def get_create_appointment_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "CreateAppointmentHandler":
    """Get CreateAppointment command handler (request-scoped).

    Creates handler with:
    - AppointmentRepository, CustomerRepository, VehicleRepository
    - CatalogServiceRepository, AppointmentColorRepository (reference data)
    - Event bus and logger (app-scoped)

    Returns:
        CreateAppointmentHandler instance.
    """
    from src.application.commands.handlers.create_appointment_handler import (
        CreateAppointmentHandler,
    )
    from src.infrastructure.persistence.repositories import (
        AppointmentColorRepository,
        AppointmentRepository,
        CatalogServiceRepository,
        CustomerRepository,
        VehicleRepository,
    )

    return CreateAppointmentHandler(
        appointment_repo=AppointmentRepository(session=session),
        customer_repo=CustomerRepository(session=session),
        vehicle_repo=VehicleRepository(session=session),
        catalog_repo=CatalogServiceRepository(session=session),
        color_repo=AppointmentColorRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_cancel_appointment_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "CancelAppointmentHandler":
    """Get CancelAppointment command handler (request-scoped)."""
    from src.application.commands.handlers.cancel_appointment_handler import (
        CancelAppointmentHandler,
    )
    from src.infrastructure.persistence.repositories import AppointmentRepository

    return CancelAppointmentHandler(
        appointment_repo=AppointmentRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


# ============================================================================
# Appointment Query Handler Factories (Request-Scoped)
# ============================================================================


async def get_get_appointment_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetAppointmentHandler":
    """Get GetAppointment query handler (request-scoped)."""
    from src.application.queries.handlers.appointment_query_handlers import (
        GetAppointmentHandler,
    )
    from src.infrastructure.persistence.repositories import (
        AppointmentColorRepository,
        AppointmentRepository,
        CustomerRepository,
        VehicleRepository,
    )

    return GetAppointmentHandler(
        appointment_repo=AppointmentRepository(session=session),
        customer_repo=CustomerRepository(session=session),
        vehicle_repo=VehicleRepository(session=session),
        color_repo=AppointmentColorRepository(session=session),
    )


async def get_list_appointments_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListAppointmentsHandler":
    """Get ListAppointments query handler (request-scoped).

    Page size is clamped to ``settings.max_page_size``.
    """
    from src.application.queries.handlers.appointment_query_handlers import (
        ListAppointmentsHandler,
    )
    from src.infrastructure.persistence.repositories import (
        AppointmentColorRepository,
        AppointmentRepository,
        CustomerRepository,
        VehicleRepository,
    )

    return ListAppointmentsHandler(
        appointment_repo=AppointmentRepository(session=session),
        customer_repo=CustomerRepository(session=session),
        vehicle_repo=VehicleRepository(session=session),
        color_repo=AppointmentColorRepository(session=session),
        max_page_size=settings.max_page_size,
    )
