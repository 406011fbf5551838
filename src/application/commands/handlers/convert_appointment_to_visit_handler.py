"""ConvertAppointmentToVisit command handler.

Creates a DRAFT visit from an appointment. The visit carries a snapshot of
the vehicle's attributes and a copy of the appointment's priced line items
(prices are carried over, the adjustment engine is not re-run). The
appointment itself keeps its status until the visit is confirmed.

Validation order (first failure wins):
    1. appointment exists under the studio
    2. appointment is not cancelled
    3. appointment has a vehicle
    4. vehicle exists
    5. customer exists
    6. no visit exists for the appointment
    7. appointment has services

The no-visit check is repeated by the database: an insert that loses a race
with a concurrent conversion (or visit number) is reported the same way as
check 6.
"""

import asyncio
from typing import cast

from uuid_extensions import uuid7

from src.application.commands.visit_commands import ConvertAppointmentToVisit
from src.application.dtos import ConvertToVisitResult
from src.application.services.visit_number_generator import VisitNumberGenerator
from src.core.result import Failure, Result, Success
from src.domain.entities import Appointment, Visit, VisitServiceItem
from src.domain.enums import AppointmentStatus, VisitServiceStatus
from src.domain.errors import ConversionError, DuplicateVisitError
from src.domain.events import VisitCreatedFromAppointment
from src.domain.protocols import (
    AppointmentRepository,
    CustomerRepository,
    EventBusProtocol,
    LoggerProtocol,
    VehicleRepository,
    VisitRepository,
)


class ConvertAppointmentToVisitHandler:
    """Handler for ConvertAppointmentToVisit command.

    Dependencies (injected via constructor):
        - AppointmentRepository: Source appointment
        - VisitRepository: Visit persistence and duplicate check
        - CustomerRepository: Customer existence
        - VehicleRepository: Vehicle snapshot source
        - VisitNumberGenerator: Next VIS-{year}-{seq} number
        - EventBusProtocol: Domain events
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        appointment_repo: AppointmentRepository,
        visit_repo: VisitRepository,
        customer_repo: CustomerRepository,
        vehicle_repo: VehicleRepository,
        number_generator: VisitNumberGenerator,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            appointment_repo: Appointment repository.
            visit_repo: Visit repository.
            customer_repo: Customer repository.
            vehicle_repo: Vehicle repository.
            number_generator: Visit number generator.
            event_bus: Event bus for publishing domain events.
            logger: Logger for structured logging.
        """
        self._appointment_repo = appointment_repo
        self._visit_repo = visit_repo
        self._customer_repo = customer_repo
        self._vehicle_repo = vehicle_repo
        self._number_generator = number_generator
        self._event_bus = event_bus
        self._logger = logger

    async def handle(
        self, cmd: ConvertAppointmentToVisit
    ) -> Result[ConvertToVisitResult, str]:
        """Handle ConvertAppointmentToVisit command.

        Args:
            cmd: ConvertAppointmentToVisit command.

        Returns:
            Success(ConvertToVisitResult): Draft visit created.
            Failure(error): ConversionError.* for the first failing check.

        Side Effects:
            - Persists a DRAFT visit
            - Publishes VisitCreatedFromAppointment
        """
        studio_id = cmd.context.studio_id

        # Step 1: Appointment exists and can still be converted
        appointment = await self._appointment_repo.find_by_id(
            cmd.appointment_id, studio_id
        )
        if appointment is None:
            return cast(
                Result[ConvertToVisitResult, str],
                Failure(error=ConversionError.APPOINTMENT_NOT_FOUND),
            )
        if appointment.status == AppointmentStatus.CANCELLED:
            return cast(
                Result[ConvertToVisitResult, str],
                Failure(error=ConversionError.APPOINTMENT_CANCELLED),
            )
        if appointment.vehicle_id is None:
            return cast(
                Result[ConvertToVisitResult, str],
                Failure(error=ConversionError.VEHICLE_REQUIRED),
            )

        # Step 2: Load related records concurrently
        vehicle, customer, visit_exists = await asyncio.gather(
            self._vehicle_repo.find_by_id(appointment.vehicle_id, studio_id),
            self._customer_repo.find_by_id(appointment.customer_id, studio_id),
            self._visit_repo.exists_for_appointment(appointment.id, studio_id),
        )

        # Step 3: Related records
        if vehicle is None:
            return cast(
                Result[ConvertToVisitResult, str],
                Failure(error=ConversionError.VEHICLE_NOT_FOUND),
            )
        if customer is None:
            return cast(
                Result[ConvertToVisitResult, str],
                Failure(error=ConversionError.CUSTOMER_NOT_FOUND),
            )
        if visit_exists:
            return cast(
                Result[ConvertToVisitResult, str],
                Failure(error=ConversionError.VISIT_ALREADY_EXISTS),
            )
        if not appointment.has_services():
            return cast(
                Result[ConvertToVisitResult, str],
                Failure(error=ConversionError.NO_SERVICES),
            )

        # Step 4: Build the draft visit
        visit_number = await self._number_generator.generate(studio_id)
        visit = Visit(
            id=uuid7(),
            studio_id=studio_id,
            visit_number=visit_number,
            customer_id=customer.id,
            vehicle_id=vehicle.id,
            appointment_id=appointment.id,
            brand_snapshot=vehicle.brand,
            model_snapshot=vehicle.model,
            license_plate_snapshot=vehicle.license_plate,
            vin_snapshot=vehicle.vin,
            year_of_production_snapshot=vehicle.year_of_production,
            color_snapshot=vehicle.color,
            scheduled_date=appointment.schedule.start_datetime.date(),
            mileage_at_arrival=cmd.mileage_at_arrival,
            keys_handed_over=cmd.keys_handed_over,
            documents_handed_over=cmd.documents_handed_over,
            technical_notes=cmd.technical_notes,
            service_items=_copy_line_items(appointment),
            created_by=cmd.context.user_id,
            updated_by=cmd.context.user_id,
        )

        # Step 5: Persist (a concurrent conversion may have won the insert)
        try:
            await self._visit_repo.save(visit)
        except DuplicateVisitError:
            self._logger.warning(
                "visit_conversion_conflict",
                appointment_id=str(appointment.id),
                visit_number=visit_number,
            )
            return cast(
                Result[ConvertToVisitResult, str],
                Failure(error=ConversionError.VISIT_ALREADY_EXISTS),
            )

        # Step 6: Publish
        await self._event_bus.publish(
            VisitCreatedFromAppointment(
                visit_id=visit.id,
                visit_number=visit.visit_number,
                appointment_id=appointment.id,
                studio_id=studio_id,
                created_by=cmd.context.user_id,
            )
        )
        self._logger.info(
            "visit_created_from_appointment",
            visit_id=str(visit.id),
            visit_number=visit.visit_number,
            appointment_id=str(appointment.id),
        )

        return Success(
            value=ConvertToVisitResult(visit_id=visit.id, visit_number=visit_number)
        )


def _copy_line_items(appointment: Appointment) -> list[VisitServiceItem]:
    return [
        VisitServiceItem(
            id=uuid7(), line_item=item, status=VisitServiceStatus.CONFIRMED
        )
        for item in appointment.line_items
    ]
