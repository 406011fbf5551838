"""Appointment query handlers.

Handles requests to read appointments enriched with totals and display
data (customer name and contact, vehicle label, calendar color).

Architecture:
- Application layer handlers (orchestrate data retrieval)
- Returns Result[DTO, str] (explicit error handling)
- NO domain events (queries are side-effect free)
- Related records fetched concurrently (scatter-gather) and joined by id;
  a failing branch aborts the whole read
"""

import asyncio
from typing import cast
from uuid import UUID

from src.application.dtos import (
    AppointmentListResult,
    AppointmentResult,
    LineItemResult,
    TotalsResult,
)
from src.application.queries.appointment_queries import (
    GetAppointment,
    ListAppointments,
)
from src.application.queries.handlers.pagination import clamp_page, page_offset
from src.core.result import Failure, Result, Success
from src.domain.entities import Appointment, AppointmentColor, Customer, Vehicle
from src.domain.errors import AppointmentError
from src.domain.protocols import (
    AppointmentColorRepository,
    AppointmentRepository,
    CustomerRepository,
    VehicleRepository,
)


def to_appointment_result(
    appointment: Appointment,
    customer: Customer | None,
    vehicle: Vehicle | None,
    color: AppointmentColor | None,
) -> AppointmentResult:
    """Map an appointment and its related records to the read DTO.

    Missing related records leave their display fields as None.
    """
    return AppointmentResult(
        id=appointment.id,
        status=appointment.status.value,
        title=appointment.title,
        note=appointment.note,
        customer_id=appointment.customer_id,
        customer_name=customer.full_name if customer else None,
        customer_phone=customer.phone if customer else None,
        customer_email=customer.email if customer else None,
        vehicle_id=appointment.vehicle_id,
        vehicle_label=vehicle.display_name if vehicle else None,
        color_id=appointment.color_id,
        color_name=color.name if color else None,
        color_hex=color.hex_color if color else None,
        is_all_day=appointment.schedule.is_all_day,
        start_datetime=appointment.schedule.start_datetime,
        end_datetime=appointment.schedule.end_datetime,
        line_items=[LineItemResult.from_line_item(i) for i in appointment.line_items],
        totals=TotalsResult.from_money(
            appointment.total_net(), appointment.total_gross()
        ),
        created_at=appointment.created_at,
        updated_at=appointment.updated_at,
    )


class GetAppointmentHandler:
    """Handler for GetAppointment query.

    An appointment of another studio is reported exactly like a missing one.

    Dependencies (injected via constructor):
        - AppointmentRepository: Appointment lookup
        - CustomerRepository: Customer display data
        - VehicleRepository: Vehicle display data
        - AppointmentColorRepository: Color display data
    """

    def __init__(
        self,
        appointment_repo: AppointmentRepository,
        customer_repo: CustomerRepository,
        vehicle_repo: VehicleRepository,
        color_repo: AppointmentColorRepository,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            appointment_repo: Appointment repository.
            customer_repo: Customer repository.
            vehicle_repo: Vehicle repository.
            color_repo: Appointment color repository.
        """
        self._appointment_repo = appointment_repo
        self._customer_repo = customer_repo
        self._vehicle_repo = vehicle_repo
        self._color_repo = color_repo

    async def handle(self, query: GetAppointment) -> Result[AppointmentResult, str]:
        """Handle GetAppointment query.

        Args:
            query: GetAppointment query.

        Returns:
            Success(AppointmentResult): Appointment found under the studio.
            Failure(error): AppointmentError.NOT_FOUND.
        """
        studio_id = query.context.studio_id
        appointment = await self._appointment_repo.find_by_id(
            query.appointment_id, studio_id
        )
        if appointment is None:
            return cast(
                Result[AppointmentResult, str],
                Failure(error=AppointmentError.NOT_FOUND),
            )

        customer, vehicle, color = await asyncio.gather(
            self._customer_repo.find_by_id(appointment.customer_id, studio_id),
            self._find_vehicle(appointment.vehicle_id, studio_id),
            self._find_color(appointment.color_id, studio_id),
        )
        return Success(
            value=to_appointment_result(appointment, customer, vehicle, color)
        )

    async def _find_vehicle(
        self, vehicle_id: UUID | None, studio_id: UUID
    ) -> Vehicle | None:
        if vehicle_id is None:
            return None
        return await self._vehicle_repo.find_by_id(vehicle_id, studio_id)

    async def _find_color(
        self, color_id: UUID | None, studio_id: UUID
    ) -> AppointmentColor | None:
        if color_id is None:
            return None
        return await self._color_repo.find_by_id(color_id, studio_id)


class ListAppointmentsHandler:
    """Handler for ListAppointments query.

    Dependencies (injected via constructor):
        - AppointmentRepository: Page and count
        - CustomerRepository: Batch customer lookup
        - VehicleRepository: Batch vehicle lookup
        - AppointmentColorRepository: Batch color lookup
    """

    def __init__(
        self,
        appointment_repo: AppointmentRepository,
        customer_repo: CustomerRepository,
        vehicle_repo: VehicleRepository,
        color_repo: AppointmentColorRepository,
        max_page_size: int = 100,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            appointment_repo: Appointment repository.
            customer_repo: Customer repository.
            vehicle_repo: Vehicle repository.
            color_repo: Appointment color repository.
            max_page_size: Upper bound for the page size.
        """
        self._appointment_repo = appointment_repo
        self._customer_repo = customer_repo
        self._vehicle_repo = vehicle_repo
        self._color_repo = color_repo
        self._max_page_size = max_page_size

    async def handle(
        self, query: ListAppointments
    ) -> Result[AppointmentListResult, str]:
        """Handle ListAppointments query.

        Args:
            query: ListAppointments query.

        Returns:
            Success(AppointmentListResult): Page of appointments (may be empty).
        """
        studio_id = query.context.studio_id
        page, page_size = clamp_page(query.page, query.page_size, self._max_page_size)

        # Step 1: Page and total
        appointments, total = await asyncio.gather(
            self._appointment_repo.list_by_studio(
                studio_id,
                status=query.status,
                offset=page_offset(page, page_size),
                limit=page_size,
            ),
            self._appointment_repo.count_by_studio(studio_id, status=query.status),
        )

        # Step 2: Related records for the page, joined by id
        customer_ids = {a.customer_id for a in appointments}
        vehicle_ids = {a.vehicle_id for a in appointments if a.vehicle_id}
        color_ids = {a.color_id for a in appointments if a.color_id}
        customers, vehicles, colors = await asyncio.gather(
            self._customer_repo.find_by_ids(customer_ids, studio_id),
            self._vehicle_repo.find_by_ids(vehicle_ids, studio_id),
            self._color_repo.find_by_ids(color_ids, studio_id),
        )
        customer_map = {c.id: c for c in customers}
        vehicle_map = {v.id: v for v in vehicles}
        color_map = {c.id: c for c in colors}

        items = [
            to_appointment_result(
                appointment,
                customer_map.get(appointment.customer_id),
                vehicle_map.get(appointment.vehicle_id) if appointment.vehicle_id else None,
                color_map.get(appointment.color_id) if appointment.color_id else None,
            )
            for appointment in appointments
        ]
        return Success(
            value=AppointmentListResult(
                items=items, total=total, page=page, page_size=page_size
            )
        )
