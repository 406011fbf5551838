"""CreateAppointment command handler.

Books an appointment: validates the request, creates or updates the
customer and vehicle as requested, prices every service line and persists
the appointment in CREATED status.

Validation order (first failure wins):
    1. at least one service line
    2. schedule end after start
    3. new/updated customer has a phone or an email
    4. catalog services exist and are active
    5. manual-price services use SET_NET or SET_GROSS
    6. color exists
    7. existing/updated customer exists
    8. existing/updated vehicle exists and belongs to the customer
    9. a new customer's email and phone, or an updated customer's email,
       are not used by another customer of the studio

Architecture:
- Application layer handler (orchestrates business logic)
- Validation context (services, color, customer, vehicle) loaded concurrently
- Uses Result types for error handling
- Publishes AppointmentCreated after the appointment is persisted
"""

import asyncio
from typing import cast
from uuid import UUID

from uuid_extensions import uuid7

from src.application.commands.appointment_commands import (
    CUSTOM_SERVICE_NAME,
    CUSTOM_SERVICE_VAT_CODE,
    CreateAppointment,
    ExistingCustomer,
    ExistingVehicle,
    NewCustomer,
    NewVehicle,
    ServiceLineCommand,
    UpdateCustomer,
    UpdateVehicle,
)
from src.application.dtos import CreateAppointmentResult, TotalsResult
from src.core.result import Failure, Result, Success
from src.domain.entities import (
    Appointment,
    AppointmentColor,
    CatalogService,
    Customer,
    Vehicle,
)
from src.domain.enums import AdjustmentType
from src.domain.errors import AppointmentError, LineItemError
from src.domain.events import AppointmentCreated
from src.domain.protocols import (
    AppointmentColorRepository,
    AppointmentRepository,
    CatalogServiceRepository,
    CustomerRepository,
    EventBusProtocol,
    LoggerProtocol,
    VehicleRepository,
)
from src.domain.value_objects import (
    AppointmentSchedule,
    Money,
    ServiceLineItem,
    VatRate,
)

_MANUAL_PRICE_TYPES = frozenset({AdjustmentType.SET_NET, AdjustmentType.SET_GROSS})


class CreateAppointmentHandler:
    """Handler for CreateAppointment command.

    Dependencies (injected via constructor):
        - AppointmentRepository: Appointment persistence
        - CustomerRepository: Customer lookup and persistence
        - VehicleRepository: Vehicle lookup and persistence
        - CatalogServiceRepository: Service catalog lookup
        - AppointmentColorRepository: Calendar color lookup
        - EventBusProtocol: Domain events
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        appointment_repo: AppointmentRepository,
        customer_repo: CustomerRepository,
        vehicle_repo: VehicleRepository,
        catalog_repo: CatalogServiceRepository,
        color_repo: AppointmentColorRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            appointment_repo: Appointment repository.
            customer_repo: Customer repository.
            vehicle_repo: Vehicle repository.
            catalog_repo: Catalog service repository.
            color_repo: Appointment color repository.
            event_bus: Event bus for publishing domain events.
            logger: Logger for structured logging.
        """
        self._appointment_repo = appointment_repo
        self._customer_repo = customer_repo
        self._vehicle_repo = vehicle_repo
        self._catalog_repo = catalog_repo
        self._color_repo = color_repo
        self._event_bus = event_bus
        self._logger = logger

    async def handle(
        self, cmd: CreateAppointment
    ) -> Result[CreateAppointmentResult, str]:
        """Handle CreateAppointment command.

        Args:
            cmd: CreateAppointment command.

        Returns:
            Success(CreateAppointmentResult): Appointment booked.
            Failure(error): First failing validation (AppointmentError.* or
                LineItemError.*).

        Side Effects:
            - Creates or updates the customer and vehicle as requested
            - Persists the appointment
            - Publishes AppointmentCreated
        """
        studio_id = cmd.context.studio_id

        # Step 1: Services present
        if not cmd.services:
            return cast(
                Result[CreateAppointmentResult, str],
                Failure(error=AppointmentError.NO_SERVICES),
            )

        # Step 2: Schedule
        schedule_result = AppointmentSchedule.create(
            is_all_day=cmd.schedule.is_all_day,
            start_datetime=cmd.schedule.start_datetime,
            end_datetime=cmd.schedule.end_datetime,
        )
        if isinstance(schedule_result, Failure):
            return cast(
                Result[CreateAppointmentResult, str],
                Failure(error=schedule_result.error),
            )
        schedule = schedule_result.value

        # Step 3: Contact info for new/updated customers
        if isinstance(cmd.customer, NewCustomer | UpdateCustomer) and not (
            _present(cmd.customer.phone) or _present(cmd.customer.email)
        ):
            return cast(
                Result[CreateAppointmentResult, str],
                Failure(error=AppointmentError.CONTACT_INFO_REQUIRED),
            )

        # Step 4: Load validation context concurrently
        service_ids = {line.service_id for line in cmd.services if line.service_id}
        catalog, color, customer, vehicle, contact_taken = await asyncio.gather(
            self._load_services(service_ids, studio_id),
            self._load_color(cmd.color_id, studio_id),
            self._load_customer(cmd, studio_id),
            self._load_vehicle(cmd, studio_id),
            self._load_contact_taken(cmd, studio_id),
        )

        # Step 5: Catalog services exist and are active
        if service_ids - {s.id for s in catalog.values() if s.is_active}:
            return cast(
                Result[CreateAppointmentResult, str],
                Failure(error=AppointmentError.SERVICE_NOT_FOUND),
            )

        # Step 6: Manual price services use an absolute override
        for line in cmd.services:
            if (
                line.service_id
                and catalog[line.service_id].requires_manual_price
                and line.adjustment_type not in _MANUAL_PRICE_TYPES
            ):
                return cast(
                    Result[CreateAppointmentResult, str],
                    Failure(error=AppointmentError.MANUAL_PRICE_REQUIRED),
                )

        # Step 7: Color exists
        if cmd.color_id is not None and color is None:
            return cast(
                Result[CreateAppointmentResult, str],
                Failure(error=AppointmentError.COLOR_NOT_FOUND),
            )

        # Step 8: Referenced customer exists
        if not isinstance(cmd.customer, NewCustomer) and customer is None:
            return cast(
                Result[CreateAppointmentResult, str],
                Failure(error=AppointmentError.CUSTOMER_NOT_FOUND),
            )

        # Step 9: Referenced vehicle exists and belongs to the customer
        if isinstance(cmd.vehicle, ExistingVehicle | UpdateVehicle):
            if vehicle is None:
                return cast(
                    Result[CreateAppointmentResult, str],
                    Failure(error=AppointmentError.VEHICLE_NOT_FOUND),
                )
            if customer is None or vehicle.customer_id != customer.id:
                return cast(
                    Result[CreateAppointmentResult, str],
                    Failure(error=AppointmentError.VEHICLE_NOT_OWNED),
                )

        # Step 10: Contact details not used by another customer
        if contact_taken is not None:
            return cast(
                Result[CreateAppointmentResult, str], Failure(error=contact_taken)
            )

        # Step 11: Price every line
        line_items: list[ServiceLineItem] = []
        for line in cmd.services:
            item_result = self._price_line(line, catalog)
            if isinstance(item_result, Failure):
                return cast(
                    Result[CreateAppointmentResult, str],
                    Failure(error=item_result.error),
                )
            line_items.append(item_result.value)

        # Step 12: Create or update customer and vehicle
        customer = await self._resolve_customer(cmd, customer)
        vehicle_id = await self._resolve_vehicle(cmd, customer.id, vehicle)

        # Step 13: Persist appointment
        appointment = Appointment(
            id=uuid7(),
            studio_id=studio_id,
            customer_id=customer.id,
            vehicle_id=vehicle_id,
            line_items=line_items,
            schedule=schedule,
            created_by=cmd.context.user_id,
            updated_by=cmd.context.user_id,
            title=cmd.title,
            color_id=cmd.color_id,
            note=cmd.note,
        )
        await self._appointment_repo.save(appointment)

        # Step 14: Publish event
        await self._event_bus.publish(
            AppointmentCreated(
                appointment_id=appointment.id,
                studio_id=studio_id,
                customer_id=customer.id,
                total_gross_cents=appointment.total_gross().amount,
                created_by=cmd.context.user_id,
            )
        )
        self._logger.info(
            "appointment_created",
            appointment_id=str(appointment.id),
            studio_id=str(studio_id),
            line_items=len(line_items),
        )

        return Success(
            value=CreateAppointmentResult(
                appointment_id=appointment.id,
                customer_id=customer.id,
                vehicle_id=vehicle_id,
                totals=TotalsResult.from_money(
                    appointment.total_net(), appointment.total_gross()
                ),
            )
        )

    # -------------------------------------------------------------------------
    # Context loading
    # -------------------------------------------------------------------------

    async def _load_services(
        self, service_ids: set[UUID], studio_id: UUID
    ) -> dict[UUID, CatalogService]:
        if not service_ids:
            return {}
        services = await self._catalog_repo.find_by_ids(service_ids, studio_id)
        return {service.id: service for service in services}

    async def _load_color(
        self, color_id: UUID | None, studio_id: UUID
    ) -> AppointmentColor | None:
        if color_id is None:
            return None
        return await self._color_repo.find_by_id(color_id, studio_id)

    async def _load_customer(
        self, cmd: CreateAppointment, studio_id: UUID
    ) -> Customer | None:
        match cmd.customer:
            case ExistingCustomer(customer_id=customer_id) | UpdateCustomer(
                customer_id=customer_id
            ):
                return await self._customer_repo.find_by_id(customer_id, studio_id)
            case _:
                return None

    async def _load_vehicle(
        self, cmd: CreateAppointment, studio_id: UUID
    ) -> Vehicle | None:
        match cmd.vehicle:
            case ExistingVehicle(vehicle_id=vehicle_id) | UpdateVehicle(
                vehicle_id=vehicle_id
            ):
                return await self._vehicle_repo.find_by_id(vehicle_id, studio_id)
            case _:
                return None

    async def _load_contact_taken(
        self, cmd: CreateAppointment, studio_id: UUID
    ) -> str | None:
        """Return the uniqueness error for the requested contact details, if any."""
        match cmd.customer:
            case NewCustomer(email=email, phone=phone):
                if _present(email) and await self._customer_repo.exists_by_email(
                    studio_id, cast(str, email)
                ):
                    return AppointmentError.CUSTOMER_EMAIL_TAKEN
                if _present(phone) and await self._customer_repo.exists_by_phone(
                    studio_id, cast(str, phone)
                ):
                    return AppointmentError.CUSTOMER_PHONE_TAKEN
            case UpdateCustomer(customer_id=customer_id, email=email):
                if _present(email) and await self._customer_repo.exists_by_email(
                    studio_id, cast(str, email), exclude_id=customer_id
                ):
                    return AppointmentError.CUSTOMER_EMAIL_TAKEN
        return None

    # -------------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------------

    def _price_line(
        self, line: ServiceLineCommand, catalog: dict[UUID, CatalogService]
    ) -> Result[ServiceLineItem, str]:
        """Price one requested service.

        Catalog lines take name, base price and VAT rate from the catalog.
        Ad-hoc lines fall back to "Custom Service", 0 and 23%.
        """
        if line.service_id:
            service = catalog[line.service_id]
            return Success(
                value=ServiceLineItem.price(
                    service_id=service.id,
                    service_name=service.name,
                    base_price_net=service.base_price_net,
                    vat_rate=service.vat_rate,
                    adjustment_type=line.adjustment_type,
                    adjustment_value=line.adjustment_value,
                    custom_note=line.custom_note,
                )
            )

        base_cents = line.base_price_net_cents or 0
        if base_cents < 0:
            return Failure(error=LineItemError.NEGATIVE_BASE_PRICE)
        vat_code = (
            CUSTOM_SERVICE_VAT_CODE if line.vat_rate_code is None else line.vat_rate_code
        )
        vat_result = VatRate.from_code(vat_code)
        if isinstance(vat_result, Failure):
            return Failure(error=LineItemError.INVALID_VAT_RATE)

        name = (line.service_name or "").strip() or CUSTOM_SERVICE_NAME
        return Success(
            value=ServiceLineItem.price(
                service_id=None,
                service_name=name,
                base_price_net=Money.from_cents(base_cents),
                vat_rate=vat_result.value,
                adjustment_type=line.adjustment_type,
                adjustment_value=line.adjustment_value,
                custom_note=line.custom_note,
            )
        )

    # -------------------------------------------------------------------------
    # Customer / vehicle effects
    # -------------------------------------------------------------------------

    async def _resolve_customer(
        self, cmd: CreateAppointment, existing: Customer | None
    ) -> Customer:
        match cmd.customer:
            case NewCustomer():
                customer = Customer(
                    id=uuid7(),
                    studio_id=cmd.context.studio_id,
                    first_name=cmd.customer.first_name,
                    last_name=cmd.customer.last_name,
                    phone=cmd.customer.phone,
                    email=cmd.customer.email,
                )
                await self._customer_repo.save(customer)
                return customer
            case UpdateCustomer():
                customer = cast(Customer, existing)
                customer.update_details(
                    first_name=cmd.customer.first_name,
                    last_name=cmd.customer.last_name,
                    phone=cmd.customer.phone,
                    email=cmd.customer.email,
                )
                await self._customer_repo.save(customer)
                return customer
            case _:
                return cast(Customer, existing)

    async def _resolve_vehicle(
        self, cmd: CreateAppointment, customer_id: UUID, existing: Vehicle | None
    ) -> UUID | None:
        match cmd.vehicle:
            case NewVehicle():
                vehicle = Vehicle(
                    id=uuid7(),
                    studio_id=cmd.context.studio_id,
                    customer_id=customer_id,
                    brand=cmd.vehicle.brand,
                    model=cmd.vehicle.model,
                    year_of_production=cmd.vehicle.year_of_production,
                    license_plate=cmd.vehicle.license_plate,
                    vin=cmd.vehicle.vin,
                    color=cmd.vehicle.color,
                )
                await self._vehicle_repo.save(vehicle)
                return vehicle.id
            case UpdateVehicle():
                vehicle = cast(Vehicle, existing)
                vehicle.update_details(
                    brand=cmd.vehicle.brand,
                    model=cmd.vehicle.model,
                    year_of_production=cmd.vehicle.year_of_production,
                    license_plate=cmd.vehicle.license_plate,
                    vin=cmd.vehicle.vin,
                    color=cmd.vehicle.color,
                )
                await self._vehicle_repo.save(vehicle)
                return vehicle.id
            case ExistingVehicle():
                return cast(Vehicle, existing).id
            case _:
                return None


def _present(value: str | None) -> bool:
    return bool(value and value.strip())
