"""Appointment request and response schemas.

Pydantic schemas for appointment API endpoints. Includes:
- Request schemas (client → API), each able to build its command variant
- Response schemas (API → client)
- DTO-to-schema conversion methods

Customer and vehicle identity are tagged unions keyed by ``mode``
(``existing``, ``new`` or ``update``).
"""

from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, EmailStr, Field

from src.application.commands.appointment_commands import (
    CreateAppointment,
    CustomerIdentity,
    ExistingCustomer,
    ExistingVehicle,
    NewCustomer,
    NewVehicle,
    ScheduleCommand,
    ServiceLineCommand,
    UpdateCustomer,
    UpdateVehicle,
    VehicleIdentity,
)
from src.application.dtos import (
    AppointmentListResult,
    AppointmentResult,
    CreateAppointmentResult,
)
from src.domain.enums import AdjustmentType
from src.domain.value_objects import StudioContext
from src.schemas.common_schemas import LineItemResponse, PaginatedMeta, TotalsResponse


# =============================================================================
# Request Schemas
# =============================================================================


class ExistingCustomerRequest(BaseModel):
    """Book for a customer already on file."""

    mode: Literal["existing"] = "existing"
    customer_id: UUID = Field(..., description="Existing customer")

    def to_identity(self) -> CustomerIdentity:
        return ExistingCustomer(customer_id=self.customer_id)


class NewCustomerRequest(BaseModel):
    """Create the customer as part of the booking."""

    mode: Literal["new"] = "new"
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=32)
    email: EmailStr | None = Field(None, max_length=255)

    def to_identity(self) -> CustomerIdentity:
        return NewCustomer(
            first_name=self.first_name,
            last_name=self.last_name,
            phone=self.phone,
            email=str(self.email) if self.email else None,
        )


class UpdateCustomerRequest(BaseModel):
    """Update an existing customer, then book."""

    mode: Literal["update"] = "update"
    customer_id: UUID = Field(..., description="Customer to update")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=32)
    email: EmailStr | None = Field(None, max_length=255)

    def to_identity(self) -> CustomerIdentity:
        return UpdateCustomer(
            customer_id=self.customer_id,
            first_name=self.first_name,
            last_name=self.last_name,
            phone=self.phone,
            email=str(self.email) if self.email else None,
        )


class ExistingVehicleRequest(BaseModel):
    """Book with a vehicle already on file."""

    mode: Literal["existing"] = "existing"
    vehicle_id: UUID = Field(..., description="Existing vehicle")

    def to_identity(self) -> VehicleIdentity:
        return ExistingVehicle(vehicle_id=self.vehicle_id)


class _VehicleDetails(BaseModel):
    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    year_of_production: int | None = Field(None, ge=1900, le=2100)
    license_plate: str | None = Field(None, max_length=20)
    vin: str | None = Field(None, max_length=17)
    color: str | None = Field(None, max_length=50)


class NewVehicleRequest(_VehicleDetails):
    """Create the vehicle for the booking's customer."""

    mode: Literal["new"] = "new"

    def to_identity(self) -> VehicleIdentity:
        return NewVehicle(
            brand=self.brand,
            model=self.model,
            year_of_production=self.year_of_production,
            license_plate=self.license_plate,
            vin=self.vin,
            color=self.color,
        )


class UpdateVehicleRequest(_VehicleDetails):
    """Update an existing vehicle, then book."""

    mode: Literal["update"] = "update"
    vehicle_id: UUID = Field(..., description="Vehicle to update")

    def to_identity(self) -> VehicleIdentity:
        return UpdateVehicle(
            vehicle_id=self.vehicle_id,
            brand=self.brand,
            model=self.model,
            year_of_production=self.year_of_production,
            license_plate=self.license_plate,
            vin=self.vin,
            color=self.color,
        )


CustomerRequest = Annotated[
    ExistingCustomerRequest | NewCustomerRequest | UpdateCustomerRequest,
    Field(discriminator="mode"),
]
VehicleRequest = Annotated[
    ExistingVehicleRequest | NewVehicleRequest | UpdateVehicleRequest,
    Field(discriminator="mode"),
]


class ServiceLineRequest(BaseModel):
    """Requested service with its price adjustment.

    Attributes:
        service_id: Catalog service; omit for an ad-hoc service.
        adjustment_type: percent, fixed_net, fixed_gross, set_net, set_gross.
        adjustment_value: Basis points for percent (-1000 = -10%), else cents.
        custom_note: Optional note.
        service_name: Ad-hoc service name.
        base_price_net_cents: Ad-hoc base price.
        vat_rate_code: Ad-hoc VAT rate code.
    """

    service_id: UUID | None = Field(None, description="Catalog service")
    adjustment_type: AdjustmentType = Field(
        AdjustmentType.PERCENT, description="Adjustment type"
    )
    adjustment_value: int = Field(0, description="Basis points or cents")
    custom_note: str | None = Field(None, max_length=500)
    service_name: str | None = Field(None, max_length=200)
    base_price_net_cents: int | None = Field(None, ge=0)
    vat_rate_code: int | None = Field(None, examples=[23, 8, 5, 0, -1])

    def to_command(self) -> ServiceLineCommand:
        return ServiceLineCommand(
            service_id=self.service_id,
            adjustment_type=self.adjustment_type,
            adjustment_value=self.adjustment_value,
            custom_note=self.custom_note,
            service_name=self.service_name,
            base_price_net_cents=self.base_price_net_cents,
            vat_rate_code=self.vat_rate_code,
        )


class ScheduleRequest(BaseModel):
    """Appointment time window."""

    is_all_day: bool = Field(False, description="All-day booking")
    start_datetime: AwareDatetime = Field(
        ..., description="Start (inclusive), with a UTC offset"
    )
    end_datetime: AwareDatetime = Field(
        ..., description="End (must be after start), with a UTC offset"
    )


class AppointmentCreateRequest(BaseModel):
    """Request to book an appointment."""

    customer: CustomerRequest
    vehicle: VehicleRequest | None = None
    services: list[ServiceLineRequest] = Field(..., description="Requested services")
    schedule: ScheduleRequest
    title: str | None = Field(None, max_length=200)
    color_id: UUID | None = Field(None, description="Calendar color")
    note: str | None = Field(None, max_length=2000)

    def to_command(self, context: StudioContext) -> CreateAppointment:
        """Build the CreateAppointment command for a studio context."""
        return CreateAppointment(
            context=context,
            customer=self.customer.to_identity(),
            vehicle=self.vehicle.to_identity() if self.vehicle else None,
            services=[service.to_command() for service in self.services],
            schedule=ScheduleCommand(
                is_all_day=self.schedule.is_all_day,
                start_datetime=self.schedule.start_datetime,
                end_datetime=self.schedule.end_datetime,
            ),
            title=self.title,
            color_id=self.color_id,
            note=self.note,
        )


# =============================================================================
# Response Schemas
# =============================================================================


class AppointmentCreateResponse(BaseModel):
    """Response after booking an appointment."""

    appointment_id: UUID = Field(..., description="New appointment")
    customer_id: UUID = Field(..., description="Booked customer")
    vehicle_id: UUID | None = Field(None, description="Booked vehicle")
    totals: TotalsResponse

    @classmethod
    def from_dto(cls, dto: CreateAppointmentResult) -> "AppointmentCreateResponse":
        """Convert application DTO to response schema."""
        return cls(
            appointment_id=dto.appointment_id,
            customer_id=dto.customer_id,
            vehicle_id=dto.vehicle_id,
            totals=TotalsResponse.from_dto(dto.totals),
        )


class AppointmentResponse(BaseModel):
    """Single appointment with display data.

    Attributes:
        id: Appointment identifier.
        status: created, abandoned, cancelled or converted.
        customer_name: Customer display name.
        vehicle_label: Brand, model and plate.
        color_name: Calendar color name.
        line_items: Priced services.
        totals: Net, gross and VAT totals.
    """

    id: UUID
    status: str = Field(..., examples=["created"])
    title: str | None = None
    note: str | None = None
    customer_id: UUID
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    vehicle_id: UUID | None = None
    vehicle_label: str | None = None
    color_id: UUID | None = None
    color_name: str | None = None
    color_hex: str | None = None
    is_all_day: bool
    start_datetime: datetime
    end_datetime: datetime
    line_items: list[LineItemResponse]
    totals: TotalsResponse
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_dto(cls, dto: AppointmentResult) -> "AppointmentResponse":
        """Convert application DTO to response schema.

        Args:
            dto: AppointmentResult from handler.

        Returns:
            AppointmentResponse for API response.
        """
        return cls(
            id=dto.id,
            status=dto.status,
            title=dto.title,
            note=dto.note,
            customer_id=dto.customer_id,
            customer_name=dto.customer_name,
            customer_phone=dto.customer_phone,
            customer_email=dto.customer_email,
            vehicle_id=dto.vehicle_id,
            vehicle_label=dto.vehicle_label,
            color_id=dto.color_id,
            color_name=dto.color_name,
            color_hex=dto.color_hex,
            is_all_day=dto.is_all_day,
            start_datetime=dto.start_datetime,
            end_datetime=dto.end_datetime,
            line_items=[LineItemResponse.from_dto(item) for item in dto.line_items],
            totals=TotalsResponse.from_dto(dto.totals),
            created_at=dto.created_at,
            updated_at=dto.updated_at,
        )


class AppointmentListResponse(BaseModel):
    """Paginated appointments."""

    appointments: list[AppointmentResponse] = Field(..., description="Page items")
    meta: PaginatedMeta

    @classmethod
    def from_dto(cls, dto: AppointmentListResult) -> "AppointmentListResponse":
        """Convert application DTO to response schema."""
        return cls(
            appointments=[AppointmentResponse.from_dto(a) for a in dto.items],
            meta=PaginatedMeta.from_pagination(
                page=dto.page, page_size=dto.page_size, total_count=dto.total
            ),
        )
