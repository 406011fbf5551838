"""Unit tests for appointment command handlers.

Tests cover:
- CreateAppointmentHandler validation order and failure cases
- Customer/vehicle create, update and reference variants
- Catalog and ad-hoc line pricing
- CancelAppointmentHandler transitions and not-found handling

Uses AsyncMock repositories to isolate handler logic.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from src.application.commands.appointment_commands import (
    CancelAppointment,
    CreateAppointment,
    ExistingCustomer,
    ExistingVehicle,
    NewCustomer,
    NewVehicle,
    ScheduleCommand,
    ServiceLineCommand,
    UpdateCustomer,
    UpdateVehicle,
)
from src.application.commands.handlers.cancel_appointment_handler import (
    CancelAppointmentHandler,
)
from src.application.commands.handlers.create_appointment_handler import (
    CreateAppointmentHandler,
)
from src.core.result import Failure, Success
from src.domain.entities import AppointmentColor, CatalogService, Customer, Vehicle
from src.domain.enums import AdjustmentType, AppointmentStatus
from src.domain.errors import AppointmentError, LineItemError
from src.domain.events import AppointmentCancelled, AppointmentCreated
from src.domain.protocols import (
    AppointmentColorRepository,
    AppointmentRepository,
    CatalogServiceRepository,
    CustomerRepository,
    VehicleRepository,
)
from src.domain.value_objects import Money, VatRate
from tests.conftest import create_appointment, create_context, new_id

START = datetime(2025, 6, 2, 9, 0, tzinfo=UTC)


def _schedule(hours: int = 2) -> ScheduleCommand:
    return ScheduleCommand(
        is_all_day=False,
        start_datetime=START,
        end_datetime=START + timedelta(hours=hours),
    )


def _line(service_id, adjustment_type=AdjustmentType.PERCENT, value=0, **kwargs):
    return ServiceLineCommand(
        service_id=service_id,
        adjustment_type=adjustment_type,
        adjustment_value=value,
        **kwargs,
    )


# =============================================================================
# CreateAppointment Tests
# =============================================================================


@pytest.mark.unit
class TestCreateAppointmentHandler:
    """Test CreateAppointmentHandler."""

    @pytest.fixture
    def context(self):
        return create_context()

    @pytest.fixture
    def customer(self, context):
        return Customer(
            id=new_id(),
            studio_id=context.studio_id,
            first_name="Jan",
            last_name="Kowalski",
            phone="+48 600 100 200",
        )

    @pytest.fixture
    def vehicle(self, context, customer):
        return Vehicle(
            id=new_id(),
            studio_id=context.studio_id,
            customer_id=customer.id,
            brand="Porsche",
            model="911",
        )

    @pytest.fixture
    def wash(self, context):
        return CatalogService(
            id=new_id(),
            studio_id=context.studio_id,
            name="Exterior Wash",
            base_price_net=Money(10000),
            vat_rate=VatRate.VAT_23,
        )

    @pytest.fixture
    def repos(self, customer, vehicle, wash):
        appointment_repo = AsyncMock(spec=AppointmentRepository)
        customer_repo = AsyncMock(spec=CustomerRepository)
        customer_repo.find_by_id.return_value = customer
        customer_repo.exists_by_email.return_value = False
        customer_repo.exists_by_phone.return_value = False
        vehicle_repo = AsyncMock(spec=VehicleRepository)
        vehicle_repo.find_by_id.return_value = vehicle
        catalog_repo = AsyncMock(spec=CatalogServiceRepository)
        catalog_repo.find_by_ids.return_value = [wash]
        color_repo = AsyncMock(spec=AppointmentColorRepository)
        color_repo.find_by_id.return_value = None
        return {
            "appointment_repo": appointment_repo,
            "customer_repo": customer_repo,
            "vehicle_repo": vehicle_repo,
            "catalog_repo": catalog_repo,
            "color_repo": color_repo,
        }

    @pytest.fixture
    def handler(self, repos, mock_event_bus, mock_logger):
        return CreateAppointmentHandler(
            **repos, event_bus=mock_event_bus, logger=mock_logger
        )

    def _command(self, context, customer, vehicle, wash, /, **overrides):
        fields = {
            "context": context,
            "customer": ExistingCustomer(customer_id=customer.id),
            "vehicle": ExistingVehicle(vehicle_id=vehicle.id),
            "services": [_line(wash.id, value=-2000)],
            "schedule": _schedule(),
        }
        fields.update(overrides)
        return CreateAppointment(**fields)

    # -------------------------------------------------------------------------
    # Success paths
    # -------------------------------------------------------------------------

    async def test_books_existing_customer_and_vehicle(
        self, handler, repos, mock_event_bus, context, customer, vehicle, wash
    ):
        """Test booking with records on file prices lines and saves."""
        # Act
        result = await handler.handle(
            self._command(context, customer, vehicle, wash, title="Wash")
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.customer_id == customer.id
        assert result.value.vehicle_id == vehicle.id
        assert result.value.totals.net_cents == 8000
        assert result.value.totals.gross_cents == 9840
        assert result.value.totals.vat_cents == 1840

        repos["appointment_repo"].save.assert_awaited_once()
        saved = repos["appointment_repo"].save.call_args[0][0]
        assert saved.status == AppointmentStatus.CREATED
        assert saved.studio_id == context.studio_id
        assert saved.title == "Wash"
        assert saved.line_items[0].service_name == "Exterior Wash"
        repos["customer_repo"].save.assert_not_awaited()
        repos["vehicle_repo"].save.assert_not_awaited()

        mock_event_bus.publish.assert_awaited_once()
        event = mock_event_bus.publish.call_args[0][0]
        assert isinstance(event, AppointmentCreated)
        assert event.appointment_id == result.value.appointment_id
        assert event.total_gross_cents == 9840

    async def test_creates_new_customer_and_vehicle(
        self, handler, repos, context, customer, vehicle, wash
    ):
        """Test new customer and vehicle are created, the vehicle owned by them."""
        cmd = self._command(
            context,
            customer,
            vehicle,
            wash,
            customer=NewCustomer(
                first_name="Anna", last_name="Nowak", email="anna@example.com"
            ),
            vehicle=NewVehicle(brand="BMW", model="M3", license_plate="WA 12345"),
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Success)
        new_customer = repos["customer_repo"].save.call_args[0][0]
        new_vehicle = repos["vehicle_repo"].save.call_args[0][0]
        assert new_customer.first_name == "Anna"
        assert new_customer.studio_id == context.studio_id
        assert new_vehicle.customer_id == new_customer.id
        assert result.value.customer_id == new_customer.id
        assert result.value.vehicle_id == new_vehicle.id
        repos["customer_repo"].find_by_id.assert_not_awaited()

    async def test_updates_customer_and_vehicle(
        self, handler, repos, context, customer, vehicle, wash
    ):
        """Test update variants change the records before booking."""
        cmd = self._command(
            context,
            customer,
            vehicle,
            wash,
            customer=UpdateCustomer(
                customer_id=customer.id,
                first_name="Jan",
                last_name="Nowicki",
                phone="+48 600 999 999",
            ),
            vehicle=UpdateVehicle(vehicle_id=vehicle.id, brand="Porsche", model="Taycan"),
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Success)
        assert customer.last_name == "Nowicki"
        assert vehicle.model == "Taycan"
        repos["customer_repo"].save.assert_awaited_once_with(customer)
        repos["vehicle_repo"].save.assert_awaited_once_with(vehicle)

    async def test_books_without_vehicle(
        self, handler, repos, context, customer, vehicle, wash
    ):
        """Test the vehicle is optional at booking time."""
        result = await handler.handle(
            self._command(context, customer, vehicle, wash, vehicle=None)
        )

        assert isinstance(result, Success)
        assert result.value.vehicle_id is None
        repos["vehicle_repo"].find_by_id.assert_not_awaited()

    async def test_ad_hoc_line_defaults(
        self, handler, repos, context, customer, vehicle, wash
    ):
        """Test ad-hoc lines default to a custom name and 23% VAT."""
        cmd = self._command(
            context,
            customer,
            vehicle,
            wash,
            services=[
                _line(
                    None,
                    AdjustmentType.SET_NET,
                    5000,
                    service_name="  ",
                    base_price_net_cents=0,
                )
            ],
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Success)
        item = repos["appointment_repo"].save.call_args[0][0].line_items[0]
        assert item.service_id is None
        assert item.service_name == "Custom Service"
        assert item.vat_rate == VatRate.VAT_23
        assert item.final_price_net == Money(5000)
        repos["catalog_repo"].find_by_ids.assert_not_awaited()

    async def test_manual_price_service_with_override(
        self, handler, repos, context, customer, vehicle, wash
    ):
        """Test manual-price services accept an absolute gross price."""
        wash.requires_manual_price = True
        cmd = self._command(
            context,
            customer,
            vehicle,
            wash,
            services=[_line(wash.id, AdjustmentType.SET_GROSS, 12300)],
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Success)
        assert result.value.totals.net_cents == 10000

    async def test_color_is_resolved(
        self, handler, repos, context, customer, vehicle, wash
    ):
        """Test an existing color is accepted."""
        color = AppointmentColor(
            id=new_id(), studio_id=context.studio_id, name="Blue", hex_color="#0000FF"
        )
        repos["color_repo"].find_by_id.return_value = color

        result = await handler.handle(
            self._command(context, customer, vehicle, wash, color_id=color.id)
        )

        assert isinstance(result, Success)
        repos["color_repo"].find_by_id.assert_awaited_once_with(
            color.id, context.studio_id
        )

    # -------------------------------------------------------------------------
    # Failure paths
    # -------------------------------------------------------------------------

    async def test_no_services(self, handler, repos, context, customer, vehicle, wash):
        result = await handler.handle(
            self._command(context, customer, vehicle, wash, services=[])
        )

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.NO_SERVICES
        repos["appointment_repo"].save.assert_not_awaited()

    async def test_invalid_schedule_checked_before_contact_info(
        self, handler, context, customer, vehicle, wash
    ):
        """Test schedule validation precedes customer validation."""
        cmd = self._command(
            context,
            customer,
            vehicle,
            wash,
            customer=NewCustomer(first_name="A", last_name="B"),
            schedule=_schedule(hours=0),
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.INVALID_SCHEDULE

    async def test_new_customer_requires_contact(
        self, handler, repos, context, customer, vehicle, wash
    ):
        cmd = self._command(
            context,
            customer,
            vehicle,
            wash,
            customer=NewCustomer(first_name="Anna", last_name="Nowak", phone=" "),
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.CONTACT_INFO_REQUIRED
        repos["customer_repo"].save.assert_not_awaited()

    @pytest.mark.parametrize("found", [False, True])
    async def test_missing_or_inactive_service(
        self, found, handler, repos, context, customer, vehicle, wash
    ):
        """Test unknown and inactive catalog services are not found."""
        if found:
            wash.is_active = False
        else:
            repos["catalog_repo"].find_by_ids.return_value = []

        result = await handler.handle(self._command(context, customer, vehicle, wash))

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.SERVICE_NOT_FOUND

    async def test_manual_price_required(
        self, handler, context, customer, vehicle, wash
    ):
        """Test manual-price services reject relative adjustments."""
        wash.requires_manual_price = True

        result = await handler.handle(self._command(context, customer, vehicle, wash))

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.MANUAL_PRICE_REQUIRED

    async def test_color_not_found(self, handler, context, customer, vehicle, wash):
        result = await handler.handle(
            self._command(context, customer, vehicle, wash, color_id=new_id())
        )

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.COLOR_NOT_FOUND

    async def test_customer_not_found(
        self, handler, repos, context, customer, vehicle, wash
    ):
        repos["customer_repo"].find_by_id.return_value = None

        result = await handler.handle(self._command(context, customer, vehicle, wash))

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.CUSTOMER_NOT_FOUND

    async def test_vehicle_not_found(
        self, handler, repos, context, customer, vehicle, wash
    ):
        repos["vehicle_repo"].find_by_id.return_value = None

        result = await handler.handle(self._command(context, customer, vehicle, wash))

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.VEHICLE_NOT_FOUND

    async def test_vehicle_of_other_customer(
        self, handler, context, customer, vehicle, wash
    ):
        """Test the vehicle must belong to the booking's customer."""
        vehicle.customer_id = new_id()

        result = await handler.handle(self._command(context, customer, vehicle, wash))

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.VEHICLE_NOT_OWNED

    async def test_ad_hoc_negative_base_price(
        self, handler, context, customer, vehicle, wash
    ):
        cmd = self._command(
            context,
            customer,
            vehicle,
            wash,
            services=[_line(None, base_price_net_cents=-1)],
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Failure)
        assert result.error == LineItemError.NEGATIVE_BASE_PRICE

    async def test_ad_hoc_unknown_vat(self, handler, context, customer, vehicle, wash):
        cmd = self._command(
            context,
            customer,
            vehicle,
            wash,
            services=[_line(None, base_price_net_cents=1000, vat_rate_code=19)],
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Failure)
        assert result.error == LineItemError.INVALID_VAT_RATE

    @pytest.mark.parametrize(
        "email_taken,phone_taken,expected",
        [
            (True, False, AppointmentError.CUSTOMER_EMAIL_TAKEN),
            (False, True, AppointmentError.CUSTOMER_PHONE_TAKEN),
            (True, True, AppointmentError.CUSTOMER_EMAIL_TAKEN),
        ],
    )
    async def test_new_customer_contact_already_used(
        self,
        email_taken,
        phone_taken,
        expected,
        handler,
        repos,
        context,
        customer,
        vehicle,
        wash,
    ):
        repos["customer_repo"].exists_by_email.return_value = email_taken
        repos["customer_repo"].exists_by_phone.return_value = phone_taken
        cmd = self._command(
            context,
            customer,
            vehicle,
            wash,
            customer=NewCustomer(
                first_name="Anna",
                last_name="Nowak",
                email="anna@example.com",
                phone="+48 600 100 200",
            ),
            vehicle=NewVehicle(brand="BMW", model="M3"),
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Failure)
        assert result.error == expected
        repos["customer_repo"].save.assert_not_awaited()
        repos["appointment_repo"].save.assert_not_awaited()

    async def test_updated_customer_email_checked_against_others(
        self, handler, repos, context, customer, vehicle, wash
    ):
        """Test an updated email only conflicts with other customers."""
        repos["customer_repo"].exists_by_email.return_value = True
        cmd = self._command(
            context,
            customer,
            vehicle,
            wash,
            customer=UpdateCustomer(
                customer_id=customer.id,
                first_name="Jan",
                last_name="Kowalski",
                email="taken@example.com",
            ),
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.CUSTOMER_EMAIL_TAKEN
        repos["customer_repo"].exists_by_email.assert_awaited_once_with(
            context.studio_id, "taken@example.com", exclude_id=customer.id
        )
        repos["customer_repo"].exists_by_phone.assert_not_awaited()

    async def test_existing_customer_skips_uniqueness(
        self, handler, repos, context, customer, vehicle, wash
    ):
        result = await handler.handle(self._command(context, customer, vehicle, wash))

        assert isinstance(result, Success)
        repos["customer_repo"].exists_by_email.assert_not_awaited()
        repos["customer_repo"].exists_by_phone.assert_not_awaited()

    async def test_vehicle_checked_before_contact_uniqueness(
        self, handler, repos, context, customer, vehicle, wash
    ):
        repos["customer_repo"].exists_by_email.return_value = True
        repos["vehicle_repo"].find_by_id.return_value = None
        cmd = self._command(
            context,
            customer,
            vehicle,
            wash,
            customer=UpdateCustomer(
                customer_id=customer.id,
                first_name="Jan",
                last_name="Kowalski",
                email="taken@example.com",
            ),
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.VEHICLE_NOT_FOUND

    async def test_failure_publishes_nothing(
        self, handler, repos, mock_event_bus, context, customer, vehicle, wash
    ):
        """Test rejected bookings have no side effects."""
        repos["customer_repo"].find_by_id.return_value = None

        await handler.handle(self._command(context, customer, vehicle, wash))

        mock_event_bus.publish.assert_not_awaited()
        repos["appointment_repo"].save.assert_not_awaited()


# =============================================================================
# CancelAppointment Tests
# =============================================================================


@pytest.mark.unit
class TestCancelAppointmentHandler:
    """Test CancelAppointmentHandler."""

    @pytest.fixture
    def appointment_repo(self):
        return AsyncMock(spec=AppointmentRepository)

    @pytest.fixture
    def handler(self, appointment_repo, mock_event_bus, mock_logger):
        return CancelAppointmentHandler(
            appointment_repo=appointment_repo,
            event_bus=mock_event_bus,
            logger=mock_logger,
        )

    async def test_cancel(self, handler, appointment_repo, mock_event_bus, context):
        """Test a created appointment is cancelled, saved and announced."""
        appointment = create_appointment(context)
        appointment_repo.find_by_id.return_value = appointment

        result = await handler.handle(
            CancelAppointment(context=context, appointment_id=appointment.id)
        )

        assert isinstance(result, Success)
        assert appointment.status == AppointmentStatus.CANCELLED
        appointment_repo.find_by_id.assert_awaited_once_with(
            appointment.id, context.studio_id
        )
        appointment_repo.save.assert_awaited_once_with(appointment)
        event = mock_event_bus.publish.call_args[0][0]
        assert isinstance(event, AppointmentCancelled)
        assert event.cancelled_by == context.user_id

    async def test_not_found(self, handler, appointment_repo, context):
        appointment_repo.find_by_id.return_value = None

        result = await handler.handle(
            CancelAppointment(context=context, appointment_id=new_id())
        )

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.NOT_FOUND

    async def test_converted_rejected(
        self, handler, appointment_repo, mock_event_bus, mock_logger, context
    ):
        """Test a converted appointment stays converted and nothing is saved."""
        appointment = create_appointment(context, status=AppointmentStatus.CONVERTED)
        appointment_repo.find_by_id.return_value = appointment

        result = await handler.handle(
            CancelAppointment(context=context, appointment_id=appointment.id)
        )

        assert isinstance(result, Failure)
        assert result.error == AppointmentError.ALREADY_CONVERTED
        appointment_repo.save.assert_not_awaited()
        mock_event_bus.publish.assert_not_awaited()
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[0][0] == "appointment_cancel_rejected"
