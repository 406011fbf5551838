"""Pytest configuration and shared test helpers.

This configuration provides:
1. Marker registration (unit, integration, api)
2. Automatic asyncio marking of coroutine tests
3. Entity factories shared by unit, API and integration tests
4. Mock fixtures for cross-cutting concerns (logger, event bus)
"""

import asyncio
from datetime import UTC, date, datetime, timedelta
from typing import cast
from unittest.mock import AsyncMock, Mock
from uuid import UUID

import pytest
import pytest_asyncio
from uuid_extensions import uuid7

from src.domain.entities import (
    Appointment,
    ProtocolRule,
    Visit,
    VisitProtocol,
    VisitServiceItem,
)
from src.domain.enums import (
    AdjustmentType,
    ProtocolStage,
    ProtocolTriggerType,
    VisitServiceStatus,
    VisitStatus,
)
from src.domain.value_objects import (
    AppointmentSchedule,
    Money,
    ServiceLineItem,
    StudioContext,
    VatRate,
)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
    config.addinivalue_line("markers", "api: API tests through the FastAPI TestClient")
    config.addinivalue_line("markers", "asyncio: Async test that requires event loop")


# Test execution configuration
def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)


# =============================================================================
# Entity Factories
# =============================================================================


def new_id() -> UUID:
    """Time-ordered id, typed as a plain UUID."""
    return cast(UUID, uuid7())


def create_context(
    studio_id: UUID | None = None, user_id: UUID | None = None
) -> StudioContext:
    """Helper to create a StudioContext for testing."""
    return StudioContext(studio_id=studio_id or new_id(), user_id=user_id or new_id())


def create_line_item(
    service_id: UUID | None = None,
    service_name: str = "Exterior Wash",
    base_cents: int = 10000,
    vat_rate: VatRate = VatRate.VAT_23,
    adjustment_type: AdjustmentType = AdjustmentType.PERCENT,
    adjustment_value: int = 0,
) -> ServiceLineItem:
    """Helper to create a priced ServiceLineItem.

    Defaults to a 100.00 net catalog service at 23% VAT with no adjustment.
    """
    return ServiceLineItem.price(
        service_id=service_id if service_id is not None else new_id(),
        service_name=service_name,
        base_price_net=Money.from_cents(base_cents),
        vat_rate=vat_rate,
        adjustment_type=adjustment_type,
        adjustment_value=adjustment_value,
    )


def create_schedule(
    start: datetime | None = None, hours: int = 2, is_all_day: bool = False
) -> AppointmentSchedule:
    """Helper to create a two-hour AppointmentSchedule on a fixed morning."""
    start = start or datetime(2025, 6, 2, 9, 0, tzinfo=UTC)
    return AppointmentSchedule(
        is_all_day=is_all_day,
        start_datetime=start,
        end_datetime=start + timedelta(hours=hours),
    )


def create_appointment(
    context: StudioContext | None = None,
    line_items: list[ServiceLineItem] | None = None,
    vehicle_id: UUID | None | object = ...,
    customer_id: UUID | None = None,
    **overrides,
) -> Appointment:
    """Helper to create an Appointment in CREATED status.

    Args:
        context: Owning studio and author (random by default).
        line_items: Priced services (one default item when None).
        vehicle_id: Vehicle id; pass None for an appointment without vehicle.
        customer_id: Customer id (random by default).
        **overrides: Any other Appointment field.
    """
    context = context or create_context()
    return Appointment(
        id=overrides.pop("id", new_id()),
        studio_id=context.studio_id,
        customer_id=customer_id or new_id(),
        vehicle_id=new_id() if vehicle_id is ... else cast(UUID | None, vehicle_id),
        line_items=line_items if line_items is not None else [create_line_item()],
        schedule=overrides.pop("schedule", create_schedule()),
        created_by=context.user_id,
        updated_by=context.user_id,
        **overrides,
    )


def create_visit(
    context: StudioContext | None = None,
    status: VisitStatus = VisitStatus.DRAFT,
    line_items: list[ServiceLineItem] | None = None,
    appointment_id: UUID | None = None,
    **overrides,
) -> Visit:
    """Helper to create a Visit with one confirmed service item by default."""
    context = context or create_context()
    items = line_items if line_items is not None else [create_line_item()]
    return Visit(
        id=overrides.pop("id", new_id()),
        studio_id=context.studio_id,
        visit_number=overrides.pop("visit_number", "VIS-2025-00001"),
        customer_id=overrides.pop("customer_id", new_id()),
        vehicle_id=overrides.pop("vehicle_id", new_id()),
        appointment_id=appointment_id,
        brand_snapshot=overrides.pop("brand_snapshot", "Porsche"),
        model_snapshot=overrides.pop("model_snapshot", "911"),
        scheduled_date=overrides.pop("scheduled_date", date(2025, 6, 2)),
        status=status,
        service_items=[
            VisitServiceItem(id=new_id(), line_item=item, status=VisitServiceStatus.CONFIRMED)
            for item in items
        ],
        created_by=context.user_id,
        updated_by=context.user_id,
        **overrides,
    )


def create_rule(
    studio_id: UUID | None = None,
    stage: ProtocolStage = ProtocolStage.CHECK_IN,
    service_ids: set[UUID] | None = None,
    is_mandatory: bool = True,
    display_order: int = 0,
    template_id: UUID | None = None,
) -> ProtocolRule:
    """Helper to create a ProtocolRule.

    A rule with service ids is SERVICE_SPECIFIC, otherwise GLOBAL_ALWAYS.
    """
    return ProtocolRule(
        id=new_id(),
        studio_id=studio_id or new_id(),
        template_id=template_id or new_id(),
        trigger_type=(
            ProtocolTriggerType.SERVICE_SPECIFIC
            if service_ids
            else ProtocolTriggerType.GLOBAL_ALWAYS
        ),
        stage=stage,
        service_ids=frozenset(service_ids or ()),
        is_mandatory=is_mandatory,
        display_order=display_order,
    )


def create_protocol(
    visit: Visit | None = None,
    template_id: UUID | None = None,
    stage: ProtocolStage = ProtocolStage.CHECK_IN,
    is_mandatory: bool = True,
    signed: bool = False,
) -> VisitProtocol:
    """Helper to create a VisitProtocol, optionally already signed."""
    visit = visit or create_visit()
    protocol = VisitProtocol(
        id=new_id(),
        studio_id=visit.studio_id,
        visit_id=visit.id,
        template_id=template_id or new_id(),
        stage=stage,
        is_mandatory=is_mandatory,
    )
    if signed:
        protocol.mark_ready_for_signature(f"protocols/{protocol.id}/filled.pdf")
        protocol.sign(
            signed_document_key=f"protocols/{protocol.id}/signed.pdf",
            signed_by="Jan Kowalski",
            signature_image_key=f"protocols/{protocol.id}/signature.png",
        )
    return protocol


# =============================================================================
# Mock Fixtures
# =============================================================================


@pytest.fixture
def context() -> StudioContext:
    """Provide a studio context for the test."""
    return create_context()


@pytest.fixture
def mock_logger():
    """Provide a mock logger for testing.

    Returns a Mock object with standard logging methods.

    Usage:
        def test_something(mock_logger):
            service = MyService(logger=mock_logger)
            service.do_something()
            mock_logger.info.assert_called_once()
    """
    logger = Mock()
    logger.info = Mock()
    logger.debug = Mock()
    logger.error = Mock()
    logger.warning = Mock()
    logger.critical = Mock()
    return logger


@pytest_asyncio.fixture
async def mock_event_bus():
    """Provide a mock event bus for testing.

    Usage:
        async def test_something(mock_event_bus):
            handler = MyHandler(event_bus=mock_event_bus)
            await handler.handle(cmd)
            mock_event_bus.publish.assert_called()
    """
    event_bus = AsyncMock()
    event_bus.publish = AsyncMock(return_value=None)
    event_bus.subscribe = Mock(return_value=None)
    return event_bus
