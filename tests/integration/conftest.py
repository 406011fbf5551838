"""Integration test fixtures (real PostgreSQL).

Tests here need the database named by DATABASE_URL. When it cannot be
reached the tests are skipped instead of failing.
"""

from uuid import UUID

import pytest
import pytest_asyncio

from src.core.config import settings
from src.domain.entities import Customer, Vehicle
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.repositories import (
    CustomerRepository,
    VehicleRepository,
)
from tests.conftest import new_id


@pytest_asyncio.fixture
async def test_database():
    """Provide a Database with the schema in place and empty tables.

    Usage:
        async def test_something(test_database):
            async with test_database.get_session() as session:
                ...
    """
    db = Database(database_url=settings.database_url, echo=settings.db_echo)
    if not await db.check_connection():
        await db.close()
        pytest.skip("PostgreSQL not reachable at DATABASE_URL")

    await db.create_all()
    yield db

    await db.truncate()
    await db.close()


@pytest_asyncio.fixture
async def customer_with_vehicle(test_database) -> tuple[UUID, UUID, UUID]:
    """Create a customer and vehicle satisfying visit/appointment FKs.

    Returns:
        tuple: (studio_id, customer_id, vehicle_id)
    """
    studio_id = new_id()
    customer = Customer(
        id=new_id(),
        studio_id=studio_id,
        first_name="Jan",
        last_name="Kowalski",
        phone="+48 600 100 200",
    )
    vehicle = Vehicle(
        id=new_id(),
        studio_id=studio_id,
        customer_id=customer.id,
        brand="Porsche",
        model="911",
        license_plate="KR 4W911",
    )
    async with test_database.get_session() as session:
        await CustomerRepository(session).save(customer)
        await VehicleRepository(session).save(vehicle)
    return studio_id, customer.id, vehicle.id
