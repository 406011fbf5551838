"""Integration tests for the SQLAlchemy repositories.

Tests against a real PostgreSQL database:
- Visit round trip with service items
- Studio isolation on lookups
- Optimistic versioning across two sessions
- Visit number and per-appointment uniqueness, sequence lookup
- Customer contact lookups
- Protocol instances by stage and the visit delete cascade
"""

import pytest

from src.domain.entities import Customer
from src.domain.enums import AppointmentStatus, ProtocolStage, VisitStatus
from src.domain.errors import DuplicateVisitError, StaleAggregateError
from src.infrastructure.persistence.repositories import (
    AppointmentRepository,
    CustomerRepository,
    VisitProtocolRepository,
    VisitRepository,
)
from tests.conftest import (
    create_appointment,
    create_context,
    create_line_item,
    create_protocol,
    create_visit,
    new_id,
)


def _visit(customer_with_vehicle, **overrides):
    studio_id, customer_id, vehicle_id = customer_with_vehicle
    return create_visit(
        create_context(studio_id=studio_id),
        customer_id=customer_id,
        vehicle_id=vehicle_id,
        **overrides,
    )


@pytest.mark.integration
class TestVisitRepository:
    """Test VisitRepository against PostgreSQL."""

    async def test_save_and_find_round_trip(self, test_database, customer_with_vehicle):
        visit = _visit(
            customer_with_vehicle,
            line_items=[
                create_line_item(base_cents=10000),
                create_line_item(service_name="Interior", base_cents=25000),
            ],
            mileage_at_arrival=42000,
        )

        async with test_database.get_session() as session:
            await VisitRepository(session).save(visit)

        async with test_database.get_session() as session:
            found = await VisitRepository(session).find_by_id(visit.id, visit.studio_id)

        assert found is not None
        assert found.visit_number == visit.visit_number
        assert found.status == VisitStatus.DRAFT
        assert found.mileage_at_arrival == 42000
        assert len(found.service_items) == 2
        assert found.total_net().amount == 35000
        assert found.total_gross() == visit.total_gross()

    async def test_other_studio_cannot_see_visit(
        self, test_database, customer_with_vehicle
    ):
        visit = _visit(customer_with_vehicle)

        async with test_database.get_session() as session:
            await VisitRepository(session).save(visit)

        async with test_database.get_session() as session:
            found = await VisitRepository(session).find_by_id(visit.id, new_id())

        assert found is None

    async def test_concurrent_update_raises_stale_error(
        self, test_database, customer_with_vehicle
    ):
        """Test the second of two writers loading the same version loses."""
        visit = _visit(customer_with_vehicle)
        async with test_database.get_session() as session:
            await VisitRepository(session).save(visit)

        async with test_database.get_session() as session:
            first = await VisitRepository(session).find_by_id(visit.id, visit.studio_id)
        async with test_database.get_session() as session:
            second = await VisitRepository(session).find_by_id(visit.id, visit.studio_id)
        assert first is not None and second is not None

        first.technical_notes = "Scratch on rear bumper"
        async with test_database.get_session() as session:
            await VisitRepository(session).save(first)
        assert first.version == 2

        second.technical_notes = "Chipped windscreen"
        with pytest.raises(StaleAggregateError):
            async with test_database.get_session() as session:
                await VisitRepository(session).save(second)

        async with test_database.get_session() as session:
            stored = await VisitRepository(session).find_by_id(visit.id, visit.studio_id)
        assert stored is not None
        assert stored.technical_notes == "Scratch on rear bumper"
        assert stored.version == 2

    async def test_duplicate_visit_number_rejected(
        self, test_database, customer_with_vehicle
    ):
        async with test_database.get_session() as session:
            await VisitRepository(session).save(
                _visit(customer_with_vehicle, visit_number="VIS-2025-00003")
            )

        with pytest.raises(DuplicateVisitError):
            async with test_database.get_session() as session:
                await VisitRepository(session).save(
                    _visit(customer_with_vehicle, visit_number="VIS-2025-00003")
                )

    async def test_second_visit_for_appointment_rejected(
        self, test_database, customer_with_vehicle
    ):
        """Test the losing insert is rolled back and the session stays usable."""
        studio_id, customer_id, vehicle_id = customer_with_vehicle
        appointment = create_appointment(
            create_context(studio_id=studio_id),
            customer_id=customer_id,
            vehicle_id=vehicle_id,
        )
        async with test_database.get_session() as session:
            await AppointmentRepository(session).save(appointment)
            await VisitRepository(session).save(
                _visit(
                    customer_with_vehicle,
                    appointment_id=appointment.id,
                    visit_number="VIS-2025-00001",
                )
            )

        async with test_database.get_session() as session:
            repo = VisitRepository(session)
            with pytest.raises(DuplicateVisitError) as exc_info:
                await repo.save(
                    _visit(
                        customer_with_vehicle,
                        appointment_id=appointment.id,
                        visit_number="VIS-2025-00002",
                    )
                )
            assert exc_info.value.appointment_id == appointment.id
            # Walk-in visits without an appointment are not constrained
            await repo.save(_visit(customer_with_vehicle, visit_number="VIS-2025-00003"))
            await repo.save(_visit(customer_with_vehicle, visit_number="VIS-2025-00004"))

        async with test_database.get_session() as session:
            total = await VisitRepository(session).count_by_studio(studio_id)
        assert total == 3

    async def test_find_latest_visit_number(self, test_database, customer_with_vehicle):
        studio_id = customer_with_vehicle[0]
        async with test_database.get_session() as session:
            repo = VisitRepository(session)
            for number in ("VIS-2025-00002", "VIS-2025-00010", "VIS-2024-00099"):
                await repo.save(_visit(customer_with_vehicle, visit_number=number))

        async with test_database.get_session() as session:
            repo = VisitRepository(session)
            latest = await repo.find_latest_visit_number(studio_id, 2025)
            none_yet = await repo.find_latest_visit_number(studio_id, 2026)

        assert latest == "VIS-2025-00010"
        assert none_yet is None

    async def test_exists_for_appointment(self, test_database, customer_with_vehicle):
        studio_id, customer_id, vehicle_id = customer_with_vehicle
        appointment = create_appointment(
            create_context(studio_id=studio_id),
            customer_id=customer_id,
            vehicle_id=vehicle_id,
        )
        async with test_database.get_session() as session:
            await AppointmentRepository(session).save(appointment)
            assert not await VisitRepository(session).exists_for_appointment(
                appointment.id, studio_id
            )
            await VisitRepository(session).save(
                _visit(customer_with_vehicle, appointment_id=appointment.id)
            )

        async with test_database.get_session() as session:
            repo = VisitRepository(session)
            assert await repo.exists_for_appointment(appointment.id, studio_id)
            assert not await repo.exists_for_appointment(appointment.id, new_id())

    async def test_list_and_count_filter_by_status(
        self, test_database, customer_with_vehicle
    ):
        studio_id = customer_with_vehicle[0]
        async with test_database.get_session() as session:
            repo = VisitRepository(session)
            await repo.save(_visit(customer_with_vehicle, visit_number="VIS-2025-00001"))
            await repo.save(
                _visit(
                    customer_with_vehicle,
                    visit_number="VIS-2025-00002",
                    status=VisitStatus.IN_PROGRESS,
                )
            )

        async with test_database.get_session() as session:
            repo = VisitRepository(session)
            drafts = await repo.list_by_studio(studio_id, status=VisitStatus.DRAFT)
            total = await repo.count_by_studio(studio_id)

        assert [v.visit_number for v in drafts] == ["VIS-2025-00001"]
        assert total == 2

    async def test_delete_cascades_to_protocols(
        self, test_database, customer_with_vehicle
    ):
        visit = _visit(customer_with_vehicle)
        async with test_database.get_session() as session:
            await VisitRepository(session).save(visit)
            await VisitProtocolRepository(session).save_all(
                [create_protocol(visit), create_protocol(visit)]
            )

        async with test_database.get_session() as session:
            assert await VisitRepository(session).delete(visit.id, visit.studio_id)

        async with test_database.get_session() as session:
            remaining = await VisitProtocolRepository(session).find_by_visit(
                visit.id, visit.studio_id
            )
        assert remaining == []


@pytest.mark.integration
class TestAppointmentRepository:
    """Test AppointmentRepository against PostgreSQL."""

    async def test_cancel_bumps_version(self, test_database, customer_with_vehicle):
        studio_id, customer_id, vehicle_id = customer_with_vehicle
        context = create_context(studio_id=studio_id)
        appointment = create_appointment(
            context, customer_id=customer_id, vehicle_id=vehicle_id
        )
        async with test_database.get_session() as session:
            await AppointmentRepository(session).save(appointment)

        async with test_database.get_session() as session:
            repo = AppointmentRepository(session)
            loaded = await repo.find_by_id(appointment.id, studio_id)
            assert loaded is not None
            loaded.cancel(context.user_id)
            await repo.save(loaded)

        async with test_database.get_session() as session:
            stored = await AppointmentRepository(session).find_by_id(
                appointment.id, studio_id
            )

        assert stored is not None
        assert stored.status == AppointmentStatus.CANCELLED
        assert stored.version == 2
        assert len(stored.line_items) == 1

    async def test_appointment_without_vehicle(
        self, test_database, customer_with_vehicle
    ):
        studio_id, customer_id, _ = customer_with_vehicle
        appointment = create_appointment(
            create_context(studio_id=studio_id),
            customer_id=customer_id,
            vehicle_id=None,
        )
        async with test_database.get_session() as session:
            await AppointmentRepository(session).save(appointment)

        async with test_database.get_session() as session:
            stored = await AppointmentRepository(session).find_by_id(
                appointment.id, studio_id
            )

        assert stored is not None
        assert stored.vehicle_id is None

    async def test_other_studio_cannot_see_appointment(
        self, test_database, customer_with_vehicle
    ):
        studio_id, customer_id, vehicle_id = customer_with_vehicle
        appointment = create_appointment(
            create_context(studio_id=studio_id),
            customer_id=customer_id,
            vehicle_id=vehicle_id,
        )
        async with test_database.get_session() as session:
            await AppointmentRepository(session).save(appointment)

        async with test_database.get_session() as session:
            repo = AppointmentRepository(session)
            foreign = await repo.find_by_id(appointment.id, new_id())
            own = await repo.find_by_id(appointment.id, studio_id)

        assert foreign is None
        assert own is not None


@pytest.mark.integration
class TestCustomerRepository:
    """Test CustomerRepository contact lookups against PostgreSQL."""

    async def test_exists_by_email_and_phone(self, test_database):
        studio_id = new_id()
        customer = Customer(
            id=new_id(),
            studio_id=studio_id,
            first_name="Anna",
            last_name="Nowak",
            phone="+48 600 300 400",
            email="Anna.Nowak@example.com",
        )
        async with test_database.get_session() as session:
            await CustomerRepository(session).save(customer)

        async with test_database.get_session() as session:
            repo = CustomerRepository(session)
            assert await repo.exists_by_email(studio_id, " anna.nowak@EXAMPLE.com ")
            assert await repo.exists_by_phone(studio_id, "+48 600 300 400 ")
            assert not await repo.exists_by_email(
                studio_id, "anna.nowak@example.com", exclude_id=customer.id
            )
            assert not await repo.exists_by_email(new_id(), "anna.nowak@example.com")
            assert not await repo.exists_by_phone(studio_id, "+48 600 999 999")


@pytest.mark.integration
class TestVisitProtocolRepository:
    """Test VisitProtocolRepository against PostgreSQL."""

    async def test_find_by_visit_filters_stage(
        self, test_database, customer_with_vehicle
    ):
        visit = _visit(customer_with_vehicle)
        check_in = create_protocol(visit)
        check_out = create_protocol(visit, stage=ProtocolStage.CHECK_OUT)
        async with test_database.get_session() as session:
            await VisitRepository(session).save(visit)
            await VisitProtocolRepository(session).save_all([check_in, check_out])

        async with test_database.get_session() as session:
            repo = VisitProtocolRepository(session)
            only_out = await repo.find_by_visit(
                visit.id, visit.studio_id, stage=ProtocolStage.CHECK_OUT
            )
            everything = await repo.find_by_visit(visit.id, visit.studio_id)

        assert [p.id for p in only_out] == [check_out.id]
        assert {p.id for p in everything} == {check_in.id, check_out.id}

    async def test_signature_persisted(self, test_database, customer_with_vehicle):
        visit = _visit(customer_with_vehicle)
        protocol = create_protocol(visit)
        async with test_database.get_session() as session:
            await VisitRepository(session).save(visit)
            await VisitProtocolRepository(session).save(protocol)

        protocol.mark_ready_for_signature("protocols/filled.pdf")
        protocol.sign(
            signed_document_key="protocols/signed.pdf",
            signed_by="Jan Kowalski",
            signature_image_key="protocols/signature.png",
        )
        async with test_database.get_session() as session:
            await VisitProtocolRepository(session).save(protocol)

        async with test_database.get_session() as session:
            stored = await VisitProtocolRepository(session).find_by_id(
                protocol.id, visit.studio_id
            )

        assert stored is not None
        assert stored.is_signed()
        assert stored.signed_by == "Jan Kowalski"
        assert stored.signed_at is not None

    async def test_delete_by_visit_returns_count(
        self, test_database, customer_with_vehicle
    ):
        visit = _visit(customer_with_vehicle)
        async with test_database.get_session() as session:
            await VisitRepository(session).save(visit)
            await VisitProtocolRepository(session).save_all(
                [create_protocol(visit) for _ in range(3)]
            )

        async with test_database.get_session() as session:
            deleted = await VisitProtocolRepository(session).delete_by_visit(
                visit.id, visit.studio_id
            )

        assert deleted == 3


@pytest.mark.integration
async def test_check_connection(test_database):
    assert await test_database.check_connection() is True
