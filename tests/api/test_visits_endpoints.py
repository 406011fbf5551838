"""API tests for visit endpoints.

Tests the visit lifecycle over HTTP:
- GET /api/v1/visits, GET /api/v1/visits/{id}
- POST /api/v1/visits/{id}/confirm (protocol gate)
- DELETE /api/v1/visits/{id} (draft cancellation)
- ready-for-pickup, complete, reject, archive transitions
- Optimistic concurrency failures rendered as 409
"""

from datetime import UTC, date, datetime

import pytest

from src.application.commands import (
    ArchiveVisit,
    CancelDraftVisit,
    CompleteVisit,
    ConfirmVisit,
    MarkVisitReadyForPickup,
    RejectVisit,
)
from src.application.dtos import (
    LineItemResult,
    TotalsResult,
    VisitListResult,
    VisitProtocolResult,
    VisitResult,
    VisitServiceItemResult,
    VisitSummaryResult,
    VisitTransitionResult,
)
from src.core.container import (
    get_archive_visit_handler,
    get_cancel_draft_visit_handler,
    get_complete_visit_handler,
    get_confirm_visit_handler,
    get_get_visit_handler,
    get_list_visits_handler,
    get_mark_visit_ready_for_pickup_handler,
    get_reject_visit_handler,
)
from src.core.result import Failure, Success
from src.domain.enums import VisitStatus
from src.domain.errors import StaleAggregateError, VisitError
from src.main import app
from tests.conftest import create_line_item, create_protocol, create_visit, new_id

TOTALS = TotalsResult(net_cents=10000, gross_cents=12300, vat_cents=2300)


def _visit_result() -> VisitResult:
    now = datetime(2025, 6, 2, 9, 0, tzinfo=UTC)
    visit = create_visit()
    return VisitResult(
        id=visit.id,
        visit_number="VIS-2025-00001",
        status="draft",
        appointment_id=new_id(),
        customer_id=new_id(),
        customer_name="Jan Kowalski",
        vehicle_id=new_id(),
        vehicle_label="Porsche 911 (KR 4W911)",
        license_plate="KR 4W911",
        vin=None,
        year_of_production=2021,
        color="Guards Red",
        scheduled_date=date(2025, 6, 2),
        completed_date=None,
        mileage_at_arrival=42000,
        keys_handed_over=True,
        documents_handed_over=False,
        technical_notes=None,
        damage_map_file_id=None,
        service_items=[
            VisitServiceItemResult(
                id=new_id(),
                status="confirmed",
                line_item=LineItemResult.from_line_item(create_line_item()),
            )
        ],
        totals=TOTALS,
        protocols=[VisitProtocolResult.from_entity(create_protocol(visit))],
        created_at=now,
        updated_at=now,
    )


@pytest.mark.api
class TestVisitQueries:
    """Test GET endpoints."""

    def test_get_visit(self, client, headers, override):
        result = _visit_result()
        override(get_get_visit_handler, Success(value=result))

        response = client.get(f"/api/v1/visits/{result.id}", headers=headers)

        assert response.status_code == 200
        data = response.json()
        assert data["visit_number"] == "VIS-2025-00001"
        assert data["scheduled_date"] == "2025-06-02"
        assert data["service_items"][0]["line_item"]["final_price_net_cents"] == 10000
        assert data["protocols"][0]["status"] == "pending"
        assert data["protocols"][0]["stage"] == "check_in"

    def test_get_visit_not_found(self, client, headers, override):
        override(get_get_visit_handler, Failure(error=VisitError.NOT_FOUND))

        response = client.get(f"/api/v1/visits/{new_id()}", headers=headers)

        assert response.status_code == 404
        assert response.json()["type"].endswith("/errors/visit_not_found")

    def test_list_visits(self, client, headers, override):
        summary = VisitSummaryResult(
            id=new_id(),
            visit_number="VIS-2025-00007",
            status="in_progress",
            customer_id=new_id(),
            customer_name=None,
            vehicle_label="Porsche 911",
            scheduled_date=date(2025, 6, 2),
            totals=TOTALS,
        )
        handler = override(
            get_list_visits_handler,
            Success(value=VisitListResult(items=[summary], total=1, page=1, page_size=20)),
        )

        response = client.get(
            "/api/v1/visits", params={"status": "in_progress"}, headers=headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["visits"][0]["visit_number"] == "VIS-2025-00007"
        assert data["meta"]["total_pages"] == 1
        assert handler.messages[0].status == VisitStatus.IN_PROGRESS

    def test_list_unknown_status_returns_422(self, client, headers, override):
        override(get_list_visits_handler, None)

        response = client.get(
            "/api/v1/visits", params={"status": "parked"}, headers=headers
        )

        assert response.status_code == 422


@pytest.mark.api
class TestConfirmVisit:
    """Test POST /api/v1/visits/{id}/confirm."""

    def test_confirm_succeeds(self, client, headers, override):
        visit_id = new_id()
        handler = override(
            get_confirm_visit_handler,
            Success(value=VisitTransitionResult(visit_id=visit_id, status="in_progress")),
        )

        response = client.post(f"/api/v1/visits/{visit_id}/confirm", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"visit_id": str(visit_id), "status": "in_progress"}
        assert isinstance(handler.messages[0], ConfirmVisit)

    def test_unsigned_protocols_returns_400(self, client, headers, override):
        override(
            get_confirm_visit_handler,
            Failure(error=VisitError.MANDATORY_PROTOCOLS_UNSIGNED),
        )

        response = client.post(f"/api/v1/visits/{new_id()}/confirm", headers=headers)

        assert response.status_code == 400
        data = response.json()
        assert data["type"].endswith("/errors/mandatory_protocols_unsigned")
        assert data["detail"] == VisitError.MANDATORY_PROTOCOLS_UNSIGNED

    def test_concurrent_modification_returns_409(self, client, headers, override):
        """Test a stale save escaping the handler becomes a 409 problem."""
        visit_id = new_id()

        class RaisingHandler:
            async def handle(self, command):
                raise StaleAggregateError("Visit", visit_id, 3)

        app.dependency_overrides[get_confirm_visit_handler] = RaisingHandler

        response = client.post(f"/api/v1/visits/{visit_id}/confirm", headers=headers)

        assert response.status_code == 409
        data = response.json()
        assert data["type"].endswith("/errors/concurrent_modification")
        assert "reload and retry" in data["detail"]

    def test_invariant_violation_returns_500(self, client, headers, override):
        class RaisingHandler:
            async def handle(self, command):
                raise ValueError("net exceeds gross")

        app.dependency_overrides[get_confirm_visit_handler] = RaisingHandler

        response = client.post(f"/api/v1/visits/{new_id()}/confirm", headers=headers)

        assert response.status_code == 500
        data = response.json()
        assert data["title"] == "Internal Server Error"
        assert "net exceeds gross" not in data["detail"]


@pytest.mark.api
class TestCancelDraftVisit:
    """Test DELETE /api/v1/visits/{id}."""

    def test_cancel_returns_204(self, client, headers, override):
        visit_id = new_id()
        handler = override(get_cancel_draft_visit_handler, Success(value=None))

        response = client.delete(f"/api/v1/visits/{visit_id}", headers=headers)

        assert response.status_code == 204
        command = handler.messages[0]
        assert isinstance(command, CancelDraftVisit)
        assert command.visit_id == visit_id

    def test_cancel_non_draft_returns_400(self, client, headers, override):
        override(
            get_cancel_draft_visit_handler,
            Failure(error=VisitError.CANCEL_REQUIRES_DRAFT),
        )

        response = client.delete(f"/api/v1/visits/{new_id()}", headers=headers)

        assert response.status_code == 400
        assert response.json()["type"].endswith("/errors/invalid_status_transition")


@pytest.mark.api
class TestVisitTransitions:
    """Test the remaining lifecycle endpoints."""

    @pytest.mark.parametrize(
        "path,dependency,command_type,status",
        [
            (
                "ready-for-pickup",
                get_mark_visit_ready_for_pickup_handler,
                MarkVisitReadyForPickup,
                "ready_for_pickup",
            ),
            ("complete", get_complete_visit_handler, CompleteVisit, "completed"),
            ("archive", get_archive_visit_handler, ArchiveVisit, "archived"),
        ],
    )
    def test_transition(
        self, client, headers, override, path, dependency, command_type, status
    ):
        visit_id = new_id()
        handler = override(
            dependency,
            Success(value=VisitTransitionResult(visit_id=visit_id, status=status)),
        )

        response = client.post(f"/api/v1/visits/{visit_id}/{path}", headers=headers)

        assert response.status_code == 200
        assert response.json()["status"] == status
        assert isinstance(handler.messages[0], command_type)

    def test_reject_with_reason(self, client, headers, override):
        visit_id = new_id()
        handler = override(
            get_reject_visit_handler,
            Success(value=VisitTransitionResult(visit_id=visit_id, status="rejected")),
        )

        response = client.post(
            f"/api/v1/visits/{visit_id}/reject",
            json={"reason": "Paint too damaged"},
            headers=headers,
        )

        assert response.status_code == 200
        command = handler.messages[0]
        assert isinstance(command, RejectVisit)
        assert command.reason == "Paint too damaged"

    def test_reject_without_body(self, client, headers, override):
        visit_id = new_id()
        handler = override(
            get_reject_visit_handler,
            Success(value=VisitTransitionResult(visit_id=visit_id, status="rejected")),
        )

        response = client.post(f"/api/v1/visits/{visit_id}/reject", headers=headers)

        assert response.status_code == 200
        assert handler.messages[0].reason is None

    def test_complete_from_wrong_state_returns_400(self, client, headers, override):
        override(
            get_complete_visit_handler,
            Failure(error=VisitError.COMPLETE_REQUIRES_READY),
        )

        response = client.post(f"/api/v1/visits/{new_id()}/complete", headers=headers)

        assert response.status_code == 400
        assert response.json()["detail"] == VisitError.COMPLETE_REQUIRES_READY
