"""Unit tests for the Visit aggregate.

Tests cover:
- Construction validation (visit number, mileage)
- Billable totals (rejected service items excluded)
- State machine: confirm, cancel check, ready, complete, reject, archive
- Transition failures leave the visit unchanged
"""

import pytest

from src.core.result import Failure, Success
from src.domain.entities import VisitServiceItem
from src.domain.enums import VisitServiceStatus, VisitStatus
from src.domain.errors import VisitError
from src.domain.value_objects import Money, VatRate
from tests.conftest import create_line_item, create_visit, new_id

ALL_STATUSES = list(VisitStatus)
TERMINAL = [VisitStatus.COMPLETED, VisitStatus.REJECTED, VisitStatus.ARCHIVED]


# =============================================================================
# Construction Tests
# =============================================================================


@pytest.mark.unit
class TestVisitConstruction:
    """Test Visit invariants on creation."""

    def test_defaults_to_draft(self):
        """Test new visits start as DRAFT."""
        visit = create_visit()

        assert visit.status == VisitStatus.DRAFT
        assert visit.is_draft()
        assert visit.version == 1

    def test_empty_visit_number_raises(self):
        """Test a visit requires a number."""
        with pytest.raises(ValueError, match="Visit number"):
            create_visit(visit_number="")

    def test_negative_mileage_raises(self):
        """Test odometer readings cannot be negative."""
        with pytest.raises(ValueError, match="Mileage"):
            create_visit(mileage_at_arrival=-1)

    def test_zero_mileage_allowed(self):
        """Test a zero reading is valid."""
        assert create_visit(mileage_at_arrival=0).mileage_at_arrival == 0


# =============================================================================
# Totals Tests
# =============================================================================


@pytest.mark.unit
class TestVisitTotals:
    """Test billable totals."""

    def test_totals_include_billable_items(self):
        """Test totals over confirmed items."""
        visit = create_visit(
            line_items=[
                create_line_item(base_cents=8000),
                create_line_item(base_cents=5000, vat_rate=VatRate.VAT_8),
            ]
        )

        assert visit.total_net() == Money(13000)
        assert visit.total_gross() == Money(9840 + 5400)
        assert visit.total_vat() == Money(1840 + 400)

    def test_rejected_items_excluded(self):
        """Test rejected service items do not count toward totals."""
        visit = create_visit(line_items=[create_line_item(base_cents=8000)])
        visit.service_items.append(
            VisitServiceItem(
                id=new_id(),
                line_item=create_line_item(base_cents=99999),
                status=VisitServiceStatus.REJECTED,
            )
        )

        assert visit.total_net() == Money(8000)
        assert visit.total_gross() == Money(9840)

    @pytest.mark.parametrize(
        "status",
        [VisitServiceStatus.PENDING, VisitServiceStatus.APPROVED, VisitServiceStatus.CONFIRMED],
    )
    def test_non_rejected_items_billable(self, status):
        """Test every non-rejected item status is billable."""
        item = VisitServiceItem(id=new_id(), line_item=create_line_item(), status=status)

        assert item.is_billable()

    def test_service_ids(self):
        """Test catalog service ids of the visit."""
        wash_id = new_id()
        visit = create_visit(line_items=[create_line_item(service_id=wash_id)])

        assert visit.service_ids() == {wash_id}

    def test_service_ids_skip_pending_and_rejected_items(self):
        """Test only confirmed and approved items drive protocol rules."""
        ids = {status: new_id() for status in VisitServiceStatus}
        visit = create_visit(line_items=[])
        visit.service_items = [
            VisitServiceItem(
                id=new_id(),
                line_item=create_line_item(service_id=service_id),
                status=status,
            )
            for status, service_id in ids.items()
        ]

        assert visit.service_ids() == {
            ids[VisitServiceStatus.CONFIRMED],
            ids[VisitServiceStatus.APPROVED],
        }


# =============================================================================
# Transition Tests
# =============================================================================


@pytest.mark.unit
class TestVisitConfirm:
    """Test DRAFT → IN_PROGRESS."""

    def test_confirm_with_signed_protocols(self):
        """Test a draft with signed check-in protocols is confirmed."""
        visit = create_visit()
        user_id = new_id()

        result = visit.confirm(user_id, check_in_protocols_signed=True)

        assert isinstance(result, Success)
        assert visit.status == VisitStatus.IN_PROGRESS
        assert visit.updated_by == user_id

    def test_confirm_with_unsigned_protocols_fails(self):
        """Test the gate blocks confirmation and keeps the draft."""
        visit = create_visit()

        result = visit.confirm(new_id(), check_in_protocols_signed=False)

        assert isinstance(result, Failure)
        assert result.error == VisitError.MANDATORY_PROTOCOLS_UNSIGNED
        assert visit.status == VisitStatus.DRAFT

    @pytest.mark.parametrize(
        "status", [s for s in ALL_STATUSES if s != VisitStatus.DRAFT]
    )
    def test_confirm_requires_draft(self, status):
        """Test only drafts can be confirmed."""
        visit = create_visit(status=status)

        result = visit.confirm(new_id(), check_in_protocols_signed=True)

        assert isinstance(result, Failure)
        assert result.error == VisitError.CONFIRM_REQUIRES_DRAFT
        assert visit.status == status


@pytest.mark.unit
class TestVisitCancellable:
    """Test the draft-only deletion check."""

    def test_draft_is_cancellable(self):
        """Test drafts may be deleted."""
        assert isinstance(create_visit().ensure_cancellable(), Success)

    @pytest.mark.parametrize(
        "status", [s for s in ALL_STATUSES if s != VisitStatus.DRAFT]
    )
    def test_non_draft_not_cancellable(self, status):
        """Test confirmed visits must be rejected instead."""
        result = create_visit(status=status).ensure_cancellable()

        assert isinstance(result, Failure)
        assert result.error == VisitError.CANCEL_REQUIRES_DRAFT


@pytest.mark.unit
class TestVisitPickupFlow:
    """Test IN_PROGRESS → READY_FOR_PICKUP → COMPLETED."""

    def test_full_flow(self):
        """Test the happy path through pickup."""
        visit = create_visit(status=VisitStatus.IN_PROGRESS)

        assert isinstance(visit.mark_ready_for_pickup(new_id()), Success)
        assert visit.status == VisitStatus.READY_FOR_PICKUP
        assert visit.completed_date is None

        assert isinstance(visit.complete(new_id()), Success)
        assert visit.status == VisitStatus.COMPLETED
        assert visit.completed_date is not None
        assert visit.completed_date == visit.updated_at

    def test_ready_requires_in_progress(self):
        """Test a draft cannot skip to ready for pickup."""
        visit = create_visit()

        result = visit.mark_ready_for_pickup(new_id())

        assert isinstance(result, Failure)
        assert result.error == VisitError.READY_REQUIRES_IN_PROGRESS
        assert visit.status == VisitStatus.DRAFT

    def test_complete_requires_ready(self):
        """Test an in-progress visit cannot be completed directly."""
        visit = create_visit(status=VisitStatus.IN_PROGRESS)

        result = visit.complete(new_id())

        assert isinstance(result, Failure)
        assert result.error == VisitError.COMPLETE_REQUIRES_READY
        assert visit.completed_date is None


@pytest.mark.unit
class TestVisitReject:
    """Test non-terminal → REJECTED."""

    @pytest.mark.parametrize(
        "status",
        [VisitStatus.DRAFT, VisitStatus.IN_PROGRESS, VisitStatus.READY_FOR_PICKUP],
    )
    def test_reject_active_visit(self, status):
        """Test every non-terminal status can be rejected."""
        visit = create_visit(status=status)

        result = visit.reject(new_id())

        assert isinstance(result, Success)
        assert visit.status == VisitStatus.REJECTED

    def test_reason_becomes_note(self):
        """Test the reason is recorded in technical notes."""
        visit = create_visit(status=VisitStatus.IN_PROGRESS)

        visit.reject(new_id(), "Customer declined the quote")

        assert visit.technical_notes == "REJECTED: Customer declined the quote"

    def test_reason_appended_after_blank_line(self):
        """Test existing notes are kept and the reason appended."""
        visit = create_visit(
            status=VisitStatus.IN_PROGRESS, technical_notes="Scratch on rear bumper"
        )

        visit.reject(new_id(), "  No parts available  ")

        assert visit.technical_notes == (
            "Scratch on rear bumper\n\nREJECTED: No parts available"
        )

    def test_blank_reason_leaves_notes(self):
        """Test a blank reason adds nothing."""
        visit = create_visit(technical_notes="Keys in box 4")

        visit.reject(new_id(), "   ")

        assert visit.technical_notes == "Keys in box 4"

    @pytest.mark.parametrize("status", TERMINAL)
    def test_reject_terminal_fails(self, status):
        """Test closed visits cannot be rejected."""
        visit = create_visit(status=status)

        result = visit.reject(new_id(), "late")

        assert isinstance(result, Failure)
        assert result.error == VisitError.REJECT_REQUIRES_ACTIVE
        assert visit.technical_notes is None


@pytest.mark.unit
class TestVisitArchive:
    """Test any → ARCHIVED."""

    @pytest.mark.parametrize(
        "status", [s for s in ALL_STATUSES if s != VisitStatus.ARCHIVED]
    )
    def test_archive_from_any_status(self, status):
        """Test every other status can be archived."""
        visit = create_visit(status=status)

        assert isinstance(visit.archive(new_id()), Success)
        assert visit.status == VisitStatus.ARCHIVED

    def test_archive_twice_fails(self):
        """Test archiving an archived visit fails."""
        visit = create_visit(status=VisitStatus.ARCHIVED)

        result = visit.archive(new_id())

        assert isinstance(result, Failure)
        assert result.error == VisitError.ALREADY_ARCHIVED
