"""Visit aggregate and its lifecycle state machine.

A visit is the operational record of a vehicle's stay at the studio. It is
created as a DRAFT from an appointment, confirmed once the mandatory
check-in protocols are signed, and then moves through the workshop
statuses.

State Machine:
    DRAFT → IN_PROGRESS            confirm (gate: check-in protocols signed)
    DRAFT → (deleted)              cancel draft (handler performs the delete)
    IN_PROGRESS → READY_FOR_PICKUP mark ready
    READY_FOR_PICKUP → COMPLETED   complete (stamps pickup time)
    non-terminal → REJECTED        reject (optional reason into notes)
    any but ARCHIVED → ARCHIVED    archive

Every transition stamps updated_by/updated_at and never re-prices the
service items.

Usage:
    result = visit.confirm(ctx.user_id, check_in_protocols_signed=gate_ok)
    match result:
        case Success():
            await visit_repo.save(visit)
        case Failure(error=error):
            return Failure(error=error)
"""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID

from src.core.result import Failure, Result, Success
from src.domain.enums import PhotoType, VisitServiceStatus, VisitStatus
from src.domain.errors import VisitError
from src.domain.value_objects import Money, ServiceLineItem

_ACTIVE_ITEM_STATUSES = frozenset(
    {VisitServiceStatus.CONFIRMED, VisitServiceStatus.APPROVED}
)

REJECTION_PREFIX = "REJECTED: "


@dataclass
class VisitServiceItem:
    """Service performed during a visit, with its frozen pricing snapshot.

    Attributes:
        id: Unique identifier.
        line_item: Pricing snapshot (never re-priced by transitions).
        status: Per-item approval status.
        created_at: When the item was added to the visit.
    """

    id: UUID
    line_item: ServiceLineItem
    status: VisitServiceStatus = VisitServiceStatus.CONFIRMED
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def is_billable(self) -> bool:
        """Rejected items do not count toward totals."""
        return self.status != VisitServiceStatus.REJECTED


@dataclass
class VisitPhoto:
    """Photo documentation attached to a visit."""

    id: UUID
    photo_type: PhotoType
    file_id: str
    file_name: str
    description: str | None = None
    uploaded_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class Visit:
    """Vehicle visit at the studio.

    The vehicle attributes are a snapshot taken at conversion time, so later
    edits to the vehicle do not rewrite historical visits.

    Attributes:
        id: Unique identifier.
        studio_id: Owning tenant.
        visit_number: Human-facing number, e.g. "VIS-2025-00042".
        customer_id: Customer.
        vehicle_id: Vehicle.
        appointment_id: Originating appointment, if any.
        brand_snapshot: Vehicle brand at conversion.
        model_snapshot: Vehicle model at conversion.
        license_plate_snapshot: Plate at conversion.
        vin_snapshot: VIN at conversion.
        year_of_production_snapshot: Model year at conversion.
        color_snapshot: Paint color at conversion.
        status: Lifecycle status.
        scheduled_date: Planned date.
        completed_date: Pickup timestamp (set by complete).
        mileage_at_arrival: Odometer reading at check-in.
        keys_handed_over: Keys received from the customer.
        documents_handed_over: Vehicle documents received.
        technical_notes: Free text; rejection reasons are appended here.
        service_items: Services with frozen prices.
        photos: Check-in photos.
        damage_map_file_id: Storage key of the damage map image.
        created_by: Staff member who created the visit.
        updated_by: Staff member who last changed it.
        version: Optimistic concurrency counter, bumped by the repository.
    """

    id: UUID
    studio_id: UUID
    visit_number: str
    customer_id: UUID
    vehicle_id: UUID
    brand_snapshot: str
    model_snapshot: str
    scheduled_date: date
    created_by: UUID
    updated_by: UUID
    appointment_id: UUID | None = None
    license_plate_snapshot: str | None = None
    vin_snapshot: str | None = None
    year_of_production_snapshot: int | None = None
    color_snapshot: str | None = None
    status: VisitStatus = VisitStatus.DRAFT
    completed_date: datetime | None = None
    mileage_at_arrival: int | None = None
    keys_handed_over: bool = False
    documents_handed_over: bool = False
    technical_notes: str | None = None
    service_items: list[VisitServiceItem] = field(default_factory=list)
    photos: list[VisitPhoto] = field(default_factory=list)
    damage_map_file_id: str | None = None
    version: int = 1
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Validate visit after initialization.

        Raises:
            ValueError: If mileage is negative or visit number is empty.
        """
        if not self.visit_number:
            raise ValueError("Visit number is required")
        if self.mileage_at_arrival is not None and self.mileage_at_arrival < 0:
            raise ValueError("Mileage cannot be negative")

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def is_draft(self) -> bool:
        """Check if the visit is still a draft."""
        return self.status == VisitStatus.DRAFT

    def service_ids(self) -> set[UUID]:
        """Catalog service ids that drive protocol rules.

        Only CONFIRMED and APPROVED items count; custom items have no id.
        """
        return {
            item.line_item.service_id
            for item in self.service_items
            if item.status in _ACTIVE_ITEM_STATUSES
            and item.line_item.service_id is not None
        }

    def total_net(self) -> Money:
        """Net total over billable items."""
        return Money.sum(
            [i.line_item.final_price_net for i in self.service_items if i.is_billable()]
        )

    def total_gross(self) -> Money:
        """Gross total over billable items."""
        return Money.sum(
            [i.line_item.final_price_gross for i in self.service_items if i.is_billable()]
        )

    def total_vat(self) -> Money:
        """Gross total minus net total."""
        return self.total_gross() - self.total_net()

    # -------------------------------------------------------------------------
    # State Transitions
    # -------------------------------------------------------------------------

    def confirm(
        self, user_id: UUID, *, check_in_protocols_signed: bool
    ) -> Result[None, str]:
        """Transition DRAFT → IN_PROGRESS.

        Args:
            user_id: Acting staff member.
            check_in_protocols_signed: Outcome of the CHECK_IN protocol gate.

        Returns:
            Success(None), or Failure(VisitError.*) on wrong state or an
            unsigned mandatory protocol.
        """
        if self.status != VisitStatus.DRAFT:
            return Failure(error=VisitError.CONFIRM_REQUIRES_DRAFT)
        if not check_in_protocols_signed:
            return Failure(error=VisitError.MANDATORY_PROTOCOLS_UNSIGNED)

        self._move_to(VisitStatus.IN_PROGRESS, user_id)
        return Success(value=None)

    def ensure_cancellable(self) -> Result[None, str]:
        """Check that the visit may be hard-deleted (DRAFT only).

        Returns:
            Success(None) or Failure(VisitError.CANCEL_REQUIRES_DRAFT).
        """
        if self.status != VisitStatus.DRAFT:
            return Failure(error=VisitError.CANCEL_REQUIRES_DRAFT)
        return Success(value=None)

    def mark_ready_for_pickup(self, user_id: UUID) -> Result[None, str]:
        """Transition IN_PROGRESS → READY_FOR_PICKUP."""
        if self.status != VisitStatus.IN_PROGRESS:
            return Failure(error=VisitError.READY_REQUIRES_IN_PROGRESS)

        self._move_to(VisitStatus.READY_FOR_PICKUP, user_id)
        return Success(value=None)

    def complete(self, user_id: UUID) -> Result[None, str]:
        """Transition READY_FOR_PICKUP → COMPLETED and stamp the pickup time."""
        if self.status != VisitStatus.READY_FOR_PICKUP:
            return Failure(error=VisitError.COMPLETE_REQUIRES_READY)

        self._move_to(VisitStatus.COMPLETED, user_id)
        self.completed_date = self.updated_at
        return Success(value=None)

    def reject(self, user_id: UUID, reason: str | None = None) -> Result[None, str]:
        """Transition any non-terminal status → REJECTED.

        Args:
            user_id: Acting staff member.
            reason: Optional reason, appended to technical notes as
                "REJECTED: <reason>" after a blank line.

        Returns:
            Success(None) or Failure(VisitError.REJECT_REQUIRES_ACTIVE).
        """
        if self.status.is_terminal():
            return Failure(error=VisitError.REJECT_REQUIRES_ACTIVE)

        if reason and reason.strip():
            entry = f"{REJECTION_PREFIX}{reason.strip()}"
            self.technical_notes = (
                f"{self.technical_notes}\n\n{entry}" if self.technical_notes else entry
            )
        self._move_to(VisitStatus.REJECTED, user_id)
        return Success(value=None)

    def archive(self, user_id: UUID) -> Result[None, str]:
        """Transition any status → ARCHIVED."""
        if self.status == VisitStatus.ARCHIVED:
            return Failure(error=VisitError.ALREADY_ARCHIVED)

        self._move_to(VisitStatus.ARCHIVED, user_id)
        return Success(value=None)

    def _move_to(self, status: VisitStatus, user_id: UUID) -> None:
        self.status = status
        self.updated_by = user_id
        self.updated_at = datetime.now(UTC)
