"""Visit query handlers.

Visits are read with their frozen service items, totals over billable
items, customer display data and (for the detail view) the protocol
instances of both stages.
"""

import asyncio
from typing import cast

from src.application.dtos import (
    LineItemResult,
    TotalsResult,
    VisitListResult,
    VisitProtocolResult,
    VisitResult,
    VisitServiceItemResult,
    VisitSummaryResult,
)
from src.application.queries.handlers.pagination import clamp_page, page_offset
from src.application.queries.visit_queries import GetVisit, ListVisits
from src.core.result import Failure, Result, Success
from src.domain.entities import Customer, Visit
from src.domain.errors import VisitError
from src.domain.protocols import (
    CustomerRepository,
    VisitProtocolRepository,
    VisitRepository,
)


def vehicle_label(visit: Visit) -> str:
    """Snapshot brand and model, with the plate when known."""
    label = f"{visit.brand_snapshot} {visit.model_snapshot}"
    if visit.license_plate_snapshot:
        return f"{label} ({visit.license_plate_snapshot})"
    return label


def _totals(visit: Visit) -> TotalsResult:
    return TotalsResult.from_money(visit.total_net(), visit.total_gross())


class GetVisitHandler:
    """Handler for GetVisit query.

    Dependencies (injected via constructor):
        - VisitRepository: Visit lookup
        - CustomerRepository: Customer display data
        - VisitProtocolRepository: Protocol instances
    """

    def __init__(
        self,
        visit_repo: VisitRepository,
        customer_repo: CustomerRepository,
        visit_protocol_repo: VisitProtocolRepository,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            visit_repo: Visit repository.
            customer_repo: Customer repository.
            visit_protocol_repo: Visit protocol repository.
        """
        self._visit_repo = visit_repo
        self._customer_repo = customer_repo
        self._visit_protocol_repo = visit_protocol_repo

    async def handle(self, query: GetVisit) -> Result[VisitResult, str]:
        """Handle GetVisit query.

        Args:
            query: GetVisit query.

        Returns:
            Success(VisitResult): Visit found under the studio.
            Failure(error): VisitError.NOT_FOUND.
        """
        studio_id = query.context.studio_id
        visit = await self._visit_repo.find_by_id(query.visit_id, studio_id)
        if visit is None:
            return cast(Result[VisitResult, str], Failure(error=VisitError.NOT_FOUND))

        customer, protocols = await asyncio.gather(
            self._customer_repo.find_by_id(visit.customer_id, studio_id),
            self._visit_protocol_repo.find_by_visit(visit.id, studio_id),
        )

        return Success(
            value=VisitResult(
                id=visit.id,
                visit_number=visit.visit_number,
                status=visit.status.value,
                appointment_id=visit.appointment_id,
                customer_id=visit.customer_id,
                customer_name=customer.full_name if customer else None,
                vehicle_id=visit.vehicle_id,
                vehicle_label=vehicle_label(visit),
                license_plate=visit.license_plate_snapshot,
                vin=visit.vin_snapshot,
                year_of_production=visit.year_of_production_snapshot,
                color=visit.color_snapshot,
                scheduled_date=visit.scheduled_date,
                completed_date=visit.completed_date,
                mileage_at_arrival=visit.mileage_at_arrival,
                keys_handed_over=visit.keys_handed_over,
                documents_handed_over=visit.documents_handed_over,
                technical_notes=visit.technical_notes,
                damage_map_file_id=visit.damage_map_file_id,
                service_items=[
                    VisitServiceItemResult(
                        id=item.id,
                        status=item.status.value,
                        line_item=LineItemResult.from_line_item(item.line_item),
                    )
                    for item in visit.service_items
                ],
                totals=_totals(visit),
                protocols=[VisitProtocolResult.from_entity(p) for p in protocols],
                created_at=visit.created_at,
                updated_at=visit.updated_at,
            )
        )


class ListVisitsHandler:
    """Handler for ListVisits query."""

    def __init__(
        self,
        visit_repo: VisitRepository,
        customer_repo: CustomerRepository,
        max_page_size: int = 100,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            visit_repo: Visit repository.
            customer_repo: Customer repository.
            max_page_size: Upper bound for the page size.
        """
        self._visit_repo = visit_repo
        self._customer_repo = customer_repo
        self._max_page_size = max_page_size

    async def handle(self, query: ListVisits) -> Result[VisitListResult, str]:
        """Handle ListVisits query.

        Returns:
            Success(VisitListResult): Page of visit summaries (may be empty).
        """
        studio_id = query.context.studio_id
        page, page_size = clamp_page(query.page, query.page_size, self._max_page_size)

        visits, total = await asyncio.gather(
            self._visit_repo.list_by_studio(
                studio_id,
                status=query.status,
                offset=page_offset(page, page_size),
                limit=page_size,
            ),
            self._visit_repo.count_by_studio(studio_id, status=query.status),
        )
        customers = await self._customer_repo.find_by_ids(
            {v.customer_id for v in visits}, studio_id
        )
        customer_map = {c.id: c for c in customers}

        items = [_to_summary(visit, customer_map.get(visit.customer_id)) for visit in visits]
        return Success(
            value=VisitListResult(items=items, total=total, page=page, page_size=page_size)
        )


def _to_summary(visit: Visit, customer: Customer | None) -> VisitSummaryResult:
    return VisitSummaryResult(
        id=visit.id,
        visit_number=visit.visit_number,
        status=visit.status.value,
        customer_id=visit.customer_id,
        customer_name=customer.full_name if customer else None,
        vehicle_label=vehicle_label(visit),
        scheduled_date=visit.scheduled_date,
        totals=_totals(visit),
    )
