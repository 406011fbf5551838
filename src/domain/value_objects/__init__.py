"""Domain value objects with validation.

Immutable value objects that enforce business constraints.
"""

from src.domain.value_objects.appointment_schedule import AppointmentSchedule
from src.domain.value_objects.money import Money, NegativeMoneyError
from src.domain.value_objects.service_line_item import (
    FinancialIntegrityError,
    ServiceLineItem,
    compute_final_net,
)
from src.domain.value_objects.studio_context import StudioContext
from src.domain.value_objects.vat_rate import VatRate

__all__ = [
    "AppointmentSchedule",
    "FinancialIntegrityError",
    "Money",
    "NegativeMoneyError",
    "ServiceLineItem",
    "StudioContext",
    "VatRate",
    "compute_final_net",
]
