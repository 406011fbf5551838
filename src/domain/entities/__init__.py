"""Domain entities for business logic.

Pure business logic entities with no framework dependencies.
"""

from src.domain.entities.appointment import Appointment
from src.domain.entities.appointment_color import AppointmentColor
from src.domain.entities.catalog_service import CatalogService
from src.domain.entities.customer import Customer
from src.domain.entities.protocol_rule import ProtocolRule, validate_rule_targets
from src.domain.entities.vehicle import Vehicle
from src.domain.entities.visit import Visit, VisitPhoto, VisitServiceItem
from src.domain.entities.visit_document import VisitDocument
from src.domain.entities.visit_protocol import VisitProtocol

__all__ = [
    "Appointment",
    "AppointmentColor",
    "CatalogService",
    "Customer",
    "ProtocolRule",
    "Vehicle",
    "Visit",
    "VisitDocument",
    "VisitPhoto",
    "VisitProtocol",
    "VisitServiceItem",
    "validate_rule_targets",
]
