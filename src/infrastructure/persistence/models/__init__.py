"""Database models for persistence layer.

This package contains SQLAlchemy database models that map to database
tables. These are infrastructure concerns and should not be imported by the
domain layer.

Models Organization:
    - customer.py, vehicle.py: Booking collaborators
    - catalog_service.py, appointment_color.py: Studio reference data
    - appointment.py: Appointment aggregate (+ line items)
    - visit.py: Visit aggregate (+ service items, photos)
    - visit_document.py: Documents attached to visits
    - protocol_rule.py, visit_protocol.py: Protocol requirements and instances

Note:
    Domain entities (dataclasses) live in src/domain/entities/
    Database models live here in src/infrastructure/persistence/models/
    They are separate and mapped via repository layer.
"""

from src.infrastructure.persistence.models.appointment import (
    AppointmentLineItemModel,
    AppointmentModel,
)
from src.infrastructure.persistence.models.appointment_color import (
    AppointmentColorModel,
)
from src.infrastructure.persistence.models.catalog_service import CatalogServiceModel
from src.infrastructure.persistence.models.customer import CustomerModel
from src.infrastructure.persistence.models.protocol_rule import ProtocolRuleModel
from src.infrastructure.persistence.models.vehicle import VehicleModel
from src.infrastructure.persistence.models.visit import (
    VisitModel,
    VisitPhotoModel,
    VisitServiceItemModel,
)
from src.infrastructure.persistence.models.visit_document import VisitDocumentModel
from src.infrastructure.persistence.models.visit_protocol import VisitProtocolModel

__all__ = [
    "AppointmentColorModel",
    "AppointmentLineItemModel",
    "AppointmentModel",
    "CatalogServiceModel",
    "CustomerModel",
    "ProtocolRuleModel",
    "VehicleModel",
    "VisitDocumentModel",
    "VisitModel",
    "VisitPhotoModel",
    "VisitProtocolModel",
    "VisitServiceItemModel",
]
