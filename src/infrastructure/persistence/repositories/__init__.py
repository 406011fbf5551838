"""Repository implementations (adapters for hexagonal architecture).

This package contains concrete implementations of repository protocols
defined in the domain layer. Every query is scoped by ``studio_id``.
"""

from src.infrastructure.persistence.repositories.appointment_repository import (
    AppointmentRepository,
)
from src.infrastructure.persistence.repositories.customer_repository import (
    CustomerRepository,
)
from src.infrastructure.persistence.repositories.protocol_rule_repository import (
    ProtocolRuleRepository,
)
from src.infrastructure.persistence.repositories.reference_data_repositories import (
    AppointmentColorRepository,
    CatalogServiceRepository,
)
from src.infrastructure.persistence.repositories.vehicle_repository import (
    VehicleRepository,
)
from src.infrastructure.persistence.repositories.visit_document_repository import (
    VisitDocumentRepository,
)
from src.infrastructure.persistence.repositories.visit_protocol_repository import (
    VisitProtocolRepository,
)
from src.infrastructure.persistence.repositories.visit_repository import (
    VisitRepository,
)

__all__ = [
    "AppointmentColorRepository",
    "AppointmentRepository",
    "CatalogServiceRepository",
    "CustomerRepository",
    "ProtocolRuleRepository",
    "VehicleRepository",
    "VisitDocumentRepository",
    "VisitProtocolRepository",
    "VisitRepository",
]
