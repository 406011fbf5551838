"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

IMPORTANT: Re-exports are ONLY for protocols defined in this package.

Usage:
    from src.domain.protocols import VisitRepository, LoggerProtocol
"""

# Service protocols
from src.domain.protocols.event_bus_protocol import EventBusProtocol, EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.object_storage_protocol import ObjectStorageProtocol

# Repository protocols
from src.domain.protocols.appointment_color_repository import (
    AppointmentColorRepository,
)
from src.domain.protocols.appointment_repository import AppointmentRepository
from src.domain.protocols.catalog_service_repository import CatalogServiceRepository
from src.domain.protocols.customer_repository import CustomerRepository
from src.domain.protocols.protocol_rule_repository import ProtocolRuleRepository
from src.domain.protocols.vehicle_repository import VehicleRepository
from src.domain.protocols.visit_document_repository import VisitDocumentRepository
from src.domain.protocols.visit_protocol_repository import VisitProtocolRepository
from src.domain.protocols.visit_repository import VisitRepository

__all__ = [
    # Service protocols
    "EventBusProtocol",
    "EventHandler",
    "LoggerProtocol",
    "ObjectStorageProtocol",
    # Repository protocols
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
