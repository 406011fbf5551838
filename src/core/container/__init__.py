"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_confirm_visit_handler, ...

The container is organized into modules by concern:
- infrastructure: Core services (db, logging, object storage)
- events: Event bus and subscriptions
- appointment_handlers: Appointment booking and read handlers
- visit_handlers: Conversion, lifecycle and visit read handlers
- protocol_handlers: Protocol rule and visit protocol handlers
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_logger,
    get_object_storage,
)

# Event bus
from src.core.container.events import get_event_bus

# Appointment handlers
from src.core.container.appointment_handlers import (
    get_cancel_appointment_handler,
    get_create_appointment_handler,
    get_get_appointment_handler,
    get_list_appointments_handler,
)

# Visit handlers
from src.core.container.visit_handlers import (
    get_archive_visit_handler,
    get_cancel_draft_visit_handler,
    get_complete_visit_handler,
    get_confirm_visit_handler,
    get_convert_appointment_to_visit_handler,
    get_get_visit_handler,
    get_list_visits_handler,
    get_mark_visit_ready_for_pickup_handler,
    get_reject_visit_handler,
)

# Protocol handlers
from src.core.container.protocol_handlers import (
    get_create_protocol_rule_handler,
    get_delete_protocol_rule_handler,
    get_generate_visit_protocols_handler,
    get_list_protocol_rules_handler,
    get_list_visit_protocols_handler,
    get_mark_protocol_ready_handler,
    get_sign_visit_protocol_handler,
    get_update_protocol_rule_handler,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_db_session",
    "get_logger",
    "get_object_storage",
    # Events
    "get_event_bus",
    # Appointment handlers
    "get_cancel_appointment_handler",
    "get_create_appointment_handler",
    "get_get_appointment_handler",
    "get_list_appointments_handler",
    # Visit handlers
    "get_archive_visit_handler",
    "get_cancel_draft_visit_handler",
    "get_complete_visit_handler",
    "get_confirm_visit_handler",
    "get_convert_appointment_to_visit_handler",
    "get_get_visit_handler",
    "get_list_visits_handler",
    "get_mark_visit_ready_for_pickup_handler",
    "get_reject_visit_handler",
    # Protocol handlers
    "get_create_protocol_rule_handler",
    "get_delete_protocol_rule_handler",
    "get_generate_visit_protocols_handler",
    "get_list_protocol_rules_handler",
    "get_list_visit_protocols_handler",
    "get_mark_protocol_ready_handler",
    "get_sign_visit_protocol_handler",
    "get_update_protocol_rule_handler",
]
