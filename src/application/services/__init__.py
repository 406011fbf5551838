"""Application services shared by several handlers."""

from src.application.services.protocol_resolver import (
    ProtocolResolver,
    resolve_applicable_rules,
    unsigned_mandatory_templates,
)
from src.application.services.visit_number_generator import (
    VisitNumberGenerator,
    format_visit_number,
    next_sequence,
)

__all__ = [
    "ProtocolResolver",
    "VisitNumberGenerator",
    "format_visit_number",
    "next_sequence",
    "resolve_applicable_rules",
    "unsigned_mandatory_templates",
]
