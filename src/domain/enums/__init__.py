"""Domain enums.

Usage:
    from src.domain.enums import VisitStatus, AdjustmentType
"""

from src.domain.enums.adjustment_type import AdjustmentType
from src.domain.enums.appointment_status import AppointmentStatus
from src.domain.enums.photo_type import PhotoType
from src.domain.enums.protocol_stage import ProtocolStage
from src.domain.enums.protocol_trigger_type import ProtocolTriggerType
from src.domain.enums.visit_protocol_status import VisitProtocolStatus
from src.domain.enums.visit_service_status import VisitServiceStatus
from src.domain.enums.visit_status import VisitStatus

__all__ = [
    "AdjustmentType",
    "AppointmentStatus",
    "PhotoType",
    "ProtocolStage",
    "ProtocolTriggerType",
    "VisitProtocolStatus",
    "VisitServiceStatus",
    "VisitStatus",
]
