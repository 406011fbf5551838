"""When a protocol rule applies to a visit."""

from enum import Enum


class ProtocolTriggerType(str, Enum):
    """Protocol rule trigger.

    GLOBAL_ALWAYS rules carry no service ids; SERVICE_SPECIFIC rules carry
    at least one.
    """

    GLOBAL_ALWAYS = "global_always"
    """Applies to every visit at the rule's stage."""

    SERVICE_SPECIFIC = "service_specific"
    """Applies when the visit includes one of the rule's services."""
