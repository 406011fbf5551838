"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (CreateAppointment, ConfirmVisit).

Each command has a corresponding handler that contains the business logic
to execute the command.
"""

from src.application.commands.appointment_commands import (
    CancelAppointment,
    CreateAppointment,
    CustomerIdentity,
    ExistingCustomer,
    ExistingVehicle,
    NewCustomer,
    NewVehicle,
    ScheduleCommand,
    ServiceLineCommand,
    UpdateCustomer,
    UpdateVehicle,
    VehicleIdentity,
)
from src.application.commands.protocol_commands import (
    CreateProtocolRule,
    DeleteProtocolRule,
    GenerateVisitProtocols,
    MarkProtocolReadyForSignature,
    SignVisitProtocol,
    UpdateProtocolRule,
)
from src.application.commands.visit_commands import (
    ArchiveVisit,
    CancelDraftVisit,
    CompleteVisit,
    ConfirmVisit,
    ConvertAppointmentToVisit,
    MarkVisitReadyForPickup,
    RejectVisit,
)

__all__ = [
    # Appointment commands
    "CancelAppointment",
    "CreateAppointment",
    "CustomerIdentity",
    "ExistingCustomer",
    "ExistingVehicle",
    "NewCustomer",
    "NewVehicle",
    "ScheduleCommand",
    "ServiceLineCommand",
    "UpdateCustomer",
    "UpdateVehicle",
    "VehicleIdentity",
    # Protocol commands
    "CreateProtocolRule",
    "DeleteProtocolRule",
    "GenerateVisitProtocols",
    "MarkProtocolReadyForSignature",
    "SignVisitProtocol",
    "UpdateProtocolRule",
    # Visit commands
    "ArchiveVisit",
    "CancelDraftVisit",
    "CompleteVisit",
    "ConfirmVisit",
    "ConvertAppointmentToVisit",
    "MarkVisitReadyForPickup",
    "RejectVisit",
]
