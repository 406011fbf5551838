"""Domain layer - detailing studio business logic.

Entities, value objects, enums, error constants, domain events and the
ports (protocols) that infrastructure implements. The domain layer has NO
dependencies on any framework or infrastructure.

Structure:
- entities/: Appointment, Visit, ProtocolRule, VisitProtocol and collaborators
- value_objects/: Money, VatRate, ServiceLineItem, AppointmentSchedule, StudioContext
- enums/: Status and type enums
- errors/: Error string constants used in Result failures
- events/: Things that happened (published after commit)
- protocols/: Repository, storage, logging and event bus ports
"""
