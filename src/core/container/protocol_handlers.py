"""Protocol handler dependency factories.

Request-scoped handler instances for protocol rule administration and visit
protocol instances (generation, readiness, signing, listing).
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.events import get_event_bus
from src.core.container.infrastructure import get_db_session, get_logger

if TYPE_CHECKING:
    from src.application.commands.handlers.protocol_rule_handlers import (
        CreateProtocolRuleHandler,
        DeleteProtocolRuleHandler,
        UpdateProtocolRuleHandler,
    )
    from src.application.commands.handlers.visit_protocol_handlers import (
        GenerateVisitProtocolsHandler,
        MarkProtocolReadyForSignatureHandler,
        SignVisitProtocolHandler,
    )
    from src.application.queries.handlers.protocol_query_handlers import (
        ListProtocolRulesHandler,
        ListVisitProtocolsHandler,
    )


# ============================================================================
# Protocol Rule Handler Factories (Request-Scoped)
# ============================================================================


async def get_create_protocol_rule_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "CreateProtocolRuleHandler":
    """Get CreateProtocolRule command handler (request-scoped)."""
    from src.application.commands.handlers.protocol_rule_handlers import (
        CreateProtocolRuleHandler,
    )
    from src.infrastructure.persistence.repositories import ProtocolRuleRepository

    return CreateProtocolRuleHandler(
        rule_repo=ProtocolRuleRepository(session=session),
        logger=get_logger(),
    )


async def get_update_protocol_rule_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "UpdateProtocolRuleHandler":
    """Get UpdateProtocolRule command handler (request-scoped)."""
    from src.application.commands.handlers.protocol_rule_handlers import (
        UpdateProtocolRuleHandler,
    )
    from src.infrastructure.persistence.repositories import ProtocolRuleRepository

    return UpdateProtocolRuleHandler(
        rule_repo=ProtocolRuleRepository(session=session),
        logger=get_logger(),
    )


async def get_delete_protocol_rule_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "DeleteProtocolRuleHandler":
    """Get DeleteProtocolRule command handler (request-scoped)."""
    from src.application.commands.handlers.protocol_rule_handlers import (
        DeleteProtocolRuleHandler,
    )
    from src.infrastructure.persistence.repositories import ProtocolRuleRepository

    return DeleteProtocolRuleHandler(
        rule_repo=ProtocolRuleRepository(session=session),
        logger=get_logger(),
    )


async def get_list_protocol_rules_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListProtocolRulesHandler":
    """Get ListProtocolRules query handler (request-scoped)."""
    from src.application.queries.handlers.protocol_query_handlers import (
        ListProtocolRulesHandler,
    )
    from src.infrastructure.persistence.repositories import ProtocolRuleRepository

    return ListProtocolRulesHandler(rule_repo=ProtocolRuleRepository(session=session))


# ============================================================================
# Visit Protocol Handler Factories (Request-Scoped)
# ============================================================================


async def get_generate_visit_protocols_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GenerateVisitProtocolsHandler":
    """Get GenerateVisitProtocols command handler (request-scoped).

    Creates handler with:
    - VisitRepository (visit lookup and service ids)
    - VisitProtocolRepository (existing instances, bulk save)
    - ProtocolResolver over ProtocolRuleRepository
    """
    from src.application.commands.handlers.visit_protocol_handlers import (
        GenerateVisitProtocolsHandler,
    )
    from src.application.services.protocol_resolver import ProtocolResolver
    from src.infrastructure.persistence.repositories import (
        ProtocolRuleRepository,
        VisitProtocolRepository,
        VisitRepository,
    )

    return GenerateVisitProtocolsHandler(
        visit_repo=VisitRepository(session=session),
        visit_protocol_repo=VisitProtocolRepository(session=session),
        protocol_resolver=ProtocolResolver(
            rule_repo=ProtocolRuleRepository(session=session)
        ),
        logger=get_logger(),
    )


async def get_mark_protocol_ready_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "MarkProtocolReadyForSignatureHandler":
    """Get MarkProtocolReadyForSignature command handler (request-scoped)."""
    from src.application.commands.handlers.visit_protocol_handlers import (
        MarkProtocolReadyForSignatureHandler,
    )
    from src.infrastructure.persistence.repositories import VisitProtocolRepository

    return MarkProtocolReadyForSignatureHandler(
        visit_protocol_repo=VisitProtocolRepository(session=session),
        logger=get_logger(),
    )


async def get_sign_visit_protocol_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "SignVisitProtocolHandler":
    """Get SignVisitProtocol command handler (request-scoped)."""
    from src.application.commands.handlers.visit_protocol_handlers import (
        SignVisitProtocolHandler,
    )
    from src.infrastructure.persistence.repositories import VisitProtocolRepository

    return SignVisitProtocolHandler(
        visit_protocol_repo=VisitProtocolRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_list_visit_protocols_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListVisitProtocolsHandler":
    """Get ListVisitProtocols query handler (request-scoped)."""
    from src.application.queries.handlers.protocol_query_handlers import (
        ListVisitProtocolsHandler,
    )
    from src.infrastructure.persistence.repositories import (
        VisitProtocolRepository,
        VisitRepository,
    )

    return ListVisitProtocolsHandler(
        visit_repo=VisitRepository(session=session),
        visit_protocol_repo=VisitProtocolRepository(session=session),
    )
