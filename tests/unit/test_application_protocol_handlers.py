"""Unit tests for protocol rule and visit protocol handlers.

Tests cover:
- Create, update and delete of protocol rules
- Idempotent generation of visit protocols per template
- Regeneration after a rule is added, then confirmation
- Ready-for-signature and signing through the handlers
- Rule and protocol list queries
"""

from unittest.mock import AsyncMock

import pytest

from src.application.commands.handlers.confirm_visit_handler import ConfirmVisitHandler
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
from src.application.commands.protocol_commands import (
    CreateProtocolRule,
    DeleteProtocolRule,
    GenerateVisitProtocols,
    MarkProtocolReadyForSignature,
    SignVisitProtocol,
    UpdateProtocolRule,
)
from src.application.commands.visit_commands import ConfirmVisit
from src.application.queries.handlers.protocol_query_handlers import (
    ListProtocolRulesHandler,
    ListVisitProtocolsHandler,
)
from src.application.queries.protocol_queries import (
    ListProtocolRules,
    ListVisitProtocols,
)
from src.application.services.protocol_resolver import ProtocolResolver
from src.core.result import Failure, Success
from src.domain.enums import (
    ProtocolStage,
    ProtocolTriggerType,
    VisitProtocolStatus,
    VisitStatus,
)
from src.domain.errors import ProtocolError, VisitError
from src.domain.events import VisitProtocolSigned
from src.domain.protocols import (
    AppointmentRepository,
    ProtocolRuleRepository,
    VisitProtocolRepository,
    VisitRepository,
)
from tests.conftest import create_protocol, create_rule, create_visit, new_id


# =============================================================================
# Protocol Rule Handler Tests
# =============================================================================


@pytest.mark.unit
class TestCreateProtocolRuleHandler:
    """Test CreateProtocolRuleHandler."""

    @pytest.fixture
    def rule_repo(self):
        return AsyncMock(spec=ProtocolRuleRepository)

    @pytest.fixture
    def handler(self, rule_repo, mock_logger):
        return CreateProtocolRuleHandler(rule_repo=rule_repo, logger=mock_logger)

    async def test_create_service_rule(self, handler, rule_repo, context):
        """Test a service-specific rule is saved under the studio."""
        ceramic = new_id()
        cmd = CreateProtocolRule(
            context=context,
            template_id=new_id(),
            trigger_type=ProtocolTriggerType.SERVICE_SPECIFIC,
            stage=ProtocolStage.CHECK_IN,
            service_ids=frozenset({ceramic}),
            display_order=2,
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Success)
        assert result.value.service_ids == [ceramic]
        assert result.value.trigger_type == "service_specific"
        saved = rule_repo.save.call_args[0][0]
        assert saved.studio_id == context.studio_id
        assert saved.display_order == 2
        assert saved.is_mandatory is True

    async def test_global_rule_with_services_rejected(self, handler, rule_repo, context):
        cmd = CreateProtocolRule(
            context=context,
            template_id=new_id(),
            trigger_type=ProtocolTriggerType.GLOBAL_ALWAYS,
            stage=ProtocolStage.CHECK_OUT,
            service_ids=frozenset({new_id()}),
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Failure)
        assert result.error == ProtocolError.SERVICE_IDS_NOT_ALLOWED
        rule_repo.save.assert_not_awaited()

    async def test_service_rule_without_services_rejected(self, handler, context):
        cmd = CreateProtocolRule(
            context=context,
            template_id=new_id(),
            trigger_type=ProtocolTriggerType.SERVICE_SPECIFIC,
            stage=ProtocolStage.CHECK_IN,
        )

        result = await handler.handle(cmd)

        assert isinstance(result, Failure)
        assert result.error == ProtocolError.SERVICE_IDS_REQUIRED


@pytest.mark.unit
class TestUpdateAndDeleteProtocolRule:
    """Test UpdateProtocolRuleHandler and DeleteProtocolRuleHandler."""

    @pytest.fixture
    def rule_repo(self):
        return AsyncMock(spec=ProtocolRuleRepository)

    async def test_update_order_and_flag(self, rule_repo, mock_logger, context):
        rule = create_rule(context.studio_id, display_order=0, is_mandatory=True)
        rule_repo.find_by_id.return_value = rule
        handler = UpdateProtocolRuleHandler(rule_repo=rule_repo, logger=mock_logger)

        result = await handler.handle(
            UpdateProtocolRule(
                context=context, rule_id=rule.id, display_order=4, is_mandatory=False
            )
        )

        assert isinstance(result, Success)
        assert rule.display_order == 4
        assert rule.is_mandatory is False
        rule_repo.save.assert_awaited_once_with(rule)

    async def test_update_keeps_unspecified_fields(
        self, rule_repo, mock_logger, context
    ):
        """Test fields left as None are unchanged."""
        rule = create_rule(context.studio_id, display_order=3, is_mandatory=True)
        rule_repo.find_by_id.return_value = rule
        handler = UpdateProtocolRuleHandler(rule_repo=rule_repo, logger=mock_logger)

        await handler.handle(
            UpdateProtocolRule(context=context, rule_id=rule.id, is_mandatory=True)
        )

        assert rule.display_order == 3
        assert rule.is_mandatory is True

    async def test_update_negative_order(self, rule_repo, mock_logger, context):
        rule = create_rule(context.studio_id)
        rule_repo.find_by_id.return_value = rule
        handler = UpdateProtocolRuleHandler(rule_repo=rule_repo, logger=mock_logger)

        result = await handler.handle(
            UpdateProtocolRule(context=context, rule_id=rule.id, display_order=-1)
        )

        assert isinstance(result, Failure)
        assert result.error == ProtocolError.NEGATIVE_DISPLAY_ORDER
        rule_repo.save.assert_not_awaited()

    async def test_update_not_found(self, rule_repo, mock_logger, context):
        rule_repo.find_by_id.return_value = None
        handler = UpdateProtocolRuleHandler(rule_repo=rule_repo, logger=mock_logger)

        result = await handler.handle(
            UpdateProtocolRule(context=context, rule_id=new_id(), display_order=1)
        )

        assert isinstance(result, Failure)
        assert result.error == ProtocolError.RULE_NOT_FOUND

    @pytest.mark.parametrize(
        "deleted,expected", [(True, Success), (False, Failure)]
    )
    async def test_delete(self, deleted, expected, rule_repo, mock_logger, context):
        rule_id = new_id()
        rule_repo.delete.return_value = deleted
        handler = DeleteProtocolRuleHandler(rule_repo=rule_repo, logger=mock_logger)

        result = await handler.handle(DeleteProtocolRule(context=context, rule_id=rule_id))

        assert isinstance(result, expected)
        rule_repo.delete.assert_awaited_once_with(rule_id, context.studio_id)


# =============================================================================
# Visit Protocol Handler Tests
# =============================================================================


@pytest.mark.unit
class TestGenerateVisitProtocolsHandler:
    """Test GenerateVisitProtocolsHandler."""

    @pytest.fixture
    def visit(self, context):
        return create_visit(context)

    @pytest.fixture
    def repos(self, visit):
        visit_repo = AsyncMock(spec=VisitRepository)
        visit_repo.find_by_id.return_value = visit
        visit_protocol_repo = AsyncMock(spec=VisitProtocolRepository)
        visit_protocol_repo.find_by_visit.return_value = []
        protocol_resolver = AsyncMock(spec=ProtocolResolver)
        protocol_resolver.resolve.return_value = []
        return {
            "visit_repo": visit_repo,
            "visit_protocol_repo": visit_protocol_repo,
            "protocol_resolver": protocol_resolver,
        }

    @pytest.fixture
    def handler(self, repos, mock_logger):
        return GenerateVisitProtocolsHandler(**repos, logger=mock_logger)

    async def test_generates_one_instance_per_rule(
        self, handler, repos, context, visit
    ):
        """Test resolved rules become PENDING instances of version 1."""
        rules = [
            create_rule(context.studio_id, display_order=0),
            create_rule(context.studio_id, display_order=1, is_mandatory=False),
        ]
        repos["protocol_resolver"].resolve.return_value = rules

        result = await handler.handle(
            GenerateVisitProtocols(
                context=context, visit_id=visit.id, stage=ProtocolStage.CHECK_IN
            )
        )

        assert isinstance(result, Success)
        assert [p.template_id for p in result.value] == [r.template_id for r in rules]
        assert [p.is_mandatory for p in result.value] == [True, False]
        assert all(p.status == "pending" and p.version == 1 for p in result.value)
        saved = repos["visit_protocol_repo"].save_all.call_args[0][0]
        assert all(p.visit_id == visit.id for p in saved)
        repos["protocol_resolver"].resolve.assert_awaited_once_with(
            context.studio_id, ProtocolStage.CHECK_IN, visit.service_ids()
        )

    async def test_existing_instances_returned(self, handler, repos, context, visit):
        """Test generation is idempotent per template."""
        existing = create_protocol(visit)
        repos["visit_protocol_repo"].find_by_visit.return_value = [existing]
        repos["protocol_resolver"].resolve.return_value = [
            create_rule(context.studio_id, template_id=existing.template_id)
        ]

        result = await handler.handle(
            GenerateVisitProtocols(
                context=context, visit_id=visit.id, stage=ProtocolStage.CHECK_IN
            )
        )

        assert isinstance(result, Success)
        assert [p.id for p in result.value] == [existing.id]
        repos["visit_protocol_repo"].save_all.assert_not_awaited()

    async def test_rule_added_later_gets_instance(
        self, handler, repos, context, visit
    ):
        """Test regeneration creates instances only for new templates."""
        signed = create_protocol(visit, signed=True)
        late_rule = create_rule(context.studio_id, display_order=1)
        repos["visit_protocol_repo"].find_by_visit.return_value = [signed]
        repos["protocol_resolver"].resolve.return_value = [
            create_rule(context.studio_id, template_id=signed.template_id),
            late_rule,
        ]

        result = await handler.handle(
            GenerateVisitProtocols(
                context=context, visit_id=visit.id, stage=ProtocolStage.CHECK_IN
            )
        )

        assert isinstance(result, Success)
        assert [p.template_id for p in result.value] == [
            signed.template_id,
            late_rule.template_id,
        ]
        assert [p.status for p in result.value] == ["signed", "pending"]
        saved = repos["visit_protocol_repo"].save_all.call_args[0][0]
        assert len(saved) == 1
        assert saved[0].template_id == late_rule.template_id
        assert saved[0].version == 1
        assert saved[0].is_mandatory is True

    async def test_no_rules_saves_nothing(self, handler, repos, context, visit):
        result = await handler.handle(
            GenerateVisitProtocols(
                context=context, visit_id=visit.id, stage=ProtocolStage.CHECK_OUT
            )
        )

        assert isinstance(result, Success)
        assert result.value == []
        repos["visit_protocol_repo"].save_all.assert_not_awaited()

    async def test_visit_not_found(self, handler, repos, context):
        repos["visit_repo"].find_by_id.return_value = None

        result = await handler.handle(
            GenerateVisitProtocols(
                context=context, visit_id=new_id(), stage=ProtocolStage.CHECK_IN
            )
        )

        assert isinstance(result, Failure)
        assert result.error == VisitError.NOT_FOUND


@pytest.mark.unit
class TestRuleAddedAfterGeneration:
    """Test a mandatory rule added after generation does not block a draft."""

    async def test_regenerate_sign_then_confirm(
        self, context, mock_event_bus, mock_logger
    ):
        visit = create_visit(context)
        first = create_protocol(visit, signed=True)
        stored = [first]

        visit_repo = AsyncMock(spec=VisitRepository)
        visit_repo.find_by_id.return_value = visit
        visit_protocol_repo = AsyncMock(spec=VisitProtocolRepository)
        visit_protocol_repo.find_by_visit.side_effect = lambda *args, **kwargs: list(
            stored
        )
        visit_protocol_repo.save_all.side_effect = stored.extend
        protocol_resolver = AsyncMock(spec=ProtocolResolver)
        protocol_resolver.resolve.return_value = [
            create_rule(context.studio_id, template_id=first.template_id),
            create_rule(context.studio_id, display_order=1),
        ]

        confirm = ConfirmVisitHandler(
            visit_repo=visit_repo,
            appointment_repo=AsyncMock(spec=AppointmentRepository),
            visit_protocol_repo=visit_protocol_repo,
            protocol_resolver=protocol_resolver,
            event_bus=mock_event_bus,
            logger=mock_logger,
        )
        generate = GenerateVisitProtocolsHandler(
            visit_repo=visit_repo,
            visit_protocol_repo=visit_protocol_repo,
            protocol_resolver=protocol_resolver,
            logger=mock_logger,
        )

        blocked = await confirm.handle(ConfirmVisit(context=context, visit_id=visit.id))
        assert isinstance(blocked, Failure)
        assert blocked.error == VisitError.MANDATORY_PROTOCOLS_UNSIGNED

        generated = await generate.handle(
            GenerateVisitProtocols(
                context=context, visit_id=visit.id, stage=ProtocolStage.CHECK_IN
            )
        )
        assert isinstance(generated, Success)
        assert len(stored) == 2

        added = stored[1]
        added.mark_ready_for_signature(f"protocols/{added.id}/filled.pdf")
        added.sign(
            signed_document_key=f"protocols/{added.id}/signed.pdf",
            signed_by="Anna Nowak",
            signature_image_key=f"protocols/{added.id}/signature.png",
        )

        result = await confirm.handle(ConfirmVisit(context=context, visit_id=visit.id))

        assert isinstance(result, Success)
        assert visit.status == VisitStatus.IN_PROGRESS


@pytest.mark.unit
class TestProtocolSigningHandlers:
    """Test ready-for-signature and sign handlers."""

    @pytest.fixture
    def visit_protocol_repo(self):
        return AsyncMock(spec=VisitProtocolRepository)

    async def test_mark_ready(self, visit_protocol_repo, mock_logger, context):
        protocol = create_protocol(create_visit(context))
        visit_protocol_repo.find_by_id.return_value = protocol
        handler = MarkProtocolReadyForSignatureHandler(
            visit_protocol_repo=visit_protocol_repo, logger=mock_logger
        )

        result = await handler.handle(
            MarkProtocolReadyForSignature(
                context=context, protocol_id=protocol.id, filled_document_key="f.pdf"
            )
        )

        assert isinstance(result, Success)
        assert result.value.status == "ready_for_signature"
        visit_protocol_repo.save.assert_awaited_once_with(protocol)

    async def test_mark_ready_not_found(self, visit_protocol_repo, mock_logger, context):
        visit_protocol_repo.find_by_id.return_value = None
        handler = MarkProtocolReadyForSignatureHandler(
            visit_protocol_repo=visit_protocol_repo, logger=mock_logger
        )

        result = await handler.handle(
            MarkProtocolReadyForSignature(
                context=context, protocol_id=new_id(), filled_document_key="f.pdf"
            )
        )

        assert isinstance(result, Failure)
        assert result.error == ProtocolError.PROTOCOL_NOT_FOUND

    async def test_sign(
        self, visit_protocol_repo, mock_event_bus, mock_logger, context
    ):
        """Test signing persists the protocol and publishes the event."""
        protocol = create_protocol(create_visit(context))
        protocol.mark_ready_for_signature("f.pdf")
        visit_protocol_repo.find_by_id.return_value = protocol
        handler = SignVisitProtocolHandler(
            visit_protocol_repo=visit_protocol_repo,
            event_bus=mock_event_bus,
            logger=mock_logger,
        )

        result = await handler.handle(
            SignVisitProtocol(
                context=context,
                protocol_id=protocol.id,
                signed_document_key="s.pdf",
                signed_by="Anna Nowak",
                signature_image_key="sig.png",
            )
        )

        assert isinstance(result, Success)
        assert protocol.status == VisitProtocolStatus.SIGNED
        visit_protocol_repo.save.assert_awaited_once_with(protocol)
        event = mock_event_bus.publish.call_args[0][0]
        assert isinstance(event, VisitProtocolSigned)
        assert event.signed_by == "Anna Nowak"
        assert event.stage == ProtocolStage.CHECK_IN

    async def test_sign_signed_protocol_rejected(
        self, visit_protocol_repo, mock_event_bus, mock_logger, context
    ):
        """Test signed protocols cannot be re-signed."""
        protocol = create_protocol(create_visit(context), signed=True)
        visit_protocol_repo.find_by_id.return_value = protocol
        handler = SignVisitProtocolHandler(
            visit_protocol_repo=visit_protocol_repo,
            event_bus=mock_event_bus,
            logger=mock_logger,
        )

        result = await handler.handle(
            SignVisitProtocol(
                context=context,
                protocol_id=protocol.id,
                signed_document_key="other.pdf",
                signed_by="Someone",
                signature_image_key="other.png",
            )
        )

        assert isinstance(result, Failure)
        assert result.error == ProtocolError.ALREADY_SIGNED
        visit_protocol_repo.save.assert_not_awaited()
        mock_event_bus.publish.assert_not_awaited()


# =============================================================================
# Protocol Query Handler Tests
# =============================================================================


@pytest.mark.unit
class TestProtocolQueries:
    """Test ListProtocolRulesHandler and ListVisitProtocolsHandler."""

    async def test_rules_sorted_by_stage_and_order(self, context):
        rule_repo = AsyncMock(spec=ProtocolRuleRepository)
        check_out = create_rule(context.studio_id, stage=ProtocolStage.CHECK_OUT)
        second = create_rule(context.studio_id, display_order=2)
        first = create_rule(context.studio_id, display_order=1)
        rule_repo.find_by_studio.return_value = [check_out, second, first]

        result = await ListProtocolRulesHandler(rule_repo=rule_repo).handle(
            ListProtocolRules(context=context)
        )

        assert isinstance(result, Success)
        assert [r.id for r in result.value] == [first.id, second.id, check_out.id]
        rule_repo.find_by_studio.assert_awaited_once_with(context.studio_id, stage=None)

    async def test_visit_protocols(self, context):
        visit = create_visit(context)
        protocol = create_protocol(visit, stage=ProtocolStage.CHECK_OUT)
        visit_repo = AsyncMock(spec=VisitRepository)
        visit_repo.find_by_id.return_value = visit
        visit_protocol_repo = AsyncMock(spec=VisitProtocolRepository)
        visit_protocol_repo.find_by_visit.return_value = [protocol]
        handler = ListVisitProtocolsHandler(
            visit_repo=visit_repo, visit_protocol_repo=visit_protocol_repo
        )

        result = await handler.handle(
            ListVisitProtocols(
                context=context, visit_id=visit.id, stage=ProtocolStage.CHECK_OUT
            )
        )

        assert isinstance(result, Success)
        assert result.value[0].stage == "check_out"
        visit_protocol_repo.find_by_visit.assert_awaited_once_with(
            visit.id, context.studio_id, stage=ProtocolStage.CHECK_OUT
        )

    async def test_visit_protocols_of_unknown_visit(self, context):
        visit_repo = AsyncMock(spec=VisitRepository)
        visit_repo.find_by_id.return_value = None
        handler = ListVisitProtocolsHandler(
            visit_repo=visit_repo,
            visit_protocol_repo=AsyncMock(spec=VisitProtocolRepository),
        )

        result = await handler.handle(
            ListVisitProtocols(context=context, visit_id=new_id())
        )

        assert isinstance(result, Failure)
        assert result.error == VisitError.NOT_FOUND
