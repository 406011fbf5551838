"""ProtocolRuleRepository protocol for protocol rule persistence."""

from typing import Protocol
from uuid import UUID

from src.domain.entities.protocol_rule import ProtocolRule
from src.domain.enums import ProtocolStage


class ProtocolRuleRepository(Protocol):
    """Protocol rule repository protocol (port)."""

    async def find_by_id(self, rule_id: UUID, studio_id: UUID) -> ProtocolRule | None:
        """Find rule by ID within a studio."""
        ...

    async def find_by_studio(
        self, studio_id: UUID, *, stage: ProtocolStage | None = None
    ) -> list[ProtocolRule]:
        """List a studio's rules ordered by display order.

        Args:
            studio_id: Requesting studio.
            stage: Optional stage filter.

        Returns:
            Rules (empty list if none).
        """
        ...

    async def save(self, rule: ProtocolRule) -> None:
        """Create or update rule."""
        ...

    async def delete(self, rule_id: UUID, studio_id: UUID) -> bool:
        """Delete rule.

        Returns:
            True if a row was deleted.
        """
        ...
