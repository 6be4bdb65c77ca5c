"""Command and handler for renaming a random subset of guild members."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ...domain.nicknames.entities import BatchResult
from ...domain.nicknames.value_objects import SelectionPolicy
from ...domain.shared.constants import LimitConstants, NicknameConstants
from ...domain.shared.exceptions import MemberGatewayError
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import DiscordSnowflake, MemberFetchLimit, NonEmptyStr

if TYPE_CHECKING:
    from ..interfaces.member_gateway import MemberGateway
    from ..services.batch_coordinator import BatchCoordinator

logger = logging.getLogger(__name__)


class RenameMembersCommand(BaseModel):
    """Request to rename members of a guild.

    With ``target_id`` set only that member is renamed and ``policy`` is ignored.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    guild_id: DiscordSnowflake
    invoker_id: DiscordSnowflake
    policy: SelectionPolicy = SelectionPolicy.SINGLE
    target_id: DiscordSnowflake | None = None


class RenameMembersHandler:
    """Lists members, builds the protected set and hands the batch to the coordinator."""

    def __init__(
        self,
        *,
        member_gateway: MemberGateway,
        batch_coordinator: BatchCoordinator,
        labels: tuple[NonEmptyStr, ...] = NicknameConstants.DEFAULT_LABELS,
        protected_ids: frozenset[int] = frozenset(),
        member_fetch_limit: MemberFetchLimit = LimitConstants.MEMBER_FETCH_LIMIT,
    ) -> None:
        self._gateway = member_gateway
        self._coordinator = batch_coordinator
        self._labels = labels
        self._protected_ids = protected_ids
        self._fetch_limit = member_fetch_limit

    async def handle(self, command: RenameMembersCommand) -> BatchResult:
        try:
            members = await self._gateway.list_members(command.guild_id, self._fetch_limit)
        except MemberGatewayError as e:
            logger.error(LogTemplates.MEMBER_LIST_FAILED, command.guild_id, e.message)
            raise

        protected = {command.invoker_id, *self._protected_ids}
        protected.update(m.id for m in members if not m.mutable)

        candidates = members
        policy = command.policy
        if command.target_id is not None:
            candidates = [m for m in members if m.id == command.target_id]
            policy = SelectionPolicy.ALL

        return await self._coordinator.run_batch(
            command.guild_id,
            candidates,
            policy,
            self._labels,
            protected,
        )
