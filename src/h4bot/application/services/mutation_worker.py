"""Applies one rename to one member."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

from ...domain.nicknames.entities import Member, MutationOutcome
from ...domain.nicknames.value_objects import SkipReason
from ...domain.shared.exceptions import MemberUpdateError
from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ...domain.nicknames.pool import NamePool
    from ..interfaces.member_gateway import MemberGateway

logger = logging.getLogger(__name__)


class MutationWorker:
    """Draws a label and issues a single rename call for one member.

    Per-member rejections become ``FAILED`` outcomes. Anything else is a
    structural failure and propagates to the caller.
    """

    def __init__(self, *, member_gateway: MemberGateway) -> None:
        self._gateway = member_gateway

    async def run(
        self,
        guild_id: int,
        member: Member,
        pool: NamePool,
        protected: Collection[int],
    ) -> MutationOutcome:
        if member.id in protected:
            logger.debug(LogTemplates.MEMBER_SKIPPED, member.id, guild_id)
            return MutationOutcome.skipped(member.id, SkipReason.PROTECTED)

        label = await pool.draw()
        try:
            await self._gateway.rename_member(guild_id, member.id, label)
        except MemberUpdateError as e:
            logger.warning(LogTemplates.MEMBER_RENAME_FAILED, member.id, guild_id, e.message)
            return MutationOutcome.failed(member.id, e.message, error_code=e.code, label=label)

        logger.info(LogTemplates.MEMBER_RENAMED, member.id, guild_id, label)
        return MutationOutcome.succeeded(member.id, label)
