"""In-memory implementation of the session repository.

Sessions live only as long as the process; nothing survives a restart.
"""

from __future__ import annotations

import logging

from h4bot.domain.music.entities import VoiceSession
from h4bot.domain.music.repository import SessionRepository
from h4bot.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class InMemorySessionRepository(SessionRepository):
    def __init__(self) -> None:
        self._sessions: dict[int, VoiceSession] = {}

    async def get(self, guild_id: int) -> VoiceSession | None:
        return self._sessions.get(guild_id)

    async def create(self, guild_id: int, channel_id: int) -> VoiceSession:
        session = VoiceSession(guild_id=guild_id, channel_id=channel_id)
        self._sessions[guild_id] = session
        logger.info(LogTemplates.SESSION_CREATED, guild_id, channel_id)
        return session

    async def delete(self, guild_id: int) -> bool:
        removed = self._sessions.pop(guild_id, None) is not None
        if removed:
            logger.info(LogTemplates.SESSION_DELETED, guild_id)
        return removed

    async def exists(self, guild_id: int) -> bool:
        return guild_id in self._sessions

    async def all(self) -> list[VoiceSession]:
        return list(self._sessions.values())
