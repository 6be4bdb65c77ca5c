"""Query for retrieving the current queue."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ...domain.music.entities import Track
from ...domain.shared.types import DiscordSnowflake, NonNegativeInt

if TYPE_CHECKING:
    from ...domain.music.repository import SessionRepository


class GetQueueQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake


class QueueInfo(BaseModel):

    guild_id: DiscordSnowflake
    current_track: Track | None = None
    upcoming: list[Track] = Field(default_factory=list)
    total_duration: NonNegativeInt | None = None
    session_started_at: datetime | None = None

    @property
    def length(self) -> int:
        return len(self.upcoming) + (1 if self.current_track is not None else 0)

    @property
    def is_empty(self) -> bool:
        return self.length == 0


class GetQueueHandler:

    def __init__(self, *, session_repository: SessionRepository) -> None:
        self._session_repo = session_repository

    async def handle(self, query: GetQueueQuery) -> QueueInfo:
        session = await self._session_repo.get(query.guild_id)

        if session is None:
            return QueueInfo(guild_id=query.guild_id, total_duration=0)

        tracks = session.queue.tracks
        total_duration = sum(
            t.duration_seconds for t in tracks if t.duration_seconds is not None
        )

        return QueueInfo(
            guild_id=query.guild_id,
            current_track=session.queue.peek_head(),
            upcoming=session.queue.upcoming,
            total_duration=total_duration,
            session_started_at=session.created_at,
        )
