"""Outcome types for play requests."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from ...domain.music.entities import Track
from ...domain.shared.types import NonNegativeInt


class PlayTrackStatus(Enum):
    """Status codes for play track results."""

    STARTED_PLAYING = "started_playing"
    QUEUED = "queued"
    INVALID_SOURCE = "invalid_source"
    RESOLUTION_ERROR = "resolution_error"
    NOT_IN_VOICE = "not_in_voice"
    CHANNEL_MISMATCH = "channel_mismatch"
    VOICE_ERROR = "voice_error"


class PlayTrackResult(BaseModel):
    """Result of a play request."""

    model_config = ConfigDict(frozen=True, strict=True)

    status: PlayTrackStatus
    message: str
    track: Track | None = None
    queue_position: NonNegativeInt | None = None
    queue_length: NonNegativeInt = 0

    @property
    def is_success(self) -> bool:
        return self.status in {PlayTrackStatus.STARTED_PLAYING, PlayTrackStatus.QUEUED}

    @property
    def started_playing(self) -> bool:
        return self.status is PlayTrackStatus.STARTED_PLAYING

    @classmethod
    def playing(cls, track: Track, queue_length: int) -> PlayTrackResult:
        return cls(
            status=PlayTrackStatus.STARTED_PLAYING,
            message=f"Now playing: {track.title}",
            track=track,
            queue_position=0,
            queue_length=queue_length,
        )

    @classmethod
    def queued(cls, track: Track, position: int, queue_length: int) -> PlayTrackResult:
        return cls(
            status=PlayTrackStatus.QUEUED,
            message=f"Added to queue: {track.title} (position {position})",
            track=track,
            queue_position=position,
            queue_length=queue_length,
        )

    @classmethod
    def error(cls, status: PlayTrackStatus, message: str) -> PlayTrackResult:
        return cls(status=status, message=message)
