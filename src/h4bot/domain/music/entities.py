"""Core domain entities for the music bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from h4bot.domain.music.value_objects import TrackId
from h4bot.domain.shared.datetime_utils import utcnow
from h4bot.domain.shared.types import (
    ChannelIdField,
    DiscordSnowflake,
    DurationSeconds,
    HttpUrlStr,
    NonEmptyStr,
    TrackTitleStr,
    UtcDatetimeField,
)


class Track(BaseModel):
    """Immutable value object representing a playable track."""

    model_config = ConfigDict(frozen=True, strict=True)

    id: TrackId
    title: TrackTitleStr
    webpage_url: HttpUrlStr
    stream_url: HttpUrlStr | None = None
    duration_seconds: DurationSeconds | None = None
    thumbnail_url: HttpUrlStr | None = None
    author: NonEmptyStr | None = None

    requested_by_id: DiscordSnowflake | None = None

    @property
    def duration_formatted(self) -> str:
        """Format duration as MM:SS or HH:MM:SS."""
        if self.duration_seconds is None:
            return "Unknown"

        hours, remainder = divmod(self.duration_seconds, 3600)
        minutes, seconds = divmod(remainder, 60)

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    def with_requester(self, user_id: DiscordSnowflake) -> Track:
        """Return a copy of this track tagged with who asked for it."""
        return self.model_copy(update={"requested_by_id": user_id})


class PlaybackQueue(BaseModel):
    """Ordered tracks for one voice session.

    Index 0 is the track currently playing once playback has started. Front
    inserts go to index 1 so they never displace it. Callers serialize access
    per guild.
    """

    model_config = ConfigDict(strict=True)

    tracks: list[Track] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tracks)

    def length(self) -> int:
        return len(self.tracks)

    @property
    def is_empty(self) -> bool:
        return not self.tracks

    @property
    def upcoming(self) -> list[Track]:
        return list(self.tracks[1:])

    def append(self, track: Track) -> int:
        """Add to the tail; returns the new length."""
        self.tracks.append(track)
        return len(self.tracks)

    def insert_after_head(self, track: Track) -> int:
        """Queue a track to play next; returns the new length."""
        if not self.tracks:
            return self.append(track)
        self.tracks.insert(1, track)
        return len(self.tracks)

    def peek_head(self) -> Track | None:
        return self.tracks[0] if self.tracks else None

    def advance(self) -> Track | None:
        """Drop the finished head and return the new one, if any."""
        if self.tracks:
            self.tracks.pop(0)
        return self.peek_head()

    def clear(self) -> int:
        removed = len(self.tracks)
        self.tracks.clear()
        return removed


class VoiceSession(BaseModel):
    """A guild's binding to one voice channel plus its playback queue."""

    model_config = ConfigDict(strict=True)

    guild_id: DiscordSnowflake
    channel_id: ChannelIdField
    queue: PlaybackQueue = Field(default_factory=PlaybackQueue)
    created_at: UtcDatetimeField = Field(default_factory=utcnow)

    @property
    def now_playing(self) -> Track | None:
        return self.queue.peek_head()

    def is_bound_to(self, channel_id: int) -> bool:
        return self.channel_id == channel_id

    def rebind(self, channel_id: int) -> None:
        """Follow the bot into another channel, keeping the queue."""
        self.channel_id = channel_id
