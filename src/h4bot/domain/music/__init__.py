"""Music bounded context: tracks, the playback queue and voice sessions."""

from h4bot.domain.music.entities import PlaybackQueue, Track, VoiceSession
from h4bot.domain.music.value_objects import TrackId

__all__ = ["Track", "TrackId", "PlaybackQueue", "VoiceSession"]
