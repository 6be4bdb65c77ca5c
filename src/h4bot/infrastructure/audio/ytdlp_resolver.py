"""AudioResolver implementation using yt-dlp for URL resolution."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Final, cast
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator
from yt_dlp import YoutubeDL
from yt_dlp.utils import DownloadError

from h4bot.application.interfaces.audio_resolver import AudioResolver
from h4bot.config.settings import AudioSettings
from h4bot.domain.music.entities import Track
from h4bot.domain.music.value_objects import TrackId
from h4bot.domain.shared.exceptions import ResolutionError
from h4bot.domain.shared.messages import LogTemplates
from h4bot.domain.shared.types import HttpUrlStr, NonEmptyStr, NonNegativeInt, PositiveInt

logger = logging.getLogger(__name__)

DEFAULT_RETRIES: Final[int] = 3
DEFAULT_SOCKET_TIMEOUT: Final[int] = 10
MAX_TITLE_LENGTH: Final[int] = 500

URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^https?://\S+$")


class AudioFormatInfo(BaseModel):
    """A single audio format entry from yt-dlp extraction."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: NonEmptyStr | None = None
    acodec: NonEmptyStr | None = None


class YtDlpTrackInfo(BaseModel):
    """Trimmed yt-dlp extraction result.

    Extra fields from yt-dlp are ignored. Before-validators coerce garbage
    from external data to ``None`` instead of failing the whole track.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    webpage_url: HttpUrlStr | None = None
    url: NonEmptyStr | None = None
    title: NonEmptyStr = "Unknown Title"
    duration: NonNegativeInt | None = None
    thumbnail: HttpUrlStr | None = None
    uploader: NonEmptyStr | None = None
    channel: NonEmptyStr | None = None
    formats: list[AudioFormatInfo] = Field(default_factory=list)

    @field_validator("url", "uploader", "channel", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    @field_validator("webpage_url", "thumbnail", mode="before")
    @classmethod
    def _coerce_non_http_to_none(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not URL_PATTERN.match(v):
            return None
        return v

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            return "Unknown Title"
        return v[:MAX_TITLE_LENGTH]

    @field_validator("duration", mode="before")
    @classmethod
    def _coerce_duration(cls, v: Any) -> int | None:
        if v is None:
            return None
        try:
            val = int(v)
        except (TypeError, ValueError):
            return None
        return val if 0 <= val <= 86_400 else None

    @property
    def stream_url(self) -> str | None:
        if self.url and URL_PATTERN.match(self.url):
            return self.url
        audio = [
            f.url
            for f in self.formats
            if f.acodec != "none" and f.url and URL_PATTERN.match(f.url)
        ]
        return audio[-1] if audio else None


class YtDlpOpts(BaseModel):
    """Typed yt-dlp configuration options passed to YoutubeDL."""

    model_config = ConfigDict(frozen=True)

    quiet: bool = True
    noprogress: bool = True
    noplaylist: bool = True
    forceipv4: bool = True
    retries: PositiveInt = DEFAULT_RETRIES
    socket_timeout: PositiveInt = DEFAULT_SOCKET_TIMEOUT
    format: NonEmptyStr | None = None
    skip_download: bool = True


class YtDlpResolver(AudioResolver):

    def __init__(self, settings: AudioSettings | None = None) -> None:
        self._settings = settings or AudioSettings()
        self._opts = YtDlpOpts(format=self._settings.ytdlp_format or "bestaudio/best")

    def _info_to_track(self, info: YtDlpTrackInfo, source_ref: str) -> Track | None:
        webpage_url = info.webpage_url or source_ref
        stream_url = info.stream_url
        if not stream_url:
            logger.warning(LogTemplates.YTDLP_NO_STREAM_URL, info.title)
            return None

        return Track(
            id=TrackId.from_url(webpage_url),
            title=info.title,
            webpage_url=webpage_url,
            stream_url=stream_url,
            duration_seconds=info.duration,
            thumbnail_url=info.thumbnail,
            author=info.uploader or info.channel,
        )

    def _extract_info_sync(self, url: str) -> YtDlpTrackInfo | None:
        with YoutubeDL(params=cast(Any, self._opts.model_dump())) as ydl:
            data = ydl.extract_info(url, download=False)
        if not isinstance(data, dict):
            return None
        return YtDlpTrackInfo.model_validate(dict(data))

    async def resolve(self, source_ref: str) -> Track | None:
        try:
            info = await asyncio.to_thread(self._extract_info_sync, source_ref)
        except DownloadError as e:
            logger.warning(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, source_ref)
            raise ResolutionError(source_ref, f"Could not extract audio: {e}") from e

        if info is None:
            logger.warning(LogTemplates.YTDLP_NO_URL_IN_INFO_DICT)
            return None
        return self._info_to_track(info, source_ref)

    def is_url(self, source_ref: str) -> bool:
        """Accept only absolute http(s) URLs with a host."""
        source_ref = source_ref.strip()
        if URL_PATTERN.match(source_ref) is None:
            return False
        return bool(urlparse(source_ref).netloc)
