"""Nickname defaults, limits and external URLs shared across layers."""

from __future__ import annotations


class NicknameConstants:
    """Defaults for the batch rename feature."""

    DEFAULT_LABELS: tuple[str, ...] = (
        "tokhme",
        "balls",
        "rocks",
        "nuts",
        "testicles",
        "family jewels",
        "bollocks",
        "ballocks",
        "cullions",
        "jewels",
        "orbs",
        "gonads",
    )
    FALLBACK_LABEL = "balls"
    MULTIPLE_MIN_COUNT = 3
    MAX_NICKNAME_LENGTH = 32


class LimitConstants:
    """Size and time limits applied at the Discord edge."""

    MEMBER_FETCH_LIMIT = 1000
    VOICE_CONNECT_TIMEOUT = 10.0
    STATUS_HTTP_TIMEOUT = 10.0
    QUEUE_EMBED_MAX_TRACKS = 10
    COMMAND_COOLDOWN_RATE = 1
    COMMAND_COOLDOWN_SECONDS = 5.0


class ExternalUrls:
    """Third-party endpoints."""

    DISCORD_STATUS_API = "https://discordstatus.com/api/v2/status.json"
    DISCORD_STATUS_PAGE = "https://discordstatus.com"
    WEEK_NUMBER_API = "https://vecka.nu/"
    WEEK_NUMBER_PAGE = "https://vecka.nu"
