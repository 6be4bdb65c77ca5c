"""Utility functions for formatting Discord messages."""

from __future__ import annotations

import math
from functools import cache
from typing import TYPE_CHECKING

from h4bot.domain.shared.messages import DiscordUIMessages, EmojiConstants

if TYPE_CHECKING:
    from h4bot.domain.nicknames.entities import BatchResult

LATENCY_OK_MS = 200
LATENCY_WARN_MS = 800


@cache
def format_duration(seconds: int | float | None) -> str:
    if seconds is None:
        return "–"

    total_seconds = int(seconds)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


@cache
def truncate(text: str, max_length: int = 90) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"


def latency_ms(seconds: float | None) -> float | None:
    """Convert a discord.py latency (seconds, possibly inf/nan) to milliseconds."""
    if seconds is None or not math.isfinite(seconds):
        return None
    return round(seconds * 1000.0, 1)


def latency_emoji(ms: float) -> str:
    if ms < LATENCY_OK_MS:
        return EmojiConstants.LATENCY_OK
    if ms < LATENCY_WARN_MS:
        return EmojiConstants.LATENCY_WARN
    return EmojiConstants.LATENCY_BAD


def format_rename_summary(result: BatchResult, *, note: str | None = None) -> str:
    """Render a rename batch as a reply: renamed mentions first, then skip/fail counts."""
    lines: list[str] = []
    if note:
        lines.append(note)

    if result.succeeded:
        lines.append(DiscordUIMessages.SUCCESS_RENAMED.format(mentions=", ".join(result.mentions)))
    elif not result.skipped and not result.failed:
        lines.append(DiscordUIMessages.STATE_NOBODY_TO_RENAME)

    if result.skipped:
        lines.append(DiscordUIMessages.RENAME_SUMMARY_SKIPPED.format(count=result.skipped))
    if result.failed:
        lines.append(DiscordUIMessages.RENAME_SUMMARY_FAILED.format(count=result.failed))
    return "\n".join(lines)
