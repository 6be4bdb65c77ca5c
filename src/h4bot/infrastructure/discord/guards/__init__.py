"""Interaction guard functions for Discord cogs."""

from h4bot.infrastructure.discord.guards.voice_guards import (
    ensure_user_in_voice,
    get_member,
    send_ephemeral,
    send_reply,
)

__all__ = [
    "ensure_user_in_voice",
    "get_member",
    "send_ephemeral",
    "send_reply",
]
