"""
Application Commands (CQRS Write Side)

Command objects, their handlers and result models.
"""

from h4bot.application.commands.join_voice import JoinResult, JoinStatus
from h4bot.application.commands.play_track import PlayTrackResult, PlayTrackStatus
from h4bot.application.commands.rename_members import (
    RenameMembersCommand,
    RenameMembersHandler,
)

__all__ = [
    # Rename
    "RenameMembersCommand",
    "RenameMembersHandler",
    # Play
    "PlayTrackResult",
    "PlayTrackStatus",
    # Join
    "JoinResult",
    "JoinStatus",
]
