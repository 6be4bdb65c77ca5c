"""Discord cogs - command handlers."""

from h4bot.infrastructure.discord.cogs.fun_cog import FunCog
from h4bot.infrastructure.discord.cogs.latency_cog import LatencyCog
from h4bot.infrastructure.discord.cogs.music_cog import MusicCog

__all__ = [
    "FunCog",
    "MusicCog",
    "LatencyCog",
]
