"""Latency, platform status and week number commands."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from h4bot.domain.shared.constants import ExternalUrls
from h4bot.domain.shared.messages import DiscordUIMessages, ErrorMessages
from h4bot.infrastructure.discord.guards.voice_guards import send_ephemeral
from h4bot.infrastructure.http.discord_status import DiscordStatus, StatusUnavailableError
from h4bot.infrastructure.http.week_number import WeekData, WeekUnavailableError
from h4bot.utils.reply import latency_emoji, latency_ms

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


def build_status_embed(status: DiscordStatus) -> discord.Embed:
    color = discord.Color.green() if status.is_operational else discord.Color.orange()
    embed = discord.Embed(
        title=DiscordUIMessages.EMBED_STATUS_TITLE.format(page_name=status.page.name),
        description=DiscordUIMessages.EMBED_STATUS_DESCRIPTION.format(
            description=status.status.description
        ),
        url=status.page.url or ExternalUrls.DISCORD_STATUS_PAGE,
        color=color,
    )
    if status.page.updated_at:
        embed.set_footer(text=f"Updated {status.page.updated_at}")
    return embed


def build_week_embed(data: WeekData) -> discord.Embed:
    return discord.Embed(
        title=DiscordUIMessages.EMBED_WEEK_TITLE.format(week=data.week),
        url=ExternalUrls.WEEK_NUMBER_PAGE,
    )


class LatencyCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @app_commands.command(name="ping", description="Round-trip latency to Discord.")
    async def ping(self, interaction: discord.Interaction) -> None:
        started = time.perf_counter()
        await interaction.response.send_message("Pong!")
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 1)

        await interaction.edit_original_response(
            content=DiscordUIMessages.SUCCESS_PONG.format(
                emoji=latency_emoji(elapsed_ms), latency_ms=elapsed_ms
            )
        )

    @app_commands.command(name="shard_ping", description="Gateway latency of this shard.")
    async def shard_ping(self, interaction: discord.Interaction) -> None:
        shard_id = interaction.guild.shard_id if interaction.guild else 0
        latencies = dict(self.bot.latencies)

        ms = latency_ms(latencies.get(shard_id))
        if ms is None:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NO_SHARD)
            return

        await interaction.response.send_message(
            DiscordUIMessages.SUCCESS_SHARD_PONG.format(shard_id=shard_id, latency_ms=ms)
        )

    @app_commands.command(name="status", description="Discord platform status.")
    async def status(self, interaction: discord.Interaction) -> None:
        await interaction.response.defer(ephemeral=True, thinking=True)

        try:
            status = await self.container.status_client.fetch()
        except StatusUnavailableError:
            await interaction.followup.send(DiscordUIMessages.ERROR_STATUS_UNAVAILABLE, ephemeral=True)
            return

        await interaction.followup.send(embed=build_status_embed(status), ephemeral=True)

    @app_commands.command(name="get_week", description="Current ISO week number.")
    async def get_week(self, interaction: discord.Interaction) -> None:
        await interaction.response.defer(ephemeral=True, thinking=True)

        try:
            data = await self.container.week_client.fetch()
        except WeekUnavailableError:
            await interaction.followup.send(DiscordUIMessages.ERROR_WEEK_UNAVAILABLE, ephemeral=True)
            return

        await interaction.followup.send(embed=build_week_embed(data), ephemeral=True)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(LatencyCog(bot, container))
