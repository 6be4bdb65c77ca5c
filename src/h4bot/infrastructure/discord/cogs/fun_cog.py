"""Slash-command cog for the fun commands: greeting and batch renames."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from h4bot.application.commands.rename_members import RenameMembersCommand
from h4bot.domain.nicknames.value_objects import SelectionPolicy
from h4bot.domain.shared.constants import LimitConstants
from h4bot.domain.shared.exceptions import DomainError
from h4bot.domain.shared.messages import DiscordUIMessages, ErrorMessages
from h4bot.infrastructure.discord.guards.voice_guards import get_member, send_ephemeral
from h4bot.utils.reply import format_rename_summary

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)

POLICY_CHOICES = [
    app_commands.Choice(name=policy.display_name, value=policy.value) for policy in SelectionPolicy
]


class FunCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @app_commands.command(name="hello", description="Replies with hi!")
    async def hello(self, interaction: discord.Interaction) -> None:
        await interaction.response.send_message(DiscordUIMessages.SUCCESS_HELLO)

    @app_commands.command(name="balls", description="Balls people!!!")
    @app_commands.describe(
        choice="How many people to balls",
        specific="Balls one specific member (used when no choice is given)",
    )
    @app_commands.choices(choice=POLICY_CHOICES)
    @app_commands.guild_only()
    @app_commands.checks.cooldown(
        LimitConstants.COMMAND_COOLDOWN_RATE,
        LimitConstants.COMMAND_COOLDOWN_SECONDS,
        key=lambda i: i.guild_id,
    )
    async def balls(
        self,
        interaction: discord.Interaction,
        choice: app_commands.Choice[str] | None = None,
        specific: discord.Member | None = None,
    ) -> None:
        invoker = await get_member(interaction)
        if invoker is None:
            return

        assert interaction.guild is not None

        note: str | None = None
        target_id: int | None = None
        if choice is not None:
            policy = SelectionPolicy(choice.value)
        elif specific is not None:
            policy = SelectionPolicy.ALL
            target_id = specific.id
        else:
            policy = SelectionPolicy.SINGLE
            note = DiscordUIMessages.STATE_INVALID_TARGET

        await interaction.response.defer(thinking=True)

        command = RenameMembersCommand(
            guild_id=interaction.guild.id,
            invoker_id=invoker.id,
            policy=policy,
            target_id=target_id,
        )
        try:
            result = await self.container.rename_members_handler.handle(command)
        except DomainError as e:
            await send_ephemeral(interaction, DiscordUIMessages.ERROR_OCCURRED.format(error=e.message))
            return

        await interaction.followup.send(
            format_rename_summary(result, note=note),
            allowed_mentions=discord.AllowedMentions.none(),
        )


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(FunCog(bot, container))
