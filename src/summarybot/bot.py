"""Bot construction shared by the runtime entry point and command registration."""

from __future__ import annotations

import logging
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from summarybot.errors import ErrorKind, classify
from summarybot.llm_client import LLMClient
from summarybot.settings import Settings
from summarybot.text_generators import get_text_generator

logger = logging.getLogger(__name__)

EXTENSIONS: tuple[str, ...] = (
    "summarybot.cogs.general",
    "summarybot.cogs.fetch_logs",
    "summarybot.cogs.question",
    "summarybot.cogs.summarize",
)


def default_intents() -> discord.Intents:
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    return intents


class SummaryCommandTree(app_commands.CommandTree):
    """Command tree that answers failed slash commands instead of going silent.

    Unknown or stale commands are logged and otherwise ignored.
    """

    async def on_error(
        self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        kind = classify(error)
        command = interaction.command.name if interaction.command else None
        if not kind.user_visible:
            logger.info("Ignoring slash command error (kind=%s): %s", kind.label, error)
            return
        logger.error(
            "Unhandled error in slash command %s (kind=%s)",
            command,
            kind.label,
            exc_info=error,
        )
        message = ErrorKind.UNEXPECTED.message
        try:
            if interaction.response.is_done():
                await interaction.followup.send(message)
            else:
                await interaction.response.send_message(message)
        except discord.HTTPException:
            logger.exception("Could not report error for slash command %s", command)


class SummaryBot(commands.Bot):
    """Bot holding the settings and model client its cogs share.

    Prefix commands are never processed: plain-text triggers are exact matches
    handled by cog listeners.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        llm: Optional[LLMClient] = None,
        intents: Optional[discord.Intents] = None,
    ) -> None:
        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents if intents is not None else default_intents(),
            help_command=None,
            tree_cls=SummaryCommandTree,
        )
        self.settings = settings
        if llm is None:
            generator = get_text_generator("gemini", settings.gemini_model, api_key=settings.gemini_api_key)
            llm = LLMClient(generator)
        self.llm = llm

    async def setup_hook(self) -> None:
        for name in EXTENSIONS:
            # Avoid double-loading across crash/retry loops
            if name in self.extensions:
                continue
            await self.load_extension(name)

    async def on_ready(self) -> None:
        logger.info("Logged in as %s (ID: %s)", self.user, getattr(self.user, "id", None))
        logger.info("Loaded cogs: %s", list(self.cogs.keys()))

    async def on_message(self, message: discord.Message) -> None:
        logger.info("Received message: %s, %s", message.channel.id, message.content[:120])
