"""One-shot registration of the bot's slash commands.

Run ``python -m summarybot.register`` after changing a command's schema.
With GUILD_ID set the commands are synced to that guild only (they show up
immediately); otherwise they are synced globally.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import discord
from discord.ext import commands

from summarybot.cogs.general import General
from summarybot.cogs.summarize import Summarize
from summarybot.errors import ConfigError
from summarybot.llm_client import LLMClient
from summarybot.settings import registration_settings
from summarybot.text_generators import GeminiTextGenerator

logger = logging.getLogger(__name__)


class CommandRegistrar(commands.Bot):
    """Bot that only logs in over HTTP, syncs the command tree and exits."""

    def __init__(self, guild_id: Optional[int] = None) -> None:
        super().__init__(command_prefix=commands.when_mentioned, intents=discord.Intents.none(), help_command=None)
        self.guild_id = guild_id
        self.synced: list[discord.app_commands.AppCommand] = []

    async def add_command_cogs(self) -> None:
        await self.add_cog(General(self))
        # The model is never called while registering, so no API key is needed.
        await self.add_cog(Summarize(self, llm=LLMClient(GeminiTextGenerator())))

    async def setup_hook(self) -> None:
        await self.add_command_cogs()
        if self.guild_id is None:
            self.synced = await self.tree.sync()
        else:
            guild = discord.Object(id=self.guild_id)
            self.tree.copy_global_to(guild=guild)
            self.synced = await self.tree.sync(guild=guild)
        logger.info(
            "registration succeed! %s -> %s",
            [cmd.name for cmd in self.synced],
            f"guild {self.guild_id}" if self.guild_id is not None else "global",
        )


async def register(token: str, guild_id: Optional[int] = None) -> list[discord.app_commands.AppCommand]:
    """Sync the command schemas and return what Discord now has registered."""
    bot = CommandRegistrar(guild_id)
    async with bot:
        await bot.login(token)
    return bot.synced


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    try:
        token, guild_id = registration_settings()
    except ConfigError as e:
        logger.error("Discord トークンが設定されていません。 (%s)", e)
        raise SystemExit(1) from e

    try:
        asyncio.run(register(token, guild_id))
    except discord.HTTPException:
        logger.exception("Error during command registration")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
