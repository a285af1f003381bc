from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import discord
from discord import app_commands
from discord.ext import commands

from summarybot.errors import ErrorKind, HistoryFetchError
from summarybot.summarization import Period, build_summary_prompt, fetch_channel_logs
from summarybot.utils.discord_utils import chunk_text, is_guild_text_channel

if TYPE_CHECKING:
    from summarybot.llm_client import LLMClient

logger = logging.getLogger(__name__)

PERIOD_CHOICES: list[app_commands.Choice[str]] = [
    app_commands.Choice(name=period.label, value=period.value) for period in Period
]


class Summarize(commands.Cog):
    """``/summarize`` reads a member's activity channel and asks the model for a review.

    The reply is deferred first because walking a long channel history and
    waiting on the model easily takes longer than Discord's 3 second window.
    """

    WRONG_CHANNEL_MESSAGE: str = "このコマンドはテキストチャンネルでのみ使用できます。"
    FAILED_MESSAGE: str = "要約中にエラーが発生しました。"

    def __init__(
        self,
        bot: commands.Bot,
        *,
        llm: LLMClient,
        max_pages: Optional[int] = None,
    ) -> None:
        self.bot = bot
        self.llm = llm
        self.max_pages = max_pages

    @app_commands.command(
        name="summarize",
        description="チャンネルの内容を要約します。個別チャンネルで振り返りを行うことを想定しています。",
    )
    @app_commands.describe(period="要約する期間を指定してください。")
    @app_commands.choices(period=PERIOD_CHOICES)
    async def summarize(self, interaction: discord.Interaction, period: str) -> None:
        await self.run_summary(interaction, period)

    async def run_summary(self, interaction: discord.Interaction, period: str) -> None:
        """Defer, fetch the transcript, ask the model and edit the deferred reply."""
        channel = interaction.channel
        try:
            selected = Period.parse(period)
            if not is_guild_text_channel(channel):
                await interaction.response.send_message(self.WRONG_CHANNEL_MESSAGE)
                return

            await interaction.response.defer()
            log = await fetch_channel_logs(channel, selected, max_pages=self.max_pages)
            prompt = build_summary_prompt(log, selected)

            summary = await self.llm.ask(prompt)
            await self._deliver(interaction, summary)
        except HistoryFetchError:
            logger.exception("History fetch failed while summarizing channel %s", getattr(channel, "id", None))
            await self._report_failure(interaction)
        except Exception:
            logger.exception("Summarize failed in channel %s", getattr(channel, "id", None))
            await self._report_failure(interaction)

    async def _deliver(self, interaction: discord.Interaction, text: str) -> None:
        chunks = chunk_text(text) or [ErrorKind.MODEL_CALL.message]
        await interaction.edit_original_response(content=chunks[0])
        for chunk in chunks[1:]:
            await interaction.followup.send(chunk)

    async def _report_failure(self, interaction: discord.Interaction) -> None:
        try:
            if interaction.response.is_done():
                await interaction.edit_original_response(content=self.FAILED_MESSAGE)
            else:
                await interaction.response.send_message(self.FAILED_MESSAGE)
        except discord.HTTPException:
            logger.exception("Could not report summarize failure")


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(Summarize(bot, llm=bot.llm, max_pages=bot.settings.history_max_pages))
