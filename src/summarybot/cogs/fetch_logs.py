from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from discord.ext import commands

from summarybot.errors import ErrorKind, HistoryFetchError
from summarybot.summarization import fetch_all_messages
from summarybot.utils.discord_utils import is_guild_text_channel

if TYPE_CHECKING:
    import discord

logger = logging.getLogger(__name__)


class FetchLogs(commands.Cog):
    """Dump a channel's whole history when someone types ``!fetchLogs``.

    The dump is not stored anywhere; the bot only reports how many messages it
    read. Useful for checking that the bot can see a channel's history.
    """

    TRIGGER: str = "!fetchLogs"
    DONE_MESSAGE: str = "過去ログを取得しました！ メッセージ数: {count}"
    FAILED_MESSAGE: str = ErrorKind.HISTORY_FETCH.message
    WRONG_CHANNEL_MESSAGE: str = ErrorKind.WRONG_CHANNEL.message

    def __init__(self, bot: commands.Bot, *, max_pages: Optional[int] = None) -> None:
        self.bot = bot
        self.max_pages = max_pages

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        if message.content != self.TRIGGER:
            return

        try:
            if not is_guild_text_channel(message.channel):
                await message.reply(self.WRONG_CHANNEL_MESSAGE)
                return

            logs = await fetch_all_messages(message.channel, max_pages=self.max_pages)
            logger.info("Fetched %d messages from channel %s", len(logs), message.channel.id)
            await message.reply(self.DONE_MESSAGE.format(count=len(logs)))
        except HistoryFetchError:
            logger.exception("History fetch failed for channel %s", message.channel.id)
            await message.reply(self.FAILED_MESSAGE)
        except Exception:
            logger.exception("Unexpected error handling %s in channel %s", self.TRIGGER, message.channel.id)
            await message.reply(self.FAILED_MESSAGE)


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(FetchLogs(bot, max_pages=bot.settings.history_max_pages))
