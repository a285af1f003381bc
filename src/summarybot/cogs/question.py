from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import discord
from discord.ext import commands

from summarybot.errors import ErrorKind
from summarybot.summarization import build_question_prompt
from summarybot.utils.discord_utils import chunk_text

if TYPE_CHECKING:
    from summarybot.llm_client import LLMClient

logger = logging.getLogger(__name__)


class QuestionChannel(commands.Cog):
    """Answer questions that mention the bot in the designated question channel.

    Messages from other bots are ignored so two bots cannot talk each other
    into a loop.
    """

    def __init__(
        self,
        bot: commands.Bot,
        *,
        llm: LLMClient,
        channel_id: Optional[int],
    ) -> None:
        """Initialize the QuestionChannel cog.

        Args:
            bot: The Discord bot instance.
            llm: Client used to ask the model.
            channel_id: The question channel. If None, the cog never replies.
        """
        self.bot = bot
        self.llm = llm
        self.channel_id = channel_id

        logger.info("QuestionChannel initialized: channel_id=%s", self.channel_id)

    # Message filtering

    def _is_target_channel(self, message: discord.Message) -> bool:
        if self.channel_id is None:
            return False
        return getattr(message.channel, "id", None) == self.channel_id

    def _mentions_bot(self, message: discord.Message) -> bool:
        """Check for a direct mention, a mention of one of the bot's roles, or @everyone.

        Picking the bot from autocomplete often inserts its managed role
        instead of the user, so role mentions count as well.
        """
        me = self.bot.user
        if me is None:
            return False
        if any(user.id == me.id for user in message.mentions):
            return True
        if message.mention_everyone:
            return True

        member = message.guild.me if message.guild is not None else None
        if member is None or not message.role_mentions:
            return False
        my_role_ids = {role.id for role in member.roles}
        return any(role.id in my_role_ids for role in message.role_mentions)

    def _should_respond(self, message: discord.Message) -> bool:
        """Determine if the bot should answer a message.

        Args:
            message: Discord message to evaluate.

        Returns:
            True if the message is in the question channel, mentions the bot
            and was written by a human.
        """
        if message.author.bot:
            return False
        if not self._is_target_channel(message):
            return False
        return self._mentions_bot(message)

    # Event listeners

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        if not self._should_respond(message):
            return

        try:
            prompt = build_question_prompt(message.content)
            logger.info("thinking... (message %s in channel %s)", message.id, message.channel.id)
            reply = await self.llm.ask(prompt)

            chunks = chunk_text(reply)
            if not chunks:
                return
            await message.reply(chunks[0])
            for chunk in chunks[1:]:
                await message.channel.send(chunk)
        except Exception:
            logger.exception("Failed to answer question %s", message.id)
            try:
                await message.reply(ErrorKind.UNEXPECTED.message)
            except discord.HTTPException:
                logger.exception("Could not report failure for question %s", message.id)


async def setup(bot: commands.Bot) -> None:
    settings = bot.settings
    await bot.add_cog(QuestionChannel(bot, llm=bot.llm, channel_id=settings.question_channel_id))
