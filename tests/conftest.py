"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest


NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class FakeAuthor:
    def __init__(self, tag: str = "user#0001", *, bot: bool = False, user_id: int = 111222333):
        self.tag = tag
        self.bot = bot
        self.id = user_id

    def __str__(self) -> str:
        return self.tag


class FakeMessage:
    def __init__(
        self,
        message_id: int,
        content: str,
        *,
        author: FakeAuthor | None = None,
        created_at: datetime = NOW,
    ):
        self.id = message_id
        self.content = content
        self.author = author or FakeAuthor()
        self.created_at = created_at


class FakeHistory:
    """Stand-in for ``channel.history`` serving pages newest-first.

    ``messages`` must already be ordered newest-first, the order Discord
    returns them in when paging backwards.
    """

    def __init__(self, messages: list[FakeMessage], *, fail_on_request: int | None = None):
        self.messages = messages
        self.fail_on_request = fail_on_request
        self.calls: list[dict] = []
        self.page_sizes: list[int] = []

    def __call__(self, *, limit: int = 100, before=None):
        self.calls.append({"limit": limit, "before": before})
        request_no = len(self.calls)
        if before is None:
            start = 0
        else:
            start = self.messages.index(before) + 1
        page = self.messages[start : start + limit]
        self.page_sizes.append(len(page))

        async def _iterate():
            if self.fail_on_request == request_no:
                response = MagicMock(status=403, reason="Forbidden")
                raise discord.Forbidden(response, "Missing Access")
            for msg in page:
                yield msg

        return _iterate()


def make_messages(count: int, *, start_id: int = 10_000, author: FakeAuthor | None = None) -> list[FakeMessage]:
    """Return ``count`` messages newest-first, one minute apart, ending at NOW."""
    return [
        FakeMessage(start_id + count - i, f"message {count - i}", author=author, created_at=NOW - timedelta(minutes=i))
        for i in range(count)
    ]


def make_text_channel(history: FakeHistory | None = None, *, channel_id: int = 123456789):
    """A mock that passes ``isinstance(channel, discord.TextChannel)``."""
    channel = MagicMock(spec=discord.TextChannel)
    channel.id = channel_id
    channel.is_news.return_value = False
    channel.history = history or FakeHistory([])
    channel.send = AsyncMock()
    return channel


class FakeLLM:
    def __init__(self, reply: str = "summary"):
        self.reply = reply
        self.prompts: list[str] = []

    async def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def mock_discord_channel():
    """Create a mock channel that is not a guild text channel."""
    channel = MagicMock()
    channel.id = 123456789
    channel.name = "test-thread"
    channel.send = AsyncMock()
    channel.history = FakeHistory([])
    return channel


@pytest.fixture
def mock_interaction():
    """Create a mock slash-command interaction in a text channel."""
    interaction = MagicMock()
    interaction.channel = make_text_channel()
    interaction.command = None
    interaction.response = MagicMock()
    interaction.response.send_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.edit_original_response = AsyncMock()
    interaction.followup = MagicMock()
    interaction.followup.send = AsyncMock()

    async def _defer(*args, **kwargs):
        interaction.response.is_done.return_value = True

    interaction.response.defer.side_effect = _defer
    return interaction


@pytest.fixture
def mock_bot():
    """Create a mock Discord bot."""
    bot = MagicMock()
    bot.user = MagicMock()
    bot.user.id = 999888777
    bot.user.name = "TestBot"
    return bot
