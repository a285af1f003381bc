"""Discord utility functions."""

from __future__ import annotations

from typing import Any

import discord

from summarybot.settings import MAX_DISCORD_LEN


def is_guild_text_channel(channel: Any) -> bool:
    """Return True for regular guild text channels (not announcement channels, threads, DMs or voice)."""
    return isinstance(channel, discord.TextChannel) and not channel.is_news()


def chunk_text(text: str, limit: int = MAX_DISCORD_LEN) -> list[str]:
    """Split text into pieces Discord will accept, preferring line boundaries.

    Lines longer than ``limit`` are hard-split. Empty input yields ``[]``.
    """
    text = text.strip()
    if len(text) <= limit:
        return [text] if text else []
    chunks: list[str] = []
    buffer = ""
    for line in text.splitlines(keepends=True):
        if len(buffer) + len(line) > limit:
            if buffer:
                chunks.append(buffer.rstrip())
                buffer = ""
            while len(line) > limit:
                chunks.append(line[:limit])
                line = line[limit:]
        buffer += line
    if buffer.strip():
        chunks.append(buffer.rstrip())
    return [chunk for chunk in chunks if chunk]
