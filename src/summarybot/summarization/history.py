"""Channel history retrieval by backward pagination."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

import discord

from summarybot.errors import HistoryFetchError

if TYPE_CHECKING:
    from discord.abc import Messageable

logger = logging.getLogger(__name__)

PAGE_SIZE: int = 100
WEEK: timedelta = timedelta(days=7)


class Period(str, Enum):
    """How far back a summary reaches."""

    WEEK = "week"
    ALL = "all"

    @classmethod
    def parse(cls, value: "str | Period") -> "Period":
        """Return the period for ``value``; raise ValueError for anything else."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown period: {value!r} (expected 'week' or 'all')") from None

    def cutoff(self, now: datetime) -> Optional[datetime]:
        """Return the oldest creation time still included, or None for no limit."""
        if self is Period.WEEK:
            return now - WEEK
        return None

    @property
    def label(self) -> str:
        """Natural-language name used in prompts and command choices."""
        return "1週間" if self is Period.WEEK else "全期間"


def author_tag(author: discord.abc.User) -> str:
    """Return the user's tag (``name#1234``, or just ``name`` for migrated accounts)."""
    return str(author)


def format_log_line(message: discord.Message) -> str:
    """Line format used in summary transcripts."""
    return f"[{author_tag(message.author)}] {message.content}"


def format_dump_line(message: discord.Message) -> str:
    """Line format used by the full-history dump."""
    return f"[{author_tag(message.author)}]: {message.content}"


async def _fetch_page(
    channel: Messageable,
    before: Optional[discord.Message],
) -> list[discord.Message]:
    try:
        return [msg async for msg in channel.history(limit=PAGE_SIZE, before=before)]
    except discord.HTTPException as exc:
        channel_id = getattr(channel, "id", None)
        raise HistoryFetchError(
            channel_id, f"Failed to fetch history page for channel {channel_id}: {exc}"
        ) from exc


async def _collect_lines(
    channel: Messageable,
    fmt: Callable[[discord.Message], str],
    keep: Callable[[discord.Message], bool],
    max_pages: Optional[int],
) -> list[str]:
    lines: list[str] = []
    cursor: Optional[discord.Message] = None
    pages = 0

    while True:
        if max_pages is not None and pages >= max_pages:
            logger.warning(
                "Stopped history fetch for channel %s after %d pages (cap reached)",
                getattr(channel, "id", None),
                pages,
            )
            break

        page = await _fetch_page(channel, cursor)
        pages += 1
        if not page:
            break

        for msg in page:
            if keep(msg):
                lines.append(fmt(msg))

        # Pages come newest-first, so the last entry is the oldest seen so far.
        cursor = page[-1]

    logger.debug(
        "Fetched %d lines from channel %s in %d requests",
        len(lines),
        getattr(channel, "id", None),
        pages,
    )
    return lines


async def fetch_all_messages(
    channel: Messageable,
    *,
    max_pages: Optional[int] = None,
) -> list[str]:
    """Fetch every message in ``channel`` as ``"[tag]: content"`` lines.

    Lines are in page order (newest first). ``max_pages`` caps the number of
    history requests; ``None`` walks back to the first message.

    Raises:
        HistoryFetchError: If any page request fails.
    """
    return await _collect_lines(channel, format_dump_line, lambda _msg: True, max_pages)


async def fetch_channel_logs(
    channel: Messageable,
    period: "Period | str",
    *,
    now: Optional[datetime] = None,
    max_pages: Optional[int] = None,
) -> str:
    """Fetch the channel transcript for ``period`` as one newline-joined string.

    With ``Period.WEEK`` only messages created strictly after ``now - 7 days``
    are kept. Pagination still walks the whole channel, matching the dump.

    Raises:
        ValueError: If ``period`` is not a known period.
        HistoryFetchError: If any page request fails.
    """
    period = Period.parse(period)
    if now is None:
        now = datetime.now(tz=timezone.utc)
    cutoff = period.cutoff(now)

    def keep(msg: discord.Message) -> bool:
        return cutoff is None or msg.created_at > cutoff

    lines = await _collect_lines(channel, format_log_line, keep, max_pages)
    return "\n".join(lines)
