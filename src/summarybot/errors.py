"""Error kinds and the user-facing messages attached to them."""

from __future__ import annotations

from enum import Enum

from discord import app_commands


class ErrorKind(Enum):
    """Classification of failures the bot can run into.

    Each kind carries whether the user sees anything and, if so, a default
    message. Entry points may still choose a more specific message.
    """

    MODEL_CALL = ("model_call", True, "エラーが発生しました。")
    HISTORY_FETCH = ("history_fetch", True, "過去ログの取得に失敗しました。")
    WRONG_CHANNEL = ("wrong_channel", True, "このコマンドはテキストチャンネルでのみ使用可能です。")
    UNEXPECTED = ("unexpected", True, "申し訳ありません、予期しないエラーが発生しました。")
    # Stale or unregistered slash commands; nothing is sent back.
    UNKNOWN_COMMAND = ("unknown_command", False, "")

    def __init__(self, label: str, user_visible: bool, message: str) -> None:
        self.label = label
        self.user_visible = user_visible
        self.message = message


class SummaryBotError(Exception):
    """Base class for errors raised by the bot."""

    kind: ErrorKind = ErrorKind.UNEXPECTED


class ConfigError(SummaryBotError):
    """A required setting is missing or malformed."""


class HistoryFetchError(SummaryBotError):
    """A page of channel history could not be fetched."""

    kind = ErrorKind.HISTORY_FETCH

    def __init__(self, channel_id: int | None, message: str) -> None:
        super().__init__(message)
        self.channel_id = channel_id


def classify(exc: BaseException) -> ErrorKind:
    """Return the error kind for an exception, unwrapping discord.py wrappers."""
    original = getattr(exc, "original", None)
    if isinstance(original, BaseException):
        exc = original
    if isinstance(exc, SummaryBotError):
        return exc.kind
    if isinstance(exc, app_commands.CommandNotFound):
        return ErrorKind.UNKNOWN_COMMAND
    return ErrorKind.UNEXPECTED
