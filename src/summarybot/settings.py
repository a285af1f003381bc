"""Runtime settings loaded from the environment.

Secrets (tokens, API keys) live in .env and are read through python-dotenv.
Everything the bot needs is gathered into one immutable ``Settings`` object
that is passed explicitly to the cogs instead of being read from globals.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from summarybot.errors import ConfigError


DEFAULT_GEMINI_MODEL: str = "gemini-2.5-flash"

# Discord rejects messages longer than this.
MAX_DISCORD_LEN: int = 2_000


def _int_from_env(name: str, *, required: bool = False) -> Optional[int]:
    raw = (os.getenv(name, "") or "").strip()
    if not raw:
        if required:
            raise ConfigError(f"{name} environment variable required")
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {raw!r}")
    return value


def _str_from_env(*names: str, required: bool = False) -> str:
    for name in names:
        value = (os.getenv(name, "") or "").strip()
        if value:
            return value
    if required:
        raise ConfigError(f"{' or '.join(names)} environment variable required")
    return ""


@dataclass(frozen=True)
class Settings:
    """Credentials and channel configuration for one bot process."""

    discord_token: str
    gemini_api_key: str
    question_channel_id: int
    guild_id: Optional[int] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    history_max_pages: Optional[int] = None

    @classmethod
    def from_env(cls, *, load_dotenv_file: bool = True) -> "Settings":
        """Build settings from environment variables.

        Required: DISCORD_TOKEN, GEMINI_API_KEY (or GOOGLE_API_KEY),
        QUESTION_CHANNEL_ID. Optional: GUILD_ID, GEMINI_MODEL,
        HISTORY_MAX_PAGES (0 or unset means no cap).

        Raises:
            ConfigError: If a required value is missing or not an integer.
        """
        if load_dotenv_file:
            load_dotenv()

        max_pages = _int_from_env("HISTORY_MAX_PAGES")
        return cls(
            discord_token=_str_from_env("DISCORD_TOKEN", required=True),
            gemini_api_key=_str_from_env("GEMINI_API_KEY", "GOOGLE_API_KEY", required=True),
            question_channel_id=_int_from_env("QUESTION_CHANNEL_ID", required=True),
            guild_id=_int_from_env("GUILD_ID"),
            gemini_model=_str_from_env("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            history_max_pages=max_pages or None,
        )


def registration_settings(*, load_dotenv_file: bool = True) -> tuple[str, Optional[int]]:
    """Return ``(discord_token, guild_id)`` for the command registration step.

    Registration only talks to Discord, so the model key and question channel
    are not required here.
    """
    if load_dotenv_file:
        load_dotenv()
    return _str_from_env("DISCORD_TOKEN", required=True), _int_from_env("GUILD_ID")
