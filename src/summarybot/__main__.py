# __main__.py
import asyncio
import logging
import time

import discord

from summarybot.bot import SummaryBot
from summarybot.errors import ConfigError
from summarybot.settings import Settings

logger = logging.getLogger("summarybot")

RETRY_DELAY_SECONDS = 5


async def run(settings: Settings) -> None:
    bot = SummaryBot(settings)
    async with bot:
        logger.info("starting bot")
        await bot.start(settings.discord_token)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        raise SystemExit(1) from e

    # Robust launcher: retry on transient connect errors (e.g., gateway timeouts)
    while True:
        try:
            asyncio.run(run(settings))
            break  # Normal exit
        except KeyboardInterrupt:
            break
        except discord.LoginFailure as e:
            logger.error("Discord rejected the bot token: %s", e)
            raise SystemExit(1) from e
        except Exception as e:  # noqa: BLE001
            logger.exception("Bot crashed during startup/connect; retrying in %ds: %s", RETRY_DELAY_SECONDS, e)
            time.sleep(RETRY_DELAY_SECONDS)


if __name__ == "__main__":
    main()
