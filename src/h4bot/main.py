#!/usr/bin/env python3
"""Console entry point: load settings, configure logging, wire the container and run the bot."""

from __future__ import annotations

import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from h4bot.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from h4bot.config.settings import Settings

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"

EXIT_OK = 0
EXIT_RUNTIME_ERROR = 1
EXIT_CONFIG_ERROR = 2

_FALLBACK_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_FALLBACK_DATEFMT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO", config_path: Path = _LOGGING_CONFIG_PATH) -> None:
    """Apply ``config_path`` with dictConfig, or a plain console setup if it can't be used.

    The root level is always set to ``log_level`` afterwards.
    """
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        config = json.loads(Path(config_path).read_text(encoding="utf-8"))
        logging.config.dictConfig(config)
    except (OSError, ValueError) as e:
        logging.basicConfig(level=resolved_level, format=_FALLBACK_FORMAT, datefmt=_FALLBACK_DATEFMT)
        logger.warning(LogTemplates.LOGGING_CONFIG_FALLBACK, config_path, e)

    logging.getLogger().setLevel(resolved_level)


def _log_level_for(settings: Settings) -> str:
    return "DEBUG" if settings.debug else settings.log_level


def _log_startup_summary(settings: Settings) -> None:
    logger.info(LogTemplates.BOT_STARTING.format(environment=settings.environment))
    logger.info(
        LogTemplates.BOT_CONFIG_SUMMARY,
        len(settings.nicknames.labels),
        len(settings.discord.protected_ids),
        settings.nicknames.max_concurrency or "unbounded",
        list(settings.discord.test_guild_ids) or "global",
    )


def main() -> int:
    from h4bot.config.settings import get_settings

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.error(LogTemplates.BOT_INVALID_SETTINGS, e)
        return EXIT_CONFIG_ERROR

    setup_logging(_log_level_for(settings), settings.logging_config_path or _LOGGING_CONFIG_PATH)

    token_value = settings.discord.token.get_secret_value()
    if not token_value:
        logger.error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return EXIT_CONFIG_ERROR

    _log_startup_summary(settings)

    from h4bot.config.container import create_container
    from h4bot.infrastructure.discord.bot import create_bot

    container = create_container(settings)
    bot = create_bot(container, settings)

    try:
        logger.info(LogTemplates.BOT_STARTING_RUN)
        bot.run_with_graceful_shutdown(token_value)
    except KeyboardInterrupt:
        logger.info(LogTemplates.BOT_KEYBOARD_INTERRUPT)
    except Exception as e:
        logger.exception(LogTemplates.BOT_FATAL_ERROR, e)
        return EXIT_RUNTIME_ERROR

    logger.info(LogTemplates.BOT_STOPPED)
    return EXIT_OK


def cli() -> None:
    """Console script entry point (``h4bot``)."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
