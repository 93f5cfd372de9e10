"""CLI entry point for posting to a RocketChat webhook.

Usage:
    python -m rocketchat_webhook [options] [TEXT ...]

The webhook URL and default channel come from ROCKETCHAT_* environment
variables (or a .env file). When no TEXT is given, the message is read
from standard input.

Exit codes: 0 delivered, 1 delivery failed, 2 configuration or usage
error (argparse also exits with 2 on bad arguments).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import logging.config
import sys
from typing import NoReturn

from pydantic import ValidationError

from rocketchat_webhook import __version__
from rocketchat_webhook.client import RocketChatClient
from rocketchat_webhook.config import Settings, clear_settings_cache, get_settings

APP_VERSION = __version__

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="rocketchat-webhook",
        description="Post a text message to a RocketChat incoming webhook.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m rocketchat_webhook "Deploy finished"        Post to the default channel
  python -m rocketchat_webhook -c @alice "Hi"          Post to another channel
  echo "Backup done" | python -m rocketchat_webhook    Read the text from stdin
  python -m rocketchat_webhook --config-check          Validate config and exit
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    parser.add_argument(
        "text",
        nargs="*",
        help="Message text (default: read from stdin)",
    )

    parser.add_argument(
        "-c",
        "--channel",
        default=None,
        help="Override target channel (default: from settings)",
    )

    parser.add_argument(
        "--config-check",
        action="store_true",
        help="Validate configuration and exit without sending",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level (default: from settings)",
    )

    return parser


def configure_logging(level: str) -> None:
    """Configure logging for the CLI.

    Args:
        level: Logging level string (DEBUG, INFO, etc.)
    """
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if level == "DEBUG" else "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        "loggers": {
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
    }
    logging.config.dictConfig(config)


def print_config_summary(settings: Settings) -> None:
    """Print a summary of the configuration.

    Args:
        settings: Application settings.
    """
    summary = settings.redacted_summary()
    print("Configuration:")
    print(f"  Webhook: {summary['webhook_url']}")
    print(f"  Channel: {summary['channel']}")
    print(f"  Timeout: {summary['timeout']}s")
    print(f"  Log Level: {summary['log_level']}")
    print()


def validate_config() -> Settings | None:
    """Validate and load configuration.

    Returns:
        Settings instance if valid, None if invalid.
    """
    try:
        clear_settings_cache()
        return get_settings()
    except ValidationError as e:
        print("Configuration validation failed:", file=sys.stderr)
        for error in e.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            msg = error["msg"]
            print(f"  {field}: {msg}", file=sys.stderr)
        return None


def run_config_check(settings: Settings) -> int:
    """Print the configuration summary.

    Args:
        settings: Validated settings.

    Returns:
        Exit code (0 for success).
    """
    print("Configuration is valid!")
    print()
    print_config_summary(settings)
    return EXIT_SUCCESS


async def run_send(client: RocketChatClient, text: str) -> int:
    """Send one text message.

    Args:
        client: Configured webhook client.
        text: Message text.

    Returns:
        Exit code.
    """
    logger = logging.getLogger(__name__)

    result = await client.send_text(text)
    if not result.success:
        logger.error(f"Message was not delivered: {result.error}")
        return EXIT_ERROR

    return EXIT_SUCCESS


def read_text(words: list[str]) -> str:
    """Join command line words, or read the text from stdin."""
    if words:
        return " ".join(words)
    return sys.stdin.read().strip()


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = validate_config()
    if settings is None:
        sys.exit(EXIT_CONFIG_ERROR)

    log_level = args.log_level or settings.log_level
    configure_logging(log_level)

    if args.config_check:
        sys.exit(run_config_check(settings))

    text = read_text(args.text)
    if not text:
        parser.error("no message text given")

    client = RocketChatClient.from_settings(settings.rocketchat)
    if args.channel:
        client.set_channel(args.channel)

    exit_code = asyncio.run(run_send(client, text))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
