import asyncio
import sys

from lola.config import ConfigurationError, Settings
from lola.infrastructure.observability.logging import setup_logging


def main() -> int:
    """Start in Telegram mode when a bot token is configured, else the CLI"""

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        return 1

    setup_logging(settings.log_level, settings.log_format)

    from lola.application.runtime import build_runtime

    runtime = build_runtime(settings)

    if settings.use_telegram:
        from lola.application.telegram.bot import TelegramBotHandler

        TelegramBotHandler(settings.telegram_bot_token, runtime).run()
        return 0

    from lola.application.cli.cli import run_cli

    try:
        asyncio.run(run_cli(runtime))
    except KeyboardInterrupt:
        print("\nShutting down...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
