from typing import Optional
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field


MISSING_API_KEY_MESSAGE = (
    "OPENAI_API_KEY is required.\n"
    "Create a .env file in the project root with: OPENAI_API_KEY=your-key-here\n"
    "Or set it as an environment variable:\n"
    "  - Linux/Mac: export OPENAI_API_KEY='your-key-here'\n"
    "  - Windows PowerShell: $env:OPENAI_API_KEY='your-key-here'\n"
    "  - Windows CMD: set OPENAI_API_KEY=your-key-here"
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigurationError(Exception):
    """Raised when the process cannot start with the given environment"""


class Settings(BaseModel):
    """Process configuration"""
    openai_api_key: str = Field(description="Planner credential")
    openai_model: str = Field(default="gpt-4o")
    temperature: float = Field(default=0.2)
    telegram_bot_token: Optional[str] = Field(None, description="Switches the process to Telegram mode")
    headless: bool = Field(default=True, description="Run the shared browser without a window")
    step_limit: int = Field(default=60, description="Max plan/act cycles per job")
    memory_capacity: int = Field(default=50, description="Max turns kept per session")
    tool_timeout_seconds: float = Field(default=30.0)
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    @property
    def use_telegram(self) -> bool:
        return bool(self.telegram_bot_token)

    @classmethod
    def from_env(cls, environ: Optional[dict] = None, load_env_file: bool = True) -> "Settings":
        """Build settings from the environment (and a .env file when present)"""

        if environ is None:
            if load_env_file:
                load_dotenv()
            environ = dict(os.environ)

        api_key = (environ.get("OPENAI_API_KEY") or "").strip()
        if not api_key:
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)

        settings = cls(
            openai_api_key=api_key,
            openai_model=environ.get("OPENAI_MODEL", "gpt-4o"),
            temperature=_parse_number(environ, "OPENAI_TEMPERATURE", 0.2, float),
            telegram_bot_token=(environ.get("TELEGRAM_BOT_TOKEN") or "").strip() or None,
            headless=_parse_bool(environ, "BROWSER_HEADLESS", True),
            step_limit=_parse_number(environ, "AGENT_STEP_LIMIT", 60, int),
            memory_capacity=_parse_number(environ, "AGENT_MEMORY_CAPACITY", 50, int),
            tool_timeout_seconds=_parse_number(environ, "TOOL_TIMEOUT_SECONDS", 30.0, float),
            log_level=environ.get("LOG_LEVEL", "INFO"),
            log_format=environ.get("LOG_FORMAT", "console"),
            host=environ.get("LOLA_HOST", "0.0.0.0"),
            port=_parse_number(environ, "LOLA_PORT", 8000, int),
        )

        for name in ("step_limit", "memory_capacity", "tool_timeout_seconds"):
            if getattr(settings, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(settings, name)}")

        return settings


def _parse_bool(environ: dict, key: str, default: bool) -> bool:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default

    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{key} must be a boolean (true/false), got {raw!r}")


def _parse_number(environ: dict, key: str, default, cast):
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default

    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from None
