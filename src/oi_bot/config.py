import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class ConfigError(RuntimeError):
    """Raised when a required setting is missing at startup."""


def load_env() -> None:
    # If DOTENV_FILE is set, load that; otherwise default to .env
    env_file = os.getenv("DOTENV_FILE")
    if env_file:
        load_dotenv(env_file)  # e.g. DOTENV_FILE=.env.staging
    else:
        load_dotenv()


def _env_float(name: str, default: float) -> float:
    """
    Read a float from env. Falls back to ``default`` if unset, blank, or non-numeric.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip()
    if raw == "" or raw.startswith("#"):
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int_opt(name: str) -> Optional[int]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _b(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in {
        "1",
        "true",
        "yes",
        "y",
        "on",
    }


@dataclass
class Settings:
    # Discord bot token.  DISCORD_BOT_TOKEN is preferred; BOT_TOKEN is still
    # read so older deployments keep working.
    discord_bot_token: str = field(
        default_factory=lambda: os.getenv("DISCORD_BOT_TOKEN")
        or os.getenv("BOT_TOKEN")
        or ""
    )

    # Optional guild to copy the slash commands into on startup.  Global
    # commands can take a while to show up; a guild copy is immediate.
    discord_guild_id: Optional[int] = field(
        default_factory=lambda: _env_int_opt("DISCORD_GUILD_ID")
    )

    # --- CoinGlass ---
    coinglass_api_base: str = field(
        default_factory=lambda: os.getenv(
            "COINGLASS_API_BASE", "https://open-api.coinglass.com/public/v2"
        ).rstrip("/")
    )
    # Sent as the coinglassSecret header when non-empty.
    coinglass_api_key: str = field(
        default_factory=lambda: os.getenv("COINGLASS_API_KEY", "")
    )
    # Per-request timeout in seconds for each of the three OI calls.
    http_timeout: float = field(
        default_factory=lambda: _env_float("OI_HTTP_TIMEOUT", 10.0)
    )

    # When on, reports built from the fallback snapshot say so in the footer.
    mark_fallback: bool = field(default_factory=lambda: _b("OI_MARK_FALLBACK", False))

    # --- Logging ---
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_plain: bool = field(default_factory=lambda: _b("LOG_PLAIN", False))
    data_dir: Path = field(
        default_factory=lambda: Path(os.getenv("DATA_DIR", "data"))
    )

    def require_bot_token(self) -> str:
        """Return the bot token or raise :class:`ConfigError` if it is unset."""
        token = (self.discord_bot_token or "").strip()
        if not token:
            raise ConfigError(
                "DISCORD_BOT_TOKEN is not set (add it to the environment or .env)"
            )
        return token


def get_settings() -> Settings:
    """Build settings from the current environment.

    Settings are read on every call so a ``.env`` loaded after import (the
    runner does this) and ``monkeypatch.setenv`` in tests are both honoured.
    """
    return Settings()
