import logging

import pytest

from oi_bot.logging_utils import JsonFormatter, PlainFormatter

_ENV_KEYS = (
    "DISCORD_BOT_TOKEN",
    "BOT_TOKEN",
    "DISCORD_GUILD_ID",
    "DISCORD_APPLICATION_ID",
    "COINGLASS_API_BASE",
    "COINGLASS_API_KEY",
    "OI_HTTP_TIMEOUT",
    "OI_MARK_FALLBACK",
    "LOG_LEVEL",
    "LOG_PLAIN",
    "DOTENV_FILE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    """Isolate every test from the operator's environment and .env values."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setattr("oi_bot.config.load_dotenv", lambda *a, **k: None)
    yield


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """setup_logging() installs its own root handlers; drop them afterwards."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, (JsonFormatter, PlainFormatter)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
