"""Configuration management for SmartTask."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

SMARTTASK_HOME = Path(os.environ.get("SMARTTASK_HOME", Path.home() / "smarttask"))
CONFIG_FILE = SMARTTASK_HOME / "config" / "smarttask.conf"
DATA_DIR = SMARTTASK_HOME / "data"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Config:
    """SmartTask configuration."""

    user_id: str = "default"
    data_dir: str = ""
    timezone: str = "UTC"
    log_level: str = "WARNING"
    # Telegram bot settings
    telegram_bot_token: str = ""
    telegram_allowed_users: list[int] = field(default_factory=list)
    telegram_digest_time: str = "08:00"


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def parse_config(text: str) -> Config:
    """Parse KEY=value lines into a Config. Unknown keys are ignored."""
    config = Config()

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "user_id":
                if value:
                    config.user_id = value
            case "data_dir":
                config.data_dir = value
            case "timezone":
                config.timezone = value
            case "log_level":
                if value.upper() in LOG_LEVELS:
                    config.log_level = value.upper()
                else:
                    logger.warning(f"Ignoring unknown LOG_LEVEL: {value}")
            case "telegram_bot_token":
                config.telegram_bot_token = value
            case "telegram_allowed_users":
                try:
                    config.telegram_allowed_users = [int(u.strip()) for u in value.split(",") if u.strip()]
                except ValueError:
                    logger.warning(f"Failed to parse TELEGRAM_ALLOWED_USERS: {value}")
            case "telegram_digest_time":
                config.telegram_digest_time = value
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config


def load_config() -> Config:
    """Load configuration from smarttask.conf file."""
    if not CONFIG_FILE.exists():
        return Config()
    return parse_config(CONFIG_FILE.read_text())


def resolve_data_dir(config: Config) -> Path:
    """Directory holding task files."""
    if config.data_dir:
        return Path(config.data_dir).expanduser()
    return DATA_DIR
