"""Configuration management from environment variables."""

import os

from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _parse_id_list(raw: str) -> frozenset[int]:
    """Parse a comma separated list of Telegram user IDs."""
    ids = set()
    for part in raw.split(","):
        part = part.strip()
        if part:
            ids.add(int(part))
    return frozenset(ids)


class Config:
    """Application configuration loaded from environment variables."""

    # Telegram
    TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")

    # Users allowed to run admin commands in any chat (chat admins always can)
    ADMIN_USER_IDS: frozenset[int] = _parse_id_list(os.getenv("ADMIN_USER_IDS", ""))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Engine
    TICK_INTERVAL: int = int(os.getenv("TICK_INTERVAL", "60"))
    PANEL_REFRESH_INTERVAL: int = int(os.getenv("PANEL_REFRESH_INTERVAL", "10"))

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        if not cls.TELEGRAM_BOT_TOKEN:
            raise ValueError("TELEGRAM_BOT_TOKEN environment variable is required")

        if cls.TICK_INTERVAL <= 0:
            raise ValueError("TICK_INTERVAL must be a positive number of seconds")

        if cls.PANEL_REFRESH_INTERVAL <= 0:
            raise ValueError("PANEL_REFRESH_INTERVAL must be a positive number of seconds")
