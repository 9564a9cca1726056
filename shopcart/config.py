"""Cart configuration read from environment variables."""
import os
from dataclasses import dataclass
from functools import cache

from shopcart.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CURRENCY = "USD"
DEFAULT_BADGE_MAX = 99


def _get_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid integer for {name}: {raw!r}, using default {default}")
        return default


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the cart and its views."""
    currency: str = DEFAULT_CURRENCY
    badge_max: int = DEFAULT_BADGE_MAX
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from SHOPCART_* and LOG_LEVEL environment variables."""
        currency = os.environ.get("SHOPCART_CURRENCY", DEFAULT_CURRENCY).strip().upper()
        return cls(
            currency=currency or DEFAULT_CURRENCY,
            badge_max=_get_int("SHOPCART_BADGE_MAX", DEFAULT_BADGE_MAX),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


@cache
def get_settings() -> Settings:
    """Get settings (read from the environment once)."""
    return Settings.from_env()
