"""Bounded retry for the Google provider token that Supabase hands out after OAuth."""
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ProviderTokenUnavailable(Exception):
    """Raised when every retry came back without a provider token."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Provider token unavailable after {attempts} retries")


def retry_provider_token(
    fetch: Callable[[], Optional[str]],
    attempts: int = 3,
    delay_seconds: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    """Retry fetch after an initial miss, waiting delay_seconds before each attempt.

    Errors raised by fetch count as misses. Never calls fetch more than `attempts` times.
    """
    for attempt in range(1, attempts + 1):
        sleep(delay_seconds)
        try:
            token = fetch()
        except Exception as e:
            logger.warning(f"Provider token retry {attempt}/{attempts} failed: {e}")
            token = None
        if token:
            logger.info(f"Provider token acquired on retry {attempt}")
            return token
        logger.warning(f"Provider token missing after retry {attempt}/{attempts}")
    raise ProviderTokenUnavailable(attempts)
