"""
Rankings page retrieval.

Fetches the published singles or doubles rankings page and hands back its
full text. The default URLs go through the r.jina.ai reader, which renders
the page as markdown so the pipe-table parser can read it.

Key features:
- Retry with exponential backoff on transport errors and 429/5xx responses
- Any failure surfaces as FetchFailed, distinct from parse errors
- Injectable httpx.Client for testing
"""

import logging
import random
import time
from typing import Callable, Optional

import httpx

from dinkrank.config import settings
from dinkrank.errors import FetchFailed, InvalidRequest

logger = logging.getLogger(__name__)

MODES = ("doubles", "singles")
DEFAULT_MODE = "doubles"

# Status codes that usually mean "try again shortly"
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


def normalize_mode(mode: Optional[str]) -> str:
    """
    Validate a rankings mode.

    Args:
        mode: 'singles' or 'doubles' in any case; None/empty means doubles

    Returns:
        Lowercase mode

    Raises:
        InvalidRequest: For any other value
    """
    value = (mode or DEFAULT_MODE).strip().lower() or DEFAULT_MODE
    if value not in MODES:
        raise InvalidRequest("BAD_MODE", f"mode must be one of {', '.join(MODES)}")
    return value


class RankingsSource:
    """
    Fetches rankings pages over HTTP.

    Usage:
        source = RankingsSource()
        text = source.fetch("doubles")

        # Tests pass a client with a mock transport
        source = RankingsSource(client=httpx.Client(transport=transport))
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        urls: Optional[dict[str, str]] = None,
        max_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client or httpx.Client(
            timeout=httpx.Timeout(settings.fetch_timeout),
            follow_redirects=True,
        )
        self.urls = urls or {
            "doubles": settings.doubles_url,
            "singles": settings.singles_url,
        }
        self.max_attempts = max_attempts if max_attempts is not None else settings.fetch_max_attempts
        self.retry_delay = retry_delay if retry_delay is not None else settings.fetch_retry_delay
        self._sleep = sleep

    def url_for(self, mode: str) -> str:
        return self.urls[normalize_mode(mode)]

    def fetch(self, mode: str) -> str:
        """
        Fetch the complete rankings page for a mode.

        Args:
            mode: 'singles' or 'doubles'

        Returns:
            The page body as text

        Raises:
            InvalidRequest: If the mode is unknown
            FetchFailed: If the page can't be retrieved after all attempts
        """
        url = self.url_for(mode)
        attempts = max(1, self.max_attempts)
        last_error = ""

        for attempt in range(attempts):
            try:
                response = self.client.get(url, headers={"Cache-Control": "no-store"})
            except httpx.HTTPError as e:
                last_error = f"{type(e).__name__}: {e}"
            else:
                if response.is_success:
                    logger.info("Fetched %s rankings (%d bytes)", mode, len(response.content))
                    return response.text
                last_error = f"HTTP {response.status_code}"
                if response.status_code not in RETRYABLE_STATUS_CODES:
                    break

            if attempt < attempts - 1:
                # Exponential backoff with a little jitter
                delay = self.retry_delay * (2 ** attempt)
                delay += random.uniform(0, self.retry_delay)
                logger.warning(
                    "[Retry %d/%d] Fetching %s failed: %s. Retrying in %.1fs...",
                    attempt + 1, attempts, url, last_error, delay,
                )
                self._sleep(delay)

        logger.error("Giving up on %s: %s", url, last_error)
        raise FetchFailed(f"Could not fetch {mode} rankings: {last_error}")

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "RankingsSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
