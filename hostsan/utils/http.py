"""HTTP utility functions for hostsan.

Used to download suffix lists. Implements a simple retry policy: connection
errors, timeouts, overload statuses and 5xx are retried with backoff; other
client errors are not.
"""

import random
import time
import logging
from typing import Optional

import requests

from hostsan import __version__

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
MAX_RETRIES = 3

DEFAULT_HEADERS = {
    "User-Agent": f"hostsan/{__version__} (+suffix-list fetcher)",
    "Accept": "text/plain, */*;q=0.8",
}

# Overloaded / rate limited; retried with the heavier schedule
RATE_LIMIT_STATUSES = {429, 529}

# Backoff schedules (seconds)
STANDARD_BACKOFF = [2, 4, 8, 16, 32]
RATE_LIMIT_BACKOFF = [5, 15, 45]


def _get_wait(backoff_schedule: list[int], attempt: int, jitter: bool = False) -> float:
    """Return wait time from a backoff schedule, clamping to last value.

    When *jitter* is True, the base wait is multiplied by a random factor
    between 0.5 and 1.5 to spread load across retrying clients.
    """
    if attempt < len(backoff_schedule):
        base = backoff_schedule[attempt]
    else:
        base = backoff_schedule[-1]

    if jitter:
        return base * (0.5 + random.random())
    return float(base)


def make_request(
    url: str,
    method: str = "GET",
    headers: Optional[dict] = None,
    timeout: int = DEFAULT_TIMEOUT,
    retries: int = MAX_RETRIES,
    jitter: bool = True,
) -> Optional[requests.Response]:
    """Make an HTTP request with retry logic and backoff.

    Returns the response on 2xx, ``None`` once retries are exhausted or on a
    non-retryable client error. Never raises for network failures.
    """
    max_attempts = retries + 1

    merged_headers = dict(DEFAULT_HEADERS)
    if headers:
        merged_headers.update(headers)

    for attempt in range(max_attempts):
        logger.info("HTTP %s %s (attempt %d/%d)", method, url, attempt + 1, max_attempts)
        try:
            response = requests.request(
                method=method,
                url=url,
                headers=merged_headers,
                timeout=timeout,
            )
        except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as exc:
            if attempt < max_attempts - 1:
                wait_time = _get_wait(STANDARD_BACKOFF, attempt, jitter=jitter)
                logger.warning(
                    "Cannot reach %s (%s, attempt %d/%d). Retrying in %.1fs...",
                    url, exc.__class__.__name__, attempt + 1, max_attempts, wait_time,
                )
                time.sleep(wait_time)
                continue
            logger.error("Could not reach %s after %d attempts.", url, max_attempts)
            return None
        except requests.exceptions.RequestException as e:
            logger.error("Unexpected request error for %s: %s", url, e)
            return None

        status = response.status_code
        if response.ok:
            logger.debug("HTTP %d from %s", status, url)
            return response

        if status in RATE_LIMIT_STATUSES:
            if attempt < max_attempts - 1:
                retry_after = response.headers.get("Retry-After")
                if retry_after and retry_after.isdigit():
                    wait_time = float(int(retry_after))
                else:
                    wait_time = _get_wait(RATE_LIMIT_BACKOFF, attempt, jitter=jitter)
                logger.warning(
                    "Rate limited at %s (HTTP %d, attempt %d/%d). Retrying in %.1fs...",
                    url, status, attempt + 1, max_attempts, wait_time,
                )
                time.sleep(wait_time)
                continue
            logger.error("Rate limited at %s (HTTP %d) after %d attempts.", url, status, max_attempts)
            return None

        if 400 <= status < 500:
            logger.error("Client error from %s: HTTP %d, not retrying.", url, status)
            return None

        if attempt < max_attempts - 1:
            wait_time = _get_wait(STANDARD_BACKOFF, attempt, jitter=jitter)
            logger.warning(
                "Server error from %s (HTTP %d, attempt %d/%d). Retrying in %.1fs...",
                url, status, attempt + 1, max_attempts, wait_time,
            )
            time.sleep(wait_time)
        else:
            logger.error(
                "Request to %s failed with HTTP %d after %d attempts.",
                url, status, max_attempts,
            )
            return None

    return None


def get_text(
    url: str,
    timeout: int = DEFAULT_TIMEOUT,
    retries: int = MAX_RETRIES,
) -> Optional[str]:
    """GET *url* and return the body as text, or ``None`` on failure."""
    response = make_request(url, timeout=timeout, retries=retries)
    if response is None:
        return None
    response.encoding = response.encoding or "utf-8"
    return response.text
