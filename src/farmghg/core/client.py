"""HTTP client helpers for external data providers."""

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

# =============================================================================
# Retry Configuration
# =============================================================================

MAX_RETRIES = 3
MIN_WAIT_SECONDS = 1
MAX_WAIT_SECONDS = 10


# =============================================================================
# Exceptions
# =============================================================================


class RetryableError(Exception):
    """Transient error that should be retried (timeouts, connection errors, 5xx)."""

    pass


class ExternalAPIError(Exception):
    """Non-retryable error from an external data provider."""

    pass


# =============================================================================
# Client Functions
# =============================================================================


async def http_get(url: str, params: dict | None = None, timeout: float = 30) -> httpx.Response:
    """Perform a single GET request without retry.

    Raises:
        httpx.HTTPStatusError: If the response status is 4xx/5xx
    """
    async with httpx.AsyncClient() as client:
        response = await client.get(url, params=params, timeout=timeout)
        response.raise_for_status()
        return response


@retry(
    retry=retry_if_exception_type(RetryableError),
    stop=stop_after_attempt(MAX_RETRIES),
    wait=wait_exponential_jitter(initial=MIN_WAIT_SECONDS, max=MAX_WAIT_SECONDS, jitter=2),
    reraise=True,
)
async def _get_with_retry(url: str, params: dict | None, timeout: float) -> httpx.Response:
    try:
        return await http_get(url, params=params, timeout=timeout)
    except httpx.TimeoutException as e:
        raise RetryableError(f"Request timed out: {e}") from e
    except httpx.ConnectError as e:
        raise RetryableError(f"Connection failed: {e}") from e
    except httpx.HTTPStatusError as e:
        body = e.response.text
        if e.response.status_code >= 500:
            # Server error - retry with backoff
            raise RetryableError(f"HTTP {e.response.status_code}: {body}") from e
        # Client error (4xx) - don't retry, include full response
        raise ExternalAPIError(f"HTTP {e.response.status_code}: {body}") from e


async def http_get_with_retry(url: str, params: dict | None = None, timeout: float = 30) -> httpx.Response:
    """GET with automatic retry on transient errors.

    Retries on:
    - Timeouts
    - Connection errors
    - HTTP 5xx errors

    Args:
        url: Endpoint URL
        params: Query parameters
        timeout: Per-request timeout in seconds

    Returns:
        The successful httpx.Response

    Raises:
        ExternalAPIError: On 4xx responses or once all retries are exhausted
    """
    try:
        return await _get_with_retry(url, params, timeout)
    except RetryableError as e:
        raise ExternalAPIError(f"Giving up after {MAX_RETRIES} attempts: {e}") from e
