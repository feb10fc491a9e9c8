"""HTTP client utilities and helpers."""

from __future__ import annotations

from asyncio import sleep
from functools import wraps
import json

from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

import httpx

from blockhash_colors.exceptions import ResponseShapeError
from blockhash_colors.helpers.constants import (
    DEFAULT_TIMEOUT,
    MAX_RETRIES,
    RETRY_BACKOFF_MULTIPLIER,
    RETRY_BASE_DELAY,
    RETRY_MAX_DELAY,
)
from blockhash_colors.helpers.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from blockhash_colors.helpers.http_models import JsonResponse


logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def is_retryable(error: BaseException) -> bool:
    """Decide whether a failed attempt is worth repeating.

    Server errors (5xx), transport failures (connection errors and
    timeouts) and unparseable payloads are transient. Client errors (4xx)
    are not: the same request would be rejected again.

    Args:
        error: Exception raised by the attempt

    Returns:
        True if the attempt should be retried
    """
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    if isinstance(error, httpx.TransportError):
        return True
    return isinstance(
        error, ResponseShapeError | json.JSONDecodeError | UnicodeDecodeError
    )


def backoff_delay(
    attempt: int,
    base_delay: float = RETRY_BASE_DELAY,
    multiplier: float = RETRY_BACKOFF_MULTIPLIER,
    max_delay: float = RETRY_MAX_DELAY,
) -> float:
    """Delay in seconds to wait before ``attempt`` (1 for the first retry).

    Example:
        >>> [backoff_delay(k) for k in (1, 2, 3, 4)]
        [2.0, 4.0, 8.0, 10.0]
    """
    return min(max_delay, base_delay * multiplier**attempt)


def retry_with_backoff(
    max_retries: int = MAX_RETRIES,
    base_delay: float = RETRY_BASE_DELAY,
    max_delay: float = RETRY_MAX_DELAY,
    *,
    backoff_multiplier: float = RETRY_BACKOFF_MULTIPLIER,
    retry_if: Callable[[BaseException], bool] = is_retryable,
    log_errors: bool = True,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator to retry async functions with exponential backoff.

    Args:
        max_retries: Additional attempts after the first one (default: 3)
        base_delay: Initial delay in seconds (default: 1.0)
        max_delay: Maximum delay between retries (default: 10.0)
        backoff_multiplier: Growth factor per attempt (default: 2.0)
        retry_if: Predicate deciding if an exception is transient
        log_errors: Whether to log retry attempts (default: True)

    Returns:
        Decorated function making at most ``max_retries + 1`` attempts

    Example:
        ```python
        from blockhash_colors.helpers.http import retry_with_backoff

        @retry_with_backoff(max_retries=3, base_delay=1.0)
        async def fetch_data(client: httpx.AsyncClient, url: str) -> dict:
            response = await client.get(url)
            response.raise_for_status()
            return response.json()

        # Will retry up to 3 times with delays of 2s, 4s, 8s
        ```
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            total_attempts = max_retries + 1
            last_exception: Exception | None = None

            for attempt in range(total_attempts):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not retry_if(e):
                        if log_errors:
                            logger.warning(
                                "%s failed with non-retryable error: %s",
                                func.__name__,
                                e,
                            )
                        raise
                    last_exception = e
                    if log_errors and attempt < total_attempts - 1:
                        logger.warning(
                            "%s error (attempt %d/%d): %s",
                            func.__name__,
                            attempt + 1,
                            total_attempts,
                            e,
                        )

                # Don't sleep after the last attempt
                if attempt < total_attempts - 1:
                    delay = backoff_delay(
                        attempt + 1, base_delay, backoff_multiplier, max_delay
                    )
                    await sleep(delay)

            if last_exception:
                if log_errors:
                    logger.error(
                        "%s failed after %d attempts", func.__name__, total_attempts
                    )
                raise last_exception

            # Only reachable with a negative max_retries
            msg = f"{func.__name__} failed without exception"
            raise RuntimeError(msg)

        return wrapper

    return decorator


def create_http_client(
    timeout: float = DEFAULT_TIMEOUT, **kwargs: Any
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient.

    Args:
        timeout: Per-request timeout in seconds (default: DEFAULT_TIMEOUT)
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance
    """
    return httpx.AsyncClient(timeout=timeout, **kwargs)


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float | None = None,
) -> JsonResponse:
    """GET a URL and decode its JSON body.

    Args:
        client: HTTP client instance
        url: URL to fetch
        timeout: Optional timeout override

    Returns:
        Parsed JSON object or array

    Raises:
        httpx.HTTPStatusError: On a 4xx or 5xx response
        httpx.TransportError: On connection failures and timeouts
        ResponseShapeError: If the body is not valid JSON or not a JSON object or array
    """
    if timeout is None:
        response = await client.get(url)
    else:
        response = await client.get(url, timeout=timeout)
    response.raise_for_status()

    try:
        data = response.json()
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError
        msg = f"Response from {url} is not valid JSON: {e}"
        raise ResponseShapeError(msg) from e

    if not isinstance(data, dict | list):
        msg = f"Unexpected JSON payload type from {url}: {type(data).__name__}"
        raise ResponseShapeError(msg)
    return data


__all__ = [
    "backoff_delay",
    "create_http_client",
    "get_json",
    "is_retryable",
    "retry_with_backoff",
]
