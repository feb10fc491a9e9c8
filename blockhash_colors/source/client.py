"""Block explorer client supplying the latest block hash."""

from __future__ import annotations

from contextlib import asynccontextmanager

from typing import TYPE_CHECKING, Any

import httpx

from blockhash_colors.exceptions import ResponseShapeError, SourceUnavailableError
from blockhash_colors.helpers.config import BlockchainConfig, RetryConfig
from blockhash_colors.helpers.http import create_http_client, get_json, retry_with_backoff
from blockhash_colors.helpers.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from blockhash_colors.helpers.http_models import JsonResponse


logger = get_logger(__name__)


def _has_hash(block: dict[str, Any]) -> bool:
    return bool(block.get("hash") or block.get("id"))


def extract_latest_block(data: JsonResponse) -> dict[str, Any]:
    """Pick the latest block object out of an explorer response.

    Accepted shapes:

    - ``{"hash": ...}`` or ``{"id": ...}``: a single block
    - ``{"block": {"hash": ...}}``: a wrapped block
    - ``[{"id": ...}, ...]``: blocks newest first, element 0 is used
    - ``["<hash>", ...]``: bare hashes newest first

    Args:
        data: Decoded JSON payload

    Returns:
        dict[str, Any]: Block object carrying a ``hash`` or ``id`` field

    Raises:
        ResponseShapeError: If no block hash can be located
    """
    if isinstance(data, list):
        if not data:
            msg = "Explorer returned an empty block list"
            raise ResponseShapeError(msg)
        first = data[0]
        if isinstance(first, str) and first:
            return {"hash": first}
        if isinstance(first, dict) and _has_hash(first):
            return first
    elif isinstance(data, dict):
        if _has_hash(data):
            return data
        wrapped = data.get("block")
        if isinstance(wrapped, dict) and wrapped.get("hash"):
            return wrapped

    msg = f"No block hash found in response: {str(data)[:100]}"
    raise ResponseShapeError(msg)


def block_hash_of(block: dict[str, Any]) -> str:
    """Return the raw hash of a block object (``hash`` preferred over ``id``)."""
    return str(block.get("hash") or block.get("id") or "")


class HashSourceClient:
    """Fetches blocks from a REST block explorer with retry and backoff."""

    def __init__(
        self,
        blockchain: BlockchainConfig,
        retry: RetryConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the hash source client.

        Args:
            blockchain: Explorer base URL and latest-block endpoint
            retry: Retry policy and per-attempt timeout (defaults apply when omitted)
            client: Optional shared HTTP client; one is created per call otherwise
        """
        self.blockchain = blockchain
        self.retry = retry or RetryConfig()
        self._client = client

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with create_http_client(timeout=self.retry.timeout) as client:
            yield client

    def _with_retry(
        self, func: Callable[[], Awaitable[dict[str, Any]]]
    ) -> Callable[[], Awaitable[dict[str, Any]]]:
        return retry_with_backoff(
            max_retries=self.retry.max_retries,
            base_delay=self.retry.initial_delay,
            max_delay=self.retry.max_delay,
            backoff_multiplier=self.retry.backoff_multiplier,
        )(func)

    async def fetch_latest_block(self) -> dict[str, Any]:
        """Fetch the latest block object.

        Returns:
            dict[str, Any]: Block object with a ``hash`` or ``id`` field

        Raises:
            SourceUnavailableError: After exhausting retries on 5xx, network
                failures, timeouts or malformed payloads, or immediately on 4xx

        Example:
            ```python
            client = HashSourceClient(BlockchainConfig())
            block = await client.fetch_latest_block()
            print(block["id"], block.get("height"))
            ```
        """
        url = self.blockchain.latest_block_url
        attempts = 0

        async with self._session() as client:

            async def fetch_latest() -> dict[str, Any]:
                nonlocal attempts
                attempts += 1
                data = await get_json(client, url)
                return extract_latest_block(data)

            try:
                block = await self._with_retry(fetch_latest)()
            except httpx.HTTPStatusError as e:
                msg = (
                    f"HTTP {e.response.status_code} from {url} "
                    f"after {attempts} attempt(s)"
                )
                raise SourceUnavailableError(msg, attempts=attempts) from e
            except (httpx.HTTPError, ResponseShapeError) as e:
                msg = f"Failed to fetch latest block after {attempts} attempt(s): {e}"
                raise SourceUnavailableError(msg, attempts=attempts) from e

        logger.info("Latest block hash: %s", block_hash_of(block))
        return block

    async def fetch_latest_hash(self) -> str:
        """Fetch the raw hash string of the latest block.

        Raises:
            SourceUnavailableError: See :meth:`fetch_latest_block`
        """
        return block_hash_of(await self.fetch_latest_block())

    async def fetch_block(self, block_hash: str) -> dict[str, Any] | None:
        """Fetch full details of one block, best effort.

        Args:
            block_hash: Hash of the block to look up

        Returns:
            dict[str, Any] | None: Block object, or None if it could not be fetched
        """
        url = f"{self.blockchain.rpc_url.rstrip('/')}/block/{block_hash}"

        async with self._session() as client:

            async def fetch_details() -> dict[str, Any]:
                data = await get_json(client, url)
                if not isinstance(data, dict):
                    msg = f"Expected a block object from {url}"
                    raise ResponseShapeError(msg)
                return data

            try:
                return await self._with_retry(fetch_details)()
            except (httpx.HTTPError, ResponseShapeError) as e:
                logger.warning("Failed to fetch block %s: %s", block_hash, e)
                return None


__all__ = ["HashSourceClient", "block_hash_of", "extract_latest_block"]
