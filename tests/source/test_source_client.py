"""Tests for the block explorer client and the static hash source."""

import httpx
import pytest

from typing import TYPE_CHECKING

from blockhash_colors.exceptions import ResponseShapeError, SourceUnavailableError
from blockhash_colors.helpers.config import BlockchainConfig, RetryConfig
from blockhash_colors.source.client import (
    HashSourceClient,
    block_hash_of,
    extract_latest_block,
)
from blockhash_colors.source.static import StaticHashSource


if TYPE_CHECKING:
    from unittest.mock import AsyncMock

    from pytest_httpx import HTTPXMock


BASE_URL = "https://explorer.test/api"
BLOCKS_URL = f"{BASE_URL}/blocks"


def _client(max_retries: int = 2) -> HashSourceClient:
    return HashSourceClient(
        BlockchainConfig(rpc_url=BASE_URL),
        RetryConfig(max_retries=max_retries, timeout=5.0),
    )


class TestExtractLatestBlock:
    """Tests for extract_latest_block function."""

    def test_block_list(self) -> None:
        """Test that the first block of a list is used."""
        assert extract_latest_block([{"id": "02"}, {"id": "01"}]) == {"id": "02"}

    def test_hash_list(self) -> None:
        """Test a list of bare hashes."""
        assert extract_latest_block(["02", "01"]) == {"hash": "02"}

    def test_single_block(self) -> None:
        """Test a single block object."""
        assert extract_latest_block({"hash": "00ab", "height": 1}) == {
            "hash": "00ab",
            "height": 1,
        }

    def test_wrapped_block(self) -> None:
        """Test a block nested under ``block``."""
        assert extract_latest_block({"block": {"hash": "00ab"}}) == {"hash": "00ab"}

    def test_empty_list_raises(self) -> None:
        """Test that an empty list is rejected."""
        with pytest.raises(ResponseShapeError, match="empty block list"):
            extract_latest_block([])

    @pytest.mark.parametrize(
        "data", [{"height": 1}, [{"height": 1}], [None], {"block": "00ab"}]
    )
    def test_missing_hash_raises(self, data: object) -> None:
        """Test that payloads without a hash are rejected."""
        with pytest.raises(ResponseShapeError, match="No block hash found"):
            extract_latest_block(data)  # type: ignore[arg-type]


class TestBlockHashOf:
    """Tests for block_hash_of function."""

    def test_prefers_hash_over_id(self) -> None:
        """Test field precedence."""
        assert block_hash_of({"hash": "aa", "id": "bb"}) == "aa"
        assert block_hash_of({"id": "bb"}) == "bb"
        assert block_hash_of({}) == ""


class TestHashSourceClient:
    """Tests for HashSourceClient class."""

    @pytest.mark.asyncio
    async def test_fetch_latest_block(self, httpx_mock: "HTTPXMock") -> None:
        """Test fetching the latest block on the first attempt."""
        httpx_mock.add_response(
            url=BLOCKS_URL, json=[{"id": "00ab", "height": 850000}, {"id": "00cd"}]
        )

        block = await _client().fetch_latest_block()

        assert block == {"id": "00ab", "height": 850000}
        assert len(httpx_mock.get_requests()) == 1

    @pytest.mark.asyncio
    async def test_fetch_latest_hash(self, httpx_mock: "HTTPXMock") -> None:
        """Test fetching only the hash string."""
        httpx_mock.add_response(url=BLOCKS_URL, json={"hash": "00ef"})

        assert await _client().fetch_latest_hash() == "00ef"

    @pytest.mark.asyncio
    async def test_retries_server_errors(
        self, httpx_mock: "HTTPXMock", no_sleep: "AsyncMock"
    ) -> None:
        """Test that 5xx responses are retried until success."""
        httpx_mock.add_response(url=BLOCKS_URL, status_code=503)
        httpx_mock.add_response(url=BLOCKS_URL, status_code=500)
        httpx_mock.add_response(url=BLOCKS_URL, json=[{"id": "00ab"}])

        block = await _client(max_retries=2).fetch_latest_block()

        assert block == {"id": "00ab"}
        assert len(httpx_mock.get_requests()) == 3
        assert [c.args[0] for c in no_sleep.await_args_list] == [2.0, 4.0]

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise(
        self, httpx_mock: "HTTPXMock", no_sleep: "AsyncMock"
    ) -> None:
        """Test that max_retries + 1 failed attempts raise SourceUnavailableError."""
        for _ in range(3):
            httpx_mock.add_response(url=BLOCKS_URL, status_code=503)

        with pytest.raises(SourceUnavailableError, match="HTTP 503") as exc_info:
            await _client(max_retries=2).fetch_latest_block()

        assert exc_info.value.attempts == 3
        assert len(httpx_mock.get_requests()) == 3

    @pytest.mark.asyncio
    async def test_client_error_not_retried(
        self, httpx_mock: "HTTPXMock", no_sleep: "AsyncMock"
    ) -> None:
        """Test that a 4xx response fails after a single request."""
        httpx_mock.add_response(url=BLOCKS_URL, status_code=404)

        with pytest.raises(SourceUnavailableError, match="HTTP 404") as exc_info:
            await _client(max_retries=3).fetch_latest_block()

        assert exc_info.value.attempts == 1
        assert len(httpx_mock.get_requests()) == 1
        no_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_timeouts_retried(
        self, httpx_mock: "HTTPXMock", no_sleep: "AsyncMock"
    ) -> None:
        """Test that timeouts count as retryable attempts."""
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"), url=BLOCKS_URL)
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"), url=BLOCKS_URL)

        with pytest.raises(SourceUnavailableError, match="after 2 attempt") as exc_info:
            await _client(max_retries=1).fetch_latest_block()

        assert exc_info.value.attempts == 2

    @pytest.mark.asyncio
    async def test_malformed_payload_retried(
        self, httpx_mock: "HTTPXMock", no_sleep: "AsyncMock"
    ) -> None:
        """Test that a payload without a hash is retried, then reported."""
        httpx_mock.add_response(url=BLOCKS_URL, json=[])
        httpx_mock.add_response(url=BLOCKS_URL, json=[{"height": 1}])

        with pytest.raises(SourceUnavailableError, match="No block hash found"):
            await _client(max_retries=1).fetch_latest_block()

        assert len(httpx_mock.get_requests()) == 2

    @pytest.mark.asyncio
    async def test_undecodable_body_retried(
        self, httpx_mock: "HTTPXMock", no_sleep: "AsyncMock"
    ) -> None:
        """Test that a body that is not valid UTF-8 is retried, then reported."""
        httpx_mock.add_response(url=BLOCKS_URL, content=b'{"hash": "\xff\xfe"}')
        httpx_mock.add_response(url=BLOCKS_URL, content=b'{"hash": "\xff\xfe"}')

        with pytest.raises(SourceUnavailableError, match="not valid JSON") as exc_info:
            await _client(max_retries=1).fetch_latest_block()

        assert exc_info.value.attempts == 2
        assert len(httpx_mock.get_requests()) == 2

    @pytest.mark.asyncio
    async def test_fetch_block_undecodable_returns_none(
        self, httpx_mock: "HTTPXMock", no_sleep: "AsyncMock"
    ) -> None:
        """Test that an undecodable detail payload returns None."""
        httpx_mock.add_response(
            url=f"{BASE_URL}/block/00ab", content=b'{"size": "\xff"}'
        )

        assert await _client(max_retries=0).fetch_block("00ab") is None

    @pytest.mark.asyncio
    async def test_uses_injected_client(self, httpx_mock: "HTTPXMock") -> None:
        """Test that a shared AsyncClient is reused and left open."""
        httpx_mock.add_response(url=BLOCKS_URL, json={"id": "00ab"})

        async with httpx.AsyncClient() as shared:
            client = HashSourceClient(BlockchainConfig(rpc_url=BASE_URL), client=shared)
            await client.fetch_latest_block()
            assert not shared.is_closed

    @pytest.mark.asyncio
    async def test_fetch_block(self, httpx_mock: "HTTPXMock") -> None:
        """Test fetching block details."""
        httpx_mock.add_response(
            url=f"{BASE_URL}/block/00ab", json={"id": "00ab", "tx_count": 42}
        )

        assert await _client().fetch_block("00ab") == {"id": "00ab", "tx_count": 42}

    @pytest.mark.asyncio
    async def test_fetch_block_failure_returns_none(
        self, httpx_mock: "HTTPXMock", no_sleep: "AsyncMock"
    ) -> None:
        """Test that failed detail lookups return None instead of raising."""
        httpx_mock.add_response(url=f"{BASE_URL}/block/00ab", status_code=404)

        assert await _client().fetch_block("00ab") is None

    @pytest.mark.asyncio
    async def test_fetch_block_rejects_list(
        self, httpx_mock: "HTTPXMock", no_sleep: "AsyncMock"
    ) -> None:
        """Test that a non-object detail payload returns None."""
        httpx_mock.add_response(url=f"{BASE_URL}/block/00ab", json=["00ab"])
        httpx_mock.add_response(url=f"{BASE_URL}/block/00ab", json=["00ab"])

        assert await _client(max_retries=1).fetch_block("00ab") is None


class TestStaticHashSource:
    """Tests for StaticHashSource class."""

    @pytest.mark.asyncio
    async def test_hash_string(self) -> None:
        """Test that a hash string is served as a block."""
        assert await StaticHashSource("00ab").fetch_latest_block() == {"hash": "00ab"}

    @pytest.mark.asyncio
    async def test_block_list(self) -> None:
        """Test that a block list behaves like the explorer response."""
        source = StaticHashSource([{"id": "02"}, {"id": "01"}])
        assert await source.fetch_latest_block() == {"id": "02"}

    @pytest.mark.asyncio
    async def test_missing_hash_raises(self) -> None:
        """Test that a payload without a hash is unavailable."""
        with pytest.raises(SourceUnavailableError) as exc_info:
            await StaticHashSource([]).fetch_latest_block()

        assert exc_info.value.attempts == 1

    @pytest.mark.asyncio
    async def test_fetch_block(self) -> None:
        """Test block details lookup."""
        source = StaticHashSource("00ab", blocks={"00ab": {"tx_count": 3}})

        assert await source.fetch_block("00ab") == {"tx_count": 3}
        assert await source.fetch_block("00cd") is None
