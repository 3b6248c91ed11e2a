from __future__ import annotations

import asyncio
from typing import Optional, Sequence, cast

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from hn_distill import constants
from hn_distill.constants import (
    CONCURRENT_FETCHES,
    HN_API_BASE,
    ITEM_CONNECT_TIMEOUT,
    ITEM_FETCH_TIMEOUT,
    USER_AGENT,
)
from hn_distill.logging_config import get_logger
from hn_distill.models import Item, ItemDict

logger = get_logger(__name__)


class TransientStatusError(RuntimeError):
    """Raised for a 5xx response that is worth another attempt."""


class RetryingTransport(httpx.AsyncBaseTransport):
    """
    Retry connection failures, timeouts and 5xx responses.

    The last attempt's response is returned as-is, so a persistent 5xx
    still reaches the caller's ``raise_for_status``.
    """

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        *,
        retries: Optional[int] = None,
        delay: Optional[float] = None,
    ) -> None:
        self.transport = transport or httpx.AsyncHTTPTransport()
        self.retries = constants.ITEM_FETCH_RETRIES if retries is None else retries
        self.delay = constants.ITEM_RETRY_DELAY if delay is None else delay

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retries + 1),
            retry=retry_if_exception_type((httpx.TransportError, TransientStatusError)),
            wait=wait_fixed(self.delay),
            reraise=True,
        ):
            with attempt:
                resp = await self.transport.handle_async_request(request)
                number = attempt.retry_state.attempt_number
                if resp.status_code >= 500 and number <= self.retries:
                    await resp.aclose()
                    logger.debug(
                        "retrying_request",
                        url=str(request.url),
                        status=resp.status_code,
                        attempt=number,
                    )
                    raise TransientStatusError(f"HTTP {resp.status_code} for {request.url}")
                return resp
        raise AssertionError("unreachable")

    async def aclose(self) -> None:
        await self.transport.aclose()


class HNClient:
    """Thin async client for the official HN Firebase item API."""

    BASE_URL: str = HN_API_BASE

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        self.client: httpx.AsyncClient = client or httpx.AsyncClient(
            base_url=self.BASE_URL,
            headers={"User-Agent": USER_AGENT},
            timeout=httpx.Timeout(ITEM_FETCH_TIMEOUT, connect=ITEM_CONNECT_TIMEOUT),
            transport=RetryingTransport(),
        )

    async def fetch_item(self, item_id: int) -> Optional[Item]:
        """Fetch one item. Every failure mode collapses to None."""
        try:
            resp: httpx.Response = await self.client.get(f"/item/{item_id}.json")
            resp.raise_for_status()
            return Item.from_dict(cast(ItemDict, resp.json()))
        except Exception as e:
            logger.debug(f"Failed to fetch item {item_id}: {e}")
            return None

    async def fetch_batch(
        self,
        ids: Sequence[int],
        concurrency: int = CONCURRENT_FETCHES,
    ) -> dict[int, Item]:
        """
        Fetch many items, `concurrency` at a time.

        Chunks run one after another; requests inside a chunk run together and
        the next chunk only starts once all of them have settled. Failed IDs
        are missing from the result.
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")

        results: dict[int, Item] = {}
        for i in range(0, len(ids), concurrency):
            chunk = list(ids[i : i + concurrency])
            items = await asyncio.gather(*[self.fetch_item(sid) for sid in chunk])
            for sid, item in zip(chunk, items):
                if item is not None:
                    results[sid] = item
        return results

    async def close(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> HNClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
