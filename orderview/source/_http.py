"""
HTTP source — GET the order list from an order service.

Transport errors, timeouts and bad payloads all come back as
Error(LoadFailure); list_orders() never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import aiohttp
from pydantic import ValidationError
from combinators import lift as L

from orderview._types import Lazy
from orderview.config import SourceConfig
from orderview.domain import Order
from orderview.source._codec import decode_orders_json
from orderview.store import LoadFailure, LoadFailureKind

logger = logging.getLogger(__name__)


def classify(exc: Exception) -> LoadFailure:
    """Map an exception from a request to a LoadFailure."""
    if isinstance(exc, TimeoutError):
        return LoadFailure(LoadFailureKind.TIMEOUT, "request timed out", exc)
    if isinstance(exc, aiohttp.ClientResponseError):
        return LoadFailure(LoadFailureKind.TRANSPORT, f"HTTP {exc.status}: {exc.message}", exc)
    if isinstance(exc, aiohttp.ClientError):
        return LoadFailure(LoadFailureKind.TRANSPORT, f"{type(exc).__name__}: {exc}", exc)
    if isinstance(exc, ValidationError):
        return LoadFailure(
            LoadFailureKind.MALFORMED, f"{exc.error_count()} invalid field(s) in order payload", exc
        )
    return LoadFailure.from_exception(exc)


class HttpSource:
    """
    OrderSource backed by an HTTP endpoint.

    The session is created lazily and owned by the source unless one is
    passed in. Use as an async context manager to close it.

    Example:
        async with HttpSource(SourceConfig("https://shop.example.com")) as source:
            store = OrderStore(source)
            await store.load()
    """

    def __init__(
        self,
        config: SourceConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=config.timeout_seconds)

    async def __aenter__(self) -> HttpSource:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def url(self) -> str:
        return self._config.url

    async def initialize(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
            logger.debug("HTTP session created for %s", self.url)

    async def close(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None
            logger.debug("HTTP session closed for %s", self.url)

    def list_orders(self) -> Lazy[Sequence[Order], LoadFailure]:
        return L.catching_async(self._get, on_error=classify)

    async def _get(self) -> tuple[Order, ...]:
        if self._session is None:
            await self.initialize()
        assert self._session is not None

        async with self._session.get(
            self.url,
            headers={"Accept": "application/json"},
            timeout=self._timeout,
        ) as response:
            response.raise_for_status()
            body = await response.read()

        orders = decode_orders_json(body)
        logger.debug("Fetched %d orders from %s", len(orders), self.url)
        return orders


__all__ = ("HttpSource", "classify")
