from __future__ import annotations
import logging
from typing import Any, List, Optional

import requests
from fastapi.concurrency import run_in_threadpool

from .cache import TTLCache
from .errors import FxProxyError, ParseError, TransportError
from .models import Candle
from .providers.base import MarketDataProvider

logger = logging.getLogger("uvicorn.error")

REQUEST_TIMEOUT = 10  # seconds


class CandleClient:
    """Cache-then-network candle fetcher for a single upstream provider.

    Only the blocking HTTP call leaves the event loop; cache reads and
    writes happen on the loop thread, so the cache needs no lock. Two
    concurrent misses on the same key both go upstream and the later
    write wins.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache: TTLCache,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.provider = provider
        self.cache = cache
        self.session = session or requests.Session()
        self.timeout = timeout

    async def fetch_candles(self, pair: str, timeframe: str) -> List[Candle]:
        key = self.provider.cache_key(pair, timeframe)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        url = self.provider.resolve_url(pair, timeframe)
        try:
            payload = await run_in_threadpool(self._get_json, url)
            candles = self.provider.parse(payload)
        except FxProxyError as e:
            logger.error(f"[FETCH ERROR] {self.provider.name} - {pair} {timeframe}: {e}")
            raise

        self.cache.set(key, candles)
        logger.info(f"[API CALL] {self.provider.name} - {pair} {timeframe}")
        return candles

    def _get_json(self, url: str) -> Any:
        try:
            r = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Network error: {e.__class__.__name__}") from e

        if not r.ok:
            raise TransportError(f"HTTP {r.status_code}: {r.reason}")

        try:
            return r.json()
        except ValueError as e:
            raise ParseError(f"Invalid JSON from {self.provider.name}") from e
