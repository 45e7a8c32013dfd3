from __future__ import annotations
import json
import logging
from typing import Any, List, Optional
from urllib.parse import urlencode

from .base import MarketDataProvider, split_pair, to_float
from ..errors import NoDataError, ParseError, ProviderError, RateLimitError
from ..models import Candle

logger = logging.getLogger("uvicorn.error")

BASE_URL = "https://www.alphavantage.co/query"

# Alpha Vantage puts quota messages in "Note" (older) or "Information" (newer)
_RATE_LIMIT_FIELDS = ("Note", "Information")


def _series_key(payload: dict) -> Optional[str]:
    return next((k for k in payload if "Time Series" in k), None)


class AlphaVantageProvider(MarketDataProvider):
    name = "AlphaVantage"
    api_key_env = "ALPHAVANTAGE_API_KEY"

    def resolve_url(self, pair: str, timeframe: str) -> str:
        base, quote = split_pair(pair)
        if timeframe == "daily":
            params = {"function": "FX_DAILY", "from_symbol": base, "to_symbol": quote}
        else:
            params = {"function": "FX_INTRADAY", "from_symbol": base, "to_symbol": quote, "interval": timeframe}
        params["apikey"] = self.require_api_key()
        return f"{BASE_URL}?{urlencode(params)}"

    def parse(self, payload: Any) -> List[Candle]:
        if not isinstance(payload, dict):
            raise ParseError("Unexpected AlphaVantage payload")

        if any(payload.get(f) for f in _RATE_LIMIT_FIELDS):
            raise RateLimitError(self.name)

        if payload.get("Error Message"):
            raise ProviderError(f"API_ERROR: {payload['Error Message']}")

        key = _series_key(payload)
        if key is None or not isinstance(payload[key], dict):
            logger.error(f"[NO VALUES] Response: {json.dumps(payload)[:300]}")
            raise NoDataError("NO_TIME_SERIES_DATA: AlphaVantage response has no time series data")

        out: List[Candle] = []
        for ts, ohlc in payload[key].items():
            if not isinstance(ohlc, dict):
                raise ParseError(f"Malformed candle record at {ts}")
            out.append(Candle(
                time=ts,
                open=to_float(ohlc, "1. open"),
                high=to_float(ohlc, "2. high"),
                low=to_float(ohlc, "3. low"),
                close=to_float(ohlc, "4. close"),
            ))
        # object keys come newest-first; ISO stamps sort lexically
        out.sort(key=lambda c: c.time)
        return out
