from __future__ import annotations
import logging
import json
from typing import Any, List
from urllib.parse import urlencode

from .base import MarketDataProvider, split_pair, to_float
from ..errors import NoDataError, ProviderError, RateLimitError, ParseError
from ..models import Candle

logger = logging.getLogger("uvicorn.error")

BASE_URL = "https://api.twelvedata.com/time_series"
OUTPUT_SIZE = 100

_TIMEFRAME_MAP = {
    "daily": "1day",
    "60min": "1h",
    "15min": "15min",
}


class TwelveDataProvider(MarketDataProvider):
    name = "Twelve Data"
    api_key_env = "TWELVEDATA_API_KEY"

    def resolve_url(self, pair: str, timeframe: str) -> str:
        base, quote = split_pair(pair)
        params = {
            "symbol": f"{base}/{quote}",
            "interval": _TIMEFRAME_MAP.get(timeframe, timeframe),
            "outputsize": str(OUTPUT_SIZE),
            "apikey": self.require_api_key(),
        }
        return f"{BASE_URL}?{urlencode(params, safe='/')}"

    def parse(self, payload: Any) -> List[Candle]:
        if not isinstance(payload, dict):
            raise ParseError("Unexpected Twelve Data payload")

        # rate limit replies also carry status=error, so check the code first
        if payload.get("code") == 429:
            raise RateLimitError(self.name)

        if payload.get("status") == "error":
            logger.error(f"[TWELVE DATA ERROR] {payload.get('message')}")
            raise ProviderError(f"API_ERROR: {payload.get('message')}")

        values = payload.get("values")
        if not isinstance(values, list):
            logger.error(f"[NO VALUES] Response: {json.dumps(payload)[:300]}")
            raise NoDataError("NO_TIME_SERIES_DATA: Twelve Data response has no time series data")

        out: List[Candle] = []
        for row in reversed(values):  # newest-first upstream
            if not isinstance(row, dict) or not row.get("datetime"):
                raise ParseError("Malformed candle record: missing 'datetime'")
            out.append(Candle(
                time=row["datetime"],
                open=to_float(row, "open"),
                high=to_float(row, "high"),
                low=to_float(row, "low"),
                close=to_float(row, "close"),
            ))
        return out
