from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from ..errors import MissingApiKeyError, ParseError
from ..models import Candle


def split_pair(pair: str) -> Tuple[str, str]:
    """EURUSD -> ("EUR", "USD")."""
    p = (pair or "").strip().upper()
    return p[0:3], p[3:6]


def to_float(row: Dict[str, Any], field: str) -> float:
    try:
        return float(row[field])
    except (KeyError, TypeError, ValueError):
        raise ParseError(f"Malformed candle record: bad or missing '{field}'")


class MarketDataProvider(ABC):
    """One upstream market-data API.

    Adapters only know how to build a request URL and how to read the
    provider's payload; caching and the HTTP call live in CandleClient.
    """
    name: str = "Upstream"
    api_key_env: str = ""

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key

    def cache_key(self, pair: str, timeframe: str) -> str:
        return f"{pair.strip().upper()}-{timeframe}"

    def require_api_key(self) -> str:
        if not self.api_key:
            raise MissingApiKeyError(f"{self.api_key_env} missing. Set env or enable DEMO_MODE.")
        return self.api_key

    @abstractmethod
    def resolve_url(self, pair: str, timeframe: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def parse(self, payload: Any) -> List[Candle]:
        """Classify the decoded JSON body and map it to candles, or raise a FxProxyError."""
        raise NotImplementedError
