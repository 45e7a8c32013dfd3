from __future__ import annotations
from typing import Optional

from .base import MarketDataProvider
from .alphavantage import AlphaVantageProvider
from .twelvedata import TwelveDataProvider
from ..config import Settings

PROVIDERS = {
    "twelvedata": TwelveDataProvider,
    "alphavantage": AlphaVantageProvider,
}

def get_provider(settings: Optional[Settings] = None) -> MarketDataProvider:
    settings = settings or Settings.from_env()
    cls = PROVIDERS.get(settings.data_provider)
    if cls is None:
        raise ValueError(f"Unknown DATA_PROVIDER '{settings.data_provider}'. Use one of: {', '.join(PROVIDERS)}")
    return cls(api_key=settings.api_key)
