from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Union


@dataclass
class Candle:
    time: str  # ISO date or date-time, provider-native granularity
    open: float
    high: float
    low: float
    close: float

    def to_dict(self) -> Dict[str, Union[str, float]]:
        return asdict(self)


@dataclass(frozen=True)
class Timeframe:
    name: str          # generic alias handed to providers: daily / 60min / 15min
    route: str         # path segment under /api
    label: str
    demo_volatility: float


DAILY = Timeframe(name="daily", route="daily", label="daily", demo_volatility=0.01)
H1 = Timeframe(name="60min", route="h1", label="H1", demo_volatility=0.005)
M15 = Timeframe(name="15min", route="m15", label="M15", demo_volatility=0.002)

TIMEFRAMES = (DAILY, H1, M15)
