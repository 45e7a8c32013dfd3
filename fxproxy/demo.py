from __future__ import annotations
import random
from datetime import date, timedelta
from typing import Callable, List, Optional

from .models import Candle

DEMO_COUNT = 100
DEMO_BASE_PRICE = 1.1500


class DemoGenerator:
    """Random-walk candles for running without an API key.

    Stamps are one calendar day apart ending today, for every timeframe;
    intraday demo series only differ by volatility.
    """

    def __init__(self, rng: Optional[random.Random] = None, today: Optional[Callable[[], date]] = None):
        self.rng = rng or random.Random()
        self.today = today or date.today

    def generate(self, count: int, base_price: float = DEMO_BASE_PRICE, volatility: float = 0.01) -> List[Candle]:
        rnd = self.rng.random
        last_day = self.today()
        candles: List[Candle] = []
        price = base_price
        for i in range(count):
            price += (rnd() - 0.5) * volatility
            o = price
            c = o + (rnd() - 0.5) * volatility * 0.5
            h = max(o, c) + rnd() * volatility * 0.3
            l = min(o, c) - rnd() * volatility * 0.3
            day = last_day - timedelta(days=count - 1 - i)
            candles.append(Candle(
                time=day.isoformat(),
                open=round(o, 5),
                high=round(h, 5),
                low=round(l, 5),
                close=round(c, 5),
            ))
            price = c
        return candles
