from __future__ import annotations
import logging
from typing import List, Optional

from .client import CandleClient
from .demo import DemoGenerator, DEMO_BASE_PRICE, DEMO_COUNT
from .errors import MissingParameter
from .models import Candle, Timeframe

logger = logging.getLogger("uvicorn.error")


def normalize_pair(pair: Optional[str]) -> str:
    p = (pair or "").strip().upper()
    if not p:
        raise MissingParameter()
    return p


class CandleService:
    def __init__(self, client: CandleClient, demo: DemoGenerator, demo_mode: bool = False):
        self.client = client
        self.demo = demo
        self.demo_mode = demo_mode

    async def get_candles(self, pair: Optional[str], tf: Timeframe) -> List[Candle]:
        p = normalize_pair(pair)

        if self.demo_mode:
            logger.info(f"[DEMO MODE] Generating {tf.label} data for {p}")
            return self.demo.generate(DEMO_COUNT, DEMO_BASE_PRICE, tf.demo_volatility)

        return await self.client.fetch_candles(p, tf.name)
