from __future__ import annotations
from typing import List

from pydantic import BaseModel


class CandleItem(BaseModel):
    time: str
    open: float
    high: float
    low: float
    close: float


class CandlesResponse(BaseModel):
    candles: List[CandleItem]


class ErrorResponse(BaseModel):
    error: str
    message: str


class HealthResponse(BaseModel):
    status: str
    provider: str
    mode: str
    cache_size: int
    uptime: float


class CacheClearResponse(BaseModel):
    message: str
    cache_size: int


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing pair parameter"},
    429: {"model": ErrorResponse, "description": "Upstream API limit reached"},
    500: {"model": ErrorResponse, "description": "Upstream or server failure"},
}
