# fxproxy/main.py
from __future__ import annotations
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import requests
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .cache import TTLCache
from .client import CandleClient
from .config import Settings
from .demo import DemoGenerator
from .errors import FxProxyError, RateLimitError
from .models import DAILY, H1, M15, Timeframe
from .providers.base import MarketDataProvider
from .providers.factory import get_provider
from .schemas import ERROR_RESPONSES, CacheClearResponse, CandlesResponse, HealthResponse
from .service import CandleService

logger = logging.getLogger("uvicorn.error")


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": code, "message": message})


def log_banner(settings: Settings, provider: MarketDataProvider) -> None:
    mode = "DEMO (Generated Data)" if settings.demo_mode else f"LIVE ({provider.name})"
    logger.info(
        "FOREX TRADING BACKEND - READY\n"
        f"  Server:     http://{settings.host}:{settings.port}\n"
        f"  Mode:       {mode}\n"
        f"  Cache TTL:  {settings.cache_ttl:g}s\n"
        f"  API Key:    {'Loaded' if settings.api_key else 'Missing'}\n"
        f"  Provider:   {provider.name}\n"
        "  Endpoints:\n"
        "    GET  /api/daily?pair=EURUSD\n"
        "    GET  /api/h1?pair=EURUSD\n"
        "    GET  /api/m15?pair=EURUSD\n"
        "    GET  /api/health\n"
        "    POST /api/cache/clear"
    )
    if settings.demo_mode:
        logger.warning("DEMO MODE ACTIVE - Using generated data")
    elif not settings.api_key:
        logger.warning(f"Missing {provider.api_key_env}")


def create_app(
    settings: Optional[Settings] = None,
    *,
    provider: Optional[MarketDataProvider] = None,
    cache: Optional[TTLCache] = None,
    session: Optional[requests.Session] = None,
    demo: Optional[DemoGenerator] = None,
    clock=time.monotonic,
) -> FastAPI:
    settings = settings or Settings.from_env()
    provider = provider or get_provider(settings)
    cache = cache or TTLCache(settings.cache_ttl, clock=clock)
    client = CandleClient(provider, cache, session=session)
    service = CandleService(client, demo or DemoGenerator(), demo_mode=settings.demo_mode)
    started_at = clock()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_banner(settings, provider)
        yield
        client.session.close()

    app = FastAPI(title="FX Candle Proxy", lifespan=lifespan)
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.state.settings = settings
    app.state.cache = cache
    app.state.service = service

    async def serve_candles(pair: Optional[str], tf: Timeframe) -> JSONResponse:
        try:
            candles = await service.get_candles(pair, tf)
        except RateLimitError as e:
            return _error(e.status_code, e.code, str(e))
        except FxProxyError as e:
            if e.status_code >= 500:
                logger.error(f"[ERROR] /api/{tf.route} - {e}")
            return _error(e.status_code, e.code, str(e))
        except Exception as e:
            logger.exception(f"[ERROR] /api/{tf.route} failed")
            return _error(500, "SERVER_ERROR", str(e) or e.__class__.__name__)
        return JSONResponse(content={"candles": [c.to_dict() for c in candles]})

    @app.get("/api/daily", response_model=CandlesResponse, responses=ERROR_RESPONSES)
    async def daily(pair: Optional[str] = None):
        return await serve_candles(pair, DAILY)

    @app.get("/api/h1", response_model=CandlesResponse, responses=ERROR_RESPONSES)
    async def h1(pair: Optional[str] = None):
        return await serve_candles(pair, H1)

    @app.get("/api/m15", response_model=CandlesResponse, responses=ERROR_RESPONSES)
    async def m15(pair: Optional[str] = None):
        return await serve_candles(pair, M15)

    @app.get("/api/health", response_model=HealthResponse)
    def health():
        return {
            "status": "OK",
            "provider": provider.name,
            "mode": "DEMO" if settings.demo_mode else "LIVE",
            "cache_size": cache.size(),
            "uptime": clock() - started_at,
        }

    @app.post("/api/cache/clear", response_model=CacheClearResponse)
    def clear_cache():
        cache.clear()
        return {"message": "Cache cleared successfully", "cache_size": cache.size()}

    return app


app = create_app()


def run() -> None:
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)
    uvicorn.run("fxproxy.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
