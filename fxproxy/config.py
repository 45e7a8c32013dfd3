from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

DEFAULT_CACHE_TTL_MS = 5 * 60 * 1000  # 5 minutes

def env(key: str, default: str | None = None) -> str | None:
    return os.getenv(key, default)

def env_bool(key: str, default: bool = False) -> bool:
    raw = env(key)
    if raw is None:
        return default
    return raw.strip().lower() == "true"

def env_int(key: str, default: int) -> int:
    try:
        return int(env(key, str(default)))
    except (TypeError, ValueError):
        return default

def cache_ttl_ms() -> int:
    ttl = env_int("CACHE_TTL", DEFAULT_CACHE_TTL_MS)
    return ttl if ttl > 0 else DEFAULT_CACHE_TTL_MS

DATA_PROVIDER = (env("DATA_PROVIDER", "twelvedata") or "twelvedata").lower()
TWELVEDATA_API_KEY = env("TWELVEDATA_API_KEY")
ALPHAVANTAGE_API_KEY = env("ALPHAVANTAGE_API_KEY")

PORT = env_int("PORT", 3000)
HOST = env("HOST", "0.0.0.0")
CACHE_TTL_MS = cache_ttl_ms()
DEMO_MODE = env_bool("DEMO_MODE")
LOG_LEVEL = (env("LOG_LEVEL", "INFO") or "INFO").upper()


@dataclass
class Settings:
    data_provider: str = DATA_PROVIDER
    twelvedata_api_key: Optional[str] = TWELVEDATA_API_KEY
    alphavantage_api_key: Optional[str] = ALPHAVANTAGE_API_KEY
    host: str = HOST
    port: int = PORT
    cache_ttl_ms: int = CACHE_TTL_MS
    demo_mode: bool = DEMO_MODE
    log_level: str = LOG_LEVEL

    @property
    def cache_ttl(self) -> float:
        """Cache TTL in seconds."""
        return self.cache_ttl_ms / 1000.0

    @property
    def api_key(self) -> Optional[str]:
        if self.data_provider == "alphavantage":
            return self.alphavantage_api_key
        return self.twelvedata_api_key

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_provider=(env("DATA_PROVIDER", "twelvedata") or "twelvedata").lower(),
            twelvedata_api_key=env("TWELVEDATA_API_KEY"),
            alphavantage_api_key=env("ALPHAVANTAGE_API_KEY"),
            host=env("HOST", "0.0.0.0"),
            port=env_int("PORT", 3000),
            cache_ttl_ms=cache_ttl_ms(),
            demo_mode=env_bool("DEMO_MODE"),
            log_level=(env("LOG_LEVEL", "INFO") or "INFO").upper(),
        )
