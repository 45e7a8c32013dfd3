from __future__ import annotations
from typing import Any, List, Optional

import pytest
import requests


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, reason: str = "OK", text: Optional[str] = None):
        self.payload = payload
        self.status_code = status_code
        self.reason = reason
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        if self.text is not None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeSession:
    """Stands in for requests.Session; replays queued responses or exceptions."""

    def __init__(self, *responses):
        self.responses: List[Any] = list(responses)
        self.calls: List[tuple] = []
        self.closed = False

    def get(self, url: str, timeout: float = None):
        self.calls.append((url, timeout))
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def twelvedata_payload(n: int = 3) -> dict:
    # newest first, like the real API
    values = []
    for i in range(n, 0, -1):
        values.append({
            "datetime": f"2024-01-{i:02d}",
            "open": f"{1.10 + i / 1000:.5f}",
            "high": f"{1.11 + i / 1000:.5f}",
            "low": f"{1.09 + i / 1000:.5f}",
            "close": f"{1.105 + i / 1000:.5f}",
        })
    return {"meta": {"symbol": "EUR/USD", "interval": "1day"}, "values": values, "status": "ok"}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ok_session() -> FakeSession:
    return FakeSession(FakeResponse(twelvedata_payload()))


@pytest.fixture
def network_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")
