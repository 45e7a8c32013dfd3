import asyncio

import pytest

from fxproxy.cache import TTLCache
from fxproxy.client import CandleClient, REQUEST_TIMEOUT
from fxproxy.errors import NoDataError, ParseError, RateLimitError, TransportError
from fxproxy.providers.twelvedata import TwelveDataProvider

from conftest import FakeClock, FakeResponse, FakeSession, twelvedata_payload


def _client(session, clock=None, ttl=300):
    cache = TTLCache(ttl=ttl, clock=clock or FakeClock())
    return CandleClient(TwelveDataProvider(api_key="td-key"), cache, session=session)


def _fetch(client, pair="EURUSD", timeframe="daily"):
    return asyncio.run(client.fetch_candles(pair, timeframe))


def test_second_fetch_within_ttl_hits_cache(ok_session):
    client = _client(ok_session)

    first = _fetch(client)
    second = _fetch(client)

    assert first == second
    assert len(ok_session.calls) == 1
    assert ok_session.calls[0][1] == REQUEST_TIMEOUT


def test_fetch_after_ttl_goes_upstream_again(ok_session):
    clock = FakeClock()
    client = _client(ok_session, clock=clock, ttl=300)

    _fetch(client)
    clock.advance(301)
    _fetch(client)

    assert len(ok_session.calls) == 2


def test_cache_hit_does_not_refresh_entry(ok_session):
    clock = FakeClock()
    client = _client(ok_session, clock=clock, ttl=300)

    _fetch(client)
    clock.advance(200)
    _fetch(client)
    clock.advance(200)
    _fetch(client)

    assert len(ok_session.calls) == 2


def test_timeframes_are_cached_separately(ok_session):
    client = _client(ok_session)

    _fetch(client, timeframe="daily")
    _fetch(client, timeframe="60min")

    assert len(ok_session.calls) == 2
    assert client.cache.size() == 2


def test_result_is_oldest_first(ok_session):
    candles = _fetch(_client(ok_session))
    times = [c.time for c in candles]

    assert times == sorted(times)


def test_http_error_is_transport_error():
    session = FakeSession(FakeResponse(status_code=503, reason="Service Unavailable"))
    client = _client(session)

    with pytest.raises(TransportError, match="HTTP 503: Service Unavailable"):
        _fetch(client)
    assert client.cache.size() == 0


def test_network_error_is_transport_error(network_error):
    with pytest.raises(TransportError, match="ConnectionError"):
        _fetch(_client(FakeSession(network_error)))


def test_invalid_json_is_parse_error():
    with pytest.raises(ParseError):
        _fetch(_client(FakeSession(FakeResponse(text="<html>oops</html>"))))


def test_rate_limit_is_not_cached():
    session = FakeSession(
        FakeResponse({"code": 429, "message": "out of credits", "status": "error"}),
        FakeResponse(twelvedata_payload()),
    )
    client = _client(session)

    with pytest.raises(RateLimitError):
        _fetch(client)
    assert client.cache.size() == 0

    assert len(_fetch(client)) == 3
    assert len(session.calls) == 2


def test_missing_series_is_no_data():
    with pytest.raises(NoDataError):
        _fetch(_client(FakeSession(FakeResponse({"status": "ok"}))))


def test_unexpected_errors_propagate():
    with pytest.raises(TypeError, match="boom"):
        _fetch(_client(FakeSession(TypeError("boom"))))
