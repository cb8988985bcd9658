import httpx
import pandas as pd
import pytest

from trade_alerts import feeds
from trade_alerts.errors import ConfigurationError, FetchError
from trade_alerts.feeds import XylexPriceFeed, YahooPriceFeed, build_price_feed, parse_price

ENDPOINT = "https://api.example.test/data/realtime/price"


def xylex_feed(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return XylexPriceFeed("secret", ENDPOINT, client=client)


@pytest.mark.parametrize("value,expected", [
    (1.25, 1.25),
    (3, 3.0),
    ("1.0845", 1.0845),
    (" 42 ", 42.0),
    (True, None),
    ("abc", None),
    (None, None),
    ("nan", None),
    ([1.0], None),
])
def test_parse_price(value, expected):
    assert parse_price(value) == expected


def test_fetch_price_sends_symbol_and_key():
    seen = {}

    def handler(request):
        seen["symbol"] = request.url.params["symbol"]
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(200, json={"symbol": "EURUSD", "price": "1.0845"})

    assert xylex_feed(handler).fetch_price("EURUSD") == 1.0845
    assert seen == {"symbol": "EURUSD", "auth": "Bearer secret"}


def test_fetch_quote_pairs_symbol_and_price():
    feed = xylex_feed(lambda request: httpx.Response(200, json={"price": 101.5}))

    quote = feed.fetch_quote("AAPL")

    assert (quote.symbol, quote.price) == ("AAPL", 101.5)


@pytest.mark.parametrize("response", [
    httpx.Response(200, json={"symbol": "EURUSD"}),
    httpx.Response(200, json={"price": "n/a"}),
    httpx.Response(200, json={"price": False}),
    httpx.Response(200, json=[1.0]),
    httpx.Response(200, text="<html>oops</html>"),
    httpx.Response(500, json={"error": "down"}),
])
def test_bad_responses_raise_fetch_error(response):
    feed = xylex_feed(lambda request: response)

    with pytest.raises(FetchError) as excinfo:
        feed.fetch_price("EURUSD")
    assert excinfo.value.symbol == "EURUSD"


def test_transport_error_raises_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError):
        xylex_feed(handler).fetch_price("EURUSD")


def test_empty_symbol_makes_no_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"price": 1})

    with pytest.raises(FetchError):
        xylex_feed(handler).fetch_price("")
    assert calls == []


def test_xylex_feed_requires_credentials():
    with pytest.raises(ConfigurationError):
        XylexPriceFeed(None, ENDPOINT)


class FakeTicker:
    def __init__(self, frame):
        self.frame = frame

    def history(self, period):
        return self.frame


def test_yahoo_feed_returns_last_close(monkeypatch):
    frame = pd.DataFrame({"Close": [180.0, 182.5]})
    monkeypatch.setattr(feeds.yf, "Ticker", lambda symbol: FakeTicker(frame))

    assert YahooPriceFeed().fetch_price("AAPL") == 182.5


def test_yahoo_feed_empty_history(monkeypatch):
    monkeypatch.setattr(feeds.yf, "Ticker", lambda symbol: FakeTicker(pd.DataFrame()))

    with pytest.raises(FetchError):
        YahooPriceFeed().fetch_price("DELISTED")


def test_build_price_feed_selects_provider(monkeypatch):
    monkeypatch.setattr(feeds, "XYLEX_API_KEY", "k")
    monkeypatch.setattr(feeds, "XYLEX_API_ENDPOINT", ENDPOINT)

    with build_price_feed("xylex") as feed:
        assert isinstance(feed, XylexPriceFeed)
    assert isinstance(build_price_feed("yahoo"), YahooPriceFeed)
    with pytest.raises(ConfigurationError):
        build_price_feed("bloomberg")
