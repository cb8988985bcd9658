"""
Price providers used by the alert job.

A feed answers one question: what is the current price of a symbol. Every
failure, whatever its cause, surfaces as FetchError so the evaluator can
abort the pass without caring which provider is configured.
"""
import math
from abc import ABC, abstractmethod

import httpx
import yfinance as yf

from trade_alerts.config import (
    HTTP_TIMEOUT_SECONDS,
    PRICE_PROVIDER,
    XYLEX_API_ENDPOINT,
    XYLEX_API_KEY,
)
from trade_alerts.errors import ConfigurationError, FetchError
from trade_alerts.logging import log_event
from trade_alerts.models import PriceQuote


def parse_price(value):
    """
    Accepts a finite JSON number or numeric string; returns None for anything else.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        price = float(value)
    elif isinstance(value, str):
        try:
            price = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return price if math.isfinite(price) else None


class PriceFeed(ABC):
    name: str

    @abstractmethod
    def fetch_price(self, symbol: str) -> float:
        raise NotImplementedError

    def fetch_quote(self, symbol: str) -> PriceQuote:
        return PriceQuote(symbol=symbol, price=self.fetch_price(symbol))

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class XylexPriceFeed(PriceFeed):
    name = "xylex"

    def __init__(self, api_key, endpoint, client=None, timeout=HTTP_TIMEOUT_SECONDS):
        if not api_key or not endpoint:
            raise ConfigurationError("XYLEX_API_KEY and XYLEX_API_ENDPOINT must be set")
        self.api_key = api_key
        self.endpoint = endpoint
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)

    def fetch_price(self, symbol: str) -> float:
        if not symbol:
            raise FetchError(symbol, "empty symbol")
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            response = self.client.get(self.endpoint, params={"symbol": symbol}, headers=headers)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise FetchError(symbol, str(e)) from e
        except ValueError as e:
            raise FetchError(symbol, f"response is not JSON: {e}") from e

        if not isinstance(payload, dict) or "price" not in payload:
            raise FetchError(symbol, "response has no price field")
        price = parse_price(payload["price"])
        if price is None:
            raise FetchError(symbol, f"non-numeric price {payload['price']!r}")
        return price

    def close(self):
        if self._owns_client:
            self.client.close()


class YahooPriceFeed(PriceFeed):
    name = "yahoo"

    def fetch_price(self, symbol: str) -> float:
        if not symbol:
            raise FetchError(symbol, "empty symbol")
        try:
            hist = yf.Ticker(symbol).history(period="1d")
        except Exception as e:
            raise FetchError(symbol, str(e)) from e
        if hist is None or hist.empty or "Close" not in hist:
            raise FetchError(symbol, "no price history returned")
        return float(hist["Close"].iloc[-1])


def build_price_feed(provider=None):
    provider = (provider or PRICE_PROVIDER).lower()
    log_event("INFO", "Using price provider", provider=provider)
    if provider == "xylex":
        return XylexPriceFeed(XYLEX_API_KEY, XYLEX_API_ENDPOINT)
    if provider == "yahoo":
        return YahooPriceFeed()
    raise ConfigurationError(f"Unknown PRICE_PROVIDER {provider!r}")
