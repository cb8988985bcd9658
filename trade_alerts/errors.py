"""
Exceptions raised by the alert job and the alert management page.
"""


class TradeAlertsError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(TradeAlertsError):
    """A required setting is missing or invalid."""


class FetchError(TradeAlertsError):
    """The quote provider could not deliver a usable price for a symbol."""

    def __init__(self, symbol, reason):
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"Failed to fetch price for {symbol!r}: {reason}")


class StoreError(TradeAlertsError):
    """A read, write or delete against the alert backend failed."""


class NotFoundError(StoreError):
    """No row matched the lookup."""


class AmbiguousResultError(StoreError):
    """More than one row matched a lookup that must be unique."""


class DuplicateAlertError(StoreError):
    """A row with the same unique value already exists."""


class PassCancelled(TradeAlertsError):
    """The evaluation pass was cancelled between two stages."""
