"""
Typed views over the loosely-typed rows stored in the alerts table.

Table and column names are runtime configuration, so rows come back from the
backend as plain dicts. `Alert.from_row` is the only place where those dicts
are turned into typed values.
"""
from dataclasses import dataclass, field, fields

from trade_alerts import config


@dataclass(frozen=True)
class TableConfig:
    tablename: str = config.ALERTS_TABLE
    symbol_column_name: str = config.ALERTS_SYMBOL_COLUMN
    price_level_column_name: str = config.ALERTS_PRICE_LEVEL_COLUMN
    user_id_column_name: str = config.ALERTS_USER_ID_COLUMN
    hash_column_name: str = config.ALERTS_HASH_COLUMN
    direction_column_name: str = config.ALERTS_DIRECTION_COLUMN
    id_column_name: str = config.ALERTS_ID_COLUMN

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"TableConfig.{f.name} must be a non-empty string, got {value!r}")

    @classmethod
    def default(cls):
        return cls()


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Alert:
    hash: str
    symbol: str
    price_level: float
    user_id: str | None = None
    initial_direction: str | None = None
    id: int | str | None = None

    @classmethod
    def from_row(cls, row, table_config):
        """
        Builds an Alert from a backend row, or returns None when the row lacks
        a usable symbol, price level or hash, or when its direction is set but
        is not a string. Only a missing or null direction means a level alert.
        """
        symbol = row.get(table_config.symbol_column_name)
        price_level = row.get(table_config.price_level_column_name)
        alert_hash = row.get(table_config.hash_column_name)
        if not isinstance(symbol, str) or not isinstance(alert_hash, str) or not _is_number(price_level):
            return None
        direction = row.get(table_config.direction_column_name)
        if direction is not None and not isinstance(direction, str):
            return None

        user_id = row.get(table_config.user_id_column_name)
        return cls(
            hash=alert_hash,
            symbol=symbol,
            price_level=float(price_level),
            user_id=str(user_id) if user_id is not None else None,
            initial_direction=direction,
            id=row.get(table_config.id_column_name),
        )

    def to_row(self, table_config):
        row = {
            table_config.hash_column_name: self.hash,
            table_config.symbol_column_name: self.symbol,
            table_config.price_level_column_name: self.price_level,
        }
        if self.user_id is not None:
            row[table_config.user_id_column_name] = self.user_id
        if self.initial_direction is not None:
            row[table_config.direction_column_name] = self.initial_direction
        return row


@dataclass(frozen=True)
class PriceQuote:
    symbol: str
    price: float


@dataclass(frozen=True)
class TriggeredAlert:
    alert: Alert
    price: float


@dataclass
class PassResult:
    quotes: dict = field(default_factory=dict)
    triggered: list = field(default_factory=list)
    deleted: list = field(default_factory=list)
