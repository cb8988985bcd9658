from types import SimpleNamespace

import httpx
import pytest

from trade_alerts.db import AlertStore
from trade_alerts.errors import FetchError
from trade_alerts.feeds import PriceFeed
from trade_alerts.models import TableConfig


class FakeQuery:
    def __init__(self, client, table, op, columns="*", row=None):
        self.client = client
        self.table = table
        self.op = op
        self.columns = columns
        self.row = row
        self.filters = []
        self.order_by = None
        self.bounds = None

    def order(self, column):
        self.order_by = column
        return self

    def range(self, start, end):
        self.bounds = (start, end)
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        self.client.calls.append((self.op, self.table, tuple(self.filters)))
        if (self.op, self.table) in self.client.fail_on:
            raise httpx.ConnectError(f"{self.op} on {self.table} failed")
        rows = self.client.tables.setdefault(self.table, [])
        if self.op == "select":
            selected = [row for row in rows if self._matches(row)]
            if self.order_by is not None:
                selected.sort(key=lambda row: row.get(self.order_by))
            if self.bounds is not None:
                selected = selected[self.bounds[0]:self.bounds[1] + 1]
            if self.columns != "*":
                names = [c.strip() for c in self.columns.split(",")]
                selected = [{n: row.get(n) for n in names} for row in selected]
            else:
                selected = [dict(row) for row in selected]
            return SimpleNamespace(data=selected)
        if self.op == "insert":
            row = dict(self.row)
            row.setdefault("id", self.client.next_id())
            rows.append(row)
            return SimpleNamespace(data=[row])
        if self.op == "delete":
            removed = [row for row in rows if self._matches(row)]
            self.client.tables[self.table] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=removed)
        raise AssertionError(self.op)


class FakeTable:
    def __init__(self, client, name):
        self.client = client
        self.name = name

    def select(self, columns="*"):
        return FakeQuery(self.client, self.name, "select", columns=columns)

    def insert(self, row):
        return FakeQuery(self.client, self.name, "insert", row=row)

    def delete(self):
        return FakeQuery(self.client, self.name, "delete")


class FakeSupabase:
    """In-memory stand-in for the Supabase query builder."""

    def __init__(self, tables=None):
        self.tables = {name: [dict(r) for r in rows] for name, rows in (tables or {}).items()}
        self.fail_on = set()
        self.calls = []
        self._id = 1000

    def next_id(self):
        self._id += 1
        return self._id

    def table(self, name):
        return FakeTable(self, name)

    def ids(self, table="alerts"):
        return sorted(row["id"] for row in self.tables.get(table, []))


class FakeFeed(PriceFeed):
    name = "fake"

    def __init__(self, prices, failing=()):
        self.prices = dict(prices)
        self.failing = set(failing)
        self.calls = []

    def fetch_price(self, symbol):
        self.calls.append(symbol)
        if symbol in self.failing or symbol not in self.prices:
            raise FetchError(symbol, "quote unavailable")
        return self.prices[symbol]


def alert_row(id, hash, symbol, price_level, direction=None, user_id="user123"):
    row = {"id": id, "hash": hash, "symbol": symbol, "price_level": price_level, "user_id": user_id}
    if direction is not None:
        row["initial_direction"] = direction
    return row


@pytest.fixture
def table_config():
    return TableConfig(
        tablename="alerts",
        symbol_column_name="symbol",
        price_level_column_name="price_level",
        user_id_column_name="user_id",
        hash_column_name="hash",
        direction_column_name="initial_direction",
    )


@pytest.fixture
def make_store():
    def _make(rows=(), mailing=()):
        client = FakeSupabase({"alerts": rows, "mailing_list": [{"email": e} for e in mailing]})
        return AlertStore(client), client
    return _make
