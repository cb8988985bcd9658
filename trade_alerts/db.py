import httpx
from postgrest.exceptions import APIError
from supabase import create_client

from trade_alerts.config import SUPABASE_URL, SUPABASE_KEY, MAILING_TABLE
from trade_alerts.errors import (
    AmbiguousResultError,
    ConfigurationError,
    DuplicateAlertError,
    NotFoundError,
    StoreError,
)
from trade_alerts.logging import log_event

# Supabase caps a single select at 1000 rows by default
PAGE_SIZE = 1000

def get_supabase_client(url=None, key=None):
    url = url or SUPABASE_URL
    key = key or SUPABASE_KEY
    if not url or not key:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_KEY must be set")
    return create_client(url, key)


class AlertStore:
    """
    CRUD on the alerts table through a Supabase client.

    Every SDK or transport failure is re-raised as StoreError.
    """

    def __init__(self, client):
        self.client = client

    def _execute(self, query, action, **context):
        try:
            return query.execute().data or []
        except (APIError, httpx.HTTPError) as e:
            log_event("ERROR", f"Supabase {action} failed", error=str(e), **context)
            raise StoreError(f"{action} failed: {e}") from e

    def _select_all(self, table_config, columns, action):
        """
        Reads every row page by page, ordered by id, so the server-side row
        limit never truncates a full-table read.
        """
        rows = []
        start = 0
        while True:
            page = self._execute(
                self.client.table(table_config.tablename)
                .select(columns)
                .order(table_config.id_column_name)
                .range(start, start + PAGE_SIZE - 1),
                action, table=table_config.tablename, offset=start,
            )
            rows.extend(page)
            if len(page) < PAGE_SIZE:
                return rows
            start += PAGE_SIZE

    def distinct_symbols(self, table_config):
        column = table_config.symbol_column_name
        rows = self._select_all(table_config, column, "select symbols")
        return {row[column] for row in rows if isinstance(row.get(column), str) and row[column]}

    def all_alerts(self, table_config):
        return self._select_all(table_config, "*", "select alerts")

    def resolve_id_by_hash(self, alert_hash, table_config):
        id_column = table_config.id_column_name
        rows = self._execute(
            self.client.table(table_config.tablename)
            .select(id_column)
            .eq(table_config.hash_column_name, alert_hash),
            "resolve id", hash=alert_hash,
        )
        if not rows:
            raise NotFoundError(f"No alert with hash {alert_hash!r} in {table_config.tablename}")
        if len(rows) > 1:
            raise AmbiguousResultError(
                f"{len(rows)} alerts share hash {alert_hash!r} in {table_config.tablename}"
            )
        return rows[0][id_column]

    def delete_row(self, table, row_id, id_column="id"):
        self._execute(
            self.client.table(table).delete().eq(id_column, row_id),
            "delete", table=table, id=row_id,
        )

    def insert_if_unique(self, table, row, unique_column="hash"):
        value = row.get(unique_column)
        existing = self._execute(
            self.client.table(table).select(unique_column).eq(unique_column, value),
            "uniqueness check", table=table,
        )
        if existing:
            raise DuplicateAlertError(f"A row with {unique_column}={value!r} already exists in {table}")
        self._execute(self.client.table(table).insert(row), "insert", table=table)

    def add_alert(self, alert, table_config):
        self.insert_if_unique(
            table_config.tablename,
            alert.to_row(table_config),
            unique_column=table_config.hash_column_name,
        )
        log_event("INFO", "Alert added", hash=alert.hash, symbol=alert.symbol, price_level=alert.price_level)

    def delete_alert(self, alert_hash, table_config):
        row_id = self.resolve_id_by_hash(alert_hash, table_config)
        self.delete_row(table_config.tablename, row_id, id_column=table_config.id_column_name)

    def fetch_alerts_by_user(self, user_id, table_config):
        return self._execute(
            self.client.table(table_config.tablename)
            .select("*")
            .eq(table_config.user_id_column_name, user_id),
            "select user alerts", user_id=user_id,
        )

    def fetch_hashes_by_user_id(self, user_id, table_config):
        rows = self._execute(
            self.client.table(table_config.tablename)
            .select(table_config.hash_column_name)
            .eq(table_config.user_id_column_name, user_id),
            "select user hashes", user_id=user_id,
        )
        return [row[table_config.hash_column_name] for row in rows if row.get(table_config.hash_column_name)]

    def fetch_details_by_hash(self, alert_hash, table_config):
        rows = self._execute(
            self.client.table(table_config.tablename)
            .select("*")
            .eq(table_config.hash_column_name, alert_hash),
            "select alert details", hash=alert_hash,
        )
        if not rows:
            raise NotFoundError(f"No alert with hash {alert_hash!r} in {table_config.tablename}")
        return rows[0]

    def fetch_mailing_emails(self, table=MAILING_TABLE):
        rows = self._execute(self.client.table(table).select("email"), "select mailing list", table=table)
        return [item["email"] for item in rows if item.get("email")]
