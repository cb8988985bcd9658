"""
Alert evaluation pass: Gather -> Quote -> Evaluate -> Reap.

Each pass reads the store from scratch. Any store or quote failure aborts the
pass and propagates to the caller, who schedules the next one. Alerts not yet
reaped stay in the store and are evaluated again on the next pass.
"""
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

from trade_alerts.config import PRICE_TOLERANCE
from trade_alerts.errors import FetchError, PassCancelled
from trade_alerts.logging import log_event
from trade_alerts.models import Alert, PassResult, TriggeredAlert

SELL = "sell"
BUY = "buy"


def is_triggered(alert, price, tolerance=PRICE_TOLERANCE):
    direction = alert.initial_direction
    if direction == SELL:
        return price >= alert.price_level
    if direction == BUY:
        return price <= alert.price_level
    if direction is None:
        return alert.price_level * (1 - tolerance) <= price <= alert.price_level * (1 + tolerance)
    log_event("WARN", "Unknown alert direction", hash=alert.hash, direction=direction)
    return False


class AlertEvaluator:
    def __init__(self, feed, store, table_config, tolerance=PRICE_TOLERANCE,
                 notifier=None, max_workers=1, cancel_event=None):
        self.feed = feed
        self.store = store
        self.table_config = table_config
        self.tolerance = tolerance
        self.notifier = notifier
        self.max_workers = max_workers
        self.cancel_event = cancel_event

    def _checkpoint(self, stage):
        if self.cancel_event is not None and self.cancel_event.is_set():
            log_event("WARN", "Evaluation pass cancelled", before_stage=stage)
            raise PassCancelled(f"Pass cancelled before {stage}")

    def fetch_prices(self, symbols):
        """
        Fetches one price per symbol. The first FetchError aborts the whole
        batch; prices already fetched are discarded with it.
        """
        ordered = sorted(symbols)
        if self.max_workers <= 1 or len(ordered) <= 1:
            prices = {}
            for symbol in ordered:
                prices[symbol] = self._fetch_one(symbol)
            return prices

        pool = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            futures = {pool.submit(self._fetch_one, symbol): symbol for symbol in ordered}
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            for future in done:
                error = future.exception()
                if error is not None:
                    raise error
            return {symbol: future.result() for future, symbol in futures.items()}
        finally:
            # in-flight requests are abandoned, queued ones never start
            pool.shutdown(wait=False, cancel_futures=True)

    def _fetch_one(self, symbol):
        try:
            quote = self.feed.fetch_quote(symbol)
        except FetchError as e:
            log_event("ERROR", "Error fetching price", symbol=symbol, error=str(e))
            raise
        log_event("INFO", "Fetched price", symbol=symbol, price=quote.price)
        return quote.price

    def find_triggered(self, prices):
        rows = self.store.all_alerts(self.table_config)
        log_event("INFO", "Fetched alert rows", count=len(rows))
        triggered = []
        for row in rows:
            alert = Alert.from_row(row, self.table_config)
            if alert is None:
                log_event("WARN", "Incomplete data for alert", row=row)
                continue
            price = prices.get(alert.symbol)
            if price is None:
                log_event("WARN", "No price for alert symbol", hash=alert.hash, symbol=alert.symbol)
                continue
            if is_triggered(alert, price, self.tolerance):
                log_event("INFO", "Alert triggered", hash=alert.hash, symbol=alert.symbol,
                          price_level=alert.price_level, price=price, direction=alert.initial_direction)
                triggered.append(TriggeredAlert(alert=alert, price=price))
        return triggered

    def reap(self, triggered):
        """
        Resolves, notifies and deletes triggered alerts in order. Stops at the
        first failure; alerts deleted before it stay deleted. A hash that
        does not resolve to exactly one row is never notified.
        """
        deleted = []
        for item in triggered:
            row_id = self.store.resolve_id_by_hash(item.alert.hash, self.table_config)
            if self.notifier is not None:
                self.notifier(item)
            self._delete_row(item.alert.hash, row_id)
            deleted.append(item.alert.hash)
        return deleted

    def _delete_row(self, alert_hash, row_id):
        self.store.delete_row(self.table_config.tablename, row_id, id_column=self.table_config.id_column_name)
        log_event("INFO", "Alert deleted", hash=alert_hash, id=row_id)

    def _delete_by_hash(self, alert_hash):
        self._delete_row(alert_hash, self.store.resolve_id_by_hash(alert_hash, self.table_config))

    def check_and_fetch_triggered_alert_hashes(self):
        return [item.alert.hash for item in self._detect(PassResult())]

    def delete_triggered_alerts_by_hashes(self, hashes):
        for alert_hash in hashes:
            self._delete_by_hash(alert_hash)

    def _detect(self, result):
        self._checkpoint("gather")
        log_event("INFO", "Fetching unique symbols", table=self.table_config.tablename)
        symbols = self.store.distinct_symbols(self.table_config)
        log_event("INFO", "Fetched symbols", symbols=sorted(symbols))

        self._checkpoint("quote")
        result.quotes = self.fetch_prices(symbols)

        self._checkpoint("evaluate")
        triggered = self.find_triggered(result.quotes)
        result.triggered = [item.alert.hash for item in triggered]
        return triggered

    def run_pass(self):
        result = PassResult()
        triggered = self._detect(result)
        self._checkpoint("reap")
        result.deleted = self.reap(triggered)
        log_event("INFO", "Evaluation pass complete", symbols=len(result.quotes),
                  triggered=len(result.triggered), deleted=len(result.deleted))
        return result
