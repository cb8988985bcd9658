"""
Alert job: runs one evaluation pass over the stored price alerts.
Fetches the symbols in use from Supabase, quotes them, deletes the alerts whose
condition holds and emails the mailing list about each one.
Meant to be run by an external scheduler (cron, GitHub Actions); a failed pass
exits with status 1 and is simply retried on the next run.
"""
import os
import sys
from datetime import datetime, timezone
from trade_alerts.config import EMAIL_USER, PRICE_PROVIDER, PRICE_TOLERANCE, QUOTE_WORKERS
from trade_alerts.db import AlertStore, get_supabase_client
from trade_alerts.errors import TradeAlertsError
from trade_alerts.evaluator import AlertEvaluator
from trade_alerts.feeds import build_price_feed
from trade_alerts.logging import log_event
from trade_alerts.models import TableConfig
from trade_alerts.notifications.email import EmailNotifier

def build_notifier(store):
    if not EMAIL_USER:
        log_event("INFO", "EMAIL_USER not set, notifications disabled")
        return None
    recipients = store.fetch_mailing_emails()
    if not recipients:
        log_event("INFO", "Mailing list empty, notifications disabled")
        return None
    return EmailNotifier(recipients)

def main():
    """
    Main function orchestrates the alert job:
    - Builds the Supabase store, the price feed and the notifier
    - Runs a single Gather -> Quote -> Evaluate -> Reap pass
    - Logs the outcome and returns the process exit status
    """
    now_utc = datetime.now(timezone.utc)
    log_event("INFO", "Startup marker", github_sha=os.getenv("GITHUB_SHA"), utc_now=str(now_utc), price_provider=PRICE_PROVIDER, quote_workers=QUOTE_WORKERS)
    try:
        store = AlertStore(get_supabase_client())
        with build_price_feed() as feed:
            evaluator = AlertEvaluator(
                feed,
                store,
                TableConfig.default(),
                tolerance=PRICE_TOLERANCE,
                notifier=build_notifier(store),
                max_workers=QUOTE_WORKERS,
            )
            result = evaluator.run_pass()
    except TradeAlertsError as e:
        log_event("ERROR", "Evaluation pass failed", error=str(e), error_type=type(e).__name__)
        return 1
    log_event("INFO", "Alert job finished", triggered=result.triggered, deleted=result.deleted)
    return 0

if __name__ == "__main__":
    sys.exit(main())
