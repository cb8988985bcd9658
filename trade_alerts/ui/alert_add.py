# trade_alerts/ui/alert_add.py

import streamlit as st
from trade_alerts.errors import DuplicateAlertError, StoreError
from trade_alerts.logging import log_event
from trade_alerts.models import Alert
from trade_alerts.ui.forms import alert_input_form
from trade_alerts.utils import generate_hash

def add_alert_section(store, table_config):
    """
    Handles the user interface and logic for adding a price alert.
    """
    symbol, price_level, direction, user_id = alert_input_form()

    if st.button("Add Alert"):
        if symbol == "" or user_id == "":
            st.warning("Symbol and user id cannot be empty.")
        elif price_level <= 0:
            st.warning("Price level must be greater than zero.")
        else:
            alert = Alert(
                hash=generate_hash(user_id, symbol, price_level),
                symbol=symbol,
                price_level=price_level,
                user_id=user_id,
                initial_direction=direction,
            )
            try:
                store.add_alert(alert, table_config)
                st.success(f"Alert on {symbol} at {price_level} added.")
            except DuplicateAlertError:
                st.warning("This alert already exists, try again in a second.")
            except StoreError as e:
                log_event("ERROR", "Failed to add alert", symbol=symbol, error=str(e))
                st.error(f"Could not add alert: {e}")
