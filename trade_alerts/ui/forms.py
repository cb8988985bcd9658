# trade_alerts/ui/forms.py

import streamlit as st
from trade_alerts.errors import TradeAlertsError
from trade_alerts.feeds import build_price_feed
from trade_alerts.logging import log_event

DIRECTIONS = ["sell", "buy", "level"]

def validate_symbol(symbol: str) -> float | None:
    """
    Checks the symbol against the configured price provider and returns its current price or None.
    """
    try:
        with build_price_feed() as feed:
            return feed.fetch_price(symbol)
    except TradeAlertsError as e:
        log_event("WARN", "Symbol validation failed", symbol=symbol, error=str(e))
        return None

def alert_input_form():
    """
    Renders the input form for a new alert.
    Returns symbol, price level, direction (None for a level alert) and user id.
    """
    symbol = st.text_input("Symbol").strip().upper()
    if symbol:
        price = validate_symbol(symbol)
        if price is None:
            st.warning("No price found for this symbol. Use the same format as the price provider, e.g. EURUSD.")
        else:
            st.success(f"{symbol} valid. Current price: {price:,.5f}")

    col_user, col_level, col_direction = st.columns([2, 1, 1])
    with col_user:
        user_id = st.text_input("User id").strip()
    with col_level:
        price_level = st.number_input("Price level", value=0.0, min_value=0.0, format="%.5f")
    with col_direction:
        direction = st.selectbox(
            "Trigger when price",
            DIRECTIONS,
            format_func=lambda d: {"sell": "rises to level", "buy": "falls to level", "level": "is at level"}[d],
        )

    return symbol, price_level, None if direction == "level" else direction, user_id
