# trade_alerts/ui/footer.py

import streamlit as st
from trade_alerts.config import PRICE_PROVIDER, PRICE_TOLERANCE

def footer_text(provider=PRICE_PROVIDER, tolerance=PRICE_TOLERANCE):
    return (
        f"Prices from {provider}. Alerts are checked on a schedule and removed once triggered. "
        f"Level alerts fire within {tolerance:.3%} of the level."
    )

def display_footer():
    st.divider()
    st.markdown(
        f"""
        <style>
        .alerts-footer {{
            text-align: center;
            font-size: 0.8em;
            color: #6b7280;
            padding-bottom: 20px;
        }}
        </style>
        <div class="alerts-footer">{footer_text()}</div>
        """,
        unsafe_allow_html=True
    )
