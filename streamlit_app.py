"""
Streamlit web application for managing price alerts.
Alerts created here are evaluated by the alert job (main.py) and removed once triggered.
"""
import streamlit as st
from trade_alerts.db import AlertStore, get_supabase_client
from trade_alerts.models import TableConfig
from trade_alerts.ui.header import display_header
from trade_alerts.ui.footer import display_footer
from trade_alerts.ui.alert_add import add_alert_section
from trade_alerts.ui.alert_list import user_alerts_section

@st.cache_resource
def get_store():
    return AlertStore(get_supabase_client())

def main():
    """
    Main function to run the Streamlit app.
    Handles UI rendering, user inputs, and interactions with the database.
    """
    st.set_page_config(page_title="Trade alerts", layout="wide")

    display_header()

    st.markdown(
        "<p style='color:darkblue;'>Set a price level on a symbol and get notified when the price rises to it, falls to it, or trades at it.</p>",
        unsafe_allow_html=True
    )

    store = get_store()
    table_config = TableConfig.default()

    add_alert_section(store, table_config)
    user_alerts_section(store, table_config)

    display_footer()

if __name__ == "__main__":
    main()
