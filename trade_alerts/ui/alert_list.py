# trade_alerts/ui/alert_list.py

import time
import pandas as pd
import streamlit as st
from trade_alerts.errors import StoreError
from trade_alerts.logging import log_event

def alerts_dataframe(rows, table_config):
    """
    Turns alert rows into a display DataFrame: symbol first, timestamps dropped, index from 1.
    """
    df = pd.DataFrame(rows)
    if df.empty:
        return df
    df = df.loc[:, ~df.columns.str.contains('date|time|created_at', case=False)]
    first = [c for c in (table_config.symbol_column_name, table_config.price_level_column_name,
                         table_config.direction_column_name) if c in df.columns]
    df = df[first + [c for c in df.columns if c not in first]]
    df.index = df.index + 1
    return df

def user_alerts_section(store, table_config):
    with st.expander("My alerts", expanded=True):
        user_id = st.text_input("Show alerts for user id", key="list_user_id").strip()
        if not user_id:
            st.write("Enter a user id to list its alerts.")
            return

        try:
            df = alerts_dataframe(store.fetch_alerts_by_user(user_id, table_config), table_config)
        except StoreError as e:
            log_event("ERROR", "Failed to fetch user alerts", user_id=user_id, error=str(e))
            df = pd.DataFrame()

        if df.empty:
            st.write("No active alerts.")
            return
        st.dataframe(df)

        hash_to_delete = st.selectbox("Select alert to delete", df[table_config.hash_column_name].tolist())
        if st.button("Delete Alert"):
            try:
                store.delete_alert(hash_to_delete, table_config)
                st.warning("Alert deleted.")
                time.sleep(0.5)
                st.rerun()
            except StoreError as e:
                log_event("ERROR", "Failed to delete alert", hash=hash_to_delete, error=str(e))
                st.error(f"Could not delete alert: {e}")
