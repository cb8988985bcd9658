# trade_alerts/ui/header.py

import streamlit as st

def display_header():
    st.markdown(
        """
        <style>
        .header-title {
            font-size: 20px;
            font-weight: bold;
            color: #333;
            text-align: center;
            padding: 10px 0;
            border-bottom: 1px solid #ddd;
        }
        .block-container {
            padding-top: 60px;
        }
        </style>
        <div class='header-title'>Trade alerts - Price alert manager</div>
        """,
        unsafe_allow_html=True
    )
    st.markdown("")
