"""Connection setup page: collect the Linear API key and initialize IssueService."""

from __future__ import annotations

import os

import streamlit as st

from linear_app.app import register_page
from linear_app.core.linear_client import LinearAPI
from linear_app.core.service import IssueService


def secret_api_key() -> str | None:
    """API key from Streamlit secrets ([linear] section or top level), then the environment."""
    try:
        linear_secrets = st.secrets.get("linear", {})
        key = linear_secrets.get("LINEAR_API_KEY") or st.secrets.get("LINEAR_API_KEY")
    except FileNotFoundError:
        key = None
    return key or os.environ.get("LINEAR_API_KEY")


@register_page("Setup / Connection")
def setup_page():
    st.title("Linear Connection Setup")
    st.caption("Enter a personal API key (use secrets manager in production).")

    api_key = st.text_input("Linear API Key", type="password", value=secret_api_key() or "")
    ttl = st.number_input("Client cache TTL (seconds)", min_value=0, max_value=3600, value=300)
    init_btn = st.button("Initialize Connection", type="primary")

    if init_btn:
        if not api_key:
            st.error("API key required.")
            return
        try:
            api = LinearAPI(api_key)
            api._cache_ttl = float(ttl)
            st.session_state["issue_service"] = IssueService(api)
            st.session_state.pop("snapshot", None)
            st.success("Connection initialized.")
        except ValueError as e:
            st.error(f"Failed to initialize Linear client: {e}")

    if "issue_service" in st.session_state:
        st.info("IssueService ready.")
