"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``linear_app/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

from importlib import import_module
from pathlib import Path

import streamlit as st

from linear_app.app import main

st.set_page_config(layout="wide")


def _auto_init_issue_service():
    """Initialize the Linear service from Streamlit secrets if available."""
    if "issue_service" in st.session_state:
        return

    from linear_app.pages.setup import secret_api_key

    api_key = secret_api_key()
    if not api_key:
        st.sidebar.warning("Linear API key not found. Please use the Setup page.")
        return
    from linear_app.core.linear_client import LinearAPI
    from linear_app.core.service import IssueService

    st.session_state["issue_service"] = IssueService(LinearAPI(api_key))
    st.sidebar.success("Linear connection configured.")


PAGES_DIR = Path(__file__).parent / "linear_app" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"linear_app.pages.{py.stem}"
    try:
        import_module(mod_name)
    except ImportError as e:  # pragma: no cover - defensive
        print(f"Failed importing page {mod_name}: {e}")

_auto_init_issue_service()

if __name__ == "__main__":
    main()
