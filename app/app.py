"""Streamlit UI for slide folders.

Run with ``streamlit run app/app.py`` from the project root.
"""

import sys
from pathlib import Path

import streamlit as st

# Make the app package importable when launched through `streamlit run`
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from app.bootstrap import bootstrap_app
from app.components import render_folder_list, render_upload_section
from app.state import get_last_message


def main() -> None:
    bootstrap_app()

    if render_upload_section():
        st.rerun()

    last = get_last_message()
    if last:
        success, message = last
        if success:
            st.success(f"✅ {message}")
        else:
            st.error(f"❌ {message}")

    st.divider()
    render_folder_list()


main()
