"""Folder upload component."""

import streamlit as st

from app.constants import UPLOAD_FILE_TYPES
from app.services.upload_service import run_upload
from app.state import bump_uploader_nonce, get_uploader_key, set_last_message


def render_upload_section() -> bool:
    """Render the uploader and create a folder when requested.

    Returns:
        True if a folder was created, False otherwise
    """
    st.subheader("📁 Upload Folder")
    st.caption("Select one spreadsheet (.xlsx or .csv) and/or its images (.png, .jpg).")

    uploaded_files = st.file_uploader(
        "Drop files here",
        accept_multiple_files=True,
        type=UPLOAD_FILE_TYPES,
        key=get_uploader_key('folder_uploader'),
        label_visibility="collapsed"
    )

    upload_clicked = st.button(
        "Upload Folder",
        type="primary",
        disabled=not uploaded_files,
    )
    if not upload_clicked:
        return False

    progress_bar = st.progress(0, text="Copying images...")

    def _on_progress(percent: float) -> None:
        progress_bar.progress(int(percent), text=f"Copying images... {percent:.0f}%")

    with st.spinner('🔄 Processing files...'):
        outcome = run_upload(uploaded_files, on_progress=_on_progress)
    progress_bar.empty()

    if outcome.cancelled:
        return False

    set_last_message(outcome.success, outcome.message)
    if outcome.success:
        bump_uploader_nonce()
    return outcome.success
