"""Folder list with rename, add-content and delete controls."""

import html

import streamlit as st

from slidefolio import Folder, SlideEntry, assign_sentence_colors

from app.constants import UPLOAD_FILE_TYPES
from app.services.upload_service import delete_folder, rename_folder, run_upload
from app.state import (
    bump_uploader_nonce,
    get_editing_folder,
    get_library,
    get_uploader_key,
    set_editing_folder,
    set_last_message,
)


def _entry_html(entry: SlideEntry) -> str:
    """Render an entry description as HTML spans using its stored styles."""
    spans = []
    for segment in entry.description:
        style = segment.style
        css = []
        if style.bold:
            css.append("font-weight:bold")
        if style.italic:
            css.append("font-style:italic")
        if style.underline:
            css.append("text-decoration:underline")
        if style.font_size:
            css.append(f"font-size:{style.font_size}px")
        if style.color:
            css.append(f"color:{style.color}")
        spans.append(f"<span style=\"{';'.join(css)}\">{html.escape(segment.text)}</span>")

    colored = [c for c in assign_sentence_colors(entry.description) if c.color]
    if colored:
        spans.append("<br/>" + " ".join(
            f"<span style=\"color:{c.color}\">{html.escape(c.segment.text)}</span>" for c in colored
        ))
    return "".join(spans)


def _render_edit_panel(folder: Folder) -> None:
    new_name = st.text_input("Folder name", value=folder.folder_name, key=f"name_{folder.id}")
    extra_files = st.file_uploader(
        "Add more content",
        accept_multiple_files=True,
        type=UPLOAD_FILE_TYPES,
        key=get_uploader_key(f"add_{folder.id}"),
    )

    col_save, col_add, col_close = st.columns(3)
    with col_save:
        if st.button("Save name", key=f"save_{folder.id}"):
            if rename_folder(folder.id, new_name):
                set_last_message(True, f"Renamed folder to '{new_name}'.")
            else:
                set_last_message(False, "Folder renamed, but the change could not be saved.")
            set_editing_folder(None)
            st.rerun()
    with col_add:
        if st.button("Add content", key=f"add_btn_{folder.id}", disabled=not extra_files):
            with st.spinner('🔄 Adding content...'):
                outcome = run_upload(extra_files, folder_id=folder.id, folder_name=new_name)
            if not outcome.cancelled:
                set_last_message(outcome.success, outcome.message)
                bump_uploader_nonce()
                set_editing_folder(None)
                st.rerun()
    with col_close:
        if st.button("Close", key=f"close_{folder.id}"):
            set_editing_folder(None)
            st.rerun()


def render_folder_list() -> None:
    """Render all folders in store order."""
    st.subheader("🗂️ Folders")
    folders = get_library().store.folders

    if not folders:
        st.info("No folders yet. Upload a spreadsheet and images to get started.")
        return

    for folder in folders:
        with st.expander(f"{folder.folder_name} · {len(folder.images)} slides"):
            col_edit, col_delete = st.columns(2)
            with col_edit:
                if st.button("✏️ Edit", key=f"edit_{folder.id}"):
                    set_editing_folder(folder.id)
            with col_delete:
                if st.button("🗑️ Delete", key=f"delete_{folder.id}"):
                    delete_folder(folder.id)
                    set_last_message(True, f"Deleted folder '{folder.folder_name}'.")
                    st.rerun()

            if get_editing_folder() == folder.id:
                _render_edit_panel(folder)

            for number, entry in enumerate(folder.images, start=1):
                st.markdown(f"**{number}. {entry.name}**")
                if entry.image_url:
                    st.image(entry.image_url, width=240)
                if entry.description:
                    st.markdown(_entry_html(entry), unsafe_allow_html=True)
                if entry.voice_text:
                    st.caption(f"🔊 {entry.voice_text}")
