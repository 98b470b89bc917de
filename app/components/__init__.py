"""UI components for the Streamlit app."""

from app.components.upload_section import render_upload_section
from app.components.folder_list import render_folder_list

__all__ = [
    'render_upload_section',
    'render_folder_list',
]
