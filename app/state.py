"""Session state management."""

from typing import Any

import streamlit as st

from slidefolio import SlideLibrary

from app.constants import SessionKeys


def get_state_value(key: str, default: Any = None) -> Any:
    """Get a value from session state with default.

    Args:
        key: Session state key
        default: Default value if key not found

    Returns:
        Value from session state or default
    """
    return st.session_state.get(key, default)


def set_state_value(key: str, value: Any) -> None:
    """Set a value in session state."""
    st.session_state[key] = value


def has_state_key(key: str) -> bool:
    """Check if a key exists in session state."""
    return key in st.session_state


def get_library() -> SlideLibrary:
    """Get the slide library created at bootstrap."""
    return st.session_state[SessionKeys.LIBRARY]


def get_last_message() -> tuple[bool, str] | None:
    """Get the (success, message) pair of the last finished operation."""
    return get_state_value(SessionKeys.LAST_MESSAGE)


def set_last_message(success: bool, message: str) -> None:
    set_state_value(SessionKeys.LAST_MESSAGE, (success, message))


def get_editing_folder() -> int | None:
    """Get the id of the folder whose edit panel is open."""
    return get_state_value(SessionKeys.EDITING_FOLDER)


def set_editing_folder(folder_id: int | None) -> None:
    set_state_value(SessionKeys.EDITING_FOLDER, folder_id)


def bump_uploader_nonce() -> None:
    """Change the uploader widget keys so they reset after an upload."""
    set_state_value(SessionKeys.UPLOADER_NONCE, get_state_value(SessionKeys.UPLOADER_NONCE, 0) + 1)


def get_uploader_key(prefix: str) -> str:
    return f"{prefix}_{get_state_value(SessionKeys.UPLOADER_NONCE, 0)}"
