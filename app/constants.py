"""Constants and configuration paths for the Streamlit app."""

from pathlib import Path

# === Directory Paths ===
APP_DIR = Path(__file__).parent
PROJECT_ROOT = APP_DIR.parent
CONFIG_DIR = PROJECT_ROOT / "configs"

# File types for the Streamlit uploader (without dots)
UPLOAD_FILE_TYPES: list[str] = ['xlsx', 'xls', 'csv', 'png', 'jpg', 'jpeg']

# === Session State Keys ===
class SessionKeys:
    """Session state key constants to avoid magic strings."""
    BASE_CONFIG = 'base_config'
    LIBRARY = 'library'
    LAST_MESSAGE = 'last_message'
    EDITING_FOLDER = 'editing_folder'
    UPLOADER_NONCE = 'uploader_nonce'


# === UI Configuration Defaults ===
DEFAULT_PAGE_TITLE = 'Slide Folders'
DEFAULT_PAGE_LAYOUT = 'wide'
