"""Upload service - stages browser uploads and hands them to the slide library."""

import asyncio
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Callable

from slidefolio import PickedFile, UploadOutcome
from slidefolio.fs_safety import is_safe_filename

from app.state import get_library


def stage_uploaded_files(files, staging_dir: Path) -> list[PickedFile]:
    """Write uploaded files to a staging directory.

    The staged copies play the role of ephemeral picker files: the library
    copies them into managed storage and removes them afterwards.

    Args:
        files: List of Streamlit UploadedFile objects
        staging_dir: Destination directory

    Returns:
        Picked files in upload order; unsafe names are skipped
    """
    picked = []
    for uploaded_file in files:
        filename = uploaded_file.name
        if not is_safe_filename(filename):
            logging.warning(f"Skipping unsafe upload name: {filename!r}")
            continue

        dest_path = staging_dir / filename
        dest_path.write_bytes(uploaded_file.getvalue())
        picked.append(PickedFile(name=filename, path=str(dest_path), mime_type=uploaded_file.type))
    return picked


def run_upload(
    files,
    folder_id: int | None = None,
    folder_name: str | None = None,
    on_progress: Callable[[float], None] | None = None,
) -> UploadOutcome:
    """Create a folder (or extend folder_id) from uploaded files.

    Args:
        files: Streamlit UploadedFile objects
        folder_id: Existing folder to add to, or None for a new folder
        folder_name: Optional rename when adding to an existing folder
        on_progress: Ingestion progress callback (percent)

    Returns:
        UploadOutcome from the library
    """
    library = get_library()
    staging_dir = Path(tempfile.mkdtemp(prefix='slidefolio_upload_'))
    try:
        picked = stage_uploaded_files(files or [], staging_dir)
        if folder_id is None:
            return asyncio.run(library.upload_folder(picked, on_progress=on_progress))
        return asyncio.run(library.add_content(folder_id, picked, folder_name=folder_name,
                                               on_progress=on_progress))
    finally:
        shutil.rmtree(staging_dir, ignore_errors=True)


def rename_folder(folder_id: int, folder_name: str) -> bool:
    """Rename a folder; returns False if the change could not be saved."""
    store = get_library().store
    asyncio.run(store.rename(folder_id, folder_name))
    return not store.dirty


def delete_folder(folder_id: int) -> bool:
    """Delete a folder and its managed images; returns False if nothing was deleted."""
    return asyncio.run(get_library().store.delete(folder_id))
