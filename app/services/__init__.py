"""Service modules for business logic."""

from app.services.upload_service import (
    stage_uploaded_files,
    run_upload,
    rename_folder,
    delete_folder,
)

__all__ = [
    'stage_uploaded_files',
    'run_upload',
    'rename_folder',
    'delete_folder',
]
