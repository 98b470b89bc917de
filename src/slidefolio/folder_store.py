"""In-memory folder list backed by full-list persistence.

Every mutation rewrites the whole store. A failed save is logged and
leaves the in-memory change in place; the store stays marked dirty and
the next mutation (or an explicit ``save()``) writes the full list again.
"""

import dataclasses
import logging
from typing import Any

from .errors import PersistenceError
from .models import Folder, SlideEntry
from .persistence import JsonFolderPersistence
from .storage import ManagedStorage

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {f.name for f in dataclasses.fields(Folder)} - {'id'}


class FolderStore:
    """Owns the ordered folder list for one application instance."""

    def __init__(self, persistence: JsonFolderPersistence, storage: ManagedStorage):
        """Initialize an empty store.

        Args:
            persistence: Reads and writes the full folder list
            storage: Managed storage used for cleanup on delete
        """
        self.persistence = persistence
        self.storage = storage
        self.folders: list[Folder] = []
        self.dirty = False
        self._last_id = 0

    def get(self, folder_id: int) -> Folder | None:
        return next((f for f in self.folders if f.id == folder_id), None)

    def next_id(self) -> int:
        """Id for the next folder: one past the highest id ever issued."""
        return max([self._last_id] + [f.id for f in self.folders]) + 1

    async def load(self) -> list[Folder]:
        """Load the persisted folder list; unreadable data yields an empty list."""
        try:
            self.folders = await self.persistence.read_all()
            self._last_id = await self.persistence.read_last_id()
        except PersistenceError as e:
            logger.warning(f"Starting with an empty folder list: {e}")
            self.folders = []
            self._last_id = 0
        self.dirty = False
        logger.info(f"Loaded {len(self.folders)} folder(s)")
        return self.folders

    async def save(self) -> bool:
        """Write the full folder list.

        Returns:
            True if the store was written, False if the write failed
        """
        try:
            await self.persistence.write_all(self.folders, self._last_id)
        except PersistenceError as e:
            self.dirty = True
            logger.error(f"Failed to save folders, will retry on next change: {e}")
            return False
        self.dirty = False
        return True

    async def create(self, folder: Folder) -> Folder:
        """Append a folder, assigning it a fresh id."""
        folder.id = self.next_id()
        self._last_id = folder.id
        self.folders.append(folder)
        logger.info(f"Created folder {folder.id} '{folder.folder_name}' with {len(folder.images)} entries")
        await self.save()
        return folder

    async def update(self, folder_id: int, fields: dict[str, Any]) -> Folder | None:
        """Merge fields into a folder; unknown ids are ignored.

        Args:
            folder_id: Folder to update
            fields: Attribute values keyed by field name (``folder_name``, ``images``)

        Returns:
            The updated folder, or None if no folder has that id

        Raises:
            ValueError: If fields names an attribute that cannot be updated
        """
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update folder field(s): {', '.join(sorted(unknown))}")

        folder = self.get(folder_id)
        if folder is None:
            logger.debug(f"Update ignored, no folder {folder_id}")
            return None

        for name, value in fields.items():
            setattr(folder, name, value)
        await self.save()
        return folder

    async def rename(self, folder_id: int, folder_name: str) -> Folder | None:
        return await self.update(folder_id, {'folder_name': folder_name})

    async def add_entries(self, folder_id: int, entries: list[SlideEntry]) -> Folder | None:
        """Append entries to a folder, keeping their order."""
        folder = self.get(folder_id)
        if folder is None:
            logger.debug(f"Add ignored, no folder {folder_id}")
            return None
        folder.images.extend(entries)
        logger.info(f"Added {len(entries)} entries to folder {folder_id}")
        await self.save()
        return folder

    async def cleanup_images(self, folder: Folder) -> int:
        """Delete the folder's image files that live in managed storage.

        Failures are logged and skipped.

        Returns:
            Number of files deleted
        """
        deleted = 0
        for entry in folder.images:
            if not self.storage.is_managed(entry.image_url):
                continue
            try:
                if await self.storage.exists(entry.image_url):
                    await self.storage.delete(entry.image_url)
                    deleted += 1
            except OSError as e:
                logger.warning(f"Could not delete {entry.image_url}: {e}")
        return deleted

    async def delete(self, folder_id: int) -> bool:
        """Remove a folder and its managed image files.

        Returns:
            True if a folder was removed
        """
        folder = self.get(folder_id)
        if folder is None:
            return False

        deleted = await self.cleanup_images(folder)
        self.folders = [f for f in self.folders if f.id != folder_id]
        logger.info(f"Deleted folder {folder_id} and {deleted} managed image(s)")
        await self.save()
        return True
