"""JSON file persistence for the folder list."""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any

from .errors import PersistenceError
from .models import Folder

logger = logging.getLogger(__name__)

STORE_VERSION = 1


class JsonFolderPersistence:
    """Reads and writes the whole folder list as a single JSON document.

    Layout::

        {"version": 1, "lastId": 3, "folders": [{"id": 1, "folderName": "...", "images": [...]}]}

    ``lastId`` is the highest folder id ever issued, so ids of deleted
    folders are not handed out again after a restart.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_payload(self) -> dict[str, Any]:
        if not self.path.exists():
            return {'folders': []}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
            if not isinstance(payload, dict) or not isinstance(payload.get('folders'), list):
                raise ValueError("missing 'folders' list")
            return payload
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Cannot read folder store {self.path}: {e}") from e

    def _read(self) -> list[Folder]:
        payload = self._read_payload()
        try:
            return [Folder.from_dict(item) for item in payload['folders']]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Malformed folder in {self.path}: {e}") from e

    def _write(self, folders: list[Folder], last_id: int) -> None:
        payload = {
            'version': STORE_VERSION,
            'lastId': max([last_id] + [folder.id for folder in folders]),
            'folders': [folder.to_dict() for folder in folders],
        }
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Cannot write folder store {self.path}: {e}") from e

    async def read_all(self) -> list[Folder]:
        """Load every folder; a missing store file reads as empty.

        Raises:
            PersistenceError: If the store exists but cannot be parsed
        """
        folders = await asyncio.to_thread(self._read)
        logger.debug(f"Read {len(folders)} folder(s) from {self.path}")
        return folders

    async def read_last_id(self) -> int:
        """Highest folder id ever issued (0 for a new store).

        Raises:
            PersistenceError: If the store exists but cannot be parsed
        """
        payload = await asyncio.to_thread(self._read_payload)
        try:
            return int(payload.get('lastId', 0))
        except (TypeError, ValueError):
            return 0

    async def write_all(self, folders: list[Folder], last_id: int = 0) -> None:
        """Replace the stored list with folders.

        Args:
            folders: Complete folder list, in order
            last_id: Highest id issued so far

        Raises:
            PersistenceError: If the store cannot be written
        """
        await asyncio.to_thread(self._write, folders, last_id)
        logger.debug(f"Wrote {len(folders)} folder(s) to {self.path}")
