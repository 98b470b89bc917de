"""Managed on-disk storage for ingested image files.

All operations are coroutines that hand blocking file system calls to a
worker thread, so awaiting them never stalls the event loop.
"""

import asyncio
import logging
import shutil
import time
from pathlib import Path

from .fs_safety import is_within

logger = logging.getLogger(__name__)


class ManagedStorage:
    """Application-owned image directory.

    Files copied here are durable; anything outside ``root`` is treated as
    an external path the application must not delete.
    """

    def __init__(self, root: str | Path):
        """Initialize storage rooted at a directory.

        Args:
            root: Managed image directory (created lazily)
        """
        self.root = Path(root)
        self._last_stamp = 0

    def _next_stamp(self) -> int:
        """Strictly increasing timestamp in nanoseconds."""
        stamp = max(time.time_ns(), self._last_stamp + 1)
        self._last_stamp = stamp
        return stamp

    def destination_for(self, filename: str) -> Path:
        """Collision-proof destination path for a picked filename."""
        return self.root / f"{self._next_stamp()}_{filename}"

    def is_managed(self, path: str | Path | None) -> bool:
        """True if path points inside the managed directory."""
        if not path:
            return False
        return is_within(path, self.root)

    async def ensure_directory(self, path: str | Path | None = None) -> Path:
        target = Path(path) if path is not None else self.root
        await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        return target

    async def copy(self, src: str | Path, dst: str | Path) -> None:
        await asyncio.to_thread(shutil.copyfile, src, dst)
        logger.debug(f"Copied {src} -> {dst}")

    async def delete(self, path: str | Path) -> None:
        await asyncio.to_thread(Path(path).unlink)
        logger.debug(f"Deleted {path}")

    async def exists(self, path: str | Path) -> bool:
        return await asyncio.to_thread(Path(path).exists)

    def list_files(self) -> list[str]:
        """Names of files currently held in managed storage."""
        if not self.root.exists():
            return []
        return sorted(item.name for item in self.root.iterdir() if item.is_file())
