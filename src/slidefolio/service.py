"""Upload orchestration: picked files in, folders out.

Pipeline flow:
    1. Classify the picker result into a tabular file and images
    2. Read the rows (before touching any file, so a bad sheet has no side effects)
    3. Ingest the images into managed storage
    4. Match rows to ingested images, or build image-only entries
    5. Create a folder, or append to an existing one
"""

import logging
import random
from dataclasses import dataclass, field

from .config import Config
from .errors import TabularReadError
from .folder_store import FolderStore
from .ingest import BatchFileIngestor, FixedDelayThrottle, IngestResult, IngestStatus, ProgressCallback
from .matcher import entries_from_images, match_rows
from .models import Folder, PickedFile, RowRecord, SlideEntry
from .persistence import JsonFolderPersistence
from .rich_text import HIGHLIGHT_MODES
from .selection import Selection, classify
from .storage import ManagedStorage
from .tabular import read_rows_async

logger = logging.getLogger(__name__)

DEFAULT_FOLDER_NAME = 'Image Folder'
NO_VALID_FILES_MESSAGE = 'No valid files found. Please upload images or an Excel file.'


@dataclass
class UploadOutcome:
    """Whole-operation result shown to the user."""
    success: bool
    message: str = ""
    folder: Folder | None = None
    entries: list[SlideEntry] = field(default_factory=list)
    ingest: IngestResult | None = None
    cancelled: bool = False


def folder_name_for(selection: Selection) -> str:
    """Folder name from the tabular file's name up to its first dot."""
    if selection.tabular is not None:
        return selection.tabular.name.split('.')[0] or DEFAULT_FOLDER_NAME
    return DEFAULT_FOLDER_NAME


def summarize(selection: Selection, entries: list[SlideEntry]) -> str:
    if selection.tabular is not None and selection.images:
        with_images = sum(1 for entry in entries if entry.image_url)
        return (f"Folder uploaded successfully! Found {len(entries)} unique entries, "
                f"including {with_images} with images.")
    if selection.tabular is not None:
        return f"Found {len(entries)} unique text entries."
    return f"Found {len(entries)} unique images."


class SlideLibrary:
    """Application facade owning storage, the ingestor and the folder store."""

    def __init__(
        self,
        store: FolderStore,
        ingestor: BatchFileIngestor,
        rng: random.Random | None = None,
        highlight_mode: str = 'phrase',
    ):
        if highlight_mode not in HIGHLIGHT_MODES:
            raise ValueError(f"Unknown highlight mode: {highlight_mode!r} (expected one of {HIGHLIGHT_MODES})")
        self.store = store
        self.ingestor = ingestor
        self.rng = rng
        self.highlight_mode = highlight_mode

    @classmethod
    def from_config(cls, config: Config, rng: random.Random | None = None) -> "SlideLibrary":
        """Wire up a library from configuration."""
        storage = ManagedStorage(config.storage_dir)
        store = FolderStore(JsonFolderPersistence(config.store_file), storage)
        ingestor = BatchFileIngestor(
            storage,
            batch_size=config.batch_size,
            throttle=FixedDelayThrottle(config.item_delay),
        )
        return cls(store, ingestor, rng=rng, highlight_mode=config.highlight_mode)

    @property
    def storage(self) -> ManagedStorage:
        return self.store.storage

    async def _discard_unused(self, ingest: IngestResult, entries: list[SlideEntry]) -> None:
        """Delete ingested images that no entry ended up referencing."""
        used = {entry.image_url for entry in entries}
        for item in ingest.ingested:
            if item.path in used:
                continue
            try:
                await self.storage.delete(item.path)
                logger.debug(f"Discarded unused image {item.name}")
            except OSError as e:
                logger.warning(f"Could not discard unused image {item.path}: {e}")

    async def build_entries(
        self,
        selection: Selection,
        on_progress: ProgressCallback | None = None,
    ) -> tuple[list[SlideEntry], IngestResult]:
        """Turn a classified selection into slide entries.

        Raises:
            TabularReadError: If the tabular file cannot be read
        """
        rows: list[RowRecord] | None = None
        if selection.tabular is not None:
            rows = await read_rows_async(selection.tabular.path)

        ingest = await self.ingestor.ingest(selection.images, on_progress=on_progress)
        candidates = ingest.candidates()

        if rows is not None:
            entries = match_rows(rows, candidates, rng=self.rng, highlight_mode=self.highlight_mode)
        else:
            entries = entries_from_images(candidates)

        await self._discard_unused(ingest, entries)
        return entries, ingest

    async def _prepare(
        self,
        files: list[PickedFile],
        on_progress: ProgressCallback | None,
    ) -> tuple[Selection, list[SlideEntry], IngestResult] | UploadOutcome:
        if not files:
            logger.info("No files picked, nothing to do")
            return UploadOutcome(success=False, cancelled=True)

        selection = classify(files)
        if selection.is_empty:
            return UploadOutcome(success=False, message=NO_VALID_FILES_MESSAGE)

        try:
            entries, ingest = await self.build_entries(selection, on_progress=on_progress)
        except TabularReadError as e:
            logger.error(str(e))
            return UploadOutcome(success=False, message=f"Failed to process the files: {e}")

        if ingest.status == IngestStatus.FATAL and selection.tabular is None:
            return UploadOutcome(success=False, message=ingest.error_message or NO_VALID_FILES_MESSAGE,
                                 ingest=ingest)
        return selection, entries, ingest

    async def upload_folder(
        self,
        files: list[PickedFile],
        on_progress: ProgressCallback | None = None,
    ) -> UploadOutcome:
        """Create a new folder from one picker result.

        Args:
            files: Picked files (tabular and/or images)
            on_progress: Ingestion progress callback (percent)

        Returns:
            UploadOutcome describing the new folder, or why none was made
        """
        prepared = await self._prepare(files, on_progress)
        if isinstance(prepared, UploadOutcome):
            return prepared
        selection, entries, ingest = prepared

        folder = await self.store.create(Folder(id=0, folder_name=folder_name_for(selection), images=entries))
        message = summarize(selection, entries)
        logger.info(message)
        return UploadOutcome(success=True, message=message, folder=folder, entries=entries, ingest=ingest)

    async def add_content(
        self,
        folder_id: int,
        files: list[PickedFile],
        folder_name: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> UploadOutcome:
        """Append entries from another picker result to an existing folder.

        Args:
            folder_id: Folder to extend
            files: Picked files (tabular and/or images)
            folder_name: Optional new name applied in the same step
            on_progress: Ingestion progress callback (percent)
        """
        if self.store.get(folder_id) is None:
            return UploadOutcome(success=False, message=f"Folder {folder_id} not found.")

        prepared = await self._prepare(files, on_progress)
        if isinstance(prepared, UploadOutcome):
            return prepared
        _, entries, ingest = prepared

        if folder_name:
            self.store.get(folder_id).folder_name = folder_name
        folder = await self.store.add_entries(folder_id, entries)
        message = f"Added {len(entries)} new entries to the folder."
        logger.info(message)
        return UploadOutcome(success=True, message=message, folder=folder, entries=entries, ingest=ingest)
