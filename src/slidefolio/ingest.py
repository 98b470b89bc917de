"""Batched, throttled ingestion of picked files into managed storage.

Pipeline per file:
    1. Throttle: wait a fixed delay
    2. Copy the source into managed storage under a unique name
    3. Verify the copy exists
    4. Best-effort delete of the ephemeral source
    5. Report progress

Files are processed one at a time in fixed-size batches. A failing file is
recorded and skipped; it never stops the rest of the run.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable

from .errors import IngestionError
from .models import ImageCandidate, PickedFile
from .storage import ManagedStorage

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5
DEFAULT_ITEM_DELAY = 0.1

ProgressCallback = Callable[[float], None]


class IngestStatus(str, Enum):
    """Overall outcome of an ingestion run."""
    OK = "ok"
    PARTIAL_FAILURE = "partial_failure"
    FATAL = "fatal"


@dataclass
class IngestedFile:
    """A file now held in managed storage."""
    name: str
    source: str
    path: str

    def as_candidate(self) -> ImageCandidate:
        return ImageCandidate(name=self.name, uri=self.path)


@dataclass
class SkippedFile:
    """A file left out of the result, with the reason."""
    name: str
    reason: str


@dataclass
class IngestResult:
    """Result of an ingestion run."""
    status: IngestStatus = IngestStatus.OK
    ingested: list[IngestedFile] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    error_message: str | None = None

    @property
    def success(self) -> bool:
        return self.status != IngestStatus.FATAL

    def candidates(self) -> list[ImageCandidate]:
        return [item.as_candidate() for item in self.ingested]


class FixedDelayThrottle:
    """Rate-limiting stage that waits a fixed interval before each item."""

    def __init__(
        self,
        interval: float = DEFAULT_ITEM_DELAY,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the throttle.

        Args:
            interval: Seconds to wait before each item (0 disables waiting)
            sleep: Coroutine used to wait, replaceable in tests
        """
        if interval < 0:
            raise ValueError(f"Throttle interval must be >= 0, got {interval}")
        self.interval = interval
        self._sleep = sleep

    async def wait(self) -> None:
        if self.interval > 0:
            await self._sleep(self.interval)


def batched(items: list, size: int) -> list[list]:
    """Split items into consecutive batches of at most size."""
    return [items[i:i + size] for i in range(0, len(items), size)]


class BatchFileIngestor:
    """Copy picked files into managed storage, one at a time."""

    def __init__(
        self,
        storage: ManagedStorage,
        batch_size: int = DEFAULT_BATCH_SIZE,
        throttle: FixedDelayThrottle | None = None,
    ):
        """Initialize the ingestor.

        Args:
            storage: Managed storage collaborator
            batch_size: Files per batch
            throttle: Delay stage applied before each copy
        """
        if batch_size < 1:
            raise ValueError(f"Batch size must be >= 1, got {batch_size}")
        self.storage = storage
        self.batch_size = batch_size
        self.throttle = throttle or FixedDelayThrottle()

    async def ingest_file(self, picked: PickedFile) -> IngestedFile:
        """Copy one file into managed storage and verify the copy.

        Raises:
            IngestionError: If the copy fails or cannot be verified
        """
        destination = self.storage.destination_for(picked.name)
        try:
            await self.storage.copy(picked.path, destination)
        except OSError as e:
            raise IngestionError(picked.name, f"copy failed: {e}") from e

        if not await self.storage.exists(destination):
            raise IngestionError(picked.name, f"copy not found at {destination}")

        try:
            await self.storage.delete(picked.path)
        except OSError as e:
            logger.warning(f"Could not delete source {picked.path}: {e}")

        return IngestedFile(name=picked.name, source=picked.path, path=str(destination))

    async def ingest(
        self,
        files: list[PickedFile],
        on_progress: ProgressCallback | None = None,
    ) -> IngestResult:
        """Ingest files in batches and report progress after each one.

        Progress is reported as a percentage of files processed, whether
        they succeeded or not, and reaches exactly 100 after the last file.

        Args:
            files: Picked files in selection order
            on_progress: Called with the percentage after each file

        Returns:
            IngestResult listing ingested and skipped files
        """
        result = IngestResult()
        if not files:
            return result

        try:
            await self.storage.ensure_directory()
        except OSError as e:
            logger.error(f"Cannot prepare managed storage {self.storage.root}: {e}")
            return IngestResult(
                status=IngestStatus.FATAL,
                skipped=[SkippedFile(f.name, 'managed storage unavailable') for f in files],
                error_message=f"Managed storage unavailable: {e}",
            )

        total = len(files)
        processed = 0
        batches = batched(files, self.batch_size)

        for batch_number, batch in enumerate(batches, start=1):
            logger.debug(f"Batch {batch_number}/{len(batches)}: {len(batch)} file(s)")
            for picked in batch:
                await self.throttle.wait()
                try:
                    result.ingested.append(await self.ingest_file(picked))
                except IngestionError as e:
                    logger.warning(str(e))
                    result.skipped.append(SkippedFile(picked.name, e.reason))

                processed += 1
                if on_progress is not None:
                    on_progress(processed * 100 / total)

        if result.skipped and not result.ingested:
            result.status = IngestStatus.FATAL
            result.error_message = f"None of the {total} file(s) could be ingested"
        elif result.skipped:
            result.status = IngestStatus.PARTIAL_FAILURE

        logger.info(f"Ingested {len(result.ingested)}/{total} file(s), skipped {len(result.skipped)}")
        return result
