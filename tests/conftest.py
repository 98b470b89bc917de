"""Shared fixtures for slidefolio tests."""

import random
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from slidefolio.folder_store import FolderStore
from slidefolio.ingest import BatchFileIngestor, FixedDelayThrottle
from slidefolio.models import PickedFile
from slidefolio.persistence import JsonFolderPersistence
from slidefolio.service import SlideLibrary
from slidefolio.storage import ManagedStorage

# Smallest valid PNG: 1x1 transparent pixel
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for accent colors."""
    return random.Random(1234)


@pytest.fixture
def picker_dir(temp_dir: Path) -> Path:
    """Ephemeral directory standing in for the file picker's cache."""
    path = temp_dir / "picker"
    path.mkdir()
    return path


@pytest.fixture
def make_picked(picker_dir: Path) -> Callable[..., PickedFile]:
    """Factory writing a file into the picker directory."""
    def _make(name: str, content: bytes | str = PNG_BYTES, mime_type: str | None = None) -> PickedFile:
        path = picker_dir / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_bytes(content)
        return PickedFile(name=name, path=str(path), mime_type=mime_type)
    return _make


@pytest.fixture
def storage(temp_dir: Path) -> ManagedStorage:
    return ManagedStorage(temp_dir / "managed")


@pytest.fixture
def sleeps() -> list[float]:
    """Records the delays requested by the throttle."""
    return []


@pytest.fixture
def throttle(sleeps: list[float]) -> FixedDelayThrottle:
    """Throttle that records delays instead of sleeping."""
    async def _fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)
    return FixedDelayThrottle(0.05, sleep=_fake_sleep)


@pytest.fixture
def ingestor(storage: ManagedStorage, throttle: FixedDelayThrottle) -> BatchFileIngestor:
    return BatchFileIngestor(storage, batch_size=2, throttle=throttle)


@pytest.fixture
def persistence(temp_dir: Path) -> JsonFolderPersistence:
    return JsonFolderPersistence(temp_dir / "store" / "folders.json")


@pytest.fixture
def store(persistence: JsonFolderPersistence, storage: ManagedStorage) -> FolderStore:
    return FolderStore(persistence, storage)


@pytest.fixture
def library(store: FolderStore, ingestor: BatchFileIngestor, rng: random.Random) -> SlideLibrary:
    return SlideLibrary(store, ingestor, rng=rng)
