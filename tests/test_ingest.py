"""Tests for batched file ingestion."""

from pathlib import Path

import pytest

from slidefolio.ingest import (
    BatchFileIngestor,
    FixedDelayThrottle,
    IngestStatus,
    batched,
)
from slidefolio.models import PickedFile
from slidefolio.storage import ManagedStorage


class TestBatchFileIngestor:

    @pytest.mark.asyncio
    async def test_copies_into_managed_storage(self, ingestor, storage, make_picked):
        picked = make_picked("a.png", b"image-a")

        result = await ingestor.ingest([picked])

        assert result.status == IngestStatus.OK
        assert len(result.ingested) == 1
        item = result.ingested[0]
        assert item.name == "a.png"
        assert storage.is_managed(item.path)
        assert Path(item.path).read_bytes() == b"image-a"
        assert Path(item.path).name.endswith("_a.png")

    @pytest.mark.asyncio
    async def test_source_removed_after_copy(self, ingestor, make_picked):
        picked = make_picked("a.png")
        await ingestor.ingest([picked])
        assert not Path(picked.path).exists()

    @pytest.mark.asyncio
    async def test_same_name_gets_distinct_destinations(self, ingestor, picker_dir):
        first_dir, second_dir = picker_dir / "1", picker_dir / "2"
        first_dir.mkdir()
        second_dir.mkdir()
        (first_dir / "a.png").write_bytes(b"one")
        (second_dir / "a.png").write_bytes(b"two")
        files = [
            PickedFile("a.png", str(first_dir / "a.png")),
            PickedFile("a.png", str(second_dir / "a.png")),
        ]

        result = await ingestor.ingest(files)

        paths = [item.path for item in result.ingested]
        assert len(set(paths)) == 2
        assert [Path(p).read_bytes() for p in paths] == [b"one", b"two"]

    @pytest.mark.asyncio
    async def test_progress_is_monotonic_and_ends_at_100(self, ingestor, make_picked):
        files = [make_picked(f"{i}.png") for i in range(5)]
        progress: list[float] = []

        await ingestor.ingest(files, on_progress=progress.append)

        assert len(progress) == 5
        assert progress == sorted(progress)
        assert progress[-1] == 100
        assert all(p < 100 for p in progress[:-1])

    @pytest.mark.asyncio
    async def test_failure_is_skipped_not_fatal(self, ingestor, make_picked, picker_dir):
        good_a = make_picked("a.png")
        missing = PickedFile("gone.png", str(picker_dir / "gone.png"))
        good_b = make_picked("b.png")
        progress: list[float] = []

        result = await ingestor.ingest([good_a, missing, good_b], on_progress=progress.append)

        assert result.status == IngestStatus.PARTIAL_FAILURE
        assert result.success
        assert [item.name for item in result.ingested] == ["a.png", "b.png"]
        assert [s.name for s in result.skipped] == ["gone.png"]
        assert "copy failed" in result.skipped[0].reason
        assert progress[-1] == 100

    @pytest.mark.asyncio
    async def test_all_failures_is_fatal(self, ingestor, picker_dir):
        files = [PickedFile("x.png", str(picker_dir / "x.png"))]
        result = await ingestor.ingest(files)
        assert result.status == IngestStatus.FATAL
        assert not result.success
        assert result.ingested == []

    @pytest.mark.asyncio
    async def test_missing_copy_fails_verification(self, storage, throttle, make_picked):
        class LossyStorage(ManagedStorage):
            async def copy(self, src, dst):
                pass

        ingestor = BatchFileIngestor(LossyStorage(storage.root), throttle=throttle)
        picked = make_picked("a.png")

        result = await ingestor.ingest([picked])

        assert result.status == IngestStatus.FATAL
        assert "not found" in result.skipped[0].reason
        # source is kept when the copy cannot be verified
        assert Path(picked.path).exists()

    @pytest.mark.asyncio
    async def test_source_delete_failure_is_not_fatal(self, storage, throttle, make_picked):
        class StickySource(ManagedStorage):
            async def delete(self, path):
                raise PermissionError("read-only picker cache")

        ingestor = BatchFileIngestor(StickySource(storage.root), throttle=throttle)
        result = await ingestor.ingest([make_picked("a.png")])

        assert result.status == IngestStatus.OK
        assert len(result.ingested) == 1

    @pytest.mark.asyncio
    async def test_throttle_waits_before_each_file(self, ingestor, make_picked, sleeps):
        await ingestor.ingest([make_picked(f"{i}.png") for i in range(3)])
        assert sleeps == [0.05, 0.05, 0.05]

    @pytest.mark.asyncio
    async def test_empty_selection_has_no_side_effects(self, ingestor, storage, sleeps):
        result = await ingestor.ingest([])
        assert result.status == IngestStatus.OK
        assert not storage.root.exists()
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_processes_in_selection_order(self, ingestor, make_picked):
        files = [make_picked(name) for name in ["c.png", "a.png", "b.png"]]
        result = await ingestor.ingest(files)
        assert [item.name for item in result.ingested] == ["c.png", "a.png", "b.png"]

    def test_invalid_batch_size(self, storage):
        with pytest.raises(ValueError):
            BatchFileIngestor(storage, batch_size=0)


class TestFixedDelayThrottle:

    def test_negative_interval_rejected(self):
        with pytest.raises(ValueError):
            FixedDelayThrottle(-1)

    @pytest.mark.asyncio
    async def test_zero_interval_never_sleeps(self):
        calls = []

        async def _sleep(seconds):
            calls.append(seconds)

        await FixedDelayThrottle(0, sleep=_sleep).wait()
        assert calls == []


def test_batched():
    assert batched([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert batched([], 3) == []
