"""Match spreadsheet rows to picked images and build slide entries."""

import logging
import random

from .models import ImageCandidate, RowRecord, SlideEntry
from .rich_text import segment_text

logger = logging.getLogger(__name__)

TEXT_ONLY_KEY = 'text-only'
UNTITLED_NAME = 'Untitled'


def dedup_key(row: RowRecord, has_images: bool) -> str:
    """Identity of a row for duplicate detection.

    With images present the key combines the image name and the text;
    without images only the text counts.
    """
    if has_images:
        return f"{row.image or TEXT_ONLY_KEY}-{row.text}"
    return row.text


def build_entry(
    row: RowRecord,
    image: ImageCandidate | None,
    rng: random.Random | None = None,
    highlight_mode: str = 'phrase',
) -> SlideEntry:
    """Build the slide entry for one row."""
    return SlideEntry(
        image_url=image.uri if image else None,
        name=row.image or UNTITLED_NAME,
        description=segment_text(row.text, row.highlighted, row.style, mode=highlight_mode, rng=rng),
        voice_text=row.background_voice or row.text or '',
    )


def match_rows(
    rows: list[RowRecord],
    images: list[ImageCandidate],
    rng: random.Random | None = None,
    highlight_mode: str = 'phrase',
) -> list[SlideEntry]:
    """Reconcile rows with image files and drop duplicate or empty rows.

    Image lookup is an exact, case-sensitive filename comparison. The first
    row with a given dedup key wins; a key is claimed even when its entry
    is later dropped for having no content.

    Args:
        rows: Row records in source order
        images: Candidate images available for matching
        rng: Random source for highlight accent colors
        highlight_mode: Segmentation strategy, ``phrase`` or ``words``

    Returns:
        Slide entries in row order
    """
    by_name: dict[str, ImageCandidate] = {}
    for image in images:
        by_name.setdefault(image.name, image)

    has_images = bool(images)
    seen: set[str] = set()
    entries: list[SlideEntry] = []

    for row_number, row in enumerate(rows, start=1):
        key = dedup_key(row, has_images)
        if key in seen:
            logger.debug(f"Row {row_number}: duplicate of {key!r}, skipped")
            continue
        seen.add(key)

        matched = by_name.get(row.image) if has_images else None
        entry = build_entry(row, matched, rng=rng, highlight_mode=highlight_mode)
        if not entry.has_content():
            logger.debug(f"Row {row_number}: no image and no text, skipped")
            continue
        entries.append(entry)

    return entries


def entries_from_images(images: list[ImageCandidate]) -> list[SlideEntry]:
    """One entry per distinct image filename, in selection order."""
    seen: set[str] = set()
    entries: list[SlideEntry] = []
    for image in images:
        if image.name in seen:
            logger.debug(f"Image {image.name}: duplicate filename, skipped")
            continue
        seen.add(image.name)
        entries.append(SlideEntry(image_url=image.uri, name=image.name))
    return entries
