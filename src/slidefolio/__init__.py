"""Slide folders built from a spreadsheet and image files."""

from .models import (
    StyleDescriptor,
    TextSegment,
    SlideEntry,
    Folder,
    RowRecord,
    PickedFile,
    ImageCandidate,
)
from .style_tags import parse_style_tag
from .rich_text import (
    split_phrase,
    split_words,
    join_segments,
    random_accent_color,
    segment_text,
    HIGHLIGHT_MODES,
)
from .sentence_colors import (
    ColoredSegment,
    assign_sentence_colors,
    sentence_color,
)
from .matcher import (
    match_rows,
    entries_from_images,
    dedup_key,
)
from .ingest import (
    BatchFileIngestor,
    FixedDelayThrottle,
    IngestResult,
    IngestStatus,
)
from .storage import ManagedStorage
from .persistence import JsonFolderPersistence
from .folder_store import FolderStore
from .service import SlideLibrary, UploadOutcome
from .config import Config
from .errors import (
    SlidefolioError,
    IngestionError,
    TabularReadError,
    PersistenceError,
)

__all__ = [
    # Data model
    "StyleDescriptor",
    "TextSegment",
    "SlideEntry",
    "Folder",
    "RowRecord",
    "PickedFile",
    "ImageCandidate",
    # Text styling
    "parse_style_tag",
    "split_phrase",
    "split_words",
    "join_segments",
    "random_accent_color",
    "segment_text",
    "HIGHLIGHT_MODES",
    "ColoredSegment",
    "assign_sentence_colors",
    "sentence_color",
    # Matching
    "match_rows",
    "entries_from_images",
    "dedup_key",
    # Ingestion and storage
    "BatchFileIngestor",
    "FixedDelayThrottle",
    "IngestResult",
    "IngestStatus",
    "ManagedStorage",
    "JsonFolderPersistence",
    "FolderStore",
    "SlideLibrary",
    "UploadOutcome",
    "Config",
    # Errors
    "SlidefolioError",
    "IngestionError",
    "TabularReadError",
    "PersistenceError",
]
