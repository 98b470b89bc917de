"""Classify a file-picker result into a tabular file and image files."""

import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path

from .fs_safety import is_safe_filename
from .models import PickedFile

logger = logging.getLogger(__name__)

TABULAR_EXTENSIONS: tuple[str, ...] = ('.xlsx', '.xls', '.csv')
IMAGE_EXTENSIONS: tuple[str, ...] = ('.png', '.jpg', '.jpeg')


@dataclass
class Selection:
    """Picked files sorted by role."""
    tabular: PickedFile | None = None
    images: list[PickedFile] = field(default_factory=list)
    ignored: list[PickedFile] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.tabular is None and not self.images


def is_tabular(picked: PickedFile) -> bool:
    return picked.name.endswith(TABULAR_EXTENSIONS)


def is_image(picked: PickedFile) -> bool:
    """Image files need an image MIME type and a png/jpg/jpeg name."""
    mime_type = picked.mime_type or mimetypes.guess_type(picked.name)[0] or ''
    return mime_type.startswith('image/') and picked.name.endswith(IMAGE_EXTENSIONS)


def picked_from_path(path: str | Path, mime_type: str | None = None) -> PickedFile:
    """Describe a local file as a picker result."""
    path = Path(path)
    return PickedFile(name=path.name, path=str(path), mime_type=mime_type)


def classify(files: list[PickedFile]) -> Selection:
    """Split a picker result into the first tabular file and all images.

    Files with unsafe names, extra tabular files and unsupported types are
    collected in ``ignored``.
    """
    selection = Selection()
    for picked in files:
        if not is_safe_filename(picked.name):
            logger.warning(f"Ignoring unsafe filename: {picked.name!r}")
            selection.ignored.append(picked)
        elif is_tabular(picked):
            if selection.tabular is None:
                selection.tabular = picked
            else:
                logger.debug(f"Ignoring extra tabular file: {picked.name}")
                selection.ignored.append(picked)
        elif is_image(picked):
            selection.images.append(picked)
        else:
            logger.debug(f"Ignoring unsupported file: {picked.name}")
            selection.ignored.append(picked)
    return selection
