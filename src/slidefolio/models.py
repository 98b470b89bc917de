"""Data structures for folders, slide entries and styled text segments.

Serialized forms use the camelCase keys of the persisted store
(``imageUrl``, ``folderName``, ``voiceText``, ``fontSize``). Style
dictionaries are sparse: only non-default attributes are written, and
missing keys fall back to defaults when loading.
"""

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass
class StyleDescriptor:
    """Visual style of a text segment.

    Attributes:
        bold: Bold weight.
        italic: Italic slant.
        underline: Underline decoration.
        font_size: Point size, or None to inherit.
        color: Hex color such as ``#ff4444``, or None to inherit.
        highlighted: Segment belongs to the highlighted word set.
    """
    bold: bool = False
    italic: bool = False
    underline: bool = False
    font_size: int | None = None
    color: str | None = None
    highlighted: bool = False

    def with_color(self, color: str | None) -> "StyleDescriptor":
        """Return a copy of this style with a different color."""
        return replace(self, color=color)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.bold:
            data['bold'] = True
        if self.italic:
            data['italic'] = True
        if self.underline:
            data['underline'] = True
        if self.font_size is not None:
            data['fontSize'] = self.font_size
        if self.color is not None:
            data['color'] = self.color
        if self.highlighted:
            data['highlighted'] = True
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "StyleDescriptor":
        data = data or {}
        return cls(
            bold=bool(data.get('bold', False)),
            italic=bool(data.get('italic', False)),
            underline=bool(data.get('underline', False)),
            font_size=data.get('fontSize'),
            color=data.get('color'),
            highlighted=bool(data.get('highlighted', False)),
        )


@dataclass
class TextSegment:
    """Smallest styled run of a slide description."""
    text: str
    style: StyleDescriptor = field(default_factory=StyleDescriptor)

    def is_blank(self) -> bool:
        return not self.text.strip()

    def to_dict(self) -> dict[str, Any]:
        return {'text': self.text, 'style': self.style.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TextSegment":
        return cls(text=data.get('text', ''), style=StyleDescriptor.from_dict(data.get('style')))


@dataclass
class SlideEntry:
    """One slide: optional image, styled description and spoken text."""
    image_url: str | None
    name: str
    description: list[TextSegment] = field(default_factory=list)
    voice_text: str = ""

    def has_content(self) -> bool:
        """True if the entry has an image or any non-blank description text."""
        return self.image_url is not None or any(not s.is_blank() for s in self.description)

    def to_dict(self) -> dict[str, Any]:
        return {
            'imageUrl': self.image_url,
            'name': self.name,
            'description': [s.to_dict() for s in self.description],
            'voiceText': self.voice_text,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SlideEntry":
        return cls(
            image_url=data.get('imageUrl'),
            name=data.get('name', ''),
            description=[TextSegment.from_dict(s) for s in data.get('description') or []],
            voice_text=data.get('voiceText') or '',
        )


@dataclass
class Folder:
    """Named, ordered collection of slide entries."""
    id: int
    folder_name: str
    images: list[SlideEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'folderName': self.folder_name,
            'images': [e.to_dict() for e in self.images],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Folder":
        return cls(
            id=int(data['id']),
            folder_name=data.get('folderName', ''),
            images=[SlideEntry.from_dict(e) for e in data.get('images') or []],
        )


@dataclass
class RowRecord:
    """One row of the tabular source, keyed by its column headers."""
    image: str = ""
    text: str = ""
    highlighted: str = ""
    style: str = ""
    background_voice: str = ""

    @classmethod
    def from_mapping(cls, row: dict[str, Any]) -> "RowRecord":
        """Build a row from a header→value mapping; missing or empty cells become blank strings."""
        def _cell(key: str) -> str:
            value = row.get(key)
            return "" if value is None else str(value)

        return cls(
            image=_cell('Image'),
            text=_cell('Text'),
            highlighted=_cell('Highlighted'),
            style=_cell('Style'),
            background_voice=_cell('backgroundVoice'),
        )


@dataclass
class PickedFile:
    """A file handed over by the file picker, still at its ephemeral location."""
    name: str
    path: str
    mime_type: str | None = None


@dataclass
class ImageCandidate:
    """An image available for matching, identified by its original filename."""
    name: str
    uri: str
