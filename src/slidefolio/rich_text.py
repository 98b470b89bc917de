"""Split row text into styled segments.

Two strategies are provided:

* ``split_phrase`` cuts the text on every literal occurrence of the
  highlighted phrase. Each occurrence gets the tag style plus a randomly
  drawn accent color.
* ``split_words`` cuts the text on single spaces and flags every word that
  belongs to the highlighted word set. Sentence colors for those flags are
  assigned later by ``sentence_colors.assign_sentence_colors``.
"""

import random

from .models import StyleDescriptor, TextSegment
from .style_tags import parse_style_tag, style_tokens

ACCENT_COLORS: list[str] = [
    '#ff4444',  # red
    '#44aaff',  # blue
    '#44ff44',  # green
    '#ffff44',  # yellow
    '#ff44ff',  # purple
    '#ff88cc',  # pink
    '#ff8844',  # orange
    '#44ffff',  # cyan
    '#88ff44',  # lime
    '#ff44ff',  # magenta
]

WORD_HEADING_SIZES: dict[str, int] = {'h1': 32, 'h2': 28, 'h3': 24}
DEFAULT_WORD_FONT_SIZE = 18

# 'phrase' colors each highlighted occurrence; 'words' flags words for sentence coloring
HIGHLIGHT_MODES: tuple[str, ...] = ('phrase', 'words')


def random_accent_color(rng: random.Random | None = None) -> str:
    """Draw one color from the accent palette."""
    return (rng or random).choice(ACCENT_COLORS)


def split_phrase(
    text: str,
    highlighted: str,
    style_tag: str,
    rng: random.Random | None = None,
) -> list[TextSegment]:
    """Split text on literal occurrences of the highlighted phrase.

    Args:
        text: Full row text
        highlighted: Phrase to emphasize; may span several words
        style_tag: Raw style tag applied to each occurrence
        rng: Random source for accent colors (module-level random if None)

    Returns:
        Segments whose texts concatenate back to ``text``
    """
    if not text:
        return []
    if not highlighted:
        return [TextSegment(text)]

    parts = text.split(highlighted)
    tag_style = parse_style_tag(style_tag)
    segments: list[TextSegment] = []

    for index, part in enumerate(parts):
        if part:
            segments.append(TextSegment(part))
        if index < len(parts) - 1:
            segments.append(TextSegment(highlighted, tag_style.with_color(random_accent_color(rng))))

    return segments or [TextSegment(text)]


def split_words(text: str, highlighted: str, style_tag: str) -> list[TextSegment]:
    """Split text into one segment per space-separated word.

    Every word shares the tag's bold/italic/underline flags and a font size
    derived from h1-h3 (18 otherwise). Words found in the highlighted word
    set are flagged ``highlighted``. All segments but the last keep a
    trailing space.
    """
    if not text:
        return []

    words = text.split(' ')
    highlighted_words = set(highlighted.split()) if highlighted else set()
    tag_style = parse_style_tag(style_tag)
    tokens = style_tokens(style_tag)
    font_size = next(
        (size for heading, size in WORD_HEADING_SIZES.items() if heading in tokens),
        DEFAULT_WORD_FONT_SIZE,
    )

    segments = []
    for index, word in enumerate(words):
        trailer = ' ' if index < len(words) - 1 else ''
        segments.append(TextSegment(
            word + trailer,
            StyleDescriptor(
                bold=tag_style.bold,
                italic=tag_style.italic,
                underline=tag_style.underline,
                font_size=font_size,
                highlighted=word.strip() in highlighted_words,
            ),
        ))
    return segments


def join_segments(segments: list[TextSegment]) -> str:
    """Concatenate segment texts back into plain text."""
    return ''.join(segment.text for segment in segments)


def segment_text(
    text: str,
    highlighted: str,
    style_tag: str,
    mode: str = 'phrase',
    rng: random.Random | None = None,
) -> list[TextSegment]:
    """Segment row text with the chosen highlight strategy.

    Args:
        text: Full row text
        highlighted: Highlighted phrase (``phrase``) or word set (``words``)
        style_tag: Raw style tag
        mode: One of HIGHLIGHT_MODES
        rng: Random source for phrase accent colors

    Raises:
        ValueError: If mode is not a known highlight mode
    """
    if mode == 'phrase':
        return split_phrase(text, highlighted, style_tag, rng=rng)
    if mode == 'words':
        return split_words(text, highlighted, style_tag)
    raise ValueError(f"Unknown highlight mode: {mode!r} (expected one of {HIGHLIGHT_MODES})")
