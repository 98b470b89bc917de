"""Deterministic per-sentence coloring of highlighted word segments."""

from dataclasses import dataclass

from .models import TextSegment

SENTENCE_COLORS: list[str] = [
    '#facc15',  # yellow
    '#60a5fa',  # blue
    '#4ade80',  # green
    '#f87171',  # red
    '#c084fc',  # purple
    '#f472b6',  # pink
    '#818cf8',  # indigo
    '#fb923c',  # orange
]

SENTENCE_TERMINATORS = ('.', '!', '?')


@dataclass
class ColoredSegment:
    """A segment paired with the sentence color it renders in (None = unstyled)."""
    segment: TextSegment
    color: str | None = None
    sentence_index: int | None = None


def sentence_color(index: int) -> str:
    """Color for the given sentence index, cycling through the palette."""
    return SENTENCE_COLORS[index % len(SENTENCE_COLORS)]


def assign_sentence_colors(segments: list[TextSegment]) -> list[ColoredSegment]:
    """Assign a stable color to every highlighted run, one per sentence.

    A sentence starts at the first segment, after a segment whose text ends
    exactly in ``.``, ``!`` or ``?`` (a trailing space does not count), and
    wherever the highlight state flips. Each highlighted sentence start
    takes the next palette color. A highlighted
    segment is colored only if its text lies inside the phrase accumulated
    for the current highlighted run.

    Args:
        segments: Segments with ``style.highlighted`` already set

    Returns:
        One ColoredSegment per input segment, in order
    """
    colored: list[ColoredSegment] = []
    sentence_index = -1
    current_color: str | None = None
    last_was_highlighted = False
    phrase = ''

    for index, segment in enumerate(segments):
        highlighted = segment.style.highlighted

        if highlighted and not last_was_highlighted:
            phrase = segment.text
        elif highlighted and last_was_highlighted:
            phrase += ' ' + segment.text
        elif last_was_highlighted:
            phrase = ''

        new_sentence = (
            index == 0
            or segments[index - 1].text.endswith(SENTENCE_TERMINATORS)
            or highlighted != last_was_highlighted
        )
        if new_sentence and highlighted:
            sentence_index += 1
            current_color = sentence_color(sentence_index)

        last_was_highlighted = highlighted

        if highlighted and segment.text in phrase:
            colored.append(ColoredSegment(segment, current_color, sentence_index))
        else:
            colored.append(ColoredSegment(segment))

    return colored
