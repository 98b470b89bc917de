"""Tests for row/image matching and deduplication."""

from slidefolio.matcher import dedup_key, entries_from_images, match_rows
from slidefolio.models import ImageCandidate, RowRecord
from slidefolio.rich_text import ACCENT_COLORS


def _row(image="", text="", highlighted="", style="", voice="") -> RowRecord:
    return RowRecord(image=image, text=text, highlighted=highlighted, style=style,
                     background_voice=voice)


IMAGES = [
    ImageCandidate("a.png", "/managed/1_a.png"),
    ImageCandidate("b.png", "/managed/2_b.png"),
]


class TestMatchRows:

    def test_row_with_matching_image(self, rng):
        rows = [_row("a.png", "Hello world", "world", "bold")]
        entries = match_rows(rows, IMAGES[:1], rng=rng)

        assert len(entries) == 1
        entry = entries[0]
        assert entry.image_url == "/managed/1_a.png"
        assert entry.name == "a.png"
        assert [s.text for s in entry.description] == ["Hello ", "world"]
        assert entry.description[0].style.to_dict() == {}
        assert entry.description[1].style.bold
        assert entry.description[1].style.color in ACCENT_COLORS

    def test_filename_match_is_exact(self, rng):
        rows = [_row("A.PNG", "caps"), _row("a", "no extension")]
        entries = match_rows(rows, IMAGES, rng=rng)
        assert [e.image_url for e in entries] == [None, None]

    def test_duplicate_rows_dropped(self, rng):
        rows = [_row("a.png", "Same"), _row("a.png", "Same", voice="second")]
        entries = match_rows(rows, IMAGES, rng=rng)
        assert len(entries) == 1
        assert entries[0].voice_text == "Same"

    def test_same_text_different_image_kept(self, rng):
        rows = [_row("a.png", "Same"), _row("b.png", "Same")]
        assert len(match_rows(rows, IMAGES, rng=rng)) == 2

    def test_text_only_key_without_images(self, rng):
        rows = [_row("a.png", "Same"), _row("b.png", "Same")]
        entries = match_rows(rows, [], rng=rng)
        assert len(entries) == 1
        assert entries[0].image_url is None
        assert entries[0].name == "a.png"

    def test_blank_row_dropped(self, rng):
        rows = [_row(text="", highlighted="")]
        assert match_rows(rows, [], rng=rng) == []

    def test_whitespace_row_dropped(self, rng):
        rows = [_row(image="missing.png", text="   ")]
        assert match_rows(rows, IMAGES, rng=rng) == []

    def test_image_only_row_kept(self, rng):
        entries = match_rows([_row("b.png", "")], IMAGES, rng=rng)
        assert len(entries) == 1
        assert entries[0].description == []
        assert entries[0].voice_text == ""

    def test_repeated_blank_rows_dropped(self, rng):
        rows = [_row("", "  "), _row("", "  ")]
        assert match_rows(rows, IMAGES, rng=rng) == []

    def test_voice_fallbacks(self, rng):
        rows = [_row("a.png", "spoken", voice="narration"), _row("b.png", "fallback")]
        entries = match_rows(rows, IMAGES, rng=rng)
        assert [e.voice_text for e in entries] == ["narration", "fallback"]

    def test_untitled_name(self, rng):
        entries = match_rows([_row(text="text only")], IMAGES, rng=rng)
        assert entries[0].name == "Untitled"

    def test_preserves_row_order(self, rng):
        rows = [_row("b.png", "2"), _row("a.png", "1"), _row("", "3")]
        entries = match_rows(rows, IMAGES, rng=rng)
        assert [e.name for e in entries] == ["b.png", "a.png", "Untitled"]

    def test_running_twice_is_stable(self, rng):
        rows = [_row("a.png", "x"), _row("a.png", "x"), _row("b.png", "y"), _row("", "z")]
        first = match_rows(rows, IMAGES, rng=rng)
        second = match_rows(rows, IMAGES, rng=rng)
        assert len(first) == len(second) == 3
        assert [(e.name, e.image_url, e.voice_text) for e in first] == \
            [(e.name, e.image_url, e.voice_text) for e in second]


class TestDedupKey:

    def test_with_images(self):
        assert dedup_key(_row("a.png", "t"), has_images=True) == "a.png-t"
        assert dedup_key(_row("", "t"), has_images=True) == "text-only-t"

    def test_without_images(self):
        assert dedup_key(_row("a.png", "t"), has_images=False) == "t"


class TestEntriesFromImages:

    def test_one_entry_per_image(self):
        images = IMAGES + [ImageCandidate("c.jpg", "/managed/3_c.jpg")]
        entries = entries_from_images(images)
        assert [e.name for e in entries] == ["a.png", "b.png", "c.jpg"]
        assert all(e.description == [] and e.voice_text == "" for e in entries)

    def test_duplicate_names_first_wins(self):
        images = [ImageCandidate("a.png", "/1"), ImageCandidate("a.png", "/2")]
        entries = entries_from_images(images)
        assert [e.image_url for e in entries] == ["/1"]


class TestHighlightMode:

    def test_words_mode_flags_highlighted_words(self, rng):
        rows = [_row("a.png", "Look here now", "here now", "h1")]
        entries = match_rows(rows, IMAGES, rng=rng, highlight_mode="words")

        description = entries[0].description
        assert [s.text for s in description] == ["Look ", "here ", "now"]
        assert [s.style.highlighted for s in description] == [False, True, True]
        assert all(s.style.font_size == 32 and s.style.bold for s in description)
        assert all(s.style.color is None for s in description)

    def test_phrase_mode_is_default(self, rng):
        entries = match_rows([_row("a.png", "Look here", "here")], IMAGES, rng=rng)
        assert entries[0].description[1].style.color in ACCENT_COLORS
        assert not entries[0].description[1].style.highlighted
