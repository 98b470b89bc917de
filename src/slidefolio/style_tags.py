"""Parse free-text style tags such as ``"Bold, H2, Red"``."""

from .models import StyleDescriptor

# Heading tokens in priority order; the first one present wins.
HEADING_SIZES: dict[str, int] = {
    'h1': 32,
    'h2': 28,
    'h3': 24,
    'h4': 20,
    'h5': 18,
    'h6': 16,
}

# Named colors in priority order; the first one present wins.
NAMED_COLORS: dict[str, str] = {
    'red': '#ff4444',
    'blue': '#44aaff',
    'green': '#44ff44',
    'yellow': '#ffff44',
    'purple': '#ff44ff',
    'pink': '#ff88cc',
    'orange': '#ff8844',
    'white': '#ffffff',
    'black': '#000000',
    'gray': '#888888',
    'cyan': '#44ffff',
    'lime': '#88ff44',
    'magenta': '#ff44ff',
}


def style_tokens(style_tag: str) -> list[str]:
    """Split a style tag into lower-cased, trimmed tokens."""
    return [token.strip() for token in (style_tag or "").lower().split(',')]


def parse_style_tag(style_tag: str) -> StyleDescriptor:
    """Turn a comma-separated style tag into a StyleDescriptor.

    Tokens are case-insensitive and trimmed; unknown tokens are ignored.
    Headings imply bold and set a fixed font size. At most one heading
    and one named color apply.

    Args:
        style_tag: Raw tag, e.g. ``"bold, h2, red"``

    Returns:
        Parsed StyleDescriptor (never highlighted)
    """
    tokens = style_tokens(style_tag)
    style = StyleDescriptor(
        bold='bold' in tokens,
        italic='italic' in tokens,
        underline='underline' in tokens,
    )

    for heading, size in HEADING_SIZES.items():
        if heading in tokens:
            style.bold = True
            style.font_size = size
            break

    for name, hex_color in NAMED_COLORS.items():
        if name in tokens:
            style.color = hex_color
            break

    return style
