"""Drawing surface, outline and style state used to render the manual."""

from .fonts import find_font_file, has_glyph, pick_font, register_font, styled_font
from .listing import listing_runs
from .outline import Anchor, Outline, OutlineEntry
from .style import StyleState, normalize_color
from .surface import Bounds, Document, TextRun, convert_inline_markup

__all__ = [
    "Anchor",
    "Bounds",
    "Document",
    "Outline",
    "OutlineEntry",
    "StyleState",
    "TextRun",
    "convert_inline_markup",
    "find_font_file",
    "has_glyph",
    "listing_runs",
    "normalize_color",
    "pick_font",
    "register_font",
    "styled_font",
]
