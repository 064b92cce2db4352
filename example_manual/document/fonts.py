"""Font registration and per-glyph fallback selection."""

from __future__ import annotations

import functools
import typing as typ
from pathlib import Path

from reportlab.lib.fonts import ps2tt, tt2ps
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfbase.ttfonts import TTFError, TTFont, TTFOpenFile

if typ.TYPE_CHECKING:
    import collections.abc as cabc

FontStyle = typ.Literal["normal", "bold", "italic", "bold_italic"]

# Codecs for the standard Type 1 encodings; pdfmetrics registers the last two.
_STANDARD_ENCODINGS = {
    "WinAnsiEncoding": "cp1252",
    "SymbolEncoding": "symbol",
    "ZapfDingbatsEncoding": "zapfdingbats",
}


def register_font(name: str, path: Path | None) -> None:
    """Register ``name`` once.

    With a ``path`` the TrueType file is loaded under ``name``. Without one,
    ``name`` must be one of ReportLab's built-in fonts: a standard Type 1
    font such as ``ZapfDingbats``, or a CID font such as ``STSong-Light``.

    Raises
    ------
    KeyError
        If ``path`` is ``None`` and ReportLab has no built-in font ``name``.
    """
    if name in pdfmetrics.getRegisteredFontNames():
        return
    if path is not None:
        pdfmetrics.registerFont(TTFont(name, str(path)))
    elif name not in pdfmetrics.standardFonts:
        pdfmetrics.registerFont(UnicodeCIDFont(name))
    has_glyph.cache_clear()


def find_font_file(filename: str) -> Path | None:
    """Locate ``filename`` on ReportLab's TrueType search path.

    >>> find_font_file("Vera.ttf").name  # doctest: +SKIP
    'Vera.ttf'
    """
    try:
        found, handle = TTFOpenFile(filename)
    except TTFError:
        return None
    handle.close()
    return Path(found)


@functools.lru_cache(maxsize=4096)
def has_glyph(font_name: str, char: str) -> bool:
    """Return whether ``font_name`` can draw ``char``."""
    font = pdfmetrics.getFont(font_name)
    char_to_glyph = getattr(font.face, "charToGlyph", None)
    if char_to_glyph is not None:
        return ord(char) in char_to_glyph
    codec = _STANDARD_ENCODINGS.get(getattr(font, "encName", ""))
    if codec is None:
        return True
    try:
        char.encode(codec)
    except UnicodeEncodeError:
        return False
    return True


def pick_font(char: str, primary: str, fallbacks: cabc.Sequence[str]) -> str:
    """Return the first of ``primary`` and ``fallbacks`` that has ``char``."""
    if char.isspace() or has_glyph(primary, char):
        return primary
    for candidate in fallbacks:
        if has_glyph(candidate, char):
            return candidate
    return primary


def styled_font(name: str, style: FontStyle | None) -> str:
    """Return the concrete face of ``name``'s family for ``style``.

    >>> styled_font("Helvetica", "bold")
    'Helvetica-Bold'
    >>> styled_font("Courier-Bold", "normal")
    'Courier'
    """
    if style is None:
        return name
    bold = int(style in ("bold", "bold_italic"))
    italic = int(style in ("italic", "bold_italic"))
    try:
        family, _bold, _italic = ps2tt(name)
        return tt2ps(family, bold, italic)
    except ValueError:
        return name


__all__ = [
    "FontStyle",
    "find_font_file",
    "has_glyph",
    "pick_font",
    "register_font",
    "styled_font",
]
