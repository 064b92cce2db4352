"""Load manual configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import defaultUnicodeEncodings
from ruamel.yaml import YAML

from example_manual._constants import BUILTIN_FONT, DEFAULT_PAGES_DIR
from example_manual.document.fonts import find_font_file
from example_manual.errors import ManualConfigError

from .models import PAGE_SIZES, ContentEntry, ManualConfig


def load_yaml_mapping(path: Path) -> dict[str, typ.Any]:
    """Return the top-level mapping stored in the YAML file at ``path``.

    Raises
    ------
    ManualConfigError
        If the document is not a mapping.
    """
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = f"Top-level YAML structure in '{path}' must be a mapping."
        raise ManualConfigError(msg)
    return dict(loaded)


def load_manual_config(path: Path) -> ManualConfig:
    """Load the YAML configuration describing the manual.

    Parameters
    ----------
    path : Path
        Filesystem path to the manual configuration (for example,
        ``manual.yaml``). Relative paths inside it resolve against its folder.

    Returns
    -------
    ManualConfig
        Parsed configuration with contents in document order.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ManualConfigError
        If required fields are missing or invalid (for example, no contents
        are defined, or a fallback font file is missing).

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_manual_config(Path("manual/manual.yaml"))  # doctest: +SKIP
    >>> [entry.name for entry in config.contents][:2]  # doctest: +SKIP
    ['cover', 'basic_concepts']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    raw = load_yaml_mapping(path)
    base_dir = path.resolve().parent

    contents = _build_contents(raw.get("contents") or [])
    if not contents:
        msg = "No pages or packages defined in manual configuration."
        raise ManualConfigError(msg)

    page_size = str(raw.get("page_size", "LETTER"))
    if page_size.upper() not in PAGE_SIZES:
        available = ", ".join(sorted(PAGE_SIZES))
        msg = f"Unknown page size '{page_size}'. Known sizes: {available}"
        raise ManualConfigError(msg)

    root = _resolve(base_dir, raw.get("root", "."))
    output = _resolve(base_dir, raw.get("output", "manual.pdf"))
    fonts = _build_fonts(base_dir, raw.get("fonts") or {})
    pygments_style = raw.get("pygments_style")

    return ManualConfig(
        title=str(raw.get("title", "Example manual")),
        output=output,
        root=root,
        contents=contents,
        pages_dir=str(raw.get("pages_dir", DEFAULT_PAGES_DIR)),
        page_size=page_size,
        margin=float(raw.get("margin", 36)),
        pygments_style=str(pygments_style) if pygments_style else None,
        fonts=fonts,
    )


def _resolve(base_dir: Path, value: object) -> Path:
    candidate = Path(str(value))
    if candidate.is_absolute():
        return candidate
    return base_dir / candidate


def _build_contents(payload: object) -> list[ContentEntry]:
    """Turn ``page:``/``package:`` entries into ContentEntry records."""
    if not isinstance(payload, list):
        msg = "'contents' must be a list of page or package entries."
        raise ManualConfigError(msg)
    entries: list[ContentEntry] = []
    for item in payload:
        match item:
            case {"page": str() as name}:
                entries.append(ContentEntry(kind="page", name=name))
            case {"package": str() as name}:
                entries.append(ContentEntry(kind="package", name=name))
            case _:
                msg = f"Unrecognised contents entry: {item!r}"
                raise ManualConfigError(msg)
    return entries


def _build_fonts(base_dir: Path, payload: object) -> dict[str, Path | None]:
    """Resolve fallback font families, keeping their declared order.

    A family maps to a TrueType file, resolved against the config folder and
    then ReportLab's font search path, or to ``builtin`` for one of
    ReportLab's built-in fonts.
    """
    if not isinstance(payload, dict):
        msg = "'fonts' must map family names to TrueType files or 'builtin'."
        raise ManualConfigError(msg)
    fonts: dict[str, Path | None] = {}
    for family, location in payload.items():
        if location == BUILTIN_FONT:
            _check_builtin_font(str(family))
            fonts[str(family)] = None
            continue
        font_path = _resolve(base_dir, location)
        if not font_path.exists():
            font_path = find_font_file(str(location)) or font_path
        if not font_path.exists():
            msg = f"Font file '{font_path}' for family '{family}' not found."
            raise ManualConfigError(msg)
        fonts[str(family)] = font_path
    return fonts


def _check_builtin_font(family: str) -> None:
    if family in pdfmetrics.standardFonts or family in defaultUnicodeEncodings:
        return
    msg = f"'{family}' is not one of ReportLab's built-in fonts."
    raise ManualConfigError(msg)


__all__ = ["load_manual_config", "load_yaml_mapping"]
