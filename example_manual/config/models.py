"""Typed dataclasses describing the manual configuration."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from reportlab.lib import pagesizes

from example_manual._constants import DEFAULT_PAGES_DIR
from example_manual.errors import ManualConfigError

ContentKind = typ.Literal["page", "package"]

PAGE_SIZES: dict[str, tuple[float, float]] = {
    "A4": pagesizes.A4,
    "LEGAL": pagesizes.LEGAL,
    "LETTER": pagesizes.LETTER,
}


@dc.dataclass(frozen=True, slots=True)
class ContentEntry:
    """One top-level item of the manual: a lone page or a package."""

    kind: ContentKind
    name: str


@dc.dataclass(slots=True)
class ManualConfig:
    """A fully resolved manual definition sourced from YAML config.

    Attributes
    ----------
    title : str
        Document title written into the PDF metadata.
    output : Path
        Where the rendered PDF is written.
    root : Path
        Folder holding the package folders and the lone pages folder.
    contents : list[ContentEntry]
        Pages and packages in document order.
    pages_dir : str
        Folder (under ``root``) holding the lone pages.
    page_size : str
        Name of a ReportLab page size (``LETTER``, ``A4`` or ``LEGAL``).
    margin : float
        Margin, in points, around the drawable box on every page.
    pygments_style : str or None
        Pygments style used to colour source listings; ``None`` keeps them
        plain.
    fonts : dict[str, Path or None]
        Fallback families in fallback order. ``None`` marks one of
        ReportLab's built-in fonts (``ZapfDingbats``, ``STSong-Light``, ...).
    """

    title: str
    output: Path
    root: Path
    contents: list[ContentEntry]
    pages_dir: str = DEFAULT_PAGES_DIR
    page_size: str = "LETTER"
    margin: float = 36
    pygments_style: str | None = None
    fonts: dict[str, Path | None] = dc.field(default_factory=dict)

    @property
    def pagesize(self) -> tuple[float, float]:
        """Return the page dimensions for the configured page size name."""
        try:
            return PAGE_SIZES[self.page_size.upper()]
        except KeyError as exc:
            available = ", ".join(sorted(PAGE_SIZES))
            msg = f"Unknown page size '{self.page_size}'. Known sizes: {available}"
            raise ManualConfigError(msg) from exc

    def only_package(self, package: str) -> ManualConfig:
        """Return a copy whose contents are restricted to ``package``."""
        entries = [
            entry
            for entry in self.contents
            if entry.kind == "package" and entry.name == package
        ]
        if not entries:
            known = ", ".join(e.name for e in self.contents if e.kind == "package")
            msg = f"Unknown package '{package}'. Known packages: {known}"
            raise ManualConfigError(msg)
        return dc.replace(self, contents=entries)


__all__ = ["PAGE_SIZES", "ContentEntry", "ContentKind", "ManualConfig"]
