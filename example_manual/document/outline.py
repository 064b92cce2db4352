"""Document outline (bookmark tree) built while the manual renders.

Entries are collected in a tree so that a subsection can be attached to any
earlier entry by title. ReportLab's outline API only accepts entries in
depth-first order, so the tree is written out once, when the document is
saved.
"""

from __future__ import annotations

import dataclasses as dc
import itertools
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from reportlab.pdfgen.canvas import Canvas


@dc.dataclass(frozen=True, slots=True)
class Anchor:
    """A bookmark placed on a page before its outline entry is registered."""

    key: str
    destination: int


@dc.dataclass(slots=True)
class OutlineEntry:
    """A single bookmark and its nested entries.

    Attributes
    ----------
    title : str
        Label shown in the PDF viewer's outline panel.
    key : str or None
        Bookmark name for the destination page; ``None`` for entries that
        only group other entries.
    destination : int or None
        1-based page number the entry points at.
    closed : bool
        Whether the viewer shows the entry collapsed.
    children : list[OutlineEntry]
        Nested entries in insertion order.
    """

    title: str
    key: str | None = None
    destination: int | None = None
    closed: bool = False
    children: list[OutlineEntry] = dc.field(default_factory=list)

    def first_key(self) -> str | None:
        """Return this entry's key or the first key found among its children."""
        if self.key is not None:
            return self.key
        for child in self.children:
            found = child.first_key()
            if found is not None:
                return found
        return None


class Outline:
    """Collect outline entries and write them to a ReportLab canvas."""

    def __init__(self, canvas: Canvas) -> None:
        self._canvas = canvas
        self._counter = itertools.count(1)
        self.entries: list[OutlineEntry] = []
        self._target = self.entries

    def anchor(self, destination: int) -> Anchor:
        """Bookmark the page being drawn, numbered ``destination``."""
        return Anchor(key=self._bookmark(), destination=destination)

    def section(
        self,
        title: str,
        *,
        destination: int | None = None,
        closed: bool = False,
        parent: OutlineEntry | str | None = None,
        anchor: Anchor | None = None,
    ) -> OutlineEntry:
        """Register an entry that can hold nested entries.

        When ``destination`` is given the current canvas page is bookmarked, so
        callers register the entry while that page is being drawn, or pass an
        ``anchor`` taken earlier. ``parent`` is either the entry to nest under
        or a title, which resolves to the last entry in document order with
        that title.
        """
        entry = self._entry(title, destination, anchor)
        entry.closed = closed
        self._siblings(parent).append(entry)
        return entry

    def page(
        self,
        title: str,
        *,
        destination: int | None = None,
        parent: OutlineEntry | str | None = None,
        anchor: Anchor | None = None,
    ) -> OutlineEntry:
        """Register a leaf entry pointing at ``destination``."""
        entry = self._entry(title, destination, anchor)
        self._siblings(parent).append(entry)
        return entry

    def add_subsection_to(
        self, title: str, define: cabc.Callable[[Outline], None]
    ) -> None:
        """Run ``define`` so that top-level registrations nest under ``title``.

        Raises
        ------
        KeyError
            If no entry is titled ``title``.
        """
        parent = self._require(title)
        saved = self._target
        self._target = parent.children
        try:
            define(self)
        finally:
            self._target = saved

    def find(self, title: str) -> OutlineEntry | None:
        """Return the last entry, in document order, titled ``title``."""
        match: OutlineEntry | None = None
        for _level, entry in self.walk():
            if entry.title == title:
                match = entry
        return match

    def walk(self) -> cabc.Iterator[tuple[int, OutlineEntry]]:
        """Yield ``(level, entry)`` pairs depth-first in document order."""
        stack: list[tuple[int, OutlineEntry]] = [
            (0, entry) for entry in reversed(self.entries)
        ]
        while stack:
            level, entry = stack.pop()
            yield level, entry
            stack.extend((level + 1, child) for child in reversed(entry.children))

    def titles(self) -> list[str]:
        """Return every entry title depth-first, indented two spaces per level."""
        return [f"{'  ' * level}{entry.title}" for level, entry in self.walk()]

    def render(self) -> None:
        """Write the collected entries into the canvas outline."""
        fallback: str | None = None
        for level, entry in self.walk():
            key = entry.first_key() or fallback
            if key is None:
                continue
            fallback = key
            self._canvas.addOutlineEntry(
                entry.title, key, level=level, closed=entry.closed or None
            )
        if self.entries:
            self._canvas.showOutline()

    def _entry(
        self, title: str, destination: int | None, anchor: Anchor | None
    ) -> OutlineEntry:
        if anchor is not None:
            return OutlineEntry(
                title=title, key=anchor.key, destination=anchor.destination
            )
        entry = OutlineEntry(title=title, destination=destination)
        if destination is not None:
            entry.key = self._bookmark()
        return entry

    def _bookmark(self) -> str:
        key = f"outline-{next(self._counter)}"
        self._canvas.bookmarkPage(key)
        return key

    def _siblings(self, parent: OutlineEntry | str | None) -> list[OutlineEntry]:
        match parent:
            case None:
                return self._target
            case OutlineEntry():
                return parent.children
            case _:
                return self._require(parent).children

    def _require(self, title: str) -> OutlineEntry:
        entry = self.find(title)
        if entry is None:
            msg = f"No outline entry titled '{title}'."
            raise KeyError(msg)
        return entry


__all__ = ["Anchor", "Outline", "OutlineEntry"]
