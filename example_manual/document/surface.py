"""Cursor-based drawing surface over a ReportLab canvas.

:class:`Document` gives example snippets a small vocabulary for drawing on the
current page: flowing text that breaks onto new pages, absolute text, lines,
rectangles and circles, dashes and colours. Coordinates are measured in points
from the bottom-left corner of the margin box, and ``cursor`` is the vertical
position where the next flowing text starts.

Example
-------
>>> import io
>>> from example_manual.document import Document
>>> pdf = Document(io.BytesIO())
>>> pdf.start_new_page()
>>> pdf.text("Hello")
>>> pdf.stroke_horizontal_rule()
>>> pdf.save()  # doctest: +ELLIPSIS
<_io.BytesIO object at ...>
"""

from __future__ import annotations

import contextlib
import dataclasses as dc
import re
import typing as typ
from pathlib import Path

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Paragraph

from .fonts import pick_font, register_font, styled_font
from .outline import Outline
from .style import CAP_STYLES, JOIN_STYLES, StyleState, normalize_color

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .fonts import FontStyle
    from .style import CapStyle, JoinStyle

    Point = tuple[float, float]

LINE_HEIGHT_FACTOR = 1.2
COLOR_TAG_PATTERN = re.compile(
    r"<color\s+rgb=(['\"])#?([0-9a-fA-F]{6})\1\s*>", re.IGNORECASE
)
PARAGRAPH_BREAK_PATTERN = re.compile(r"\n\s*\n")


def convert_inline_markup(text: str) -> str:
    """Rewrite inline formatting into ReportLab paragraph markup.

    ``<color rgb='RRGGBB'>`` becomes a ``<font color>`` tag and single line
    breaks become ``<br/>``.

    >>> convert_inline_markup("<color rgb='999999'>dir/</color>file")
    '<font color="#999999">dir/</font>file'
    """
    converted = COLOR_TAG_PATTERN.sub(r'<font color="#\2">', text)
    converted = re.sub(r"</color\s*>", "</font>", converted, flags=re.IGNORECASE)
    return converted.replace("\n", "<br/>")


@dc.dataclass(frozen=True, slots=True)
class Bounds:
    """Drawable box, relative to the margin box origin."""

    left: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width


@dc.dataclass(frozen=True, slots=True)
class TextRun:
    """A stretch of plain text drawn in one colour (``None`` = fill colour)."""

    text: str
    color: str | None = None


class Document:
    """Drawing surface that examples receive as ``pdf``.

    Parameters
    ----------
    output : Path, str or binary file
        Destination of the rendered PDF.
    pagesize : tuple[float, float], optional
        Page width and height in points; defaults to US Letter.
    margin : float, optional
        Space kept free around the margin box on every page.
    title : str, optional
        Title stored in the PDF metadata.
    fonts : mapping of str to Path or None, optional
        Fallback families to register, in fallback order; ``None`` names one
        of ReportLab's built-in fonts.
    """

    def __init__(
        self,
        output: Path | str | typ.BinaryIO,
        *,
        pagesize: tuple[float, float] = LETTER,
        margin: float = 36,
        title: str | None = None,
        fonts: cabc.Mapping[str, Path | None] | None = None,
    ) -> None:
        self.output = output
        target = str(output) if isinstance(output, Path) else output
        self.canvas = Canvas(target, pagesize=pagesize)
        if title:
            self.canvas.setTitle(title)
        self.page_width, self.page_height = pagesize
        self.margin = margin
        self.bounds = Bounds(
            left=0,
            width=self.page_width - 2 * margin,
            height=self.page_height - 2 * margin,
        )
        self.style = StyleState()
        self.outline = Outline(self.canvas)
        self.fallback_fonts: list[str] = []
        self.page_count = 0
        self._cursor = self.bounds.height
        for family, path in (fonts or {}).items():
            self.register_font(family, path)

    # Pages and cursor ------------------------------------------------------

    @property
    def page_number(self) -> int:
        """1-based number of the page being drawn."""
        return self.canvas.getPageNumber()

    @property
    def cursor(self) -> float:
        """Vertical position, from the margin box bottom, of the next text."""
        return self._cursor

    def start_new_page(self) -> None:
        """Begin a page; the very first call does not leave a blank page."""
        if self.page_count:
            self.canvas.showPage()
        self.page_count += 1
        self.canvas.translate(self.margin, self.margin)
        self._cursor = self.bounds.height
        self._apply_style()

    def move_down(self, amount: float) -> None:
        self._cursor -= amount

    def move_up(self, amount: float) -> None:
        self._cursor += amount

    def move_cursor_to(self, y: float) -> None:
        self._cursor = y

    @contextlib.contextmanager
    def indent(self, left: float, right: float = 0) -> cabc.Iterator[None]:
        """Narrow the bounds for flowing text drawn inside the block."""
        saved = self.bounds
        self.bounds = dc.replace(
            saved, left=saved.left + left, width=saved.width - left - right
        )
        try:
            yield
        finally:
            self.bounds = saved

    @contextlib.contextmanager
    def floating(self) -> cabc.Iterator[None]:
        """Run the block and put the cursor back where it started."""
        saved = self._cursor
        try:
            yield
        finally:
            self._cursor = saved

    # Fonts -----------------------------------------------------------------

    def register_font(self, name: str, path: Path | None = None) -> None:
        """Register a font family and append it to the fallback order."""
        register_font(name, path)
        if name not in self.fallback_fonts:
            self.fallback_fonts.append(name)

    def set_font(
        self,
        name: str | None = None,
        *,
        size: float | None = None,
        style: FontStyle | None = None,
    ) -> None:
        """Switch the current font; omitted arguments keep their value."""
        self.style.font_name = styled_font(name or self.style.font_name, style)
        if size is not None:
            self.style.font_size = size
        self._apply_font()

    @contextlib.contextmanager
    def font(
        self,
        name: str | None = None,
        *,
        size: float | None = None,
        style: FontStyle | None = None,
    ) -> cabc.Iterator[None]:
        """Use a font for the duration of the block."""
        saved = (self.style.font_name, self.style.font_size)
        self.set_font(name, size=size, style=style)
        try:
            yield
        finally:
            self.style.font_name, self.style.font_size = saved
            self._apply_font()

    # Text ------------------------------------------------------------------

    def text(
        self,
        string: str,
        *,
        size: float | None = None,
        style: FontStyle | None = None,
        inline_format: bool = False,
        leading: float = 0,
        color: str | None = None,
        fallback_fonts: cabc.Sequence[str] = (),
    ) -> None:
        """Flow ``string`` from the cursor, starting new pages as needed.

        With ``inline_format`` the text may carry ``<b>``, ``<i>``,
        ``<font>``, ``<link>`` and ``<color rgb='RRGGBB'>`` tags and blank
        lines separate paragraphs. Otherwise the text is drawn literally and
        only wraps at ordinary spaces, or mid-word when a word is wider than
        the bounds.
        """
        self._ensure_page()
        with self.font(size=size, style=style):
            if inline_format:
                self._flow_markup(string, leading, color)
            else:
                self._flow_runs([TextRun(string, color)], leading, fallback_fonts)

    def flow_runs(
        self,
        runs: cabc.Sequence[TextRun],
        *,
        leading: float = 0,
        fallback_fonts: cabc.Sequence[str] = (),
    ) -> None:
        """Flow coloured plain-text runs as :meth:`text` does for one string."""
        self._ensure_page()
        self._flow_runs(runs, leading, fallback_fonts)

    def draw_text(
        self, text: object, *, at: Point, size: float | None = None
    ) -> None:
        """Draw ``text`` with its baseline starting at ``at``; no wrapping."""
        with self.font(size=size):
            self.canvas.drawString(self._x(at[0]), at[1], str(text))

    def width_of(self, text: str, *, size: float | None = None) -> float:
        """Width of ``text`` in the current font."""
        return stringWidth(text, self.style.font_name, size or self.style.font_size)

    def _flow_markup(self, text: str, leading: float, color: str | None) -> None:
        paragraph_style = ParagraphStyle(
            "manual-text",
            fontName=self.style.font_name,
            fontSize=self.style.font_size,
            leading=self.style.font_size * LINE_HEIGHT_FACTOR + leading,
            textColor=HexColor(f"#{normalize_color(color or self.style.fill_color)}"),
        )
        for chunk in PARAGRAPH_BREAK_PATTERN.split(text.strip()):
            if chunk.strip():
                self._draw_paragraph(
                    Paragraph(convert_inline_markup(chunk.strip()), paragraph_style)
                )

    def _draw_paragraph(self, paragraph: Paragraph) -> None:
        pending: list[Paragraph] = [paragraph]
        while pending:
            current = pending.pop(0)
            _width, height = current.wrap(self.bounds.width, self._cursor)
            if height <= self._cursor:
                current.drawOn(self.canvas, self.bounds.left, self._cursor - height)
                self._cursor -= height
                continue
            parts = current.split(self.bounds.width, self._cursor)
            if len(parts) > 1:
                pending[:0] = parts
            elif self._cursor < self.bounds.height:
                self.start_new_page()
                pending.insert(0, current)
            else:
                current.drawOn(self.canvas, self.bounds.left, self._cursor - height)
                self._cursor -= height

    def _flow_runs(
        self,
        runs: cabc.Sequence[TextRun],
        leading: float,
        fallback_fonts: cabc.Sequence[str],
    ) -> None:
        size = self.style.font_size
        line_height = size * LINE_HEIGHT_FACTOR + leading
        for line in self._layout_lines(runs, fallback_fonts):
            if self._cursor - line_height < 0 and self._cursor < self.bounds.height:
                self.start_new_page()
            self._draw_line(line, self._cursor - size)
            self._cursor -= line_height
        self._apply_fill()

    def _layout_lines(
        self, runs: cabc.Sequence[TextRun], fallback_fonts: cabc.Sequence[str]
    ) -> list[list[tuple[str, str, str]]]:
        """Break runs into lines of ``(char, font, colour)`` cells."""
        primary = self.style.font_name
        size = self.style.font_size
        default_color = self.style.fill_color
        lines: list[list[tuple[str, str, str]]] = [[]]
        widths: list[float] = [0.0]
        break_at: list[int | None] = [None]

        for run in runs:
            color = normalize_color(run.color) if run.color else default_color
            for char in run.text:
                if char == "\n":
                    lines.append([])
                    widths.append(0.0)
                    break_at.append(None)
                    continue
                font = pick_font(char, primary, fallback_fonts)
                advance = stringWidth(char, font, size)
                if widths[-1] + advance > self.bounds.width and lines[-1]:
                    if char == " ":
                        lines.append([])
                        widths.append(0.0)
                        break_at.append(None)
                        continue
                    self._wrap_last(lines, widths, break_at, size)
                lines[-1].append((char, font, color))
                widths[-1] += advance
                if char == " ":
                    break_at[-1] = len(lines[-1]) - 1
        return lines

    @staticmethod
    def _wrap_last(
        lines: list[list[tuple[str, str, str]]],
        widths: list[float],
        break_at: list[int | None],
        size: float,
    ) -> None:
        cut = break_at[-1]
        current = lines[-1]
        if cut is None:
            carried: list[tuple[str, str, str]] = []
        else:
            carried = current[cut + 1 :]
            del current[cut:]
        widths[-1] = sum(stringWidth(ch, font, size) for ch, font, _c in current)
        lines.append(carried)
        widths.append(sum(stringWidth(ch, font, size) for ch, font, _c in carried))
        break_at.append(None)

    def _draw_line(self, cells: list[tuple[str, str, str]], baseline: float) -> None:
        x = self.bounds.left
        size = self.style.font_size
        index = 0
        while index < len(cells):
            _char, font, color = cells[index]
            end = index
            while end < len(cells) and cells[end][1:] == (font, color):
                end += 1
            segment = "".join(cell[0] for cell in cells[index:end])
            self.canvas.setFont(font, size)
            self.canvas.setFillColor(HexColor(f"#{color}"))
            self.canvas.drawString(x, baseline, segment)
            x += stringWidth(segment, font, size)
            index = end
        self._apply_font()

    # Graphics state --------------------------------------------------------

    @property
    def line_width(self) -> float:
        return self.style.line_width

    @line_width.setter
    def line_width(self, width: float) -> None:
        self.style.line_width = width
        self.canvas.setLineWidth(width)

    @property
    def cap_style(self) -> CapStyle:
        return self.style.cap_style

    @cap_style.setter
    def cap_style(self, value: CapStyle) -> None:
        self.style.cap_style = value
        self.canvas.setLineCap(CAP_STYLES[value])

    @property
    def join_style(self) -> JoinStyle:
        return self.style.join_style

    @join_style.setter
    def join_style(self, value: JoinStyle) -> None:
        self.style.join_style = value
        self.canvas.setLineJoin(JOIN_STYLES[value])

    @property
    def fill_color(self) -> str:
        return self.style.fill_color

    @fill_color.setter
    def fill_color(self, value: str) -> None:
        self.style.fill_color = normalize_color(value)
        self._apply_fill()

    @property
    def stroke_color(self) -> str:
        return self.style.stroke_color

    @stroke_color.setter
    def stroke_color(self, value: str) -> None:
        self.style.stroke_color = normalize_color(value)
        self.canvas.setStrokeColor(HexColor(f"#{self.style.stroke_color}"))

    def dash(self, length: float, *, space: float | None = None, phase: float = 0) -> None:
        """Stroke subsequent lines with ``length`` on, ``space`` off."""
        pattern = (length, length if space is None else space)
        self.style.dash = (pattern, phase)
        self.canvas.setDash(list(pattern), phase)

    def undash(self) -> None:
        self.style.dash = None
        self.canvas.setDash([], 0)

    @property
    def dashed(self) -> bool:
        return self.style.dash is not None

    # Shapes ----------------------------------------------------------------

    def stroke_horizontal_line(
        self, x1: float, x2: float, *, at: float | None = None
    ) -> None:
        """Stroke a horizontal line at ``at`` (the cursor by default)."""
        y = self._cursor if at is None else at
        self.canvas.line(self._x(x1), y, self._x(x2), y)

    def stroke_vertical_line(self, y1: float, y2: float, *, at: float) -> None:
        self.canvas.line(self._x(at), y1, self._x(at), y2)

    def stroke_horizontal_rule(self) -> None:
        """Stroke a line across the bounds at the cursor."""
        self.stroke_horizontal_line(0, self.bounds.width)

    def stroke_line(self, start: Point, end: Point) -> None:
        self.canvas.line(self._x(start[0]), start[1], self._x(end[0]), end[1])

    def stroke_rectangle(self, top_left: Point, width: float, height: float) -> None:
        x, y = top_left
        self.canvas.rect(self._x(x), y - height, width, height, stroke=1, fill=0)

    def fill_rectangle(self, top_left: Point, width: float, height: float) -> None:
        x, y = top_left
        self.canvas.rect(self._x(x), y - height, width, height, stroke=0, fill=1)

    def stroke_circle(self, center: Point, radius: float) -> None:
        self.canvas.circle(self._x(center[0]), center[1], radius, stroke=1, fill=0)

    def fill_circle(self, center: Point, radius: float) -> None:
        self.canvas.circle(self._x(center[0]), center[1], radius, stroke=0, fill=1)

    # Output ----------------------------------------------------------------

    def save(self) -> Path | str | typ.BinaryIO:
        """Write the outline and the PDF; return the output target."""
        if not self.page_count:
            self.start_new_page()
        self.outline.render()
        self.canvas.save()
        return self.output

    # Internals -------------------------------------------------------------

    def _x(self, x: float) -> float:
        """Shift ``x`` by the indentation, opening the first page if needed."""
        self._ensure_page()
        return self.bounds.left + x

    def _ensure_page(self) -> None:
        if not self.page_count:
            self.start_new_page()

    def _apply_font(self) -> None:
        self.canvas.setFont(self.style.font_name, self.style.font_size)

    def _apply_fill(self) -> None:
        self.canvas.setFillColor(HexColor(f"#{self.style.fill_color}"))

    def _apply_style(self) -> None:
        """Push the whole style state to the canvas, e.g. after a page break."""
        state = self.style
        self._apply_font()
        self.canvas.setLineWidth(state.line_width)
        self.canvas.setLineCap(CAP_STYLES[state.cap_style])
        self.canvas.setLineJoin(JOIN_STYLES[state.join_style])
        if state.dash is None:
            self.canvas.setDash([], 0)
        else:
            pattern, phase = state.dash
            self.canvas.setDash(list(pattern), phase)
        self._apply_fill()
        self.canvas.setStrokeColor(HexColor(f"#{state.stroke_color}"))

    def restore_style(self, state: StyleState) -> None:
        """Replace the style state and push it to the canvas."""
        self.style = state.copy()
        self._apply_style()


__all__ = ["Bounds", "Document", "TextRun", "convert_inline_markup"]
