"""Render packages, sections and example files into the manual PDF.

The manual is organised as package folders of example files. Each package has
a definition file (``<package>/<package>.yaml``) describing its sections and
the order of its examples, and the manual itself is a list of packages and
lone pages. :class:`Manual` walks that structure: a cover page and outline
section for every package, an outline subsection for every section, and a page
per example showing its introduction, its source and, when the example allows
it, the result of running that source against the manual itself.

Example
-------
>>> from pathlib import Path
>>> from example_manual.manual import Manual
>>> pdf = Manual(Path("manual.pdf"), root=Path("manual"))  # doctest: +SKIP
>>> pdf.load_page("cover")  # doctest: +SKIP
>>> pdf.load_package("basic_concepts")  # doctest: +SKIP
>>> pdf.save()  # doctest: +SKIP
"""

from __future__ import annotations

import sys
import typing as typ
from pathlib import Path

from example_manual._constants import (
    DEFAULT_PAGES_DIR,
    EXAMPLE_SUFFIX,
    LISTING_FONT,
    LISTING_FONT_SIZE,
    NBSP,
)
from example_manual.catalog import (
    ExampleFile,
    ExamplePackage,
    ExampleRef,
    ExampleSection,
    humanize,
    load_example_file,
    load_package_definition,
)
from example_manual.document import Document, StyleState, TextRun, listing_runs

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from example_manual.document import Anchor, OutlineEntry


class Manual(Document):
    """Document that knows how to lay out the manual's packages and examples.

    Parameters
    ----------
    output : Path, str or binary file
        Destination of the rendered PDF.
    root : Path, optional
        Folder holding the package folders and the lone pages folder.
    pages_dir : str, optional
        Folder under ``root`` holding the lone pages.
    diagnostics : text stream, optional
        Where evaluation failures are reported; defaults to ``sys.stderr``.
    pygments_style : str, optional
        Colour listings with this Pygments style.
    **document_options
        Forwarded to :class:`~example_manual.document.Document`.
    """

    def __init__(
        self,
        output: Path | str | typ.BinaryIO,
        *,
        root: Path = Path(),
        pages_dir: str = DEFAULT_PAGES_DIR,
        diagnostics: typ.TextIO | None = None,
        pygments_style: str | None = None,
        **document_options: typ.Any,
    ) -> None:
        super().__init__(output, **document_options)
        self.root = root
        self.pages_dir = pages_dir
        self.diagnostics = diagnostics or sys.stderr
        self.pygments_style = pygments_style

    @classmethod
    def generate(
        cls,
        output: Path | str | typ.BinaryIO,
        block: cabc.Callable[[Manual], None],
        **options: typ.Any,
    ) -> Manual:
        """Render ``block`` on a fresh manual and save it to ``output``."""
        pdf = cls(output, **options)
        pdf.start_new_page()
        block(pdf)
        pdf.save()
        return pdf

    # Packages --------------------------------------------------------------

    def package(
        self, folder_name: str, define: cabc.Callable[[ExamplePackage], None]
    ) -> ExamplePackage:
        """Build a package with ``define`` and render it straight away."""
        package = ExamplePackage(folder_name=folder_name)
        define(package)
        self.render_package(package)
        return package

    def render_package(self, package: ExamplePackage) -> None:
        """Render the cover, then every section and loose example in order.

        Outline entries are nested under the entries this package registered,
        so repeated titles never change the nesting.
        """
        package_entry = self.render_package_cover(package)
        for node in package.nodes:
            match node:
                case ExampleSection():
                    section_entry = self.render_section(node, parent=package_entry)
                    for ref in node.examples:
                        self.render_example(
                            self._load_example(package, ref, parent_name=node.name),
                            parent=section_entry,
                        )
                case ExampleRef():
                    self.render_example(
                        self._load_example(package, node, parent_name=package.name),
                        parent=package_entry,
                    )

    def render_package_cover(self, package: ExamplePackage) -> OutlineEntry:
        """Start a page with the package header, intro and outline section."""
        self.start_new_page()
        cover = self.outline.anchor(self.page_number)
        self.header(package.name)
        package.intro_block(self)
        return self.outline.section(package.name, anchor=cover, closed=True)

    def render_section(
        self, section: ExampleSection, *, parent: OutlineEntry | None = None
    ) -> OutlineEntry:
        """Add the section to the outline within its package.

        Without ``parent`` the section nests under the last top-level entry
        titled like its package.
        """
        target: OutlineEntry | str | None = parent
        if target is None:
            target = self._top_level(section.package_name)
        return self.outline.section(section.name, closed=True, parent=target)

    def render_example(
        self, example: ExampleFile, *, parent: OutlineEntry | None = None
    ) -> None:
        """Render one example on its own page.

        The page shows the folder and file name, the introduction and the
        source. When the example is evaluated, a dashed rule separates the
        listing from whatever the source draws. Errors raised by the source
        are reported on the diagnostic stream and do not stop the manual.

        The outline leaf nests under ``parent``, or else under the last entry
        titled ``example.parent_name``.
        """
        self.start_new_page()
        self.outline.page(
            example.name,
            destination=self.page_number,
            parent=example.parent_name if parent is None else parent,
        )

        self.text(
            f"<color rgb='999999'>{example.parent_folder_name}/</color>"
            f"{example.filename}",
            size=20,
            inline_format=True,
        )
        self.move_down(10)
        self.text(example.introduction_text, inline_format=True)
        self.render_listing(example.source)

        if example.eval_source:
            self.move_down(10)
            self.dash(3)
            self.stroke_horizontal_line(-36, self.bounds.width + 36)
            self.undash()
            self.move_down(10)
            try:
                self.evaluate(example)
            except Exception as exc:  # noqa: BLE001
                self.report_failure(exc, example.source)

        self.reset_settings()

    def render_listing(self, source: str) -> None:
        """Draw ``source`` in the listing font, keeping its indentation."""
        runs = [
            TextRun(run.text.replace(" ", NBSP), run.color)
            for run in listing_runs(source, pygments_style=self.pygments_style)
        ]
        with self.font(LISTING_FONT, size=LISTING_FONT_SIZE):
            self.flow_runs(runs, fallback_fonts=self.fallback_fonts)

    def evaluate(self, example: ExampleFile) -> None:
        """Run the example's demo callable, or its source with ``pdf`` bound."""
        if example.demo is not None:
            example.demo(self)
            return
        self.run_source(example.source, f"{example.package}/{example.filename}")

    def run_source(self, source: str, filename: str) -> None:
        """Execute ``source`` with ``pdf`` naming this manual."""
        code = compile(source, filename, "exec")
        exec(code, {"__name__": "__manual__", "pdf": self})  # noqa: S102

    def report_failure(self, exc: Exception, source: str) -> None:
        """Print an evaluation failure and the offending source."""
        print(f"Error evaluating example: {exc}", file=self.diagnostics)
        print(file=self.diagnostics)
        print("---- Source: ----", file=self.diagnostics)
        print(source, file=self.diagnostics)

    # Manual-level pages ----------------------------------------------------

    def load_package(self, package: str) -> ExamplePackage:
        """Load ``<root>/<package>/<package>.yaml`` and render the package."""
        definition = load_package_definition(self.root, package)
        self.render_package(definition)
        return definition

    def load_page(self, page: str) -> None:
        """Render a lone page and give it a top-level outline entry."""
        start = self.load_file(self.pages_dir, page)
        self.outline.section(humanize(page), anchor=start)

    def load_file(self, package: str, file: str) -> Anchor:
        """Start a page and run ``<root>/<package>/<file>.py`` against it.

        Returns an anchor on the page the file started on.
        """
        self.start_new_page()
        start = self.outline.anchor(self.page_number)
        example = load_example_file(
            self.root,
            package,
            f"{file}{EXAMPLE_SUFFIX}",
            parent_name=humanize(package),
            package_name=humanize(package),
        )
        self.run_source(example.source, f"{package}/{example.filename}")
        return start

    # Helpers used by examples and package intros ---------------------------

    def header(self, title: str) -> None:
        """Page title used by package covers and lone pages."""
        self.move_down(40)
        self.text(title, size=25, style="bold")
        self.stroke_horizontal_rule()
        self.move_down(30)

    def list(self, *items: str) -> None:
        """Render ``items`` as a bulleted list."""
        self.move_down(20)
        for item in items:
            with self.floating():
                self.text("•")
            with self.indent(10):
                self.text(" ".join(item.split()), inline_format=True, leading=2)
            self.move_down(10)

    def stroke_axis(
        self, *, height: float | None = None, width: float | None = None
    ) -> None:
        """Draw X and Y rulers from the bounds origin, marked every 100 points."""
        height = int(self.cursor - 20) if height is None else height
        width = int(self.bounds.width) if width is None else width

        self.dash(1, space=4)
        self.stroke_horizontal_line(-21, width, at=0)
        self.stroke_vertical_line(-21, height, at=0)
        self.undash()

        self.fill_circle((0, 0), 1)
        for point in range(100, int(width) + 1, 100):
            self.fill_circle((point, 0), 1)
            self.draw_text(point, at=(point - 5, -10), size=7)
        for point in range(100, int(height) + 1, 100):
            self.fill_circle((0, point), 1)
            self.draw_text(point, at=(-17, point - 2), size=7)

    def reset_settings(self) -> None:
        """Put text and graphics settings back to the baseline."""
        self.restore_style(StyleState())

    # Internals -------------------------------------------------------------

    def _top_level(self, title: str) -> OutlineEntry | str:
        for entry in reversed(self.outline.entries):
            if entry.title == title:
                return entry
        return title

    def _load_example(
        self, package: ExamplePackage, ref: ExampleRef, *, parent_name: str
    ) -> ExampleFile:
        return load_example_file(
            self.root,
            package.folder_name,
            ref.filename,
            parent_name=parent_name,
            package_name=package.name,
            eval_source=ref.eval_source,
            demo=ref.demo,
        )


__all__ = ["Manual"]
