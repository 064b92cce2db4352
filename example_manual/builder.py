"""High-level orchestration for building the manual PDF.

:class:`ManualBuilder` consumes a :class:`~example_manual.config.ManualConfig`,
drives a :class:`~example_manual.manual.Manual` through the configured lone
pages and packages in order, and writes the PDF. :func:`generate_example`
renders a single example file on its own so it can be previewed while it is
being written.

Example
-------
>>> from pathlib import Path
>>> from example_manual.config import load_manual_config
>>> from example_manual.builder import ManualBuilder
>>> config = load_manual_config(Path("manual/manual.yaml"))  # doctest: +SKIP
>>> ManualBuilder(config).run()  # doctest: +SKIP
PosixPath('manual/manual.pdf')
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from example_manual.catalog import (
    ExampleRef,
    ExampleSection,
    humanize,
    load_package_definition,
    read_text,
    split_example_source,
)
from example_manual.manual import Manual

if typ.TYPE_CHECKING:
    from example_manual.config import ManualConfig


class ManualBuilder:
    """Render every configured page and package into one PDF."""

    def __init__(
        self,
        config: ManualConfig,
        *,
        output: Path | None = None,
        diagnostics: typ.TextIO | None = None,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        config : ManualConfig
            Manual contents, folders and layout options.
        output : Path, optional
            Override for the PDF path; defaults to ``config.output``.
        diagnostics : text stream, optional
            Where example evaluation failures are reported.
        """
        self.config = config
        self.output = output or config.output
        self.diagnostics = diagnostics

    def run(self) -> Path:
        """Render the manual and return the path of the written PDF.

        Raises
        ------
        ExampleLoadError
            If a page, package definition or example file is missing.
        """
        self.output.parent.mkdir(parents=True, exist_ok=True)
        manual = Manual(
            self.output,
            root=self.config.root,
            pages_dir=self.config.pages_dir,
            diagnostics=self.diagnostics,
            pygments_style=self.config.pygments_style,
            pagesize=self.config.pagesize,
            margin=self.config.margin,
            title=self.config.title,
            fonts=self.config.fonts,
        )
        for entry in self.config.contents:
            match entry.kind:
                case "page":
                    manual.load_page(entry.name)
                case "package":
                    manual.load_package(entry.name)
        manual.save()
        return self.output

    def table_of_contents(self) -> list[str]:
        """Return the outline the manual will have, without rendering it.

        Package definitions are read but example files are not, so the
        listing reflects declaration order only.
        """
        lines: list[str] = []
        for entry in self.config.contents:
            if entry.kind == "page":
                lines.append(humanize(entry.name))
                continue
            package = load_package_definition(self.config.root, entry.name)
            lines.append(package.name)
            for node in package.nodes:
                match node:
                    case ExampleSection():
                        lines.append(f"  {node.name}")
                        lines.extend(
                            f"    {humanize(name)}" for name in node.filenames
                        )
                    case ExampleRef():
                        lines.append(f"  {humanize(node.filename)}")
        return lines


def generate_example(
    path: Path, *, output: Path | None = None, diagnostics: typ.TextIO | None = None
) -> Path:
    """Run one example file on a fresh document and save it as a PDF.

    Parameters
    ----------
    path : Path
        Example file to run.
    output : Path, optional
        PDF destination; defaults to ``path`` with a ``.pdf`` suffix.

    Raises
    ------
    ExampleLoadError
        If ``path`` cannot be read.
    """
    _intro, source, _directive = split_example_source(read_text(path))
    target = output or path.with_suffix(".pdf")

    def _render(pdf: Manual) -> None:
        pdf.run_source(source, str(path))

    Manual.generate(target, _render, root=path.parent, diagnostics=diagnostics)
    return target


__all__ = ["ManualBuilder", "generate_example"]
