"""Cyclopts CLI entrypoint for building the example manual.

The ``manual`` console script renders the whole manual described by
``manual.yaml``, renders a single example file on its own for previewing, and
prints the table of contents without rendering anything.

Examples
--------
Build the manual from the default configuration:

>>> from example_manual.cli import main
>>> main()  # doctest: +SKIP

Build only one package into a scratch file:

>>> from example_manual.cli import app
>>> app(
...     ["build", "--package", "basic_concepts", "--output", "scratch.pdf"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .builder import ManualBuilder, generate_example
from .config import load_manual_config

DEFAULT_CONFIG = Path("manual/manual.yaml")

app = App(name="manual", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render the manual PDF from its configuration.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to manual config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Override the output PDF path", env_var="INPUT_OUTPUT"),
    ] = None,
    package: typ.Annotated[
        str | None,
        Parameter(help="Only render this package", env_var="INPUT_PACKAGE"),
    ] = None,
) -> None:
    """Render the manual described by ``config``.

    Parameters
    ----------
    config : Path, optional
        Path to ``manual.yaml`` (overridable via ``INPUT_CONFIG``).
    output : Path or None, optional
        Write the PDF here instead of the configured output.
    package : str or None, optional
        Render only this package, skipping lone pages and other packages.

    Raises
    ------
    ManualConfigError
        If ``package`` is not part of the manual.
    """
    manual_config = load_manual_config(config)
    if package:
        manual_config = manual_config.only_package(package)
    written = ManualBuilder(manual_config, output=output).run()
    print(f"wrote {_format_path(written)}")


@app.command(help="Render a single example file to its own PDF.")
def example(
    path: typ.Annotated[Path, Parameter(help="Example file to render")],
    *,
    output: typ.Annotated[
        Path | None, Parameter(help="Where to write the PDF")
    ] = None,
) -> None:
    """Run one example file on a blank document and save it next to it."""
    written = generate_example(path, output=output)
    print(f"wrote {_format_path(written)}")


@app.command(help="Print the manual's table of contents.")
def outline(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to manual config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print packages, sections and examples in manual order."""
    builder = ManualBuilder(load_manual_config(config))
    for line in builder.table_of_contents():
        print(line)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``manual`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
