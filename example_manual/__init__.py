"""Build a PDF manual from packages of runnable example files.

This package exposes the CLI entry points used by ``manual`` to render the
whole manual, preview a single example and print the table of contents, plus
the :class:`Manual` document that examples draw on.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``Manual``: Document that lays out packages, sections and examples.

Examples
--------
>>> from example_manual import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .manual import Manual

__all__ = ["Manual", "app", "main"]
