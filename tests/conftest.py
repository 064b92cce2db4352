"""Shared fixtures for the example manual test suite.

The fixtures build a throwaway manual folder under ``tmp_path`` with one
package (``basics``) holding two sections, and provide a :class:`Manual`
that renders into memory with its diagnostics captured in a ``StringIO``.
"""

from __future__ import annotations

import collections.abc as cabc
import io
from pathlib import Path
from textwrap import dedent

import pytest

from example_manual import Manual


def _write_file(root: Path, package: str, filename: str, body: str) -> Path:
    """Write ``body`` (dedented) to ``root/package/filename`` and return it."""
    folder = root / package
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / filename
    path.write_text(dedent(body).lstrip("\n"), encoding="utf-8")
    return path


@pytest.fixture
def write_file() -> cabc.Callable[[Path, str, str, str], Path]:
    """Return a helper that writes dedented files into a manual folder."""
    return _write_file


@pytest.fixture
def manual_root(tmp_path: Path) -> Path:
    """Return a manual folder with a ``basics`` package and a lone page."""
    root = tmp_path / "manual"
    _write_file(
        root,
        "basics",
        "basics.yaml",
        """
        intro:
          - text: Things to know first.
          - list: [one, two]
        contents:
          - section: First
            examples:
              - alpha
              - beta
          - section: Second
            examples:
              - gamma
        """,
    )
    _write_file(
        root,
        "basics",
        "alpha.py",
        """
        # Alpha draws a circle.

        pdf.stroke_circle((50, 50), 10)
        """,
    )
    _write_file(
        root,
        "basics",
        "beta.py",
        """
        # Beta is only listed.
        #
        # manual: no-eval

        pdf.text("never drawn")
        """,
    )
    _write_file(
        root,
        "basics",
        "gamma.py",
        """
        # Gamma fails when it runs.

        raise RuntimeError("boom")
        """,
    )
    _write_file(
        root,
        "manual",
        "intro.py",
        """
        # The introduction page.

        pdf.header("Introduction")
        """,
    )
    return root


@pytest.fixture
def diagnostics() -> io.StringIO:
    """Capture evaluation failures reported by the manual."""
    return io.StringIO()


@pytest.fixture
def manual(manual_root: Path, diagnostics: io.StringIO) -> Manual:
    """Return a manual rendering into memory from ``manual_root``."""
    return Manual(io.BytesIO(), root=manual_root, diagnostics=diagnostics)
