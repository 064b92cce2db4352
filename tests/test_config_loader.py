"""Tests for loading ``manual.yaml`` into :class:`ManualConfig`."""

from __future__ import annotations

from pathlib import Path

import pytest
import reportlab
from reportlab.lib import pagesizes

from example_manual.config import ContentEntry, load_manual_config
from example_manual.errors import ManualConfigError

VERA = Path(reportlab.__file__).parent / "fonts" / "Vera.ttf"


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "manual.yaml"
    path.write_text(body.strip() + "\n", encoding="utf-8")
    return path


def test_loads_contents_in_order_and_resolves_paths(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        f"""
title: Drawing manual
output: build/manual.pdf
root: pages
page_size: a4
margin: 50
pygments_style: friendly
fonts:
  Vera: {VERA}
contents:
  - page: cover
  - package: basic_concepts
  - page: appendix
""",
    )
    config = load_manual_config(path)
    assert config.title == "Drawing manual"
    assert config.output == tmp_path.resolve() / "build" / "manual.pdf"
    assert config.root == tmp_path.resolve() / "pages"
    assert config.contents == [
        ContentEntry(kind="page", name="cover"),
        ContentEntry(kind="package", name="basic_concepts"),
        ContentEntry(kind="page", name="appendix"),
    ]
    assert config.pagesize == pagesizes.A4
    assert config.margin == 50
    assert config.pygments_style == "friendly"
    assert config.fonts == {"Vera": VERA}


def test_defaults(tmp_path: Path) -> None:
    config = load_manual_config(
        _write_config(tmp_path, "contents:\n  - package: graphics")
    )
    assert config.pages_dir == "manual"
    assert config.pagesize == pagesizes.LETTER
    assert config.margin == 36
    assert config.pygments_style is None
    assert config.fonts == {}
    assert config.output == tmp_path.resolve() / "manual.pdf"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_manual_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("title: Empty", "No pages or packages"),
        ("- page: cover", "must be a mapping"),
        ("contents: cover", "must be a list"),
        ("contents:\n  - chapter: one", "Unrecognised contents entry"),
        ("page_size: B5\ncontents:\n  - page: cover", "Unknown page size"),
        ("fonts:\n  Ghost: ghost.ttf\ncontents:\n  - page: cover", "not found"),
    ],
)
def test_invalid_configuration(tmp_path: Path, body: str, message: str) -> None:
    with pytest.raises(ManualConfigError, match=message):
        load_manual_config(_write_config(tmp_path, body))


def test_only_package_restricts_contents(tmp_path: Path) -> None:
    config = load_manual_config(
        _write_config(
            tmp_path,
            "contents:\n  - page: cover\n  - package: one\n  - package: two",
        )
    )
    assert config.only_package("two").contents == [
        ContentEntry(kind="package", name="two")
    ]
    with pytest.raises(ManualConfigError, match="Known packages: one, two"):
        config.only_package("cover")


def test_fonts_resolve_on_reportlab_search_path_and_builtins(tmp_path: Path) -> None:
    config = load_manual_config(
        _write_config(
            tmp_path,
            """
fonts:
  Vera: Vera.ttf
  ZapfDingbats: builtin
  STSong-Light: builtin
contents:
  - page: cover
""",
        )
    )
    assert list(config.fonts) == ["Vera", "ZapfDingbats", "STSong-Light"]
    assert config.fonts["Vera"] is not None
    assert config.fonts["Vera"].name == "Vera.ttf"
    assert config.fonts["ZapfDingbats"] is None
    assert config.fonts["STSong-Light"] is None


def test_unknown_builtin_font_is_rejected(tmp_path: Path) -> None:
    body = "fonts:\n  Imaginary: builtin\ncontents:\n  - page: cover"
    with pytest.raises(ManualConfigError, match="built-in fonts"):
        load_manual_config(_write_config(tmp_path, body))


def test_sample_manual_declares_fallback_fonts() -> None:
    sample = Path(__file__).resolve().parents[1] / "manual" / "manual.yaml"
    config = load_manual_config(sample)
    assert list(config.fonts) == ["Vera", "ZapfDingbats", "STSong-Light"]
