"""Behaviour tests for rendering packages, sections and examples.

The suite renders the ``basics`` package from ``conftest.py`` into memory and
checks the properties the manual relies on:

* the outline nests examples under sections under packages, in declaration
  order, with one distinct page per example;
* only evaluated examples get the dashed separator rule;
* an example that raises is reported on the diagnostic stream and the
  manual keeps going;
* every example starts from the baseline style, whatever the previous one
  changed;
* lone pages get a flat outline entry titled from their file name.

Drawing is observed by wrapping ``Manual`` methods with ``monkeypatch``.
"""

from __future__ import annotations

import collections.abc as cabc
import io
from pathlib import Path

import pytest

from example_manual import Manual
from example_manual.catalog import ExampleFile, ExamplePackage, ExampleSection
from example_manual.document import StyleState
from example_manual.errors import ExampleLoadError

WriteFile = cabc.Callable[[Path, str, str, str], Path]


def _example(source: str, *, eval_source: bool = True, intro: str = "") -> ExampleFile:
    return ExampleFile(
        package="basics",
        filename="inline.py",
        source=source,
        introduction_text=intro,
        eval_source=eval_source,
        parent_name="Basics",
        package_name="Basics",
    )


@pytest.fixture
def inline(manual: Manual) -> Manual:
    """Return the manual with a top-level 'Basics' entry for inline examples."""
    manual.outline.section("Basics")
    return manual


@pytest.fixture
def rules(monkeypatch: pytest.MonkeyPatch) -> list[tuple[int, float, float, bool]]:
    """Record every horizontal line as ``(page, x1, x2, dashed)``."""
    recorded: list[tuple[int, float, float, bool]] = []
    original = Manual.stroke_horizontal_line

    def _spy(self: Manual, x1: float, x2: float, *, at: float | None = None) -> None:
        recorded.append((self.page_number, x1, x2, self.dashed))
        original(self, x1, x2, at=at)

    monkeypatch.setattr(Manual, "stroke_horizontal_line", _spy)
    return recorded


def test_outline_nests_sections_and_examples_in_order(manual: Manual) -> None:
    manual.load_package("basics")
    assert manual.outline.titles() == [
        "Basics",
        "  First",
        "    Alpha",
        "    Beta",
        "  Second",
        "    Gamma",
    ]


def test_example_titled_like_its_section_does_not_capture_siblings(
    manual: Manual, write_file: WriteFile, manual_root: Path
) -> None:
    write_file(
        manual_root,
        "graphics",
        "graphics.yaml",
        "contents:\n  - section: Color\n    examples: [color, dash]\n",
    )
    write_file(manual_root, "graphics", "color.py", "pdf.fill_color = 'f00'\n")
    write_file(manual_root, "graphics", "dash.py", "pdf.dash(2)\n")
    manual.load_package("graphics")
    assert manual.outline.titles() == [
        "Graphics",
        "  Color",
        "    Color",
        "    Dash",
    ]


def test_section_titled_like_its_package(
    manual: Manual, write_file: WriteFile, manual_root: Path
) -> None:
    write_file(
        manual_root,
        "color",
        "color.yaml",
        "contents:\n"
        "  - section: Color\n    examples: [fills]\n"
        "  - section: Strokes\n    examples: [lines]\n",
    )
    write_file(manual_root, "color", "fills.py", "pdf.fill_color = '0f0'\n")
    write_file(manual_root, "color", "lines.py", "pdf.stroke_color = '00f'\n")
    manual.load_package("color")
    assert manual.outline.titles() == [
        "Color",
        "  Color",
        "    Fills",
        "  Strokes",
        "    Lines",
    ]


def test_section_after_loose_example_titled_like_the_package(
    manual: Manual, write_file: WriteFile, manual_root: Path
) -> None:
    write_file(manual_root, "basics", "basics.py", "pdf.text('loose')\n")

    def _define(package: ExamplePackage) -> None:
        package.example("basics.py")
        package.section("After", lambda section: section.example("alpha.py"))

    manual.package("basics", _define)
    assert manual.outline.titles() == [
        "Basics",
        "  Basics",
        "  After",
        "    Alpha",
    ]


def test_later_package_reusing_a_section_title(
    manual: Manual, write_file: WriteFile, manual_root: Path
) -> None:
    write_file(
        manual_root,
        "second",
        "second.yaml",
        "contents:\n  - section: Tail\n    examples: [last]\n",
    )
    write_file(manual_root, "second", "last.py", "pdf.text('last')\n")
    manual.load_package("basics")
    manual.load_package("second")
    titles = manual.outline.titles()
    assert titles[:6] == [
        "Basics",
        "  First",
        "    Alpha",
        "    Beta",
        "  Second",
        "    Gamma",
    ]
    assert titles[6:] == ["Second", "  Tail", "    Last"]


def test_each_example_gets_its_own_page(manual: Manual) -> None:
    manual.load_package("basics")
    package_entry = manual.outline.entries[0]
    assert package_entry.destination == 1
    assert package_entry.closed is True
    pages = [
        example.destination
        for section in package_entry.children
        for example in section.children
    ]
    assert pages == [2, 3, 4]
    assert all(section.closed for section in package_entry.children)
    assert all(section.destination is None for section in package_entry.children)


def test_separator_only_for_evaluated_examples(
    manual: Manual, rules: list[tuple[int, float, float, bool]]
) -> None:
    manual.load_package("basics")
    separators = [
        (page, x2) for page, x1, x2, dashed in rules if dashed and x1 == -36
    ]
    width = manual.bounds.width
    assert separators == [(2, width + 36), (4, width + 36)]


def test_failing_example_is_reported_and_rendering_continues(
    manual: Manual, diagnostics: io.StringIO
) -> None:
    manual.load_package("basics")
    manual.load_page("intro")
    report = diagnostics.getvalue()
    assert "Error evaluating example: boom\n" in report
    assert "---- Source: ----\n" in report
    assert 'raise RuntimeError("boom")' in report
    assert manual.outline.titles()[-1] == "Intro"


def test_failure_report_contains_exact_message_and_source(
    inline: Manual, diagnostics: io.StringIO
) -> None:
    source = "x = 1\nraise ValueError('bad value: 42')"
    inline.render_example(_example(source))
    assert diagnostics.getvalue() == (
        "Error evaluating example: bad value: 42\n"
        "\n"
        "---- Source: ----\n"
        f"{source}\n"
    )


def test_unevaluated_example_does_not_run(
    inline: Manual, diagnostics: io.StringIO
) -> None:
    inline.render_example(_example("raise RuntimeError('ran')", eval_source=False))
    assert diagnostics.getvalue() == ""


@pytest.mark.parametrize("trailer", ["", "\nraise RuntimeError('late')"])
def test_style_is_reset_after_each_example(inline: Manual, trailer: str) -> None:
    source = (
        "pdf.line_width = 5\n"
        "pdf.cap_style = 'round'\n"
        "pdf.join_style = 'bevel'\n"
        "pdf.dash(2)\n"
        "pdf.fill_color = 'ff0000'\n"
        "pdf.stroke_color = '00ff00'\n"
        "pdf.set_font('Courier', size=20, style='bold')" + trailer
    )
    inline.render_example(_example(source))
    assert inline.style == StyleState()
    assert inline.style.font_name == "Helvetica"
    assert inline.style.font_size == 12
    assert not inline.dashed


def test_next_example_starts_from_baseline(inline: Manual) -> None:
    seen: list[StyleState] = []
    inline.render_example(_example("pdf.line_width = 7\npdf.fill_color = '123456'"))

    def _capture(pdf: Manual) -> None:
        seen.append(pdf.style.copy())

    package = ExamplePackage(folder_name="basics")
    package.example("alpha.py", demo=_capture)
    inline.render_package(package)
    assert seen == [StyleState()]


def test_demo_callable_replaces_source_execution(
    manual: Manual, diagnostics: io.StringIO
) -> None:
    calls: list[int] = []
    package = ExamplePackage(folder_name="basics")
    package.example("gamma.py", demo=lambda pdf: calls.append(pdf.page_number))
    manual.render_package(package)
    assert calls == [2]
    assert diagnostics.getvalue() == ""


def test_loose_examples_nest_under_the_package(manual: Manual) -> None:
    def _define(package: ExamplePackage) -> None:
        package.example("alpha.py")
        package.section("Later", lambda section: section.example("beta.py"))

    manual.package("basics", _define)
    assert manual.outline.titles() == ["Basics", "  Alpha", "  Later", "    Beta"]


def test_package_without_sections_renders_only_its_cover(manual: Manual) -> None:
    manual.render_package(ExamplePackage(folder_name="empty_package"))
    assert manual.outline.titles() == ["Empty package"]
    assert manual.page_count == 1


def test_example_with_empty_introduction_renders(
    inline: Manual, diagnostics: io.StringIO
) -> None:
    inline.render_example(_example("pdf.text('drawn')", intro=""))
    assert inline.page_count == 1
    assert diagnostics.getvalue() == ""


def test_missing_example_file_aborts_the_package(
    manual: Manual, write_file: WriteFile, manual_root: Path
) -> None:
    write_file(
        manual_root,
        "broken",
        "broken.yaml",
        "contents:\n  - section: Gone\n    examples: [absent]\n",
    )
    with pytest.raises(ExampleLoadError):
        manual.load_package("broken")


def test_load_page_registers_flat_outline_entry(manual: Manual) -> None:
    manual.load_page("intro")
    (entry,) = manual.outline.entries
    assert entry.title == "Intro"
    assert entry.destination == 1
    assert entry.children == []
    assert entry.closed is False


def test_load_page_humanizes_underscored_names(
    manual: Manual, write_file: WriteFile, manual_root: Path
) -> None:
    write_file(manual_root, "manual", "how_to_read.py", "pdf.text('hi')\n")
    manual.load_page("how_to_read")
    assert manual.outline.titles() == ["How to read"]


def test_lone_page_errors_propagate(
    manual: Manual, write_file: WriteFile, manual_root: Path
) -> None:
    write_file(manual_root, "manual", "bad.py", "raise KeyError('page')\n")
    with pytest.raises(KeyError):
        manual.load_page("bad")


def test_list_collapses_whitespace(
    manual: Manual, monkeypatch: pytest.MonkeyPatch
) -> None:
    written: list[str] = []

    def _record(string: str, **_options: object) -> None:
        written.append(string)

    monkeypatch.setattr(manual, "text", _record)
    manual.list("a   b", " c d ")
    assert written == ["•", "a b", "•", "c d"]


def test_list_bullets_do_not_move_the_cursor(manual: Manual) -> None:
    manual.start_new_page()
    start = manual.cursor
    manual.list("only item")
    line = manual.style.font_size * 1.2 + 2
    assert manual.cursor == pytest.approx(start - 20 - line - 10)


def test_header_moves_cursor_and_draws_rule(
    manual: Manual, rules: list[tuple[int, float, float, bool]]
) -> None:
    manual.start_new_page()
    start = manual.cursor
    manual.header("Title")
    assert rules == [(1, 0, manual.bounds.width, False)]
    assert manual.cursor == pytest.approx(start - 40 - 25 * 1.2 - 30)


def test_stroke_axis_marks_every_hundred_points(
    manual: Manual, monkeypatch: pytest.MonkeyPatch
) -> None:
    labels: list[object] = []
    monkeypatch.setattr(
        manual, "draw_text", lambda text, *, at, size=None: labels.append(text)
    )
    manual.start_new_page()
    manual.stroke_axis(width=350, height=220)
    assert labels == [100, 200, 300, 100, 200]
    assert not manual.dashed


def test_listing_keeps_indentation_with_non_breaking_spaces(
    manual: Manual, monkeypatch: pytest.MonkeyPatch
) -> None:
    drawn: list[str] = []
    manual.start_new_page()
    monkeypatch.setattr(
        manual.canvas, "drawString", lambda x, y, text, *a, **k: drawn.append(text)
    )
    manual.render_listing("def f():\n    return 1")
    assert drawn == ["def\u00a0f():", "\u00a0" * 4 + "return\u00a01"]


def test_generate_writes_a_pdf(tmp_path: Path) -> None:
    output = tmp_path / "standalone.pdf"
    Manual.generate(output, lambda pdf: pdf.text("Hello World!"))
    assert output.read_bytes().startswith(b"%PDF")


def test_render_section_without_parent_uses_top_level_package_entry(
    inline: Manual,
) -> None:
    package_entry = inline.outline.entries[0]
    inline.outline.page("Basics", destination=1, parent=package_entry)
    inline.render_section(ExampleSection(name="Later", package_name="Basics"))
    assert inline.outline.titles() == ["Basics", "  Basics", "  Later"]
