"""Read example files and package definitions from the manual folder.

Example files are Python snippets whose leading comment block is the
introduction shown above the listing::

    # The cursor tracks the vertical position on the page.
    #
    # manual: no-eval

    pdf.text(f"cursor: {pdf.cursor}")

Package definitions are YAML files named after their folder
(``basic_concepts/basic_concepts.yaml``) that list the sections and examples
in the order they appear in the manual.
"""

from __future__ import annotations

import re
import typing as typ

from example_manual._constants import (
    DIRECTIVE_PREFIX,
    EVAL_DIRECTIVE,
    NO_EVAL_DIRECTIVE,
    PACKAGE_DEFINITION_TEMPLATE,
)
from example_manual.config import load_yaml_mapping
from example_manual.errors import ExampleLoadError, ManualConfigError

from .models import ExampleFile, ExamplePackage, ExampleSection

if typ.TYPE_CHECKING:
    from pathlib import Path

    from example_manual.manual import Manual

    from .models import RenderBlock

CODING_PATTERN = re.compile(r"^#.*?coding[:=]")


def split_example_source(text: str) -> tuple[str, str, bool | None]:
    """Split an example file into introduction, source and eval directive.

    Returns
    -------
    tuple[str, str, bool or None]
        The introduction paragraphs (joined by blank lines), the listing with
        surrounding blank lines removed, and the directive's evaluation flag
        (``None`` when the file carries no directive).
    """
    lines = text.splitlines()
    idx = 0
    while idx < len(lines) and (
        lines[idx].startswith("#!") or CODING_PATTERN.match(lines[idx])
    ):
        idx += 1

    paragraphs: list[list[str]] = [[]]
    directive: bool | None = None
    while idx < len(lines) and lines[idx].startswith("#"):
        body = lines[idx][1:]
        body = body.removeprefix(" ").rstrip()
        idx += 1
        if body.strip().startswith(DIRECTIVE_PREFIX):
            directive = _parse_directive(body.strip())
        elif body.strip():
            paragraphs[-1].append(body.strip())
        elif paragraphs[-1]:
            paragraphs.append([])

    intro = "\n\n".join(" ".join(chunk) for chunk in paragraphs if chunk)
    return intro, _strip_blank_lines(lines[idx:]), directive


def _parse_directive(line: str) -> bool:
    value = line[len(DIRECTIVE_PREFIX) :].strip().lower()
    if value == EVAL_DIRECTIVE:
        return True
    if value == NO_EVAL_DIRECTIVE:
        return False
    msg = f"Unknown example directive '{line}'."
    raise ManualConfigError(msg)


def _strip_blank_lines(lines: list[str]) -> str:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return "\n".join(lines[start:end])


def read_text(path: Path) -> str:
    """Return the UTF-8 contents of ``path`` or raise ExampleLoadError."""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Unable to read '{path}': {exc.strerror or exc}"
        raise ExampleLoadError(msg) from exc


def load_example_file(
    root: Path,
    package: str,
    filename: str,
    *,
    parent_name: str,
    package_name: str,
    eval_source: bool | None = None,
    demo: RenderBlock | None = None,
) -> ExampleFile:
    """Load ``<root>/<package>/<filename>`` into an :class:`ExampleFile`.

    Parameters
    ----------
    root : Path
        Manual folder holding the package folders.
    package : str
        Package folder name.
    filename : str
        Example file name including its suffix.
    parent_name : str
        Outline title the example nests under.
    package_name : str
        Display name of the owning package.
    eval_source : bool, optional
        Declared evaluation flag; takes precedence over a directive in the
        file. Examples are evaluated when neither says otherwise.
    demo : callable, optional
        Callable run in place of executing the source.

    Raises
    ------
    ExampleLoadError
        If the file does not exist or cannot be read.
    """
    text = read_text(root / package / filename)
    intro, source, directive = split_example_source(text)
    if eval_source is None:
        eval_source = True if directive is None else directive
    return ExampleFile(
        package=package,
        filename=filename,
        source=source,
        introduction_text=intro,
        eval_source=eval_source,
        parent_name=parent_name,
        package_name=package_name,
        demo=demo,
    )


def load_package_definition(root: Path, package: str) -> ExamplePackage:
    """Build the descriptor tree for ``package`` from its YAML definition.

    Raises
    ------
    ExampleLoadError
        If ``<root>/<package>/<package>.yaml`` does not exist.
    ManualConfigError
        If the definition is malformed.
    """
    path = root / package / PACKAGE_DEFINITION_TEMPLATE.format(package=package)
    if not path.exists():
        msg = f"Package definition '{path}' not found."
        raise ExampleLoadError(msg)
    raw = load_yaml_mapping(path)

    definition = ExamplePackage(folder_name=package, title=raw.get("name"))
    definition.intro(_build_intro(raw.get("intro") or []))
    for node in raw.get("contents") or []:
        match node:
            case {"section": str() as name, **rest}:
                examples = rest.get("examples") or []
                definition.section(
                    name, lambda section, items=examples: _add_examples(section, items)
                )
            case {"example": str() as filename, **rest}:
                definition.example(
                    _example_filename(filename), eval_source=rest.get("eval")
                )
            case _:
                msg = f"Unrecognised entry in '{path}': {node!r}"
                raise ManualConfigError(msg)
    return definition


def _example_filename(name: str) -> str:
    return name if name.endswith(".py") else f"{name}.py"


def _add_examples(section: ExampleSection, items: list[typ.Any]) -> None:
    for item in items:
        match item:
            case str() as filename:
                section.example(_example_filename(filename))
            case {"file": str() as filename, **rest}:
                section.example(
                    _example_filename(filename), eval_source=rest.get("eval")
                )
            case _:
                msg = f"Unrecognised example in section '{section.name}': {item!r}"
                raise ManualConfigError(msg)


def _build_intro(blocks: list[typ.Any]) -> RenderBlock:
    """Turn ``text``, ``header``, ``list`` and ``move_down`` blocks into an intro."""
    steps: list[tuple[str, typ.Any]] = []
    for block in blocks:
        match block:
            case {"text": str() as text}:
                steps.append(("text", text))
            case {"header": str() as title}:
                steps.append(("header", title))
            case {"list": list() as items}:
                steps.append(("list", [str(item) for item in items]))
            case {"move_down": int() | float() as amount}:
                steps.append(("move_down", amount))
            case _:
                msg = f"Unrecognised intro block: {block!r}"
                raise ManualConfigError(msg)

    def render_intro(pdf: Manual) -> None:
        for kind, payload in steps:
            match kind:
                case "text":
                    pdf.text(payload, inline_format=True)
                case "header":
                    pdf.header(payload)
                case "list":
                    pdf.list(*payload)
                case _:
                    pdf.move_down(payload)

    return render_intro


__all__ = [
    "load_example_file",
    "load_package_definition",
    "read_text",
    "split_example_source",
]
