"""Descriptors for the packages, sections and example files of the manual.

Building the tree is the first of two phases: package definitions populate
these descriptors in declaration order, and the :class:`~example_manual.manual.Manual`
walks them later to draw pages. Nothing here touches the document.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from example_manual.errors import ManualConfigError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from example_manual.manual import Manual

    RenderBlock = cabc.Callable[[Manual], None]


def humanize(identifier: str) -> str:
    """Return a title for a file or folder identifier.

    >>> humanize("basic_concepts")
    'Basic concepts'
    >>> humanize("stroke_axis.py")
    'Stroke axis'
    """
    stem = identifier.rsplit(".", 1)[0] if identifier.endswith(".py") else identifier
    return stem.replace("_", " ").capitalize()


def _no_intro(pdf: Manual) -> None:
    """Intro block used by packages that never declared one."""


@dc.dataclass(frozen=True, slots=True)
class ExampleFile:
    """One loaded example: its listing, introduction and evaluation flag.

    Attributes
    ----------
    package : str
        Folder holding the example.
    filename : str
        File name within ``package``, including the ``.py`` suffix.
    source : str
        Code shown in the listing and evaluated when ``eval_source`` is set.
    introduction_text : str
        Paragraphs from the leading comment block; may be empty.
    eval_source : bool
        Whether the source is run beneath its listing.
    parent_name : str
        Outline title the example nests under (its section, or its package).
    package_name : str
        Display name of the owning package.
    demo : callable or None
        Optional callable run instead of executing ``source``.
    """

    package: str
    filename: str
    source: str
    introduction_text: str
    eval_source: bool
    parent_name: str
    package_name: str
    demo: RenderBlock | None = None

    @property
    def name(self) -> str:
        """Title used for the example's outline entry."""
        return humanize(self.filename)

    @property
    def parent_folder_name(self) -> str:
        """Folder shown in grey ahead of the file name on the example page."""
        return self.package


@dc.dataclass(frozen=True, slots=True)
class ExampleRef:
    """A declared example that has not been read from disk yet."""

    filename: str
    eval_source: bool | None = None
    demo: RenderBlock | None = None


@dc.dataclass(slots=True)
class ExampleSection:
    """Named, ordered group of examples within a package."""

    name: str
    package_name: str
    examples: list[ExampleRef] = dc.field(default_factory=list)

    def example(
        self,
        filename: str,
        *,
        eval_source: bool | None = None,
        demo: RenderBlock | None = None,
    ) -> ExampleRef:
        """Append an example to the section; repeats are kept as declared."""
        ref = ExampleRef(filename=filename, eval_source=eval_source, demo=demo)
        self.examples.append(ref)
        return ref

    @property
    def filenames(self) -> list[str]:
        """Example file names in declaration order."""
        return [ref.filename for ref in self.examples]


@dc.dataclass(slots=True)
class ExamplePackage:
    """A package folder: cover intro, sections and loose examples.

    ``nodes`` holds :class:`ExampleSection` and :class:`ExampleRef` entries in
    the order they were declared; loose examples nest directly under the
    package in the outline.
    """

    folder_name: str
    title: str | None = None
    intro_block: RenderBlock = _no_intro
    nodes: list[ExampleSection | ExampleRef] = dc.field(default_factory=list)

    @property
    def name(self) -> str:
        """Display name of the package, used for its cover and outline."""
        return self.title or humanize(self.folder_name)

    @property
    def sections(self) -> list[ExampleSection]:
        """Sections in declaration order."""
        return [node for node in self.nodes if isinstance(node, ExampleSection)]

    def intro(self, block: RenderBlock) -> RenderBlock:
        """Store the deferred block drawn on the package cover page."""
        self.intro_block = block
        return block

    def section(
        self, name: str, define: cabc.Callable[[ExampleSection], None] | None = None
    ) -> ExampleSection:
        """Declare a section and run ``define`` to register its examples.

        Raises
        ------
        ManualConfigError
            If the package already has a section called ``name``.
        """
        if any(section.name == name for section in self.sections):
            msg = f"Package '{self.name}' already has a section named '{name}'."
            raise ManualConfigError(msg)
        section = ExampleSection(name=name, package_name=self.name)
        if define is not None:
            define(section)
        self.nodes.append(section)
        return section

    def example(
        self,
        filename: str,
        *,
        eval_source: bool | None = None,
        demo: RenderBlock | None = None,
    ) -> ExampleRef:
        """Declare an example that sits directly under the package."""
        ref = ExampleRef(filename=filename, eval_source=eval_source, demo=demo)
        self.nodes.append(ref)
        return ref


__all__ = [
    "ExampleFile",
    "ExamplePackage",
    "ExampleRef",
    "ExampleSection",
    "humanize",
]
