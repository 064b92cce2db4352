"""Descriptors and loaders for the packages, sections and examples of a manual."""

from .loader import (
    load_example_file,
    load_package_definition,
    read_text,
    split_example_source,
)
from .models import ExampleFile, ExamplePackage, ExampleRef, ExampleSection, humanize

__all__ = [
    "ExampleFile",
    "ExamplePackage",
    "ExampleRef",
    "ExampleSection",
    "humanize",
    "load_example_file",
    "load_package_definition",
    "read_text",
    "split_example_source",
]
