"""Exceptions raised while loading and building the example manual."""

from __future__ import annotations


class ManualConfigError(ValueError):
    """Raised when the manual configuration or a package definition is invalid."""


class ExampleLoadError(FileNotFoundError):
    """Raised when an example, lone page or package definition cannot be read."""


__all__ = ["ExampleLoadError", "ManualConfigError"]
