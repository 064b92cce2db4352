"""Load and validate the manual configuration YAML.

This subpackage parses ``manual.yaml``, resolves paths relative to the file,
and produces a :class:`ManualConfig` describing which lone pages and packages
make up the manual and how the PDF is laid out. The primary entry point is
:func:`load_manual_config`.

Examples
--------
>>> from pathlib import Path
>>> from example_manual.config import load_manual_config
>>> config = load_manual_config(Path("manual/manual.yaml"))  # doctest: +SKIP
>>> config.output.name  # doctest: +SKIP
'manual.pdf'
"""

from .loader import load_manual_config, load_yaml_mapping
from .models import PAGE_SIZES, ContentEntry, ManualConfig

__all__ = [
    "PAGE_SIZES",
    "ContentEntry",
    "ManualConfig",
    "load_manual_config",
    "load_yaml_mapping",
]
