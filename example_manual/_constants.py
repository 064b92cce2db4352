"""Common literal values used across example_manual.

These constants keep directive markers, filenames and the style baseline in one
place so the loader, the renderer and the tests agree on them. Intended for
internal use within the example_manual package.

Examples
--------
>>> from example_manual import _constants
>>> _constants.PACKAGE_DEFINITION_TEMPLATE.format(package="basic_concepts")
'basic_concepts.yaml'
>>> _constants.NBSP == "\\u00a0"
True
"""

NBSP = "\u00a0"

EXAMPLE_SUFFIX = ".py"
PACKAGE_DEFINITION_TEMPLATE = "{package}.yaml"
DEFAULT_PAGES_DIR = "manual"

DIRECTIVE_PREFIX = "manual:"
EVAL_DIRECTIVE = "eval"
NO_EVAL_DIRECTIVE = "no-eval"

BASE_FONT = "Helvetica"
BASE_FONT_SIZE = 12
LISTING_FONT = "Courier"
LISTING_FONT_SIZE = 11
BASE_COLOR = "000000"
BUILTIN_FONT = "builtin"
