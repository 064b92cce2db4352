"""Turn example source into coloured text runs for the listing."""

from __future__ import annotations

import typing as typ

from pygments.lexers import get_lexer_by_name
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .surface import TextRun

if typ.TYPE_CHECKING:
    from pygments.style import StyleMeta


def listing_runs(
    source: str, *, pygments_style: str | None = None, language: str = "python"
) -> list[TextRun]:
    """Split ``source`` into runs coloured by ``pygments_style``.

    Without a style the listing is a single uncoloured run. Unknown styles or
    languages fall back to the same plain rendering.

    >>> listing_runs("pdf.move_down(10)")
    [TextRun(text='pdf.move_down(10)', color=None)]
    """
    if not pygments_style:
        return [TextRun(source)]
    try:
        style = get_style_by_name(pygments_style)
        lexer = get_lexer_by_name(language, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return [TextRun(source)]

    runs: list[TextRun] = []
    for token_type, value in lexer.get_tokens(source):
        if not value:
            continue
        color = _token_color(style, token_type)
        if runs and runs[-1].color == color:
            runs[-1] = TextRun(runs[-1].text + value, color)
        else:
            runs.append(TextRun(value, color))
    return runs


def _token_color(style: StyleMeta, token_type: typ.Any) -> str | None:
    return style.style_for_token(token_type).get("color") or None


__all__ = ["listing_runs"]
