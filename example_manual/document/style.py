"""Explicit graphics and text state owned by a document.

ReportLab drops the graphics state on every ``showPage``; keeping the state in
a dataclass lets the document re-apply it after a page break and restore the
baseline between examples with a single assignment.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from example_manual._constants import BASE_COLOR, BASE_FONT, BASE_FONT_SIZE

CapStyle = typ.Literal["butt", "round", "projecting_square"]
JoinStyle = typ.Literal["miter", "round", "bevel"]

CAP_STYLES: dict[str, int] = {"butt": 0, "round": 1, "projecting_square": 2}
JOIN_STYLES: dict[str, int] = {"miter": 0, "round": 1, "bevel": 2}
HEX_DIGITS = "0123456789abcdefABCDEF"


def normalize_color(value: str) -> str:
    """Return ``value`` as a six digit lowercase hex string.

    >>> normalize_color("#FF0000")
    'ff0000'
    >>> normalize_color("999")
    '999999'
    """
    text = value.strip().removeprefix("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) != 6 or any(ch not in HEX_DIGITS for ch in text):
        msg = f"Expected a hex colour such as 'ff0000', got {value!r}."
        raise ValueError(msg)
    return text.lower()


@dc.dataclass(slots=True)
class StyleState:
    """Font, line and colour settings in effect on the canvas.

    A freshly constructed instance is the baseline every example starts from.
    """

    font_name: str = BASE_FONT
    font_size: float = BASE_FONT_SIZE
    line_width: float = 1
    cap_style: CapStyle = "butt"
    join_style: JoinStyle = "miter"
    dash: tuple[tuple[float, ...], float] | None = None
    fill_color: str = BASE_COLOR
    stroke_color: str = BASE_COLOR

    def copy(self) -> StyleState:
        """Return an independent copy of the state."""
        return dc.replace(self)


__all__ = [
    "CAP_STYLES",
    "JOIN_STYLES",
    "CapStyle",
    "JoinStyle",
    "StyleState",
    "normalize_color",
]
