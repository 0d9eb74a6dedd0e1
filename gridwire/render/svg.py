"""SVG markup primitives."""

import re
from collections.abc import Sequence
from html import escape as _escape

from gridwire.ir import Align

BACKGROUND = "white"
INK = "black"
FONT_FAMILY = "sans-serif"

_ANCHORS = {
    Align.LEFT: "start",
    Align.CENTER: "middle",
    Align.RIGHT: "end",
}

# Characters XML 1.0 does not allow anywhere in a document
_ILLEGAL_XML = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def escape(value: str) -> str:
    """Escape text for XML, dropping characters XML cannot carry."""
    return _escape(_ILLEGAL_XML.sub("", value))


def fmt(value: float) -> str:
    """Format a coordinate with at most two decimals.

    Example:
        >>> fmt(320.0), fmt(213.33333)
        ('320', '213.33')
    """
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def attrs(**values: object) -> str:
    """Render keyword arguments as XML attributes, skipping None.

    Underscores in names become hyphens.
    """
    parts = []
    for name, value in values.items():
        if value is None:
            continue
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = fmt(value)
        parts.append(f'{name.replace("_", "-")}="{escape(str(value))}"')
    return " ".join(parts)


def rect(
    x: float,
    y: float,
    width: float,
    height: float,
    *,
    fill: str,
    rx: float | None = None,
    stroke: str | None = None,
    stroke_width: float | None = None,
) -> str:
    if stroke is None:
        stroke_width = None
    return (
        "<rect "
        + attrs(
            x=x,
            y=y,
            width=width,
            height=height,
            rx=rx,
            fill=fill,
            stroke=stroke,
            stroke_width=stroke_width,
        )
        + "/>"
    )


def text(
    lines: Sequence[str],
    x: float,
    baselines: Sequence[float],
    *,
    font_size: float,
    align: Align = Align.LEFT,
    fill: str = INK,
) -> str:
    """A text element; several lines become one tspan each."""
    head = attrs(
        x=x,
        y=baselines[0],
        font_size=font_size,
        font_family=FONT_FAMILY,
        text_anchor=_ANCHORS[align],
        fill=fill,
    )
    if len(lines) == 1:
        return f"<text {head}>{escape(lines[0])}</text>"
    spans = "".join(
        f"<tspan {attrs(x=x, y=y)}>{escape(line)}</tspan>"
        for line, y in zip(lines, baselines)
    )
    return f"<text {head}>{spans}</text>"


def image(
    href: str, x: float, y: float, width: float, height: float
) -> str:
    return (
        "<image "
        + attrs(
            href=href,
            x=x,
            y=y,
            width=width,
            height=height,
            preserveAspectRatio="xMidYMid meet",
        )
        + "/>"
    )


def group(*children: str) -> str:
    body = "\n    ".join(child for child in children if child)
    return f"<g>\n    {body}\n  </g>"


def document(width: int, height: int, fragments: Sequence[str]) -> str:
    """Wrap component fragments in the SVG root with a background fill."""
    body = "".join(f"\n  {fragment}" for fragment in fragments if fragment)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}"'
        f' viewBox="0 0 {width} {height}">\n'
        f"  {rect(0, 0, width, height, fill=BACKGROUND)}"
        f"{body}\n"
        "</svg>\n"
    )
