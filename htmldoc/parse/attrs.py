"""Attribute, inline style and length helpers for DOM elements."""

from __future__ import annotations

import math

from ..config import EMOJI_CLASSES
from ..dom.tree import DomNode
from ..model.nodes import Length


def attribute(node: DomNode, name: str) -> str | None:
    """Return the first value of attribute ``name``, or None."""
    return node.attr(name)


def style_map(node: DomNode) -> dict[str, str]:
    """Parse the ``style`` attribute into a ``{property: value}`` dict.

    Declarations without a ``:`` are skipped.
    """
    styles: dict[str, str] = {}
    css_text = attribute(node, "style")
    if not css_text:
        return styles

    for decl in css_text.split(";"):
        key, sep, value = decl.partition(":")
        if not sep:
            continue
        styles[key.strip().lower()] = value.strip()
    return styles


def _parse_float(text: str) -> float | None:
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def length_of(value: str) -> Length | None:
    """Parse a length value.

    Percentages become relative lengths (``"56%"`` -> 0.56); anything else is
    read as pixels with an optional ``px`` suffix (``"240"``, ``"240px"``).

    Returns:
        The length, or None when the number does not parse
    """
    if value.endswith("%"):
        number = _parse_float(value[:-1])
        if number is None:
            return None
        return Length.relative(min(max(number / 100.0, 0.0), 1.0))

    number = _parse_float(value.removesuffix("px"))
    if number is None:
        return None
    return Length.px(number)


def width_height(node: DomNode) -> tuple[Length | None, Length | None]:
    """Resolve width and height from attributes, falling back to inline style."""
    width = None
    height = None

    value = attribute(node, "width")
    if value is not None:
        width = length_of(value)

    value = attribute(node, "height")
    if value is not None:
        height = length_of(value)

    if width is None or height is None:
        styles = style_map(node)
        if width is None and "width" in styles:
            width = length_of(styles["width"])
        if height is None and "height" in styles:
            height = length_of(styles["height"])

    return width, height


def is_emoji_class(node: DomNode) -> bool:
    """True when the ``class`` attribute carries an emoji marker token."""
    classes = attribute(node, "class") or ""
    return any(cls in EMOJI_CLASSES for cls in classes.split())
