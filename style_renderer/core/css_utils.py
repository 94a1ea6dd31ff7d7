from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Sequence

from .logger import get_logger

log = get_logger(__name__)

__all__ = [
    "hyphenate_property",
    "format_number",
    "format_value",
    "cssify_declaration",
    "cssify_object",
    "cssify_keyframe",
    "cssify_font_face",
]


_UPPERCASE_PATTERN = re.compile(r"[A-Z]")
_MS_PREFIX_PATTERN = re.compile(r"^ms-")

_hyphenate_cache: Dict[str, str] = {}


def hyphenate_property(prop: str) -> str:
    """
    Convert a camelCase style property to its CSS name.

    ``fontSize`` becomes ``font-size``, ``msTransform`` becomes
    ``-ms-transform`` and ``WebkitTransition`` becomes ``-webkit-transition``.
    Custom properties (``--name``) are returned unchanged.
    """
    if prop.startswith("--"):
        return prop
    cached = _hyphenate_cache.get(prop)
    if cached is not None:
        return cached

    hyphenated = _UPPERCASE_PATTERN.sub(lambda m: "-" + m.group(0).lower(), prop)
    hyphenated = _MS_PREFIX_PATTERN.sub("-ms-", hyphenated)
    _hyphenate_cache[prop] = hyphenated
    return hyphenated


def format_number(value: float) -> str:
    """Render numbers the way they are written in CSS (``1.0`` -> ``1``)."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_value(prop: str, value: Any) -> str:
    if isinstance(value, bool):
        raise TypeError(f"Boolean is not a valid CSS value for '{prop}'")
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def cssify_declaration(prop: str, value: Any) -> str:
    return hyphenate_property(prop) + ":" + format_value(prop, value)


def cssify_object(style: Mapping[str, Any]) -> str:
    """
    Serialize a flat style map to CSS declarations.

    Declarations are joined with ``;`` (no trailing semicolon). List values
    render as repeated declarations, which is how fallback values are
    expressed (``display: ['-webkit-flex', 'flex']``). Nested mappings are
    not declarations and are skipped.
    """
    declarations = []
    for prop, value in style.items():
        if isinstance(value, Mapping):
            log.debug("Skipping nested block '%s' in declaration list", prop)
            continue
        if isinstance(value, (list, tuple)):
            declarations.extend(cssify_declaration(prop, item) for item in value)
        else:
            declarations.append(cssify_declaration(prop, value))
    return ";".join(declarations)


def cssify_keyframe(
    frames: Mapping[str, Mapping[str, Any]],
    animation_name: str,
    prefixes: Sequence[str] = ("",),
) -> str:
    """
    Serialize keyframe steps to one ``@keyframes`` block per prefix.

    Example:
        >>> cssify_keyframe({"from": {"opacity": 0}}, "k0", ["-webkit-", ""])
        '@-webkit-keyframes k0{from{opacity:0}}@keyframes k0{from{opacity:0}}'
    """
    steps = "".join(
        f"{step}{{{cssify_object(declarations)}}}" for step, declarations in frames.items()
    )
    return "".join(
        f"@{prefix}keyframes {animation_name}{{{steps}}}" for prefix in prefixes
    )


def cssify_font_face(font_face: Mapping[str, Any]) -> str:
    return "@font-face{" + cssify_object(font_face) + "}"
