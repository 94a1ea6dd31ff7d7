"""
Style processing pipeline.

A plugin is any callable ``plugin(style, meta) -> style``. Plugins run in
the configured order, each receiving the previous plugin's output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Literal, Mapping, Optional, Sequence

from .css_utils import format_number, hyphenate_property
from .logger import get_logger

log = get_logger(__name__)

__all__ = [
    "RenderType",
    "RenderMeta",
    "Plugin",
    "process_style",
    "unit_plugin",
    "friendly_pseudo_class_plugin",
    "remove_undefined_plugin",
]

RenderType = Literal["rule", "keyframe", "static"]


@dataclass
class RenderMeta:
    """Describes what is being rendered so plugins can specialise."""

    type: RenderType
    id: Optional[int] = None
    class_name: Optional[str] = None
    animation_name: Optional[str] = None
    selector: Optional[str] = None
    props: Dict[str, Any] = field(default_factory=dict)
    rule: Optional[Callable[..., Any]] = None
    keyframe: Optional[Callable[..., Any]] = None


Plugin = Callable[[Dict[str, Any], RenderMeta], Dict[str, Any]]


def process_style(
    style: Dict[str, Any], meta: RenderMeta, plugins: Sequence[Plugin]
) -> Dict[str, Any]:
    """Run ``style`` through every plugin in order."""

    processed = style
    for plugin in plugins:
        processed = plugin(processed, meta)
    return processed


# Properties that accept bare numbers and must not receive a unit
UNITLESS_PROPERTIES = {
    "animationIterationCount",
    "borderImageOutset",
    "borderImageSlice",
    "borderImageWidth",
    "boxFlex",
    "boxFlexGroup",
    "boxOrdinalGroup",
    "columnCount",
    "columns",
    "fillOpacity",
    "flex",
    "flexGrow",
    "flexNegative",
    "flexOrder",
    "flexPositive",
    "flexShrink",
    "floodOpacity",
    "fontWeight",
    "gridColumn",
    "gridRow",
    "lineClamp",
    "lineHeight",
    "opacity",
    "order",
    "orphans",
    "stopOpacity",
    "strokeDasharray",
    "strokeDashoffset",
    "strokeMiterlimit",
    "strokeOpacity",
    "strokeWidth",
    "tabSize",
    "widows",
    "zIndex",
    "zoom",
}


def _add_unit(prop: str, value: Any, unit: str) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and prop not in UNITLESS_PROPERTIES:
        return format_number(value) + unit
    return value


def unit_plugin(unit: str = "px") -> Plugin:
    """Build a plugin that appends ``unit`` to bare numeric dimension values."""

    def add_units(style: Dict[str, Any], meta: RenderMeta) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for prop, value in style.items():
            if isinstance(value, Mapping):
                result[prop] = add_units(dict(value), meta)
            elif isinstance(value, list):
                result[prop] = [_add_unit(prop, item, unit) for item in value]
            else:
                result[prop] = _add_unit(prop, value, unit)
        return result

    return add_units


_FRIENDLY_PSEUDO = re.compile(r"^on([A-Z][a-zA-Z]*)$")


def friendly_pseudo_class_plugin() -> Plugin:
    """Build a plugin rewriting ``onHover``-style keys to ``:hover``."""

    def rename(style: Dict[str, Any], meta: RenderMeta) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for prop, value in style.items():
            if isinstance(value, Mapping):
                match = _FRIENDLY_PSEUDO.match(prop)
                if match:
                    name = match.group(1)
                    prop = ":" + hyphenate_property(name[0].lower() + name[1:])
                result[prop] = rename(dict(value), meta)
            else:
                result[prop] = value
        return result

    return rename


def remove_undefined_plugin() -> Plugin:
    """Build a plugin dropping ``None`` and empty-string values."""

    def remove(style: Dict[str, Any], meta: RenderMeta) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for prop, value in style.items():
            if isinstance(value, Mapping):
                result[prop] = remove(dict(value), meta)
            elif isinstance(value, list):
                cleaned = [item for item in value if item is not None and item != ""]
                if cleaned:
                    result[prop] = cleaned
            elif value is not None and value != "":
                result[prop] = value
            else:
                log.debug("Dropping undefined value for %s", prop)
        return result

    return remove
