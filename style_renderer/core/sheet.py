from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .logger import get_logger
from .renderer import Renderer, create_renderer
from .sheet_config import SheetConfigModel

log = get_logger(__name__)

__all__ = ["SheetResult", "static_definition", "render_sheet"]


@dataclass
class SheetResult:
    """Compiled output of a style sheet file."""

    css: str
    class_names: Dict[str, str] = field(default_factory=dict)
    animation_names: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "css": self.css,
            "class_names": dict(self.class_names),
            "animation_names": dict(self.animation_names),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SheetResult":
        return cls(
            css=data["css"],
            class_names=dict(data.get("class_names", {})),
            animation_names=dict(data.get("animation_names", {})),
        )


def static_definition(style: Dict[str, Any]) -> Callable[[Dict[str, Any]], Dict[str, Any]]:
    """Wrap a fixed style object as a definition that ignores its props."""

    def resolve(props: Dict[str, Any]) -> Dict[str, Any]:
        # Plugins may mutate what they receive
        return copy.deepcopy(style)

    return resolve


def render_sheet(
    model: SheetConfigModel, renderer: Optional[Renderer] = None
) -> SheetResult:
    """
    Render every entry of a sheet into ``renderer`` (a fresh one by default).

    Fonts and statics come first, then rules and keyframes in file order.
    """
    if renderer is None:
        renderer = create_renderer()

    for font in model.fonts:
        renderer.render_font(font.family, font.files, font.properties)

    for static in model.statics:
        if static.css is not None:
            renderer.render_static(static.css)
        else:
            renderer.render_static(static.style, static.selector)

    result = SheetResult(css="")
    for name, style in model.rules.items():
        result.class_names[name] = renderer.render_rule(static_definition(style))

    for name, frames in model.keyframes.items():
        result.animation_names[name] = renderer.render_keyframe(static_definition(frames))

    result.css = renderer.render_to_string()
    log.info(
        "Rendered sheet '%s': %s rules, %s keyframes, %s fonts",
        model.name,
        len(result.class_names),
        len(result.animation_names),
        len(model.fonts),
    )
    return result
