from __future__ import annotations

from typing import Any, Callable, List

from pydantic import BaseModel, Field

DEFAULT_KEYFRAME_PREFIXES = ["-webkit-", "-moz-"]


class RendererConfig(BaseModel):
    # Vendor prefixes for @keyframes; the unprefixed form is always added last
    keyframe_prefixes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_KEYFRAME_PREFIXES)
    )
    # plugin(style, meta) -> style, run in order
    plugins: List[Callable[..., Any]] = Field(default_factory=list)
    # enhancer(renderer) -> renderer, applied once by create_renderer
    enhancers: List[Callable[..., Any]] = Field(default_factory=list)
