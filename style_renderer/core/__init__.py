"""
Style rendering core

Caches, diffs and accumulates CSS generated from style definitions.
"""

from .config import RendererConfig
from .process_style import (
    RenderMeta,
    friendly_pseudo_class_plugin,
    remove_undefined_plugin,
    unit_plugin,
)
from .renderer import Renderer, Subscription, create_renderer

__all__ = [
    "RendererConfig",
    "RenderMeta",
    "Renderer",
    "Subscription",
    "create_renderer",
    "friendly_pseudo_class_plugin",
    "remove_undefined_plugin",
    "unit_plugin",
]
