"""
Style Renderer

Turns style definitions (callables of a props mapping) into deduplicated CSS
text and the class / animation names that reference it.

Every definition gets a stable index the first time it is seen. A rule's
style rendered with empty props is its base; any other props variant only
emits the declarations that differ from that base, and callers receive both
class names ("c0 c0-1a2b3c4d5e"). All output is cached for the lifetime of
the renderer, until clear() is called.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .config import RendererConfig
from .css_utils import cssify_font_face, cssify_keyframe, cssify_object
from .diff_style import diff_style
from .font_format import get_font_format
from .logger import get_logger
from .process_style import RenderMeta, process_style
from .props_reference import generate_props_reference, sorted_stringify

log = get_logger(__name__)

__all__ = [
    "EntryKind",
    "classify_entry",
    "Subscription",
    "Renderer",
    "create_renderer",
]

Listener = Callable[[str], Any]
StyleDefinition = Callable[[Dict[str, Any]], Dict[str, Any]]

PSEUDO_MARKER = ":"
MEDIA_MARKER = "@media"

FONT_PROPERTIES = ("fontVariant", "fontWeight", "fontStretch", "fontStyle", "unicodeRange")

# Indentation and newlines from multi-line static CSS
_WHITESPACE_RUNS = re.compile(r"\s{2,}")


class EntryKind(Enum):
    """How a single key/value of a style object is rendered."""

    DECLARATION = "declaration"
    PSEUDO = "pseudo"
    MEDIA = "media"
    UNRECOGNIZED = "unrecognized"


def classify_entry(prop: str, value: Any) -> EntryKind:
    if not isinstance(value, Mapping):
        return EntryKind.DECLARATION
    if prop.startswith(PSEUDO_MARKER):
        return EntryKind.PSEUDO
    if prop.startswith(MEDIA_MARKER):
        return EntryKind.MEDIA
    return EntryKind.UNRECOGNIZED


def _ensure_callable(definition: Any, kind: str) -> None:
    if not callable(definition):
        raise TypeError(
            f"{kind} must be a callable taking props, got {type(definition).__name__}"
        )


class Subscription:
    """Handle returned by :meth:`Renderer.subscribe`."""

    def __init__(self, renderer: "Renderer", callback: Listener) -> None:
        self._renderer = renderer
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._renderer._remove_listener(self._callback)


class Renderer:
    """
    Owns every cache and CSS buffer for one style sheet.

    Instances are independent; nothing is shared between renderers.
    Configured enhancers are only applied by :func:`create_renderer`;
    constructing a Renderer directly leaves them unused.
    """

    def __init__(
        self,
        config: Optional[RendererConfig] = None,
        *,
        _enhancing: bool = False,
        **overrides: Any,
    ) -> None:
        if config is None:
            config = RendererConfig(**overrides)
        elif overrides:
            config = config.model_copy(update=overrides)
        self.config = config
        if config.enhancers and not _enhancing and type(self) is Renderer:
            log.warning(
                "Renderer built directly ignores %s enhancer(s); use create_renderer()",
                len(config.enhancers),
            )

        self.listeners: List[Listener] = []
        self.keyframe_prefixes: List[str] = list(config.keyframe_prefixes) + [""]
        self.plugins: List[Callable[..., Any]] = list(config.plugins)

        self.clear()

    def clear(self) -> None:
        """Reset all caches and buffers but keep the listeners."""

        self.font_faces = ""
        self.keyframes = ""
        self.statics = ""
        self.rules = ""
        self.media_rules: Dict[str, str] = {}
        self.rendered: Dict[str, bool] = {}
        self.base: Dict[int, Dict[str, Any]] = {}
        self.ids: List[Callable[..., Any]] = []
        # id(definition) -> index into self.ids; ids keeps the objects alive
        self._id_index: Dict[int, int] = {}

        self._emit_change()

    def render_rule(
        self, rule: StyleDefinition, props: Optional[Mapping[str, Any]] = None
    ) -> str:
        """
        Render a rule variant and return the class name(s) referencing it.

        Args:
            rule: Callable returning a style object for the given props
            props: Properties passed to the rule (defaults to empty)

        Returns:
            The base class name, or "<base> <variant>" when the variant
            produced CSS beyond the base style
        """
        _ensure_callable(rule, "rule")
        props = dict(props) if props else {}

        rule_id = self._register(rule)
        base_class_name = f"c{rule_id}"

        # The base style must exist before any variant can be diffed against it
        if props and base_class_name not in self.rendered:
            self.render_rule(rule, {})

        class_name = base_class_name + generate_props_reference(props)

        if class_name in self.rendered:
            log.debug("Rule cache hit: %s", class_name)
        else:
            resolved_style = self._resolve_style(rule, props)
            diffed_style = diff_style(resolved_style, self.base.get(rule_id))

            if diffed_style:
                style = process_style(
                    diffed_style,
                    RenderMeta(
                        type="rule",
                        class_name=class_name,
                        id=rule_id,
                        props=props,
                        rule=rule,
                    ),
                    self.plugins,
                )
                did_change = self._render_style(class_name, style)
                self.rendered[class_name] = did_change
                if did_change:
                    self._emit_change()
            else:
                log.debug("No style beyond base for %s", class_name)
                self.rendered[class_name] = False

            if class_name == base_class_name:
                self.base[rule_id] = resolved_style

        if not self.rendered[class_name]:
            return base_class_name
        if class_name == base_class_name:
            return class_name
        return f"{base_class_name} {class_name}"

    def render_keyframe(
        self, keyframe: StyleDefinition, props: Optional[Mapping[str, Any]] = None
    ) -> str:
        """Render a keyframe variant and return its animation name."""

        _ensure_callable(keyframe, "keyframe")
        props = dict(props) if props else {}

        keyframe_id = self._register(keyframe)
        animation_name = f"k{keyframe_id}" + generate_props_reference(props)

        if animation_name in self.rendered:
            log.debug("Keyframe cache hit: %s", animation_name)
            return animation_name

        processed_keyframe = process_style(
            self._resolve_style(keyframe, props),
            RenderMeta(
                type="keyframe",
                keyframe=keyframe,
                props=props,
                animation_name=animation_name,
                id=keyframe_id,
            ),
            self.plugins,
        )
        css = cssify_keyframe(processed_keyframe, animation_name, self.keyframe_prefixes)
        self.rendered[animation_name] = True
        self.keyframes += css
        self._emit_change()
        return animation_name

    def render_font(
        self,
        family: str,
        files: Union[str, Sequence[str]],
        properties: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Render a @font-face block and return the family name to reference it.

        Only font descriptors (fontVariant, fontWeight, fontStretch, fontStyle,
        unicodeRange) are taken from ``properties``; anything else is ignored.
        """
        if isinstance(files, str):
            files = [files]
        if not files:
            raise ValueError(f"Font '{family}' needs at least one source file")

        properties = properties or {}
        key = family + generate_props_reference(properties)
        if key in self.rendered:
            log.debug("Font cache hit: %s", key)
            return family

        font_face: Dict[str, Any] = {
            "fontFamily": f"'{family}'",
            "src": ",".join(
                f"url('{src}') format('{get_font_format(src)}')" for src in files
            ),
        }
        for prop, value in properties.items():
            if prop in FONT_PROPERTIES:
                font_face[prop] = value

        css = cssify_font_face(font_face)
        self.rendered[key] = True
        self.font_faces += css
        self._emit_change()
        return family

    def render_static(
        self, style: Union[str, Mapping[str, Any]], selector: Optional[str] = None
    ) -> None:
        """
        Render global CSS, either raw text or a style object for ``selector``.
        """
        if isinstance(style, str):
            reference = style
        elif isinstance(style, Mapping):
            if not selector:
                raise TypeError("Static style objects require a selector")
            reference = selector + sorted_stringify(style)
        else:
            raise TypeError(
                f"Static style must be CSS text or a mapping, got {type(style).__name__}"
            )

        if reference in self.rendered:
            log.debug("Static cache hit")
            return

        if isinstance(style, str):
            self.statics += _WHITESPACE_RUNS.sub("", style)
        else:
            processed_style = process_style(
                dict(style),
                RenderMeta(type="static", selector=selector),
                self.plugins,
            )
            self.statics += f"{selector}{{{cssify_object(processed_style)}}}"

        self.rendered[reference] = True
        self._emit_change()

    def render_to_string(self) -> str:
        """
        Concatenate all buffers into one CSS string.

        Media query rules are grouped per condition in first-seen order.
        """
        css = self.font_faces + self.statics + self.rules

        for media, rules in self.media_rules.items():
            css += f"@media {media}{{{rules}}}"

        return css + self.keyframes

    def subscribe(self, callback: Listener) -> Subscription:
        """Call ``callback`` with the full CSS whenever the output changes."""

        self.listeners.append(callback)
        return Subscription(self, callback)

    def _remove_listener(self, callback: Listener) -> None:
        for index, listener in enumerate(self.listeners):
            if listener is callback:
                del self.listeners[index]
                return
        log.warning("Tried to unsubscribe a listener that is not subscribed")

    def _register(self, definition: Callable[..., Any]) -> int:
        key = id(definition)
        index = self._id_index.get(key)
        if index is None:
            index = len(self.ids)
            self.ids.append(definition)
            self._id_index[key] = index
            log.debug("Registered style definition #%s", index)
        return index

    def _resolve_style(
        self, style: StyleDefinition, props: Dict[str, Any]
    ) -> Dict[str, Any]:
        return style(props)

    def _emit_change(self) -> None:
        css = self.render_to_string()
        # Iterate a snapshot so listeners may (un)subscribe while notified
        for listener in list(self.listeners):
            listener(css)

    def _render_style(
        self,
        class_name: str,
        style: Mapping[str, Any],
        pseudo: str = "",
        media: str = "",
    ) -> bool:
        """
        Flatten ``style`` into rule, media and pseudo-class CSS fragments.

        Returns True if any fragment was appended, including in nested blocks.
        """
        ruleset: Dict[str, Any] = {}
        emitted = False

        for prop, value in style.items():
            kind = classify_entry(prop, value)
            if kind is EntryKind.DECLARATION:
                ruleset[prop] = value
            elif kind is EntryKind.PSEUDO:
                emitted = self._render_style(class_name, value, pseudo + prop, media) or emitted
            elif kind is EntryKind.MEDIA:
                query = prop[len(MEDIA_MARKER):].strip()
                combined_media = f"{media} and {query}" if media else query
                emitted = self._render_style(class_name, value, pseudo, combined_media) or emitted
            else:
                log.debug("Dropping unrecognized block '%s' in .%s", prop, class_name)

        if not ruleset:
            return emitted

        css = f".{class_name}{pseudo}{{{cssify_object(ruleset)}}}"
        if media:
            self.media_rules[media] = self.media_rules.get(media, "") + css
        else:
            self.rules += css
        log.debug("Emitted %s", css)
        return True


def create_renderer(config: Optional[RendererConfig] = None, **overrides: Any) -> Renderer:
    """
    Build a renderer and apply the configured enhancers left to right.

    Each enhancer receives the current renderer and returns the renderer
    to use from then on (the same object or a replacement).
    """
    renderer = Renderer(config, _enhancing=True, **overrides)
    for enhancer in renderer.config.enhancers:
        enhanced = enhancer(renderer)
        if enhanced is None:
            raise TypeError(f"Enhancer {enhancer!r} did not return a renderer")
        renderer = enhanced
    return renderer
