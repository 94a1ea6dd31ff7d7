from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

__all__ = ["diff_style"]


def diff_style(
    style: Mapping[str, Any], base: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """
    Return the entries of ``style`` that are new or changed relative to ``base``.

    Nested blocks (pseudo classes, media queries) are diffed recursively and
    kept only if something inside them differs. Entries that exist only in
    ``base`` are not reported.
    """
    if base is None:
        base = {}

    diff: Dict[str, Any] = {}
    for prop, value in style.items():
        if isinstance(value, Mapping):
            base_value = base.get(prop)
            nested = diff_style(
                value, base_value if isinstance(base_value, Mapping) else None
            )
            if nested:
                diff[prop] = nested
        elif prop not in base or base[prop] != value:
            diff[prop] = value
    return diff
