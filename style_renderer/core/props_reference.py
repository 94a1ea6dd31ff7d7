"""
Props Reference

Stable, content-based tokens for property maps. Two maps with the same
items always produce the same token regardless of key order.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Mapping, Optional

__all__ = ["sorted_stringify", "generate_props_reference", "compute_hash"]

REFERENCE_LENGTH = 10


def compute_hash(data: str) -> str:
    """
    Compute SHA256 hash of a string.

    Args:
        data: String to hash

    Returns:
        Hex string of SHA256 hash
    """
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def _normalize(value: Any) -> Any:
    # Equal values must serialize equally: 1 == 1.0, and keys of mixed types
    # can't be sorted until they are strings
    if isinstance(value, Mapping):
        return {str(key): _normalize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def sorted_stringify(obj: Any) -> str:
    """
    Serialize ``obj`` deterministically (sorted keys, compact separators).

    Integral floats are written as ints and mapping keys as strings, so
    maps that compare equal stringify the same way.
    """
    return json.dumps(
        _normalize(obj),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def generate_props_reference(props: Optional[Mapping[str, Any]]) -> str:
    """
    Derive the short token appended to class and animation names.

    An empty map yields an empty token, which denotes the base variant.
    Non-empty maps yield ``-`` followed by a truncated content hash.
    """
    if not props:
        return ""
    return "-" + compute_hash(sorted_stringify(props))[:REFERENCE_LENGTH]
