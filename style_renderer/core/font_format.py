"""
Font format inference for ``@font-face`` sources.

Maps a font file path (or data URI) to the name used inside ``format(...)``.
"""

from __future__ import annotations

import posixpath
import re
from typing import Dict
from urllib.parse import urlsplit

__all__ = ["FONT_FORMATS", "get_font_format"]

FONT_FORMATS: Dict[str, str] = {
    ".woff": "woff",
    ".woff2": "woff2",
    ".eot": "embedded-opentype",
    ".ttf": "truetype",
    ".otf": "opentype",
    ".svg": "svg",
    ".svgz": "svg",
}

# data:<mime>;base64,... -> keyed on the mime subtype
DATA_URI_FORMATS: Dict[str, str] = {
    "woff": "woff",
    "font-woff": "woff",
    "x-font-woff": "woff",
    "woff2": "woff2",
    "font-woff2": "woff2",
    "ttf": "truetype",
    "x-font-ttf": "truetype",
    "font-ttf": "truetype",
    "truetype": "truetype",
    "x-font-truetype": "truetype",
    "otf": "opentype",
    "x-font-otf": "opentype",
    "font-otf": "opentype",
    "opentype": "opentype",
    "x-font-opentype": "opentype",
    "vnd.ms-fontobject": "embedded-opentype",
    "svg+xml": "svg",
}

_DATA_URI_PATTERN = re.compile(r"^data:[\w.+-]+/([\w.+-]+)[;,]", re.IGNORECASE)


def get_font_format(src: str) -> str:
    """
    Infer the CSS font format name for a font source.

    Query strings and fragments are ignored (``font.eot?#iefix``).

    Raises:
        ValueError: if the source has no recognised font extension or type
    """
    match = _DATA_URI_PATTERN.match(src)
    if match:
        subtype = match.group(1).lower()
        if subtype in DATA_URI_FORMATS:
            return DATA_URI_FORMATS[subtype]
        raise ValueError(f"Unsupported font data URI type: {subtype}")

    path = urlsplit(src).path
    _, ext = posixpath.splitext(path)
    fmt = FONT_FORMATS.get(ext.lower())
    if fmt is None:
        raise ValueError(f"Unable to detect font format for '{src}'")
    return fmt
