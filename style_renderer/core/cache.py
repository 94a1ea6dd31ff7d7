from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict

from .logger import get_logger
from .props_reference import compute_hash, sorted_stringify
from .sheet import SheetResult
from .sheet_config import SheetConfigModel, load_sheet

log = get_logger(__name__)

CACHE_VERSION = 1


def _hash_sheet(sheet_path: Path, options: Dict[str, Any]) -> str:
    raw = sheet_path.read_text(encoding="utf-8")
    return compute_hash(raw + sorted_stringify({"version": CACHE_VERSION, **options}))


def cache_dir(root: Path) -> Path:
    """Where compiled CSS for sheets under ``root`` is stored.

    STYLE_RENDERER_CACHE_DIR wins when set, so CI can share one output cache
    across checkouts.
    """
    override = os.environ.get("STYLE_RENDERER_CACHE_DIR")
    if not override:
        return root / ".cache" / "style_renderer"

    log.debug("Compiled sheet cache redirected to %s", override)
    return Path(override)


def load_or_render_sheet(
    sheet_path: Path,
    options: Dict[str, Any],
    render: Callable[[SheetConfigModel], SheetResult],
) -> SheetResult:
    """
    Return the compiled sheet, rendering and caching it if the sheet or the
    render options changed since the last run.
    """
    h = _hash_sheet(sheet_path, options)
    cdir = cache_dir(root=sheet_path.parent) / sheet_path.stem
    target = cdir / f"{h}.json"

    if target.exists():
        log.info(f"Using cached output: {target.name}")
        data = json.loads(target.read_text(encoding="utf-8"))
        return SheetResult.from_dict(data)

    log.info("Rendering and caching sheet...")
    model = load_sheet(sheet_path)
    result = render(model)
    cdir.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
    return result
