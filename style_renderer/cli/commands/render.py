from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ...core.cache import load_or_render_sheet
from ...core.config import DEFAULT_KEYFRAME_PREFIXES, RendererConfig
from ...core.logger import get_logger
from ...core.process_style import (
    friendly_pseudo_class_plugin,
    remove_undefined_plugin,
    unit_plugin,
)
from ...core.renderer import create_renderer
from ...core.sheet import SheetResult, render_sheet
from ...core.sheet_config import SheetConfigModel, load_sheet

log = get_logger(__name__)


def build_config(prefixes: Optional[List[str]], units: bool) -> RendererConfig:
    plugins = [remove_undefined_plugin(), friendly_pseudo_class_plugin()]
    if units:
        plugins.append(unit_plugin("px"))
    return RendererConfig(
        keyframe_prefixes=list(DEFAULT_KEYFRAME_PREFIXES if prefixes is None else prefixes),
        plugins=plugins,
    )


def run(args) -> None:
    sheet_path = Path(args.sheet)
    options: Dict[str, Any] = {"prefixes": args.prefix, "units": args.units}

    def render(model: SheetConfigModel) -> SheetResult:
        renderer = create_renderer(build_config(args.prefix, args.units))
        return render_sheet(model, renderer)

    try:
        if args.no_cache:
            result = render(load_sheet(sheet_path))
        else:
            result = load_or_render_sheet(sheet_path, options, render)
    except FileNotFoundError:
        log.error(f"Sheet not found: {sheet_path}")
        sys.exit(2)
    except (json.JSONDecodeError, ValidationError) as e:
        log.error(f"Invalid sheet {sheet_path}: {e}")
        sys.exit(2)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(result.css, encoding="utf-8")
        log.info(f"Wrote {len(result.css)} characters of CSS to {out_path}")
    else:
        sys.stdout.write(result.css + "\n")

    if args.class_map:
        map_path = Path(args.class_map)
        map_path.parent.mkdir(parents=True, exist_ok=True)
        map_path.write_text(
            json.dumps(
                {
                    "class_names": result.class_names,
                    "animation_names": result.animation_names,
                },
                indent=2,
            ),
            encoding="utf-8",
        )
        log.info(f"Wrote name map to {map_path}")
