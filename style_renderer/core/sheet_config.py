from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class FontModel(BaseModel):
    family: str
    files: List[str] = Field(..., min_length=1)
    # Only font descriptors (fontWeight, fontStyle, ...) end up in the output
    properties: Dict[str, Any] = Field(default_factory=dict)


class StaticModel(BaseModel):
    # Either raw CSS text, or a style object plus its selector
    css: Optional[str] = None
    selector: Optional[str] = None
    style: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def check_form(self) -> "StaticModel":
        if self.css is not None:
            if self.style is not None:
                raise ValueError("static entry takes either 'css' or 'style', not both")
        elif self.style is None or not self.selector:
            raise ValueError("static entry needs 'css' or both 'selector' and 'style'")
        return self


class SheetConfigModel(BaseModel):
    schema_version: int = Field(1, ge=1)
    name: str
    description: Optional[str] = None

    fonts: List[FontModel] = Field(default_factory=list)
    statics: List[StaticModel] = Field(default_factory=list)
    # {rule_name: style object}
    rules: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    # {keyframe_name: {step: declarations}}
    keyframes: Dict[str, Dict[str, Dict[str, Any]]] = Field(default_factory=dict)


def load_sheet(path: Path) -> SheetConfigModel:
    """Read and validate a JSON sheet; raises ValidationError on bad entries."""

    with path.open(encoding="utf-8") as fh:
        return SheetConfigModel.model_validate(json.load(fh))
