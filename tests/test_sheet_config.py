"""
Test sheet models and rendering a sheet.
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from style_renderer.core.renderer import create_renderer
from style_renderer.core.sheet import SheetResult, render_sheet, static_definition
from style_renderer.core.sheet_config import SheetConfigModel, StaticModel, load_sheet

SHEET = {
    "schema_version": 1,
    "name": "Demo",
    "fonts": [{"family": "Lato", "files": ["Lato.woff2"], "properties": {"fontWeight": 700}}],
    "statics": [{"css": "html{height:100%}"}, {"selector": "body", "style": {"margin": 0}}],
    "rules": {
        "button": {"color": "red", ":hover": {"color": "blue"}},
        "title": {"@media print": {"display": "none"}},
    },
    "keyframes": {"fade": {"from": {"opacity": 0}, "to": {"opacity": 1}}},
}


def test_sheet_model_defaults():
    model = SheetConfigModel(name="Empty")
    assert model.schema_version == 1
    assert model.fonts == []
    assert model.rules == {}


def test_static_model_requires_css_or_style():
    with pytest.raises(ValidationError):
        StaticModel()
    with pytest.raises(ValidationError):
        StaticModel(style={"margin": 0})
    with pytest.raises(ValidationError):
        StaticModel(css="a{}", selector="a", style={"color": "red"})
    assert StaticModel(selector="a", style={"color": "red"}).css is None


def test_font_model_requires_files():
    with pytest.raises(ValidationError):
        SheetConfigModel.model_validate(
            {"name": "X", "fonts": [{"family": "Lato", "files": []}]}
        )


def test_load_sheet(tmp_path: Path):
    path = tmp_path / "sheet.json"
    path.write_text(json.dumps(SHEET), encoding="utf-8")

    model = load_sheet(path)
    assert model.name == "Demo"
    assert list(model.rules) == ["button", "title"]


def test_render_sheet():
    model = SheetConfigModel.model_validate(SHEET)
    result = render_sheet(model, create_renderer(keyframe_prefixes=[]))

    assert result.class_names == {"button": "c0", "title": "c1"}
    assert result.animation_names == {"fade": "k2"}
    assert result.css == (
        "@font-face{font-family:'Lato';src:url('Lato.woff2') format('woff2');font-weight:700}"
        "html{height:100%}body{margin:0}"
        ".c0:hover{color:blue}.c0{color:red}"
        "@media print{.c1{display:none}}"
        "@keyframes k2{from{opacity:0}to{opacity:1}}"
    )


def test_static_definition_returns_copies():
    style = {":hover": {"color": "blue"}}
    definition = static_definition(style)

    resolved = definition({"ignored": True})
    resolved[":hover"]["color"] = "red"

    assert definition({}) == {":hover": {"color": "blue"}}


def test_sheet_result_round_trips_through_dict():
    result = SheetResult(css=".c0{color:red}", class_names={"a": "c0"})
    assert SheetResult.from_dict(result.to_dict()) == result


def test_cache_dir_respects_environment(tmp_path: Path, monkeypatch):
    from style_renderer.core.cache import cache_dir

    monkeypatch.delenv("STYLE_RENDERER_CACHE_DIR", raising=False)
    assert cache_dir(tmp_path) == tmp_path / ".cache" / "style_renderer"

    monkeypatch.setenv("STYLE_RENDERER_CACHE_DIR", str(tmp_path / "shared"))
    assert cache_dir(tmp_path) == tmp_path / "shared"
