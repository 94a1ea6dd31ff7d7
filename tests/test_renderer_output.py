"""
Tests for keyframes, fonts, statics, output assembly and clear().
"""

import pytest

from style_renderer.core.config import RendererConfig
from style_renderer.core.props_reference import generate_props_reference
from style_renderer.core.renderer import Renderer


def fade(props):
    return {"from": {"opacity": 0}, "to": {"opacity": props.get("to", 1)}}


class TestKeyframes:
    def test_keyframe_renders_all_prefixes(self):
        renderer = Renderer()

        assert renderer.render_keyframe(fade) == "k0"
        steps = "from{opacity:0}to{opacity:1}"
        assert renderer.keyframes == (
            f"@-webkit-keyframes k0{{{steps}}}"
            f"@-moz-keyframes k0{{{steps}}}"
            f"@keyframes k0{{{steps}}}"
        )

    def test_keyframe_variants_are_rendered_whole(self):
        renderer = Renderer(keyframe_prefixes=[])
        ref = generate_props_reference({"to": 0.5})

        renderer.render_keyframe(fade)
        assert renderer.render_keyframe(fade, {"to": 0.5}) == f"k0{ref}"
        assert renderer.keyframes == (
            "@keyframes k0{from{opacity:0}to{opacity:1}}"
            f"@keyframes k0{ref}{{from{{opacity:0}}to{{opacity:0.5}}}}"
        )

    def test_keyframe_is_cached(self):
        renderer = Renderer()
        renderer.render_keyframe(fade)
        css = renderer.keyframes

        assert renderer.render_keyframe(fade) == "k0"
        assert renderer.keyframes == css

    def test_keyframes_share_ids_with_rules(self):
        renderer = Renderer()
        renderer.render_rule(lambda props: {"color": "red"})

        assert renderer.render_keyframe(fade) == "k1"

    def test_configured_prefixes_keep_unprefixed_last(self):
        config = RendererConfig(keyframe_prefixes=["-webkit-"])
        renderer = Renderer(config)

        assert renderer.keyframe_prefixes == ["-webkit-", ""]
        assert config.keyframe_prefixes == ["-webkit-"]

    def test_non_callable_keyframe_raises(self):
        renderer = Renderer()
        with pytest.raises(TypeError):
            renderer.render_keyframe({"from": {"opacity": 0}})


class TestFonts:
    def test_font_face(self):
        renderer = Renderer()
        family = renderer.render_font(
            "Lato",
            ["fonts/Lato.woff2", "fonts/Lato.ttf"],
            {"fontWeight": 400, "color": "red"},
        )

        assert family == "Lato"
        assert renderer.font_faces == (
            "@font-face{font-family:'Lato';"
            "src:url('fonts/Lato.woff2') format('woff2'),"
            "url('fonts/Lato.ttf') format('truetype');"
            "font-weight:400}"
        )

    def test_font_is_cached_per_properties(self):
        renderer = Renderer()
        renderer.render_font("Lato", ["Lato.woff"])
        renderer.render_font("Lato", ["Lato.woff"])
        assert renderer.font_faces.count("@font-face") == 1

        renderer.render_font("Lato", ["Lato-Bold.woff"], {"fontWeight": "bold"})
        assert renderer.font_faces.count("@font-face") == 2

    def test_single_file_string(self):
        renderer = Renderer()
        renderer.render_font("Mono", "mono.otf")
        assert "url('mono.otf') format('opentype')" in renderer.font_faces

    def test_font_without_files_raises(self):
        renderer = Renderer()
        with pytest.raises(ValueError):
            renderer.render_font("Lato", [])

    def test_unknown_font_format_raises(self):
        renderer = Renderer()
        with pytest.raises(ValueError):
            renderer.render_font("Lato", ["Lato.txt"])
        assert renderer.font_faces == ""


class TestStatics:
    def test_static_text_whitespace_is_collapsed(self):
        renderer = Renderer()
        renderer.render_static("""
            body {
                margin: 0;
            }
        """)

        assert renderer.statics == "body {margin: 0;}"

    def test_static_object(self):
        renderer = Renderer()
        renderer.render_static({"margin": 0, "fontSize": "12px"}, "body")

        assert renderer.statics == "body{margin:0;font-size:12px}"

    def test_static_is_cached(self):
        renderer = Renderer()
        renderer.render_static({"margin": 0, "padding": 0}, "body")
        renderer.render_static({"padding": 0, "margin": 0}, "body")
        renderer.render_static("html{height:100%}")
        renderer.render_static("html{height:100%}")

        assert renderer.statics == "body{margin:0;padding:0}html{height:100%}"

    def test_static_object_without_selector_raises(self):
        renderer = Renderer()
        with pytest.raises(TypeError):
            renderer.render_static({"margin": 0})

    def test_static_of_wrong_type_raises(self):
        renderer = Renderer()
        with pytest.raises(TypeError):
            renderer.render_static(42, "body")


def test_output_order_is_independent_of_call_order():
    renderer = Renderer(keyframe_prefixes=[])

    renderer.render_keyframe(fade)
    renderer.render_rule(lambda props: {"@media print": {"color": "black"}})
    renderer.render_rule(lambda props: {"color": "red"})
    renderer.render_static("body{margin:0}")
    renderer.render_rule(lambda props: {"@media screen": {"color": "blue"}})
    renderer.render_font("Lato", ["Lato.woff"])
    renderer.render_rule(lambda props: {"@media print": {"color": "gray"}})

    assert renderer.render_to_string() == (
        "@font-face{font-family:'Lato';src:url('Lato.woff') format('woff')}"
        "body{margin:0}"
        ".c2{color:red}"
        "@media print{.c1{color:black}.c4{color:gray}}"
        "@media screen{.c3{color:blue}}"
        "@keyframes k0{from{opacity:0}to{opacity:1}}"
    )


def test_clear_resets_caches_but_keeps_listeners():
    renderer = Renderer()
    seen = []
    renderer.subscribe(seen.append)

    def rule(props):
        return {"color": "red"}

    renderer.render_rule(lambda props: {"margin": 0})
    renderer.render_rule(rule)
    assert renderer.render_rule(rule) == "c1"

    renderer.clear()
    assert seen[-1] == ""
    assert renderer.ids == []
    assert renderer.base == {}
    assert renderer.rendered == {}
    assert renderer.media_rules == {}
    assert renderer.render_to_string() == ""

    assert renderer.render_rule(rule) == "c0"
    assert renderer.render_to_string() == ".c0{color:red}"
    assert seen[-1] == ".c0{color:red}"
    assert len(renderer.listeners) == 1


def test_renderers_do_not_share_state():
    first = Renderer()
    second = Renderer()

    first.render_rule(lambda props: {"color": "red"})

    assert second.render_to_string() == ""
    assert second.ids == []
