# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

import logging

import pytest
from lxml import etree

from uxfcanvas import canvas, diagram, renderers
from uxfcanvas.metrics import FontStyle
from uxfcanvas.renderers import TEXT_PADDING, ElementKind

from .conftest import make_element  # type: ignore

REGULAR = FontStyle()
BOLD = FontStyle(bold=True)
TRANSPARENT = (0, 0, 0, 0)
SVG = "{http://www.w3.org/2000/svg}"


def _render(target, render_config, element):
    renderers.renderers[element.kind](target, element, render_config)


def _texts(target):
    return [call.args for call in target.calls if call.name == "text"]


class TestRegistry:
    def test_every_element_kind_has_a_renderer(self):
        for kind in ElementKind:
            assert kind.value in renderers.renderers

    def test_unknown_kinds_fall_back_to_default(self, caplog):
        with caplog.at_level(logging.WARNING):
            renderer = renderers.renderers["UMLNote"]

        assert renderer is renderers.renderers["Default"]
        assert "Unknown element kind 'UMLNote'" in caplog.text

    def test_renderers_can_be_registered(self):
        registry = renderers.RendererRegistry()

        @registry(ElementKind.DEFAULT)
        def draw_nothing(target, element, config):
            del target, element, config

        @registry("UMLNote")
        def draw_note(target, element, config):
            del target, element, config

        assert registry["UMLNote"] is draw_note
        assert registry["UMLFrame"] is draw_nothing
        assert len(registry) == 2
        assert sorted(registry) == ["Default", "UMLNote"]


class TestShapes:
    def test_box_is_stroked_then_clipped(self, target, render_config):
        element = make_element("Default", "Hello")

        _render(target, render_config, element)

        assert target.names() == ["stroke", "clip", "text"]
        stroke = target.calls[0]
        assert stroke.args[1:] == ("#000000", ())

    def test_background_is_filled_half_transparent(
        self, target, render_config
    ):
        element = make_element("UMLClass", "Title\nbg=red")

        _render(target, render_config, element)

        assert target.names()[:3] == ["fill", "stroke", "clip"]
        assert target.calls[0].args[1:] == ("#FF0000", 0.5)

    def test_empty_shapes_are_not_filled(self, target, render_config):
        element = make_element("UMLClass", "bg=red", w=0)

        _render(target, render_config, element)

        assert "fill" not in target.names()

    def test_outline_uses_line_style_and_foreground(
        self, target, render_config
    ):
        element = make_element("UMLClass", "lt=.\nfg=blue")

        _render(target, render_config, element)

        assert target.calls[0].name == "stroke"
        assert target.calls[0].args[1:] == ("#0000FF", (6, 6))

    def test_use_case_is_an_ellipse(self, target, render_config):
        element = make_element("UMLUseCase", "", w=40, h=20)

        _render(target, render_config, element)

        ((points, closed),) = target.calls[0].args[0]
        assert closed
        assert len(points) > 4
        assert max(p[0] for p in points) == pytest.approx(40)
        assert max(p[1] for p in points) == pytest.approx(20)


class TestText:
    def test_text_is_padded(self, target, render_config):
        _render(target, render_config, make_element("Default", "Hi"))

        assert _texts(target) == [
            ("Hi", (TEXT_PADDING, TEXT_PADDING), REGULAR, "#000000")
        ]

    def test_text_uses_the_foreground_color(self, target, render_config):
        element = make_element("Default", "Hi\nfg=blue")

        _render(target, render_config, element)

        assert _texts(target)[0][-1] == "#0000FF"

    def test_default_elements_do_not_center_their_heading(
        self, target, render_config
    ):
        _render(target, render_config, make_element("Default", "Title"))

        assert _texts(target)[0][1][0] == TEXT_PADDING

    @pytest.mark.parametrize("kind", ["UMLClass", "UMLObject", "UMLGeneric"])
    def test_heading_is_centered_until_the_first_separator(
        self, target, render_config, kind
    ):
        element = make_element(kind, "Title\n--\nfield", w=100)
        width = target.measure_text("Title", REGULAR)
        height = target.text_height(REGULAR)

        _render(target, render_config, element)

        title, field = _texts(target)
        assert title[:2] == (
            "Title",
            (round(50 - width / 2, 3), TEXT_PADDING),
        )
        assert field[:2] == (
            "field",
            (TEXT_PADDING, round(height * 1.5 + TEXT_PADDING, 3)),
        )

    def test_separator_spans_the_full_width(self, target, render_config):
        element = make_element("UMLClass", "Title\n--", w=100)
        height = target.text_height(REGULAR)

        _render(target, render_config, element)

        separator = target.calls[-1]
        assert separator.name == "stroke"
        ((points, closed),) = separator.args[0]
        y = round(height * 1.5, 3)
        assert points == ((0, y), (100, y))
        assert not closed

    def test_styled_runs_are_drawn_one_after_another(
        self, target, render_config
    ):
        element = make_element("Default", "*bold* text")
        bold_width = target.measure_text("bold", BOLD)

        _render(target, render_config, element)

        assert _texts(target) == [
            ("bold", (TEXT_PADDING, TEXT_PADDING), BOLD, "#000000"),
            (
                " text",
                (round(TEXT_PADDING + bold_width, 3), TEXT_PADDING),
                REGULAR,
                "#000000",
            ),
        ]

    def test_underlined_runs_get_a_line(self, target, render_config):
        element = make_element("Default", "_under_")
        style = FontStyle()
        width = target.measure_text("under", style)
        height = target.text_height(style)

        _render(target, render_config, element)

        assert target.names() == ["stroke", "clip", "stroke", "text"]
        ((points, _),) = target.calls[2].args[0]
        y = round(TEXT_PADDING + height - 1, 3)
        assert points == (
            (TEXT_PADDING, y),
            (round(TEXT_PADDING + width, 3), y),
        )

    def test_use_case_text_is_centered_in_both_directions(
        self, target, render_config
    ):
        element = make_element("UMLUseCase", "A\nB", w=100, h=60)
        height = target.text_height(REGULAR)
        width_a = target.measure_text("A", REGULAR)

        _render(target, render_config, element)

        first, second = _texts(target)
        assert first[1] == (round(50 - width_a / 2, 3), round(30 - height, 3))
        assert second[1][1] == round(30, 3)

    def test_zoom_scales_the_font(self, target, render_config):
        config = render_config.from_zoom_level(20)

        renderers.renderers["Default"](
            target, make_element("Default", "Hi"), config
        )

        assert _texts(target)[0][2] == FontStyle(size=28)


class TestRelation:
    def test_line_and_hollow_arrowhead(self, target, render_config):
        element = make_element(
            "Relation", "lt=<<-", w=50, h=20, points="0;10;40;10"
        )

        _render(target, render_config, element)

        assert target.names() == ["stroke", "fill", "stroke"]
        line, head_fill, head_stroke = target.calls
        assert line.args[0] == ((((0, 10), (40, 10)), False),)
        assert line.args[2] == ()
        assert head_fill.args[1] == "#FFFFFF"
        assert head_stroke.args[1:] == ("#000000", ())

    def test_filled_arrowhead_uses_the_line_color(
        self, target, render_config
    ):
        element = make_element(
            "Relation", "lt=->>>\nfg=red", w=50, h=20, points="0;10;40;10"
        )

        _render(target, render_config, element)

        fills = [c for c in target.calls if c.name == "fill"]
        assert [c.args[1] for c in fills] == ["#FF0000"]

    def test_open_arrowhead_is_not_filled(self, target, render_config):
        element = make_element(
            "Relation", "lt=<.", w=50, h=20, points="0;10;40;10"
        )

        _render(target, render_config, element)

        assert target.names() == ["stroke", "stroke"]
        assert target.calls[0].args[2] == (6, 6)
        assert target.calls[1].args[2] == ()

    def test_label_is_drawn_above_the_middle(self, target, render_config):
        element = make_element(
            "Relation", "label\nsecond", w=100, h=40, points="0;20;100;20"
        )
        height = target.text_height(REGULAR)

        _render(target, render_config, element)

        first, second = _texts(target)
        top = 20 - height / 2
        assert first[:2] == (
            "label",
            (50 + TEXT_PADDING, round(top + TEXT_PADDING, 3)),
        )
        assert second[1][1] == round(top + height + TEXT_PADDING, 3)

    def test_relation_without_points_draws_nothing(
        self, target, render_config
    ):
        element = make_element("Relation", "label", points="")

        _render(target, render_config, element)

        assert target.calls == []


@pytest.mark.parametrize(
    ["points", "expected"],
    [
        ([], None),
        ([(10, 10)], (10, 5)),
        ([(0, 0), (40, 0)], (20, -5)),
        ([(0, 0), (40, 0), (40, 40)], (20, -5)),
        ([(0, 0), (40, 0), (40, 40), (80, 40)], (40, 15)),
    ],
)
def test_relation_label_anchor(points, expected):
    vectors = [diagram.Vector2D(*p) for p in points]

    assert renderers.relation_label_anchor(vectors, 10) == expected


class TestRasterOutput:
    @pytest.fixture
    def raster(self, text_metrics):
        return canvas.RasterTarget(120, 40, metrics=text_metrics)

    def test_background_is_half_transparent(self, raster, render_config):
        element = make_element("UMLClass", "bg=red", w=40, h=30)

        _render(raster, render_config, element)

        assert raster.image.getpixel((20, 15)) == (255, 0, 0, 128)
        assert raster.image.getpixel((60, 15)) == TRANSPARENT

    def test_outline_is_opaque(self, raster, render_config):
        element = make_element("UMLClass", "bg=red", w=40, h=30)

        _render(raster, render_config, element)

        column = [raster.image.getpixel((x, 15)) for x in (0, 1)]
        assert (0, 0, 0, 255) in column

    def test_text_is_clipped_to_the_outline(self, raster, render_config):
        element = make_element("Default", "W" * 20, w=20, h=20)

        _render(raster, render_config, element)

        assert raster.image.crop((0, 0, 21, 21)).getbbox() is not None
        assert raster.image.crop((22, 0, 120, 40)).getbbox() is None
        assert raster.image.crop((0, 22, 120, 40)).getbbox() is None

    @pytest.mark.parametrize(
        ["lt", "on", "off"],
        [
            pytest.param(".", [3, 15], [9, 21], id="long-dashes"),
            pytest.param("..", [1, 5], [3, 7], id="short-dashes"),
            pytest.param("-", [3, 9, 15], [], id="solid"),
        ],
    )
    def test_relation_dashes(self, raster, render_config, lt, on, off):
        element = make_element(
            "Relation", f"lt={lt}", w=100, h=20, points="0;10;100;10"
        )

        _render(raster, render_config, element)

        for x in on:
            assert raster.image.getpixel((x, 10)) == (0, 0, 0, 255), x
        for x in off:
            assert raster.image.getpixel((x, 10)) == TRANSPARENT, x


class TestSVGOutput:
    @staticmethod
    def parse(target):
        return etree.fromstring(target.to_string().encode("utf-8"))

    @pytest.fixture
    def svg(self, text_metrics):
        return canvas.SVGTarget(120, 40, metrics=text_metrics)

    def test_class_becomes_paths_and_text(self, svg, render_config):
        element = make_element("UMLClass", "Title\nbg=red", w=40, h=30)

        _render(svg, render_config, element)

        root = self.parse(svg)
        fill, outline = (
            i
            for i in root.iter(f"{SVG}path")
            if i.getparent().tag != f"{SVG}clipPath"
        )
        assert fill.get("fill") == "#FF0000"
        assert fill.get("fill-opacity") == "0.5"
        assert outline.get("stroke") == "#000000"
        (text,) = root.iter(f"{SVG}text")
        assert text.text == "Title"

    def test_text_is_inside_the_clip_group(self, svg, render_config):
        element = make_element("Default", "Body", w=40, h=30)

        _render(svg, render_config, element)

        root = self.parse(svg)
        (text,) = root.iter(f"{SVG}text")
        assert text.getparent().get("clip-path", "").startswith("url(#")

    @pytest.mark.parametrize(
        ["lt", "expected"], [(".", "6,6"), ("..", "2,2"), ("-", None)]
    )
    def test_relation_dashes(self, svg, render_config, lt, expected):
        element = make_element(
            "Relation", f"lt={lt}", w=100, h=20, points="0;10;100;10"
        )

        _render(svg, render_config, element)

        (line,) = self.parse(svg).iter(f"{SVG}path")
        assert line.get("d") == "M 0,10 L 100,10"
        assert line.get("stroke-dasharray") == expected
