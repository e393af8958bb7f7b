# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Drawing routines for the different kinds of diagram elements.

Every renderer draws one :class:`~uxfcanvas.diagram.DiagramElement`
onto a :class:`~uxfcanvas.canvas.RenderTarget`. The element's bounds
are expected to be local, i.e. positioned at ``(0, 0)``, see
:class:`~uxfcanvas.compositor.Compositor`.

Additional element kinds can be supported by registering a function
with :data:`renderers`::

    @renderers("UMLNote")
    def draw_note(target, element, config):
        ...
"""
from __future__ import annotations

__all__ = [
    "TEXT_PADDING",
    "ElementKind",
    "Renderer",
    "RendererRegistry",
    "draw_text_line",
    "relation_label_anchor",
    "renderers",
]

import collections.abc as cabc
import enum
import logging
import re

from uxfcanvas import diagram
from uxfcanvas.canvas import RenderTarget
from uxfcanvas.config import RenderConfig
from uxfcanvas.metrics import FontStyle

LOGGER = logging.getLogger(__name__)

TEXT_PADDING = 2
"""Space between the element border and its text, in pixels."""
SHAPE_FILL_ALPHA = 0.5
RE_SEPARATOR = re.compile(r"^(-|--)$")

Renderer = cabc.Callable[
    [RenderTarget, diagram.DiagramElement, RenderConfig], None
]


class ElementKind(enum.Enum):
    """The element kinds that have a built-in renderer."""

    DEFAULT = "Default"
    OBJECT = "UMLObject"
    CLASS = "UMLClass"
    GENERIC = "UMLGeneric"
    USECASE = "UMLUseCase"
    RELATION = "Relation"


class RendererRegistry(cabc.Mapping[str, Renderer]):
    """Maps element kinds to their renderers.

    Looking up a kind without a renderer logs a warning and returns the
    renderer of :attr:`ElementKind.DEFAULT`.
    """

    def __init__(self) -> None:
        self.__renderers: dict[str, Renderer] = {}

    def __call__(
        self, kind: str | ElementKind
    ) -> cabc.Callable[[Renderer], Renderer]:
        name = kind.value if isinstance(kind, ElementKind) else kind

        def decorator(func: Renderer) -> Renderer:
            self.__renderers[name] = func
            return func

        return decorator

    def __iter__(self) -> cabc.Iterator[str]:
        yield from self.__renderers

    def __len__(self) -> int:
        return len(self.__renderers)

    def __contains__(self, o: object) -> bool:
        return o in self.__renderers

    def __getitem__(self, k: str) -> Renderer:
        try:
            return self.__renderers[k]
        except KeyError:
            pass

        LOGGER.warning(
            "Unknown element kind %r, drawing it as %s",
            k,
            ElementKind.DEFAULT.value,
        )
        return self.__renderers[ElementKind.DEFAULT.value]


renderers = RendererRegistry()


def _font(config: RenderConfig, style: diagram.TextStyle) -> FontStyle:
    return FontStyle(
        family=config.font_family,
        size=config.effective_font_size,
        bold=style.bold,
        italic=style.italic,
    )


def _default_font(config: RenderConfig) -> FontStyle:
    return _font(config, diagram.TextStyle())


def _line_color(element: diagram.DiagramElement) -> diagram.RGB:
    color = diagram.resolve_color(element.get("fg"), diagram.BLACK)
    assert color is not None
    return color


def _fill_shape(
    target: RenderTarget, element: diagram.DiagramElement
) -> None:
    background = diagram.resolve_color(element.get("bg"), None)
    if background is None:
        return
    if element.bounds.is_empty:
        LOGGER.debug("Not filling %s with zero area", element.kind)
        return
    target.fill(background, alpha=SHAPE_FILL_ALPHA)


def _stroke_shape(
    target: RenderTarget, element: diagram.DiagramElement
) -> None:
    dash = diagram.decode_line_style(element.get("lt")).dash
    target.stroke(_line_color(element), dash.pattern)


def draw_box(target: RenderTarget, element: diagram.DiagramElement) -> None:
    """Draw the element's rectangle and clip to it."""
    b = element.bounds
    target.begin_path()
    target.rect(b.x, b.y, b.w, b.h)
    _fill_shape(target, element)
    _stroke_shape(target, element)
    target.clip()


def draw_ellipse(
    target: RenderTarget, element: diagram.DiagramElement
) -> None:
    """Draw the ellipse inscribed in the element and clip to it."""
    b = element.bounds
    target.begin_path()
    target.ellipse(b.x, b.y, b.w, b.h)
    _fill_shape(target, element)
    _stroke_shape(target, element)
    target.clip()


def draw_separator(
    target: RenderTarget, x: float, y: float, w: float, color: diagram.RGB
) -> None:
    target.begin_path()
    target.move_to(x, y)
    target.line_to(x + w, y)
    target.stroke(color)


def draw_lines(
    target: RenderTarget,
    geometry: diagram.RelationGeometry,
    color: diagram.RGB,
) -> None:
    """Draw a polyline and its arrowheads."""
    if len(geometry.points) < 2:
        LOGGER.debug(
            "Not drawing a line with %d points", len(geometry.points)
        )
        return

    target.begin_path()
    target.polyline(geometry.points)
    target.stroke(color, geometry.dash.pattern)

    for head in geometry.heads:
        target.begin_path()
        target.polyline(head.points, closed=head.closed)
        if head.fill is diagram.HeadFill.INVERSE:
            target.fill(diagram.WHITE)
        elif head.fill is diagram.HeadFill.FOREGROUND:
            target.fill(color)
        target.stroke(color)


def render_runs(
    target: RenderTarget,
    nodes: cabc.Sequence[diagram.FormattedTextNode],
    x: float,
    y: float,
    config: RenderConfig,
    color: diagram.RGB,
) -> tuple[float, float]:
    """Draw styled runs from left to right.

    Returns
    -------
    width
        The combined width of all runs.
    height
        The line height of the last run's style.
    """
    width = 0.0
    height = target.text_height(_default_font(config))
    for node in nodes:
        for leaf in node.drawable_leaves():
            font = _font(config, leaf.style)
            run_width = target.measure_text(leaf.literal, font)
            height = target.text_height(font)
            if leaf.style.underline:
                target.begin_path()
                target.move_to(x + width, y + height - 1)
                target.line_to(x + width + run_width, y + height - 1)
                target.stroke(color)
            target.fill_text(leaf.literal, x + width, y, font, color)
            width += run_width
    return width, height


def draw_text_line(
    target: RenderTarget,
    line: str,
    config: RenderConfig,
    *,
    x: float,
    y: float,
    w: float,
    color: diagram.RGB,
    center: bool = False,
    vcenter: bool = False,
) -> float:
    """Draw a single line of text and return the height it takes up.

    Separator lines (``-`` or ``--``) are drawn as a horizontal line
    over the full width ``w``, and take up half a line. All other lines
    are parsed for inline markup, and are either centered in ``w`` or
    indented by :data:`TEXT_PADDING`. Lines that are not vertically
    centered are moved down by the padding as well.
    """
    if RE_SEPARATOR.match(line):
        draw_separator(target, x, y, w, color)
        return target.text_height(_default_font(config)) / 2

    nodes = diagram.parse_formatted_text(line)
    if not vcenter:
        y += TEXT_PADDING
    if center:
        text_width = sum(
            target.measure_text(leaf.literal, _font(config, leaf.style))
            for node in nodes
            for leaf in node.drawable_leaves()
        )
        x += w / 2 - text_width / 2
    else:
        x += TEXT_PADDING
    _, height = render_runs(target, nodes, x, y, config, color)
    return height


def _draw_compartments(
    target: RenderTarget,
    element: diagram.DiagramElement,
    config: RenderConfig,
    *,
    center_heading: bool,
) -> None:
    b = element.bounds
    color = _line_color(element)
    half_line = target.text_height(_default_font(config)) / 2
    heading = center_heading
    y: float = b.y
    for line in element.lines:
        if RE_SEPARATOR.match(line):
            y += half_line
            draw_separator(target, b.x, y, b.w, color)
            heading = False
        else:
            y += draw_text_line(
                target,
                line,
                config,
                x=b.x,
                y=y,
                w=b.w,
                color=color,
                center=heading,
            )


@renderers(ElementKind.DEFAULT)
def draw_default(
    target: RenderTarget,
    element: diagram.DiagramElement,
    config: RenderConfig,
) -> None:
    """Draw a rectangle with left aligned text."""
    draw_box(target, element)
    _draw_compartments(target, element, config, center_heading=False)


@renderers(ElementKind.OBJECT)
@renderers(ElementKind.CLASS)
@renderers(ElementKind.GENERIC)
def draw_classifier(
    target: RenderTarget,
    element: diagram.DiagramElement,
    config: RenderConfig,
) -> None:
    """Draw a rectangle with a centered heading.

    Everything up to the first separator line is the heading, all
    following lines are left aligned.
    """
    draw_box(target, element)
    _draw_compartments(target, element, config, center_heading=True)


@renderers(ElementKind.USECASE)
def draw_use_case(
    target: RenderTarget,
    element: diagram.DiagramElement,
    config: RenderConfig,
) -> None:
    """Draw an ellipse with all text centered in it."""
    draw_ellipse(target, element)
    b = element.bounds
    color = _line_color(element)
    line_height = target.text_height(_default_font(config))
    y = b.y + b.h / 2 - len(element.lines) * line_height / 2
    for line in element.lines:
        if RE_SEPARATOR.match(line):
            y += line_height / 2
            draw_separator(target, b.x, y, b.w, color)
        else:
            y += draw_text_line(
                target,
                line,
                config,
                x=b.x,
                y=y,
                w=b.w,
                color=color,
                center=True,
                vcenter=True,
            )


def relation_label_anchor(
    points: cabc.Sequence[diagram.Vector2D], line_height: float
) -> diagram.Vector2D | None:
    """Find where the text of a relation starts.

    The text is placed between the two points around the middle of the
    point list, moved up by half a line.
    """
    if not points:
        return None
    if len(points) == 1:
        anchor = points[0]
    else:
        center = len(points) // 2 - 1
        anchor = points[center].midpoint(points[center + 1])
    return anchor - (0, line_height / 2)


@renderers(ElementKind.RELATION)
def draw_relation(
    target: RenderTarget,
    element: diagram.DiagramElement,
    config: RenderConfig,
) -> None:
    """Draw a line with arrowheads and its text.

    Relation points are relative to the element, so they are used as
    they are.
    """
    b = element.bounds
    spec = diagram.decode_line_spec(element.get("lt"), element.point_list_raw)
    geometry = diagram.build_relation_geometry(spec, zoom=config.zoom)
    color = _line_color(element)
    draw_lines(target, geometry, color)

    line_height = target.text_height(_default_font(config))
    anchor = relation_label_anchor(geometry.points, line_height)
    if anchor is None:
        if element.lines:
            LOGGER.debug("Not drawing text of a relation without points")
        return
    y = anchor.y
    for line in element.lines:
        draw_text_line(
            target, line, config, x=anchor.x, y=y, w=b.w, color=color
        )
        y += line_height


_missing = {i.value for i in ElementKind} - set(renderers)
assert not _missing, f"No renderer for element kinds: {_missing}"
del _missing
