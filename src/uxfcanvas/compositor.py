# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Composition of all elements of a diagram onto one surface."""
from __future__ import annotations

__all__ = ["Compositor", "RenderResult"]

import collections.abc as cabc
import dataclasses
import logging

import uxfcanvas.config
from uxfcanvas import canvas, diagram, renderers
from uxfcanvas.config import RenderConfig
from uxfcanvas.metrics import TextMetrics

LOGGER = logging.getLogger(__name__)

STROKE_OFFSET = 0.5
"""Offset applied to every element surface to align 1px strokes."""
DEBUG_COLOR = diagram.RGB(255, 0, 0)


@dataclasses.dataclass(frozen=True)
class RenderResult:
    """The outcome of one render pass.

    Attributes
    ----------
    target
        The populated surface.
    size
        The size the surface was grown to.
    elements
        The elements in the order they were drawn.
    """

    target: canvas.RenderTarget
    size: diagram.Vector2D
    elements: tuple[diagram.DiagramElement, ...]


class Compositor:
    """Draws diagrams element by element.

    Every element is rendered onto its own scratch surface, with its
    top left corner at the local origin, and then composited onto the
    diagram surface at its absolute position. Clip regions and
    transparency therefore never leak into neighboring elements.

    The surface size is kept between passes and only ever grows, so
    that a diagram keeps its size when elements are removed.

    Parameters
    ----------
    backend
        The surface class to render onto, or the name of an output
        format as understood by :func:`~uxfcanvas.canvas.get_backend`.
    config
        Font and zoom settings passed to every renderer.
    metrics
        The text metrics service. Passing the same instance to several
        compositors shares its cache.
    registry
        The renderers to use for the different element kinds.
    """

    def __init__(
        self,
        backend: type[canvas.RenderTarget] | str = canvas.RasterTarget,
        config: RenderConfig | None = None,
        *,
        metrics: TextMetrics | None = None,
        registry: renderers.RendererRegistry = renderers.renderers,
    ) -> None:
        if isinstance(backend, str):
            backend = canvas.get_backend(backend)
        self.backend = backend
        self.config = config if config is not None else RenderConfig()
        self.metrics = metrics if metrics is not None else TextMetrics()
        self.registry = registry
        self.size = diagram.Vector2D(0, 0)

    @staticmethod
    def layout(
        records: cabc.Iterable[diagram.ElementRecord],
    ) -> list[diagram.DiagramElement]:
        """Build the elements and sort them into drawing order.

        Elements are sorted by ascending layer. Elements on the same
        layer keep their document order.
        """
        elements = [diagram.build_element(i) for i in records]
        return sorted(elements, key=lambda e: e.layer)

    def grow(
        self, elements: cabc.Iterable[diagram.DiagramElement]
    ) -> diagram.Vector2D:
        """Grow the surface size to fit all ``elements``."""
        extent = diagram.bounding_extent(e.bounds.extent for e in elements)
        self.size = diagram.Vector2D(
            max(self.size.x, int(extent.x) + 1),
            max(self.size.y, int(extent.y) + 1),
        )
        return self.size

    def render(
        self, records: cabc.Iterable[diagram.ElementRecord]
    ) -> RenderResult:
        """Run one render pass over ``records``."""
        elements = self.layout(records)
        size = self.grow(elements)
        target = self.backend(size.x, size.y, metrics=self.metrics)
        for element in elements:
            self.render_element(target, element)
        LOGGER.debug(
            "Rendered %d elements onto a %dx%d surface",
            len(elements),
            size.x,
            size.y,
        )
        return RenderResult(target, size, tuple(elements))

    def render_element(
        self, target: canvas.RenderTarget, element: diagram.DiagramElement
    ) -> None:
        """Render a single element and composite it onto ``target``."""
        bounds = element.bounds
        surface = target.create_surface(bounds.w + 1, bounds.h + 1)
        surface.translate(STROKE_OFFSET, STROKE_OFFSET)
        renderer = self.registry[element.kind]
        try:
            with surface.saved():
                renderer(surface, element.localized(), self.config)
        except Exception:
            LOGGER.exception(
                "Cannot render %s element at %s", element.kind, bounds.pos
            )

        if uxfcanvas.config.DEBUG:
            surface.begin_path()
            surface.rect(0, 0, bounds.w, bounds.h)
            surface.stroke(DEBUG_COLOR)

        target.draw_surface(surface, bounds.x, bounds.y)
