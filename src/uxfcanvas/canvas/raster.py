# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Raster surfaces backed by Pillow images."""
from __future__ import annotations

__all__ = ["RasterTarget"]

import collections.abc as cabc
import math
import os
import typing as t

from PIL import Image, ImageChops, ImageDraw

from uxfcanvas import diagram
from uxfcanvas.metrics import FontStyle

from ._base import RenderTarget

TRANSPARENT = (0, 0, 0, 0)


class RasterTarget(RenderTarget):
    """A surface that draws into an RGBA :class:`PIL.Image.Image`.

    Every operation is painted onto a transparent overlay first, which
    is then masked with the current clip region and composited onto the
    image. That way alpha blending and clipping behave the same for all
    kinds of operations.
    """

    def __init__(self, width: float, height: float, **kw: t.Any) -> None:
        super().__init__(width, height, **kw)
        self.image = Image.new(
            "RGBA",
            (max(math.ceil(width), 1), max(math.ceil(height), 1)),
            TRANSPARENT,
        )
        self._clip: Image.Image | None = None

    def _save_extra(self) -> Image.Image | None:
        return self._clip

    def _restore_extra(self, extra: t.Any) -> None:
        self._clip = extra

    def _paint(
        self, paint: cabc.Callable[[ImageDraw.ImageDraw], None]
    ) -> None:
        overlay = Image.new("RGBA", self.image.size, TRANSPARENT)
        paint(ImageDraw.Draw(overlay))
        self._composite(overlay)

    def _composite(self, overlay: Image.Image) -> None:
        if self._clip is not None:
            alpha = ImageChops.multiply(overlay.getchannel("A"), self._clip)
            overlay.putalpha(alpha)
        self.image.alpha_composite(overlay)

    def _polygons(self) -> list[list[tuple[float, float]]]:
        return [
            [tuple(p) for p in sub.points]
            for sub in self.path
            if len(sub.points) >= 3
        ]

    def fill(self, color: diagram.RGB, alpha: float = 1.0) -> None:
        polygons = self._polygons()
        if not polygons:
            return
        rgba = color.with_alpha(alpha).torgba()

        def paint(draw: ImageDraw.ImageDraw) -> None:
            for polygon in polygons:
                draw.polygon(polygon, fill=rgba)

        self._paint(paint)

    def stroke(
        self, color: diagram.RGB, dash: cabc.Sequence[float] = ()
    ) -> None:
        segments: list[tuple[diagram.Vector2D, diagram.Vector2D]] = []
        for sub in self.path:
            points = list(sub.points)
            if sub.closed and points:
                points.append(points[0])
            segments += diagram.dash_segments(points, dash)
        if not segments:
            return
        rgba = color.torgba()

        def paint(draw: ImageDraw.ImageDraw) -> None:
            for start, end in segments:
                draw.line([tuple(start), tuple(end)], fill=rgba, width=1)

        self._paint(paint)

    def clip(self) -> None:
        mask = Image.new("L", self.image.size, 0)
        draw = ImageDraw.Draw(mask)
        for polygon in self._polygons():
            draw.polygon(polygon, fill=255)
        if self._clip is not None:
            mask = ImageChops.multiply(mask, self._clip)
        self._clip = mask

    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        font: FontStyle,
        color: diagram.RGB,
    ) -> None:
        if not text:
            return
        pos = self._offset + (x, y)
        pillow_font = self.metrics.font(font)

        def paint(draw: ImageDraw.ImageDraw) -> None:
            draw.text(tuple(pos), text, font=pillow_font, fill=color.torgba())

        self._paint(paint)

    def create_surface(self, width: int, height: int) -> RasterTarget:
        return type(self)(width, height, metrics=self.metrics)

    def draw_surface(self, surface: RenderTarget, x: int, y: int) -> None:
        assert isinstance(surface, RasterTarget)
        pos = self._offset + (x, y)
        overlay = Image.new("RGBA", self.image.size, TRANSPARENT)
        overlay.paste(surface.image, (round(pos.x), round(pos.y)))
        self._composite(overlay)

    def save(self, fp: str | os.PathLike | t.IO[bytes], **kw: t.Any) -> None:
        """Write the image, see :meth:`PIL.Image.Image.save`."""
        self.image.save(fp, **kw)
