# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""SVG surfaces built with svgwrite."""
from __future__ import annotations

__all__ = ["SVGTarget"]

import collections.abc as cabc
import itertools
import os
import typing as t

from svgwrite import container, drawing

from uxfcanvas import diagram
from uxfcanvas.metrics import FontStyle

from ._base import RenderTarget, Subpath


def _fmt(value: float) -> str:
    return f"{round(value, 3):g}"


def path_data(path: cabc.Iterable[Subpath]) -> str:
    """Convert subpaths into the value of an SVG ``d`` attribute."""
    commands: list[str] = []
    for sub in path:
        if sub.ellipse is not None:
            (cx, cy), (rx, ry) = sub.ellipse
            arc = f"A {_fmt(rx)},{_fmt(ry)} 0 1,0"
            commands.append(
                f"M {_fmt(cx - rx)},{_fmt(cy)}"
                f" {arc} {_fmt(cx + rx)},{_fmt(cy)}"
                f" {arc} {_fmt(cx - rx)},{_fmt(cy)} Z"
            )
            continue
        if not sub.points:
            continue
        first, *rest = sub.points
        cmd = [f"M {_fmt(first.x)},{_fmt(first.y)}"]
        cmd += [f"L {_fmt(p.x)},{_fmt(p.y)}" for p in rest]
        if sub.closed:
            cmd.append("Z")
        commands.append(" ".join(cmd))
    return " ".join(commands)


class SVGTarget(RenderTarget):
    """A surface that builds an SVG document.

    Off-screen surfaces share the document of the surface that created
    them and collect their content in a detached group, which is
    attached when the surface is drawn.
    """

    def __init__(
        self,
        width: float,
        height: float,
        *,
        parent: SVGTarget | None = None,
        **kw: t.Any,
    ) -> None:
        super().__init__(width, height, **kw)
        if parent is None:
            self.drawing = drawing.Drawing(
                size=(_fmt(width), _fmt(height)),
                viewBox=f"0 0 {_fmt(width)} {_fmt(height)}",
            )
            self._ids: t.Iterator[int] = itertools.count()
            self.root: drawing.Drawing | container.Group = self.drawing
        else:
            self.drawing = parent.drawing
            self._ids = parent._ids
            self.root = self.drawing.g()
        self._container = self.root

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids)}"

    def _save_extra(self) -> t.Any:
        return self._container

    def _restore_extra(self, extra: t.Any) -> None:
        self._container = extra

    def fill(self, color: diagram.RGB, alpha: float = 1.0) -> None:
        d = path_data(self.path)
        if not d:
            return
        self._container.add(
            self.drawing.path(
                d=d,
                fill=f"#{color._replace(a=1.0).tohex()}",
                fill_opacity=_fmt(color.a * alpha),
                stroke="none",
            )
        )

    def stroke(
        self, color: diagram.RGB, dash: cabc.Sequence[float] = ()
    ) -> None:
        d = path_data(self.path)
        if not d:
            return
        params: dict[str, t.Any] = {
            "d": d,
            "fill": "none",
            "stroke": f"#{color._replace(a=1.0).tohex()}",
            "stroke_width": 1,
        }
        if color.a < 1.0:
            params["stroke_opacity"] = _fmt(color.a)
        if dash:
            params["stroke_dasharray"] = ",".join(map(_fmt, dash))
        self._container.add(self.drawing.path(**params))

    def clip(self) -> None:
        clip_id = self._next_id("clip")
        clip_path = self.drawing.defs.add(self.drawing.clipPath(id=clip_id))
        clip_path.add(self.drawing.path(d=path_data(self.path) or "M 0,0"))
        group = self.drawing.g(clip_path=f"url(#{clip_id})")
        self._container.add(group)
        self._container = group

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
        self._container.add(
            self.drawing.text(
                text,
                insert=(_fmt(pos.x), _fmt(pos.y)),
                font_family=font.family,
                font_size=_fmt(font.size),
                font_weight=font.css_weight,
                font_style=font.css_style,
                fill=f"#{color._replace(a=1.0).tohex()}",
                dominant_baseline="text-before-edge",
                **{"xml:space": "preserve"},
            )
        )

    def create_surface(self, width: int, height: int) -> SVGTarget:
        return type(self)(width, height, parent=self, metrics=self.metrics)

    def draw_surface(self, surface: RenderTarget, x: int, y: int) -> None:
        assert isinstance(surface, SVGTarget)
        assert surface.drawing is self.drawing
        pos = self._offset + (x, y)
        clip_id = self._next_id("surface")
        clip_path = self.drawing.defs.add(self.drawing.clipPath(id=clip_id))
        clip_path.add(
            self.drawing.rect(insert=(0, 0), size=tuple(surface.size))
        )
        group = surface.root
        group["transform"] = f"translate({_fmt(pos.x)},{_fmt(pos.y)})"
        group["clip-path"] = f"url(#{clip_id})"
        self._container.add(group)

    def to_string(self) -> str:
        """Return a string representation of the SVG."""
        return self.drawing.tostring()

    def save(self, filename: str | os.PathLike, **kw: t.Any) -> None:
        """Write the SVG to a file."""
        self.drawing.saveas(os.fspath(filename), **kw)
