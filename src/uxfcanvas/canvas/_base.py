# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""The abstract drawing surface that element renderers draw on."""
from __future__ import annotations

__all__ = ["RenderTarget", "Subpath", "ellipse_points"]

import abc
import collections.abc as cabc
import contextlib
import dataclasses
import math
import typing as t

from uxfcanvas import diagram
from uxfcanvas.metrics import FontStyle, TextMetrics

ELLIPSE_SEGMENTS = 64
"""Number of corners used when an ellipse is approximated by a polygon."""


@dataclasses.dataclass(frozen=True)
class Subpath:
    """One connected piece of a path, in surface coordinates.

    Ellipses keep their center and radii, so that backends with native
    support can draw them exactly; ``points`` then holds the polygon
    approximation.
    """

    points: tuple[diagram.Vector2D, ...]
    closed: bool = False
    ellipse: tuple[diagram.Vector2D, diagram.Vector2D] | None = None


def ellipse_points(
    center: diagram.Vec2ish,
    radii: diagram.Vec2ish,
    segments: int = ELLIPSE_SEGMENTS,
) -> tuple[diagram.Vector2D, ...]:
    """Approximate an ellipse with a polygon of ``segments`` corners."""
    cx, cy = center
    rx, ry = radii
    return tuple(
        diagram.Vector2D(
            cx + rx * math.cos(2 * math.pi * i / segments),
            cy + ry * math.sin(2 * math.pi * i / segments),
        )
        for i in range(segments)
    )


@dataclasses.dataclass
class _State:
    offset: diagram.Vector2D
    extra: t.Any = None


class RenderTarget(abc.ABC):
    """A 2D drawing surface.

    Paths are built up with :meth:`move_to`, :meth:`line_to`,
    :meth:`rect` and :meth:`ellipse`, and then filled, stroked or used
    as clip region. Coordinates are translated by the offset set with
    :meth:`translate` when they are added to the path.

    Subclasses implement the actual drawing operations.
    """

    def __init__(
        self,
        width: float,
        height: float,
        *,
        metrics: TextMetrics | None = None,
    ) -> None:
        self.size = diagram.Vector2D(width, height)
        self.metrics = metrics if metrics is not None else TextMetrics()
        self._offset = diagram.Vector2D(0, 0)
        self._path: list[Subpath] = []
        self._current: list[diagram.Vector2D] = []
        self._stack: list[_State] = []

    @property
    def width(self) -> float:
        return self.size.x

    @property
    def height(self) -> float:
        return self.size.y

    # Path construction
    def begin_path(self) -> None:
        self._path = []
        self._current = []

    def move_to(self, x: float, y: float) -> None:
        self._flush()
        self._current = [self._offset + (x, y)]

    def line_to(self, x: float, y: float) -> None:
        if not self._current:
            self._current = [self._offset + (x, y)]
        else:
            self._current.append(self._offset + (x, y))

    def close_path(self) -> None:
        if self._current:
            self._path.append(Subpath(tuple(self._current), closed=True))
            self._current = [self._current[0]]

    def polyline(
        self, points: cabc.Iterable[diagram.Vec2ish], *, closed: bool = False
    ) -> None:
        """Add a new subpath through all ``points``."""
        points = list(points)
        if not points:
            return
        self.move_to(*points[0])
        for point in points[1:]:
            self.line_to(*point)
        if closed:
            self.close_path()

    def rect(self, x: float, y: float, w: float, h: float) -> None:
        self.polyline([(x, y), (x + w, y), (x + w, y + h), (x, y + h)])
        self.close_path()
        self._current = []

    def ellipse(self, x: float, y: float, w: float, h: float) -> None:
        """Add the ellipse inscribed in the given box to the path."""
        self._flush()
        center = self._offset + (x + w / 2, y + h / 2)
        radii = diagram.Vector2D(w / 2, h / 2)
        self._path.append(
            Subpath(
                ellipse_points(center, radii),
                closed=True,
                ellipse=(center, radii),
            )
        )

    @property
    def path(self) -> tuple[Subpath, ...]:
        """The subpaths of the current path."""
        self._flush()
        return tuple(self._path)

    def _flush(self) -> None:
        if len(self._current) > 1:
            self._path.append(Subpath(tuple(self._current)))
        self._current = []

    # Transformation and state
    def translate(self, dx: float, dy: float) -> None:
        self._offset += (dx, dy)

    def push_state(self) -> None:
        self._stack.append(_State(self._offset, self._save_extra()))

    def pop_state(self) -> None:
        if not self._stack:
            return
        state = self._stack.pop()
        self._offset = state.offset
        self._restore_extra(state.extra)

    @contextlib.contextmanager
    def saved(self) -> cabc.Iterator[None]:
        """Save the state and restore it when the block exits."""
        self.push_state()
        try:
            yield
        finally:
            self.pop_state()

    def _save_extra(self) -> t.Any:
        return None

    def _restore_extra(self, extra: t.Any) -> None:
        del extra

    # Text measurement
    def measure_text(self, text: str, font: FontStyle) -> float:
        """Return the advance width of ``text``."""
        return self.metrics.width(text, font)

    def text_height(self, font: FontStyle) -> float:
        """Return the line height to use for ``font``."""
        return self.metrics.height(font)

    # Drawing
    @abc.abstractmethod
    def fill(self, color: diagram.RGB, alpha: float = 1.0) -> None:
        """Fill the current path."""

    @abc.abstractmethod
    def stroke(
        self, color: diagram.RGB, dash: cabc.Sequence[float] = ()
    ) -> None:
        """Stroke the current path with a 1px line."""

    @abc.abstractmethod
    def clip(self) -> None:
        """Restrict all further drawing to the current path."""

    @abc.abstractmethod
    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        font: FontStyle,
        color: diagram.RGB,
    ) -> None:
        """Draw ``text`` with its top left corner at ``(x, y)``."""

    @abc.abstractmethod
    def create_surface(self, width: int, height: int) -> RenderTarget:
        """Create an empty off-screen surface of the same kind."""

    @abc.abstractmethod
    def draw_surface(self, surface: RenderTarget, x: int, y: int) -> None:
        """Composite an off-screen ``surface`` at ``(x, y)``."""
