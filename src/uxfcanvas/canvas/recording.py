# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""A surface that records draw calls instead of drawing."""
from __future__ import annotations

__all__ = ["DrawCall", "RecordingTarget"]

import collections.abc as cabc
import typing as t

from uxfcanvas import diagram
from uxfcanvas.metrics import FontStyle

from ._base import RenderTarget, Subpath


class DrawCall(t.NamedTuple):
    """A single recorded operation."""

    name: str
    args: tuple[t.Any, ...]


def _freeze(path: cabc.Iterable[Subpath]) -> tuple[t.Any, ...]:
    return tuple(
        (tuple((round(x, 3), round(y, 3)) for x, y in p.points), p.closed)
        for p in path
    )


class RecordingTarget(RenderTarget):
    """Keeps a comparable log of everything drawn onto it.

    Sub-surfaces are recorded as nested logs, so two render passes can
    be compared with a single ``==``.
    """

    def __init__(self, width: float, height: float, **kw: t.Any) -> None:
        super().__init__(width, height, **kw)
        self.calls: list[DrawCall] = []

    def _record(self, name: str, *args: t.Any) -> None:
        self.calls.append(DrawCall(name, args))

    def fill(self, color: diagram.RGB, alpha: float = 1.0) -> None:
        self._record("fill", _freeze(self.path), str(color), alpha)

    def stroke(
        self, color: diagram.RGB, dash: cabc.Sequence[float] = ()
    ) -> None:
        self._record("stroke", _freeze(self.path), str(color), tuple(dash))

    def clip(self) -> None:
        self._record("clip", _freeze(self.path))

    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        font: FontStyle,
        color: diagram.RGB,
    ) -> None:
        pos = self._offset + (x, y)
        self._record(
            "text", text, (round(pos.x, 3), round(pos.y, 3)), font, str(color)
        )

    def create_surface(self, width: int, height: int) -> RecordingTarget:
        return type(self)(width, height, metrics=self.metrics)

    def draw_surface(self, surface: RenderTarget, x: int, y: int) -> None:
        assert isinstance(surface, RecordingTarget)
        pos = self._offset + (x, y)
        self._record(
            "surface", (pos.x, pos.y), tuple(surface.size), surface.log
        )

    @property
    def log(self) -> tuple[DrawCall, ...]:
        """An immutable snapshot of the recorded calls."""
        return tuple(self.calls)

    def names(self) -> list[str]:
        """Return the names of the recorded calls, in order."""
        return [call.name for call in self.calls]
