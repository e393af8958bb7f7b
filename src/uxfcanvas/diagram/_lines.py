# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Line styles, point lists and arrowhead geometry of line elements."""
from __future__ import annotations

__all__ = [
    "ARROW_LENGTH",
    "ARROW_WIDTH",
    "ArrowHead",
    "ArrowKind",
    "Dash",
    "HeadFill",
    "LineSpec",
    "RelationGeometry",
    "build_arrowhead",
    "build_relation_geometry",
    "dash_segments",
    "decode_line_spec",
    "decode_line_style",
    "decode_points",
]

import collections.abc as cabc
import dataclasses
import enum
import logging
import math
import re

from uxfcanvas import helpers

from ._vector2d import Vec2ish, Vector2D

LOGGER = logging.getLogger(__name__)

ARROW_LENGTH = 10
"""Length of an arrowhead (along the line) at zoom 1."""
ARROW_WIDTH = 5
"""Half the width of an arrowhead at zoom 1."""
DEFAULT_LINE_STYLE = "-"
RE_LINE_STYLE = re.compile(
    r"(?P<left>[<>]*)(?P<body>[-.]*)(?P<right>[<>]*)"
)


class Dash(enum.Enum):
    """Stroke pattern of a line, as ``(on, off)`` lengths."""

    SOLID = ()
    DASH_LONG = (6, 6)
    DASH_SHORT = (2, 2)

    @classmethod
    def from_token(cls, token: str) -> Dash:
        """Decode the body of a line style, e.g. ``"-"`` or ``".."``."""
        return _DASH_TOKENS.get(token, cls.SOLID)

    @property
    def pattern(self) -> tuple[int, ...]:
        return self.value


_DASH_TOKENS = {
    "-": Dash.SOLID,
    ".": Dash.DASH_LONG,
    "..": Dash.DASH_SHORT,
}


class HeadFill(enum.Enum):
    NONE = enum.auto()
    INVERSE = enum.auto()
    FOREGROUND = enum.auto()


class ArrowKind(enum.Enum):
    """The five arrowhead variants, keyed by their token length."""

    NONE = 0
    OPEN = 1
    HOLLOW_TRIANGLE = 2
    FILLED_TRIANGLE = 3
    HOLLOW_DIAMOND = 4
    FILLED_DIAMOND = 5

    @classmethod
    def from_token(cls, token: str) -> ArrowKind:
        """Decode an arrowhead token like ``"<<"`` or ``">>>>>"``.

        Tokens that mix ``<`` and ``>`` or that are longer than five
        characters are not supported and decode to :attr:`NONE`.
        """
        if not token:
            return cls.NONE
        if len(set(token)) != 1 or len(token) > cls.FILLED_DIAMOND.value:
            LOGGER.debug("Unsupported arrowhead token %r", token)
            return cls.NONE
        return cls(len(token))

    @property
    def fill(self) -> HeadFill:
        if self in (ArrowKind.HOLLOW_TRIANGLE, ArrowKind.HOLLOW_DIAMOND):
            return HeadFill.INVERSE
        if self in (ArrowKind.FILLED_TRIANGLE, ArrowKind.FILLED_DIAMOND):
            return HeadFill.FOREGROUND
        return HeadFill.NONE


@dataclasses.dataclass(frozen=True)
class LineSpec:
    """A decoded line style together with the line's points."""

    dash: Dash = Dash.SOLID
    left_arrow: str = ""
    right_arrow: str = ""
    points: tuple[Vector2D, ...] = ()

    @property
    def left_kind(self) -> ArrowKind:
        return ArrowKind.from_token(self.left_arrow)

    @property
    def right_kind(self) -> ArrowKind:
        return ArrowKind.from_token(self.right_arrow)


def decode_line_style(lt: str | None) -> LineSpec:
    """Decode a line style token such as ``"<<<.>"``.

    The token consists of a left arrowhead made of ``<``/``>``, a body
    made of ``-``/``.`` and a right arrowhead. Every part may be empty.
    The body decodes to a :class:`Dash`; unknown bodies are solid.
    Anything after the right arrowhead is ignored.

    The returned spec does not have any points, see
    :func:`decode_line_spec`.
    """
    if lt is None or not lt.strip():
        lt = DEFAULT_LINE_STYLE
    match = RE_LINE_STYLE.match(lt.strip())
    assert match is not None
    return LineSpec(
        dash=Dash.from_token(match.group("body")),
        left_arrow=match.group("left"),
        right_arrow=match.group("right"),
    )


def decode_points(raw: str) -> tuple[Vector2D, ...]:
    """Decode a ``x1;y1;x2;y2;...`` point list.

    Every coordinate is parsed as an integer, where malformed values
    become 0. A trailing separator is ignored, and a trailing lone
    x coordinate gets a y coordinate of 0.
    """
    tokens = raw.strip().split(";")
    while tokens and not tokens[-1].strip():
        tokens.pop()
    return tuple(
        Vector2D(helpers.parse_int(x), helpers.parse_int(y))
        for x, y in helpers.ntuples(2, tokens, pad=True)
    )


def decode_line_spec(lt: str | None, raw_points: str) -> LineSpec:
    """Decode both the line style and the point list of a line."""
    style = decode_line_style(lt)
    return dataclasses.replace(style, points=decode_points(raw_points))


@dataclasses.dataclass(frozen=True)
class ArrowHead:
    """Drawable geometry of one arrowhead, in surface coordinates."""

    kind: ArrowKind
    points: tuple[Vector2D, ...]
    closed: bool
    fill: HeadFill


def _template(kind: ArrowKind, length: float, width: float) -> list[Vec2ish]:
    if kind is ArrowKind.OPEN:
        return [(-width, length), (0, 0), (width, length)]
    if kind in (ArrowKind.HOLLOW_TRIANGLE, ArrowKind.FILLED_TRIANGLE):
        return [(0, 0), (-width, length), (width, length)]
    return [(0, 0), (-width, length), (0, length * 2), (width, length)]


def build_arrowhead(
    token: str,
    tip: Vec2ish,
    toward: Vec2ish,
    *,
    zoom: float = 1.0,
) -> ArrowHead | None:
    """Construct the arrowhead for ``token`` at ``tip``.

    The head template points along the positive y axis. It is rotated
    by ``atan2(dy, dx) - 90°`` of the direction from ``tip`` to
    ``toward``, so that it opens towards the rest of the line, and then
    moved to ``tip``.

    Returns
    -------
    head
        The arrowhead, or ``None`` if the token does not describe one.
    """
    kind = ArrowKind.from_token(token)
    if kind is ArrowKind.NONE:
        return None

    tip = Vector2D(*tip)
    theta = (Vector2D(*toward) - tip).angle - math.pi / 2
    points = tuple(
        tip + Vector2D(*p).rotatedby(theta)
        for p in _template(kind, ARROW_LENGTH * zoom, ARROW_WIDTH * zoom)
    )
    return ArrowHead(
        kind=kind,
        points=points,
        closed=kind is not ArrowKind.OPEN,
        fill=kind.fill,
    )


@dataclasses.dataclass(frozen=True)
class RelationGeometry:
    """Everything needed to draw a relation line."""

    points: tuple[Vector2D, ...]
    dash: Dash
    heads: tuple[ArrowHead, ...]


def build_relation_geometry(
    spec: LineSpec, *, zoom: float = 1.0
) -> RelationGeometry:
    """Scale a line by ``zoom`` and construct its arrowheads.

    Arrowheads need the direction of the first or last segment, so
    lines with fewer than two points are drawn without them.
    """
    points = tuple(p * zoom for p in spec.points)
    heads: list[ArrowHead] = []
    wants_heads = spec.left_arrow or spec.right_arrow
    if len(points) < 2:
        if wants_heads:
            LOGGER.debug(
                "Not drawing arrowheads for a line with %d points",
                len(points),
            )
    else:
        if spec.left_arrow:
            head = build_arrowhead(
                spec.left_arrow, points[0], points[1], zoom=zoom
            )
            if head is not None:
                heads.append(head)
        if spec.right_arrow:
            head = build_arrowhead(
                spec.right_arrow, points[-1], points[-2], zoom=zoom
            )
            if head is not None:
                heads.append(head)
    return RelationGeometry(points, spec.dash, tuple(heads))


def dash_segments(
    points: cabc.Sequence[Vec2ish], pattern: cabc.Sequence[float]
) -> list[tuple[Vector2D, Vector2D]]:
    """Split a polyline into the visible pieces of a dash pattern.

    The pattern alternates between "on" and "off" lengths and continues
    across corners, like a canvas stroke does. An empty pattern yields
    every segment unchanged.
    """
    vertices = [Vector2D(*p) for p in points]
    segments = list(zip(vertices, vertices[1:]))
    if not pattern or sum(pattern) <= 0:
        return segments

    pieces: list[tuple[Vector2D, Vector2D]] = []
    index = 0
    remaining = float(pattern[0])
    for start, end in segments:
        seglen = (end - start).length
        done = 0.0
        while done < seglen:
            step = min(remaining, seglen - done)
            if index % 2 == 0 and step > 0:
                direction = (end - start) / seglen
                pieces.append(
                    (
                        start + direction * done,
                        start + direction * (done + step),
                    )
                )
            done += step
            remaining -= step
            if remaining <= 0:
                index = (index + 1) % len(pattern)
                remaining = float(pattern[index])
    return pieces
