# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Two dimensional vector calculation utility."""
from __future__ import annotations

__all__ = [
    "Vec2Element",
    "Vec2ish",
    "Vector2D",
    "bounding_extent",
]

import collections.abc as cabc
import math
import operator
import typing as t

Vec2Element = t.Union[float, int]
Vec2ish = t.Tuple[Vec2Element, Vec2Element]


class Vector2D(t.NamedTuple):
    """A point or direction in diagram space.

    The y axis points downwards, like on every raster surface.
    """

    x: Vec2Element = 0
    y: Vec2Element = 0

    def __add__(self, other: Vec2ish) -> Vector2D:  # type: ignore[override]
        return self.__map2(operator.add, other)

    def __radd__(self, other: Vec2ish) -> Vector2D:
        return self.__map2(operator.add, other, True)

    def __sub__(self, other: Vec2ish) -> Vector2D:
        return self.__map2(operator.sub, other)

    def __rsub__(self, other: Vec2ish) -> Vector2D:
        return self.__map2(operator.sub, other, True)

    def __mul__(self, other: Vec2Element) -> Vector2D:  # type: ignore[override]
        return self.__map(operator.mul, other)

    def __rmul__(self, other: Vec2Element) -> Vector2D:  # type: ignore[override]
        return self.__map(operator.mul, other, True)

    def __truediv__(self, other: Vec2Element) -> Vector2D:
        return self.__map(operator.truediv, other)

    def __neg__(self) -> Vector2D:
        return type(self)(-self[0], -self[1])

    def __str__(self) -> str:  # pragma: no cover
        return f"({self[0]}, {self[1]})"

    @property
    def length(self) -> float:
        """Calculate the length of this vector."""
        return math.hypot(self[0], self[1])

    @property
    def angle(self) -> float:
        """The direction of this vector in radians, as ``atan2(y, x)``."""
        return math.atan2(self[1], self[0])

    def midpoint(self, other: Vec2ish) -> Vector2D:
        """Return the point halfway between this one and ``other``."""
        return (self + other) / 2

    def rotatedby(self, theta: Vec2Element) -> Vector2D:
        """Rotate this Vector2D by ``theta`` radians around the origin."""
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)

        return Vector2D(
            self[0] * cos_t - self[1] * sin_t,
            self[0] * sin_t + self[1] * cos_t,
        )

    def __map(
        self,
        func: cabc.Callable[[Vec2Element, Vec2Element], Vec2Element],
        other: Vec2Element,
        reflected: bool = False,
    ) -> Vector2D:
        if not isinstance(other, (int, float)):  # pragma: no cover
            return NotImplemented
        if reflected:
            return type(self)(func(other, self[0]), func(other, self[1]))
        return type(self)(func(self[0], other), func(self[1], other))

    def __map2(
        self,
        func: cabc.Callable[[Vec2Element, Vec2Element], Vec2Element],
        other: Vec2ish,
        reflected: bool = False,
    ) -> Vector2D:
        if isinstance(other, (int, float)):  # pragma: no cover
            return NotImplemented
        if not len(other) == 2:  # pragma: no cover
            raise ValueError("Length of 'other' must be 2")
        if reflected:
            return type(self)(func(other[0], self[0]), func(other[1], self[1]))
        return type(self)(func(self[0], other[0]), func(self[1], other[1]))


def bounding_extent(points: cabc.Iterable[Vec2ish]) -> Vector2D:
    """Return the bottom-right corner of the box spanned by ``points``.

    The box always includes the origin, so an empty iterable yields
    ``(0, 0)``.
    """
    max_x: Vec2Element = 0
    max_y: Vec2Element = 0
    for x, y in points:
        max_x = max(max_x, x)
        max_y = max(max_y, y)
    return Vector2D(max_x, max_y)
