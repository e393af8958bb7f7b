# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Classes that represent the elements of a diagram."""

from __future__ import annotations

__all__ = [
    "Bounds",
    "DiagramElement",
    "ElementRecord",
    "build_element",
]

import collections.abc as cabc
import dataclasses
import logging
import typing as t

from uxfcanvas import helpers

from . import _attributes
from ._vector2d import Vector2D

LOGGER = logging.getLogger(__name__)

DEFAULT_KIND = "Default"


@dataclasses.dataclass(frozen=True)
class Bounds:
    """Integer position and size of an element in diagram space."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0

    def __post_init__(self) -> None:
        if self.w < 0 or self.h < 0:
            raise ValueError(f"Bounds must not have a negative size: {self}")

    @property
    def pos(self) -> Vector2D:
        return Vector2D(self.x, self.y)

    @property
    def size(self) -> Vector2D:
        return Vector2D(self.w, self.h)

    @property
    def extent(self) -> Vector2D:
        """The bottom-right corner, i.e. ``(x + w, y + h)``."""
        return Vector2D(self.x + self.w, self.y + self.h)

    @property
    def is_empty(self) -> bool:
        return self.w == 0 or self.h == 0

    def at_origin(self) -> Bounds:
        """Return the same size, moved to ``(0, 0)``."""
        return dataclasses.replace(self, x=0, y=0)


@dataclasses.dataclass(frozen=True)
class ElementRecord:
    """One raw element, as read from a diagram document.

    Attributes
    ----------
    id
        The element type, e.g. ``UMLClass`` or ``Relation``.
    coordinates
        Mapping with the integer keys ``x``, ``y``, ``w`` and ``h``.
    panel_attributes
        The raw attribute block with text lines and properties.
    additional_attributes
        The raw, semicolon separated point list of line elements.
    layer
        The layer, if the document stores it outside the panel
        attributes.
    """

    id: str = ""
    coordinates: cabc.Mapping[str, int] = dataclasses.field(
        default_factory=dict
    )
    panel_attributes: str = ""
    additional_attributes: str = ""
    layer: int | None = None


@dataclasses.dataclass(frozen=True)
class DiagramElement:
    """One fully parsed shape or relation of a diagram."""

    kind: str
    bounds: Bounds
    layer: int = 0
    lines: tuple[str, ...] = ()
    properties: cabc.Mapping[str, str] = dataclasses.field(
        default_factory=dict
    )
    point_list_raw: str = ""

    def get(self, key: str, default: str | None = None) -> str | None:
        """Look up a property of this element."""
        return self.properties.get(key, default)

    def localized(self) -> DiagramElement:
        """Return a copy of this element moved to the local origin."""
        return dataclasses.replace(self, bounds=self.bounds.at_origin())


def _coordinate(coordinates: cabc.Mapping[str, t.Any], key: str) -> int:
    value = coordinates.get(key, 0)
    if isinstance(value, int):
        return value
    return helpers.parse_int(str(value))


def build_element(record: ElementRecord) -> DiagramElement:
    """Convert a raw element record into a :class:`DiagramElement`.

    The panel attributes are split into text lines and properties. The
    point list is stored as is, since only line elements need it.

    The layer is taken from a ``layer=`` property if there is one, and
    from the record otherwise.
    """
    parsed = _attributes.parse_attributes(record.panel_attributes)
    x, y, w, h = (_coordinate(record.coordinates, k) for k in "xywh")
    if w < 0 or h < 0:
        LOGGER.warning(
            "Element %r has a negative size (%d, %d), clamping to zero",
            record.id,
            w,
            h,
        )
        w, h = max(w, 0), max(h, 0)

    if "layer" in parsed.extras:
        layer = helpers.parse_int(parsed.extras["layer"], record.layer or 0)
    else:
        layer = record.layer or 0

    return DiagramElement(
        kind=record.id or DEFAULT_KIND,
        bounds=Bounds(x, y, w, h),
        layer=layer,
        lines=parsed.lines,
        properties=parsed.extras,
        point_list_raw=record.additional_attributes,
    )
