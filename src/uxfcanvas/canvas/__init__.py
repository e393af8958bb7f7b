# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Drawing surfaces that diagrams can be rendered onto."""
from __future__ import annotations

__all__ = [
    "BACKENDS",
    "DrawCall",
    "RasterTarget",
    "RecordingTarget",
    "RenderTarget",
    "SVGTarget",
    "Subpath",
    "get_backend",
]

from uxfcanvas.exceptions import UnknownBackendError

from ._base import RenderTarget, Subpath
from .raster import RasterTarget
from .recording import DrawCall, RecordingTarget
from .vector import SVGTarget

BACKENDS: dict[str, type[RenderTarget]] = {
    "png": RasterTarget,
    "raster": RasterTarget,
    "svg": SVGTarget,
    "record": RecordingTarget,
}
"""Maps output format names to the surface class that produces them."""


def get_backend(name: str) -> type[RenderTarget]:
    """Look up the surface class for an output format."""
    try:
        return BACKENDS[name.lower()]
    except KeyError:
        raise UnknownBackendError(
            f"Unknown output format {name!r},"
            f" expected one of: {', '.join(sorted(BACKENDS))}"
        ) from None
