# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Diagram-wide rendering configuration."""
from __future__ import annotations

__all__ = ["DEBUG", "RenderConfig"]

import dataclasses
import logging
import os

from uxfcanvas import helpers
from uxfcanvas.diagram import _attributes

LOGGER = logging.getLogger(__name__)

DEBUG = "UXFCANVAS_DEBUG" in os.environ
"""Debug flag to render helping outlines around every element."""

FONT_FAMILY_PREFIXES = {
    "SansSerif": "sans-serif",
    "Monospaced": "monospace",
}


@dataclasses.dataclass(frozen=True)
class RenderConfig:
    """Font and zoom settings shared by all elements of one diagram.

    Attributes
    ----------
    font_family
        Generic font family, one of ``serif``, ``sans-serif`` or
        ``monospace``, or the name of a font.
    font_size
        Font size in pixels at zoom 1.
    zoom
        The zoom factor. UXF documents store it multiplied by 10.
    """

    font_family: str = "serif"
    font_size: float = 14
    zoom: float = 1.0

    @property
    def effective_font_size(self) -> float:
        return self.font_size * self.zoom

    @classmethod
    def from_zoom_level(cls, zoom_level: float) -> RenderConfig:
        """Create a config from a UXF ``<zoom_level>``."""
        return cls(zoom=zoom_level / 10)

    def with_help_text(self, help_text: str) -> RenderConfig:
        """Apply the font settings of a diagram's help text.

        Only ``fontfamily`` and ``fontsize`` are understood. The
        Java-style family names ``SansSerif`` and ``Monospaced`` are
        translated to their generic equivalents; other families keep
        the current setting.
        """
        props = _attributes.parse_help_text(help_text)
        changes: dict[str, object] = {}

        family = props.get("fontfamily", "").strip()
        for prefix, generic in FONT_FAMILY_PREFIXES.items():
            if family.startswith(prefix):
                changes["font_family"] = generic
                break

        if "fontsize" in props:
            size = helpers.parse_int(props["fontsize"], -1)
            if size > 0:
                changes["font_size"] = size
            else:
                LOGGER.warning(
                    "Ignoring invalid font size %r", props["fontsize"]
                )

        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]
