# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Font loading and text measurement."""
from __future__ import annotations

__all__ = [
    "LINE_SPACING",
    "REFERENCE_GLYPH",
    "FontStyle",
    "TextMetrics",
    "load_font",
]

import dataclasses
import functools
import logging
import math
import typing as t

from PIL import Image, ImageDraw, ImageFont

LOGGER = logging.getLogger(__name__)

LINE_SPACING = 1.75
"""Factor between the ink height of the reference glyph and a line."""
REFERENCE_GLYPH = "M"

FontType = t.Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

# Candidate font files for each generic family, in order of preference.
# Each entry lists the regular, bold, italic and bold italic variant.
FONT_FILES: dict[str, list[tuple[str, str, str, str]]] = {
    "serif": [
        (
            "DejaVuSerif.ttf",
            "DejaVuSerif-Bold.ttf",
            "DejaVuSerif-Italic.ttf",
            "DejaVuSerif-BoldItalic.ttf",
        ),
        (
            "LiberationSerif-Regular.ttf",
            "LiberationSerif-Bold.ttf",
            "LiberationSerif-Italic.ttf",
            "LiberationSerif-BoldItalic.ttf",
        ),
        ("times.ttf", "timesbd.ttf", "timesi.ttf", "timesbi.ttf"),
    ],
    "sans-serif": [
        (
            "DejaVuSans.ttf",
            "DejaVuSans-Bold.ttf",
            "DejaVuSans-Oblique.ttf",
            "DejaVuSans-BoldOblique.ttf",
        ),
        (
            "LiberationSans-Regular.ttf",
            "LiberationSans-Bold.ttf",
            "LiberationSans-Italic.ttf",
            "LiberationSans-BoldItalic.ttf",
        ),
        ("arial.ttf", "arialbd.ttf", "ariali.ttf", "arialbi.ttf"),
    ],
    "monospace": [
        (
            "DejaVuSansMono.ttf",
            "DejaVuSansMono-Bold.ttf",
            "DejaVuSansMono-Oblique.ttf",
            "DejaVuSansMono-BoldOblique.ttf",
        ),
        (
            "LiberationMono-Regular.ttf",
            "LiberationMono-Bold.ttf",
            "LiberationMono-Italic.ttf",
            "LiberationMono-BoldItalic.ttf",
        ),
        ("cour.ttf", "courbd.ttf", "couri.ttf", "courbi.ttf"),
    ],
}


@dataclasses.dataclass(frozen=True)
class FontStyle:
    """Everything that influences the size of rendered text."""

    family: str = "serif"
    size: float = 14
    bold: bool = False
    italic: bool = False

    @property
    def css_weight(self) -> str:
        return "bold" if self.bold else "normal"

    @property
    def css_style(self) -> str:
        return "italic" if self.italic else "normal"


@functools.lru_cache(maxsize=64)
def load_font(style: FontStyle) -> FontType:
    """Load the best matching installed font for ``style``.

    ``style.family`` can be a generic family or the file name of a
    TrueType font. If nothing matches, Pillow's built-in font is used.
    """
    variant = style.bold + 2 * style.italic
    candidates = [
        files[variant] for files in FONT_FILES.get(style.family, [])
    ]
    candidates.append(style.family)
    for name in candidates:
        try:
            return ImageFont.truetype(name, style.size)
        except OSError:
            pass

    LOGGER.debug("No font found for %s, using the default font", style)
    return ImageFont.load_default(style.size)


class TextMetrics:
    """Measures text, caching the expensive line height calculation.

    The line height of a font style is derived from the ink of the
    :data:`REFERENCE_GLYPH`, since fonts only report their nominal
    metrics. It is calculated once per style and kept for the lifetime
    of this object, so one instance should be shared across render
    passes.
    """

    def __init__(self) -> None:
        self._heights: dict[FontStyle, float] = {}

    def font(self, style: FontStyle) -> FontType:
        return load_font(style)

    def width(self, text: str, style: FontStyle) -> float:
        """Return the advance width of ``text`` in pixels."""
        if not text:
            return 0.0
        return float(self.font(style).getlength(text))

    def height(self, style: FontStyle) -> float:
        """Return the usable line height of ``style`` in pixels."""
        try:
            return self._heights[style]
        except KeyError:
            pass
        height = self._heights[style] = self._scan_ink_height(style)
        return height

    def _scan_ink_height(self, style: FontStyle) -> float:
        font = self.font(style)
        glyph_width = max(self.width(REFERENCE_GLYPH, style), style.size)
        side = math.ceil(glyph_width * 2)
        scratch = Image.new("RGBA", (side, side), (0, 0, 0, 0))
        ImageDraw.Draw(scratch).text(
            (0, 0), REFERENCE_GLYPH, font=font, fill=(0, 0, 0, 255)
        )
        ink = scratch.getchannel("A").getbbox()
        if ink is None:
            LOGGER.debug("Reference glyph of %s left no ink", style)
            return style.size * LINE_SPACING
        _, first_row, _, end_row = ink
        last_row = end_row - 1
        return (last_row - first_row) * LINE_SPACING

    def __len__(self) -> int:
        return len(self._heights)
