# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""The colour type and the default colours used when drawing elements."""

from __future__ import annotations

__all__ = ["BLACK", "RGB", "WHITE", "resolve_color"]

import logging
import typing as t

from PIL import ImageColor

from uxfcanvas import helpers

LOGGER = logging.getLogger(__name__)


class RGB(t.NamedTuple):
    """A color.

    Each color component (red, green, blue) is an integer in the range
    of 0..255 (inclusive). The alpha channel is a float between 0.0 and
    1.0 (inclusive). If it is 1, then the ``str()`` form does not
    include transparency information.
    """

    r: int = 0
    g: int = 0
    b: int = 0
    a: float = 1.0

    def __str__(self) -> str:
        return "#" + self.tohex()

    def tohex(self) -> str:
        assert all(0 <= n <= 255 for n in self[:3])
        assert 0.0 <= self.a <= 1.0
        if self.a >= 1.0:
            return f"{self.r:02X}{self.g:02X}{self.b:02X}"
        return f"{self.r:02X}{self.g:02X}{self.b:02X}{int(self.a * 255):02X}"

    def with_alpha(self, alpha: float) -> RGB:
        """Return a copy of this color with its alpha scaled by ``alpha``."""
        return self._replace(a=self.a * alpha)

    def torgba(self) -> tuple[int, int, int, int]:
        """Return an 8-bit RGBA tuple, as used by raster images."""
        return (self.r, self.g, self.b, round(self.a * 255))

    @classmethod
    def fromcss(cls, cssstring: str | RGB) -> RGB:
        """Create an RGB from a CSS or UMLet color definition.

        Examples of recognized color definitions and their equivalent
        constructor calls::

            "rgb(10, 20, 30)" -> RGB(10, 20, 30)
            "rgba(50, 60, 70, 0.5)" -> RGB(50, 60, 70, 0.5)
            "#FF00FF" -> RGB(255, 0, 255)
            "#f0f" -> RGB(255, 0, 255)
            "#FF00FF80" -> RGB(255, 0, 255, 0.5)
            "red" -> RGB(255, 0, 0)
            "light_gray" -> RGB(211, 211, 211)
        """
        if isinstance(cssstring, RGB):
            return cssstring

        cssstring = cssstring.strip().lower()
        if cssstring.startswith(("rgb(", "rgba(")) and cssstring.endswith(")"):
            return cls.fromcsv(cssstring[cssstring.find("(") + 1 : -1])
        if cssstring.startswith("#"):
            return cls.fromhex(cssstring[1:])

        name = cssstring.replace("_", "").replace(" ", "")
        try:
            r, g, b = ImageColor.getrgb(name)[:3]
        except ValueError:
            raise ValueError(f"Bad CSS color: {cssstring!r}") from None
        return cls(r, g, b)

    @classmethod
    def fromcsv(cls, csvstring: str) -> RGB:
        """Create an RGB from a ``"r, g, b[, a]"`` string."""
        split = csvstring.split(",")
        if len(split) == 4:
            alpha = float(split.pop())
        else:
            alpha = 1.0
        if len(split) == 3:
            r, g, b = (int(c) for c in split)
            return cls(r, g, b, alpha)
        raise ValueError(f"Expected 3 or 4 values: {csvstring}")

    @classmethod
    def fromhex(cls, hexstring: str) -> RGB:
        """Create an RGB from a hexadecimal string.

        The string can have 3, 4, 6 or 8 hexadecimal characters. In the
        cases of 3 and 6 characters, the alpha channel is set to 1.0
        (fully opaque) and the remaining characters are interpreted as
        the red, green and blue components.
        """
        hs = hexstring.removeprefix("#")
        alpha = 1.0
        slen = len(hs)

        if slen == 4:
            hs, alpha = hs[:3], int(hs[3:], base=16) / 15
            slen = 3
        if slen == 3:
            r, g, b = (int(x * 2, base=16) for x in hs)
            return cls(r, g, b, alpha)

        if slen == 8:
            hs, alpha = hs[:6], int(hs[6:], base=16) / 255
            slen = 6
        if slen == 6:
            r, g, b = (
                int("".join(x), base=16) for x in helpers.ntuples(2, hs)
            )
            return cls(r, g, b, alpha)

        raise ValueError(
            "Invalid length of hex string, expected 3, 4, 6 or 8 characters"
        )


BLACK = RGB(0, 0, 0)
"""Default foreground (line and text) color."""
WHITE = RGB(255, 255, 255)
"""Inverse color, used to fill hollow arrowheads."""


def resolve_color(value: str | None, default: RGB | None) -> RGB | None:
    """Turn a color property into an :class:`RGB`.

    Missing or empty values and values that cannot be parsed result in
    ``default``.
    """
    if not value or not value.strip():
        return default
    try:
        return RGB.fromcss(value)
    except ValueError:
        LOGGER.warning("Unknown color %r, using %s instead", value, default)
        return default
