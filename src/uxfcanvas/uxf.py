# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Loading of UMLet ``.uxf`` documents.

A UXF document looks like this::

    <diagram program="umlet" version="14.3.0">
      <zoom_level>10</zoom_level>
      <help_text>fontfamily=SansSerif</help_text>
      <element>
        <id>UMLClass</id>
        <coordinates><x>10</x><y>20</y><w>100</w><h>60</h></coordinates>
        <panel_attributes>Title
    --
    field: int</panel_attributes>
        <additional_attributes/>
      </element>
    </diagram>

Tag names are matched case-insensitively. Every ``<diagram>`` in the
document becomes one :class:`UXFDiagram`.
"""
from __future__ import annotations

__all__ = ["UXFDiagram", "load"]

import collections.abc as cabc
import dataclasses
import logging
import os
import pathlib
import typing as t

from lxml import etree

from uxfcanvas import canvas, compositor, diagram, helpers
from uxfcanvas.config import RenderConfig
from uxfcanvas.exceptions import InvalidDocumentError
from uxfcanvas.metrics import TextMetrics

LOGGER = logging.getLogger(__name__)

DEFAULT_ZOOM_LEVEL = 10.0

# Default values of the fields read from an ``<element>``. The type of
# each default decides how the field is parsed.
ELEMENT_TEMPLATE: dict[str, t.Any] = {
    "id": "",
    "coordinates": {"x": 0, "y": 0, "w": 0, "h": 0},
    "panel_attributes": "",
    "additional_attributes": "",
    "layer": None,
}


@dataclasses.dataclass(frozen=True)
class UXFDiagram:
    """One diagram read from a UXF document.

    Attributes
    ----------
    zoom_level
        The zoom level as stored in the document, where 10 means 100%.
    help_text
        The raw help text, which may hold font settings.
    records
        The raw element records, in document order.
    """

    zoom_level: float = DEFAULT_ZOOM_LEVEL
    help_text: str = ""
    records: tuple[diagram.ElementRecord, ...] = ()

    @property
    def config(self) -> RenderConfig:
        """The render configuration derived from zoom and help text."""
        config = RenderConfig.from_zoom_level(self.zoom_level)
        return config.with_help_text(self.help_text)

    def render(
        self,
        backend: type[canvas.RenderTarget] | str = "png",
        *,
        config: RenderConfig | None = None,
        metrics: TextMetrics | None = None,
    ) -> compositor.RenderResult:
        """Render this diagram.

        Parameters
        ----------
        backend
            The surface class or output format to render with.
        config
            Overrides the configuration read from the document.
        metrics
            A text metrics service to share between diagrams.
        """
        if config is None:
            config = self.config
        comp = compositor.Compositor(backend, config, metrics=metrics)
        return comp.render(self.records)


def _tagname(element: etree._Element) -> str:
    if not isinstance(element.tag, str):
        return ""
    return etree.QName(element).localname.lower()


def _text(element: etree._Element) -> str:
    return "".join(element.itertext())


def _find(element: etree._Element, tag: str) -> etree._Element | None:
    for i in element.iter():
        if i is not element and _tagname(i) == tag:
            return i
    return None


def read_fields(
    element: etree._Element, template: cabc.Mapping[str, t.Any]
) -> dict[str, t.Any]:
    """Read the child elements of ``element`` named in ``template``.

    Fields whose default is a mapping are read recursively. Fields with
    an integer default, or ``None``, are parsed as integers; all others
    are read as text. Fields missing from the document keep their
    default.
    """
    values = {
        k: dict(v) if isinstance(v, cabc.Mapping) else v
        for k, v in template.items()
    }
    for child in element:
        key = _tagname(child)
        if key not in template:
            continue
        default = template[key]
        if isinstance(default, cabc.Mapping):
            values[key] = read_fields(child, default)
        elif default is None or isinstance(default, int):
            values[key] = helpers.parse_int(_text(child), default or 0)
        else:
            values[key] = _text(child)
    return values


def read_element(element: etree._Element) -> diagram.ElementRecord:
    """Convert an ``<element>`` into an element record."""
    values = read_fields(element, ELEMENT_TEMPLATE)
    return diagram.ElementRecord(
        id=values["id"].strip(),
        coordinates=values["coordinates"],
        panel_attributes=values["panel_attributes"],
        additional_attributes=values["additional_attributes"],
        layer=values["layer"],
    )


def read_diagram(element: etree._Element) -> UXFDiagram:
    """Convert a ``<diagram>`` into a :class:`UXFDiagram`."""
    zoom_level = DEFAULT_ZOOM_LEVEL
    zoom_element = _find(element, "zoom_level")
    if zoom_element is not None:
        zoom_level = helpers.parse_float(_text(zoom_element), zoom_level)
        if zoom_level <= 0:
            LOGGER.warning(
                "Ignoring invalid zoom level %r", _text(zoom_element)
            )
            zoom_level = DEFAULT_ZOOM_LEVEL

    help_element = _find(element, "help_text")
    help_text = _text(help_element) if help_element is not None else ""

    records = tuple(
        read_element(i)
        for i in element.iter()
        if i is not element and _tagname(i) == "element"
    )
    LOGGER.debug("Read diagram with %d elements", len(records))
    return UXFDiagram(zoom_level, help_text, records)


def _read_source(source: str | bytes | os.PathLike[str]) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, str) and source.lstrip().startswith("<"):
        return source.encode("utf-8")
    return pathlib.Path(source).read_bytes()


def load(source: str | bytes | os.PathLike[str]) -> list[UXFDiagram]:
    """Load all diagrams from a UXF document.

    Parameters
    ----------
    source
        The document as bytes or markup string, or the path to a file.
        Strings that start with ``<`` are treated as markup.

    Returns
    -------
    diagrams
        One entry per ``<diagram>`` in the document, which is usually
        exactly one.

    Raises
    ------
    InvalidDocumentError
        If the document is not well-formed XML.
    OSError
        If the file cannot be read.
    """
    data = _read_source(source)
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as err:
        raise InvalidDocumentError(
            f"Cannot parse UXF document: {err}"
        ) from err

    if _tagname(root) == "diagram":
        diagram_elements = [root]
    else:
        diagram_elements = [i for i in root.iter() if _tagname(i) == "diagram"]
    if not diagram_elements:
        LOGGER.warning("Document does not contain any diagrams")
    return [read_diagram(i) for i in diagram_elements]
