# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

import logging

import pytest

import uxfcanvas
from uxfcanvas import exceptions, uxf
from uxfcanvas.config import RenderConfig

from .conftest import Documents  # type: ignore

MINIMAL = """\
<diagram program="umlet" version="14.3.0">
  <zoom_level>{zoom}</zoom_level>
  <element>
    <id>UMLClass</id>
    <coordinates><x>1</x><y>2</y><w>30</w><h>40</h></coordinates>
    <panel_attributes>Title</panel_attributes>
    <additional_attributes/>
  </element>
</diagram>
"""


def test_load_example_document():
    (diagram,) = uxf.load(Documents.example)

    assert diagram.zoom_level == 10
    assert diagram.config == RenderConfig("sans-serif", 12, 1.0)
    assert [r.id for r in diagram.records] == [
        "UMLClass",
        "UMLUseCase",
        "Relation",
        "UMLNote",
    ]


def test_element_fields_are_read_verbatim():
    (diagram,) = uxf.load(Documents.example)
    shape, _, relation, _ = diagram.records

    assert shape.coordinates == {"x": 10, "y": 20, "w": 160, "h": 90}
    assert shape.panel_attributes == (
        "*Shape*\n--\n/area/: float\n_perimeter_: float\nbg=yellow\nlayer=2"
    )
    assert shape.additional_attributes == ""
    assert shape.layer is None
    assert relation.panel_attributes == "lt=<<-\nlayer=1\nextends"
    assert relation.additional_attributes == "0;10;40;10"


@pytest.mark.parametrize(
    "source",
    [
        pytest.param(MINIMAL.format(zoom=10), id="str"),
        pytest.param(MINIMAL.format(zoom=10).encode("utf-8"), id="bytes"),
    ],
)
def test_load_accepts_markup(source):
    (diagram,) = uxf.load(source)

    assert diagram.records[0].coordinates == {"x": 1, "y": 2, "w": 30, "h": 40}


def test_load_accepts_path_strings(tmp_path):
    path = tmp_path / "diagram.uxf"
    path.write_text(MINIMAL.format(zoom=10), encoding="utf-8")

    (diagram,) = uxf.load(str(path))

    assert diagram.records[0].panel_attributes == "Title"


def test_missing_files_raise_oserror(tmp_path):
    with pytest.raises(OSError):
        uxf.load(tmp_path / "missing.uxf")


def test_tag_names_are_case_insensitive():
    source = (
        "<Diagram><Zoom_Level>20</Zoom_Level>"
        "<Element><ID>UMLClass</ID>"
        "<Coordinates><X>5</X><Y>6</Y><W>7</W><H>8</H></Coordinates>"
        "<Panel_Attributes>Hi</Panel_Attributes>"
        "</Element></Diagram>"
    )

    (diagram,) = uxf.load(source)

    assert diagram.config.zoom == 2.0
    (record,) = diagram.records
    assert record.id == "UMLClass"
    assert record.coordinates == {"x": 5, "y": 6, "w": 7, "h": 8}
    assert record.panel_attributes == "Hi"


def test_missing_fields_keep_their_defaults():
    source = "<diagram><element><id>UMLClass</id></element></diagram>"

    (diagram,) = uxf.load(source)

    (record,) = diagram.records
    assert record.coordinates == {"x": 0, "y": 0, "w": 0, "h": 0}
    assert record.panel_attributes == ""
    assert record.additional_attributes == ""
    assert diagram.zoom_level == 10
    assert diagram.help_text == ""


def test_layer_element_is_read():
    source = "<diagram><element><layer>4</layer></element></diagram>"

    (diagram,) = uxf.load(source)

    assert diagram.records[0].layer == 4


def test_every_diagram_in_a_document_is_loaded():
    source = (
        "<umlet><diagram><element><id>A</id></element></diagram>"
        "<diagram><element><id>B</id></element></diagram></umlet>"
    )

    diagrams = uxf.load(source)

    assert [d.records[0].id for d in diagrams] == ["A", "B"]


def test_document_without_diagrams_is_empty(caplog):
    with caplog.at_level(logging.WARNING):
        diagrams = uxf.load("<umlet/>")

    assert diagrams == []
    assert "does not contain any diagrams" in caplog.text


@pytest.mark.parametrize("source", ["<diagram>", b"", "<a><b></a>"])
def test_malformed_documents_are_rejected(source):
    with pytest.raises(exceptions.InvalidDocumentError) as excinfo:
        uxf.load(source)

    assert isinstance(excinfo.value, ValueError)
    assert isinstance(excinfo.value, exceptions.UXFCanvasError)


def test_invalid_zoom_level_is_ignored(caplog):
    with caplog.at_level(logging.WARNING):
        (diagram,) = uxf.load(MINIMAL.format(zoom=0))

    assert diagram.zoom_level == 10
    assert "Ignoring invalid zoom level" in caplog.text


def test_zoom_level_is_applied_when_rendering():
    (diagram,) = uxf.load(MINIMAL.format(zoom=20))

    result = diagram.render("record")

    assert diagram.config.zoom == 2.0
    assert result.size == (32, 43)


def test_render_example_in_layer_order(caplog):
    (diagram,) = uxfcanvas.load(Documents.example)

    with caplog.at_level(logging.WARNING):
        result = diagram.render("record")

    assert result.size == (321, 171)
    assert [e.kind for e in result.elements] == [
        "UMLUseCase",
        "UMLNote",
        "Relation",
        "UMLClass",
    ]
    assert "Unknown element kind 'UMLNote'" in caplog.text


def test_render_config_can_be_overridden():
    (diagram,) = uxf.load(MINIMAL.format(zoom=10))
    config = RenderConfig(font_family="monospace", font_size=20)

    result = diagram.render("record", config=config)

    (surface,) = result.target.calls
    texts = [c for c in surface.args[2] if c.name == "text"]
    assert texts[0].args[2].family == "monospace"
    assert texts[0].args[2].size == 20
