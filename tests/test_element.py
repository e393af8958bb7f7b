# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

import logging

import pytest

from uxfcanvas import diagram


def _record(**kw) -> diagram.ElementRecord:
    kw.setdefault("id", "UMLClass")
    kw.setdefault("coordinates", {"x": 10, "y": 20, "w": 30, "h": 40})
    return diagram.ElementRecord(**kw)


def test_build_element_splits_the_attribute_block():
    record = _record(
        panel_attributes="Title\n--\nbg=red\nfield: int",
        additional_attributes="1;2;3;4",
    )

    element = diagram.build_element(record)

    assert element.kind == "UMLClass"
    assert element.bounds == diagram.Bounds(10, 20, 30, 40)
    assert element.lines == ("Title", "--", "field: int")
    assert element.properties == {"bg": "red"}
    assert element.get("bg") == "red"
    assert element.get("fg") is None
    assert element.point_list_raw == "1;2;3;4"


def test_missing_coordinates_default_to_zero():
    element = diagram.build_element(_record(coordinates={"x": 5}))

    assert element.bounds == diagram.Bounds(5, 0, 0, 0)


def test_textual_coordinates_are_truncated_to_integers():
    element = diagram.build_element(
        _record(coordinates={"x": "12.7", "y": "abc", "w": " 8", "h": "9px"})
    )

    assert element.bounds == diagram.Bounds(12, 0, 8, 9)


def test_negative_sizes_are_clamped(caplog):
    record = _record(coordinates={"x": 0, "y": 0, "w": -5, "h": 10})

    with caplog.at_level(logging.WARNING):
        element = diagram.build_element(record)

    assert element.bounds.size == (0, 10)
    assert "negative size" in caplog.text


def test_element_without_id_is_a_default_element():
    assert diagram.build_element(_record(id="")).kind == "Default"


@pytest.mark.parametrize(
    ["panel_attributes", "record_layer", "expected"],
    [
        pytest.param("Text", None, 0, id="default"),
        pytest.param("Text", 5, 5, id="record"),
        pytest.param("layer=3\nText", None, 3, id="property"),
        pytest.param("layer=3\nText", 1, 3, id="property-wins"),
        pytest.param("layer=-2", None, -2, id="negative"),
    ],
)
def test_layer_is_found_in_both_locations(
    panel_attributes, record_layer, expected
):
    record = _record(panel_attributes=panel_attributes, layer=record_layer)

    assert diagram.build_element(record).layer == expected


def test_localized_copy_is_at_the_origin():
    element = diagram.build_element(_record(panel_attributes="Title"))

    local = element.localized()

    assert local.bounds == diagram.Bounds(0, 0, 30, 40)
    assert local.lines == element.lines
    assert element.bounds.pos == (10, 20)


def test_bounds_reject_negative_sizes():
    with pytest.raises(ValueError):
        diagram.Bounds(0, 0, -1, 0)


def test_bounds_extent_is_the_bottom_right_corner():
    bounds = diagram.Bounds(10, 20, 30, 40)

    assert bounds.extent == (40, 60)
    assert not bounds.is_empty
    assert diagram.Bounds(1, 1, 0, 5).is_empty
