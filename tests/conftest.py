# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Global fixtures for pytest."""

import pathlib

import pytest

import uxfcanvas.config
from uxfcanvas import canvas, diagram, metrics

TEST_DATA = pathlib.Path(__file__).parent / "data"


class Documents:
    example = TEST_DATA / "example.uxf"


@pytest.fixture(scope="session")
def text_metrics() -> metrics.TextMetrics:
    """A metrics service shared across the entire test session."""
    return metrics.TextMetrics()


@pytest.fixture
def target(text_metrics: metrics.TextMetrics) -> canvas.RecordingTarget:
    return canvas.RecordingTarget(200, 100, metrics=text_metrics)


@pytest.fixture
def render_config() -> uxfcanvas.config.RenderConfig:
    return uxfcanvas.config.RenderConfig()


@pytest.fixture(autouse=True)
def no_debug_outlines(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(uxfcanvas.config, "DEBUG", False)


def make_element(
    kind: str = "Default",
    panel_attributes: str = "",
    *,
    w: int = 100,
    h: int = 60,
    points: str = "",
) -> diagram.DiagramElement:
    """Build a local element, as the compositor hands it to renderers."""
    record = diagram.ElementRecord(
        id=kind,
        coordinates={"x": 0, "y": 0, "w": w, "h": h},
        panel_attributes=panel_attributes,
        additional_attributes=points,
    )
    return diagram.build_element(record)
