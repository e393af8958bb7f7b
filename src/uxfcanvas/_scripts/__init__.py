# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Shared helpers for the command line tools."""
from __future__ import annotations

import pathlib

import click

import uxfcanvas


def load_diagram(path: pathlib.Path, index: int) -> uxfcanvas.UXFDiagram:
    """Load the diagram at ``index`` from a UXF file.

    Errors are reported as :class:`click.ClickException`, which makes
    the command exit with code 1.
    """
    try:
        diagrams = uxfcanvas.load(path)
    except (uxfcanvas.InvalidDocumentError, OSError) as err:
        raise click.ClickException(str(err)) from None

    if not diagrams:
        raise click.ClickException(f"No diagrams found in {path}")
    try:
        return diagrams[index]
    except IndexError:
        raise click.ClickException(
            f"Diagram index {index} out of range,"
            f" {path} contains {len(diagrams)} diagram(s)"
        ) from None
