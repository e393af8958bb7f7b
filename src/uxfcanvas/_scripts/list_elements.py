# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

import pathlib

import click

from uxfcanvas import _scripts, compositor


@click.command()
@click.argument(
    "input_file",
    metavar="INPUT",
    type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path),
)
@click.option(
    "--diagram",
    "index",
    type=click.IntRange(min=0),
    default=0,
    help="Index of the diagram to list",
    show_default=True,
)
def main(input_file: pathlib.Path, index: int) -> None:
    """List the elements of a diagram in drawing order."""
    diagram = _scripts.load_diagram(input_file, index)
    elements = compositor.Compositor.layout(diagram.records)
    if not elements:
        raise click.ClickException(f"Diagram {index} has no elements")

    for element in elements:
        b = element.bounds
        first_line = element.lines[0] if element.lines else ""
        click.echo(
            f"{element.layer}\t{element.kind}"
            f"\t{b.x},{b.y},{b.w},{b.h}\t{first_line}"
        )
