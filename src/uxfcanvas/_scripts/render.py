# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0

import dataclasses
import logging
import pathlib

import click

from uxfcanvas import _scripts, canvas

logger = logging.getLogger(__name__)

FORMATS = ("png", "svg")


@click.command()
@click.argument(
    "input_file",
    metavar="INPUT",
    type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path),
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=pathlib.Path),
    help="File to write the image to [default: INPUT with new suffix]",
)
@click.option(
    "-f",
    "--format",
    "format_",
    type=click.Choice(FORMATS, case_sensitive=False),
    help="Image output format [default: from output suffix, or png]",
    envvar="UXFCANVAS_FORMAT",
    show_envvar=True,
)
@click.option(
    "--diagram",
    "index",
    type=click.IntRange(min=0),
    default=0,
    help="Index of the diagram to render",
    show_default=True,
    envvar="UXFCANVAS_DIAGRAM",
    show_envvar=True,
)
@click.option(
    "--font-family",
    help="Override the font family, e.g. 'sans-serif'",
    envvar="UXFCANVAS_FONT_FAMILY",
    show_envvar=True,
)
@click.option(
    "--font-size",
    type=click.FloatRange(min=0, min_open=True),
    help="Override the font size at zoom 1",
    envvar="UXFCANVAS_FONT_SIZE",
    show_envvar=True,
)
@click.option(
    "--zoom",
    type=click.FloatRange(min=0, min_open=True),
    help="Override the zoom factor, where 1 means 100%",
    envvar="UXFCANVAS_ZOOM",
    show_envvar=True,
)
def main(
    input_file: pathlib.Path,
    output: pathlib.Path | None,
    format_: str | None,
    index: int,
    font_family: str | None,
    font_size: float | None,
    zoom: float | None,
) -> None:
    """Render a diagram from a UMLet UXF file.

    \b
    Exit codes
    ----------

    \b
    - 0 in case of success
    - 1 if the input is invalid or contains nothing to render
    - 2 for CLI usage errors
    """  # noqa: D301
    if format_ is None:
        suffix = output.suffix.lower().lstrip(".") if output else ""
        format_ = suffix if suffix in FORMATS else "png"
    format_ = format_.lower()
    if output is None:
        output = input_file.with_suffix(f".{format_}")

    diagram = _scripts.load_diagram(input_file, index)
    if not diagram.records:
        raise click.ClickException(
            f"Diagram {index} in {input_file} has no elements to render"
        )

    overrides = {
        "font_family": font_family,
        "font_size": font_size,
        "zoom": zoom,
    }
    config = dataclasses.replace(
        diagram.config,
        **{k: v for k, v in overrides.items() if v is not None},
    )
    logger.debug("Rendering with %r", config)

    result = diagram.render(canvas.get_backend(format_), config=config)
    if format_ == "png":
        result.target.save(output, format="PNG")
    else:
        result.target.save(output)
    click.echo(
        f"Wrote {result.size.x}x{result.size.y} {format_} image to {output}",
        err=True,
    )
