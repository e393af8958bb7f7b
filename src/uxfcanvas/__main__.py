# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Command line interface of uxfcanvas.

Every public module in :mod:`uxfcanvas._scripts` that defines a
:class:`click.Command` named ``main`` becomes a subcommand, with
underscores in the module name replaced by dashes.
"""
from __future__ import annotations

import importlib
import importlib.resources as imr
import logging

import click

from . import _scripts

LOG_FORMAT = "%(levelname)s:%(name)s: %(message)s"


def script_names() -> list[str]:
    """Return the names of all bundled subcommands, sorted."""
    return sorted(
        i.name.removesuffix(".py").replace("_", "-")
        for i in imr.files(_scripts).iterdir()
        if i.name.endswith(".py") and not i.name.startswith("_")
    )


class ScriptsGroup(click.Group):
    """A group that imports its subcommands only when they are used."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        return super().list_commands(ctx) + script_names()

    def get_command(
        self, ctx: click.Context, cmd_name: str
    ) -> click.Command | None:
        if cmd_name not in script_names():
            return super().get_command(ctx, cmd_name)

        module = importlib.import_module(
            f"{_scripts.__name__}.{cmd_name.replace('-', '_')}"
        )
        cmd = module.main
        assert isinstance(cmd, click.Command)
        cmd.name = cmd_name
        return cmd


@click.group(cls=ScriptsGroup, no_args_is_help=True)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Log more details, give twice for debug output",
)
@click.version_option(package_name="uxfcanvas")
def main(verbose: int) -> None:
    """Render UMLet UXF diagrams."""
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbose, logging.DEBUG)
    logging.basicConfig(level=level, format=LOG_FORMAT)


if __name__ == "__main__":
    main()
