# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Parsing of inline ``*bold*``, ``/italic/`` and ``_underline_`` markup."""
from __future__ import annotations

__all__ = [
    "DELIMITERS",
    "FormattedTextNode",
    "TextStyle",
    "parse_formatted_text",
    "plain_text",
    "source_text",
]

import collections.abc as cabc
import dataclasses
import re

DELIMITERS = {"*": "bold", "/": "italic", "_": "underline"}
"""Maps each markup character to the style flag it switches on."""
RE_STYLED_RUN = re.compile(
    r"(?<![A-Za-z0-9])(?P<delim>[*/_])(?P<inner>.+?)(?P=delim)"
)


@dataclasses.dataclass(frozen=True)
class TextStyle:
    """Style flags of a text run."""

    bold: bool = False
    italic: bool = False
    underline: bool = False

    def combine(self, delimiter: str) -> TextStyle:
        """Return a copy with the flag for ``delimiter`` switched on."""
        return dataclasses.replace(self, **{DELIMITERS[delimiter]: True})


@dataclasses.dataclass(frozen=True)
class FormattedTextNode:
    """A run of styled text.

    Leaf nodes carry their text in ``literal``. Nodes with children
    derive their text from the children instead. The delimiter
    characters of a styled run are kept as leaves flagged with
    ``markup``, so that the leaves always add up to the source line,
    but they are never drawn.
    """

    style: TextStyle = TextStyle()
    literal: str = ""
    children: tuple[FormattedTextNode, ...] = ()
    markup: bool = False

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def leaves(self) -> cabc.Iterator[FormattedTextNode]:
        """Iterate over all leaves below this node, left to right."""
        if self.is_leaf:
            yield self
            return
        for child in self.children:
            yield from child.leaves()

    def drawable_leaves(self) -> cabc.Iterator[FormattedTextNode]:
        """Iterate over the leaves that carry visible text."""
        return (i for i in self.leaves() if not i.markup)

    @property
    def text(self) -> str:
        """The visible text of this node, without markup characters."""
        return "".join(i.literal for i in self.drawable_leaves())


def parse_formatted_text(
    line: str, style: TextStyle = TextStyle()
) -> list[FormattedTextNode]:
    """Parse one line of text into a sequence of styled runs.

    A run starts with one of the :data:`DELIMITERS` at the start of the
    line or after a non-alphanumeric character, and extends up to the
    next occurrence of the same character. The inside of every run is
    parsed again, so styles can be nested; flags are inherited by all
    nested runs. Delimiters without a partner are plain text.

    Parameters
    ----------
    line
        The text to parse.
    style
        The style inherited from the enclosing run.

    Returns
    -------
    nodes
        The runs covering the whole line. A line without markup yields
        exactly one leaf holding the entire line.
    """
    nodes: list[FormattedTextNode] = []
    pos = 0
    for match in RE_STYLED_RUN.finditer(line):
        if match.start() > pos:
            nodes.append(FormattedTextNode(style, line[pos : match.start()]))

        delim = match.group("delim")
        inner_style = style.combine(delim)
        nodes.append(
            FormattedTextNode(
                inner_style,
                children=(
                    FormattedTextNode(inner_style, delim, markup=True),
                    *parse_formatted_text(match.group("inner"), inner_style),
                    FormattedTextNode(inner_style, delim, markup=True),
                ),
            )
        )
        pos = match.end()

    if pos < len(line) or not nodes:
        nodes.append(FormattedTextNode(style, line[pos:]))
    return nodes


def plain_text(nodes: cabc.Iterable[FormattedTextNode]) -> str:
    """Return the visible text of ``nodes``, without any markup."""
    return "".join(node.text for node in nodes)


def source_text(nodes: cabc.Iterable[FormattedTextNode]) -> str:
    """Reconstruct the original line from parsed ``nodes``."""
    return "".join(leaf.literal for node in nodes for leaf in node.leaves())
