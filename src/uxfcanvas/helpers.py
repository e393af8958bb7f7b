# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Miscellaneous utility functions used throughout the modules."""
from __future__ import annotations

import collections.abc as cabc
import itertools
import re
import typing as t

RE_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_T = t.TypeVar("_T")


def parse_int(value: str | None, default: int = 0) -> int:
    """Parse the leading integer of ``value``.

    Trailing garbage is ignored, so ``"12.5px"`` becomes ``12``.
    Values without any leading digits, as well as ``None``, result in
    ``default``.
    """
    if value is None:
        return default
    match = RE_LEADING_INT.match(value)
    if match is None:
        return default
    return int(match.group(1))


def parse_float(value: str | None, default: float) -> float:
    """Parse ``value`` as a float, falling back to ``default``."""
    if value is None:
        return default
    try:
        return float(value.strip())
    except ValueError:
        return default


@t.overload
def ntuples(
    num: int, iterable: cabc.Iterable[_T], *, pad: t.Literal[False] = ...
) -> cabc.Iterator[tuple[_T, ...]]: ...


@t.overload
def ntuples(
    num: int, iterable: cabc.Iterable[_T], *, pad: t.Literal[True]
) -> cabc.Iterator[tuple[_T | None, ...]]: ...


def ntuples(
    num: int,
    iterable: cabc.Iterable[_T],
    *,
    pad: bool = False,
) -> cabc.Iterator[tuple[_T | None, ...]]:
    r"""Yield N items of ``iterable`` at once.

    Parameters
    ----------
    num
        The number of items to yield at once.
    iterable
        An iterable.
    pad
        If the items in ``iterable`` are not evenly divisible by ``n``,
        pad the last yielded tuple with ``None``\ s.  If False, the last
        tuple will be discarded.

    Yields
    ------
    items
        A ``num`` long tuple of items from ``iterable``.
    """
    iterable = iter(iterable)
    while True:
        value = tuple(itertools.islice(iterable, num))
        if len(value) == num:
            yield value
        elif value and pad:
            yield value + (None,) * (num - len(value))
        else:
            break
