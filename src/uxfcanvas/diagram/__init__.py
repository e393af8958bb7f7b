# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""The diagram model and the parsers that build it.

This module turns raw element records into :class:`DiagramElement`
objects, and provides the text and line decoding used when drawing
them.
"""
# isort: off
from ._vector2d import *

from .capstyle import *
from ._attributes import *
from ._formatted import *
from ._element import *
from ._lines import *

import typing as t

if not t.TYPE_CHECKING:
    from ._vector2d import __all__ as _all1
    from .capstyle import __all__ as _all2
    from ._attributes import __all__ as _all3
    from ._formatted import __all__ as _all4
    from ._element import __all__ as _all5
    from ._lines import __all__ as _all6

    __all__ = [*_all1, *_all2, *_all3, *_all4, *_all5, *_all6]

    del _all1, _all2, _all3, _all4, _all5, _all6
del t
