# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Render UMLet diagrams onto raster and vector surfaces."""

from importlib import metadata

try:
    __version__ = metadata.version("uxfcanvas")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+unknown"
del metadata

from .compositor import Compositor as Compositor
from .compositor import RenderResult as RenderResult
from .config import RenderConfig as RenderConfig
from .exceptions import *
from .uxf import UXFDiagram as UXFDiagram
from .uxf import load as load
