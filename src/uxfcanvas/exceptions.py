# SPDX-FileCopyrightText: Copyright DB InfraGO AG
# SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by uxfcanvas."""

__all__ = [
    "InvalidDocumentError",
    "UXFCanvasError",
    "UnknownBackendError",
]


class UXFCanvasError(Exception):
    """Base class for all errors raised by this package."""


class InvalidDocumentError(UXFCanvasError, ValueError):
    """The given document is not a well-formed UXF document."""


class UnknownBackendError(UXFCanvasError, KeyError):
    """There is no drawing surface for the requested output format."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
