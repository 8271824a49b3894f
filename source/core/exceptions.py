"""Shared exception classes and expected-error tuple for services/core."""

from __future__ import annotations

from typing import Any, Final


class AppError(Exception):
    """Base class for expected application-layer failures."""


class NodeEditError(AppError):
    """Base class for failures while writing a node edit back into the document."""


class ParseError(NodeEditError, ValueError):
    """Raised when the document text is not well-formed JSON."""

    def __init__(self, message: str, lineno: int | None = None, colno: int | None = None) -> None:
        super().__init__(message)
        self.lineno = lineno
        self.colno = colno


class InvalidPath(NodeEditError, LookupError):
    """Raised when a path segment does not resolve inside the parsed document."""

    def __init__(self, message: str, path: Any = ()) -> None:
        super().__init__(message)
        self.path = tuple(path or ())


EXPECTED_ERRORS: Final = (
    OSError,
    ValueError,
    TypeError,
    RuntimeError,
    AttributeError,
    KeyError,
    IndexError,
    ImportError,
)
