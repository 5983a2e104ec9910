from __future__ import annotations

"""
Domain Exception Hierarchy.

Defines the failure conditions raised at the boundaries of the visualizer:
values that cannot be mapped onto the node model, cyclic containers,
malformed tree documents and Python sources that cannot be quoted.
"""

from typing import Any, Optional


class AstVizError(Exception):
    """Base class for every error raised by astviz."""


class UnclassifiableNode(AstVizError, TypeError):
    """
    Raised when a value is neither a leaf, a fixed composite nor a
    variable composite.

    Attributes:
        value: The offending value.
    """

    def __init__(self, value: Any, message: Optional[str] = None):
        self.value = value
        if message is None:
            message = f"Cannot classify value of type {type(value).__name__}: {value!r}"
        super().__init__(message)


class CyclicStructure(AstVizError, ValueError):
    """Raised when a container is reachable from itself."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Cyclic structure detected at {type(value).__name__} (id=0x{id(value):x})"
        )


class InvalidTreeDocument(AstVizError, ValueError):
    """Raised when a JSON tree document does not follow the node encoding."""


class QuoteError(AstVizError, ValueError):
    """
    Raised when Python source cannot be converted into a quoted tree.

    Attributes:
        lineno: Source line of the failure, when known.
    """

    def __init__(self, message: str, lineno: Optional[int] = None):
        self.lineno = lineno
        if lineno is not None:
            message = f"{message} (line {lineno})"
        super().__init__(message)
