from __future__ import annotations

"""Formatter protocol for rendering an OrderedTree as text."""

from typing import Protocol

from ..graph import OrderedTree


class Formatter(Protocol):
    """Protocol for pure OrderedTree -> text renderers."""

    name: str
    extension: str

    def render(self, tree: OrderedTree) -> str:
        """Return the full document for ``tree``, ending with a newline."""
