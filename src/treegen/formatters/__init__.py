from __future__ import annotations

"""Text renderers for generated trees."""

from typing import Dict, List

from ..config import OutputFormat
from ..errors import UnsupportedFormat
from ..graph import OrderedTree
from .base import Formatter
from .dot import DotFormatter
from .mermaid import MermaidFormatter

FORMATTERS: Dict[str, Formatter] = {
    "dot": DotFormatter(),
    "mermaid": MermaidFormatter(),
}

# Order of documents when several formats are emitted together.
_BOTH = ("dot", "mermaid")


def get_formatter(name: str) -> Formatter:
    try:
        return FORMATTERS[name.strip().lower()]
    except KeyError:
        raise UnsupportedFormat(name, list(FORMATTERS)) from None


def formatters_for(fmt: OutputFormat | str) -> List[Formatter]:
    fmt = OutputFormat.parse(fmt)
    if fmt is OutputFormat.BOTH:
        return [FORMATTERS[name] for name in _BOTH]
    return [get_formatter(fmt.value)]


def render(tree: OrderedTree, fmt: OutputFormat | str) -> str:
    """
    Render ``tree`` in the requested format.

    For ``both`` the DOT document comes first, then a blank line, then the
    Mermaid document (whose ``---`` front matter opens the second part).
    """
    return "\n".join(formatter.render(tree) for formatter in formatters_for(fmt))


__all__ = [
    "Formatter",
    "DotFormatter",
    "MermaidFormatter",
    "FORMATTERS",
    "formatters_for",
    "get_formatter",
    "render",
]
