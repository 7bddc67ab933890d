from __future__ import annotations

"""Graphviz DOT rendering."""

from dataclasses import dataclass

from ..graph import OrderedTree
from .base import Formatter


def _quote(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
        .replace("\r", "\\n")
    )
    return f'"{escaped}"'


@dataclass(slots=True)
class DotFormatter(Formatter):
    """Directed graph with boxed nodes; one node statement and one edge statement per parent."""

    name: str = "dot"
    extension: str = "dot"

    def render(self, tree: OrderedTree) -> str:
        lines = [
            f"digraph {_quote(tree.name)} {{",
            "  node [shape = box]",
            "  graph [rankdir = TB]",
            "",
        ]
        for node in tree.nodes:
            lines.append(f"  {_quote(node.identity)} [label = {_quote(node.label)}];")
            children = tree.children_of(node.identity)
            if children:
                targets = " ".join(_quote(child) for child in children)
                lines.append(f"  {_quote(node.identity)} -> {{{targets}}};")
        lines.append("}")
        return "\n".join(lines) + "\n"
