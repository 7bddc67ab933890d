from __future__ import annotations

"""Mermaid flowchart rendering."""

import re
from dataclasses import dataclass

from ..graph import OrderedTree
from .base import Formatter

_PLAIN_LABEL = re.compile(r"[A-Za-z0-9_ .\-]+")


def _label(text: str) -> str:
    if _PLAIN_LABEL.fullmatch(text):
        return f"[{text}]"
    escaped = (
        text.replace('"', "#quot;")
        .replace("\r\n", "<br>")
        .replace("\n", "<br>")
        .replace("\r", "<br>")
    )
    return '["' + escaped + '"]'


def _yaml_string(text: str) -> str:
    """Double-quoted YAML scalar; safe for any text on a single line."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


@dataclass(slots=True)
class MermaidFormatter(Formatter):
    """
    Top-to-bottom flowchart with a front-matter title.

    One line per node in canonical order: ``id[label]``, followed by
    ``--> child & child ...`` when the node has children. Leaves thus show up
    as standalone declarations.
    """

    name: str = "mermaid"
    extension: str = "mmd"

    def render(self, tree: OrderedTree) -> str:
        lines = [
            "---",
            f"title: {_yaml_string(tree.name)}",
            "---",
            "flowchart TB",
        ]
        for node in tree.nodes:
            line = f"  {node.identity}{_label(node.label)}"
            children = tree.children_of(node.identity)
            if children:
                line += " --> " + " & ".join(children)
            lines.append(line)
        return "\n".join(lines) + "\n"
