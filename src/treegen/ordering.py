from __future__ import annotations

"""Canonical ordering of a freshly built tree."""

from .graph import OrderedTree, RawTree


def canonicalize(raw: RawTree, name: str) -> OrderedTree:
    """
    Freeze ``raw`` into an OrderedTree.

    Nodes and every children list are sorted by identity, so the result
    depends only on the tree's content and never on set or dict iteration
    order. Identities and labels are carried over untouched.
    """
    nodes = sorted(raw.nodes.values(), key=lambda node: node.identity)
    children = {parent: sorted(kids) for parent, kids in raw.children.items()}
    return OrderedTree(
        name=name,
        root=raw.root,
        nodes=nodes,
        children=children,
        width_targets=raw.width_targets,
    )
