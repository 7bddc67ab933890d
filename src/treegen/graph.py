from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

import numpy as np
import graphblas as gb
from graphblas import Matrix

from .errors import (
    ChildAlreadyExists,
    DuplicateIdentity,
    GraphError,
    MultipleParents,
    UnknownNode,
)


@dataclass(frozen=True, slots=True)
class Node:
    """A generated node: opaque identity, display label and depth from the root."""

    identity: str
    label: str
    level: int


class RawTree:
    """
    Mutable container filled by the tree builder.

    Children are kept in unordered sets; determinism of the final output is
    the job of ``ordering.canonicalize``, not of this storage.

    Guards:
      - a child must be a known node that has no parent yet;
      - a child's level must be its parent's level + 1;
      - the same edge cannot be added twice.
    """

    __slots__ = ("root", "nodes", "children", "width_targets", "_parent")

    def __init__(self, root: Node) -> None:
        if root.level != 0:
            raise GraphError(f"root must be at level 0, got {root.level}")
        self.root: str = root.identity
        self.nodes: Dict[str, Node] = {root.identity: root}
        self.children: Dict[str, Set[str]] = {}
        self.width_targets: List[int] = []
        self._parent: Dict[str, str] = {}

    def add_node(self, node: Node) -> Node:
        if node.identity in self.nodes:
            raise DuplicateIdentity(node.identity)
        self.nodes[node.identity] = node
        return node

    def get_node(self, identity: str) -> Node:
        try:
            return self.nodes[identity]
        except KeyError:
            raise UnknownNode(identity) from None

    def add_child(self, parent: str, child: str) -> None:
        parent_node = self.get_node(parent)
        child_node = self.get_node(child)

        if child in self.children.get(parent, ()):
            raise ChildAlreadyExists(parent, child)
        if child == self.root:
            raise GraphError(f"root {child} cannot be linked as a child")
        existing = self._parent.get(child)
        if existing is not None:
            raise MultipleParents(child, existing, parent)
        if child_node.level != parent_node.level + 1:
            raise GraphError(
                f"child {child} at level {child_node.level} cannot hang below "
                f"{parent} at level {parent_node.level}"
            )

        self.children.setdefault(parent, set()).add(child)
        self._parent[child] = parent

    def __len__(self) -> int:
        return len(self.nodes)


class OrderedTree:
    """
    Immutable canonical form of a generated tree.

    - ``nodes``: every node, sorted by identity.
    - ``children``: identity -> tuple of child identities sorted by identity
      (only parents with at least one child appear).
    - ``width_targets``: the width target W drawn for each processed level,
      index 0 being level 1.
    """

    __slots__ = ("name", "root", "nodes", "children", "width_targets", "_by_id", "_index", "_parent")

    def __init__(
        self,
        name: str,
        root: str,
        nodes: Sequence[Node],
        children: Mapping[str, Sequence[str]],
        width_targets: Sequence[int] = (),
    ) -> None:
        self.name = name
        self.root = root
        self.nodes: Tuple[Node, ...] = tuple(nodes)
        self.children: Mapping[str, Tuple[str, ...]] = MappingProxyType(
            {parent: tuple(kids) for parent, kids in children.items() if kids}
        )
        self.width_targets: Tuple[int, ...] = tuple(width_targets)

        self._by_id: Dict[str, Node] = {n.identity: n for n in self.nodes}
        self._index: Dict[str, int] = {n.identity: i for i, n in enumerate(self.nodes)}
        self._parent: Dict[str, str] = {
            child: parent for parent, kids in self.children.items() for child in kids
        }

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #
    def node(self, identity: str) -> Node:
        try:
            return self._by_id[identity]
        except KeyError:
            raise UnknownNode(identity) from None

    def index_of(self, identity: str) -> int:
        """Position of ``identity`` in the canonical node order."""
        try:
            return self._index[identity]
        except KeyError:
            raise UnknownNode(identity) from None

    def children_of(self, identity: str) -> Tuple[str, ...]:
        return self.children.get(identity, ())

    def parent_of(self, identity: str) -> Optional[str]:
        return self._parent.get(identity)

    def edges(self) -> Iterator[Tuple[str, str]]:
        """Yield (parent, child) pairs in canonical order."""
        for node in self.nodes:
            for child in self.children_of(node.identity):
                yield node.identity, child

    def levels(self) -> List[Tuple[str, ...]]:
        """Node identities grouped by level, each group in canonical order."""
        grouped: Dict[int, List[str]] = {}
        for node in self.nodes:
            grouped.setdefault(node.level, []).append(node.identity)
        return [tuple(grouped[level]) for level in sorted(grouped)]

    @property
    def max_level(self) -> int:
        return max(node.level for node in self.nodes)

    # ------------------------------------------------------------------ #
    # Sparse views
    # ------------------------------------------------------------------ #
    def edge_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Source and target positions of every edge, in canonical order."""
        pairs = list(self.edges())
        src = np.fromiter((self._index[p] for p, _ in pairs), dtype=np.int64, count=len(pairs))
        dst = np.fromiter((self._index[c] for _, c in pairs), dtype=np.int64, count=len(pairs))
        return src, dst

    def to_matrix(self) -> Matrix:
        """
        Adjacency matrix over canonical node positions.

        Entry (i, j) is 1 when node i is the parent of node j.
        """
        n = len(self.nodes)
        src, dst = self.edge_arrays()
        if len(src) == 0:
            return gb.Matrix(gb.dtypes.INT64, nrows=n, ncols=n)
        return gb.Matrix.from_coo(
            src,
            dst,
            np.ones(len(src), dtype=np.int64),
            nrows=n,
            ncols=n,
        )

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #
    def __len__(self) -> int:
        return len(self.nodes)

    def __repr__(self) -> str:
        return (
            f"OrderedTree(name={self.name!r}, nodes={len(self.nodes)}, "
            f"edges={len(self._parent)}, max_level={self.max_level})"
        )
