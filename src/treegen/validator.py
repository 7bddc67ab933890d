from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import graphblas as gb

from .config import GenerationConfig
from .graph import OrderedTree

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ValidationReport:
    """
    Structural facts about a generated tree.

    ``problems`` lists every violated invariant; ``ok`` is True when it is
    empty. Averages are informational and compared against the configured
    means only in the log output.
    """

    num_nodes: int
    num_edges: int
    roots: List[str]
    max_level: int
    average_children: float
    average_width: float
    level_widths: List[int]
    problems: List[str] = field(default_factory=list)
    expected_depth: Optional[int] = None
    expected_child_mean: Optional[float] = None
    expected_width_mean: Optional[float] = None

    @property
    def ok(self) -> bool:
        return not self.problems


def validate_tree(tree: OrderedTree, config: Optional[GenerationConfig] = None) -> ValidationReport:
    """
    Check the single-root, single-parent, acyclic and depth invariants.

    Works on the graphblas adjacency matrix of ``tree``:

    - in-degrees come from a column-wise plus reduction;
    - levels come from repeated vector x matrix products starting at the
      root, using the plus_times semiring so that each entry counts the
      number of distinct paths reaching a node. A count above one, or a node
      reached twice, means the structure is not a tree.
    """
    n = len(tree)
    matrix = tree.to_matrix()
    problems: List[str] = []

    in_degree = np.zeros(n, dtype=np.int64)
    idx, vals = matrix.reduce_columnwise(gb.monoid.plus).new().to_coo()
    in_degree[idx] = vals

    roots = [tree.nodes[i].identity for i in np.flatnonzero(in_degree == 0)]
    if len(roots) != 1:
        problems.append(f"expected 1 root, found {len(roots)}")
    elif roots[0] != tree.root:
        problems.append(f"root {tree.root} has a parent; parentless node is {roots[0]}")

    for i in np.flatnonzero(in_degree > 1):
        problems.append(f"node {tree.nodes[i].identity} has {int(in_degree[i])} parents")

    # Breadth-first expansion from the root, bounded by n steps.
    level_widths: List[int] = []
    visited = np.zeros(n, dtype=bool)
    frontier = gb.Vector.from_coo([tree.index_of(tree.root)], [1], dtype=gb.dtypes.INT64, size=n)
    level = 0
    while frontier.nvals and level <= n:
        positions, paths = frontier.to_coo()
        if np.any(paths > 1):
            problems.append(f"multiple paths reach level {level}")
        if np.any(visited[positions]):
            problems.append(f"cycle detected at level {level}")
            break
        visited[positions] = True
        level_widths.append(len(positions))
        for pos in positions:
            if tree.nodes[pos].level != level:
                problems.append(
                    f"node {tree.nodes[pos].identity} records level "
                    f"{tree.nodes[pos].level} but sits at depth {level}"
                )
        frontier = frontier.vxm(matrix, gb.semiring.plus_times).new()
        level += 1

    unreachable = int(n - visited.sum())
    if unreachable:
        problems.append(f"{unreachable} nodes are unreachable from the root")

    max_level = max(len(level_widths) - 1, 0)
    if config is not None and max_level > config.depth:
        problems.append(f"max level {max_level} exceeds configured depth {config.depth}")

    num_edges = int(matrix.nvals)
    parents_with_children = len(tree.children)
    average_children = num_edges / parents_with_children if parents_with_children else 0.0
    below_root = level_widths[1:]
    average_width = sum(below_root) / len(below_root) if below_root else 0.0

    return ValidationReport(
        num_nodes=n,
        num_edges=num_edges,
        roots=roots,
        max_level=max_level,
        average_children=average_children,
        average_width=average_width,
        level_widths=level_widths,
        problems=problems,
        expected_depth=config.depth if config is not None else None,
        expected_child_mean=config.child_mean if config is not None else None,
        expected_width_mean=config.width_mean if config is not None else None,
    )


def log_report(report: ValidationReport) -> None:
    """Write a human-readable summary of ``report`` to the log."""
    logger.info("Validation results:")
    logger.info(" - nodes: %d, edges: %d", report.num_nodes, report.num_edges)
    if len(report.roots) == 1:
        logger.info(" - found root: %s", report.roots[0])
    logger.info(
        " - max level %d (configured depth %s)",
        report.max_level,
        report.expected_depth if report.expected_depth is not None else "n/a",
    )
    logger.info(
        " - average children per node with children: %.2f (expected average %s)",
        report.average_children,
        f"{report.expected_child_mean:.2f}" if report.expected_child_mean is not None else "n/a",
    )
    logger.info(
        " - average width without root level: %.2f (expected average %s)",
        report.average_width,
        f"{report.expected_width_mean:.2f}" if report.expected_width_mean is not None else "n/a",
    )
    for problem in report.problems:
        logger.error("Validation failed: %s", problem)
