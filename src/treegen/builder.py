from __future__ import annotations

import logging
from typing import List, Optional

from .config import GenerationConfig
from .graph import Node, RawTree
from .labels import LabelAllocator
from .random_source import RandomSource

logger = logging.getLogger(__name__)


def build_tree(
    config: GenerationConfig,
    source: RandomSource,
    allocator: LabelAllocator,
    root_name: Optional[str] = None,
) -> RawTree:
    """
    Grow a random tree level by level.

    For each level L in 1..depth:

    - draw the level's width target W ~ N(width_mean, width_std);
    - walk the previous level's nodes in the order they were created and,
      while fewer than W nodes exist at L, draw the parent's child count
      C ~ N(child_mean, child_dev) and create min(C, W - generated) children;
    - once W is reached the current parent's batch is cut short and every
      later parent stays childless at this level.

    Generation stops early when a level comes out empty. Nodes on the last
    processed level never get children. The walk is iterative, so depth does
    not grow the call stack.

    Draw order: W, then per parent C, then per child identity and label.
    """
    root = Node(
        identity=allocator.new_identity(),
        label=allocator.new_label(is_root=True, custom_root_name=root_name),
        level=0,
    )
    tree = RawTree(root)
    frontier: List[Node] = [root]

    for level in range(1, config.depth + 1):
        if not frontier:
            logger.debug("Level %d: no parents left, stopping", level)
            break

        target = source.next_normal_nonnegative_int(config.width_mean, config.width_std)
        tree.width_targets.append(target)

        generated = 0
        next_frontier: List[Node] = []
        for parent in frontier:
            if generated >= target:
                break
            count = source.next_normal_nonnegative_int(config.child_mean, config.child_dev)
            batch = min(count, target - generated)
            for _ in range(batch):
                child = tree.add_node(
                    Node(
                        identity=allocator.new_identity(),
                        label=allocator.new_label(),
                        level=level,
                    )
                )
                tree.add_child(parent.identity, child.identity)
                next_frontier.append(child)
            generated += batch

        logger.debug(
            "Level %d: target width %d, produced %d from %d parents",
            level,
            target,
            generated,
            len(frontier),
        )
        frontier = next_frontier

    return tree
