from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .builder import build_tree
from .config import GenerationConfig, OutputFormat, build_config
from .formatters import render
from .graph import OrderedTree
from .labels import LabelAllocator
from .ordering import canonicalize
from .random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Outcome of one generation run."""

    tree: OrderedTree
    seed: int
    seed_was_derived: bool
    config: GenerationConfig

    def render(self, fmt: OutputFormat | str) -> str:
        return render(self.tree, fmt)


def _as_config(config: GenerationConfig | Mapping[str, Any] | None) -> GenerationConfig:
    if config is None:
        return GenerationConfig()
    if isinstance(config, GenerationConfig):
        return config
    return build_config(**dict(config))


def generate(
    config: GenerationConfig | Mapping[str, Any] | None = None,
    *,
    source: Optional[RandomSource] = None,
) -> GenerationResult:
    """
    Run the full pipeline: validate, draw, build, canonicalize.

    Parameters
    ----------
    config:
        A GenerationConfig, or a mapping of raw parameters validated with
        ``build_config``. Invalid parameters raise InvalidConfiguration
        before any random draw happens.
    source:
        Optional RandomSource to draw from. When omitted one is created from
        ``config.seed`` (or a derived seed when that is None).
    """
    cfg = _as_config(config)
    if source is None:
        source = RandomSource(cfg.seed)
    if source.seed_was_derived:
        logger.info("No seed given, derived seed %d", source.seed)

    allocator = LabelAllocator(source)
    name = cfg.name if cfg.name is not None else allocator.new_graph_name()
    raw = build_tree(cfg, source, allocator, root_name=cfg.name)
    tree = canonicalize(raw, name)

    logger.info(
        "Generated tree %r: %d nodes, max level %d, seed %d, %d draws",
        name,
        len(tree),
        tree.max_level,
        source.seed,
        source.draws,
    )
    return GenerationResult(
        tree=tree,
        seed=source.seed,
        seed_was_derived=source.seed_was_derived,
        config=cfg,
    )


def generate_text(
    config: GenerationConfig | Mapping[str, Any] | None = None,
    fmt: OutputFormat | str = OutputFormat.MERMAID,
) -> str:
    """Generate a tree and render it; the format is checked before generating."""
    fmt = OutputFormat.parse(fmt)
    return generate(config).render(fmt)
