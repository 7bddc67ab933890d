from __future__ import annotations

import os

import pytest

from treegen.config import get_settings
from treegen.graph import Node, OrderedTree, RawTree
from treegen.ordering import canonicalize


def hand_built_raw() -> RawTree:
    """
    r0 (Root)
    ├── a1 (fox)
    │   └── c3 (yak)
    └── b2 (owl)
    """
    raw = RawTree(Node("r0", "Root", 0))
    raw.add_node(Node("b2", "owl", 1))
    raw.add_node(Node("a1", "fox", 1))
    raw.add_node(Node("c3", "yak", 2))
    raw.add_child("r0", "b2")
    raw.add_child("r0", "a1")
    raw.add_child("a1", "c3")
    return raw


@pytest.fixture
def small_tree() -> OrderedTree:
    return canonicalize(hand_built_raw(), "demo")


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    for key in list(os.environ):
        if key.startswith("TREEGEN_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
