import random

from treegen.formatters import render
from treegen.graph import Node, RawTree
from treegen.ordering import canonicalize

from conftest import hand_built_raw


def shuffled_copy(raw: RawTree, seed: int) -> RawTree:
    """Rebuild ``raw`` with nodes and edges inserted in a shuffled order."""
    rng = random.Random(seed)
    others = [n for n in raw.nodes.values() if n.identity != raw.root]
    rng.shuffle(others)
    edges = [(p, c) for p, kids in raw.children.items() for c in kids]
    rng.shuffle(edges)

    copy = RawTree(raw.nodes[raw.root])
    for node in others:
        copy.add_node(node)
    for parent, child in edges:
        copy.add_child(parent, child)
    copy.width_targets.extend(raw.width_targets)
    return copy


def test_nodes_and_children_sorted_by_identity(small_tree):
    identities = [n.identity for n in small_tree.nodes]
    assert identities == sorted(identities)
    for kids in small_tree.children.values():
        assert list(kids) == sorted(kids)


def test_insertion_order_does_not_change_output():
    raw = hand_built_raw()
    expected = render(canonicalize(raw, "demo"), "both")

    for seed in range(10):
        assert render(canonicalize(shuffled_copy(raw, seed), "demo"), "both") == expected


def test_rendering_is_idempotent(small_tree):
    assert render(small_tree, "dot") == render(small_tree, "dot")
    assert render(small_tree, "mermaid") == render(small_tree, "mermaid")


def test_labels_and_levels_untouched():
    raw = hand_built_raw()
    tree = canonicalize(raw, "demo")
    assert {n.identity: n for n in tree.nodes} == raw.nodes


def test_childless_parents_are_not_listed():
    raw = RawTree(Node("r", "Root", 0))
    tree = canonicalize(raw, "solo")
    assert dict(tree.children) == {}
    assert [n.identity for n in tree.nodes] == ["r"]
