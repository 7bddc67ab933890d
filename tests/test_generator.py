import pytest

from treegen.config import build_config
from treegen.errors import InvalidConfiguration, UnsupportedFormat
from treegen.generator import generate, generate_text
from treegen.random_source import RandomSource


def test_same_seed_same_text():
    params = {"depth": 5, "width_mean": 10, "width_std": 2, "child_mean": 3, "child_dev": 1, "seed": 77}
    first = generate(params)
    second = generate(params)

    for fmt in ("dot", "mermaid", "both"):
        assert first.render(fmt) == second.render(fmt)


def test_different_seeds_differ():
    assert generate_text({"seed": 1}) != generate_text({"seed": 2})


def test_seed_is_reported():
    result = generate({"seed": 5})
    assert result.seed == 5
    assert not result.seed_was_derived

    derived = generate({"depth": 2})
    assert derived.seed_was_derived
    replay = generate({"depth": 2, "seed": derived.seed})
    assert replay.render("both") == derived.render("both")


def test_scenario_root_with_three_children():
    result = generate({"depth": 1, "width_mean": 3, "width_std": 0, "child_mean": 5, "child_dev": 0, "seed": 10})
    tree = result.tree

    assert len(tree) == 4
    assert len(tree.children_of(tree.root)) == 3
    assert tree.max_level == 1
    assert tree.width_targets == (3,)


def test_degenerate_width_gives_lone_root():
    result = generate({"depth": 3, "width_mean": 0, "width_std": 0, "seed": 10})
    assert len(result.tree) == 1
    assert result.tree.levels() == [(result.tree.root,)]


def test_invalid_configuration_raised_before_any_draw():
    source = RandomSource(1)
    with pytest.raises(InvalidConfiguration) as excinfo:
        generate({"width_std": -1.0}, source=source)
    assert excinfo.value.parameter == "width_std"
    assert source.draws == 0


def test_unsupported_format_raised_before_generation():
    with pytest.raises(UnsupportedFormat):
        generate_text({"seed": 1}, "png")


def test_explicit_source_is_used():
    source = RandomSource(123)
    result = generate(build_config(depth=1, width_mean=3, width_std=0, child_mean=5, child_dev=0), source=source)

    assert result.seed == 123
    # graph name (2) + root identity + W + C + 3 x (identity + label)
    assert source.draws == 11


def test_custom_name_is_title_and_root_label():
    result = generate({"seed": 4, "name": "Family"})
    tree = result.tree

    assert tree.name == "Family"
    assert tree.node(tree.root).label == "Family"
    assert result.render("mermaid").startswith("---\ntitle: \"Family\"\n---\n")


def test_generated_name_and_root_label():
    tree = generate({"seed": 4}).tree
    assert "_" in tree.name
    assert tree.node(tree.root).label == "Root"


def test_name_draws_are_part_of_the_stream():
    """A custom name skips the two name draws, so the structure shifts."""
    unnamed = generate({"seed": 8})
    named = generate({"seed": 8, "name": "x"})
    assert unnamed.tree.root != named.tree.root
