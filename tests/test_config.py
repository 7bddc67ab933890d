import pytest

from treegen.config import (
    AppSettings,
    GenerationConfig,
    LoggingSettings,
    OutputFormat,
    build_config,
    get_settings,
    load_settings,
)
from treegen.errors import InvalidConfiguration, UnsupportedFormat


def test_defaults():
    config = build_config()
    assert config == GenerationConfig()
    assert config.depth == 5
    assert config.width_mean == 10
    assert config.width_std == 0.5
    assert config.child_mean == 3
    assert config.child_dev == 1
    assert config.seed is None
    assert config.name is None


def test_none_falls_back_to_default():
    assert build_config(depth=None, width_mean=None).depth == 5


@pytest.mark.parametrize(
    "params, parameter",
    [
        ({"depth": 0}, "depth"),
        ({"depth": -3}, "depth"),
        ({"width_std": -0.1}, "width_std"),
        ({"child_dev": -1}, "child_dev"),
        ({"width_mean": -1}, "width_mean"),
        ({"child_mean": float("nan")}, "child_mean"),
        ({"width_mean": float("inf")}, "width_mean"),
        ({"seed": -1}, "seed"),
        ({"seed": 2**64}, "seed"),
        ({"name": "   "}, "name"),
        ({"name": "x\n---\nflowchart LR"}, "name"),
        ({"name": "tab\there"}, "name"),
        ({"name": "bell\x07"}, "name"),
        ({"colour": "red"}, "colour"),
    ],
)
def test_invalid_parameters(params, parameter):
    with pytest.raises(InvalidConfiguration) as excinfo:
        build_config(**params)
    assert excinfo.value.parameter == parameter
    assert parameter in str(excinfo.value)


def test_largest_seed_accepted():
    assert build_config(seed=2**64 - 1).seed == 2**64 - 1


def test_config_is_frozen():
    config = build_config()
    with pytest.raises(Exception):
        config.depth = 9  # type: ignore[misc]


@pytest.mark.parametrize("value", ["dot", "MERMAID", " both ", OutputFormat.DOT])
def test_output_format_parse(value):
    assert isinstance(OutputFormat.parse(value), OutputFormat)


def test_output_format_rejects_unknown():
    with pytest.raises(UnsupportedFormat) as excinfo:
        OutputFormat.parse("svg")
    assert excinfo.value.value == "svg"
    assert excinfo.value.supported == ("dot", "mermaid", "both")


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("TREEGEN_GENERATION__DEPTH", "7")
    monkeypatch.setenv("TREEGEN_OUTPUT__FORMAT", "dot")
    monkeypatch.setenv("TREEGEN_LOGGING__LEVEL", "DEBUG")

    settings = AppSettings()

    assert settings.generation.depth == 7
    assert settings.output.format is OutputFormat.DOT
    assert settings.logging.level == "DEBUG"


def test_get_settings_overrides():
    settings = get_settings(logging=LoggingSettings(level="ERROR"))
    assert settings.logging.level == "ERROR"


def test_name_with_yaml_syntax_is_accepted():
    assert build_config(name="a: b #tag").name == "a: b #tag"


def test_load_settings_maps_invalid_generation_value(monkeypatch):
    monkeypatch.setenv("TREEGEN_GENERATION__DEPTH", "0")
    with pytest.raises(InvalidConfiguration) as excinfo:
        load_settings()
    assert excinfo.value.parameter == "depth"


def test_load_settings_maps_unknown_format(monkeypatch):
    monkeypatch.setenv("TREEGEN_OUTPUT__FORMAT", "xml")
    with pytest.raises(UnsupportedFormat) as excinfo:
        load_settings()
    assert excinfo.value.value == "xml"


def test_load_settings_maps_invalid_logging_level(monkeypatch):
    monkeypatch.setenv("TREEGEN_LOGGING__LEVEL", "LOUD")
    with pytest.raises(InvalidConfiguration) as excinfo:
        load_settings()
    assert excinfo.value.parameter == "logging.level"
