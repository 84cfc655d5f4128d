"""Validation, derived geometry and YAML loading of GenerationConfig."""

from pathlib import Path

import pytest

from brotgen.config import (
    ConfigurationRangeError,
    GenerationConfig,
    default_generation_config,
    get_config_by_index,
    load_named_sweep_configs,
    load_sweep_configs,
)

TESTS_DIR = Path(__file__).parent


@pytest.mark.parametrize("height", [512, 8192])
def test_height_bounds_are_inclusive(height):
    assert GenerationConfig(height=height, max_iterations=100).height == height


@pytest.mark.parametrize("height", [511, 8193])
def test_height_outside_bounds_fails(height):
    with pytest.raises(ConfigurationRangeError) as excinfo:
        GenerationConfig(height=height, max_iterations=100)
    assert excinfo.value.name == "height"
    assert (excinfo.value.low, excinfo.value.high) == (512, 8192)
    assert "height" in str(excinfo.value)


@pytest.mark.parametrize(
    "kwargs, name",
    [
        ({"max_iterations": 99}, "max_iterations"),
        ({"max_iterations": 32001}, "max_iterations"),
        ({"scale_factor": 0.99}, "scale_factor"),
        ({"scale_factor": 8.01}, "scale_factor"),
    ],
)
def test_other_parameters_are_range_checked(kwargs, name):
    data = {"height": 512, "max_iterations": 100, **kwargs}
    with pytest.raises(ConfigurationRangeError) as excinfo:
        GenerationConfig(**data)
    assert excinfo.value.name == name


def test_range_error_is_a_value_error():
    with pytest.raises(ValueError):
        GenerationConfig(height=100, max_iterations=100)


@pytest.mark.parametrize(
    "height, scale, width",
    [(512, 2.0, 1024), (512, 1.0, 512), (1000, 1.3, 1300), (513, 1.5, 770), (8192, 8.0, 65536)],
)
def test_width_is_rounded_scale_times_height(height, scale, width):
    config = GenerationConfig(height=height, max_iterations=100, scale_factor=scale)
    assert config.width == width
    assert config.width > 0


def test_derived_geometry():
    config = GenerationConfig(height=512, max_iterations=100, scale_factor=2.0)
    assert config.center == (512, 256)
    assert config.scale_squared == 4.0
    # Vertical extent is the center row itself, not divided by the scale.
    assert config.scale_extent == (256.0, 256.0)


def test_default_config_overrides():
    config = default_generation_config(height="1024", max_iterations=500)
    assert config.height == 1024
    assert config.max_iterations == 500
    assert config.scale_factor == 2.0
    assert config.to_dict() == {
        "height": 1024,
        "max_iterations": 500,
        "scale_factor": 2.0,
        "width": 2048,
    }


def test_load_sweep_configs_expands_product():
    configs = load_sweep_configs(TESTS_DIR / "test_configs.yaml")
    assert len(configs) == 4
    assert {(c.height, c.max_iterations) for c in configs} == {
        (512, 100),
        (512, 250),
        (600, 100),
        (600, 250),
    }
    assert all(c.scale_factor == 2.0 for c in configs)


def test_named_experiments(tmp_path):
    path = tmp_path / "sweeps.yaml"
    path.write_text(
        "defaults:\n"
        "  height: 512\n"
        "  max_iterations: 100\n"
        "experiments:\n"
        "  - name: small\n"
        "    sweep:\n"
        "      scale_factor: [1.0, 2.0]\n"
        "  - name: deep\n"
        "    defaults:\n"
        "      max_iterations: 4000\n"
        "    sweep:\n"
        "      height: 1024\n"
    )
    suites = dict(load_named_sweep_configs(path))
    assert [c.scale_factor for c in suites["small"]] == [1.0, 2.0]
    assert [(c.height, c.max_iterations) for c in suites["deep"]] == [(1024, 4000)]

    only_deep = load_named_sweep_configs(path, "deep")
    assert [name for name, _ in only_deep] == ["deep"]

    with pytest.raises(ValueError, match="not found"):
        load_named_sweep_configs(path, "missing")


def test_sweep_rejects_unknown_keys(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("defaults:\n  height: 512\n  max_iterations: 100\nsweep:\n  width: [10]\n")
    with pytest.raises(ValueError, match="Unsupported sweep keys"):
        load_sweep_configs(path)


def test_sweep_propagates_range_errors(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("defaults:\n  max_iterations: 100\nsweep:\n  height: [256]\n")
    with pytest.raises(ConfigurationRangeError):
        load_sweep_configs(path)


def test_get_config_by_index():
    path = TESTS_DIR / "test_configs.yaml"
    assert get_config_by_index(path, 0) == load_sweep_configs(path)[0]
    with pytest.raises(ValueError, match="out of range"):
        get_config_by_index(path, 4)


def test_to_dict_round_trips_through_constructor():
    config = GenerationConfig(height=700, max_iterations=2500, scale_factor=1.5)
    data = config.to_dict()
    assert data.pop("width") == config.width
    assert GenerationConfig(**data) == config
    assert set(data) == {"height", "max_iterations", "scale_factor"}
