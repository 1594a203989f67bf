import json

import pytest

from shaky_lines import InvalidParameter
from shaky_lines.config import load_config, preset_config, with_overrides


def test_default_config_values():
    config = load_config(None, "default")
    assert config.preset.name == "default"
    assert config.strength == 3.0
    assert config.cell_count == 8
    assert config.threshold == 80
    assert config.seed == 1234
    assert config.fps == 15
    assert config.antialias
    assert config.render_mode == "mask"


def test_presets():
    wild = load_config(None, "WILD")
    assert wild.preset == preset_config("wild")
    assert wild.strength == 8.0
    assert wild.cell_count == 16
    assert wild.fps == 24


def test_unknown_preset():
    with pytest.raises(ValueError, match="Available"):
        preset_config("shaky")


def test_json_overrides(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "preset": "subtle",
                "threshold": 120,
                "transparent_background": True,
                "profile_output": "out/profile.json",
            }
        )
    )
    config = load_config(path, "default")
    assert config.preset.name == "subtle"
    assert config.strength == 1.0
    assert config.threshold == 120
    assert config.render_mode == "transparent"
    assert str(config.profile_output) == "out/profile.json"


def test_with_overrides_ignores_none():
    config = load_config(None, "default")
    updated = with_overrides(config, strength=None, seed=7, mask_only=False)
    assert updated.strength == config.strength
    assert updated.seed == 7
    assert updated.render_mode == "threshold"
    assert config.seed == 1234


def test_render_params():
    config = with_overrides(load_config(None, "default"), antialias=False)
    params = config.render_params(55)
    assert params.seed == 55
    assert params.strength == 3.0
    assert params.cell_count == 8
    assert not params.antialias
    assert params.render_mode == "mask"


@pytest.mark.parametrize(
    "raw",
    [
        {"cell_count": 2.7},
        {"seed": 1.5},
        {"fps": "12"},
        {"threshold": True},
    ],
)
def test_json_rejects_non_integer_counts(tmp_path, raw):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(raw))
    with pytest.raises(InvalidParameter):
        load_config(path, "default")


def test_json_accepts_integral_floats(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"cell_count": 12.0, "seed": 7.0}))
    config = load_config(path, "default")
    assert config.cell_count == 12
    assert config.seed == 7
    assert isinstance(config.cell_count, int)
