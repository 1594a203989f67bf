"""Configuration loading and presets."""

from shaky_lines.config.schema import (
    Config,
    PresetConfig,
    load_config,
    preset_config,
    with_overrides,
)

__all__ = [
    "Config",
    "PresetConfig",
    "load_config",
    "preset_config",
    "with_overrides",
]
