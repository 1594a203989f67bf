"""Configuration schema and loading utilities."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from shaky_lines.compositor import resolve_render_mode
from shaky_lines.data import RenderParams
from shaky_lines.errors import InvalidParameter


@dataclass(frozen=True)
class PresetConfig:
    """Named bundle of shake defaults."""

    name: str
    strength: float
    cell_count: int
    fps: int


@dataclass(frozen=True)
class Config:
    """Top-level configuration for an animation run."""

    preset: PresetConfig
    strength: float = 3.0
    cell_count: int = 8
    threshold: int = 80
    seed: int = 1234
    fps: int = 15
    antialias: bool = True
    mask_only: bool = True
    transparent_background: bool = False
    workers: int = 1
    enable_profiling: bool = False
    profile_output: Optional[Path] = None
    frames_dir: Optional[Path] = None

    @property
    def render_mode(self) -> str:
        return resolve_render_mode(self.mask_only, self.transparent_background)

    def render_params(self, seed: int) -> RenderParams:
        """Parameters for the frame rendered with ``seed``."""

        return RenderParams(
            strength=self.strength,
            cell_count=self.cell_count,
            threshold=self.threshold,
            seed=seed,
            antialias=self.antialias,
            render_mode=self.render_mode,
        )


_PRESETS: Dict[str, PresetConfig] = {
    "subtle": PresetConfig(name="subtle", strength=1.0, cell_count=6, fps=12),
    "default": PresetConfig(name="default", strength=3.0, cell_count=8, fps=15),
    "wild": PresetConfig(name="wild", strength=8.0, cell_count=16, fps=24),
}


def preset_config(name: str) -> PresetConfig:
    """Return a preset configuration by name."""

    key = name.lower()
    if key not in _PRESETS:
        raise ValueError(f"Unknown preset '{name}'. Available: {', '.join(_PRESETS)}")
    return _PRESETS[key]


def _merge_dict(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overrides into base without mutating either input."""

    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_dict(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Path], preset_name: str) -> Config:
    """Load configuration from JSON and apply preset defaults.

    The preset named in the file (if any) wins over ``preset_name``; explicit
    keys in the file win over the preset's values.
    """

    raw: Dict[str, Any] = {}
    if path:
        raw = json.loads(Path(path).read_text())
    preset = preset_config(str(raw.get("preset", preset_name)))

    base = {
        "preset": preset.name,
        "strength": preset.strength,
        "cell_count": preset.cell_count,
        "threshold": 80,
        "seed": 1234,
        "fps": preset.fps,
        "antialias": True,
        "mask_only": True,
        "transparent_background": False,
        "workers": 1,
        "enable_profiling": False,
        "profile_output": None,
        "frames_dir": None,
    }
    merged = _merge_dict(base, raw)

    return Config(
        preset=preset,
        strength=float(merged["strength"]),
        cell_count=_as_int(merged, "cell_count"),
        threshold=_as_int(merged, "threshold"),
        seed=_as_int(merged, "seed"),
        fps=_as_int(merged, "fps"),
        antialias=bool(merged["antialias"]),
        mask_only=bool(merged["mask_only"]),
        transparent_background=bool(merged["transparent_background"]),
        workers=_as_int(merged, "workers"),
        enable_profiling=bool(merged["enable_profiling"]),
        profile_output=Path(merged["profile_output"]) if merged.get("profile_output") else None,
        frames_dir=Path(merged["frames_dir"]) if merged.get("frames_dir") else None,
    )


def _as_int(merged: Dict[str, Any], key: str) -> int:
    value = merged[key]
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameter(f"Config field '{key}' must be an integer, got {value!r}.")
    return value


def with_overrides(config: Config, **changes: Any) -> Config:
    """Return a copy of ``config`` with the non-None ``changes`` applied."""

    applied = {key: value for key, value in changes.items() if value is not None}
    return replace(config, **applied)
