"""Frame loop: one render per frame with incrementing seeds."""

from __future__ import annotations

import concurrent.futures as cf
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from shaky_lines.compositor import INK_CUTOFF, compose_pixels
from shaky_lines.config.schema import Config
from shaky_lines.data import Animation, RenderParams
from shaky_lines.diagnostics import DiagnosticsTracker, Timer
from shaky_lines.errors import InvalidParameter
from shaky_lines.mask import extract_mask
from shaky_lines.mask.extract import SourceImage
from shaky_lines.noise import generate_displacement, validate_seed
from shaky_lines.noise.field import SEED_MODULUS
from shaky_lines.pipeline import validate_params
from shaky_lines.remap import remap_mask
from shaky_lines.scheduler.control import RunControl

StatusCallback = Callable[[Dict[str, float | str | int]], None]


def frame_seeds(base_seed: int, count: int) -> List[int]:
    """Seeds for ``count`` frames: base_seed + index, wrapped to 32 bits."""

    base_seed = validate_seed(base_seed)
    return [(base_seed + index) % SEED_MODULUS for index in range(count)]


def _render_timed(mask: np.ndarray, params: RenderParams) -> Tuple[np.ndarray, Dict[str, float]]:
    """Render a frame from the shared mask and time each stage."""

    height, width = mask.shape
    with Timer() as field_timer:
        field = generate_displacement(width, height, params.cell_count, params.seed, params.strength)
    with Timer() as remap_timer:
        values = remap_mask(mask, field.dx, field.dy, params.antialias)
    with Timer() as compose_timer:
        pixels = compose_pixels(values, params.render_mode)
    stats = {
        "field_s": field_timer.elapsed,
        "remap_s": remap_timer.elapsed,
        "compose_s": compose_timer.elapsed,
        "ink_ratio": float(np.mean(values > INK_CUTOFF)),
    }
    return pixels, stats


def _validate_run(config: Config) -> None:
    if isinstance(config.fps, bool) or not isinstance(config.fps, int) or config.fps < 1:
        raise InvalidParameter(f"FPS must be an integer >= 1, got {config.fps!r}.")
    if isinstance(config.workers, bool) or not isinstance(config.workers, int) or config.workers < 1:
        raise InvalidParameter(f"Workers must be an integer >= 1, got {config.workers!r}.")


def render_animation(
    source: SourceImage,
    config: Config,
    control: RunControl | None = None,
    status_callback: StatusCallback | None = None,
) -> Animation:
    """Render ``config.fps`` frames (one second of animation) of ``source``.

    Frame ``i`` uses seed ``config.seed + i``. With ``config.workers > 1``
    frames are rendered on a thread pool but returned in frame order. Stop and
    pause requests are honoured between frames; a stopped run returns the
    frames finished so far with ``completed=False``.
    """

    _validate_run(config)
    seeds = frame_seeds(config.seed, config.fps)
    for seed in seeds:
        validate_params(config.render_params(seed))

    mask = extract_mask(source, config.threshold)
    mask.setflags(write=False)

    tracker = DiagnosticsTracker(
        enable_profiling=config.enable_profiling,
        profile_output=config.profile_output,
    )
    animation = Animation(fps=config.fps)
    total = len(seeds)

    def _record(index: int, seed: int, pixels: np.ndarray, stats: Dict[str, float]) -> None:
        animation.frames.append(pixels)
        animation.seeds.append(seed)
        frame_ms = (stats["field_s"] + stats["remap_s"] + stats["compose_s"]) * 1000.0
        tracker.track_frame(
            frame=index,
            seed=seed,
            field_s=stats["field_s"],
            remap_s=stats["remap_s"],
            compose_s=stats["compose_s"],
            ink_ratio=stats["ink_ratio"],
        )
        message = f"Frame {index + 1}/{total} | Seed {seed}"
        if config.enable_profiling:
            print(
                f"{message} | Ink {stats['ink_ratio']:.4f} | "
                f"t(field/remap/compose/total) "
                f"{stats['field_s']*1000:.2f}/"
                f"{stats['remap_s']*1000:.2f}/"
                f"{stats['compose_s']*1000:.2f}/"
                f"{frame_ms:.2f} ms"
            )
        else:
            print(message)
        if status_callback:
            status_callback(
                {
                    "frame": index + 1,
                    "frames": total,
                    "seed": seed,
                    "frame_ms": frame_ms,
                    "ink_ratio": stats["ink_ratio"],
                    "message": message,
                }
            )

    def _should_stop() -> bool:
        if control is None:
            return False
        control.wait_if_paused()
        return control.should_stop()

    if config.workers == 1:
        for index, seed in enumerate(seeds):
            if _should_stop():
                animation.completed = False
                break
            pixels, stats = _render_timed(mask, config.render_params(seed))
            _record(index, seed, pixels, stats)
    else:
        with cf.ThreadPoolExecutor(max_workers=config.workers) as ex:
            futures = [ex.submit(_render_timed, mask, config.render_params(seed)) for seed in seeds]
            try:
                for index, (seed, future) in enumerate(zip(seeds, futures)):
                    if _should_stop():
                        animation.completed = False
                        break
                    pixels, stats = future.result()
                    _record(index, seed, pixels, stats)
            finally:
                for future in futures:
                    future.cancel()

    tracker.export()
    return animation
