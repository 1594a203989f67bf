"""Command line entry point for rendering shaky line animations."""

from __future__ import annotations

import argparse
from pathlib import Path

from shaky_lines.config import load_config, with_overrides
from shaky_lines.io import encode_preview_gif, load_source_image, write_frames_dir, write_frames_zip
from shaky_lines.scheduler import render_animation


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Shaky line animation renderer")
    parser.add_argument("--source", type=Path, required=True, help="Path to a black/white source image")
    parser.add_argument("--output", type=Path, required=True, help="Output ZIP path for the frames")
    parser.add_argument("--config", type=Path, help="Optional JSON config path")
    parser.add_argument(
        "--preset",
        type=str,
        default="default",
        choices=["subtle", "default", "wild"],
        help="Shake preset",
    )
    parser.add_argument("--strength", type=float, help="Displacement strength in pixels")
    parser.add_argument("--cells", type=int, help="Noise cells along the image width")
    parser.add_argument("--threshold", type=int, help="Ink threshold (0-255)")
    parser.add_argument("--seed", type=int, help="Base seed; frame i uses seed + i")
    parser.add_argument("--fps", type=int, help="Frames to render (one second of animation)")
    parser.add_argument("--no-antialias", action="store_true", help="Use nearest sampling")
    parser.add_argument(
        "--threshold-mode",
        action="store_true",
        help="Re-threshold the whole image instead of moving only the ink",
    )
    parser.add_argument("--transparent", action="store_true", help="Transparent background")
    parser.add_argument("--workers", type=int, help="Render frames on this many threads")
    parser.add_argument("--frames-dir", type=Path, help="Also write each frame as a PNG here")
    parser.add_argument("--preview-gif", type=Path, help="Also write an animated GIF preview")
    parser.add_argument("--enable-profiling", action="store_true", help="Enable per-frame timing output")
    parser.add_argument("--profile-output", type=Path, help="Write profiling data to JSON/CSV")
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    config = load_config(args.config, args.preset)
    config = with_overrides(
        config,
        strength=args.strength,
        cell_count=args.cells,
        threshold=args.threshold,
        seed=args.seed,
        fps=args.fps,
        workers=args.workers,
        frames_dir=args.frames_dir,
        profile_output=args.profile_output,
    )
    if args.no_antialias:
        config = with_overrides(config, antialias=False)
    if args.threshold_mode:
        config = with_overrides(config, mask_only=False)
    if args.transparent:
        config = with_overrides(config, transparent_background=True)
    if args.enable_profiling or args.profile_output:
        config = with_overrides(config, enable_profiling=True)

    if not args.source.exists():
        raise ValueError(f"Source image does not exist: {args.source}")

    source = load_source_image(args.source)
    print(f"Source size: {source.shape[1]}x{source.shape[0]}")
    print(
        f"Preset {config.preset.name} | Strength {config.strength} | Cells {config.cell_count} "
        f"| Threshold {config.threshold} | Seed {config.seed} | Mode {config.render_mode}"
    )

    animation = render_animation(source, config)

    write_frames_zip(args.output, animation.frames)
    print(f"Wrote {len(animation.frames)} frames to {args.output}")
    if config.frames_dir:
        write_frames_dir(config.frames_dir, animation.frames)
        print(f"Wrote frame PNGs to {config.frames_dir}")
    if args.preview_gif:
        args.preview_gif.parent.mkdir(parents=True, exist_ok=True)
        args.preview_gif.write_bytes(encode_preview_gif(animation.frames, animation.fps))
        print(f"Wrote preview to {args.preview_gif}")


if __name__ == "__main__":
    main()
