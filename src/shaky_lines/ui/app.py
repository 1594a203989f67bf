"""Flask-based UI for rendering animations with live preview."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from flask import Flask, jsonify, redirect, render_template, request, send_file, url_for

from shaky_lines.config import load_config, with_overrides
from shaky_lines.io import encode_preview_gif, load_source_image, write_frames_zip
from shaky_lines.scheduler import RunControl, render_animation

ARCHIVE_NAME = "shaky_animation.zip"
PREVIEW_NAME = "preview.gif"


@dataclass
class UIState:
    """Shared UI state for progress reporting."""

    running: bool = False
    paused: bool = False
    stopped: bool = False
    message: str = "Idle"
    current_frame: int = 0
    total_frames: int = 0
    frame_ms: float = 0.0
    preview_path: Optional[Path] = None
    archive_path: Optional[Path] = None
    log: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RenderRequest:
    """Form values for one render run."""

    source_path: Path
    output_dir: Path
    preset: str = "default"
    strength: Optional[float] = None
    cell_count: Optional[int] = None
    threshold: Optional[int] = None
    seed: Optional[int] = None
    fps: Optional[int] = None
    antialias: bool = True
    mask_only: bool = True
    transparent_background: bool = False


class AnimationWorker:
    """Background worker rendering one animation at a time."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.state = UIState()
        self.control = RunControl()
        self.thread: Optional[threading.Thread] = None

    def start(self, job: RenderRequest) -> bool:
        with self.lock:
            if self.state.running:
                return False
            self.state = UIState(running=True, message="Starting...")
            self.control = RunControl()
            control = self.control

        def _run() -> None:
            try:
                config = with_overrides(
                    load_config(None, job.preset),
                    strength=job.strength,
                    cell_count=job.cell_count,
                    threshold=job.threshold,
                    seed=job.seed,
                    fps=job.fps,
                    antialias=job.antialias,
                    mask_only=job.mask_only,
                    transparent_background=job.transparent_background,
                )
                source = load_source_image(job.source_path)

                def status_callback(payload: Dict[str, float | str | int]) -> None:
                    with self.lock:
                        self.state.current_frame = int(payload.get("frame", 0))
                        self.state.total_frames = int(payload.get("frames", 0))
                        self.state.frame_ms = float(payload.get("frame_ms", 0.0))
                        self.state.message = str(payload.get("message", ""))
                        self.state.log.append(str(payload.get("message", "")))
                        self.state.log = self.state.log[-200:]

                animation = render_animation(
                    source,
                    config,
                    control=control,
                    status_callback=status_callback,
                )
                if not animation.completed:
                    with self.lock:
                        self.state.running = False
                        self.state.message = f"Stopped after {len(animation.frames)} frames"
                    return

                job.output_dir.mkdir(parents=True, exist_ok=True)
                archive_path = write_frames_zip(job.output_dir / ARCHIVE_NAME, animation.frames)
                preview_path = job.output_dir / PREVIEW_NAME
                preview_path.write_bytes(encode_preview_gif(animation.frames, animation.fps))
                with self.lock:
                    self.state.running = False
                    self.state.archive_path = archive_path
                    self.state.preview_path = preview_path
                    self.state.message = f"Completed: {len(animation.frames)} frames"
            except Exception as exc:  # noqa: BLE001
                with self.lock:
                    self.state.running = False
                    self.state.message = f"Error: {exc}"

        self.thread = threading.Thread(target=_run, daemon=True)
        self.thread.start()
        return True

    def pause(self) -> None:
        with self.lock:
            self.state.paused = True
            self.state.message = "Paused"
        self.control.pause()

    def resume(self) -> None:
        with self.lock:
            self.state.paused = False
            self.state.message = "Running"
        self.control.resume()

    def stop(self) -> None:
        with self.lock:
            self.state.stopped = True
            self.state.message = "Stopping..."
        self.control.stop()


def _optional(form, key: str, cast):
    value = form.get(key, "").strip()
    return cast(value) if value else None


def _parse_request(form) -> RenderRequest:
    return RenderRequest(
        source_path=Path(form["source"]).expanduser(),
        output_dir=Path(form["output"]).expanduser(),
        preset=form.get("preset", "default"),
        strength=_optional(form, "strength", float),
        cell_count=_optional(form, "cells", int),
        threshold=_optional(form, "threshold", int),
        seed=_optional(form, "seed", int),
        fps=_optional(form, "fps", int),
        antialias="antialias" in form,
        mask_only="mask_only" in form,
        transparent_background="transparent" in form,
    )


worker = AnimationWorker()


def create_app(animation_worker: Optional[AnimationWorker] = None) -> Flask:
    app = Flask(__name__)
    active = animation_worker or worker

    @app.route("/")
    def index() -> str:
        return render_template("index.html")

    @app.route("/start", methods=["POST"])
    def start() -> str:
        active.start(_parse_request(request.form))
        return redirect(url_for("index"))

    @app.route("/pause", methods=["POST"])
    def pause() -> str:
        active.pause()
        return redirect(url_for("index"))

    @app.route("/resume", methods=["POST"])
    def resume() -> str:
        active.resume()
        return redirect(url_for("index"))

    @app.route("/stop", methods=["POST"])
    def stop() -> str:
        active.stop()
        return redirect(url_for("index"))

    @app.route("/status")
    def status() -> str:
        with active.lock:
            payload = {
                "running": active.state.running,
                "paused": active.state.paused,
                "message": active.state.message,
                "frame": active.state.current_frame,
                "frames": active.state.total_frames,
                "frame_ms": active.state.frame_ms,
                "has_preview": active.state.preview_path is not None,
                "log": active.state.log,
            }
        return jsonify(payload)

    @app.route("/preview")
    def preview() -> str:
        with active.lock:
            preview_path = active.state.preview_path
        if not preview_path or not preview_path.exists():
            return "", 204
        return send_file(preview_path, mimetype="image/gif")

    @app.route("/download")
    def download() -> str:
        with active.lock:
            archive_path = active.state.archive_path
        if not archive_path or not archive_path.exists():
            return "", 204
        return send_file(archive_path, mimetype="application/zip", as_attachment=True, download_name=ARCHIVE_NAME)

    return app
