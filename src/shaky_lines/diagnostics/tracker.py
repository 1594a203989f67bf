"""Profiling and diagnostics tracking for animation runs."""

from __future__ import annotations

import csv
import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class TimingRecord:
    """Timing metrics for a single frame."""

    frame: int
    seed: int
    field_ms: float
    remap_ms: float
    compose_ms: float
    total_ms: float
    ink_ratio: float


@dataclass
class DiagnosticsTracker:
    """Collects per-frame timings and exports them."""

    enable_profiling: bool = False
    profile_output: Optional[Path] = None
    records: List[TimingRecord] = field(default_factory=list)

    def track_frame(
        self,
        frame: int,
        seed: int,
        field_s: float,
        remap_s: float,
        compose_s: float,
        ink_ratio: float,
    ) -> None:
        if not self.enable_profiling:
            return
        self.records.append(
            TimingRecord(
                frame=frame,
                seed=seed,
                field_ms=field_s * 1000.0,
                remap_ms=remap_s * 1000.0,
                compose_ms=compose_s * 1000.0,
                total_ms=(field_s + remap_s + compose_s) * 1000.0,
                ink_ratio=ink_ratio,
            )
        )

    def export(self) -> None:
        """Export timing records to JSON and a sibling CSV if configured."""

        if not self.records or not self.profile_output:
            return

        self.profile_output.parent.mkdir(parents=True, exist_ok=True)
        records = sorted(self.records, key=lambda record: record.frame)
        payload = [record.__dict__ for record in records]
        self.profile_output.write_text(json.dumps(payload, indent=2))

        csv_path = self.profile_output.with_suffix(".csv")
        with csv_path.open("w", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=list(payload[0].keys()))
            writer.writeheader()
            for row in payload:
                writer.writerow(row)


class Timer:
    """Simple context timer for profiling blocks."""

    def __init__(self) -> None:
        self.start = 0.0
        self.elapsed = 0.0

    def __enter__(self) -> "Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, *_exc: object) -> None:
        self.elapsed = time.perf_counter() - self.start
