"""Profiling helpers."""

from shaky_lines.diagnostics.tracker import DiagnosticsTracker, Timer, TimingRecord

__all__ = ["DiagnosticsTracker", "Timer", "TimingRecord"]
