"""
Per-phase timing for the frame loop (grow, draw, paint).

Disabled by default; `profiler.enable()` turns recording on and registers a
summary to be printed at exit.
"""

import atexit
import time
from contextlib import contextmanager
from dataclasses import dataclass
from functools import wraps
from typing import Dict

FRAME_BUDGET_S = 1.0 / 60.0


@dataclass
class PhaseStats:
    calls: int = 0
    total_time: float = 0.0
    max_time: float = 0.0

    def add(self, elapsed: float):
        self.calls += 1
        self.total_time += elapsed
        self.max_time = max(self.max_time, elapsed)

    @property
    def avg_ms(self) -> float:
        return self.total_time / self.calls * 1000 if self.calls else 0.0


class FrameProfiler:
    def __init__(self):
        self.phases: Dict[str, PhaseStats] = {}
        self.frames = 0
        self.frames_over_budget = 0
        self.enabled = False
        self._report_registered = False

    def enable(self):
        self.enabled = True
        if not self._report_registered:
            atexit.register(self.print_stats)
            self._report_registered = True

    def record(self, name: str, elapsed: float):
        if self.enabled:
            self.phases.setdefault(name, PhaseStats()).add(elapsed)

    def record_frame(self, elapsed: float):
        """Count a finished tick and whether it blew the 60 Hz budget."""
        if not self.enabled:
            return
        self.frames += 1
        if elapsed > FRAME_BUDGET_S:
            self.frames_over_budget += 1

    def print_stats(self):
        if not self.phases and not self.frames:
            return

        print("\n" + "=" * 70)
        print("FRAME PROFILE")
        print("=" * 70)
        print(f"{'Phase':<35} {'Calls':>10} {'Avg(ms)':>10} {'Max(ms)':>10}")
        print("-" * 70)
        by_cost = sorted(self.phases.items(), key=lambda kv: kv[1].total_time, reverse=True)
        for name, stats in by_cost:
            print(f"{name:<35} {stats.calls:>10} {stats.avg_ms:>10.3f} {stats.max_time * 1000:>10.3f}")

        if self.frames:
            print("-" * 70)
            print(f"Frames: {self.frames}, over {FRAME_BUDGET_S * 1000:.1f}ms budget: "
                  f"{self.frames_over_budget}")
        print("=" * 70)


profiler = FrameProfiler()


def profile(func):
    """Time every call of func under its qualified name while profiling is on."""
    @wraps(func)
    def timed(*args, **kwargs):
        if not profiler.enabled:
            return func(*args, **kwargs)
        started = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            profiler.record(func.__qualname__, time.perf_counter() - started)
    return timed


@contextmanager
def profile_block(name: str):
    started = time.perf_counter()
    try:
        yield
    finally:
        profiler.record(name, time.perf_counter() - started)
