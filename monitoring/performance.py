"""Timing utilities for engine round-trips and other blocking calls.

:class:`PerformanceMonitor` records wall-clock duration and the CPU time spent
by this process while a block runs.  When given a ``label`` it logs the
elapsed time on exit, which is how engine commands report their latency.
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

import psutil


class PerformanceMonitor:
    """Context manager measuring a block of code.

    Parameters
    ----------
    label : str, optional
        Name logged together with the elapsed time when the block exits.
    """

    def __init__(self, label: Optional[str] = None) -> None:
        self.label = label
        self.stats: Dict[str, Any] = {}
        self._process = psutil.Process(os.getpid())
        self._start_time: Optional[float] = None
        self._start_cpu: Optional[float] = None

    def _cpu_time(self) -> float:
        times = self._process.cpu_times()
        return times.user + times.system

    def __enter__(self) -> "PerformanceMonitor":
        self._start_time = time.perf_counter()
        self._start_cpu = self._cpu_time()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        end_time = time.perf_counter()
        end_cpu = self._cpu_time()
        self.stats = {
            "duration": end_time - (self._start_time or end_time),
            "cpu_time_diff": end_cpu - (self._start_cpu or end_cpu),
        }
        if self.label:
            logging.info("%s elapsed: %.2fms", self.label, self.elapsed * 1000)
        # Propagate any exception
        return False

    @property
    def elapsed(self) -> float:
        """Wall-clock seconds of the last completed block."""
        return float(self.stats.get("duration", 0.0))


__all__ = ["PerformanceMonitor"]
