"""
Latency tracking and performance monitoring utilities.
"""

from __future__ import annotations

import time
from typing import Dict

from config import LATENCY_DEBUG, logger


class PipelineMetrics:
    """
    Lightweight latency tracker for one chat request.
    Logs structured timing data when LATENCY_DEBUG=1.

    Usage:
        metrics = PipelineMetrics()
        metrics.mark("extraction_done")
        metrics.mark("lookups_done")
        metrics.mark("reply_done")
        metrics.log_request()  # Emits structured log line
    """

    ORDERED_LABELS = ["extraction_done", "lookups_done", "reply_done"]

    def __init__(self):
        self.reset()

    def reset(self):
        self._start = time.perf_counter()
        self._marks: Dict[str, float] = {}

    def mark(self, label: str):
        """Record a timestamp for a labeled event."""
        self._marks[label] = time.perf_counter() - self._start

    def get_elapsed(self, label: str) -> float:
        """Get elapsed time in ms for a label."""
        return self._marks.get(label, 0) * 1000

    def log_request(self, extra: str = ""):
        """Emit a single structured log line with all latency data."""
        if not LATENCY_DEBUG:
            return

        parts = []
        for label in self.ORDERED_LABELS:
            if label in self._marks:
                parts.append(f"{label}={self._marks[label]*1000:.0f}ms")

        log_line = f"[LATENCY] {' | '.join(parts)}"
        if extra:
            log_line += f" | {extra}"

        logger.info(log_line)
