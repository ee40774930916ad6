from __future__ import annotations

import logging
import time
from typing import Dict, Optional


class PerfTracer:
    """Times render passes of one export.

    Every measured pass is added to per-tag totals; only passes slower than
    threshold_s are logged individually.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, threshold_s: float = 2.0):
        self.logger = logger or logging.getLogger("wpexport.perf")
        self.threshold_s = float(threshold_s)
        self.totals: Dict[str, float] = {}
        self.counts: Dict[str, int] = {}

    def start(self) -> float:
        return time.perf_counter()

    def log_if_slow(self, tag: str, t0: float, extra: str = "", threshold_s: Optional[float] = None) -> float:
        dt = time.perf_counter() - float(t0)
        self.totals[tag] = self.totals.get(tag, 0.0) + dt
        self.counts[tag] = self.counts.get(tag, 0) + 1
        thr = self.threshold_s if threshold_s is None else float(threshold_s)
        if dt > thr:
            msg = f"{tag} slow dt={dt * 1000.0:.1f}ms"
            if extra:
                msg += f" | {extra}"
            self.logger.info(msg)
        return dt

    def summary(self) -> str:
        parts = [
            f"{tag} n={self.counts[tag]} total={self.totals[tag] * 1000.0:.1f}ms"
            for tag in sorted(self.totals)
        ]
        return "; ".join(parts)
