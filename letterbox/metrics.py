import logging
import time
from contextlib import contextmanager
from typing import Callable

logger = logging.getLogger("letterbox")


class StageTimer:
    """Wall time per request stage (fetch, parse, solve), in milliseconds.

    A stage entered more than once accumulates; a stage that raises is still
    recorded before the error propagates.
    """

    def __init__(self):
        self.timings: dict[str, float] = {}
        self.counts: dict[str, int] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - t0) * 1000
            self.timings[name] = round(self.timings.get(name, 0.0) + elapsed_ms, 1)
            self.counts[name] = self.counts.get(name, 0) + 1
            logger.debug("stage=%s elapsed=%.1fms", name, elapsed_ms)

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        out = dict(self.timings)
        out["total"] = self.total_ms
        return out


def time_repeated(fn: Callable[[], object], iterations: int = 1) -> dict[str, float]:
    """Run ``fn`` repeatedly and report avg/min/max wall time in microseconds."""
    elapsed: list[float] = []
    for _ in range(max(1, iterations)):
        t0 = time.perf_counter()
        fn()
        elapsed.append((time.perf_counter() - t0) * 1_000_000)
    return {
        "avg_us": round(sum(elapsed) / len(elapsed), 1),
        "min_us": round(min(elapsed), 1),
        "max_us": round(max(elapsed), 1),
        "runs": len(elapsed),
    }
