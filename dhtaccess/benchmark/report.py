import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np

from dhtaccess.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class BenchmarkReport:
    """
    Aggregate outcome of one benchmark run.

    :param elapsed: seconds from the scheduled start of the run until the last request completed
    :param latencies: per-request round-trip times in seconds, in completion order
    :param timed_out: True if the run gave up on outstanding requests; completed < planned in that case
    """

    planned: int
    completed: int
    succeeded: int
    elapsed: float
    latencies: np.ndarray = field(default_factory=lambda: np.zeros(0))
    timed_out: bool = False

    @property
    def success_rate(self) -> float:
        return self.succeeded / self.planned if self.planned else 0.0

    @property
    def throughput(self) -> float:
        """completed requests per second"""
        return self.completed / self.elapsed if self.elapsed > 0 else 0.0

    def latency_stats(self) -> Dict[str, float]:
        if len(self.latencies) == 0:
            return dict(mean=0.0, std=0.0, p50=0.0, p95=0.0, max=0.0)
        return dict(
            mean=float(np.mean(self.latencies)),
            std=float(np.std(self.latencies, ddof=1)) if len(self.latencies) > 1 else 0.0,
            p50=float(np.percentile(self.latencies, 50)),
            p95=float(np.percentile(self.latencies, 95)),
            max=float(np.max(self.latencies)),
        )

    def log_summary(self, log: Optional[logging.Logger] = None) -> None:
        log = log or logger
        stats = self.latency_stats()
        log.info(f"Rate of successful gets: {self.succeeded} / {self.planned}")
        log.info(f"{self.elapsed * 1000:.0f} msec.")
        log.info(
            f"Get latency (sec.): mean({stats['mean']:.3f}) std({stats['std']:.3f}) "
            f"p50({stats['p50']:.3f}) p95({stats['p95']:.3f}) max({stats['max']:.3f})"
        )
        log.info(f"Throughput: {self.throughput:.1f} gets/sec.")
        if self.timed_out:
            log.warning(f"Gave up on {self.planned - self.completed} outstanding requests")
