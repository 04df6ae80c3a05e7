import random
import time
from typing import Optional, Sequence

import numpy as np

from dhtaccess.benchmark.config import BenchmarkConfig
from dhtaccess.benchmark.report import BenchmarkReport
from dhtaccess.benchmark.tally import Tally
from dhtaccess.benchmark.workload import fetch, make_key
from dhtaccess.core import DHTAccessor
from dhtaccess.utils.logging import get_logger

logger = get_logger(__name__)


def measure_latency(
    accessors: Sequence[DHTAccessor], key_prefix: str, config: BenchmarkConfig, rng: Optional[random.Random] = None
) -> BenchmarkReport:
    """
    Issue config.repeats gets one after another, each through a randomly chosen accessor,
    and wait for every reply before sending the next request. A get succeeds if it returns at least one value.
    """
    assert len(accessors) > 0, "need at least one accessor"
    rng = rng or random.Random(config.seed)
    tally = Tally(config.repeats)

    logger.info("Benchmarking by getting.")
    start_time = time.perf_counter()

    for i in range(config.repeats):
        accessor = rng.choice(accessors)
        request_started = time.perf_counter()
        results = fetch(accessor, make_key(key_prefix, i), config.details)
        tally.record_completion(len(results) > 0, time.perf_counter() - request_started)

    elapsed = time.perf_counter() - start_time
    completed, succeeded, latencies = tally.snapshot()
    return BenchmarkReport(config.repeats, completed, succeeded, elapsed, latencies=np.asarray(latencies))
