import asyncio
import random
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

import numpy as np

from dhtaccess.benchmark.config import BenchmarkConfig
from dhtaccess.benchmark.report import BenchmarkReport
from dhtaccess.benchmark.schedule import ScheduleEntry, plan_schedule
from dhtaccess.benchmark.tally import Tally
from dhtaccess.benchmark.workload import fetch, make_key
from dhtaccess.core import DHTAccessor
from dhtaccess.utils.logging import get_logger

logger = get_logger(__name__)


async def measure_throughput(
    accessors: Sequence[DHTAccessor], key_prefix: str, config: BenchmarkConfig, rng: Optional[random.Random] = None
) -> BenchmarkReport:
    """
    Offer the gateways a fixed load of config.query_freq gets per second, config.repeats gets in total.

    All requests are scheduled up front: request i fires config.initial_delay + i / config.query_freq seconds
    from now, whether or not earlier requests have completed. A fired request runs on a worker thread,
    so the number of requests in flight is limited only by config.max_workers (unlimited by default).
    The run ends when every request has completed or, if config.timeout is set, when the timeout expires.

    :note: without config.timeout, a request that never completes keeps this coroutine waiting forever
    """
    rng = rng or random.Random(config.seed)
    loop = asyncio.get_running_loop()

    keys = [make_key(key_prefix, i) for i in range(config.repeats)]
    base_time = loop.time() + config.initial_delay
    schedule = plan_schedule(accessors, keys, config.query_freq, base_time, config.details, rng)

    tally = Tally(len(schedule))
    finished = asyncio.Event()
    executor = ThreadPoolExecutor(max_workers=config.max_workers or len(schedule), thread_name_prefix="dht-querier")

    def _run_query(entry: ScheduleEntry) -> None:
        request_started = time.perf_counter()
        try:
            success = len(fetch(entry.accessor, entry.key, entry.details)) > 0
        except Exception as e:
            logger.warning(f"Request #{entry.index} to {entry.accessor} failed: {e!r}")
            success = False

        if tally.record_completion(success, time.perf_counter() - request_started) and not loop.is_closed():
            loop.call_soon_threadsafe(finished.set)

    def _fire(entry: ScheduleEntry) -> None:
        executor.submit(_run_query, entry)

    logger.info("Benchmarking by getting.")
    logger.info(f"(Start getting {config.initial_delay * 1000:.0f} msec later.)")
    timers = [loop.call_at(entry.fire_time, _fire, entry) for entry in schedule]

    timed_out = False
    try:
        if config.timeout is None:
            await finished.wait()
        else:
            deadline = schedule[-1].fire_time + config.timeout
            await asyncio.wait_for(finished.wait(), timeout=max(0.0, deadline - loop.time()))
    except asyncio.TimeoutError:
        timed_out = True
        logger.warning(f"Timed out with {tally} after {config.timeout} sec.")
    finally:
        elapsed = loop.time() - base_time
        for timer in timers:
            timer.cancel()
        all_completed = tally.finished
        executor.shutdown(wait=all_completed, cancel_futures=not all_completed)

    completed, succeeded, latencies = tally.snapshot()
    return BenchmarkReport(
        len(schedule), completed, succeeded, elapsed, latencies=np.asarray(latencies), timed_out=timed_out
    )
