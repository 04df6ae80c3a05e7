from typing import Optional

import pydantic

DEFAULT_REPEATS = 1000
DEFAULT_QUERIES_PER_SEC = 1000
DEFAULT_INITIAL_DELAY = 3.0  # seconds between scheduling and the first request
BENCHMARK_TTL = 900  # seconds to keep the seeded values for


class BenchmarkConfig(pydantic.BaseModel):
    """
    Parameters shared by the latency and throughput benchmarks.

    :param repeats: number of get requests, and of values put during seeding
    :param query_freq: target request rate for the throughput benchmark, requests per second
    :param details: if True, benchmark get_details instead of get
    :param do_put: if False, skip seeding and get whatever an earlier run left under the same prefix
    :param ttl: ttl of the seeded values, in seconds
    :param initial_delay: the throughput benchmark fires its first request this many seconds after scheduling
    :param timeout: give up on outstanding requests this many seconds after the last one was due to fire
      (default: wait forever)
    :param max_workers: cap on the number of requests in flight (default: one thread per request)
    :param seed: random seed for the key prefix and the choice of gateways
    """

    repeats: int = pydantic.Field(DEFAULT_REPEATS, gt=0)
    query_freq: float = pydantic.Field(DEFAULT_QUERIES_PER_SEC, gt=0)
    details: bool = False
    do_put: bool = True
    ttl: int = pydantic.Field(BENCHMARK_TTL, gt=0)
    initial_delay: float = pydantic.Field(DEFAULT_INITIAL_DELAY, ge=0)
    timeout: Optional[float] = pydantic.Field(None, gt=0)
    max_workers: Optional[int] = pydantic.Field(None, gt=0)
    seed: Optional[int] = None
