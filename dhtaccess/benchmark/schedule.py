import random
from dataclasses import dataclass
from typing import List, Sequence

from dhtaccess.core import DHTAccessor


@dataclass(frozen=True)
class ScheduleEntry:
    """A planned benchmark request: which key to fetch through which accessor, and when"""

    index: int
    fire_time: float  # in the time base of the event loop that runs the benchmark
    accessor: DHTAccessor
    key: bytes
    details: bool


def plan_schedule(
    accessors: Sequence[DHTAccessor],
    keys: Sequence[bytes],
    query_freq: float,
    base_time: float,
    details: bool,
    rng: random.Random,
) -> List[ScheduleEntry]:
    """
    Assign the i-th key a fire time of base_time + i / query_freq and a pseudo-randomly chosen accessor.
    Fire times do not depend on when earlier requests complete.
    """
    assert query_freq > 0, f"query_freq must be positive, got {query_freq}"
    assert len(accessors) > 0, "need at least one accessor"
    return [
        ScheduleEntry(i, base_time + i / query_freq, rng.choice(accessors), key, details)
        for i, key in enumerate(keys)
    ]
