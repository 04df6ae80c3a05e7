""" Keys, values and seeding shared by the latency and throughput benchmarks """
import random
import string
from typing import Sequence, Union

from tqdm import trange

from dhtaccess.core import DHTAccessor, DetailedGetResult, RetrievalResult
from dhtaccess.utils.logging import get_logger

logger = get_logger(__name__)

KEY_PREFIX_LENGTH = 3
VALUE_PREFIX = "value"
ENCODING = "ascii"


def generate_key_prefix(rng: random.Random, length: int = KEY_PREFIX_LENGTH) -> str:
    """A random lowercase prefix, so that concurrent benchmark runs do not read each other's values"""
    return "".join(rng.choice(string.ascii_lowercase) for _ in range(length))


def make_key(key_prefix: str, index: int) -> bytes:
    return f"{key_prefix}{index}".encode(ENCODING)


def make_value(index: int) -> bytes:
    return f"{VALUE_PREFIX}{index}".encode(ENCODING)


def fetch(
    accessor: DHTAccessor, key: bytes, details: bool
) -> Union[RetrievalResult[bytes], RetrievalResult[DetailedGetResult]]:
    return accessor.get_details(key) if details else accessor.get(key)


def seed_values(
    accessors: Sequence[DHTAccessor], key_prefix: str, repeats: int, ttl: int, rng: random.Random
) -> int:
    """
    Put values 0..repeats-1 under keys with the given prefix, each through a randomly chosen accessor.
    :returns: the number of puts accepted by the gateways
    """
    logger.info(f"Putting: {key_prefix}<number>")
    accepted = 0
    for i in trange(repeats, desc="Putting"):
        result = rng.choice(accessors).put(make_key(key_prefix, i), make_value(i), ttl)
        accepted += result.ok
    if accepted < repeats:
        logger.warning(f"Only {accepted} / {repeats} puts were accepted")
    return accepted
