""" Arguments and setup shared by the command-line tools """
import random
import sys
from typing import List, Optional, Sequence, Tuple

import configargparse
import pydantic

from dhtaccess.benchmark import BenchmarkConfig, generate_key_prefix, seed_values
from dhtaccess.benchmark.config import DEFAULT_REPEATS
from dhtaccess.core import DHTAccessor, MalformedEndpointError
from dhtaccess.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_GATEWAY = "http://opendht.nyuld.net:5851/"
DEFAULT_CONFIG_FILES = ["dhtaccess.yml"]
ENCODING = "utf-8"
REQUEST_TIMEOUT_FACTOR = 2  # socket timeout of benchmark requests, relative to the benchmark timeout


def make_parser(description: str) -> configargparse.ArgParser:
    parser = configargparse.ArgParser(default_config_files=DEFAULT_CONFIG_FILES, description=description)
    parser.add("-c", "--config", required=False, is_config_file=True, help="config file path")
    return parser


def add_gateway_argument(parser: configargparse.ArgParser) -> None:
    parser.add_argument("-g", "--gateway", type=str, default=DEFAULT_GATEWAY, env_var="DHTACCESS_GATEWAY",
                        help="gateway URL, e.g. http://localhost:5851/")


def add_benchmark_arguments(parser: configargparse.ArgParser) -> None:
    # fmt:off
    parser.add_argument("gateways", type=str, nargs="+", help="one or more gateway URLs, e.g. http://localhost:5851/")
    parser.add_argument("-d", "--details", action="store_true", help="request secret hashes and TTLs (get_details)")
    parser.add_argument("-r", "--repeats", type=int, default=DEFAULT_REPEATS, help="number of requests")
    parser.add_argument("-n", "--no_put", action="store_true",
                        help="do not put values before getting them, reuse values put by an earlier run")
    parser.add_argument("--seed", type=int, default=None, required=False,
                        help="random seed for the key prefix and the choice of gateways")
    # fmt:on


def create_accessor(gateway: str, timeout: Optional[float] = None) -> DHTAccessor:
    """Create an accessor or exit with status 1 if the gateway URL is malformed"""
    try:
        return DHTAccessor(gateway, timeout=timeout)
    except MalformedEndpointError as e:
        logger.error(str(e))
        sys.exit(1)


def create_accessors(gateways: Sequence[str], timeout: Optional[float] = None) -> List[DHTAccessor]:
    return [create_accessor(gateway, timeout) for gateway in gateways]


def make_benchmark_config(parser: configargparse.ArgParser, **kwargs) -> BenchmarkConfig:
    try:
        return BenchmarkConfig(**kwargs)
    except pydantic.ValidationError as e:
        parser.error(str(e))


def prepare_benchmark(
    config: BenchmarkConfig, gateways: Sequence[str]
) -> Tuple[List[DHTAccessor], random.Random, str]:
    """Connect to the gateways, pick a key prefix and seed the values to get, unless config.do_put is False"""
    # requests left behind by a timed out run must not keep the process alive
    request_timeout = None if config.timeout is None else REQUEST_TIMEOUT_FACTOR * config.timeout
    accessors = create_accessors(gateways, timeout=request_timeout)
    rng = random.Random(config.seed)
    key_prefix = generate_key_prefix(rng)

    logger.info(f"Repeats {config.repeats} times.")
    if config.do_put:
        seed_values(accessors, key_prefix, config.repeats, config.ttl, rng)
    return accessors, rng, key_prefix
