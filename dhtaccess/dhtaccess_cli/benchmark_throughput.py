import sys

from dhtaccess.benchmark import measure_throughput
from dhtaccess.benchmark.config import DEFAULT_INITIAL_DELAY, DEFAULT_QUERIES_PER_SEC
from dhtaccess.dhtaccess_cli.common import add_benchmark_arguments, make_benchmark_config, make_parser, prepare_benchmark
from dhtaccess.utils.asyncio import switch_to_uvloop
from dhtaccess.utils.limits import increase_file_limit
from dhtaccess.utils.logging import get_logger, use_dhtaccess_log_handler

use_dhtaccess_log_handler("in_root_logger")
logger = get_logger(__name__)


def main(args=None):
    # fmt:off
    parser = make_parser("Measure get throughput: send requests at a fixed rate regardless of replies")
    add_benchmark_arguments(parser)
    parser.add_argument("-f", "--freq", type=float, default=DEFAULT_QUERIES_PER_SEC,
                        help="number of queries per second")
    parser.add_argument("--initial_delay", type=float, default=DEFAULT_INITIAL_DELAY,
                        help="seconds to wait between scheduling the requests and sending the first one")
    parser.add_argument("--timeout", type=float, default=None, required=False,
                        help="give up on outstanding requests this many seconds after the last one was sent")
    parser.add_argument("--max_workers", type=int, default=None, required=False,
                        help="limit the number of requests in flight (default: no limit)")
    parser.add_argument("--increase_file_limit", action="store_true",
                        help="On *nix, this will increase the max number of open connections "
                             "the benchmark can keep before hitting 'Too many open files'; Use at your own risk.")
    # fmt:on
    args = parser.parse_args(args)

    config = make_benchmark_config(
        parser,
        repeats=args.repeats,
        query_freq=args.freq,
        details=args.details,
        do_put=not args.no_put,
        initial_delay=args.initial_delay,
        timeout=args.timeout,
        max_workers=args.max_workers,
        seed=args.seed,
    )

    if args.increase_file_limit:
        increase_file_limit(config.max_workers or config.repeats)

    accessors, rng, key_prefix = prepare_benchmark(config, args.gateways)
    logger.info(f"Query frequency (times/sec): {config.query_freq}")

    loop = switch_to_uvloop()
    try:
        report = loop.run_until_complete(measure_throughput(accessors, key_prefix, config, rng))
    except KeyboardInterrupt:
        logger.info("Caught KeyboardInterrupt, shutting down")
        sys.exit(1)
    finally:
        loop.close()

    report.log_summary()
    if report.timed_out:
        sys.exit(1)


if __name__ == "__main__":
    main()
