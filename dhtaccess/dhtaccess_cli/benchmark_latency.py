from dhtaccess.benchmark import measure_latency
from dhtaccess.dhtaccess_cli.common import add_benchmark_arguments, make_benchmark_config, make_parser, prepare_benchmark
from dhtaccess.utils.logging import get_logger, use_dhtaccess_log_handler

use_dhtaccess_log_handler("in_root_logger")
logger = get_logger(__name__)


def main(args=None):
    parser = make_parser("Measure get latency: send requests one at a time and wait for each reply")
    add_benchmark_arguments(parser)
    args = parser.parse_args(args)

    config = make_benchmark_config(
        parser, repeats=args.repeats, details=args.details, do_put=not args.no_put, seed=args.seed
    )
    accessors, rng, key_prefix = prepare_benchmark(config, args.gateways)

    report = measure_latency(accessors, key_prefix, config, rng)
    report.log_summary()


if __name__ == "__main__":
    main()
