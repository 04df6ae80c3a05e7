import sys

from dhtaccess.core import DEFAULT_TTL
from dhtaccess.dhtaccess_cli.common import ENCODING, add_gateway_argument, create_accessor, make_parser
from dhtaccess.utils.logging import get_logger, use_dhtaccess_log_handler

use_dhtaccess_log_handler("in_root_logger")
logger = get_logger(__name__)


def main(args=None):
    # fmt:off
    parser = make_parser("Put a value under a key")
    add_gateway_argument(parser)
    parser.add_argument("-t", "--ttl", type=int, default=DEFAULT_TTL, help="how long (in seconds) to store the value")
    parser.add_argument("-s", "--secret", type=str, default=None, required=False,
                        help="if specified, the value can later be removed with dht-rm and this secret")
    parser.add_argument("key", type=str)
    parser.add_argument("value", type=str)
    # fmt:on
    args = parser.parse_args(args)

    accessor = create_accessor(args.gateway)
    secret = args.secret.encode(ENCODING) if args.secret is not None else None
    result = accessor.put(args.key.encode(ENCODING), args.value.encode(ENCODING), args.ttl, secret=secret)

    print(result.describe())
    if result.error is not None:
        sys.exit(1)


if __name__ == "__main__":
    main()
