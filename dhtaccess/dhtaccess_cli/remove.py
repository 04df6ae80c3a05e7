import sys

from dhtaccess.core import DEFAULT_TTL
from dhtaccess.dhtaccess_cli.common import ENCODING, add_gateway_argument, create_accessor, make_parser
from dhtaccess.utils.logging import get_logger, use_dhtaccess_log_handler

use_dhtaccess_log_handler("in_root_logger")
logger = get_logger(__name__)


def main(args=None):
    parser = make_parser("Remove a value that was put with a secret")
    add_gateway_argument(parser)
    # fmt:off
    parser.add_argument("-t", "--ttl", type=int, default=DEFAULT_TTL,
                        help="how long (in seconds) the gateway remembers the removal")
    # fmt:on
    parser.add_argument("key", type=str)
    parser.add_argument("value", type=str)
    parser.add_argument("secret", type=str)
    args = parser.parse_args(args)

    accessor = create_accessor(args.gateway)
    result = accessor.remove(
        args.key.encode(ENCODING), args.value.encode(ENCODING), args.secret.encode(ENCODING), args.ttl
    )

    print(result.describe())
    if result.error is not None:
        sys.exit(1)


if __name__ == "__main__":
    main()
