from dhtaccess.dhtaccess_cli.common import ENCODING, add_gateway_argument, create_accessor, make_parser
from dhtaccess.utils.logging import get_logger, use_dhtaccess_log_handler

use_dhtaccess_log_handler("in_root_logger")
logger = get_logger(__name__)


def main(args=None):
    parser = make_parser("Print all values stored under one or more keys")
    add_gateway_argument(parser)
    parser.add_argument("-d", "--details", action="store_true", help="print secret hash and TTL")
    parser.add_argument("keys", type=str, nargs="+")
    args = parser.parse_args(args)

    accessor = create_accessor(args.gateway)

    for key in args.keys:
        if len(args.keys) > 1:
            print(f"{key}:")

        if args.details:
            for result in accessor.get_details(key.encode(ENCODING)):
                value = result.value.decode(ENCODING, errors="replace")
                print(f"{value} {result.ttl} {result.hash_type} 0x{result.hashed_secret.hex()[:8].ljust(8, '0')}")
        else:
            for value in accessor.get(key.encode(ENCODING)):
                print(value.decode(ENCODING, errors="replace"))


if __name__ == "__main__":
    main()
