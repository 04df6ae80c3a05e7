from dhtaccess.utils.asyncio import switch_to_uvloop
from dhtaccess.utils.limits import increase_file_limit
from dhtaccess.utils.logging import get_logger, use_dhtaccess_log_handler
