from typing import Optional

from dhtaccess.utils.logging import get_logger

logger = get_logger(__name__)

FILES_PER_REQUEST = 1  # every request in flight holds one connection to a gateway
RESERVED_FILES = 64  # stdio, log files and the event loop's own descriptors


def increase_file_limit(max_in_flight: int) -> Optional[int]:
    """
    Raise the soft limit on open files so that max_in_flight concurrent gateway connections fit under it.
    The limit is never lowered, and never raised above the hard limit.

    :returns: the soft limit in effect afterwards, or None if this platform has no such limit (e.g. Windows)
    """
    try:
        import resource  # local import to avoid ImportError for Windows users
    except ImportError:
        logger.warning("Open file limits cannot be changed on this platform")
        return None

    soft, hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    required = max_in_flight * FILES_PER_REQUEST + RESERVED_FILES
    if soft == resource.RLIM_INFINITY or soft >= required:
        return soft

    new_soft = required if hard == resource.RLIM_INFINITY else min(required, hard)
    try:
        resource.setrlimit(resource.RLIMIT_NOFILE, (new_soft, hard))
    except (ValueError, OSError) as e:
        logger.warning(f"Failed to increase file limit: {e}")
        return soft

    logger.info(f"Increasing file limit: soft {soft}=>{new_soft} (hard limit {hard})")
    if new_soft < required:
        logger.warning(f"{max_in_flight} requests in flight may hit 'Too many open files', the hard limit is {hard}")
    return new_soft
