import asyncio

import uvloop

from dhtaccess.utils.logging import get_logger

logger = get_logger(__name__)


def switch_to_uvloop() -> asyncio.AbstractEventLoop:
    """stop any running event loops; create a new uvloop event loop, set it as current and return it"""
    try:
        asyncio.get_event_loop().stop()  # if we're in jupyter, get rid of its built-in event loop
    except RuntimeError:
        pass  # this allows running benchmarks from background threads with no event loop
    loop = uvloop.new_event_loop()
    asyncio.set_event_loop(loop)
    return loop
