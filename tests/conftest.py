import pytest

from dhtaccess.utils.logging import get_logger, use_dhtaccess_log_handler

from test_utils.gateway import InMemoryGateway, serve_gateway

use_dhtaccess_log_handler("in_root_logger")
logger = get_logger(__name__)


@pytest.fixture
def gateway():
    """An in-memory gateway served over XML-RPC; yields (gateway, url)"""
    in_memory_gateway = InMemoryGateway()
    with serve_gateway(in_memory_gateway) as url:
        logger.debug(f"Serving test gateway at {url}")
        yield in_memory_gateway, url
