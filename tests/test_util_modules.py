import asyncio
import logging
import resource

import numpy as np
import pytest
import uvloop

from dhtaccess.benchmark import BenchmarkReport
from dhtaccess.utils.asyncio import switch_to_uvloop
from dhtaccess.utils.limits import RESERVED_FILES, increase_file_limit
from dhtaccess.utils.logging import CustomFormatter, get_logger, use_dhtaccess_log_handler


def test_switch_to_uvloop():
    loop = switch_to_uvloop()
    try:
        assert isinstance(loop, uvloop.Loop)
        assert loop.run_until_complete(asyncio.sleep(0.01, result="done")) == "done"
    finally:
        loop.close()
        asyncio.set_event_loop(None)


def test_increase_file_limit():
    soft_limit = increase_file_limit(max_in_flight=1)
    assert soft_limit is None or soft_limit >= 1 + RESERVED_FILES or soft_limit == resource.RLIM_INFINITY


def test_log_handler_modes():
    package_logger = logging.getLogger("dhtaccess")
    try:
        use_dhtaccess_log_handler("in_dhtaccess")
        assert not package_logger.propagate and package_logger.handlers

        use_dhtaccess_log_handler("nowhere")
        assert package_logger.propagate and not package_logger.handlers
    finally:
        use_dhtaccess_log_handler("in_root_logger")
    assert package_logger.propagate and logging.getLogger().handlers


def test_formatter_caller():
    record = get_logger("dhtaccess.core.accessor").makeRecord(
        "dhtaccess.core.accessor", logging.WARNING, "accessor.py", 42, "message", None, None, func="get"
    )
    formatted = CustomFormatter(fmt="{caller} {message}", style="{").format(record)
    assert formatted == "core.accessor.get:42 message"


def test_report_stats():
    report = BenchmarkReport(planned=4, completed=4, succeeded=3, elapsed=2.0, latencies=np.array([0.1, 0.2, 0.3, 0.4]))
    stats = report.latency_stats()
    assert stats["mean"] == pytest.approx(0.25)
    assert stats["max"] == pytest.approx(0.4)
    assert stats["p50"] == pytest.approx(0.25)
    assert report.success_rate == 0.75 and report.throughput == 2.0

    empty = BenchmarkReport(planned=0, completed=0, succeeded=0, elapsed=0.0)
    assert empty.success_rate == 0.0 and empty.throughput == 0.0
    assert empty.latency_stats()["mean"] == 0.0
