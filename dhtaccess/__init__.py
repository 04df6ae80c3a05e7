from dhtaccess.benchmark import BenchmarkConfig, BenchmarkReport, measure_latency, measure_throughput
from dhtaccess.core import *
from dhtaccess.utils import *

__version__ = "0.1.0.dev0"
