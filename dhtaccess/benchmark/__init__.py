from dhtaccess.benchmark.config import BenchmarkConfig
from dhtaccess.benchmark.latency import measure_latency
from dhtaccess.benchmark.report import BenchmarkReport
from dhtaccess.benchmark.schedule import ScheduleEntry, plan_schedule
from dhtaccess.benchmark.tally import Tally
from dhtaccess.benchmark.throughput import measure_throughput
from dhtaccess.benchmark.workload import fetch, generate_key_prefix, make_key, make_value, seed_values
