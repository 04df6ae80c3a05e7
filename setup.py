import codecs
import os
import re

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))


def read_requirements(filename):
    with open(os.path.join(here, filename)) as requirements_file:
        lines = (line.split("#", 1)[0].strip() for line in requirements_file)
        return [line for line in lines if line]


install_requires = read_requirements("requirements.txt")

# loading version from setup.py
with codecs.open(os.path.join(here, "dhtaccess/__init__.py"), encoding="utf-8") as init_file:
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]", init_file.read(), re.M)
    version_string = version_match.group(1)

extras = {}
extras["dev"] = read_requirements("requirements-dev.txt")
extras["all"] = extras["dev"]

setup(
    name="dhtaccess",
    version=version_string,
    description="Client and load benchmarks for DHT gateways that speak the OpenDHT XML-RPC protocol",
    long_description="A client for distributed hash tables reachable through an OpenDHT-style XML-RPC gateway: "
    "hashed keys, paginated multi-value gets, secret-protected removal, and open-loop throughput benchmarks.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    license="Apache-2.0",
    install_requires=install_requires,
    extras_require=extras,
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Distributed Computing",
        "Topic :: System :: Benchmark",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    entry_points={
        "console_scripts": [
            "dht-get = dhtaccess.dhtaccess_cli.get:main",
            "dht-put = dhtaccess.dhtaccess_cli.put:main",
            "dht-rm = dhtaccess.dhtaccess_cli.remove:main",
            "dht-benchmark-latency = dhtaccess.dhtaccess_cli.benchmark_latency:main",
            "dht-benchmark-throughput = dhtaccess.dhtaccess_cli.benchmark_throughput:main",
        ]
    },
    keywords="dht, opendht, xml-rpc, benchmark, distributed hash table",
)
