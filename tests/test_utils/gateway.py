""" Gateways for tests: an in-memory OpenDHT-like store and scripted page sequences, served over real XML-RPC """
import hashlib
import socketserver
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple
from xmlrpc.server import SimpleXMLRPCServer

GATEWAY_METHODS = ("put", "put_removable", "get", "get_details", "rm")
RM_DENIED = 3  # not one of the codes a client knows about


@dataclass(frozen=True)
class StoredValue:
    value: bytes
    ttl: int
    hash_type: str
    hashed_secret: bytes


class InMemoryGateway:
    """
    Stores values in a dict instead of a DHT. Values never expire. Every request is recorded in ``requests``
    as (method_name, params) so that tests can check exactly what the client sent.

    :param capacity: reject puts with code 1 once this many values are stored
    """

    def __init__(self, capacity: Optional[int] = None):
        self.capacity = capacity
        self.storage: Dict[bytes, Dict[Tuple[bytes, bytes], StoredValue]] = {}
        self.requests: List[Tuple[str, tuple]] = []
        self.lock = threading.Lock()

    def put(self, key, value, ttl, client_tag):
        self._record("put", key, value, ttl, client_tag)
        return self._store(key, StoredValue(value, ttl, "", b""))

    def put_removable(self, key, value, hash_type, hashed_secret, ttl, client_tag):
        self._record("put_removable", key, value, hash_type, hashed_secret, ttl, client_tag)
        return self._store(key, StoredValue(value, ttl, hash_type, hashed_secret))

    def get(self, key, max_values, placemark, client_tag):
        self._record("get", key, max_values, placemark, client_tag)
        entries, next_placemark = self._page(key, max_values, placemark)
        return [[entry.value for entry in entries], next_placemark]

    def get_details(self, key, max_values, placemark, client_tag):
        self._record("get_details", key, max_values, placemark, client_tag)
        entries, next_placemark = self._page(key, max_values, placemark)
        return [[[e.value, e.ttl, e.hash_type, e.hashed_secret] for e in entries], next_placemark]

    def rm(self, key, value_hash, hash_type, secret, ttl, client_tag):
        """Remove values whose hash is value_hash if they were put with the SHA1 of this (clear) secret"""
        self._record("rm", key, value_hash, hash_type, secret, ttl, client_tag)
        if hash_type != "SHA":
            return RM_DENIED
        hashed_secret = hashlib.sha1(secret).digest()
        with self.lock:
            entries = self.storage.get(key, {})
            matching = [
                index
                for index, entry in entries.items()
                if hashlib.sha1(entry.value).digest() == value_hash and entry.hashed_secret == hashed_secret
            ]
            for index in matching:
                del entries[index]
        return 0 if matching else RM_DENIED

    def values_under(self, key: bytes) -> List[bytes]:
        with self.lock:
            return [entry.value for entry in self.storage.get(key, {}).values()]

    def _record(self, method_name, *params):
        with self.lock:
            self.requests.append((method_name, params))

    def _store(self, key, entry: StoredValue) -> int:
        with self.lock:
            num_stored = sum(map(len, self.storage.values()))
            if self.capacity is not None and num_stored >= self.capacity:
                return 1
            self.storage.setdefault(key, {})[entry.value, entry.hashed_secret] = entry
            return 0

    def _page(self, key, max_values, placemark) -> Tuple[List[StoredValue], bytes]:
        offset = int(placemark) if placemark else 0
        with self.lock:
            entries = list(self.storage.get(key, {}).values())
        page = entries[offset : offset + max_values]
        next_offset = offset + len(page)
        return page, str(next_offset).encode() if next_offset < len(entries) else b""


class ScriptedGateway:
    """
    Replies to get and get_details with a fixed sequence of (items, placemark) pages.

    :param fail_at: index of the request that raises instead of replying (the client sees an XML-RPC fault)
    """

    def __init__(self, pages: Sequence[Tuple[list, bytes]], fail_at: Optional[int] = None):
        self.pages, self.fail_at = list(pages), fail_at
        self.placemarks: List[bytes] = []

    @property
    def num_requests(self) -> int:
        return len(self.placemarks)

    def get(self, key, max_values, placemark, client_tag):
        index = len(self.placemarks)
        self.placemarks.append(placemark)
        if index == self.fail_at:
            raise RuntimeError(f"simulated failure on page {index + 1}")
        items, next_placemark = self.pages[index]
        return [list(items), next_placemark]

    get_details = get


class ConstantCodeGateway:
    """Answers every put, put_removable and rm with the same code"""

    def __init__(self, code: int):
        self.code = code

    def put(self, *params):
        return self.code

    put_removable = rm = put


class HangingGateway:
    """Holds every get and get_details until ``release`` is set, as an overloaded gateway would"""

    def __init__(self):
        self.release = threading.Event()

    def get(self, key, max_values, placemark, client_tag):
        self.release.wait()
        return [[], b""]

    get_details = get


class _ThreadedXMLRPCServer(socketserver.ThreadingMixIn, SimpleXMLRPCServer):
    daemon_threads = True


@contextmanager
def serve_gateway(gateway) -> Iterator[str]:
    """Serve the gateway's methods over XML-RPC on a free localhost port, yield the gateway URL"""
    server = _ThreadedXMLRPCServer(("127.0.0.1", 0), logRequests=False, use_builtin_types=True)
    for method_name in GATEWAY_METHODS:
        if hasattr(gateway, method_name):
            server.register_function(getattr(gateway, method_name), method_name)

    thread = threading.Thread(target=server.serve_forever, name="test-gateway", daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}/"
    finally:
        server.shutdown()
        server.server_close()
        thread.join()
