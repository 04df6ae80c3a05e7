from __future__ import annotations

from typing import Callable, Iterator, Optional, Set, TypeVar

from dhtaccess.core.addressing import HASH_ALGORITHM_NAME, address_of
from dhtaccess.core.results import (
    END_OF_PAGES,
    DetailedGetResult,
    OperationResult,
    Page,
    RetrievalResult,
)
from dhtaccess.core.transport import GatewayEndpoint, GatewayError, XMLRPCTransport
from dhtaccess.utils.logging import get_logger

logger = get_logger(__name__)
T = TypeVar("T")

DEFAULT_TTL = 3600  # seconds
NUM_ITEMS_TO_GET = 10

PUT_TOOL_NAME = "put.py"
GET_TOOL_NAME = "get.py"
REMOVE_TOOL_NAME = "rm.py"


class DHTAccessor:
    """
    A client of one DHT gateway that speaks the OpenDHT XML-RPC protocol.

    Keys are never sent as is: every key is hashed with :func:`address_of` first. Values put with a secret
    can later be removed by whoever knows that secret; the gateway only ever stores the secret's hash.

    A single accessor may be used from many threads at once.

    :param gateway: URL of the gateway, e.g. http://localhost:5851/
    :param timeout: socket timeout for every request, in seconds (default: wait forever)
    :param page_size: how many values to request per page in get / get_details
    :raises MalformedEndpointError: if gateway is not a valid http(s) URL
    """

    def __init__(self, gateway: str, *, timeout: Optional[float] = None, page_size: int = NUM_ITEMS_TO_GET):
        assert page_size > 0, f"page_size must be positive, got {page_size}"
        self.timeout, self.page_size = timeout, page_size
        self.set_gateway(gateway)

    @property
    def gateway(self) -> str:
        """URL of the gateway this accessor talks to"""
        return self._gateway

    def set_gateway(self, gateway: str) -> None:
        """Point this accessor to another gateway. Requests already in flight finish on the old one."""
        transport = XMLRPCTransport(GatewayEndpoint.parse(gateway), timeout=self.timeout)
        self._gateway, self._transport = gateway, transport

    def put(self, key: bytes, value: bytes, ttl: int = DEFAULT_TTL, secret: Optional[bytes] = None) -> OperationResult:
        """
        Store a value under key. Several values may coexist under the same key.

        :param ttl: seconds to keep the value for; non-positive ttl is replaced with DEFAULT_TTL
        :param secret: if specified, the value is put as removable and can be removed with the same secret.
          Only the hash of the secret is sent to the gateway.
        :returns: the gateway's result code (see GatewayStatus) or the transport error
        """
        if ttl <= 0:
            ttl = DEFAULT_TTL

        if secret is None:
            method_name = "put"
            params = (address_of(key), value, ttl, PUT_TOOL_NAME)
        else:
            method_name = "put_removable"
            params = (address_of(key), value, HASH_ALGORITHM_NAME, address_of(secret), ttl, PUT_TOOL_NAME)

        return self._call_for_code(method_name, *params)

    def remove(self, key: bytes, value: bytes, secret: bytes, ttl: int = DEFAULT_TTL) -> OperationResult:
        """
        Remove one specific value stored under key with put(..., secret=secret).

        The value is identified by its hash. The secret is sent as is; the gateway hashes it and compares
        the result with the hash stored at put time.

        :param ttl: how long the gateway should remember the removal, in seconds
        :returns: the gateway's result code (see GatewayStatus) or the transport error
        """
        params = (address_of(key), address_of(value), HASH_ALGORITHM_NAME, secret, ttl, REMOVE_TOOL_NAME)
        return self._call_for_code("rm", *params)

    def get(self, key: bytes) -> RetrievalResult[bytes]:
        """
        Fetch all values currently stored under key, following the gateway's pagination to the end.
        If a page request fails, returns the values received so far along with the error.
        """
        return self._accumulate("get", key, bytes)

    def get_details(self, key: bytes) -> RetrievalResult[DetailedGetResult]:
        """Same as get, but also fetch each value's remaining ttl and secret hash"""
        return self._accumulate("get_details", key, DetailedGetResult.from_wire)

    def iterate_pages(
        self, method_name: str, key: bytes, decode: Callable[..., T] = bytes
    ) -> Iterator[Page[T]]:
        """
        Lazily request pages of a paginated method (get or get_details) until the gateway
        replies with an empty placemark.

        :param decode: converts one raw item of a page into the item type
        :raises GatewayError: if any page request fails; pages yielded before that remain valid
        """
        transport = self._transport  # a concurrent set_gateway must not switch gateways mid-pagination
        addressed_key, placemark = address_of(key), END_OF_PAGES

        while True:
            reply = transport.call(method_name, addressed_key, self.page_size, placemark, GET_TOOL_NAME)
            try:
                raw_items, placemark = reply
                page = Page(tuple(map(decode, raw_items)), bytes(placemark))
            except (TypeError, ValueError, OverflowError) as e:
                raise GatewayError(f"{method_name}: malformed reply {reply!r}") from e

            yield page
            if page.is_last:
                return

    def _accumulate(self, method_name: str, key: bytes, decode: Callable[..., T]) -> RetrievalResult[T]:
        values: Set[T] = set()
        num_pages = 0
        try:
            for page in self.iterate_pages(method_name, key, decode):
                values.update(page.items)
                num_pages += 1
        except GatewayError as e:
            logger.warning(f"{method_name} from {self.gateway} stopped after {num_pages} pages: {e}")
            return RetrievalResult(frozenset(values), num_pages, error=e)
        return RetrievalResult(frozenset(values), num_pages)

    def _call_for_code(self, method_name: str, *params) -> OperationResult:
        try:
            code = self._transport.call(method_name, *params)
        except GatewayError as e:
            logger.warning(f"{method_name} to {self.gateway} failed: {e}")
            return OperationResult(error=e)

        if not isinstance(code, int) or isinstance(code, bool):
            error = GatewayError(f"{method_name}: expected an integer code, got {code!r}")
            logger.warning(f"{method_name} to {self.gateway} failed: {error}")
            return OperationResult(error=error)
        return OperationResult(code=code)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.gateway!r})"
