""" XML-RPC transport to a single DHT gateway """
import http.client
import threading
import xml.parsers.expat
import xmlrpc.client
from typing import Any, Optional

import pydantic

from dhtaccess.utils.logging import get_logger

logger = get_logger(__name__)


class GatewayError(Exception):
    """A request to the gateway failed before a valid reply was received"""


class MalformedEndpointError(ValueError):
    """The gateway locator is not a valid http(s) URL"""


class GatewayEndpoint(pydantic.BaseModel):
    """A validated http(s) URL of one gateway, e.g. http://localhost:5851/"""

    url: pydantic.AnyHttpUrl

    @classmethod
    def parse(cls, locator: str) -> "GatewayEndpoint":
        if not isinstance(locator, str):
            raise MalformedEndpointError(f"Gateway locator must be a string, got {type(locator).__name__}")
        try:
            return cls(url=locator)
        except pydantic.ValidationError as e:
            raise MalformedEndpointError(f"Malformed gateway URL {locator!r}: {e}") from e

    @property
    def uri(self) -> str:
        return str(self.url)

    @property
    def is_secure(self) -> bool:
        return self.url.scheme == "https"


class _TimeoutMixin:
    """Applies a socket timeout to every connection made by an xmlrpc.client transport"""

    def __init__(self, *args, timeout: Optional[float] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.timeout = timeout

    def make_connection(self, host):
        connection = super().make_connection(host)
        if self.timeout is not None:
            connection.timeout = self.timeout
        return connection


class _TimeoutTransport(_TimeoutMixin, xmlrpc.client.Transport):
    pass


class _SafeTimeoutTransport(_TimeoutMixin, xmlrpc.client.SafeTransport):
    pass


class XMLRPCTransport:
    """
    Sends positional XML-RPC requests to one gateway. Binary parameters travel as base64 and come back as bytes.

    The transport is immutable after construction and may be shared between threads:
    each thread lazily gets its own ServerProxy (and, with it, its own HTTP connection).

    :param endpoint: the gateway to talk to
    :param timeout: socket timeout for every request, in seconds; None means no timeout
    """

    def __init__(self, endpoint: GatewayEndpoint, timeout: Optional[float] = None):
        self.endpoint, self.timeout = endpoint, timeout
        self._local = threading.local()

    def _get_proxy(self) -> xmlrpc.client.ServerProxy:
        proxy = getattr(self._local, "proxy", None)
        if proxy is None:
            transport_cls = _SafeTimeoutTransport if self.endpoint.is_secure else _TimeoutTransport
            transport = transport_cls(timeout=self.timeout, use_builtin_types=True)
            proxy = self._local.proxy = xmlrpc.client.ServerProxy(self.endpoint.uri, transport=transport)
        return proxy

    def call(self, method_name: str, *params: Any) -> Any:
        """
        Invoke a remote method and return its decoded reply.
        :raises GatewayError: on any transport or protocol failure, including XML-RPC faults
        """
        try:
            return getattr(self._get_proxy(), method_name)(*params)
        except xmlrpc.client.Fault as e:
            raise GatewayError(f"{method_name}: gateway fault {e.faultCode}: {e.faultString}") from e
        except xmlrpc.client.ProtocolError as e:
            raise GatewayError(f"{method_name}: HTTP {e.errcode} {e.errmsg}") from e
        except (xmlrpc.client.Error, http.client.HTTPException, xml.parsers.expat.ExpatError, OSError) as e:
            raise GatewayError(f"{method_name}: {e!r}") from e

    def __repr__(self):
        return f"{self.__class__.__name__}({self.endpoint.uri!r}, timeout={self.timeout})"
