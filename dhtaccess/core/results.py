""" Records and typed results returned by DHTAccessor """
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, FrozenSet, Generic, Iterator, Optional, Sequence, Tuple, TypeVar

from dhtaccess.core.transport import GatewayError

T = TypeVar("T")
Placemark = bytes  # opaque continuation token, empty means "no more pages"
END_OF_PAGES: Placemark = b""


class GatewayStatus(IntEnum):
    """Result codes of put, put_removable and rm as reported by the gateway"""

    SUCCESS = 0
    CAPACITY = 1  # the gateway rejected the request due to lack of space
    AGAIN = 2  # transient failure, the caller may retry later


_STATUS_NAMES = {
    GatewayStatus.SUCCESS: "Success",
    GatewayStatus.CAPACITY: "Capacity",
    GatewayStatus.AGAIN: "Again",
}


@dataclass(init=True, repr=True, frozen=True)
class DetailedGetResult:
    """One stored instance of a key, as returned by get_details"""

    value: bytes
    ttl: int  # seconds remaining before the gateway drops this value
    hash_type: str  # name of the algorithm used to hash the secret, e.g. "SHA"
    hashed_secret: bytes

    @classmethod
    def from_wire(cls, entry: Sequence[Any]) -> DetailedGetResult:
        value, ttl, hash_type, hashed_secret = entry
        return cls(bytes(value), int(ttl), str(hash_type), bytes(hashed_secret))

    def __iter__(self):
        return iter((self.value, self.ttl, self.hash_type, self.hashed_secret))


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a single put, put_removable or rm request.

    Exactly one of the fields is set: ``code`` holds whatever integer the gateway replied with
    (including codes this client does not know), ``error`` holds the transport failure otherwise.
    """

    code: Optional[int] = None
    error: Optional[GatewayError] = None

    def __post_init__(self):
        assert (self.code is None) != (self.error is None), "OperationResult needs either a code or an error"

    @property
    def ok(self) -> bool:
        return self.code == GatewayStatus.SUCCESS

    @property
    def status(self) -> Optional[GatewayStatus]:
        """The known status for this code; None for a transport failure or an unrecognized code"""
        if self.code is None:
            return None
        try:
            return GatewayStatus(self.code)
        except ValueError:
            return None

    def describe(self) -> str:
        if self.error is not None:
            return "Error"
        return _STATUS_NAMES.get(self.status, "???")


@dataclass(frozen=True)
class Page(Generic[T]):
    """A single reply of a paginated get / get_details request"""

    items: Tuple[T, ...]
    placemark: Placemark

    @property
    def is_last(self) -> bool:
        return len(self.placemark) == 0


@dataclass(frozen=True)
class RetrievalResult(Generic[T]):
    """
    All values gathered by a paginated retrieval.

    If a request failed midway, ``values`` still holds everything accumulated from the pages
    received before the failure, and ``error`` tells what went wrong.
    """

    values: FrozenSet[T]
    pages: int  # number of pages received
    error: Optional[GatewayError] = None

    @property
    def complete(self) -> bool:
        return self.error is None

    def __iter__(self) -> Iterator[T]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __contains__(self, item) -> bool:
        return item in self.values
