from dhtaccess.core.accessor import DEFAULT_TTL, NUM_ITEMS_TO_GET, DHTAccessor
from dhtaccess.core.addressing import HASH_ALGORITHM_NAME, HASH_NBYTES, AddressedKey, address_of
from dhtaccess.core.results import (
    END_OF_PAGES,
    DetailedGetResult,
    GatewayStatus,
    OperationResult,
    Page,
    Placemark,
    RetrievalResult,
)
from dhtaccess.core.transport import GatewayEndpoint, GatewayError, MalformedEndpointError, XMLRPCTransport
