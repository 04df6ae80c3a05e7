""" Content addressing: maps raw keys, values and secrets onto fixed-length DHT keys """
import hashlib

HASH_FUNC = hashlib.sha1
HASH_NBYTES = 20  # SHA1 produces a 20-byte (aka 160bit) number
HASH_ALGORITHM_NAME = "SHA"  # the name the gateway expects next to a SHA1 digest

AddressedKey = bytes


def address_of(data: bytes) -> AddressedKey:
    """
    Hash arbitrary bytes into a DHT-routable key of HASH_NBYTES bytes.

    Keys, values (for rm) and secrets (for put_removable) all go through this function,
    so that put, get and remove always agree on the address of the same raw input.

    :param data: raw key, value or secret; may be empty
    :returns: SHA1 digest of data
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected bytes to address, got {type(data).__name__}")
    return HASH_FUNC(data).digest()
