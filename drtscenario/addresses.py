"""Address expressions and hashing used by scenario values."""

from __future__ import annotations

import binascii

from Crypto.Hash import keccak

from .bech32 import DEFAULT_ADDRESS_PREFIX, Bech32Error, decode_address

ADDRESS_LEN = 32

# Number of zero bytes every smart contract address begins with.
SC_ADDRESS_NUM_LEADING_ZEROS = 8

# 8 zeros for all SC addresses + 2 bytes holding the VM type.
SC_ADDRESS_RESERVED_PREFIX_LENGTH = SC_ADDRESS_NUM_LEADING_ZEROS + 2

VM_TYPE_LEN = 2


class AddressExpressionError(ValueError):
    """Raised when an address expression cannot be interpreted."""


def keccak256(data: bytes) -> bytes:
    """Return the legacy Keccak-256 digest of ``data``."""
    return keccak.new(digest_bits=256, data=bytes(data)).digest()


def _decode_shard_id(raw: str) -> int:
    try:
        shard_id = binascii.unhexlify(raw.encode("ascii"))
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise AddressExpressionError(f"could not parse address shard id: {exc}") from exc
    if len(shard_id) != 1:
        raise AddressExpressionError(f"bad address shard id length: {raw}")
    return shard_id[0]


def _address_from_prefix(prefix: bytes, start: int) -> bytearray:
    result = bytearray(ADDRESS_LEN)
    available = ADDRESS_LEN - start
    copied = prefix[:available]
    result[start:start + len(copied)] = copied
    for position in range(start + len(prefix), ADDRESS_LEN):
        result[position] = ord("_")
    return result


def _address_optional_shard_id(text: str, num_leading_zeros: int) -> bytearray:
    tokens = text.split("#")
    if len(tokens) > 2:
        raise AddressExpressionError(
            f"only one shard id separator allowed in address expression. Got: `{text}`"
        )
    address = _address_from_prefix(tokens[0].encode("utf-8"), num_leading_zeros)
    if len(tokens) == 2:
        address[ADDRESS_LEN - 1] = _decode_shard_id(tokens[1])
    return address


def address_expression(text: str) -> bytes:
    """Build a 32-byte account address, padded with underscores."""
    return bytes(_address_optional_shard_id(text, 0))


def sc_expression(text: str, vm_type: bytes) -> bytes:
    """Build a 32-byte smart contract address carrying ``vm_type``."""
    address = _address_optional_shard_id(text, SC_ADDRESS_RESERVED_PREFIX_LENGTH)
    start = SC_ADDRESS_RESERVED_PREFIX_LENGTH - VM_TYPE_LEN
    vm_bytes = bytes(vm_type)[: ADDRESS_LEN - start]
    address[start:start + len(vm_bytes)] = vm_bytes
    return bytes(address)


def bech32_address(text: str) -> bytes:
    """Decode a bech32 address with the default prefix."""
    try:
        return decode_address(text, DEFAULT_ADDRESS_PREFIX, ADDRESS_LEN)
    except Bech32Error as exc:
        raise AddressExpressionError(str(exc)) from exc