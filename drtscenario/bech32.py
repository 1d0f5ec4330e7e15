"""Bech32 encoding and decoding of addresses."""

from __future__ import annotations

from typing import Iterable

CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
DEFAULT_ADDRESS_PREFIX = "moa"
MAX_LENGTH = 90

_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_CHECKSUM_LENGTH = 6


class Bech32Error(ValueError):
    """Raised when a bech32 string or payload is invalid."""


def _polymod(values: Iterable[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = ((checksum & 0x1FFFFFF) << 5) ^ value
        for bit, generator in enumerate(_GENERATOR):
            if (top >> bit) & 1:
                checksum ^= generator
    return checksum


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _create_checksum(hrp: str, data: list[int]) -> list[int]:
    polymod = _polymod(_hrp_expand(hrp) + data + [0] * _CHECKSUM_LENGTH) ^ 1
    return [(polymod >> 5 * (5 - shift)) & 31 for shift in range(_CHECKSUM_LENGTH)]


def _convert_bits(data: Iterable[int], from_bits: int, to_bits: int, pad: bool) -> list[int]:
    accumulator = 0
    bits = 0
    result: list[int] = []
    max_value = (1 << to_bits) - 1
    for value in data:
        if value < 0 or value >> from_bits:
            raise Bech32Error(f"invalid data value: {value}")
        accumulator = (accumulator << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((accumulator >> bits) & max_value)
    if pad:
        if bits:
            result.append((accumulator << (to_bits - bits)) & max_value)
    elif bits >= from_bits or ((accumulator << (to_bits - bits)) & max_value):
        raise Bech32Error("invalid padding in bech32 data")
    return result


def bech32_encode(hrp: str, data: Iterable[int]) -> str:
    """Encode 5-bit values under a human-readable part."""
    values = list(data)
    if any(value < 0 or value > 31 for value in values):
        raise Bech32Error("bech32 data values must fit in 5 bits")
    hrp = hrp.lower()
    checksum = _create_checksum(hrp, values)
    return hrp + "1" + "".join(CHARSET[value] for value in values + checksum)


def bech32_decode(text: str) -> tuple[str, list[int]]:
    """Decode a bech32 string into its human-readable part and 5-bit values."""
    if len(text) > MAX_LENGTH:
        raise Bech32Error(f"bech32 string too long: {len(text)} characters")
    if any(ord(c) < 33 or ord(c) > 126 for c in text):
        raise Bech32Error("invalid character in bech32 string")
    if text.lower() != text and text.upper() != text:
        raise Bech32Error("bech32 string uses mixed case")
    text = text.lower()
    separator = text.rfind("1")
    if separator < 1 or separator + _CHECKSUM_LENGTH + 1 > len(text):
        raise Bech32Error("invalid separator position in bech32 string")
    hrp = text[:separator]
    data = []
    for c in text[separator + 1:]:
        value = CHARSET.find(c)
        if value < 0:
            raise Bech32Error(f"invalid bech32 character: {c!r}")
        data.append(value)
    if _polymod(_hrp_expand(hrp) + data) != 1:
        raise Bech32Error("invalid bech32 checksum")
    return hrp, data[:-_CHECKSUM_LENGTH]


def encode_address(address: bytes, hrp: str = DEFAULT_ADDRESS_PREFIX) -> str:
    """Encode raw address bytes as a bech32 string."""
    return bech32_encode(hrp, _convert_bits(address, 8, 5, True))


def decode_address(
    text: str, hrp: str = DEFAULT_ADDRESS_PREFIX, address_len: int = 32
) -> bytes:
    """Decode a bech32 address, checking its prefix and length."""
    decoded_hrp, data = bech32_decode(text)
    if decoded_hrp != hrp:
        raise Bech32Error(f"invalid address prefix: {decoded_hrp!r}, expected {hrp!r}")
    address = bytes(_convert_bits(data, 5, 8, False))
    if len(address) != address_len:
        raise Bech32Error(
            f"wrong address length: {len(address)}, expected {address_len}"
        )
    return address