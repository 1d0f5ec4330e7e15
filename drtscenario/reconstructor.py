"""Conversion of raw bytes back into readable scenario expressions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable

from .addresses import SC_ADDRESS_NUM_LEADING_ZEROS, SC_ADDRESS_RESERVED_PREFIX_LENGTH
from .bech32 import Bech32Error, encode_address

_MAX_BYTES_INTERPRETED_AS_NUMBER = 15

_GO_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


class Hint(IntEnum):
    """What kind of value a byte string is expected to hold."""

    NO_HINT = 0
    NUMBER = 1
    ADDRESS = 2
    STR = 3
    CODE = 4
    HEX = 5


def _as_text(value: bytes) -> str:
    return bytes(value).decode("utf-8", errors="replace")


def _quote(value: bytes) -> str:
    """Double-quote bytes as text, escaping what is not printable."""
    parts = ['"']
    for ch in bytes(value).decode("utf-8", errors="surrogateescape"):
        code = ord(ch)
        if 0xDC80 <= code <= 0xDCFF:
            parts.append(f"\\x{code - 0xDC00:02x}")
        elif ch in _GO_ESCAPES:
            parts.append(_GO_ESCAPES[ch])
        elif ch.isprintable():
            parts.append(ch)
        elif code < 0x20 or code == 0x7F:
            parts.append(f"\\x{code:02x}")
        elif code < 0x10000:
            parts.append(f"\\u{code:04x}")
        else:
            parts.append(f"\\U{code:08x}")
    parts.append('"')
    return "".join(parts)


def _can_interpret_as_string(value: bytes) -> bool:
    return bool(value) and all(32 <= b <= 126 for b in value)


def _unknown_byte_array_pretty(value: bytes) -> str:
    if not value:
        return ""
    encoded = value.hex()
    if _can_interpret_as_string(value):
        return f"0x{encoded} (str:{_as_text(value)})"
    if len(value) < _MAX_BYTES_INTERPRETED_AS_NUMBER:
        return f"0x{encoded} ({int.from_bytes(value, 'big')})"
    return f"0x{encoded} (str:{_quote(value)})"


def _bech32_pretty(value: bytes) -> str:
    if not value:
        return ""
    try:
        encoded = encode_address(value)
    except Bech32Error:
        return ""
    if len(encoded) > 20:
        return f"bech32:{encoded[:62]}"
    return f"bech32:{encoded}"


def _address_pretty(value: bytes, bech32_addr: bool) -> str:
    if len(value) != 32:
        return _unknown_byte_array_pretty(value)
    if bech32_addr:
        return _bech32_pretty(value)

    underscore = ord("_")
    if not any(value[:SC_ADDRESS_NUM_LEADING_ZEROS]):
        if value[31] == underscore:
            name = _as_text(value[SC_ADDRESS_RESERVED_PREFIX_LENGTH:].rstrip(b"_"))
            return f"sc:{name}"
        name = _as_text(value[SC_ADDRESS_RESERVED_PREFIX_LENGTH:31].rstrip(b"_"))
        return f"sc:{name}#{value[31]:x}"

    if value[31] == underscore:
        return f"address:{_as_text(value.rstrip(b'_'))}"
    name = _as_text(value[:31].rstrip(b"_"))
    expression = f"address:{name}#{value[31]:02x}"
    if not _can_interpret_as_string(value[:31]):
        return f"0x{value.hex()} ({expression})"
    return expression


def _code_pretty(value: bytes) -> str:
    if not value:
        return ""
    encoded = value.hex()
    if len(encoded) > 20:
        return f"0x{encoded[:20]}..."
    return f"0x{encoded}"


@dataclass
class ExprReconstructor:
    """Turns raw bytes into a human-readable scenario expression."""

    bech32_addr: bool = False

    def reconstruct(self, value: bytes, hint: Hint = Hint.NO_HINT) -> str:
        """Return a readable expression for ``value``, guided by ``hint``."""
        value = bytes(value)
        if hint == Hint.NUMBER:
            return str(int.from_bytes(value, "big"))
        if hint == Hint.STR:
            return f"str:{_as_text(value)}"
        if hint == Hint.ADDRESS:
            return _address_pretty(value, self.bech32_addr)
        if hint == Hint.CODE:
            return _code_pretty(value)
        if hint == Hint.HEX:
            return f"0x{value.hex()}"
        return _unknown_byte_array_pretty(value)

    def reconstruct_from_big_int(self, value: int) -> str:
        """Return the decimal magnitude of ``value``."""
        magnitude = abs(int(value))
        return self.reconstruct(
            magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big"), Hint.NUMBER
        )

    def reconstruct_from_uint64(self, value: int) -> str:
        """Return the decimal form of an unsigned 64-bit value."""
        return self.reconstruct_from_big_int(value)

    def reconstruct_list(self, values: Iterable[bytes], hint: Hint = Hint.NO_HINT) -> str:
        """Return a bracketed, comma-separated list of quoted expressions."""
        items = ", ".join(f'"{self.reconstruct(value, hint)}"' for value in values)
        return f"[{items}]"