"""Accounts extracted from scenarios for benchmarking."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class ExportedAccount:
    """An account as set up by a scenario."""

    nonce: int = 0
    address: bytes = b""
    balance: int = 0
    storage: dict[bytes, bytes] = field(default_factory=dict)
    code: bytes = b""
    owner_address: bytes = b""


def set_new_account(
    nonce: int,
    address: bytes,
    balance: int,
    storage: dict,
    code: bytes,
    owner_address: bytes,
) -> ExportedAccount:
    """Create an account; code and owner are copied."""
    return ExportedAccount(
        nonce=nonce,
        address=bytes(address),
        balance=int(balance),
        storage=storage,
        code=bytes(code),
        owner_address=bytes(owner_address),
    )


def get_sc_code(file_name: str) -> bytes:
    """Read the bytecode of a contract from a file."""
    with open(os.path.normpath(file_name), "rb") as handle:
        return handle.read()