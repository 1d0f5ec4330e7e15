"""Transactions extracted from scenarios for benchmarking."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from .exported_account import get_sc_code

VM_TYPE_HEX = "0500"
DUMMY_CODE_METADATA_HEX = "0102"

# Length of "file:" in a scenario code value.
CONTRACT_CODE_PREFIX_LENGTH = 5


def create_deploy_tx_data(sc_code_path: str, args: Sequence[bytes] | None) -> bytes:
    """Build deploy data: code, VM type, code metadata and arguments, hex, '@'-separated."""
    sc_code = get_sc_code(sc_code_path[CONTRACT_CODE_PREFIX_LENGTH:])
    elements = [sc_code, VM_TYPE_HEX.encode(), DUMMY_CODE_METADATA_HEX.encode()]
    if args is not None:
        elements.extend(args)
    return "".join("@" + bytes(element).hex() for element in elements).encode()


@dataclass
class Transaction:
    """A transaction as issued by a scenario."""

    function: str = ""
    args: list[bytes] = field(default_factory=list)
    deploy_data: bytes = b""
    nonce: int = 0
    value: int = 0
    dcdt_value: list[Any] = field(default_factory=list)
    snd_addr: bytes = b""
    rcv_addr: bytes = b""
    gas_price: int = 0
    gas_limit: int = 0

    def with_deploy_data(
        self, sc_code_path: str, args: Sequence[bytes] | None
    ) -> "Transaction":
        """Append deploy data built from the code file and arguments."""
        self.deploy_data += create_deploy_tx_data(sc_code_path, args)
        return self


def create_transaction(
    function: str,
    args: Sequence[bytes],
    nonce: int,
    value: int,
    dcdt_transfers: Sequence[Any],
    snd_addr: bytes,
    rcv_addr: bytes,
    gas_limit: int,
    gas_price: int,
) -> Transaction:
    """Create a contract call transaction."""
    return Transaction(
        function=function,
        args=list(args),
        nonce=nonce,
        value=int(value),
        dcdt_value=list(dcdt_transfers),
        snd_addr=bytes(snd_addr),
        rcv_addr=bytes(rcv_addr),
        gas_limit=gas_limit,
        gas_price=gas_price,
    )


def create_deploy_transaction(
    args: Sequence[bytes] | None,
    sc_code_path: str,
    snd_addr: bytes,
    gas_limit: int,
    gas_price: int,
) -> Transaction:
    """Create a deploy transaction."""
    tx = Transaction(snd_addr=bytes(snd_addr), gas_limit=gas_limit, gas_price=gas_price)
    return tx.with_deploy_data(sc_code_path, args)


def create_upgrade_transaction(
    args: Sequence[bytes] | None,
    sc_code_path: str,
    snd_addr: bytes,
    rcv_addr: bytes,
    gas_limit: int,
    gas_price: int,
) -> Transaction:
    """Create an upgrade transaction."""
    tx = Transaction(
        snd_addr=bytes(snd_addr),
        rcv_addr=bytes(rcv_addr),
        gas_limit=gas_limit,
        gas_price=gas_price,
    )
    return tx.with_deploy_data(sc_code_path, args)