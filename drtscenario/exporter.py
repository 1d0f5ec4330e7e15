"""Extraction of accounts and transactions from scenarios, for benchmarks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from .exported_account import ExportedAccount, set_new_account
from .exported_transaction import (
    Transaction,
    create_deploy_transaction,
    create_transaction,
    create_upgrade_transaction,
)

SC_ADDRESS_PREFIX = bytes([0, 0, 0, 0, 0, 0, 0, 0, 5, 0])
SC_ADDRESS_PREFIX_LENGTH = 10

INVALID_BENCHMARK_TX_POS = -1

BENCHMARK_TX_IDENT = "benchmark"

_OK_STATUS = 0
_MINIMUM_ACCEPTED_GAS_PRICE = 1


class ExportError(ValueError):
    """Raised when a scenario cannot be turned into benchmark data."""


@dataclass
class ScenarioWithBenchmark:
    """Accounts and transactions of a scenario, and where the benchmark tx is."""

    accs: list[ExportedAccount] = field(default_factory=list)
    deployed_accs: list[ExportedAccount] = field(default_factory=list)
    txs: list[Transaction] = field(default_factory=list)
    deploy_txs: list[Transaction] = field(default_factory=list)
    benchmark_tx_pos: int = INVALID_BENCHMARK_TX_POS


def _sc_address(address: bytes) -> bytes:
    return SC_ADDRESS_PREFIX + bytes(address)[SC_ADDRESS_PREFIX_LENGTH:]


def get_accounts_and_transactions_from_scenarios(
    test_path: str, load_scenario: Callable[[str], Any]
) -> ScenarioWithBenchmark:
    """Load the scenario at ``test_path`` and extract its benchmark data.

    ``load_scenario`` reads a scenario file and returns an object with ``steps``.
    """
    scenario = load_scenario(test_path)
    return accounts_and_transactions_from_steps(scenario.steps, load_scenario)


def _step_name(step: Any) -> str:
    return step.step_type_name()


def accounts_and_transactions_from_steps(
    steps: Sequence[Any], load_scenario: Callable[[str], Any]
) -> ScenarioWithBenchmark:
    """Collect accounts and successful transactions from scenario steps."""
    if not steps:
        raise ExportError("no steps were provided")
    if _step_name(steps[0]) not in ("setState", "externalSteps"):
        raise ExportError("first step must be of type SetState")

    info = ScenarioWithBenchmark()

    for step in steps:
        name = _step_name(step)
        if name == "setState":
            accounts, deployed = _accounts_from_set_state_step(step)
            info.accs.extend(accounts)
            info.deployed_accs.extend(deployed)
        elif name == "externalSteps":
            external = get_accounts_and_transactions_from_scenarios(step.path, load_scenario)
            if info.benchmark_tx_pos == INVALID_BENCHMARK_TX_POS:
                info.benchmark_tx_pos = external.benchmark_tx_pos
            info.accs.extend(external.accs)
            info.deployed_accs.extend(external.deployed_accs)
            info.txs.extend(external.txs)
            info.deploy_txs.extend(external.deploy_txs)
        elif hasattr(step, "tx"):
            _add_tx_step(info, step, name)

    return info


def _add_tx_step(info: ScenarioWithBenchmark, step: Any, name: str) -> None:
    expected = step.expected_result
    if expected is None or int(expected.status.value) != _OK_STATUS:
        return

    tx = step.tx
    if tx.gas_price.value == 0:
        tx.gas_price.value = _MINIMUM_ACCEPTED_GAS_PRICE
    arguments = [bytes(arg.value) for arg in tx.arguments]

    if name in ("scCall", "scUpgrade"):
        if (
            step.tx_ident == BENCHMARK_TX_IDENT
            and info.benchmark_tx_pos == INVALID_BENCHMARK_TX_POS
        ):
            info.benchmark_tx_pos = len(info.txs)
        if name == "scCall":
            created = create_transaction(
                tx.function,
                arguments,
                tx.nonce.value,
                tx.rewa_value.value,
                tx.dcdt_value,
                tx.from_.value,
                _sc_address(tx.to.value),
                tx.gas_limit.value,
                tx.gas_price.value,
            )
        else:
            created = create_upgrade_transaction(
                arguments,
                tx.code.original,
                tx.from_.value,
                _sc_address(tx.to.value),
                tx.gas_limit.value,
                tx.gas_price.value,
            )
        info.txs.append(created)
    elif name == "scDeploy":
        info.deploy_txs.append(
            create_deploy_transaction(
                arguments,
                tx.code.original,
                tx.from_.value,
                tx.gas_limit.value,
                tx.gas_price.value,
            )
        )


def _accounts_from_set_state_step(
    step: Any,
) -> tuple[list[ExportedAccount], list[ExportedAccount]]:
    accounts = []
    for scen_account in step.accounts:
        account = _convert_account(scen_account)
        if account.code:
            account.address = _sc_address(account.address)
        accounts.append(account)

    deployed = [
        set_new_account(
            0,
            _sc_address(mock.new_address.value),
            0,
            {},
            b"",
            mock.creator_address.value,
        )
        for mock in step.new_address_mocks
    ]
    return accounts, deployed


def _convert_account(scen_account: Any) -> ExportedAccount:
    """Convert a scenario account; token data is not written into storage."""
    if len(scen_account.address.value) != 32:
        raise ExportError("bad test: account address should be 32 bytes long")
    storage = {
        bytes(kv.key.value): bytes(kv.value.value) for kv in scen_account.storage
    }
    account = set_new_account(
        scen_account.nonce.value,
        scen_account.address.value,
        scen_account.balance.value,
        storage,
        scen_account.code.value,
        scen_account.owner.value,
    )
    if account.code and not account.owner_address:
        raise ExportError("scAccount must have owner")
    return account