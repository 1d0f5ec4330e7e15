import pytest

from drtscenario.exported_transaction import (
    Transaction,
    create_deploy_transaction,
    create_deploy_tx_data,
    create_transaction,
    create_upgrade_transaction,
)

OWNER = b"owner___________________________"
ADDER = b"\x00\x00\x00\x00\x00\x00\x00\x00\x05\x00adder_____________________"


@pytest.fixture
def code_file(tmp_path):
    wasm = tmp_path / "adder.wasm"
    wasm.write_bytes(b"\x00asm")
    return wasm


def test_create_transaction_fields():
    args = [b"\x03"]
    tx = create_transaction("add", args, 0, 0, [], OWNER, ADDER, 5000000, 1)
    args.append(b"\x04")
    assert tx.function == "add"
    assert tx.args == [b"\x03"]
    assert tx.snd_addr == OWNER
    assert tx.rcv_addr == ADDER
    assert (tx.gas_limit, tx.gas_price) == (5000000, 1)
    assert tx.deploy_data == b""


def test_identical_transactions_are_equal():
    first = create_transaction("add", [b"\x03"], 0, 0, [], OWNER, ADDER, 5000000, 1)
    second = create_transaction("add", [b"\x03"], 0, 0, [], OWNER, ADDER, 5000000, 1)
    assert first == second


def test_deploy_tx_data_format(code_file):
    data = create_deploy_tx_data("file:" + str(code_file), None)
    assert data == b"@0061736d@30353030@30313032"


def test_deploy_tx_data_appends_arguments(code_file):
    base = create_deploy_tx_data("file:" + str(code_file), [])
    with_args = create_deploy_tx_data("file:" + str(code_file), [b"\x03", b"ab"])
    assert with_args == base + b"@03@6162"


def test_deploy_transaction(code_file):
    tx = create_deploy_transaction([b"\x03"], "file:" + str(code_file), OWNER, 100, 1)
    assert tx.deploy_data == create_deploy_tx_data("file:" + str(code_file), [b"\x03"])
    assert tx.rcv_addr == b""
    assert tx.snd_addr == OWNER
    assert tx.function == ""


def test_upgrade_transaction_has_receiver(code_file):
    tx = create_upgrade_transaction(None, "file:" + str(code_file), OWNER, ADDER, 100, 2)
    deploy = create_deploy_transaction(None, "file:" + str(code_file), OWNER, 100, 2)
    assert tx.rcv_addr == ADDER
    assert tx.deploy_data == deploy.deploy_data


def test_with_deploy_data_accumulates(code_file):
    tx = Transaction()
    tx.with_deploy_data("file:" + str(code_file), None).with_deploy_data(
        "file:" + str(code_file), None
    )
    single = create_deploy_tx_data("file:" + str(code_file), None)
    assert tx.deploy_data == single + single


def test_deploy_with_missing_code(tmp_path):
    with pytest.raises(FileNotFoundError):
        create_deploy_tx_data("file:" + str(tmp_path / "missing.wasm"), None)