import pytest

from drtscenario.exported_account import ExportedAccount, get_sc_code, set_new_account

OWNER = b"owner___________________________"


def test_set_new_account_fields():
    storage = {b"key": b"value"}
    account = set_new_account(1, OWNER, 48, storage, b"", b"")
    assert account.nonce == 1
    assert account.address == OWNER
    assert account.balance == 48
    assert account.storage is storage
    assert account.code == b""
    assert account.owner_address == b""


def test_set_new_account_copies_code():
    code = bytearray(b"\x00asm")
    account = set_new_account(0, OWNER, 0, {}, code, OWNER)
    code[0] = 1
    assert account.code == b"\x00asm"
    assert account.owner_address == OWNER


def test_accounts_compare_by_value():
    first = set_new_account(3, OWNER, 11, {}, b"", b"")
    second = set_new_account(3, OWNER, 11, {}, b"", b"")
    assert first == second
    assert first != set_new_account(4, OWNER, 11, {}, b"", b"")


def test_default_account_is_empty():
    account = ExportedAccount()
    assert (account.nonce, account.address, account.balance) == (0, b"", 0)
    assert account.storage == {}


def test_get_sc_code_reads_file(tmp_path):
    wasm = tmp_path / "adder.wasm"
    wasm.write_bytes(b"\x00asm\x01\x00\x00\x00")
    assert get_sc_code(str(wasm)) == b"\x00asm\x01\x00\x00\x00"


def test_get_sc_code_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_sc_code(str(tmp_path / "missing.wasm"))