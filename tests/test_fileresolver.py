import os

import pytest

from drtscenario.fileresolver import DefaultFileResolver, FileResolver


@pytest.fixture
def scenario_dir(tmp_path):
    (tmp_path / "data.txt").write_bytes(b"hello!")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "other.txt").write_bytes(b"other")
    return tmp_path


def test_abstract_resolver_cannot_be_instantiated():
    with pytest.raises(TypeError):
        FileResolver()


def test_resolve_relative_to_context(scenario_dir):
    resolver = DefaultFileResolver().with_context(str(scenario_dir / "test.scen.json"))
    assert resolver.resolve_absolute_path("data.txt") == str(scenario_dir / "data.txt")
    assert resolver.resolve_file_value("data.txt") == b"hello!"


def test_resolve_parent_path_is_cleaned(scenario_dir):
    resolver = DefaultFileResolver()
    resolver.set_context(str(scenario_dir / "sub" / "x.scen.json"))
    path = resolver.resolve_absolute_path("../data.txt")
    assert path == os.path.normpath(str(scenario_dir / "data.txt"))
    assert resolver.resolve_file_value("../data.txt") == b"hello!"


def test_replace_path(scenario_dir):
    target = str(scenario_dir / "sub" / "other.txt")
    resolver = DefaultFileResolver().with_context(str(scenario_dir / "t.json"))
    assert resolver.replace_path("contract.wasm", target) is resolver
    assert resolver.resolve_absolute_path("contract.wasm") == target
    assert resolver.resolve_file_value("contract.wasm") == b"other"


def test_empty_value_yields_empty_bytes():
    assert DefaultFileResolver().resolve_file_value("") == b""


def test_missing_file_raises(scenario_dir):
    resolver = DefaultFileResolver().with_context(str(scenario_dir / "t.json"))
    with pytest.raises(FileNotFoundError):
        resolver.resolve_file_value("nope.wasm")


def test_missing_file_allowed(scenario_dir):
    resolver = DefaultFileResolver().with_context(str(scenario_dir / "t.json"))
    resolver.allow_missing_files()
    assert resolver.resolve_file_value("nope.wasm") == b"MISSING:nope.wasm"


def test_clone_keeps_context_and_shares_replacements(scenario_dir):
    resolver = DefaultFileResolver().with_context(str(scenario_dir / "t.json"))
    resolver.allow_missing_files()
    copy = resolver.clone()
    assert copy is not resolver
    assert copy.resolve_file_value("data.txt") == b"hello!"
    resolver.replace_path("alias", str(scenario_dir / "data.txt"))
    assert copy.resolve_absolute_path("alias") == str(scenario_dir / "data.txt")
    with pytest.raises(FileNotFoundError):
        copy.resolve_file_value("nope.wasm")


def test_set_context_on_clone_does_not_affect_original(scenario_dir):
    resolver = DefaultFileResolver().with_context(str(scenario_dir / "t.json"))
    copy = resolver.clone()
    copy.set_context(str(scenario_dir / "sub" / "t.json"))
    assert resolver.resolve_file_value("data.txt") == b"hello!"
    assert copy.resolve_file_value("other.txt") == b"other"