# drtscenario

Building blocks for working with smart-contract scenario test files
(`.scen.json`, `.step.json`, `.steps.json`): an order-preserving JSON
model, address expressions and bech32, conversion of raw bytes back into
readable expressions, resolution of `file:` values, a controller that runs
scenario files through an executor you supply, a folder formatter, and an
exporter that turns scenarios into accounts and transactions for
benchmarks.

Install with `pip install .`; the tests need the `test` extra
(`pip install .[test]`, then `pytest`).

## Ordered JSON

`drtscenario.ojparse.parse_ordered_json` parses text or bytes into a tree
of `OJsonMap`, `OJsonList`, `OJsonString` and `OJsonBool`
(from `drtscenario.ojmodel`), keeping the order of keys in every map.
`json_string` writes a tree back in the canonical four-space layout.

```python
from drtscenario.ojparse import parse_ordered_json
from drtscenario.ojmodel import json_string

tree = parse_ordered_json(b'{"b": "x", "a": ["y", true]}')
print(json_string(tree))
```

Only strings, booleans, maps and lists are accepted (numbers in scenario
files are written as strings); string contents are kept verbatim and
escapes are not interpreted. Malformed input raises `OJsonParseError`.

`OJsonMap.put` ignores a key that is already present;
`key_value_pairs_sorted_by_key` returns the pairs sorted by key.

## Addresses, hashing and bech32

```python
from drtscenario.addresses import address_expression, sc_expression, keccak256

owner = address_expression("owner")           # b"owner" padded with "_" to 32 bytes
adder = sc_expression("adder", b"\x05\x00")   # 8 zero bytes, VM type, then the name
shard = address_expression("a#bb")            # last byte set to the shard id 0xbb
digest = keccak256(b"ab")                     # legacy Keccak-256
```

Names longer than the address are cut off. A bad shard id, or more than
one `#`, raises `AddressExpressionError`.

`drtscenario.bech32` provides `bech32_encode`, `bech32_decode`,
`encode_address` and `decode_address` (default prefix `moa`, 32-byte
addresses); errors raise `Bech32Error`. `addresses.bech32_address`
decodes with the default prefix and length.

## Reconstructing expressions

`drtscenario.reconstructor.ExprReconstructor` turns raw bytes back into
readable expressions, guided by a `Hint` (`NO_HINT`, `NUMBER`, `ADDRESS`,
`STR`, `CODE`, `HEX`):

```python
from drtscenario.reconstructor import ExprReconstructor, Hint

rec = ExprReconstructor()
rec.reconstruct(owner, Hint.ADDRESS)      # "address:owner"
rec.reconstruct(adder, Hint.ADDRESS)      # "sc:adder"
rec.reconstruct(b"\x01\x00", Hint.NUMBER) # "256"
rec.reconstruct_list([b"ab"], Hint.STR)   # '["str:ab"]'
```

With `ExprReconstructor(bech32_addr=True)` addresses are shown as
`bech32:...`. `reconstruct_from_big_int` and `reconstruct_from_uint64`
format integers.

## File references

`drtscenario.fileresolver.DefaultFileResolver` resolves `file:` values
relative to the directory of the scenario being read:

```python
from drtscenario.fileresolver import DefaultFileResolver

resolver = DefaultFileResolver().with_context("tests/adder.scen.json")
code = resolver.resolve_file_value("adder.wasm")   # contents of tests/adder.wasm
```

`replace_path` swaps one path for another, and `allow_missing_files` makes
a missing file resolve to `b"MISSING:<value>"` instead of raising.
`FileResolver` is the abstract interface for other resolvers.

## Running and formatting scenario files

`drtscenario.scenario_io` drives scenario files on disk. It works with
objects you provide:

- a *parser* with a `file_resolver` attribute and a
  `parse_scenario_file(data)` method returning a scenario object (with
  `is_new_test` and `trace_gas` attributes);
- an *executor* implementing `ScenarioRunner` (`reset()` and
  `run_scenario(scenario, file_resolver)`, raising on failure).

```python
from drtscenario.scenario_io import ScenarioController, RunScenarioOptions

controller = ScenarioController(executor=my_executor, parser=my_parser)
controller.run_single_json_scenario("tests/adder.scen.json")
controller.run_all_json_scenarios_in_directory(
    "tests", "", ".scen.json", ["skip_me/*"], RunScenarioOptions(force_trace_gas=False)
)
```

The directory run walks files in lexical order, prints `ok`, `FAIL:` or
`skip` for each scenario and a `Done. Passed: ... Failed: ... Skipped: ...`
summary, and raises `RuntimeError("some tests failed")` if any failed.
Exclusion patterns are shell-style and joined to the general test path.

`format_all_in_folder(path, parser, to_json)` rewrites every `.scen.json`,
`.step.json` and `.steps.json` file under `path`, using `to_json` to turn
a parsed scenario back into text; files that fail to parse are reported
and left alone. `parse_scenario`, `write_scenario` and `should_format_file`
are available on their own.

## Exporting for benchmarks

`drtscenario.exporter.get_accounts_and_transactions_from_scenarios(test_path, load_scenario)`
calls `load_scenario(path)` to obtain a scenario with `steps`, follows
`externalSteps`, and returns a `ScenarioWithBenchmark` holding:

- `accs`: accounts from `setState` steps (contract accounts get the
  smart-contract address prefix);
- `deployed_accs`: accounts for the step's new-address mocks;
- `txs`: successful `scCall` and `scUpgrade` transactions;
- `deploy_txs`: successful `scDeploy` transactions;
- `benchmark_tx_pos`: the position of the first transaction with id
  `benchmark`, or `-1`.

Steps are expected to offer `step_type_name()` and the fields of the
scenario format (`tx`, `expected_result`, `accounts`, `new_address_mocks`,
`path`, ...). A gas price of 0 is raised to 1. Problems raise
`ExportError`. Deploy data reads the contract code from the path after
`file:`, relative to the current directory (`exported_transaction.create_deploy_tx_data`).

## What this package does not do

- It has no scenario executor and no VM: running a scenario needs a
  `ScenarioRunner` you provide.
- It does not parse the scenario JSON schema into steps and transactions,
  nor write scenarios back to JSON; those come from the parser and
  `to_json`/`load_scenario` callables you pass in.
- It has no command-line tool.