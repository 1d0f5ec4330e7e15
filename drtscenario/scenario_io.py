"""Loading, running and reformatting JSON scenario files."""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Sequence

from .fileresolver import DefaultFileResolver, FileResolver

FORMATTED_SUFFIXES = (".scen.json", ".step.json", ".steps.json")

_YELLOW = "\033[33m"
_GREEN = "\033[32m"
_RED = "\033[31m"
_RESET = "\033[0m"


def _colored(color: str, text: str) -> str:
    return f"{color}{text}{_RESET}"


@dataclass
class RunScenarioOptions:
    """Options applied to every scenario that is run."""

    force_trace_gas: bool = False


def default_run_scenario_options() -> RunScenarioOptions:
    """Return the options used when none are given."""
    return RunScenarioOptions(force_trace_gas=False)


class ScenarioRunner(ABC):
    """A component that can run a parsed scenario."""

    @abstractmethod
    def reset(self) -> None:
        """Clear state and world."""

    @abstractmethod
    def run_scenario(self, scenario: Any, file_resolver: FileResolver) -> None:
        """Execute the scenario, raising if it does not pass."""


def new_default_file_resolver() -> DefaultFileResolver:
    """Return a fresh default file resolver."""
    return DefaultFileResolver()


def parse_scenario(parser: Any, scen_file_path: str) -> Any:
    """Read a scenario file and parse it.

    ``parser`` must expose a ``file_resolver`` and a
    ``parse_scenario_file(data)`` method.
    """
    abs_path = os.path.abspath(scen_file_path)
    with open(abs_path, "rb") as handle:
        data = handle.read()
    parser.file_resolver.set_context(abs_path)
    return parser.parse_scenario_file(data)


def write_scenario(json_text: str, to_path: str) -> None:
    """Write formatted scenario JSON to ``to_path``, creating directories."""
    directory = os.path.dirname(to_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(to_path, "w", encoding="utf-8") as handle:
        handle.write(json_text)


def should_format_file(path: str) -> bool:
    """Tell whether ``path`` names a scenario or step file."""
    return path.endswith(FORMATTED_SUFFIXES)


def _walk(root: str) -> Iterator[str]:
    """Yield ``root`` and everything below it, depth first, in lexical order."""
    yield root
    if os.path.isdir(root) and not os.path.islink(root):
        try:
            names = sorted(os.listdir(root))
        except OSError:
            return
        for name in names:
            yield from _walk(os.path.join(root, name))


def format_all_in_folder(path: str, parser: Any, to_json: Callable[[Any], str]) -> None:
    """Re-write every scenario file under ``path`` in the standard format."""
    for file_path in _walk(path):
        if not should_format_file(file_path):
            continue
        print(f"Formatting: {file_path}")
        try:
            scenario = parse_scenario(parser, file_path)
        except Exception as exc:  # noqa: BLE001 - reported and skipped
            print(f"Error upgrading: {exc}")
            continue
        try:
            write_scenario(to_json(scenario), file_path)
        except OSError:
            pass


def _glob_regex(pattern: str) -> re.Pattern:
    """Compile a shell pattern where ``*`` and ``?`` never match ``/``."""

    def bad() -> ValueError:
        return ValueError(f"syntax error in pattern: {pattern!r}")

    def read_class_char(pos: int) -> tuple[str, int]:
        if pos >= len(pattern) or pattern[pos] in "-]":
            raise bad()
        if pattern[pos] == "\\":
            pos += 1
            if pos >= len(pattern):
                raise bad()
        return pattern[pos], pos + 1

    out: list[str] = []
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c == "*":
            out.append("[^/]*")
            i += 1
        elif c == "?":
            out.append("[^/]")
            i += 1
        elif c == "\\":
            if i + 1 >= len(pattern):
                raise bad()
            out.append(re.escape(pattern[i + 1]))
            i += 2
        elif c == "[":
            i += 1
            negate = i < len(pattern) and pattern[i] == "^"
            if negate:
                i += 1
            ranges: list[str] = []
            while True:
                if i < len(pattern) and pattern[i] == "]" and ranges:
                    i += 1
                    break
                lo, i = read_class_char(i)
                hi = lo
                if i < len(pattern) and pattern[i] == "-":
                    hi, i = read_class_char(i + 1)
                    if lo > hi:
                        raise bad()
                ranges.append(f"{re.escape(lo)}-{re.escape(hi)}")
            out.append(("[^" if negate else "[") + "".join(ranges) + "]")
        else:
            out.append(re.escape(c))
            i += 1
    return re.compile("".join(out), re.DOTALL)


def _is_excluded(patterns: Sequence[str], test_path: str, general_test_path: str) -> bool:
    for excluded in patterns:
        full_pattern = os.path.normpath(os.path.join(general_test_path, excluded))
        if _glob_regex(full_pattern).fullmatch(test_path):
            return True
    return False


def _shorten_test_path(path: str, general_test_path: str) -> str:
    prefix = general_test_path + "/"
    if path.startswith(prefix):
        return path[len(prefix):]
    return path


@dataclass
class ScenarioController:
    """Runs JSON scenarios with a given executor and parser."""

    executor: ScenarioRunner
    parser: Any
    runs_new_test: bool = field(default=False)

    def run_single_json_scenario(
        self, context_path: str, options: RunScenarioOptions | None = None
    ) -> None:
        """Parse one scenario file and run it."""
        options = options or default_run_scenario_options()
        scenario = parse_scenario(self.parser, context_path)
        if self.runs_new_test:
            scenario.is_new_test = True
            self.runs_new_test = False
        if options.force_trace_gas:
            scenario.trace_gas = True
        self.executor.run_scenario(scenario, self.parser.file_resolver)

    def run_all_json_scenarios_in_directory(
        self,
        general_test_path: str,
        specific_test_path: str,
        allowed_suffix: str,
        excluded_file_patterns: Sequence[str],
        options: RunScenarioOptions | None = None,
    ) -> None:
        """Run every scenario under a directory; raise if any of them failed."""
        main_dir = os.path.normpath(os.path.join(general_test_path, specific_test_path))
        passed = failed = skipped = 0

        for test_path in _walk(main_dir):
            if not test_path.endswith(allowed_suffix):
                continue
            print(f"Scenario: {_shorten_test_path(test_path, general_test_path)} ... ", end="")
            if _is_excluded(excluded_file_patterns, test_path, general_test_path):
                skipped += 1
                print(f"  {_colored(_YELLOW, 'skip')}")
                continue
            self.executor.reset()
            self.runs_new_test = True
            try:
                self.run_single_json_scenario(test_path, options)
            except Exception as exc:  # noqa: BLE001 - counted as a failed test
                failed += 1
                print(f"  {_colored(_RED, 'FAIL:')} {exc}")
            else:
                passed += 1
                print(f"  {_colored(_GREEN, 'ok')}")

        print(f"Done. Passed: {passed}. Failed: {failed}. Skipped: {skipped}.")
        if failed > 0:
            raise RuntimeError("some tests failed")