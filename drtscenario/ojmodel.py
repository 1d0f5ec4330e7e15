"""Ordered JSON tree: maps keep their insertion order."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterator

_INDENT = "    "


class _OJsonNode(ABC):
    """Common base of every ordered JSON node."""

    @abstractmethod
    def _write(self, out: list[str], indent: int) -> None:
        """Append the formatted representation of this node to ``out``."""


@dataclass
class OJsonKeyValuePair:
    """One entry of an ordered JSON map."""

    key: str
    value: _OJsonNode | None


@dataclass
class OJsonMap(_OJsonNode):
    """An ordered map, stored as a list of key-value pairs."""

    ordered_kv: list[OJsonKeyValuePair] = field(default_factory=list)
    key_set: set[str] = field(default_factory=set, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.ordered_kv and not self.key_set:
            self.refresh_key_set()

    def put(self, key: str, value: _OJsonNode | None) -> None:
        """Append a pair; does nothing if the key is already present."""
        if key in self.key_set:
            return
        self.key_set.add(key)
        self.ordered_kv.append(OJsonKeyValuePair(key, value))

    def refresh_key_set(self) -> None:
        """Rebuild the key set from the key-value pairs."""
        self.key_set = {kv.key for kv in self.ordered_kv}

    def key_value_pairs_sorted_by_key(self) -> list[OJsonKeyValuePair]:
        """Return a new list of the pairs, sorted by key."""
        return sorted(self.ordered_kv, key=lambda kv: kv.key)

    def __len__(self) -> int:
        return len(self.ordered_kv)

    def __iter__(self) -> Iterator[OJsonKeyValuePair]:
        return iter(self.ordered_kv)

    def _write(self, out: list[str], indent: int) -> None:
        if not self.ordered_kv:
            out.append("{}")
            return
        out.append("{")
        last = len(self.ordered_kv) - 1
        for position, child in enumerate(self.ordered_kv):
            out.append("\n")
            out.append(_INDENT * (indent + 1))
            out.append(f'"{child.key}": ')
            if child.value is not None:
                child.value._write(out, indent + 1)
            if position < last:
                out.append(",")
        out.append("\n")
        out.append(_INDENT * indent)
        out.append("}")


class OJsonList(list, _OJsonNode):
    """A JSON list of ordered JSON nodes."""

    def as_list(self) -> list:
        """Return the list itself."""
        return self

    def _write(self, out: list[str], indent: int) -> None:
        if not self:
            out.append("[]")
            return
        out.append("[")
        last = len(self) - 1
        for position, child in enumerate(self):
            out.append("\n")
            out.append(_INDENT * (indent + 1))
            child._write(out, indent + 1)
            if position < last:
                out.append(",")
        out.append("\n")
        out.append(_INDENT * indent)
        out.append("]")


@dataclass
class OJsonString(_OJsonNode):
    """A JSON string value, kept exactly as written between the quotes."""

    value: str

    def _write(self, out: list[str], indent: int) -> None:
        out.append(f'"{self.value}"')


@dataclass
class OJsonBool(_OJsonNode):
    """A JSON boolean value."""

    value: bool

    def _write(self, out: list[str], indent: int) -> None:
        out.append("true" if self.value else "false")


def json_string(obj: _OJsonNode) -> str:
    """Format an ordered JSON tree with four-space indentation."""
    out: list[str] = []
    obj._write(out, 0)
    return "".join(out)