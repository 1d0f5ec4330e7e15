"""Resolution of scenario values that refer to files."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod


class FileResolver(ABC):
    """Resolves scenario values starting with ``file:``."""

    @abstractmethod
    def clone(self) -> "FileResolver":
        """Create a new instance of the same type."""

    @abstractmethod
    def set_context(self, context_path: str) -> None:
        """Set the path of the running test, used to resolve relative paths."""

    @abstractmethod
    def resolve_absolute_path(self, value: str) -> str:
        """Return the full path of ``value`` based on the context."""

    @abstractmethod
    def resolve_file_value(self, value: str) -> bytes:
        """Return the contents of the file that ``value`` names."""


class DefaultFileResolver(FileResolver):
    """Loads file contents from disk, relative to the test file's directory."""

    def __init__(self) -> None:
        self.context_path = ""
        self.contract_path_replacements: dict[str, str] = {}
        self._allow_missing_files = False

    def replace_path(self, path_in_test: str, actual_path: str) -> "DefaultFileResolver":
        """Substitute ``actual_path`` whenever a test refers to ``path_in_test``."""
        self.contract_path_replacements[path_in_test] = actual_path
        return self

    def allow_missing_files(self) -> "DefaultFileResolver":
        """Yield a placeholder instead of failing when a file is missing."""
        self._allow_missing_files = True
        return self

    def with_context(self, context_path: str) -> "DefaultFileResolver":
        """Set the context path and return the resolver."""
        self.context_path = context_path
        return self

    def clone(self) -> "DefaultFileResolver":
        """New resolver with the same context, sharing the path replacements."""
        copy = DefaultFileResolver()
        copy.context_path = self.context_path
        copy.contract_path_replacements = self.contract_path_replacements
        return copy

    def set_context(self, context_path: str) -> None:
        self.context_path = context_path

    def resolve_absolute_path(self, value: str) -> str:
        replacement = self.contract_path_replacements.get(value)
        if replacement is not None:
            return replacement
        test_dir = os.path.dirname(self.context_path)
        return os.path.normpath(os.path.join(test_dir, value))

    def resolve_file_value(self, value: str) -> bytes:
        if not value:
            return b""
        full_path = self.resolve_absolute_path(value)
        try:
            with open(full_path, "rb") as handle:
                return handle.read()
        except OSError:
            if self._allow_missing_files:
                return f"MISSING:{value}".encode()
            raise