"""Scenario test files for smart contracts: ordered JSON, address expressions, file resolution, running, formatting and benchmark export."""

__version__ = "0.1.0"