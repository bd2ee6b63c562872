"""Exceptions raised outside the redundancy core.

The core itself never raises: every combination of present and absent
annotations resolves to keeping or removing a field.
"""

from __future__ import annotations


class DocpruneError(RuntimeError):
    """Base class for docprune failures surfaced to the command line."""


class ConfigError(DocpruneError):
    """A ``docprune.toml`` value has the wrong shape."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key
