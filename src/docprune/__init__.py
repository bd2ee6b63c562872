"""docprune package root."""

from docprune.redundancy import FixerEngine, RedundancyRules, process, types_are_redundant

__all__ = ["__version__", "FixerEngine", "RedundancyRules", "process", "types_are_redundant"]

__version__ = "0.1.0"
