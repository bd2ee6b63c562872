from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "boolean": "bool",
        "integer": "int",
    }
)


@dataclass(frozen=True)
class RedundancyRules:
    """Knobs shared by the type comparison, the heuristic and the coordinator.

    ``aliases`` maps a legacy documented spelling to the declared type it
    stands for. ``stop_after_qualified_param_match`` keeps the historical
    behaviour of abandoning the remaining parameters of a function once a
    qualified-name match without a useful description has been removed.
    """

    union_separator: str = "|"
    namespace_separator: str = "."
    aliases: Mapping[str, str] = field(default_factory=lambda: DEFAULT_ALIASES)
    interface_suffix: str = "Interface"
    collection_marker: str = "[]"
    dummy_distance: int = 2
    stop_after_qualified_param_match: bool = True


DEFAULT_RULES = RedundancyRules()
