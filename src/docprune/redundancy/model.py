from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import List, Optional, Protocol, Sequence, Tuple

Position = Tuple[int, int]


@dataclass(frozen=True)
class TypeExpression:
    """One declared or documented type, split into its union alternatives."""

    raw_text: str
    alternatives: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str, union_separator: str = "|") -> TypeExpression:
        raw = text.strip()
        if not raw:
            return cls(raw_text=raw, alternatives=())
        parts = [part.strip() for part in raw.split(union_separator)]
        alternatives = tuple(part for part in parts if part)
        if not alternatives:
            # "|" alone and friends degrade to a single opaque alternative.
            alternatives = (raw,)
        return cls(raw_text=raw, alternatives=alternatives)

    @property
    def is_union(self) -> bool:
        return len(self.alternatives) > 1


def parse_type(text: str | None, union_separator: str = "|") -> TypeExpression | None:
    if text is None:
        return None
    return TypeExpression.parse(text, union_separator)


@dataclass(frozen=True)
class ParameterSignature:
    name: str
    type: Optional[str] = None


@dataclass(frozen=True)
class AnnotationField:
    documented_type: Optional[TypeExpression]
    description: Optional[str]


class Decision(StrEnum):
    REMOVE = "remove"
    KEEP = "keep"


class ParameterView(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def type(self) -> str | None: ...


class SignatureView(Protocol):
    @property
    def return_type(self) -> str | None: ...

    @property
    def parameters(self) -> Sequence[ParameterView]: ...


class DocumentationView(Protocol):
    @property
    def return_type(self) -> str | None: ...

    @property
    def return_description(self) -> str | None: ...

    def has_param(self, name: str) -> bool: ...

    def param_type(self, name: str) -> str | None: ...

    def param_description(self, name: str) -> str | None: ...

    def remove_return_type(self) -> None: ...

    def remove_param_type(self, name: str) -> None: ...


@dataclass(frozen=True)
class FunctionSignature:
    return_type: Optional[str] = None
    parameters: Tuple[ParameterSignature, ...] = ()


@dataclass(frozen=True)
class TextEdit:
    path: str
    start: Position
    end: Position
    replacement: str


@dataclass(frozen=True)
class FixRecord:
    qualname: str
    removed: Tuple[str, ...]


@dataclass(frozen=True)
class FixRequest:
    target_path: str


@dataclass
class FixPlan:
    edits: List[TextEdit] = field(default_factory=list)
    records: List[FixRecord] = field(default_factory=list)
    original_source: str = ""
    new_source: str = ""
    errors: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.edits)
