"""Sphinx field lists inside a docstring, viewed as removable annotation entries.

Only the reStructuredText field syntax is understood::

    :param int count: how many widgets
    :param name: who to greet
    :type name: str
    :returns: the greeting
    :rtype: str

The view works on the raw text between the quotes of the literal so that
rendering it back only touches the lines that were removed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

_FIELD_RE = re.compile(
    r"^(?P<indent>[ \t]*):(?P<tag>param|parameter|arg|argument|type|rtype|returns|return)"
    r"(?P<args>(?:[ \t][^:]*)?):(?:[ \t]+(?P<body>.*)|$)"
)

_PARAM_TAGS = frozenset({"param", "parameter", "arg", "argument"})
_RETURN_TAGS = frozenset({"returns", "return"})

FIELD_MARKERS = tuple(
    f":{tag}" for tag in ("param", "parameter", "arg", "argument", "type", "rtype", "returns", "return")
)


@dataclass
class _Field:
    tag: str
    start: int
    end: int
    name: Optional[str] = None
    type: Optional[str] = None
    text: str = ""


@dataclass
class _Entry:
    type: Optional[str] = None
    description: Optional[str] = None
    fields: List[_Field] = field(default_factory=list)


def _indent_width(line: str) -> int:
    return len(line.expandtabs()) - len(line.expandtabs().lstrip())


def _param_name(token: str) -> str:
    return token.replace("\\", "").lstrip("*")


class SphinxDocstring:
    def __init__(self, lines: List[str], fields: List[_Field]) -> None:
        self._lines = lines
        self._fields = fields
        self._return = _Entry()
        self._params: Dict[str, _Entry] = {}
        self._dropped: set[int] = set()
        self.removed: List[str] = []
        for item in fields:
            self._attach(item)

    @classmethod
    def parse(cls, raw_text: str) -> SphinxDocstring:
        lines = raw_text.split("\n")
        fields: List[_Field] = []
        index = 0
        while index < len(lines):
            match = _FIELD_RE.match(lines[index])
            if match is None:
                index += 1
                continue
            base = _indent_width(lines[index])
            end = index + 1
            while (
                end < len(lines)
                and lines[end].strip()
                and _indent_width(lines[end]) > base
                and _FIELD_RE.match(lines[end]) is None
            ):
                end += 1
            text_parts = [match.group("body") or ""]
            text_parts.extend(line.strip() for line in lines[index + 1 : end])
            fields.append(
                _field_from_match(match, start=index, end=end, text=" ".join(p for p in text_parts if p).strip())
            )
            index = end
        return cls(lines, fields)

    def _attach(self, item: _Field) -> None:
        if item.tag == "rtype":
            if self._return.type is None:
                self._return.type = item.text
            self._return.fields.append(item)
        elif item.tag in _RETURN_TAGS:
            if self._return.description is None:
                self._return.description = item.text
            self._return.fields.append(item)
        elif item.name:
            entry = self._params.setdefault(item.name, _Entry())
            if item.tag == "type":
                if entry.type is None:
                    entry.type = item.text
            else:
                if entry.type is None and item.type is not None:
                    entry.type = item.type
                if entry.description is None:
                    entry.description = item.text
            entry.fields.append(item)

    @property
    def return_type(self) -> str | None:
        return self._return.type

    @property
    def return_description(self) -> str | None:
        return self._return.description

    def has_param(self, name: str) -> bool:
        return name in self._params

    def param_type(self, name: str) -> str | None:
        entry = self._params.get(name)
        return entry.type if entry else None

    def param_description(self, name: str) -> str | None:
        entry = self._params.get(name)
        return entry.description if entry else None

    def remove_return_type(self) -> None:
        if not self._return.fields:
            return
        self._drop(self._return)
        self._return = _Entry()
        self.removed.append("return")

    def remove_param_type(self, name: str) -> None:
        entry = self._params.pop(name, None)
        if entry is None:
            return
        self._drop(entry)
        self.removed.append(f"param:{name}")

    def _drop(self, entry: _Entry) -> None:
        for item in entry.fields:
            self._dropped.update(range(item.start, item.end))

    @property
    def changed(self) -> bool:
        return bool(self._dropped)

    def render(self) -> str:
        if not self._dropped:
            return "\n".join(self._lines)
        kept: List[str] = []
        after_gap = False
        last_content = -1
        for index, line in enumerate(self._lines):
            if index in self._dropped:
                after_gap = True
                continue
            if after_gap and not line.strip() and (not kept or not kept[-1].strip()):
                # Blank line on both sides of a removed block.
                if index != len(self._lines) - 1:
                    continue
            after_gap = False
            kept.append(line)
            if line.strip():
                last_content = index
        if max(self._dropped) > last_content:
            # Nothing but blank lines follows the last kept text: the closing
            # quotes move up onto it.
            while kept and not kept[-1].strip():
                kept.pop()
            return "\n".join(kept)
        while len(kept) >= 2 and not kept[-1].strip() and not kept[-2].strip():
            del kept[-2]
        return "\n".join(kept)

    def is_blank(self) -> bool:
        return not self.render().strip()


def _field_from_match(match: re.Match[str], *, start: int, end: int, text: str) -> _Field:
    tag = match.group("tag")
    args = match.group("args").split()
    item = _Field(tag=tag, start=start, end=end, text=text)
    if tag in _PARAM_TAGS and args:
        item.name = _param_name(args[-1])
        if len(args) > 1:
            item.type = " ".join(args[:-1])
    elif tag == "type" and args:
        item.name = _param_name(args[-1])
    return item
