"""Directive lines embedded in source comments (``%!name argument``)."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from functools import lru_cache

TEX_MARKERS = ("%",)
GRAPHVIZ_MARKERS = ("//", "#")


@dataclass(frozen=True)
class Directive:
    name: str
    argument: str
    line: int


@lru_cache(maxsize=None)
def _directive_pattern(markers: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(m) for m in markers)
    return re.compile(rf"^\s*(?:{alternatives})+\s*!\s*([A-Za-z][\w-]*)\s*(.*?)\s*$")


def parse_directives(text: str, markers: tuple[str, ...] = TEX_MARKERS) -> list[Directive]:
    """Return every directive in *text*, in source order, one per physical line."""
    pattern = _directive_pattern(tuple(markers))
    found: list[Directive] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        m = pattern.match(line)
        if m:
            found.append(Directive(name=m.group(1), argument=m.group(2), line=lineno))
    return found


class DirectiveSet:
    """Lookup helpers over the directives of one source file."""

    def __init__(self, directives: Iterable[Directive] = ()) -> None:
        self._directives = list(directives)

    @classmethod
    def from_text(cls, text: str, markers: tuple[str, ...] = TEX_MARKERS) -> DirectiveSet:
        return cls(parse_directives(text, markers))

    def __iter__(self) -> Iterator[Directive]:
        return iter(self._directives)

    def __len__(self) -> int:
        return len(self._directives)

    def matching(self, name: str, *, ignore_case: bool = False) -> list[Directive]:
        if ignore_case:
            wanted = name.lower()
            return [d for d in self._directives if d.name.lower() == wanted]
        return [d for d in self._directives if d.name == name]

    def values(self, name: str, *, ignore_case: bool = False) -> list[str]:
        return [d.argument for d in self.matching(name, ignore_case=ignore_case)]

    def first(self, name: str, *, ignore_case: bool = False) -> str | None:
        hits = self.matching(name, ignore_case=ignore_case)
        return hits[0].argument if hits else None

    def has(self, name: str, *, ignore_case: bool = False) -> bool:
        return bool(self.matching(name, ignore_case=ignore_case))
