"""Structured dependency records produced by the extractor."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from fnmatch import fnmatchcase


class DependencyKind(str, Enum):
    """Which construct a dependency was discovered through."""

    GRAPHIC = "graphic"
    LISTING = "listing"
    NESTED = "nested"
    LEGACY_FIGURE = "legacy-figure"
    BIBLIOGRAPHY_STYLE = "bibliography-style"
    DEPEND_DIRECTIVE = "depend-directive"
    PACKAGE_DIRECTIVE = "package-directive"
    PACKAGE = "package"
    BIBLIOGRAPHY = "bibliography"


@dataclass(frozen=True)
class Dependency:
    name: str
    origin: DependencyKind
    source: str = ""


class DependencyList:
    """Ordered dependencies in discovery order; duplicates are kept."""

    def __init__(self, items: Iterable[Dependency] = ()) -> None:
        self._items = list(items)

    def __iter__(self) -> Iterator[Dependency]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"DependencyList({self.names()!r})"

    def add(self, name: str, origin: DependencyKind, source: str = "") -> Dependency:
        dep = Dependency(name=name, origin=origin, source=source)
        self._items.append(dep)
        return dep

    def extend(self, other: Iterable[Dependency]) -> None:
        self._items.extend(other)

    def names(self) -> list[str]:
        return [d.name for d in self._items]

    def unique_names(self) -> list[str]:
        return list(dict.fromkeys(self.names()))

    def by_origin(self, origin: DependencyKind) -> list[Dependency]:
        return [d for d in self._items if d.origin is origin]

    def remove_matching(self, pattern: str) -> int:
        """Drop every dependency whose name matches *pattern* (glob or exact)."""
        kept = [d for d in self._items if not fnmatchcase(d.name, pattern)]
        removed = len(self._items) - len(kept)
        self._items = kept
        return removed

    def render(self) -> str:
        return " ".join(self.unique_names())
