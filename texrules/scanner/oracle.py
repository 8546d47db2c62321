"""Availability oracle: is a file present, or can hand-authored rules make it?"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class AvailabilityOracle(Protocol):
    """Answers whether a named file is available or declared-buildable."""

    def available(self, name: str) -> bool: ...


def read_rule_files(root: Path, rule_files: Iterable[str]) -> str:
    """Concatenated text of the hand-authored rule files present under *root*."""
    root = Path(root)
    chunks: list[str] = []
    for name in rule_files:
        path = root / name
        if not path.is_file():
            continue
        try:
            chunks.append(path.read_text(encoding="utf-8", errors="replace"))
        except OSError as e:
            logger.warning("Cannot read rule file %s: %s", path, e)
    return "\n".join(chunks)


class FilesystemOracle:
    """File exists under *root*, or its name occurs in the hand-authored rule text.

    The rule-text check is a plain substring search, not a rule lookup:
    ``logo.eps`` counts as declared if any rule file mentions ``logo.eps``
    anywhere, including in a comment or as part of a longer name.
    """

    def __init__(self, root: Path, rule_text: str = "") -> None:
        self.root = Path(root)
        self.rule_text = rule_text

    @classmethod
    def from_rule_files(cls, root: Path, rule_files: Iterable[str]) -> FilesystemOracle:
        return cls(root, read_rule_files(root, rule_files))

    def exists(self, name: str) -> bool:
        return bool(name) and (self.root / name).exists()

    def declared(self, name: str) -> bool:
        return bool(name) and name in self.rule_text

    def available(self, name: str) -> bool:
        return self.exists(name) or self.declared(name)
