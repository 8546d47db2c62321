"""Per-run synthesis state, threaded through every resolver."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from texrules.config.models import TexRulesConfig
from texrules.extract.models import DependencyList
from texrules.producers.models import Rule
from texrules.scanner.oracle import AvailabilityOracle, FilesystemOracle, read_rule_files
from texrules.scanner.source import SourceScanner

logger = logging.getLogger(__name__)

DiagnosticKind = Literal["unreadable", "unresolved", "unbuildable", "cycle"]


class Diagnostic(BaseModel):
    """A non-fatal problem found during synthesis."""

    model_config = ConfigDict(frozen=True)

    kind: DiagnosticKind
    target: str
    message: str


class SynthesisReport(BaseModel):
    """Summary of one synthesis run."""

    documents: list[str] = Field(default_factory=list)
    deliverables: list[str] = Field(default_factory=list)
    rule_count: int = 0
    diagnostics: list[Diagnostic] = Field(default_factory=list)


@dataclass
class TrashManifest:
    """Files removed by ``clean`` (intermediates) and additionally by ``bare``."""

    clean: set[str] = field(default_factory=set)
    bare: set[str] = field(default_factory=set)

    def add_clean(self, *names: str) -> None:
        self.clean.update(names)

    def add_bare(self, *names: str) -> None:
        self.bare.update(names)


@dataclass
class WorklistState:
    """Visited names plus a LIFO stack; a name is pushed at most once per run."""

    visited: set[str] = field(default_factory=set)
    pending: list[str] = field(default_factory=list)

    def push(self, name: str) -> bool:
        if name in self.visited:
            return False
        self.visited.add(name)
        self.pending.append(name)
        return True

    def pop(self) -> str | None:
        return self.pending.pop() if self.pending else None

    def __len__(self) -> int:
        return len(self.pending)


class SynthesisSession:
    """Everything one synthesis run owns: worklist, rules, trash, diagnostics."""

    def __init__(
        self,
        root: Path,
        config: TexRulesConfig | None = None,
        oracle: AvailabilityOracle | None = None,
    ) -> None:
        self.root = Path(root)
        self.config = config if config is not None else TexRulesConfig()
        self.hand_rules = read_rule_files(self.root, self.config.documents.rule_files)
        self.oracle = oracle if oracle is not None else FilesystemOracle(self.root, self.hand_rules)
        self.scanner = SourceScanner(self.root, self.oracle, on_diagnostic=self.diagnose)

        self.worklist = WorklistState()
        self.rules: dict[str, Rule] = {}
        self.trash = TrashManifest()
        self.diagnostics: list[Diagnostic] = []
        self.documents: list[str] = []
        self.deliverables: list[str] = []
        self.requested: set[str] = set()
        self.dependencies: dict[str, DependencyList] = {}
        self.resolutions: Counter[str] = Counter()
        self._diagnosed: set[tuple[str, str]] = set()

    def enqueue(self, name: str) -> bool:
        """Queue *name* for resolution; no-op if it was ever queued before."""
        added = self.worklist.push(name)
        if added:
            logger.debug("queued %s", name)
        return added

    def add_rule(self, rule: Rule) -> bool:
        """Record *rule* unless its target already has one (first wins)."""
        if rule.target in self.rules:
            logger.debug("rule for %s already emitted; keeping the first", rule.target)
            return False
        self.rules[rule.target] = rule
        return True

    def add_deliverable(self, name: str) -> None:
        if name not in self.deliverables:
            self.deliverables.append(name)

    def is_deliverable(self, name: str) -> bool:
        return name in self.deliverables or name in self.requested

    def diagnose(self, kind: str, target: str, message: str) -> None:
        key = (kind, target)
        if key in self._diagnosed:
            return
        self._diagnosed.add(key)
        self.diagnostics.append(Diagnostic(kind=kind, target=target, message=message))
        if kind in ("unresolved", "unbuildable"):
            logger.warning("%s", message)

    def report(self) -> SynthesisReport:
        return SynthesisReport(
            documents=list(self.documents),
            deliverables=list(self.deliverables),
            rule_count=len(self.rules),
            diagnostics=list(self.diagnostics),
        )
