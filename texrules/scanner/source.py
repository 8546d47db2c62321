"""Document readers: raw, comment-stripped, and inclusion-expanded views."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path

from texrules.scanner.directives import TEX_MARKERS, DirectiveSet
from texrules.scanner.oracle import AvailabilityOracle, FilesystemOracle
from texrules.targets import with_default_extension

logger = logging.getLogger(__name__)

# (kind, target, message)
DiagnosticSink = Callable[[str, str, str], None]

# Whole-line comments only; a comment trailing real content is kept.
_COMMENT_LINE_RE = re.compile(r"^[ \t]*%[^\n]*(?:\n|$)", re.MULTILINE)

# \input{x} and \include{x}: expansion and nested-document scanning share it.
NESTED_INCLUDE_RE = re.compile(r"\\(?:input|include)\s*\{([^}]*)\}")


def strip_comment_lines(text: str) -> str:
    return _COMMENT_LINE_RE.sub("", text)


class SourceScanner:
    """Reads source documents relative to a corpus root.

    Every file is read at most once per scanner; the cache also remembers
    failed reads so an unreadable file is reported only once.
    """

    def __init__(
        self,
        root: Path,
        oracle: AvailabilityOracle | None = None,
        on_diagnostic: DiagnosticSink | None = None,
    ) -> None:
        self.root = Path(root)
        self.oracle = oracle if oracle is not None else FilesystemOracle(self.root)
        self._on_diagnostic = on_diagnostic
        self._cache: dict[Path, str] = {}

    def resolve(self, name: str | Path) -> Path:
        path = Path(name)
        return path if path.is_absolute() else self.root / path

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def read_raw(self, name: str | Path) -> str:
        """Full file content; empty (with a warning) when unreadable."""
        path = self.resolve(name)
        key = path.resolve()
        if key in self._cache:
            return self._cache[key]
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e.strerror or e)
            self._report("unreadable", str(name), f"cannot read {path}: {e.strerror or e}")
            text = ""
        self._cache[key] = text
        return text

    def read_comments(self, name: str | Path) -> str:
        """Comment-preserving view, used for directive scanning."""
        return self.read_raw(name)

    def read_stripped(self, name: str | Path) -> str:
        return strip_comment_lines(self.read_raw(name))

    def read_expanded(self, name: str | Path) -> str:
        """Stripped content with every nested inclusion replaced by its own expansion."""
        return self._expand(str(name), ())

    def directives(self, name: str | Path, markers: tuple[str, ...] = TEX_MARKERS) -> DirectiveSet:
        return DirectiveSet.from_text(self.read_comments(name), markers)

    def exists_or_declared(self, name: str) -> bool:
        return self.oracle.available(name)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _expand(self, name: str, stack: tuple[Path, ...]) -> str:
        stack = stack + (self.resolve(name).resolve(),)

        def _substitute(m: re.Match) -> str:
            child = with_default_extension(m.group(1).strip(), "tex")
            if self.resolve(child).resolve() in stack:
                logger.warning("Inclusion cycle: %s is already being expanded (from %s)", child, name)
                self._report("cycle", child, f"{child} includes itself (reached from {name})")
                return m.group(0)
            return self._expand(child, stack)

        return NESTED_INCLUDE_RE.sub(_substitute, self.read_stripped(name))

    def _report(self, kind: str, target: str, message: str) -> None:
        if self._on_diagnostic is not None:
            self._on_diagnostic(kind, target, message)
