"""Dependency extraction from TeX sources.

Each construct category is matched against a scratch copy of the stripped
text and then blanked out of it, so a later category never re-matches text an
earlier one consumed. Directive categories read the comment-preserving view.
``%!nodepend`` always runs last.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from texrules.extract.models import DependencyKind, DependencyList
from texrules.scanner.directives import DirectiveSet
from texrules.scanner.source import NESTED_INCLUDE_RE
from texrules.targets import with_default_extension

if TYPE_CHECKING:
    from texrules.synth.session import SynthesisSession

logger = logging.getLogger(__name__)

_OPTIONAL_ARGS = r"(?:\[[^\]]*\]\s*)*"

_GRAPHIC_RE = re.compile(
    rf"\\includegraphics\*?\s*{_OPTIONAL_ARGS}\{{(?P<includegraphics>[^}}]*)\}}"
    r"|\\epsfig\s*\{[^}]*?\bfile\s*=\s*(?P<epsfig>[^,}\s]+)[^}]*\}"
    r"|\\psfig\s*\{[^}]*?\bfigure\s*=\s*(?P<psfig>[^,}\s]+)[^}]*\}"
)
_LISTING_RE = re.compile(rf"\\(?:verbatiminput|lstinputlisting)\*?\s*{_OPTIONAL_ARGS}\{{([^}}]*)\}}")
_LEGACY_FIGURE_RE = re.compile(rf"\\epsfbox\s*{_OPTIONAL_ARGS}\{{([^}}]*)\}}")
_BIBSTYLE_RE = re.compile(r"\\bibliographystyle\s*\{([^}]*)\}")
_PACKAGE_RE = re.compile(rf"\\(?:usepackage|RequirePackage)\s*{_OPTIONAL_ARGS}\{{([^}}]*)\}}")
_BIBLIOGRAPHY_RE = re.compile(r"\\bibliography\s*\{([^}]*)\}")

_WORD_SPLIT_RE = re.compile(r"[\s,]+")


def _is_macro_reference(name: str) -> bool:
    """Macro parameters (#1) and unexpanded control sequences can't name a file."""
    return "#" in name or "\\" in name


def _words(text: str) -> list[str]:
    return [w for w in _WORD_SPLIT_RE.split(text) if w]


def _consume(pattern: re.Pattern[str], scratch: str) -> tuple[list[re.Match], str]:
    """Return all matches of *pattern* and the scratch text with them blanked."""
    matches = list(pattern.finditer(scratch))
    return matches, pattern.sub(" ", scratch)


class DependencyExtractor:
    """Extracts the prerequisites of one document, enqueueing buildable ones."""

    def __init__(self, session: SynthesisSession) -> None:
        self.session = session
        self._active: list[Path] = []

    @property
    def default_extension(self) -> str:
        return self.session.config.graphics.default_extension

    def extract(self, name: str) -> DependencyList:
        """Dependencies of the file *name*, including those of nested documents."""
        scanner = self.session.scanner
        key = scanner.resolve(name).resolve()
        if key in self._active:
            chain = " -> ".join(p.name for p in self._active)
            logger.warning("Inclusion cycle at %s (%s)", name, chain)
            self.session.diagnose("cycle", name, f"{name} includes itself via {chain}")
            return DependencyList()

        self._active.append(key)
        try:
            return self.extract_text(
                scanner.read_stripped(name),
                scanner.read_comments(name),
                source=name,
            )
        finally:
            self._active.pop()

    def extract_text(
        self,
        stripped: str,
        comments: str,
        *,
        source: str = "<string>",
        default_extension: str | None = None,
    ) -> DependencyList:
        default_extension = default_extension or self.default_extension
        directives = DirectiveSet.from_text(comments)
        deps = DependencyList()
        scratch = stripped

        # 1. graphics
        matches, scratch = _consume(_GRAPHIC_RE, scratch)
        for m in matches:
            picture = next(g for g in m.groups() if g is not None).strip()
            if not picture or _is_macro_reference(picture):
                continue
            picture = with_default_extension(picture, default_extension)
            self._add(deps, picture, DependencyKind.GRAPHIC, source, enqueue=True)

        # 2. verbatim listings
        matches, scratch = _consume(_LISTING_RE, scratch)
        for m in matches:
            listing = m.group(1).strip()
            if listing and not _is_macro_reference(listing):
                self._add(deps, listing, DependencyKind.LISTING, source)

        # 3. nested documents
        matches, scratch = _consume(NESTED_INCLUDE_RE, scratch)
        for m in matches:
            nested = m.group(1).strip()
            if not nested or _is_macro_reference(nested):
                continue
            nested = with_default_extension(nested, "tex")
            self._add(deps, nested, DependencyKind.NESTED, source, enqueue=True)
            deps.extend(self.extract(nested))

        # 4. legacy figures
        matches, scratch = _consume(_LEGACY_FIGURE_RE, scratch)
        for m in matches:
            figure = m.group(1).strip()
            if figure and not _is_macro_reference(figure):
                self._add(deps, figure, DependencyKind.LEGACY_FIGURE, source, enqueue=True)

        # 5. bibliography style
        matches, scratch = _consume(_BIBSTYLE_RE, scratch)
        for m in matches:
            style = with_default_extension(m.group(1).strip(), "bst")
            if self.session.scanner.exists_or_declared(style):
                self._add(deps, style, DependencyKind.BIBLIOGRAPHY_STYLE, source, enqueue=True)

        # 6. explicit depend directives
        for argument in directives.values("depend"):
            for name in _words(argument):
                self._add(deps, name, DependencyKind.DEPEND_DIRECTIVE, source, enqueue=True)

        # 7. explicit package directives
        for argument in directives.values("package"):
            for name in _words(argument):
                package = with_default_extension(name, "sty")
                self._add(deps, package, DependencyKind.PACKAGE_DIRECTIVE, source, enqueue=True)

        # 8. package usage
        matches, scratch = _consume(_PACKAGE_RE, scratch)
        for m in matches:
            for name in m.group(1).split(","):
                name = name.strip()
                if not name or _is_macro_reference(name):
                    continue
                package = f"{name}.sty"
                if self.session.scanner.exists_or_declared(package):
                    self._add(deps, package, DependencyKind.PACKAGE, source, enqueue=True)

        # 9. bibliography databases
        matches, scratch = _consume(_BIBLIOGRAPHY_RE, scratch)
        for m in matches:
            for name in m.group(1).split(","):
                name = name.strip()
                if name and not _is_macro_reference(name):
                    self._add(deps, with_default_extension(name, "bib"), DependencyKind.BIBLIOGRAPHY, source)

        # 10. nodepend, after every addition
        for argument in directives.values("nodepend"):
            for pattern in _words(argument):
                removed = deps.remove_matching(pattern)
                logger.debug("%s: nodepend %s removed %d dependencies", source, pattern, removed)

        return deps

    def _add(
        self,
        deps: DependencyList,
        name: str,
        origin: DependencyKind,
        source: str,
        *,
        enqueue: bool = False,
    ) -> None:
        deps.add(name, origin, source)
        if enqueue:
            self.session.enqueue(name)
