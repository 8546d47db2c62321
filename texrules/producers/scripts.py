"""Prerequisite scanning inside figure scripts (gnuplot, Asymptote)."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from texrules.synth.session import SynthesisSession

logger = logging.getLogger(__name__)

_GNUPLOT_COMMENT_RE = re.compile(r"^[ \t]*#[^\n]*$", re.MULTILINE)
_QUOTED_RE = re.compile(r"""(["'])([^"'\n]+?)\1""")

# Statements start a line or follow a `;`, so several may share one line.
_ASY_IMPORT_RE = re.compile(
    r"""(?:^|;)\s*(?:import|access|include)\s+(?:"([^"]+)"|([\w./-]+))"""
    r"""|(?:^|;)\s*from\s+(?:"([^"]+)"|([\w./-]+))\s+(?:access|unravel)\b""",
    re.MULTILINE,
)
_ASY_COMMENT_RE = re.compile(r"//[^\n]*|/\*.*?\*/", re.DOTALL)


def gnuplot_data_files(text: str, suffixes: Iterable[str]) -> list[str]:
    """Quoted file names in a gnuplot script that end in one of *suffixes*."""
    suffixes = tuple(suffixes)
    body = _GNUPLOT_COMMENT_RE.sub("", text)
    found = [m.group(2) for m in _QUOTED_RE.finditer(body) if m.group(2).endswith(suffixes)]
    return list(dict.fromkeys(found))


def asymptote_search_path(session: SynthesisSession, source: str) -> list[Path]:
    """Directories from the environment variable, then the source's own directory.

    Relative entries are taken from the corpus root, where make runs the recipe.
    """
    env_name = session.config.graphics.asymptote_env
    entries = [session.root / p for p in os.environ.get(env_name, "").split(os.pathsep) if p]
    source_dir = session.scanner.resolve(source).parent
    if source_dir not in entries:
        entries.append(source_dir)
    return entries


def _module_file(name: str) -> str:
    return name if name.endswith(".asy") else f"{name}.asy"


def asymptote_imports(session: SynthesisSession, source: str) -> list[str]:
    """Locally resolvable modules imported by *source*, transitively.

    Modules not found on the search path (the standard library, typos) are
    skipped silently.
    """
    search_path = asymptote_search_path(session, source)
    seen: set[Path] = {session.scanner.resolve(source).resolve()}
    found: list[str] = []
    pending = [source]

    while pending:
        current = pending.pop(0)
        text = _ASY_COMMENT_RE.sub("", session.scanner.read_raw(current))
        for m in _ASY_IMPORT_RE.finditer(text):
            module = next(g for g in m.groups() if g is not None)
            path = _locate(_module_file(module), search_path)
            if path is None or path.resolve() in seen:
                continue
            seen.add(path.resolve())
            name = _display_name(path, session.root)
            found.append(name)
            pending.append(str(path))
    return found


def _locate(filename: str, search_path: list[Path]) -> Path | None:
    for directory in search_path:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def _display_name(path: Path, root: Path) -> str:
    try:
        return str(path.resolve().relative_to(root.resolve()))
    except ValueError:
        return str(path)
