"""Finding the top-level documents of a corpus."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from texrules.scanner.source import SourceScanner

logger = logging.getLogger(__name__)

_DOCUMENTCLASS_MARKER_RE = re.compile(r"\\document(?:class|style)\b")


def discover_documents(root: Path, scanner: SourceScanner) -> list[str]:
    """``*.tex`` files in *root* that declare a document class and aren't ``%!ignore``d."""
    found: list[str] = []
    for path in sorted(Path(root).glob("*.tex")):
        if not path.is_file():
            continue
        name = path.name
        if not _DOCUMENTCLASS_MARKER_RE.search(scanner.read_stripped(name)):
            continue
        if scanner.directives(name).has("ignore"):
            logger.info("Skipping %s (ignore directive)", name)
            continue
        found.append(name)
    return found
