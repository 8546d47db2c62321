"""Source reading, directive parsing, and the availability oracle."""

from texrules.scanner.directives import (
    GRAPHVIZ_MARKERS,
    TEX_MARKERS,
    Directive,
    DirectiveSet,
    parse_directives,
)
from texrules.scanner.oracle import AvailabilityOracle, FilesystemOracle, read_rule_files
from texrules.scanner.source import NESTED_INCLUDE_RE, SourceScanner, strip_comment_lines

__all__ = [
    "AvailabilityOracle",
    "Directive",
    "DirectiveSet",
    "FilesystemOracle",
    "GRAPHVIZ_MARKERS",
    "NESTED_INCLUDE_RE",
    "SourceScanner",
    "TEX_MARKERS",
    "parse_directives",
    "read_rule_files",
    "strip_comment_lines",
]
