"""Tests for source views, directives, and the availability oracle."""

from __future__ import annotations

from pathlib import Path

from texrules.scanner import AvailabilityOracle, FilesystemOracle, SourceScanner
from texrules.scanner.directives import (
    GRAPHVIZ_MARKERS,
    Directive,
    DirectiveSet,
    parse_directives,
)
from texrules.scanner.source import strip_comment_lines
from texrules.targets import split_target, with_default_extension


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []

    def __call__(self, kind: str, target: str, message: str) -> None:
        self.calls.append((kind, target, message))


# ── Target names ─────────────────────────────────────────────────────


def test_split_target_plain():
    t = split_target("figs/plot.eps")
    assert t.root == "figs/plot"
    assert t.kind == "eps"
    assert t.sibling("fig") == "figs/plot.fig"


def test_split_target_compressed_postscript():
    """ps.gz is one kind, not gz."""
    t = split_target("paper.ps.gz")
    assert t.root == "paper"
    assert t.kind == "ps.gz"


def test_split_target_without_extension():
    t = split_target("figs.d/README")
    assert t.kind == ""
    assert t.root == "figs.d/README"


def test_with_default_extension():
    assert with_default_extension("plot", "eps") == "plot.eps"
    assert with_default_extension("plot.png", "eps") == "plot.png"
    assert with_default_extension("chapter", ".tex") == "chapter.tex"


# ── Directives ───────────────────────────────────────────────────────


def test_parse_directives_source_order():
    text = "%!depend a.dat b.dat\n\\section{x}\n%% ! nodepend *.png\n% plain comment\n"
    found = parse_directives(text)
    assert found == [
        Directive(name="depend", argument="a.dat b.dat", line=1),
        Directive(name="nodepend", argument="*.png", line=3),
    ]


def test_parse_directives_requires_leading_marker():
    """A directive after real content on the same line is not a directive."""
    assert parse_directives("text %!depend x.dat\n") == []


def test_graphviz_markers():
    text = "// !via-fig\n# !dotopts -Gsize=4\n%!dotopts ignored\ndigraph G { a -> b; }\n"
    ds = DirectiveSet.from_text(text, GRAPHVIZ_MARKERS)
    assert ds.has("via-fig")
    assert ds.values("dotopts") == ["-Gsize=4"]


def test_directive_set_first_ignore_case():
    ds = DirectiveSet.from_text("%!DVIPS -Ppdf\n%!dvips -t a4\n")
    assert ds.first("dvips") == "-t a4"
    assert ds.first("dvips", ignore_case=True) == "-Ppdf"
    assert ds.first("latexopts") is None
    assert len(ds) == 2


# ── Source views ─────────────────────────────────────────────────────


def test_strip_comment_lines_keeps_trailing_comments():
    text = "% whole line\n  % indented\nkeep % trailing\nnext\n"
    assert strip_comment_lines(text) == "keep % trailing\nnext\n"


def test_read_raw_missing_file_is_soft(tmp_path: Path):
    """An unreadable file reads as empty and is reported once."""
    recorder = _Recorder()
    scanner = SourceScanner(tmp_path, on_diagnostic=recorder)
    assert scanner.read_raw("missing.tex") == ""
    assert scanner.read_raw("missing.tex") == ""
    assert [c[:2] for c in recorder.calls] == [("unreadable", "missing.tex")]


def test_read_raw_is_cached(tmp_path: Path):
    """Each file is read at most once per scanner."""
    (tmp_path / "a.tex").write_text("first")
    scanner = SourceScanner(tmp_path)
    assert scanner.read_raw("a.tex") == "first"
    (tmp_path / "a.tex").write_text("second")
    assert scanner.read_raw("a.tex") == "first"
    assert SourceScanner(tmp_path).read_raw("a.tex") == "second"


def test_read_expanded_inlines_nested_documents(tmp_path: Path):
    (tmp_path / "main.tex").write_text("A\n\\input{sub}\nB\n")
    (tmp_path / "sub.tex").write_text("% hidden\nS\n")
    expanded = SourceScanner(tmp_path).read_expanded("main.tex")
    assert "S" in expanded
    assert "hidden" not in expanded
    assert "\\input" not in expanded
    assert expanded.index("A") < expanded.index("S") < expanded.index("B")


def test_read_expanded_stops_on_cycle(tmp_path: Path):
    """A self-inclusion terminates and is reported as a cycle."""
    (tmp_path / "loop.tex").write_text("X\\input{loop}\n")
    recorder = _Recorder()
    expanded = SourceScanner(tmp_path, on_diagnostic=recorder).read_expanded("loop.tex")
    assert expanded == "X\\input{loop}\n"
    assert recorder.calls[0][:2] == ("cycle", "loop.tex")


def test_scanner_directives_use_comment_view(tmp_path: Path):
    (tmp_path / "doc.tex").write_text("%!nospell\n\\documentclass{article}\n")
    scanner = SourceScanner(tmp_path)
    assert scanner.directives("doc.tex").has("nospell")
    assert "nospell" not in scanner.read_stripped("doc.tex")


# ── Availability oracle ──────────────────────────────────────────────


class TestFilesystemOracle:
    def test_satisfies_protocol(self, tmp_path):
        assert isinstance(FilesystemOracle(tmp_path), AvailabilityOracle)

    def test_existing_file(self, tmp_path):
        (tmp_path / "plot.gpi").write_text("plot x")
        oracle = FilesystemOracle(tmp_path)
        assert oracle.available("plot.gpi")
        assert not oracle.available("plot.dot")

    def test_declared_by_substring(self, tmp_path):
        """Any mention in a hand-authored rule file counts, even inside a longer path."""
        (tmp_path / "Makefile.local").write_text("figs/logo.eps: logo.svg\n\tinkscape -E $@ $<\n")
        oracle = FilesystemOracle.from_rule_files(tmp_path, ["Makefile.local", "Absent.mk"])
        assert oracle.available("logo.eps")
        assert oracle.declared("logo.svg")
        assert not oracle.available("missing.eps")

    def test_empty_name_never_available(self, tmp_path):
        assert not FilesystemOracle(tmp_path, "anything").available("")
