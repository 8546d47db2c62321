"""Tests for the texrules CLI and the executor hand-off."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from texrules.cli import EXIT_RULES_UNWRITABLE, app
from texrules.runner import RuleDestinationError, remove_rules, run_executor, write_rules

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch):
    """Keep user-level config out of every test."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")


# ── runner ───────────────────────────────────────────────────────────


def test_write_rules_creates_parents(tmp_path: Path):
    dest = write_rules("all:\n", tmp_path / "build" / "rules.mk")
    assert dest.read_text() == "all:\n"


def test_write_rules_unwritable(tmp_path: Path):
    (tmp_path / "blocker").write_text("not a directory")
    with pytest.raises(RuleDestinationError) as exc_info:
        write_rules("all:\n", tmp_path / "blocker" / "rules.mk")
    assert exc_info.value.path == tmp_path / "blocker" / "rules.mk"
    assert isinstance(exc_info.value.__cause__, OSError)


def test_remove_rules_missing_is_quiet(tmp_path: Path):
    remove_rules(tmp_path / "never-written.mk")


def test_run_executor_invokes_make(tmp_path: Path):
    rules = tmp_path / ".texrules.mk"
    with patch("texrules.runner.subprocess.run", return_value=MagicMock(returncode=2)) as mock_run:
        status = run_executor(rules, ["paper.pdf"], "make -j2", cwd=tmp_path)
    assert status == 2
    mock_run.assert_called_once_with(
        ["make", "-j2", "-f", str(rules), "paper.pdf"], cwd=tmp_path
    )


def test_run_executor_missing_binary(tmp_path: Path):
    with patch("texrules.runner.subprocess.run", side_effect=FileNotFoundError()):
        assert run_executor(tmp_path / "r.mk", ["all"], "no-such-make") == 127


# ── texrules --show-rules ────────────────────────────────────────────


def test_show_rules_prints_and_keeps_file(paper_corpus: Path):
    with patch("texrules.runner.subprocess.run") as mock_run:
        result = runner.invoke(app, ["--show-rules", "-C", str(paper_corpus)])
    assert result.exit_code == 0, result.output
    assert "paper.dvi: paper.tex plot.eps" in result.output
    assert "plot.fig: plot.gpi data.dat" in result.output
    assert (paper_corpus / ".texrules.mk").is_file()
    mock_run.assert_not_called()


def test_show_rules_reports_diagnostics(corpus):
    root = corpus({"paper.tex": "\\documentclass{article}\n\\includegraphics{nowhere}\n"})
    result = runner.invoke(app, ["--show-rules", "-C", str(root)])
    assert result.exit_code == 0
    assert "nowhere.eps" in result.output


# ── texrules [TARGETS] ───────────────────────────────────────────────


def test_runs_make_on_all_by_default(paper_corpus: Path):
    with patch("texrules.runner.subprocess.run", return_value=MagicMock(returncode=0)) as mock_run:
        result = runner.invoke(app, ["-C", str(paper_corpus)])
    assert result.exit_code == 0, result.output
    root = paper_corpus.resolve()
    mock_run.assert_called_once_with(
        ["make", "-f", str(root / ".texrules.mk"), "all"], cwd=root
    )
    # the rule document is temporary
    assert not (paper_corpus / ".texrules.mk").exists()


def test_targets_passed_through_and_status_mirrored(paper_corpus: Path):
    with patch("texrules.runner.subprocess.run", return_value=MagicMock(returncode=2)) as mock_run:
        result = runner.invoke(app, ["-C", str(paper_corpus), "paper.ps", "spell"])
    assert result.exit_code == 2
    cmd = mock_run.call_args.args[0]
    assert cmd[-2:] == ["paper.ps", "spell"]


def test_unwritable_rules_file(paper_corpus: Path):
    (paper_corpus / "blocker").write_text("file, not a directory")
    (paper_corpus / "texrules.yaml").write_text("output:\n  rules_file: blocker/rules.mk\n")
    with patch("texrules.runner.subprocess.run") as mock_run:
        result = runner.invoke(app, ["-C", str(paper_corpus)])
    assert result.exit_code == EXIT_RULES_UNWRITABLE
    assert "cannot write rules" in result.output
    mock_run.assert_not_called()


def test_invalid_config_exits_1(paper_corpus: Path):
    (paper_corpus / "texrules.yaml").write_text("log_level: chatty\n")
    result = runner.invoke(app, ["--show-rules", "-C", str(paper_corpus)])
    assert result.exit_code == 1
    assert "Invalid config" in result.output


def test_explicit_config_file(paper_corpus: Path, tmp_path: Path):
    cfg = tmp_path / "alt.yaml"
    cfg.write_text("documents:\n  paper: a4\n  deliverables: [ps]\n")
    result = runner.invoke(app, ["--show-rules", "-c", str(cfg), "-C", str(paper_corpus)])
    assert result.exit_code == 0, result.output
    assert "dvips -t a4 -o paper.ps paper.dvi" in result.output
    assert "all: paper.ps" in result.output


# ── texrules --init-config ───────────────────────────────────────────


def test_init_config(tmp_path: Path):
    result = runner.invoke(app, ["--init-config", "-C", str(tmp_path)])
    assert result.exit_code == 0
    assert (tmp_path / "texrules.yaml").is_file()

    again = runner.invoke(app, ["--init-config", "-C", str(tmp_path)])
    assert again.exit_code == 1
    assert "already exists" in again.output


def test_init_config_is_read_back_from_target_directory(tmp_path: Path):
    """A config written with -C docs applies to later runs with -C docs from elsewhere."""
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "paper.tex").write_text("\\documentclass{article}\n")

    created = runner.invoke(app, ["--init-config", "-C", str(docs)])
    assert created.exit_code == 0
    config = docs / "texrules.yaml"
    config.write_text(config.read_text().replace("deliverables: [pdf]", "deliverables: [ps]"))

    shown = runner.invoke(app, ["--show-rules", "-C", str(docs)])
    assert shown.exit_code == 0, shown.output
    assert "all: paper.ps" in shown.output
    assert "all: paper.pdf" not in shown.output
