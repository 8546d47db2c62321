"""Shared test fixtures for texrules."""

from pathlib import Path

import pytest

from texrules.config.models import TexRulesConfig
from texrules.synth.session import SynthesisSession


def write_corpus(root: Path, files: dict[str, str]) -> Path:
    """Write {relative name: content} under *root* and return *root*."""
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def sample_config():
    return TexRulesConfig()


@pytest.fixture
def corpus(tmp_path):
    """Callable that writes files into tmp_path and returns it."""

    def _write(files: dict[str, str]) -> Path:
        return write_corpus(tmp_path, files)

    return _write


@pytest.fixture
def make_session(tmp_path):
    """Callable building a SynthesisSession rooted at tmp_path."""

    def _make(config: TexRulesConfig | None = None) -> SynthesisSession:
        return SynthesisSession(tmp_path, config)

    return _make


@pytest.fixture
def paper_corpus(corpus):
    """One top-level paper with a gnuplot figure reading an embedded data file."""
    return corpus({
        "paper.tex": (
            "\\documentclass{article}\n"
            "\\begin{document}\n"
            "\\includegraphics{plot}\n"
            "\\end{document}\n"
        ),
        "plot.gpi": 'plot "data.dat" using 1:2 with lines\n',
        "data.dat": "1 2\n2 4\n",
    })
