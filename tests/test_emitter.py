"""Tests for the rule document: phony targets, trash lists, spell checks."""

from __future__ import annotations

from texrules.output import HEADER, RuleEmitter
from texrules.producers import spell_commands
from texrules.synth import synthesize


def _phony(emitter: RuleEmitter) -> dict:
    return {rule.target: rule for rule in emitter.phony_rules()}


# ── Rendering ────────────────────────────────────────────────────────


def test_render_layout(paper_corpus, make_session):
    session = make_session()
    synthesize(session)
    text = RuleEmitter(session).render()

    assert text.startswith(HEADER + "\n")
    assert ".PHONY: all bare clean default rebuild spell" in text
    assert "\n\ndefault: all\n\n" in text
    assert "\n\nall: paper.pdf\n" in text
    assert "paper.dvi: paper.tex plot.eps\n\tlatex -interaction=nonstopmode paper.tex\n" in text
    assert text.index("default: all") < text.index("paper.pdf: paper.dvi") < text.index("\nclean:")
    assert text.endswith("\n")


def test_hand_rules_passed_through_first(paper_corpus, make_session):
    hand = "logo.eps: logo.svg\n\tinkscape -E logo.eps logo.svg"
    (paper_corpus / "Makefile.local").write_text(hand + "\n")
    session = make_session()
    synthesize(session)
    text = RuleEmitter(session).render()
    assert hand in text
    assert text.index(hand) < text.index("paper.pdf: paper.dvi")


def test_clean_and_bare(paper_corpus, make_session):
    session = make_session()
    synthesize(session)
    phony = _phony(RuleEmitter(session))

    (clean_cmd,) = phony["clean"].recipe
    removed = clean_cmd.split()[2:]
    assert removed == sorted(removed)
    for name in ("paper.dvi", "paper.ps", "paper.aux", "paper.log", "plot.fig", "plot.eps"):
        assert name in removed
    assert "paper.pdf" not in removed

    assert phony["bare"].prerequisites == ("clean",)
    assert phony["bare"].recipe == ("rm -f paper.pdf",)


def test_rebuild_reinvokes_make(make_session):
    phony = _phony(RuleEmitter(make_session()))
    assert phony["rebuild"].recipe == (
        "$(MAKE) -f $(firstword $(MAKEFILE_LIST)) bare",
        "$(MAKE) -f $(firstword $(MAKEFILE_LIST)) all",
    )


def test_empty_corpus_still_renders(make_session):
    session = make_session()
    synthesize(session)
    text = RuleEmitter(session).render()
    assert "all:\n" in text
    assert "clean:\n" in text
    assert "spell:\n" in text


# ── Spell ────────────────────────────────────────────────────────────


def test_spell_commands_dedupe_and_skip(corpus, make_session):
    corpus({
        "a.tex": "text\n",
        "b.tex": "%!nospell\nmath\n",
        "c.tex": "more\n",
    })
    session = make_session()
    commands = spell_commands(session, ["a.tex", "fig.eps", "b.tex", "a.tex", "c.tex", "refs.bib"])
    assert commands == [
        "aspell --mode=tex check a.tex",
        "aspell --mode=tex check c.tex",
    ]


def test_spell_covers_nested_documents(corpus, make_session):
    corpus({
        "paper.tex": "\\documentclass{article}\n\\input{intro}\n\\input{proofs}\n\\input{intro}\n",
        "intro.tex": "Intro\n",
        "proofs.tex": "%!nospell\n$x$\n",
    })
    session = make_session()
    synthesize(session)
    spell = _phony(RuleEmitter(session))["spell"]
    assert spell.recipe == (
        "aspell --mode=tex check paper.tex",
        "aspell --mode=tex check intro.tex",
    )
