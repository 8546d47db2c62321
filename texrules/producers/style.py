"""Style files: ordering-only rules."""

from __future__ import annotations

from typing import TYPE_CHECKING

from texrules.extract.extractor import DependencyExtractor
from texrules.producers.models import Rule
from texrules.targets import Target

if TYPE_CHECKING:
    from texrules.synth.session import SynthesisSession


def resolve_style(session: SynthesisSession, target: Target) -> None:
    """A style file depends on whatever it pulls in; the recipe only bumps its mtime."""
    if not session.oracle.available(target.name):
        session.diagnose("unresolved", target.name, f"style file {target.name} not found")
        return

    deps = DependencyExtractor(session).extract(target.name)
    session.dependencies[target.name] = deps
    if deps:
        session.add_rule(Rule(target.name, tuple(deps.unique_names()), (f"touch {target.name}",)))
