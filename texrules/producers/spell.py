"""Spell-check commands for TeX sources."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from texrules.producers.models import command

if TYPE_CHECKING:
    from texrules.synth.session import SynthesisSession


def spell_commands(session: SynthesisSession, names: Iterable[str]) -> list[str]:
    """One check per distinct ``.tex`` name, skipping files marked ``%!nospell``."""
    seen: set[str] = set()
    commands: list[str] = []
    for name in names:
        if not name.endswith(".tex") or name in seen:
            continue
        seen.add(name)
        if session.scanner.directives(name).has("nospell"):
            continue
        commands.append(command(session.config.tools.spell, name))
    return commands
