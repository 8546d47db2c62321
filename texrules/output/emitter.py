"""Assembles the final rule document for make."""

from __future__ import annotations

from typing import TYPE_CHECKING

from texrules.producers.models import Rule
from texrules.producers.spell import spell_commands
from texrules.targets import PHONY_TARGETS

if TYPE_CHECKING:
    from texrules.synth.session import SynthesisSession

HEADER = "# Generated by texrules. Do not edit: this file is rewritten on every run."

# Re-invokes make on the same rule document.
_SELF_MAKE = "$(MAKE) -f $(firstword $(MAKEFILE_LIST))"


class RuleEmitter:
    """Renders hand-authored rules, synthesized rules, and the fixed phony targets."""

    def __init__(self, session: SynthesisSession) -> None:
        self.session = session

    def phony_rules(self) -> list[Rule]:
        session = self.session
        return [
            Rule("all", tuple(session.deliverables), phony=True),
            Rule("clean", recipe=_remove(session.trash.clean), phony=True),
            Rule("bare", ("clean",), recipe=_remove(session.trash.bare - session.trash.clean), phony=True),
            Rule("rebuild", recipe=(f"{_SELF_MAKE} bare", f"{_SELF_MAKE} all"), phony=True),
            Rule("spell", recipe=tuple(spell_commands(session, self.spell_sources())), phony=True),
        ]

    def spell_sources(self) -> list[str]:
        names: list[str] = []
        for document in self.session.documents:
            names.append(document)
            deps = self.session.dependencies.get(document)
            if deps is not None:
                names.extend(deps.unique_names())
        return names

    def render(self) -> str:
        sections = [
            HEADER,
            ".PHONY: " + " ".join(sorted(PHONY_TARGETS)),
            "default: all",
        ]
        hand_rules = self.session.hand_rules.strip("\n")
        if hand_rules:
            sections.append(hand_rules)
        sections.extend(rule.render() for rule in self.session.rules.values())
        sections.extend(rule.render() for rule in self.phony_rules())
        return "\n\n".join(sections) + "\n"


def _remove(names: set[str]) -> tuple[str, ...]:
    if not names:
        return ()
    return ("rm -f " + " ".join(sorted(names)),)
