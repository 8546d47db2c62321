"""Rule and producer-candidate models."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from texrules.synth.session import SynthesisSession
    from texrules.targets import Target


@dataclass(frozen=True)
class Rule:
    """One target, its prerequisites, and an opaque recipe for the executor."""

    target: str
    prerequisites: tuple[str, ...] = ()
    recipe: tuple[str, ...] = ()
    phony: bool = False

    def render(self) -> str:
        head = f"{self.target}:"
        if self.prerequisites:
            head += " " + " ".join(self.prerequisites)
        return "\n".join([head, *(f"\t{line}" for line in self.recipe)])


@dataclass(frozen=True)
class ProducerCandidate:
    """A way to make a target: tried when ``applies`` holds, in table order."""

    name: str
    applies: Callable[[SynthesisSession, Target], bool]
    produce: Callable[[SynthesisSession, Target], None]


def escape_make(text: str) -> str:
    """Escape ``$`` so text taken from sources reaches the shell verbatim."""
    return text.replace("$", "$$")


def command(*parts: str) -> str:
    """Join non-empty command fragments with single spaces."""
    return " ".join(p.strip() for p in parts if p and p.strip())
