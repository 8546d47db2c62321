"""Bitmaps rasterised from the same-named vector image."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from texrules.producers.models import Rule, command
from texrules.producers.vector import VECTOR_KIND
from texrules.targets import Target

if TYPE_CHECKING:
    from texrules.synth.session import SynthesisSession

logger = logging.getLogger(__name__)


def resolve_bitmap(session: SynthesisSession, target: Target) -> None:
    # An authored bitmap is a source for the vector image, never its product.
    if (session.root / target.name).exists():
        logger.debug("%s exists on disk; treating it as a source", target.name)
        return

    vector = target.sibling(VECTOR_KIND)
    session.enqueue(vector)
    graphics = session.config.graphics
    session.add_rule(Rule(
        target.name,
        (vector,),
        (command(
            session.config.tools.convert,
            f"-density {graphics.bitmap_density}",
            vector,
            target.name,
        ),),
    ))
    session.trash.add_clean(target.name)
