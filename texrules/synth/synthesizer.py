"""Worklist engine: resolves targets until no new ones are discovered."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from texrules.producers.bitmap import resolve_bitmap
from texrules.producers.document import (
    resolve_compressed_ps,
    resolve_dvi,
    resolve_pdf,
    resolve_ps,
)
from texrules.producers.style import resolve_style
from texrules.producers.vector import VECTOR_KIND, resolve_vector_image
from texrules.synth.discovery import discover_documents
from texrules.synth.session import SynthesisReport, SynthesisSession
from texrules.targets import COMPRESSED_PS, PHONY_TARGETS, Target, split_target

logger = logging.getLogger(__name__)

Resolver = Callable[[SynthesisSession, Target], None]


class BuildGraphSynthesizer:
    """Pops one target per iteration and hands it to the resolver for its kind."""

    def __init__(self, session: SynthesisSession) -> None:
        self.session = session
        self.resolvers: dict[str, Resolver] = {
            "dvi": resolve_dvi,
            "ps": resolve_ps,
            "pdf": resolve_pdf,
            COMPRESSED_PS: resolve_compressed_ps,
            "sty": resolve_style,
            VECTOR_KIND: resolve_vector_image,
        }
        for kind in session.config.graphics.bitmap_targets:
            self.resolvers.setdefault(kind, resolve_bitmap)

    def run(self) -> None:
        while True:
            name = self.session.worklist.pop()
            if name is None:
                break
            self.resolve(name)

    def resolve(self, name: str) -> None:
        session = self.session
        session.resolutions[name] += 1
        target = split_target(name)

        resolver = self.resolvers.get(target.kind)
        if resolver is not None:
            resolver(session, target)
        elif session.oracle.available(name):
            logger.debug("%s is available; nothing to synthesize", name)
        else:
            session.diagnose("unbuildable", name, f"don't know how to make {name}")


def synthesize(session: SynthesisSession, targets: Iterable[str] = ()) -> SynthesisReport:
    """Seed the worklist from the corpus (plus *targets*) and run it to closure."""
    session.documents = discover_documents(session.root, session.scanner)
    for document in session.documents:
        root = split_target(document).root
        for kind in session.config.documents.deliverables:
            session.add_deliverable(f"{root}.{kind}")

    requested = [t for t in targets if t not in PHONY_TARGETS]
    session.requested.update(requested)

    for name in (*session.deliverables, *requested):
        session.enqueue(name)

    logger.info(
        "Synthesizing rules for %d document(s) in %s", len(session.documents), session.root
    )
    BuildGraphSynthesizer(session).run()
    return session.report()
