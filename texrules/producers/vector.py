"""Vector-image (eps) producers.

Adding a source format means writing a ``produce`` function and inserting a
``ProducerCandidate`` into ``vector_producers``; the first candidate whose
``applies`` predicate holds wins, and later predicates are never evaluated.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from texrules.config.models import GraphicsConfig
from texrules.producers.models import ProducerCandidate, Rule, command, escape_make
from texrules.producers.scripts import asymptote_imports, asymptote_search_path, gnuplot_data_files
from texrules.scanner.directives import GRAPHVIZ_MARKERS
from texrules.targets import Target

if TYPE_CHECKING:
    from texrules.synth.session import SynthesisSession

logger = logging.getLogger(__name__)

VECTOR_KIND = "eps"
FIG_KIND = "fig"

_DEPTH_RE = re.compile(r"^(?P<base>.+)-depth(?P<low>\d+)_(?P<high>\d+)$")


# ----------------------------------------------------------------------
# Shared steps
# ----------------------------------------------------------------------


def _source_available(kind: str) -> Callable[[SynthesisSession, Target], bool]:
    def applies(session: SynthesisSession, target: Target) -> bool:
        return session.oracle.available(target.sibling(kind))

    return applies


def _lower_fig(session: SynthesisSession, target: Target, fig: str, depth: str | None = None) -> None:
    """eps <- fig through fig2dev, optionally restricted to a depth range."""
    session.add_rule(Rule(
        target.name,
        (fig,),
        (command(
            session.config.tools.fig2dev,
            "-L eps",
            f"-D +{depth}" if depth else "",
            fig,
            target.name,
        ),),
    ))
    session.trash.add_clean(target.name)


def _fig_rule(session: SynthesisSession, target: Target, prerequisites: tuple[str, ...], recipe: str) -> None:
    fig = target.sibling(FIG_KIND)
    session.add_rule(Rule(fig, prerequisites, (recipe,)))
    session.trash.add_clean(fig)
    _lower_fig(session, target, fig)


# ----------------------------------------------------------------------
# Producers
# ----------------------------------------------------------------------


def _from_raster(kind: str) -> Callable[[SynthesisSession, Target], None]:
    def produce(session: SynthesisSession, target: Target) -> None:
        source = target.sibling(kind)
        session.add_rule(Rule(
            target.name,
            (source,),
            (command(session.config.tools.convert, source, target.name),),
        ))
        session.trash.add_clean(target.name)

    return produce


def _from_tree(session: SynthesisSession, target: Target) -> None:
    source = target.sibling("tree")
    fig = target.sibling(FIG_KIND)
    _fig_rule(session, target, (source,), f"{session.config.tools.tree} {source} > {fig}")


def _from_gnuplot(session: SynthesisSession, target: Target) -> None:
    source = target.sibling("gpi")
    fig = target.sibling(FIG_KIND)
    data = gnuplot_data_files(session.scanner.read_raw(source), session.config.graphics.data_suffixes)
    for name in data:
        session.enqueue(name)
    recipe = command(
        session.config.tools.gnuplot,
        f"-e \"set terminal fig color; set output '{fig}'\"",
        source,
    )
    _fig_rule(session, target, (source, *data), recipe)


def _from_asymptote(session: SynthesisSession, target: Target) -> None:
    source = target.sibling("asy")
    modules = asymptote_imports(session, source)
    search_path = ":".join(str(p) for p in asymptote_search_path(session, source))
    env_name = session.config.graphics.asymptote_env
    session.add_rule(Rule(
        target.name,
        (source, *modules),
        (command(
            f'{env_name}="{escape_make(search_path)}"',
            session.config.tools.asy,
            "-f eps -o",
            target.root,
            source,
        ),),
    ))
    session.trash.add_clean(target.name)


def _from_dia(session: SynthesisSession, target: Target) -> None:
    source = target.sibling("dia")
    fig = target.sibling(FIG_KIND)
    recipe = command(session.config.tools.dia, f"--export={fig}", "--filter=fig", source)
    _fig_rule(session, target, (source,), recipe)


def _from_graphviz(session: SynthesisSession, target: Target) -> None:
    source = target.sibling("dot")
    directives = session.scanner.directives(source, GRAPHVIZ_MARKERS)
    options = " ".join(escape_make(v) for v in directives.values("dotopts"))
    dot = session.config.tools.dot

    if directives.has("via-fig"):
        fig = target.sibling(FIG_KIND)
        _fig_rule(session, target, (source,), command(dot, "-Tfig", options, source, "-o", fig))
        return

    session.add_rule(Rule(
        target.name,
        (source,),
        (command(dot, "-Tps", options, source, "-o", target.name),),
    ))
    session.trash.add_clean(target.name)


def _from_fig(session: SynthesisSession, target: Target) -> None:
    _lower_fig(session, target, target.sibling(FIG_KIND))


def depth_source(target: Target) -> tuple[str, str] | None:
    """``(fig file, "A:B")`` for a ``<root>-depthA_B`` target, else None."""
    m = _DEPTH_RE.match(target.root)
    if m is None:
        return None
    return f"{m.group('base')}.{FIG_KIND}", f"{m.group('low')}:{m.group('high')}"


def _depth_applies(session: SynthesisSession, target: Target) -> bool:
    parsed = depth_source(target)
    return parsed is not None and session.oracle.available(parsed[0])


def _from_fig_depth(session: SynthesisSession, target: Target) -> None:
    parsed = depth_source(target)
    if parsed is None:
        raise ValueError(f"{target.name} does not name a depth range")
    fig, depth = parsed
    _lower_fig(session, target, fig, depth=depth)


def _already_available(session: SynthesisSession, target: Target) -> bool:
    return session.oracle.available(target.name)


def _accept(session: SynthesisSession, target: Target) -> None:
    logger.debug("%s already available; no rule needed", target.name)


# ----------------------------------------------------------------------
# Table
# ----------------------------------------------------------------------


def vector_producers(graphics: GraphicsConfig) -> list[ProducerCandidate]:
    """Candidates for an eps target, highest priority first."""
    table = [
        ProducerCandidate(f"raster:{kind}", _source_available(kind), _from_raster(kind))
        for kind in graphics.raster_extensions
    ]
    table += [
        ProducerCandidate("tree", _source_available("tree"), _from_tree),
        ProducerCandidate("gnuplot", _source_available("gpi"), _from_gnuplot),
        ProducerCandidate("asymptote", _source_available("asy"), _from_asymptote),
        ProducerCandidate("dia", _source_available("dia"), _from_dia),
        ProducerCandidate("graphviz", _source_available("dot"), _from_graphviz),
        ProducerCandidate("fig", _source_available(FIG_KIND), _from_fig),
        ProducerCandidate("fig-depth", _depth_applies, _from_fig_depth),
        ProducerCandidate("existing", _already_available, _accept),
    ]
    return table


def select_producer(
    session: SynthesisSession, target: Target, table: list[ProducerCandidate]
) -> ProducerCandidate | None:
    for candidate in table:
        if candidate.applies(session, target):
            return candidate
    return None


def resolve_vector_image(session: SynthesisSession, target: Target) -> None:
    candidate = select_producer(session, target, vector_producers(session.config.graphics))
    if candidate is None:
        session.diagnose("unresolved", target.name, f"no producer for {target.name}")
        return
    logger.debug("%s <- %s", target.name, candidate.name)
    candidate.produce(session, target)
