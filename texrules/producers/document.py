"""The compiled-document chain: tex -> dvi -> {ps, pdf, ps.gz}."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from texrules.config.models import DocumentsConfig
from texrules.extract.extractor import DependencyExtractor
from texrules.extract.models import DependencyKind
from texrules.producers.models import Rule, command, escape_make
from texrules.targets import Target

if TYPE_CHECKING:
    from texrules.synth.session import SynthesisSession

logger = logging.getLogger(__name__)

_DOCUMENTCLASS_RE = re.compile(r"\\document(?:class|style)\s*(?:\[([^\]]*)\]\s*)?\{([^}]*)\}")

# `<doc>.<N>up` roots belong to the `<doc>.%up.ps` pattern rule.
_NUP_ROOT_RE = re.compile(r"^(?P<base>.+)\.\d+up$")


@dataclass(frozen=True)
class PageLayout:
    document_class: str = ""
    landscape: bool = False
    paper_flags: bool = True


def page_layout(text: str, config: DocumentsConfig) -> PageLayout:
    """Read orientation and page-size handling off the class declaration."""
    m = _DOCUMENTCLASS_RE.search(text)
    if m is None:
        return PageLayout()
    options = [o.strip() for o in (m.group(1) or "").split(",")]
    cls = m.group(2).strip()
    return PageLayout(
        document_class=cls,
        landscape="landscape" in options or cls in config.landscape_classes,
        paper_flags=cls not in config.no_papersize_classes,
    )


def dvips_flags(session: SynthesisSession, target: Target) -> str:
    source = target.sibling("tex")
    override = session.scanner.directives(source).first("dvips", ignore_case=True)
    if override is not None:
        return escape_make(override)

    documents = session.config.documents
    layout = page_layout(session.scanner.read_expanded(source), documents)
    flags: list[str] = []
    if layout.paper_flags:
        flags.append(f"-t {documents.paper}")
    if layout.landscape:
        flags.append("-t landscape")
    return " ".join(flags)


def _dvips(session: SynthesisSession, target: Target) -> str:
    tools = session.config.tools
    return command(
        tools.dvips, dvips_flags(session, target), "-o", target.sibling("ps"), target.sibling("dvi")
    )


def _register_output(session: SynthesisSession, name: str) -> None:
    if session.is_deliverable(name):
        session.trash.add_bare(name)
    else:
        session.trash.add_clean(name)


def resolve_dvi(session: SynthesisSession, target: Target) -> None:
    source = target.sibling("tex")
    if not session.oracle.available(source):
        session.diagnose("unresolved", target.name, f"no source {source} to compile {target.name}")
        return

    deps = DependencyExtractor(session).extract(source)
    session.dependencies[source] = deps

    documents = session.config.documents
    directive_opts = session.scanner.directives(source).values("latexopts")
    compile_cmd = command(
        session.config.tools.latex,
        documents.latex_options,
        *(escape_make(o) for o in directive_opts),
        source,
    )
    recipe = [compile_cmd]
    if deps.by_origin(DependencyKind.BIBLIOGRAPHY):
        recipe += [command(session.config.tools.bibtex, target.root), compile_cmd]
    recipe.append(compile_cmd)

    prerequisites = tuple(dict.fromkeys([source, *deps.unique_names()]))
    session.add_rule(Rule(target.name, prerequisites, tuple(recipe)))
    _register_output(session, target.name)
    session.trash.add_clean(*(target.sibling(ext) for ext in documents.aux_extensions))


def _has_source(session: SynthesisSession, target: Target) -> bool:
    """True when ``<root>.tex`` can be compiled into *target*.

    An N-up postscript name of a known document gets no rule of its own;
    its base postscript is queued so the pattern rule has a prerequisite.
    Any other missing source is reported as unresolved.
    """
    source = target.sibling("tex")
    if session.oracle.available(source):
        return True

    m = _NUP_ROOT_RE.match(target.root)
    if target.kind == "ps" and m is not None and session.oracle.available(f"{m.group('base')}.tex"):
        base = m.group("base")
        logger.debug("%s is left to the %s.%%up.ps pattern rule", target.name, base)
        session.enqueue(f"{base}.ps")
        return False

    session.diagnose("unresolved", target.name, f"no source {source} to build {target.name}")
    return False


def resolve_ps(session: SynthesisSession, target: Target) -> None:
    if not _has_source(session, target):
        return
    dvi = target.sibling("dvi")
    session.enqueue(dvi)
    session.add_rule(Rule(target.name, (dvi,), (_dvips(session, target),)))

    nup = f"{target.root}.%up.ps"
    session.add_rule(Rule(
        nup,
        (target.name,),
        (command(session.config.tools.psnup, "-$*", target.name, "$@"),),
    ))
    _register_output(session, target.name)
    session.trash.add_clean(f"{target.root}.*up.ps")


def resolve_pdf(session: SynthesisSession, target: Target) -> None:
    if not _has_source(session, target):
        return
    dvi = target.sibling("dvi")
    ps = target.sibling("ps")
    session.enqueue(dvi)

    recipe = [
        _dvips(session, target),
        command(session.config.tools.ps2pdf, ps, target.name),
    ]
    if not session.is_deliverable(ps):
        recipe.append(f"rm -f {ps}")
        session.trash.add_clean(ps)

    session.add_rule(Rule(target.name, (dvi,), tuple(recipe)))
    _register_output(session, target.name)


def resolve_compressed_ps(session: SynthesisSession, target: Target) -> None:
    if not _has_source(session, target):
        return
    ps = target.sibling("ps")
    session.enqueue(ps)
    session.add_rule(Rule(
        target.name,
        (ps,),
        (f"{session.config.tools.gzip} -9c {ps} > {target.name}",),
    ))
    _register_output(session, target.name)
