"""Per-kind producers that turn a target name into rules."""

from texrules.producers.bitmap import resolve_bitmap
from texrules.producers.document import (
    PageLayout,
    dvips_flags,
    page_layout,
    resolve_compressed_ps,
    resolve_dvi,
    resolve_pdf,
    resolve_ps,
)
from texrules.producers.models import ProducerCandidate, Rule, escape_make
from texrules.producers.spell import spell_commands
from texrules.producers.style import resolve_style
from texrules.producers.vector import (
    VECTOR_KIND,
    resolve_vector_image,
    select_producer,
    vector_producers,
)

__all__ = [
    "PageLayout",
    "ProducerCandidate",
    "Rule",
    "VECTOR_KIND",
    "dvips_flags",
    "escape_make",
    "page_layout",
    "resolve_bitmap",
    "resolve_compressed_ps",
    "resolve_dvi",
    "resolve_pdf",
    "resolve_ps",
    "resolve_style",
    "resolve_vector_image",
    "select_producer",
    "spell_commands",
    "vector_producers",
]
