"""Synthesis session and worklist engine."""

from texrules.synth.discovery import discover_documents
from texrules.synth.session import (
    Diagnostic,
    SynthesisReport,
    SynthesisSession,
    TrashManifest,
    WorklistState,
)
from texrules.synth.synthesizer import BuildGraphSynthesizer, synthesize

__all__ = [
    "BuildGraphSynthesizer",
    "Diagnostic",
    "SynthesisReport",
    "SynthesisSession",
    "TrashManifest",
    "WorklistState",
    "discover_documents",
    "synthesize",
]
