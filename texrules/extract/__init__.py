"""Dependency extraction from document sources."""

from texrules.extract.extractor import DependencyExtractor
from texrules.extract.models import Dependency, DependencyKind, DependencyList

__all__ = [
    "Dependency",
    "DependencyExtractor",
    "DependencyKind",
    "DependencyList",
]
