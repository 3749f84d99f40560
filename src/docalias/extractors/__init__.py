"""Extractors module initialization."""

from .alias_extractor import AliasExtractor, AliasBinding, ExtractionResult
from .declaration_indexer import DeclarationIndexer

__all__ = [
    "AliasExtractor",
    "AliasBinding",
    "ExtractionResult",
    "DeclarationIndexer"
]
