"""Resolution module initialization."""

from .registry import FileRegistry, FileInfo, AliasSlot, SlotState
from .canonicalizer import ModulePathCanonicalizer
from .exports import ExportResolver
from .resolver import AliasResolver
from .rewriter import TypeRewriter

__all__ = [
    "FileRegistry",
    "FileInfo",
    "AliasSlot",
    "SlotState",
    "ModulePathCanonicalizer",
    "ExportResolver",
    "AliasResolver",
    "TypeRewriter"
]
