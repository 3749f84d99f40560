"""Host adapter: wires the resolver into a documentation run."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import logging
import os

from docalias.config import ResolverConfig
from docalias.extractors import AliasExtractor, DeclarationIndexer
from docalias.models import Doclet, ParseEvent
from docalias.resolution import (
    AliasResolver, ExportResolver, FileRegistry, ModulePathCanonicalizer, TypeRewriter
)
from docalias.rules import RuleEngine, create_default_engine

logger = logging.getLogger(__name__)


@dataclass
class ResolutionStats:
    """Summary of one resolution barrier."""

    files: int = 0
    exports: int = 0
    resolved: int = 0
    failed: int = 0
    doclets_rewritten: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "files": self.files,
            "exports": self.exports,
            "resolved": self.resolved,
            "failed": self.failed,
            "doclets_rewritten": self.doclets_rewritten
        }


class ImportAliasPlugin:
    """Resolves import aliases for one documentation run.

    The host calls :meth:`before_parse` for each file, :meth:`new_doclet`
    for each declaration it produces and :meth:`processing_complete` once
    every file has been parsed.
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        registry: Optional[FileRegistry] = None,
        rule_engine: Optional[RuleEngine] = None
    ) -> None:
        self.config = config or ResolverConfig.load_default()
        self.registry = registry if registry is not None else FileRegistry()

        canonicalizer = ModulePathCanonicalizer(
            self.config.paths.default_extension,
            self.config.paths.source_extensions
        )
        self.extractor = AliasExtractor(
            rule_engine or create_default_engine(self.config.rule_files),
            canonicalizer,
            strip_matches=self.config.strip_typedef_imports
        )
        self.indexer = DeclarationIndexer(
            self.registry,
            self.config.indexed_scopes,
            self.config.declaration_kinds
        )
        self.export_resolver = ExportResolver()
        self.alias_resolver = AliasResolver(self.registry)
        self.rewriter = TypeRewriter(self.registry)

    @property
    def handlers(self) -> Dict[str, Callable[..., Any]]:
        """Event handlers keyed by host event name."""
        return {
            "beforeParse": self.before_parse,
            "newDoclet": self.new_doclet,
            "processingComplete": self.processing_complete
        }

    def before_parse(self, event: ParseEvent) -> None:
        """Collect the file's aliases; may strip typedef imports from the source."""
        filename = os.path.abspath(event.filename)
        result = self.extractor.extract(event.source, filename)
        if not result.bindings:
            return

        self.extractor.record(self.registry.get_or_create(filename), result.bindings)
        event.source = result.source

    def new_doclet(self, doclet: Doclet) -> None:
        """Index a freshly produced doclet."""
        self.indexer.index(doclet)

    def processing_complete(self, doclets: List[Doclet]) -> ResolutionStats:
        """Index exports, resolve aliases and rewrite every doclet's types."""
        stats = ResolutionStats(files=len(self.registry))

        stats.exports = self.export_resolver.index_all(self.registry)
        stats.resolved, stats.failed = self.alias_resolver.resolve_all()
        logger.info(
            "Resolved %d aliases (%d failed) across %d files",
            stats.resolved, stats.failed, stats.files
        )

        for doclet in doclets:
            if self.rewriter.rewrite(doclet):
                stats.doclets_rewritten += 1

        if self.config.disable_generation:
            del doclets[:]

        return stats
