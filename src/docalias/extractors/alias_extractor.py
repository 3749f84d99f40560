"""Regex-based extraction of local import aliases from raw source text."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging
import re

from docalias.rules import AliasIdiom, AliasRule, RuleEngine, create_default_engine
from docalias.resolution.canonicalizer import ModulePathCanonicalizer
from docalias.resolution.registry import AliasSlot, FileInfo

logger = logging.getLogger(__name__)

_DESTRUCTURED_NAME = re.compile(r'^(\w+)(?:\s*:\s*(\w+))?(?:\s*=.*)?$', re.DOTALL)


@dataclass
class AliasBinding:
    """One local name bound to an export of another file."""

    local_name: str
    idiom: AliasIdiom
    target_file: str
    exported_path: str = ""
    line: int = 0

    def to_slot(self) -> AliasSlot:
        return AliasSlot(
            target_file=self.target_file,
            exported_path=self.exported_path,
            idiom=self.idiom,
            line=self.line
        )


@dataclass
class ExtractionResult:
    """Bindings found in a file plus the source the host should parse."""

    bindings: List[AliasBinding] = field(default_factory=list)
    source: str = ""


class AliasExtractor:
    """Finds typedef-import and require aliases in a single file.

    Works on one file at a time and never needs any other file to have been
    seen. Rules are scanned in engine order; rules marked ``strip`` have
    their matches removed from the returned source.
    """

    def __init__(
        self,
        rule_engine: Optional[RuleEngine] = None,
        canonicalizer: Optional[ModulePathCanonicalizer] = None,
        strip_matches: bool = True
    ) -> None:
        self.rule_engine = rule_engine or create_default_engine()
        self.canonicalizer = canonicalizer or ModulePathCanonicalizer()
        self.strip_matches = strip_matches

    def extract(self, source: str, filename: str) -> ExtractionResult:
        """Extract alias bindings from ``source``."""
        result = ExtractionResult(source=source)

        for rule in self.rule_engine.rules:
            matches = rule.match(result.source)
            if not matches:
                continue

            for match in matches:
                line = result.source.count("\n", 0, match["start"]) + 1
                result.bindings.extend(self._bindings_from_match(rule, match, filename, line))

            if rule.strip and self.strip_matches:
                result.source = self._strip(rule, result.source)

        return result

    def apply(self, file_info: FileInfo, source: str) -> str:
        """Record aliases found in ``source`` on ``file_info``.

        Returns the source with stripped matches removed.
        """
        result = self.extract(source, file_info.filename)
        self.record(file_info, result.bindings)
        return result.source

    def record(self, file_info: FileInfo, bindings: List[AliasBinding]) -> None:
        """Store bindings as unresolved alias slots; later bindings win."""
        for binding in bindings:
            if binding.local_name in file_info.local_aliases:
                logger.debug(
                    "%s: alias %s rebound by %s",
                    file_info.filename, binding.local_name, binding.idiom.value
                )
            file_info.local_aliases[binding.local_name] = binding.to_slot()

        if bindings:
            logger.debug("%s: found %d import aliases", file_info.filename, len(bindings))

    def _bindings_from_match(
        self,
        rule: AliasRule,
        match: dict,
        filename: str,
        line: int
    ) -> List[AliasBinding]:
        groups = match["groups"]
        target_file = self.canonicalizer.resolve_request(groups["module"], filename)
        narrowing = (groups.get("path") or "")[1:]

        if rule.idiom == AliasIdiom.DESTRUCTURED_REQUIRE:
            bindings = []
            for exported, local in self._split_names(groups.get("names") or ""):
                full_export = f"{narrowing}.{exported}" if narrowing else exported
                bindings.append(AliasBinding(local, rule.idiom, target_file, full_export, line))
            return bindings

        return [AliasBinding(groups["alias"], rule.idiom, target_file, narrowing, line)]

    def _split_names(self, names: str) -> List[Tuple[str, str]]:
        """``A, B: C`` -> ``[("A", "A"), ("B", "C")]`` (exported, local)."""
        pairs = []
        for part in names.split(","):
            part = part.strip()
            if not part:
                continue

            name_match = _DESTRUCTURED_NAME.match(part)
            if name_match is None:
                # Nested patterns and rest elements are not aliases we can follow
                continue

            exported = name_match.group(1)
            pairs.append((exported, name_match.group(2) or exported))
        return pairs

    def _strip(self, rule: AliasRule, source: str) -> str:
        # Keep line breaks so host line numbers still point at the right lines
        return rule.compiled.sub(lambda m: "\n" * m.group(0).count("\n"), source)
