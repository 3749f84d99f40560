"""Indexes declared names and assignments from host doclets."""

from typing import List, Optional
import logging

from docalias.models import Doclet
from docalias.resolution.registry import FileInfo, FileRegistry

logger = logging.getLogger(__name__)


class DeclarationIndexer:
    """Updates the owning file's tables from one doclet at a time."""

    def __init__(
        self,
        registry: FileRegistry,
        indexed_scopes: Optional[List[str]] = None,
        declaration_kinds: Optional[List[str]] = None
    ) -> None:
        self.registry = registry
        self.indexed_scopes = set(indexed_scopes or ["global", "static"])
        self.declaration_kinds = set(declaration_kinds or ["class", "function"])

    def index(self, doclet: Doclet) -> Optional[FileInfo]:
        """Index ``doclet`` into its file's record.

        Only file-scope and static declarations can be exported, so anything
        else is ignored. Returns the updated FileInfo, or None if skipped.
        """
        if doclet.scope not in self.indexed_scopes:
            return None

        filename = doclet.source_file
        if filename is None:
            return None

        file_info = self.registry.get_or_create(filename)

        if doclet.kind in self.declaration_kinds:
            self._index_longnames(file_info, doclet)
        else:
            self._index_assignment(file_info, doclet)

        return file_info

    def _index_longnames(self, file_info: FileInfo, doclet: Doclet) -> None:
        if doclet.name == doclet.longname or doclet.longname is None:
            return

        code_name = doclet.meta.code.name
        if code_name:
            file_info.declared_names[code_name] = doclet.longname
        if doclet.name:
            file_info.declared_names[doclet.name] = doclet.longname

        logger.debug("%s: %s -> %s", file_info.filename, doclet.name, doclet.longname)

    def _index_assignment(self, file_info: FileInfo, doclet: Doclet) -> None:
        code = doclet.meta.code
        if code.type != "Identifier" or code.name is None or code.value is None:
            return

        file_info.assignments[code.name] = code.value
