"""Resolves local import aliases against other files' export tables."""

from typing import Optional, Tuple
import logging
import re

from .exports import WHOLE_MODULE
from .registry import FileInfo, FileRegistry, SlotState

logger = logging.getLogger(__name__)

_LONGNAME_SEPARATORS = re.compile(r'[.~#:/]')


class AliasResolver:
    """Finalizes every pending alias slot to a longname or a failure."""

    def __init__(self, registry: FileRegistry) -> None:
        self.registry = registry

    def resolve_file(self, file_info: FileInfo) -> Tuple[int, int]:
        """Resolve the aliases of one file.

        Returns:
            Tuple of (resolved, failed) counts
        """
        resolved = failed = 0

        for name, slot in file_info.local_aliases.items():
            if slot.state != SlotState.UNRESOLVED:
                continue

            target = self.registry.get(slot.target_file)
            if target is None:
                slot.fail("file-not-indexed")
                failed += 1
                logger.debug("%s: %s -> %s was never indexed", file_info.filename, name, slot.target_file)
                continue

            longname = target.export_table.get(slot.import_name)
            if not longname:
                longname = self._whole_module_member(target, slot.exported_path)
            if not longname:
                slot.fail("export-not-found")
                failed += 1
                logger.debug(
                    "%s: %s -> %s does not export %r",
                    file_info.filename, name, slot.target_file, slot.import_name
                )
                continue

            slot.resolve(longname)
            resolved += 1

        return resolved, failed

    def _whole_module_member(self, target: FileInfo, exported_path: str) -> Optional[str]:
        """``const {Widget} = require('./widget')`` where the module itself is Widget."""
        whole = target.export_table.get(WHOLE_MODULE)
        if not whole or not exported_path or "." in exported_path:
            return None

        if _LONGNAME_SEPARATORS.split(whole)[-1] == exported_path:
            return whole
        return None

    def resolve_all(self) -> Tuple[int, int]:
        """Resolve the aliases of every registered file.

        Export tables of all files must already be computed.
        """
        total_resolved = total_failed = 0
        for file_info in self.registry:
            resolved, failed = self.resolve_file(file_info)
            total_resolved += resolved
            total_failed += failed
        return total_resolved, total_failed
