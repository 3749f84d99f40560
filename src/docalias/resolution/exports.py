"""Derives each file's export table from its indexed assignments."""

import logging

from .registry import FileInfo, FileRegistry

logger = logging.getLogger(__name__)

EXPORTS = "exports"
MODULE_EXPORTS = "module.exports"
WHOLE_MODULE = "*"


class ExportResolver:
    """Simulates the assignment idioms a CommonJS file uses to export symbols.

    Handles ``exports.Foo = Foo``, ``module.exports = Foo`` followed by
    ``Foo.Bar = Bar``, and re-binding the exports object
    (``const api = exports; api.Foo = Foo``).
    """

    def index_exports(self, file_info: FileInfo) -> None:
        """Compute ``file_info.export_table``.

        Must only run once every doclet of the run has been indexed.
        """
        assignments = file_info.assignments
        exports_alias = EXPORTS

        if MODULE_EXPORTS in assignments:
            exports_alias = assignments[MODULE_EXPORTS]
            longname = file_info.declared_names.get(exports_alias)
            if longname:
                file_info.export_table[WHOLE_MODULE] = longname

        for key, value in assignments.items():
            if value == EXPORTS:
                exports_alias = key

        prefix = f"{exports_alias}."
        for key, value in assignments.items():
            if not key.startswith(prefix):
                continue

            longname = file_info.declared_names.get(value)
            if longname:
                file_info.export_table[key[len(prefix):]] = longname

        logger.debug(
            "%s: %d exports via %r", file_info.filename, len(file_info.export_table), exports_alias
        )

    def index_all(self, registry: FileRegistry) -> int:
        """Index exports of every registered file. Returns total exports."""
        total = 0
        for file_info in registry:
            self.index_exports(file_info)
            total += len(file_info.export_table)
        return total
