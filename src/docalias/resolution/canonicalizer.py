"""Module path canonicalization utilities."""

import os
from typing import List, Optional


class ModulePathCanonicalizer:
    """Turns module specifiers into absolute, extension-normalized paths."""

    def __init__(
        self,
        default_extension: str = ".js",
        source_extensions: Optional[List[str]] = None
    ) -> None:
        self.default_extension = default_extension
        self.source_extensions = source_extensions or [default_extension]

    def canonicalize(self, path: str) -> str:
        """Absolute, normalized path with a source extension."""
        return self.with_extension(os.path.abspath(path))

    def with_extension(self, path: str) -> str:
        """Append the default extension unless one is already present."""
        if path.endswith(tuple(self.source_extensions)):
            return path
        return path + self.default_extension

    def resolve_request(self, specifier: str, importer: str) -> str:
        """Resolve ``specifier`` relative to the directory of ``importer``.

        ``./foo`` and ``./foo.js`` imported from ``/src/a.js`` both become
        ``/src/foo.js``.
        """
        base_dir = os.path.dirname(os.path.abspath(importer))
        return self.canonicalize(os.path.join(base_dir, specifier))
