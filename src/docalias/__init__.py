"""Cross-file import alias resolution for JSDoc doclets."""

from .plugin import ImportAliasPlugin, ResolutionStats

__version__ = "0.1.0"

__all__ = ["ImportAliasPlugin", "ResolutionStats", "__version__"]
