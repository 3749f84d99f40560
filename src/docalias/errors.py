"""Exceptions raised by the alias resolution pass."""

from typing import Optional


class DocAliasError(Exception):
    """Base class for all docalias errors."""


class ConfigError(DocAliasError):
    """Configuration file could not be loaded or validated."""


class AliasStateError(DocAliasError):
    """An alias slot was finalized more than once."""


class TypeExpressionError(DocAliasError):
    """A type expression does not have the ``Name.<Args>`` shape."""

    def __init__(
        self,
        expression: str,
        filename: Optional[str] = None,
        lineno: Optional[int] = None,
        detail: str = ""
    ) -> None:
        self.expression = expression
        self.filename = filename
        self.lineno = lineno
        self.detail = detail

        location = f"{filename or '<unknown>'}:{lineno if lineno is not None else '?'}"
        message = f"Error parsing {location}: malformed type {expression!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
