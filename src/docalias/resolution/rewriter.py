"""Rewrites type references in doclets to canonical names."""

from typing import Callable, List, Optional
import logging
import re

from docalias.errors import TypeExpressionError
from docalias.models import Doclet, TypedTag
from .registry import FileInfo, FileRegistry

logger = logging.getLogger(__name__)

MAX_GENERIC_DEPTH = 64

# Pieces of a name that can be looked up; "(A|B)", "?A" and "A=" expose A and B
_NAME_PIECE = re.compile(r'[^()|!?=\s]+')


class _TypeExpressionParser:
    """Recursive descent over ``type_list := type ("," type)*`` where
    ``type := NAME [".<" type_list ">"]``.

    Names are substituted as they are parsed, so the parser returns the
    rewritten expression directly.
    """

    def __init__(self, expression: str, substitute: Callable[[str], str]) -> None:
        self.text = expression
        self.pos = 0
        self.substitute = substitute

    def parse(self) -> str:
        result = self._type_list(0)
        self._skip_spaces()
        if self.pos != len(self.text):
            self._error(f"unexpected {self.text[self.pos]!r} at offset {self.pos}")
        return result

    def _type_list(self, depth: int) -> str:
        parts = [self._type(depth)]
        self._skip_spaces()
        while self._peek() == ",":
            self.pos += 1
            parts.append(self._type(depth))
            self._skip_spaces()
        return ", ".join(parts)

    def _type(self, depth: int) -> str:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in ",<>":
            self.pos += 1
        raw = self.text[start:self.pos].strip()

        if self._peek() != "<":
            if not raw:
                self._error(f"missing type name at offset {start}")
            return self.substitute(raw)

        opener = "<"
        if raw.endswith("."):
            raw = raw[:-1].rstrip()
            opener = ".<"
        if not raw:
            self._error(f"missing type name before '<' at offset {self.pos}")
        if depth >= MAX_GENERIC_DEPTH:
            self._error("generic arguments nested too deeply")

        self.pos += 1
        inner = self._type_list(depth + 1)
        if self._peek() != ">":
            self._error("unclosed generic argument")
        self.pos += 1

        return f"{self.substitute(raw)}{opener}{inner}>"

    def _peek(self) -> Optional[str]:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def _skip_spaces(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _error(self, detail: str) -> None:
        raise TypeExpressionError(self.text, detail=detail)


class TypeRewriter:
    """Replaces local names in a doclet's types with canonical longnames."""

    def __init__(self, registry: FileRegistry) -> None:
        self.registry = registry

    def rewrite(self, doclet: Doclet) -> bool:
        """Rewrite ``doclet`` in place.

        Covers param, return and property types and the augments list.
        Returns True if any name changed.
        """
        if doclet.meta is None:
            return False

        file_info = self.registry.get(doclet.source_file)
        if file_info is None:
            return False

        changed = False

        for index, name in enumerate(doclet.augments):
            rewritten = self.rewrite_type(name, file_info, doclet)
            changed = changed or rewritten != name
            doclet.augments[index] = rewritten

        for tags in (doclet.properties, doclet.params, doclet.returns):
            if self._rewrite_tags(tags, file_info, doclet):
                changed = True

        return changed

    def rewrite_type(
        self,
        expression: str,
        file_info: FileInfo,
        doclet: Optional[Doclet] = None
    ) -> str:
        """Rewrite a single type expression such as ``Array.<Foo>``."""

        def substitute(name: str) -> str:
            return _NAME_PIECE.sub(lambda m: file_info.lookup(m.group(0)) or m.group(0), name)

        try:
            return _TypeExpressionParser(expression, substitute).parse()
        except TypeExpressionError as e:
            meta = doclet.meta if doclet is not None else None
            raise TypeExpressionError(
                expression,
                filename=meta.filename if meta else file_info.filename,
                lineno=meta.lineno if meta else None,
                detail=e.detail
            ) from e

    def _rewrite_tags(self, tags: List[TypedTag], file_info: FileInfo, doclet: Doclet) -> bool:
        changed = False
        for tag in tags:
            if tag.type is None:
                continue

            names = tag.type.names
            for index, name in enumerate(names):
                rewritten = self.rewrite_type(name, file_info, doclet)
                if rewritten != name:
                    changed = True
                    names[index] = rewritten
        return changed
