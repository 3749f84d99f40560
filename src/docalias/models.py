"""Doclet records exchanged with the documentation host."""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
import os


@dataclass
class CodeInfo:
    """The code construct a doclet was generated from."""

    type: Optional[str] = None
    name: Optional[str] = None
    value: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = dict(self.extra)
        for key in ("type", "name", "value"):
            if getattr(self, key) is not None:
                data[key] = getattr(self, key)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodeInfo":
        """Create from dictionary."""
        data = dict(data)
        return cls(
            type=data.pop("type", None),
            name=data.pop("name", None),
            value=data.pop("value", None),
            extra=data
        )


@dataclass
class DocletMeta:
    """Where a doclet came from."""

    path: Optional[str] = None
    filename: Optional[str] = None
    lineno: Optional[int] = None
    code: CodeInfo = field(default_factory=CodeInfo)
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def source_file(self) -> Optional[str]:
        """Absolute path of the source file, or None if the host did not say."""
        if not self.filename:
            return None
        return os.path.abspath(os.path.join(self.path or "", self.filename))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = dict(self.extra)
        for key in ("path", "filename", "lineno"):
            if getattr(self, key) is not None:
                data[key] = getattr(self, key)
        data["code"] = self.code.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocletMeta":
        """Create from dictionary."""
        data = dict(data)
        return cls(
            path=data.pop("path", None),
            filename=data.pop("filename", None),
            lineno=data.pop("lineno", None),
            code=CodeInfo.from_dict(data.pop("code", None) or {}),
            extra=data
        )


@dataclass
class TypeSpec:
    """A type annotation as a list of alternative type names."""

    names: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data["names"] = list(self.names)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TypeSpec":
        data = dict(data)
        return cls(names=list(data.pop("names", None) or []), extra=data)


@dataclass
class TypedTag:
    """A ``@param``, ``@returns`` or ``@property`` entry."""

    type: Optional[TypeSpec] = None
    name: Optional[str] = None
    description: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        if self.type is not None:
            data["type"] = self.type.to_dict()
        if self.name is not None:
            data["name"] = self.name
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TypedTag":
        data = dict(data)
        type_data = data.pop("type", None)
        return cls(
            type=TypeSpec.from_dict(type_data) if type_data else None,
            name=data.pop("name", None),
            description=data.pop("description", None),
            extra=data
        )


@dataclass
class Doclet:
    """A structured record describing one parsed declaration."""

    kind: Optional[str] = None
    name: Optional[str] = None
    longname: Optional[str] = None
    scope: Optional[str] = None
    meta: Optional[DocletMeta] = None

    params: List[TypedTag] = field(default_factory=list)
    returns: List[TypedTag] = field(default_factory=list)
    properties: List[TypedTag] = field(default_factory=list)
    augments: List[str] = field(default_factory=list)

    # Keys the resolver does not care about, kept for round-tripping
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def source_file(self) -> Optional[str]:
        """Absolute path of the file that declared this doclet."""
        if self.meta is None:
            return None
        return self.meta.source_file

    @property
    def lineno(self) -> Optional[int]:
        return self.meta.lineno if self.meta else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert doclet to dictionary."""
        data = dict(self.extra)
        for key in ("kind", "name", "longname", "scope"):
            if getattr(self, key) is not None:
                data[key] = getattr(self, key)
        if self.meta is not None:
            data["meta"] = self.meta.to_dict()
        for key in ("params", "returns", "properties"):
            tags = getattr(self, key)
            if tags:
                data[key] = [tag.to_dict() for tag in tags]
        if self.augments:
            data["augments"] = list(self.augments)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Doclet":
        """Create doclet from dictionary."""
        data = dict(data)
        meta = data.pop("meta", None)
        return cls(
            kind=data.pop("kind", None),
            name=data.pop("name", None),
            longname=data.pop("longname", None),
            scope=data.pop("scope", None),
            meta=DocletMeta.from_dict(meta) if meta else None,
            params=[TypedTag.from_dict(p) for p in data.pop("params", None) or []],
            returns=[TypedTag.from_dict(r) for r in data.pop("returns", None) or []],
            properties=[TypedTag.from_dict(p) for p in data.pop("properties", None) or []],
            augments=list(data.pop("augments", None) or []),
            extra=data
        )


@dataclass
class ParseEvent:
    """Source text the host is about to parse. ``source`` may be rewritten."""

    filename: str
    source: str
