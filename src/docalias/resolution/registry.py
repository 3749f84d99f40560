"""Per-file resolution records and the registry that owns them."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional, Any

from docalias.errors import AliasStateError
from docalias.rules import AliasIdiom


class SlotState(Enum):
    """Lifecycle of a local alias."""

    UNRESOLVED = "UNRESOLVED"
    RESOLVED = "RESOLVED"
    FAILED = "FAILED"


@dataclass
class AliasSlot:
    """Resolution slot for one local alias.

    Starts as a request for ``exported_path`` of ``target_file`` and is
    finalized exactly once, either to a longname or to a failure.
    """

    target_file: str
    exported_path: str = ""
    idiom: Optional[AliasIdiom] = None
    line: Optional[int] = None
    state: SlotState = SlotState.UNRESOLVED
    longname: Optional[str] = None
    reason: Optional[str] = None

    @property
    def import_name(self) -> str:
        """Key to look up in the target's export table."""
        return self.exported_path or "*"

    @property
    def is_resolved(self) -> bool:
        return self.state == SlotState.RESOLVED

    def resolve(self, longname: str) -> None:
        self._check_unresolved()
        self.state = SlotState.RESOLVED
        self.longname = longname

    def fail(self, reason: str) -> None:
        self._check_unresolved()
        self.state = SlotState.FAILED
        self.reason = reason

    def _check_unresolved(self) -> None:
        if self.state != SlotState.UNRESOLVED:
            raise AliasStateError(
                f"Alias for {self.target_file}:{self.import_name} is already {self.state.value}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "target_file": self.target_file,
            "exported_path": self.exported_path,
            "idiom": self.idiom.value if self.idiom else None,
            "line": self.line,
            "state": self.state.value,
            "longname": self.longname,
            "reason": self.reason
        }


@dataclass
class FileInfo:
    """Everything the resolver knows about one source file."""

    filename: str
    local_aliases: Dict[str, AliasSlot] = field(default_factory=dict)
    declared_names: Dict[str, str] = field(default_factory=dict)
    # Insertion order matters when picking the active exports alias
    assignments: Dict[str, str] = field(default_factory=dict)
    export_table: Dict[str, str] = field(default_factory=dict)

    def lookup(self, name: str) -> Optional[str]:
        """Canonical name for a locally meaningful name, if one is known."""
        if name in self.declared_names:
            return self.declared_names[name]

        slot = self.local_aliases.get(name)
        if slot is not None and slot.is_resolved:
            return slot.longname

        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "local_aliases": {
                name: slot.to_dict() for name, slot in self.local_aliases.items()
            },
            "declared_names": dict(self.declared_names),
            "assignments": dict(self.assignments),
            "export_table": dict(self.export_table)
        }


class FileRegistry:
    """Maps absolute file paths to their FileInfo for one documentation run."""

    def __init__(self) -> None:
        self._files: Dict[str, FileInfo] = {}

    def get(self, filename: str) -> Optional[FileInfo]:
        """Get the record for a file without creating one."""
        return self._files.get(filename)

    def get_or_create(self, filename: str) -> FileInfo:
        """Get the record for a file, creating it on first use."""
        file_info = self._files.get(filename)
        if file_info is None:
            file_info = FileInfo(filename)
            self._files[filename] = file_info
        return file_info

    def __contains__(self, filename: object) -> bool:
        return filename in self._files

    def __iter__(self) -> Iterator[FileInfo]:
        return iter(list(self._files.values()))

    def __len__(self) -> int:
        return len(self._files)

    def get_stats(self) -> Dict[str, int]:
        """Get statistics about registered files and aliases."""
        slots = [slot for info in self._files.values() for slot in info.local_aliases.values()]
        return {
            "total_files": len(self._files),
            "total_aliases": len(slots),
            "resolved_aliases": len([s for s in slots if s.state == SlotState.RESOLVED]),
            "failed_aliases": len([s for s in slots if s.state == SlotState.FAILED]),
            "unresolved_aliases": len([s for s in slots if s.state == SlotState.UNRESOLVED]),
            "total_exports": sum(len(info.export_table) for info in self._files.values())
        }
