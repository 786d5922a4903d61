from __future__ import annotations

"""
Document Index Data Models.

Provides the structural nodes used by the indexing subsystem to rebuild a
hierarchical table of contents out of a flat filesystem walk.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

NumberingKey = Tuple[int, ...]

# -----------------------------------------------------------------------------
# ENUMERATIONS
# -----------------------------------------------------------------------------

class UnitKind(str, Enum):
    """Kind of a compilation unit, as reported by the source scanner."""
    ROOT = "root"
    DIRECTORY = "directory"
    FILE = "file"


class IndexState(str, Enum):
    """Lifecycle of a DocumentIndex: open for insertion, then sealed for queries."""
    OPEN = "open"
    SEALED = "sealed"

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class Unit:
    """
    Represents one node (root, folder or document) of the compilation tree.

    Attributes:
        id: Absolute source path; unique and stable for the run.
        kind: Root, directory or file.
        raw_name: Name as found on disk (extension-stripped for files).
        header: First meaningful line of a document body, if any.
        created_at: Creation timestamp in milliseconds.
        modified_at: Modification timestamp in milliseconds.
        numbering_key: Numbers parsed from the name or header, if any.
        display_title: Human-readable title shown in navigation.
        excluded: Whether the unit is hidden from rendered navigation.
        is_container: Whether the unit owns at least one child.
        parent_id: Id of the owning unit; None for the root.
        children: Owned child units, in navigation order.
    """
    id: str
    kind: UnitKind
    raw_name: str
    created_at: float = 0.0
    modified_at: float = 0.0
    header: Optional[str] = None
    numbering_key: Optional[NumberingKey] = None
    display_title: str = ""
    excluded: bool = False
    is_container: bool = False
    parent_id: Optional[str] = None
    children: List["Unit"] = field(default_factory=list, repr=False)

    @property
    def is_file(self) -> bool:
        return self.kind is UnitKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is UnitKind.DIRECTORY


@dataclass(frozen=True)
class SourceEntry:
    """
    Descriptor emitted by the source scanner for each visited entry.

    Attributes:
        path: Absolute filesystem path.
        name: Entry name as found on disk (with extension for files).
        kind: Root, directory or file.
        extension: File extension without the leading dot ("" for folders).
        created_at: Creation timestamp in milliseconds.
        modified_at: Modification timestamp in milliseconds.
    """
    path: str
    name: str
    kind: UnitKind
    extension: str = ""
    created_at: float = 0.0
    modified_at: float = 0.0
