from __future__ import annotations

"""
Document Index and Hierarchy Resolver.

Collects the flat stream of root, folder and document descriptors produced
by the source scanner and rebuilds the navigable tree out of it. The index
has a two-phase lifecycle: units are inserted while it is OPEN; 'finalize()'
then orders siblings by numbering, promotes sub-numbered documents under
their left sibling, and SEALS the index for read-only queries.
"""

import functools
import logging
import os
from collections import deque
from datetime import datetime, timezone
from typing import Deque, Dict, Iterable, Iterator, List, Optional, Tuple

from compendium.core.indexing.labels import format_label
from compendium.core.indexing.links import relative_root_prefix
from compendium.core.indexing.numbering import (
    compare_numbering,
    extract_numbering,
    numbering_signature,
)
from compendium.domain.config import TitleSettings
from compendium.domain.errors import (
    DuplicateRootError,
    IndexSealedError,
    UnknownParentError,
)
from compendium.domain.index_models import IndexState, NumberingKey, Unit, UnitKind
from compendium.infra.fs import get_file_name

logger = logging.getLogger(__name__)

_SORT_KEY = functools.cmp_to_key(lambda a, b: compare_numbering(a.numbering_key, b.numbering_key))


class DocumentIndex:
    """
    Registry of every unit taking part in a compilation run.

    Units are stored flat (by id, in insertion order) and linked into a tree
    through their 'children' lists. Sibling lists are tracked as groups so
    that 'finalize()' can order and restructure them.
    """

    def __init__(self, settings: Optional[TitleSettings] = None) -> None:
        self._settings = settings or TitleSettings()
        self._units: Dict[str, Unit] = {}
        self._groups: List[List[Unit]] = []
        self._root: Optional[Unit] = None
        self._state = IndexState.OPEN

    # -------------------------------------------------------------------------
    # INSERTION
    # -------------------------------------------------------------------------

    def add_root(self, path: str, name: str, created_at: float, modified_at: float) -> Unit:
        """
        Register the compilation root, i.e. the <source> folder.

        Its name becomes the compilation title and every generated link is
        made relative to it.

        Raises:
            IndexSealedError: If the index was already finalized.
            DuplicateRootError: If a root was already registered.
        """
        self._ensure_open()
        if self._root is not None:
            raise DuplicateRootError(f"Root already registered: {self._root.id}")

        unit = Unit(
            id=path,
            kind=UnitKind.ROOT,
            raw_name=name,
            created_at=created_at,
            modified_at=modified_at,
            display_title=format_label(name, acronyms=self._settings.custom_acronyms) or "",
        )
        self._root = unit
        self._units[path] = unit
        logger.debug(f"Index root: {path}")
        return unit

    def add_directory(self, path: str, name: str, created_at: float, modified_at: float) -> Unit:
        """
        Register a folder used to group documents.

        Folders are parented strictly after the filesystem layout; their
        numbering only influences sibling order.
        """
        self._ensure_open()
        unit = Unit(
            id=path,
            kind=UnitKind.DIRECTORY,
            raw_name=name,
            created_at=created_at,
            modified_at=modified_at,
            numbering_key=extract_numbering(name),
        )
        unit.display_title = self._build_title(unit.numbering_key, name)
        self._attach(unit)
        return unit

    def add_file(
            self,
            path: str,
            name: str,
            created_at: float,
            modified_at: float,
            header: Optional[str] = None,
    ) -> Unit:
        """
        Register a document.

        Args:
            path: Absolute path of the document.
            name: File name, with or without its extension.
            created_at: Creation timestamp in milliseconds.
            modified_at: Modification timestamp in milliseconds.
            header: First meaningful line of the document; None for empty
                documents and for those tagged to be left out.

        Returns:
            Unit: The registered unit.
        """
        self._ensure_open()
        raw_name = get_file_name(name, trim_extension=True)
        unit = Unit(
            id=path,
            kind=UnitKind.FILE,
            raw_name=raw_name,
            created_at=created_at,
            modified_at=modified_at,
            header=header,
            numbering_key=extract_numbering(raw_name) or extract_numbering(header),
        )
        unit.display_title = self._build_title(unit.numbering_key, header or raw_name)
        self._attach(unit)
        return unit

    # -------------------------------------------------------------------------
    # FINALIZATION
    # -------------------------------------------------------------------------

    def finalize(self, skipped_paths: Optional[Iterable[str]] = None) -> None:
        """
        Refine the hierarchy and seal the index.

        Args:
            skipped_paths: Files found during the scan that are not compiled
                (assets, unsupported types). Their ancestor folders, up to
                but not including the root, are hidden from navigation.

        Raises:
            IndexSealedError: If the index was already finalized.
        """
        self._ensure_open()
        self._state = IndexState.SEALED

        excluded = self._mark_excluded(skipped_paths or ())

        for group in self._groups:
            group.sort(key=_SORT_KEY)

        promoted = self._promote_subsections()
        self._groups = []

        logger.debug(
            f"Index sealed: {len(self._units)} unit(s), {excluded} excluded, {promoted} promoted."
        )

    def _mark_excluded(self, skipped_paths: Iterable[str]) -> int:
        """Hide the folders that hold skipped files. Returns the number of units hidden."""
        if self._root is None:
            return 0

        folders = set()
        for skipped_path in skipped_paths:
            current = os.path.dirname(skipped_path)
            while current != self._root.id:
                folders.add(current)
                parent = os.path.dirname(current)
                if parent == current:
                    break
                current = parent

        count = 0
        for folder in folders:
            unit = self._units.get(folder)
            if unit is not None and unit.kind is not UnitKind.ROOT:
                unit.excluded = True
                count += 1
        return count

    def _promote_subsections(self) -> int:
        """
        Move every document under its left sibling when it is numbered deeper.

        E.g. siblings "1 A", "1.1 B", "1.1.1 C", "2 D" become A(B(C)), D.
        Newly created child lists are queued and processed in turn.
        """
        queue: Deque[List[Unit]] = deque(self._groups)
        promoted = 0

        while queue:
            group = queue.popleft()
            i = 1
            while i < len(group):
                unit, previous = group[i], group[i - 1]
                if _can_promote(unit, previous):
                    if not previous.children:
                        queue.append(previous.children)
                    previous.children.append(group.pop(i))
                    previous.is_container = True
                    unit.parent_id = previous.id
                    promoted += 1
                    continue
                i += 1

        return promoted

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    @property
    def root(self) -> Optional[Unit]:
        return self._root

    @property
    def is_sealed(self) -> bool:
        return self._state is IndexState.SEALED

    @property
    def state(self) -> IndexState:
        return self._state

    def get(self, unit_id: str) -> Optional[Unit]:
        return self._units.get(unit_id)

    def units(self) -> List[Unit]:
        """All registered units, in insertion order."""
        return list(self._units.values())

    def display_title(self, unit_id: str) -> str:
        unit = self._units.get(unit_id)
        return unit.display_title if unit else ""

    def last_modified(self, unit_id: str) -> str:
        """
        Human readable modification date of a unit, e.g. "Monday, January 6, 2025".

        Dates are expressed in UTC. Returns "" for unknown units.
        """
        unit = self._units.get(unit_id)
        if unit is None:
            return ""
        stamp = datetime.fromtimestamp(unit.modified_at / 1000, tz=timezone.utc)
        return f"{stamp:%A}, {stamp:%B} {stamp.day}, {stamp.year}"

    def compilation_header(self, separator: Optional[str] = None) -> str:
        """
        Title of the whole compilation, optionally followed by a separator.

        Args:
            separator: Text appended after a space, e.g. "|" for page titles.

        Returns:
            str: e.g. "My Handbook |", or "" when there is no root.
        """
        if self._root is None:
            return ""
        header = self._root.display_title
        return f"{header} {separator}" if separator else header

    def root_dir_prefix(self, document_id: str) -> str:
        """Relative folder prefix leading from a document to the root ("" if no root)."""
        if self._root is None:
            return ""
        return relative_root_prefix(document_id, self._root.id)

    def walk(self) -> Iterator[Tuple[Unit, Optional[Unit]]]:
        """
        Iterate the tree depth-first, yielding (unit, parent) pairs.

        The root comes first, paired with None. Excluded units are not
        yielded and neither are their descendants.
        """
        if self._root is None:
            return

        stack: List[Tuple[Unit, Optional[Unit]]] = [(self._root, None)]
        while stack:
            unit, parent = stack.pop()
            if unit.excluded:
                continue
            yield unit, parent
            stack.extend((child, unit) for child in reversed(unit.children))

    # -------------------------------------------------------------------------
    # INTERNAL HELPERS
    # -------------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._state is IndexState.SEALED:
            raise IndexSealedError("The index is sealed and cannot be updated anymore.")

    def _build_title(self, key: Optional[NumberingKey], label: str) -> str:
        prefix = "" if self._settings.hide_numbering_in_titles else numbering_signature(key)
        return prefix + (format_label(label, acronyms=self._settings.custom_acronyms) or "")

    def _attach(self, unit: Unit) -> None:
        """Link a unit to its physical parent folder."""
        parent_id = os.path.dirname(unit.id)
        parent = self._units.get(parent_id)
        if parent is None:
            raise UnknownParentError(f"No registered parent '{parent_id}' for '{unit.id}'")

        self._units[unit.id] = unit
        unit.parent_id = parent.id
        parent.is_container = True
        if not parent.children:
            self._groups.append(parent.children)
        parent.children.append(unit)
        logger.debug(f"Indexed {unit.kind.value}: {unit.id} -> '{unit.display_title}'")


def _can_promote(unit: Unit, previous: Unit) -> bool:
    return (
        unit.is_file and previous.is_file
        and bool(unit.numbering_key) and bool(previous.numbering_key)
        and len(unit.numbering_key) > len(previous.numbering_key)
    )
