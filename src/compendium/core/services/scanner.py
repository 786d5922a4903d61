from __future__ import annotations

"""
Source Tree Scanner.

Walks the <source> folder depth-first and reports every entry relevant to a
compilation: the root itself, the folders, and the documents whose extension
is among the configured source file types. Any other file is reported as
skipped, so that its folders can be hidden from navigation (and the file
optionally copied over as an asset).
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Collection, Iterable, List, Optional

from compendium.core.indexing.document_index import DocumentIndex
from compendium.domain.index_models import SourceEntry, UnitKind
from compendium.infra.fs import get_file_name

logger = logging.getLogger(__name__)

HeaderReader = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class ScanResult:
    """
    Outcome of a source tree scan.

    Attributes:
        entries: Root, folders and documents, in visitation order.
        skipped: Paths of files that are not documents.
    """
    entries: List[SourceEntry] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def documents(self) -> List[SourceEntry]:
        return [e for e in self.entries if e.kind is UnitKind.FILE]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def scan_source_tree(
        root_path: str,
        file_types: Iterable[str],
        ignored_paths: Collection[str] = (),
) -> ScanResult:
    """
    Scan a folder recursively.

    Folder entries are visited sorted by name; a folder is reported before
    its own content. Symbolic links are neither followed nor reported.

    Args:
        root_path: Folder to scan.
        file_types: Document extensions, without the dot (case-insensitive).
        ignored_paths: Absolute paths to leave out entirely (e.g. a custom
            template living inside the source folder).

    Returns:
        ScanResult: Reported entries and skipped file paths.
    """
    root_path = os.path.abspath(root_path)
    extensions = {t.lower().lstrip(".") for t in file_types}
    ignored = {os.path.abspath(p) for p in ignored_paths}

    entries: List[SourceEntry] = [_make_entry(root_path, get_file_name(root_path), UnitKind.ROOT)]
    skipped: List[str] = []

    _scan_folder(root_path, extensions, ignored, entries, skipped)

    logger.info(
        f"Scanned {root_path}: {len(entries) - 1} entries indexed, {len(skipped)} file(s) skipped."
    )
    return ScanResult(entries=entries, skipped=skipped)


def populate_index(index: DocumentIndex, scan: ScanResult, header_reader: HeaderReader) -> None:
    """
    Feed the scanned entries into a document index, in visitation order.

    Args:
        index: An open document index.
        scan: Result of 'scan_source_tree'.
        header_reader: Returns the header of a document given its path.
    """
    for entry in scan.entries:
        if entry.kind is UnitKind.ROOT:
            index.add_root(entry.path, entry.name, entry.created_at, entry.modified_at)
        elif entry.kind is UnitKind.DIRECTORY:
            index.add_directory(entry.path, entry.name, entry.created_at, entry.modified_at)
        else:
            index.add_file(
                entry.path, entry.name, entry.created_at, entry.modified_at, header_reader(entry.path)
            )

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _scan_folder(
        folder: str,
        extensions: Collection[str],
        ignored: Collection[str],
        entries: List[SourceEntry],
        skipped: List[str],
) -> None:
    for name in sorted(os.listdir(folder)):
        path = os.path.join(folder, name)
        if path in ignored:
            continue

        if os.path.islink(path):
            logger.debug(f"Symbolic link ignored: {path}")
        elif os.path.isdir(path):
            entries.append(_make_entry(path, name, UnitKind.DIRECTORY))
            _scan_folder(path, extensions, ignored, entries, skipped)
        elif os.path.isfile(path):
            extension = os.path.splitext(name)[1].lstrip(".")
            if extension.lower() in extensions:
                entries.append(_make_entry(path, name, UnitKind.FILE, extension))
            else:
                skipped.append(path)


def _make_entry(path: str, name: str, kind: UnitKind, extension: str = "") -> SourceEntry:
    stats = os.lstat(path)
    return SourceEntry(
        path=path,
        name=name,
        kind=kind,
        extension=extension,
        created_at=stats.st_ctime * 1000,
        modified_at=stats.st_mtime * 1000,
    )
