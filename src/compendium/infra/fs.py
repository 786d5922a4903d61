from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path manipulation, target path inference, directory preparation and
line-oriented document reading. Acts as an abstraction over the 'os' module
so that the core layers never touch the filesystem directly.
"""

import os
import re
from typing import Iterable, Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

_EDGE_SEPARATORS = "\\/"
_UNSAFE_FILENAME_CHARS = re.compile(r'[/\\?<>:*|"\x00-\x1f\x80-\x9f]')

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def get_file_name(path: str, trim_extension: bool = False) -> str:
    """
    Return the last segment of a path, optionally without its extension.

    Args:
        path: File or folder path.
        trim_extension: Whether to also remove the file extension.

    Returns:
        str: The base name.
    """
    name = os.path.basename(path)
    if trim_extension:
        name = os.path.splitext(name)[0]
    return name


def change_extension(file_name: str, new_extension: str) -> str:
    """
    Swap the extension of a file name for a new one.

    Args:
        file_name: Original file name.
        new_extension: Extension without the dot; empty removes the extension.

    Returns:
        str: The renamed file name.
    """
    stem = get_file_name(file_name, trim_extension=True)
    return f"{stem}.{new_extension}" if new_extension else stem


def infer_target_path(
        src_file_path: str,
        target_folder: str,
        new_extension: Optional[str],
        src_home_dir: Optional[str] = None,
) -> str:
    """
    Compute where the output for a source file goes inside a target folder.

    With 'src_home_dir', the source's sub-path relative to that folder is
    mirrored under 'target_folder'; e.g. "/docs/topic/a.txt" with home
    "/docs" and target "/out" yields "/out/topic/a.html".

    Args:
        src_file_path: Source file to derive the target from.
        target_folder: Folder receiving the output.
        new_extension: Extension of the output file; None keeps the original.
        src_home_dir: Optional source folder to mirror the sub-path from.

    Returns:
        str: Absolute target file path.
    """
    target_file = change_extension(src_file_path, new_extension) if new_extension \
        else get_file_name(src_file_path)
    segments = [target_file.strip().strip(_EDGE_SEPARATORS)]

    if src_home_dir:
        rel_path = os.path.relpath(os.path.dirname(src_file_path), src_home_dir)
        rel_path = "" if rel_path == os.curdir else rel_path.strip().strip(_EDGE_SEPARATORS)
        if rel_path:
            segments.insert(0, rel_path)

    return os.path.abspath(os.path.join(target_folder, *segments))


def sanitize_file_name(name: str, replacement: str = "-") -> str:
    """Replace characters that are not valid in file names on common platforms."""
    return _UNSAFE_FILENAME_CHARS.sub(replacement, name).strip(". ")

# -----------------------------------------------------------------------------
# FILESYSTEM OPERATIONS
# -----------------------------------------------------------------------------

def ensure_parent_dirs(file_path: str) -> bool:
    """
    Create any missing directories implied by the given file path.

    Args:
        file_path: File path to ensure parent directories of.

    Returns:
        bool: True if all parent directories already existed.
    """
    dirname = os.path.dirname(os.path.abspath(file_path))
    if os.path.isdir(dirname):
        return True
    os.makedirs(dirname, exist_ok=True)
    return False


def is_directory_empty(path: str) -> bool:
    """Check whether a folder has no entries at all."""
    with os.scandir(path) as it:
        return next(it, None) is None


def read_document_header(file_path: str, skip_signatures: Iterable[str]) -> Optional[str]:
    """
    Read the first meaningful line of a text document.

    Blank lines and lines starting with any of 'skip_signatures' are passed
    over.

    Args:
        file_path: Document to read.
        skip_signatures: Prefixes that disqualify a line.

    Returns:
        Optional[str]: The line (without its line break), or None.
    """
    signatures = tuple(skip_signatures)

    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        for raw_line in f:
            line = raw_line.rstrip("\r\n")
            if not line.strip():
                continue
            if signatures and line.startswith(signatures):
                continue
            return line

    return None
