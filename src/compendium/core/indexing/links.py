from __future__ import annotations

"""
Relative Link Builder.

Computes the URLs that let a compiled document point to another document,
or to the compilation root, regardless of where both live in the output
tree. Links always use forward slashes.
"""

import os

from compendium.infra.fs import change_extension

_EDGE_SEPARATORS = "\\/"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def relative_link(from_id: str, to_id: str, extension: str, folders_only: bool = False) -> str:
    """
    Build a URL that navigates from one compiled location to another.

    Args:
        from_id: Path of the document that will hold the link.
        to_id: Path of the document the link points to.
        extension: Extension the target is compiled to (e.g. "html"). An
            empty value removes the target's extension.
        folders_only: Only return the folder portion of the URL. A trailing
            separator is the caller's responsibility.

    Returns:
        str: The relative URL; a bare file name when both share a folder.
    """
    from_dir = os.path.dirname(from_id)
    to_dir = os.path.dirname(to_id)

    rel_dir = os.path.relpath(to_dir, from_dir) if from_dir != to_dir else ""
    if rel_dir == os.curdir:
        rel_dir = ""
    rel_dir = rel_dir.strip().strip(_EDGE_SEPARATORS)

    segments = []
    if rel_dir:
        segments.append(rel_dir)
    if not folders_only:
        segments.append(change_extension(os.path.basename(to_id), extension).strip().strip(_EDGE_SEPARATORS))

    return "/".join(segments).replace("\\", "/")


def relative_root_prefix(document_id: str, root_id: str) -> str:
    """
    Build the folder prefix leading from a compiled document to the root.

    Used to resolve asset references such as "$$rootDir$$assets/site.css".

    Args:
        document_id: Path of the document the prefix is computed for.
        root_id: Path of the compilation root folder.

    Returns:
        str: e.g. "../../" for a document two folders deep, "" at root level.
    """
    prefix = relative_link(os.path.dirname(document_id), root_id, "", folders_only=True)
    return f"{prefix}/" if prefix else ""
