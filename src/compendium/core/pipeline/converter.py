from __future__ import annotations

"""
Document Converter.

Loads document bodies and converts them from CommonMark to HTML through
markdown-it-py. Typographic replacements and smart quotes are enabled, and
soft line breaks are kept as hard breaks, matching how authors lay out
plain text documents.
"""

import functools
import logging
from typing import Optional

from markdown_it import MarkdownIt

from compendium.domain.constants import NO_COMPILE_TAG

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_document_source(path: str, placeholder: str) -> Optional[str]:
    """
    Read the trimmed body of a document.

    Args:
        path: Document to read.
        placeholder: Body to use when the document is empty.

    Returns:
        Optional[str]: The body, or None if the document is tagged with
        "$$nocompile" and must be left out of the compilation.

    Raises:
        OSError: If the file cannot be read.
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read().strip()

    if not content:
        logger.debug(f"No content in file, using placeholder: {path}")
        content = placeholder

    if content.startswith(NO_COMPILE_TAG):
        logger.debug(f"File is marked for exclusion: {path}")
        return None

    return content


def convert_to_html(text: str) -> str:
    """Render CommonMark text as an HTML fragment."""
    return _markdown_parser().render(text)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

@functools.lru_cache(maxsize=1)
def _markdown_parser() -> MarkdownIt:
    return MarkdownIt("commonmark", {"breaks": True, "typographer": True}).enable(
        ["replacements", "smartquotes"]
    )
