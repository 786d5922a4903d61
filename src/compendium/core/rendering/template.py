from __future__ import annotations

"""
HTML Template Processor.

Populates an HTML template with the data of one compiled document. Tags are
resolved in a fixed order so that only "$$rootDir$$" and "$$lastUpdated" are
ever expanded inside the document body itself.
"""

import logging
import os
from typing import Callable, List, Optional, Tuple

from compendium.core.indexing.document_index import DocumentIndex
from compendium.core.rendering.navigation import render_navigation
from compendium.domain.constants import (
    DEFAULT_HTML_TEMPLATE,
    DOC_NAME_TAG,
    DOCUMENT_TAG,
    LAST_UPDATED_TAG,
    NAVIGATION_TAG,
    ROOT_DIR_TAG,
    ROOT_NAME_TAG,
)
from compendium.domain.errors import TemplateError

logger = logging.getLogger(__name__)


def load_template(template_file: Optional[str] = None) -> str:
    """
    Return the HTML template to compile documents with.

    Args:
        template_file: Path of a custom template; None selects the built-in one.

    Returns:
        str: The trimmed template.

    Raises:
        TemplateError: If the custom template is missing, unreadable or empty.
    """
    if not template_file:
        return DEFAULT_HTML_TEMPLATE

    if not os.path.isfile(template_file):
        raise TemplateError(f"custom HTML template not found: {template_file}")

    try:
        with open(template_file, "r", encoding="utf-8") as f:
            template = f.read().strip()
    except OSError as e:
        raise TemplateError(f"custom HTML template unreadable: {template_file}") from e

    if not template:
        raise TemplateError(f"custom HTML template is empty: {template_file}")

    logger.info(f"Using custom HTML template: {template_file}")
    return template


def apply_template(template: str, index: DocumentIndex, document_id: str, body: str) -> str:
    """
    Resolve every known tag of 'template' for a given document.

    Args:
        template: Raw HTML template.
        index: The finalized index of the compilation.
        document_id: Source path of the document being compiled.
        body: The document's HTML body.

    Returns:
        str: The complete HTML page.
    """
    resolvers: List[Tuple[str, Callable[[], str]]] = [
        (ROOT_NAME_TAG, index.compilation_header),
        (DOC_NAME_TAG, lambda: index.display_title(document_id)),
        (LAST_UPDATED_TAG, lambda: index.last_modified(document_id)),
        (NAVIGATION_TAG, lambda: render_navigation(index, document_id)),
        (DOCUMENT_TAG, lambda: body),
        (ROOT_DIR_TAG, lambda: index.root_dir_prefix(document_id)),
        # Second pass expands "$$lastUpdated" written inside the body
        (LAST_UPDATED_TAG, lambda: index.last_modified(document_id)),
    ]

    output = template
    for tag, resolve in resolvers:
        if tag in output:
            output = output.replace(tag, resolve())

    logger.debug(f"Template applied for {document_id}")
    return output
