from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to application-wide constants: program metadata,
default source types, template placeholders, navigation markup templates and
the word lists used when normalizing document titles.
"""

import re
from typing import FrozenSet, List

PROGRAM_SHORT_NAME = "COMPENDIUM"
PROGRAM_NAME = f"{PROGRAM_SHORT_NAME} - numbered text documents to navigable HTML"
PROGRAM_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# OUTPUT AND SOURCE DEFAULTS
# -----------------------------------------------------------------------------

HTML = "html"
PDF = "pdf"
DEFAULT_OUTPUT_EXTENSION = HTML
SUPPORTED_OUTPUT_TYPES: FrozenSet[str] = frozenset({HTML})
DEFAULT_SRC_FILE_TYPES: List[str] = ["txt"]
BATCH_LOG_FILE_NAME = "Compilation Log - {timestamp}.log"

DEFAULT_FILE_CONTENT_PLACEHOLDER = "# Coming Soon!\nThis section is still being worked on."

# -----------------------------------------------------------------------------
# TEMPLATE PLACEHOLDERS
# -----------------------------------------------------------------------------

NO_COMPILE_TAG = "$$nocompile"
ROOT_NAME_TAG = "$$rootName"
DOC_NAME_TAG = "$$docName"
ROOT_DIR_TAG = "$$rootDir$$"
NAVIGATION_TAG = "$$navigation"
DOCUMENT_TAG = "$$document"
LAST_UPDATED_TAG = "$$lastUpdated"

DEFAULT_HTML_TEMPLATE = (
    '<!DOCTYPE html><html lang="en">'
    f"<head><title>{ROOT_NAME_TAG} {DOC_NAME_TAG}</title>"
    '<meta http-equiv="Content-Type" content="text/html; charset=utf-8"></head>'
    '<body><div class="main-container"><div class="page-container">'
    f'<div class="nav-container"><nav>{NAVIGATION_TAG}</nav></div>'
    f'<div class="doc-container"><main>{DOCUMENT_TAG}</main><aside>{LAST_UPDATED_TAG}</aside>'
    "</div></div></div></body></html>"
)

# -----------------------------------------------------------------------------
# NAVIGATION MARKUP
# -----------------------------------------------------------------------------

NAV_ROOT_TEMPLATE = '<div class="navigation">%s</div>'
NAV_GROUP_TEMPLATE = '<ul class="nav-group">%s</ul>'
NAV_ITEM_TEMPLATE = '<li class="nav-item">%s</li>'
NAV_ITEM_CONTENT_TEMPLATE = '<label class="item-content">%s</label>'
LINK_TEMPLATE = '<a href="%s">%s</a>'

# -----------------------------------------------------------------------------
# TITLE NORMALIZATION
# -----------------------------------------------------------------------------

# Leading run of digits, punctuation and underscores, e.g. "1.1.2 " or "00-02_"
NUMBERING_PATTERN = re.compile(r"^[\d\W_]+")

KNOWN_LOWER_CASE: FrozenSet[str] = frozenset({
    "a", "an", "and", "as", "at", "but", "by", "en", "for", "if",
    "in", "of", "on", "or", "the", "to", "v", "v.", "via", "vs", "vs.",
})

KNOWN_UPPER_CASE: FrozenSet[str] = frozenset({
    "todo", "imo", "imho", "afaik", "fyi", "at&t", "q&a", "ui", "ux", "rsvp", "eta", "faq",
    "atm", "rip", "p.s.", "diy", "id", "iq", "gmo", "pc", "pr", "sos", "ad", "bc", "hr",
})
