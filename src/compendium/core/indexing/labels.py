from __future__ import annotations

"""
Label Formatter.

Turns raw file/folder names and document headers into display titles: drops
leading numbering, unifies dash/underscore separated words, applies title
case to single-case labels and renders dash runs as an en dash.
"""

import re
from typing import FrozenSet, Iterable, List, Optional

from compendium.domain.constants import (
    KNOWN_LOWER_CASE,
    KNOWN_UPPER_CASE,
    NUMBERING_PATTERN,
)

_SPACE_RX = re.compile(r"\s+")
_DASH_RX = re.compile(r"-+")
_UNDERSCORE_RX = re.compile(r"_+")
_DASH_AND_UNDERSCORE_RX = re.compile(r"[_-]+")
_WORD_RUN_RX = re.compile(r"\w\S*")

EN_DASH = "–"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def format_label(
        label: Optional[str],
        strip_numbering: bool = True,
        acronyms: Iterable[str] = (),
) -> Optional[str]:
    """
    Tidy up a label for display.

    NOTE: a label that uses both whitespace and dashes/underscores as word
    separators keeps its dashes/underscores unless those clearly dominate.

    Args:
        label: The label to tidy up. None and blank labels pass through.
        strip_numbering: Remove a leading numbering such as "1.1.2 ".
        acronyms: Extra words that must stay upper-cased.

    Returns:
        Optional[str]: The tidied up label, or the original one if blank.
    """
    changed = (label or "").strip()
    if not changed:
        return label

    if strip_numbering:
        changed = NUMBERING_PATTERN.sub("", changed).strip()

    changed = _normalize_separators(changed)

    if changed.upper() == changed or changed.lower() == changed:
        upper_words = KNOWN_UPPER_CASE.union(a.lower() for a in acronyms)
        changed = _title_case(changed, upper_words)

    return _DASH_RX.sub(EN_DASH, changed)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _normalize_separators(text: str) -> str:
    """Replace dashes/underscores with spaces when they act as word separators."""
    num_spaces = len(_SPACE_RX.findall(text))
    num_dashes = len(_DASH_RX.findall(text))
    num_underscores = len(_UNDERSCORE_RX.findall(text))

    uses_separators = num_dashes > 0 or num_underscores > 0
    whitespace_is_scarce = num_spaces < max(num_dashes, num_underscores)
    if uses_separators and whitespace_is_scarce:
        if num_dashes > num_underscores:
            text = _DASH_RX.sub(" ", text)
        elif num_underscores > num_dashes:
            text = _UNDERSCORE_RX.sub(" ", text)
        else:
            text = _DASH_AND_UNDERSCORE_RX.sub(" ", text)

    return _SPACE_RX.sub(" ", text).strip()


def _title_case(text: str, upper_words: FrozenSet[str]) -> str:
    """Title-case a single-case label, honoring small words and acronyms."""
    tokens = text.lower().split(" ")
    last = len(tokens) - 1
    out: List[str] = []

    for i, token in enumerate(tokens):
        if token in KNOWN_LOWER_CASE and 0 < i < last:
            out.append(token)
        elif token in upper_words:
            out.append(token.upper())
        else:
            out.append(_WORD_RUN_RX.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), token))

    return " ".join(out)
