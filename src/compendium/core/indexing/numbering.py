from __future__ import annotations

"""
Numbering Signature Codec.

Parses the numbering a document or folder name starts with ("1.1.2 Intro",
"00-02-01--setup") into a tuple of integers, and defines the total order
used to sort sibling units by those tuples.
"""

import re
from typing import Optional

from compendium.domain.constants import NUMBERING_PATTERN
from compendium.domain.index_models import NumberingKey

_SEGMENT_SEPARATOR = re.compile(r"[\W_]+")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def extract_numbering(text: Optional[str]) -> Optional[NumberingKey]:
    """
    Extract the numbering the given single line of text starts with.

    Args:
        text: Name or header to inspect. None is tolerated.

    Returns:
        Optional[NumberingKey]: e.g. (1, 1, 2) for "1.1.2 My Section", or
        None if the text carries no numbering.
    """
    text = (text or "").strip()
    if not text:
        return None

    match = NUMBERING_PATTERN.match(text)
    if not match:
        return None

    tokens = [t for t in _SEGMENT_SEPARATOR.split(match.group(0)) if t]
    if not tokens:
        return None

    # int() drops leading zeros ("007" -> 7, "00" -> 0)
    return tuple(int(token) for token in tokens)


def compare_numbering(a: Optional[NumberingKey], b: Optional[NumberingKey]) -> int:
    """
    Compare two numbering keys, for use with functools.cmp_to_key.

    Missing or empty keys compare equal to anything, so a stable sort keeps
    unnumbered units in visitation order. Missing trailing segments count
    as 0; when all segments tie, the longer key sorts last, so that
    (1, 0) < (1, 0, 0).

    Returns:
        int: Negative, zero or positive, like a classic comparator.
    """
    if not a or not b:
        return 0

    for i in range(max(len(a), len(b))):
        a_segment = a[i] if i < len(a) else 0
        b_segment = b[i] if i < len(b) else 0
        delta = a_segment - b_segment
        if delta != 0:
            return delta

    return len(a) - len(b)


def numbering_signature(key: Optional[NumberingKey]) -> str:
    """Render a numbering key as a title prefix, e.g. "1.1.2. "."""
    if not key:
        return ""
    return ".".join(str(segment) for segment in key) + ". "
