"""
Line normalization: raw extracted text -> RawDocument.

Handles the extraction artifacts every converter leaves behind (mixed newlines,
non-breaking and zero-width spaces, letter-spaced PDF headings) so the
classifiers downstream only ever see clean, trimmed, non-empty lines.
"""

import logging
import re
from typing import Iterable, List

from profile_parser.core.schemas import RawDocument

logger = logging.getLogger(__name__)


# ============================================================================
# Character-level cleanup
# ============================================================================

# NBSP, narrow NBSP, figure space, ideographic space -> plain space
_SPACE_LIKE_RE = re.compile("[\u00a0\u2007\u202f\u3000\t\f\v]")
# Zero-width space/joiners and BOM -> removed
_ZERO_WIDTH_RE = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")
_MULTI_SPACE_RE = re.compile(r" {2,}")

SPACED_CHARS_RE = re.compile(r"^(?:[A-Za-z0-9@.()\-\+]\s+){2,}[A-Za-z0-9@.()\-\+]+$")


def despace_if_needed(text: str) -> str:
    """
    Fix PDFs that extract text with spaces between characters.

    Examples:
      'E X P E R I E N C E' -> 'EXPERIENCE'
      'J O H N   D O E' -> 'JOHN DOE'   (preserves word boundary)
      '5 5 5 . 1 2 3 . 4 5 6 7' -> '555.123.4567'
    """
    t = text.strip()
    if not t:
        return t

    # Only apply when the line is mostly single characters separated by spaces
    if SPACED_CHARS_RE.match(t):
        # 2+ spaces mark the real word boundaries
        parts = re.split(r"\s{2,}", t)
        parts = ["".join(p.split()) for p in parts]
        return " ".join([p for p in parts if p])

    return t


def normalize_line(line: str) -> str:
    """Clean a single line. Returns '' for lines that should be dropped."""
    t = _ZERO_WIDTH_RE.sub("", line)
    t = _SPACE_LIKE_RE.sub(" ", t)
    t = despace_if_needed(t)
    return _MULTI_SPACE_RE.sub(" ", t).strip()


def split_lines(text: str) -> List[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def to_raw_document(text: str) -> RawDocument:
    """
    Build the immutable line sequence every later stage reads.

    Args:
        text: Text as returned by the extraction collaborator

    Returns:
        Tuple of trimmed, non-empty lines in document order
    """
    lines = _clean_all(split_lines(text or ""))
    logger.debug(f"Normalized document: {len(lines)} non-empty lines")
    return tuple(lines)


def _clean_all(lines: Iterable[str]) -> List[str]:
    cleaned = []
    for raw in lines:
        line = normalize_line(raw)
        if line:
            cleaned.append(line)
    return cleaned
