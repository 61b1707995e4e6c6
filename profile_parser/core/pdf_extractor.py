"""
PDF text-layer extraction (no OCR).

Text is rebuilt from pdfplumber word objects rather than page.extract_text(),
which glues or letter-spaces words on many resume templates. Several
x_tolerance values are tried per page and the least damaged result is kept.
"""

import logging
import re
from io import BytesIO
from typing import Any, List, Optional, Tuple

import pdfplumber

logger = logging.getLogger(__name__)

X_TOLERANCES = [1.5, 2, 2.5, 3]
LINE_BUCKET = 3  # points; words whose tops round to the same bucket share a line
GLUED_WORD_LENGTH = 18
ALLOWED_SINGLE_LETTERS = 10


def page_text(page: Any, x_tolerance: float = 3, line_bucket: float = LINE_BUCKET) -> str:
    """Group a page's words into lines by vertical position, left to right."""
    words = page.extract_words(x_tolerance=x_tolerance, y_tolerance=2, keep_blank_chars=False, use_text_flow=True)
    if not words:
        return ""

    rows = {}
    for word in words:
        rows.setdefault(round(word["top"] / line_bucket), []).append(word)
    lines = []
    for key in sorted(rows):
        ordered = sorted(rows[key], key=lambda w: w["x0"])
        lines.append(" ".join(w["text"] for w in ordered))
    return "\n".join(lines)


def damage_score(text: str) -> float:
    """
    Lower is better. Long alphabetic runs mean glued words; many single
    letters mean letter-spaced words.
    """
    tokens = re.findall(r"[A-Za-z]+", text)
    if not tokens:
        return 1e9
    glued = sum(1 for t in tokens if len(t) >= GLUED_WORD_LENGTH)
    singles = sum(1 for t in tokens if len(t) == 1)
    return glued * 10 + max(0, singles - ALLOWED_SINGLE_LETTERS) * 3


def best_page_text(page: Any, tolerances: Optional[List[float]] = None) -> Tuple[str, float]:
    """(text, x_tolerance) with the lowest damage score; ties keep the tighter tolerance."""
    best: Optional[Tuple[float, float, str]] = None
    for xt in tolerances or X_TOLERANCES:
        text = page_text(page, x_tolerance=xt)
        score = damage_score(text)
        if best is None or score < best[0]:
            best = (score, xt, text)
    return best[2], best[1]


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """All pages' text joined by newlines. Empty string for image-only PDFs."""
    pages: List[str] = []
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        for page_i, page in enumerate(pdf.pages, start=1):
            text, used_xt = best_page_text(page)
            logger.debug(f"PDF page {page_i}: x_tolerance={used_xt}, {len(text)} chars")
            if text.strip():
                pages.append(text)
    return "\n".join(pages)
