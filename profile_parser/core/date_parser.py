"""
Free-text date expressions -> normalized DateRange.

Handles the forms resumes actually use:
  "Jan 2024 to Present", "2020-2022", "March 2019 – June 2021",
  "03/2020 - 11/2022", "Jan - Mar 2021", "Since 2019", "2019"
"""

import logging
import re
from typing import List, Optional, Tuple

from profile_parser.core.schemas import DateRange
from profile_parser.core.vocabulary import DEFAULT_VOCABULARY, HeuristicVocabulary

logger = logging.getLogger(__name__)


YEAR_RE = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")
NUMERIC_MONTH_RE = re.compile(r"(?<![\d/.])(0?[1-9]|1[0-2])[/.](?=(?:19|20)\d{2}(?!\d))")
ISO_MONTH_RE = re.compile(r"(?<!\d)(?:19|20)\d{2}-(0[1-9]|1[0-2])(?!\d)")
RANGE_WORDS = ["to", "until", "till", "through", "thru"]
RANGE_DASHES = "–—-"


def _range_split_pattern(vocab: HeuristicVocabulary):
    return vocab.compiled(
        "range_split",
        lambda: r"\s*(?:[" + re.escape(RANGE_DASHES) + r"]|\b(?:" + "|".join(RANGE_WORDS) + r")\b)\s*",
    )


def _date_span_pattern(vocab: HeuristicVocabulary):
    """One date expression, optionally a range, e.g. 'from Jan 2019 - Present'."""
    def build() -> str:
        month = "(?:" + "|".join(sorted(vocab.months, key=len, reverse=True)) + r")\b\.?"
        year = r"(?:19|20)\d{2}(?!\d)"
        point = (
            rf"(?:{month},?\s*(?:\d{{1,2}}(?:st|nd|rd|th)?,?\s*)?{year}"
            rf"|(?<!\d){year}-(?:0[1-9]|1[0-2])(?!\d)"
            rf"|(?:0?[1-9]|1[0-2])[/.]{year}"
            rf"|(?<!\d){year}"
            rf"|{month})"
        )
        present = r"(?:" + "|".join(vocab.present_tokens) + r")\b"
        sep = r"\s*(?:[" + re.escape(RANGE_DASHES) + r"]|\b(?:" + "|".join(RANGE_WORDS) + r")\b)\s*"
        return rf"\b(?:(?:from|since)\s+)?{point}(?:{sep}(?:{point}|{present}))?"
    return vocab.compiled("date_span", build)


def has_date_token(text: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    """True if text carries a year, a month name or a present/current token."""
    return bool(
        YEAR_RE.search(text)
        or vocab.month_pattern().search(text)
        or vocab.present_pattern().search(text)
    )


def find_date_span(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> Optional[Tuple[int, int]]:
    """
    Locate a date expression inside a longer line.

    Only spans that contain a year count, so a stray month word in a title
    ("May Day Project Lead") is never mistaken for a date.

    Examples:
        "Senior Engineer | Acme Corp  2019 - 2021" -> span of "2019 - 2021"
        "2002 – 2005: BSc (Hons) Geography" -> span of "2002 – 2005"
    """
    if not line:
        return None
    for m in _date_span_pattern(vocab).finditer(line):
        if YEAR_RE.search(m.group(0)):
            return m.start(), m.end()
    return None


def split_off_date(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> Tuple[str, str]:
    """
    Split an inline date expression off a line.

    Returns:
        (rest_of_line, date_text); date_text is '' when the line has no date
    """
    span = find_date_span(line, vocab)
    if span is None:
        return line.strip(), ""
    start, end = span
    rest = (line[:start].rstrip(" |,–—-:(") + " " + line[end:].lstrip(" |,–—-:)")).strip()
    rest = re.sub(r"\(\s*\)", "", rest).strip(" |,–—-:")
    return rest, line[start:end].strip()


def _split_halves(text: str, vocab: HeuristicVocabulary) -> Tuple[str, str]:
    # First separator whose two sides both look like dates; the dash inside "2021-03" is not one
    iso_dashes = {m.start() + 4 for m in ISO_MONTH_RE.finditer(text)}
    for m in _range_split_pattern(vocab).finditer(text):
        if text.find("-", m.start(), m.end()) in iso_dashes:
            continue
        left, right = text[:m.start()], text[m.end():]
        if has_date_token(left, vocab) and has_date_token(right, vocab):
            return left, right

    # No range operator: everything after the first year is the end half
    year = YEAR_RE.search(text)
    if year is None:
        return text, ""
    return text[:year.end()], text[year.end():]


def _first_month(text: str, vocab: HeuristicVocabulary) -> Optional[str]:
    """Earliest month in text (name, numeric MM/YYYY or ISO YYYY-MM), as 'MM'."""
    found: List[Tuple[int, str]] = []
    named = vocab.month_pattern().search(text)
    if named:
        found.append((named.start(), vocab.months[named.group(1).lower()]))
    numeric = NUMERIC_MONTH_RE.search(text)
    if numeric:
        found.append((numeric.start(), numeric.group(1).zfill(2)))
    iso = ISO_MONTH_RE.search(text)
    if iso:
        found.append((iso.start(), iso.group(1)))
    if not found:
        return None
    return min(found)[1]


def _first_year(text: str) -> Optional[str]:
    m = YEAR_RE.search(text)
    return m.group(1) if m else None


def parse_date_range(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> DateRange:
    """
    Convert a free-text date expression into a DateRange.

    Args:
        line: A line identified as a date (or a date span cut out of a longer line)
        vocab: Month table and present tokens

    Returns:
        DateRange with zero-padded 'YYYY-MM' strings. A single year gives a start
        date only; a line without any year gives an empty DateRange.

    Examples:
        "Jan 2024 to Present" -> 2024-01 .. '' (current)
        "2020-2022" -> 2020-01 .. 2022-12
        "Jan - Mar 2021" -> 2021-01 .. 2021-03
    """
    text = (line or "").strip()
    if not text or not YEAR_RE.search(text):
        return DateRange()

    is_current = bool(vocab.present_pattern().search(text))
    left, right = _split_halves(text, vocab)

    start_year, end_year = _first_year(left), _first_year(right)
    start_month, end_month = _first_month(left, vocab), _first_month(right, vocab)

    if start_year is None:
        if start_month is not None:
            # "Jan - Mar 2021": the start borrows the end's year
            start_year = end_year
        else:
            start_year, start_month = end_year, end_month
            end_year, end_month = None, None

    if is_current:
        end_year, end_month = None, None

    # Reversed ranges keep their own months when swapped
    if start_year and end_year and start_year > end_year:
        start_year, end_year = end_year, start_year
        start_month, end_month = end_month, start_month

    start_date = f"{start_year}-{start_month or '01'}" if start_year else ""
    end_date = f"{end_year}-{end_month or '12'}" if end_year else ""

    result = DateRange(start_date=start_date, end_date=end_date, is_current=is_current)
    logger.debug(f"Parsed date range {text!r} -> {result.start_date!r}..{result.end_date!r} current={result.is_current}")
    return result
