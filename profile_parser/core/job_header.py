"""
Job-header line splitting shared by all employment strategies.

Turns one header line into (position, company, location, date_text):

    "Senior Engineer at Acme Corp"                     -> Senior Engineer / Acme Corp
    "Acme Corp - Senior Engineer"                      -> Senior Engineer / Acme Corp (swapped)
    "Site Lead | Director of Engineering: ESO, Belfast" -> Site Lead | Director of Engineering / ESO / Belfast
    "Acme Corp: Product Owner: London"                 -> Product Owner / Acme Corp / London
    "Data Analyst, Globex Ltd, Dublin, Ireland"        -> Data Analyst / Globex Ltd / Dublin, Ireland
    "Engineer | Acme  2019 - 2021"                     -> Engineer / Acme, date_text "2019 - 2021"
"""

import logging
from typing import List, NamedTuple, Tuple

from profile_parser.core.date_parser import split_off_date
from profile_parser.core.line_classifiers import (
    find_separator,
    has_company_suffix,
    has_job_word,
    looks_like_location,
)
from profile_parser.core.vocabulary import DEFAULT_VOCABULARY, HeuristicVocabulary

logger = logging.getLogger(__name__)

_EDGE_PUNCT = " |,-–—:;"


class JobHeaderParts(NamedTuple):
    position: str = ""
    company: str = ""
    location: str = ""
    date_text: str = ""


def _split_company_location(company: str) -> Tuple[str, str]:
    """'Acme Corp, Belfast, UK' -> ('Acme Corp', 'Belfast, UK')"""
    if "," not in company:
        return company.strip(), ""
    head, tail = company.split(",", 1)
    return head.strip(), tail.strip(" ,")


def _should_swap(left: str, right: str, vocab: HeuristicVocabulary) -> bool:
    """Left half reads like an employer and right half like a title."""
    if has_job_word(left, vocab):
        return False
    return has_job_word(right, vocab) or has_company_suffix(left, vocab)


def _split_complex(text: str) -> JobHeaderParts:
    """'Title | Title: Company, Location' (pipe-joined titles before a colon)."""
    title_part, company_part = text.split(":", 1)
    titles = [p.strip() for p in title_part.split("|") if p.strip()]
    company, location = _split_company_location(company_part.strip())
    return JobHeaderParts(" | ".join(titles), company, location)


def _split_on_separator(text: str, sep: str, vocab: HeuristicVocabulary) -> JobHeaderParts:
    if sep.strip() == "|":
        parts = [p.strip() for p in text.split("|") if p.strip()]
        left, right = parts[0], parts[1]
        extra = ", ".join(parts[2:])
    else:
        idx = find_separator(text, sep)
        left, right = text[:idx].strip(_EDGE_PUNCT), text[idx + len(sep):].strip(_EDGE_PUNCT)
        extra = ""

    if _should_swap(left, right, vocab):
        left, right = right, left

    company, location = _split_company_location(right)
    if extra and not location:
        location = extra
    return JobHeaderParts(left, company, location)


def _split_colon_form(parts: List[str], vocab: HeuristicVocabulary) -> JobHeaderParts:
    """'Company: Title[: Location]' or 'Title: Company[: Location]'."""
    first, second = parts[0], parts[1]
    location = ", ".join(parts[2:])
    if has_job_word(first, vocab) and not has_job_word(second, vocab):
        position, company = first, second
    else:
        company, position = first, second
    company, inline_location = _split_company_location(company)
    return JobHeaderParts(position, company, location or inline_location)


def _split_comma_form(parts: List[str], vocab: HeuristicVocabulary) -> JobHeaderParts:
    """'Title, Company[, Location]' / 'Company, City, Region'. Empty parts when unsure."""
    position_idx = next((i for i, p in enumerate(parts) if has_job_word(p, vocab)), None)
    company_idx = next(
        (i for i, p in enumerate(parts) if i != position_idx and has_company_suffix(p, vocab)),
        None,
    )
    if company_idx is None and position_idx is not None:
        company_idx = next((i for i in range(len(parts)) if i != position_idx), None)
    if company_idx is None:
        # No keywords at all: 'Globex, London, UK' only when the tail is a place
        tail = ", ".join(parts[1:])
        if looks_like_location(tail, vocab) or (len(parts) == 2 and looks_like_location(f"{parts[0]}, {parts[1]}", vocab)):
            return JobHeaderParts("", parts[0], tail)
        return JobHeaderParts()

    used = {company_idx} if position_idx is None else {company_idx, position_idx}
    location = ", ".join(p for i, p in enumerate(parts) if i not in used)
    position = parts[position_idx] if position_idx is not None else ""
    return JobHeaderParts(position, parts[company_idx], location)


def split_job_header(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> JobHeaderParts:
    """
    Split a header line into position, company, location and any inline date text.

    Never raises; fields that cannot be identified are empty strings.
    """
    if not isinstance(line, str) or not line.strip():
        return JobHeaderParts()

    text, date_text = split_off_date(line, vocab)
    text = text.strip(_EDGE_PUNCT)
    if not text:
        return JobHeaderParts(date_text=date_text)

    if "|" in text and ":" in text and text.index("|") < text.index(":"):
        return _split_complex(text)._replace(date_text=date_text)

    for sep in vocab.job_separators:
        idx = find_separator(text, sep)
        if idx <= 0:
            continue
        if text[:idx].strip(_EDGE_PUNCT) and text[idx + len(sep):].strip(_EDGE_PUNCT):
            return _split_on_separator(text, sep, vocab)._replace(date_text=date_text)

    if ":" in text:
        parts = [p.strip() for p in text.split(":") if p.strip()]
        if len(parts) >= 2:
            return _split_colon_form(parts, vocab)._replace(date_text=date_text)

    if "," in text:
        parts = [p.strip() for p in text.split(",") if p.strip()]
        if len(parts) >= 2:
            parts_found = _split_comma_form(parts, vocab)
            if parts_found.position or parts_found.company:
                return parts_found._replace(date_text=date_text)

    # Bare line: a title if it names a role, otherwise the employer
    if has_job_word(text, vocab):
        return JobHeaderParts(position=text, date_text=date_text)
    return JobHeaderParts(company=text, date_text=date_text)
