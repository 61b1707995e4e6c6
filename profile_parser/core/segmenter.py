"""
Document segmenter: RawDocument -> ordered, non-overlapping Sections.

Sections tile the document: each Section's range starts at its own header line
(or at 0 for the untitled leading block) and ends where the next one starts.
"""

import logging
import re
from typing import List, Optional

from profile_parser.core.line_classifiers import (
    capitalized_ratio,
    has_company_suffix,
    has_job_word,
    is_all_caps,
    looks_like_achievement_bullet,
)
from profile_parser.core.schemas import RawDocument, Section
from profile_parser.core.trace import NullTraceSink, TraceEvent, TraceSink
from profile_parser.core.vocabulary import DEFAULT_VOCABULARY, HeuristicVocabulary

logger = logging.getLogger(__name__)

MAX_CONTAINED_HEADER_LENGTH = 50
MAX_HEADER_EXTRA_WORDS = 3
UNTITLED_SECTION = "Other"


def match_section_header(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> Optional[str]:
    """
    Return the section name if the line is a section header, else None.

    A line is a header when its upper-cased form equals a keyword, or when it is
    short (< 50 chars), has no comma and contains a keyword. The longest keyword
    wins, so "PERSONAL INTERESTS" maps to Interests rather than Personal.

    Examples:
        "EMPLOYMENT HISTORY" -> "Employment"
        "Education:" -> "Education"
        "Director of Education Programs" -> None (job title, not a header)
    """
    if not isinstance(line, str):
        return None
    t = line.strip().rstrip(":").strip()
    upper = t.upper()
    if not upper:
        return None

    keyword_map = vocab.all_section_keywords()
    if upper in keyword_map:
        return keyword_map[upper]

    if len(t) >= MAX_CONTAINED_HEADER_LENGTH or "," in t or ":" in t:
        return None
    if re.search(r"[\d@/]", t) or t.endswith(".") or looks_like_achievement_bullet(t, vocab):
        return None
    if not (is_all_caps(t) or capitalized_ratio(t, vocab) >= 0.5):
        return None

    best = None
    for keyword, name in keyword_map.items():
        if re.search(rf"(?<![A-Z0-9]){re.escape(keyword)}(?![A-Z0-9])", upper):
            if best is None or len(keyword) > len(best[0]):
                best = (keyword, name)
    if best is None:
        return None

    # "Director of Education Programs": the rest of the line is a job title
    outside = re.sub(re.escape(best[0]), " ", upper)
    if has_job_word(outside, vocab) or has_company_suffix(t, vocab):
        return None
    if len(outside.split()) > MAX_HEADER_EXTRA_WORDS:
        return None
    return best[1]


def segment_document(
    document: RawDocument,
    vocab: HeuristicVocabulary = DEFAULT_VOCABULARY,
    trace: Optional[TraceSink] = None,
) -> List[Section]:
    """
    Split the document into named sections in document order.

    Lines before the first header form an untitled 'Other' section, so the
    union of all returned ranges is exactly [0, len(document)).
    """
    trace = trace or NullTraceSink()
    sections: List[Section] = []
    if not document:
        return sections

    current_name, current_title, current_start = UNTITLED_SECTION, "", 0
    for i, line in enumerate(document):
        name = match_section_header(line, vocab)
        if name is None:
            continue
        if current_title or i > current_start:
            sections.append(Section(name=current_name, title=current_title, start_line=current_start, end_line=i))
        logger.debug(f"Section header at line {i}: {line!r} -> {name}")
        current_name, current_title, current_start = name, line.strip(), i

    sections.append(Section(name=current_name, title=current_title, start_line=current_start, end_line=len(document)))

    for section in sections:
        trace.record(TraceEvent(name="segmenter.section", data=section.model_dump()))
    return sections


def section_lines(document: RawDocument, sections: List[Section], name: str) -> List[str]:
    """Content lines (headers excluded) of every section with the given name."""
    lines: List[str] = []
    for section in sections:
        if section.name == name:
            lines.extend(section.content(document))
    return lines


def has_section(sections: List[Section], name: str) -> bool:
    return any(s.name == name for s in sections)


def employment_lines(document: RawDocument, sections: List[Section]) -> List[str]:
    """
    Lines the employment strategies run over.

    The Employment sections when the document has any; otherwise the unclaimed
    region (every 'Other' section), since many resumes never title their
    work history.
    """
    if has_section(sections, "Employment"):
        return section_lines(document, sections, "Employment")
    logger.debug("No Employment header found; falling back to unclaimed lines")
    return section_lines(document, sections, UNTITLED_SECTION)
