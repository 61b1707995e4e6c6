"""
Education parsing module for extracting education entries from resume lines.

Education blocks are line-local, so there is a single rule-based extractor
rather than competing strategies. Supported layouts:

    2012 - 2016                                   (date line first)
    BSc Computer Science, Queen's University Belfast, Belfast, UK

    Bachelor of Science in Business, University of Ulster
    Sept 2010 - June 2014                         (degree line first)

    2002 – 2005: BSc (Hons) Geography, University of Ulster, Coleraine
    Grade: 2:1                                    (inline date, grade line)

    QUEEN'S UNIVERSITY BELFAST: MSc Software Development
"""

import logging
import re
from typing import List, Optional, Tuple

from profile_parser.core.date_parser import parse_date_range, split_off_date
from profile_parser.core.line_classifiers import (
    capitalized_ratio,
    looks_like_achievement_bullet,
    looks_like_date,
    looks_like_location,
    looks_like_place_name,
    strip_bullet,
)
from profile_parser.core.schemas import DateRange, EducationEntry
from profile_parser.core.vocabulary import DEFAULT_VOCABULARY, HeuristicVocabulary

logger = logging.getLogger(__name__)


# ===== DEGREE PATTERNS =====

# Longer degree names first (longer match wins)
FULL_DEGREE_RE = re.compile(
    r"\b(?:(?:postgraduate|graduate)\s+)?(?:bachelor|master|doctor|associate)(?:'s)?"
    r"(?:\s+of\s+(?:business\s+administration|fine\s+arts|science|arts|engineering|laws|philosophy"
    r"|education|music|commerce|technology|nursing))?(?:\s+degree)?"
    r"|\b(?:postgraduate\s+)?(?:diploma|certificate)\b"
    r"|\bdoctorate\b",
    re.IGNORECASE,
)

# Abbreviations are matched case-sensitively so 'ma' or 'ba' inside prose never count
ABBREVIATED_DEGREE_RE = re.compile(
    r"(?<![A-Za-z])(?:B\.?Sc|M\.?Sc|B\.?Eng|M\.?Eng|MBA|M\.B\.A\.|Ph\.?D|DPhil|LLB|LLM|PGCE|PGDip"
    r"|HND|HNC|B\.S\.|B\.A\.|M\.S\.|M\.A\.|BS|BA|MS|MA|A[- ]Levels?|GCSEs?)(?![A-Za-z])\.?"
    r"(?:\s*\((?:Hons|Honours|Honors)\))?",
)

FIELD_AFTER_IN_RE = re.compile(r"^\s*(?:(?:in|of)\b|,|-|–)?\s*(?P<field>[A-Za-z][A-Za-z\s&/\-']*?)\s*$", re.IGNORECASE)

GRADE_LINE_RE = re.compile(r"^(?:GPA|CGPA|Grade|Classification|Result)s?(?:\s*:\s*|\s+)(?P<value>\S.*)$", re.IGNORECASE)
INLINE_GPA_RE = re.compile(r"\b(?:GPA|CGPA)\s*[:\-]?\s*(?P<value>\d\.\d{1,2}(?:\s*/\s*\d(?:\.\d{1,2})?)?)", re.IGNORECASE)

# ===== EDUCATION-SPECIFIC DETAIL KEYWORDS =====

EDUCATION_DETAIL_KEYWORDS = {
    "major:",
    "minor:",
    "focus in",
    "concentration",
    "honors:",
    "honours",
    "dean's list",
    "cum laude",
    "scholarship",
    "award",
    "relevant coursework",
    "coursework:",
    "dissertation",
    "thesis",
    "modules",
}

# Orphan lines that belong to no entry
JUNK_DETAIL_PATTERNS = [
    r"references available upon request",
    r"available upon request",
    r"^\d{4}$",
]


def has_degree_keyword(text: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    """
    Check if text contains a degree keyword.
    This is a STRONG signal that a line is education, not experience.
    """
    text = text or ""
    return bool(vocab.words_pattern("degree_keywords").search(text) or ABBREVIATED_DEGREE_RE.search(text))


def has_strong_degree_keyword(text: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    """Like has_degree_keyword, but two-letter abbreviations ('MA', 'BS') alone do not count."""
    text = text or ""
    if vocab.words_pattern("degree_keywords").search(text):
        return True
    return any(len(m.group(0).replace(".", "").strip()) > 2 for m in ABBREVIATED_DEGREE_RE.finditer(text))


def is_institution_keyword(text: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    return bool(vocab.words_pattern("institution_keywords").search(text or ""))


def is_education_detail(text: str) -> bool:
    text_lower = text.lower()
    return any(keyword in text_lower for keyword in EDUCATION_DETAIL_KEYWORDS)


def split_degree_field(text: str) -> Tuple[str, str]:
    """
    Split a degree phrase into (degree, field of study).

    Examples:
        "Bachelor of Science in Business" -> ("Bachelor of Science", "Business")
        "BSc (Hons) Geography" -> ("BSc (Hons)", "Geography")
        "M.S. in Engineering" -> ("M.S.", "Engineering")
        "PhD" -> ("PhD", "")
    """
    text = (text or "").strip()
    matches = [m for m in (FULL_DEGREE_RE.search(text), ABBREVIATED_DEGREE_RE.search(text)) if m]
    if not matches:
        return "", ""
    # Earliest match; on a tie the longer one
    match = min(matches, key=lambda m: (m.start(), -len(m.group(0))))
    degree = text[match.start():match.end()].strip()

    rest = text[match.end():]
    field_match = FIELD_AFTER_IN_RE.match(rest)
    field = field_match.group("field").strip() if field_match else ""
    if not field:
        # "Computer Science BSc"
        before = text[:match.start()].strip(" ,-–")
        field = before if before and capitalized_ratio(before) >= 0.5 else ""
    return degree, field


class EducationDraft:
    def __init__(self, date_range: Optional[DateRange] = None):
        self.institution = ""
        self.degree = ""
        self.field = ""
        self.location = ""
        self.date_range = date_range or DateRange()
        self.gpa = ""
        self.achievements: List[str] = []
        self.dated_first = date_range is not None

    @property
    def has_header(self) -> bool:
        return bool(self.institution or self.degree)

    def finalize(self) -> Optional[EducationEntry]:
        if not self.has_header:
            return None
        return EducationEntry(
            institution=self.institution,
            degree=self.degree,
            field=self.field,
            location=self.location,
            date_range=self.date_range,
            gpa=self.gpa,
            achievements=list(self.achievements),
        )


def parse_education_line(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> EducationDraft:
    """
    Parse one 'Degree, Institution, Location' style line (any order, optional
    inline date) into a draft.
    """
    draft = EducationDraft()
    text, date_text = split_off_date(line, vocab)
    if date_text:
        draft.date_range = parse_date_range(date_text, vocab)

    gpa = INLINE_GPA_RE.search(text)
    if gpa:
        draft.gpa = gpa.group("value").strip()
        text = (text[:gpa.start()] + text[gpa.end():]).strip(" ,;-–")

    # "BSc Computing at Ulster University" reads like "BSc Computing, Ulster University"
    text = re.sub(r"\s+(?:at|@)\s+", ", ", text, flags=re.IGNORECASE)

    if ":" in text:
        # "UNIVERSITY: Degree[, Location]"
        head, tail = text.split(":", 1)
        parts = [head.strip()] + [p.strip() for p in tail.split(",")]
    else:
        parts = [p.strip() for p in text.split(",")]
    parts = [p for p in parts if p]

    unknown: List[str] = []
    for part in parts:
        if not draft.degree and has_degree_keyword(part, vocab) and not is_institution_keyword(part, vocab):
            draft.degree, draft.field = split_degree_field(part)
        elif not draft.institution and is_institution_keyword(part, vocab):
            draft.institution = part
        else:
            unknown.append(part)

    if not draft.degree and draft.institution and has_degree_keyword(draft.institution, vocab):
        # "MSc Trinity College Dublin": degree and institution share one part
        degree, _ = split_degree_field(draft.institution)
        if degree and degree != draft.institution:
            remainder = draft.institution.split(degree, 1)[1].strip(" ,-–")
            draft.degree = degree
            draft.institution = re.sub(r"^(?:in|of)\s+", "", remainder) or draft.institution

    if unknown and not draft.institution and draft.degree:
        draft.institution = unknown.pop(0)
    if unknown:
        places = [p for p in unknown if looks_like_place_name(p, vocab)]
        draft.location = ", ".join(places)
        for leftover in unknown:
            if leftover not in places:
                draft.achievements.append(leftover)
    return draft


def _is_entry_line(line: str, vocab: HeuristicVocabulary) -> bool:
    if looks_like_achievement_bullet(line, vocab):
        return False
    return has_degree_keyword(line, vocab) or is_institution_keyword(line, vocab)


def _is_junk(detail: str) -> bool:
    return any(re.search(p, detail.lower()) for p in JUNK_DETAIL_PATTERNS)


def extract_education(
    lines: List[str],
    vocab: HeuristicVocabulary = DEFAULT_VOCABULARY,
) -> Tuple[List[EducationEntry], List[str]]:
    """
    Extract education entries from the lines of an Education section.

    Args:
        lines: Section content lines (header excluded)
        vocab: Keyword tables

    Returns:
        (entries, warnings) - warnings describe details that were dropped
    """
    drafts: List[EducationDraft] = []
    warnings: List[str] = []
    current: Optional[EducationDraft] = None

    for raw in lines:
        line = raw.strip()
        if not line:
            continue

        grade = GRADE_LINE_RE.match(strip_bullet(line, vocab))
        if grade and current is not None and not current.gpa:
            current.gpa = grade.group("value").strip()
            continue

        if looks_like_achievement_bullet(line, vocab):
            detail = strip_bullet(line, vocab)
            if current is not None and detail:
                current.achievements.append(detail)
            continue

        if looks_like_date(line, vocab):
            if current is not None and current.has_header and current.date_range.is_empty and not current.dated_first:
                # Degree line came first; this is its date
                current.date_range = parse_date_range(line, vocab)
            else:
                current = EducationDraft(parse_date_range(line, vocab))
                drafts.append(current)
            continue

        if _is_entry_line(line, vocab):
            parsed = parse_education_line(line, vocab)
            if current is not None and current.dated_first and not current.has_header:
                # Date line came first; this line names the degree
                parsed.date_range = current.date_range
                parsed.dated_first = True
                drafts[-1] = parsed
            else:
                drafts.append(parsed)
            current = parsed
            continue

        if current is None:
            continue
        if current.dated_first and not current.has_header and capitalized_ratio(line, vocab) >= 0.5:
            # "2012 - 2016" then a header line without any keyword
            parsed = parse_education_line(line, vocab)
            if not parsed.institution and not parsed.degree:
                parsed.institution = line
                parsed.location = ""
                parsed.achievements = []
            parsed.date_range, parsed.dated_first = current.date_range, True
            drafts[-1] = current = parsed
            continue
        if not current.location and looks_like_location(line, vocab):
            current.location = line
            continue
        if is_education_detail(line) or len(line) > 5:
            current.achievements.append(line)

    entries: List[EducationEntry] = []
    for draft in drafts:
        kept = []
        for detail in draft.achievements:
            if _is_junk(detail):
                warnings.append(f"Removed junk detail from education entry: {detail}")
            else:
                kept.append(detail)
        draft.achievements = kept
        entry = draft.finalize()
        if entry is not None:
            entries.append(entry)

    logger.debug(f"Extracted {len(entries)} education entries")
    return entries, warnings


def scan_for_education(
    lines: List[str],
    vocab: HeuristicVocabulary = DEFAULT_VOCABULARY,
) -> Tuple[List[EducationEntry], List[str]]:
    """
    Fallback for resumes without an Education header: pick up lines that
    carry a degree keyword (plus an immediately following date line).
    """
    picked: List[str] = []
    for i, raw in enumerate(lines):
        line = raw.strip()
        if looks_like_achievement_bullet(line, vocab) or not has_strong_degree_keyword(line, vocab):
            continue
        if len(line) > 120:
            continue
        picked.append(line)
        if i + 1 < len(lines) and looks_like_date(lines[i + 1], vocab):
            picked.append(lines[i + 1].strip())
    if not picked:
        return [], []
    logger.debug(f"No Education section; scanning found {len(picked)} candidate lines")
    return extract_education(picked, vocab)
