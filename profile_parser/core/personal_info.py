"""
Personal-info extractor.

Contact fields are pulled from the whole document with independent regexes
(email, phone, links); the name and location come from the header block at
the top of the resume, where they nearly always live.
"""

import logging
import re
from typing import List, Optional, Tuple

from profile_parser.core.line_classifiers import has_job_word, is_all_caps, looks_like_location
from profile_parser.core.schemas import PersonalInfo, RawDocument, Section
from profile_parser.core.segmenter import UNTITLED_SECTION, match_section_header, section_lines, segment_document
from profile_parser.core.text_normalization import despace_if_needed
from profile_parser.core.vocabulary import DEFAULT_VOCABULARY, HeuristicVocabulary

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"\b[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}\b", re.IGNORECASE)
# Runs of digits and phone punctuation; validated by digit count afterwards
PHONE_CANDIDATE_RE = re.compile(r"(?<![\w@/])\+?\(?\d[\d\s().\-]{4,}\d(?![\w@/%])")
YEAR_GROUP_RE = re.compile(r"(?:19|20)\d{2}")
URL_RE = re.compile(r"\bhttps?://[^\s)>\]|,]+[^\s)>\]|,.]", re.IGNORECASE)
WWW_RE = re.compile(r"(?<![/\w])www\.[^\s)>\]|,]+[^\s)>\]|,.]", re.IGNORECASE)
LINKEDIN_RE = re.compile(r"\b(?:https?://)?(?:www\.)?linkedin\.com/[^\s)>\]|,]+[^\s)>\]|,.]", re.IGNORECASE)
GITHUB_RE = re.compile(r"\b(?:https?://)?(?:www\.)?github\.com/[A-Za-z0-9_.-]+[A-Za-z0-9_-]", re.IGNORECASE)
NAME_TOKEN_RE = re.compile(r"[A-Za-z][A-Za-z.'\-]*")
SEGMENT_SPLIT_RE = re.compile(r"\s+[|•·]\s+")
LOCATION_LABEL_RE = re.compile(r"^(?:location|address|based in|lives in)\s*[:\-]?\s*", re.IGNORECASE)

MIN_PHONE_DIGITS = 7
MAX_PHONE_DIGITS = 15
NAME_WINDOW_ABOVE_EMAIL = 3
NAME_TOP_LINES = 4
HEADER_BLOCK_LINES = 8


# ===== CONTACT ANCHORS =====

def find_email(line: str) -> Optional[str]:
    """Email in a line, tolerating PDF letter-spacing ('j o h n @ x . c o m')."""
    m = EMAIL_RE.search(line) or EMAIL_RE.search(despace_if_needed(line))
    return m.group(0) if m else None


def _is_year_run(candidate: str) -> bool:
    """'2019 - 2021' and '2020' are dates, not phone numbers."""
    groups = re.findall(r"\d+", candidate)
    return all(YEAR_GROUP_RE.fullmatch(g) for g in groups)


def find_phone(line: str) -> Optional[str]:
    """
    First run of 7-15 digits (after dropping punctuation) that is not a year or
    year range. The phone is returned as written, minus surrounding spaces.

    Examples:
        "Tel: +44 (0)28 9012 3456" -> "+44 (0)28 9012 3456"
        "2019 - 2021" -> None
    """
    for m in PHONE_CANDIDATE_RE.finditer(line):
        candidate = m.group(0).strip()
        digits = re.sub(r"\D", "", candidate)
        if not MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS:
            continue
        if _is_year_run(candidate):
            continue
        return candidate
    return None


def with_scheme(url: str) -> str:
    url = url.strip().rstrip("/")
    if not re.match(r"^https?://", url, re.IGNORECASE):
        url = "https://" + url
    return url


def find_links(document: RawDocument) -> Tuple[str, str, str]:
    """(linkedin, github, website); each prefixed with https:// when missing."""
    linkedin, github, website = "", "", ""
    for line in document:
        if not linkedin:
            m = LINKEDIN_RE.search(line)
            if m:
                linkedin = with_scheme(m.group(0))
        if not github:
            m = GITHUB_RE.search(line)
            if m:
                github = with_scheme(m.group(0))
        if not website:
            for rx in (URL_RE, WWW_RE):
                for m in rx.finditer(line):
                    url = m.group(0)
                    if "linkedin.com" in url.lower() or "github.com" in url.lower():
                        continue
                    website = with_scheme(url)
                    break
                if website:
                    break
    return linkedin, github, website


# ===== NAME =====

def _title_name_token(token: str) -> str:
    # "O'NEILL" -> "O'Neill", "MARY-JANE" -> "Mary-Jane"
    return re.sub(r"[A-Za-z]+", lambda m: m.group(0).capitalize(), token)


def split_name(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> Optional[Tuple[str, str]]:
    """
    (first, last) when the first segment of the line reads as a person's name:
    2-4 alphabetic tokens, capitalized, no '@', not a header or job title.
    """
    segment = SEGMENT_SPLIT_RE.split(line.strip())[0].strip()
    if not segment or "@" in segment or any(ch.isdigit() for ch in segment):
        return None
    if segment.lower() in vocab.name_blacklist or match_section_header(segment, vocab):
        return None
    if has_job_word(segment, vocab):
        return None
    tokens = segment.split()
    if not 2 <= len(tokens) <= 4:
        return None
    if not all(NAME_TOKEN_RE.fullmatch(t) for t in tokens):
        return None
    if is_all_caps(segment):
        tokens = [_title_name_token(t) for t in tokens]
    elif not all(t[0].isupper() for t in tokens):
        return None
    return tokens[0], " ".join(tokens[1:])


def _name_candidate_lines(document: RawDocument, email_idx: Optional[int]) -> List[str]:
    """Email line and the 1-3 lines above it (closest first), then the top lines."""
    candidates: List[str] = []
    if email_idx is not None:
        start = max(0, email_idx - NAME_WINDOW_ABOVE_EMAIL)
        candidates.extend(document[j] for j in range(email_idx, start - 1, -1))
    candidates.extend(document[:NAME_TOP_LINES])
    return candidates


# ===== LOCATION =====

def _header_block(document: RawDocument, sections: List[Section]) -> List[str]:
    if sections and sections[0].name == UNTITLED_SECTION and not sections[0].title:
        return list(document[:min(sections[0].end_line, HEADER_BLOCK_LINES)])
    return list(document[:min(len(document), 3)])


def find_location(lines: List[str], vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> str:
    for line in lines:
        for segment in SEGMENT_SPLIT_RE.split(line):
            segment = LOCATION_LABEL_RE.sub("", segment.strip())
            if looks_like_location(segment, vocab):
                return segment
    return ""


def extract_personal_info(
    document: RawDocument,
    sections: Optional[List[Section]] = None,
    vocab: HeuristicVocabulary = DEFAULT_VOCABULARY,
) -> PersonalInfo:
    """
    Extract contact details, name, location, links and overview.

    Args:
        document: Normalized lines of the whole resume
        sections: Segmenter output (computed when omitted)
        vocab: Keyword tables

    Returns:
        PersonalInfo; fields not found stay empty strings
    """
    if sections is None:
        sections = segment_document(document, vocab)
    info = PersonalInfo()

    email_idx = None
    for idx, line in enumerate(document):
        email = find_email(line)
        if email:
            info.email = email
            email_idx = idx
            break

    # Phone is searched per line with emails and URLs blanked so their digits
    # can't leak into the match
    for line in document:
        scrubbed = line
        for rx in (EMAIL_RE, LINKEDIN_RE, GITHUB_RE, URL_RE, WWW_RE):
            scrubbed = rx.sub(" ", scrubbed)
        phone = find_phone(scrubbed)
        if phone:
            info.phone = phone
            break

    for line in _name_candidate_lines(document, email_idx):
        name = split_name(line, vocab)
        if name:
            info.first_name, info.last_name = name
            break

    info.location = find_location(_header_block(document, sections), vocab) or find_location(
        section_lines(document, sections, "Personal"), vocab
    )
    info.linkedin, info.github, info.website = find_links(document)
    info.professional_overview = " ".join(section_lines(document, sections, "Summary")).strip()

    logger.debug(
        f"Personal info: name={info.first_name!r} {info.last_name!r}, email={bool(info.email)}, "
        f"phone={bool(info.phone)}, location={info.location!r}"
    )
    return info
