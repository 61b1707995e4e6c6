"""
Line classifiers: pure predicates over a single line.

Every predicate is total (any input, never raises) and fails closed: when a line
is ambiguous the answer is False. Under-segmenting an entry costs a little
information; a false positive splits or merges entries and corrupts them.
"""

import re
from typing import List

from profile_parser.core.date_parser import NUMERIC_MONTH_RE, RANGE_WORDS, YEAR_RE
from profile_parser.core.vocabulary import DEFAULT_VOCABULARY, HeuristicVocabulary


WORD_RE = re.compile(r"[A-Za-z][A-Za-z'’.&\-]*")
URL_RE = re.compile(r"https?://|www\.", re.IGNORECASE)
NUMBERED_MARKER_RE = re.compile(r"^\(?\d{1,2}[.)]\s+(?=\S)")

# Words that may sit next to a date without making the line prose
DATE_FILLER_WORDS = set(RANGE_WORDS) | {
    "from", "since", "expected", "graduated", "graduation", "class", "of", "and", "st", "nd", "rd", "th",
}

MAX_DATE_LINE_LENGTH = 60
MAX_DATE_RESIDUE_WORDS = 3
MAX_LOCATION_LENGTH = 50
MIN_HEADER_LENGTH = 5
MAX_HEADER_LENGTH = 100
MAX_WORD_SEPARATOR_LEFT_WORDS = 5


# ===== SHARED HELPERS =====

def words_of(line: str) -> List[str]:
    return WORD_RE.findall(line or "")


def capitalized_ratio(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> float:
    """
    Share of words starting with an upper-case letter, ignoring connectors
    ('of', 'and', 'the', ...). 0.0 for a line without words.
    """
    connectors = set(vocab.title_connectors)
    counted = [w for w in words_of(line) if w.lower() not in connectors]
    if not counted:
        return 0.0
    return sum(1 for w in counted if w[0].isupper()) / len(counted)


def is_all_caps(line: str) -> bool:
    letters = [c for c in line if c.isalpha()]
    return len(letters) > 3 and all(c.isupper() for c in letters)


def is_title_case(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    return capitalized_ratio(line, vocab) >= 0.5


def has_job_word(text: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    return bool(vocab.words_pattern("job_title_words").search(text or ""))


def has_company_suffix(text: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    return bool(vocab.words_pattern("company_suffixes").search(text or ""))


def is_sentence(line: str) -> bool:
    """Prose, not a header: more than 6 words and a closing period."""
    t = (line or "").strip()
    return len(t.split()) > 6 and t.endswith(".")


def find_separator(line: str, separator: str) -> int:
    """Index of separator in line; word separators match case-insensitively."""
    if separator.strip().isalpha():
        return line.lower().find(separator)
    return line.find(separator)


# ===== DATES =====

def looks_like_date(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    """
    Does the line hold a date or date range (and little else)?

    Accepts "Jan 2024", "2019 – 2021", "2019 to 2021", "Jan 2020 - Present",
    "03/2020 - 11/2022", "2019", "Expected 2025". Rejects GPA/ID lines and
    prose that merely mentions a year.
    """
    if not isinstance(line, str):
        return False
    t = line.strip()
    if not t or len(t) > MAX_DATE_LINE_LENGTH:
        return False
    if vocab.words_pattern("non_date_markers").search(t):
        return False

    years = YEAR_RE.findall(t)
    if not years:
        return False

    has_month = bool(vocab.month_pattern().search(t) or NUMERIC_MONTH_RE.search(t))
    has_present = bool(vocab.present_pattern().search(t))

    residue = YEAR_RE.sub(" ", t)
    residue = vocab.month_pattern().sub(" ", residue)
    residue = vocab.present_pattern().sub(" ", residue)
    residue_words = [w for w in words_of(residue) if w.lower().strip(".") not in DATE_FILLER_WORDS]

    if len(years) == 1 and not has_month and not has_present:
        # A bare year is only a date when nothing else is on the line
        return not residue_words
    return len(residue_words) <= MAX_DATE_RESIDUE_WORDS


# ===== LOCATIONS =====

def looks_like_place_name(part: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    """One comma-free place component: 'Belfast', 'Phoenix Valley', 'AZ', 'Stratford-upon-Avon'."""
    if not isinstance(part, str):
        return False
    tokens = part.split()
    if not tokens or len(tokens) > 4:
        return False
    if has_job_word(part, vocab) or has_company_suffix(part, vocab):
        return False
    connectors = set(vocab.title_connectors)
    for tok in tokens:
        if not re.fullmatch(r"[A-Za-z][A-Za-z'’.\-]*", tok):
            return False
        if not tok[0].isupper() and tok.lower() not in connectors:
            return False
    return True


def looks_like_location(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    """
    "City, Region" style lines: "Belfast, UK", "Austin, TX", "Stratford-upon-Avon, England".
    """
    if not isinstance(line, str):
        return False
    t = line.strip()
    if not t or len(t) >= MAX_LOCATION_LENGTH:
        return False
    if not 1 <= t.count(",") <= 3:
        return False
    if re.search(r"[\d@/|:]", t) or looks_like_date(t, vocab):
        return False
    return all(looks_like_place_name(part, vocab) for part in t.split(","))


# ===== BULLETS =====

def _bullet_pattern(vocab: HeuristicVocabulary):
    return vocab.compiled(
        "bullet",
        lambda: r"^[" + "".join(re.escape(g) for g in vocab.bullet_glyphs) + r"]+\s*(?=\S)",
    )


def looks_like_achievement_bullet(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    """Starts with a bullet glyph or a list marker such as '1.' or '2)'."""
    if not isinstance(line, str):
        return False
    t = line.strip()
    if not t:
        return False
    return bool(_bullet_pattern(vocab).match(t) or NUMBERED_MARKER_RE.match(t))


def strip_bullet(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> str:
    """Remove the leading bullet glyph / list marker."""
    t = (line or "").strip()
    t = _bullet_pattern(vocab).sub("", t, count=1)
    t = NUMBERED_MARKER_RE.sub("", t, count=1)
    return t.strip()


# ===== JOB HEADERS =====

def _separator_rule(t: str, vocab: HeuristicVocabulary) -> bool:
    for sep in vocab.job_separators:
        idx = find_separator(t, sep)
        if idx < 0:
            continue
        left, right = t[:idx].strip(), t[idx + len(sep):].strip()
        if not left or not right:
            continue
        if sep in vocab.word_separators:
            # "Engineer at Acme", never "worked at the plant" or "Responsible for Sales"
            if not (right[0].isupper() and left[0].isupper() and len(left.split()) <= MAX_WORD_SEPARATOR_LEFT_WORDS):
                continue
            if has_job_word(left, vocab) or has_job_word(right, vocab) or has_company_suffix(right, vocab):
                return True
            continue
        if (right[0].isupper() or right[0].isdigit()) and is_title_case(t, vocab):
            return True
    return False


def _prefix_rule(t: str, vocab: HeuristicVocabulary) -> bool:
    first = t.split()[0].strip(".,:;").lower()
    return first in vocab.job_title_prefixes and is_title_case(t, vocab)


def _format_rule(t: str, vocab: HeuristicVocabulary) -> bool:
    distinctive = is_all_caps(t) or is_title_case(t, vocab)
    return distinctive and (has_job_word(t, vocab) or has_company_suffix(t, vocab))


def looks_like_job_header(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    """
    Does the line open a job entry (title and/or employer)?

    Three ways in, all bounded to 5-100 characters:
      - an explicit separator: "Senior Engineer at Acme Corp", "Analyst | Globex"
      - a job-title prefix: "Senior Product Manager"
      - distinctive formatting plus a keyword: "ACME CORPORATION", "Principal Architect"

    Bullets, dates, URLs and sentences are never headers.
    """
    if not isinstance(line, str):
        return False
    t = line.strip()
    if not MIN_HEADER_LENGTH < len(t) < MAX_HEADER_LENGTH:
        return False
    if not words_of(t):
        return False
    if looks_like_achievement_bullet(t, vocab) or looks_like_date(t, vocab):
        return False
    if is_sentence(t) or URL_RE.search(t) or "@" in t.replace(" @ ", ""):
        return False
    return _separator_rule(t, vocab) or _prefix_rule(t, vocab) or _format_rule(t, vocab)
