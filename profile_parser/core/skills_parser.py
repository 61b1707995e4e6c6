"""
Skills extractor.

Skills sections are flat lists: comma/pipe/bullet separated tokens, sometimes
grouped under "Label:" subheadings and sometimes carrying a level
("Python (Expert)", "French - Fluent"). Tokens are matched against the curated
vocabulary for canonical spelling and category; leftovers are kept as free-form
skills and categorized by keyword hints.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from profile_parser.core.line_classifiers import strip_bullet
from profile_parser.core.schemas import SkillEntry
from profile_parser.core.vocabulary import DEFAULT_VOCABULARY, HeuristicVocabulary

logger = logging.getLogger(__name__)

SPLIT_RE = re.compile(r"\s*[,;|•·●▪]\s*")
INLINE_SKILLS_RE = re.compile(r"^(?:key\s+|technical\s+|core\s+)?skills\s*[:\-–]\s*(?P<rest>.+)$", re.IGNORECASE)
SUBHEADING_RE = re.compile(r"^(?P<label>[A-Za-z][A-Za-z &/]{1,40}):\s*(?P<rest>.+)$")
LEVEL_SUFFIX_RE = re.compile(r"^(?P<name>.+?)\s*(?:\((?P<paren>[^)]*)\)|\s[-–:]\s*(?P<dash>[A-Za-z ]+))$")

MAX_TOKEN_WORDS = 4
MAX_TOKEN_LENGTH = 40


def _category_for(name: str, vocab: HeuristicVocabulary) -> str:
    lower = name.lower()
    for known, category in vocab.skill_vocabulary.items():
        if known.lower() == lower:
            return category
    if any(hint in lower for hint in vocab.skill_category_hints.get("technical", [])):
        return "technical"
    if any(lang.lower() in lower for lang in vocab.spoken_languages):
        return "language"
    if any(hint in lower for hint in vocab.skill_category_hints.get("soft", [])):
        return "soft"
    return "other"


def _canonical(name: str, vocab: HeuristicVocabulary) -> str:
    lower = name.lower()
    for known in list(vocab.skill_vocabulary) + list(vocab.spoken_languages):
        if known.lower() == lower:
            return known
    return name


def _level_for(text: str, vocab: HeuristicVocabulary) -> Optional[str]:
    lower = text.lower()
    for level, hints in vocab.skill_level_hints.items():
        if any(re.search(rf"\b{re.escape(h)}\b", lower) for h in hints):
            return level
    return None


def _split_level(token: str, vocab: HeuristicVocabulary) -> Tuple[str, Optional[str]]:
    """'Python (Expert)' -> ('Python', 'expert'); 'Node.js (v18)' is left alone."""
    m = LEVEL_SUFFIX_RE.match(token)
    if not m:
        return token, None
    level = _level_for(m.group("paren") or m.group("dash") or "", vocab)
    if level is None:
        return token, None
    return m.group("name").strip(), level


def _vocabulary_hits(text: str, vocab: HeuristicVocabulary) -> List[str]:
    """Known skills mentioned inside a prose token, in order of appearance."""
    hits = []
    for known in list(vocab.skill_vocabulary) + list(vocab.spoken_languages):
        # Single letters ("C", "R") are too ambiguous inside prose
        if len(known) < 2:
            continue
        m = re.search(rf"(?<![A-Za-z0-9]){re.escape(known)}(?![A-Za-z0-9+#])", text, re.IGNORECASE)
        if m:
            hits.append((m.start(), known))
    return [name for _, name in sorted(hits)]


def _tokens_from_line(line: str, vocab: HeuristicVocabulary) -> List[str]:
    text = strip_bullet(line, vocab)
    inline = INLINE_SKILLS_RE.match(text)
    if inline:
        text = inline.group("rest")
    else:
        sub = SUBHEADING_RE.match(text)
        if sub and len(sub.group("label").split()) <= 4:
            text = sub.group("rest")
    return [t.strip(" :-–").rstrip(".") for t in SPLIT_RE.split(text)]


def extract_skills(
    lines: Iterable[str],
    vocab: HeuristicVocabulary = DEFAULT_VOCABULARY,
) -> List[SkillEntry]:
    """
    Extract skills from section lines (and any inline "Skills: a, b" lines).

    Args:
        lines: Skills section content plus inline skills lines found elsewhere
        vocab: Skill vocabulary, spoken languages, category and level hints

    Returns:
        SkillEntry list, deduplicated case-insensitively, in order of appearance

    Examples:
        ["Python, SQL, Leadership"] -> Python/technical, SQL/technical, Leadership/soft
    """
    skills: List[SkillEntry] = []
    seen = set()

    def add(name: str, level: Optional[str] = None) -> None:
        name = _canonical(name.strip(), vocab)
        key = name.lower()
        if not name or key in seen:
            return
        seen.add(key)
        skills.append(SkillEntry(name=name, category=_category_for(name, vocab), level=level or "intermediate"))

    for line in lines:
        for token in _tokens_from_line(line, vocab):
            if not token:
                continue
            name, level = _split_level(token, vocab)
            too_long = len(name.split()) > MAX_TOKEN_WORDS or len(name) > MAX_TOKEN_LENGTH
            if too_long:
                for hit in _vocabulary_hits(name, vocab):
                    add(hit)
                continue
            if len(name) < 2 and name.lower() not in {k.lower() for k in vocab.skill_vocabulary}:
                continue
            add(name, level)

    logger.debug(f"Extracted {len(skills)} skills")
    return skills


def find_inline_skill_lines(lines: Iterable[str]) -> List[str]:
    """Lines such as 'Skills: Python, SQL' that sit outside a Skills section."""
    return [line for line in lines if INLINE_SKILLS_RE.match(strip_bullet(line))]
