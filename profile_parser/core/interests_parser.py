"""
Interests extractor.

Handles list lines ("Running, Golf, Photography"), lead-ins ("Interests
include: reading, hiking and travel."), volunteering/meet-up lines and prose
("I enjoy cycling and cooking") through the interest vocabulary.
"""

import logging
import re
from typing import Iterable, List, Optional

from profile_parser.core.line_classifiers import strip_bullet
from profile_parser.core.schemas import InterestEntry
from profile_parser.core.vocabulary import DEFAULT_VOCABULARY, HeuristicVocabulary

logger = logging.getLogger(__name__)

LEAD_IN_RE = re.compile(
    r"^(?:my\s+)?(?:personal\s+)?(?:interests?|hobbies)(?:\s+(?:and|&)\s+(?:interests?|hobbies))?"
    r"(?:\s+includes?)?\s*[:\-–]?\s+",
    re.IGNORECASE,
)
MEETUP_RE = re.compile(r"^meet\s*-?\s*ups?\s*[:\-–]\s*(?P<rest>.+)$", re.IGNORECASE)
VOLUNTEER_RE = re.compile(r"^(?:volunteering|volunteer\s+work|volunteer|charity\s+work)\s*[:\-–]\s*(?P<rest>.+)$", re.IGNORECASE)
LABEL_RE = re.compile(r"^[A-Za-z][A-Za-z ]{1,30}:\s")
SPLIT_RE = re.compile(r"\s*[,;|•·●]\s*")
AND_RE = re.compile(r"\s+(?:and|&|or)\s+", re.IGNORECASE)
# Emoji and pictographs that decorate meet-up lines
SYMBOL_RE = re.compile("[\u2600-\u27bf\U0001f300-\U0001faff\ufe0f]")

MAX_ITEM_WORDS = 5
MAX_VOLUNTEER_WORDS = 8


def _canonical(name: str, vocab: HeuristicVocabulary) -> Optional[str]:
    lower = name.lower()
    for known in vocab.interest_vocabulary:
        if known.lower() == lower:
            return known
    return None


def _category_for(name: str, vocab: HeuristicVocabulary) -> str:
    known = _canonical(name, vocab)
    if known:
        return vocab.interest_vocabulary[known]
    lower = name.lower()
    if any(hint in lower for hint in vocab.volunteer_hints):
        return "volunteer"
    return "hobby"


def _vocabulary_hits(text: str, vocab: HeuristicVocabulary) -> List[str]:
    hits = []
    for known in vocab.interest_vocabulary:
        m = re.search(rf"\b{re.escape(known)}\b", text, re.IGNORECASE)
        if m:
            hits.append((m.start(), known))
    return [name for _, name in sorted(hits)]


def _split_items(text: str) -> List[str]:
    items: List[str] = []
    for token in SPLIT_RE.split(text.strip().rstrip(".!")):
        token = re.sub(r"^(?:and|or)\s+", "", token.strip(), flags=re.IGNORECASE)
        halves = AND_RE.split(token)
        if len(halves) > 1 and all(0 < len(h.split()) <= 3 for h in halves):
            items.extend(h.strip() for h in halves)
        elif token:
            items.append(token)
    return items


class _Collector:
    def __init__(self, vocab: HeuristicVocabulary):
        self.vocab = vocab
        self.entries: List[InterestEntry] = []
        self.seen = set()

    def add(self, name: str, category: Optional[str] = None, description: str = "") -> None:
        name = SYMBOL_RE.sub("", name).strip(" .:-–")
        if len(name) < 2:
            return
        name = _canonical(name, self.vocab) or (name[0].upper() + name[1:])
        key = name.lower()
        if key in self.seen:
            return
        self.seen.add(key)
        self.entries.append(InterestEntry(
            name=name,
            category=category or _category_for(name, self.vocab),
            description=description,
        ))


def extract_interests(
    lines: Iterable[str],
    vocab: HeuristicVocabulary = DEFAULT_VOCABULARY,
    strict: bool = False,
) -> List[InterestEntry]:
    """
    Extract interests from section lines.

    Args:
        lines: Interests section content (or Personal section content)
        vocab: Interest vocabulary and volunteer hints
        strict: Only take explicit interest lines and vocabulary hits. Used
            for Personal sections, whose other lines are contact details.

    Returns:
        InterestEntry list, deduplicated case-insensitively
    """
    collector = _Collector(vocab)

    for raw in lines:
        line = strip_bullet(raw, vocab)
        if not line:
            continue

        meetup = MEETUP_RE.match(line)
        if meetup:
            collector.add(meetup.group("rest"), "volunteer", "Professional community involvement")
            continue

        volunteer = VOLUNTEER_RE.match(line)
        if volunteer:
            for item in _split_items(volunteer.group("rest")):
                collector.add(item, "volunteer")
            continue

        lead_in = LEAD_IN_RE.match(line)
        if lead_in:
            body = line[lead_in.end():]
        elif strict or LABEL_RE.match(line):
            # Contact details, "Nationality: Irish" and the like
            for hit in _vocabulary_hits(line, vocab):
                collector.add(hit)
            continue
        else:
            body = line

        items = _split_items(body)
        is_list = bool(SPLIT_RE.search(body)) or len(body.split()) <= MAX_ITEM_WORDS
        if not is_list:
            # Prose: "I enjoy cycling and cooking at weekends."
            hits = _vocabulary_hits(body, vocab)
            if not hits and len(body.split()) <= MAX_VOLUNTEER_WORDS and _category_for(body, vocab) == "volunteer":
                collector.add(body, "volunteer")
            for hit in hits:
                collector.add(hit)
            continue

        for item in items:
            if len(item.split()) <= MAX_ITEM_WORDS:
                collector.add(item)
            else:
                for hit in _vocabulary_hits(item, vocab):
                    collector.add(hit)

    logger.debug(f"Extracted {len(collector.entries)} interests")
    return collector.entries
