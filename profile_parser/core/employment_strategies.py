"""
Employment extraction strategies.

Each strategy is one self-contained assumption about how a resume lays out its
work history. They all read the same immutable lines and write only to their
own result, so the Arbitrator can run them in any order and keep the best.

  SequentialHeaderStrategy  "Title at Company" header, then a date line, then content
  DateLedStrategy           date line first, then the title/company line
  CompanyLedStrategy        "Company, City, ST" header, then one or more title lines
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from profile_parser.core.date_parser import parse_date_range, split_off_date
from profile_parser.core.job_header import split_job_header
from profile_parser.core.line_classifiers import (
    capitalized_ratio,
    has_job_word,
    is_all_caps,
    looks_like_achievement_bullet,
    looks_like_date,
    looks_like_job_header,
    looks_like_location,
    looks_like_place_name,
    strip_bullet,
)
from profile_parser.core.schemas import DateRange, EmploymentEntry, StrategyResult
from profile_parser.core.vocabulary import DEFAULT_VOCABULARY, HeuristicVocabulary

logger = logging.getLogger(__name__)

# Content lines this short are layout noise, not narrative
MIN_DESCRIPTION_LINE_LENGTH = 15
MAX_TITLE_WORDS = 6
MAX_COMPANY_HEADER_LENGTH = 150
MAX_BARE_COMPANY_LENGTH = 40
MAX_BARE_COMPANY_WORDS = 4

TITLE_LINE_RE = re.compile(r"^[A-Z][A-Za-z\s&'/.-]*$")


class EntryDraft:
    """
    Mutable working copy of one employment entry while a strategy walks lines.

    Drafts never leave a strategy: finalize() produces the immutable
    EmploymentEntry, or None when the draft has neither position nor company.
    """

    def __init__(self, position: str = "", company: str = "", location: str = "", date_range: Optional[DateRange] = None):
        self.position = position
        self.company = company
        self.location = location
        self.date_range = date_range or DateRange()
        self.description: List[str] = []
        self.achievements: List[str] = []

    @property
    def has_content(self) -> bool:
        return bool(self.description or self.achievements)

    @property
    def wants_company(self) -> bool:
        """A title-only header with nothing under it yet: the next line may name the employer."""
        return bool(self.position) and not self.company and not self.has_content and self.date_range.is_empty

    def absorb(self, line: str, vocab: HeuristicVocabulary) -> None:
        """Attach one content line: achievement, late date, location or narrative."""
        if looks_like_achievement_bullet(line, vocab):
            text = strip_bullet(line, vocab)
            if text:
                self.achievements.append(text)
            return
        if looks_like_date(line, vocab):
            # Dates never enter the description
            if self.date_range.is_empty:
                self.date_range = parse_date_range(line, vocab)
            return
        if not self.location and looks_like_location(line, vocab):
            self.location = line.strip()
            return
        if len(line.strip()) > MIN_DESCRIPTION_LINE_LENGTH:
            self.description.append(line.strip())

    def finalize(self) -> Optional[EmploymentEntry]:
        if not (self.position or self.company):
            return None
        return EmploymentEntry(
            position=self.position,
            company=self.company,
            location=self.location,
            date_range=self.date_range,
            description=" ".join(self.description).strip(),
            achievements=list(self.achievements),
        )


class EmploymentStrategy(ABC):
    """One way of reading an employment section. Must never raise on bad input."""

    name: str = "strategy"

    def __init__(self, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY):
        self.vocab = vocab

    @abstractmethod
    def parse(self, lines: Sequence[str]) -> StrategyResult:
        ...

    def _result(self, drafts: List[EntryDraft]) -> StrategyResult:
        entries = [e for e in (d.finalize() for d in drafts) if e is not None]
        logger.debug(f"{self.name}: {len(entries)} entries from {len(drafts)} drafts")
        return StrategyResult(strategy=self.name, entries=entries)


def looks_like_bare_company(line: str, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> bool:
    """
    A short employer name on its own line: "Google", "Amazon Web Services", "ACME".

    Only meaningful right after a title-only header; on its own a line like this
    is too weak to open an entry.
    """
    t = line.strip()
    if not t or len(t) > MAX_BARE_COMPANY_LENGTH or len(t.split()) > MAX_BARE_COMPANY_WORDS:
        return False
    if t.endswith(".") or "," in t or ":" in t:
        return False
    if looks_like_achievement_bullet(t, vocab) or looks_like_date(t, vocab):
        return False
    if has_job_word(t, vocab):
        return False
    return is_all_caps(t) or capitalized_ratio(t, vocab) >= 0.5


def _draft_from_header(line: str, vocab: HeuristicVocabulary) -> EntryDraft:
    parts = split_job_header(line, vocab)
    date_range = parse_date_range(parts.date_text, vocab) if parts.date_text else None
    return EntryDraft(parts.position, parts.company, parts.location, date_range)


# ===== STRATEGY A: SEQUENTIAL HEADER + DATE =====

class SequentialHeaderStrategy(EmploymentStrategy):
    """
    A job-header line opens an entry and the next line is expected to be its
    date range. Anything else is content of the open entry.

    Example:
        Senior Engineer at Acme Corp
        Jan 2021 to Present
        Belfast, UK
        Built distributed systems.
        • Reduced latency by 40%
    """

    name = "sequential_header"

    def parse(self, lines: Sequence[str]) -> StrategyResult:
        drafts: List[EntryDraft] = []
        current: Optional[EntryDraft] = None
        expect_date = False

        for raw in lines:
            line = raw.strip()
            if not line:
                continue

            if expect_date:
                expect_date = False
                if looks_like_date(line, self.vocab):
                    current.date_range = parse_date_range(line, self.vocab)
                    continue
                # Not a date: fall through and treat as an ordinary line

            if looks_like_job_header(line, self.vocab):
                header = _draft_from_header(line, self.vocab)
                if current is not None and self._completes(current, header):
                    # Two-line header: "Senior Engineer" / "Acme Corp"
                    current.position = current.position or header.position
                    current.company = current.company or header.company
                    current.location = current.location or header.location
                    if current.date_range.is_empty:
                        current.date_range = header.date_range
                else:
                    current = header
                    drafts.append(current)
                expect_date = current.date_range.is_empty
                continue

            if current is None:
                continue
            if current.wants_company and looks_like_bare_company(line, self.vocab):
                # Two-line header: "Software Engineer" / "Google"
                current.company = line
                expect_date = True
                continue
            current.absorb(line, self.vocab)

        return self._result(drafts)

    @staticmethod
    def _completes(current: EntryDraft, header: EntryDraft) -> bool:
        """The new header only fills the half the just-opened entry is missing."""
        if current.has_content or not current.date_range.is_empty:
            return False
        if current.position and not current.company:
            return bool(header.company) and not header.position
        if current.company and not current.position:
            return bool(header.position) and not header.company
        return False


# ===== STRATEGY B: DATE-LED =====

class DateLedStrategy(EmploymentStrategy):
    """
    A standalone date line opens an entry; the next non-date line carries the
    title and company.

    Example:
        Jan 2024 to Present
        Site Lead | Director of Engineering: ESO Solutions, Belfast
        Leading a team of 40 engineers across three products.
    """

    name = "date_led"

    def parse(self, lines: Sequence[str]) -> StrategyResult:
        drafts: List[EntryDraft] = []
        current: Optional[EntryDraft] = None
        awaiting_title = False

        for raw in lines:
            line = raw.strip()
            if not line:
                continue

            if looks_like_date(line, self.vocab):
                current = EntryDraft(date_range=parse_date_range(line, self.vocab))
                drafts.append(current)
                awaiting_title = True
                continue

            if current is None:
                continue

            if awaiting_title:
                if looks_like_achievement_bullet(line, self.vocab):
                    current.absorb(line, self.vocab)
                    continue
                if looks_like_location(line, self.vocab) and not looks_like_job_header(line, self.vocab):
                    if not current.location:
                        current.location = line
                    continue
                if not looks_like_job_header(line, self.vocab):
                    # Prose before the title line is content; keep waiting for the header
                    current.absorb(line, self.vocab)
                    continue
                self._apply_header(current, line)
                awaiting_title = False
                continue

            current.absorb(line, self.vocab)

        return self._result(drafts)

    def _apply_header(self, draft: EntryDraft, line: str) -> None:
        parts = split_job_header(line, self.vocab)
        draft.position = parts.position
        draft.company = parts.company
        draft.location = draft.location or parts.location


# ===== STRATEGY C: COMPANY-LED =====

class CompanyLedStrategy(EmploymentStrategy):
    """
    Hierarchical layout: a company line opens a block, then each bare title line
    opens a role under that company.

    Example:
        Bausch & Lomb, Phoenix Valley, AZ
        TERRITORY MANAGER 04/2021 - PRESENT
        • Grew territory revenue 30%
        ASSOCIATE TERRITORY MANAGER
        01/2019 - 03/2021

    Also accepts the colon form "ACME CORP: TERRITORY MANAGER: NEW YORK".
    """

    name = "company_led"

    def parse(self, lines: Sequence[str]) -> StrategyResult:
        drafts: List[EntryDraft] = []
        current: Optional[EntryDraft] = None
        company, location = "", ""

        for raw in lines:
            line = raw.strip()
            if not line:
                continue

            if looks_like_achievement_bullet(line, self.vocab):
                if current is not None:
                    current.absorb(line, self.vocab)
                continue

            colon = self._colon_header(line)
            if colon is not None:
                current = colon
                drafts.append(current)
                company, location = current.company, current.location
                continue

            if self.is_company_header(line):
                company, location = self._split_company_header(line)
                current = EntryDraft(company=company, location=location)
                drafts.append(current)
                continue

            if company and self.is_title_line(line):
                title, date_text = split_off_date(line, self.vocab)
                date_range = parse_date_range(date_text, self.vocab) if date_text else DateRange()
                if current is not None and not current.position and not current.has_content and current.company == company:
                    current.position = title
                    if not date_range.is_empty:
                        current.date_range = date_range
                else:
                    current = EntryDraft(position=title, company=company, location=location, date_range=date_range)
                    drafts.append(current)
                continue

            if current is not None:
                current.absorb(line, self.vocab)

        return self._result(drafts)

    def is_company_header(self, line: str) -> bool:
        """'Google, Mountain View, CA' - an employer followed by its location."""
        if len(line) > MAX_COMPANY_HEADER_LENGTH or "," not in line or ":" in line:
            return False
        if looks_like_date(line, self.vocab) or looks_like_location(line, self.vocab):
            return False
        head, tail = line.split(",", 1)
        head = head.strip()
        if not head or not head[0].isupper() or has_job_word(head, self.vocab):
            return False
        places = [p.strip() for p in tail.split(",")]
        return all(looks_like_place_name(p, self.vocab) for p in places)

    def _split_company_header(self, line: str):
        head, tail = line.split(",", 1)
        return head.strip(), tail.strip()

    def is_title_line(self, line: str) -> bool:
        """'TERRITORY MANAGER' / 'Senior Software Engineer', optionally with a trailing date."""
        if ":" in line or "," in line:
            return False
        title, _ = split_off_date(line, self.vocab)
        if not title or looks_like_location(title, self.vocab):
            return False
        if not (is_all_caps(title) or TITLE_LINE_RE.match(title)):
            return False
        if not 1 <= len(title.split()) <= MAX_TITLE_WORDS:
            return False
        return is_all_caps(title) or capitalized_ratio(title, self.vocab) >= 0.5

    def _colon_header(self, line: str) -> Optional[EntryDraft]:
        """'COMPANY: TITLE[: LOCATION]' with an upper-case company part."""
        if ":" not in line or line.endswith(".") or len(line) > MAX_COMPANY_HEADER_LENGTH:
            return None
        text, date_text = split_off_date(line, self.vocab)
        parts = [p.strip() for p in text.split(":") if p.strip()]
        if not 2 <= len(parts) <= 3:
            return None
        company_part, title_part = parts[0], parts[1]
        if not (company_part.isupper() or capitalized_ratio(company_part, self.vocab) >= 0.5):
            return None
        if not has_job_word(title_part, self.vocab) or has_job_word(company_part, self.vocab):
            return None
        if len(title_part.split()) > MAX_TITLE_WORDS:
            return None
        date_range = parse_date_range(date_text, self.vocab) if date_text else None
        location = parts[2] if len(parts) == 3 else ""
        return EntryDraft(position=title_part, company=company_part, location=location, date_range=date_range)


DEFAULT_STRATEGY_CLASSES = (SequentialHeaderStrategy, DateLedStrategy, CompanyLedStrategy)


def default_strategies(vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> List[EmploymentStrategy]:
    """Registered strategies in priority order (ties go to the earlier one)."""
    return [cls(vocab) for cls in DEFAULT_STRATEGY_CLASSES]
