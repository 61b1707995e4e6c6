"""
Resume parsing orchestration.

Pipeline:
    raw text -> RawDocument -> [AI delegate attempt]
      -> on failure: segmenter -> arbitrated employment strategies
         + education / skills / interests / personal-info extractors
      -> assembler -> shared validation pass -> ParseOutcome
"""

import logging
from typing import List, Optional, Sequence, Tuple

from profile_parser.core.ai_delegate import (
    DEFAULT_TIMEOUT_SECONDS,
    MAX_RETRIES,
    Delegate,
    DelegateSuccess,
    attempt_delegate,
)
from profile_parser.core.arbitrator import ArbitrationResult, Arbitrator, ScoringWeights
from profile_parser.core.assembler import assemble_profile
from profile_parser.core.education_parser import extract_education, scan_for_education
from profile_parser.core.employment_strategies import EmploymentStrategy, default_strategies
from profile_parser.core.errors import EmptyInputError
from profile_parser.core.interests_parser import extract_interests
from profile_parser.core.personal_info import extract_personal_info
from profile_parser.core.schemas import ParseDiagnostics, ParseOutcome, RawDocument, Section, StructuredProfile
from profile_parser.core.segmenter import (
    UNTITLED_SECTION,
    employment_lines,
    has_section,
    section_lines,
    segment_document,
)
from profile_parser.core.skills_parser import extract_skills, find_inline_skill_lines
from profile_parser.core.text_normalization import to_raw_document
from profile_parser.core.trace import NullTraceSink, TraceEvent, TraceSink
from profile_parser.core.validation import validate_profile_payload
from profile_parser.core.vocabulary import DEFAULT_VOCABULARY, HeuristicVocabulary

logger = logging.getLogger(__name__)


class ResumeProfileParser:
    """
    Turns resume text into a validated StructuredProfile.

    Holds configuration only; every parse() call is independent and shares no
    mutable state with other calls.
    """

    def __init__(
        self,
        vocab: HeuristicVocabulary = DEFAULT_VOCABULARY,
        weights: Optional[ScoringWeights] = None,
        strategies: Optional[Sequence[EmploymentStrategy]] = None,
        delegate: Optional[Delegate] = None,
        ai_timeout: float = DEFAULT_TIMEOUT_SECONDS,
        ai_max_retries: int = MAX_RETRIES,
        trace: Optional[TraceSink] = None,
    ):
        self.vocab = vocab
        self.weights = weights or ScoringWeights()
        self.strategies = list(strategies) if strategies is not None else default_strategies(vocab)
        self.delegate = delegate
        self.ai_timeout = ai_timeout
        self.ai_max_retries = ai_max_retries
        self.trace = trace or NullTraceSink()

    def parse(self, text: str) -> ParseOutcome:
        """
        Parse one resume.

        Raises:
            EmptyInputError: text is None, empty or whitespace-only
        """
        if not isinstance(text, str) or not text.strip():
            raise EmptyInputError("Resume text is empty; text extraction produced nothing")

        document = to_raw_document(text)
        if not document:
            raise EmptyInputError("Resume text is empty after normalization")
        self.trace.record(TraceEvent(name="document.normalized", data={"lines": len(document)}))

        sections = segment_document(document, self.vocab, self.trace)
        section_names = [s.name for s in sections]

        failure_reason = None
        if self.delegate is not None:
            result = attempt_delegate(
                text,
                self.delegate,
                timeout=self.ai_timeout,
                max_retries=self.ai_max_retries,
                trace=self.trace,
                vocab=self.vocab,
            )
            if isinstance(result, DelegateSuccess):
                logger.info("Profile produced by AI delegate")
                return ParseOutcome(
                    profile=result.profile,
                    diagnostics=ParseDiagnostics(path="ai", sections=section_names),
                )
            failure_reason = result.reason
            logger.info(f"AI delegate unavailable ({failure_reason}); using heuristic parser")

        profile, arbitration, warnings = self._parse_heuristically(document, sections)
        profile = validate_profile_payload(profile, self.vocab)
        logger.info(
            f"Heuristic parse complete: {len(profile.employment)} jobs via {arbitration.strategy}, "
            f"{len(profile.education)} education, {len(profile.skills)} skills"
        )
        return ParseOutcome(
            profile=profile,
            diagnostics=ParseDiagnostics(
                path="heuristic",
                employment_strategy=arbitration.strategy,
                strategy_scores=arbitration.scores,
                ai_failure_reason=failure_reason,
                sections=section_names,
            ),
            warnings=warnings,
        )

    # ===== HEURISTIC STAGE =====

    def _parse_heuristically(
        self,
        document: RawDocument,
        sections: List[Section],
    ) -> Tuple[StructuredProfile, ArbitrationResult, List[str]]:
        vocab = self.vocab
        warnings: List[str] = []

        arbitrator = Arbitrator(self.strategies, self.weights, self.trace)
        arbitration = arbitrator.select(employment_lines(document, sections))

        if has_section(sections, "Education"):
            education, education_warnings = extract_education(section_lines(document, sections, "Education"), vocab)
        else:
            education, education_warnings = scan_for_education(section_lines(document, sections, UNTITLED_SECTION), vocab)
        warnings.extend(education_warnings)

        skill_lines = section_lines(document, sections, "Skills")
        outside_skills = [line for s in sections if s.name != "Skills" for line in s.content(document)]
        skills = extract_skills(skill_lines + find_inline_skill_lines(outside_skills), vocab)

        if has_section(sections, "Interests"):
            interests = extract_interests(section_lines(document, sections, "Interests"), vocab)
        else:
            interests = extract_interests(section_lines(document, sections, "Personal"), vocab, strict=True)

        personal = extract_personal_info(document, sections, vocab)

        if not arbitration.entries:
            warnings.append("No employment entries could be identified")

        profile = assemble_profile(personal, arbitration.entries, education, skills, interests, self.trace)
        return profile, arbitration, warnings


def parse_resume_text(
    text: str,
    delegate: Optional[Delegate] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    weights: Optional[ScoringWeights] = None,
    trace: Optional[TraceSink] = None,
) -> ParseOutcome:
    """Convenience wrapper: parse with the default vocabulary and strategies."""
    parser = ResumeProfileParser(weights=weights, delegate=delegate, ai_timeout=timeout, trace=trace)
    return parser.parse(text)
