"""
Strategy arbitration: run every employment strategy over the same lines,
score each result, keep the best.
"""

import logging
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from profile_parser.core.employment_strategies import EmploymentStrategy, default_strategies
from profile_parser.core.schemas import EmploymentEntry, StrategyResult
from profile_parser.core.trace import NullTraceSink, TraceEvent, TraceSink

logger = logging.getLogger(__name__)


class ScoringWeights(BaseModel):
    """
    Points awarded per employment entry. Empirical defaults; exposed as
    configuration because the right balance depends on the resume corpus.
    """
    position: int = 20
    company: int = 20
    start_date: int = 10
    location: int = 5
    description: int = 15
    description_min_length: int = Field(default=20, description="Description must be longer than this")
    achievements: int = 10
    title_length_bonus: int = 5
    title_min_length: int = 5
    title_max_length: int = 50
    company_length_bonus: int = 5
    company_min_length: int = 2
    company_max_length: int = 30


class ArbitrationResult(BaseModel):
    entries: List[EmploymentEntry] = Field(default_factory=list)
    strategy: Optional[str] = None
    scores: Dict[str, int] = Field(default_factory=dict)


def score_entry(entry: EmploymentEntry, weights: ScoringWeights) -> int:
    score = 0
    if entry.position:
        score += weights.position
    if entry.company:
        score += weights.company
    if entry.date_range.start_date:
        score += weights.start_date
    if entry.location:
        score += weights.location
    if len(entry.description) > weights.description_min_length:
        score += weights.description
    if entry.achievements:
        score += weights.achievements

    # Plausible lengths (exclusive bounds): penalize fields that swallowed unrelated prose
    if weights.title_min_length < len(entry.position) < weights.title_max_length:
        score += weights.title_length_bonus
    if weights.company_min_length < len(entry.company) < weights.company_max_length:
        score += weights.company_length_bonus
    return score


def score_entries(entries: Sequence[EmploymentEntry], weights: Optional[ScoringWeights] = None) -> int:
    """Sum of per-entry scores. An empty result always scores 0."""
    weights = weights or ScoringWeights()
    return sum(score_entry(e, weights) for e in entries)


class Arbitrator:
    """
    Runs a fixed, ordered registry of strategies and selects one result.

    Selection rules:
      - a strategy wins only with a strictly higher score, so ties keep the
        earlier (higher priority) strategy
      - a strategy that raises is logged and scored 0
      - an empty result scores 0 and never beats a non-empty one
    """

    def __init__(
        self,
        strategies: Optional[Sequence[EmploymentStrategy]] = None,
        weights: Optional[ScoringWeights] = None,
        trace: Optional[TraceSink] = None,
    ):
        self.strategies = list(strategies) if strategies is not None else default_strategies()
        self.weights = weights or ScoringWeights()
        self.trace = trace or NullTraceSink()

    def _run(self, strategy: EmploymentStrategy, lines: Sequence[str]) -> StrategyResult:
        try:
            result = strategy.parse(lines)
        except Exception as e:
            logger.exception(f"Strategy {strategy.name} failed; scoring it 0")
            self.trace.record(TraceEvent(name="strategy.failed", data={"strategy": strategy.name, "error": repr(e)}))
            return StrategyResult(strategy=strategy.name)
        return result.model_copy(update={"score": score_entries(result.entries, self.weights)})

    def select(self, lines: Sequence[str]) -> ArbitrationResult:
        frozen_lines = tuple(lines)
        results = [self._run(strategy, frozen_lines) for strategy in self.strategies]

        best: Optional[StrategyResult] = None
        for result in results:
            logger.debug(f"Strategy {result.strategy}: {len(result.entries)} entries, score {result.score}")
            self.trace.record(TraceEvent(
                name="strategy.scored",
                data={"strategy": result.strategy, "entries": len(result.entries), "score": result.score},
            ))
            if not result.entries:
                continue
            if best is None or result.score > best.score:
                best = result

        scores = {r.strategy: r.score for r in results}
        if best is None:
            logger.debug("No strategy produced entries")
            self.trace.record(TraceEvent(name="arbitrator.selected", data={"strategy": None, "scores": scores}))
            return ArbitrationResult(scores=scores)

        self.trace.record(TraceEvent(name="arbitrator.selected", data={"strategy": best.strategy, "scores": scores}))
        return ArbitrationResult(entries=best.entries, strategy=best.strategy, scores=scores)
