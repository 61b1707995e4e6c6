"""Tests for strategy scoring and selection."""

from typing import List, Sequence

from profile_parser.core.arbitrator import Arbitrator, ScoringWeights, score_entries
from profile_parser.core.employment_strategies import EmploymentStrategy
from profile_parser.core.schemas import DateRange, EmploymentEntry, StrategyResult
from profile_parser.core.trace import RecordingTraceSink


class FixedStrategy(EmploymentStrategy):
    """Returns the same entries whatever the input."""

    def __init__(self, name: str, entries: List[EmploymentEntry]):
        super().__init__()
        self.name = name
        self.entries = entries

    def parse(self, lines: Sequence[str]) -> StrategyResult:
        return StrategyResult(strategy=self.name, entries=list(self.entries))


class ExplodingStrategy(EmploymentStrategy):
    name = "exploding"

    def parse(self, lines: Sequence[str]) -> StrategyResult:
        raise RuntimeError("boom")


def make_entry(position="Engineer", company="Acme", start="2020-01") -> EmploymentEntry:
    return EmploymentEntry(position=position, company=company, date_range=DateRange(start_date=start))


def test_empty_result_scores_zero():
    assert score_entries([]) == 0


def test_score_counts_filled_fields():
    weights = ScoringWeights()
    entry = make_entry(position="Senior Engineer", company="Acme Corp")
    expected = (
        weights.position + weights.company + weights.start_date
        + weights.title_length_bonus + weights.company_length_bonus
    )
    assert score_entries([entry], weights) == expected


def test_length_bounds_are_configurable():
    entry = make_entry(position="CTO", company="Acme Corp")
    weights = ScoringWeights()
    base = weights.position + weights.company + weights.start_date
    # "CTO" is too short for the default title bonus
    assert score_entries([entry], weights) == base + weights.company_length_bonus

    short_titles = ScoringWeights(title_min_length=2, company_max_length=5)
    assert score_entries([entry], short_titles) == base + short_titles.title_length_bonus


def test_non_empty_result_beats_empty_one():
    """A strategy that finds three jobs wins over one that finds none."""
    arbitrator = Arbitrator([
        FixedStrategy("empty", []),
        FixedStrategy("three", [make_entry(), make_entry(), make_entry()]),
    ])
    result = arbitrator.select(["anything"])
    assert result.strategy == "three"
    assert len(result.entries) == 3
    assert result.scores["empty"] == 0


def test_failing_strategy_scores_zero_and_others_still_run():
    arbitrator = Arbitrator([ExplodingStrategy(), FixedStrategy("steady", [make_entry()])])
    result = arbitrator.select(["line"])
    assert result.strategy == "steady"
    assert result.scores["exploding"] == 0


def test_tie_keeps_earlier_strategy():
    arbitrator = Arbitrator([
        FixedStrategy("first", [make_entry()]),
        FixedStrategy("second", [make_entry()]),
    ])
    result = arbitrator.select([])
    assert result.scores["first"] == result.scores["second"]
    assert result.strategy == "first"


def test_higher_score_wins_regardless_of_order():
    rich = make_entry(position="Principal Engineer", company="Globex Corporation")
    poor = EmploymentEntry(company="Globex")
    arbitrator = Arbitrator([FixedStrategy("poor", [poor]), FixedStrategy("rich", [rich])])
    assert arbitrator.select([]).strategy == "rich"


def test_no_entries_anywhere():
    result = Arbitrator([FixedStrategy("a", []), FixedStrategy("b", [])]).select([])
    assert result.strategy is None
    assert result.entries == []
    assert result.scores == {"a": 0, "b": 0}


def test_custom_weights_change_the_winner():
    """Weights are configuration: favouring dates flips the choice."""
    titled = EmploymentEntry(position="Engineer", company="Acme")
    dated = EmploymentEntry(company="Acme", date_range=DateRange(start_date="2020-01"))
    strategies = [FixedStrategy("titled", [titled]), FixedStrategy("dated", [dated])]

    assert Arbitrator(strategies).select([]).strategy == "titled"
    heavy_dates = ScoringWeights(start_date=100)
    assert Arbitrator(strategies, heavy_dates).select([]).strategy == "dated"


def test_trace_records_scores_and_selection():
    sink = RecordingTraceSink()
    Arbitrator([FixedStrategy("only", [make_entry()])], trace=sink).select([])
    assert sink.names() == ["strategy.scored", "arbitrator.selected"]
    assert sink.events[-1].data["strategy"] == "only"
