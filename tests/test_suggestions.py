"""
Unit tests for the Suggestion Engine.

These tests verify:
1. Results always hold 1-5 suggestions with unique titles
2. Energy and sentiment band selection
3. Exactly one general wellness tip is drawn
4. Seeded random sources give reproducible output

Selection order is random, so tests assert on sets only.

Usage:
    pytest tests/test_suggestions.py -v
"""
import random
import pytest

from journal_core.models import MoodType
from journal_core.suggestions import (
    GENERAL_WELLNESS_SUGGESTIONS,
    HIGH_ENERGY_SUGGESTIONS,
    LOW_ENERGY_SUGGESTIONS,
    MAX_SUGGESTIONS,
    MOOD_SUGGESTIONS,
    NEGATIVE_SENTIMENT_SUGGESTIONS,
    POSITIVE_SENTIMENT_SUGGESTIONS,
    SuggestionEngine,
    energy_suggestions,
    sentiment_suggestions,
)

from conftest import make_analysis

ENERGIES = [0.0, 2.9, 3.0, 5.0, 7.0, 7.1, 10.0]
SENTIMENTS = [-1.0, -0.31, -0.3, 0.0, 0.3, 0.31, 1.0]
WELLNESS_TITLES = {s.title for s in GENERAL_WELLNESS_SUGGESTIONS}


@pytest.fixture
def engine():
    return SuggestionEngine(rng=random.Random(1234))


def titles(suggestions):
    return [s.title for s in suggestions]


class TestSuggestionPools:
    """Test the static suggestion content."""

    def test_every_mood_has_two_to_four(self):
        assert set(MOOD_SUGGESTIONS) == set(MoodType)
        for mood, pool in MOOD_SUGGESTIONS.items():
            assert 2 <= len(pool) <= 4, mood

    def test_general_wellness_pool_has_at_least_three(self):
        assert len(GENERAL_WELLNESS_SUGGESTIONS) >= 3

    def test_titles_unique_across_all_pools(self):
        all_suggestions = [s for pool in MOOD_SUGGESTIONS.values() for s in pool]
        all_suggestions += [
            *LOW_ENERGY_SUGGESTIONS,
            *HIGH_ENERGY_SUGGESTIONS,
            *NEGATIVE_SENTIMENT_SUGGESTIONS,
            *POSITIVE_SENTIMENT_SUGGESTIONS,
            *GENERAL_WELLNESS_SUGGESTIONS,
        ]
        all_titles = titles(all_suggestions)
        assert len(all_titles) == len(set(all_titles))

    def test_suggestions_have_display_attributes(self):
        for pool in MOOD_SUGGESTIONS.values():
            for s in pool:
                assert s.icon and s.title and s.description
                assert s.color.startswith("#")


class TestBands:
    """Test energy and sentiment thresholds."""

    @pytest.mark.parametrize("energy,expected", [
        (0.0, LOW_ENERGY_SUGGESTIONS),
        (2.99, LOW_ENERGY_SUGGESTIONS),
        (3.0, ()),
        (5.0, ()),
        (7.0, ()),
        (7.01, HIGH_ENERGY_SUGGESTIONS),
        (10.0, HIGH_ENERGY_SUGGESTIONS),
    ])
    def test_energy_band(self, energy, expected):
        assert energy_suggestions(energy) == expected

    @pytest.mark.parametrize("sentiment,expected", [
        (-1.0, NEGATIVE_SENTIMENT_SUGGESTIONS),
        (-0.31, NEGATIVE_SENTIMENT_SUGGESTIONS),
        (-0.3, ()),
        (0.0, ()),
        (0.3, ()),
        (0.31, POSITIVE_SENTIMENT_SUGGESTIONS),
    ])
    def test_sentiment_band(self, sentiment, expected):
        assert sentiment_suggestions(sentiment) == expected

    def test_eligible_combines_pools(self, engine):
        eligible = engine.eligible_suggestions(MoodType.SAD, energy=2.0, sentiment=-0.6)
        expected = (
            list(MOOD_SUGGESTIONS[MoodType.SAD])
            + list(LOW_ENERGY_SUGGESTIONS)
            + list(NEGATIVE_SENTIMENT_SUGGESTIONS)
        )
        assert eligible == expected


class TestGenerateSuggestions:
    """Test the randomized combination."""

    def test_size_and_uniqueness_for_every_combination(self, engine):
        for mood in MoodType:
            for energy in ENERGIES:
                for sentiment in SENTIMENTS:
                    result = engine.generate_suggestions(mood, energy, sentiment)
                    names = titles(result)

                    assert 1 <= len(result) <= MAX_SUGGESTIONS
                    assert len(names) == len(set(names))

                    allowed = set(titles(engine.eligible_suggestions(mood, energy, sentiment)))
                    assert set(names) <= allowed | WELLNESS_TITLES

    def test_small_selection_keeps_everything_plus_one_tip(self, engine):
        result = engine.generate_suggestions(MoodType.NEUTRAL, energy=5.0, sentiment=0.0)
        names = set(titles(result))

        assert len(result) == 3
        assert set(titles(MOOD_SUGGESTIONS[MoodType.NEUTRAL])) <= names
        assert len(names & WELLNESS_TITLES) == 1

    def test_large_selection_truncated_to_five(self, engine):
        # 4 mood + 3 low energy + 2 negative + 1 wellness = 10 candidates
        result = engine.generate_suggestions(MoodType.SAD, energy=1.0, sentiment=-0.9)
        assert len(result) == MAX_SUGGESTIONS

    def test_wellness_tip_varies_across_calls(self):
        engine = SuggestionEngine(rng=random.Random(0))
        seen = set()
        for _ in range(200):
            result = engine.generate_suggestions(MoodType.NEUTRAL, 5.0, 0.0)
            seen |= set(titles(result)) & WELLNESS_TITLES
        assert seen == WELLNESS_TITLES

    def test_seeded_engines_are_reproducible(self):
        a = SuggestionEngine(rng=random.Random(7))
        b = SuggestionEngine(rng=random.Random(7))
        for mood in MoodType:
            assert a.generate_suggestions(mood, 8.0, 0.5) == b.generate_suggestions(mood, 8.0, 0.5)

    def test_default_engine_uses_system_randomness(self):
        result = SuggestionEngine().generate_suggestions(MoodType.HAPPY, 5.0, 0.5)
        assert 1 <= len(result) <= MAX_SUGGESTIONS

    def test_mood_string_accepted(self, engine):
        result = engine.generate_suggestions("calm", 5.0, 0.0)
        assert set(titles(MOOD_SUGGESTIONS[MoodType.CALM])) <= set(titles(result))


class TestSuggestionsForAnalysis:
    """Test the analysis convenience wrapper."""

    def test_energy_is_rescaled(self, engine):
        analysis = make_analysis(MoodType.CALM, energy=0.2, sentiment=0.0)
        result = engine.suggestions_for(analysis)

        allowed = set(titles(engine.eligible_suggestions(MoodType.CALM, 2.0, 0.0))) | WELLNESS_TITLES
        assert set(titles(result)) <= allowed
        # 3 calm + 3 low energy + 1 wellness, truncated to five
        assert len(result) == MAX_SUGGESTIONS

    def test_mid_energy_has_no_band(self, engine):
        analysis = make_analysis(MoodType.NEUTRAL, energy=0.5, sentiment=0.0)
        assert len(engine.suggestions_for(analysis)) == 3

    def test_to_dict(self):
        suggestion = MOOD_SUGGESTIONS[MoodType.HAPPY][0]
        data = suggestion.to_dict()
        assert data["title"] == suggestion.title
        assert data["category"] == suggestion.category.value
