"""Unit tests for Stage 4 aggregation, scoring, and ranking."""

from __future__ import annotations

import pytest

from tidy_sentiment.errors import InvalidConfigurationError
from tidy_sentiment.models import Granularity, MatchedToken, Token
from tidy_sentiment.stages.stage4_score import (
    aggregate,
    count_label_words,
    count_words,
    most_negative,
    most_positive,
    positivity,
    rank_units,
)


def _match(word: str, label: str, ordinal: int = 1, document_id: int | str = 1) -> MatchedToken:
    token = Token(document_id, ordinal, word, Granularity.WORD)
    return MatchedToken(token=token, sentiment=label)


def test_positivity_is_smoothed_and_zero_when_no_evidence() -> None:
    assert positivity(0, 0) == 0.0
    assert positivity(2, 1) == 0.25
    assert positivity(1, 0) < positivity(10, 0)


@pytest.mark.parametrize("positive,negative", [(0, 0), (1, 0), (0, 1), (500, 3), (0, 10_000)])
def test_positivity_stays_inside_open_interval(positive: int, negative: int) -> None:
    assert -1 < positivity(positive, negative) < 1


def test_positivity_rejects_negative_counts() -> None:
    with pytest.raises(ValueError):
        positivity(-1, 0)


def test_aggregate_single_unit_scenario() -> None:
    matches = [
        _match("good", "positive"),
        _match("good", "positive"),
        _match("bad", "negative"),
    ]

    scores = aggregate(matches)

    assert list(scores) == [1]
    assert scores[1].counts == {"negative": 1, "positive": 2}
    assert scores[1].positivity == 0.25


def test_aggregate_fills_absent_labels_with_zero() -> None:
    matches = [
        _match("happy", "joy", ordinal=2),
        _match("hate", "anger", ordinal=1),
        _match("hate", "negative", ordinal=1),
    ]

    scores = aggregate(matches, labels=("positive",))

    assert list(scores) == [1, 2]
    assert set(scores[1].counts) == set(scores[2].counts) == {"anger", "joy", "negative", "positive"}
    assert scores[2].counts["anger"] == 0
    assert scores[2].positivity == 0.0
    assert scores[1].positivity == -0.5


def test_aggregate_named_and_callable_keys() -> None:
    matches = [_match("good", "positive", 1, "b"), _match("bad", "negative", 1, "a")]

    by_ordinal = aggregate(matches, key="ordinal")
    by_document = aggregate(matches, key="document_id")
    by_both = aggregate(matches, key="document_ordinal")
    by_word = aggregate(matches, key=lambda match: match.word)

    assert by_ordinal[1].counts == {"negative": 1, "positive": 1}
    assert list(by_document) == ["a", "b"]
    assert list(by_both) == [("a", 1), ("b", 1)]
    assert by_word["good"].positive == 1


def test_aggregate_rejects_unknown_key_name() -> None:
    with pytest.raises(InvalidConfigurationError):
        aggregate([], key="paragraph_number")


def test_rank_units_breaks_ties_by_key() -> None:
    matches = [
        _match("good", "positive", ordinal=3),
        _match("bad", "negative", ordinal=2),
        _match("good", "positive", ordinal=1),
        _match("meh", "neutral", ordinal=4),
    ]
    scores = aggregate(matches)

    assert [score.key for score in rank_units(scores)] == [1, 3, 4, 2]
    assert [score.key for score in rank_units(scores, descending=False)] == [2, 4, 1, 3]
    assert [score.key for score in most_positive(scores, 1)] == [1]
    assert [score.key for score in most_negative(scores, 2)] == [2, 4]


def test_count_helpers_sort_by_count_then_word() -> None:
    tokens = [Token(1, 1, word, Granularity.WORD) for word in ["b", "a", "b", "c", "a", "b"]]
    matches = [_match("good", "positive"), _match("love", "positive"), _match("good", "positive")]

    assert count_words(tokens) == [("b", 3), ("a", 2), ("c", 1)]
    assert count_label_words(matches) == {"positive": [("good", 2), ("love", 1)]}


def test_aggregate_and_rank_accept_mixed_key_types() -> None:
    """A callable key may return numbers for some groups and tuples or strings for others."""

    matches = [
        _match("good", "positive", ordinal=2, document_id=1),
        _match("bad", "negative", ordinal=1, document_id="b"),
        _match("good", "positive", ordinal=1, document_id=2),
        _match("good", "positive", ordinal=1, document_id=3),
    ]

    def key(match: MatchedToken) -> object:
        if match.document_id == 1:
            return match.ordinal
        if match.document_id == 3:
            return "summary"
        return (match.document_id, match.ordinal)

    scores = aggregate(matches, key=key)

    assert list(scores) == [2, "summary", (2, 1), ("b", 1)]
    assert [score.key for score in rank_units(scores)] == [2, "summary", (2, 1), ("b", 1)]
    assert [score.key for score in most_negative(scores, 1)] == [("b", 1)]
