"""Stage 4: Aggregate lexicon matches into per-unit label counts and scores.

The count table is preallocated with every label seen anywhere in the run at
zero for every group before matches are counted, so each ``UnitScore`` in one
result exposes the same label keys.
"""

from __future__ import annotations

from collections import Counter
import logging
from typing import Callable, Hashable, Iterable, Mapping, Sequence, Union

from tidy_sentiment.errors import InvalidConfigurationError
from tidy_sentiment.models import NEGATIVE, POSITIVE, MatchedToken, Token, UnitScore

logger = logging.getLogger(__name__)

GroupKey = Union[str, Callable[[MatchedToken], Hashable]]

GROUP_KEYS: dict[str, Callable[[MatchedToken], Hashable]] = {
    "ordinal": lambda match: match.ordinal,
    "document_id": lambda match: match.document_id,
    "document_ordinal": lambda match: (match.document_id, match.ordinal),
}


def positivity(positive: int, negative: int) -> float:
    """Compute the smoothed sentiment balance ``(p - n) / (p + n + 1)``.

    The ``+1`` keeps the denominator positive and pulls low-evidence groups
    toward zero: one positive word scores 0.5, ten score about 0.91.

    Args:
        positive: Count of positive matches.
        negative: Count of negative matches.

    Returns:
        Score in the open interval ``(-1, 1)``; ``0.0`` when both counts are 0.

    Raises:
        ValueError: If either count is negative.
    """

    if positive < 0 or negative < 0:
        raise ValueError(f"Counts must be non-negative, got positive={positive}, negative={negative}")
    return (positive - negative) / (positive + negative + 1)


def resolve_group_key(key: GroupKey) -> Callable[[MatchedToken], Hashable]:
    """Resolve a named grouping key or pass a callable through.

    Raises:
        InvalidConfigurationError: If ``key`` is an unknown name.
    """

    if callable(key):
        return key
    try:
        return GROUP_KEYS[key]
    except KeyError:
        choices = ", ".join(sorted(GROUP_KEYS))
        raise InvalidConfigurationError(
            f"Unknown group key {key!r}; expected a callable or one of: {choices}"
        ) from None


def _sort_key(value: Hashable) -> tuple[int, object]:
    # Numbers, then strings, then tuples, then anything else by repr, so keys
    # of mixed types returned by a callable still sort deterministically.
    if isinstance(value, (int, float)):
        return 0, value
    if isinstance(value, str):
        return 1, value
    if isinstance(value, tuple):
        return 2, tuple(_sort_key(item) for item in value)
    return 3, repr(value)


def aggregate(
    matches: Iterable[MatchedToken],
    key: GroupKey = "ordinal",
    labels: Iterable[str] = (),
) -> dict[Hashable, UnitScore]:
    """Group matches, count labels with zero fill, and score each group.

    Groups from different documents that share a key are merged; scoping keys
    to a document is the caller's choice (e.g. ``"document_ordinal"``).

    Args:
        matches: Lexicon matches from Stage 3.
        key: ``"ordinal"``, ``"document_id"``, ``"document_ordinal"``, or a
            callable returning the group key of a match.
        labels: Extra labels to include in every group even if never matched.

    Returns:
        Mapping of group key to ``UnitScore`` in ascending key order.

    Raises:
        InvalidConfigurationError: If ``key`` is an unknown name.
    """

    key_fn = resolve_group_key(key)

    grouped: dict[Hashable, Counter[str]] = {}
    observed: set[str] = set(labels)
    for match in matches:
        grouped.setdefault(key_fn(match), Counter())[match.sentiment] += 1
        observed.add(match.sentiment)

    label_order = sorted(observed)
    scores: dict[Hashable, UnitScore] = {}
    for group_key in sorted(grouped, key=_sort_key):
        table = {label: 0 for label in label_order}
        table.update(grouped[group_key])
        scores[group_key] = UnitScore(
            key=group_key,
            counts=table,
            positivity=positivity(table.get(POSITIVE, 0), table.get(NEGATIVE, 0)),
        )

    logger.debug("Aggregated %d groups over %d labels", len(scores), len(label_order))
    return scores


def rank_units(scores: Mapping[Hashable, UnitScore], descending: bool = True) -> list[UnitScore]:
    """Order unit scores by positivity, breaking ties by key ascending.

    Args:
        scores: Output of :func:`aggregate`.
        descending: ``True`` for most positive first.

    Returns:
        Unit scores in rank order.
    """

    by_key = sorted(scores.values(), key=lambda score: _sort_key(score.key))
    return sorted(by_key, key=lambda score: -score.positivity if descending else score.positivity)


def most_positive(scores: Mapping[Hashable, UnitScore], n: int = 5) -> list[UnitScore]:
    """Return the ``n`` highest-positivity units."""

    return rank_units(scores, descending=True)[:n]


def most_negative(scores: Mapping[Hashable, UnitScore], n: int = 5) -> list[UnitScore]:
    """Return the ``n`` lowest-positivity units."""

    return rank_units(scores, descending=False)[:n]


def count_words(tokens: Iterable[Token]) -> list[tuple[str, int]]:
    """Count token units, most frequent first and then alphabetically.

    Args:
        tokens: Word tokens, usually after stopword filtering.

    Returns:
        ``(word, count)`` pairs.
    """

    counter: Counter[str] = Counter(token.unit for token in tokens)
    return sorted(counter.items(), key=lambda item: (-item[1], item[0]))


def count_label_words(matches: Sequence[MatchedToken]) -> dict[str, list[tuple[str, int]]]:
    """Count how often each word contributes to each label.

    Args:
        matches: Lexicon matches from Stage 3.

    Returns:
        Mapping of label (sorted) to ``(word, count)`` pairs ordered by count
        descending and then word.
    """

    per_label: dict[str, Counter[str]] = {}
    for match in matches:
        per_label.setdefault(match.sentiment, Counter())[match.word] += 1

    return {
        label: sorted(per_label[label].items(), key=lambda item: (-item[1], item[0]))
        for label in sorted(per_label)
    }
