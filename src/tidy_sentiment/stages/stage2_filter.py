"""Stage 2: Remove stopwords from word tokens."""

from __future__ import annotations

from typing import AbstractSet, Iterable, Iterator

from tidy_sentiment.models import Granularity, Token


def normalize_stopwords(stopwords: Iterable[str]) -> frozenset[str]:
    """Return a lower-cased, trimmed copy of ``stopwords`` without blanks."""

    return frozenset(word.strip().lower() for word in stopwords if word.strip())


def filter_stopwords(tokens: Iterable[Token], stopwords: AbstractSet[str]) -> Iterator[Token]:
    """Drop word tokens whose lower-cased text is a stopword.

    Tokens of other granularities pass through untouched. The filter keeps
    token order and is idempotent.

    Args:
        tokens: Tokens in source order.
        stopwords: Stopword set; membership is tested case-insensitively.

    Returns:
        Iterator over retained tokens.
    """

    normalized = normalize_stopwords(stopwords)
    return (
        token
        for token in tokens
        if token.granularity is not Granularity.WORD or token.unit.lower() not in normalized
    )
