"""Unit tests for Stage 2 stopword filtering."""

from __future__ import annotations

from tidy_sentiment.models import Document, Granularity, Token
from tidy_sentiment.stages.stage1_tokenize import tokenize
from tidy_sentiment.stages.stage2_filter import filter_stopwords


def test_empty_stopword_set_keeps_all_words_in_order() -> None:
    tokens = tokenize(Document(1, "Good, good, BAD!"), Granularity.WORD)

    kept = list(filter_stopwords(tokens, frozenset()))

    assert [token.unit for token in kept] == ["good", "good", "bad"]


def test_filter_is_case_insensitive_and_idempotent() -> None:
    tokens = list(tokenize(Document(1, "The cat and THE hat"), Granularity.WORD))
    stopwords = {"The", "AND"}

    once = list(filter_stopwords(tokens, stopwords))
    twice = list(filter_stopwords(once, stopwords))

    assert [token.unit for token in once] == ["cat", "hat"]
    assert twice == once
    # Retained tokens are the original objects, not copies.
    assert once[0] is tokens[1]


def test_non_word_tokens_pass_through() -> None:
    sentence = Token(1, 1, "the", Granularity.SENTENCE)

    assert list(filter_stopwords([sentence], {"the"})) == [sentence]
