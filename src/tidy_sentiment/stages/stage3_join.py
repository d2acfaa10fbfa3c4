"""Stage 3: Inner-join word tokens against a sentiment lexicon.

A token whose word carries N labels expands into N ``MatchedToken`` rows; a
token with no lexicon entry is dropped without error.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from tidy_sentiment.lexicon.repository import build_lexicon
from tidy_sentiment.models import MatchedToken, Token


def join_lexicon(
    tokens: Iterable[Token],
    lexicon: Mapping[str, Iterable[str]],
) -> Iterator[MatchedToken]:
    """Pair each token with every sentiment label of its word.

    Matching is exact after lower-casing both sides; no stemming is applied.

    Args:
        tokens: Word tokens in source order.
        lexicon: Mapping of word to one or more labels.

    Returns:
        Iterator over matches in token order, then label order.
    """

    index = build_lexicon(lexicon)

    def matches() -> Iterator[MatchedToken]:
        for token in tokens:
            for label in index.get(token.unit.lower(), ()):
                yield MatchedToken(token=token, sentiment=label)

    return matches()
