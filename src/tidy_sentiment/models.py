"""Data models used across sentiment pipeline stages.

This module defines explicit immutable record contracts between stages so each
stage has a narrow, testable interface and downstream code can rely on stable
fields. Filtering and joining select or wrap these records; nothing downstream
of the tokenizer ever mutates a ``Token``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable, Mapping, Union

from tidy_sentiment.errors import InvalidConfigurationError

DocumentId = Union[str, int]

POSITIVE = "positive"
NEGATIVE = "negative"


class Granularity(Enum):
    """Level at which document text is segmented into tokens."""

    WORD = "word"
    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"

    @classmethod
    def parse(cls, value: Granularity | str) -> Granularity:
        """Resolve an enum member from a member or a case-insensitive name.

        Args:
            value: ``Granularity`` member or a name such as ``"paragraph"``.

        Returns:
            The matching ``Granularity`` member.

        Raises:
            InvalidConfigurationError: If ``value`` names no granularity.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        choices = ", ".join(member.value for member in cls)
        raise InvalidConfigurationError(f"Unknown granularity {value!r}; expected one of: {choices}")


@dataclass(frozen=True)
class Document:
    """One unit of source text delivered by a corpus loader.

    ``text`` is never ``None``; loaders normalize missing or malformed text to
    an empty string so the tokenizer simply yields nothing for it.
    """

    id: DocumentId
    text: str
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Token:
    """Segment of a document tagged with its provenance.

    ``ordinal`` is 1-based. For nested tokenization it is inherited from the
    outer unit (e.g. every word of paragraph 3 carries ordinal 3).
    """

    document_id: DocumentId
    ordinal: int
    unit: str
    granularity: Granularity


@dataclass(frozen=True)
class LexiconEntry:
    """One row of a sentiment lexicon source.

    A word with several labels is stored as several entries; ``lexicon`` is the
    name tag of the sub-lexicon the row belongs to, empty when untagged.
    """

    word: str
    sentiment: str
    lexicon: str = ""


@dataclass(frozen=True)
class MatchedToken:
    """A word token paired with one sentiment label from the lexicon."""

    token: Token
    sentiment: str

    @property
    def word(self) -> str:
        return self.token.unit

    @property
    def ordinal(self) -> int:
        return self.token.ordinal

    @property
    def document_id(self) -> DocumentId:
        return self.token.document_id


@dataclass(frozen=True)
class UnitScore:
    """Aggregated label counts and positivity for one grouping key.

    Every score produced by a single aggregation run exposes the same label
    keys in ``counts``, with zeros for labels absent from the group.
    """

    key: Hashable
    counts: Mapping[str, int]
    positivity: float

    @property
    def positive(self) -> int:
        return self.counts.get(POSITIVE, 0)

    @property
    def negative(self) -> int:
        return self.counts.get(NEGATIVE, 0)


@dataclass(frozen=True)
class PipelineResult:
    """Result bundle returned by :func:`tidy_sentiment.pipeline.run_pipeline`.

    Attributes:
        units: Outer-unit tokens (paragraphs or sentences) in source order;
            empty when the unit of analysis is the word.
        words: Word tokens after stopword filtering.
        matches: Lexicon matches, one per (word, label).
        scores: Unit scores keyed by grouping key in ascending key order.
    """

    units: tuple[Token, ...]
    words: tuple[Token, ...]
    matches: tuple[MatchedToken, ...]
    scores: Mapping[Hashable, UnitScore]
