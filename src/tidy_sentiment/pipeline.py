"""Top-level orchestration for the staged lexicon sentiment pipeline."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import AbstractSet, Iterable, Mapping, Sequence

from tidy_sentiment.errors import InvalidConfigurationError
from tidy_sentiment.models import Document, Granularity, PipelineResult, Token
from tidy_sentiment.stages.stage1_tokenize import retokenize, tokenize, tokenize_corpus
from tidy_sentiment.stages.stage2_filter import filter_stopwords
from tidy_sentiment.stages.stage3_join import join_lexicon
from tidy_sentiment.stages.stage4_score import GroupKey, aggregate
from tidy_sentiment.validation import validate_documents, validate_tokens

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineConfig:
    """Run options for :func:`run_pipeline`.

    Attributes:
        unit: Unit of analysis. Paragraph or sentence units are word-tokenized
            in a second pass that inherits their ordinal; ``WORD`` skips the
            outer pass so ordinals are word positions.
        group_key: Aggregation key name or callable, see
            :func:`tidy_sentiment.stages.stage4_score.aggregate`.
        drop_trailing: Paragraphs or sentences to discard at the end of every
            document; must stay 0 when ``unit`` is ``WORD``.
        labels: Labels reported for every unit even when never matched.
    """

    unit: Granularity | str = Granularity.PARAGRAPH
    group_key: GroupKey = "ordinal"
    drop_trailing: int = 0
    labels: tuple[str, ...] = ()


def run_pipeline(
    documents: Sequence[Document],
    lexicon: Mapping[str, Iterable[str]],
    stopwords: AbstractSet[str] = frozenset(),
    config: PipelineConfig = PipelineConfig(),
) -> PipelineResult:
    """Execute all pipeline stages from tokenization to scoring.

    Args:
        documents: Ordered corpus documents.
        lexicon: Word to sentiment label(s) mapping.
        stopwords: Words removed before the lexicon join.
        config: Run options.

    Returns:
        ``PipelineResult`` with intermediate tokens, matches, and scores.

    Raises:
        InvalidConfigurationError: If the unit or group key is unknown, or
            ``drop_trailing`` is set for word units.
        ValueError: If the corpus or produced tokens fail validation.
    """

    unit = Granularity.parse(config.unit)
    validate_documents(documents)
    logger.info("Tokenizing %d documents by %s", len(documents), unit.value)

    if unit is Granularity.WORD:
        if config.drop_trailing:
            raise InvalidConfigurationError(
                "drop_trailing applies to paragraph or sentence units, not words"
            )
        units: tuple[Token, ...] = ()
        words = tuple(tokenize_corpus(documents, unit))
    else:
        collected: list[Token] = []
        for document in documents:
            # Validated per document so repeated ids do not look like restarts.
            document_units = tuple(tokenize(document, unit, drop_trailing=config.drop_trailing))
            validate_tokens(document_units)
            collected.extend(document_units)
        units = tuple(collected)
        words = tuple(retokenize(units, Granularity.WORD))

    kept = tuple(filter_stopwords(words, stopwords))
    logger.info("Kept %d of %d words after stopword removal", len(kept), len(words))

    matches = tuple(join_lexicon(kept, lexicon))
    scores = aggregate(matches, key=config.group_key, labels=config.labels)
    logger.info("Matched %d lexicon rows across %d units", len(matches), len(scores))

    return PipelineResult(units=units, words=kept, matches=matches, scores=scores)
