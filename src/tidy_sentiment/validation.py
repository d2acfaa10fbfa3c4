"""Validation helpers for corpus inputs and stage outputs."""

from __future__ import annotations

from collections import Counter
import logging
from typing import Iterable, Sequence

from tidy_sentiment.models import Document, Granularity, MatchedToken, Token

logger = logging.getLogger(__name__)


def _raise_errors(stage: str, errors: list[str]) -> None:
    if not errors:
        return
    preview = "\n".join(f"- {item}" for item in errors[:25])
    rest = len(errors) - min(25, len(errors))
    more = f"\n- ... and {rest} more" if rest > 0 else ""
    raise ValueError(f"{stage} validation failed with {len(errors)} errors:\n{preview}{more}")


def validate_documents(documents: Sequence[Document]) -> None:
    """Validate corpus documents for string text and report repeated ids.

    Repeated ids are allowed: keeping groups apart across documents is the
    caller's choice of grouping key. They are logged as a warning.

    Args:
        documents: Loaded documents.

    Raises:
        ValueError: If any document text is not a string.
    """

    errors: list[str] = []
    seen: set[object] = set()
    duplicates: list[object] = []
    for idx, document in enumerate(documents, start=1):
        if document.id in seen:
            duplicates.append(document.id)
        seen.add(document.id)
        if not isinstance(document.text, str):
            errors.append(f"Document {idx}: text must be str, got {type(document.text).__name__}")

    if duplicates:
        preview = ", ".join(repr(item) for item in duplicates[:10])
        logger.warning("Corpus has %d repeated document ids: %s", len(duplicates), preview)
    _raise_errors("Corpus", errors)


def validate_tokens(tokens: Sequence[Token]) -> None:
    """Validate tokens for non-empty units and per-document ordinal order.

    Paragraph and sentence tokens of one document must carry strictly
    increasing ordinals. Word tokens may share an inherited ordinal, so only
    non-decreasing order is required for them.

    Args:
        tokens: Tokens in source order.

    Raises:
        ValueError: If any token violates the expected shape.
    """

    errors: list[str] = []
    last: dict[tuple[object, Granularity], int] = {}
    for idx, token in enumerate(tokens, start=1):
        if not token.unit.strip():
            errors.append(f"Token {idx}: empty unit in document {token.document_id!r}")
        if token.ordinal < 1:
            errors.append(f"Token {idx}: ordinal {token.ordinal} is not 1-based")

        scope = (token.document_id, token.granularity)
        previous = last.get(scope)
        if previous is not None:
            strict = token.granularity is not Granularity.WORD
            if token.ordinal < previous or (strict and token.ordinal == previous):
                errors.append(
                    f"Token {idx}: ordinal {token.ordinal} after {previous} "
                    f"in document {token.document_id!r}"
                )
        last[scope] = token.ordinal

    _raise_errors("Token", errors)


def collect_label_counts(matches: Iterable[MatchedToken]) -> dict[str, int]:
    """Count lexicon matches by label across the whole run.

    Args:
        matches: Lexicon matches.

    Returns:
        Dictionary of label to match count.
    """

    counter: Counter[str] = Counter()
    for match in matches:
        counter[match.sentiment] += 1
    return dict(counter)
