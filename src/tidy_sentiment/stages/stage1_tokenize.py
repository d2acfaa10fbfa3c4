"""Stage 1: Segment documents into word, sentence, or paragraph tokens.

Tokenization is composable: paragraph tokens can be fed back through
:func:`retokenize` to produce word tokens that keep the paragraph ordinal,
which is what the scorer later groups on.
"""

from __future__ import annotations

from collections import deque
import re
from typing import Iterable, Iterator, TypeVar

from tidy_sentiment.models import Document, DocumentId, Granularity, Token

WORD_RE = re.compile(r"[^\W_]+(?:['’][^\W_]+)*")
# Terminal punctuation followed by whitespace. "Mr. Smith" splits after "Mr.".
SENTENCE_BREAK_RE = re.compile(r"(?<=[.!?])\s+")
PARAGRAPH_BREAK_RE = re.compile(r"\n[ \t\r\f\v]*\n")

T = TypeVar("T")


def split_words(text: str) -> list[str]:
    """Split text into lower-cased words with attached punctuation removed.

    Apostrophes inside a word are kept so contractions such as ``don't`` stay
    a single word. Underscores count as punctuation: ``_great_`` is ``great``.

    Args:
        text: Raw text fragment.

    Returns:
        Words in source order.
    """

    return [match.group(0).lower() for match in WORD_RE.finditer(text)]


def split_sentences(text: str) -> list[str]:
    """Split text after ``.``, ``!`` or ``?`` followed by whitespace.

    Abbreviations like ``Mr.`` produce a break as well; consumers that match
    lexicons per sentence rely on this simple segmentation.

    Args:
        text: Raw text fragment.

    Returns:
        Whitespace-trimmed, non-empty sentences in source order.
    """

    parts = (part.strip() for part in SENTENCE_BREAK_RE.split(text))
    return [part for part in parts if part]


def split_paragraphs(text: str) -> list[str]:
    """Split text on blank-line boundaries, skipping whitespace-only blocks.

    Args:
        text: Raw text fragment.

    Returns:
        Trimmed, non-empty paragraphs in source order.
    """

    parts = (part.strip() for part in PARAGRAPH_BREAK_RE.split(text))
    return [part for part in parts if part]


_SPLITTERS = {
    Granularity.WORD: split_words,
    Granularity.SENTENCE: split_sentences,
    Granularity.PARAGRAPH: split_paragraphs,
}


def _drop_last(items: Iterable[T], count: int) -> Iterator[T]:
    """Yield all but the final ``count`` items without materializing input."""

    if count <= 0:
        yield from items
        return

    buffer: deque[T] = deque()
    for item in items:
        buffer.append(item)
        if len(buffer) > count:
            yield buffer.popleft()


def _generate(
    document_id: DocumentId,
    text: str,
    granularity: Granularity,
    ordinal: int | None,
) -> Iterator[Token]:
    for position, unit in enumerate(_SPLITTERS[granularity](text), start=1):
        yield Token(
            document_id=document_id,
            ordinal=position if ordinal is None else ordinal,
            unit=unit,
            granularity=granularity,
        )


def tokenize(
    document: Document,
    granularity: Granularity | str,
    ordinal: int | None = None,
    drop_trailing: int = 0,
) -> Iterator[Token]:
    """Tokenize one document at the requested granularity.

    The granularity is validated immediately; the returned iterator is lazy
    and single-pass.

    Args:
        document: Source document; empty text yields no tokens.
        granularity: ``Granularity`` member or its name.
        ordinal: Ordinal to stamp on every token instead of its 1-based
            position, used when tokenizing the text of an outer unit.
        drop_trailing: Number of final units to discard. Callers use this to
            exclude a known malformed trailing block such as a footer; it is
            never applied automatically.

    Returns:
        Iterator over tokens in source order.

    Raises:
        InvalidConfigurationError: If ``granularity`` is unknown.
        ValueError: If ``drop_trailing`` is negative.
    """

    resolved = Granularity.parse(granularity)
    if drop_trailing < 0:
        raise ValueError(f"drop_trailing must be >= 0, got {drop_trailing}")

    tokens = _generate(document.id, document.text or "", resolved, ordinal)
    return _drop_last(tokens, drop_trailing)


def retokenize(tokens: Iterable[Token], granularity: Granularity | str) -> Iterator[Token]:
    """Re-tokenize the unit text of earlier tokens at a finer granularity.

    Each resulting token keeps the source token's document id and ordinal,
    e.g. paragraph tokens become word tokens carrying the paragraph number.

    Args:
        tokens: Outer tokens, typically paragraphs or sentences.
        granularity: Inner granularity.

    Returns:
        Iterator over inner tokens in source order.

    Raises:
        InvalidConfigurationError: If ``granularity`` is unknown.
    """

    resolved = Granularity.parse(granularity)

    def nested() -> Iterator[Token]:
        for token in tokens:
            inner = Document(id=token.document_id, text=token.unit)
            yield from tokenize(inner, resolved, ordinal=token.ordinal)

    return nested()


def tokenize_corpus(
    documents: Iterable[Document],
    granularity: Granularity | str,
    drop_trailing: int = 0,
) -> Iterator[Token]:
    """Tokenize documents in delivery order, chaining their token streams.

    Args:
        documents: Ordered documents from a corpus loader.
        granularity: ``Granularity`` member or its name.
        drop_trailing: Per-document trailing-unit exclusion, see :func:`tokenize`.

    Returns:
        Iterator over tokens, grouped by document in source order.

    Raises:
        InvalidConfigurationError: If ``granularity`` is unknown.
    """

    resolved = Granularity.parse(granularity)

    def chained() -> Iterator[Token]:
        for document in documents:
            yield from tokenize(document, resolved, drop_trailing=drop_trailing)

    return chained()
