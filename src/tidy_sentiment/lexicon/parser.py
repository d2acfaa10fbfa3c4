"""Parsing utilities for tab-separated sentiment lexicon files."""

from __future__ import annotations

import logging
from typing import Iterable

from tidy_sentiment.models import LexiconEntry

logger = logging.getLogger(__name__)

ASSOCIATION_FLAGS = {"0", "1"}


def _parse_positional(cells: list[str]) -> LexiconEntry | None:
    """Parse ``word, sentiment[, lexicon | association]`` cells.

    A third column holding ``0`` or ``1`` is read as an NRC-style association
    flag: ``0`` rows are skipped and ``1`` rows kept without a lexicon tag.
    """

    if len(cells) < 2:
        return None
    word, sentiment = cells[0], cells[1]
    lexicon = cells[2] if len(cells) > 2 else ""
    if lexicon in ASSOCIATION_FLAGS:
        if lexicon == "0":
            return None
        lexicon = ""
    return LexiconEntry(word=word, sentiment=sentiment, lexicon=lexicon)


def parse_lexicon_lines(lines: Iterable[str]) -> list[LexiconEntry]:
    """Parse lexicon rows into normalized entries.

    The parser accepts either a header row naming ``word`` and ``sentiment``
    columns (plus an optional ``lexicon`` column) or plain positional rows
    ``word<TAB>sentiment[<TAB>lexicon]``. The NRC word-emotion association
    layout ``word<TAB>emotion<TAB>0|1`` is also accepted. Comments (``#``),
    blank lines and rows with empty fields are ignored.

    Args:
        lines: Iterator of raw lexicon lines.

    Returns:
        Entries in source order with lower-cased words and labels.
    """

    rows = [
        [cell.strip() for cell in line.rstrip("\n").split("\t")]
        for line in lines
        if line.strip() and not line.lstrip().startswith("#")
    ]
    if not rows:
        return []

    header = [cell.lower() for cell in rows[0]]
    if {"word", "sentiment"}.issubset(header):
        idx_word = header.index("word")
        idx_sentiment = header.index("sentiment")
        idx_lexicon = header.index("lexicon") if "lexicon" in header else None
        data_rows = rows[1:]
    else:
        idx_word = idx_sentiment = idx_lexicon = None
        data_rows = rows

    entries: list[LexiconEntry] = []
    skipped = 0
    for cells in data_rows:
        if idx_word is None:
            entry = _parse_positional(cells)
        elif len(cells) <= max(idx_word, idx_sentiment):
            entry = None
        else:
            lexicon = ""
            if idx_lexicon is not None and idx_lexicon < len(cells):
                lexicon = cells[idx_lexicon]
            entry = LexiconEntry(
                word=cells[idx_word],
                sentiment=cells[idx_sentiment],
                lexicon=lexicon,
            )

        if entry is None or not entry.word or not entry.sentiment:
            skipped += 1
            continue
        entries.append(
            LexiconEntry(
                word=entry.word.lower(),
                sentiment=entry.sentiment.lower(),
                lexicon=entry.lexicon.lower(),
            )
        )

    if skipped:
        logger.debug("Skipped %d lexicon rows without a usable word/sentiment pair", skipped)
    return entries
