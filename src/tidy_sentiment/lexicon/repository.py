"""Repository utilities for loading and querying sentiment lexicons."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
import logging
from pathlib import Path
from typing import Iterable, Mapping

from tidy_sentiment.errors import InvalidConfigurationError
from tidy_sentiment.lexicon.parser import parse_lexicon_lines
from tidy_sentiment.models import LexiconEntry

logger = logging.getLogger(__name__)


def build_lexicon(mapping: Mapping[str, Iterable[str]]) -> dict[str, tuple[str, ...]]:
    """Normalize an in-memory word -> labels mapping.

    Words and labels are lower-cased. Duplicate labels are removed while the
    first-seen order is kept; words differing only in case are merged.

    Args:
        mapping: Word to label(s). A bare string value is one label.

    Returns:
        Mapping of lower-cased word to a tuple of distinct labels.
    """

    merged: dict[str, dict[str, None]] = {}
    for word, labels in mapping.items():
        if isinstance(labels, str):
            labels = (labels,)
        bucket = merged.setdefault(word.strip().lower(), {})
        for label in labels:
            bucket.setdefault(label.strip().lower(), None)
    return {word: tuple(labels) for word, labels in merged.items() if word}


@dataclass(frozen=True)
class LexiconRepository:
    """Read-only repository exposing a parsed sentiment lexicon.

    The file is parsed once on first access. When the source bundles several
    lexicons (tidytext-style ``lexicon`` column), ``lexicon`` selects the named
    sub-lexicon before any lookup view is built.
    """

    path: Path
    lexicon: str | None = None

    @cached_property
    def entries(self) -> tuple[LexiconEntry, ...]:
        """Load and cache all entries from disk, regardless of lexicon tag.

        Returns:
            Immutable tuple of parsed entries in file order.

        Raises:
            FileNotFoundError: If the configured lexicon file does not exist.
        """

        if not self.path.exists():
            raise FileNotFoundError(f"Lexicon file not found: {self.path}")

        with self.path.open("r", encoding="utf-8") as handle:
            parsed = parse_lexicon_lines(handle)

        logger.info("Loaded %d lexicon entries from %s", len(parsed), self.path)
        return tuple(parsed)

    @cached_property
    def names(self) -> tuple[str, ...]:
        """Return the sorted distinct lexicon tags present in the source."""

        return tuple(sorted({entry.lexicon for entry in self.entries if entry.lexicon}))

    @cached_property
    def selected_entries(self) -> tuple[LexiconEntry, ...]:
        """Return entries of the selected sub-lexicon, or all when unselected.

        Raises:
            InvalidConfigurationError: If the selected lexicon name is absent.
        """

        if self.lexicon is None:
            return self.entries

        name = self.lexicon.strip().lower()
        if name not in self.names:
            available = ", ".join(self.names) or "<none>"
            raise InvalidConfigurationError(
                f"Lexicon {self.lexicon!r} not found in {self.path}; available: {available}"
            )
        return tuple(entry for entry in self.entries if entry.lexicon == name)

    @cached_property
    def labels_by_word(self) -> dict[str, tuple[str, ...]]:
        """Build and cache the word -> labels lookup used by the joiner."""

        mapping: dict[str, list[str]] = {}
        for entry in self.selected_entries:
            mapping.setdefault(entry.word, []).append(entry.sentiment)
        return build_lexicon(mapping)

    def labels(self) -> tuple[str, ...]:
        """Return every distinct label of the selected lexicon, sorted."""

        return tuple(sorted({label for labels in self.labels_by_word.values() for label in labels}))

    def labels_for(self, word: str) -> tuple[str, ...]:
        """Return labels for ``word``; empty tuple when absent."""

        return self.labels_by_word.get(word.lower(), ())
