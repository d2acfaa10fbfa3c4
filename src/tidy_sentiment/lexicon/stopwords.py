"""Stopword sources: a bundled English list and file-backed repositories."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
import logging
from pathlib import Path

from tidy_sentiment.errors import InvalidConfigurationError
from tidy_sentiment.stages.stage2_filter import normalize_stopwords

logger = logging.getLogger(__name__)

DEFAULT_STOPWORDS = normalize_stopwords(
    """
    a about above after again against all am an and any are as at be because
    been before being below between both but by can could did do does doing
    down during each few for from further had has have having he her here hers
    herself him himself his how i if in into is it its itself just me more most
    my myself no nor not now of off on once only or other our ours ourselves
    out over own same she should so some such than that the their theirs them
    themselves then there these they this those through to too under until up
    very was we were what when where which while who whom why will with would
    you your yours yourself yourselves i'm you're he's she's it's we're they're
    i've you've we've they've i'd you'd he'd she'd we'd they'd i'll you'll
    he'll she'll we'll they'll isn't aren't wasn't weren't hasn't haven't
    hadn't doesn't don't didn't won't wouldn't shan't shouldn't can't cannot
    couldn't mustn't let's that's who's what's here's there's when's where's
    why's how's
    """.split()
)


@dataclass(frozen=True)
class StopwordRepository:
    """Read-only stopword list loaded from a text file.

    Each non-comment line holds one word, optionally followed by a tab and a
    lexicon tag (the layout of tidytext's ``stop_words`` table). ``lexicon``
    keeps only words carrying that tag.
    """

    path: Path
    lexicon: str | None = None

    @cached_property
    def words(self) -> frozenset[str]:
        """Load and cache the normalized stopword set.

        Raises:
            FileNotFoundError: If the stopword file does not exist.
            InvalidConfigurationError: If ``lexicon`` matches no tagged row.
        """

        if not self.path.exists():
            raise FileNotFoundError(f"Stopword file not found: {self.path}")

        wanted = self.lexicon.strip().lower() if self.lexicon is not None else None
        selected: list[str] = []
        with self.path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if not line.strip() or line.lstrip().startswith("#"):
                    continue
                cells = [cell.strip() for cell in line.rstrip("\n").split("\t")]
                if cells[0].lower() == "word" and len(cells) > 1 and cells[1].lower() == "lexicon":
                    continue
                tag = cells[1].lower() if len(cells) > 1 else ""
                if wanted is None or tag == wanted:
                    selected.append(cells[0])

        if wanted is not None and not selected:
            raise InvalidConfigurationError(
                f"Stopword lexicon {self.lexicon!r} not found in {self.path}"
            )

        words = normalize_stopwords(selected)
        logger.info("Loaded %d stopwords from %s", len(words), self.path)
        return words
