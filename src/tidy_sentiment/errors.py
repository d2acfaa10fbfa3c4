"""Exception types raised by pipeline configuration checks."""

from __future__ import annotations


class InvalidConfigurationError(ValueError):
    """Raised when a granularity, grouping key, or lexicon selector is unknown.

    Subclassing ``ValueError`` keeps callers that already guard stage inputs
    with ``except ValueError`` working unchanged.
    """
