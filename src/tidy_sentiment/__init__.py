"""Lexicon-based sentiment scoring pipeline package."""

from .errors import InvalidConfigurationError
from .models import Document, Granularity, MatchedToken, PipelineResult, Token, UnitScore

__all__ = [
    "Document",
    "Granularity",
    "InvalidConfigurationError",
    "MatchedToken",
    "PipelineResult",
    "Token",
    "UnitScore",
]
