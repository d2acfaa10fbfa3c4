"""Markdown report generation for sentiment run summaries."""

from __future__ import annotations

from typing import Iterable, Sequence

from tidy_sentiment.io.tsv_io import format_key
from tidy_sentiment.models import PipelineResult, UnitScore
from tidy_sentiment.stages.stage4_score import (
    count_label_words,
    count_words,
    most_negative,
    most_positive,
)
from tidy_sentiment.validation import collect_label_counts


def _markdown_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a deterministic GitHub-flavored markdown table.

    Args:
        headers: Table header labels.
        rows: Table body rows as string sequences.

    Returns:
        Markdown table text.
    """

    line_header = "| " + " | ".join(headers) + " |"
    line_sep = "| " + " | ".join("---" for _ in headers) + " |"
    body = ["| " + " | ".join(row) + " |" for row in rows]
    return "\n".join([line_header, line_sep, *body])


def _score_rows(scores: Sequence[UnitScore]) -> list[tuple[str, str, str, str]]:
    return [
        (format_key(score.key), str(score.positive), str(score.negative), f"{score.positivity:.3f}")
        for score in scores
    ]


def build_report_md(result: PipelineResult, top_n: int = 5) -> str:
    """Build the markdown report for one pipeline run.

    Args:
        result: Pipeline output bundle.
        top_n: Rows shown in each ranked table.

    Returns:
        Full markdown content with summary tables.
    """

    label_counts = collect_label_counts(result.matches)
    label_rows = [
        (label, str(label_counts[label]))
        for label in sorted(label_counts, key=lambda item: (-label_counts[item], item))
    ]

    word_rows = [(word, str(count)) for word, count in count_words(result.words)[:top_n]]

    label_word_rows = [
        (label, ", ".join(f"{word} ({count})" for word, count in pairs[:top_n]))
        for label, pairs in count_label_words(result.matches).items()
    ]

    score_headers = ["unit", "positive", "negative", "positivity"]

    sections = [
        "# Sentiment Report",
        "",
        f"- Units: {len(result.units)}",
        f"- Words after stopword removal: {len(result.words)}",
        f"- Lexicon matches: {len(result.matches)}",
        f"- Scored units: {len(result.scores)}",
        "",
        "## Most common words",
        _markdown_table(["word", "count"], word_rows),
        "",
        "## Matches per sentiment",
        _markdown_table(["sentiment", "count"], label_rows),
        "",
        "## Top words per sentiment",
        _markdown_table(["sentiment", "words"], label_word_rows),
        "",
        "## Most positive units",
        _markdown_table(score_headers, _score_rows(most_positive(result.scores, top_n))),
        "",
        "## Most negative units",
        _markdown_table(score_headers, _score_rows(most_negative(result.scores, top_n))),
    ]

    return "\n".join(sections) + "\n"
