"""Unit tests for markdown report generation."""

from __future__ import annotations

from tidy_sentiment.models import Document
from tidy_sentiment.pipeline import run_pipeline
from tidy_sentiment.reporting.report_md import build_report_md


def test_build_report_md_contains_required_sections() -> None:
    """Report output should include all required summary sections."""

    result = run_pipeline(
        [Document(1, "Good day.\n\nBad night, bad dream.")],
        lexicon={"good": ["positive", "joy"], "bad": ["negative"]},
    )

    markdown = build_report_md(result, top_n=3)

    assert "## Most common words" in markdown
    assert "## Matches per sentiment" in markdown
    assert "## Top words per sentiment" in markdown
    assert "## Most positive units" in markdown
    assert "## Most negative units" in markdown
    assert "| word | count |" in markdown
    assert "| bad | 2 |" in markdown
    assert "| negative | bad (2) |" in markdown
    assert "| 2 | 0 | 2 | -0.667 |" in markdown
