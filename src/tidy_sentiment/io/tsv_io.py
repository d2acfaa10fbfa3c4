"""TSV write helpers for pipeline output artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import Hashable, Mapping

from tidy_sentiment.models import UnitScore


def format_key(key: Hashable) -> str:
    """Render a grouping key for output; tuple keys are joined with ``:``."""

    if isinstance(key, tuple):
        return ":".join(str(part) for part in key)
    return str(key)


def score_header(scores: Mapping[Hashable, UnitScore]) -> list[str]:
    """Return the TSV header: ``key``, each label in sorted order, ``positivity``."""

    labels: list[str] = []
    for score in scores.values():
        labels = sorted(score.counts)
        break
    return ["key", *labels, "positivity"]


def write_scores_tsv(
    scores: Mapping[Hashable, UnitScore],
    output_path: Path,
    include_header: bool = True,
) -> None:
    """Write unit scores to a TSV file, one row per grouping key.

    Args:
        scores: Output of :func:`tidy_sentiment.stages.stage4_score.aggregate`.
        output_path: Destination TSV file path.
        include_header: Whether to include a header row.
    """

    header = score_header(scores)
    labels = header[1:-1]
    with output_path.open("w", encoding="utf-8") as handle:
        if include_header:
            handle.write("\t".join(header))
            handle.write("\n")
        for score in scores.values():
            handle.write(
                "\t".join(
                    [
                        format_key(score.key),
                        *(str(score.counts[label]) for label in labels),
                        f"{score.positivity:.6f}",
                    ]
                )
            )
            handle.write("\n")
