"""CLI entrypoint for the lexicon sentiment pipeline."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from tidy_sentiment.io.corpus_io import (
    load_json_records,
    load_pdf_pages,
    load_text_file,
    load_text_lines,
)
from tidy_sentiment.io.tsv_io import format_key, score_header, write_scores_tsv
from tidy_sentiment.lexicon.repository import LexiconRepository
from tidy_sentiment.lexicon.stopwords import DEFAULT_STOPWORDS, StopwordRepository
from tidy_sentiment.models import Document, Granularity
from tidy_sentiment.pipeline import PipelineConfig, run_pipeline
from tidy_sentiment.reporting.report_md import build_report_md
from tidy_sentiment.stages.stage4_score import GROUP_KEYS, most_negative, most_positive

CORPUS_FORMATS = ("lines", "text", "json", "pdf")


def _resolve_default_lexicon_path() -> Path:
    """Resolve default lexicon path from project layout.

    Returns:
        Preferred lexicon path, favoring ``data/lexicon.tsv`` when present and
        falling back to project-root ``lexicon.tsv``.
    """

    cwd_data = Path("data") / "lexicon.tsv"
    if cwd_data.exists():
        return cwd_data
    return Path("lexicon.tsv")


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser for the scoring command.
    """

    parser = argparse.ArgumentParser(
        description="Score text units against a sentiment lexicon and write a TSV."
    )
    parser.add_argument("--corpus", required=True, type=Path, help="Path to source corpus file.")
    parser.add_argument(
        "--format",
        choices=CORPUS_FORMATS,
        default="text",
        help="Corpus layout: one document per line, whole file, JSON records, or PDF pages.",
    )
    parser.add_argument("--output", required=True, type=Path, help="Destination TSV output path.")
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Markdown report output path (default: report.md next to TSV).",
    )
    parser.add_argument(
        "--lexicon",
        type=Path,
        default=_resolve_default_lexicon_path(),
        help="Path to sentiment lexicon TSV.",
    )
    parser.add_argument(
        "--lexicon-name",
        default=None,
        help="Select a named sub-lexicon when the lexicon file bundles several.",
    )
    parser.add_argument(
        "--stopwords",
        type=Path,
        default=None,
        help="Stopword list file (default: bundled English list).",
    )
    parser.add_argument("--no-stopwords", action="store_true", help="Disable stopword removal.")
    parser.add_argument(
        "--unit",
        default=Granularity.PARAGRAPH.value,
        choices=[member.value for member in Granularity],
        help="Unit of analysis to score.",
    )
    parser.add_argument(
        "--group-key",
        default="ordinal",
        choices=sorted(GROUP_KEYS),
        help="Grouping key for aggregation.",
    )
    parser.add_argument(
        "--drop-trailing",
        type=int,
        default=0,
        help="Discard this many trailing paragraphs or sentences per document (e.g. a footer).",
    )
    parser.add_argument("--id-field", default="id", help="JSON record id field.")
    parser.add_argument("--text-field", default="text", help="JSON record text field.")
    parser.add_argument("--page-start", type=int, default=None, help="1-based PDF start page.")
    parser.add_argument("--page-end", type=int, default=None, help="1-based PDF end page.")
    parser.add_argument("--top", type=int, default=5, help="Rows in ranked summaries.")
    parser.add_argument("--no-header", action="store_true", help="Do not write TSV header.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def load_corpus(args: argparse.Namespace) -> list[Document]:
    """Load documents according to ``--format``."""

    if args.format == "lines":
        return load_text_lines(args.corpus)
    if args.format == "json":
        return load_json_records(args.corpus, id_field=args.id_field, text_field=args.text_field)
    if args.format == "pdf":
        return load_pdf_pages(args.corpus, page_start=args.page_start, page_end=args.page_end)
    return load_text_file(args.corpus)


def _print_rankings(scores, top_n: int) -> None:
    """Print most positive and most negative unit tables."""

    if not scores:
        print("No lexicon matches; skipping ranking output.")
        return

    headers = ["unit", "positive", "negative", "positivity"]
    for title, ranked in (
        ("Most positive units:", most_positive(scores, top_n)),
        ("Most negative units:", most_negative(scores, top_n)),
    ):
        rows = [
            [
                format_key(score.key),
                str(score.positive),
                str(score.negative),
                f"{score.positivity:.3f}",
            ]
            for score in ranked
        ]
        print(f"\n{title}")
        print(_format_table(headers, rows))


def main(argv: Sequence[str] | None = None) -> int:
    """Run CLI workflow from arguments through artifact generation.

    Returns:
        Zero exit status on success.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.corpus.exists():
        raise SystemExit(f"Corpus not found: {args.corpus}")
    if not args.lexicon.exists():
        raise SystemExit(f"Lexicon not found: {args.lexicon}")

    report_path = args.report if args.report is not None else args.output.parent / "report.md"

    if args.no_stopwords:
        stopwords: frozenset[str] = frozenset()
    elif args.stopwords is not None:
        stopwords = StopwordRepository(args.stopwords).words
    else:
        stopwords = DEFAULT_STOPWORDS

    lexicon_repo = LexiconRepository(args.lexicon, lexicon=args.lexicon_name)
    config = PipelineConfig(
        unit=args.unit,
        group_key=args.group_key,
        drop_trailing=args.drop_trailing,
        labels=lexicon_repo.labels(),
    )

    result = run_pipeline(
        load_corpus(args),
        lexicon=lexicon_repo.labels_by_word,
        stopwords=stopwords,
        config=config,
    )

    write_scores_tsv(result.scores, output_path=args.output, include_header=not args.no_header)
    report_path.write_text(build_report_md(result, top_n=args.top), encoding="utf-8")

    print(f"Wrote {len(result.scores)} unit scores to {args.output}")
    print(f"Wrote report to {report_path}")
    print(f"Columns: {', '.join(score_header(result.scores))}")
    _print_rankings(result.scores, args.top)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
