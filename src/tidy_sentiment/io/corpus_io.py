"""Corpus loaders that turn text, JSON, and PDF sources into ``Document`` records.

Loaders are the only part of the package that touches the filesystem on the
input side. Documents are returned in source order and never carry ``None``
text: missing or non-string text becomes an empty string.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator

import pdfplumber

from tidy_sentiment.models import Document

logger = logging.getLogger(__name__)


def _require(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"Corpus file not found: {path}")


def _coerce_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def load_text_lines(path: Path) -> list[Document]:
    """Load one document per non-blank line, keyed by 1-based line number.

    Args:
        path: UTF-8 text file.

    Returns:
        Documents in file order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """

    _require(path)
    documents: list[Document] = []
    with path.open("r", encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            text = line.rstrip("\n")
            if text.strip():
                documents.append(Document(id=line_number, text=text))
    logger.info("Loaded %d line documents from %s", len(documents), path)
    return documents


def load_text_file(path: Path) -> list[Document]:
    """Load a whole text file as a single document keyed by the file stem.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """

    _require(path)
    text = path.read_text(encoding="utf-8")
    return [Document(id=path.stem, text=text, metadata={"source": str(path)})]


def _iter_json_records(path: Path) -> Iterator[Any]:
    """Yield records from a JSON array, a ``{"data": [...]}`` envelope, or JSON lines."""

    raw = path.read_text(encoding="utf-8")
    stripped = raw.lstrip()
    if not stripped:
        return

    if stripped[0] in "[{":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            payload = None
        else:
            if isinstance(payload, dict):
                payload = payload.get("data", [payload])
            if isinstance(payload, list):
                yield from payload
                return

    for line_number, line in enumerate(raw.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            yield json.loads(line)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON on line {line_number} of {path}: {exc.msg}") from exc


def load_json_records(
    path: Path,
    id_field: str = "id",
    text_field: str = "text",
) -> list[Document]:
    """Load records such as tweets from a JSON array or JSON-lines file.

    Fields other than ``id_field`` and ``text_field`` are kept as metadata.
    Records missing an id get ``record-<position>`` (1-based) so the fallback
    never collides with a numeric id on another record.

    Args:
        path: JSON or JSON-lines file.
        id_field: Record field holding the document id.
        text_field: Record field holding the text.

    Returns:
        Documents in record order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If a JSON-lines row is malformed or a record is not an object.
    """

    _require(path)
    documents: list[Document] = []
    for position, record in enumerate(_iter_json_records(path), start=1):
        if not isinstance(record, dict):
            raise ValueError(f"Record {position} in {path} is not a JSON object")
        doc_id = record.get(id_field)
        metadata = {k: v for k, v in record.items() if k not in (id_field, text_field)}
        documents.append(
            Document(
                id=doc_id if doc_id is not None else f"record-{position}",
                text=_coerce_text(record.get(text_field)),
                metadata=metadata,
            )
        )
    logger.info("Loaded %d JSON documents from %s", len(documents), path)
    return documents


def load_pdf_pages(
    path: Path,
    page_start: int | None = None,
    page_end: int | None = None,
) -> list[Document]:
    """Load one document per PDF page, keyed by 1-based page number.

    Page boundaries are inclusive and 1-based to match human page references.
    Pages without extractable text become empty documents.

    Args:
        path: Source PDF.
        page_start: 1-based start page; ``None`` means first page.
        page_end: 1-based end page; ``None`` means last page.

    Returns:
        Documents in page order.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """

    _require(path)
    documents: list[Document] = []
    with pdfplumber.open(path) as pdf:
        total_pages = len(pdf.pages)
        start_idx = 0 if page_start is None else max(page_start - 1, 0)
        end_idx = total_pages - 1 if page_end is None else min(page_end - 1, total_pages - 1)

        for page_idx in range(start_idx, end_idx + 1):
            text = pdf.pages[page_idx].extract_text() or ""
            documents.append(
                Document(id=page_idx + 1, text=text, metadata={"source": str(path)})
            )
    logger.info("Loaded %d PDF pages from %s", len(documents), path)
    return documents
