"""Unit tests for corpus loaders."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tidy_sentiment.io import corpus_io
from tidy_sentiment.io.corpus_io import load_json_records, load_pdf_pages, load_text_file, load_text_lines
from tidy_sentiment.models import Document


def test_load_text_lines_uses_line_numbers_and_skips_blanks(tmp_path: Path) -> None:
    path = tmp_path / "corpus.txt"
    path.write_text("first line\n\nthird line\n", encoding="utf-8")

    assert load_text_lines(path) == [Document(1, "first line"), Document(3, "third line")]


def test_load_text_file_returns_single_document(tmp_path: Path) -> None:
    path = tmp_path / "book.txt"
    path.write_text("Para one.\n\nPara two.\n", encoding="utf-8")

    documents = load_text_file(path)

    assert len(documents) == 1
    assert documents[0].id == "book"
    assert documents[0].text == "Para one.\n\nPara two.\n"


def test_load_json_records_from_envelope_keeps_metadata(tmp_path: Path) -> None:
    path = tmp_path / "tweets.json"
    payload = {
        "data": [
            {"id": "111", "text": "Loving it", "author_id": "9"},
            {"id": "112", "text": None},
            {"text": "no id"},
        ]
    }
    path.write_text(json.dumps(payload), encoding="utf-8")

    documents = load_json_records(path)

    assert [doc.id for doc in documents] == ["111", "112", "record-3"]
    assert documents[0].metadata == {"author_id": "9"}
    assert documents[1].text == ""


def test_load_json_lines_with_custom_fields(tmp_path: Path) -> None:
    path = tmp_path / "posts.jsonl"
    path.write_text(
        '{"post": 1, "body": "great"}\n\n{"post": 2, "body": "awful"}\n',
        encoding="utf-8",
    )

    documents = load_json_records(path, id_field="post", text_field="body")

    assert documents == [Document(1, "great"), Document(2, "awful")]


def test_load_json_lines_reports_bad_row(tmp_path: Path) -> None:
    path = tmp_path / "broken.jsonl"
    path.write_text('{"id": 1, "text": "ok"}\n{"id": 2,\n', encoding="utf-8")

    with pytest.raises(ValueError, match="line 2"):
        load_json_records(path)


def test_missing_corpus_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_text_lines(tmp_path / "missing.txt")


class _FakePage:
    def __init__(self, text: str | None) -> None:
        self._text = text

    def extract_text(self) -> str | None:
        return self._text


class _FakePdf:
    def __init__(self, texts: list[str | None]) -> None:
        self.pages = [_FakePage(text) for text in texts]

    def __enter__(self) -> "_FakePdf":
        return self

    def __exit__(self, *exc: object) -> None:
        return None


def test_load_pdf_pages_respects_page_range(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "book.pdf"
    path.write_bytes(b"%PDF-1.4\n")
    monkeypatch.setattr(
        corpus_io.pdfplumber, "open", lambda _path: _FakePdf(["cover", None, "body text", "index"])
    )

    documents = load_pdf_pages(path, page_start=2, page_end=3)

    assert [(doc.id, doc.text) for doc in documents] == [(2, ""), (3, "body text")]


def test_json_fallback_ids_never_collide_with_numeric_ids(tmp_path: Path) -> None:
    path = tmp_path / "tweets.json"
    path.write_text(json.dumps([{"id": 2, "text": "good day"}, {"text": "bad day"}]), encoding="utf-8")

    documents = load_json_records(path)

    assert [doc.id for doc in documents] == [2, "record-2"]
