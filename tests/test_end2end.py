from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pytest
from docx import Document

from pdf2word import ConversionError, ConversionOptions, convert_document, convert_file


def test_convert_document_end_to_end(sample_pdf: Path):
    updates = []

    result = convert_document(sample_pdf.read_bytes(), sample_pdf.name, updates.append)

    assert result.filename == "sample.docx"
    assert result.page_count == 2
    assert [u.current_page_index for u in updates] == [1, 2]

    document = Document(BytesIO(result.content))
    texts = [paragraph.text.strip() for paragraph in document.paragraphs if paragraph.text.strip()]
    assert texts == [
        "Top line",
        "Bottom line",
        "--- Page Break ---",
        "Second page",
        "--- Page Break ---",
    ]
    assert len(document.inline_shapes) == 2
    assert document.core_properties.title == "Sample Document"
    assert document.core_properties.author == "Jane Doe"


def test_convert_file_writes_docx(sample_pdf: Path, tmp_path: Path):
    output_dir = tmp_path / "out"

    destination = convert_file(sample_pdf, output_dir)

    assert destination == (output_dir / "sample.docx").resolve()
    assert destination.exists()
    Document(str(destination))


def test_convert_file_with_zero_pages(tmp_path: Path, empty_pdf_bytes: bytes):
    source = tmp_path / "empty.pdf"
    source.write_bytes(empty_pdf_bytes)

    assert convert_file(source) is None
    assert not (tmp_path / "empty.docx").exists()


def test_corrupt_document_reports_decode_error(tmp_path: Path):
    source = tmp_path / "broken.pdf"
    source.write_bytes(b"%PDF-1.4\nthis is not really a pdf")

    with pytest.raises(ConversionError) as excinfo:
        convert_file(source, options=ConversionOptions())

    assert excinfo.value.kind == "DecodeError"
    assert excinfo.value.last_page == 0


def test_missing_file_is_a_precondition_error(tmp_path: Path):
    with pytest.raises(ConversionError) as excinfo:
        convert_file(tmp_path / "missing.pdf")

    assert excinfo.value.kind == "PreconditionError"
