from __future__ import annotations

from io import BytesIO

import pytest
from docx import Document

from conftest import png_bytes
from pdf2word.backends import DocxSerializer, PyMuPDFRasterizer, PypdfDecoder
from pdf2word.exceptions import DecodeError, RenderError, SerializeError
from pdf2word.grouping import group_into_lines
from pdf2word.types import DocumentMetadata, ImageBlock, RasterImage, TextBlock, TextStyle


def test_pypdf_decoder_extracts_positioned_fragments(pdf_factory):
    raw = pdf_factory([[(20, 150, "Top line"), (20, 60, "Bottom line")]])
    decoder = PypdfDecoder(raw)

    fragments = decoder.get_page_text_fragments(1)

    assert decoder.page_count() == 1
    top = next(fragment for fragment in fragments if "Top" in fragment.text)
    bottom = next(fragment for fragment in fragments if "Bottom" in fragment.text)
    assert top.y > bottom.y
    assert abs(top.y - 150) < 2
    assert abs(bottom.y - 60) < 2

    lines = group_into_lines(fragments)
    assert [line.text.strip() for line in lines] == ["Top line", "Bottom line"]
    decoder.close()


def test_pypdf_decoder_reads_metadata(pdf_factory):
    raw = pdf_factory([[]], metadata={"/Title": "Quarterly", "/Author": "Jane Doe"})

    metadata = PypdfDecoder(raw).metadata()

    assert metadata == DocumentMetadata(title="Quarterly", author="Jane Doe")


def test_pypdf_decoder_carries_only_fields_with_docx_counterparts(pdf_factory):
    raw = pdf_factory(
        [[]],
        metadata={
            "/Title": "Quarterly",
            "/Author": "Jane Doe",
            "/Subject": "Finance",
            "/Keywords": "q3, revenue",
            "/Creator": "Writer",
        },
    )

    metadata = PypdfDecoder(raw).metadata()

    assert metadata == DocumentMetadata(
        title="Quarterly",
        author="Jane Doe",
        subject="Finance",
        keywords="q3, revenue",
    )

    document = Document(BytesIO(DocxSerializer().serialize([TextBlock("x")], metadata)))
    assert document.core_properties.subject == "Finance"
    assert document.core_properties.keywords == "q3, revenue"



def test_pypdf_decoder_handles_documents_without_pages(empty_pdf_bytes):
    decoder = PypdfDecoder(empty_pdf_bytes)

    assert decoder.page_count() == 0


def test_pypdf_decoder_rejects_garbage():
    with pytest.raises(DecodeError):
        PypdfDecoder(b"this is not a pdf")


def test_pypdf_decoder_rejects_out_of_range_pages(pdf_factory):
    decoder = PypdfDecoder(pdf_factory([[(10, 10, "x")]]))

    with pytest.raises(DecodeError, match="out of bounds"):
        decoder.get_page_text_fragments(2)


def test_pymupdf_rasterizer_renders_scaled_png(pdf_factory):
    rasterizer = PyMuPDFRasterizer(pdf_factory([[(20, 100, "Hello")]]))

    image = rasterizer.render_to_image(1, 2.0)

    assert image.format == "png"
    assert image.data.startswith(b"\x89PNG")
    assert (image.width, image.height) == (400, 400)
    rasterizer.close()


def test_pymupdf_rasterizer_rejects_bad_input(pdf_factory):
    with pytest.raises(RenderError):
        PyMuPDFRasterizer(b"not a pdf at all")

    rasterizer = PyMuPDFRasterizer(pdf_factory([[]]))
    with pytest.raises(RenderError, match="out of bounds"):
        rasterizer.render_to_image(3, 2.0)


def test_docx_serializer_writes_paragraphs_images_and_metadata():
    image = RasterImage(data=png_bytes(8, 4), width=8, height=4)
    blocks = [
        TextBlock("Hello world"),
        ImageBlock(image=image, display_width=600, display_height=300),
        TextBlock("--- Page Break ---", TextStyle(italic=True)),
    ]

    payload = DocxSerializer().serialize(blocks, DocumentMetadata(title="Report", author="Jane"))

    document = Document(BytesIO(payload))
    paragraphs = document.paragraphs
    assert paragraphs[0].text == "Hello world"
    assert paragraphs[2].text == "--- Page Break ---"
    assert paragraphs[2].runs[0].italic is True
    assert len(document.inline_shapes) == 1
    shape = document.inline_shapes[0]
    assert shape.width.inches == pytest.approx(6.25)
    assert shape.height.inches == pytest.approx(3.125)
    assert document.core_properties.title == "Report"
    assert document.core_properties.author == "Jane"


def test_docx_serializer_wraps_failures():
    broken = ImageBlock(image=RasterImage(data=b"not an image", width=1, height=1), display_width=10, display_height=10)

    with pytest.raises(SerializeError):
        DocxSerializer().serialize([broken])
