from __future__ import annotations

import struct
import sys
import zlib
from io import BytesIO
from pathlib import Path
from typing import Callable, Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from pypdf import PdfWriter
from pypdf.generic import DictionaryObject, NameObject, NumberObject, StreamObject

from pdf2word.types import DocumentMetadata, RasterImage, TextFragment

PlacedText = tuple[float, float, str]


def png_bytes(width: int, height: int, color: tuple[int, int, int, int] = (255, 0, 0, 255)) -> bytes:
    signature = b"\x89PNG\r\n\x1a\n"
    row = bytes([0] + list(color) * width)
    payload = zlib.compress(row * height)

    def chunk(tag: bytes, data: bytes) -> bytes:
        return (
            struct.pack(">I", len(data))
            + tag
            + data
            + struct.pack(">I", zlib.crc32(tag + data) & 0xFFFFFFFF)
        )

    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return signature + chunk(b"IHDR", header) + chunk(b"IDAT", payload) + chunk(b"IEND", b"")


def _escape(text: str) -> str:
    return text.replace("\\", r"\\").replace("(", r"\(").replace(")", r"\)")


def build_pdf(
    pages: Sequence[Sequence[PlacedText]],
    *,
    metadata: dict[str, str] | None = None,
    width: float = 200,
    height: float = 200,
) -> bytes:
    """Build a PDF whose pages show each ``(x, y, text)`` in its own text object."""
    writer = PdfWriter()
    for placed in pages:
        page = writer.add_blank_page(width=width, height=height)
        font_dict = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Font"),
                NameObject("/Subtype"): NameObject("/Type1"),
                NameObject("/BaseFont"): NameObject("/Helvetica"),
            }
        )
        font_ref = writer._add_object(font_dict)
        page[NameObject("/Resources")] = DictionaryObject(
            {NameObject("/Font"): DictionaryObject({NameObject("/F1"): font_ref})}
        )
        operations = [
            f"BT /F1 12 Tf {x:g} {y:g} Td ({_escape(text)}) Tj ET" for x, y, text in placed
        ]
        content_bytes = "\n".join(operations).encode("latin-1")
        stream = StreamObject()
        stream[NameObject("/Length")] = NumberObject(len(content_bytes))
        stream._data = content_bytes
        page[NameObject("/Contents")] = writer._add_object(stream)
    if metadata:
        writer.add_metadata(metadata)
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class FakeDecoder:
    """In-memory decoder; ``fail_on`` makes that page raise."""

    def __init__(
        self,
        pages: Sequence[Sequence[TextFragment]],
        *,
        fail_on: int | None = None,
        error: Exception | None = None,
        metadata: DocumentMetadata | None = None,
    ) -> None:
        self.pages = list(pages)
        self.fail_on = fail_on
        self.error = error
        self._metadata = metadata or DocumentMetadata()
        self.requested: list[int] = []
        self.closed = False

    def page_count(self) -> int:
        return len(self.pages)

    def get_page_text_fragments(self, index: int):
        self.requested.append(index)
        if index == self.fail_on:
            raise self.error or RuntimeError(f"page {index} is corrupt")
        return self.pages[index - 1]

    def metadata(self) -> DocumentMetadata:
        return self._metadata

    def close(self) -> None:
        self.closed = True


class FakeRasterizer:
    def __init__(self, width: int = 400, height: int = 300, *, fail_on: int | None = None) -> None:
        self.width = width
        self.height = height
        self.fail_on = fail_on
        self.calls: list[tuple[int, float]] = []
        self.closed = False

    def render_to_image(self, index: int, scale: float) -> RasterImage:
        self.calls.append((index, scale))
        if index == self.fail_on:
            raise MemoryError()
        return RasterImage(data=b"png-%d" % index, width=self.width, height=self.height)

    def close(self) -> None:
        self.closed = True


class FakeSerializer:
    def __init__(self, *, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[tuple, DocumentMetadata | None]] = []

    def serialize(self, blocks, metadata=None) -> bytes:
        self.calls.append((tuple(blocks), metadata))
        if self.error is not None:
            raise self.error
        return b"docx:%d" % len(blocks)


@pytest.fixture()
def pdf_factory() -> Callable[..., bytes]:
    return build_pdf


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    path = tmp_path / "sample.pdf"
    path.write_bytes(
        build_pdf(
            [
                [(20, 150, "Top line"), (20, 60, "Bottom line")],
                [(20, 120, "Second page")],
            ],
            metadata={"/Title": "Sample Document", "/Author": "Jane Doe"},
        )
    )
    return path


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    return build_pdf([])


@pytest.fixture()
def png() -> Callable[..., bytes]:
    return png_bytes
