"""pypdf backend extracting positioned text fragments."""

from __future__ import annotations

import io
from typing import Any, Sequence

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from ..exceptions import DecodeError
from ..types import DocumentMetadata, TextFragment
from ..utils import get_logger
from .base import PageDecoder

LOGGER = get_logger(__name__)

Matrix = Sequence[float]


def _fragment_origin(cm: Matrix | None, tm: Matrix | None) -> tuple[float, float]:
    """Map the text matrix origin through the current transformation matrix."""
    if not tm or len(tm) < 6:
        return 0.0, 0.0
    x, y = float(tm[4]), float(tm[5])
    if not cm or len(cm) < 6:
        return x, y
    return (
        x * cm[0] + y * cm[2] + cm[4],
        x * cm[1] + y * cm[3] + cm[5],
    )


class PypdfDecoder(PageDecoder):
    """Decoder that uses :class:`pypdf.PdfReader` under the hood."""

    def __init__(self, raw: bytes, password: str | None = None) -> None:
        try:
            self._stream = io.BytesIO(raw)
            self.reader = PdfReader(self._stream)
        except PdfReadError as exc:
            raise DecodeError(f"Corrupted or invalid PDF document: {exc}") from exc
        except Exception as exc:
            raise DecodeError(f"Unexpected error reading PDF: {exc}") from exc

        if self.reader.is_encrypted:
            try:
                unlocked = self.reader.decrypt(password or "")
            except Exception as exc:
                raise DecodeError(f"Unable to decrypt PDF: {exc}") from exc
            if not unlocked:
                raise DecodeError("PDF is encrypted. Supply a password to process this file.")

    def page_count(self) -> int:
        try:
            return len(self.reader.pages)
        except Exception as exc:
            raise DecodeError(f"Unable to read the page tree: {exc}") from exc

    def get_page_text_fragments(self, index: int) -> list[TextFragment]:
        count = self.page_count()
        if not 1 <= index <= count:
            raise DecodeError(f"Page {index} out of bounds for document with {count} pages")

        fragments: list[TextFragment] = []

        def visitor(text: str, cm: Matrix, tm: Matrix, font_dict: Any, font_size: Any) -> None:
            cleaned = text.replace("\r", "").replace("\n", "")
            if not cleaned:
                return
            x, y = _fragment_origin(cm, tm)
            fragments.append(TextFragment(text=cleaned, x=x, y=y))

        try:
            self.reader.pages[index - 1].extract_text(visitor_text=visitor)
        except Exception as exc:
            raise DecodeError(f"Page {index} is corrupt: {exc}") from exc

        LOGGER.debug("Page %d: extracted %d text fragments", index, len(fragments))
        return fragments

    def metadata(self) -> DocumentMetadata:
        try:
            raw = self.reader.metadata
        except Exception as exc:
            raise DecodeError(f"Unable to read document information: {exc}") from exc
        if not raw:
            return DocumentMetadata()

        def _field(key: str) -> str | None:
            value = raw.get(key)
            return str(value) if value else None

        return DocumentMetadata(
            title=_field("/Title"),
            author=_field("/Author"),
            subject=_field("/Subject"),
            keywords=_field("/Keywords"),
        )

    def close(self) -> None:
        self._stream.close()
