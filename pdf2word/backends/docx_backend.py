"""python-docx backend writing the block sequence as a DOCX package."""

from __future__ import annotations

from io import BytesIO
from typing import Sequence

from docx import Document
from docx.shared import Inches

from ..exceptions import SerializeError
from ..types import DocumentMetadata, ImageBlock, OutputBlock, TextBlock
from ..utils import get_logger
from .base import DocumentSerializer

LOGGER = get_logger(__name__)

# display units are CSS pixels
PIXELS_PER_INCH = 96


class DocxSerializer(DocumentSerializer):
    """Serializer producing one paragraph per block in a single section."""

    def serialize(
        self,
        blocks: Sequence[OutputBlock],
        metadata: DocumentMetadata | None = None,
    ) -> bytes:
        try:
            document = Document()
            for block in blocks:
                if isinstance(block, TextBlock):
                    self._add_text(document, block)
                elif isinstance(block, ImageBlock):
                    self._add_image(document, block)
                else:
                    raise TypeError(f"Unsupported block type: {type(block).__name__}")
            if metadata is not None and not metadata.is_empty():
                self._apply_metadata(document, metadata)
            buffer = BytesIO()
            document.save(buffer)
        except Exception as exc:
            raise SerializeError(f"DOCX generation failed: {exc}") from exc

        payload = buffer.getvalue()
        LOGGER.debug("Serialized %d blocks into %d bytes", len(blocks), len(payload))
        return payload

    @staticmethod
    def _add_text(document, block: TextBlock) -> None:
        paragraph = document.add_paragraph()
        run = paragraph.add_run(block.text)
        if block.style.italic:
            run.italic = True

    @staticmethod
    def _add_image(document, block: ImageBlock) -> None:
        paragraph = document.add_paragraph()
        paragraph.add_run().add_picture(
            BytesIO(block.image.data),
            width=Inches(block.display_width / PIXELS_PER_INCH),
            height=Inches(block.display_height / PIXELS_PER_INCH),
        )

    @staticmethod
    def _apply_metadata(document, metadata: DocumentMetadata) -> None:
        core = document.core_properties
        if metadata.title:
            core.title = metadata.title
        if metadata.author:
            core.author = metadata.author
        if metadata.subject:
            core.subject = metadata.subject
        if metadata.keywords:
            core.keywords = metadata.keywords
