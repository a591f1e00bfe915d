"""Backend protocols for the conversion collaborators."""

from __future__ import annotations

from typing import Callable, Protocol, Sequence

from ..types import DocumentMetadata, OutputBlock, RasterImage, TextFragment


class PageDecoder(Protocol):
    """Text extraction for an opened document. Page indices are 1-based."""

    def page_count(self) -> int:
        """Return the number of pages in the document."""

    def get_page_text_fragments(self, index: int) -> Sequence[TextFragment]:
        """Return the positioned text fragments of page ``index``."""

    def metadata(self) -> DocumentMetadata:
        """Return the document information dictionary."""

    def close(self) -> None:
        """Release resources held by the decoder."""


class PageRasterizer(Protocol):
    """Page rendering for an opened document. Page indices are 1-based."""

    def render_to_image(self, index: int, scale: float) -> RasterImage:
        """Render page ``index`` at ``scale`` times its natural size."""

    def close(self) -> None:
        """Release resources held by the rasterizer."""


class DocumentSerializer(Protocol):
    """Encodes the block sequence into an output file."""

    def serialize(
        self,
        blocks: Sequence[OutputBlock],
        metadata: DocumentMetadata | None = None,
    ) -> bytes:
        """Return the encoded document."""


DecoderFactory = Callable[[bytes], PageDecoder]
RasterizerFactory = Callable[[bytes], PageRasterizer]
