"""PyMuPDF backend rendering full pages to PNG."""

from __future__ import annotations

import fitz

from ..exceptions import RenderError
from ..types import RasterImage
from ..utils import get_logger
from .base import PageRasterizer

LOGGER = get_logger(__name__)


class PyMuPDFRasterizer(PageRasterizer):
    """Rasterizer that opens the document once and renders pages on demand."""

    def __init__(self, raw: bytes) -> None:
        try:
            self.document = fitz.open(stream=raw, filetype="pdf")
        except Exception as exc:
            raise RenderError(f"Unable to open document for rendering: {exc}") from exc

    def render_to_image(self, index: int, scale: float) -> RasterImage:
        if not 1 <= index <= self.document.page_count:
            raise RenderError(
                f"Page {index} out of bounds for document with {self.document.page_count} pages"
            )
        try:
            page = self.document.load_page(index - 1)
            pixmap = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
            data = pixmap.tobytes("png")
        except MemoryError as exc:
            raise RenderError(f"Out of memory rendering page {index}") from exc
        except Exception as exc:
            raise RenderError(f"Unable to render page {index}: {exc}") from exc

        LOGGER.debug(
            "Page %d: rendered %dx%d image at scale %.1f",
            index,
            pixmap.width,
            pixmap.height,
            scale,
        )
        return RasterImage(data=data, width=pixmap.width, height=pixmap.height, format="png")

    def close(self) -> None:
        self.document.close()
