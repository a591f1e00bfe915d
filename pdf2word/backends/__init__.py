"""Backend abstractions for pdf2word."""

from .base import DecoderFactory, DocumentSerializer, PageDecoder, PageRasterizer, RasterizerFactory
from .docx_backend import DocxSerializer
from .pymupdf_backend import PyMuPDFRasterizer
from .pypdf_backend import PypdfDecoder

__all__ = [
    "DecoderFactory",
    "DocumentSerializer",
    "DocxSerializer",
    "PageDecoder",
    "PageRasterizer",
    "PyMuPDFRasterizer",
    "PypdfDecoder",
    "RasterizerFactory",
]
