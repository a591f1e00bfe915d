"""
pdf2word - convert PDF documents into editable Word files.

Each page becomes one paragraph per reconstructed line of text, followed by
a rendered image of the page as a visual fallback and a page separator.

Quick Start:
    >>> from pdf2word import convert_document
    >>> result = convert_document(pdf_bytes, "report.pdf")
    >>> result.filename
    'report.docx'

Building blocks:
    - group_into_lines: positioned fragments -> ordered lines
    - build_page_blocks: lines + page image -> output blocks
    - LocalConverter / RemoteConverter: the two ``convert`` implementations
    - sanitize_filename / output_filename: output naming
"""

__version__ = "0.1.0"

from pdf2word.blocks import build_page_blocks
from pdf2word.config import ConversionOptions
from pdf2word.converter import (
    BaseConverter,
    LocalConverter,
    RemoteConverter,
    convert_document,
    convert_file,
    create_converter,
)
from pdf2word.exceptions import (
    ConversionError,
    DecodeError,
    Pdf2WordError,
    PreconditionError,
    ProgressError,
    RemoteError,
    RenderError,
    SerializeError,
)
from pdf2word.grouping import group_into_lines
from pdf2word.naming import output_filename, sanitize_filename
from pdf2word.runtime import configure_runtime
from pdf2word.types import (
    ConversionPhase,
    ConversionResult,
    ConversionState,
    DocumentMetadata,
    ImageBlock,
    Line,
    OutputBlock,
    ProgressUpdate,
    RasterImage,
    TextBlock,
    TextFragment,
    TextStyle,
)

__all__ = [
    "__version__",
    # Pipeline
    "group_into_lines",
    "build_page_blocks",
    "BaseConverter",
    "LocalConverter",
    "RemoteConverter",
    "create_converter",
    "convert_document",
    "convert_file",
    "configure_runtime",
    "ConversionOptions",
    # Naming
    "sanitize_filename",
    "output_filename",
    # Data types
    "TextFragment",
    "Line",
    "RasterImage",
    "TextStyle",
    "TextBlock",
    "ImageBlock",
    "OutputBlock",
    "DocumentMetadata",
    "ConversionPhase",
    "ConversionState",
    "ProgressUpdate",
    "ConversionResult",
    # Exceptions
    "Pdf2WordError",
    "DecodeError",
    "RenderError",
    "SerializeError",
    "PreconditionError",
    "ProgressError",
    "RemoteError",
    "ConversionError",
]
