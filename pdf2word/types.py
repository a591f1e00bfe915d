"""Data structures shared by the pdf2word pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


@dataclass(frozen=True, slots=True)
class TextFragment:
    """A positioned run of text extracted from a page.

    ``y`` grows towards the top of the page, ``x`` towards the right.
    """

    text: str
    x: float | None = 0.0
    y: float | None = 0.0


@dataclass(frozen=True, slots=True)
class Line:
    """Fragments sharing (approximately) the same vertical position."""

    y: float
    fragments: tuple[TextFragment, ...] = ()

    @property
    def text(self) -> str:
        return "".join(fragment.text for fragment in self.fragments)


@dataclass(frozen=True, slots=True)
class RasterImage:
    """Rendered bitmap of a full page."""

    data: bytes
    width: int
    height: int
    format: str = "png"

    def __repr__(self) -> str:
        return (
            f"RasterImage(width={self.width}, height={self.height}, "
            f"format={self.format!r}, size={len(self.data)})"
        )


@dataclass(frozen=True, slots=True)
class TextStyle:
    italic: bool = False


@dataclass(frozen=True, slots=True)
class TextBlock:
    text: str
    style: TextStyle = field(default_factory=TextStyle)


@dataclass(frozen=True, slots=True)
class ImageBlock:
    image: RasterImage
    display_width: int
    display_height: int


OutputBlock = Union[TextBlock, ImageBlock]


@dataclass(frozen=True, slots=True)
class DocumentMetadata:
    """Document information carried from the PDF into the output file."""

    title: str | None = None
    author: str | None = None
    subject: str | None = None
    keywords: str | None = None

    def is_empty(self) -> bool:
        return not any((self.title, self.author, self.subject, self.keywords))


class ConversionPhase(str, Enum):
    IDLE = "idle"
    DECODING = "decoding"
    RENDERING = "rendering"
    ASSEMBLING = "assembling"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ProgressUpdate:
    """Observer notification emitted once per completed page."""

    current_page_index: int
    total_pages: int
    status_message: str

    @property
    def percent(self) -> int:
        if self.total_pages <= 0:
            return 100
        return round(self.current_page_index * 100 / self.total_pages)


@dataclass(slots=True)
class ConversionState:
    """Mutable bookkeeping for a single conversion run."""

    total_pages: int = 0
    current_page_index: int = 0
    accumulated_blocks: list[OutputBlock] = field(default_factory=list)
    status_message: str = ""
    phase: ConversionPhase = ConversionPhase.IDLE
    failure: str | None = None

    def snapshot(self) -> ProgressUpdate:
        return ProgressUpdate(
            current_page_index=self.current_page_index,
            total_pages=self.total_pages,
            status_message=self.status_message,
        )


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """Outcome of a successful conversion."""

    content: bytes
    filename: str
    page_count: int
    blocks: tuple[OutputBlock, ...] = ()
    status_message: str = ""

    def __str__(self) -> str:
        return (
            f"ConversionResult(filename={self.filename!r}, pages={self.page_count}, "
            f"blocks={len(self.blocks)}, size={len(self.content)})"
        )


__all__ = [
    "TextFragment",
    "Line",
    "RasterImage",
    "TextStyle",
    "TextBlock",
    "ImageBlock",
    "OutputBlock",
    "DocumentMetadata",
    "ConversionPhase",
    "ProgressUpdate",
    "ConversionState",
    "ConversionResult",
]
