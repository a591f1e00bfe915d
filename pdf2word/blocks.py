"""Assemble the output blocks contributed by a single page."""

from __future__ import annotations

from typing import Sequence

from .config import DEFAULT_IMAGE_DISPLAY_WIDTH, DEFAULT_SEPARATOR_TEXT
from .exceptions import PreconditionError
from .types import ImageBlock, Line, OutputBlock, RasterImage, TextBlock, TextStyle
from .utils import round_half_up

__all__ = ["build_page_blocks", "image_block", "separator_block"]

SEPARATOR_STYLE = TextStyle(italic=True)


def image_block(image: RasterImage, display_width: int = DEFAULT_IMAGE_DISPLAY_WIDTH) -> ImageBlock:
    """Wrap ``image`` at ``display_width`` keeping its aspect ratio."""
    if image.width <= 0 or image.height <= 0:
        raise PreconditionError(
            f"Raster image has invalid dimensions {image.width}x{image.height}"
        )
    display_height = round_half_up(display_width * image.height / image.width)
    return ImageBlock(image=image, display_width=display_width, display_height=display_height)


def separator_block(text: str = DEFAULT_SEPARATOR_TEXT) -> TextBlock:
    return TextBlock(text=text, style=SEPARATOR_STYLE)


def build_page_blocks(
    lines: Sequence[Line],
    image: RasterImage,
    page_index: int,
    page_count: int,
    *,
    display_width: int = DEFAULT_IMAGE_DISPLAY_WIDTH,
    separator_text: str = DEFAULT_SEPARATOR_TEXT,
) -> list[OutputBlock]:
    """Return the text blocks, fallback image and separator for one page.

    The separator is emitted after every page, the last one included.
    """

    if not 1 <= page_index <= max(page_count, 1):
        raise PreconditionError(f"Page index {page_index} out of range for {page_count} pages")

    blocks: list[OutputBlock] = [TextBlock(text=line.text) for line in lines if line.text.strip()]
    blocks.append(image_block(image, display_width))
    blocks.append(separator_block(separator_text))
    return blocks
