"""Output file naming helpers."""

from __future__ import annotations

import re

from .config import DEFAULT_BASE_NAME, DEFAULT_OUTPUT_EXTENSION

__all__ = ["sanitize_filename", "output_filename"]

_UNSAFE_CHARACTERS = re.compile(r'[\\/:*?"<>|]')
_SOURCE_EXTENSION = re.compile(r"\.pdf$", re.IGNORECASE)


def sanitize_filename(name: str) -> str:
    """Replace characters that are not allowed in file names with ``_``."""
    return _UNSAFE_CHARACTERS.sub("_", name)


def output_filename(
    display_name: str | None,
    extension: str = DEFAULT_OUTPUT_EXTENSION,
    default_base: str = DEFAULT_BASE_NAME,
) -> str:
    """Derive the output file name for ``display_name``.

    >>> output_filename("report.PDF")
    'report.docx'
    >>> output_filename("  ")
    'converted.docx'
    """

    base = _SOURCE_EXTENSION.sub("", display_name or "")
    if not base.strip():
        base = default_base
    return sanitize_filename(base) + extension
