"""Process-wide initialisation of the decoding and rendering libraries."""

from __future__ import annotations

import logging
import threading

import fitz

from .config import ConversionOptions

_LOCK = threading.Lock()
_CONFIGURED = False


def configure_runtime(options: ConversionOptions | None = None) -> bool:
    """Configure third-party libraries once per process.

    Returns ``True`` when this call performed the configuration and ``False``
    when it had already been done. There is no teardown.
    """

    global _CONFIGURED
    with _LOCK:
        if _CONFIGURED:
            return False
        level = (options or ConversionOptions()).log_level.upper()
        logging.getLogger("pdf2word").setLevel(level)
        # pypdf warns loudly about recoverable syntax errors
        logging.getLogger("pypdf").setLevel(logging.ERROR)
        fitz.TOOLS.mupdf_display_errors(False)
        _CONFIGURED = True
        return True


def is_configured() -> bool:
    return _CONFIGURED


def _reset_for_tests() -> None:
    global _CONFIGURED
    with _LOCK:
        _CONFIGURED = False
