"""
Custom exceptions for pdf2word.

Every failure raised by a collaborator (decoder, rasterizer, serializer,
remote service or progress observer) belongs to one of the kinds below. The
converters turn them into a single :class:`ConversionError` for the caller.
"""

from __future__ import annotations


class Pdf2WordError(RuntimeError):
    """Base exception for all pdf2word errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def kind(self) -> str:
        return type(self).__name__

    @property
    def default_message(self) -> str:
        return "An unknown pdf2word error occurred."


class DecodeError(Pdf2WordError):
    """Raised when the source document cannot be parsed or a page is corrupt."""

    @property
    def default_message(self) -> str:
        return "Malformed or unsupported source document."


class RenderError(Pdf2WordError):
    """Raised when a page cannot be rasterised."""

    @property
    def default_message(self) -> str:
        return "Unable to render page image."


class SerializeError(Pdf2WordError):
    """Raised when the output document cannot be encoded."""

    @property
    def default_message(self) -> str:
        return "Unable to encode the output document."


class PreconditionError(Pdf2WordError):
    """Raised when the conversion inputs are missing or malformed."""

    @property
    def default_message(self) -> str:
        return "No input document supplied."


class RemoteError(Pdf2WordError):
    """Raised when the remote conversion service fails."""

    @property
    def default_message(self) -> str:
        return "Remote conversion service failed."


class ProgressError(Pdf2WordError):
    """Raised when the progress observer fails while handling an update."""

    @property
    def default_message(self) -> str:
        return "Progress observer failed."


class ConversionError(Pdf2WordError):
    """Terminal failure of a conversion.

    ``kind`` names the failing step's error class and ``cause`` the
    underlying message, so ``str(error)`` reads like ``"DecodeError: ..."``.
    ``last_page`` is the last page whose blocks were assembled.
    """

    def __init__(
        self,
        kind: str,
        cause: str,
        *,
        last_page: int = 0,
        total_pages: int = 0,
    ) -> None:
        self.error_kind = kind
        self.cause = cause
        self.last_page = last_page
        self.total_pages = total_pages
        super().__init__(f"{kind}: {cause}")

    @property
    def kind(self) -> str:
        return self.error_kind

    @classmethod
    def from_error(
        cls,
        error: Pdf2WordError,
        *,
        last_page: int = 0,
        total_pages: int = 0,
    ) -> "ConversionError":
        return cls(error.kind, error.message, last_page=last_page, total_pages=total_pages)


__all__ = [
    "Pdf2WordError",
    "DecodeError",
    "RenderError",
    "SerializeError",
    "PreconditionError",
    "RemoteError",
    "ProgressError",
    "ConversionError",
]
