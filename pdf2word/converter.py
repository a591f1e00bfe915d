"""Conversion engine for pdf2word.

:class:`LocalConverter` drives the page-by-page pipeline in process, while
:class:`RemoteConverter` hands the whole document to an HTTP service. Both
honour the same ``convert`` contract; :func:`create_converter` picks one from
the configuration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import ExitStack, closing
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import requests

from .backends.base import DecoderFactory, DocumentSerializer, PageDecoder, PageRasterizer, RasterizerFactory
from .backends.docx_backend import DocxSerializer
from .backends.pymupdf_backend import PyMuPDFRasterizer
from .backends.pypdf_backend import PypdfDecoder
from .blocks import build_page_blocks
from .config import ConversionOptions
from .exceptions import (
    ConversionError,
    DecodeError,
    Pdf2WordError,
    PreconditionError,
    ProgressError,
    RemoteError,
    RenderError,
    SerializeError,
)
from .grouping import group_into_lines
from .naming import output_filename
from .runtime import configure_runtime
from .types import (
    ConversionPhase,
    ConversionResult,
    ConversionState,
    DocumentMetadata,
    ProgressUpdate,
)
from .utils import PathLike, ensure_output_directory, format_file_size, get_logger, time_block, to_path

LOGGER = get_logger(__name__)

ProgressObserver = Callable[[ProgressUpdate], None]

T = TypeVar("T")


def _invoke(
    error_cls: type[Pdf2WordError],
    func: Callable[..., T],
    *args: Any,
    **kwargs: Any,
) -> T:
    """Call a collaborator, mapping foreign exceptions onto ``error_cls``."""
    try:
        return func(*args, **kwargs)
    except Pdf2WordError:
        raise
    except Exception as exc:
        raise error_cls(str(exc) or type(exc).__name__) from exc


class BaseConverter(ABC):
    """Common entry point shared by local and remote converters."""

    def __init__(self, options: ConversionOptions | None = None) -> None:
        self.options = options or ConversionOptions()

    @abstractmethod
    def convert(
        self,
        raw: bytes,
        display_name: str,
        observer: Optional[ProgressObserver] = None,
    ) -> ConversionResult:
        """Convert ``raw`` PDF bytes, raising :class:`ConversionError` on failure."""

    def output_name(self, display_name: str | None) -> str:
        return output_filename(
            display_name,
            extension=self.options.output_extension,
            default_base=self.options.default_base_name,
        )

    @staticmethod
    def _require_input(raw: bytes | None) -> bytes:
        if not raw:
            raise PreconditionError("Please supply a PDF document first.")
        return raw


class LocalConverter(BaseConverter):
    """Runs decode, grouping, rendering and assembly in this process."""

    def __init__(
        self,
        options: ConversionOptions | None = None,
        *,
        decoder_factory: DecoderFactory = PypdfDecoder,
        rasterizer_factory: RasterizerFactory = PyMuPDFRasterizer,
        serializer: DocumentSerializer | None = None,
    ) -> None:
        super().__init__(options)
        self.decoder_factory = decoder_factory
        self.rasterizer_factory = rasterizer_factory
        self.serializer = serializer or DocxSerializer()
        configure_runtime(self.options)

    def convert(
        self,
        raw: bytes,
        display_name: str,
        observer: Optional[ProgressObserver] = None,
    ) -> ConversionResult:
        state = ConversionState()
        filename = self.output_name(display_name)
        LOGGER.info("Starting conversion: %s -> %s", display_name, filename)
        try:
            with time_block(LOGGER, f"Conversion of {display_name or filename}"):
                content = self._run(state, raw, observer)
        except Pdf2WordError as exc:
            raise self._fail(state, exc) from exc

        state.phase = ConversionPhase.DONE
        state.status_message = (
            "Conversion complete" if state.total_pages else "Document has no pages"
        )
        LOGGER.info(
            "Conversion completed: %s (%d pages, %d blocks, %s)",
            filename,
            state.total_pages,
            len(state.accumulated_blocks),
            format_file_size(len(content)),
        )
        return ConversionResult(
            content=content,
            filename=filename,
            page_count=state.total_pages,
            blocks=tuple(state.accumulated_blocks),
            status_message=state.status_message,
        )

    def _run(
        self,
        state: ConversionState,
        raw: bytes,
        observer: Optional[ProgressObserver],
    ) -> bytes:
        options = self.options
        raw = self._require_input(raw)

        state.phase = ConversionPhase.DECODING
        state.status_message = "Parsing PDF..."
        with ExitStack() as stack:
            decoder: PageDecoder = _invoke(DecodeError, self.decoder_factory, raw)
            stack.enter_context(closing(decoder))
            state.total_pages = _invoke(DecodeError, decoder.page_count)
            if state.total_pages == 0:
                LOGGER.warning("Document has no pages; nothing to convert")
                return b""

            metadata = self._read_metadata(decoder) if options.include_metadata else None
            rasterizer: PageRasterizer | None = None

            for index in range(1, state.total_pages + 1):
                state.phase = ConversionPhase.DECODING
                state.status_message = f"Processing page {index} / {state.total_pages}..."
                fragments = _invoke(DecodeError, decoder.get_page_text_fragments, index)
                lines = _invoke(DecodeError, group_into_lines, fragments, options.line_tolerance)

                state.phase = ConversionPhase.RENDERING
                if rasterizer is None:
                    rasterizer = _invoke(RenderError, self.rasterizer_factory, raw)
                    stack.enter_context(closing(rasterizer))
                image = _invoke(RenderError, rasterizer.render_to_image, index, options.render_scale)

                state.phase = ConversionPhase.ASSEMBLING
                blocks = _invoke(
                    PreconditionError,
                    build_page_blocks,
                    lines,
                    image,
                    index,
                    state.total_pages,
                    display_width=options.image_display_width,
                    separator_text=options.separator_text,
                )
                state.accumulated_blocks.extend(blocks)
                state.current_page_index = index
                state.status_message = f"Processed page {index} of {state.total_pages}"
                LOGGER.debug(
                    "Page %d/%d: %d lines, %d blocks",
                    index,
                    state.total_pages,
                    len(lines),
                    len(blocks),
                )
                if observer is not None:
                    _invoke(ProgressError, observer, state.snapshot())

            state.phase = ConversionPhase.FINALIZING
            state.status_message = "Generating Word document..."
            return _invoke(
                SerializeError,
                self.serializer.serialize,
                tuple(state.accumulated_blocks),
                metadata,
            )

    @staticmethod
    def _read_metadata(decoder: PageDecoder) -> DocumentMetadata | None:
        try:
            return _invoke(DecodeError, decoder.metadata)
        except DecodeError as exc:
            LOGGER.warning("Metadata extraction failed: %s", exc)
            return None

    @staticmethod
    def _fail(state: ConversionState, exc: Pdf2WordError) -> ConversionError:
        error = ConversionError.from_error(
            exc,
            last_page=state.current_page_index,
            total_pages=state.total_pages,
        )
        failed_in = state.phase.value
        state.phase = ConversionPhase.FAILED
        state.failure = str(error)
        state.status_message = f"Conversion failed: {error}"
        state.accumulated_blocks.clear()
        LOGGER.error(
            "Conversion failed while %s after page %d of %d: %s",
            failed_in,
            state.current_page_index,
            state.total_pages,
            error,
        )
        return error


class RemoteConverter(BaseConverter):
    """Delegates the conversion to a remote HTTP service."""

    PAGE_COUNT_HEADER = "X-Page-Count"

    def __init__(
        self,
        options: ConversionOptions | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(options)
        if not self.options.remote_endpoint:
            raise ValueError("RemoteConverter requires options.remote_endpoint")
        self.endpoint = self.options.remote_endpoint
        self.session = session or requests.Session()

    def convert(
        self,
        raw: bytes,
        display_name: str,
        observer: Optional[ProgressObserver] = None,
    ) -> ConversionResult:
        filename = self.output_name(display_name)
        LOGGER.info("Delegating conversion of %s to %s", display_name, self.endpoint)
        page_count = 0
        status = "Conversion complete"
        try:
            raw = self._require_input(raw)
            with time_block(LOGGER, f"Remote conversion of {display_name or filename}"):
                response = self._post(raw, display_name or "document.pdf", filename)
            page_count = self._page_count(response)
            if observer is not None:
                _invoke(ProgressError, observer, ProgressUpdate(page_count, page_count, status))
        except Pdf2WordError as exc:
            error = ConversionError.from_error(exc, total_pages=page_count)
            LOGGER.error("Remote conversion failed: %s", error)
            raise error from exc

        return ConversionResult(
            content=response.content,
            filename=filename,
            page_count=page_count,
            status_message=status,
        )

    def _post(self, raw: bytes, display_name: str, filename: str) -> requests.Response:
        try:
            response = self.session.post(
                self.endpoint,
                files={"file": (display_name, raw, "application/pdf")},
                data={"filename": filename},
                timeout=self.options.remote_timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            raise RemoteError(f"Remote service error: {exc}") from exc
        if not response.content:
            raise RemoteError("Remote service returned an empty document")
        return response

    def _page_count(self, response: requests.Response) -> int:
        value = response.headers.get(self.PAGE_COUNT_HEADER)
        try:
            return int(value) if value is not None else 0
        except ValueError:
            LOGGER.warning("Ignoring malformed %s header: %r", self.PAGE_COUNT_HEADER, value)
            return 0


def create_converter(options: ConversionOptions | None = None, **kwargs: Any) -> BaseConverter:
    """Return a remote converter when an endpoint is configured, else a local one."""
    options = options or ConversionOptions()
    if options.is_remote:
        return RemoteConverter(options, **kwargs)
    return LocalConverter(options, **kwargs)


def convert_document(
    raw: bytes,
    display_name: str,
    observer: Optional[ProgressObserver] = None,
    *,
    options: ConversionOptions | None = None,
) -> ConversionResult:
    """Convenience wrapper around :func:`create_converter`."""
    converter = create_converter(options)
    return converter.convert(raw, display_name, observer)


def convert_file(
    input_path: PathLike,
    output_dir: PathLike | None = None,
    *,
    options: ConversionOptions | None = None,
    observer: Optional[ProgressObserver] = None,
) -> Path | None:
    """Convert the PDF at ``input_path`` and write the result next to it.

    Returns the written path, or ``None`` when the document had no pages.
    """
    source = to_path(input_path)
    try:
        raw = source.read_bytes()
    except OSError as exc:
        raise ConversionError("PreconditionError", f"Unable to read {source}: {exc}") from exc

    result = convert_document(raw, source.name, observer, options=options)
    if not result.content:
        LOGGER.warning("Nothing written for %s: %s", source, result.status_message)
        return None

    destination_dir = to_path(output_dir) if output_dir is not None else source.parent
    ensure_output_directory(destination_dir)
    destination = destination_dir / result.filename
    destination.write_bytes(result.content)
    LOGGER.info("Wrote %s (%s)", destination, format_file_size(len(result.content)))
    return destination


__all__ = [
    "BaseConverter",
    "LocalConverter",
    "RemoteConverter",
    "ProgressObserver",
    "create_converter",
    "convert_document",
    "convert_file",
]
