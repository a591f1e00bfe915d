"""Configuration for the pdf2word conversion pipeline.

Options are immutable; build them directly, from a mapping (for example a
parsed configuration file) or from ``PDF2WORD_*`` environment variables.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping

ENV_PREFIX = "PDF2WORD_"

DEFAULT_LINE_TOLERANCE = 4.0
DEFAULT_RENDER_SCALE = 2.0
DEFAULT_IMAGE_DISPLAY_WIDTH = 600
DEFAULT_SEPARATOR_TEXT = "--- Page Break ---"
DEFAULT_OUTPUT_EXTENSION = ".docx"
DEFAULT_BASE_NAME = "converted"


@dataclass(frozen=True)
class ConversionOptions:
    """Options controlling PDF to DOCX conversion."""

    # vertical distance under which two fragments share a line
    line_tolerance: float = DEFAULT_LINE_TOLERANCE
    # upscale factor applied when rasterising a page
    render_scale: float = DEFAULT_RENDER_SCALE
    image_display_width: int = DEFAULT_IMAGE_DISPLAY_WIDTH
    separator_text: str = DEFAULT_SEPARATOR_TEXT
    output_extension: str = DEFAULT_OUTPUT_EXTENSION
    default_base_name: str = DEFAULT_BASE_NAME
    include_metadata: bool = True
    remote_endpoint: str | None = None
    remote_timeout: float = 60.0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.line_tolerance <= 0:
            raise ValueError("line_tolerance must be positive")
        if self.render_scale <= 0:
            raise ValueError("render_scale must be positive")
        if self.image_display_width <= 0:
            raise ValueError("image_display_width must be positive")
        if self.remote_timeout <= 0:
            raise ValueError("remote_timeout must be positive")
        if not self.output_extension.startswith("."):
            raise ValueError("output_extension must start with '.'")
        if not self.default_base_name.strip():
            raise ValueError("default_base_name must not be blank")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @property
    def is_remote(self) -> bool:
        return bool(self.remote_endpoint)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ConversionOptions":
        known = {item.name for item in dataclasses.fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown conversion options: {', '.join(unknown)}")
        return cls(**dict(values))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ConversionOptions":
        """Build options from ``PDF2WORD_<FIELD>`` variables, e.g. ``PDF2WORD_RENDER_SCALE``."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for item in dataclasses.fields(cls):
            raw = env.get(ENV_PREFIX + item.name.upper())
            if raw is None or raw == "":
                continue
            values[item.name] = _coerce(item.name, raw, item.default)
        return cls(**values)

    def with_updates(self, **updates: Any) -> "ConversionOptions":
        return dataclasses.replace(self, **{k: v for k, v in updates.items() if v is not None})


def _coerce(name: str, raw: str, default: Any) -> Any:
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"Invalid boolean for {name}: {raw!r}")
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw


__all__ = [
    "ConversionOptions",
    "ENV_PREFIX",
    "DEFAULT_LINE_TOLERANCE",
    "DEFAULT_RENDER_SCALE",
    "DEFAULT_IMAGE_DISPLAY_WIDTH",
    "DEFAULT_SEPARATOR_TEXT",
    "DEFAULT_OUTPUT_EXTENSION",
    "DEFAULT_BASE_NAME",
]
