"""Reconstruct text lines from positioned page fragments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .config import DEFAULT_LINE_TOLERANCE
from .types import Line, TextFragment
from .utils import finite_or_zero, round_half_up

__all__ = ["group_into_lines"]


@dataclass(slots=True)
class _Bucket:
    y: int
    fragments: list[TextFragment] = field(default_factory=list)


def _normalise(fragment: TextFragment) -> TextFragment:
    x = finite_or_zero(fragment.x)
    y = finite_or_zero(fragment.y)
    if x == fragment.x and y == fragment.y and fragment.text is not None:
        return fragment
    return TextFragment(text=fragment.text or "", x=x, y=y)


def group_into_lines(
    fragments: Iterable[TextFragment],
    tolerance: float = DEFAULT_LINE_TOLERANCE,
) -> list[Line]:
    """Group ``fragments`` into lines ordered top to bottom.

    A fragment joins the first existing line whose representative ``y``
    (rounded) is closer than ``tolerance``; otherwise it opens a new line.
    Lines are returned by descending ``y`` and their fragments by ascending
    ``x``. Fragments without usable coordinates are placed at ``(0, 0)`` and
    missing text counts as empty.
    """

    buckets: list[_Bucket] = []
    for fragment in fragments:
        fragment = _normalise(fragment)
        y = round_half_up(fragment.y or 0.0)
        for bucket in buckets:
            if abs(bucket.y - y) < tolerance:
                bucket.fragments.append(fragment)
                break
        else:
            buckets.append(_Bucket(y=y, fragments=[fragment]))

    ordered = sorted(buckets, key=lambda bucket: bucket.y, reverse=True)
    return [
        Line(
            y=float(bucket.y),
            fragments=tuple(sorted(bucket.fragments, key=lambda item: item.x or 0.0)),
        )
        for bucket in ordered
    ]