"""Span registry mapping screen points to document regions.

Spans are the smallest addressable text regions of the rendered document.
Ids follow ``page-{page}-span-{index}`` so the page can be recovered from
the id alone.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

_PAGE_PREFIX = re.compile(r"^page-(\d+)-")


@dataclass(frozen=True)
class Rect:
    """Axis-aligned screen rectangle (px)."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


@dataclass(frozen=True)
class SpanInfo:
    span_id: str
    text: str
    rect: Rect
    page_index: int


@runtime_checkable
class RegionLookup(Protocol):
    """Hit-test and counter collaborators used by the pipeline."""

    def hit_test(self, x: float, y: float) -> Optional[str]:
        ...

    def total_span_count(self) -> int:
        ...


@runtime_checkable
class PagedRegionLookup(RegionLookup, Protocol):
    """A region lookup that also knows the page layout."""

    def page_of(self, span_id: str) -> Optional[int]:
        ...

    def page_count(self) -> int:
        ...


def span_id_for(page_index: int, span_index: int) -> str:
    return f"page-{page_index}-span-{span_index}"


def page_index_from_span_id(span_id: str) -> Optional[int]:
    match = _PAGE_PREFIX.match(span_id)
    return int(match.group(1)) if match else None


class RegionIndex:
    """In-memory span registry with rectangle hit testing."""

    def __init__(self) -> None:
        self._spans: Dict[str, SpanInfo] = {}
        self._bounds: Optional[np.ndarray] = None
        self._ids: List[str] = []

    def __len__(self) -> int:
        return len(self._spans)

    def __contains__(self, span_id: object) -> bool:
        return span_id in self._spans

    def register_span(self, info: SpanInfo) -> None:
        self._spans[info.span_id] = info
        self._bounds = None

    def register_page(self, page_index: int, spans: Iterable[Tuple[str, Rect]]) -> List[str]:
        """Register a page's spans in document order; blank spans are skipped."""
        registered = []
        for idx, (text, rect) in enumerate(spans):
            text = (text or "").strip()
            if not text:
                continue
            span_id = span_id_for(page_index, idx)
            self.register_span(SpanInfo(span_id, text, rect, page_index))
            registered.append(span_id)
        return registered

    def refresh_rect(self, span_id: str, rect: Rect) -> None:
        """Update a span's rectangle after scrolling or re-layout."""
        info = self._spans.get(span_id)
        if info is None:
            return
        self._spans[span_id] = SpanInfo(info.span_id, info.text, rect, info.page_index)
        self._bounds = None

    def hit_test(self, x: float, y: float) -> Optional[str]:
        """Id of the smallest span containing the point, or ``None``."""
        if not self._spans:
            return None
        bounds = self._index()
        inside = (bounds[:, 0] <= x) & (x <= bounds[:, 2]) & (bounds[:, 1] <= y) & (y <= bounds[:, 3])
        if not inside.any():
            return None
        areas = np.where(inside, bounds[:, 4], np.inf)
        # argmin returns the first of equal areas, i.e. the earliest registered
        return self._ids[int(np.argmin(areas))]

    def total_span_count(self) -> int:
        return len(self._spans)

    def get(self, span_id: str) -> Optional[SpanInfo]:
        return self._spans.get(span_id)

    def page_of(self, span_id: str) -> Optional[int]:
        info = self._spans.get(span_id)
        if info is not None:
            return info.page_index
        return page_index_from_span_id(span_id)

    def page_count(self) -> int:
        return len({info.page_index for info in self._spans.values()})

    def spans(self) -> List[SpanInfo]:
        return list(self._spans.values())

    def clear(self) -> None:
        self._spans.clear()
        self._bounds = None
        self._ids = []

    def _index(self) -> np.ndarray:
        if self._bounds is None:
            self._ids = list(self._spans)
            self._bounds = np.array(
                [
                    (r.left, r.top, r.right, r.bottom, r.area)
                    for r in (self._spans[span_id].rect for span_id in self._ids)
                ],
                dtype=float,
            ).reshape(-1, 5)
        return self._bounds
