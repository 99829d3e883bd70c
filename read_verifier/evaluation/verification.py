"""Reduce a read map to coverage, average fixation duration and a verdict."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Container, Mapping, Optional

from ..config import ScoringConfig
from ..domain.report import Verdict, VerificationResult
from ..domain.state import RegionReadState

VERDICT_LABELS = {
    Verdict.VERIFIED: "Verified Read",
    Verdict.PARTIAL: "Partial Read",
    Verdict.SKIMMED: "Skimmed",
    Verdict.INSUFFICIENT: "Insufficient Data",
}


def classify_verdict(
    coverage_percent: float,
    average_fixation_duration: float,
    config: ScoringConfig | None = None,
) -> Verdict:
    """Pick the verdict; earlier rules take precedence."""
    cfg = config or ScoringConfig()
    if coverage_percent >= cfg.verified_coverage and average_fixation_duration >= cfg.verified_min_fixation_ms:
        return Verdict.VERIFIED
    if coverage_percent >= cfg.partial_coverage:
        return Verdict.PARTIAL
    if coverage_percent > cfg.skimmed_coverage:
        return Verdict.SKIMMED
    return Verdict.INSUFFICIENT


def compute_verification(
    read_map: Mapping[str, RegionReadState],
    total_spans: int,
    total_read_time: float = 0.0,
    pages_read: int = 0,
    total_pages: int = 0,
    config: ScoringConfig | None = None,
    timestamp: Optional[datetime] = None,
    known_span_ids: Optional[Container[str]] = None,
) -> VerificationResult:
    """Score a read map snapshot.

    The function has no side effects; the read map is copied into the
    result. ``timestamp`` defaults to the current UTC time.

    When ``known_span_ids`` is given, only read spans it contains count
    towards coverage, so stale ids from an earlier layout never inflate it.
    Without it, coverage is still bounded to 100.
    """
    read_count = 0
    total_dwell = 0.0
    total_fixations = 0
    for span_id, state in read_map.items():
        if state.is_read and (known_span_ids is None or span_id in known_span_ids):
            read_count += 1
        total_dwell += state.total_dwell_time
        total_fixations += state.fixation_count

    coverage = 0.0 if total_spans <= 0 else min(100.0, 100.0 * read_count / total_spans)
    average = 0.0 if total_fixations == 0 else total_dwell / total_fixations

    return VerificationResult(
        coverage_percent=coverage,
        average_fixation_duration=average,
        total_read_time=total_read_time,
        pages_read=pages_read,
        total_pages=total_pages,
        verdict=classify_verdict(coverage, average, config),
        read_map={span_id: state.copy() for span_id, state in read_map.items()},
        timestamp=timestamp or datetime.now(timezone.utc),
    )


def verdict_label(verdict: Verdict | str) -> str:
    """Human readable label for a verdict."""
    try:
        return VERDICT_LABELS[Verdict(verdict)]
    except ValueError as exc:
        raise ValueError(f"Unknown verdict: {verdict!r}") from exc
