# read_verifier/io/io.py
"""TSV input/output for recorded gaze streams, span layouts and results."""
from __future__ import annotations

from dataclasses import asdict
from typing import Dict, Iterable, List, Mapping

import pandas as pd

from ..domain.report import VerificationResult
from ..domain.samples import Fixation, GazeSample
from ..domain.state import RegionReadState
from ..regions import Rect, RegionIndex, SpanInfo

SAMPLE_COLUMNS = ("time_ms", "x_px", "y_px")
REGION_COLUMNS = ("span_id", "page_index", "left", "top", "width", "height")
READ_MAP_COLUMNS = (
    "span_id",
    "total_dwell_time",
    "fixation_count",
    "first_fixation_time",
    "last_fixation_time",
    "is_read",
)


def _require_columns(df: pd.DataFrame, columns: Iterable[str], what: str) -> None:
    missing = set(columns) - set(df.columns)
    if missing:
        raise ValueError(f"{what} is missing required columns: {', '.join(sorted(missing))}")


def read_tsv(path: str) -> pd.DataFrame:
    """TSV Datei einlesen (Tab als Separator)."""
    return pd.read_csv(path, sep="\t", low_memory=False)


def write_tsv(df: pd.DataFrame, path: str) -> None:
    """DataFrame als TSV schreiben."""
    df.to_csv(path, sep="\t", index=False)


def samples_from_frame(df: pd.DataFrame) -> List[GazeSample]:
    """Convert a sample frame; unparsable coordinates become NaN."""
    _require_columns(df, SAMPLE_COLUMNS, "Gaze sample table")
    numeric = df.loc[:, list(SAMPLE_COLUMNS)].apply(pd.to_numeric, errors="coerce")
    return [
        GazeSample(x=float(x), y=float(y), timestamp=float(t))
        for t, x, y in numeric.itertuples(index=False, name=None)
    ]


def read_gaze_samples(path: str) -> List[GazeSample]:
    return samples_from_frame(read_tsv(path))


def samples_to_frame(samples: Iterable[GazeSample]) -> pd.DataFrame:
    return pd.DataFrame(
        [(s.timestamp, s.x, s.y) for s in samples],
        columns=list(SAMPLE_COLUMNS),
    )


def regions_from_frame(df: pd.DataFrame) -> RegionIndex:
    _require_columns(df, REGION_COLUMNS, "Region table")
    index = RegionIndex()
    has_text = "text" in df.columns
    for row in df.itertuples(index=False):
        index.register_span(
            SpanInfo(
                span_id=str(row.span_id),
                text=str(row.text) if has_text and pd.notna(row.text) else "",
                rect=Rect(float(row.left), float(row.top), float(row.width), float(row.height)),
                page_index=int(row.page_index),
            )
        )
    return index


def read_regions(path: str) -> RegionIndex:
    return regions_from_frame(read_tsv(path))


def fixations_to_frame(fixations: Iterable[Fixation]) -> pd.DataFrame:
    rows = [
        {
            "start_time_ms": f.start_time,
            "duration_ms": f.duration,
            "x_px": f.x,
            "y_px": f.y,
            "target_span_id": f.target_span_id,
        }
        for f in fixations
    ]
    return pd.DataFrame(rows, columns=["start_time_ms", "duration_ms", "x_px", "y_px", "target_span_id"])


def read_map_to_frame(read_map: Mapping[str, RegionReadState]) -> pd.DataFrame:
    rows = [{"span_id": span_id, **asdict(state)} for span_id, state in read_map.items()]
    return pd.DataFrame(rows, columns=list(READ_MAP_COLUMNS))


def read_map_from_frame(df: pd.DataFrame) -> Dict[str, RegionReadState]:
    _require_columns(df, READ_MAP_COLUMNS, "Read map table")
    read_map: Dict[str, RegionReadState] = {}
    for row in df.itertuples(index=False):
        read_map[str(row.span_id)] = RegionReadState(
            total_dwell_time=float(row.total_dwell_time),
            fixation_count=int(row.fixation_count),
            first_fixation_time=float(row.first_fixation_time),
            last_fixation_time=float(row.last_fixation_time),
            is_read=str(row.is_read).strip().lower() in ("true", "1"),
        )
    return read_map


def verification_to_frame(result: VerificationResult) -> pd.DataFrame:
    """One-row summary of a verification result."""
    return pd.DataFrame(
        [
            {
                "coverage_percent": result.coverage_percent,
                "average_fixation_duration_ms": result.average_fixation_duration,
                "total_read_time_ms": result.total_read_time,
                "pages_read": result.pages_read,
                "total_pages": result.total_pages,
                "read_count": result.read_count,
                "verdict": result.verdict.value,
                "timestamp": result.timestamp.isoformat() if result.timestamp else None,
            }
        ]
    )
