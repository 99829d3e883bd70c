import math

import pandas as pd
import pytest

from read_verifier.domain.report import Verdict
from read_verifier.domain.samples import GazeSample
from read_verifier.domain.state import DriftStatus, RegionReadState
from read_verifier.io import (
    ReplayPipeline,
    read_map_from_frame,
    read_map_to_frame,
    read_regions,
    read_tsv,
    regions_from_frame,
    samples_from_frame,
    samples_to_frame,
    verification_to_frame,
    write_tsv,
)
from read_verifier.simple_api import verify_reading, verify_samples

from conftest import steady_gaze

REGION_ROWS = [
    {"span_id": "page-0-span-0", "page_index": 0, "left": 0, "top": 50, "width": 400, "height": 100, "text": "One"},
    {"span_id": "page-0-span-1", "page_index": 0, "left": 0, "top": 300, "width": 400, "height": 100, "text": "Two"},
]


@pytest.fixture
def recording(tmp_path):
    samples = steady_gaze(200.0, 100.0, 1000.0, 1400.0)
    samples.insert(5, GazeSample(math.nan, math.nan, 1090.0))
    samples_path = tmp_path / "samples.tsv"
    regions_path = tmp_path / "regions.tsv"
    write_tsv(samples_to_frame(samples), str(samples_path))
    write_tsv(pd.DataFrame(REGION_ROWS), str(regions_path))
    return samples_path, regions_path


def test_samples_from_frame_coerces_bad_values():
    df = pd.DataFrame({"time_ms": [0, 10], "x_px": ["1.5", "oops"], "y_px": [2.0, 3.0]})
    samples = samples_from_frame(df)
    assert samples[0] == GazeSample(1.5, 2.0, 0.0)
    assert not samples[1].is_finite()


def test_missing_columns_raise():
    with pytest.raises(ValueError, match="x_px"):
        samples_from_frame(pd.DataFrame({"time_ms": [0], "y_px": [1]}))
    with pytest.raises(ValueError, match="Region table"):
        regions_from_frame(pd.DataFrame({"span_id": ["a"]}))


def test_regions_round_trip_through_tsv(recording):
    _, regions_path = recording
    regions = read_regions(str(regions_path))
    assert regions.total_span_count() == 2
    assert regions.hit_test(10.0, 320.0) == "page-0-span-1"
    assert regions.get("page-0-span-0").text == "One"


def test_read_map_frame_parses_flags():
    read_map = {
        "page-0-span-0": RegionReadState(300.0, 2, 0.0, 450.0, True),
        "page-0-span-1": RegionReadState(120.0, 1, 500.0, 620.0, False),
    }
    restored = read_map_from_frame(read_map_to_frame(read_map))
    assert restored == read_map


def test_replay_in_memory(two_span_regions):
    samples = steady_gaze(200.0, 100.0, 1000.0, 1400.0)
    result = ReplayPipeline().replay(samples, two_span_regions)

    assert len(result.fixations) == 1
    assert result.fixations[0].target_span_id == "page-0-span-0"
    assert result.fixations[0].start_time == 1000.0
    assert result.verification.coverage_percent == pytest.approx(50.0)
    assert result.verification.total_read_time == pytest.approx(400.0)
    assert result.stats.samples_received == len(samples)


def test_replay_runs_drift_checks_on_sample_time(two_span_regions):
    samples = steady_gaze(200.0, 100.0, 0.0, 6000.0)
    result = ReplayPipeline().replay(samples, two_span_regions)
    assert [r.status for r in result.drift_reports] == [DriftStatus.OK]
    assert result.drift_reports[0].checked_at == 5000.0


def test_replay_rejects_empty_recording(two_span_regions):
    with pytest.raises(ValueError):
        ReplayPipeline().replay([], two_span_regions)


def test_run_writes_outputs(recording, tmp_path):
    samples_path, regions_path = recording
    fixations_path = tmp_path / "out" / "fixations.tsv"
    fixations_path.parent.mkdir()
    read_map_path = tmp_path / "read_map.tsv"

    result = ReplayPipeline().run(
        str(samples_path),
        str(regions_path),
        fixations_path=str(fixations_path),
        read_map_path=str(read_map_path),
    )

    assert result.stats.samples_malformed == 1
    assert result.verification.verdict == Verdict.PARTIAL

    fixations = read_tsv(str(fixations_path))
    assert list(fixations["target_span_id"]) == ["page-0-span-0"]
    read_map = read_map_from_frame(read_tsv(str(read_map_path)))
    assert read_map["page-0-span-0"].is_read


def test_simple_api(recording, two_span_regions):
    samples_path, regions_path = recording
    result = verify_reading(str(samples_path), str(regions_path), read_threshold_ms=500.0)
    assert result.read_count == 0
    assert result.verdict == Verdict.INSUFFICIENT

    result = verify_samples(steady_gaze(200.0, 100.0, 0.0, 400.0), two_span_regions)
    assert result.read_count == 1


def test_run_writes_verification_summary(recording, tmp_path):
    samples_path, regions_path = recording
    summary_path = tmp_path / "summary.tsv"

    result = ReplayPipeline().run(str(samples_path), str(regions_path), summary_path=str(summary_path))

    summary = read_tsv(str(summary_path))
    assert list(summary.columns) == list(verification_to_frame(result.verification).columns)
    assert summary.loc[0, "pages_read"] == 1
    assert summary.loc[0, "total_pages"] == 1
    assert summary.loc[0, "total_read_time_ms"] == pytest.approx(400.0)
    assert summary.loc[0, "verdict"] == "partial"
