import pytest

from read_verifier.config import FixationConfig
from read_verifier.detection.fixation import FixationDetector
from read_verifier.domain.samples import GazeSample

from conftest import build_samples


def feed(detector, samples):
    return [f for f in (detector.add_point(s) for s in samples) if f is not None]


def test_cluster_breaks_into_single_fixation():
    detector = FixationDetector(FixationConfig(radius_px=50, min_duration_ms=100))
    samples = build_samples(
        [(100, 100, 0), (102, 101, 50), (98, 99, 100), (101, 100, 150), (400, 400, 200)]
    )
    fixations = feed(detector, samples)

    assert len(fixations) == 1
    fixation = fixations[0]
    assert fixation.x == pytest.approx(100.25)
    assert fixation.y == pytest.approx(100.0)
    assert fixation.start_time == 0
    assert fixation.duration == 150
    assert fixation.target_span_id is None
    # New cluster starts at the breaking sample
    assert detector.cluster_size == 1


def test_distance_uses_centroid_of_existing_cluster_only():
    detector = FixationDetector(FixationConfig(radius_px=50, min_duration_ms=0))
    detector.add_point(GazeSample(0.0, 0.0, 0.0))
    detector.add_point(GazeSample(40.0, 0.0, 10.0))
    # Centroid of prior points is (20, 0): 75 is 55 px away and breaks the
    # cluster, although a centroid including the candidate (38.3) would not.
    fixation = detector.add_point(GazeSample(75.0, 0.0, 20.0))
    assert fixation is not None
    assert fixation.x == pytest.approx(20.0)


def test_point_exactly_on_radius_joins_cluster():
    detector = FixationDetector(FixationConfig(radius_px=50, min_duration_ms=0))
    detector.add_point(GazeSample(0.0, 0.0, 0.0))
    assert detector.add_point(GazeSample(30.0, 40.0, 10.0)) is None
    assert detector.cluster_size == 2


def test_short_clusters_are_discarded():
    detector = FixationDetector(FixationConfig(min_duration_ms=100))
    samples = build_samples([(100, 100, 0), (101, 100, 40), (100, 101, 99), (500, 500, 120)])
    assert feed(detector, samples) == []


def test_single_sample_cluster_is_discarded():
    detector = FixationDetector(FixationConfig(min_duration_ms=0))
    samples = build_samples([(100, 100, 0), (500, 500, 200), (900, 100, 400)])
    assert feed(detector, samples) == []


def test_fixation_resolves_target_via_hit_test():
    calls = []

    def hit_test(x, y):
        calls.append((x, y))
        return "page-0-span-3"

    detector = FixationDetector(FixationConfig(min_duration_ms=100), hit_test=hit_test)
    feed(detector, build_samples([(10, 10, 0), (12, 10, 60), (11, 10, 120)]))
    fixation = detector.flush()

    assert fixation.target_span_id == "page-0-span-3"
    assert calls == [(pytest.approx(11.0), pytest.approx(10.0))]


def test_fixation_emitted_with_null_target_on_miss():
    detector = FixationDetector(FixationConfig(min_duration_ms=100), hit_test=lambda x, y: None)
    feed(detector, build_samples([(10, 10, 0), (12, 10, 150)]))
    fixation = detector.flush()
    assert fixation is not None
    assert fixation.target_span_id is None


def test_on_fixation_callback_receives_every_fixation():
    seen = []
    detector = FixationDetector(FixationConfig(min_duration_ms=100), on_fixation=seen.append)
    emitted = feed(
        detector,
        build_samples([(100, 100, 0), (100, 100, 200), (600, 100, 300), (600, 100, 500), (100, 600, 600)]),
    )
    assert seen == emitted
    assert len(seen) == 2


def test_flush_finalizes_and_clears():
    detector = FixationDetector(FixationConfig(min_duration_ms=100))
    feed(detector, build_samples([(100, 100, 0), (101, 100, 100), (100, 101, 250)]))
    fixation = detector.flush()
    assert fixation.duration == 250
    assert detector.cluster_size == 0
    assert detector.flush() is None


def test_flush_discards_too_short_cluster():
    detector = FixationDetector(FixationConfig(min_duration_ms=100))
    feed(detector, build_samples([(100, 100, 0), (101, 100, 50)]))
    assert detector.flush() is None
    assert detector.cluster_size == 0


@pytest.mark.parametrize(
    "error, expected",
    [(100.0, 65.0), (10.0, 30.0), (1000.0, 150.0), (200.0, 130.0)],
)
def test_radius_from_calibration_error_is_clamped(error, expected):
    assert FixationDetector.radius_from_calibration_error(error) == pytest.approx(expected)


def test_default_radius_without_calibration():
    assert FixationDetector().radius == 50.0
    detector = FixationDetector(FixationConfig(calibration_error_px=100.0))
    assert detector.radius == pytest.approx(65.0)


@pytest.mark.parametrize("radius, expected", [(5.0, 20.0), (500.0, 200.0), (75.0, 75.0)])
def test_set_radius_clamps(radius, expected):
    detector = FixationDetector()
    detector.set_radius(radius)
    assert detector.radius == expected


def test_radius_change_keeps_cluster_in_progress():
    detector = FixationDetector(FixationConfig(radius_px=50, min_duration_ms=0))
    detector.add_point(GazeSample(0.0, 0.0, 0.0))
    detector.add_point(GazeSample(10.0, 0.0, 10.0))
    detector.set_radius(100.0)
    assert detector.cluster_size == 2
    # 85 px from the centroid (5, 0): inside the widened radius
    assert detector.add_point(GazeSample(90.0, 0.0, 20.0)) is None
    assert detector.cluster_size == 3


def test_set_calibration_error_none_restores_configured_radius():
    detector = FixationDetector(FixationConfig(radius_px=60))
    detector.set_calibration_error(200.0)
    assert detector.radius == pytest.approx(130.0)
    detector.set_calibration_error(None)
    assert detector.radius == 60.0
