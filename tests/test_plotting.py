import pytest

from read_verifier.domain.samples import Fixation, Viewport
from read_verifier.evaluation import plot_reading_session
from read_verifier.io import fixations_to_frame, samples_to_frame

from conftest import steady_gaze


def test_plot_reading_session_writes_file(tmp_path):
    pytest.importorskip("matplotlib")
    samples = steady_gaze(200.0, 100.0, 0.0, 400.0)
    fixations = [
        Fixation(200.0, 100.0, 0.0, 400.0, "page-0-span-0"),
        Fixation(900.0, 700.0, 500.0, 150.0, None),
    ]
    out = plot_reading_session(
        samples_to_frame(samples),
        fixations_to_frame(fixations),
        tmp_path / "session.png",
        viewport=Viewport(1920, 1080),
    )
    assert out.exists()
    assert out.stat().st_size > 0


def test_plot_without_fixations(tmp_path):
    pytest.importorskip("matplotlib")
    out = plot_reading_session(
        samples_to_frame(steady_gaze(10.0, 10.0, 0.0, 100.0)),
        fixations_to_frame([]),
        tmp_path / "empty.png",
    )
    assert out.exists()
