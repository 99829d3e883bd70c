from read_verifier.domain.samples import Fixation
from read_verifier.domain.state import DriftReport, DriftStatus
from read_verifier.engine import ReadingSession
from read_verifier.evaluation import compute_verification
from read_verifier.io.observers import ConsoleReporter, FixationLogger, SessionRecorder


def lost(t):
    return DriftReport(DriftStatus.LOST, "lost", t)


def ok(t):
    return DriftReport(DriftStatus.OK, "", t)


def test_fixation_logger_writes_header_once(tmp_path):
    log_file = tmp_path / "logs" / "fixations.tsv"
    logger = FixationLogger(str(log_file))
    logger.on_fixation(None, Fixation(10.0, 20.0, 0.0, 150.0, "page-0-span-1"))
    logger.on_fixation(None, Fixation(30.0, 40.0, 200.0, 120.0, None))

    FixationLogger(str(log_file))
    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert lines[0].split("\t") == FixationLogger.HEADER
    assert len(lines) == 3
    assert lines[1].split("\t")[-1] == "page-0-span-1"
    assert lines[2].split("\t")[-1] == ""


def test_console_reporter_prints_status_changes_only(capsys):
    reporter = ConsoleReporter()
    reporter.on_drift_status(None, lost(0))
    reporter.on_drift_status(None, lost(5000))
    reporter.on_drift_status(None, ok(10000))
    out = capsys.readouterr().out
    assert out.count("Warning: lost") == 1


def test_console_reporter_summary(capsys, two_span_regions):
    session = ReadingSession(two_span_regions)
    reporter = ConsoleReporter(verbose=True)
    reporter.on_session_start(session)
    reporter.on_fixation(session, Fixation(10.0, 20.0, 0.0, 150.0, None))
    reporter.on_session_complete(session, compute_verification({}, 2))

    out = capsys.readouterr().out
    assert "Reading session started (2 spans)" in out
    assert "-> -" in out
    assert "Verdict: Insufficient Data" in out


def test_session_recorder_transitions():
    recorder = SessionRecorder()
    for report in (ok(0), ok(5000), lost(10000), lost(15000), ok(20000)):
        recorder.on_drift_status(None, report)
    assert [r.checked_at for r in recorder.transitions()] == [0, 10000, 20000]

    recorder.on_session_start(None)
    assert recorder.reports == []
