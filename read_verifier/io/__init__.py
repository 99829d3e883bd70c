"""I/O, offline replay and session observers."""

from .io import (
    fixations_to_frame,
    read_gaze_samples,
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
from .observers import ConsoleReporter, FixationLogger, SessionObserver, SessionRecorder
from .pipeline import ReplayPipeline, ReplayResult

__all__ = [
    "fixations_to_frame",
    "read_gaze_samples",
    "read_map_from_frame",
    "read_map_to_frame",
    "read_regions",
    "read_tsv",
    "regions_from_frame",
    "samples_from_frame",
    "samples_to_frame",
    "verification_to_frame",
    "write_tsv",
    "ConsoleReporter",
    "FixationLogger",
    "SessionObserver",
    "SessionRecorder",
    "ReplayPipeline",
    "ReplayResult",
]
