"""Command line interface for replaying and scoring reading sessions."""
from __future__ import annotations

import argparse
import logging

from .config import ConfigBuilder, ReadingDefaults
from .evaluation.verification import compute_verification, verdict_label
from .io.io import read_map_from_frame, read_tsv
from .io.observers import ConsoleReporter
from .io.pipeline import ReplayPipeline


def build_parser() -> argparse.ArgumentParser:
    # Options shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(description="Gaze-based reading verification")
    sub = parser.add_subparsers(dest="command", required=True)

    replay = sub.add_parser(
        "replay", parents=[common], help="Replay a recorded gaze stream against a span layout"
    )
    replay.add_argument("samples", help="TSV with time_ms, x_px, y_px")
    replay.add_argument("regions", help="TSV with span_id, page_index, left, top, width, height")
    replay.add_argument("--fixations-out", help="Write detected fixations to this TSV")
    replay.add_argument("--read-map-out", help="Write the per-span read map to this TSV")
    replay.add_argument("--summary-out", help="Write a one-row verification summary to this TSV")
    replay.add_argument("--plot", help="Write a gaze/fixation plot (png or pdf)")
    replay.add_argument(
        "--calibration-error",
        type=float,
        default=None,
        help="Average calibration error in px; derives the fixation radius",
    )
    replay.add_argument(
        "--radius", type=float, default=ReadingDefaults.FIXATION_RADIUS_PX, help="Fixation radius in px"
    )
    replay.add_argument(
        "--min-duration",
        type=float,
        default=ReadingDefaults.FIXATION_MIN_DURATION_MS,
        help="Minimum fixation duration in ms",
    )
    replay.add_argument(
        "--read-threshold",
        type=float,
        default=ReadingDefaults.READ_THRESHOLD_MS,
        help="Dwell time in ms after which a span counts as read",
    )
    replay.add_argument(
        "--z-threshold",
        type=float,
        default=ReadingDefaults.OUTLIER_Z_THRESHOLD,
        help="Outlier z-score threshold",
    )
    replay.add_argument(
        "--min-cutoff", type=float, default=ReadingDefaults.SMOOTHING_MIN_CUTOFF, help="Smoothing min cutoff (Hz)"
    )
    replay.add_argument("--beta", type=float, default=ReadingDefaults.SMOOTHING_BETA, help="Smoothing speed coefficient")
    replay.add_argument(
        "--viewport",
        nargs=2,
        type=float,
        metavar=("WIDTH", "HEIGHT"),
        default=(ReadingDefaults.VIEWPORT_WIDTH_PX, ReadingDefaults.VIEWPORT_HEIGHT_PX),
        help="Viewport size in px used for drift detection",
    )
    replay.add_argument("--show-fixations", action="store_true", help="Print every fixation")

    score = sub.add_parser("score", parents=[common], help="Score a saved read map")
    score.add_argument("read_map", help="TSV written by `replay --read-map-out`")
    score.add_argument("--total-spans", type=int, required=True, help="Number of spans in the document")
    score.add_argument("--total-read-time", type=float, default=0.0, help="Session length in ms")
    score.add_argument("--pages-read", type=int, default=0)
    score.add_argument("--total-pages", type=int, default=0)

    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "replay":
        config = ConfigBuilder.build_session_config(args)
        pipeline = ReplayPipeline(config)
        pipeline.register_observer(ConsoleReporter(verbose=args.show_fixations))
        pipeline.run(
            args.samples,
            args.regions,
            fixations_path=args.fixations_out,
            read_map_path=args.read_map_out,
            plot_path=args.plot,
            calibration_error=args.calibration_error,
            summary_path=args.summary_out,
        )
        return

    if args.command == "score":
        read_map = read_map_from_frame(read_tsv(args.read_map))
        result = compute_verification(
            read_map,
            total_spans=args.total_spans,
            total_read_time=args.total_read_time,
            pages_read=args.pages_read,
            total_pages=args.total_pages,
        )
        print(f"Verdict: {verdict_label(result.verdict)}")
        print(f"   Coverage: {result.coverage_percent:.1f}%")
        print(f"   Avg fixation: {result.average_fixation_duration:.0f} ms")
        return


if __name__ == "__main__":
    main()
