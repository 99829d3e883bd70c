# read_verifier/evaluation/plotting.py
"""Visualization of a replayed reading session (requires matplotlib)."""
from __future__ import annotations

from importlib import import_module
from pathlib import Path
from typing import Optional, Tuple

import pandas as pd

from ..domain.samples import Viewport


def plot_reading_session(
    samples_df: pd.DataFrame,
    fixations_df: pd.DataFrame,
    output_path: str | Path | None = None,
    viewport: Optional[Viewport] = None,
    figsize: Tuple[float, float] = (10.0, 8.0),
    show: bool = False,
) -> Path:
    """
    Blickverlauf mit Fixationen und Fixationsdauer-Zeitachse plotten.

    samples_df braucht ``x_px``/``y_px``; fixations_df die Spalten aus
    :func:`read_verifier.io.fixations_to_frame`.
    """
    try:
        matplotlib = import_module("matplotlib")
        if not show:
            matplotlib.use("Agg")
        plt = import_module("matplotlib.pyplot")
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise ModuleNotFoundError(
            "matplotlib is required for plotting; install via `pip install gaze-read-verifier[plot]`."
        ) from exc

    fig, (ax_trace, ax_time) = plt.subplots(2, 1, figsize=figsize, gridspec_kw={"height_ratios": [3, 1]})

    ax_trace.plot(samples_df["x_px"], samples_df["y_px"], color="0.7", linewidth=0.8, label="gaze")
    if not fixations_df.empty:
        hit = fixations_df["target_span_id"].notna()
        sizes = fixations_df["duration_ms"].clip(lower=1.0) / 5.0
        ax_trace.scatter(
            fixations_df.loc[hit, "x_px"], fixations_df.loc[hit, "y_px"],
            s=sizes[hit], color="tab:green", alpha=0.6, label="fixation on text",
        )
        ax_trace.scatter(
            fixations_df.loc[~hit, "x_px"], fixations_df.loc[~hit, "y_px"],
            s=sizes[~hit], color="tab:red", alpha=0.6, label="fixation off text",
        )
    if viewport is not None:
        ax_trace.set_xlim(0, viewport.width)
        ax_trace.set_ylim(0, viewport.height)
    # Screen coordinates grow downwards
    ax_trace.invert_yaxis()
    ax_trace.set_xlabel("x (px)")
    ax_trace.set_ylabel("y (px)")
    ax_trace.legend(loc="upper right")

    if not fixations_df.empty:
        ax_time.bar(
            fixations_df["start_time_ms"], fixations_df["duration_ms"],
            width=fixations_df["duration_ms"], align="edge", color="tab:blue",
        )
    ax_time.set_xlabel("time (ms)")
    ax_time.set_ylabel("fixation (ms)")

    plt.tight_layout()
    output_path = Path(output_path or "reading_session.png")
    fig.savefig(output_path)
    if show:  # pragma: no cover - UI-driven choice
        plt.show()
    plt.close(fig)
    return output_path
