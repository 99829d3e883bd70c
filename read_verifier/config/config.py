# read_verifier/config/config.py
"""
Konfigurationsklassen für die Reading-Verification Pipeline.

Dieses Modul definiert alle Konfigurationsparameter für:
  - Adaptive Glättung (One Euro Filter)
  - Ausreißer-Erkennung (z-Score über gleitendes Fenster)
  - Fixations-Erkennung (Dispersion um den Cluster-Schwerpunkt)
  - Lese-Tracking pro Region und Drift-Überwachung
  - Verdict-Schwellen der Verifikation

Werte außerhalb sinnvoller Grenzen werden geklemmt, nicht abgelehnt.

Beispiel:
    >>> from read_verifier.config import SessionConfiguration, FixationConfig
    >>>
    >>> # Standard-Konfiguration
    >>> cfg = SessionConfiguration()
    >>>
    >>> # Radius aus Kalibrierungsfehler ableiten
    >>> cfg = SessionConfiguration(
    ...     fixation=FixationConfig(calibration_error_px=120.0),
    ... )
    >>> radius = cfg.fixation.effective_radius()  # 120 px * 0.65
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .constants import RadiusLimits, ReadingDefaults


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` into ``[lower, upper]``."""
    return max(lower, min(value, upper))


def radius_from_calibration_error(
    average_error_px: float,
    scale: float = ReadingDefaults.FIXATION_RADIUS_ERROR_SCALE,
) -> float:
    """Scale the calibration error into a fixation radius.

    Looser calibration widens the tolerance so that normal jitter does not
    break a fixation apart. The result is clamped to the adaptive range.
    """
    return clamp(
        average_error_px * scale,
        RadiusLimits.ADAPTIVE_MIN_PX,
        RadiusLimits.ADAPTIVE_MAX_PX,
    )


@dataclass
class SmoothingConfig:
    """
    Konfiguration fuer den One Euro Filter (pro Achse).
    """

    # Basis-Samplingrate, solange noch kein Zeitabstand bekannt ist
    frequency_hz: float = ReadingDefaults.SMOOTHING_FREQUENCY_HZ

    # Minimale Grenzfrequenz: kleiner = staerkere Glaettung bei ruhigem Blick
    min_cutoff: float = ReadingDefaults.SMOOTHING_MIN_CUTOFF

    # Geschwindigkeitskoeffizient: groesser = weniger Verzoegerung bei Sakkaden
    beta: float = ReadingDefaults.SMOOTHING_BETA

    # Feste Grenzfrequenz fuer die Ableitung
    d_cutoff: float = ReadingDefaults.SMOOTHING_D_CUTOFF

    def __post_init__(self) -> None:
        self.frequency_hz = max(1e-3, float(self.frequency_hz))
        self.min_cutoff = max(1e-3, float(self.min_cutoff))
        self.beta = max(0.0, float(self.beta))
        self.d_cutoff = max(1e-3, float(self.d_cutoff))


@dataclass
class OutlierConfig:
    """
    Konfiguration fuer die z-Score Ausreisser-Erkennung.
    """

    # Anzahl der zuletzt akzeptierten Samples im Fenster (FIFO)
    window_size: int = ReadingDefaults.OUTLIER_WINDOW_SIZE

    # Solange weniger Samples akzeptiert wurden, wird alles akzeptiert
    warmup_samples: int = ReadingDefaults.OUTLIER_WARMUP_SAMPLES

    # Ablehnen, sobald |z| in x ODER y diesen Wert ueberschreitet
    z_threshold: float = ReadingDefaults.OUTLIER_Z_THRESHOLD

    # Untergrenze der Standardabweichung (px), verhindert Division durch ~0
    min_std_px: float = ReadingDefaults.OUTLIER_MIN_STD_PX

    def __post_init__(self) -> None:
        self.window_size = max(1, int(self.window_size))
        self.warmup_samples = int(clamp(int(self.warmup_samples), 0, self.window_size))
        self.z_threshold = max(0.0, float(self.z_threshold))
        self.min_std_px = max(1e-6, float(self.min_std_px))


@dataclass
class FixationConfig:
    """
    Konfiguration fuer die Fixations-Erkennung.
    """

    # Radius um den Cluster-Schwerpunkt (px), ohne Kalibrierungsfehler
    radius_px: float = ReadingDefaults.FIXATION_RADIUS_PX

    # Kuerzere Cluster werden verworfen (ms)
    min_duration_ms: float = ReadingDefaults.FIXATION_MIN_DURATION_MS

    # Mittlerer Kalibrierungsfehler (px); wenn gesetzt, bestimmt er den Radius
    calibration_error_px: Optional[float] = None

    # Anteil des Kalibrierungsfehlers, der als Radius verwendet wird
    radius_error_scale: float = ReadingDefaults.FIXATION_RADIUS_ERROR_SCALE

    def __post_init__(self) -> None:
        self.radius_px = clamp(float(self.radius_px), RadiusLimits.DIRECT_MIN_PX, RadiusLimits.DIRECT_MAX_PX)
        self.min_duration_ms = max(0.0, float(self.min_duration_ms))
        if self.calibration_error_px is not None:
            self.calibration_error_px = max(0.0, float(self.calibration_error_px))

    def effective_radius(self) -> float:
        if self.calibration_error_px is None:
            return self.radius_px
        return radius_from_calibration_error(self.calibration_error_px, self.radius_error_scale)


@dataclass
class ReadTrackerConfig:
    """
    Konfiguration fuer das Lese-Tracking pro Region.
    """

    # Verweildauer (ms), ab der eine Region als gelesen gilt
    read_threshold_ms: float = ReadingDefaults.READ_THRESHOLD_MS

    def __post_init__(self) -> None:
        self.read_threshold_ms = max(0.0, float(self.read_threshold_ms))


@dataclass
class DriftConfig:
    """
    Konfiguration fuer die Drift-Ueberwachung.
    """

    # Rollendes Fenster der Roh-Samples (ms)
    window_ms: float = ReadingDefaults.DRIFT_WINDOW_MS

    # Takt der periodischen Pruefung (ms)
    check_interval_ms: float = ReadingDefaults.DRIFT_CHECK_INTERVAL_MS

    # Ohne neues Sample seit dieser Zeit -> "lost"
    no_data_timeout_ms: float = ReadingDefaults.DRIFT_NO_DATA_TIMEOUT_MS

    # Weniger Samples im Fenster -> keine Aussage
    min_samples: int = ReadingDefaults.DRIFT_MIN_SAMPLES

    # Toleranz um den Viewport (px)
    margin_px: float = ReadingDefaults.DRIFT_MARGIN_PX

    # Anteil ausserhalb des Viewports, ab dem gewarnt wird (strikt groesser)
    off_screen_ratio: float = ReadingDefaults.DRIFT_OFF_SCREEN_RATIO

    # Initialer Viewport (px); zur Laufzeit ueber set_viewport aenderbar
    viewport_width: float = ReadingDefaults.VIEWPORT_WIDTH_PX
    viewport_height: float = ReadingDefaults.VIEWPORT_HEIGHT_PX

    def __post_init__(self) -> None:
        self.window_ms = max(0.0, float(self.window_ms))
        self.check_interval_ms = max(0.0, float(self.check_interval_ms))
        self.no_data_timeout_ms = max(0.0, float(self.no_data_timeout_ms))
        self.min_samples = max(1, int(self.min_samples))
        self.margin_px = max(0.0, float(self.margin_px))
        self.off_screen_ratio = clamp(float(self.off_screen_ratio), 0.0, 1.0)
        self.viewport_width = max(0.0, float(self.viewport_width))
        self.viewport_height = max(0.0, float(self.viewport_height))


@dataclass
class ScoringConfig:
    """
    Schwellen fuer das Verdict der Verifikation (Prozent bzw. ms).
    """

    verified_coverage: float = ReadingDefaults.VERIFIED_COVERAGE_PERCENT
    verified_min_fixation_ms: float = ReadingDefaults.VERIFIED_MIN_FIXATION_MS
    partial_coverage: float = ReadingDefaults.PARTIAL_COVERAGE_PERCENT
    skimmed_coverage: float = ReadingDefaults.SKIMMED_COVERAGE_PERCENT

    # Schaetzung der Seitenzahl, wenn die Registry keine Seiten kennt
    spans_per_page_estimate: int = ReadingDefaults.SPANS_PER_PAGE_ESTIMATE

    def __post_init__(self) -> None:
        self.verified_coverage = clamp(float(self.verified_coverage), 0.0, 100.0)
        self.partial_coverage = clamp(float(self.partial_coverage), 0.0, 100.0)
        self.skimmed_coverage = clamp(float(self.skimmed_coverage), 0.0, 100.0)
        self.verified_min_fixation_ms = max(0.0, float(self.verified_min_fixation_ms))
        self.spans_per_page_estimate = max(1, int(self.spans_per_page_estimate))


@dataclass
class SessionConfiguration:
    """Complete configuration of a reading session."""

    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    outlier: OutlierConfig = field(default_factory=OutlierConfig)
    fixation: FixationConfig = field(default_factory=FixationConfig)
    tracker: ReadTrackerConfig = field(default_factory=ReadTrackerConfig)
    drift: DriftConfig = field(default_factory=DriftConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
