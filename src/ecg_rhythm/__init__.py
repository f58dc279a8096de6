"""ecg_rhythm: Beat detection, waveform segmentation and rhythm statistics for single-lead ECG.

This package derives the structure of a single-lead ECG recording: the sample
index of every beat, a per-sample waveform label (P-wave, QRS complex, T-wave,
baseline) and aggregate rhythm metrics such as heart rate, SDNN and RMSSD.
Every step is a pure function over immutable arrays. A synthetic generator
provides demo signals with ground-truth labels.
"""

from ._logging import logger, set_log_file, set_log_level
from .config import ConfigLoader, Settings
from .core import AnalysisResult, RhythmAnalyzer, analyze
from .detection import DetectionSettings, detect_beats
from .reader import parse_csv_text, read_csv
from .segmentation import SegmentationSettings, segment
from .signal import PointDetails, Signal
from .statistics import (
    RhythmStatistics,
    StatisticsSettings,
    aggregate,
    describe_segment,
    hrv_status,
    rate_label,
)
from .synthetic import ARCHETYPES, Archetype, SyntheticSettings, generate, list_archetypes

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "logger",
    "set_log_level",
    "set_log_file",
    "analyze",
    "AnalysisResult",
    "RhythmAnalyzer",
    "Settings",
    "ConfigLoader",
    "DetectionSettings",
    "SegmentationSettings",
    "StatisticsSettings",
    "SyntheticSettings",
    "Signal",
    "PointDetails",
    "RhythmStatistics",
    "detect_beats",
    "segment",
    "aggregate",
    "rate_label",
    "hrv_status",
    "describe_segment",
    "generate",
    "list_archetypes",
    "Archetype",
    "ARCHETYPES",
    "read_csv",
    "parse_csv_text",
]


def __dir__():
    return __all__
