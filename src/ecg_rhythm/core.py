"""Analysis pipeline: beat detection, segmentation and rhythm statistics."""

from pathlib import Path
from typing import Literal

import numpy as np
import numpy.typing as npt
import pandas as pd
from pydantic import BaseModel, ConfigDict, field_validator

from ._logging import logger
from .config import ConfigLoader, Settings
from .detection import detect_beats
from .segmentation import segment
from .signal import PointDetails, Signal, readonly_copy
from .statistics import RhythmStatistics, aggregate
from .synthetic import ArchetypeName, generate


class AnalysisResult(BaseModel):
    """Everything derived from one signal.

    Attributes:
        signal: The analysed signal
        beats: Beat sample indices
        segments: One waveform label per sample
        segment_source: "ground_truth" if the labels came with the signal,
            "heuristic" if the segmenter produced them
        statistics: Rhythm statistics
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    signal: Signal
    beats: np.ndarray
    segments: np.ndarray
    segment_source: Literal["ground_truth", "heuristic"]
    statistics: RhythmStatistics

    @field_validator("beats", "segments", mode="before")
    @classmethod
    def freeze_array(cls, v) -> np.ndarray:
        """Store a read-only copy so the result cannot be modified in place."""
        return readonly_copy(np.asarray(v))

    @property
    def beat_times(self) -> np.ndarray:
        """Return the time of each beat in seconds."""
        return self.signal.time[self.beats]

    def point_at(self, time: float) -> PointDetails | None:
        """Look up the sample nearest to ``time``, labeled with the analysed segments."""
        return self.signal.point_at(time, segments=self.segments)

    def to_dataframe(self) -> pd.DataFrame:
        """Return a per-sample table with columns time, voltage, segment and is_beat."""
        is_beat = np.zeros(self.signal.n_samples, dtype=bool)
        is_beat[self.beats] = True
        return pd.DataFrame(
            {
                "time": self.signal.time,
                "voltage": self.signal.voltage,
                "segment": self.segments,
                "is_beat": is_beat,
            }
        )


class RhythmAnalyzer:
    """Orchestrates the analysis of single-lead ECG signals.

    Each call to :meth:`analyze` runs the full pipeline on the given signal
    and returns a new result. The analyzer holds no state besides its
    settings, so one instance can be reused for any number of signals.

    Args:
        settings: Settings for all pipeline steps. If None, uses default settings.

    Examples:
        analyzer = RhythmAnalyzer()
        result = analyzer.analyze(read_csv("recording.csv"))
        print(result.statistics.bpm, result.statistics.rate_label)
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()

    def analyze(self, signal: Signal) -> AnalysisResult:
        """Detect beats, segment the waveform and aggregate rhythm statistics.

        Ground-truth labels carried by the signal are used instead of the
        heuristic segmenter unless ``settings.segmentation.use_ground_truth``
        is False.

        Args:
            signal: Signal to analyse

        Returns:
            AnalysisResult for the signal
        """
        logger.info(f"Analysing {signal.n_samples} samples ({signal.duration:.2f} s)")

        beats = detect_beats(signal.time, signal.voltage, self.settings.detection)
        logger.info(f"Detected {len(beats)} beats")

        if signal.segments is not None and self.settings.segmentation.use_ground_truth:
            segments = signal.segments
            segment_source = "ground_truth"
            logger.debug("Using ground-truth segments carried by the signal")
        else:
            segments = segment(signal, beats, self.settings.segmentation)
            segment_source = "heuristic"

        statistics = aggregate(beats, signal.time, self.settings.statistics)
        logger.info(
            f"Analysis complete: {statistics.bpm:.0f} bpm ({statistics.rate_label}), "
            f"SDNN {statistics.sdnn:.0f} ms, RMSSD {statistics.rmssd:.0f} ms"
        )

        return AnalysisResult(
            signal=signal,
            beats=beats,
            segments=segments,
            segment_source=segment_source,
            statistics=statistics,
        )

    def analyze_preset(self, archetype: ArchetypeName) -> AnalysisResult:
        """Generate a synthetic preset with the configured settings and analyse it."""
        synthetic = self.settings.synthetic
        signal = generate(
            archetype,
            duration=synthetic.duration,
            sfreq=synthetic.sfreq,
            random_state=synthetic.random_state,
        )
        return self.analyze(signal)


def _resolve_settings(settings: Settings | str | Path | None) -> Settings:
    if settings is None:
        return Settings()
    elif isinstance(settings, (str, Path)):
        return ConfigLoader.from_file(settings)
    elif isinstance(settings, Settings):
        return settings
    raise TypeError(f"settings must be a Settings object, str, Path, or None, got {type(settings).__name__}")


def analyze(
    signal: Signal | npt.ArrayLike,
    voltage: npt.ArrayLike | None = None,
    settings: Settings | str | Path | None = None,
) -> AnalysisResult:
    """Analyse a single-lead ECG signal.

    This is the main high-level API. It accepts either a Signal or a pair of
    time and voltage arrays.

    Args:
        signal: Signal, or sample times in seconds if ``voltage`` is given
        voltage: Sample voltages in mV, only when ``signal`` is a time array
        settings: Configuration. Can be:
            - Settings object: Use directly
            - str or Path: Load from JSON/TOML config file
            - None: Use default settings

    Returns:
        AnalysisResult with beats, segments and statistics

    Raises:
        TypeError: If settings has an unsupported type, or if ``signal`` is not a
            Signal and no voltage was given
        ValueError: If time and voltage are not parallel 1D arrays or the config
            file format is unsupported

    Examples:
        result = ecg_rhythm.analyze(time, voltage)
        result = ecg_rhythm.analyze(ecg_rhythm.generate("afib"), settings="config.toml")
    """
    settings_obj = _resolve_settings(settings)

    if voltage is not None:
        if isinstance(signal, Signal):
            raise TypeError("Pass either a Signal or time and voltage arrays, not both")
        signal = Signal(time=signal, voltage=voltage)
    elif not isinstance(signal, Signal):
        raise TypeError(f"Expected a Signal or time and voltage arrays, got {type(signal).__name__} without voltage")

    return RhythmAnalyzer(settings_obj).analyze(signal)
