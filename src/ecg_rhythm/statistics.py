"""Rhythm statistics derived from detected beats.

Heart rate and time-domain heart-rate-variability metrics are computed from
the RR intervals between consecutive beats. Inputs with fewer than two beats
produce a zeroed placeholder record rather than an error, so callers should
read ``bpm == 0`` as "not enough data" and not as a physiological value.
"""

import math

import numpy as np
import numpy.typing as npt
import pydantic
from pydantic import BaseModel, ConfigDict, Field

from . import constants
from ._logging import logger


class StatisticsSettings(pydantic.BaseModel):
    """Settings for rhythm statistics.

    Attributes:
        qrs_duration_estimate: QRS duration reported in ms when a rhythm is present.
            This is a fixed estimate, the QRS width is not measured.
        degenerate_qrs_duration: QRS duration reported in ms when fewer than two beats
            were detected.
    """

    qrs_duration_estimate: float = Field(default=constants.QRS_DURATION_ESTIMATE, ge=0)
    degenerate_qrs_duration: float = Field(default=constants.DEGENERATE_QRS_DURATION, ge=0)


class RhythmStatistics(BaseModel):
    """Aggregate rhythm metrics for one recording.

    Accepts both snake_case field names and the camelCase aliases used by
    hosts (``rrIntervals``, ``qrsDuration``, ``minRR``, ``maxRR``).

    Attributes:
        bpm: Mean heart rate in beats per minute, rounded
        rr_intervals: Intervals between consecutive beats in seconds
        sdnn: Population standard deviation of RR intervals in ms, rounded
        rmssd: Root mean square of successive RR differences in ms, rounded
        qrs_duration: Fixed QRS duration estimate in ms
        duration: Time span of the recording in seconds
        min_rr: Shortest RR interval in seconds
        max_rr: Longest RR interval in seconds
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    bpm: float
    rr_intervals: list[float] = Field(alias="rrIntervals")
    sdnn: float
    rmssd: float
    qrs_duration: float = Field(alias="qrsDuration")
    duration: float
    min_rr: float = Field(alias="minRR")
    max_rr: float = Field(alias="maxRR")

    @property
    def n_beats(self) -> int:
        """Return the number of beats the intervals were derived from, 0 without a rhythm."""
        return len(self.rr_intervals) + 1 if self.rr_intervals else 0

    @property
    def has_rhythm(self) -> bool:
        """Return True if enough beats were detected to measure a rate."""
        return self.bpm > 0

    @property
    def rate_label(self) -> str:
        """Return a coarse label for the heart rate."""
        return rate_label(self.bpm)

    @property
    def hrv_status(self) -> str:
        """Return a coarse label for the SDNN value."""
        return hrv_status(self.sdnn)

    def to_dict(self) -> dict[str, float | list[float]]:
        """Convert to a dictionary with camelCase keys."""
        return self.model_dump(by_alias=True)


def _round_half_up(value: float) -> float:
    # Python's round() rounds half to even, which would turn 72.5 bpm into 72
    return float(math.floor(value + 0.5))


def aggregate(
    beats: npt.ArrayLike,
    time: npt.ArrayLike,
    settings: StatisticsSettings | None = None,
) -> RhythmStatistics:
    """Compute rhythm statistics from beat indices.

    Args:
        beats: Strictly increasing beat sample indices
        time: Sample times in seconds
        settings: Statistics settings. Defaults are used if None.

    Returns:
        RhythmStatistics. With fewer than two beats, bpm, sdnn, rmssd and the RR
        bounds are 0 and ``rr_intervals`` is empty.

    Raises:
        IndexError: If a beat index is outside the time array

    Examples:
        >>> time = np.arange(0, 5, 0.004)
        >>> stats = aggregate([0, 250, 500, 750], time)
        >>> stats.bpm
        60.0
    """
    settings = settings or StatisticsSettings()
    time = np.asarray(time, dtype=float)
    beats = np.asarray(beats, dtype=int)

    duration = float(time[-1] - time[0]) if time.size else 0.0

    out_of_range = beats[(beats < 0) | (beats >= time.size)]
    if out_of_range.size:
        raise IndexError(f"Beat indices {out_of_range.tolist()} out of range for {time.size} samples")

    if beats.size < 2:
        logger.info(f"Found {beats.size} beat(s), at least 2 are needed for rhythm statistics")
        return RhythmStatistics(
            bpm=0,
            rr_intervals=[],
            sdnn=0,
            rmssd=0,
            qrs_duration=settings.degenerate_qrs_duration,
            duration=duration,
            min_rr=0,
            max_rr=0,
        )

    rr_intervals = np.diff(time[beats])
    mean_rr = rr_intervals.mean()
    bpm = 60 / mean_rr if mean_rr > 0 else 0.0

    sdnn = rr_intervals.std() * 1000

    successive_diffs = np.diff(rr_intervals) * 1000
    if successive_diffs.size:
        rmssd = math.sqrt(np.sum(successive_diffs**2) / successive_diffs.size)
    else:
        rmssd = 0.0

    stats = RhythmStatistics(
        bpm=_round_half_up(bpm),
        rr_intervals=rr_intervals.tolist(),
        sdnn=_round_half_up(sdnn),
        rmssd=_round_half_up(rmssd),
        qrs_duration=settings.qrs_duration_estimate,
        duration=duration,
        min_rr=float(rr_intervals.min()),
        max_rr=float(rr_intervals.max()),
    )
    logger.debug(f"Rhythm statistics: bpm={stats.bpm}, sdnn={stats.sdnn} ms, rmssd={stats.rmssd} ms")
    return stats


def rate_label(bpm: float) -> str:
    """Label a heart rate as tachycardia, bradycardia or normal sinus rhythm.

    A rate of 0 means no rhythm could be measured.
    """
    if bpm <= 0:
        return "Insufficient Data"
    if bpm > constants.TACHYCARDIA_BPM:
        return "Tachycardia"
    if bpm < constants.BRADYCARDIA_BPM:
        return "Bradycardia"
    return "Normal Sinus Rhythm"


def hrv_status(sdnn: float) -> str:
    """Label an SDNN value in ms."""
    if sdnn < constants.HRV_LOW_SDNN:
        return "Low / Unhealthy"
    if sdnn < constants.HRV_MODERATE_SDNN:
        return "Moderate / Compromised"
    return "High / Healthy"


def describe_segment(segment: str) -> dict[str, str]:
    """Return title, short name and description of a waveform segment.

    Unknown labels are described as baseline.
    """
    return dict(constants.SEGMENT_DESCRIPTIONS.get(segment, constants.SEGMENT_DESCRIPTIONS["baseline"]))
