"""Heuristic waveform segmentation around detected beats.

Every sample starts out as ``baseline``. Each beat then stamps fixed time
windows around itself: P-wave and QRS before the beat, QRS and T-wave after
it. The windows are not fitted to the waveform morphology.

Labels are written in scan order, backward scan first and forward scan second,
beat by beat in detection order. Where windows of neighbouring beats overlap,
the later beat overwrites the labels of the earlier one.
"""

import numpy as np
import numpy.typing as npt
import pydantic
from pydantic import Field

from . import constants
from ._logging import logger
from .signal import Signal
from .types import SegmentArray

Window = tuple[float, float]


class SegmentationSettings(pydantic.BaseModel):
    """Settings for heuristic segmentation.

    All durations are in seconds relative to the beat time.

    Attributes:
        use_ground_truth: Use the labels carried by a signal instead of running
            the segmenter, when the signal has them.
        lookback: Backward scan stops once a sample is further than this before the beat.
        lookahead: Forward scan stops once a sample is further than this after the beat.
        p_window: Exclusive bounds of the P-wave window before the beat.
        qrs_before: QRS extent before the beat (inclusive).
        qrs_after: QRS extent after the beat (exclusive).
        t_window: Exclusive bounds of the T-wave window after the beat.
    """

    use_ground_truth: bool = True
    lookback: float = Field(default=constants.SEGMENT_LOOKBACK, gt=0)
    lookahead: float = Field(default=constants.SEGMENT_LOOKAHEAD, gt=0)
    p_window: Window = constants.P_WINDOW
    qrs_before: float = Field(default=constants.QRS_BEFORE, ge=0)
    qrs_after: float = Field(default=constants.QRS_AFTER, ge=0)
    t_window: Window = constants.T_WINDOW

    @pydantic.field_validator("p_window", "t_window")
    @classmethod
    def validate_window(cls, v: Window) -> Window:
        """Validate that a window is non-negative and ordered."""
        low, high = v
        if low < 0 or low >= high:
            raise ValueError(f"Window bounds must satisfy 0 <= low < high, got {v}")
        return v


def empty_segments(n_samples: int) -> SegmentArray:
    """Return an all-baseline label array."""
    return np.full(n_samples, "baseline", dtype="<U8")


def segment(
    signal: Signal | npt.ArrayLike,
    beats: npt.ArrayLike,
    settings: SegmentationSettings | None = None,
) -> SegmentArray:
    """Label every sample with the waveform phase it falls into.

    Args:
        signal: Signal, or just its time array in seconds
        beats: Beat sample indices in detection order
        settings: Segmentation settings. Defaults are used if None.

    Returns:
        Array of labels (``baseline``, ``p``, ``qrs``, ``t``) with one entry per sample

    Raises:
        IndexError: If a beat index is outside the signal
    """
    settings = settings or SegmentationSettings()
    time = signal.time if isinstance(signal, Signal) else np.asarray(signal, dtype=float)
    beats = np.asarray(beats, dtype=int)
    n_samples = len(time)

    segments = empty_segments(n_samples)
    if beats.size == 0:
        logger.debug(f"No beats, all {n_samples} samples labeled baseline")
        return segments

    out_of_range = beats[(beats < 0) | (beats >= n_samples)]
    if out_of_range.size:
        raise IndexError(f"Beat indices {out_of_range.tolist()} out of range for {n_samples} samples")

    p_low, p_high = settings.p_window
    t_low, t_high = settings.t_window

    for idx in beats:
        t_beat = time[idx]

        for i in range(idx, -1, -1):
            dt = t_beat - time[i]
            if dt > settings.lookback:
                break
            if p_low < dt < p_high:
                segments[i] = "p"
            elif dt <= settings.qrs_before:
                segments[i] = "qrs"

        for i in range(idx + 1, n_samples):
            dt = time[i] - t_beat
            if dt > settings.lookahead:
                break
            if dt < settings.qrs_after:
                segments[i] = "qrs"
            elif t_low < dt < t_high:
                segments[i] = "t"

    logger.debug(f"Segmented {n_samples} samples around {beats.size} beats")
    return segments
