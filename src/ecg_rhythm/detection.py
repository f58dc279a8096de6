"""Beat (R-peak) detection for single-lead ECG signals.

Beats are found with a fixed amplitude threshold on the mean-centered signal,
combined with a refractory period that suppresses double detections on wide
QRS complexes. The detector makes no attempt at filtering: whatever local
maximum clears the threshold first, after the refractory period has elapsed,
is accepted as the next beat.
"""

import numpy as np
import numpy.typing as npt
import pydantic
from pydantic import Field

from . import constants
from ._logging import logger
from .types import BeatIndices


class DetectionSettings(pydantic.BaseModel):
    """Settings for beat detection.

    Attributes:
        threshold_ratio: Fraction of the maximum absolute centered amplitude a
            local maximum must exceed to count as a beat.
        refractory_period: Minimum time in seconds between two accepted beats.
    """

    threshold_ratio: float = Field(default=constants.THRESHOLD_RATIO, gt=0, le=1)
    refractory_period: float = Field(default=constants.REFRACTORY_PERIOD, ge=0)


def detect_beats(
    time: npt.ArrayLike,
    voltage: npt.ArrayLike,
    settings: DetectionSettings | None = None,
) -> BeatIndices:
    """Detect the dominant peak of each cardiac cycle.

    A sample ``i`` (``1 <= i <= n - 2``) is a local maximum of the centered
    signal if it is strictly greater than both neighbours. It is accepted as a
    beat if its centered amplitude exceeds ``threshold_ratio * max(|centered|)``
    and more than ``refractory_period`` seconds have passed since the last
    accepted beat. The first qualifying peak is always eligible.

    Args:
        time: Sample times in seconds, non-decreasing
        voltage: Sample voltages, same length as ``time``
        settings: Detection settings. Defaults are used if None.

    Returns:
        Strictly increasing array of beat sample indices. Empty for signals with
        fewer than 3 samples or without any amplitude variation.

    Raises:
        ValueError: If ``time`` and ``voltage`` are not 1D arrays of equal length

    Examples:
        >>> signal = generate("normal", random_state=0)
        >>> beats = detect_beats(signal.time, signal.voltage)
    """
    settings = settings or DetectionSettings()
    time = np.asarray(time, dtype=float)
    voltage = np.asarray(voltage, dtype=float)

    if time.ndim != 1 or voltage.ndim != 1:
        raise ValueError(f"time and voltage must be 1D arrays, got shapes {time.shape} and {voltage.shape}")
    if time.shape != voltage.shape:
        raise ValueError(f"time and voltage must have the same length, got {len(time)} and {len(voltage)}")

    n_samples = len(voltage)
    if n_samples < 3:
        logger.debug(f"Signal has {n_samples} samples, too short for beat detection")
        return np.array([], dtype=int)

    centered = voltage - voltage.mean()
    threshold = settings.threshold_ratio * np.abs(centered).max()

    middle = centered[1:-1]
    is_candidate = (middle > centered[:-2]) & (middle > centered[2:]) & (middle > threshold)
    candidates = np.flatnonzero(is_candidate) + 1

    # Acceptance depends on the previously accepted beat, so this part stays sequential
    beats = []
    last_beat_time = -settings.refractory_period
    for idx in candidates:
        if time[idx] - last_beat_time > settings.refractory_period:
            beats.append(idx)
            last_beat_time = time[idx]

    logger.debug(
        f"Detected {len(beats)} beats from {len(candidates)} candidate peaks "
        f"(threshold={threshold:.4f}, refractory={settings.refractory_period} s)"
    )
    return np.asarray(beats, dtype=int)
