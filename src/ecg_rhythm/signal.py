"""Single-lead ECG signal container and cursor-style point lookup."""

from typing import Self

import numpy as np
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .types import SEGMENT_LABELS, SegmentArray, SegmentLabel, TimeArray


def readonly_copy(array: np.ndarray) -> np.ndarray:
    """Return a copy of ``array`` that cannot be written to."""
    array = array.copy()
    array.flags.writeable = False
    return array


class PointDetails(BaseModel):
    """Projection of a single sample, used for cursor inspection.

    Attributes:
        time: Sample time in seconds
        voltage: Sample voltage in mV
        segment: Waveform phase the sample belongs to
    """

    model_config = ConfigDict(frozen=True)

    time: float
    voltage: float
    segment: SegmentLabel


class Signal(BaseModel):
    """Time-ordered single-lead ECG recording.

    The arrays are copied on construction and marked read-only, so a Signal
    can be shared between analysis steps without copying.

    Attributes:
        time: Sample times in seconds, non-decreasing
        voltage: Sample voltages in mV, same length as ``time``
        segments: Optional ground-truth waveform labels, one per sample.
            Synthetic signals carry them, parsed recordings do not.

    Examples:
        >>> signal = Signal(time=[0.0, 0.004, 0.008], voltage=[0.0, 0.1, 0.0])
        >>> signal.n_samples
        3
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    time: np.ndarray
    voltage: np.ndarray
    segments: np.ndarray | None = None

    @field_validator("time", "voltage", mode="before")
    @classmethod
    def convert_to_array(cls, v) -> np.ndarray:
        """Convert input to a read-only 1D float array."""
        array = np.asarray(v, dtype=float)
        if array.ndim != 1:
            raise ValueError(f"Signal arrays must be 1D, got shape {array.shape}")
        return readonly_copy(array)

    @field_validator("segments", mode="before")
    @classmethod
    def convert_segments(cls, v) -> np.ndarray | None:
        """Convert labels to a read-only string array and reject unknown labels."""
        if v is None:
            return None
        array = np.asarray(v, dtype=str)
        if array.ndim != 1:
            raise ValueError(f"Segment labels must be 1D, got shape {array.shape}")
        unknown = set(np.unique(array)) - set(SEGMENT_LABELS)
        if unknown:
            raise ValueError(f"Unknown segment labels: {sorted(unknown)}. Allowed labels are: {SEGMENT_LABELS}")
        return readonly_copy(array)

    @model_validator(mode="after")
    def validate_consistent_lengths(self) -> Self:
        """Ensure all arrays are parallel and time never decreases."""
        if len(self.time) != len(self.voltage):
            raise ValueError(
                f"time and voltage must have the same length, got {len(self.time)} and {len(self.voltage)}"
            )
        if self.segments is not None and len(self.segments) != len(self.time):
            raise ValueError(
                f"segments must have one label per sample, got {len(self.segments)} labels "
                f"for {len(self.time)} samples"
            )
        if np.any(np.diff(self.time) < 0):
            raise ValueError("time must be non-decreasing")
        return self

    @property
    def n_samples(self) -> int:
        """Return the number of samples."""
        return len(self.time)

    @property
    def duration(self) -> float:
        """Return the time span between the first and last sample in seconds."""
        if self.n_samples == 0:
            return 0.0
        return float(self.time[-1] - self.time[0])

    def nearest_index(self, time: float) -> int | None:
        """Return the index of the sample closest to ``time``.

        Ties resolve to the earlier sample. Returns None for an empty signal.
        """
        return nearest_index(self.time, time)

    def point_at(self, time: float, segments: SegmentArray | None = None) -> PointDetails | None:
        """Look up the sample nearest to ``time``.

        Args:
            time: Query time in seconds
            segments: Labels to report. Defaults to the signal's own segments,
                and to ``baseline`` if it has none.

        Returns:
            PointDetails of the nearest sample, or None for an empty signal
        """
        idx = self.nearest_index(time)
        if idx is None:
            return None
        labels = segments if segments is not None else self.segments
        segment = str(labels[idx]) if labels is not None else "baseline"
        return PointDetails(time=float(self.time[idx]), voltage=float(self.voltage[idx]), segment=segment)


def nearest_index(time: TimeArray, query: float) -> int | None:
    """Binary search for the sample closest to ``query`` in a sorted time array."""
    n_samples = len(time)
    if n_samples == 0:
        return None
    right = int(np.searchsorted(time, query, side="left"))
    if right == 0:
        return 0
    if right == n_samples:
        return n_samples - 1
    left = right - 1
    if query - time[left] <= time[right] - query:
        return left
    return right
