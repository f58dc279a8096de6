"""Type definitions for ECG data structures."""

from typing import Annotated, Literal, TypeAlias, get_args

import numpy as np
import numpy.typing as npt

SegmentLabel = Literal["baseline", "p", "qrs", "t"]
SEGMENT_LABELS: tuple[SegmentLabel, ...] = get_args(SegmentLabel)

# Sample times in seconds, non-decreasing
TimeArray: TypeAlias = Annotated[npt.NDArray[np.floating], "Shape: (n_samples,)"]

# Strictly increasing sample indices of detected beats
BeatIndices: TypeAlias = Annotated[npt.NDArray[np.integer], "Shape: (n_beats,)"]

# One SegmentLabel per sample, parallel to TimeArray
SegmentArray: TypeAlias = Annotated[npt.NDArray[np.str_], "Shape: (n_samples,)"]
