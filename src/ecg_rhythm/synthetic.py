"""Synthetic ECG generator for demo presets and tests.

Signals are built from Gaussian bumps placed at fixed phases of each cardiac
cycle: a P-wave, a QRS complex made of Q, R and S lobes, and a T-wave whose
position and width scale with the archetype's QT factor. Every sample is also
labeled with the waveform component that produced it, which gives a
ground-truth segmentation to compare the heuristic segmenter against.
"""

import math
from typing import Literal

import numpy as np
import pydantic
from pydantic import BaseModel, ConfigDict, Field

from . import constants
from ._logging import logger
from .signal import Signal
from .segmentation import empty_segments

ArchetypeName = Literal["normal", "tachycardia", "bradycardia", "afib", "qt_prolongation"]

RandomState = int | np.random.Generator | None


class Archetype(BaseModel):
    """Rhythm parameters of a synthetic signal.

    Attributes:
        bpm: Nominal heart rate in beats per minute
        irregularity: Beat-to-beat jitter as a fraction of the beat duration
        noise_level: Peak-to-peak amplitude of uniform additive noise in mV
        qt_factor: Scale of the T-wave position and width
        fibrillation: Replace the P-wave with a fibrillatory ripple
    """

    model_config = ConfigDict(frozen=True)

    bpm: float = Field(gt=0)
    irregularity: float = Field(default=0.0, ge=0, lt=2)
    noise_level: float = Field(default=0.01, ge=0)
    qt_factor: float = Field(default=1.0, gt=0)
    fibrillation: bool = False

    @property
    def beat_duration(self) -> float:
        """Return the nominal beat duration in seconds."""
        return 60 / self.bpm


ARCHETYPES: dict[ArchetypeName, Archetype] = {
    "normal": Archetype(bpm=60),
    "tachycardia": Archetype(bpm=130),
    "bradycardia": Archetype(bpm=45),
    "afib": Archetype(bpm=90, irregularity=0.6, noise_level=0.04, fibrillation=True),
    "qt_prolongation": Archetype(bpm=60, qt_factor=1.6),
}


class SyntheticSettings(pydantic.BaseModel):
    """Settings for synthetic signal generation.

    Attributes:
        sfreq: Sampling frequency in Hz
        duration: Signal duration in seconds
        random_state: Seed for jitter and noise. None draws fresh entropy.
    """

    sfreq: float = Field(default=constants.SYNTHETIC_SFREQ, gt=0)
    duration: float = Field(default=constants.SYNTHETIC_DURATION, ge=0)
    random_state: int | None = None


def list_archetypes() -> list[str]:
    """Return the names of all synthetic archetypes."""
    return list(ARCHETYPES)


def _gaussian(phase: np.ndarray, center: float, width: float) -> np.ndarray:
    return np.exp(-(((phase - center) * width) ** 2))


def _cycle_starts(time: np.ndarray, beat_duration: float, irregularity: float, rng: np.random.Generator) -> np.ndarray:
    """Return the start time of the cycle each sample falls into.

    A new cycle starts at the first sample at or after the scheduled next beat,
    and the following beat is scheduled one jittered beat duration later.
    """
    starts = np.empty_like(time)
    next_beat = 0.0
    for i, t in enumerate(time):
        if t >= next_beat:
            jitter = (rng.random() - 0.5) * irregularity * beat_duration
            next_beat = t + beat_duration + jitter
        starts[i] = next_beat - beat_duration
    return starts


def generate(
    archetype: ArchetypeName | Archetype = "normal",
    duration: float = constants.SYNTHETIC_DURATION,
    sfreq: float = constants.SYNTHETIC_SFREQ,
    random_state: RandomState = None,
) -> Signal:
    """Generate a synthetic single-lead ECG with ground-truth segments.

    Args:
        archetype: Name of a preset from ``ARCHETYPES`` or a custom Archetype
        duration: Signal duration in seconds
        sfreq: Sampling frequency in Hz
        random_state: Seed or Generator for jitter and noise

    Returns:
        Signal with ``segments`` set to the ground-truth labels

    Raises:
        ValueError: If the archetype name is unknown, or duration/sfreq are invalid

    Examples:
        >>> signal = generate("tachycardia", duration=10, random_state=42)
        >>> signal.n_samples
        2500
    """
    if isinstance(archetype, str):
        if archetype not in ARCHETYPES:
            raise ValueError(f"Unknown archetype '{archetype}'. Available archetypes: {list_archetypes()}")
        name = archetype
        archetype = ARCHETYPES[archetype]
    else:
        name = "custom"
    if sfreq <= 0:
        raise ValueError(f"Sampling frequency must be positive, got {sfreq}")
    if duration < 0:
        raise ValueError(f"Duration must not be negative, got {duration}")

    rng = np.random.default_rng(random_state)
    n_samples = math.ceil(duration * sfreq)
    time = np.arange(n_samples) / sfreq
    beat_duration = archetype.beat_duration
    qt = archetype.qt_factor

    phase = (time - _cycle_starts(time, beat_duration, archetype.irregularity, rng)) / beat_duration
    segments = empty_segments(n_samples)

    voltage = 0.05 * np.sin(0.2 * time)

    if archetype.fibrillation:
        voltage += 0.03 * np.sin(45 * time)
    else:
        in_p = (phase > 0.1) & (phase < 0.22)
        voltage += np.where(in_p, 0.1 * _gaussian(phase, 0.16, 50), 0.0)
        segments[in_p & (np.abs(phase - 0.16) < 0.05)] = "p"

    in_qrs = (phase > 0.38) & (phase < 0.44)
    segments[in_qrs] = "qrs"
    q_lobe = in_qrs & (phase < 0.4)
    r_lobe = (phase > 0.39) & (phase < 0.41)
    s_lobe = (phase > 0.41) & (phase < 0.43)
    voltage -= np.where(q_lobe, 0.15 * _gaussian(phase, 0.39, 200), 0.0)
    voltage += np.where(r_lobe, 1.2 * _gaussian(phase, 0.40, 300), 0.0)
    voltage -= np.where(s_lobe, 0.2 * _gaussian(phase, 0.42, 200), 0.0)

    in_t = (phase > 0.5 * qt) & (phase < 0.75 * qt)
    voltage += np.where(in_t, 0.25 * _gaussian(phase, 0.62 * qt, 30 / qt), 0.0)
    segments[in_t & ~in_qrs & (voltage > 0.05)] = "t"

    voltage += (rng.random(n_samples) - 0.5) * archetype.noise_level

    logger.debug(f"Generated {duration} s of synthetic '{name}' ECG at {sfreq} Hz ({n_samples} samples)")
    return Signal(time=time, voltage=voltage, segments=segments)
