"""Shared test fixtures for ecg_rhythm tests."""

import neurokit2 as nk
import numpy as np
import pytest

from ecg_rhythm import Signal, generate


@pytest.fixture
def normal_signal() -> Signal:
    """10 s of the synthetic normal preset at 250 Hz."""
    return generate("normal", duration=10, random_state=0)


@pytest.fixture
def tachycardia_signal() -> Signal:
    """10 s of the synthetic tachycardia preset at 250 Hz."""
    return generate("tachycardia", duration=10, random_state=0)


@pytest.fixture
def simulated_ecg() -> tuple[np.ndarray, np.ndarray]:
    """Generate an ECG with neurokit2, independent of the built-in generator.

    Returns:
        Tuple of (time, voltage) for 10 s at 250 Hz and 70 bpm
    """
    sfreq = 250
    voltage = nk.ecg_simulate(duration=10, sampling_rate=sfreq, noise=0.01, heart_rate=70, random_state=0)
    time = np.arange(len(voltage)) / sfreq
    return time, voltage


@pytest.fixture
def spike_train() -> tuple[np.ndarray, np.ndarray]:
    """Unit spikes at 0.5 s, 1.5 s and 2.5 s on a flat 3 s signal sampled at 100 Hz.

    Returns:
        Tuple of (time, voltage)
    """
    time = np.arange(300) / 100
    voltage = np.zeros(300)
    voltage[[50, 150, 250]] = 1.0
    return time, voltage
