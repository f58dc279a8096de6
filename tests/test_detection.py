"""Unit tests for beat detection."""

import numpy as np
import pytest

from ecg_rhythm import DetectionSettings, Signal, detect_beats


class TestDetectBeats:
    """Tests for detect_beats."""

    def test_spike_train(self, spike_train: tuple[np.ndarray, np.ndarray]):
        """Test that every spike is detected at its exact index."""
        time, voltage = spike_train

        beats = detect_beats(time, voltage)

        np.testing.assert_array_equal(beats, [50, 150, 250])
        assert beats.dtype.kind == "i"

    def test_empty_signal(self):
        """Test that an empty signal yields no beats."""
        beats = detect_beats([], [])

        assert isinstance(beats, np.ndarray)
        assert beats.size == 0

    @pytest.mark.parametrize("n_samples", [1, 2])
    def test_too_short_signal(self, n_samples: int):
        """Test that signals shorter than 3 samples yield no beats."""
        time = np.arange(n_samples) / 100
        voltage = np.arange(n_samples, dtype=float)

        assert detect_beats(time, voltage).size == 0

    def test_flat_signal(self):
        """Test that a signal without amplitude variation yields no beats."""
        time = np.arange(1000) / 250

        assert detect_beats(time, np.zeros(1000)).size == 0
        assert detect_beats(time, np.full(1000, 3.2)).size == 0

    def test_peak_below_threshold_ignored(self):
        """Test that local maxima below 60% of the largest deflection are ignored."""
        time = np.arange(300) / 100
        voltage = np.zeros(300)
        voltage[50] = 1.0
        voltage[150] = 0.5

        np.testing.assert_array_equal(detect_beats(time, voltage), [50])

    def test_negative_deflection_sets_threshold(self):
        """Test that a dominant negative deflection raises the threshold for positive peaks."""
        time = np.arange(300) / 100
        voltage = np.zeros(300)
        voltage[100] = -2.0
        voltage[200] = 1.0

        assert detect_beats(time, voltage).size == 0

    def test_refractory_period(self):
        """Test that a second peak within the refractory period is suppressed."""
        time = np.arange(300) / 100
        voltage = np.zeros(300)
        voltage[50] = 1.0
        voltage[60] = 0.9

        np.testing.assert_array_equal(detect_beats(time, voltage), [50])

    def test_refractory_period_is_exclusive(self):
        """Test that peaks exactly one refractory period apart are not both accepted."""
        time = np.arange(300) / 100
        voltage = np.zeros(300)
        voltage[[50, 75, 101]] = 1.0

        np.testing.assert_array_equal(detect_beats(time, voltage), [50, 101])

    def test_first_peak_always_eligible(self):
        """Test that a peak at the first interior sample is accepted."""
        time = np.arange(100) / 100
        voltage = np.zeros(100)
        voltage[1] = 1.0

        np.testing.assert_array_equal(detect_beats(time, voltage), [1])

    def test_plateau_is_not_a_peak(self):
        """Test that a flat-topped peak is not a strict local maximum."""
        time = np.arange(100) / 100
        voltage = np.zeros(100)
        voltage[40:43] = 1.0
        voltage[80] = 1.0

        np.testing.assert_array_equal(detect_beats(time, voltage), [80])

    def test_custom_settings(self):
        """Test that threshold and refractory period come from the settings."""
        time = np.arange(300) / 100
        voltage = np.zeros(300)
        voltage[50] = 1.0
        voltage[60] = 0.5

        settings = DetectionSettings(threshold_ratio=0.4, refractory_period=0.05)

        np.testing.assert_array_equal(detect_beats(time, voltage, settings), [50, 60])

    def test_mismatched_lengths(self):
        """Test that time and voltage of different lengths are rejected."""
        with pytest.raises(ValueError, match="same length"):
            detect_beats(np.arange(10) / 100, np.zeros(9))

    def test_invalid_dimensions(self):
        """Test that 2D input is rejected."""
        with pytest.raises(ValueError, match="1D"):
            detect_beats(np.zeros((2, 10)), np.zeros((2, 10)))

    def test_input_not_modified(self, normal_signal: Signal):
        """Test that detection works on read-only arrays and leaves them untouched."""
        voltage_before = normal_signal.voltage.copy()

        detect_beats(normal_signal.time, normal_signal.voltage)

        np.testing.assert_array_equal(normal_signal.voltage, voltage_before)


class TestDetectionInvariants:
    """Property checks on realistic signals."""

    def test_deterministic(self, normal_signal: Signal):
        """Test that repeated detection gives identical output."""
        beats1 = detect_beats(normal_signal.time, normal_signal.voltage)
        beats2 = detect_beats(normal_signal.time, normal_signal.voltage)

        np.testing.assert_array_equal(beats1, beats2)

    @pytest.mark.parametrize("archetype", ["normal", "tachycardia", "bradycardia", "afib", "qt_prolongation"])
    def test_refractory_invariant(self, archetype: str):
        """Test that consecutive beats are more than 0.25 s apart."""
        from ecg_rhythm import generate

        signal = generate(archetype, duration=10, random_state=1)
        beats = detect_beats(signal.time, signal.voltage)

        assert beats.size > 0
        assert np.all(np.diff(signal.time[beats]) > 0.25)
        assert np.all(np.diff(beats) > 0)

    def test_threshold_invariant(self, tachycardia_signal: Signal):
        """Test that every beat's centered amplitude exceeds 60% of the maximum."""
        voltage = tachycardia_signal.voltage
        centered = voltage - voltage.mean()

        beats = detect_beats(tachycardia_signal.time, voltage)

        assert np.all(centered[beats] > 0.6 * np.abs(centered).max())

    def test_neurokit_simulation(self, simulated_ecg: tuple[np.ndarray, np.ndarray]):
        """Test detection on an ECG simulated by neurokit2 at 70 bpm."""
        time, voltage = simulated_ecg

        beats = detect_beats(time, voltage)

        # 70 bpm over 10 s
        assert 9 <= beats.size <= 14
        assert np.all(np.diff(time[beats]) > 0.25)
