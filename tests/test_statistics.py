"""Unit tests for rhythm statistics."""

import numpy as np
import pytest

from ecg_rhythm import (
    RhythmStatistics,
    Signal,
    StatisticsSettings,
    aggregate,
    describe_segment,
    detect_beats,
    hrv_status,
    rate_label,
)


@pytest.fixture
def time_100hz() -> np.ndarray:
    """10 s of sample times at 100 Hz."""
    return np.arange(1000) / 100


class TestAggregate:
    """Tests for aggregate."""

    @pytest.mark.parametrize("beats", [[], [250]])
    def test_insufficient_beats(self, time_100hz: np.ndarray, beats: list[int]):
        """Test the placeholder record for fewer than two beats."""
        stats = aggregate(beats, time_100hz)

        assert stats.bpm == 0
        assert stats.rr_intervals == []
        assert stats.sdnn == 0
        assert stats.rmssd == 0
        assert stats.qrs_duration == 80
        assert stats.duration == pytest.approx(9.99)
        assert stats.min_rr == 0
        assert stats.max_rr == 0
        assert not stats.has_rhythm

    def test_empty_signal(self):
        """Test that an empty signal has zero duration."""
        stats = aggregate([], [])

        assert stats.duration == 0
        assert stats.bpm == 0

    def test_two_beats_rmssd_guard(self, time_100hz: np.ndarray):
        """Test that a single RR interval gives RMSSD 0 instead of NaN."""
        stats = aggregate([100, 180], time_100hz)

        assert stats.rmssd == 0
        assert not np.isnan(stats.rmssd)
        assert stats.sdnn == 0
        assert stats.bpm == 75
        assert stats.rr_intervals == pytest.approx([0.8])
        assert stats.min_rr == pytest.approx(0.8)
        assert stats.max_rr == pytest.approx(0.8)
        assert stats.qrs_duration == 90

    def test_regular_rhythm(self, time_100hz: np.ndarray):
        """Test a perfectly regular rhythm at 60 bpm."""
        stats = aggregate([50, 150, 250, 350, 450], time_100hz)

        assert stats.bpm == 60
        assert stats.sdnn == 0
        assert stats.rmssd == 0
        assert len(stats.rr_intervals) == 4
        assert stats.n_beats == 5

    def test_variable_rhythm(self, time_100hz: np.ndarray):
        """Test HRV metrics for RR intervals of 0.8, 1.0 and 1.2 s."""
        stats = aggregate([0, 80, 180, 300], time_100hz)

        assert stats.rr_intervals == pytest.approx([0.8, 1.0, 1.2])
        assert stats.bpm == 60
        # Population standard deviation: sqrt((0.2^2 + 0 + 0.2^2) / 3)
        assert stats.sdnn == 163
        # sqrt((200^2 + 200^2) / 2)
        assert stats.rmssd == 200
        assert stats.min_rr == pytest.approx(0.8)
        assert stats.max_rr == pytest.approx(1.2)

    def test_bpm_rounds_half_up(self, time_100hz: np.ndarray):
        """Test that 62.5 bpm is reported as 63."""
        stats = aggregate([0, 96], time_100hz)

        assert stats.bpm == 63

    def test_qrs_duration_is_constant(self, normal_signal: Signal):
        """Test that the QRS duration is the configured estimate, not a measurement."""
        beats = detect_beats(normal_signal.time, normal_signal.voltage)

        assert aggregate(beats, normal_signal.time).qrs_duration == 90

        settings = StatisticsSettings(qrs_duration_estimate=100, degenerate_qrs_duration=0)
        assert aggregate(beats, normal_signal.time, settings).qrs_duration == 100
        assert aggregate([], normal_signal.time, settings).qrs_duration == 0

    def test_deterministic(self, normal_signal: Signal):
        """Test that repeated aggregation gives identical output."""
        beats = detect_beats(normal_signal.time, normal_signal.voltage)

        assert aggregate(beats, normal_signal.time) == aggregate(beats, normal_signal.time)

    def test_beat_out_of_range(self, time_100hz: np.ndarray):
        """Test that beat indices outside the time array are rejected."""
        with pytest.raises(IndexError):
            aggregate([0, 1000], time_100hz)


class TestRhythmStatistics:
    """Tests for the RhythmStatistics record."""

    def test_to_dict_uses_camel_case(self, time_100hz: np.ndarray):
        """Test that the dictionary form uses the host's key names."""
        stats = aggregate([0, 100, 200], time_100hz)

        data = stats.to_dict()

        assert set(data) == {"bpm", "rrIntervals", "sdnn", "rmssd", "qrsDuration", "duration", "minRR", "maxRR"}
        assert data["rrIntervals"] == pytest.approx([1.0, 1.0])

    def test_round_trip_from_aliases(self, time_100hz: np.ndarray):
        """Test that a record can be rebuilt from its dictionary form."""
        stats = aggregate([0, 80, 180, 300], time_100hz)

        assert RhythmStatistics(**stats.to_dict()) == stats

    def test_frozen(self, time_100hz: np.ndarray):
        """Test that statistics cannot be patched in place."""
        stats = aggregate([0, 100], time_100hz)

        with pytest.raises(ValueError):
            stats.bpm = 70


class TestLabels:
    """Tests for the coarse rate and HRV labels."""

    @pytest.mark.parametrize(
        ("bpm", "expected"),
        [
            (0, "Insufficient Data"),
            (45, "Bradycardia"),
            (59, "Bradycardia"),
            (60, "Normal Sinus Rhythm"),
            (100, "Normal Sinus Rhythm"),
            (101, "Tachycardia"),
            (130, "Tachycardia"),
        ],
    )
    def test_rate_label(self, bpm: float, expected: str):
        """Test rate labeling thresholds."""
        assert rate_label(bpm) == expected

    @pytest.mark.parametrize(
        ("sdnn", "expected"),
        [
            (0, "Low / Unhealthy"),
            (49, "Low / Unhealthy"),
            (50, "Moderate / Compromised"),
            (99, "Moderate / Compromised"),
            (100, "High / Healthy"),
        ],
    )
    def test_hrv_status(self, sdnn: float, expected: str):
        """Test HRV status thresholds."""
        assert hrv_status(sdnn) == expected

    def test_statistics_labels(self, time_100hz: np.ndarray):
        """Test the label properties of RhythmStatistics."""
        stats = aggregate([0, 100, 200], time_100hz)

        assert stats.rate_label == "Normal Sinus Rhythm"
        assert stats.hrv_status == "Low / Unhealthy"

    def test_describe_segment(self):
        """Test segment descriptions and the baseline fallback."""
        assert describe_segment("qrs")["title"] == "QRS Complex"
        assert describe_segment("p")["short"] == "Atrial Depolarization"
        assert describe_segment("unknown") == describe_segment("baseline")
        assert describe_segment("baseline")["title"] == "Isoelectric Line"
