"""Constants for ECG rhythm analysis."""

# Beat detection
THRESHOLD_RATIO = 0.6
REFRACTORY_PERIOD = 0.25  # seconds

# Segmentation windows, in seconds relative to the detected beat
SEGMENT_LOOKBACK = 0.25
SEGMENT_LOOKAHEAD = 0.45
P_WINDOW = (0.1, 0.22)  # before the beat, exclusive bounds
QRS_BEFORE = 0.06  # before the beat, inclusive
QRS_AFTER = 0.06  # after the beat, exclusive
T_WINDOW = (0.12, 0.42)  # after the beat, exclusive bounds

# Placeholder QRS durations in ms, not measured from the waveform
QRS_DURATION_ESTIMATE = 90.0
DEGENERATE_QRS_DURATION = 80.0

# Synthetic signals
SYNTHETIC_SFREQ = 250
SYNTHETIC_DURATION = 10.0

# Coarse rate labeling thresholds in bpm
TACHYCARDIA_BPM = 100
BRADYCARDIA_BPM = 60

# SDNN thresholds in ms for the HRV status label
HRV_LOW_SDNN = 50
HRV_MODERATE_SDNN = 100

SEGMENT_DESCRIPTIONS = {
    "p": {
        "title": "P-Wave",
        "short": "Atrial Depolarization",
        "description": (
            "The P-wave represents the electrical depolarization of the atria (upper chambers), "
            "which leads to atrial contraction. A normal P-wave precedes every QRS complex."
        ),
    },
    "qrs": {
        "title": "QRS Complex",
        "short": "Ventricular Depolarization",
        "description": (
            "The QRS complex corresponds to the depolarization of the ventricles (lower chambers). "
            "Because the ventricles are larger than the atria, this signal is much stronger."
        ),
    },
    "t": {
        "title": "T-Wave",
        "short": "Ventricular Repolarization",
        "description": (
            "The T-wave represents the repolarization (recovery) of the ventricles. "
            "This is a critical period where the heart muscle resets for the next beat."
        ),
    },
    "baseline": {
        "title": "Isoelectric Line",
        "short": "Resting Phase",
        "description": (
            "The baseline (isoelectric line) represents periods where there is no significant "
            "electrical activity detected, typically between cardiac cycles or segments."
        ),
    },
}
