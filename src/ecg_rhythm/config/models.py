"""Pydantic models for configuration."""

from pydantic import BaseModel, Field

from ..detection import DetectionSettings
from ..segmentation import SegmentationSettings
from ..statistics import StatisticsSettings
from ..synthetic import SyntheticSettings


class Settings(BaseModel):
    """Complete settings for ECG rhythm analysis.

    This is the top-level configuration object. Each section holds the
    parameters of one pipeline step, with the documented defaults.

    Args:
        detection: Beat detection thresholds
        segmentation: Segmentation windows and ground-truth handling
        statistics: Placeholder QRS durations
        synthetic: Sampling rate, duration and seed of synthetic presets

    Examples:
        # Default settings
        settings = Settings()

        # Longer refractory period for slow rhythms
        settings = Settings(detection={"refractory_period": 0.4})

        # Always run the heuristic segmenter, even on synthetic signals
        settings = Settings()
        settings.segmentation.use_ground_truth = False
    """

    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    segmentation: SegmentationSettings = Field(default_factory=SegmentationSettings)
    statistics: StatisticsSettings = Field(default_factory=StatisticsSettings)
    synthetic: SyntheticSettings = Field(default_factory=SyntheticSettings)
