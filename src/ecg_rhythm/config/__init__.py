"""Configuration system for ecg_rhythm."""

from .loaders import ConfigLoader
from .models import Settings

__all__ = [
    "ConfigLoader",
    "Settings",
]
