"""Configuration file loaders for JSON and TOML formats."""

import json
import tomllib
from pathlib import Path
from typing import Any

from .._logging import logger
from .models import Settings


class ConfigLoader:
    """Load Settings from configuration files.

    Files map onto the sections of :class:`Settings`. Sections that are left
    out keep their defaults.

    Examples:
        # config.toml
        # [detection]
        # threshold_ratio = 0.5
        #
        # [segmentation]
        # use_ground_truth = false

        settings = ConfigLoader.from_file("config.toml")
    """

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Settings:
        """Validate a mapping against the Settings schema.

        Raises:
            pydantic.ValidationError: If the mapping doesn't match the schema
        """
        return Settings.model_validate(data)

    @staticmethod
    def from_json(path: str | Path) -> Settings:
        """Load settings from a JSON file.

        Raises:
            FileNotFoundError: If file does not exist
            json.JSONDecodeError: If file is not valid JSON
            pydantic.ValidationError: If config doesn't match schema
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.debug(f"Loaded JSON config from {path}")
        return ConfigLoader.from_dict(data)

    @staticmethod
    def from_toml(path: str | Path) -> Settings:
        """Load settings from a TOML file.

        Raises:
            FileNotFoundError: If file does not exist
            tomllib.TOMLDecodeError: If file is not valid TOML
            pydantic.ValidationError: If config doesn't match schema
        """
        path = Path(path)
        with path.open("rb") as f:
            data = tomllib.load(f)
        logger.debug(f"Loaded TOML config from {path}")
        return ConfigLoader.from_dict(data)

    @staticmethod
    def from_file(path: str | Path) -> Settings:
        """Load settings from a file, picking the format by extension.

        Args:
            path: Path to a .json or .toml configuration file

        Raises:
            ValueError: If file extension is not .json or .toml
            FileNotFoundError: If file does not exist
        """
        path = Path(path)

        if path.suffix == ".json":
            return ConfigLoader.from_json(path)
        elif path.suffix == ".toml":
            return ConfigLoader.from_toml(path)
        else:
            raise ValueError(
                f"Unsupported config file format: {path.suffix}. "
                "Only .json and .toml are supported."
            )
