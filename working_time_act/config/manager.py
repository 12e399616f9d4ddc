"""
Configuration manager for loading and validating settings.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from working_time_act.data.schemas import Config

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading from YAML files and environment variables."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the config manager.

        Args:
            config_path: Optional path to config file. If not provided, uses default.
        """
        self.config_path = config_path or self._get_default_config_path()

    def _get_default_config_path(self) -> str:
        """Get the default configuration file path."""
        package_dir = Path(__file__).parent.parent
        return str(package_dir / "config" / "settings.yaml")

    def load_config(self) -> Config:
        """
        Load configuration from YAML file with environment variable overrides.

        Returns:
            Config: Validated configuration object.

        Raises:
            ValueError: If config is invalid.
        """
        config_dict = self._load_yaml()
        config_dict = self._apply_env_overrides(config_dict)

        try:
            return Config(**config_dict)
        except Exception as e:
            raise ValueError(f"Invalid configuration: {e}")

    def _load_yaml(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        config_path = Path(self.config_path)

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}, using defaults")
            return {}

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing YAML config file: {e}")

        logger.debug(f"Loaded config from: {config_path}")
        return self._flatten_config(config) if config else {}

    def _flatten_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Flatten nested YAML config to match Config model fields.

        Args:
            config: Nested configuration dictionary.

        Returns:
            Flattened configuration dictionary.
        """
        result = {}

        if "holidays" in config:
            hol = config["holidays"] or {}
            if "country" in hol:
                result["holiday_country"] = hol["country"]
            if "language" in hol:
                result["holiday_language"] = hol["language"]
            if "default_group" in hol:
                result["default_holiday_group"] = hol["default_group"]
            if hol.get("groups"):
                result["holiday_groups"] = {str(k): str(v) for k, v in hol["groups"].items()}

        if "rule" in config:
            rule = config["rule"] or {}
            if "max_daily_hours" in rule:
                result["max_daily_hours"] = rule["max_daily_hours"]
            if "non_working_weekday" in rule:
                result["non_working_weekday"] = rule["non_working_weekday"]

        if "output" in config:
            out = config["output"] or {}
            if "format" in out:
                result["output_format"] = out["format"]
            if "directory" in out:
                result["output_directory"] = out["directory"]

        if "api" in config:
            api = config["api"] or {}
            if "host" in api:
                result["api_host"] = api["host"]
            if "port" in api:
                result["api_port"] = api["port"]

        if "logging" in config:
            log = config["logging"] or {}
            if "level" in log:
                result["log_level"] = log["level"]

        return result

    def _apply_env_overrides(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Environment variables:
        - WTA_HOLIDAY_COUNTRY -> holiday_country
        - WTA_HOLIDAY_LANGUAGE -> holiday_language
        - WTA_DEFAULT_HOLIDAY_GROUP -> default_holiday_group
        - WTA_MAX_DAILY_HOURS -> max_daily_hours
        - WTA_NON_WORKING_WEEKDAY -> non_working_weekday
        - WTA_OUTPUT_FORMAT -> output_format
        - WTA_OUTPUT_DIRECTORY -> output_directory
        - WTA_API_HOST -> api_host
        - WTA_API_PORT -> api_port
        - WTA_LOG_LEVEL -> log_level

        Args:
            config_dict: Configuration dictionary from YAML.

        Returns:
            Updated configuration dictionary.
        """
        env_mappings = {
            "WTA_HOLIDAY_COUNTRY": "holiday_country",
            "WTA_HOLIDAY_LANGUAGE": "holiday_language",
            "WTA_DEFAULT_HOLIDAY_GROUP": "default_holiday_group",
            "WTA_MAX_DAILY_HOURS": ("max_daily_hours", float),
            "WTA_NON_WORKING_WEEKDAY": ("non_working_weekday", int),
            "WTA_OUTPUT_FORMAT": "output_format",
            "WTA_OUTPUT_DIRECTORY": "output_directory",
            "WTA_API_HOST": "api_host",
            "WTA_API_PORT": ("api_port", int),
            "WTA_LOG_LEVEL": "log_level",
        }

        for env_var, mapping in env_mappings.items():
            env_value = os.environ.get(env_var)
            if env_value is None:
                continue

            if isinstance(mapping, tuple):
                config_key, type_converter = mapping
                try:
                    config_dict[config_key] = type_converter(env_value)
                except ValueError:
                    logger.warning(f"Ignoring invalid value for {env_var}: {env_value!r}")
                    continue
            else:
                config_key = mapping
                config_dict[config_key] = env_value
            logger.debug(f"Override from env: {env_var} -> {config_key}")

        return config_dict

    def save_config(self, config: Config, output_path: Optional[str] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            config: Configuration object to save.
            output_path: Optional output path. If not provided, uses default.
        """
        output_path = output_path or self.config_path

        config_dict = {
            "holidays": {
                "country": config.holiday_country,
                "language": config.holiday_language,
                "default_group": config.default_holiday_group,
                "groups": dict(config.holiday_groups),
            },
            "rule": {
                "max_daily_hours": config.max_daily_hours,
                "non_working_weekday": config.non_working_weekday,
            },
            "output": {
                "format": config.output_format,
                "directory": config.output_directory,
            },
            "api": {
                "host": config.api_host,
                "port": config.api_port,
            },
            "logging": {
                "level": config.log_level,
            },
        }

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
        logger.info(f"Saved configuration to: {output_path}")
