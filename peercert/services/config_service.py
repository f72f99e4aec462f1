"""
Configuration service for loading and validating verifier settings.
"""
import os
import configparser
from typing import Optional, Dict, Any
import logging

from ..models.config import Config, ConfigValidationError, ConfigValidationResult


# Properties file key -> (Config field, type). Both "section.key" and bare keys are accepted.
CONFIG_MAPPING = {
    "verification.legacy_common_name_fallback": ("legacy_common_name_fallback", bool),
    "legacy_common_name_fallback": ("legacy_common_name_fallback", bool),
    "verification.allow_wildcards": ("allow_wildcards", bool),
    "allow_wildcards": ("allow_wildcards", bool),

    "app.log_level": ("log_level", str),
    "log_level": ("log_level", str),
    "app.log_file_path": ("log_file_path", str),
    "log_file_path": ("log_file_path", str),
    "app.json_logging": ("json_logging", bool),
    "json_logging": ("json_logging", bool),
}

DEFAULT_CONFIG_CONTENT = """# Peer certificate verification settings

[verification]
# Match the subject commonName when a certificate has no subjectAltName DNS entries
legacy_common_name_fallback = true
allow_wildcards = true

[app]
log_level = INFO
# Leave empty to log to the console only
log_file_path =
json_logging = false
"""


class ConfigService:
    """Service for loading and validating application configuration."""

    def __init__(self, config_path: Optional[str] = None):
        self.logger = logging.getLogger(__name__)
        self._config = None
        if config_path:
            self._config = self.load_config(config_path)

    def get_config(self) -> Config:
        """
        Get the loaded configuration.

        Raises:
            ValueError: If no configuration has been loaded
        """
        if self._config is None:
            raise ValueError("No configuration loaded. Call load_config() first.")
        return self._config

    def load_config(self, config_path: str) -> Config:
        """
        Load configuration from a property file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid or has validation errors
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        config_data = self._load_config_file(config_path)
        config = self._create_config_from_data(config_data)

        validation_result = self.validate_config(config)

        if validation_result.has_errors():
            error_summary = validation_result.get_error_summary()
            raise ValueError(f"Configuration validation failed:\n{error_summary}")

        if validation_result.has_warnings():
            warning_summary = validation_result.get_error_summary()
            self.logger.warning(f"Configuration warnings:\n{warning_summary}")

        self._config = config
        return config

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """Load configuration data from file."""
        config_parser = configparser.ConfigParser()

        try:
            config_parser.read(config_path)
        except configparser.Error as e:
            raise ValueError(f"Failed to parse configuration file: {e}")

        # Bare DEFAULT keys go first so that section values override them
        config_data = dict(config_parser.defaults())
        for section in config_parser.sections():
            for key, value in config_parser.items(section):
                config_data[f"{section}.{key}"] = value

        return config_data

    def _create_config_from_data(self, config_data: Dict[str, Any]) -> Config:
        """Create Config object from configuration data."""
        config_kwargs = {}

        for config_key, raw_value in config_data.items():
            if config_key not in CONFIG_MAPPING:
                self.logger.debug(f"Ignoring unknown configuration key: {config_key}")
                continue

            field_name, field_type = CONFIG_MAPPING[config_key]
            if field_type == bool:
                value = self._parse_bool(raw_value)
            elif field_type == str:
                value = str(raw_value) if raw_value is not None else ""
            else:
                value = raw_value

            if field_name == "log_level":
                value = value.strip().upper()

            config_kwargs[field_name] = value

        return Config(**config_kwargs)

    def _parse_bool(self, value: Any) -> bool:
        """Parse boolean value from string."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in ("true", "yes", "1", "on", "enabled")
        return bool(value)

    def validate_config(self, config: Config) -> ConfigValidationResult:
        """
        Validate configuration settings.

        Args:
            config: Configuration object to validate

        Returns:
            ConfigValidationResult with validation results
        """
        errors = []
        warnings = []

        if config.log_file_path:
            log_dir = os.path.dirname(config.log_file_path)
            if log_dir and not os.path.exists(log_dir):
                warnings.append(ConfigValidationError(
                    "log_file_path",
                    f"Log directory does not exist: {log_dir}",
                    "warning"
                ))
        elif config.json_logging:
            warnings.append(ConfigValidationError(
                "json_logging",
                "JSON logging only applies to the log file, but no log_file_path is set",
                "warning"
            ))

        all_issues = errors + warnings
        return ConfigValidationResult(
            is_valid=len(errors) == 0,
            errors=all_issues,
            warnings=[]
        )

    def create_default_config_file(self, config_path: str) -> None:
        """
        Create a default configuration file with example settings.

        Args:
            config_path: Path where to create the config file
        """
        config_dir = os.path.dirname(config_path)
        if config_dir:
            os.makedirs(config_dir, exist_ok=True)

        with open(config_path, 'w') as f:
            f.write(DEFAULT_CONFIG_CONTENT)

        self.logger.info(f"Created default configuration file: {config_path}")
