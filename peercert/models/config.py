"""
Configuration data models for peer certificate verification.
"""
from dataclasses import dataclass


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class Config:
    """Main configuration class containing all application settings."""

    # Verification settings
    legacy_common_name_fallback: bool = True
    allow_wildcards: bool = True

    # Application settings
    log_level: str = "INFO"
    log_file_path: str = ""
    json_logging: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_types()

    def _validate_types(self):
        """Ensure all configuration values have correct types."""
        if not isinstance(self.legacy_common_name_fallback, bool):
            raise ValueError("legacy_common_name_fallback must be a boolean")

        if not isinstance(self.allow_wildcards, bool):
            raise ValueError("allow_wildcards must be a boolean")

        if not isinstance(self.json_logging, bool):
            raise ValueError("json_logging must be a boolean")

        if not isinstance(self.log_file_path, str):
            raise ValueError("log_file_path must be a string")

        if self.log_level not in LOG_LEVELS:
            raise ValueError("log_level must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")


@dataclass
class ConfigValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    severity: str = "error"  # error, warning

    def __str__(self):
        return f"{self.severity.upper()}: {self.field} - {self.message}"


@dataclass
class ConfigValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: list[ConfigValidationError]
    warnings: list[ConfigValidationError]

    def __post_init__(self):
        """Separate errors and warnings."""
        all_issues = self.errors + self.warnings
        self.errors = [e for e in all_issues if e.severity == "error"]
        self.warnings = [e for e in all_issues if e.severity == "warning"]

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def get_error_summary(self) -> str:
        """Get a formatted summary of all errors and warnings."""
        lines = []

        if self.errors:
            lines.append("Configuration Errors:")
            for error in self.errors:
                lines.append(f"  - {error}")

        if self.warnings:
            lines.append("Configuration Warnings:")
            for warning in self.warnings:
                lines.append(f"  - {warning}")

        return "\n".join(lines) if lines else "Configuration is valid"
