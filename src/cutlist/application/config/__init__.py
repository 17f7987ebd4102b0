"""Configuration schema and loading system for cut list projects.

This package provides JSON-based project loading and validation. It
includes Pydantic models for schema validation, a loader with error
reporting, reference checks and the adapter to domain objects.

Example:
    >>> from pathlib import Path
    >>> from cutlist.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("kitchen.json"))
    ...     print(f"{len(config.cabinets)} cabinets")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from cutlist.application.config.adapter import config_to_project
from cutlist.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from cutlist.application.config.schema import (
    SUPPORTED_VERSIONS,
    CabinetInstanceConfig,
    DimensionsConfig,
    JointConfig,
    MaterialLibraryConfig,
    OutputConfig,
    PartRuleConfig,
    PatternConfig,
    ProjectConfiguration,
    RuleSetConfig,
    SettingsConfig,
)
from cutlist.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "CabinetInstanceConfig",
    "ConfigError",
    "DimensionsConfig",
    "JointConfig",
    "MaterialLibraryConfig",
    "OutputConfig",
    "PartRuleConfig",
    "PatternConfig",
    "ProjectConfiguration",
    "RuleSetConfig",
    "SettingsConfig",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "config_to_project",
    "load_config",
    "load_config_from_dict",
    "validate_config",
]
