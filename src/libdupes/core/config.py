"""
Configuration management for libdupes.

This module provides configuration models and utilities for loading
and validating configuration from YAML files, environment variables,
and programmatic sources.

The field and item-type sets that drive each matching pass live here
rather than in the detection code, so that they can be adapted to the
schema of the metadata store.
"""

import os
import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from libdupes.utils.exceptions import ConfigurationError


class ExactPassConfig(BaseModel):
    """Configuration for an exact single-field pass."""

    enabled: bool = True
    field: str = Field(description="Field whose values are compared")
    item_types: List[str] = Field(
        default_factory=list, description="Restrict to these item types (empty = all)"
    )
    pattern: Optional[str] = Field(
        default=None, description="Regex a value must match (re.search) to take part"
    )

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: Optional[str]) -> Optional[str]:
        """Make sure the pattern compiles."""
        if v is None:
            return v
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid pattern {v!r}: {e}") from e
        return v


class CompositePassConfig(BaseModel):
    """Configuration for a composite exact-field pass."""

    enabled: bool = True
    fields: List[str] = Field(description="Sub-fields concatenated into the comparison value")
    item_types: List[str] = Field(
        default_factory=list, description="Restrict to these item types (empty = all)"
    )
    delimiter: str = Field(default="::", min_length=1)

    model_config = ConfigDict(extra="forbid")

    @field_validator("fields")
    @classmethod
    def validate_fields(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("fields must not be empty")
        return v


class TitlePassConfig(BaseModel):
    """Configuration for the title + secondary-evidence pass."""

    enabled: bool = True
    qualifying_fields: List[str] = Field(
        default_factory=lambda: ["title", "caseName", "subject", "nameOfAct"],
        description="Items need at least one of these to take part",
    )
    extra_fields: List[str] = Field(
        default_factory=lambda: ["edition", "issue"],
        description="Appended to the check value when present",
    )
    exclude_item_types: List[str] = Field(
        default_factory=lambda: ["note", "attachment", "bill", "case", "statute"]
    )
    veto_identifiers: List[str] = Field(
        default_factory=lambda: ["doi", "isbn"],
        description="Identifier caches whose conflicting values block a match",
    )
    date_fields: List[str] = Field(default_factory=lambda: ["date"])
    max_year_gap: int = Field(default=1, ge=0, description="Maximum year difference for duplicates")
    creator_limit: int = Field(default=10, gt=0, description="Creators compared per item")
    delimiter: str = Field(default="::", min_length=1)

    model_config = ConfigDict(extra="forbid")

    @field_validator("qualifying_fields")
    @classmethod
    def validate_qualifying(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("qualifying_fields must not be empty")
        return v


class DuplicatesConfig(BaseModel):
    """Configuration for duplicate detection."""

    isbn: ExactPassConfig = Field(
        default_factory=lambda: ExactPassConfig(field="ISBN", item_types=["book"])
    )
    doi: ExactPassConfig = Field(
        default_factory=lambda: ExactPassConfig(field="DOI", pattern=r"^10\.")
    )
    legal: CompositePassConfig = Field(
        default_factory=lambda: CompositePassConfig(
            fields=[
                "section",
                "code",
                "reporter",
                "court",
                "codeNumber",
                "number",
                "billNumber",
                "codeVolume",
                "reporterVolume",
                "firstPage",
                "publicLawNumber",
                "docketNumber",
            ],
            item_types=["bill", "case", "statute"],
        )
    )
    title: TitlePassConfig = Field(default_factory=TitlePassConfig)
    view_name: str = Field(default="tmpDuplicates", description="Name of the duplicate view")

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class LogLevel(str, Enum):
    """Logging level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: LogLevel = Field(default=LogLevel.WARNING)
    file: Optional[Path] = Field(default=None, description="Optional log file")

    model_config = ConfigDict(extra="forbid")

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class LibDupesConfig(BaseModel):
    """Main configuration for libdupes."""

    library_id: Optional[int] = Field(default=None, description="Default library to scan")
    duplicates: DuplicatesConfig = Field(
        default_factory=DuplicatesConfig, description="Duplicate detection settings"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    model_config = ConfigDict(extra="allow", validate_assignment=True)


def load_config(config_path: Path) -> LibDupesConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated LibDupesConfig instance

    Raises:
        ConfigurationError: If the file is missing or the config is invalid

    Example:
        >>> config = load_config(Path("libdupes.yml"))
        >>> print(config.duplicates.title.max_year_gap)
        1
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError("Configuration file not found", path=str(config_path))

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}", path=str(config_path)) from e

    return load_config_from_dict(raw_config)


def load_config_from_dict(config_dict: Dict[str, Any]) -> LibDupesConfig:
    """Load configuration from a dictionary.

    Args:
        config_dict: Configuration dictionary

    Returns:
        Validated LibDupesConfig instance

    Raises:
        ConfigurationError: If the config is invalid
    """
    if not isinstance(config_dict, dict):
        raise ConfigurationError("Configuration must be a mapping")

    expanded_config = _expand_env_vars(config_dict)

    try:
        return LibDupesConfig(**expanded_config)
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def save_config(config: LibDupesConfig, output_path: Path) -> None:
    """Save configuration to a YAML file.

    Args:
        config: LibDupesConfig instance to save
        output_path: Path to save the configuration
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # mode="json" serializes enums and paths as plain strings
    config_dict = config.model_dump(mode="json", exclude_none=True)

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(
            config_dict,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def _expand_env_vars(config: Any) -> Any:
    """Recursively expand environment variables in config.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax.

    Args:
        config: Configuration object (dict, list, or str)

    Returns:
        Configuration with environment variables expanded
    """
    if isinstance(config, dict):
        return {k: _expand_env_vars(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [_expand_env_vars(item) for item in config]
    elif isinstance(config, str):

        def replace_env_var(match: Any) -> str:
            var_expr = match.group(1)

            if ":-" in var_expr:
                var_name, default = var_expr.split(":-", 1)
                return str(os.getenv(var_name.strip(), default.strip()))

            value = os.getenv(var_expr.strip())
            if value is None:
                # Keep original if env var not found
                return str(match.group(0))
            return str(value)

        return re.sub(r"\$\{([^}]+)\}", replace_env_var, config)
    else:
        return config


def merge_configs(base: LibDupesConfig, override: Dict[str, Any]) -> LibDupesConfig:
    """Merge override configuration into base configuration.

    Args:
        base: Base LibDupesConfig instance
        override: Dictionary with override values

    Returns:
        New LibDupesConfig with merged values

    Example:
        >>> base = LibDupesConfig()
        >>> merged = merge_configs(base, {"duplicates": {"isbn": {"enabled": False}}})
    """
    merged = _deep_merge(base.model_dump(), override)
    return load_config_from_dict(merged)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
