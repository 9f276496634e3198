"""
Shared CLI utilities.

This module provides common utilities used across CLI commands.
"""

from pathlib import Path
from typing import Optional

import click

from libdupes.core.config import LibDupesConfig
from libdupes.core.config import load_config as load_config_file
from libdupes.utils.exceptions import ConfigurationError
from libdupes.utils.logging import setup_logging


def load_config(config_path: Optional[Path] = None) -> LibDupesConfig:
    """Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None, looks for libdupes.yml

    Returns:
        Loaded and validated LibDupesConfig

    Raises:
        click.ClickException: If config is invalid
    """
    if config_path is None:
        config_path = Path("libdupes.yml")
        if not config_path.exists():
            return LibDupesConfig()

    try:
        return load_config_file(config_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e))


def configure_logging(config: LibDupesConfig, verbose: int = 0, quiet: bool = False) -> None:
    """Set up logging from verbosity flags, falling back to the config level.

    Args:
        config: Loaded configuration (level and optional log file)
        verbose: Verbosity level (1=INFO, 2+=DEBUG); 0 uses the config level
        quiet: If True, suppress all non-error output
    """
    if quiet:
        level = "ERROR"
    elif verbose == 1:
        level = "INFO"
    elif verbose >= 2:
        level = "DEBUG"
    else:
        level = config.logging.level.value

    setup_logging(level=level, log_file=config.logging.file)
