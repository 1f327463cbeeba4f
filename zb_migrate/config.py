"""
Configuration management for the Zerobrew migration tool.
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .deny_list import DenyList, DenyListLoader
from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger('config')

SUPPORTED_FORMATS = ("text", "json", "markdown", "excel")


@dataclass
class DenyListConfig:
    """Configuration for the deny list."""
    use_builtin: bool = True
    extra_files: List[str] = field(default_factory=list)
    extra_packages: Dict[str, str] = field(default_factory=dict)  # name -> reason
    allow: List[str] = field(default_factory=list)  # names removed from the deny list


@dataclass
class MigrationConfig:
    """Configuration for the package manager collaborators."""
    brew_command: str = "brew"
    installer_command: str = "zb"
    state_file: Optional[str] = None  # Defaults to ~/.zerobrew/migration_state.json
    command_timeout: float = 600.0  # seconds
    include_casks: bool = False


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    default_format: str = "text"
    use_colors: Optional[bool] = None  # Auto-detect when None
    safe_preview_count: int = 5


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    log_file: Optional[str] = None
    verbose: bool = False


@dataclass
class Config:
    """Main configuration class."""
    deny_list: DenyListConfig = field(default_factory=DenyListConfig)
    migration: MigrationConfig = field(default_factory=MigrationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Config object with loaded settings

    Raises:
        ConfigurationError: If configuration file is invalid
    """
    config = Config()

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Error loading configuration file: {e}") from e

        if config_data:
            if not isinstance(config_data, dict):
                raise ConfigurationError("Configuration file must contain a mapping")
            # Update configuration with loaded data
            _update_config_from_dict(config, config_data)
            logger.info(f"Loaded configuration from {config_path}")

    elif config_path:
        logger.warning(f"Configuration file not found: {config_path}")

    _validate_config(config)
    return config


def _update_config_from_dict(config: Config, config_data: Dict) -> None:
    """
    Update configuration object from dictionary data.

    Args:
        config: Config object to update
        config_data: Dictionary with configuration data
    """
    sections = {
        'deny_list': config.deny_list,
        'migration': config.migration,
        'output': config.output,
        'logging': config.logging,
    }

    for section_name, section in sections.items():
        section_data = config_data.get(section_name)
        if section_data is None:
            continue
        if not isinstance(section_data, dict):
            raise ConfigurationError(f"Section '{section_name}' must be a mapping")

        for key, value in section_data.items():
            if not hasattr(section, key):
                logger.warning(f"Ignoring unknown configuration key: {section_name}.{key}")
                continue
            setattr(section, key, value)


def _validate_config(config: Config) -> None:
    """Reject values that would only fail later at run time."""
    if config.output.default_format not in SUPPORTED_FORMATS:
        raise ConfigurationError(
            f"Unsupported output format '{config.output.default_format}'. "
            f"Choose one of: {', '.join(SUPPORTED_FORMATS)}"
        )

    if config.migration.command_timeout is not None and config.migration.command_timeout <= 0:
        raise ConfigurationError("migration.command_timeout must be positive")

    if config.output.safe_preview_count < 0:
        raise ConfigurationError("output.safe_preview_count must not be negative")


def get_default_config_path() -> Optional[str]:
    """
    Get the default configuration file path.

    Returns:
        Path to default config file if it exists, None otherwise
    """
    possible_paths = [
        'zb_migrate.yaml',
        'zb_migrate.yml',
        os.path.expanduser('~/.zb_migrate.yaml'),
        os.path.expanduser('~/.zb_migrate.yml'),
    ]

    for path in possible_paths:
        if os.path.exists(path):
            return path

    return None


def build_deny_list(config: Config) -> DenyList:
    """
    Assemble the effective deny list from configuration.

    Args:
        config: Loaded configuration

    Returns:
        DenyList with built-in, file and inline entries minus allowed names
    """
    deny_config = config.deny_list
    deny_list = DenyList.builtin() if deny_config.use_builtin else DenyList()

    loader = DenyListLoader(deny_list)
    for path in deny_config.extra_files:
        if os.path.isdir(path):
            loader.load_from_directory(path)
        else:
            loader.load_from_file(path)

    for name, reason in deny_config.extra_packages.items():
        deny_list.add(name, reason)

    for name in deny_config.allow:
        deny_list.remove(name)

    logger.debug(f"Effective deny list has {len(deny_list)} packages")
    return deny_list
