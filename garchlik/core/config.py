'''
Configuration management for garchlik.

Settings are resolved in layers, later layers overriding earlier ones:

1. Dataclass defaults built into the package
2. An optional JSON user file (``~/.garchlik/config.json`` or the path named
   by ``GARCHLIK_CONFIG_FILE``)
3. Environment variables of the form ``GARCHLIK_<SECTION>_<OPTION>``
4. Runtime modifications through ``set_config``

The numerical section holds the thresholds the likelihood kernels use to
detect degenerate states; the performance section holds the default worker
count for evaluating independent series; the logging section configures the
``garchlik`` package logger.
'''

import os
import json
import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import ConfigurationError
from .types import LogLevel

# Set up module-level logger
logger = logging.getLogger("garchlik.core.config")

CONFIG_ENV_PREFIX = "GARCHLIK_"
CONFIG_FILE_ENV = "GARCHLIK_CONFIG_FILE"
DEFAULT_CONFIG_PATH = Path.home() / ".garchlik" / "config.json"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigSection(Enum):
    """Enumeration of configuration sections."""
    NUMERICAL = "numerical"
    PERFORMANCE = "performance"
    LOGGING = "logging"


@dataclass
class NumericalConfig:
    """
    Numerical thresholds used by the likelihood kernels.

    Attributes:
        min_lagged_std: A lagged conditional standard deviation at or below
            this value is reported as degenerate by the EGARCH recursion
        dcc_boundary_tol: Transformed DCC weights closer than this to the
            boundary of the simplex trigger a NumericWarning
        symmetry_tol: Absolute tolerance used when checking that Qbar is symmetric
    """
    min_lagged_std: float = 0.0
    dcc_boundary_tol: float = 1e-8
    symmetry_tol: float = 1e-10


@dataclass
class PerformanceConfig:
    """
    Performance settings.

    Attributes:
        max_workers: Default number of threads used to evaluate independent
            series in the panel helpers (1 evaluates sequentially)
    """
    max_workers: int = 1


@dataclass
class LoggingConfig:
    """
    Logging settings for the ``garchlik`` logger.

    Attributes:
        log_level: Level of the package logger
        log_format: Format string for log records
        console_logging: Whether to attach a console handler
    """
    log_level: LogLevel = "WARNING"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    console_logging: bool = True


@dataclass
class GarchLikConfig:
    """Complete configuration, one attribute per section."""
    numerical: NumericalConfig = field(default_factory=NumericalConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _validate_option(section: str, option: str, value: Any) -> None:
    """Check the constraint attached to a single option.

    Raises:
        ConfigurationError: If the value violates the constraint
    """
    setting = f"{section}.{option}"
    if option in ("min_lagged_std", "symmetry_tol") and value < 0:
        raise ConfigurationError(
            f"{setting} must be non-negative",
            setting=setting, value=value, issue="Negative value"
        )
    if option == "dcc_boundary_tol" and not 0 <= value < 1:
        raise ConfigurationError(
            f"{setting} must lie in [0, 1)",
            setting=setting, value=value, issue="Out of range"
        )
    if option == "max_workers" and value < 1:
        raise ConfigurationError(
            f"{setting} must be a positive integer",
            setting=setting, value=value, issue="Non-positive value"
        )
    if option == "log_level" and value not in _LOG_LEVELS:
        raise ConfigurationError(
            f"{setting} must be one of {', '.join(_LOG_LEVELS)}",
            setting=setting, value=value, issue="Unknown log level"
        )


def _coerce(current_value: Any, value: Any) -> Any:
    # Values from the environment or JSON arrive as strings or loose types
    value_type = type(current_value)
    if value_type is bool and isinstance(value, str):
        return value.lower() in ('true', 'yes', '1', 'y')
    if value_type is not type(value):
        return value_type(value)
    return value


class ConfigManager:
    """
    Configuration manager.

    Holds the current configuration, applies the file and environment
    layers on ``initialize`` and tracks which options were modified at runtime.
    """

    def __init__(self) -> None:
        self._config = GarchLikConfig()
        self._initialized = False
        self._config_file: Optional[Path] = None
        self._modified_keys = set()

    def initialize(self) -> None:
        """
        Apply the file and environment layers and configure logging.

        Calling this more than once has no further effect.
        """
        if self._initialized:
            return

        self._load_user_config()
        self._apply_env_overrides()
        self._setup_logging()

        self._initialized = True
        logger.debug("Configuration manager initialized")

    def _load_user_config(self) -> None:
        env_path = os.environ.get(CONFIG_FILE_ENV)
        self._config_file = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

        if not self._config_file.exists():
            logger.debug("No user configuration file found")
            return

        try:
            with open(self._config_file, 'r') as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                "Failed to read user configuration file",
                config_file=self._config_file,
                issue=str(e)
            ) from e

        self._update_from_dict(user_config)
        logger.debug(f"Loaded user configuration from {self._config_file}")

    def _apply_env_overrides(self) -> None:
        for env_var, value in os.environ.items():
            if not env_var.startswith(CONFIG_ENV_PREFIX) or env_var == CONFIG_FILE_ENV:
                continue

            key = env_var[len(CONFIG_ENV_PREFIX):]
            parts = key.lower().split('_', 1)
            if len(parts) != 2:
                continue

            section, option = parts
            try:
                ConfigSection(section)
            except ValueError:
                continue

            section_obj = getattr(self._config, section)
            if not hasattr(section_obj, option):
                continue

            self._set_option(section, option, value)
            logger.debug(f"Applied environment override: {env_var}={value}")

    def _setup_logging(self) -> None:
        package_logger = logging.getLogger("garchlik")

        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)

        package_logger.setLevel(getattr(logging, self._config.logging.log_level))

        if self._config.logging.console_logging:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(self._config.logging.log_format))
            package_logger.addHandler(handler)

    def _update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        for section_name, section_dict in config_dict.items():
            if not hasattr(self._config, section_name):
                logger.warning(f"Unknown configuration section: {section_name}")
                continue

            section = getattr(self._config, section_name)
            for option_name, option_value in section_dict.items():
                if not hasattr(section, option_name):
                    logger.warning(f"Unknown configuration option: {section_name}.{option_name}")
                    continue
                self._set_option(section_name, option_name, option_value)

    def _set_option(self, section: str, option: str, value: Any) -> None:
        section_obj = getattr(self._config, section)
        setting = f"{section}.{option}"
        try:
            typed_value = _coerce(getattr(section_obj, option), value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Failed to set configuration option: {setting}",
                setting=setting, value=value, issue=str(e)
            ) from e

        _validate_option(section, option, typed_value)
        setattr(section_obj, option, typed_value)

    def get(self, section: str, option: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            section: The configuration section
            option: The configuration option
            default: Value returned when the option does not exist

        Returns:
            The configuration value, or the default if not found
        """
        section_obj = getattr(self._config, section, None)
        if section_obj is None:
            return default
        return getattr(section_obj, option, default)

    def set(self, section: str, option: str, value: Any) -> None:
        """
        Set a configuration value.

        Raises:
            ConfigurationError: If the section or option is unknown, or the
                value violates the option's constraint
        """
        if not self.has_option(section, option):
            raise ConfigurationError(
                f"Unknown configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                value=value,
                issue="Option not found"
            )

        self._set_option(section, option, value)
        self._modified_keys.add(f"{section}.{option}")
        if section == ConfigSection.LOGGING.value:
            self._setup_logging()
        logger.debug(f"Set configuration option: {section}.{option}={value}")

    def reset(self, section: Optional[str] = None, option: Optional[str] = None) -> None:
        """
        Reset configuration to default values.

        Args:
            section: The section to reset, or None to reset everything
            option: The option to reset, or None to reset the whole section

        Raises:
            ConfigurationError: If the section or option is unknown
        """
        if section is None:
            self._config = GarchLikConfig()
            self._modified_keys.clear()
            self._setup_logging()
            logger.debug("Reset all configuration to defaults")
            return

        if not self.has_section(section):
            raise ConfigurationError(
                f"Unknown configuration section: {section}",
                setting=section,
                issue="Section not found"
            )

        defaults = type(getattr(self._config, section))()
        if option is None:
            setattr(self._config, section, defaults)
            self._modified_keys = {
                key for key in self._modified_keys if not key.startswith(f"{section}.")
            }
            if section == ConfigSection.LOGGING.value:
                self._setup_logging()
            return

        if not self.has_option(section, option):
            raise ConfigurationError(
                f"Unknown configuration option: {section}.{option}",
                setting=f"{section}.{option}",
                issue="Option not found"
            )
        setattr(getattr(self._config, section), option, getattr(defaults, option))
        self._modified_keys.discard(f"{section}.{option}")
        if section == ConfigSection.LOGGING.value:
            self._setup_logging()

    def has_section(self, section: str) -> bool:
        return section in {s.value for s in ConfigSection}

    def has_option(self, section: str, option: str) -> bool:
        if not self.has_section(section):
            return False
        return option in {f.name for f in fields(getattr(self._config, section))}

    def get_modified_options(self) -> List[str]:
        """Return the options modified at runtime, as ``section.option`` keys."""
        return sorted(self._modified_keys)

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration as a nested dictionary."""
        return {
            s.value: {
                f.name: getattr(getattr(self._config, s.value), f.name)
                for f in fields(getattr(self._config, s.value))
            }
            for s in ConfigSection
        }


# Global configuration manager instance
_config_manager = ConfigManager()


def initialize_config() -> None:
    """Initialize the global configuration manager."""
    _config_manager.initialize()


def get_config_manager() -> ConfigManager:
    """
    Get the global configuration manager, initializing it on first use.

    Returns:
        The configuration manager instance
    """
    if not _config_manager._initialized:
        initialize_config()
    return _config_manager


def get_config(section: str, option: str, default: Any = None) -> Any:
    """
    Get a configuration value.

    Args:
        section: The configuration section
        option: The configuration option
        default: Value returned when the option does not exist

    Returns:
        The configuration value, or the default if not found
    """
    return get_config_manager().get(section, option, default)


def set_config(section: str, option: str, value: Any) -> None:
    """
    Set a configuration value.

    Raises:
        ConfigurationError: If the option is unknown or the value is invalid
    """
    get_config_manager().set(section, option, value)


def reset_config(section: Optional[str] = None, option: Optional[str] = None) -> None:
    """
    Reset configuration to default values.

    Raises:
        ConfigurationError: If the section or option is unknown
    """
    get_config_manager().reset(section, option)
