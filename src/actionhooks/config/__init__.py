"""Action hook configuration: YAML loading and schema validation."""

from actionhooks.config.loader import (
    CONFIG_ENV_VAR,
    ActionHooksConfig,
    ConfigProvider,
    default_config_path,
)
from actionhooks.config.validator import ConfigIssue, validate_config_file

__all__ = [
    "ActionHooksConfig",
    "CONFIG_ENV_VAR",
    "ConfigIssue",
    "ConfigProvider",
    "default_config_path",
    "validate_config_file",
]
