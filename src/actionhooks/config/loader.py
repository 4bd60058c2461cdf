"""Load action hook configuration from YAML files."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from actionhooks.errors import ConfigError
from actionhooks.types import HookDefinition

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "ACTIONHOOKS_CONFIG"
CONFIG_FILENAME = "config.yml"


@dataclass(frozen=True)
class ActionHooksConfig:
    """Hook definitions plus the shell settings used to run them.

    Attributes:
        action_hooks: Hook definitions in configuration order
        shell_functions_file: File sourced before every hook command ("" = none)
    """

    action_hooks: tuple[HookDefinition, ...] = field(default_factory=tuple)
    shell_functions_file: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ActionHooksConfig:
        """Create config from a parsed YAML document."""
        if not data:
            return cls()

        hooks = []
        for index, entry in enumerate(data.get("actionHooks") or []):
            if not isinstance(entry, dict):
                raise ConfigError(f"actionHooks[{index}] must be a mapping")
            try:
                definition = HookDefinition.from_dict(entry)
            except ConfigError as e:
                raise ConfigError(f"actionHooks[{index}]: {e}") from e
            if not definition.key.strip():
                logger.warning("actionHooks[%d] has no key and will never match", index)
            elif definition.is_inert:
                logger.warning(
                    "actionHooks[%d] (key '%s') has no commands and will never match",
                    index,
                    definition.key,
                )
            hooks.append(definition)

        os_section = data.get("os") or {}
        if not isinstance(os_section, dict):
            raise ConfigError("os must be a mapping")
        return cls(
            action_hooks=tuple(hooks),
            shell_functions_file=str(os_section.get("shellFunctionsFile") or ""),
        )

    @classmethod
    def load(cls, path: Path) -> ActionHooksConfig:
        """Load config from a YAML file.

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        try:
            with path.open() as fh:
                data = yaml.safe_load(fh)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is not None and not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        config = cls.from_dict(data)
        logger.debug("Loaded %d action hooks from %s", len(config.action_hooks), path)
        return config

    @classmethod
    def from_env(cls) -> ActionHooksConfig:
        """Load config from the default location.

        A missing file yields an empty config.
        """
        path = default_config_path()
        if not path.exists():
            logger.debug("No action hook config at %s", path)
            return cls()
        return cls.load(path)


def default_config_path() -> Path:
    """Resolve the config file path.

    Resolution order:
    1. ACTIONHOOKS_CONFIG env var
    2. $XDG_CONFIG_HOME/actionhooks/config.yml
    3. ~/.config/actionhooks/config.yml
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser()

    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "actionhooks" / CONFIG_FILENAME


class ConfigProvider:
    """Caches a loaded config and hands it out on demand.

    Instances are callable, so they plug directly into HookManager as its
    config provider. ``reload()`` re-reads the file; subsequent matches see the
    new definitions.
    """

    def __init__(self, path: Path | None = None):
        self.path = path
        self._lock = threading.Lock()
        self._config: ActionHooksConfig | None = None

    def __call__(self) -> ActionHooksConfig:
        with self._lock:
            if self._config is None:
                self._config = self._read()
            return self._config

    def reload(self) -> ActionHooksConfig:
        config = self._read()
        with self._lock:
            self._config = config
        return config

    def _read(self) -> ActionHooksConfig:
        if self.path is None:
            return ActionHooksConfig.from_env()
        return ActionHooksConfig.load(self.path)
