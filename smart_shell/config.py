"""
Configuration management for smart-shell.
Handles settings, environment overrides, and where the two JSON tables live.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

# Load .env file if it exists - search from the current directory upwards
from dotenv import find_dotenv, load_dotenv

from smart_shell.cross_platform import get_os, normalize_os
from smart_shell.log import get_logger

logger = get_logger(__name__)

PACKAGE_DATA_DIR = Path(__file__).resolve().parent / "data"

COMMAND_MAP_FILE = "command-map.json"
PROJECT_COMMANDS_FILE = "project-commands.json"

DEFAULT_SETTINGS_DIR = ".smart-shell"
SETTINGS_FILE = "settings.json"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


def _load_dotenv():
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path, override=False)


class ConfigPaths:
    """
    Resolution policy for the configuration documents.

    A copy in the working directory wins; otherwise the file lives in the
    configuration directory (the packaged ``data/`` directory by default).
    """

    def __init__(self, cwd: Path, config_dir: Path):
        self.cwd = Path(cwd)
        self.config_dir = Path(config_dir)

    def resolve(self, filename: str) -> Path:
        """Return the path to use for the logical file *filename*."""
        candidate = self.cwd / filename
        if candidate.exists():
            return candidate
        return self.config_dir / filename

    @property
    def command_map(self) -> Path:
        return self.resolve(COMMAND_MAP_FILE)

    @property
    def project_commands(self) -> Path:
        return self.resolve(PROJECT_COMMANDS_FILE)


class Config:
    """Manages smart-shell settings."""

    DEFAULT_CONFIG = {
        "config_dir": None,      # packaged data/ when unset
        "cwd": None,             # process cwd when unset
        "os": None,              # auto-detected
        "strict_config": False,  # reject malformed tables instead of reseeding
        "log_level": "INFO",
        "log_file": None,
    }

    ENV_VARS = {
        "config_dir": "SMART_SHELL_CONFIG_DIR",
        "cwd": "SMART_SHELL_CWD",
        "os": "SMART_SHELL_OS",
        "strict_config": "SMART_SHELL_STRICT_CONFIG",
        "log_level": "SMART_SHELL_LOG_LEVEL",
        "log_file": "SMART_SHELL_LOG_FILE",
    }

    SETTINGS_ENV_VAR = "SMART_SHELL_SETTINGS"

    def __init__(self, overrides: Optional[Dict[str, Any]] = None, load_env: bool = True,
                 settings_file: Optional[str] = None):
        """
        Initialize config.

        Precedence, lowest first: defaults, settings file, environment,
        *overrides*.

        Args:
            overrides: Explicit settings (e.g. from CLI flags); win over env vars
            load_env: Read ``.env`` and ``SMART_SHELL_*`` environment variables
            settings_file: JSON settings file (default: ``~/.smart-shell/settings.json``)
        """
        if load_env:
            _load_dotenv()
        self.settings_file = self._settings_path(settings_file, load_env)
        self.settings: Dict[str, Any] = self._load_config()
        if load_env:
            self._load_env_vars()
        for key, value in (overrides or {}).items():
            if value is not None:
                self.settings[key] = value

    def _settings_path(self, settings_file: Optional[str], load_env: bool) -> Path:
        if not settings_file and load_env:
            settings_file = os.getenv(self.SETTINGS_ENV_VAR)
        if settings_file:
            return Path(settings_file).expanduser()
        return Path.home() / DEFAULT_SETTINGS_DIR / SETTINGS_FILE

    def _load_config(self) -> Dict[str, Any]:
        """Load the settings file over the defaults, if there is one."""
        config = self.DEFAULT_CONFIG.copy()
        if not self.settings_file.exists():
            return config
        try:
            loaded = json.loads(self.settings_file.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Settings file %s is unreadable (%s), using defaults",
                           self.settings_file, e)
            return config
        if not isinstance(loaded, dict):
            logger.warning("Settings file %s must hold an object, using defaults",
                           self.settings_file)
            return config
        config.update(loaded)
        return config

    def _load_env_vars(self):
        """Load ``SMART_SHELL_*`` environment variables into config."""
        for key, var in self.ENV_VARS.items():
            value = os.getenv(var)
            if not value:
                continue
            if key == "strict_config":
                self.settings[key] = _env_flag(value)
            else:
                self.settings[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        return self.settings.get(key, default)

    @property
    def cwd(self) -> Path:
        cwd = self.settings.get("cwd")
        return Path(cwd).expanduser().resolve() if cwd else Path.cwd()

    @property
    def config_dir(self) -> Path:
        config_dir = self.settings.get("config_dir")
        return Path(config_dir).expanduser() if config_dir else PACKAGE_DATA_DIR

    @property
    def os_name(self) -> str:
        """Target OS: the explicit setting if present, else the host OS."""
        name = self.settings.get("os")
        return normalize_os(name) if name else get_os()

    @property
    def strict_config(self) -> bool:
        value = self.settings.get("strict_config")
        if isinstance(value, str):
            return _env_flag(value)
        return bool(value)

    def paths(self) -> ConfigPaths:
        """Build the path-resolution policy for this configuration."""
        return ConfigPaths(self.cwd, self.config_dir)
