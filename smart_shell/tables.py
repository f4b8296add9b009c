"""
Typed records for the two persisted configuration tables.

``command-map.json`` holds the :class:`TranslationTable`::

    {"base": {"ls": {"windows": "dir", "linux": "ls", "darwin": "ls"}}}

``project-commands.json`` holds the :class:`CommandTable`::

    {"default": {"install": "npm install"}, "my-app": {"install": "bun install"}}

Both are validated when loaded. A document that is not an object raises
:class:`~smart_shell.errors.ConfigError`. A bad entry inside an otherwise
valid document raises too, unless an ``on_invalid`` callback is given, in
which case the callback receives the error and only that entry is dropped.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from smart_shell.errors import ConfigError


OS_NAMES = ("windows", "linux", "darwin")

# Reserved compound key for the "rm -rf <path>" idiom
RECURSIVE_DELETE_KEY = "rm -rf"

DEFAULT_SECTION = "default"

InvalidEntryHandler = Optional[Callable[[ConfigError], None]]


def _require_mapping(value: Any, where: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"{where} must be an object, got {type(value).__name__}")
    return value


def _require_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{where} must be a string, got {type(value).__name__}")
    return value


def _reject(error: ConfigError, on_invalid: InvalidEntryHandler) -> None:
    if on_invalid is None:
        raise error
    on_invalid(error)


def _replacement(key: str, os_name: str, value: Any) -> str:
    if os_name not in OS_NAMES:
        raise ConfigError(
            f"base[{key!r}] has unknown OS {os_name!r} "
            f"(expected one of {', '.join(OS_NAMES)})"
        )
    return _require_str(value, f"base[{key!r}][{os_name!r}]")


@dataclass
class TranslationTable:
    """Base command -> {os -> replacement}. Keys are stored lower-case."""

    base: Dict[str, Dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, on_invalid: InvalidEntryHandler = None) -> "TranslationTable":
        data = _require_mapping(data, "translation table")
        raw_base = _require_mapping(data.get("base", {}), "'base'")

        base: Dict[str, Dict[str, str]] = {}
        for key, entry in raw_base.items():
            try:
                entry = _require_mapping(entry, f"base[{key!r}]")
            except ConfigError as e:
                _reject(e, on_invalid)
                continue
            per_os: Dict[str, str] = {}
            for os_name, replacement in entry.items():
                try:
                    per_os[os_name] = _replacement(key, os_name, replacement)
                except ConfigError as e:
                    _reject(e, on_invalid)
            # First spelling wins when two keys differ only by case
            base.setdefault(key.lower(), per_os)
        return cls(base=base)

    def to_dict(self) -> Dict[str, Any]:
        return {"base": {key: dict(entry) for key, entry in self.base.items()}}

    def lookup(self, command: str) -> Optional[Dict[str, str]]:
        """Case-insensitive lookup of a base command's OS mapping."""
        return self.base.get(command.lower())

    def replacement(self, command: str, os_name: str) -> Optional[str]:
        entry = self.lookup(command)
        if entry is None:
            return None
        return entry.get(os_name)


@dataclass
class CommandTable:
    """``default`` and per-project mappings from command key to shell command."""

    sections: Dict[str, Dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, on_invalid: InvalidEntryHandler = None) -> "CommandTable":
        data = _require_mapping(data, "command table")
        sections: Dict[str, Dict[str, str]] = {}
        for project, commands in data.items():
            try:
                commands = _require_mapping(commands, f"{project!r}")
            except ConfigError as e:
                _reject(e, on_invalid)
                continue
            section: Dict[str, str] = {}
            for key, value in commands.items():
                try:
                    section[key] = _require_str(value, f"{project!r}[{key!r}]")
                except ConfigError as e:
                    _reject(e, on_invalid)
            sections[project] = section
        return cls(sections=sections)

    @classmethod
    def seed(cls) -> "CommandTable":
        """The baseline written on first access."""
        return cls(sections={
            DEFAULT_SECTION: {
                "install": "npm install",
                "run": "npm start",
            }
        })

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {project: dict(commands) for project, commands in self.sections.items()}

    @property
    def default(self) -> Dict[str, str]:
        return self.sections.get(DEFAULT_SECTION, {})

    def project(self, name: str) -> Dict[str, str]:
        return self.sections.get(name, {})
