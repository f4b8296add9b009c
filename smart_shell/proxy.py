"""
Execution orchestration for smart-shell.

:class:`CommandProxy` ties the pieces together for each tool call:

  resolve key -> translate for the OS -> append args -> run
                                                  \\-> on failure: detect flavor, suggest

Every public method returns a plain dict ready to be serialised as the
tool response. Expected failures come back as payloads carrying an
``errorCode`` and are never raised.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from smart_shell.config import Config, ConfigPaths
from smart_shell.cross_platform import build_command_line, translate_command
from smart_shell.errors import ConfigError, ErrorCode
from smart_shell.executor import Runner, run_shell
from smart_shell.flavor_detector import detect
from smart_shell.log import get_logger
from smart_shell.project_commands import ProjectCommandStore
from smart_shell.storage import ConfigStore, StorageBackend
from smart_shell.storage.json_backend import JSONStorage
from smart_shell.suggestions import suggest
from smart_shell.tables import TranslationTable

logger = get_logger(__name__)


def _config_error(e: ConfigError) -> Dict[str, Any]:
    logger.error("Configuration error: %s", e)
    return {
        "errorCode": ErrorCode.CONFIG_INVALID.value,
        "message": str(e),
    }


class CommandProxy:
    """Resolves, translates and runs project commands."""

    def __init__(self, paths: ConfigPaths, os_name: str, strict_config: bool = False,
                 backend: Optional[StorageBackend] = None, runner: Runner = run_shell):
        """
        Args:
            paths: Where the translation and command tables live
            os_name: Target OS for translation (windows, linux or darwin)
            strict_config: Reject malformed tables instead of reseeding them
            backend: Storage backend for the tables (JSON files by default)
            runner: Executes a command line; swapped out in tests
        """
        self.paths = paths
        self.os_name = os_name
        self.runner = runner
        self.store = ConfigStore(backend or JSONStorage(), strict=strict_config)
        self.commands = ProjectCommandStore(self.store, lambda: self.paths.project_commands)

    @classmethod
    def from_config(cls, config: Config) -> "CommandProxy":
        return cls(config.paths(), config.os_name, strict_config=config.strict_config)

    @property
    def cwd(self) -> Path:
        return self.paths.cwd

    def load_translation_table(self) -> TranslationTable:
        return self.store.load(self.paths.command_map, TranslationTable.from_dict,
                               TranslationTable, TranslationTable.to_dict)

    # ------------------------------------------------------------------
    # Tool operations
    # ------------------------------------------------------------------

    def execute_command(self, project_name: str, command_key: str,
                        args: Optional[List[str]] = None) -> Dict[str, Any]:
        """Resolve *command_key* for *project_name*, translate it and run it."""
        try:
            table = self.load_translation_table()
            command = self.commands.resolve(project_name, command_key)
        except ConfigError as e:
            return _config_error(e)

        if command is None:
            logger.info("No mapping for %s/%s", project_name, command_key)
            return {
                "errorCode": ErrorCode.COMMAND_NOT_FOUND.value,
                "message": f'No command mapping found for key "{command_key}"',
            }

        translated = translate_command(command, self.os_name, table)
        full = build_command_line(translated, args)
        logger.debug("Resolved %s/%s: %r -> %r", project_name, command_key, command, full)

        run = self.runner(full, self.cwd)
        if run.exit_code != 0:
            suggestion = suggest(command, run.stderr, detect(self.cwd), command_key)
            result: Dict[str, Any] = {
                "errorCode": ErrorCode.COMMAND_FAILED.value,
                "message": f"Command failed with exit code {run.exit_code}",
            }
            if suggestion is not None:
                result["suggestion"] = suggestion
            result["resolvedCommand"] = full
            result.update(run.to_dict())
            return result

        output = run.to_dict()
        output["resolvedCommand"] = full
        return output

    def get_project_commands(self, project_name: str) -> Dict[str, Any]:
        try:
            merged = self.commands.get_merged(project_name)
        except ConfigError as e:
            return _config_error(e)
        return {"projectName": project_name, "commands": merged}

    def set_project_command(self, project_name: str, key: str, value: str) -> Dict[str, Any]:
        try:
            self.commands.upsert(project_name, key, value)
        except ConfigError as e:
            return _config_error(e)
        return {"projectName": project_name, "key": key, "value": value}

    def remove_project_command(self, project_name: str, key: str) -> Dict[str, Any]:
        try:
            removed = self.commands.remove(project_name, key)
        except ConfigError as e:
            return _config_error(e)
        return {"projectName": project_name, "key": key, "removed": removed}

    def translate_command(self, raw_command: str) -> Dict[str, Any]:
        """Show how *raw_command* would look on this OS, without running it."""
        try:
            table = self.load_translation_table()
        except ConfigError as e:
            return _config_error(e)
        return {
            "os": self.os_name,
            "original": raw_command,
            "translated": translate_command(raw_command, self.os_name, table),
        }
