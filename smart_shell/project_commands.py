"""
Per-project command resolution for smart-shell.

Maps a logical command key (``install``, ``run``, ``test``...) to a concrete
shell command. Each project can override any key; keys a project does not
override fall back to the ``default`` section of ``project-commands.json``.

Every operation loads the whole table, changes it in memory and writes the
whole table back. There is no locking: two writers racing on the same file
can lose an update (last write wins). Entries skipped as invalid when the
table was loaded are not part of what gets written back.
"""

from pathlib import Path
from typing import Callable, Dict, Optional, Union

from smart_shell.log import get_logger
from smart_shell.storage import ConfigStore
from smart_shell.tables import CommandTable

logger = get_logger(__name__)

PathSource = Union[Path, Callable[[], Path]]


class ProjectCommandStore:
    """Read/write view over the command-key table."""

    def __init__(self, store: ConfigStore, path: PathSource):
        """
        Args:
            store: Config store used to load and persist the table
            path: The table's file, or a callable resolving it on each access
        """
        self._store = store
        self._path = path

    @property
    def path(self) -> Path:
        return self._path() if callable(self._path) else Path(self._path)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self, path: Optional[Path] = None) -> CommandTable:
        return self._store.load(path or self.path, CommandTable.from_dict, CommandTable.seed,
                                CommandTable.to_dict)

    def _save(self, table: CommandTable, path: Path):
        self._store.save(path, table.to_dict())

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, project_name: str, key: str) -> Optional[str]:
        """Return the command for *key*, project override first, or None."""
        table = self.load()
        command = table.project(project_name).get(key)
        if command is None:
            command = table.default.get(key)
        logger.debug("resolve(%s, %s) -> %r", project_name, key, command)
        return command

    def get_merged(self, project_name: str) -> Dict[str, str]:
        """Default commands overlaid with the project's own overrides."""
        table = self.load()
        return {**table.default, **table.project(project_name)}

    def upsert(self, project_name: str, key: str, value: str) -> None:
        """Set *key* for *project_name* and persist the table."""
        path = self.path
        table = self.load(path)
        table.sections.setdefault(project_name, {})[key] = value
        self._save(table, path)
        logger.info("Set %s.%s = %r", project_name, key, value)

    def remove(self, project_name: str, key: str) -> bool:
        """
        Delete *key* from the project's own section.

        Returns True only if the project itself had the key; ``default`` is
        never touched.
        """
        path = self.path
        table = self.load(path)
        commands = table.sections.get(project_name)
        if commands is None:
            return False
        existed = key in commands
        commands.pop(key, None)
        self._save(table, path)
        if existed:
            logger.info("Removed %s.%s", project_name, key)
        return existed
